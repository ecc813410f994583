def test_index(client):
    res = client.get('/')
    assert res.status_code == 200


def test_ask_question_is_open_to_everyone(client, app_quiz):
    res = client.post('/api/quiz/question')
    assert res.status_code == 201
    data = res.get_json()
    assert data['message'] == 'New question published'
    assert data['question'] in {q.text for q in app_quiz.questions}

    state = client.get('/api/quiz/state').get_json()
    assert state['state'] == 'active'
    assert state['question'] == data['question']
    assert state['answered_by'] == []
    assert 'answer' not in state


def test_ask_question_with_empty_bank(client, app_quiz):
    app_quiz.question_bank.replace([])
    res = client.post('/api/quiz/question')
    assert res.status_code == 409
    assert 'message' not in res.get_json()


def test_state_when_idle(client):
    state = client.get('/api/quiz/state').get_json()
    assert state['state'] == 'idle'
    assert state['question'] is None
    assert state['timeout_seconds'] == 60


def test_operator_commands_require_login(client):
    assert client.post('/api/quiz/reload').status_code == 401
    assert client.post('/api/quiz/questions', json={'question': 'q', 'answer': 'a'}).status_code == 401
    assert client.post('/api/quiz/rewards', json={'item': 'minecraft:apple', 'maxAmount': 2}).status_code == 401


def test_non_operator_is_forbidden(client):
    # first account is the operator, the second is not
    client.post('/users/add', json={'username': 'op', 'password': 'secret'})
    res = client.post('/users/add', json={'username': 'guest', 'password': 'secret'})
    assert res.get_json()['user']['is_operator'] is False
    client.post('/login', json={'username': 'guest', 'password': 'secret'})
    assert client.post('/api/quiz/reload').status_code == 403


def test_login_rejects_bad_password(client):
    client.post('/users/add', json={'username': 'op', 'password': 'secret'})
    res = client.post('/login', json={'username': 'op', 'password': 'wrong'})
    assert res.status_code == 401


def test_reload(operator_client, app_quiz):
    operator_client.post('/api/quiz/question')
    res = operator_client.post('/api/quiz/reload')
    assert res.status_code == 200
    assert res.get_json()['message'] == '&a[QuizCraft] Configuration reloaded'
    assert app_quiz.get_active() is None
    assert app_quiz.question_timer is None


def test_add_question(operator_client, app_quiz):
    res = operator_client.post('/api/quiz/questions', json={'question': 'What explodes?', 'answer': 'creeper'})
    assert res.status_code == 201
    assert res.get_json()['message'] == 'Question added: What explodes?'
    assert app_quiz.questions[-1].answer == 'creeper'


def test_add_question_validation(operator_client, app_quiz):
    res = operator_client.post('/api/quiz/questions', json={'question': 'What explodes?'})
    assert res.status_code == 400
    assert len(app_quiz.questions) == 2


def test_add_reward(operator_client, app_quiz):
    res = operator_client.post('/api/quiz/rewards', json={'item': 'minecraft:gold_ingot', 'maxAmount': 4})
    assert res.status_code == 201
    assert res.get_json()['message'] == 'Reward added: minecraft:gold_ingot (max: 4)'
    assert app_quiz.rewards[-1].max_amount == 4


def test_add_reward_validation(operator_client):
    assert operator_client.post('/api/quiz/rewards', json={'item': 'minecraft:apple', 'maxAmount': 0}).status_code == 400
    assert operator_client.post('/api/quiz/rewards', json={'item': 'minecraft:apple', 'maxAmount': 'lots'}).status_code == 400
    assert operator_client.post('/api/quiz/rewards', json={'maxAmount': 2}).status_code == 400


def test_player_inventory(client, app_quiz):
    from quizcraft import db
    from quizcraft.models import Player
    from quizcraft.services.quiz.inventory import SqlInventory

    player = Player(name='Alex')
    db.session.add(player)
    db.session.commit()
    inventory = SqlInventory()
    inventory.grant(player.id, 'minecraft:emerald', 5)
    inventory.grant(player.id, 'minecraft:diamond', 2)

    res = client.get(f'/api/quiz/players/{player.id}/inventory')
    assert res.status_code == 200
    assert res.get_json() == {
        'player': {'id': player.id, 'name': 'Alex'},
        'items': [
            {'item_id': 'minecraft:diamond', 'quantity': 2},
            {'item_id': 'minecraft:emerald', 'quantity': 5},
        ],
    }


def test_player_inventory_unknown_player(client):
    assert client.get('/api/quiz/players/999/inventory').status_code == 404
