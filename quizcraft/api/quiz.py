from functools import wraps

from flask import Blueprint, jsonify, request, current_app
from flask_login import current_user, login_required
from quizcraft import db, get_quiz_service
from quizcraft.models import InventoryItem, Player
from quizcraft.services.quiz import NoQuestionsAvailable


quiz = Blueprint('quiz', __name__)


def operator_required(view):
    """Reject callers that are not logged-in operators."""
    @wraps(view)
    @login_required
    def wrapper(*args, **kwargs):
        if not current_user.is_operator:
            return jsonify({'error': 'Operator permission required'}), 403
        return view(*args, **kwargs)
    return wrapper


@quiz.route('/question', methods=['POST'])
def ask_question():
    service = get_quiz_service()
    try:
        active = service.ask_random_question()
    except NoQuestionsAvailable:
        return jsonify({'error': 'No questions available'}), 409
    return jsonify({
        'message': 'New question published',
        'question': active.question.text,
    }), 201


@quiz.route('/reload', methods=['POST'])
@operator_required
def reload_quiz():
    message = get_quiz_service().reload()
    current_app.logger.info(f"[command] reload by {current_user.username}")
    return jsonify({'message': message})


@quiz.route('/questions', methods=['POST'])
@operator_required
def add_question():
    data = request.get_json(silent=True) or {}
    try:
        question = get_quiz_service().add_question(data.get('question'), data.get('answer'))
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    return jsonify({
        'message': f'Question added: {question.text}',
        'question': question.text,
    }), 201


@quiz.route('/rewards', methods=['POST'])
@operator_required
def add_reward():
    data = request.get_json(silent=True) or {}
    try:
        reward = get_quiz_service().add_reward(data.get('item'), data.get('maxAmount'))
    except ValueError as exc:
        return jsonify({'error': str(exc)}), 400
    return jsonify({
        'message': f'Reward added: {reward.item_id} (max: {reward.max_amount})',
        'reward': reward.to_dict(),
    }), 201


@quiz.route('/state', methods=['GET'])
def get_state():
    service = get_quiz_service()
    active = service.get_active()
    # Never expose the answer
    return jsonify({
        'state': 'active' if active else 'idle',
        'question': active.question.text if active else None,
        'started_at': active.start_time if active else None,
        'answered_by': sorted(active.answered_by) if active else [],
        'timeout_seconds': service.lifecycle.timeout_seconds,
    })


@quiz.route('/players/<int:player_id>/inventory', methods=['GET'])
def get_inventory(player_id):
    player = db.session.get(Player, player_id)
    if player is None:
        return jsonify({'error': 'Player not found'}), 404
    items = player.items.order_by(InventoryItem.item_id).all()
    return jsonify({
        'player': player.to_dict(),
        'items': [item.to_dict() for item in items],
    })
