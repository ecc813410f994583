import os
import random
import sys
import pytest

# Ensure the project root (containing the `quizcraft` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
PROJECT_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from config import Config
from quizcraft import create_app, db, socketio, EXTENSION_KEY
from quizcraft.services.quiz import QuizService
from quizcraft.services.quiz.settings import QuizSettings
from quizcraft.services.quiz.storage import QuizStore


class FakeBroadcaster:
    def __init__(self):
        self.messages = []

    def send(self, text):
        self.messages.append(text)


class FakeInventory:
    def __init__(self, accept=True):
        self.accept = accept
        self.grants = []

    def grant(self, participant_id, item_id, quantity):
        if not self.accept:
            return False
        self.grants.append((participant_id, item_id, quantity))
        return True


class FakeItems:
    def __init__(self, unknown=()):
        self.unknown = set(unknown)

    def resolve(self, item_id):
        from quizcraft.services.quiz import UnknownRewardItem
        if item_id in self.unknown:
            raise UnknownRewardItem(item_id)
        return item_id


class ManualClock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


class RecordingStarter:
    """Stands in for socketio.start_background_task without running anything."""

    def __init__(self):
        self.targets = []
        self.on_start = None

    def __call__(self, target, *args):
        self.targets.append(target)
        if self.on_start is not None:
            self.on_start(target)
        return len(self.targets)

    @property
    def tasks(self):
        return [target.__self__ for target in self.targets]


@pytest.fixture()
def clock():
    return ManualClock()


@pytest.fixture()
def broadcaster():
    return FakeBroadcaster()


@pytest.fixture()
def inventory():
    return FakeInventory()


@pytest.fixture()
def starter():
    return RecordingStarter()


@pytest.fixture()
def quiz_settings():
    return QuizSettings(
        auto_question_enabled=True,
        question_interval_seconds=300,
        question_timeout_seconds=60,
        new_question_message='&6Q: %question%',
        reward_message='&a%player% won %reward%',
        config_reloaded_message='reloaded',
    )


@pytest.fixture()
def quiz_service(tmp_path, quiz_settings, broadcaster, inventory, clock, starter):
    service = QuizService(
        base_settings=quiz_settings,
        store=QuizStore(tmp_path / 'quiz'),
        broadcaster=broadcaster,
        inventory=inventory,
        items=FakeItems(),
        rng=random.Random(1234),
        clock=clock,
        start_task=starter,
    )
    service.load()
    return service


@pytest.fixture()
def app_config(tmp_path):
    class TestConfig(Config):
        TESTING = True
        SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
        SQLALCHEMY_DATABASE_URI = 'sqlite://'
        SQLALCHEMY_TRACK_MODIFICATIONS = False
        WTF_CSRF_ENABLED = False
        BCRYPT_LOG_ROUNDS = 4
        QUIZ_DATA_DIR = str(tmp_path / 'quizcraft')
        QUIZ_RANDOM_SEED = 7
        AUTO_QUESTION_ENABLED = False
    return TestConfig


@pytest.fixture()
def flask_app(app_config):
    application = create_app(app_config)
    with application.app_context():
        # Ensure models are imported so tables are created
        import quizcraft.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def app_quiz(flask_app):
    return flask_app.extensions[EXTENSION_KEY]


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def operator_client(client):
    client.post('/users/add', json={'username': 'op', 'password': 'secret'})
    res = client.post('/login', json={'username': 'op', 'password': 'secret'})
    assert res.status_code == 200
    return client


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    if test_client.is_connected('/ws'):
        test_client.disconnect(namespace='/ws')
