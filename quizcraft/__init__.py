import logging
import random

from flask import Flask, current_app
from flask_sqlalchemy import SQLAlchemy
from flask_bcrypt import Bcrypt
from flask_login import LoginManager
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import click
from config import Config

db = SQLAlchemy()
bcrypt = Bcrypt()
login_manager = LoginManager()
migrate = Migrate()
allowed_origins = [
    "http://localhost:5173",
    "http://127.0.0.1:5173",
    "http://localhost:5174",
    "http://127.0.0.1:5174",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)

WS_NAMESPACE = '/ws'
EXTENSION_KEY = 'quizcraft'


def get_quiz_service():
    """Return the QuizService of the current application."""
    return current_app.extensions[EXTENSION_KEY]


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    flask_app.logger.setLevel(getattr(logging, str(flask_app.config.get('LOG_LEVEL', 'INFO')).upper(), logging.INFO))

    db.init_app(flask_app)
    bcrypt.init_app(flask_app)
    login_manager.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    # The quiz service is built once per app and handed to every call site
    # through app.extensions
    from quizcraft.services.quiz import QuizService
    from quizcraft.services.quiz.broadcast import SocketIOBroadcaster
    from quizcraft.services.quiz.inventory import ItemRegistry, SqlInventory
    from quizcraft.services.quiz.settings import QuizSettings
    from quizcraft.services.quiz.storage import QuizStore

    seed = flask_app.config.get('QUIZ_RANDOM_SEED')
    quiz_service = QuizService(
        base_settings=QuizSettings.from_config(flask_app.config),
        store=QuizStore(flask_app.config['QUIZ_DATA_DIR']),
        broadcaster=SocketIOBroadcaster(socketio, namespace=WS_NAMESPACE),
        inventory=SqlInventory(
            slots=int(flask_app.config.get('INVENTORY_SLOTS', 36)),
            stack_size=int(flask_app.config.get('MAX_STACK_SIZE', 64)),
        ),
        items=ItemRegistry(flask_app.config.get('KNOWN_ITEMS') or ()),
        rng=random.Random(seed) if seed is not None else random.Random(),
        start_task=socketio.start_background_task,
        tick_rate=int(flask_app.config.get('TICK_RATE', 20)),
    )
    quiz_service.load()
    flask_app.extensions[EXTENSION_KEY] = quiz_service

    # Timers run with the served app; tests drive the service by hand
    if not flask_app.config.get('TESTING'):
        quiz_service.start()

    # Import and register blueprints here
    from quizcraft.main import main
    flask_app.register_blueprint(main)

    from quizcraft.api.quiz import quiz
    flask_app.register_blueprint(quiz, url_prefix='/api/quiz')

    # Register Socket.IO event handlers
    from quizcraft.socketio_events import register_socketio_handlers
    register_socketio_handlers()

    # Flask-Login user loader
    from quizcraft.models import User

    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    @click.command('db-reset')
    @click.option('--operator-password', default='password', help='Password for the seeded operator account.')
    def db_reset_command(operator_password):
        """Drops, recreates, and seeds the database."""
        from quizcraft.models import User
        with flask_app.app_context():
            db.drop_all()
            db.create_all()

            operator = User(username='operator', is_operator=True)
            operator.set_password(operator_password)
            db.session.add(operator)

            db.session.commit()
            print('Database has been reset and seeded!')

    flask_app.cli.add_command(db_reset_command)

    return flask_app
