import os


def _env_flag(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///quizcraft.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Questions, rewards and the runtime settings overlay live here
    QUIZ_DATA_DIR = os.environ.get('QUIZ_DATA_DIR', os.path.join('config', 'quizcraft'))
    # Auto question timer (seconds)
    AUTO_QUESTION_ENABLED = _env_flag('AUTO_QUESTION_ENABLED', True)
    QUESTION_INTERVAL_SEC = int(os.environ.get('QUESTION_INTERVAL_SEC', '300'))
    QUESTION_TIMEOUT_SEC = int(os.environ.get('QUESTION_TIMEOUT_SEC', '60'))
    # Watchdog tick driver, ticks per second
    TICK_RATE = int(os.environ.get('TICK_RATE', '20'))
    # Message templates; '&' colour codes are stripped in the server log
    NEW_QUESTION_MESSAGE = '&6[QuizCraft] &eQuestion: &f%question%'
    REWARD_MESSAGE = '&6[QuizCraft] &a%player% &eanswered correctly and received &b%reward%&e!'
    CONFIG_RELOADED_MESSAGE = '&a[QuizCraft] Configuration reloaded'
    # Inventory limits per player
    INVENTORY_SLOTS = int(os.environ.get('INVENTORY_SLOTS', '36'))
    MAX_STACK_SIZE = int(os.environ.get('MAX_STACK_SIZE', '64'))
    # Items a reward may reference. Empty list accepts any well-formed id.
    KNOWN_ITEMS = [
        'minecraft:diamond',
        'minecraft:emerald',
        'minecraft:iron_ingot',
        'minecraft:gold_ingot',
        'minecraft:coal',
        'minecraft:stick',
        'minecraft:torch',
        'minecraft:bread',
        'minecraft:apple',
        'minecraft:golden_apple',
        'minecraft:experience_bottle',
        'minecraft:ender_pearl',
    ]
    # Optional: seed the shared random source (question and reward picks)
    QUIZ_RANDOM_SEED = os.environ.get('QUIZ_RANDOM_SEED')
