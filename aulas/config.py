import os
from dotenv import load_dotenv

load_dotenv(os.path.join(os.path.dirname(__file__), '.env'))

BASE_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-prod'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///aulas.db'
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # Seeding
    SEED_DATA_DIR = os.environ.get('SEED_DATA_DIR') or os.path.join(BASE_DIR, 'data')
    SEED_ON_STARTUP = os.environ.get('SEED_ON_STARTUP', '1') == '1'
    DEFAULT_SEED_PASSWORD = 'changeme'

    # Credentials
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:600000'
    TOKEN_TTL_HOURS = 24


class DevelopmentConfig(Config):
    DEBUG = True


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SEED_ON_STARTUP = False
    # Fast hashing keeps the suite quick
    PASSWORD_HASH_METHOD = 'pbkdf2:sha256:1000'


class ProductionConfig(Config):
    DEBUG = False
    # No development fallback, create_app refuses to start without it
    SECRET_KEY = os.environ.get('SECRET_KEY')
