import os
from datetime import timedelta
from dotenv import load_dotenv

load_dotenv()

class Config:
    # App settings
    SECRET_KEY = os.getenv('SECRET_KEY', 'dev-key-change-in-production')
    JWT_SECRET_KEY = os.getenv('JWT_SECRET_KEY', 'jwt-secret-change-in-production')
    JWT_ACCESS_TOKEN_EXPIRES = timedelta(hours=1)
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO')

    # Database
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Identity provider: 'supabase' forwards bearer tokens to Supabase Auth,
    # 'local' resolves tokens issued by this app (development and tests)
    IDENTITY_PROVIDER = os.getenv('IDENTITY_PROVIDER', 'supabase')
    SUPABASE_URL = os.getenv('SUPABASE_URL')
    SUPABASE_ANON_KEY = os.getenv('SUPABASE_ANON_KEY')
    IDENTITY_TIMEOUT = float(os.getenv('IDENTITY_TIMEOUT', 5))

    # CORS
    FRONTEND_URL = os.getenv('FRONTEND_URL', 'http://localhost:3000')

    # Listing defaults
    POSTS_PAGE_SIZE = 20
    FEED_PAGE_SIZE = 14
    FORUM_PAGE_SIZE = 20
    MAX_POST_CATEGORIES = 5

class DevelopmentConfig(Config):
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.getenv('DEV_DATABASE_URI', 'sqlite:///dev.db')
    IDENTITY_PROVIDER = os.getenv('IDENTITY_PROVIDER', 'local')
    LOG_LEVEL = os.getenv('LOG_LEVEL', 'DEBUG')

class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    IDENTITY_PROVIDER = 'local'
    JWT_SECRET_KEY = 'testing-jwt-secret-with-enough-length'

class ProductionConfig(Config):
    SQLALCHEMY_DATABASE_URI = os.getenv('DATABASE_URI')

# Configuration dictionary
config = {
    'development': DevelopmentConfig,
    'testing': TestingConfig,
    'production': ProductionConfig,
    'default': DevelopmentConfig
}
