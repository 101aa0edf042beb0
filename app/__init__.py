from flask import Flask

from app.config import config


def create_app(config_name='default'):
    app = Flask(__name__)
    app.config.from_object(config[config_name])
    app.logger.setLevel(app.config.get('LOG_LEVEL', 'INFO'))

    # Initialize extensions
    from app.extensions import db, init_app
    init_app(app)

    # Resolve bearer tokens through the configured identity provider
    from auth import build_identity_provider
    app.extensions['identity_provider'] = build_identity_provider(app.config)

    from core.errors import register_error_handlers
    register_error_handlers(app)

    # Register blueprints
    from posts import posts_bp
    from blogs import blogs_bp
    from profiles import profiles_bp
    from categories import categories_bp
    from subscriptions import subscriptions_bp
    from forum import forum_bp

    app.register_blueprint(posts_bp, url_prefix='/api/posts')
    app.register_blueprint(blogs_bp, url_prefix='/api/blogs')
    app.register_blueprint(profiles_bp, url_prefix='/api/profile')
    app.register_blueprint(categories_bp, url_prefix='/api/categories')
    app.register_blueprint(subscriptions_bp, url_prefix='/api/subscribe')
    app.register_blueprint(forum_bp, url_prefix='/api/forum')

    # Create tables
    with app.app_context():
        db.create_all()

    @app.route('/')
    def index():
        return {'message': 'Snuggle API is running', 'docs': '/apidocs/'}

    @app.route('/health')
    def health():
        return {'status': 'ok'}

    app.logger.info(f'Snuggle API created with {config_name} config')
    return app
