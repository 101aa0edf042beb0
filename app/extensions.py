from flask_sqlalchemy import SQLAlchemy
from flask_jwt_extended import JWTManager
from flask_cors import CORS
from flasgger import Swagger

from docs.swagger_config import swagger_config, swagger_template

# Initialize extensions
db = SQLAlchemy()
jwt = JWTManager()
cors = CORS()

# Configure Swagger
swagger = Swagger(template=swagger_template, config=swagger_config)

def init_app(app):
    """Initialize all extensions with the app."""
    db.init_app(app)
    jwt.init_app(app)
    cors.init_app(
        app,
        resources={r'/api/*': {'origins': app.config.get('FRONTEND_URL')}},
        supports_credentials=True,
        allow_headers=['Content-Type', 'Authorization'],
    )
    swagger.init_app(app)
