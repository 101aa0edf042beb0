from flask import Blueprint

# Create blueprint
posts_bp = Blueprint('posts', __name__)

# Import routes after creating the blueprint to avoid circular imports
from . import routes  # noqa
