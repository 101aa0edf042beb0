from flask import Blueprint

# Create blueprint
forum_bp = Blueprint('forum', __name__)

# Import routes after creating the blueprint to avoid circular imports
from . import routes  # noqa
