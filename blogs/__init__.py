from flask import Blueprint

# Create blueprint
blogs_bp = Blueprint('blogs', __name__)

# Import routes after creating the blueprint to avoid circular imports
from . import routes  # noqa
