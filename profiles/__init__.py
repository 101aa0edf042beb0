from flask import Blueprint

# Create blueprint
profiles_bp = Blueprint('profiles', __name__)

# Import routes after creating the blueprint to avoid circular imports
from . import routes  # noqa
