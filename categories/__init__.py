from flask import Blueprint

# Create blueprint
categories_bp = Blueprint('categories', __name__)

# Import routes after creating the blueprint to avoid circular imports
from . import routes  # noqa
