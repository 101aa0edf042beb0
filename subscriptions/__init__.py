from flask import Blueprint

# Create blueprint
subscriptions_bp = Blueprint('subscriptions', __name__)

# Import routes after creating the blueprint to avoid circular imports
from . import routes  # noqa
