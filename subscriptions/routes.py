from flask import request, jsonify, current_app, g
from flasgger import swag_from
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from auth import auth_required
from core.errors import MissingFields, StoreFailure
from core.utils import request_json
from .models import Subscription
from . import subscriptions_bp

TARGET_ID_PARAM = {
    'name': 'targetId',
    'in': 'query',
    'type': 'string',
    'required': True,
    'description': 'User ID of the blogger'
}

@subscriptions_bp.route('/check', methods=['GET'])
@auth_required
@swag_from({
    'tags': ['Subscriptions'],
    'description': 'Check whether the current user subscribes to a blogger',
    'security': [{'Bearer': []}],
    'parameters': [TARGET_ID_PARAM],
    'responses': {
        '200': {'description': '{"subscribed": bool}'},
        '400': {'description': 'Missing targetId'},
        '401': {'description': 'Unauthorized'}
    }
})
def check_subscription():
    target_id = request.args.get('targetId')
    if not target_id:
        raise MissingFields('targetId is required')

    exists = Subscription.query.filter_by(sub_id=g.actor.id, subed_id=target_id).first()
    return jsonify({'subscribed': exists is not None})

@subscriptions_bp.route('', methods=['POST'])
@auth_required
@swag_from({
    'tags': ['Subscriptions'],
    'description': 'Toggle the current user\'s subscription to a blogger',
    'security': [{'Bearer': []}],
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {'targetId': {'type': 'string'}},
            'required': ['targetId']
        }
    }],
    'responses': {
        '200': {'description': '{"subscribed": bool} - the state after toggling'},
        '400': {'description': 'Missing targetId'},
        '401': {'description': 'Unauthorized'}
    }
})
def toggle_subscription():
    """Subscribe if not subscribed yet, otherwise unsubscribe."""
    data = request_json()
    target_id = data.get('targetId')
    if not target_id:
        raise MissingFields('targetId is required')

    existing = Subscription.query.filter_by(sub_id=g.actor.id, subed_id=target_id).first()
    try:
        if existing:
            db.session.delete(existing)
            subscribed = False
        else:
            db.session.add(Subscription(sub_id=g.actor.id, subed_id=target_id))
            subscribed = True
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error toggling subscription: {str(e)}')
        raise StoreFailure('Failed to update subscription') from e

    return jsonify({'subscribed': subscribed})

@subscriptions_bp.route('/following', methods=['GET'])
@auth_required
@swag_from({
    'tags': ['Subscriptions'],
    'description': 'User IDs the current user subscribes to',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {'description': 'List of user IDs'},
        '401': {'description': 'Unauthorized'}
    }
})
def get_following():
    rows = Subscription.query.filter_by(sub_id=g.actor.id).all()
    return jsonify([row.subed_id for row in rows])

@subscriptions_bp.route('/counts/<user_id>', methods=['GET'])
@swag_from({
    'tags': ['Subscriptions'],
    'description': 'How many bloggers a user follows and how many follow them',
    'parameters': [
        {'name': 'user_id', 'in': 'path', 'type': 'string', 'required': True}
    ],
    'responses': {
        '200': {'description': '{"following": int, "followers": int}'}
    }
})
def get_counts(user_id):
    return jsonify({
        'following': Subscription.query.filter_by(sub_id=user_id).count(),
        'followers': Subscription.query.filter_by(subed_id=user_id).count()
    })
