from flask import jsonify, current_app, g
from flasgger import swag_from
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from auth import auth_required
from core import access, lifecycle
from core.errors import ProfileNotFound, StoreFailure
from .models import Profile
from . import profiles_bp

RESTORE_MESSAGE = 'Account restored. Please restore your blogs from the trash if needed.'

def _metadata_profile_fields(metadata):
    """Pick avatar and display name out of identity-provider user metadata."""
    metadata = metadata or {}
    return {
        'profile_image_url': metadata.get('avatar_url') or metadata.get('picture') or None,
        'nickname': metadata.get('name') or metadata.get('full_name') or None
    }

@profiles_bp.route('/sync', methods=['POST'])
@auth_required
@swag_from({
    'tags': ['Profile'],
    'description': 'Copy nickname and avatar from the identity provider into the profile, creating it on first sync',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {'description': 'Synced profile', 'schema': {'$ref': '#/definitions/Profile'}},
        '401': {'description': 'Identity provider returned no user'}
    }
})
def sync_profile():
    """Upsert the current user's profile from identity metadata."""
    actor = g.actor
    access.raise_for_denial(access.can_write_profile(actor, actor.id))

    fields = _metadata_profile_fields(actor.user_metadata)
    profile = db.session.get(Profile, actor.id)
    if profile is None:
        profile = Profile(id=actor.id)
        db.session.add(profile)
    profile.nickname = fields['nickname']
    profile.profile_image_url = fields['profile_image_url']

    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Profile sync error: {str(e)}')
        raise StoreFailure('Failed to sync profile') from e

    return jsonify(profile.to_dict())

@profiles_bp.route('/me', methods=['GET'])
@auth_required
@swag_from({
    'tags': ['Profile'],
    'description': 'Get the current user\'s profile, including deletion state',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {'description': 'Profile', 'schema': {'$ref': '#/definitions/Profile'}},
        '401': {'description': 'Unauthorized'},
        '404': {'description': 'Profile not found'}
    }
})
def get_my_profile():
    profile = db.session.get(Profile, g.actor.id)
    if not profile:
        raise ProfileNotFound()
    return jsonify(profile.to_dict())

@profiles_bp.route('/<user_id>', methods=['GET'])
@swag_from({
    'tags': ['Profile'],
    'description': 'Get a user\'s public profile',
    'parameters': [
        {'name': 'user_id', 'in': 'path', 'type': 'string', 'required': True}
    ],
    'responses': {
        '200': {'description': 'Public profile'},
        '404': {'description': 'Profile not found'}
    }
})
def get_profile(user_id):
    profile = db.session.get(Profile, user_id)
    if not profile:
        raise ProfileNotFound()
    return jsonify(profile.to_public_dict())

@profiles_bp.route('', methods=['DELETE'])
@auth_required
@swag_from({
    'tags': ['Profile'],
    'description': 'Soft-delete the current account. Active blogs are moved to the trash as well.',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {'description': 'Account deleted', 'schema': {'$ref': '#/definitions/Success'}},
        '400': {'description': 'Account is already deleted'},
        '401': {'description': 'Unauthorized'},
        '404': {'description': 'Profile not found'}
    }
})
def delete_account():
    """Delete (soft) the authenticated user's account."""
    lifecycle.delete_account(g.actor, g.actor.id)
    return jsonify({'success': True, 'message': 'Account deleted successfully'})

@profiles_bp.route('/restore', methods=['PATCH'])
@auth_required
@swag_from({
    'tags': ['Profile'],
    'description': 'Restore a soft-deleted account. Blogs stay in the trash until restored one by one.',
    'security': [{'Bearer': []}],
    'responses': {
        '200': {'description': 'Account restored', 'schema': {'$ref': '#/definitions/Profile'}},
        '400': {'description': 'Account is not deleted'},
        '401': {'description': 'Unauthorized'},
        '404': {'description': 'Profile not found'}
    }
})
def restore_account():
    """Restore the authenticated user's account."""
    result = lifecycle.restore_account(g.actor, g.actor.id)
    data = result.record.to_dict()
    data['message'] = RESTORE_MESSAGE
    return jsonify(data)
