from flask import jsonify, current_app
from flasgger import swag_from
from sqlalchemy.exc import SQLAlchemyError

from app.extensions import db
from auth import auth_required
from core.errors import MissingFields, StoreFailure
from core.utils import request_json
from .models import Category
from . import categories_bp

@categories_bp.route('', methods=['GET'])
@swag_from({
    'tags': ['Categories'],
    'description': 'List all categories',
    'responses': {
        '200': {
            'description': 'Categories ordered by name',
            'schema': {'type': 'array', 'items': {'$ref': '#/definitions/Category'}}
        }
    }
})
def get_categories():
    categories = Category.query.order_by(Category.name.asc()).all()
    return jsonify([category.to_dict() for category in categories])

@categories_bp.route('', methods=['POST'])
@auth_required
@swag_from({
    'tags': ['Categories'],
    'description': 'Create a category, or return the existing one with the same name',
    'security': [{'Bearer': []}],
    'parameters': [{
        'name': 'body',
        'in': 'body',
        'required': True,
        'schema': {
            'type': 'object',
            'properties': {'name': {'type': 'string', 'example': '여행'}},
            'required': ['name']
        }
    }],
    'responses': {
        '200': {'description': 'Category already existed'},
        '201': {'description': 'Category created'},
        '400': {'description': 'Missing name'},
        '401': {'description': 'Unauthorized'}
    }
})
def create_category():
    data = request_json()
    name = str(data.get('name') or '').strip()
    if not name:
        raise MissingFields('Category name is required')

    existing = Category.query.filter_by(name=name).first()
    if existing:
        return jsonify(existing.to_dict())

    category = Category(name=name)
    try:
        db.session.add(category)
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        current_app.logger.error(f'Error creating category: {str(e)}')
        raise StoreFailure('Failed to create category') from e

    return jsonify(category.to_dict()), 201
