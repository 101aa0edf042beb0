swagger_config = {
    "headers": [],
    "specs": [
        {
            "endpoint": 'apispec',
            "route": '/apispec.json',
            "rule_filter": lambda rule: True,  # all in
            "model_filter": lambda tag: True,  # all in
        }
    ],
    "static_url_path": "/flasgger_static",
    "swagger_ui": True,
    "specs_route": "/apidocs/"
}

swagger_template = {
    "swagger": "2.0",
    "info": {
        "title": "Snuggle API",
        "description": "API for Snuggle - blogs, posts, subscriptions and community forum",
        "version": "1.0.0"
    },
    "securityDefinitions": {
        "Bearer": {
            "type": "apiKey",
            "name": "Authorization",
            "in": "header",
            "description": "Identity provider access token using the Bearer scheme. Example: \"Authorization: Bearer {token}\""
        }
    },
    "schemes": ["http", "https"],
    "consumes": ["application/json"],
    "produces": ["application/json"],
    "tags": [
        {"name": "Posts", "description": "Blog posts, feed and post detail"},
        {"name": "Blogs", "description": "Blog management and trash"},
        {"name": "Profile", "description": "Account profile sync, deletion and restore"},
        {"name": "Categories", "description": "Post categories"},
        {"name": "Subscriptions", "description": "Following other bloggers"},
        {"name": "Forum", "description": "Community forum posts and comments"}
    ],
    "definitions": {
        'Profile': {
            'type': 'object',
            'properties': {
                'id': {'type': 'string'},
                'nickname': {'type': 'string'},
                'profile_image_url': {'type': 'string'},
                'created_at': {'type': 'string', 'format': 'date-time'},
                'deleted_at': {'type': 'string', 'format': 'date-time'}
            }
        },
        'Blog': {
            'type': 'object',
            'properties': {
                'id': {'type': 'string'},
                'user_id': {'type': 'string'},
                'name': {'type': 'string'},
                'description': {'type': 'string'},
                'thumbnail_url': {'type': 'string'},
                'created_at': {'type': 'string', 'format': 'date-time'},
                'updated_at': {'type': 'string', 'format': 'date-time'},
                'deleted_at': {'type': 'string', 'format': 'date-time'}
            }
        },
        'Post': {
            'type': 'object',
            'properties': {
                'id': {'type': 'string'},
                'blog_id': {'type': 'string'},
                'user_id': {'type': 'string'},
                'title': {'type': 'string'},
                'content': {'type': 'string', 'description': 'HTML content'},
                'thumbnail_url': {'type': 'string'},
                'category_id': {'type': 'string'},
                'category_ids': {'type': 'array', 'items': {'type': 'string'}},
                'is_private': {'type': 'boolean'},
                'published': {'type': 'boolean'},
                'created_at': {'type': 'string', 'format': 'date-time'},
                'updated_at': {'type': 'string', 'format': 'date-time'}
            }
        },
        'Category': {
            'type': 'object',
            'properties': {
                'id': {'type': 'string'},
                'name': {'type': 'string'}
            }
        },
        'Forum': {
            'type': 'object',
            'properties': {
                'id': {'type': 'string'},
                'title': {'type': 'string'},
                'description': {'type': 'string'},
                'user_id': {'type': 'string'},
                'blog_id': {'type': 'string'},
                'created_at': {'type': 'string', 'format': 'date-time'}
            }
        },
        'Error': {
            'type': 'object',
            'properties': {
                'error': {'type': 'string', 'description': 'Error message'},
                'reason': {'type': 'string', 'description': 'Machine-usable failure kind'}
            }
        },
        'Success': {
            'type': 'object',
            'properties': {
                'success': {'type': 'boolean'},
                'message': {'type': 'string', 'description': 'Success message'}
            }
        }
    }
}
