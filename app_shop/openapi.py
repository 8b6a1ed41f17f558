# ==============================================================================
# DOCUMENTACIÓN DE LA API (OpenAPI 3)
# ==============================================================================
# Documento servido en GET /api-docs. Describe las rutas de /api/auth.
# ==============================================================================

from typing import Any, Dict

BEARER = [{'bearerAuth': []}]


def _body(properties: Dict[str, Any], required=None) -> Dict[str, Any]:
    schema = {'type': 'object', 'properties': properties}
    if required:
        schema['required'] = list(required)
    return {'required': True, 'content': {'application/json': {'schema': schema}}}


def _responses(**codes: str) -> Dict[str, Any]:
    return {code.lstrip('_'): {'description': text} for code, text in codes.items()}


PRODUCT_FIELDS = {
    'pID': {'type': 'integer'},
    'name': {'type': 'string'},
    'price': {'type': 'string'},
    'mfDate': {'type': 'string', 'format': 'date'},
    'expDate': {'type': 'string', 'format': 'date'},
    'quantity': {'type': 'integer', 'minimum': 0},
}

PID_PARAM = [{'in': 'path', 'name': 'pid', 'required': True, 'schema': {'type': 'integer'}}]


def build_openapi(title: str = 'app_shop API', version: str = '1.0.0') -> Dict[str, Any]:
    """Documento OpenAPI completo."""
    update_fields = {k: v for k, v in PRODUCT_FIELDS.items() if k != 'pID'}
    paths = {
        '/api/auth/signup': {'post': {
            'summary': 'Signup new user', 'tags': ['Auth'],
            'requestBody': _body({
                'name': {'type': 'string'}, 'email': {'type': 'string'},
                'password': {'type': 'string'},
                'role': {'type': 'string', 'enum': ['user', 'admin']},
            }, required=['email', 'password']),
            'responses': _responses(_200='Signup successful', _400='User already exists'),
        }},
        '/api/auth/login': {'post': {
            'summary': 'Login user and get token', 'tags': ['Auth'],
            'requestBody': _body({'email': {'type': 'string'}, 'password': {'type': 'string'}},
                                 required=['email', 'password']),
            'responses': _responses(_200='Token returned', _400='Invalid credentials'),
        }},
        '/api/auth/profile': {'get': {
            'summary': 'Get logged-in user profile', 'tags': ['Auth'], 'security': BEARER,
            'responses': _responses(_200='User profile data', _401='Unauthorized'),
        }},
        '/api/auth/admin/users': {'get': {
            'summary': 'Admin - Get all users', 'tags': ['Admin'], 'security': BEARER,
            'responses': _responses(_200='List of users', _401='Unauthorized', _403='Admin access denied'),
        }},
        '/api/auth/admin/addProduct': {'post': {
            'summary': 'Admin - Add a new product', 'tags': ['Admin'], 'security': BEARER,
            'requestBody': _body(PRODUCT_FIELDS, required=['pID', 'price', 'quantity']),
            'responses': _responses(_200='Product added successfully',
                                    _400='Product with this pID already exists',
                                    _403='Admin access denied'),
        }},
        '/api/auth/admin/updateProduct/{pid}': {'put': {
            'summary': 'Admin - Update a product', 'tags': ['Admin'], 'security': BEARER,
            'parameters': PID_PARAM,
            'requestBody': _body(update_fields),
            'responses': _responses(_200='Product updated successfully',
                                    _403='Admin access denied', _404='Product not found'),
        }},
        '/api/auth/admin/deleteProduct/{pid}': {'delete': {
            'summary': 'Admin - Delete a product', 'tags': ['Admin'], 'security': BEARER,
            'parameters': PID_PARAM,
            'responses': _responses(_200='Product deleted successfully',
                                    _403='Admin access denied', _404='Product not found'),
        }},
        '/api/auth/viewProducts': {'get': {
            'summary': 'View all products', 'tags': ['Products'], 'security': BEARER,
            'responses': _responses(_200='List of products', _401='Unauthorized'),
        }},
        '/api/auth/addToCart': {'post': {
            'summary': 'Add product to cart', 'tags': ['Cart'], 'security': BEARER,
            'requestBody': _body({'pID': {'type': 'integer'},
                                  'quantity': {'type': 'integer', 'minimum': 1, 'default': 1}},
                                 required=['pID']),
            'responses': _responses(_200='Product added to cart', _401='Unauthorized',
                                    _404='Product not found'),
        }},
        '/api/auth/cart': {'get': {
            'summary': "View user's cart", 'tags': ['Cart'], 'security': BEARER,
            'responses': _responses(_200="User's cart", _401='Unauthorized'),
        }},
    }
    return {
        'openapi': '3.0.3',
        'info': {'title': title, 'version': version},
        'paths': paths,
        'components': {
            'securitySchemes': {'bearerAuth': {'type': 'http', 'scheme': 'bearer'}},
        },
    }
