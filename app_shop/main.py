# ==============================================================================
# APLICACIÓN FLASK - Rutas HTTP
# ==============================================================================
# Las rutas solo orquestan request → service → response.
# Toda la lógica de negocio vive en services/ y el acceso en security.py.
#
# Errores: cualquier ShopError se traduce a {"message": ...} con su status.
# Un error no clasificado se registra y responde 500 sin detalles internos.
# ==============================================================================

import logging
import time
from typing import Any, Callable, Dict

from flask import Blueprint, Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from app_shop.app_container import EXTENSION_KEY, AppContainer, get_container
from app_shop.config import Settings
from app_shop.errors import ShopError, ValidationError
from app_shop.openapi import build_openapi
from app_shop.performance_logger import init_profiling
from app_shop.security import admin_required, current_identity, login_required

logger = logging.getLogger(__name__)

api = Blueprint('api', __name__, url_prefix='/api/auth')


def _json_body() -> Dict[str, Any]:
    """Body JSON como dict ({} si no hay body)."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data


# ═══════════════════════════════════════════════════════════════════════════════
# AUTENTICACIÓN
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/signup', methods=['POST'])
def signup():
    body = _json_body()
    get_container().user_service.signup(
        email=body.get('email'),
        password=body.get('password'),
        name=body.get('name'),
        role=body.get('role'),
    )
    return jsonify({'message': 'Signup successful'})


@api.route('/login', methods=['POST'])
def login():
    body = _json_body()
    token = get_container().user_service.login(body.get('email'), body.get('password'))
    return jsonify({'token': token})


@api.route('/profile', methods=['GET'])
@login_required
def profile():
    return jsonify(get_container().user_service.get_profile(current_identity().id))


# ═══════════════════════════════════════════════════════════════════════════════
# ADMIN
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/admin/users', methods=['GET'])
@admin_required
def list_users():
    return jsonify(get_container().user_service.list_users())


@api.route('/admin/addProduct', methods=['POST'])
@admin_required
def add_product():
    product = get_container().product_service.add_product(_json_body(), current_identity())
    return jsonify({'message': 'Product added successfully', 'product': product.to_public_dict()})


@api.route('/admin/updateProduct/<int:pid>', methods=['PUT'])
@admin_required
def update_product(pid):
    product = get_container().product_service.update_product(pid, _json_body(), current_identity())
    return jsonify({'message': 'Product updated successfully', 'product': product.to_public_dict()})


@api.route('/admin/deleteProduct/<int:pid>', methods=['DELETE'])
@admin_required
def delete_product(pid):
    get_container().product_service.delete_product(pid, current_identity())
    return jsonify({'message': 'Product deleted successfully'})


# ═══════════════════════════════════════════════════════════════════════════════
# CATÁLOGO Y CARRITO
# ═══════════════════════════════════════════════════════════════════════════════

@api.route('/viewProducts', methods=['GET'])
@login_required
def view_products():
    products = get_container().product_service.list_products()
    return jsonify([p.to_public_dict() for p in products])


@api.route('/addToCart', methods=['POST'])
@login_required
def add_to_cart():
    body = _json_body()
    cart = get_container().cart_service.add_to_cart(
        current_identity().id,
        body.get('pID'),
        body.get('quantity'),
    )
    return jsonify({'message': 'Product added to cart', 'cart': cart})


@api.route('/cart', methods=['GET'])
@login_required
def view_cart():
    return jsonify(get_container().cart_service.view_cart(current_identity().id))


# ═══════════════════════════════════════════════════════════════════════════════
# FACTORY
# ═══════════════════════════════════════════════════════════════════════════════

def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ShopError)
    def _shop_error(err):
        return jsonify({'message': err.message}), err.status_code

    @app.errorhandler(HTTPException)
    def _http_error(err):
        return jsonify({'message': err.description}), err.code

    @app.errorhandler(Exception)
    def _unexpected_error(err):
        logger.exception("Error no controlado en %s %s", request.method, request.path)
        return jsonify({'message': 'Internal server error'}), 500


def create_app(
    settings: Settings = None,
    clock: Callable[[], float] = time.time
) -> Flask:
    """
    Construye la aplicación.

    Args:
        settings: Configuración (por defecto Settings.from_env())
        clock: Reloj para la expiración de tokens

    Returns:
        App Flask lista para servir
    """
    settings = settings or Settings.from_env()

    app = Flask(__name__)
    app.extensions[EXTENSION_KEY] = AppContainer(settings, clock=clock)

    init_profiling(app, settings.resolved_logs_dir, settings.enable_profiling)

    @app.after_request
    def set_security_headers(response):
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['Referrer-Policy'] = 'no-referrer-when-downgrade'
        return response

    @app.route('/')
    def index():
        return 'API is running', 200

    @app.route('/api-docs')
    def api_docs():
        return jsonify(build_openapi())

    app.register_blueprint(api)
    register_error_handlers(app)

    logger.info("app_shop lista (datos en %s)", settings.data_dir)
    return app
