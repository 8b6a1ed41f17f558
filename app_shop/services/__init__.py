# ==============================================================================
# CAPA DE SERVICIOS - Lógica de negocio
# ==============================================================================
# Esta capa contiene TODA la lógica de negocio de la aplicación.
#
# PRINCIPIOS:
# 1. Los servicios orquestan operaciones entre repositorios
# 2. Aplican reglas de negocio y validaciones
# 3. Las rutas (main.py) solo llaman a servicios
# 4. Los servicios NO conocen el tipo de almacenamiento
#
# ESTRUCTURA:
# ├── password_hasher.py  → Hash y verificación de contraseñas (werkzeug)
# ├── token_service.py    → Tokens firmados con expiración (itsdangerous)
# ├── user_service.py     → Registro, login, perfil, listado
# ├── product_service.py  → Catálogo (solo admins modifican)
# ├── cart_service.py     → Carrito con merge acumulativo
# └── audit_service.py    → Logs de actividad
# ==============================================================================

from app_shop.services.password_hasher import PasswordHasher
from app_shop.services.token_service import TokenService
from app_shop.services.audit_service import AuditService
from app_shop.services.user_service import UserService
from app_shop.services.product_service import ProductService
from app_shop.services.cart_service import CartService

__all__ = [
    'PasswordHasher',
    'TokenService',
    'AuditService',
    'UserService',
    'ProductService',
    'CartService',
]
