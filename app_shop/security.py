# ==============================================================================
# CONTROL DE ACCESO - Autenticación y autorización por rol
# ==============================================================================
# Dos etapas independientes que se aplican en orden:
#
#   1. authenticate()    → Authorization: Bearer <token> → Identity (g.identity)
#                          falla con 401 (Unauthorized / AuthError)
#   2. authorize_admin() → Identity.role == admin
#                          falla con 403 "Admin access denied"
#
# Por petición: No autenticado → Autenticado → (Autorizado | Prohibido).
# Sin reintentos: un fallo termina la petición.
# ==============================================================================

from functools import wraps
from typing import Optional

from flask import g, request

from app_shop.app_container import get_container
from app_shop.errors import Forbidden, Unauthorized
from app_shop.models import Identity, UserRole

BEARER_SCHEME = 'bearer'


def extract_bearer_token(header_value: Optional[str]) -> str:
    """
    Extrae el token de un header "Bearer <token>".

    Raises:
        Unauthorized: Header ausente o con otro esquema
    """
    if not header_value:
        raise Unauthorized()
    parts = header_value.strip().split(None, 1)
    if len(parts) != 2 or parts[0].lower() != BEARER_SCHEME:
        raise Unauthorized()
    return parts[1].strip()


def authenticate() -> Identity:
    """
    Autentica la petición actual y deja la identidad en g.identity.

    Returns:
        Identity del token

    Raises:
        Unauthorized / AuthError
    """
    token = extract_bearer_token(request.headers.get('Authorization'))
    identity = get_container().token_service.verify(token)
    g.identity = identity
    return identity


def authorize_role(identity: Identity, role: UserRole) -> None:
    """
    Exige un rol exacto.

    Raises:
        Forbidden
    """
    if identity.role is not role:
        raise Forbidden()


def authorize_admin(identity: Identity) -> None:
    """Exige rol admin (403 "Admin access denied")."""
    authorize_role(identity, UserRole.ADMIN)


def login_required(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        authenticate()
        return f(*args, **kwargs)
    return wrapper


def role_required(role: UserRole):
    """
    Decorador: autentica y luego exige el rol.

    Uso:
        @role_required(UserRole.ADMIN)
        def admin_view(): ...
    """
    def deco(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            identity = authenticate()
            authorize_role(identity, role)
            return f(*args, **kwargs)
        return wrapper
    return deco


admin_required = role_required(UserRole.ADMIN)


def current_identity() -> Identity:
    """Identidad autenticada de la petición (requiere login_required)."""
    return g.identity
