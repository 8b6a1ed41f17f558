# ==============================================================================
# ERRORES DEL DOMINIO
# ==============================================================================
# Cada error conoce su status HTTP y su mensaje público.
# main.py los traduce 1:1 a {"message": ...} en el errorhandler.
# Ningún mensaje incluye secretos ni hashes.
# ==============================================================================

from enum import Enum


class ShopError(Exception):
    """Error base de la aplicación."""

    status_code = 500
    message = 'Internal server error'

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ValidationError(ShopError):
    """Datos de entrada inválidos."""
    status_code = 400
    message = 'Invalid request'


class DuplicateEmail(ShopError):
    status_code = 400
    message = 'User already exists'


class InvalidCredentials(ShopError):
    """Email desconocido o contraseña incorrecta (mismo mensaje para ambos)."""
    status_code = 400
    message = 'Invalid credentials'


class Unauthorized(ShopError):
    status_code = 401
    message = 'No token provided'


class AuthErrorKind(str, Enum):
    """Motivos por los que un token es rechazado."""
    MALFORMED = 'malformed'
    INVALID = 'invalid'
    EXPIRED = 'expired'


class AuthError(Unauthorized):
    """
    Token rechazado por TokenService.verify.

    Attributes:
        kind: MALFORMED, INVALID o EXPIRED
    """

    MESSAGES = {
        AuthErrorKind.MALFORMED: 'Malformed token',
        AuthErrorKind.INVALID: 'Invalid token',
        AuthErrorKind.EXPIRED: 'Token expired',
    }

    def __init__(self, kind: AuthErrorKind):
        self.kind = kind
        super().__init__(self.MESSAGES[kind])


class Forbidden(ShopError):
    status_code = 403
    message = 'Admin access denied'


class NotFound(ShopError):
    status_code = 404
    message = 'Not found'


class ProductNotFound(NotFound):
    message = 'Product not found'


class UserNotFound(NotFound):
    message = 'User not found'


class DuplicateProductId(ShopError):
    status_code = 400
    message = 'Product with this pID already exists'
