# ==============================================================================
# SERVICIO DE TOKENS
# ==============================================================================
# Emite y verifica tokens firmados (itsdangerous, la misma librería que
# firma las sesiones de Flask).
#
# Payload: {"id": ..., "role": ..., "iat": <epoch>, "exp": <epoch>}
#
# Sin estado: un token es válido si la firma coincide con la clave actual
# y no ha expirado. No hay tabla de sesiones ni rotación de claves.
# ==============================================================================

import time
from typing import Any, Callable

from itsdangerous import BadPayload, BadSignature, URLSafeSerializer

from app_shop.errors import AuthError, AuthErrorKind
from app_shop.models import Identity, UserRole


class TokenService:
    """
    Emisión y verificación de tokens de identidad.

    Uso:
        tokens = TokenService(secret_key, ttl=3600)
        token = tokens.issue(Identity(id='abc', role=UserRole.USER))
        identity = tokens.verify(token)  # lanza AuthError si no es válido
    """

    SALT = 'app-shop-access-token'

    def __init__(
        self,
        secret_key: str,
        ttl: int = 3600,
        clock: Callable[[], float] = time.time
    ):
        """
        Args:
            secret_key: Clave de firma del proceso
            ttl: Segundos de validez
            clock: Reloj (epoch en segundos), inyectable para tests
        """
        self.ttl = ttl
        self.clock = clock
        self._serializer = URLSafeSerializer(secret_key, salt=self.SALT)

    def issue(self, identity: Identity) -> str:
        """
        Emite un token para la identidad.

        Args:
            identity: id y rol del usuario

        Returns:
            Token firmado (texto URL-safe)
        """
        issued_at = int(self.clock())
        payload = {
            'id': identity.id,
            'role': UserRole(identity.role).value,
            'iat': issued_at,
            'exp': issued_at + self.ttl,
        }
        return self._serializer.dumps(payload)

    def verify(self, token: Any) -> Identity:
        """
        Verifica firma y expiración.

        Args:
            token: Token recibido

        Returns:
            Identity embebida en el token

        Raises:
            AuthError: MALFORMED, INVALID o EXPIRED
        """
        if not isinstance(token, str) or not token or '.' not in token:
            raise AuthError(AuthErrorKind.MALFORMED)

        try:
            payload = self._serializer.loads(token)
        except BadPayload:
            raise AuthError(AuthErrorKind.MALFORMED)
        except BadSignature:
            raise AuthError(AuthErrorKind.INVALID)

        identity, expires_at = self._parse_payload(payload)
        if self.clock() >= expires_at:
            raise AuthError(AuthErrorKind.EXPIRED)
        return identity

    def _parse_payload(self, payload: Any) -> tuple:
        """Valida la forma del payload y devuelve (Identity, exp)."""
        if not isinstance(payload, dict):
            raise AuthError(AuthErrorKind.MALFORMED)

        user_id = payload.get('id')
        role = UserRole.parse(payload.get('role'))
        expires_at = payload.get('exp')

        if (not isinstance(user_id, str) or not user_id or role is None
                or not isinstance(expires_at, int) or isinstance(expires_at, bool)):
            raise AuthError(AuthErrorKind.MALFORMED)

        return Identity(id=user_id, role=role), expires_at
