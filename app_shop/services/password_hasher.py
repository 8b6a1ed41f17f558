# ==============================================================================
# HASH DE CONTRASEÑAS
# ==============================================================================
# Envoltorio sobre werkzeug.security (hash con sal, costoso, de un solo sentido).
# El método se configura una vez (SHOP_PASSWORD_HASH_METHOD):
#   scrypt                  → por defecto de werkzeug
#   pbkdf2:sha256:600000    → alternativa
# ==============================================================================

from typing import Any

from werkzeug.security import check_password_hash, generate_password_hash


class PasswordHasher:
    """
    Genera y verifica hashes de contraseñas.

    Cualquier valor (números, etc.) se convierte a texto antes de hashear,
    así "1234" y 1234 producen hashes verificables entre sí.
    """

    def __init__(self, method: str = 'scrypt'):
        """
        Args:
            method: Método de generate_password_hash
        """
        self.method = method
        # Listo antes del primer login con email desconocido
        self._dummy_hash = self.hash('app-shop-dummy-password')

    def hash(self, plaintext: Any) -> str:
        """Hash con sal de la contraseña."""
        return generate_password_hash(str(plaintext), method=self.method)

    def verify(self, plaintext: Any, digest: str) -> bool:
        """
        Verifica una contraseña contra su hash.

        Un digest vacío o que no tiene formato de hash nunca verifica.
        """
        if not digest or digest.count('$') < 2:
            return False
        return check_password_hash(digest, str(plaintext))

    def verify_dummy(self, plaintext: Any) -> bool:
        """
        Verifica contra un hash fijo para igualar el costo de un login
        con email desconocido al de una contraseña incorrecta.
        """
        self.verify(plaintext, self._dummy_hash)
        return False
