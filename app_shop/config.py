# ==============================================================================
# CONFIGURACIÓN - Settings de la aplicación
# ==============================================================================
# Se construye UNA vez al arrancar el proceso (Settings.from_env) y se
# inyecta en el contenedor. Ningún servicio lee variables de entorno.
#
# Variables de entorno:
#   SHOP_SECRET_KEY            → clave de firma de tokens (OBLIGATORIA en prod)
#   SHOP_DATA_DIR              → carpeta de los JSON (users, products, audit)
#   SHOP_TOKEN_TTL             → vida del token en segundos (3600)
#   SHOP_PASSWORD_HASH_METHOD  → método de werkzeug (scrypt)
#   SHOP_ENABLE_PROFILING      → profiling de rutas (true)
#   SHOP_LOGS_DIR              → carpeta de logs de profiling
#   SHOP_LOG_LEVEL             → nivel de logging (INFO)
#   PORT                       → puerto de escucha (3000)
# ==============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

BASE = os.path.dirname(os.path.abspath(__file__))

_DEFAULT_SECRET = "app_shop_dev_secret_key_change_in_production"

TRUE_VALUES = frozenset(['1', 'true', 'yes', 'on'])


@dataclass(frozen=True)
class Settings:
    """
    Configuración inmutable del proceso.

    Attributes:
        secret_key: Clave con la que se firman los tokens
        data_dir: Carpeta donde viven los archivos JSON
        token_ttl: Segundos de validez de un token
        password_hash_method: Método de hash de werkzeug
        enable_profiling: Activa performance_logger
        logs_dir: Carpeta de logs de profiling
        log_level: Nivel de logging
        port: Puerto de escucha
    """
    secret_key: str
    data_dir: str = BASE
    token_ttl: int = 3600
    password_hash_method: str = 'scrypt'
    enable_profiling: bool = True
    logs_dir: Optional[str] = None
    log_level: str = 'INFO'
    port: int = 3000

    @property
    def resolved_logs_dir(self) -> str:
        """Carpeta de logs (por defecto <data_dir>/logs)."""
        return self.logs_dir or os.path.join(self.data_dir, 'logs')

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = None) -> 'Settings':
        """
        Construye la configuración desde variables de entorno.

        Args:
            environ: Mapeo de variables (por defecto os.environ)

        Returns:
            Settings listo para inyectar
        """
        env = os.environ if environ is None else environ

        secret = env.get('SHOP_SECRET_KEY')
        if not secret:
            logger.warning("SHOP_SECRET_KEY no definida, usando clave de desarrollo")
            secret = _DEFAULT_SECRET

        return cls(
            secret_key=secret,
            data_dir=env.get('SHOP_DATA_DIR') or BASE,
            token_ttl=int(env.get('SHOP_TOKEN_TTL', 3600)),
            password_hash_method=env.get('SHOP_PASSWORD_HASH_METHOD') or 'scrypt',
            enable_profiling=env.get('SHOP_ENABLE_PROFILING', 'true').strip().lower() in TRUE_VALUES,
            logs_dir=env.get('SHOP_LOGS_DIR') or None,
            log_level=(env.get('SHOP_LOG_LEVEL') or 'INFO').upper(),
            port=int(env.get('PORT', 3000)),
        )
