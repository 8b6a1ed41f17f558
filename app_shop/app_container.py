# ==============================================================================
# CONTENEDOR DE DEPENDENCIAS - Inyección de servicios
# ==============================================================================
# Este módulo proporciona una forma centralizada de obtener instancias
# de repositorios y servicios a partir de UN objeto Settings.
#
# - Cada app Flask tiene su propio contenedor (app.extensions['app_shop'])
# - Nada se lee de variables globales ni de os.environ aquí
# - Para cambiar de almacenamiento: instanciar otros repositorios que
#   cumplan las interfaces de repositories/interfaces.py
# ==============================================================================

from typing import Callable, Optional
import time

from flask import current_app

from app_shop.config import Settings

# ═══════════════════════════════════════════════════════════════════════════════
# REPOSITORIOS - Capa de persistencia
# ═══════════════════════════════════════════════════════════════════════════════
from app_shop.repositories import (
    UserRepository,
    ProductRepository,
    AuditRepository,
)

# ═══════════════════════════════════════════════════════════════════════════════
# SERVICIOS - Capa de lógica de negocio
# ═══════════════════════════════════════════════════════════════════════════════
from app_shop.services import (
    PasswordHasher,
    TokenService,
    AuditService,
    UserService,
    ProductService,
    CartService,
)

EXTENSION_KEY = 'app_shop'


class AppContainer:
    """
    Contenedor de dependencias de la aplicación.

    Crea cada repositorio y servicio una sola vez (lazy loading).

    Uso:
        container = AppContainer(Settings.from_env())
        cart_service = container.cart_service
    """

    def __init__(self, settings: Settings, clock: Callable[[], float] = time.time):
        """
        Inicializa el contenedor.

        Args:
            settings: Configuración del proceso
            clock: Reloj para TokenService (inyectable en tests)
        """
        self.settings = settings
        self._clock = clock

        # Repositorios (lazy loading)
        self._user_repo: Optional[UserRepository] = None
        self._product_repo: Optional[ProductRepository] = None
        self._audit_repo: Optional[AuditRepository] = None

        # Servicios (lazy loading)
        self._password_hasher: Optional[PasswordHasher] = None
        self._token_service: Optional[TokenService] = None
        self._audit_service: Optional[AuditService] = None
        self._user_service: Optional[UserService] = None
        self._product_service: Optional[ProductService] = None
        self._cart_service: Optional[CartService] = None

    # =========================================================================
    # REPOSITORIOS
    # =========================================================================

    @property
    def user_repo(self) -> UserRepository:
        """Repositorio de usuarios."""
        if self._user_repo is None:
            self._user_repo = UserRepository(self.settings.data_dir)
        return self._user_repo

    @property
    def product_repo(self) -> ProductRepository:
        """Repositorio de productos."""
        if self._product_repo is None:
            self._product_repo = ProductRepository(self.settings.data_dir)
        return self._product_repo

    @property
    def audit_repo(self) -> AuditRepository:
        """Repositorio de auditoría."""
        if self._audit_repo is None:
            self._audit_repo = AuditRepository(self.settings.data_dir)
        return self._audit_repo

    # =========================================================================
    # SERVICIOS
    # =========================================================================

    @property
    def password_hasher(self) -> PasswordHasher:
        if self._password_hasher is None:
            self._password_hasher = PasswordHasher(self.settings.password_hash_method)
        return self._password_hasher

    @property
    def token_service(self) -> TokenService:
        """Servicio de tokens (firmados con settings.secret_key)."""
        if self._token_service is None:
            self._token_service = TokenService(
                self.settings.secret_key,
                ttl=self.settings.token_ttl,
                clock=self._clock
            )
        return self._token_service

    @property
    def audit_service(self) -> AuditService:
        """Servicio de auditoría."""
        if self._audit_service is None:
            self._audit_service = AuditService(self.audit_repo)
        return self._audit_service

    @property
    def user_service(self) -> UserService:
        """Servicio de usuarios."""
        if self._user_service is None:
            self._user_service = UserService(
                self.user_repo,
                self.password_hasher,
                self.token_service,
                self.audit_service
            )
        return self._user_service

    @property
    def product_service(self) -> ProductService:
        """Servicio de productos."""
        if self._product_service is None:
            self._product_service = ProductService(
                self.product_repo,
                self.user_repo,
                self.audit_service
            )
        return self._product_service

    @property
    def cart_service(self) -> CartService:
        """Servicio de carrito."""
        if self._cart_service is None:
            self._cart_service = CartService(self.user_repo, self.product_service)
        return self._cart_service


def get_container() -> AppContainer:
    """
    Contenedor de la app Flask activa.

    Returns:
        Instancia registrada por create_app
    """
    return current_app.extensions[EXTENSION_KEY]
