# ==============================================================================
# INTERFACES DE REPOSITORIOS
# ==============================================================================
#
# Contratos que los servicios esperan de la capa de persistencia.
# Los servicios dependen de estos protocolos, NO de las clases JSON:
# cualquier almacén de documentos que los cumpla (Mongo, SQL, memoria)
# puede inyectarse en app_container.py sin tocar los servicios.
#
# Reglas que toda implementación debe respetar:
# - create_user / create_product son "insertar si no existe" ATÓMICOS
# - merge_cart_line es "incrementar o agregar" ATÓMICO
#
# ==============================================================================

from typing import Any, Dict, List, Optional, Protocol, runtime_checkable


@runtime_checkable
class IUserRepository(Protocol):
    """Interfaz del Credential Store."""

    def find_by_email(self, email: str) -> Optional[tuple]:
        """(id, usuario) por email exacto."""
        ...

    def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """Usuario por ID interno."""
        ...

    def create_user(self, user_id: str, record: Dict[str, Any]) -> bool:
        """Inserta si el email no existe."""
        ...

    def list_users(self) -> Dict[str, Dict[str, Any]]:
        """Todos los usuarios."""
        ...

    def merge_cart_line(
        self, user_id: str, product_ref: str, quantity: int
    ) -> Optional[List[Dict[str, Any]]]:
        """Incrementa o agrega una línea del carrito."""
        ...


@runtime_checkable
class IProductRepository(Protocol):
    """Interfaz del catálogo de productos."""

    def find_by_pid(self, pid: int) -> Optional[tuple]:
        """(id, producto) por pID."""
        ...

    def get_by_id(self, record_id: str) -> Optional[Dict[str, Any]]:
        """Producto por ID interno."""
        ...

    def create_product(self, product_id: str, record: Dict[str, Any]) -> bool:
        """Inserta si el pID no existe."""
        ...

    def update_by_pid(self, pid: int, changes: Dict[str, Any]) -> Optional[tuple]:
        """Actualización parcial por pID."""
        ...

    def delete_by_pid(self, pid: int) -> Optional[tuple]:
        """Eliminación por pID."""
        ...

    def list_products(self) -> Dict[str, Dict[str, Any]]:
        """Todos los productos."""
        ...


@runtime_checkable
class IAuditRepository(Protocol):
    """Interfaz del log de auditoría."""

    def log(
        self,
        log_type: str,
        user: str,
        message: str,
        related_id: str = '',
        details: Dict[str, Any] = None,
        timestamp: str = None
    ) -> Dict[str, Any]:
        """Registra un evento."""
        ...

    def load(self) -> List[Dict[str, Any]]:
        """Todos los eventos, más recientes primero."""
        ...

    def get_logs_by_type(self, log_type: str) -> List[Dict[str, Any]]:
        """Eventos de un tipo."""
        ...
