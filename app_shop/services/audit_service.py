# ==============================================================================
# SERVICIO DE AUDITORÍA
# ==============================================================================
# Centraliza toda la lógica de registro de auditoría.
# Formatea mensajes humanizados y categoriza eventos.
# ==============================================================================

import logging
from typing import Any, Dict, List, Optional

from app_shop.models import AuditType
from app_shop.repositories.interfaces import IAuditRepository

logger = logging.getLogger(__name__)


class AuditService:
    """
    Servicio para registro y consulta de auditoría.

    Centraliza:
    - Registro de eventos con mensajes humanizados
    - Categorización de eventos (USUARIO, PRODUCTO, SISTEMA)
    - Consulta de logs

    La regla de oro: toda eliminación de producto deja rastro de QUIÉN y CUÁNDO.
    """

    TYPE_USUARIO = AuditType.USUARIO.value
    TYPE_PRODUCTO = AuditType.PRODUCTO.value
    TYPE_SISTEMA = AuditType.SISTEMA.value

    def __init__(self, audit_repo: IAuditRepository):
        """
        Inicializa el servicio de auditoría.

        Args:
            audit_repo: Repositorio de auditoría
        """
        self.audit_repo = audit_repo

    # =========================================================================
    # REGISTRO DE EVENTOS
    # =========================================================================

    def log(
        self,
        log_type: str,
        user: str,
        message: str,
        related_id: Any = '',
        details: Dict[str, Any] = None,
        timestamp: str = None
    ) -> Dict[str, Any]:
        """
        Registra un evento de auditoría genérico.

        Args:
            log_type: Tipo de evento (USUARIO, PRODUCTO, SISTEMA)
            user: Usuario que realizó la acción
            message: Mensaje descriptivo humanizado
            related_id: ID relacionado (pID, id de usuario)
            details: Detalles adicionales
            timestamp: Fecha ISO (opcional)
        """
        return self.audit_repo.log(log_type, user, message, related_id, details, timestamp)

    def log_user_signup(self, user_id: str, email: str, role: str) -> None:
        message = f"Registro de usuario: {email} (rol: {role})"
        self.log(self.TYPE_USUARIO, email, message, user_id, {'role': role})

    def log_user_login(self, user_id: str, email: str) -> None:
        """Registra un inicio de sesión."""
        message = f"Inicio de sesión: {email}"
        self.log(self.TYPE_SISTEMA, email, message, user_id)

    def log_product_created(self, actor: str, pid: int, name: Optional[str]) -> None:
        """
        Registra la creación de un producto.

        Args:
            actor: Email del admin
            pid: pID del producto
            name: Nombre del producto
        """
        message = f"Producto creado: {name} (pID: {pid}) por {actor}"
        self.log(self.TYPE_PRODUCTO, actor, message, pid, {'pID': pid, 'name': name})

    def log_product_updated(
        self,
        actor: str,
        pid: int,
        name: Optional[str],
        changes: Dict[str, Any] = None
    ) -> None:
        """
        Registra actualización de un producto.

        Args:
            actor: Email del admin
            pid: pID del producto
            name: Nombre del producto
            changes: Campos modificados
        """
        message = f"Producto actualizado: {name} (pID: {pid}) por {actor}"
        self.log(self.TYPE_PRODUCTO, actor, message, pid, {'pID': pid, 'changes': changes})

    def log_product_deleted(
        self,
        pid: int,
        admin_name: Optional[str],
        admin_email: Optional[str],
        timestamp: str
    ) -> Dict[str, Any]:
        """
        Registra eliminación de un producto atribuida al admin.

        Args:
            pid: pID del producto eliminado
            admin_name: Nombre del admin
            admin_email: Email del admin
            timestamp: Momento de la eliminación (ISO 8601)

        Returns:
            Entrada de auditoría registrada
        """
        message = (
            f"Producto pID {pid} eliminado por admin "
            f"{admin_name} ({admin_email}) el {timestamp}"
        )
        logger.info(message)
        return self.log(
            self.TYPE_PRODUCTO,
            admin_email,
            message,
            pid,
            {'pID': pid, 'admin_name': admin_name, 'admin_email': admin_email},
            timestamp
        )

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_all_logs(self) -> List[Dict[str, Any]]:
        return self.audit_repo.load()

    def get_logs_by_type(self, log_type: str) -> List[Dict[str, Any]]:
        return self.audit_repo.get_logs_by_type(log_type)
