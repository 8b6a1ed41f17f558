# ==============================================================================
# REPOSITORIO DE AUDITORÍA
# ==============================================================================
# Encapsula todo el acceso a audit.json
# La auditoría se almacena como lista: [{log1}, {log2}, ...] (más reciente primero)
# ==============================================================================

import os
from datetime import datetime, timezone
from typing import Any, Dict, List

from app_shop.models import AuditLog, AuditType

from .base import ListRepository


class AuditRepository(ListRepository):
    """
    Repositorio para gestión del log de auditoría.

    Formato de datos en audit.json:
    [
        {
            "type": "PRODUCTO",
            "user": "admin@x.com",
            "message": "Producto pID 1 eliminado por Admin (admin@x.com)",
            "timestamp": "2024-01-01T10:00:00+00:00",
            "related_id": "1",
            "details": {...}
        }
    ]
    """

    # Límite de registros para evitar archivos muy grandes
    MAX_LOGS = 10000

    def __init__(self, base_path: str):
        """
        Inicializa el repositorio de auditoría.

        Args:
            base_path: Carpeta de datos
        """
        super().__init__(os.path.join(base_path, 'audit.json'))

    def load(self) -> List[Dict[str, Any]]:
        """
        Carga todos los logs de auditoría.

        Returns:
            Lista de logs (más recientes primero)
        """
        return sorted(self.get_all(), key=lambda x: x.get('timestamp', ''), reverse=True)

    def log(
        self,
        log_type: str,
        user: str,
        message: str,
        related_id: str = '',
        details: Dict[str, Any] = None,
        timestamp: str = None
    ) -> Dict[str, Any]:
        """
        Registra un nuevo evento de auditoría.

        Args:
            log_type: Tipo de evento (USUARIO, PRODUCTO, SISTEMA)
            user: Usuario que realizó la acción
            message: Mensaje descriptivo humanizado
            related_id: ID relacionado (pID, id de usuario)
            details: Detalles adicionales
            timestamp: Fecha ISO (por defecto ahora, UTC)

        Returns:
            La entrada registrada
        """
        log_entry = AuditLog(
            type=AuditType(log_type),
            user=user or 'sistema',
            message=message,
            timestamp=timestamp or datetime.now(timezone.utc).isoformat(),
            related_id=str(related_id) if related_id != '' else '',
            details=details or {}
        ).to_dict()

        with self.transaction() as logs:
            logs.insert(0, log_entry)
            # Mantener solo los últimos MAX_LOGS registros
            del logs[self.MAX_LOGS:]
        return log_entry

    def get_logs_by_type(self, log_type: str) -> List[Dict[str, Any]]:
        """Logs de un tipo específico."""
        return [log for log in self.load() if log.get('type') == log_type]

