# ==============================================================================
# CAPA DE MODELOS - Estructuras de datos del sistema
# ==============================================================================
# Este módulo define todas las entidades del dominio usando dataclasses.
# Los repositorios guardan dicts; los servicios trabajan con estas clases.
# ==============================================================================

from .entities import (
    # Usuarios
    User,
    UserRole,
    Identity,

    # Catálogo y carrito
    Product,
    CartLine,

    # Auditoría
    AuditLog,
    AuditType,
)

__all__ = [
    # Usuarios
    'User',
    'UserRole',
    'Identity',

    # Catálogo y carrito
    'Product',
    'CartLine',

    # Auditoría
    'AuditLog',
    'AuditType',
]
