# ==============================================================================
# CAPA DE REPOSITORIOS - Acceso a datos
# ==============================================================================
# Esta capa encapsula todo el acceso a la persistencia (archivos JSON).
#
# ESTRUCTURA:
# ├── interfaces.py          → Protocolos (contratos que usan los servicios)
# ├── base.py                → BaseRepository, DocumentRepository, ListRepository
# ├── user_repository.py     → users.json (Credential Store + carrito)
# ├── product_repository.py  → products.json (catálogo)
# └── audit_repository.py    → audit.json
# ==============================================================================

from .interfaces import (
    IUserRepository,
    IProductRepository,
    IAuditRepository,
)

from .base import BaseRepository, DocumentRepository, ListRepository
from .user_repository import UserRepository
from .product_repository import ProductRepository
from .audit_repository import AuditRepository

__all__ = [
    # Interfaces
    'IUserRepository',
    'IProductRepository',
    'IAuditRepository',

    # Clases base
    'BaseRepository',
    'DocumentRepository',
    'ListRepository',

    # Implementaciones JSON
    'UserRepository',
    'ProductRepository',
    'AuditRepository',
]
