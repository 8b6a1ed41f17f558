# ==============================================================================
# app_shop - Backend de tienda: usuarios con roles, catálogo y carrito
# ==============================================================================

from app_shop.main import create_app

__version__ = '1.0.0'

__all__ = ['create_app', '__version__']
