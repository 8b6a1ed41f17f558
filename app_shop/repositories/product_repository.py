# ==============================================================================
# REPOSITORIO DE PRODUCTOS
# ==============================================================================
# Encapsula todo el acceso a products.json
# Indexado por ID interno; el pID de negocio es un campo único.
# ==============================================================================

import os
from typing import Any, Dict, Optional

from app_shop.repositories.base import DocumentRepository


class ProductRepository(DocumentRepository):
    """
    Repositorio del catálogo de productos.

    Formato de datos en products.json:
    {
        "9ab0...": {
            "pID": 1,
            "name": "Milk",
            "price": "50",
            "mfDate": "2024-01-01",
            "expDate": "2024-02-01",
            "quantity": 10
        }
    }
    """

    def __init__(self, base_path: str):
        """
        Inicializa el repositorio de productos.

        Args:
            base_path: Carpeta de datos
        """
        super().__init__(os.path.join(base_path, 'products.json'))

    def find_by_pid(self, pid: int) -> Optional[tuple]:
        """
        Busca un producto por pID.

        Returns:
            Tupla (id, datos) o None
        """
        return self.find_one('pID', pid)

    def create_product(self, product_id: str, record: Dict[str, Any]) -> bool:
        """
        Crea un producto si su pID no existe.

        Returns:
            True si se creó, False si el pID ya estaba en uso
        """
        return self.insert_if_absent(product_id, record, unique_field='pID')

    def update_by_pid(self, pid: int, changes: Dict[str, Any]) -> Optional[tuple]:
        """
        Actualización parcial por pID.

        Returns:
            Tupla (id, producto actualizado) o None si no existe
        """
        return self.update_where('pID', pid, changes)

    def delete_by_pid(self, pid: int) -> Optional[tuple]:
        """
        Elimina un producto por pID.

        Returns:
            Tupla (id, producto eliminado) o None si no existía
        """
        return self.delete_where('pID', pid)

    def list_products(self) -> Dict[str, Dict[str, Any]]:
        return self.get_all()
