# ==============================================================================
# REPOSITORIO DE USUARIOS
# ==============================================================================
# Encapsula todo el acceso a users.json
# Los usuarios se almacenan como diccionario: {id: {name, email, password, role, cart}}
# ==============================================================================

import os
from typing import Any, Dict, List, Optional

from app_shop.repositories.base import DocumentRepository


class UserRepository(DocumentRepository):
    """
    Repositorio para gestión de usuarios (Credential Store).

    Formato de datos en users.json:
    {
        "5d1e...": {
            "name": "Ana",
            "email": "ana@x.com",
            "password": "scrypt:...",
            "role": "user",
            "cart": [{"product": "9ab0...", "quantity": 2}]
        }
    }
    """

    def __init__(self, base_path: str):
        """
        Inicializa el repositorio de usuarios.

        Args:
            base_path: Carpeta de datos
        """
        super().__init__(os.path.join(base_path, 'users.json'))

    def find_by_email(self, email: str) -> Optional[tuple]:
        """
        Busca un usuario por email (comparación exacta).

        Returns:
            Tupla (id, datos) o None
        """
        return self.find_one('email', email)

    def find_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        return self.get_by_id(user_id)

    def create_user(self, user_id: str, record: Dict[str, Any]) -> bool:
        """
        Crea un usuario si su email no está registrado.

        Args:
            user_id: ID interno nuevo
            record: Documento completo (con password ya hasheado)

        Returns:
            True si se creó, False si el email ya existía
        """
        return self.insert_if_absent(user_id, record, unique_field='email')

    def list_users(self) -> Dict[str, Dict[str, Any]]:
        """Todos los usuarios {id: datos}."""
        return self.get_all()

    def merge_cart_line(
        self,
        user_id: str,
        product_ref: str,
        quantity: int
    ) -> Optional[List[Dict[str, Any]]]:
        """
        Suma quantity a la línea del producto o agrega una nueva,
        todo dentro de una sola transacción.

        Args:
            user_id: ID del usuario
            product_ref: ID interno del producto
            quantity: Cantidad a sumar

        Returns:
            Carrito actualizado, o None si el usuario no existe
        """
        def _merge(record: Dict[str, Any]) -> List[Dict[str, Any]]:
            cart = record.setdefault('cart', [])
            for line in cart:
                if line.get('product') == product_ref:
                    line['quantity'] = line.get('quantity', 0) + quantity
                    break
            else:
                cart.append({'product': product_ref, 'quantity': quantity})
            return [dict(line) for line in cart]

        return self.modify(user_id, _merge)
