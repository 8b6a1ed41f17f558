# ==============================================================================
# SERVICIO DE CARRITO
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con el carrito de compras.
# El carrito vive dentro del documento del usuario: [{product, quantity}].
#
# Política de merge: agregar un producto que ya está en el carrito SUMA la
# cantidad a su línea (2 + 3 = 5), nunca crea una segunda línea ni
# sobrescribe. El incremento es atómico en el repositorio.
# ==============================================================================

from typing import Any, Dict, List

from app_shop.errors import UserNotFound, ValidationError
from app_shop.repositories.interfaces import IUserRepository
from app_shop.services.product_service import ProductService, parse_int


class CartService:
    """
    Servicio para gestión del carrito de compras.

    Responsabilidades:
    - Agregar items (merge idempotente-acumulativo)
    - Ver el carrito con los productos resueltos
    """

    DEFAULT_QUANTITY = 1

    def __init__(self, user_repo: IUserRepository, product_service: ProductService):
        """
        Inicializa el servicio de carrito.

        Args:
            user_repo: Repositorio de usuarios (dueño del carrito)
            product_service: Servicio de productos (resolución por pID)
        """
        self.user_repo = user_repo
        self.product_service = product_service

    def _parse_quantity(self, quantity: Any) -> int:
        """
        Cantidad pedida: ausente → 1, si no, entero >= 1.

        Raises:
            ValidationError
        """
        if quantity is None or quantity == '':
            return self.DEFAULT_QUANTITY
        return parse_int(quantity, 'quantity', minimum=1)

    def add_to_cart(self, user_id: str, pid: Any, quantity: Any = None) -> List[Dict[str, Any]]:
        """
        Agrega un producto al carrito o suma a su línea existente.

        Args:
            user_id: ID del usuario autenticado
            pid: pID del producto
            quantity: Cantidad (por defecto 1)

        Returns:
            Carrito completo con referencias SIN resolver

        Raises:
            ValidationError: Cantidad o pID inválidos
            ProductNotFound: El pID no existe (el carrito no cambia)
            UserNotFound: El usuario ya no existe
        """
        amount = self._parse_quantity(quantity)
        product = self.product_service.get_by_pid(pid)

        cart = self.user_repo.merge_cart_line(user_id, product.id, amount)
        if cart is None:
            raise UserNotFound()
        return cart

    def view_cart(self, user_id: str) -> List[Dict[str, Any]]:
        """
        Carrito con cada referencia resuelta al producto actual.

        Un producto eliminado del catálogo aparece como None.

        Raises:
            UserNotFound
        """
        user = self.user_repo.find_by_id(user_id)
        if user is None:
            raise UserNotFound()

        items = []
        for line in user.get('cart', []):
            product = self.product_service.get_by_id(line.get('product'))
            items.append({
                'product': product.to_public_dict() if product else None,
                'quantity': line.get('quantity', 0),
            })
        return items
