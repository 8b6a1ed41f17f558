# ==============================================================================
# SERVICIO DE PRODUCTOS
# ==============================================================================
# Centraliza toda la lógica de negocio del catálogo:
# alta, actualización parcial y baja por pID (solo admins; el guard de
# rutas lo garantiza), más el listado para usuarios autenticados.
#
# price, mfDate y expDate son texto libre: no se validan como número/fecha.
# ==============================================================================

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from app_shop.errors import DuplicateProductId, ProductNotFound, ValidationError
from app_shop.models import Identity, Product
from app_shop.repositories.interfaces import IProductRepository, IUserRepository
from app_shop.services.audit_service import AuditService


# Campos que se pueden modificar con update_product
UPDATABLE_FIELDS = ('name', 'price', 'mfDate', 'expDate', 'quantity')


def parse_int(value: Any, field: str, minimum: Optional[int] = None) -> int:
    """
    Convierte enteros o textos numéricos ("10") a int.

    Args:
        value: Valor recibido
        field: Nombre del campo (para el mensaje de error)
        minimum: Valor mínimo permitido

    Raises:
        ValidationError: Si no es un entero válido
    """
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be an integer')
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, str):
        text = value.strip()
        if not text.isascii():
            raise ValidationError(f'{field} must be an integer')
        try:
            value = int(text)
        except ValueError:
            raise ValidationError(f'{field} must be an integer')
    if not isinstance(value, int):
        raise ValidationError(f'{field} must be an integer')
    if minimum is not None and value < minimum:
        raise ValidationError(f'{field} must be at least {minimum}')
    return value


def parse_pid(value: Any) -> int:
    """pID de negocio como entero."""
    if value is None or value == '':
        raise ValidationError('pID is required')
    return parse_int(value, 'pID')


def _as_text(value: Any, field: str) -> Optional[str]:
    """Texto libre; los números se guardan como su texto."""
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ValidationError(f'{field} must be text')


class ProductService:
    """
    Servicio para gestión del catálogo.

    Responsabilidades:
    - Alta con pID único
    - Actualización parcial por pID (el pID es inmutable)
    - Baja por pID con atribución al admin (auditoría)
    - Consultas
    """

    def __init__(
        self,
        product_repo: IProductRepository,
        user_repo: IUserRepository,
        audit_service: AuditService = None
    ):
        """
        Inicializa el servicio de productos.

        Args:
            product_repo: Repositorio de productos
            user_repo: Repositorio de usuarios (datos del admin para auditoría)
            audit_service: Servicio de auditoría (opcional)
        """
        self.product_repo = product_repo
        self.user_repo = user_repo
        self.audit_service = audit_service

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def list_products(self) -> List[Product]:
        return [
            Product.from_dict(product_id, data)
            for product_id, data in self.product_repo.list_products().items()
        ]

    def get_by_pid(self, pid: Any) -> Product:
        """
        Obtiene un producto por pID.

        Raises:
            ProductNotFound
        """
        found = self.product_repo.find_by_pid(parse_pid(pid))
        if found is None:
            raise ProductNotFound()
        return Product.from_dict(*found)

    def get_by_id(self, product_id: str) -> Optional[Product]:
        """Resuelve una referencia interna (None si ya no existe)."""
        data = self.product_repo.get_by_id(product_id)
        return Product.from_dict(product_id, data) if data is not None else None

    # =========================================================================
    # OPERACIONES DE ADMIN
    # =========================================================================

    def add_product(self, fields: Dict[str, Any], actor: Identity = None) -> Product:
        """
        Crea un producto.

        Args:
            fields: pID, name, price, mfDate, expDate, quantity
            actor: Admin que realiza la acción

        Raises:
            ValidationError: Campos obligatorios faltantes o inválidos
            DuplicateProductId: El pID ya existe
        """
        price = _as_text(fields.get('price'), 'price')
        if not price:
            raise ValidationError('price is required')
        if fields.get('quantity') is None:
            raise ValidationError('quantity is required')

        product = Product(
            id=uuid.uuid4().hex,
            pid=parse_pid(fields.get('pID')),
            name=_as_text(fields.get('name'), 'name'),
            price=price,
            mf_date=_as_text(fields.get('mfDate'), 'mfDate'),
            exp_date=_as_text(fields.get('expDate'), 'expDate'),
            quantity=parse_int(fields.get('quantity'), 'quantity', minimum=0),
        )

        if not self.product_repo.create_product(product.id, product.to_dict()):
            raise DuplicateProductId()

        if self.audit_service:
            self.audit_service.log_product_created(self._actor_label(actor), product.pid, product.name)
        return product

    def update_product(
        self,
        pid: Any,
        fields: Dict[str, Any],
        actor: Identity = None
    ) -> Product:
        """
        Actualización parcial por pID.

        Raises:
            ValidationError: Sin campos, campos inválidos o intento de cambiar pID
            ProductNotFound
        """
        pid = parse_pid(pid)
        if 'pID' in fields and fields['pID'] is not None and parse_pid(fields['pID']) != pid:
            raise ValidationError('pID cannot be changed')

        changes = self._clean_changes(fields)
        if not changes:
            raise ValidationError('No fields to update')

        updated = self.product_repo.update_by_pid(pid, changes)
        if updated is None:
            raise ProductNotFound()

        product = Product.from_dict(*updated)
        if self.audit_service:
            self.audit_service.log_product_updated(self._actor_label(actor), pid, product.name, changes)
        return product

    def delete_product(self, pid: Any, actor: Identity) -> Dict[str, Any]:
        """
        Elimina un producto y atribuye la baja al admin.

        Returns:
            Datos de atribución: pID, admin_name, admin_email, timestamp

        Raises:
            ProductNotFound
        """
        pid = parse_pid(pid)
        if self.product_repo.delete_by_pid(pid) is None:
            raise ProductNotFound()

        admin = self.user_repo.find_by_id(actor.id) or {}
        attribution = {
            'pID': pid,
            'admin_name': admin.get('name'),
            'admin_email': admin.get('email'),
            'timestamp': datetime.now(timezone.utc).isoformat(),
        }
        if self.audit_service:
            self.audit_service.log_product_deleted(
                pid,
                attribution['admin_name'],
                attribution['admin_email'],
                attribution['timestamp']
            )
        return attribution

    # =========================================================================
    # UTILIDADES
    # =========================================================================

    def _clean_changes(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        """Filtra y valida los campos modificables."""
        changes: Dict[str, Any] = {}
        for key in UPDATABLE_FIELDS:
            if key not in fields:
                continue
            value = fields[key]
            if key == 'quantity':
                changes[key] = parse_int(value, 'quantity', minimum=0)
            elif key == 'price':
                price = _as_text(value, 'price')
                if not price:
                    raise ValidationError('price cannot be empty')
                changes[key] = price
            else:
                changes[key] = _as_text(value, key)
        return changes

    def _actor_label(self, actor: Optional[Identity]) -> str:
        """Email del admin (o su ID si ya no existe)."""
        if actor is None:
            return 'sistema'
        admin = self.user_repo.find_by_id(actor.id) or {}
        return admin.get('email') or actor.id
