# ==============================================================================
# ENTIDADES DEL DOMINIO - Definiciones de dataclasses
# ==============================================================================
# Cada entidad representa un concepto del negocio.
# Diseñadas para ser independientes del mecanismo de persistencia:
# to_dict() produce el documento que se guarda en JSON,
# from_dict() lo reconstruye.
# ==============================================================================

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any
from enum import Enum


# ==============================================================================
# ENUMERACIONES - Estados y tipos válidos
# ==============================================================================

class UserRole(str, Enum):
    """Roles de usuario disponibles en el sistema."""
    USER = "user"
    ADMIN = "admin"

    @classmethod
    def parse(cls, value: Any) -> Optional['UserRole']:
        """
        Convierte un valor crudo en UserRole.

        Args:
            value: Texto del rol (o UserRole)

        Returns:
            UserRole o None si no es un rol válido
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


class AuditType(str, Enum):
    """Tipos de eventos de auditoría."""
    USUARIO = "USUARIO"
    PRODUCTO = "PRODUCTO"
    SISTEMA = "SISTEMA"


# ==============================================================================
# IDENTIDAD - Resultado de verificar un token
# ==============================================================================

@dataclass(frozen=True)
class Identity:
    """
    Usuario autenticado durante una petición.

    Attributes:
        id: ID interno del usuario
        role: Rol embebido en el token
    """
    id: str
    role: UserRole


# ==============================================================================
# ENTIDADES DE USUARIO Y CARRITO
# ==============================================================================

@dataclass
class CartLine:
    """
    Línea del carrito.

    Attributes:
        product: ID interno del producto (referencia débil, no copia)
        quantity: Cantidad (siempre > 0)
    """
    product: str
    quantity: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {'product': self.product, 'quantity': self.quantity}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'CartLine':
        return cls(product=data['product'], quantity=int(data.get('quantity', 1)))


@dataclass
class User:
    """
    Representa un usuario del sistema.

    Attributes:
        id: Identificador interno
        email: Email único (sensible a mayúsculas)
        password_hash: Hash de la contraseña (nunca texto plano)
        name: Nombre visible
        role: Rol del usuario que define sus permisos
        cart: Líneas del carrito en orden de inserción
    """
    id: str
    email: str
    password_hash: str
    name: Optional[str] = None
    role: UserRole = UserRole.USER
    cart: List[CartLine] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'name': self.name,
            'email': self.email,
            'password': self.password_hash,
            'role': self.role.value,
            'cart': [line.to_dict() for line in self.cart],
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Representación para respuestas: sin password."""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role.value,
            'cart': [line.to_dict() for line in self.cart],
        }

    @classmethod
    def from_dict(cls, user_id: str, data: Dict[str, Any]) -> 'User':
        """Crea instancia desde diccionario."""
        return cls(
            id=user_id,
            name=data.get('name'),
            email=data.get('email', ''),
            password_hash=data.get('password', ''),
            role=UserRole.parse(data.get('role')) or UserRole.USER,
            cart=[CartLine.from_dict(line) for line in data.get('cart', [])],
        )


# ==============================================================================
# ENTIDADES DE CATÁLOGO
# ==============================================================================

@dataclass
class Product:
    """
    Producto del catálogo.

    price, mf_date y exp_date se guardan como texto tal cual llegan:
    no se validan como número ni como fecha.

    Attributes:
        id: Identificador interno (lo que referencia CartLine.product)
        pid: Identificador de negocio (pID), único e inmutable
        price: Precio como texto
        quantity: Stock (entero >= 0)
        name: Nombre
        mf_date: Fecha de fabricación (texto libre)
        exp_date: Fecha de vencimiento (texto libre)
    """
    id: str
    pid: int
    price: str
    quantity: int
    name: Optional[str] = None
    mf_date: Optional[str] = None
    exp_date: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para persistencia."""
        return {
            'pID': self.pid,
            'name': self.name,
            'price': self.price,
            'mfDate': self.mf_date,
            'expDate': self.exp_date,
            'quantity': self.quantity,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        d = {'id': self.id}
        d.update(self.to_dict())
        return d

    @classmethod
    def from_dict(cls, product_id: str, data: Dict[str, Any]) -> 'Product':
        """Crea instancia desde diccionario."""
        return cls(
            id=product_id,
            pid=int(data['pID']),
            name=data.get('name'),
            price=data.get('price', ''),
            mf_date=data.get('mfDate'),
            exp_date=data.get('expDate'),
            quantity=int(data.get('quantity', 0)),
        )


# ==============================================================================
# AUDITORÍA
# ==============================================================================

@dataclass
class AuditLog:
    """
    Evento de auditoría.

    Attributes:
        type: Categoría (USUARIO, PRODUCTO, SISTEMA)
        user: Quién realizó la acción
        message: Mensaje humanizado
        timestamp: Fecha/hora ISO 8601
        related_id: ID relacionado (pID, id de usuario)
        details: Datos adicionales
    """
    type: AuditType
    user: str
    message: str
    timestamp: str
    related_id: str = ''
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type.value,
            'user': self.user,
            'message': self.message,
            'timestamp': self.timestamp,
            'related_id': self.related_id,
            'details': self.details,
        }

