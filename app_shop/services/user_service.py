# ==============================================================================
# SERVICIO DE USUARIOS
# ==============================================================================
# Centraliza toda la lógica de negocio relacionada con usuarios:
# registro, login (emisión de token), perfil y listado.
#
# - Este servicio NO depende del tipo de almacenamiento
# - Las rutas solo orquestan request → service → response
# - Ninguna respuesta incluye el campo password
# ==============================================================================

import logging
import uuid
from typing import Any, Dict, List, Optional

from app_shop.errors import DuplicateEmail, InvalidCredentials, UserNotFound, ValidationError
from app_shop.models import Identity, User, UserRole
from app_shop.repositories.interfaces import IUserRepository
from app_shop.services.audit_service import AuditService
from app_shop.services.password_hasher import PasswordHasher
from app_shop.services.token_service import TokenService

logger = logging.getLogger(__name__)


class UserService:
    """
    Servicio para gestión de usuarios.

    Responsabilidades:
    - Registro (email único, password hasheado, rol válido)
    - Autenticación (login → token)
    - Perfil y listado sin passwords
    """

    def __init__(
        self,
        user_repo: IUserRepository,
        password_hasher: PasswordHasher,
        token_service: TokenService,
        audit_service: AuditService = None
    ):
        """
        Inicializa el servicio de usuarios.

        Args:
            user_repo: Repositorio de usuarios
            password_hasher: Hash de contraseñas
            token_service: Emisión de tokens
            audit_service: Servicio de auditoría (opcional)
        """
        self.user_repo = user_repo
        self.password_hasher = password_hasher
        self.token_service = token_service
        self.audit_service = audit_service

    # =========================================================================
    # REGISTRO Y AUTENTICACIÓN
    # =========================================================================

    def signup(
        self,
        email: Any,
        password: Any,
        name: Optional[str] = None,
        role: Any = None
    ) -> User:
        """
        Registra un nuevo usuario.

        Args:
            email: Email (único, se guarda tal cual)
            password: Contraseña en texto plano (cualquier valor se convierte a texto)
            name: Nombre visible
            role: 'user' (por defecto) o 'admin'

        Returns:
            Usuario creado

        Raises:
            ValidationError: Email/password faltantes o rol inválido
            DuplicateEmail: El email ya está registrado
        """
        if not isinstance(email, str) or not email.strip():
            raise ValidationError('Email is required')
        if password is None or password == '':
            raise ValidationError('Password is required')
        if name is not None and not isinstance(name, str):
            raise ValidationError('Name must be text')

        user_role = UserRole.USER if role in (None, '') else UserRole.parse(role)
        if user_role is None:
            raise ValidationError('Role must be one of: user, admin')

        user = User(
            id=uuid.uuid4().hex,
            name=name,
            email=email,
            password_hash=self.password_hasher.hash(password),
            role=user_role,
        )

        if not self.user_repo.create_user(user.id, user.to_dict()):
            raise DuplicateEmail()

        logger.info("Usuario registrado: %s (rol: %s)", user.email, user.role.value)
        if self.audit_service:
            self.audit_service.log_user_signup(user.id, user.email, user.role.value)
        return user

    def authenticate(self, email: Any, password: Any) -> User:
        """
        Verifica credenciales.

        Email desconocido y contraseña incorrecta producen el MISMO error
        (y cuestan lo mismo) para no revelar qué emails existen.

        Raises:
            InvalidCredentials
        """
        found = self.user_repo.find_by_email(email) if isinstance(email, str) else None
        if found is None:
            self.password_hasher.verify_dummy(password)
            raise InvalidCredentials()

        user = User.from_dict(*found)
        if not self.password_hasher.verify(password, user.password_hash):
            raise InvalidCredentials()
        return user

    def login(self, email: Any, password: Any) -> str:
        """
        Autentica y emite un token.

        Returns:
            Token firmado con {id, role}
        """
        user = self.authenticate(email, password)
        token = self.token_service.issue(Identity(id=user.id, role=user.role))

        if self.audit_service:
            self.audit_service.log_user_login(user.id, user.email)
        return token

    # =========================================================================
    # CONSULTAS
    # =========================================================================

    def get_user(self, user_id: str) -> User:
        """
        Obtiene un usuario por ID.

        Raises:
            UserNotFound
        """
        data = self.user_repo.find_by_id(user_id)
        if data is None:
            raise UserNotFound()
        return User.from_dict(user_id, data)

    def get_profile(self, user_id: str) -> Dict[str, Any]:
        """Perfil del usuario (sin password)."""
        return self.get_user(user_id).to_public_dict()

    def list_users(self) -> List[Dict[str, Any]]:
        """Todos los usuarios (sin password)."""
        return [
            User.from_dict(user_id, data).to_public_dict()
            for user_id, data in self.user_repo.list_users().items()
        ]
