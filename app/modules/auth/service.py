"""
Servicio de autenticación: registro, login y perfil.
"""
import logging
from uuid import UUID
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.modules.auth.models import User
from app.modules.auth.schemas import UserCreate, UserLogin, UserOut, AuthResponse
from app.modules.auth.utils import hash_password, verify_password, create_user_token

logger = logging.getLogger(__name__)


class AuthService:
    """
    Servicio de autenticación por usuario y contraseña.
    """

    def __init__(self, db: Session):
        self.db = db

    def _auth_response(self, user: User, message: str) -> AuthResponse:
        token = create_user_token(user.id, user.username, user.role)
        return AuthResponse(message=message, token=token, user=UserOut.model_validate(user))

    def register(self, user_data: UserCreate) -> AuthResponse:
        """
        Crear un usuario nuevo y devolver su token de sesión.

        Raises:
            HTTPException 400: si el username ya está registrado
        """
        existing_user = self.db.query(User).filter(User.username == user_data.username).first()
        if existing_user:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="El usuario ya existe"
            )

        user = User(
            username=user_data.username,
            password=hash_password(user_data.password),
            role=user_data.role.value,
            nombre=user_data.nombre,
            email=user_data.email,
            telefono=user_data.telefono,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Otro registro concurrente ganó la carrera por el mismo username
            self.db.rollback()
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="El usuario ya existe"
            )
        self.db.refresh(user)

        logger.info(f"User registered: {user.username} ({user.role})")
        return self._auth_response(user, "Registro exitoso")

    def login(self, credentials: UserLogin) -> AuthResponse:
        """Validar credenciales y emitir token."""
        user = self.db.query(User).filter(User.username == credentials.username).first()
        if not user:
            logger.info(f"Login failed, unknown user: {credentials.username}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Usuario no encontrado"
            )

        if not verify_password(credentials.password, user.password):
            logger.info(f"Login failed, wrong password for: {credentials.username}")
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Contraseña incorrecta"
            )

        return self._auth_response(user, "Login exitoso")

    def get_profile(self, user_id: UUID) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Usuario no encontrado"
            )
        return user
