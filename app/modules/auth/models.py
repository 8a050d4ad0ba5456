from sqlalchemy import Column, String, Uuid
from uuid import uuid4
from app.database.database import Base
from app.common.mixins import TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid4)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password = Column(String, nullable=False)  # hash bcrypt, nunca el texto plano
    role = Column(String(20), nullable=False, default="user")  # admin, contador, user

    # Perfil
    nombre = Column(String(200), nullable=True)
    email = Column(String(100), nullable=True)
    telefono = Column(String(50), nullable=True)
