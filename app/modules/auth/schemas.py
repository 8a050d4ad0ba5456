from pydantic import BaseModel, Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime
from enum import Enum
from app.common.schemas import CamelModel
from app.common.validators import validate_email_format, clean_optional_text


class UserRole(str, Enum):
    ADMIN = "admin"
    CONTADOR = "contador"
    USER = "user"


# User schemas
class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1)
    role: UserRole = UserRole.USER
    nombre: Optional[str] = Field(None, max_length=200)
    email: Optional[str] = Field(None, max_length=100)
    telefono: Optional[str] = Field(None, max_length=50)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('El nombre de usuario no puede estar vacío')
        return v

    @field_validator('nombre', 'telefono')
    @classmethod
    def clean_profile_text(cls, v):
        return clean_optional_text(v)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        v = clean_optional_text(v)
        if v and not validate_email_format(v):
            raise ValueError('Email debe tener formato válido')
        return v


class UserLogin(BaseModel):
    username: str
    password: str


class UserOut(BaseModel):
    id: UUID
    username: str
    role: UserRole

    class Config:
        from_attributes = True


class ProfileOut(CamelModel):
    id: UUID
    username: str
    role: UserRole
    nombre: Optional[str] = None
    email: Optional[str] = None
    telefono: Optional[str] = None
    created_at: Optional[datetime] = None


# Token schemas
class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserOut


# Auth context schemas
class AuthContext(BaseModel):
    """Identidad extraída del token, disponible en los endpoints protegidos."""
    user_id: UUID
    username: str
    role: UserRole
