"""
Esquemas Pydantic para el módulo de Clientes
"""

from pydantic import Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime
from enum import Enum
from app.common.schemas import CamelModel
from app.common.validators import validate_email_format, clean_optional_text, clean_document


class TipoCliente(str, Enum):
    NATURAL = "natural"
    JURIDICO = "juridico"


class ClienteBase(CamelModel):
    nombre: str = Field(..., min_length=1, max_length=200, description="Nombre o razón social")
    nit: str = Field(..., min_length=1, max_length=50, description="NIT o número de documento")
    telefono: Optional[str] = Field(None, max_length=50)
    email: Optional[str] = Field(None, max_length=100)
    direccion: Optional[str] = Field(None, max_length=300)
    tipo: TipoCliente = TipoCliente.NATURAL


class ClienteCreate(ClienteBase):

    @field_validator('nombre')
    @classmethod
    def validate_nombre(cls, v):
        v = v.strip()
        if not v:
            raise ValueError('El nombre es requerido')
        return v

    @field_validator('nit')
    @classmethod
    def validate_nit(cls, v):
        v = clean_document(v)
        if not v:
            raise ValueError('El NIT es requerido')
        return v

    @field_validator('telefono', 'direccion')
    @classmethod
    def clean_text(cls, v):
        return clean_optional_text(v)

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        v = clean_optional_text(v)
        if v and not validate_email_format(v):
            raise ValueError('Email debe tener formato válido')
        return v

    @field_validator('tipo', mode='before')
    @classmethod
    def normalize_tipo(cls, v):
        # Aceptar valores en mayúsculas
        if isinstance(v, str):
            return v.strip().lower()
        return v


class ClienteOut(ClienteBase):
    id: UUID
    user_id: UUID
    created_at: Optional[datetime] = None


class ClienteResumen(CamelModel):
    """Proyección embebida en los listados de facturas"""
    id: UUID
    nombre: str
    nit: str
