from pydantic import Field
from typing import Optional, List
from uuid import UUID
from datetime import datetime
from enum import Enum
from app.common.schemas import CamelModel, ItemDocumento


class EstadoRemision(str, Enum):
    PENDIENTE = "pendiente"
    ENTREGADA = "entregada"
    ANULADA = "anulada"


class RemisionCreate(CamelModel):
    cliente_id: Optional[UUID] = None
    cliente_nombre: Optional[str] = Field(None, max_length=200, description="Requerido si no se envía clienteId")
    fecha: Optional[datetime] = None
    direccion_entrega: Optional[str] = Field(None, max_length=300)
    estado: EstadoRemision = EstadoRemision.PENDIENTE
    items: List[ItemDocumento] = Field(default_factory=list)


class RemisionOut(CamelModel):
    id: UUID
    numero: str
    cliente_id: Optional[UUID] = None
    cliente_nombre: str
    fecha: datetime
    direccion_entrega: Optional[str] = None
    estado: EstadoRemision
    items: List[ItemDocumento] = []
    user_id: UUID
    created_at: Optional[datetime] = None
