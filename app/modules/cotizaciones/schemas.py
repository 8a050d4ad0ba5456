from pydantic import Field, model_validator
from typing import Optional, List
from uuid import UUID
from datetime import datetime
from app.common.schemas import CamelModel, ItemDocumento


class CotizacionCreate(CamelModel):
    cliente_id: UUID
    cliente_nombre: Optional[str] = Field(None, max_length=200)
    fecha: Optional[datetime] = None
    fecha_vencimiento: Optional[datetime] = Field(None, description="Validez de la cotización")
    subtotal: float = Field(..., ge=0)
    iva: float = Field(0, ge=0)
    total: float = Field(..., ge=0)
    items: List[ItemDocumento] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_fecha_vencimiento(self):
        if self.fecha and self.fecha_vencimiento and self.fecha_vencimiento.date() < self.fecha.date():
            raise ValueError('La fecha de vencimiento no puede ser anterior a la fecha de la cotización')
        return self


class CotizacionOut(CamelModel):
    id: UUID
    numero: str
    cliente_id: UUID
    cliente_nombre: str
    fecha: datetime
    fecha_vencimiento: Optional[datetime] = None
    subtotal: float
    iva: float
    total: float
    items: List[ItemDocumento] = []
    user_id: UUID
    created_at: Optional[datetime] = None
