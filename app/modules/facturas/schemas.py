from pydantic import Field, model_validator
from typing import Optional, List
from uuid import UUID
from datetime import date, datetime
from enum import Enum
from app.common.schemas import CamelModel, ItemDocumento
from app.modules.clientes.schemas import ClienteOut, ClienteResumen


class EstadoFactura(str, Enum):
    PENDIENTE = "pendiente"
    PAGADA = "pagada"
    ANULADA = "anulada"


class FacturaCreate(CamelModel):
    cliente_id: UUID
    cliente_nombre: Optional[str] = Field(None, max_length=200, description="Por defecto el nombre del cliente")
    fecha: Optional[datetime] = None
    fecha_vencimiento: Optional[datetime] = None
    subtotal: float = Field(..., ge=0)
    iva: float = Field(0, ge=0)
    total: float = Field(..., ge=0)
    estado: EstadoFactura = EstadoFactura.PENDIENTE
    items: List[ItemDocumento] = Field(default_factory=list)

    @model_validator(mode='after')
    def validate_fecha_vencimiento(self):
        if self.fecha and self.fecha_vencimiento and self.fecha_vencimiento.date() < self.fecha.date():
            raise ValueError('La fecha de vencimiento no puede ser anterior a la fecha de la factura')
        return self


class FacturaOut(CamelModel):
    id: UUID
    numero: str
    cliente_id: UUID
    cliente_nombre: str
    fecha: datetime
    fecha_vencimiento: Optional[datetime] = None
    subtotal: float
    iva: float
    total: float
    estado: EstadoFactura
    items: List[ItemDocumento] = []
    user_id: UUID
    created_at: Optional[datetime] = None
    cliente: Optional[ClienteResumen] = None


class FacturaDetail(FacturaOut):
    """Factura con el cliente completo"""
    cliente: Optional[ClienteOut] = None


class FacturaFilters(CamelModel):
    """Filtros del listado de facturas para la app móvil"""
    estado: Optional[str] = Field(None, description="pendiente, pagada, anulada o todos")
    fecha_inicio: Optional[date] = None
    fecha_fin: Optional[date] = None
    search: Optional[str] = Field(None, description="Número de factura o nombre del cliente")
