from pydantic import Field, field_validator
from typing import Optional
from uuid import UUID
from datetime import datetime
from enum import Enum
from app.common.schemas import CamelModel


class TipoMovimiento(str, Enum):
    INGRESO = "ingreso"
    GASTO = "gasto"


class MovimientoCreate(CamelModel):
    descripcion: str = Field(..., min_length=1, max_length=500)
    monto: float = Field(..., ge=0, description="Monto positivo; el tipo define el signo")
    tipo: TipoMovimiento
    categoria: str = Field("General", max_length=100)
    fecha: Optional[datetime] = None

    @field_validator('categoria')
    @classmethod
    def default_categoria(cls, v):
        return v.strip() or "General"


class MovimientoOut(CamelModel):
    id: UUID
    descripcion: str
    monto: float
    tipo: TipoMovimiento
    categoria: str
    fecha: datetime
    user_id: UUID


class ResumenOut(CamelModel):
    """Saldo = ingresos - gastos"""
    saldo: float
    ingresos: float
    gastos: float
