"""
Modelos SQLAlchemy para el módulo de Movimientos (libro de caja)
"""

from app.database.database import Base
from sqlalchemy import Column, String, DateTime, Numeric
from app.common.mixins import OwnedMixin, utcnow
import enum


class TipoMovimiento(enum.Enum):
    """Tipos de movimiento de caja"""
    INGRESO = "ingreso"  # Entrada de dinero
    GASTO = "gasto"      # Salida de dinero


class Movimiento(Base, OwnedMixin):
    __tablename__ = "movimientos"

    descripcion = Column(String(500), nullable=False)
    monto = Column(Numeric(15, 2), nullable=False)
    tipo = Column(String(20), nullable=False, index=True)
    categoria = Column(String(100), nullable=False, default="General")
    fecha = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
