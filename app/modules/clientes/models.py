"""
Modelos SQLAlchemy para el módulo de Clientes
"""

from app.database.database import Base
from sqlalchemy import Column, String, UniqueConstraint
from app.common.mixins import OwnedMixin, TimestampMixin
import enum


class TipoCliente(enum.Enum):
    """Tipo de persona"""
    NATURAL = "natural"    # Persona natural
    JURIDICO = "juridico"  # Persona jurídica


class Cliente(Base, OwnedMixin, TimestampMixin):
    """
    Clientes de un usuario.

    Facturas, cotizaciones y remisiones los referencian por id y guardan
    una copia del nombre.
    """
    __tablename__ = "clientes"

    nombre = Column(String(200), nullable=False, index=True)
    nit = Column(String(50), nullable=False, index=True)
    telefono = Column(String(50), nullable=True)
    email = Column(String(100), nullable=True)
    direccion = Column(String(300), nullable=True)
    tipo = Column(String(20), nullable=False, default=TipoCliente.NATURAL.value)

    __table_args__ = (
        # NIT único por usuario: otro usuario puede registrar el mismo NIT
        UniqueConstraint("user_id", "nit", name="uq_cliente_user_nit"),
    )
