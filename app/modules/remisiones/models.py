from app.database.database import Base
from sqlalchemy import Column, String, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.common.mixins import NumberedDocumentMixin
import enum


class EstadoRemision(enum.Enum):
    PENDIENTE = "pendiente"  # Por entregar
    ENTREGADA = "entregada"  # Entregada al cliente
    ANULADA = "anulada"      # Anulada


class Remision(Base, NumberedDocumentMixin):
    """Remisión (nota de entrega); el cliente registrado es opcional"""
    __tablename__ = "remisiones"

    cliente_id = Column(Uuid, ForeignKey("clientes.id"), nullable=True, index=True)
    direccion_entrega = Column(String(300), nullable=True)
    estado = Column(String(20), nullable=False, default=EstadoRemision.PENDIENTE.value, index=True)

    # Relationships
    cliente = relationship("Cliente")

    __table_args__ = (
        UniqueConstraint("user_id", "numero", name="uq_remision_user_numero"),
    )
