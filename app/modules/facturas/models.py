from app.database.database import Base
from sqlalchemy import Column, String, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.common.mixins import NumberedDocumentMixin, TotalsMixin
import enum


class EstadoFactura(enum.Enum):
    PENDIENTE = "pendiente"  # Emitida, pendiente de pago
    PAGADA = "pagada"        # Pagada completamente
    ANULADA = "anulada"      # Anulada


class Factura(Base, NumberedDocumentMixin, TotalsMixin):
    __tablename__ = "facturas"

    # cliente_nombre guarda la copia del nombre al emitir
    cliente_id = Column(Uuid, ForeignKey("clientes.id"), nullable=False, index=True)
    fecha_vencimiento = Column(DateTime(timezone=True), nullable=True)
    estado = Column(String(20), nullable=False, default=EstadoFactura.PENDIENTE.value, index=True)

    # Relationships
    cliente = relationship("Cliente")

    __table_args__ = (
        UniqueConstraint("user_id", "numero", name="uq_factura_user_numero"),
    )
