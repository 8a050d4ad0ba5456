from app.database.database import Base
from sqlalchemy import Column, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship
from app.common.mixins import NumberedDocumentMixin, TotalsMixin


class Cotizacion(Base, NumberedDocumentMixin, TotalsMixin):
    """Cotización: misma forma que la factura, sin estado"""
    __tablename__ = "cotizaciones"

    cliente_id = Column(Uuid, ForeignKey("clientes.id"), nullable=False, index=True)
    fecha_vencimiento = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    cliente = relationship("Cliente")

    __table_args__ = (
        UniqueConstraint("user_id", "numero", name="uq_cotizacion_user_numero"),
    )
