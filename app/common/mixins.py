"""
Common mixins for user-owned models
"""
from sqlalchemy import Column, DateTime, ForeignKey, String, Numeric, JSON, Uuid
from sqlalchemy.orm import declared_attr
from sqlalchemy.sql import func
from datetime import datetime, timezone
from uuid import uuid4


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OwnedMixin:
    """Mixin for models owned by a single user; every query is scoped by user_id"""

    id = Column(Uuid, primary_key=True, default=uuid4)

    @declared_attr
    def user_id(cls):
        return Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)


class TimestampMixin:
    """Mixin for models that need creation tracking"""

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class NumberedDocumentMixin(OwnedMixin, TimestampMixin):
    """
    Columnas comunes de los documentos numerados (factura, cotización, remisión).

    El cliente se referencia por id y se guarda una copia de su nombre
    para que el documento no cambie si el cliente se edita.
    """

    numero = Column(String(20), nullable=False, index=True)
    cliente_nombre = Column(String(200), nullable=False, index=True)
    fecha = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    items = Column(JSON, nullable=False, default=list)


class TotalsMixin:
    """Totales monetarios de factura y cotización"""

    subtotal = Column(Numeric(15, 2), nullable=False)
    iva = Column(Numeric(15, 2), nullable=False, default=0)
    total = Column(Numeric(15, 2), nullable=False)
