from app.database.database import Base
from sqlalchemy import Column, Integer, String, ForeignKey, UniqueConstraint, Uuid
from uuid import uuid4
import enum


class DocumentKind(enum.Enum):
    FACTURA = "factura"
    COTIZACION = "cotizacion"
    REMISION = "remision"


DOCUMENT_PREFIXES = {
    DocumentKind.FACTURA: "FAC",
    DocumentKind.COTIZACION: "COT",
    DocumentKind.REMISION: "REM",
}


class DocumentSequence(Base):
    """Último número emitido por usuario y tipo de documento"""
    __tablename__ = "document_sequences"

    id = Column(Uuid, primary_key=True, default=uuid4)
    user_id = Column(Uuid, ForeignKey("users.id"), nullable=False, index=True)
    kind = Column(String(20), nullable=False)
    prefix = Column(String(10), nullable=False)
    current_number = Column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("user_id", "kind", name="uq_sequence_user_kind"),
    )
