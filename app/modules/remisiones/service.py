from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.common.filters import contains_any
from app.common.mixins import utcnow
from app.common.schemas import items_to_json
from app.common.validators import clean_optional_text
from app.modules.clientes.service import ClienteService
from app.modules.remisiones.models import Remision
from app.modules.remisiones.schemas import RemisionCreate
from app.modules.sequences.models import DocumentKind
from app.modules.sequences.service import SequenceService


class RemisionService:
    def __init__(self, db: Session):
        self.db = db

    def _base_query(self, user_id: UUID):
        return self.db.query(Remision).filter(Remision.user_id == user_id)

    def create_remision(self, remision_data: RemisionCreate, user_id: UUID) -> Remision:
        """Crear remisión con número REM-XXXX consecutivo por usuario"""
        cliente_id, cliente_nombre = ClienteService(self.db).resolve_snapshot(
            user_id, remision_data.cliente_id, clean_optional_text(remision_data.cliente_nombre)
        )

        def build(numero: str) -> Remision:
            return Remision(
                numero=numero,
                cliente_id=cliente_id,
                cliente_nombre=cliente_nombre,
                fecha=remision_data.fecha or utcnow(),
                direccion_entrega=remision_data.direccion_entrega,
                estado=remision_data.estado.value,
                items=items_to_json(remision_data.items),
                user_id=user_id,
            )

        return SequenceService(self.db).create_numbered(user_id, DocumentKind.REMISION, Remision, build)

    def get_remisiones(self, user_id: UUID) -> List[Remision]:
        return self._base_query(user_id).order_by(desc(Remision.fecha), desc(Remision.numero)).all()

    def search_remisiones(self, user_id: UUID, q: Optional[str], limit: int) -> List[Remision]:
        """Búsqueda por número o nombre del cliente"""
        query = self._base_query(user_id)
        condition = contains_any([Remision.numero, Remision.cliente_nombre], q)
        if condition is not None:
            query = query.filter(condition)
        return query.order_by(desc(Remision.fecha)).limit(limit).all()
