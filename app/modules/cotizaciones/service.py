from typing import List, Optional
from uuid import UUID

from sqlalchemy import desc
from sqlalchemy.orm import Session

from app.common.filters import contains_any
from app.common.mixins import utcnow
from app.common.schemas import items_to_json
from app.modules.clientes.service import ClienteService
from app.modules.cotizaciones.models import Cotizacion
from app.modules.cotizaciones.schemas import CotizacionCreate
from app.modules.sequences.models import DocumentKind
from app.modules.sequences.service import SequenceService


class CotizacionService:
    def __init__(self, db: Session):
        self.db = db

    def _base_query(self, user_id: UUID):
        return self.db.query(Cotizacion).filter(Cotizacion.user_id == user_id)

    def create_cotizacion(self, cotizacion_data: CotizacionCreate, user_id: UUID) -> Cotizacion:
        """Crear cotización con número COT-XXXX consecutivo por usuario"""
        cliente_id, cliente_nombre = ClienteService(self.db).resolve_snapshot(
            user_id, cotizacion_data.cliente_id, cotizacion_data.cliente_nombre
        )

        def build(numero: str) -> Cotizacion:
            return Cotizacion(
                numero=numero,
                cliente_id=cliente_id,
                cliente_nombre=cliente_nombre,
                fecha=cotizacion_data.fecha or utcnow(),
                fecha_vencimiento=cotizacion_data.fecha_vencimiento,
                subtotal=cotizacion_data.subtotal,
                iva=cotizacion_data.iva,
                total=cotizacion_data.total,
                items=items_to_json(cotizacion_data.items),
                user_id=user_id,
            )

        return SequenceService(self.db).create_numbered(user_id, DocumentKind.COTIZACION, Cotizacion, build)

    def get_cotizaciones(self, user_id: UUID) -> List[Cotizacion]:
        return self._base_query(user_id).order_by(desc(Cotizacion.fecha), desc(Cotizacion.numero)).all()

    def search_cotizaciones(self, user_id: UUID, q: Optional[str], limit: int) -> List[Cotizacion]:
        """Búsqueda por número o nombre del cliente"""
        query = self._base_query(user_id)
        condition = contains_any([Cotizacion.numero, Cotizacion.cliente_nombre], q)
        if condition is not None:
            query = query.filter(condition)
        return query.order_by(desc(Cotizacion.fecha)).limit(limit).all()
