from datetime import datetime, time, timedelta
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import desc
from sqlalchemy.orm import Session, selectinload

from app.common.filters import contains_any
from app.common.mixins import utcnow
from app.common.schemas import items_to_json
from app.modules.clientes.service import ClienteService
from app.modules.facturas.models import Factura
from app.modules.facturas.schemas import FacturaCreate, FacturaFilters
from app.modules.sequences.models import DocumentKind
from app.modules.sequences.service import SequenceService


ESTADO_TODOS = "todos"


class FacturaService:
    def __init__(self, db: Session):
        self.db = db

    def _base_query(self, user_id: UUID):
        return self.db.query(Factura).filter(Factura.user_id == user_id)

    def create_factura(self, factura_data: FacturaCreate, user_id: UUID) -> Factura:
        """Crear factura con número FAC-XXXX consecutivo por usuario"""
        cliente_id, cliente_nombre = ClienteService(self.db).resolve_snapshot(
            user_id, factura_data.cliente_id, factura_data.cliente_nombre
        )

        def build(numero: str) -> Factura:
            return Factura(
                numero=numero,
                cliente_id=cliente_id,
                cliente_nombre=cliente_nombre,
                fecha=factura_data.fecha or utcnow(),
                fecha_vencimiento=factura_data.fecha_vencimiento,
                subtotal=factura_data.subtotal,
                iva=factura_data.iva,
                total=factura_data.total,
                estado=factura_data.estado.value,
                items=items_to_json(factura_data.items),
                user_id=user_id,
            )

        return SequenceService(self.db).create_numbered(user_id, DocumentKind.FACTURA, Factura, build)

    def get_facturas(self, user_id: UUID) -> List[Factura]:
        """Facturas del usuario, más recientes primero, con el cliente embebido"""
        return (
            self._base_query(user_id)
            .options(selectinload(Factura.cliente))
            .order_by(desc(Factura.fecha), desc(Factura.numero))
            .all()
        )

    def get_factura_by_id(self, factura_id: UUID, user_id: UUID) -> Factura:
        factura = (
            self._base_query(user_id)
            .options(selectinload(Factura.cliente))
            .filter(Factura.id == factura_id)
            .first()
        )
        if not factura:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Factura no encontrada"
            )
        return factura

    def search_facturas(self, user_id: UUID, q: Optional[str], limit: int) -> List[Factura]:
        """Búsqueda por número o nombre del cliente"""
        query = self._base_query(user_id).options(selectinload(Factura.cliente))
        condition = contains_any([Factura.numero, Factura.cliente_nombre], q)
        if condition is not None:
            query = query.filter(condition)
        return query.order_by(desc(Factura.fecha)).limit(limit).all()

    def filter_facturas(self, user_id: UUID, filters: FacturaFilters) -> List[Factura]:
        """
        Listado filtrado para la app móvil. Los filtros presentes se combinan con AND:

        - estado: se ignora si viene vacío o 'todos'
        - fecha_inicio / fecha_fin: solo si vienen ambas; fecha_fin incluye el día completo
        - search: subcadena en número o nombre del cliente
        """
        query = self._base_query(user_id).options(selectinload(Factura.cliente))

        if filters.estado and filters.estado != ESTADO_TODOS:
            query = query.filter(Factura.estado == filters.estado)

        if filters.fecha_inicio and filters.fecha_fin:
            start = datetime.combine(filters.fecha_inicio, time.min)
            end = datetime.combine(filters.fecha_fin + timedelta(days=1), time.min)
            query = query.filter(Factura.fecha >= start, Factura.fecha < end)

        condition = contains_any([Factura.numero, Factura.cliente_nombre], filters.search)
        if condition is not None:
            query = query.filter(condition)

        return query.order_by(desc(Factura.fecha), desc(Factura.numero)).all()
