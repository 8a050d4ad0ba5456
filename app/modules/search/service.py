"""
Búsqueda global sobre facturas, clientes, cotizaciones y remisiones
"""
import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.config import settings
from app.modules.clientes.service import ClienteService
from app.modules.cotizaciones.service import CotizacionService
from app.modules.facturas.service import FacturaService
from app.modules.remisiones.service import RemisionService
from app.modules.search.schemas import (
    FacturaResult, ClienteResult, CotizacionResult, RemisionResult
)

logger = logging.getLogger(__name__)


class SearchService:
    def __init__(self, db: Session):
        self.db = db

    def global_search(
        self,
        user_id: UUID,
        q: Optional[str],
        min_length: int = settings.GLOBAL_SEARCH_MIN_LENGTH,
        limit: int = settings.GLOBAL_SEARCH_LIMIT,
    ) -> List:
        """
        Buscar `q` en los cuatro tipos de registro del usuario.

        Con menos de `min_length` caracteres no se consulta la base de datos.
        Devuelve hasta `limit` resultados por tipo, en orden fijo:
        facturas, clientes, cotizaciones, remisiones.
        """
        if not q or len(q) < min_length:
            return []

        results = []

        for factura in FacturaService(self.db).search_facturas(user_id, q, limit):
            results.append(FacturaResult(
                id=factura.id,
                numero=factura.numero,
                cliente=factura.cliente_nombre,
                monto=factura.total,
                fecha=factura.fecha,
            ))

        for cliente in ClienteService(self.db).search_clientes(user_id, q, limit):
            results.append(ClienteResult(
                id=cliente.id,
                nombre=cliente.nombre,
                nit=cliente.nit,
                telefono=cliente.telefono,
                email=cliente.email,
            ))

        for cotizacion in CotizacionService(self.db).search_cotizaciones(user_id, q, limit):
            results.append(CotizacionResult(
                id=cotizacion.id,
                numero=cotizacion.numero,
                cliente=cotizacion.cliente_nombre,
                monto=cotizacion.total,
                fecha=cotizacion.fecha,
            ))

        for remision in RemisionService(self.db).search_remisiones(user_id, q, limit):
            results.append(RemisionResult(
                id=remision.id,
                numero=remision.numero,
                cliente=remision.cliente_nombre,
                fecha=remision.fecha,
            ))

        logger.debug(f"Global search '{q}' for user {user_id}: {len(results)} results")
        return results
