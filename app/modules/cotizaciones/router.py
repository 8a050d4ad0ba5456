from fastapi import APIRouter, Query, status
from typing import List, Optional

from app.core.config import settings
from app.dependencies.dbDependecies import db_dependency
from app.dependencies.userDependencies import user_dependency
from app.modules.cotizaciones.service import CotizacionService
from app.modules.cotizaciones.schemas import CotizacionCreate, CotizacionOut

router = APIRouter(prefix="/cotizaciones", tags=["Cotizaciones"])


@router.get("", response_model=List[CotizacionOut])
def list_cotizaciones(db: db_dependency, current_user: user_dependency):
    return CotizacionService(db).get_cotizaciones(current_user.user_id)


@router.post("", response_model=CotizacionOut, status_code=status.HTTP_201_CREATED)
def create_cotizacion(cotizacion_data: CotizacionCreate, db: db_dependency, current_user: user_dependency):
    """
    Crear una cotización. El número (COT-0001, ...) lo asigna el servidor.
    """
    return CotizacionService(db).create_cotizacion(cotizacion_data, current_user.user_id)


@router.get("/search", response_model=List[CotizacionOut])
def search_cotizaciones(
    db: db_dependency,
    current_user: user_dependency,
    q: Optional[str] = Query(None, description="Número o nombre del cliente"),
):
    return CotizacionService(db).search_cotizaciones(current_user.user_id, q, settings.KIND_SEARCH_LIMIT)
