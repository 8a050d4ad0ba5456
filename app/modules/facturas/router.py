from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from uuid import UUID
from datetime import date

from app.core.config import settings
from app.dependencies.dbDependecies import db_dependency
from app.dependencies.userDependencies import user_dependency
from app.modules.facturas.service import FacturaService
from app.modules.facturas.schemas import FacturaCreate, FacturaOut, FacturaDetail, FacturaFilters

router = APIRouter(tags=["Facturas"])


def get_factura_filters(
    estado: Optional[str] = Query(None, description="pendiente, pagada, anulada o todos"),
    fecha_inicio: Optional[date] = Query(None, alias="fechaInicio", description="Fecha inicial (YYYY-MM-DD)"),
    fecha_fin: Optional[date] = Query(None, alias="fechaFin", description="Fecha final (YYYY-MM-DD)"),
    search: Optional[str] = Query(None, description="Número o nombre del cliente"),
) -> FacturaFilters:
    return FacturaFilters(estado=estado, fecha_inicio=fecha_inicio, fecha_fin=fecha_fin, search=search)


@router.get("/facturas", response_model=List[FacturaOut])
def list_facturas(db: db_dependency, current_user: user_dependency):
    """
    Listar facturas, más recientes primero.
    Cada factura incluye id, nombre y NIT de su cliente.
    """
    return FacturaService(db).get_facturas(current_user.user_id)


@router.post("/facturas", response_model=FacturaOut, status_code=status.HTTP_201_CREATED)
def create_factura(factura_data: FacturaCreate, db: db_dependency, current_user: user_dependency):
    """
    Crear una nueva factura.

    El número (FAC-0001, FAC-0002, ...) lo asigna el servidor.
    """
    return FacturaService(db).create_factura(factura_data, current_user.user_id)


@router.get("/facturas/search", response_model=List[FacturaOut])
def search_facturas(
    db: db_dependency,
    current_user: user_dependency,
    q: Optional[str] = Query(None, description="Número o nombre del cliente"),
):
    return FacturaService(db).search_facturas(current_user.user_id, q, settings.KIND_SEARCH_LIMIT)


@router.get("/facturas/{factura_id}", response_model=FacturaDetail)
def get_factura(factura_id: UUID, db: db_dependency, current_user: user_dependency):
    """
    Obtener detalles completos de una factura
    """
    return FacturaService(db).get_factura_by_id(factura_id, current_user.user_id)


@router.get("/facturas-app", response_model=List[FacturaOut])
def list_facturas_app(
    db: db_dependency,
    current_user: user_dependency,
    filters: FacturaFilters = Depends(get_factura_filters),
):
    """
    Listar facturas con filtros (app móvil)

    Permite filtrar por estado, rango de fechas y texto libre.
    """
    return FacturaService(db).filter_facturas(current_user.user_id, filters)
