"""
Router para el módulo de Clientes
"""

from fastapi import APIRouter, Query, status
from typing import List, Optional
from uuid import UUID

from app.core.config import settings
from app.dependencies.dbDependecies import db_dependency
from app.dependencies.userDependencies import user_dependency
from app.modules.clientes.service import ClienteService
from app.modules.clientes.schemas import ClienteCreate, ClienteOut

router = APIRouter(
    prefix="/clientes",
    tags=["Clientes"],
    responses={404: {"description": "Not found"}}
)


@router.get("", response_model=List[ClienteOut])
def get_clientes(db: db_dependency, current_user: user_dependency):
    """Listar clientes ordenados por nombre"""
    return ClienteService(db).get_clientes(current_user.user_id)


@router.post("", response_model=ClienteOut, status_code=status.HTTP_201_CREATED)
def create_cliente(cliente_data: ClienteCreate, db: db_dependency, current_user: user_dependency):
    """
    Crear un nuevo cliente

    - **nombre**: Nombre o razón social (requerido)
    - **nit**: Documento, único entre los clientes del usuario
    - **tipo**: natural o juridico
    """
    return ClienteService(db).create_cliente(cliente_data, current_user.user_id)


@router.get("/search", response_model=List[ClienteOut])
def search_clientes(
    db: db_dependency,
    current_user: user_dependency,
    q: Optional[str] = Query(None, description="Búsqueda por nombre, NIT o email"),
):
    return ClienteService(db).search_clientes(current_user.user_id, q, settings.KIND_SEARCH_LIMIT)


@router.get("/{cliente_id}", response_model=ClienteOut)
def get_cliente(cliente_id: UUID, db: db_dependency, current_user: user_dependency):
    """Obtener un cliente específico por ID"""
    return ClienteService(db).get_cliente_by_id(cliente_id, current_user.user_id)
