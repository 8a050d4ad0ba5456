from fastapi import APIRouter, Query, status
from typing import List, Optional

from app.core.config import settings
from app.dependencies.dbDependecies import db_dependency
from app.dependencies.userDependencies import user_dependency
from app.modules.remisiones.service import RemisionService
from app.modules.remisiones.schemas import RemisionCreate, RemisionOut

router = APIRouter(prefix="/remisiones", tags=["Remisiones"])


@router.get("", response_model=List[RemisionOut])
def list_remisiones(db: db_dependency, current_user: user_dependency):
    return RemisionService(db).get_remisiones(current_user.user_id)


@router.post("", response_model=RemisionOut, status_code=status.HTTP_201_CREATED)
def create_remision(remision_data: RemisionCreate, db: db_dependency, current_user: user_dependency):
    """
    Crear una remisión. El número (REM-0001, ...) lo asigna el servidor.
    """
    return RemisionService(db).create_remision(remision_data, current_user.user_id)


@router.get("/search", response_model=List[RemisionOut])
def search_remisiones(
    db: db_dependency,
    current_user: user_dependency,
    q: Optional[str] = Query(None, description="Número o nombre del cliente"),
):
    return RemisionService(db).search_remisiones(current_user.user_id, q, settings.KIND_SEARCH_LIMIT)
