from fastapi import APIRouter, Query
from typing import Optional

from app.dependencies.dbDependecies import db_dependency
from app.dependencies.userDependencies import user_dependency
from app.modules.search.service import SearchService
from app.modules.search.schemas import SearchResults

router = APIRouter(prefix="/search", tags=["Search"])


@router.get("/global", response_model=SearchResults)
def global_search(
    db: db_dependency,
    current_user: user_dependency,
    q: Optional[str] = Query(None, description="Texto a buscar (mínimo 2 caracteres)"),
):
    """
    Búsqueda global

    Hasta 5 resultados por tipo, etiquetados con `tipo`:
    factura, cliente, cotizacion, remision.
    """
    return SearchService(db).global_search(current_user.user_id, q)
