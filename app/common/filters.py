"""
Helpers para construir filtros de búsqueda
"""
from typing import Optional

from sqlalchemy import or_


LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escapa los comodines de LIKE para que el texto se busque literal."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def contains_any(columns, term: Optional[str]):
    """
    Condición OR de subcadena, sin distinguir mayúsculas, sobre varias columnas.

    Con un término vacío o None devuelve None (sin filtro).
    """
    if not term:
        return None
    pattern = f"%{escape_like(term)}%"
    return or_(*[column.ilike(pattern, escape=LIKE_ESCAPE) for column in columns])
