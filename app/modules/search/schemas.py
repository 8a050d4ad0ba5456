"""
Resultados de la búsqueda global

Cada resultado lleva un discriminador `tipo`; el consumidor decide qué
campos mostrar según ese valor.
"""
from pydantic import BaseModel, Field
from typing import Annotated, Optional, List, Literal, Union
from uuid import UUID
from datetime import datetime


class FacturaResult(BaseModel):
    tipo: Literal["factura"] = "factura"
    id: UUID
    numero: str
    cliente: str
    monto: float
    fecha: datetime


class ClienteResult(BaseModel):
    tipo: Literal["cliente"] = "cliente"
    id: UUID
    nombre: str
    nit: str
    telefono: Optional[str] = None
    email: Optional[str] = None


class CotizacionResult(BaseModel):
    tipo: Literal["cotizacion"] = "cotizacion"
    id: UUID
    numero: str
    cliente: str
    monto: float
    fecha: datetime


class RemisionResult(BaseModel):
    tipo: Literal["remision"] = "remision"
    id: UUID
    numero: str
    cliente: str
    fecha: datetime


SearchResult = Annotated[
    Union[FacturaResult, ClienteResult, CotizacionResult, RemisionResult],
    Field(discriminator="tipo"),
]

SearchResults = List[SearchResult]
