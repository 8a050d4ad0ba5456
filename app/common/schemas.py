"""
Esquema base compartido

Los atributos en Python son snake_case; en el JSON viajan en camelCase
(`clienteId`, `fechaVencimiento`, ...) que es lo que consumen las apps cliente.
"""
from typing import List, Optional
from pydantic import BaseModel, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True


class ItemDocumento(CamelModel):
    """Ítem de factura, cotización o remisión (se guarda embebido en el documento)"""
    descripcion: str = Field(..., min_length=1, max_length=500)
    cantidad: float = Field(..., gt=0, description="Cantidad debe ser mayor a 0")
    precio_unitario: float = Field(..., ge=0, description="Precio unitario")
    total: Optional[float] = Field(None, ge=0, description="Por defecto cantidad x precio unitario")

    @model_validator(mode='after')
    def default_total(self):
        if self.total is None:
            self.total = round(self.cantidad * self.precio_unitario, 2)
        return self


def items_to_json(items: List[ItemDocumento]) -> List[dict]:
    """Serializa los ítems para la columna JSON, con las claves del API."""
    return [item.model_dump(by_alias=True) for item in items]
