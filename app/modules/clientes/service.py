"""
Servicios de negocio para el módulo de Clientes
"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError

from app.common.filters import contains_any
from app.modules.clientes.models import Cliente
from app.modules.clientes.schemas import ClienteCreate

logger = logging.getLogger(__name__)

NIT_DUPLICADO = "Ya existe un cliente con este NIT"


class ClienteService:
    """Servicio principal para gestión de clientes"""

    def __init__(self, db: Session):
        self.db = db

    def _base_query(self, user_id: UUID):
        return self.db.query(Cliente).filter(Cliente.user_id == user_id)

    def create_cliente(self, cliente_data: ClienteCreate, user_id: UUID) -> Cliente:
        """
        Crear un nuevo cliente.

        El NIT se valida contra los clientes del mismo usuario; la restricción
        única (user_id, nit) cubre la carrera entre dos creaciones simultáneas.
        """
        if self.find_by_nit(user_id, cliente_data.nit):
            logger.info(f"Duplicate NIT {cliente_data.nit} for user {user_id}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NIT_DUPLICADO)

        cliente = Cliente(
            nombre=cliente_data.nombre,
            nit=cliente_data.nit,
            telefono=cliente_data.telefono,
            email=cliente_data.email,
            direccion=cliente_data.direccion,
            tipo=cliente_data.tipo.value,
            user_id=user_id,
        )
        self.db.add(cliente)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning(f"NIT {cliente_data.nit} inserted concurrently for user {user_id}")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NIT_DUPLICADO)

        self.db.refresh(cliente)
        logger.info(f"Created cliente {cliente.id} (NIT {cliente.nit}) for user {user_id}")
        return cliente

    def get_clientes(self, user_id: UUID) -> List[Cliente]:
        """Clientes del usuario ordenados por nombre"""
        return self._base_query(user_id).order_by(Cliente.nombre.asc()).all()

    def get_cliente_by_id(self, cliente_id: UUID, user_id: UUID) -> Cliente:
        cliente = self.find_cliente(cliente_id, user_id)
        if not cliente:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Cliente no encontrado")
        return cliente

    def find_cliente(self, cliente_id: UUID, user_id: UUID) -> Optional[Cliente]:
        return self._base_query(user_id).filter(Cliente.id == cliente_id).first()

    def find_by_nit(self, user_id: UUID, nit: str) -> Optional[Cliente]:
        return self._base_query(user_id).filter(Cliente.nit == nit).first()

    def search_clientes(self, user_id: UUID, q: Optional[str], limit: int) -> List[Cliente]:
        """Búsqueda por nombre, NIT o email"""
        query = self._base_query(user_id)
        condition = contains_any([Cliente.nombre, Cliente.nit, Cliente.email], q)
        if condition is not None:
            query = query.filter(condition)
        return query.order_by(Cliente.nombre.asc()).limit(limit).all()

    def resolve_snapshot(
        self,
        user_id: UUID,
        cliente_id: Optional[UUID],
        cliente_nombre: Optional[str],
    ) -> tuple[Optional[UUID], str]:
        """
        Validar la referencia a cliente de un documento y resolver el nombre
        que se guarda como copia.

        Raises:
            HTTPException 400: cliente inexistente para el usuario o sin nombre
        """
        if cliente_id is not None:
            cliente = self.find_cliente(cliente_id, user_id)
            if not cliente:
                raise HTTPException(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    detail="El cliente especificado no existe"
                )
            return cliente.id, cliente_nombre or cliente.nombre

        if not cliente_nombre:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Se requiere clienteId o clienteNombre"
            )
        return None, cliente_nombre
