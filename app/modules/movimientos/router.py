from fastapi import APIRouter, status
from typing import List

from app.dependencies.dbDependecies import db_dependency
from app.dependencies.userDependencies import user_dependency
from app.modules.movimientos.service import MovimientoService
from app.modules.movimientos.schemas import MovimientoCreate, MovimientoOut, ResumenOut

router = APIRouter(tags=["Movimientos"])


@router.get("/movimientos", response_model=List[MovimientoOut])
def list_movimientos(db: db_dependency, current_user: user_dependency):
    """Listar movimientos de caja, más recientes primero"""
    return MovimientoService(db).get_movimientos(current_user.user_id)


@router.post("/movimientos", response_model=MovimientoOut, status_code=status.HTTP_201_CREATED)
def create_movimiento(movimiento_data: MovimientoCreate, db: db_dependency, current_user: user_dependency):
    """Registrar un ingreso o un gasto"""
    return MovimientoService(db).create_movimiento(movimiento_data, current_user.user_id)


@router.get("/resumen", response_model=ResumenOut)
def get_resumen(db: db_dependency, current_user: user_dependency):
    """
    Resumen de caja: {saldo, ingresos, gastos}
    """
    return MovimientoService(db).get_resumen(current_user.user_id)
