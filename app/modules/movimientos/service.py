import logging
from decimal import Decimal
from typing import List
from uuid import UUID

from sqlalchemy import desc, func
from sqlalchemy.orm import Session

from app.common.mixins import utcnow
from app.modules.movimientos.models import Movimiento, TipoMovimiento
from app.modules.movimientos.schemas import MovimientoCreate, ResumenOut

logger = logging.getLogger(__name__)


class MovimientoService:
    def __init__(self, db: Session):
        self.db = db

    def create_movimiento(self, movimiento_data: MovimientoCreate, user_id: UUID) -> Movimiento:
        movimiento = Movimiento(
            descripcion=movimiento_data.descripcion,
            monto=movimiento_data.monto,
            tipo=movimiento_data.tipo.value,
            categoria=movimiento_data.categoria,
            fecha=movimiento_data.fecha or utcnow(),
            user_id=user_id,
        )
        self.db.add(movimiento)
        self.db.commit()
        self.db.refresh(movimiento)

        logger.info(f"Created movimiento {movimiento.id} ({movimiento.tipo} {movimiento.monto}) for user {user_id}")
        return movimiento

    def get_movimientos(self, user_id: UUID) -> List[Movimiento]:
        """Movimientos del usuario, más recientes primero"""
        return (
            self.db.query(Movimiento)
            .filter(Movimiento.user_id == user_id)
            .order_by(desc(Movimiento.fecha))
            .all()
        )

    def get_resumen(self, user_id: UUID) -> ResumenOut:
        """Totales de ingresos y gastos y el saldo resultante"""
        rows = (
            self.db.query(Movimiento.tipo, func.coalesce(func.sum(Movimiento.monto), 0))
            .filter(Movimiento.user_id == user_id)
            .group_by(Movimiento.tipo)
            .all()
        )
        totals = {tipo: Decimal(str(total)) for tipo, total in rows}

        ingresos = totals.get(TipoMovimiento.INGRESO.value, Decimal("0"))
        gastos = sum(
            (total for tipo, total in totals.items() if tipo != TipoMovimiento.INGRESO.value),
            Decimal("0"),
        )

        return ResumenOut(saldo=ingresos - gastos, ingresos=ingresos, gastos=gastos)
