"""
Numeración secuencial de documentos

Cada (usuario, tipo) tiene una fila en document_sequences. El número se
obtiene con un UPDATE atómico `current_number = current_number + 1` dentro
de la transacción que crea el documento: el lock de fila serializa a los
creadores concurrentes y un rollback devuelve el número.
"""
import logging
from typing import Callable, Type, TypeVar
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import update, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.modules.sequences.models import DocumentSequence, DocumentKind, DOCUMENT_PREFIXES

logger = logging.getLogger(__name__)

MAX_CREATE_ATTEMPTS = 3

T = TypeVar("T")


def format_number(prefix: str, number: int) -> str:
    """FAC + 7 -> FAC-0007"""
    return f"{prefix}-{number:04d}"


class SequenceService:
    def __init__(self, db: Session):
        self.db = db

    def _find_sequence(self, user_id: UUID, kind: DocumentKind):
        return self.db.query(DocumentSequence).filter(
            DocumentSequence.user_id == user_id,
            DocumentSequence.kind == kind.value
        ).first()

    def _ensure_sequence(self, user_id: UUID, kind: DocumentKind, model) -> DocumentSequence:
        """
        Buscar o crear la secuencia. Al crearla se siembra con el número de
        documentos que el usuario ya tiene, para continuar la numeración.
        Si otro proceso la crea al mismo tiempo el flush lanza IntegrityError.
        """
        sequence = self._find_sequence(user_id, kind)

        if not sequence:
            existing = self.db.query(func.count(model.id)).filter(model.user_id == user_id).scalar() or 0
            sequence = DocumentSequence(
                user_id=user_id,
                kind=kind.value,
                prefix=DOCUMENT_PREFIXES[kind],
                current_number=existing
            )
            self.db.add(sequence)
            self.db.flush()
            logger.info(f"Created {kind.value} sequence for user {user_id} starting at {existing}")

        return sequence

    def next_number(self, user_id: UUID, kind: DocumentKind, model) -> str:
        """Reservar el siguiente número del tipo `kind` para el usuario."""
        sequence = self._ensure_sequence(user_id, kind, model)

        self.db.execute(
            update(DocumentSequence)
            .where(DocumentSequence.id == sequence.id)
            .values(current_number=DocumentSequence.current_number + 1)
        )
        current = self.db.query(DocumentSequence.current_number).filter(
            DocumentSequence.id == sequence.id
        ).scalar()

        return format_number(sequence.prefix, current)

    def create_numbered(
        self,
        user_id: UUID,
        kind: DocumentKind,
        model: Type[T],
        build: Callable[[str], T],
    ) -> T:
        """
        Crear un documento numerado.

        `build(numero)` construye la instancia sin persistir. Si la base de
        datos rechaza el insert por unicidad el número se marca como usado y
        se reintenta con el siguiente. Si lo que choca es la creación de la
        secuencia (primer documento de dos requests simultáneos) se reintenta
        leyendo la fila que creó el otro.

        Raises:
            HTTPException 400: si tras los reintentos el número sigue en conflicto
        """
        for attempt in range(1, MAX_CREATE_ATTEMPTS + 1):
            numero = None
            try:
                numero = self.next_number(user_id, kind, model)
                document = build(numero)
                self.db.add(document)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                if numero is None:
                    logger.warning(
                        f"{kind.value} sequence for user {user_id} created concurrently "
                        f"(attempt {attempt}/{MAX_CREATE_ATTEMPTS})"
                    )
                    continue
                logger.warning(
                    f"Number conflict creating {kind.value} {numero} for user {user_id} "
                    f"(attempt {attempt}/{MAX_CREATE_ATTEMPTS}): {e.orig}"
                )
                # El rollback devolvió el número; se descarta para no repetirlo
                self.next_number(user_id, kind, model)
                self.db.commit()
                continue

            self.db.refresh(document)
            logger.info(f"Created {kind.value} {numero} for user {user_id}")
            return document

        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Error creando {kind.value}: número de documento en conflicto"
        )
