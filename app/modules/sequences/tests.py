"""
Tests de la numeración secuencial de documentos
"""

from uuid import uuid4

import pytest
from fastapi import HTTPException

from app.modules.auth.models import User
from app.modules.clientes.models import Cliente
from app.modules.facturas.models import Factura
from app.modules.cotizaciones.models import Cotizacion
from app.modules.sequences.models import DocumentKind, DocumentSequence
from app.modules.sequences.service import SequenceService, format_number, MAX_CREATE_ATTEMPTS


def make_user(db, username="seq_user"):
    user = User(username=username, password="x", role="user")
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def make_cliente(db, user):
    cliente = Cliente(nombre="Cliente Secuencia", nit=f"NIT-{uuid4().hex[:8]}", tipo="natural", user_id=user.id)
    db.add(cliente)
    db.commit()
    db.refresh(cliente)
    return cliente


def factura_builder(user, cliente, numero_fijo=None):
    def build(numero):
        return Factura(
            numero=numero_fijo or numero,
            cliente_id=cliente.id,
            cliente_nombre=cliente.nombre,
            subtotal=100,
            iva=19,
            total=119,
            estado="pendiente",
            items=[],
            user_id=user.id,
        )
    return build


class TestFormatNumber:

    @pytest.mark.parametrize("prefix,number,expected", [
        ("FAC", 1, "FAC-0001"),
        ("COT", 42, "COT-0042"),
        ("REM", 9999, "REM-9999"),
        ("FAC", 12345, "FAC-12345"),
    ])
    def test_format(self, prefix, number, expected):
        assert format_number(prefix, number) == expected


class TestSequenceService:

    def test_consecutive_numbers_without_gaps(self, db_session):
        user = make_user(db_session)
        cliente = make_cliente(db_session, user)
        service = SequenceService(db_session)

        numeros = [
            service.create_numbered(user.id, DocumentKind.FACTURA, Factura, factura_builder(user, cliente)).numero
            for _ in range(5)
        ]
        assert numeros == ["FAC-0001", "FAC-0002", "FAC-0003", "FAC-0004", "FAC-0005"]

    def test_sequences_are_independent_per_user(self, db_session):
        ana = make_user(db_session, "ana")
        beto = make_user(db_session, "beto")
        service = SequenceService(db_session)

        assert service.next_number(ana.id, DocumentKind.FACTURA, Factura) == "FAC-0001"
        assert service.next_number(ana.id, DocumentKind.FACTURA, Factura) == "FAC-0002"
        assert service.next_number(beto.id, DocumentKind.FACTURA, Factura) == "FAC-0001"

    def test_sequences_are_independent_per_kind(self, db_session):
        user = make_user(db_session)
        service = SequenceService(db_session)

        assert service.next_number(user.id, DocumentKind.FACTURA, Factura) == "FAC-0001"
        assert service.next_number(user.id, DocumentKind.COTIZACION, Cotizacion) == "COT-0001"
        assert service.next_number(user.id, DocumentKind.FACTURA, Factura) == "FAC-0002"

    def test_sequence_seeded_from_existing_documents(self, db_session):
        """Documentos previos a la secuencia se cuentan al crearla"""
        user = make_user(db_session)
        cliente = make_cliente(db_session, user)
        for numero in ("FAC-0001", "FAC-0002", "FAC-0003"):
            db_session.add(factura_builder(user, cliente)(numero))
        db_session.commit()

        service = SequenceService(db_session)
        assert service.next_number(user.id, DocumentKind.FACTURA, Factura) == "FAC-0004"

        sequence = db_session.query(DocumentSequence).filter(DocumentSequence.user_id == user.id).one()
        assert sequence.prefix == "FAC"
        assert sequence.current_number == 4

    def test_rollback_returns_the_number(self, db_session):
        user = make_user(db_session)
        service = SequenceService(db_session)
        service.next_number(user.id, DocumentKind.FACTURA, Factura)
        db_session.commit()

        service.next_number(user.id, DocumentKind.FACTURA, Factura)
        db_session.rollback()

        assert service.next_number(user.id, DocumentKind.FACTURA, Factura) == "FAC-0002"

    def test_conflict_retries_with_next_number(self, db_session):
        """Un número ya ocupado (p.ej. por otro proceso) se salta"""
        user = make_user(db_session)
        cliente = make_cliente(db_session, user)
        service = SequenceService(db_session)

        service.create_numbered(user.id, DocumentKind.FACTURA, Factura, factura_builder(user, cliente))
        # Ocupar FAC-0002 fuera de la secuencia
        db_session.add(factura_builder(user, cliente)("FAC-0002"))
        db_session.commit()

        factura = service.create_numbered(user.id, DocumentKind.FACTURA, Factura, factura_builder(user, cliente))
        assert factura.numero == "FAC-0003"

    def test_persistent_conflict_raises_400(self, db_session):
        user = make_user(db_session)
        cliente = make_cliente(db_session, user)
        service = SequenceService(db_session)
        db_session.add(factura_builder(user, cliente)("FAC-0001"))
        db_session.commit()

        with pytest.raises(HTTPException) as exc_info:
            service.create_numbered(
                user.id, DocumentKind.FACTURA, Factura, factura_builder(user, cliente, numero_fijo="FAC-0001")
            )
        assert exc_info.value.status_code == 400
        assert db_session.query(Factura).count() == 1
        assert MAX_CREATE_ATTEMPTS == 3

    def test_sequence_created_concurrently_is_retried(self, db_session, monkeypatch):
        """Otro request crea la secuencia entre nuestra lectura y nuestro insert"""
        user = make_user(db_session)
        cliente = make_cliente(db_session, user)
        db_session.add(DocumentSequence(user_id=user.id, kind="factura", prefix="FAC", current_number=0))
        db_session.commit()

        service = SequenceService(db_session)
        original_find = service._find_sequence
        calls = []

        def stale_find(user_id, kind):
            calls.append(kind)
            if len(calls) == 1:
                return None
            return original_find(user_id, kind)

        monkeypatch.setattr(service, "_find_sequence", stale_find)

        factura = service.create_numbered(user.id, DocumentKind.FACTURA, Factura, factura_builder(user, cliente))
        assert factura.numero == "FAC-0001"
        assert len(calls) == 2
        assert db_session.query(DocumentSequence).filter(DocumentSequence.user_id == user.id).count() == 1
