from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from app.core.config import settings
import logging

logger = logging.getLogger(__name__)


def _engine_options() -> dict:
    """Opciones del pool según el motor configurado."""
    if settings.is_sqlite:
        options = {"connect_args": {"check_same_thread": False}, "echo": settings.DEBUG}
        if settings.database_url in ("sqlite://", "sqlite:///:memory:"):
            # Una sola conexión compartida para que la base en memoria sobreviva
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
        "echo": settings.DEBUG,
    }


# Engine único por proceso
engine = create_engine(settings.database_url, **_engine_options())

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Genera una sesión de base de datos por request."""
    db = SessionLocal()
    try:
        yield db
    except SQLAlchemyError as e:
        logger.error(f"Database error: {e}")
        db.rollback()
        raise
    finally:
        db.close()


def init_db():
    """Crear las tablas que aún no existen."""
    import app.modules.auth.models  # noqa: F401
    import app.modules.clientes.models  # noqa: F401
    import app.modules.facturas.models  # noqa: F401
    import app.modules.cotizaciones.models  # noqa: F401
    import app.modules.remisiones.models  # noqa: F401
    import app.modules.movimientos.models  # noqa: F401
    import app.modules.sequences.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database tables ready")


def dispose_db():
    """Cerrar las conexiones del pool al apagar el proceso."""
    engine.dispose()
