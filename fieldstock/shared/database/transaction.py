# fieldstock/shared/database/transaction.py
from contextlib import contextmanager
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from fieldstock.core.exceptions import PersistenceError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session, action: str):
    """
    Unidad atomica: commit al salir sin errores, rollback ante cualquier excepcion.

    Los errores de negocio se propagan tal cual; los de SQLAlchemy se
    convierten en PersistenceError. No hay reintentos.
    """
    try:
        yield db
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"❌ Error de base de datos: {action}")
        raise PersistenceError(f"Error de base de datos: {action}") from e
    except Exception:
        db.rollback()
        raise
