from __future__ import annotations
from functools import wraps
import logging

from sqlalchemy.exc import SQLAlchemyError

from services.errors import DomainError, StorageError

logger = logging.getLogger(__name__)


def service_operation(name: str):
    """
    Wrap a service method as one unit of work.
    - Domain errors discard anything staged and propagate unchanged.
    - SQLAlchemy errors discard anything staged and surface as StorageError(name),
      with the original exception chained.
    - Anything else discards anything staged and propagates unchanged.
    The wrapped method's instance must expose `_storage` (a DBStorage).
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(self, *args, **kwargs):
            try:
                return fn(self, *args, **kwargs)
            except DomainError as err:
                self._storage.rollback()
                logger.warning("%s rejected: %s", name, err.message)
                raise
            except SQLAlchemyError as err:
                self._storage.rollback()
                logger.exception("%s failed in storage", name)
                raise StorageError(name) from err
            except Exception:
                self._storage.rollback()
                raise

        return wrapper

    return decorator
