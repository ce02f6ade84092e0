"""Translate driver failures into domain StorageError."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

import psycopg

from scopegate.domain.exceptions import StorageError

logger = logging.getLogger(__name__)


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Re-raise psycopg errors as StorageError so they never read as a verdict."""
    try:
        yield
    except psycopg.Error as e:
        logger.error("Storage failure during %s: %s", operation, e)
        raise StorageError(f"{operation} failed") from e
