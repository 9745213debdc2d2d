"""
Database utilities and transaction management.
"""

import contextlib
from typing import Generator

from django.db import transaction


@contextlib.contextmanager
def scoped_transaction(using: str = None) -> Generator[None, None, None]:
    """
    Transaction boundary for one bulk engine operation.

    Every row update issued inside the block commits or rolls back
    together. Adapters open it inside their synchronous ORM code,
    which ``sync_to_async`` then runs on a single connection.

    Usage:
        with scoped_transaction():
            # Database operations
            pass
    """
    with transaction.atomic(using=using):
        yield
