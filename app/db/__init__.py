"""Datenbank-Paket: SQLite State-Management.

Stellt die Database-Klasse und die zugehörigen Exceptions bereit.
"""

from app.db.database import Database
from app.db.exceptions import (
    DatabaseError,
    InvalidStatusTransitionError,
    ModelNotFoundError,
)

__all__ = [
    "Database",
    "DatabaseError",
    "InvalidStatusTransitionError",
    "ModelNotFoundError",
]
