"""
Módulo de sinks (destinos das parts).

Sinks disponíveis:
- PartStore: persistência SQLAlchemy (SQLite/PostgreSQL)
- PartJsonWriter: um arquivo JSON por documento
"""

from .models import ApparatusPartRecord, Base
from .part_store import DEFAULT_DATABASE_URL, PartStore
from .json_writer import PartJsonWriter

__all__ = [
    "ApparatusPartRecord",
    "Base",
    "DEFAULT_DATABASE_URL",
    "PartStore",
    "PartJsonWriter",
]
