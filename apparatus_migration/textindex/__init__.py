"""
Índice do texto base: word ID -> (item, row, column).
"""

from .index_types import WordLocation, WordLocationIndex
from .index_models import IndexedItem, IndexedRow, IndexedToken, TextIndexDump
from .index_builder import (
    build_dump_from_tei,
    build_index_from_dump,
    build_index_from_tei,
    load_index_dump,
    write_index_dump,
)

__all__ = [
    # Tipos
    "WordLocation",
    "WordLocationIndex",
    # Dump JSON
    "IndexedItem",
    "IndexedRow",
    "IndexedToken",
    "TextIndexDump",
    # Construção
    "build_dump_from_tei",
    "build_index_from_dump",
    "build_index_from_tei",
    "load_index_dump",
    "write_index_dump",
]
