# -*- coding: utf-8 -*-
"""
GroupIdAllocator - IDs de grupo para apps com múltiplas localizações.

Semente: valor do lema, senão da primeira entrada com valor, senão "g".

    "Arma Virumque"  ->  "arma-virumque-3"
                                      └── contador do documento

O contador vive no ParseContext: único por documento, nunca global.
"""

from typing import List

from .apparatus_models import ApparatusEntry
from .context import ParseContext

DEFAULT_SEED = "g"


def slugify_seed(seed: str) -> str:
    """Minúsculas, só letras/dígitos; espaços viram um único hífen."""
    chars: List[str] = []
    for c in seed:
        if c.isalnum():
            chars.append(c.lower())
        elif c.isspace() and chars and chars[-1] != "-":
            chars.append("-")
    return "".join(chars).rstrip("-")


class GroupIdAllocator:
    """Aloca IDs de grupo únicos dentro de um documento."""

    def __init__(self, context: ParseContext):
        self.context = context

    @staticmethod
    def pick_seed(entries: List[ApparatusEntry]) -> str:
        accepted = next((e for e in entries if e.is_accepted), None)
        if accepted is not None and accepted.value is not None:
            return accepted.value
        first = next((e for e in entries if e.value is not None), None)
        return first.value if first is not None else DEFAULT_SEED

    def allocate(self, entries: List[ApparatusEntry]) -> str:
        prefix = slugify_seed(self.pick_seed(entries)) or DEFAULT_SEED
        return f"{prefix}-{self.context.next_group_number()}"

    def assign(self, entries: List[ApparatusEntry]) -> str:
        """Aloca um ID e o atribui a toda entrada com valor."""
        group_id = self.allocate(entries)
        for entry in entries:
            if entry.value is not None:
                entry.group_id = group_id
        return group_id
