# -*- coding: utf-8 -*-
"""
Índice de localização de palavras do texto base.

Cada word ID aponta para (item_id, y, x):
- y: número da linha (row) dentro do item, a partir de 1
- x: número do token (column) dentro da linha, a partir de 1

O índice é construído uma vez por texto base e é somente leitura
durante o parsing do aparato.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List, Optional


@dataclass(frozen=True)
class WordLocation:
    """Payload de uma consulta ao índice."""

    word_id: str
    item_id: str
    y: int
    x: int
    text: str = ""

    @property
    def point(self) -> str:
        """Localização pontual no formato "Y.X"."""
        return f"{self.y}.{self.x}"

    def __str__(self) -> str:
        return f"{self.word_id}@{self.item_id}:{self.point}"


class WordLocationIndex:
    """
    Mapeamento imutável word ID -> WordLocation.

    Mantém também a ordem de documento dos IDs, usada para expandir
    um intervalo from/to em todas as palavras que ele cobre.
    """

    def __init__(self, locations: Iterable[WordLocation]):
        by_id: Dict[str, WordLocation] = {}
        order: List[str] = []
        for loc in locations:
            if loc.word_id in by_id:
                raise ValueError(f"Word ID duplicado no índice: {loc.word_id}")
            by_id[loc.word_id] = loc
            order.append(loc.word_id)
        self._by_id = MappingProxyType(by_id)
        self._order = tuple(order)
        self._ordinals = MappingProxyType({wid: i for i, wid in enumerate(order)})

    def find(self, word_id: str) -> Optional[WordLocation]:
        """Retorna a localização do word ID, ou None se ausente."""
        return self._by_id.get(word_id)

    def ordinal(self, word_id: str) -> Optional[int]:
        """Posição do word ID na ordem do documento."""
        return self._ordinals.get(word_id)

    def between(self, from_id: str, to_id: str) -> List[WordLocation]:
        """
        Todas as palavras de from_id a to_id (inclusive), em ordem de documento.

        IDs ausentes devolvem lista vazia; ordem invertida é normalizada.
        """
        a = self.ordinal(from_id)
        b = self.ordinal(to_id)
        if a is None or b is None:
            return []
        if a > b:
            a, b = b, a
        return [self._by_id[wid] for wid in self._order[a:b + 1]]

    def item_ids(self) -> List[str]:
        """IDs dos itens, na ordem em que aparecem."""
        seen: Dict[str, None] = {}
        for wid in self._order:
            seen.setdefault(self._by_id[wid].item_id, None)
        return list(seen)

    def __contains__(self, word_id: object) -> bool:
        return word_id in self._by_id

    def __iter__(self) -> Iterator[WordLocation]:
        return (self._by_id[wid] for wid in self._order)

    def __len__(self) -> int:
        return len(self._order)
