# -*- coding: utf-8 -*-
"""
Localização em texto tokenizado: "Y.X" (ponto) ou "Y.X-Y2.X2" (intervalo).

Pontos são comparados em ordem lexicográfica (row, column). Um intervalo
com extremos invertidos é normalizado apenas para o teste de sobreposição;
a string de origem nunca é reordenada.
"""

import re
from dataclasses import dataclass
from typing import List, Sequence, Tuple

_LOCATION_RE = re.compile(r"^\s*(\d+)\.(\d+)(?:\s*-\s*(\d+)\.(\d+))?\s*$")


@dataclass(frozen=True)
class TokenTextLocation:
    """Intervalo fechado [start, end] de pontos (y, x)."""

    start: Tuple[int, int]
    end: Tuple[int, int]

    @classmethod
    def parse(cls, text: str) -> "TokenTextLocation":
        """
        Converte "Y.X" ou "Y.X-Y2.X2".

        Raises:
            ValueError: se o texto não for uma localização válida
        """
        m = _LOCATION_RE.match(text or "")
        if not m:
            raise ValueError(f"Localização inválida: {text!r}")
        a = (int(m.group(1)), int(m.group(2)))
        if m.group(3) is None:
            return cls(a, a)
        b = (int(m.group(3)), int(m.group(4)))
        if b < a:
            a, b = b, a
        return cls(a, b)

    @property
    def is_range(self) -> bool:
        return self.start != self.end

    def overlaps(self, other: "TokenTextLocation") -> bool:
        """True se os intervalos se interceptam em qualquer ponto."""
        return self.start <= other.end and other.start <= self.end

    def __str__(self) -> str:
        if not self.is_range:
            return f"{self.start[0]}.{self.start[1]}"
        return f"{self.start[0]}.{self.start[1]}-{self.end[0]}.{self.end[1]}"


def find_overlapping_pairs(locations: Sequence[str]) -> List[Tuple[int, int]]:
    """Pares (i, j), i < j, de localizações que se sobrepõem."""
    parsed = [TokenTextLocation.parse(loc) for loc in locations]
    pairs: List[Tuple[int, int]] = []
    for i in range(len(parsed)):
        for j in range(i + 1, len(parsed)):
            if parsed[i].overlaps(parsed[j]):
                pairs.append((i, j))
    return pairs
