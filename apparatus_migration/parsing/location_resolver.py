# -*- coding: utf-8 -*-
"""
LocationResolver - resolve referências a palavras em coordenadas.

Formas de referência em um <app>:

    @from/@to   ->  resolve_pair()  ->  "Y.X" (ponto) ou "Y1.X1-Y2.X2"
    @loc        ->  resolve_list()  ->  ["Y.X", "Y.X", ...]

Regras:
- todo ID deve existir no índice (UnresolvedReferenceError)
- todos os IDs de uma referência devem pertencer ao mesmo item
  (CrossItemReferenceError)
- o intervalo usa a ordem dos próprios IDs, nunca reordenada pela
  magnitude das coordenadas
"""

from typing import List, Sequence, Tuple, Union

from ..textindex.index_types import WordLocation, WordLocationIndex
from .errors import CrossItemReferenceError, UnresolvedReferenceError


def strip_sigil(token: str) -> str:
    """Remove o prefixo de um caractere (ex.: "#d001w1" -> "d001w1")."""
    token = token.strip()
    return token[1:] if token else token


def split_ids(value: str) -> List[str]:
    """Divide uma lista de IDs separada por espaços, removendo os sigils."""
    return [strip_sigil(t) for t in (value or "").split()]


class LocationResolver:
    """Resolve word IDs contra um WordLocationIndex (somente leitura)."""

    def __init__(self, index: WordLocationIndex):
        self.index = index

    def find(self, word_id: str) -> WordLocation:
        """
        Raises:
            UnresolvedReferenceError: se o ID não estiver no índice
        """
        loc = self.index.find(word_id)
        if loc is None:
            raise UnresolvedReferenceError(word_id)
        return loc

    def resolve_pair(self, from_id: str, to_id: str) -> Tuple[str, str]:
        """
        Resolve um par from/to.

        Returns:
            (item_id, location) com location "Y.X" se from_id == to_id,
            senão "Y1.X1-Y2.X2" na ordem dos IDs
        """
        a = self.find(from_id)
        if from_id == to_id:
            return a.item_id, a.point
        b = self.find(to_id)
        if a.item_id != b.item_id:
            raise CrossItemReferenceError([from_id, to_id], [a.item_id, b.item_id])
        return a.item_id, f"{a.point}-{b.point}"

    def resolve_list(self, ids: Union[str, Sequence[str]]) -> Tuple[str, List[str]]:
        """
        Resolve uma lista de IDs (string separada por espaços ou sequência).

        Returns:
            (item_id, ["Y.X", ...]) na ordem dos IDs
        """
        if isinstance(ids, str):
            ids = ids.split()
        points = self._resolve_same_item(ids)
        item_id = points[0].item_id if points else None
        return item_id, [p.point for p in points]

    def resolve_locations(self, ids: Union[str, Sequence[str]]) -> List[WordLocation]:
        """Como resolve_list, mas devolve os WordLocation."""
        if isinstance(ids, str):
            ids = ids.split()
        return self._resolve_same_item(ids)

    def resolve_span(self, from_id: str, to_id: str) -> List[WordLocation]:
        """
        Expande um par from/to em todas as palavras que ele cobre
        (inclusive), em ordem de documento.
        """
        a = self.find(from_id)
        b = self.find(to_id)
        if a.item_id != b.item_id:
            raise CrossItemReferenceError([from_id, to_id], [a.item_id, b.item_id])
        return self.index.between(from_id, to_id)

    def _resolve_same_item(self, ids: Sequence[str]) -> List[WordLocation]:
        resolved: List[WordLocation] = []
        for word_id in ids:
            loc = self.find(word_id)
            if resolved and loc.item_id != resolved[0].item_id:
                raise CrossItemReferenceError(
                    list(ids), [resolved[0].item_id, loc.item_id]
                )
            resolved.append(loc)
        return resolved
