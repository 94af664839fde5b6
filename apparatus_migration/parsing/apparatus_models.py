# -*- coding: utf-8 -*-
"""
Tipos de dados do modelo de aparato crítico.

Hierarquia:
- Part: camada de aparato de um item do texto base (1 part = 1 item)
- Fragment: payload ancorado em uma localização ("Y.X" ou "Y.X-Y2.X2")
- ApparatusEntry: lição, lema ou nota dentro de um fragmento
- AnnotatedValue: testemunho (wit) ou fonte (source) com nota opcional

Serialização:
    to_dict() devolve a estrutura pronta para JSON, com chaves camelCase
    (itemId, thesaurusScope, roleId, isAccepted, normValue, groupId...).
"""

import copy
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

# Papéis das parts geradas pelo split
ROLE_ANCIENT = "ancient"
ROLE_MARGIN = "margin"


class EntryType(str, Enum):
    """Tipo de entrada do aparato."""

    VARIANT = "variant"
    NOTE = "note"


@dataclass
class AnnotatedValue:
    """Testemunho ou fonte citada, com comentário opcional."""

    value: str
    note: Optional[str] = None

    def to_dict(self) -> dict:
        return {"value": self.value, "note": self.note}


@dataclass
class ApparatusEntry:
    """
    Entrada do aparato: lema (lição aceita), variante ou nota.

    witnesses e sources mantêm a ordem do atributo de origem.
    """

    tag: Optional[str] = None
    is_accepted: bool = False
    type: EntryType = EntryType.VARIANT
    value: Optional[str] = None
    norm_value: Optional[str] = None
    note: Optional[str] = None
    group_id: Optional[str] = None
    witnesses: List[AnnotatedValue] = field(default_factory=list)
    sources: List[AnnotatedValue] = field(default_factory=list)

    def find_target(self, target: str) -> Optional[AnnotatedValue]:
        """Procura o testemunho, e depois a fonte, com o valor informado."""
        for wit in self.witnesses:
            if wit.value == target:
                return wit
        for src in self.sources:
            if src.value == target:
                return src
        return None

    def to_dict(self) -> dict:
        return {
            "tag": self.tag,
            "type": self.type.value,
            "isAccepted": self.is_accepted,
            "value": self.value,
            "normValue": self.norm_value,
            "note": self.note,
            "groupId": self.group_id,
            "witnesses": [w.to_dict() for w in self.witnesses],
            "sources": [s.to_dict() for s in self.sources],
        }

    def __str__(self) -> str:
        prefix = "*" if self.is_accepted else ""
        return f"{prefix}{self.value or self.note or '-'}"


@dataclass
class Fragment:
    """Fragmento de aparato: todas as entradas compartilham a localização."""

    location: Optional[str] = None
    tag: Optional[str] = None
    entries: List[ApparatusEntry] = field(default_factory=list)

    def clone(self) -> "Fragment":
        """Cópia profunda: entradas e listas aninhadas não são compartilhadas."""
        return copy.deepcopy(self)

    def to_dict(self) -> dict:
        return {
            "location": self.location,
            "tag": self.tag,
            "entries": [e.to_dict() for e in self.entries],
        }


@dataclass
class Part:
    """
    Camada de aparato de um item.

    Invariante: pertence a exatamente um item (item_id). Depois de emitida
    pelo parser a part não é mais alterada.
    """

    item_id: Optional[str] = None
    thesaurus_scope: Optional[str] = None
    role_id: Optional[str] = None
    creator_id: str = "zeus"
    user_id: str = "zeus"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    fragments: List[Fragment] = field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return sum(len(fr.entries) for fr in self.fragments)

    def spawn(self, role_id: Optional[str]) -> "Part":
        """Cria uma part vazia do mesmo item, com o papel informado."""
        return Part(
            item_id=self.item_id,
            thesaurus_scope=self.thesaurus_scope,
            role_id=role_id,
            creator_id=self.creator_id,
            user_id=self.user_id,
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "itemId": self.item_id,
            "thesaurusScope": self.thesaurus_scope,
            "roleId": self.role_id,
            "creatorId": self.creator_id,
            "userId": self.user_id,
            "fragments": [fr.to_dict() for fr in self.fragments],
        }
