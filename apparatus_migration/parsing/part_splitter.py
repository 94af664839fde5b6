# -*- coding: utf-8 -*-
"""
PartSplitter - separa uma part concluída em até 3 parts disjuntas.

    Part (item X)
      │
      ├── fragmentos com tag "margin-note"         -> part role="margin" (inteiros)
      │
      ├── fragmentos com entradas "ancient-note":
      │     ├── todas ancient  -> part role="ancient" (fragmento inteiro)
      │     └── misto          -> só as entradas ancient vão para um novo
      │                           fragmento (mesma location/tag) na part ancient
      │
      └── o restante fica na part principal

Saída: [principal, ancient (se não vazia), margin (se não vazia)].
Cada part resultante é verificada de novo quanto a sobreposições
(apenas log, nunca bloqueia).
"""

import logging
from typing import List, Optional

from .apparatus_models import ROLE_ANCIENT, ROLE_MARGIN, Fragment, Part
from .context import ParseContext
from .errors import IssueKind
from .token_location import find_overlapping_pairs

logger = logging.getLogger(__name__)

TYPE_ANCIENT_NOTE = "ancient-note"
TYPE_MARGIN_NOTE = "margin-note"


def is_margin_fragment(fragment: Fragment) -> bool:
    return TYPE_MARGIN_NOTE in (fragment.tag or "")


def is_ancient_entry(entry) -> bool:
    return entry.tag == TYPE_ANCIENT_NOTE


def part_has_overlaps(part: Part) -> bool:
    """True se dois fragmentos da part têm localizações sobrepostas."""
    return bool(find_overlapping_pairs([fr.location for fr in part.fragments]))


class PartSplitter:
    """Distribui os fragmentos de uma part por categoria."""

    def __init__(self, context: Optional[ParseContext] = None):
        self.context = context or ParseContext()

    def split(self, part: Part) -> List[Part]:
        ancient = part.spawn(ROLE_ANCIENT)
        margin = part.spawn(ROLE_MARGIN)

        # passada única sobre um snapshot dos fragmentos
        kept: List[Fragment] = []
        for fr in list(part.fragments):
            if is_margin_fragment(fr):
                margin.fragments.append(fr)
                continue

            ancient_entries = [e for e in fr.entries if is_ancient_entry(e)]
            if not ancient_entries:
                kept.append(fr)
                continue

            if len(ancient_entries) == len(fr.entries):
                ancient.fragments.append(fr)
                continue

            ancient.fragments.append(Fragment(
                location=fr.location,
                tag=fr.tag,
                entries=ancient_entries,
            ))
            fr.entries = [e for e in fr.entries if not is_ancient_entry(e)]
            kept.append(fr)
        part.fragments = kept

        parts = [part]
        self._check_overlaps(part, "Part")

        if ancient.fragments:
            parts.append(ancient)
            logger.info(f"Part ancient com {ancient.entry_count} entradas")
            self._check_overlaps(ancient, "Part ancient")

        if margin.fragments:
            parts.append(margin)
            logger.info(f"Part margin com {margin.entry_count} entradas")
            self._check_overlaps(margin, "Part margin")

        return parts

    def _check_overlaps(self, part: Part, label: str) -> None:
        if part_has_overlaps(part):
            self.context.record(
                IssueKind.PART_OVERLAP,
                f"{label} do item {part.item_id} tem sobreposições",
                item_id=part.item_id,
            )
