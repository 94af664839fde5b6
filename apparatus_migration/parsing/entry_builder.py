# -*- coding: utf-8 -*-
"""
EntryBuilder - constrói uma ApparatusEntry a partir de um filho de <app>.

Despacho por tipo de filho:

    <lem>   -> is_accepted=True, depois igual a <rdg>
    <rdg>   -> @wit/@source + conteúdo
    <note>  -> type=NOTE + conteúdo (sem testemunhos/fontes)
    outro   -> registrado (UNKNOWN_MARKUP_ELEMENT) e ignorado

Notas em seções:
    As seções são numeradas a partir de 1 e unidas em ordem crescente.
    Antes de cada seção entra um separador (`) para cada número ausente
    entre a última seção emitida e a corrente:

        {1: "A", 3: "C"}  ->  "A`C"

    Seção duplicada: a primeira (ordem de documento) vale, as demais são
    registradas (DUPLICATE_SECTION) e descartadas.
"""

import logging
from typing import Dict, List, Optional

from ..utils.tei import local_name
from .apparatus_models import AnnotatedValue, ApparatusEntry, EntryType
from .context import ParseContext
from .errors import IssueKind
from .inline_formatter import InlineFormatter
from .location_resolver import split_ids
from .variant_content import ApparatusNote, VariantContent, VariantContentParser

logger = logging.getLogger(__name__)

NOTE_SECT_SEP = "`"


class EntryBuilder:
    """Constrói entradas e aplica o conteúdo extraído."""

    def __init__(self, context: Optional[ParseContext] = None):
        self.context = context or ParseContext()
        self.content_parser = VariantContentParser(self.context)
        self.formatter = InlineFormatter(self.context)

    def build(self, child) -> Optional[ApparatusEntry]:
        """
        Constrói a entrada de um filho de <app>.

        Returns:
            ApparatusEntry, ou None se o elemento não for lem/rdg/note
        """
        name = local_name(child)
        if name not in ("lem", "rdg", "note"):
            if name:
                self.context.record(
                    IssueKind.UNKNOWN_MARKUP_ELEMENT,
                    f"Elemento inesperado {name} em app",
                    element=name,
                )
            return None

        entry = ApparatusEntry(tag=child.get("type"))
        if name == "note":
            entry.type = EntryType.NOTE
        else:
            entry.is_accepted = name == "lem"
            entry.witnesses = [AnnotatedValue(v) for v in split_ids(child.get("wit"))]
            entry.sources = [AnnotatedValue(v) for v in split_ids(child.get("source"))]

        self.apply_content(self.content_parser.parse(child), entry)
        return entry

    def apply_content(self, content: VariantContent, entry: ApparatusEntry) -> None:
        """Aplica valor, idents e notas à entrada."""
        if content.value and content.value.strip():
            entry.value = content.value.strip()

        if content.idents:
            entry.norm_value = " ".join(content.idents)

        if not content.notes:
            return

        # caso particular: apenas a seção 1, sem alvo
        if len(content.notes) == 1:
            only = content.notes[0]
            if only.section_id == 1 and only.target is None:
                entry.note = self.formatter.format(only.value)
                return

        # notas de testemunhos/fontes, agrupadas por alvo
        groups: Dict[str, List[ApparatusNote]] = {}
        for note in content.notes:
            if note.target is not None:
                groups.setdefault(note.target, []).append(note)

        for target_id, notes in groups.items():
            target = entry.find_target(target_id)
            if target is None:
                self.context.record(
                    IssueKind.UNMATCHED_TARGET,
                    f"Alvo {target_id} não encontrado",
                    target=target_id,
                )
                continue
            target.note = self.merge_sections(notes, target_id)

        # notas sem alvo
        untargeted = [n for n in content.notes if n.target is None]
        if untargeted:
            merged = self.merge_sections(untargeted)
            if merged:
                entry.note = merged

    def merge_sections(self, notes: List[ApparatusNote], target: Optional[str] = None) -> str:
        """Une as seções (ver docstring do módulo) e aplica a formatação."""
        parts: List[str] = []
        last_section: Optional[int] = None
        for note in sorted(notes, key=lambda n: n.section_id):
            if last_section is not None and note.section_id == last_section:
                owner = f" de {target}" if target else ""
                self.context.record(
                    IssueKind.DUPLICATE_SECTION,
                    f"Seção {note.section_id}{owner} duplicada, ignorado \"{note.value}\"",
                    section_id=note.section_id,
                )
                continue
            gap = note.section_id - (last_section or 0) - 1
            if gap > 0:
                parts.append(NOTE_SECT_SEP * gap)
            parts.append(note.value)
            last_section = note.section_id
        return self.formatter.format("".join(parts))
