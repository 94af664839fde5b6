# -*- coding: utf-8 -*-
"""
VariantContentParser - extrai o conteúdo de um <lem>, <rdg> ou <note>.

    <rdg wit="#A #B">arma<ident>arma</ident><add n="2" target="#A">...</add></rdg>
         │
         ├── texto direto       -> value ("arma")
         ├── <ident>            -> idents (forma normalizada)
         └── <add> / <note>     -> notes {section_id, value, target}

Atributos das anotações:
- @n: número da seção (default 1)
- @target: ID do testemunho/fonte alvo (sigil removido)
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from ..utils.tei import local_name
from .context import ParseContext
from .errors import IssueKind
from .location_resolver import strip_sigil

logger = logging.getLogger(__name__)

IDENT_ELEMENTS = {"ident"}
ANNOTATION_ELEMENTS = {"add", "note"}


@dataclass
class ApparatusNote:
    """Seção de nota, opcionalmente dirigida a um testemunho/fonte."""

    value: str
    section_id: int = 1
    target: Optional[str] = None


@dataclass
class VariantContent:
    """Conteúdo extraído de uma entrada."""

    value: Optional[str] = None
    idents: List[str] = field(default_factory=list)
    notes: List[ApparatusNote] = field(default_factory=list)


def _inner_text(elem) -> str:
    return "".join(elem.itertext())


class VariantContentParser:
    """Percorre os filhos de uma entrada do aparato."""

    def __init__(self, context: Optional[ParseContext] = None):
        self.context = context or ParseContext()

    def parse(self, variant) -> VariantContent:
        content = VariantContent()
        text_parts: List[str] = []
        if variant.text:
            text_parts.append(variant.text)

        for child in variant:
            # o tail pertence ao texto direto da entrada
            if child.tail:
                text_parts.append(child.tail)

            name = local_name(child)
            if not name:
                continue
            if name in IDENT_ELEMENTS:
                content.idents.append(_inner_text(child).strip())
            elif name in ANNOTATION_ELEMENTS:
                content.notes.append(self._parse_annotation(child))
            else:
                self.context.record(
                    IssueKind.UNKNOWN_MARKUP_ELEMENT,
                    f"Elemento inesperado no conteúdo da variante: {name}",
                    element=name,
                )

        if text_parts:
            content.value = "".join(text_parts)
        return content

    def _parse_annotation(self, elem) -> ApparatusNote:
        section_id = 1
        n = elem.get("n")
        if n is not None:
            try:
                section_id = int(n)
            except ValueError:
                logger.warning(f"Seção de nota inválida: n={n!r}, usando 1")
        target = elem.get("target")
        return ApparatusNote(
            value=_inner_text(elem),
            section_id=section_id,
            target=strip_sigil(target) if target else None,
        )
