# -*- coding: utf-8 -*-
"""
Taxonomia de erros do parser de aparato.

Exceções (abortam a unidade corrente ou o documento):
- UnresolvedReferenceError: word ID ausente do índice
- CrossItemReferenceError: IDs da mesma referência em itens diferentes
- MissingLocationError: app sem @from/@to e sem @loc
- DocumentStructureError: falta elemento estrutural obrigatório (aborta o documento)

Ocorrências registradas (não bloqueiam a emissão): ver IssueKind.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence


class IssueKind(str, Enum):
    """Tipos de ocorrência registradas durante o parsing."""

    UNRESOLVED_REFERENCE = "unresolved_reference"
    CROSS_ITEM_REFERENCE = "cross_item_reference"
    MISSING_LOCATION = "missing_location"
    OVERLAP_DETECTED = "overlap_detected"
    # reverificação de uma part já dividida (não entra na contagem de sobreposições)
    PART_OVERLAP = "part_overlap"
    DUPLICATE_SECTION = "duplicate_section"
    UNKNOWN_MARKUP_ELEMENT = "unknown_markup_element"
    UNMATCHED_TARGET = "unmatched_target"
    UNMATCHED_CLOSING_DIRECTIVE = "unmatched_closing_directive"


@dataclass
class ParseIssue:
    """Ocorrência registrada para revisão manual."""

    kind: IssueKind
    message: str
    line_number: Optional[int] = None
    location: Optional[str] = None


class ApparatusError(Exception):
    """Erro base do parser de aparato."""

    kind: IssueKind = IssueKind.UNRESOLVED_REFERENCE


class UnresolvedReferenceError(ApparatusError):
    """Word ID não encontrado no índice do texto base."""

    kind = IssueKind.UNRESOLVED_REFERENCE

    def __init__(self, word_id: str):
        self.word_id = word_id
        super().__init__(f"Word ID {word_id} não encontrado")


class CrossItemReferenceError(ApparatusError):
    """Referência cujos IDs pertencem a itens diferentes."""

    kind = IssueKind.CROSS_ITEM_REFERENCE

    def __init__(self, word_ids: Sequence[str], item_ids: Sequence[str]):
        self.word_ids = list(word_ids)
        self.item_ids = list(item_ids)
        super().__init__(
            f"Fragmento abrange dois itens: {' '.join(self.word_ids)} "
            f"(itens: {', '.join(self.item_ids)})"
        )


class MissingLocationError(ApparatusError):
    """App sem @from/@to e sem @loc."""

    kind = IssueKind.MISSING_LOCATION

    def __init__(self, line_number: Optional[int] = None):
        self.line_number = line_number
        super().__init__("Nenhuma localização para o elemento app")


class DocumentStructureError(ApparatusError):
    """Estrutura obrigatória ausente (ex.: text/body): aborta o documento."""

    def __init__(self, message: str, document_id: str = ""):
        self.document_id = document_id
        super().__init__(message)

    def __str__(self):
        return f"DocumentStructureError: {self.args[0]} [document_id={self.document_id}]"
