# -*- coding: utf-8 -*-
"""
Estado por documento do parser de aparato.

Tudo o que muda durante o parsing de um documento (contador de grupos,
ocorrências registradas, linha corrente) vive aqui, e é recriado a cada
documento. Nada é compartilhado entre documentos.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Optional

from .errors import IssueKind, ParseIssue

logger = logging.getLogger(__name__)

_WARNING_KINDS = {IssueKind.UNMATCHED_CLOSING_DIRECTIVE}


@dataclass
class ParseContext:
    """Contexto de parsing de um documento."""

    document_id: str = ""
    file_name: str = ""
    line_number: Optional[int] = None
    group_counter: int = 0
    issues: List[ParseIssue] = field(default_factory=list)

    def next_group_number(self) -> int:
        """Incrementa e retorna o contador de grupos do documento."""
        self.group_counter += 1
        return self.group_counter

    def record(
        self,
        kind: IssueKind,
        message: str,
        location: Optional[str] = None,
        **fields,
    ) -> ParseIssue:
        """
        Registra uma ocorrência e a envia ao log com campos estruturados.
        """
        issue = ParseIssue(kind, message, self.line_number, location)
        self.issues.append(issue)
        extra = {
            "issue_kind": kind.value,
            "file_name": self.file_name,
            "line_number": self.line_number,
            "location": location,
        }
        extra.update(fields)
        level = logging.WARNING if kind in _WARNING_KINDS else logging.ERROR
        logger.log(level, f"{message} (linha {self.line_number})", extra=extra)
        return issue

    def count(self, kind: IssueKind) -> int:
        return sum(1 for i in self.issues if i.kind == kind)

    def summary(self) -> Counter:
        """Contagem de ocorrências por tipo."""
        return Counter(i.kind for i in self.issues)
