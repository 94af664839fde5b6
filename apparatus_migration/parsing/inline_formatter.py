# -*- coding: utf-8 -*-
"""
InlineFormatter - mini-linguagem de estilo inline das notas.

Diretivas entre chaves, resolvidas com uma pilha LIFO de fechamentos:

| Diretiva | Empilha    | Emite     |
|----------|------------|-----------|
| {f=i}    | `_`        | `_`       |
| {f=b}    | `__`       | `__`      |
| {f=u}    | `</sup>`   | `<sup>`   |
| {f=d}    | `</sub>`   | `<sub>`   |
| {/f}     | -          | desempilha e emite o fechamento |
| outra    | -          | literal, sem alteração |

Exemplo:
    >>> InlineFormatter().format("{f=i}a{f=b}b{/f}c{/f}")
    '_a__b__c_'

Um {/f} com a pilha vazia não emite nada (registrado como aviso).
Diretivas abertas no fim do texto não são fechadas automaticamente.
"""

import re
from typing import List, Optional

from .context import ParseContext
from .errors import IssueKind

_BRACES_RE = re.compile(r"\{([^}]+)\}")

# diretiva -> (emitido, fechamento empilhado)
DIRECTIVES = {
    "f=i": ("_", "_"),
    "f=b": ("__", "__"),
    "f=u": ("<sup>", "</sup>"),
    "f=d": ("<sub>", "</sub>"),
}
CLOSE_DIRECTIVE = "/f"


class InlineFormatter:
    """Traduz diretivas de estilo em markdown/HTML."""

    def __init__(self, context: Optional[ParseContext] = None):
        self.context = context

    def format(self, text: Optional[str]) -> Optional[str]:
        if not text:
            return text
        stack: List[str] = []

        def replace(m: re.Match) -> str:
            directive = m.group(1)
            if directive == CLOSE_DIRECTIVE:
                if not stack:
                    if self.context is not None:
                        self.context.record(
                            IssueKind.UNMATCHED_CLOSING_DIRECTIVE,
                            f"Diretiva {{/f}} sem abertura em: {text}",
                        )
                    return ""
                return stack.pop()
            if directive in DIRECTIVES:
                opener, closer = DIRECTIVES[directive]
                stack.append(closer)
                return opener
            return m.group(0)

        return _BRACES_RE.sub(replace, text)
