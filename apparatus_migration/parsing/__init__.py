"""
Módulo de Parsing do Aparato Crítico.

Converte unidades <app> de documentos TEI em um modelo de camadas ancorado
em posições do texto base:

    app (TEI)  ──►  LocationResolver  ──►  EntryBuilder  ──►  Fragment
                                                                  │
                         Part (1 por item)  ◄─────────────────────┘
                              │
                              ▼
                        PartSplitter  ──►  principal / ancient / margin

Componentes:
- LocationResolver: word IDs -> "Y.X" / "Y.X-Y2.X2"
- VariantContentParser: texto, idents e notas em seções
- InlineFormatter: diretivas {f=i}...{/f} -> markdown/HTML
- EntryBuilder: lema, variante ou nota, com testemunhos e fontes
- GroupIdAllocator: IDs de grupo para apps com múltiplas localizações
- ApparatusParser: gerador de Parts para um documento
- PartSplitter: separação por categoria (ancient-note, margin-note)
"""

from .apparatus_models import (
    ROLE_ANCIENT,
    ROLE_MARGIN,
    AnnotatedValue,
    ApparatusEntry,
    EntryType,
    Fragment,
    Part,
)
from .errors import (
    ApparatusError,
    CrossItemReferenceError,
    DocumentStructureError,
    IssueKind,
    MissingLocationError,
    ParseIssue,
    UnresolvedReferenceError,
)
from .context import ParseContext
from .token_location import TokenTextLocation, find_overlapping_pairs
from .location_resolver import LocationResolver, split_ids, strip_sigil
from .inline_formatter import InlineFormatter
from .variant_content import ApparatusNote, VariantContent, VariantContentParser
from .entry_builder import NOTE_SECT_SEP, EntryBuilder
from .group_id import GroupIdAllocator, slugify_seed
from .part_splitter import TYPE_ANCIENT_NOTE, TYPE_MARGIN_NOTE, PartSplitter, part_has_overlaps
from .apparatus_parser import ApparatusParser

__all__ = [
    # Modelos
    "ROLE_ANCIENT",
    "ROLE_MARGIN",
    "AnnotatedValue",
    "ApparatusEntry",
    "EntryType",
    "Fragment",
    "Part",
    # Erros
    "ApparatusError",
    "CrossItemReferenceError",
    "DocumentStructureError",
    "IssueKind",
    "MissingLocationError",
    "ParseIssue",
    "UnresolvedReferenceError",
    # Contexto
    "ParseContext",
    # Localização
    "TokenTextLocation",
    "find_overlapping_pairs",
    "LocationResolver",
    "split_ids",
    "strip_sigil",
    # Conteúdo
    "InlineFormatter",
    "ApparatusNote",
    "VariantContent",
    "VariantContentParser",
    "NOTE_SECT_SEP",
    "EntryBuilder",
    "GroupIdAllocator",
    "slugify_seed",
    # Split
    "TYPE_ANCIENT_NOTE",
    "TYPE_MARGIN_NOTE",
    "PartSplitter",
    "part_has_overlaps",
    # Parser
    "ApparatusParser",
]
