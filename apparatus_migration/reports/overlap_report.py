# -*- coding: utf-8 -*-
"""
Relatório de sobreposições entre unidades de aparato (diagnóstico).

Fluxo:
    1. Coleta os <app> elegíveis do body:
       - exclui @type="margin-note" (vai para outra camada)
       - exclui apps cujos lem/rdg são todos "ancient-note"
    2. Resolve o conjunto de palavras de cada app (LocationResolver):
       - @loc      -> cada ID da lista
       - @from/@to -> todas as palavras do intervalo
    3. Varredura por pares (i < j): para cada app, apenas o PRIMEIRO
       parceiro sobreposto é reportado.

O relatório é markdown:

    # Overlaps Report

    Input: `dir/*-app.xml`

    ## Overlap 1

    verg-aen-app.xml at 42

    `d001w3`=`cano` (1.3)

    ```xml
    <app ...>...</app>
    ```
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, TextIO

from ..parsing.context import ParseContext
from ..parsing.errors import ApparatusError, DocumentStructureError, MissingLocationError
from ..parsing.location_resolver import LocationResolver, split_ids, strip_sigil
from ..parsing.part_splitter import TYPE_ANCIENT_NOTE, TYPE_MARGIN_NOTE
from ..textindex.index_types import WordLocation, WordLocationIndex
from ..utils.tei import element_markup, find_tei_body, local_name, tei

logger = logging.getLogger(__name__)

VARIANT_ELEMENTS = ("lem", "rdg")


@dataclass
class AppWithLocations:
    """Um <app> e as palavras que ele cobre."""

    element: object
    locations: List[WordLocation]

    @property
    def line_number(self) -> int:
        return getattr(self.element, "sourceline", None) or 0

    @property
    def word_ids(self) -> set:
        return {loc.word_id for loc in self.locations}

    def shared_with(self, other: "AppWithLocations") -> List[WordLocation]:
        """Palavras em comum, na ordem deste app."""
        other_ids = other.word_ids
        return [loc for loc in self.locations if loc.word_id in other_ids]

    def overlaps(self, other: "AppWithLocations") -> bool:
        return not self.word_ids.isdisjoint(other.word_ids)

    def __str__(self) -> str:
        return " ".join(f"{loc.word_id}={loc.text}" for loc in self.locations)


@dataclass
class OverlapRecord:
    """Um par de apps sobrepostos (primeiro encontrado para o app A)."""

    file_name: str
    line_number: int
    shared: List[WordLocation]
    markup_a: str
    markup_b: str


@dataclass
class DocumentOverlaps:
    """Resultado do relatório para um documento."""

    file_name: str
    checked_count: int = 0
    records: List[OverlapRecord] = field(default_factory=list)


def is_overlappable(app) -> bool:
    """
    True se o app pode sobrepor-se a outros na camada principal.

    Só os filhos lem/rdg contam: um app apenas com <note> fica fora do
    relatório, embora nenhuma de suas entradas seja "ancient-note".
    """
    if app.get("type") == TYPE_MARGIN_NOTE:
        return False
    children = [c for c in app if local_name(c) in VARIANT_ELEMENTS]
    return any(c.get("type") != TYPE_ANCIENT_NOTE for c in children)


class OverlapReportEngine:
    """Detecta apps sobrepostos em um documento de aparato."""

    def __init__(self, index: WordLocationIndex, context: Optional[ParseContext] = None):
        self.resolver = LocationResolver(index)
        self.context = context or ParseContext()

    def _app_locations(self, app) -> List[WordLocation]:
        """
        Raises:
            UnresolvedReferenceError, CrossItemReferenceError, MissingLocationError
        """
        loc_attr = app.get("loc")
        if loc_attr is not None:
            ids = split_ids(loc_attr)
            if not ids:
                raise MissingLocationError(app.sourceline)
            return self.resolver.resolve_locations(ids)

        from_attr = app.get("from")
        if from_attr is None:
            raise MissingLocationError(app.sourceline)
        to_attr = app.get("to") or from_attr
        return self.resolver.resolve_span(strip_sigil(from_attr), strip_sigil(to_attr))

    def collect(self, doc) -> List[AppWithLocations]:
        """
        Coleta os apps elegíveis com suas localizações.

        Raises:
            DocumentStructureError: se TEI/text/body estiver ausente
        """
        body = find_tei_body(doc)
        if body is None:
            raise DocumentStructureError("Elemento text/body ausente", self.context.document_id)

        apps: List[AppWithLocations] = []
        for app in body.iter(tei("app")):
            if not is_overlappable(app):
                continue
            self.context.line_number = app.sourceline
            try:
                locations = self._app_locations(app)
            except ApparatusError as e:
                self.context.record(e.kind, f"{e} - app ignorado no relatório")
                continue
            if locations:
                apps.append(AppWithLocations(app, locations))
        return apps

    def find_overlaps(self, apps: List[AppWithLocations], file_name: str = "") -> List[OverlapRecord]:
        """Varredura por pares: só o primeiro parceiro de cada app."""
        records: List[OverlapRecord] = []
        for i in range(len(apps) - 1):
            for j in range(i + 1, len(apps)):
                if apps[i].overlaps(apps[j]):
                    records.append(OverlapRecord(
                        file_name=file_name,
                        line_number=apps[i].line_number,
                        shared=apps[i].shared_with(apps[j]),
                        markup_a=element_markup(apps[i].element),
                        markup_b=element_markup(apps[j].element),
                    ))
                    break
        return records

    def run(self, doc, file_name: str = "") -> DocumentOverlaps:
        self.context.file_name = file_name
        apps = self.collect(doc)
        records = self.find_overlaps(apps, file_name)
        logger.info(
            f"{file_name}: {len(apps)} apps verificados, {len(records)} sobreposições"
        )
        return DocumentOverlaps(file_name=file_name, checked_count=len(apps), records=records)


class OverlapReportWriter:
    """Escreve o relatório markdown; numeração contínua entre documentos."""

    def __init__(self, writer: TextIO):
        self.writer = writer
        self.overlap_count = 0

    def write_header(self, input_description: str) -> None:
        self.writer.write("# Overlaps Report\n\n")
        self.writer.write(f"Input: `{input_description}`\n\n")

    def write_records(self, records: Iterable[OverlapRecord]) -> None:
        for record in records:
            self.overlap_count += 1
            w = self.writer
            w.write(f"## Overlap {self.overlap_count}\n\n")
            w.write(f"{record.file_name} at {record.line_number}\n\n")
            w.write(" ".join(
                f"`{loc.word_id}`=`{loc.text}` ({loc.point})" for loc in record.shared
            ))
            w.write("\n\n")
            self._write_markup(record.markup_a)
            self._write_markup(record.markup_b)

    def _write_markup(self, markup: str) -> None:
        self.writer.write("```xml\n")
        self.writer.write(markup.strip())
        self.writer.write("\n```\n\n")
