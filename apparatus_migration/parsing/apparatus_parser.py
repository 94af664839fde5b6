# -*- coding: utf-8 -*-
"""
ApparatusParser - converte um documento TEI de aparato em Parts.

Fluxo:
======

    TEI/text/body
         │
         └── div1[@xml:id]                      (divisão estrutural -> tag)
               │
               └── app[@from/@to | @loc][@type]  (unidade de aparato -> fragmento)
                     │
                     ├── 1. LocationResolver     -> item_id + location(s)
                     │        falha -> unidade ignorada (registrada)
                     │
                     ├── 2. item mudou?          -> split + emissão da part aberta
                     │
                     ├── 3. EntryBuilder         -> uma entrada por lem/rdg/note
                     │
                     └── 4. @loc com N locais    -> group_id + N clones do fragmento

    No fim do documento a última part aberta é dividida (PartSplitter)
    e emitida.

Uso:
====

    ```python
    parser = ApparatusParser(user_id="zeus")
    context = ParseContext(document_id="verg-aen", file_name="verg-aen-app.xml")

    for part in parser.parse(doc, "verg-aen", index, context):
        store.save(part)

    print(context.summary())
    ```

parse() é um gerador: cada part é entregue assim que fica pronta (mudança
de item ou fim do documento) e nunca mais é revisitada.
"""

import logging
from typing import Iterator, List, Optional, Tuple

from ..textindex.index_types import WordLocationIndex
from ..utils.tei import XML_ID, find_tei_body, tei
from .apparatus_models import Fragment, Part
from .context import ParseContext
from .entry_builder import EntryBuilder
from .errors import ApparatusError, DocumentStructureError, IssueKind, MissingLocationError
from .group_id import GroupIdAllocator
from .location_resolver import LocationResolver, split_ids, strip_sigil
from .part_splitter import PartSplitter
from .token_location import TokenTextLocation

logger = logging.getLogger(__name__)

DEFAULT_USER_ID = "zeus"


class ApparatusParser:
    """Parser de documentos de aparato TEI."""

    def __init__(self, user_id: str = DEFAULT_USER_ID):
        if not user_id:
            raise ValueError("user_id é obrigatório")
        self.user_id = user_id

    def _create_part(self, document_id: str, item_id: Optional[str] = None) -> Part:
        return Part(
            item_id=item_id,
            thesaurus_scope=document_id,
            creator_id=self.user_id,
            user_id=self.user_id,
        )

    # =========================================================================
    # Localização
    # =========================================================================

    def _resolve_location(
        self,
        app,
        resolver: LocationResolver,
    ) -> Tuple[str, Optional[str], Optional[List[str]]]:
        """
        Returns:
            (item_id, location, None) para @from/@to ou
            (item_id, None, locations) para @loc

        Raises:
            UnresolvedReferenceError, CrossItemReferenceError, MissingLocationError
        """
        from_attr = app.get("from")
        if from_attr is not None:
            to_attr = app.get("to") or from_attr
            item_id, location = resolver.resolve_pair(
                strip_sigil(from_attr), strip_sigil(to_attr)
            )
            return item_id, location, None

        loc_attr = app.get("loc")
        ids = split_ids(loc_attr) if loc_attr is not None else []
        if not ids:
            raise MissingLocationError(app.sourceline)
        item_id, locations = resolver.resolve_list(ids)
        return item_id, None, locations

    @staticmethod
    def _original_reference(app) -> str:
        if app.get("from") is not None:
            return f"{app.get('from')}-{app.get('to') or app.get('from')}"
        return app.get("loc") or ""

    # =========================================================================
    # Fragmentos
    # =========================================================================

    def _add_fragment(
        self,
        fragment: Fragment,
        part: Part,
        original_ref: str,
        context: ParseContext,
    ) -> None:
        """
        Adiciona o fragmento mesmo se houver sobreposição: os duplicados são
        tolerados até o split, e cada sobreposição é registrada.
        """
        loc = TokenTextLocation.parse(fragment.location)
        if any(TokenTextLocation.parse(f.location).overlaps(loc) for f in part.fragments):
            entries = "; ".join(str(e) for e in fragment.entries)
            context.record(
                IssueKind.OVERLAP_DETECTED,
                f"Sobreposição para novo fragmento em {fragment.location} "
                f"(original {original_ref}): {entries}",
                location=fragment.location,
            )
        part.fragments.append(fragment)
        logger.info(
            f"Fragmento concluído em {fragment.location} "
            f"(entradas: {len(fragment.entries)})"
        )

    def _flush(self, part: Part, splitter: PartSplitter) -> Iterator[Part]:
        if part.fragments:
            yield from splitter.split(part)

    # =========================================================================
    # Parsing
    # =========================================================================

    def parse(
        self,
        doc,
        document_id: str,
        index: WordLocationIndex,
        context: Optional[ParseContext] = None,
    ) -> Iterator[Part]:
        """
        Converte o documento de aparato em Parts.

        Args:
            doc: documento lxml (ElementTree)
            document_id: ID do documento (vira o thesaurus scope das parts)
            index: índice do texto base correspondente
            context: contexto do documento (criado se omitido)

        Yields:
            Parts concluídas, na ordem do documento

        Raises:
            DocumentStructureError: se TEI/text/body estiver ausente
        """
        if doc is None:
            raise ValueError("doc é obrigatório")
        if not document_id:
            raise ValueError("document_id é obrigatório")
        if index is None:
            raise ValueError("index é obrigatório")

        context = context if context is not None else ParseContext(document_id=document_id)
        context.document_id = document_id

        body = find_tei_body(doc)
        if body is None:
            raise DocumentStructureError("Elemento text/body ausente", document_id)

        resolver = LocationResolver(index)
        builder = EntryBuilder(context)
        allocator = GroupIdAllocator(context)
        splitter = PartSplitter(context)
        part = self._create_part(document_id)

        for div in body.findall(tei("div1")):
            div_id = div.get(XML_ID) or ""
            logger.info(f"==Parsing div1 #{div_id} na linha {div.sourceline}")

            for app_nr, app in enumerate(div.findall(tei("app")), start=1):
                context.line_number = app.sourceline
                logger.info(f"--Parsing app #{app_nr} na linha {app.sourceline}")

                try:
                    item_id, location, locations = self._resolve_location(app, resolver)
                except ApparatusError as e:
                    context.record(
                        e.kind,
                        f"{e} - app ignorado: {self._original_reference(app)}",
                        word_id=getattr(e, "word_id", None),
                    )
                    continue

                # mudança de item: fecha a part aberta
                if part.item_id is None:
                    part.item_id = item_id
                    logger.info(f"Item ID definido: {item_id}")
                elif part.item_id != item_id:
                    logger.info(f"Item ID mudou de {part.item_id} para {item_id}")
                    yield from self._flush(part, splitter)
                    part = self._create_part(document_id, item_id)

                app_type = app.get("type")
                fragment = Fragment(
                    location=location,
                    tag=div_id + (f" {app_type}" if app_type else ""),
                )
                for child in app:
                    entry = builder.build(child)
                    if entry is not None:
                        fragment.entries.append(entry)

                original_ref = self._original_reference(app)
                if locations is not None:
                    allocator.assign(fragment.entries)
                    for loc in locations:
                        clone = fragment.clone()
                        clone.location = loc
                        self._add_fragment(clone, part, original_ref, context)
                else:
                    self._add_fragment(fragment, part, original_ref, context)

        yield from self._flush(part, splitter)
