# -*- coding: utf-8 -*-
"""
Construção do WordLocationIndex a partir do texto base.

Fontes suportadas:
- Documento TEI do texto base (lxml):
      TEI/text/body/div1[@xml:id]   -> item
          l | p                     -> row (y, 1-based)
              w[@xml:id]            -> column (x, 1-based)
- Dump JSON (TextIndexDump, validado com Pydantic)

O dump JSON pode ser gerado a partir do TEI (write_index_dump), evitando
reprocessar o texto base a cada execução.
"""

import json
import logging
from pathlib import Path
from typing import Iterator, List, Optional, Union

from pydantic import ValidationError

from ..parsing.errors import DocumentStructureError
from ..utils.tei import XML_ID, find_tei_body, load_document, local_name, tei
from .index_models import IndexedItem, IndexedRow, IndexedToken, TextIndexDump
from .index_types import WordLocation, WordLocationIndex

logger = logging.getLogger(__name__)

ROW_ELEMENTS = {"l", "p"}


def _word_text(w) -> str:
    return " ".join("".join(w.itertext()).split())


def _is_row(elem) -> bool:
    return local_name(elem) in ROW_ELEMENTS


def _iter_rows(div) -> Iterator:
    """Rows mais internas: um <p> que contém <l> não é row."""
    for elem in div.iter():
        if _is_row(elem) and not any(_is_row(d) for d in elem.iterdescendants()):
            yield elem


def build_dump_from_tei(source: Union[str, Path, bytes], document_id: Optional[str] = None) -> TextIndexDump:
    """
    Converte o TEI do texto base no dump do índice.

    Raises:
        DocumentStructureError: se TEI/text/body estiver ausente
    """
    doc = load_document(source)
    body = find_tei_body(doc)
    if body is None:
        raise DocumentStructureError("Elemento text/body ausente no texto base", document_id or "")

    items: List[IndexedItem] = []
    for div in body.iter(tei("div1")):
        item_id = div.get(XML_ID)
        if not item_id:
            logger.warning(f"div1 sem xml:id na linha {div.sourceline}, ignorado")
            continue

        rows: List[IndexedRow] = []
        for row_elem in _iter_rows(div):
            tokens = [
                IndexedToken(id=w.get(XML_ID), text=_word_text(w))
                for w in row_elem.iter(tei("w"))
                if w.get(XML_ID)
            ]
            rows.append(IndexedRow(tokens=tokens))
        items.append(IndexedItem(id=item_id, rows=rows))

    logger.info(f"Texto base indexado: {len(items)} itens")
    return TextIndexDump(document_id=document_id, items=items)


def build_index_from_dump(dump: TextIndexDump) -> WordLocationIndex:
    """Monta o índice a partir do dump (y/x contados a partir de 1)."""
    locations: List[WordLocation] = []
    for item in dump.items:
        for y, row in enumerate(item.rows, start=1):
            for x, token in enumerate(row.tokens, start=1):
                locations.append(WordLocation(
                    word_id=token.id,
                    item_id=item.id,
                    y=y,
                    x=x,
                    text=token.text,
                ))
    return WordLocationIndex(locations)


def build_index_from_tei(source: Union[str, Path, bytes], document_id: Optional[str] = None) -> WordLocationIndex:
    """Atalho: TEI do texto base -> WordLocationIndex."""
    index = build_index_from_dump(build_dump_from_tei(source, document_id))
    logger.info(f"Índice com {len(index)} palavras")
    return index


def load_index_dump(path: Union[str, Path]) -> WordLocationIndex:
    """
    Carrega o índice de um dump JSON.

    Raises:
        ValueError: se o JSON não seguir o formato TextIndexDump
    """
    raw = Path(path).read_text(encoding="utf-8")
    try:
        dump = TextIndexDump.model_validate_json(raw)
    except ValidationError as e:
        raise ValueError(f"Dump de índice inválido em {path}: {e}") from e
    return build_index_from_dump(dump)


def write_index_dump(dump: TextIndexDump, path: Union[str, Path]) -> None:
    """Grava o dump JSON (chaves camelCase)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = dump.model_dump(by_alias=True)
    path.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")
    logger.info(f"Dump do índice gravado em {path}")
