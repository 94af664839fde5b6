# -*- coding: utf-8 -*-
"""
Helpers para documentos TEI P5 (lxml).
"""

from pathlib import Path
from typing import Union

from lxml import etree

TEI_NS = "http://www.tei-c.org/ns/1.0"
XML_NS = "http://www.w3.org/XML/1998/namespace"


def tei(local_name: str) -> str:
    """Nome qualificado no namespace TEI (Clark notation)."""
    return f"{{{TEI_NS}}}{local_name}"


XML_ID = f"{{{XML_NS}}}id"


def local_name(elem) -> str:
    """Nome local do elemento (sem namespace); "" para comentários/PIs."""
    if not isinstance(elem.tag, str):
        return ""
    return etree.QName(elem).localname


def load_document(source: Union[str, Path, bytes]) -> etree._ElementTree:
    """
    Carrega um documento XML preservando whitespace e números de linha.

    Aceita caminho de arquivo ou o próprio conteúdo em bytes.
    """
    parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
    if isinstance(source, bytes):
        return etree.ElementTree(etree.fromstring(source, parser))
    return etree.parse(str(source), parser)


def find_tei_body(doc: etree._ElementTree):
    """
    Retorna o elemento TEI/text/body, ou None se a estrutura estiver ausente.
    """
    root = doc.getroot()
    if root is None:
        return None
    text = root.find(tei("text"))
    if text is None:
        return None
    return text.find(tei("body"))


def element_markup(elem) -> str:
    """Markup literal do elemento, sem o tail."""
    return etree.tostring(elem, encoding="unicode", with_tail=False)
