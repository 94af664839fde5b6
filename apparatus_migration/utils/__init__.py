"""
Utils - Funcoes utilitarias compartilhadas.
"""

from .file_enumerator import document_id_for, enumerate_files, text_path_for
from .logging_setup import LOG_FORMAT, setup_logging
from .tei import TEI_NS, XML_ID, element_markup, find_tei_body, load_document, local_name, tei

__all__ = [
    "document_id_for",
    "enumerate_files",
    "text_path_for",
    "LOG_FORMAT",
    "setup_logging",
    "TEI_NS",
    "XML_ID",
    "element_markup",
    "find_tei_body",
    "load_document",
    "local_name",
    "tei",
]
