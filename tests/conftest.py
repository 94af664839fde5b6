"""
Configuração global do pytest e fixtures compartilhadas.

Texto base usado nos testes (verg-aen):

    d001  row 1: arma(1.1) virumque(1.2) cano(1.3)
          row 2: Troiae(2.1) qui(2.2)
    d002  row 1: Italiam(1.1) fato(1.2)
"""

import sys
from pathlib import Path

import pytest

# Adiciona o diretório raiz do projeto ao path
root_path = Path(__file__).parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from apparatus_migration.parsing.context import ParseContext  # noqa: E402
from apparatus_migration.textindex.index_builder import build_index_from_tei  # noqa: E402
from apparatus_migration.utils.tei import TEI_NS, load_document  # noqa: E402


BASE_TEXT_XML = f"""<?xml version="1.0" encoding="UTF-8"?>
<TEI xmlns="{TEI_NS}">
  <text>
    <body>
      <div1 xml:id="d001">
        <l><w xml:id="d001w1">arma</w> <w xml:id="d001w2">virumque</w> <w xml:id="d001w3">cano</w></l>
        <l><w xml:id="d001w4">Troiae</w> <w xml:id="d001w5">qui</w></l>
      </div1>
      <div1 xml:id="d002">
        <l><w xml:id="d002w1">Italiam</w> <w xml:id="d002w2">fato</w></l>
      </div1>
    </body>
  </text>
</TEI>
"""


def apparatus_xml(apps: str, div_id: str = "a1") -> str:
    """Documento de aparato com um div1 contendo os apps informados."""
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<TEI xmlns="{TEI_NS}">
  <text>
    <body>
      <div1 xml:id="{div_id}">
{apps}
      </div1>
    </body>
  </text>
</TEI>
"""


@pytest.fixture
def base_text_bytes() -> bytes:
    return BASE_TEXT_XML.encode("utf-8")


@pytest.fixture
def index(base_text_bytes):
    """Índice do texto base verg-aen."""
    return build_index_from_tei(base_text_bytes, "verg-aen")


@pytest.fixture
def context():
    return ParseContext(document_id="verg-aen", file_name="verg-aen-app.xml")


@pytest.fixture
def make_apparatus():
    """Fábrica: apps (markup) -> documento lxml de aparato."""

    def _make(apps: str, div_id: str = "a1"):
        return load_document(apparatus_xml(apps, div_id).encode("utf-8"))

    return _make


@pytest.fixture
def corpus_dir(tmp_path, base_text_bytes):
    """Diretório com texto base e aparato (verg-aen.xml + verg-aen-app.xml)."""
    (tmp_path / "verg-aen.xml").write_bytes(base_text_bytes)
    apps = """
        <app from="#d001w1" to="#d001w2"><lem>arma virumque</lem><rdg wit="#M">arma uirumque</rdg></app>
        <app from="#d001w2"><lem>virumque</lem><rdg wit="#P">uirumque</rdg></app>
        <app from="#d002w1"><lem>Italiam</lem><rdg wit="#R">Italia</rdg></app>
"""
    (tmp_path / "verg-aen-app.xml").write_text(apparatus_xml(apps), encoding="utf-8")
    return tmp_path
