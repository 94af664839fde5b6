"""
Modelos Pydantic para o dump JSON do índice do texto base.

Formato:
    {
      "documentId": "verg-aen",
      "items": [
        {"id": "d001", "rows": [{"tokens": [{"id": "d001w1", "text": "arma"}]}]}
      ]
    }

y = posição da row no item (1-based); x = posição do token na row (1-based).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class IndexedToken(BaseModel):
    """Token (palavra) do texto base."""

    id: str = Field(..., min_length=1, description="Word ID (xml:id do <w>)")
    text: str = Field("", description="Texto da palavra")


class IndexedRow(BaseModel):
    """Linha do texto base (<l> ou <p>)."""

    tokens: list[IndexedToken] = Field(default_factory=list)


class IndexedItem(BaseModel):
    """Item do texto base (div1)."""

    id: str = Field(..., min_length=1, description="ID do item")
    rows: list[IndexedRow] = Field(default_factory=list)


class TextIndexDump(BaseModel):
    """Dump completo do índice de um texto base."""

    model_config = ConfigDict(populate_by_name=True)

    document_id: Optional[str] = Field(None, alias="documentId")
    items: list[IndexedItem] = Field(default_factory=list)
