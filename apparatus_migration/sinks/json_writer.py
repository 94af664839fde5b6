# -*- coding: utf-8 -*-
"""
PartJsonWriter - grava as parts de um documento em <nome>.parts.json.

As parts são acumuladas à medida que o parser as emite e o arquivo é
escrito em close(). Formato: lista de Part.to_dict() (chaves camelCase).
"""

import json
import logging
from pathlib import Path
from typing import List, Union

from ..parsing.apparatus_models import Part

logger = logging.getLogger(__name__)


class PartJsonWriter:
    """Sink JSON por documento."""

    def __init__(self, output_path: Union[str, Path]):
        self.output_path = Path(output_path)
        self._parts: List[dict] = []

    def save(self, part: Part) -> None:
        self._parts.append(part.to_dict())

    def close(self) -> None:
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self.output_path.write_text(
            json.dumps(self._parts, ensure_ascii=False, indent=2),
            encoding="utf-8",
        )
        logger.info(f"JSON: {self.output_path} ({len(self._parts)} parts)")

    @property
    def count(self) -> int:
        return len(self._parts)

    def __enter__(self) -> "PartJsonWriter":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
