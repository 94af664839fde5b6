"""
Serviço de persistência das parts de aparato (SQLAlchemy).
"""

import json
import logging
from typing import Iterable, List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from ..parsing.apparatus_models import Part
from .models import ApparatusPartRecord, Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///apparatus_parts.db"


class PartStore:
    """
    Grava as parts emitidas pelo parser.

    Responsável por:
    - Criar a tabela se não existir
    - Inserir cada part (parts emitidas são imutáveis: sem update)
    - Consultar parts por item / documento
    """

    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        """
        Args:
            database_url: URL SQLAlchemy (default: sqlite:///apparatus_parts.db)
            echo: Se True, loga queries SQL
        """
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self._engine = create_engine(self.database_url, echo=echo)
        self._session_factory = sessionmaker(bind=self._engine)
        Base.metadata.create_all(self._engine)

    def _get_session(self) -> Session:
        return self._session_factory()

    @staticmethod
    def _to_record(part: Part) -> ApparatusPartRecord:
        return ApparatusPartRecord(
            id=part.id,
            item_id=part.item_id,
            thesaurus_scope=part.thesaurus_scope,
            role_id=part.role_id,
            creator_id=part.creator_id,
            user_id=part.user_id,
            fragment_count=len(part.fragments),
            entry_count=part.entry_count,
            content=json.dumps(
                [fr.to_dict() for fr in part.fragments], ensure_ascii=False
            ),
        )

    def save(self, part: Part) -> None:
        with self._get_session() as session:
            session.add(self._to_record(part))
            session.commit()
        logger.info(
            f"Part {part.id} gravada (item={part.item_id}, role={part.role_id}, "
            f"fragmentos={len(part.fragments)})"
        )

    def save_all(self, parts: Iterable[Part]) -> int:
        """Grava as parts à medida que chegam; retorna quantas foram gravadas."""
        count = 0
        for part in parts:
            self.save(part)
            count += 1
        return count

    def get(self, part_id: str) -> Optional[dict]:
        with self._get_session() as session:
            record = session.get(ApparatusPartRecord, part_id)
            return record.to_dict() if record else None

    def list_by_item(self, item_id: str) -> List[dict]:
        with self._get_session() as session:
            records = (
                session.query(ApparatusPartRecord)
                .filter(ApparatusPartRecord.item_id == item_id)
                .order_by(ApparatusPartRecord.time_created)
                .all()
            )
            return [r.to_dict() for r in records]

    def list_by_document(self, thesaurus_scope: str) -> List[dict]:
        with self._get_session() as session:
            records = (
                session.query(ApparatusPartRecord)
                .filter(ApparatusPartRecord.thesaurus_scope == thesaurus_scope)
                .all()
            )
            return [r.to_dict() for r in records]

    def count(self) -> int:
        with self._get_session() as session:
            return session.query(ApparatusPartRecord).count()
