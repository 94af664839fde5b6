"""
Modelos SQLAlchemy para a persistência das parts de aparato.
"""

import json
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ApparatusPartRecord(Base):
    """
    Part de aparato persistida.

    O conteúdo (fragmentos) é guardado como JSON; as colunas de
    identificação permitem consultar por item, documento e papel.
    """

    __tablename__ = "apparatus_parts"

    # Identificação
    id = Column(String(36), primary_key=True)
    item_id = Column(String(200), nullable=True, index=True)
    thesaurus_scope = Column(String(200), nullable=True, index=True)
    role_id = Column(String(50), nullable=True, index=True)

    # Autoria
    creator_id = Column(String(100), nullable=False)
    user_id = Column(String(100), nullable=False)

    # Métricas
    fragment_count = Column(Integer, nullable=False, default=0)
    entry_count = Column(Integer, nullable=False, default=0)

    # Conteúdo
    content = Column(Text, nullable=False)

    # Timestamps
    time_created = Column(DateTime(timezone=True), default=_utcnow)

    def __repr__(self) -> str:
        return (
            f"<ApparatusPartRecord(id={self.id}, item_id={self.item_id}, "
            f"role_id={self.role_id}, fragments={self.fragment_count})>"
        )

    def to_dict(self) -> dict:
        """Converte para dicionário (mesmo formato de Part.to_dict)."""
        return {
            "id": self.id,
            "itemId": self.item_id,
            "thesaurusScope": self.thesaurus_scope,
            "roleId": self.role_id,
            "creatorId": self.creator_id,
            "userId": self.user_id,
            "fragments": json.loads(self.content),
        }
