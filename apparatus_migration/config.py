"""
Configurações da migração do aparato.
"""

import os
from dataclasses import dataclass
from typing import Optional


@dataclass
class Config:
    """Configuração da migração."""

    # Usuário atribuído às parts importadas
    user_id: str = "zeus"

    # Persistência
    database_url: str = "sqlite:///apparatus_parts.db"
    sql_echo: bool = False

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls) -> "Config":
        """Carrega configuração de variáveis de ambiente."""
        return cls(
            user_id=os.getenv("APP_USER_ID", "zeus"),
            database_url=os.getenv("DATABASE_URL", "sqlite:///apparatus_parts.db"),
            sql_echo=os.getenv("SQL_ECHO", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_file=os.getenv("LOG_FILE") or None,
        )
