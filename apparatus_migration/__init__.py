"""
Apparatus Migration - Conversão do aparato crítico TEI em parts.

Subpacotes:
- textindex: índice de palavras do texto base
- parsing: parser do aparato (entradas, fragmentos, parts)
- reports: relatório de sobreposições
- sinks: destinos das parts (JSON, SQLAlchemy)
"""

__version__ = "0.1.0"
