# -*- coding: utf-8 -*-
"""
Pipeline em lote: arquivos de aparato -> parts / relatório de sobreposições.

Fases por documento (parse):
    1. Índice do texto base (dump JSON em index_dir, ou TEI "<doc>.xml")
    2. ApparatusParser.parse() -> Parts (gerador)
    3. Cada part emitida vai direto aos sinks (JSON e/ou banco)

Falhas de um documento (estrutura ausente, XML inválido, texto base
ausente) são registradas e o lote continua com o próximo arquivo.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Union

from lxml import etree

from .parsing.apparatus_models import Part
from .parsing.apparatus_parser import ApparatusParser
from .parsing.context import ParseContext
from .parsing.errors import DocumentStructureError, IssueKind
from .reports.overlap_report import OverlapReportEngine, OverlapReportWriter
from .textindex.index_builder import build_index_from_tei, load_index_dump
from .textindex.index_types import WordLocationIndex
from .utils.file_enumerator import document_id_for, enumerate_files, text_path_for
from .utils.tei import load_document

logger = logging.getLogger(__name__)

PartSink = Callable[[Part], None]


@dataclass
class MigrationSummary:
    """Resumo de uma execução em lote."""

    input_count: int = 0
    part_count: int = 0
    overlap_count: int = 0
    failed_files: List[str] = field(default_factory=list)
    issue_count: int = 0
    duration_s: float = 0.0

    def __str__(self) -> str:
        lines = [
            f"Documentos de entrada: {self.input_count}",
            f"Parts: {self.part_count}",
            f"Sobreposições: {self.overlap_count}",
            f"Ocorrências: {self.issue_count}",
        ]
        if self.failed_files:
            lines.append(f"Falhas: {len(self.failed_files)} ({', '.join(self.failed_files)})")
        lines.append(f"Tempo: {self.duration_s:.2f}s")
        return "\n".join(lines)


def load_text_index(app_path: Path, index_dir: Optional[Union[str, Path]] = None) -> WordLocationIndex:
    """
    Índice do texto base de um documento de aparato.

    Com index_dir usa o dump "<doc>.json"; senão lê o TEI "<doc>.xml"
    ao lado do aparato.
    """
    document_id = document_id_for(app_path)
    if index_dir is not None:
        return load_index_dump(Path(index_dir) / f"{document_id}.json")
    return build_index_from_tei(text_path_for(app_path), document_id)


def parse_documents(
    app_dir: Union[str, Path],
    mask: str,
    sink_factory: Callable[[str], List[PartSink]],
    user_id: str = "zeus",
    index_dir: Optional[Union[str, Path]] = None,
    regex_mask: bool = False,
    recursive: bool = False,
    on_document_done: Optional[Callable[[str], None]] = None,
) -> MigrationSummary:
    """
    Converte todos os documentos de aparato do diretório.

    Args:
        sink_factory: recebe o document_id e devolve os sinks das parts
        on_document_done: chamado ao fim de cada documento, mesmo com falha
            (ex.: fechar sinks)
    """
    start = time.time()
    summary = MigrationSummary()
    parser = ApparatusParser(user_id=user_id)

    for app_path in enumerate_files(app_dir, mask, regex_mask, recursive):
        summary.input_count += 1
        document_id = document_id_for(app_path)
        logger.info(f"Parsing {app_path}")

        context = ParseContext(document_id=document_id, file_name=app_path.name)
        try:
            index = load_text_index(app_path, index_dir)
            doc = load_document(app_path)
            sinks = sink_factory(document_id)
            for part in parser.parse(doc, document_id, index, context):
                for sink in sinks:
                    sink(part)
                summary.part_count += 1
        except (DocumentStructureError, etree.XMLSyntaxError, OSError, ValueError) as e:
            logger.error(f"Documento {app_path.name} ignorado: {e}", exc_info=True)
            summary.failed_files.append(app_path.name)
            continue
        finally:
            summary.overlap_count += context.count(IssueKind.OVERLAP_DETECTED)
            summary.issue_count += len(context.issues)
            if on_document_done is not None:
                on_document_done(document_id)

    summary.duration_s = round(time.time() - start, 2)
    return summary


def report_overlaps(
    app_dir: Union[str, Path],
    mask: str,
    output_path: Union[str, Path],
    index_dir: Optional[Union[str, Path]] = None,
    regex_mask: bool = False,
    recursive: bool = False,
) -> MigrationSummary:
    """
    Gera o relatório markdown de sobreposições.

    O relatório é sempre escrito, mesmo sem nenhuma sobreposição.
    """
    start = time.time()
    summary = MigrationSummary()
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        writer = OverlapReportWriter(f)
        writer.write_header(str(Path(app_dir) / mask))

        for app_path in enumerate_files(app_dir, mask, regex_mask, recursive):
            summary.input_count += 1
            logger.info(f"Parsing {app_path}")
            context = ParseContext(document_id=document_id_for(app_path), file_name=app_path.name)
            try:
                index = load_text_index(app_path, index_dir)
                doc = load_document(app_path)
                result = OverlapReportEngine(index, context).run(doc, app_path.name)
            except (DocumentStructureError, etree.XMLSyntaxError, OSError, ValueError) as e:
                logger.error(f"Documento {app_path.name} ignorado: {e}", exc_info=True)
                summary.failed_files.append(app_path.name)
                continue
            finally:
                summary.issue_count += len(context.issues)
            writer.write_records(result.records)

        summary.overlap_count = writer.overlap_count

    summary.duration_s = round(time.time() - start, 2)
    return summary
