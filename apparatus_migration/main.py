# -*- coding: utf-8 -*-
"""
CLI da migração do aparato crítico.

Comandos:
    parse            aparato TEI -> parts (JSON por documento e/ou banco)
    report-overlaps  relatório markdown das entradas sobrepostas
    build-index      texto base TEI -> dump JSON do índice de palavras
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Dict, List, Optional

from .config import Config
from .pipeline import PartSink, parse_documents, report_overlaps
from .sinks.json_writer import PartJsonWriter
from .sinks.part_store import PartStore
from .textindex.index_builder import build_dump_from_tei, write_index_dump
from .utils.logging_setup import setup_logging

logger = logging.getLogger(__name__)

OUT_JSON = "json"
OUT_DB = "db"
OUT_BOTH = "both"


# =============================================================================
# COMANDOS
# =============================================================================


def cmd_parse(args, config: Config) -> int:
    output_dir = Path(args.output_dir)
    use_json = args.out in (OUT_JSON, OUT_BOTH)
    use_db = args.out in (OUT_DB, OUT_BOTH)

    store: Optional[PartStore] = None
    if use_db:
        store = PartStore(config.database_url, echo=config.sql_echo)

    writers: Dict[str, PartJsonWriter] = {}

    def sink_factory(document_id: str) -> List[PartSink]:
        sinks: List[PartSink] = []
        if use_json:
            writer = PartJsonWriter(output_dir / f"{document_id}.parts.json")
            writers[document_id] = writer
            sinks.append(writer.save)
        if store is not None:
            sinks.append(store.save)
        return sinks

    def close_writer(document_id: str) -> None:
        writer = writers.pop(document_id, None)
        if writer is not None:
            writer.close()

    summary = parse_documents(
        args.app_dir,
        args.mask,
        sink_factory,
        user_id=config.user_id,
        index_dir=args.index_dir,
        regex_mask=args.regex,
        recursive=args.recursive,
        on_document_done=close_writer,
    )

    print(summary)
    return 0 if not summary.failed_files else 1


def cmd_report_overlaps(args, config: Config) -> int:
    summary = report_overlaps(
        args.app_dir,
        args.mask,
        args.output_path,
        index_dir=args.index_dir,
        regex_mask=args.regex,
        recursive=args.recursive,
    )
    print(f"Input documents: {summary.input_count}")
    print(f"Overlaps: {summary.overlap_count}")
    print(f"Relatório: {args.output_path}")
    return 0 if not summary.failed_files else 1


def cmd_build_index(args, config: Config) -> int:
    dump = build_dump_from_tei(args.text_file, Path(args.text_file).stem)
    write_index_dump(dump, args.output_path)
    word_count = sum(len(row.tokens) for item in dump.items for row in item.rows)
    print(f"Itens: {len(dump.items)}")
    print(f"Palavras: {word_count}")
    return 0


# =============================================================================
# ARGUMENTOS
# =============================================================================


def _add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("app_dir", help="Diretório dos documentos de aparato")
    parser.add_argument("mask", help="Máscara dos arquivos (glob; com -r, regex)")
    parser.add_argument(
        "--regex", "-r",
        action="store_true",
        help="Interpreta a máscara como expressão regular",
    )
    parser.add_argument(
        "--recursive", "-s",
        action="store_true",
        help="Inclui subdiretórios",
    )
    parser.add_argument(
        "--index-dir",
        help="Diretório dos dumps JSON do índice (default: lê o TEI do texto base)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="apparatus-migration",
        description="Migração do aparato crítico TEI para parts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Exemplos:
    apparatus-migration parse corpus "*-app.xml" --out json --output-dir out
    apparatus-migration parse corpus "^verg.*-app\\.xml$" -r --out db
    apparatus-migration report-overlaps corpus "*-app.xml" out/overlaps.md
    apparatus-migration build-index corpus/verg-aen.xml index/verg-aen.json
        """,
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Logging em nível DEBUG",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    p_parse = subparsers.add_parser("parse", help="Converte o aparato em parts")
    _add_input_arguments(p_parse)
    p_parse.add_argument(
        "--out",
        choices=[OUT_JSON, OUT_DB, OUT_BOTH],
        default=OUT_JSON,
        help="Destino das parts (default: json)",
    )
    p_parse.add_argument(
        "--output-dir",
        default=".",
        help="Diretório dos arquivos <doc>.parts.json (default: .)",
    )
    p_parse.set_defaults(func=cmd_parse)

    p_report = subparsers.add_parser("report-overlaps", help="Relatório de sobreposições")
    _add_input_arguments(p_report)
    p_report.add_argument("output_path", help="Arquivo markdown de saída")
    p_report.set_defaults(func=cmd_report_overlaps)

    p_index = subparsers.add_parser("build-index", help="Gera o dump JSON do índice")
    p_index.add_argument("text_file", help="Texto base TEI")
    p_index.add_argument("output_path", help="Arquivo JSON de saída")
    p_index.set_defaults(func=cmd_build_index)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    config = Config.from_env()
    setup_logging("DEBUG" if args.verbose else config.log_level, config.log_file)

    try:
        return args.func(args, config)
    except FileNotFoundError as e:
        logger.error(str(e))
        return 2


if __name__ == "__main__":
    sys.exit(main())
