# -*- coding: utf-8 -*-
"""
Testes do pipeline em lote e da CLI.

Usa o corpus_dir do conftest:
    verg-aen.xml       texto base
    verg-aen-app.xml   3 apps (2 sobrepostos em d001, 1 em d002)
"""

import json

import pytest

from apparatus_migration.main import main
from apparatus_migration.pipeline import load_text_index, parse_documents, report_overlaps
from apparatus_migration.sinks.part_store import PartStore
from apparatus_migration.textindex.index_builder import build_dump_from_tei, write_index_dump


@pytest.fixture(autouse=True)
def _isolated_env(monkeypatch, tmp_path):
    monkeypatch.delenv("LOG_FILE", raising=False)
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")


class TestParseDocuments:
    """Aparato -> parts -> sinks."""

    def test_parts_sent_to_sinks(self, corpus_dir):
        received = []
        done = []

        summary = parse_documents(
            corpus_dir,
            "*-app.xml",
            lambda document_id: [received.append],
            on_document_done=done.append,
        )

        assert summary.input_count == 1
        assert summary.part_count == 2
        assert summary.overlap_count == 1
        assert summary.failed_files == []
        assert [p.item_id for p in received] == ["d001", "d002"]
        assert done == ["verg-aen"]

    def test_missing_text_file_continues(self, corpus_dir):
        (corpus_dir / "hor-carm-app.xml").write_text("<x/>", encoding="utf-8")

        summary = parse_documents(corpus_dir, "*-app.xml", lambda document_id: [])

        assert summary.input_count == 2
        assert summary.failed_files == ["hor-carm-app.xml"]
        assert summary.part_count == 2

    def test_index_dir(self, corpus_dir, tmp_path):
        index_dir = tmp_path / "index"
        dump = build_dump_from_tei(corpus_dir / "verg-aen.xml", "verg-aen")
        write_index_dump(dump, index_dir / "verg-aen.json")
        (corpus_dir / "verg-aen.xml").unlink()

        index = load_text_index(corpus_dir / "verg-aen-app.xml", index_dir)

        assert index.find("d002w2").point == "1.2"

    def test_summary_text(self, corpus_dir):
        summary = parse_documents(corpus_dir, "*-app.xml", lambda document_id: [])

        assert "Documentos de entrada: 1" in str(summary)
        assert "Parts: 2" in str(summary)

    def test_document_done_called_on_failure(self, corpus_dir):
        """Falha depois de criar os sinks ainda fecha o documento."""
        (corpus_dir / "verg-aen-app.xml").write_text(
            '<TEI xmlns="http://www.tei-c.org/ns/1.0"><teiHeader/></TEI>',
            encoding="utf-8",
        )
        opened = []
        done = []

        summary = parse_documents(
            corpus_dir,
            "*-app.xml",
            lambda document_id: opened.append(document_id) or [],
            on_document_done=done.append,
        )

        assert summary.failed_files == ["verg-aen-app.xml"]
        assert opened == ["verg-aen"]
        assert done == ["verg-aen"]


class TestReportOverlaps:

    def test_report_written(self, corpus_dir, tmp_path):
        output = tmp_path / "out" / "overlaps.md"

        summary = report_overlaps(corpus_dir, "*-app.xml", output)

        text = output.read_text(encoding="utf-8")
        assert text.startswith("# Overlaps Report\n\nInput: `")
        assert "## Overlap 1" in text
        assert "## Overlap 2" not in text
        assert summary.overlap_count == 1
        assert summary.input_count == 1

    def test_report_written_without_inputs(self, tmp_path):
        (tmp_path / "vazio").mkdir()
        output = tmp_path / "overlaps.md"

        summary = report_overlaps(tmp_path / "vazio", "*-app.xml", output)

        assert output.exists()
        assert summary.overlap_count == 0


class TestCli:
    """apparatus-migration parse / report-overlaps / build-index."""

    def test_parse_json(self, corpus_dir, tmp_path, capsys):
        out_dir = tmp_path / "json"

        code = main(["parse", str(corpus_dir), "*-app.xml", "--output-dir", str(out_dir)])

        assert code == 0
        data = json.loads((out_dir / "verg-aen.parts.json").read_text(encoding="utf-8"))
        assert [p["itemId"] for p in data] == ["d001", "d002"]
        assert "Parts: 2" in capsys.readouterr().out

    def test_parse_json_failed_document_closed(self, corpus_dir, tmp_path):
        (corpus_dir / "verg-aen-app.xml").write_text(
            '<TEI xmlns="http://www.tei-c.org/ns/1.0"><teiHeader/></TEI>',
            encoding="utf-8",
        )
        out_dir = tmp_path / "json"

        code = main(["parse", str(corpus_dir), "*-app.xml", "--output-dir", str(out_dir)])

        assert code == 1
        data = json.loads((out_dir / "verg-aen.parts.json").read_text(encoding="utf-8"))
        assert data == []

    def test_parse_db(self, corpus_dir, tmp_path):
        code = main(["parse", str(corpus_dir), "*-app.xml", "--out", "db"])

        assert code == 0
        store = PartStore(f"sqlite:///{tmp_path / 'cli.db'}")
        assert len(store.list_by_document("verg-aen")) == 2

    def test_report_overlaps(self, corpus_dir, tmp_path, capsys):
        output = tmp_path / "overlaps.md"

        code = main(["report-overlaps", str(corpus_dir), "*-app.xml", str(output)])

        assert code == 0
        assert output.exists()
        out = capsys.readouterr().out
        assert "Input documents: 1" in out
        assert "Overlaps: 1" in out

    def test_build_index(self, corpus_dir, tmp_path):
        output = tmp_path / "verg-aen.json"

        code = main(["build-index", str(corpus_dir / "verg-aen.xml"), str(output)])

        assert code == 0
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["documentId"] == "verg-aen"

    def test_missing_directory(self, tmp_path):
        assert main(["parse", str(tmp_path / "nada"), "*-app.xml"]) == 2
