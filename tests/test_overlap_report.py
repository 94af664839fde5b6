# -*- coding: utf-8 -*-
"""
Testes do relatório de sobreposições.
"""

import io

from lxml import etree

from apparatus_migration.parsing.errors import IssueKind
from apparatus_migration.reports.overlap_report import (
    OverlapReportEngine,
    OverlapReportWriter,
    is_overlappable,
)


class TestIsOverlappable:
    """Elegibilidade de um app."""

    def test_regular_app(self):
        assert is_overlappable(etree.fromstring("<app><lem>x</lem></app>"))

    def test_margin_note_excluded(self):
        assert not is_overlappable(etree.fromstring('<app type="margin-note"><lem>x</lem></app>'))

    def test_all_ancient_excluded(self):
        app = etree.fromstring(
            '<app><lem type="ancient-note">x</lem><rdg type="ancient-note">y</rdg></app>'
        )

        assert not is_overlappable(app)

    def test_mixed_included(self):
        app = etree.fromstring('<app><lem>x</lem><rdg type="ancient-note">y</rdg></app>')

        assert is_overlappable(app)

    def test_note_only_excluded(self):
        assert not is_overlappable(etree.fromstring("<app><note>x</note></app>"))


class TestOverlapReportEngine:
    """Detecção de pares sobrepostos."""

    def test_pair_reported_once(self, make_apparatus, index, context):
        doc = make_apparatus(
            '<app from="#d001w1" to="#d001w3"><lem>arma virumque cano</lem></app>\n'
            '<app from="#d001w2"><lem>virumque</lem></app>\n'
            '<app loc="#d001w3"><lem>cano</lem></app>\n'
        )

        result = OverlapReportEngine(index, context).run(doc, "verg-aen-app.xml")

        assert result.checked_count == 3
        # app 1: só o primeiro parceiro; app 2 e app 3 não se sobrepõem
        assert len(result.records) == 1
        record = result.records[0]
        assert record.file_name == "verg-aen-app.xml"
        assert [loc.word_id for loc in record.shared] == ["d001w2"]
        assert 'from="#d001w2"' in record.markup_b

    def test_span_covers_inner_words(self, make_apparatus, index, context):
        doc = make_apparatus(
            '<app from="#d001w1" to="#d001w4"><lem>x</lem></app>'
            '<app loc="#d001w3 #d002w1"><lem>y</lem></app>'
            '<app loc="#d001w3"><lem>cano</lem></app>'
        )

        result = OverlapReportEngine(index, context).run(doc, "a.xml")

        # o segundo app é cross-item e fica fora
        assert context.count(IssueKind.CROSS_ITEM_REFERENCE) == 1
        assert result.checked_count == 2
        assert [loc.word_id for loc in result.records[0].shared] == ["d001w3"]

    def test_excluded_apps_not_reported(self, make_apparatus, index, context):
        doc = make_apparatus(
            '<app from="#d001w1"><lem>arma</lem></app>'
            '<app from="#d001w1" type="margin-note"><note>in marg.</note></app>'
            '<app from="#d001w1"><rdg type="ancient-note">schol.</rdg></app>'
        )

        result = OverlapReportEngine(index, context).run(doc, "a.xml")

        assert result.records == []

    def test_unresolved_skipped(self, make_apparatus, index, context):
        doc = make_apparatus('<app from="#zzz"><lem>x</lem></app>')

        result = OverlapReportEngine(index, context).run(doc, "a.xml")

        assert result.checked_count == 0
        assert context.count(IssueKind.UNRESOLVED_REFERENCE) == 1


class TestOverlapReportWriter:
    """Formato markdown."""

    def test_empty_report_has_header(self):
        out = io.StringIO()
        writer = OverlapReportWriter(out)
        writer.write_header("corpus/*-app.xml")
        writer.write_records([])

        assert out.getvalue() == "# Overlaps Report\n\nInput: `corpus/*-app.xml`\n\n"
        assert writer.overlap_count == 0

    def test_records_numbered_across_documents(self, make_apparatus, index, context):
        doc = make_apparatus(
            '<app from="#d001w1"><lem>arma</lem></app>'
            '<app loc="#d001w1"><lem>arma</lem></app>'
        )
        engine = OverlapReportEngine(index, context)
        out = io.StringIO()
        writer = OverlapReportWriter(out)

        writer.write_records(engine.run(doc, "a-app.xml").records)
        writer.write_records(engine.run(doc, "b-app.xml").records)

        text = out.getvalue()
        assert "## Overlap 1\n\na-app.xml at " in text
        assert "## Overlap 2\n\nb-app.xml at " in text
        assert "`d001w1`=`arma` (1.1)" in text
        assert text.count("```xml\n") == 4
