# -*- coding: utf-8 -*-
"""
Testes do PartSplitter (principal / ancient / margin).
"""

from apparatus_migration.parsing.apparatus_models import (
    ROLE_ANCIENT,
    ROLE_MARGIN,
    ApparatusEntry,
    Fragment,
    Part,
)
from apparatus_migration.parsing.errors import IssueKind
from apparatus_migration.parsing.part_splitter import (
    TYPE_ANCIENT_NOTE,
    PartSplitter,
    part_has_overlaps,
)


def _entry(value: str, tag: str = None) -> ApparatusEntry:
    return ApparatusEntry(tag=tag, value=value)


def _part(*fragments: Fragment) -> Part:
    return Part(item_id="d001", thesaurus_scope="verg-aen", fragments=list(fragments))


class TestPartSplitter:
    """Distribuição dos fragmentos por categoria."""

    def test_plain_part_unchanged(self, context):
        part = _part(Fragment("1.1", "a1", [_entry("arma")]))

        parts = PartSplitter(context).split(part)

        assert parts == [part]
        assert part.role_id is None

    def test_three_way_split(self, context):
        """Margem inteira, ancient inteiro e fragmento misto."""
        plain = Fragment("1.1", "a1", [_entry("arma")])
        margin = Fragment("1.2", "a1 margin-note", [_entry("in marg.")])
        mixed = Fragment("1.3", "a1", [
            _entry("cano"),
            _entry("canto", TYPE_ANCIENT_NOTE),
        ])
        ancient = Fragment("2.1", "a1", [_entry("schol.", TYPE_ANCIENT_NOTE)])
        part = _part(plain, margin, mixed, ancient)

        main_part, ancient_part, margin_part = PartSplitter(context).split(part)

        assert main_part is part
        assert [fr.location for fr in main_part.fragments] == ["1.1", "1.3"]
        assert [e.value for e in main_part.fragments[1].entries] == ["cano"]

        assert ancient_part.role_id == ROLE_ANCIENT
        assert [fr.location for fr in ancient_part.fragments] == ["1.3", "2.1"]
        assert ancient_part.fragments[0].tag == "a1"
        assert [e.value for e in ancient_part.fragments[0].entries] == ["canto"]

        assert margin_part.role_id == ROLE_MARGIN
        assert margin_part.fragments == [margin]

    def test_new_parts_inherit_item(self, context):
        part = _part(Fragment("1.1", "a1", [_entry("x", TYPE_ANCIENT_NOTE)]))
        part.user_id = "hera"

        main_part, ancient_part = PartSplitter(context).split(part)

        assert main_part.fragments == []
        assert ancient_part.item_id == "d001"
        assert ancient_part.thesaurus_scope == "verg-aen"
        assert ancient_part.user_id == "hera"
        assert ancient_part.id != main_part.id

    def test_entries_land_in_exactly_one_part(self, context):
        part = _part(
            Fragment("1.1", "a1", [_entry("a"), _entry("b", TYPE_ANCIENT_NOTE)]),
            Fragment("1.2", "a1 margin-note", [_entry("c")]),
        )
        total = part.entry_count

        parts = PartSplitter(context).split(part)

        assert sum(p.entry_count for p in parts) == total

    def test_overlap_recheck_recorded(self, context):
        part = _part(
            Fragment("1.1-1.3", "a1", [_entry("a")]),
            Fragment("1.2", "a1", [_entry("b")]),
        )

        parts = PartSplitter(context).split(part)

        assert len(parts) == 1
        assert context.count(IssueKind.PART_OVERLAP) == 1
        assert context.count(IssueKind.OVERLAP_DETECTED) == 0

    def test_part_has_overlaps(self):
        assert part_has_overlaps(_part(Fragment("1.1"), Fragment("1.1-1.2")))
        assert not part_has_overlaps(_part(Fragment("1.1"), Fragment("1.2")))
