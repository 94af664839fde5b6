"""
Testes do InlineFormatter (diretivas {f=...}).
"""

from apparatus_migration.parsing.context import ParseContext
from apparatus_migration.parsing.errors import IssueKind
from apparatus_migration.parsing.inline_formatter import InlineFormatter


class TestInlineFormatter:
    """Diretivas de estilo -> markdown/HTML."""

    def test_italic(self):
        assert InlineFormatter().format("{f=i}x{/f}") == "_x_"

    def test_bold(self):
        assert InlineFormatter().format("{f=b}x{/f}") == "__x__"

    def test_superscript(self):
        assert InlineFormatter().format("{f=u}x{/f}") == "<sup>x</sup>"

    def test_subscript(self):
        assert InlineFormatter().format("{f=d}x{/f}") == "<sub>x</sub>"

    def test_nested_closes_lifo(self):
        assert InlineFormatter().format("{f=i}a{f=b}b{/f}c{/f}") == "_a__b__c_"

    def test_unknown_directive_verbatim(self):
        assert InlineFormatter().format("vide {cf} 12") == "vide {cf} 12"

    def test_plain_text_unchanged(self):
        assert InlineFormatter().format("sine stilo") == "sine stilo"

    def test_empty_and_none(self):
        assert InlineFormatter().format("") == ""
        assert InlineFormatter().format(None) is None

    def test_unmatched_close_is_noop(self):
        """{/f} sem abertura não emite nada e é registrado."""
        context = ParseContext()
        result = InlineFormatter(context).format("a{/f}b")

        assert result == "ab"
        assert context.count(IssueKind.UNMATCHED_CLOSING_DIRECTIVE) == 1

    def test_open_directive_not_closed(self):
        assert InlineFormatter().format("{f=i}aperta") == "_aperta"

    def test_stack_is_per_call(self):
        formatter = InlineFormatter()
        formatter.format("{f=b}x")

        assert formatter.format("y{/f}") == "y"
