import pytest

from pyx_shared.exceptions import ConfigurationError
from pyx_shared.models.cards import ReplacementTable, RunStyle, StyledRun

from card_importer.services.diagnostics import (
    INCONSISTENT_FORMATTING,
    UNHANDLED_CHARACTER,
    UNKNOWN_FORMATTING,
    ImportDiagnostics,
)
from card_importer.services.rich_text_formatter import (
    NormalizationMemo,
    RichTextFormatter,
    normalize_blanks,
    style_markers,
)

BOLD = RunStyle(bold=True)
ITALIC = RunStyle(italic=True)
UNDERLINE = RunStyle(underline=True)


class TestRichTextFormatter:
    def test_underscores(self, formatter):
        runs = [StyledRun("a1_b2__c3___d4____e5_____f8________g")]
        assert formatter.format(runs) == "a1_b2__c3___d4____e5____f8____g"

    def test_simple(self, formatter):
        assert formatter.format([StyledRun("Simple string!")]) == "Simple string!"

    def test_replacements(self, formatter, diagnostics):
        runs = [StyledRun("Hello & welcome!\nPlease come back mañana. :>")]
        assert formatter.format(runs) == "Hello &amp; welcome!<br>Please come back ma&ntilde;ana. :&gt;"
        # ñ was replaced, so nothing is left to report
        assert diagnostics.anomalies == []

    def test_bold_only(self, formatter):
        assert formatter.format([StyledRun("This is bold!", BOLD)]) == "<b>This is bold!</b>"

    def test_mixed_style(self, formatter):
        runs = [
            StyledRun("Plain. "),
            StyledRun("Italic. ", ITALIC),
            StyledRun("Underline.", UNDERLINE),
            StyledRun(" More plain."),
        ]
        assert formatter.format(runs) == "Plain. <i>Italic.</i> <u>Underline.</u> More plain."

    def test_overlapped(self, formatter):
        runs = [
            StyledRun("You said "),
            StyledRun("what", RunStyle(bold=True, italic=True)),
            StyledRun(" happened?!"),
        ]
        assert formatter.format(runs) == "You said <b><i>what</i></b> happened?!"

    def test_all_flags_nest_in_reverse_order(self, formatter):
        runs = [StyledRun("x", RunStyle(bold=True, italic=True, underline=True))]
        assert formatter.format(runs) == "<b><i><u>x</u></i></b>"

    def test_replacements_in_bold(self, formatter):
        runs = [StyledRun("More fun & awesome bold! :>", BOLD)]
        assert formatter.format(runs) == "<b>More fun &amp; awesome bold! :&gt;</b>"

    def test_separator_kept_before_punctuation(self, formatter):
        runs = [StyledRun("Who did "), StyledRun("what", BOLD), StyledRun("?")]
        assert formatter.format(runs) == "Who did <b>what</b> ?"

    def test_whitespace_after_styled_run_collapses_to_one_space(self, formatter):
        runs = [StyledRun("x", BOLD), StyledRun("   y")]
        assert formatter.format(runs) == "<b>x</b> y"

    def test_whitespace_only_run_between_styled_runs(self, formatter):
        runs = [StyledRun("one", BOLD), StyledRun("  "), StyledRun("two", ITALIC)]
        assert formatter.format(runs) == "<b>one</b> <i>two</i>"

    def test_plain_text_keeps_inner_spacing(self, formatter):
        runs = [StyledRun("a  b", BOLD), StyledRun(" c  d")]
        assert formatter.format(runs) == "<b>a  b</b> c  d"

    def test_adjacent_styled_runs_are_separated(self, formatter):
        runs = [StyledRun("one", BOLD), StyledRun("two", ITALIC)]
        assert formatter.format(runs) == "<b>one</b> <i>two</i>"

    def test_long_blank_inside_styled_run(self, formatter):
        runs = [StyledRun("Fill in "), StyledRun("_________", UNDERLINE), StyledRun(".")]
        assert formatter.format(runs) == "Fill in <u>____</u> ."

    def test_unformatted_mode_emits_text_only(self, replacements, diagnostics):
        formatter = RichTextFormatter(replacements, format_text=False, diagnostics=diagnostics)
        runs = [
            StyledRun("You said "),
            StyledRun("what", RunStyle(bold=True, italic=True)),
            StyledRun(" happened?!"),
        ]
        assert formatter.format(runs) == "You said what happened?!"
        assert diagnostics.anomalies == []

    def test_unknown_formatting_is_reported(self, formatter, diagnostics):
        assert formatter.format([StyledRun("Colored text", RunStyle())]) == "Colored text"
        anomalies = diagnostics.by_code(UNKNOWN_FORMATTING)
        assert len(anomalies) == 1
        assert anomalies[0].evidence["segment"] == "Colored text"

    def test_unknown_formatting_reported_when_unformatted(self, replacements, diagnostics):
        formatter = RichTextFormatter(replacements, format_text=False, diagnostics=diagnostics)
        formatter.format([StyledRun("bold", BOLD), StyledRun("colored", RunStyle())])
        assert len(diagnostics.by_code(UNKNOWN_FORMATTING)) == 1

    def test_unhandled_character_is_reported_not_changed(self, formatter, diagnostics):
        assert formatter.format([StyledRun("Café")]) == "Café"
        anomalies = diagnostics.by_code(UNHANDLED_CHARACTER)
        assert len(anomalies) == 1
        assert anomalies[0].evidence["character"] == "é"
        assert anomalies[0].text == "Café"

    def test_inconsistent_formatting_of_same_text(self, formatter, diagnostics):
        assert formatter.format([StyledRun("Big deal")]) == "Big deal"
        assert formatter.format([StyledRun("Big deal")]) == "Big deal"
        assert diagnostics.by_code(INCONSISTENT_FORMATTING) == []

        assert formatter.format([StyledRun("Big", BOLD), StyledRun(" deal")]) == "<b>Big</b> deal"
        anomalies = diagnostics.by_code(INCONSISTENT_FORMATTING)
        assert len(anomalies) == 1
        assert anomalies[0].evidence["previous"] == "Big deal"

    def test_memo_is_keyed_by_trimmed_text(self, formatter):
        formatter.format([StyledRun("  padded  ")])
        assert formatter.memo.get("padded") == "padded"
        assert formatter.memo.get("  padded  ") is None

    def test_formatters_do_not_share_memo(self, replacements):
        first = RichTextFormatter(replacements, diagnostics=ImportDiagnostics())
        second_diagnostics = ImportDiagnostics()
        second = RichTextFormatter(replacements, diagnostics=second_diagnostics)

        first.format([StyledRun("Big deal")])
        second.format([StyledRun("Big", BOLD), StyledRun(" deal")])
        assert second_diagnostics.anomalies == []


class TestReplacementTable:
    def test_order_sensitive_application(self):
        table = ReplacementTable.from_pairs([("&", "&amp;"), ("<", "&lt;")])
        assert table.apply("a&b<c") == "a&amp;b&lt;c"

    def test_entities_are_not_substituted_twice(self, plain_formatter):
        formatter = RichTextFormatter(
            ReplacementTable.from_pairs([("&", "&amp;"), ("<", "&lt;")]),
            diagnostics=plain_formatter.diagnostics,
        )
        assert formatter.format([StyledRun("a&b<c")]) == "a&amp;b&lt;c"
        assert formatter.format([StyledRun("a&amp;b")]) == "a&amp;amp;b"

    def test_rejects_source_inside_earlier_target(self):
        with pytest.raises(ConfigurationError):
            ReplacementTable.from_pairs([("<", "&lt;"), ("&", "&amp;")])

    def test_rejects_empty_source(self):
        with pytest.raises(ConfigurationError) as exc:
            ReplacementTable.from_pairs([("&", "&amp;"), ("", "x")])
        assert exc.value.details["index"] == 1


class TestBlankNormalization:
    @pytest.mark.parametrize(
        "text",
        ["", "____", "_____", "a ______ b ________ c", "_ __ ___", "no blanks"],
    )
    def test_collapse_is_idempotent(self, text):
        once = normalize_blanks(text)
        assert normalize_blanks(once) == once
        assert "_____" not in once

    def test_short_runs_untouched(self):
        assert normalize_blanks("_ __ ___ ____") == "_ __ ___ ____"


def test_style_markers_order():
    assert style_markers(RunStyle(bold=True, underline=True)) == ("<b><u>", "</u></b>")
    assert style_markers(RunStyle()) == ("", "")


def test_memo_records_first_result():
    memo = NormalizationMemo()
    assert memo.record("x", "x") is None
    assert memo.record("x", "<b>x</b>") == "x"
    assert memo.get("x") == "x"
    assert len(memo) == 1
