"""
Tests for ColorContrastRule (1.4.3).
"""

from wcag_fixer.analyzers.color import contrast_ratio_of
from wcag_fixer.analyzers.inline_style import get_declaration
from wcag_fixer.contracts.levels import ComplianceLevel, Severity
from wcag_fixer.rules.color_contrast_rule import ColorContrastRule, is_bold, is_large_text

from tests.helpers import checks, evaluate_and_fix, parse


LOW_CONTRAST = '<p style="color: #777777; background-color: #888888">Low contrast</p>'


class TestContrastDetection:
    """Tests for inline color checks."""

    def setup_method(self):
        self.rule = ColorContrastRule()

    def test_level_is_aa(self):
        assert self.rule.level == ComplianceLevel.AA

    def test_low_contrast(self):
        violations = self.rule.evaluate(parse(LOW_CONTRAST))
        assert checks(violations) == ["low-contrast"]
        assert violations[0].severity == Severity.SERIOUS
        assert violations[0].context["threshold"] == 4.5
        assert violations[0].context["ratio"] < 1.5
        assert violations[0].message.startswith("Insufficient color contrast ratio: ")

    def test_background_from_ancestor(self):
        markup = '<div style="background-color: #000000"><span style="color: #222222">Dim</span></div>'
        violations = self.rule.evaluate(parse(markup))
        assert checks(violations) == ["low-contrast"]
        assert violations[0].location == "/div/span"

    def test_background_shorthand(self):
        markup = '<p style="color: #777777; background: #888888 url(bg.png) no-repeat">Text</p>'
        assert checks(self.rule.evaluate(parse(markup))) == ["low-contrast"]

    def test_large_text_uses_lower_threshold(self):
        heading = '<h1 style="color: #888888; background-color: #ffffff">Title</h1>'
        paragraph = '<p style="color: #888888; background-color: #ffffff">Body</p>'
        assert self.rule.evaluate(parse(heading)) == []
        assert checks(self.rule.evaluate(parse(paragraph))) == ["low-contrast"]

    def test_uppercase_unit_counts_as_large_text(self):
        markup = '<p style="font-size: 24PX; color: #888888; background-color: #ffffff">Body</p>'
        assert self.rule.evaluate(parse(markup)) == []

    def test_sufficient_contrast_passes(self):
        markup = '<p style="color: #333333; background-color: #ffffff">Readable</p>'
        assert self.rule.evaluate(parse(markup)) == []

    def test_light_text_without_background(self):
        violations = self.rule.evaluate(parse('<p style="color: #eeeeee">Faint</p>'))
        assert checks(violations) == ["light-text"]
        assert violations[0].severity == Severity.MODERATE

    def test_light_text_on_background_class(self):
        markup = '<div class="bg-dark"><p style="color: #eeeeee">Faint</p></div>'
        assert self.rule.evaluate(parse(markup)) == []

    def test_form_control(self):
        markup = '<input type="text" style="color: #777777; background-color: #888888">'
        violations = self.rule.evaluate(parse(markup))
        assert checks(violations) == ["low-contrast"]
        assert violations[0].message.startswith("Form control has insufficient")

    def test_form_control_light_text_not_flagged(self):
        assert self.rule.evaluate(parse('<input type="text" style="color: #eeeeee">')) == []

    def test_invisible_elements_skipped(self):
        markup = (
            '<p style="color: #777777; background-color: #888888; opacity: 0">A</p>'
            '<div style="opacity: 0"><p style="color: #777777; background-color: #888888">B</p></div>'
            '<p hidden style="color: #777777; background-color: #888888">C</p>'
        )
        assert self.rule.evaluate(parse(markup)) == []

    def test_color_only(self):
        violations = self.rule.evaluate(parse('<span class="text-danger">Payment failed</span>'))
        assert checks(violations) == ["color-only"]
        assert violations[0].auto_fixable is False

    def test_color_with_cue(self):
        markup = (
            '<span class="text-danger">Payment failed!</span>'
            '<span class="text-danger" title="Error">Payment failed</span>'
            '<span class="text-danger"><i class="fa fa-warning"></i> Payment failed</span>'
        )
        assert self.rule.evaluate(parse(markup)) == []


class TestContrastFix:
    """Tests for color adjustments."""

    def setup_method(self):
        self.rule = ColorContrastRule()

    def test_text_color_switched(self):
        _, fixes, working = evaluate_and_fix(self.rule, LOW_CONTRAST)
        assert fixes == 1
        style = working.select_one("p")["style"]
        assert get_declaration(style, "color") == "#000000"
        assert contrast_ratio_of("#000000", "#888888") >= 4.5

    def test_dark_background_gets_white_text(self):
        markup = '<div style="background-color: #111111"><span style="color: #333333">Dim</span></div>'
        _, _, working = evaluate_and_fix(self.rule, markup)
        assert get_declaration(working.select_one("span")["style"], "color") == "#ffffff"

    def test_light_text_gets_background(self):
        _, fixes, working = evaluate_and_fix(self.rule, '<p style="color: #eeeeee">Faint</p>')
        assert fixes == 1
        style = working.select_one("p")["style"]
        assert get_declaration(style, "color") == "#eeeeee"
        assert get_declaration(style, "background-color") == "#000000"

    def test_fixed_document_passes(self):
        _, _, working = evaluate_and_fix(self.rule, LOW_CONTRAST)
        working.reindex()
        assert self.rule.evaluate(working) == []

    def test_fix_is_idempotent(self):
        document = parse(LOW_CONTRAST)
        violations = self.rule.evaluate(document)
        working = document.clone()
        assert self.rule.apply_fixes(working, violations) == 1
        assert self.rule.apply_fixes(working, violations) == 0


class TestTextSize:

    def test_headings_are_large(self):
        assert is_large_text(parse("<h2>x</h2>").select_one("h2"))

    def test_font_sizes(self):
        assert is_large_text(parse('<p style="font-size: 18pt">x</p>').select_one("p"))
        assert is_large_text(parse('<p style="font-size: 19px; font-weight: bold">x</p>').select_one("p"))
        assert not is_large_text(parse('<p style="font-size: 19px">x</p>').select_one("p"))

    def test_units_are_case_insensitive(self):
        assert is_large_text(parse('<p style="font-size: 24PX">x</p>').select_one("p"))
        assert is_large_text(parse('<p style="font-size: 1.5Em">x</p>').select_one("p"))

    def test_is_bold(self):
        assert is_bold("700")
        assert is_bold("bold !important")
        assert not is_bold("400")
        assert not is_bold("")
