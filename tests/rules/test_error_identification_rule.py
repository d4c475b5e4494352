"""
Tests for ErrorIdentificationRule (3.3.1).
"""

from wcag_fixer.contracts.levels import Severity
from wcag_fixer.rules.error_identification_rule import ErrorIdentificationRule, is_live_region

from tests.helpers import checks, evaluate_and_fix, parse


class TestErrorDetection:
    """Tests for error identification findings."""

    def setup_method(self):
        self.rule = ErrorIdentificationRule()

    def test_error_container_not_live(self):
        violations = self.rule.evaluate(parse('<span class="error">Something went wrong</span>'))
        assert checks(violations) == ["error-container"]
        assert violations[0].severity == Severity.SERIOUS

    def test_live_error_container(self):
        markup = (
            '<div class="error" role="alert">Oops</div>'
            '<div class="field-error" aria-live="polite">Oops</div>'
        )
        assert self.rule.evaluate(parse(markup)) == []

    def test_form_controls_are_not_containers(self):
        assert self.rule.evaluate(parse('<input type="text" class="invalid" aria-label="Code">')) == []

    def test_required_field(self):
        violations = self.rule.evaluate(parse('<input type="email" required>'))
        assert checks(violations) == ["required-field"]

    def test_dangling_describedby(self):
        markup = '<input type="text" aria-describedby="hint gone"><p id="hint">Use 8 characters</p>'
        violations = self.rule.evaluate(parse(markup))
        assert checks(violations) == ["dangling-describedby"]
        assert violations[0].context["missing_ids"] == ("gone",)
        assert violations[0].auto_fixable is False

    def test_invalid_without_message(self):
        violations = self.rule.evaluate(parse('<input type="text" aria-invalid="true">'))
        assert checks(violations) == ["invalid-without-message"]

    def test_invalid_with_message(self):
        markup = '<input type="text" aria-invalid="true" aria-errormessage="msg"><p id="msg">Bad</p>'
        assert self.rule.evaluate(parse(markup)) == []


class TestErrorFix:
    """Tests for error identification fixes."""

    def setup_method(self):
        self.rule = ErrorIdentificationRule()

    def test_container_becomes_alert(self):
        _, fixes, working = evaluate_and_fix(self.rule, '<span class="error">Something went wrong</span>')
        assert fixes == 1
        span = working.select_one("span")
        assert span["role"] == "alert"
        assert span["aria-live"] == "assertive"
        assert is_live_region(span)

    def test_required_field_marked(self):
        _, fixes, working = evaluate_and_fix(self.rule, '<textarea required></textarea>')
        assert fixes == 1
        assert working.select_one("textarea")["aria-required"] == "true"

    def test_unfixable_findings_ignored(self):
        _, fixes, working = evaluate_and_fix(self.rule, '<input type="text" aria-invalid="true">')
        assert fixes == 0
        assert not working.select_one("input").has_attr("aria-describedby")

    def test_fix_is_idempotent(self):
        document = parse('<span class="error">x</span><input type="text" required>')
        violations = self.rule.evaluate(document)
        working = document.clone()
        assert self.rule.apply_fixes(working, violations) == 2
        assert self.rule.apply_fixes(working, violations) == 0
