"""
Tests for KeyboardRule (2.1.1) and FocusOrderRule (2.4.3).
"""

from wcag_fixer.contracts.levels import Severity
from wcag_fixer.rules.focus_order_rule import FocusOrderRule
from wcag_fixer.rules.keyboard_rule import KeyboardRule, is_mouse_only

from tests.helpers import checks, evaluate_and_fix, parse


class TestKeyboardDetection:
    """Tests for keyboard access findings."""

    def setup_method(self):
        self.rule = KeyboardRule()

    def test_mouse_only_container(self):
        violations = self.rule.evaluate(parse('<div onclick="openMenu()">Menu</div>'))
        assert checks(violations) == ["mouse-only"]
        assert violations[0].severity == Severity.CRITICAL

    def test_native_controls_and_key_handlers_pass(self):
        markup = (
            '<button onclick="save()">Save</button>'
            '<a href="/x" onclick="track()">Link</a>'
            '<div onclick="open()" onkeydown="open()">Menu</div>'
        )
        assert self.rule.evaluate(parse(markup)) == []

    def test_positive_tabindex(self):
        violations = self.rule.evaluate(parse('<a href="/a" tabindex="3">A</a>'))
        assert checks(violations) == ["positive-tabindex"]
        assert "(3)" in violations[0].message

    def test_negative_tabindex_on_interactive_element(self):
        violations = self.rule.evaluate(parse('<button tabindex="-1">Go</button>'))
        assert checks(violations) == ["negative-tabindex"]

    def test_negative_tabindex_on_plain_element(self):
        assert self.rule.evaluate(parse('<div tabindex="-1">Panel</div>')) == []

    def test_drag_only(self):
        violations = self.rule.evaluate(parse('<div draggable="true">Card</div>'))
        assert checks(violations) == ["drag-only"]
        assert violations[0].auto_fixable is False

    def test_drag_with_keyboard_alternative(self):
        markup = '<div draggable="true" onkeydown="move(event)">Card</div>'
        assert self.rule.evaluate(parse(markup)) == []


class TestKeyboardFix:
    """Tests for keyboard remediation."""

    def setup_method(self):
        self.rule = KeyboardRule()

    def test_mouse_only_gets_enter_handler(self):
        _, fixes, working = evaluate_and_fix(self.rule, '<div onclick="openMenu();">Menu</div>')
        assert fixes == 1
        div = working.select_one("div")
        assert div["onkeydown"] == "if (event.key === 'Enter') { openMenu(); }"
        assert div["tabindex"] == "0"
        assert div["role"] == "button"
        assert not is_mouse_only(div)

    def test_existing_role_kept_and_negative_tabindex_reset(self):
        markup = '<li onclick="pick()" tabindex="-1" role="option">One</li>'
        _, _, working = evaluate_and_fix(self.rule, markup)
        li = working.select_one("li")
        assert li["tabindex"] == "0"
        assert li["role"] == "option"
        assert li.has_attr("onkeydown")

    def test_negative_tabindex_resolved_in_one_pass(self):
        _, fixes, working = evaluate_and_fix(self.rule, '<div onclick="go()" tabindex="-1">Go</div>')
        assert fixes == 1
        assert working.select_one("div")["tabindex"] == "0"
        working.reindex()
        assert self.rule.evaluate(working) == []

    def test_tabindex_normalized(self):
        markup = '<a href="/a" tabindex="2">A</a><input type="text" tabindex="-1">'
        _, fixes, working = evaluate_and_fix(self.rule, markup)
        assert fixes == 2
        assert [el["tabindex"] for el in working.select("[tabindex]")] == ["0", "0"]

    def test_fix_is_idempotent(self):
        document = parse('<span onclick="go()">Go</span>')
        violations = self.rule.evaluate(document)
        working = document.clone()
        assert self.rule.apply_fixes(working, violations) == 1
        assert self.rule.apply_fixes(working, violations) == 0


class TestFocusOrder:
    """Tests for FocusOrderRule."""

    def setup_method(self):
        self.rule = FocusOrderRule()

    def test_positive_tabindex(self):
        markup = '<input type="text" tabindex="1"><input type="text" tabindex="0">'
        violations = self.rule.evaluate(parse(markup))
        assert checks(violations) == ["positive-tabindex"]

    def test_fix(self):
        _, fixes, working = evaluate_and_fix(self.rule, '<a href="/" tabindex="5">Home</a>')
        assert fixes == 1
        assert working.select_one("a")["tabindex"] == "0"

    def test_nothing_left_after_keyboard_fix(self):
        document = parse('<a href="/" tabindex="5">Home</a>')
        keyboard_violations = KeyboardRule().evaluate(document)
        focus_violations = self.rule.evaluate(document)
        working = document.clone()
        assert KeyboardRule().apply_fixes(working, keyboard_violations) == 1
        assert self.rule.apply_fixes(working, focus_violations) == 0
