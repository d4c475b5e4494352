"""
KeyboardRule - 2.1.1 Keyboard.

Findings:
- mouse-only: mouse handlers on an element that is not natively focusable
  and has no key handler (fix: Enter-key handler, tabindex=0 unless already
  non-negative, role=button on generic containers)
- positive-tabindex: tabindex > 0 (fix: tabindex=0)
- negative-tabindex: interactive element removed from tab order (fix: 0)
- drag-only: drag and drop without keyboard alternative (not fixable)
"""

import logging
from typing import List, Optional, Sequence

from bs4 import Tag

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel, Severity
from ..contracts.violation import Violation
from .base_rule import WcagRule
from .helpers import fixable_targets, make_violation, tabindex_of


logger = logging.getLogger(__name__)

MOUSE_HANDLERS = ("onclick", "onmousedown", "onmouseup", "ondblclick", "onmouseover")

KEY_HANDLERS = ("onkeypress", "onkeydown", "onkeyup")

NATIVELY_FOCUSABLE = ("a", "button", "input", "select", "textarea", "option", "summary")

INTERACTIVE_SELECTOR = (
    'a[href], button, input:not([type="hidden"]), select, textarea, '
    '[role="button"], [role="link"]'
)

DRAG_SELECTOR = '[draggable="true"], [ondrag], [ondragstart], [ondrop]'

GENERIC_CONTAINERS = ("div", "span")


class KeyboardRule(WcagRule):
    """All functionality must be available using the keyboard."""

    @property
    def rule_id(self) -> str:
        return "2.1.1-keyboard-access"

    @property
    def description(self) -> str:
        return "All functionality must be available using the keyboard"

    @property
    def criterion(self) -> str:
        return "2.1.1 Keyboard"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        violations = []

        for element in document.all_elements():
            if is_mouse_only(element):
                violations.append(make_violation(
                    self, document, element,
                    "Element has mouse event handlers but may not be keyboard accessible",
                    Severity.CRITICAL,
                    auto_fixable=True,
                    remediation="Add keyboard event handlers (onkeydown) or convert to a native button/link",
                    check="mouse-only",
                ))

        for element in document.select("[tabindex]"):
            tabindex = tabindex_of(element)
            if tabindex is not None and tabindex > 0:
                violations.append(make_violation(
                    self, document, element,
                    f"Element has positive tabindex ({tabindex}) which disrupts natural tab order",
                    Severity.SERIOUS,
                    auto_fixable=True,
                    remediation="Use tabindex='0' for elements that should be in the natural tab order",
                    check="positive-tabindex",
                ))

        for element in document.select(INTERACTIVE_SELECTOR):
            tabindex = tabindex_of(element)
            if tabindex is not None and tabindex < 0:
                violations.append(make_violation(
                    self, document, element,
                    "Interactive element with negative tabindex is not keyboard accessible",
                    Severity.CRITICAL,
                    auto_fixable=True,
                    remediation="Remove negative tabindex or change to tabindex='0'",
                    check="negative-tabindex",
                ))

        for element in document.select(DRAG_SELECTOR):
            if not has_key_handler(element) and "keyboard" not in str(element).lower():
                violations.append(make_violation(
                    self, document, element,
                    "Draggable element may not have keyboard alternative",
                    Severity.SERIOUS,
                    remediation="Provide keyboard alternative for drag-and-drop functionality",
                    check="drag-only",
                ))
        return violations

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for violation, element in fixable_targets(document, violations):
            tabindex = tabindex_of(element)
            if violation.check == "positive-tabindex":
                if tabindex is None or tabindex <= 0:
                    continue
                element["tabindex"] = "0"
            elif violation.check == "negative-tabindex":
                if tabindex is None or tabindex >= 0:
                    continue
                element["tabindex"] = "0"
            elif violation.check == "mouse-only":
                if not is_mouse_only(element):
                    continue
                add_keyboard_support(element)
            else:
                continue
            fixes += 1
        return fixes


def has_key_handler(element: Tag) -> bool:
    return any(element.has_attr(handler) for handler in KEY_HANDLERS)


def mouse_action(element: Tag) -> Optional[str]:
    """Script of the first mouse handler present."""
    for handler in MOUSE_HANDLERS:
        script = str(element.get(handler, "")).strip()
        if script:
            return script
    return None


def is_mouse_only(element: Tag) -> bool:
    if element.name in NATIVELY_FOCUSABLE:
        return False
    if mouse_action(element) is None:
        return False
    return not has_key_handler(element)


def add_keyboard_support(element: Tag) -> None:
    """Mirror the mouse action on Enter and put the element in the tab order."""
    action = mouse_action(element).rstrip(";")
    element["onkeydown"] = f"if (event.key === 'Enter') {{ {action}; }}"
    tabindex = tabindex_of(element)
    if tabindex is None or tabindex < 0:
        element["tabindex"] = "0"
    if element.name in GENERIC_CONTAINERS and not element.has_attr("role"):
        element["role"] = "button"
    logger.debug(f"Added keyboard handler to <{element.name}>")
