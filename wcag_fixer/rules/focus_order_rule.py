"""
FocusOrderRule - 2.4.3 Focus Order.

A positive tabindex moves an element ahead of the natural tab sequence.
Fix: tabindex=0. The keyboard rule reports the same condition; whichever
fixer runs second finds nothing left to do.
"""

from typing import List, Sequence

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel, Severity
from ..contracts.violation import Violation
from .base_rule import WcagRule
from .helpers import fixable_targets, make_violation, tabindex_of


class FocusOrderRule(WcagRule):
    """Focus order must be logical and intuitive."""

    @property
    def rule_id(self) -> str:
        return "2.4.3-focus-order"

    @property
    def description(self) -> str:
        return "Focus order must be logical and intuitive"

    @property
    def criterion(self) -> str:
        return "2.4.3 Focus Order"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        violations = []
        for element in document.select("[tabindex]"):
            tabindex = tabindex_of(element)
            if tabindex is not None and tabindex > 0:
                violations.append(make_violation(
                    self, document, element,
                    f"Positive tabindex ({tabindex}) overrides the logical focus order",
                    Severity.SERIOUS,
                    auto_fixable=True,
                    remediation="Use tabindex='0' and order elements in the source instead",
                    check="positive-tabindex",
                ))
        return violations

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for _, element in fixable_targets(document, violations, "positive-tabindex"):
            tabindex = tabindex_of(element)
            if tabindex is not None and tabindex > 0:
                element["tabindex"] = "0"
                fixes += 1
        return fixes
