"""
HeadingStructureRule - 1.3.1 Info and Relationships (headings).

Walks h1-h6 in document order, tracking the previous level:
- first-heading: the first heading is not an h1 (fix: promote to h1)
- heading-skip: a level is skipped, e.g. h2 → h4 (fix: previous + 1)
- multiple-h1: every h1 after the first (fix: demote to h2)
- empty-heading: heading without text (not fixable)
- no-headings: the document has no headings at all (not fixable)
"""

import logging
from typing import List, Sequence

from bs4 import Tag

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel, Severity
from ..contracts.violation import Violation
from .base_rule import WcagRule
from .helpers import fixable_targets, make_violation, text_of


logger = logging.getLogger(__name__)

HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"


class HeadingStructureRule(WcagRule):
    """Heading levels should be used in correct order."""

    @property
    def rule_id(self) -> str:
        return "1.3.1-heading-structure"

    @property
    def description(self) -> str:
        return "Heading levels should be used in correct order"

    @property
    def criterion(self) -> str:
        return "1.3.1 Info and Relationships"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        headings = document.select(HEADING_SELECTOR)
        if not headings:
            if not document.all_elements():
                return []
            return [make_violation(
                self, document, None,
                "Page has no heading elements (h1-h6)",
                Severity.SERIOUS,
                remediation="Add appropriate heading elements to structure content",
                check="no-headings",
            )]

        violations = []
        previous = 0
        seen_h1 = False
        for heading in headings:
            current = heading_level(heading)

            if previous == 0 and current > 1:
                violations.append(make_violation(
                    self, document, heading,
                    f"First heading on page is H{current}, should be H1",
                    Severity.MODERATE,
                    auto_fixable=True,
                    remediation="Change to H1 or add an H1 before this heading",
                    check="first-heading",
                    context={"from_level": current, "to_level": 1},
                ))
            elif previous > 0 and current > previous + 1:
                violations.append(make_violation(
                    self, document, heading,
                    f"Heading level skipped from H{previous} to H{current}",
                    Severity.MODERATE,
                    auto_fixable=True,
                    remediation=f"Use sequential heading levels (H{previous + 1} instead of H{current})",
                    check="heading-skip",
                    context={"from_level": current, "to_level": previous + 1},
                ))

            if current == 1:
                if seen_h1:
                    violations.append(make_violation(
                        self, document, heading,
                        "Multiple H1 headings found - page should generally have only one H1",
                        Severity.MODERATE,
                        auto_fixable=True,
                        remediation="Change additional H1 elements to H2 or lower heading levels",
                        check="multiple-h1",
                        context={"from_level": 1, "to_level": 2},
                    ))
                seen_h1 = True

            if not text_of(heading) and not heading.find("img", alt=True):
                violations.append(make_violation(
                    self, document, heading,
                    "Empty heading element found",
                    Severity.SERIOUS,
                    remediation="Add descriptive text to the heading or remove it",
                    check="empty-heading",
                ))

            previous = current
        return violations

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for violation, heading in fixable_targets(document, violations):
            from_level = violation.context.get("from_level")
            to_level = violation.context.get("to_level")
            if to_level is None or heading.name != f"h{from_level}":
                continue
            logger.debug(f"Renaming h{from_level} to h{to_level}: {text_of(heading)[:40]}")
            heading.name = f"h{to_level}"
            fixes += 1
        return fixes


def heading_level(heading: Tag) -> int:
    return int(heading.name[1])
