"""
Enhancement passes - Document-wide fixes that run after the rule fixers.

Both passes implement WcagRule so the remediation loop treats them like any
other fixer: same call, same failure isolation, same change log. They never
report violations and are not part of an engine's active rules.

- AriaEnhancementPass: landmark roles and ARIA states
- ContrastStylePass: baseline high-contrast stylesheet plus configured
  CSS overrides
"""

import logging
from typing import Dict, List, Optional, Sequence

from bs4 import Tag

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel
from ..contracts.violation import Violation
from ..core.config import settings
from ..rules.base_rule import WcagRule


logger = logging.getLogger(__name__)

LANDMARKS = (
    ("main", "main, div#main, div#content, div.main, div.content"),
    ("navigation", "nav, div#nav, div#navigation, div.nav, div.navigation"),
    ("search", "form[action*=search], form[id*=search]"),
    ("banner", "header, div#header, div.header"),
    ("contentinfo", "footer, div#footer, div.footer"),
    ("complementary", "aside, div#sidebar, div.sidebar"),
)

SECTIONING_TAGS = ["article", "aside", "main", "nav", "section"]

DROPDOWN_TOGGLES = "[data-toggle=dropdown], [data-bs-toggle=dropdown], .dropdown-toggle"

REQUIRED_FIELDS = "input[required], select[required], textarea[required]"

MARKER_ATTRIBUTE = "data-wcag-fixer"

BASELINE_CSS = (
    "/* WCAG Contrast Enhancements */\n"
    "body { color: #333; background-color: #fff; }\n"
    "a { color: #0056b3; }\n"
    "a:visited { color: #551A8B; }\n"
    "a:hover, a:focus { color: #003d7a; text-decoration: underline; }\n"
    "button, .btn { color: #fff; background-color: #0056b3; }\n"
    ".btn-secondary { color: #fff; background-color: #6c757d; }\n"
    ".btn-danger { color: #fff; background-color: #dc3545; }\n"
    ".btn-success { color: #fff; background-color: #28a745; }\n"
)


class EnhancementPass(WcagRule):
    """A fixer with no detection step."""

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        return []

    def can_auto_fix(self) -> bool:
        return True


class AriaEnhancementPass(EnhancementPass):
    """
    Adds landmark roles, aria-required, aria-expanded and a page language.

    Elements that already declare the attribute are left alone, so a second
    run reports 0.
    """

    def __init__(self, default_language: Optional[str] = None):
        self.default_language = default_language or settings.DEFAULT_LANGUAGE

    @property
    def rule_id(self) -> str:
        return "aria-enhancements"

    @property
    def description(self) -> str:
        return "ARIA landmark and state enhancements"

    @property
    def criterion(self) -> str:
        return "4.1.2 Name, Role, Value"

    def apply_fixes(self, document: Document, violations: Sequence[Violation] = ()) -> int:
        fixes = 0

        for role, selector in LANDMARKS:
            for element in document.select(selector):
                if role in ("banner", "contentinfo") and is_sectioned(element):
                    continue
                if not element.has_attr("role"):
                    element["role"] = role
                    fixes += 1

        fixes += set_missing(document.select(REQUIRED_FIELDS), "aria-required", "true")
        fixes += set_missing(document.select(DROPDOWN_TOGGLES), "aria-expanded", "false")

        html = document.root
        if html is not None and not str(html.get("lang", "")).strip():
            html["lang"] = self.default_language
            fixes += 1

        logger.debug(f"ARIA enhancement pass made {fixes} change(s)")
        return fixes


class ContrastStylePass(EnhancementPass):
    """
    Injects a baseline stylesheet and one rule per configured override.

    The baseline counts as one fix and each override as one more. Injected
    blocks carry a data-wcag-fixer marker; blocks already present are not
    injected again.
    """

    def __init__(self, css_overrides: Optional[Dict[str, str]] = None):
        self.css_overrides = dict(css_overrides or {})

    @property
    def rule_id(self) -> str:
        return "contrast-styles"

    @property
    def description(self) -> str:
        return "High-contrast style injection"

    @property
    def criterion(self) -> str:
        return "1.4.3 Contrast (Minimum)"

    def apply_fixes(self, document: Document, violations: Sequence[Violation] = ()) -> int:
        fixes = 0
        if not has_marked_style(document, "baseline"):
            inject_style(document, "baseline", BASELINE_CSS)
            fixes += 1

        if self.css_overrides and not has_marked_style(document, "overrides"):
            css = "/* Custom Contrast Fixes */\n" + "".join(
                f"{selector} {{ {declarations} }}\n"
                for selector, declarations in self.css_overrides.items()
            )
            inject_style(document, "overrides", css)
            fixes += len(self.css_overrides)
        return fixes


# =============================================================================
# HELPERS
# =============================================================================


def set_missing(elements: List[Tag], attribute: str, value: str) -> int:
    changed = 0
    for element in elements:
        if not element.has_attr(attribute):
            element[attribute] = value
            changed += 1
    return changed


def is_sectioned(element: Tag) -> bool:
    """header/footer inside sectioning content are not page landmarks."""
    return element.find_parent(SECTIONING_TAGS) is not None


def has_marked_style(document: Document, marker: str) -> bool:
    return document.soup.find("style", attrs={MARKER_ATTRIBUTE: marker}) is not None


def inject_style(document: Document, marker: str, css: str) -> Tag:
    """Append a <style> block to <head>, creating <head> when needed."""
    style = document.new_tag("style", type="text/css", **{MARKER_ATTRIBUTE: marker})
    style.string = css

    head = document.head
    if head is None:
        html = document.root
        if html is None:
            document.soup.insert(0, style)
            return style
        head = document.new_tag("head")
        html.insert(0, head)
    head.append(style)
    return style
