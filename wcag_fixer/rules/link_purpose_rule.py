"""
LinkPurposeRule - 2.4.4 Link Purpose (In Context).

Accessible name of a link: aria-label, else title, else visible text.

Findings:
- empty-link: no name and no image with alt text (critical)
- generic-text: "click here", "read more", ... (moderate)
- url-text: the name is a bare URL (moderate)
- inconsistent-text: same destination, different names (minor)
- ambiguous-siblings: sibling links with the same text but different
  destinations, reported once per parent (moderate)
- new-window: target="_blank" without warning in the name (moderate,
  the only fixable case)
"""

import logging
from typing import Dict, List, Sequence

from bs4 import Tag

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel, Severity
from ..contracts.violation import Violation
from .base_rule import WcagRule
from .helpers import fixable_targets, is_hidden, make_violation, text_of


logger = logging.getLogger(__name__)

GENERIC_LINK_TERMS = frozenset({
    "click here", "click", "here", "more", "read more", "details", "learn more",
    "this page", "this link", "this", "link", "go", "go to", "navigate", "open",
    "show", "view", "see", "check", "check this out", "check it out", "visit",
    "visit this", "right here", "see here", "see this", "view this", "page",
    "website", "web page", "site", "information", "info",
})

GENERIC_LINK_PREFIXES = ("click here", "click", "here", "link")

URL_PREFIXES = ("http://", "https://", "www.")

NEW_WINDOW_HINTS = ("new window", "new tab")

NEW_WINDOW_NOTE = "(opens in a new window)"


class LinkPurposeRule(WcagRule):
    """Link purpose must be clear from the link text."""

    @property
    def rule_id(self) -> str:
        return "2.4.4-link-purpose"

    @property
    def description(self) -> str:
        return "Link purpose must be clear from the link text"

    @property
    def criterion(self) -> str:
        return "2.4.4 Link Purpose (In Context)"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        links = [link for link in document.select("a[href]") if not is_hidden(link)]
        first_name_by_href: Dict[str, str] = {}
        names_by_href: Dict[str, set] = {}
        for link in links:
            href = str(link.get("href", ""))
            name = accessible_name(link)
            first_name_by_href.setdefault(href, name)
            names_by_href.setdefault(href, set()).add(name)

        violations = []
        reported_parents = set()
        for link in links:
            href = str(link.get("href", ""))
            name = accessible_name(link)
            lowered = name.lower()

            if not name and not has_alt_image(link):
                violations.append(make_violation(
                    self, document, link,
                    "Link has no discernible text or accessible name",
                    Severity.CRITICAL,
                    remediation="Add descriptive text to the link or provide aria-label",
                    check="empty-link",
                ))

            if name and is_generic_link_text(lowered):
                violations.append(make_violation(
                    self, document, link,
                    f'Link text is too generic: "{name}"',
                    Severity.MODERATE,
                    remediation="Replace with descriptive text that explains the link's specific purpose",
                    check="generic-text",
                ))

            if lowered.startswith(URL_PREFIXES):
                violations.append(make_violation(
                    self, document, link,
                    "Link text contains a URL instead of descriptive text",
                    Severity.MODERATE,
                    remediation="Replace the URL with descriptive text that explains the link purpose",
                    check="url-text",
                ))

            if len(names_by_href[href]) > 1 and name != first_name_by_href[href]:
                violations.append(make_violation(
                    self, document, link,
                    "Multiple links go to the same URL but have different link text",
                    Severity.MINOR,
                    remediation="Use consistent link text for links that go to the same URL",
                    check="inconsistent-text",
                ))

            parent = link.parent
            if isinstance(parent, Tag) and id(parent) not in reported_parents:
                if has_ambiguous_sibling(link, parent):
                    reported_parents.add(id(parent))
                    violations.append(make_violation(
                        self, document, parent,
                        "Adjacent links have the same text but different destinations",
                        Severity.MODERATE,
                        remediation="Differentiate link text to clarify the distinct destinations",
                        check="ambiguous-siblings",
                    ))

            if opens_new_window(link) and not mentions_new_window(lowered):
                violations.append(make_violation(
                    self, document, link,
                    "Link opens in new window without warning",
                    Severity.MODERATE,
                    auto_fixable=True,
                    remediation="Add indication that link opens in a new window via aria-label or title",
                    check="new-window",
                ))
        return violations

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for _, link in fixable_targets(document, violations, "new-window"):
            if not opens_new_window(link) or mentions_new_window(accessible_name(link).lower()):
                continue

            if str(link.get("aria-label", "")).strip():
                link["aria-label"] = f"{link['aria-label'].strip()} {NEW_WINDOW_NOTE}"
            elif str(link.get("title", "")).strip():
                link["title"] = f"{link['title'].strip()} {NEW_WINDOW_NOTE}"
            else:
                note = document.new_tag("span", **{"class": "sr-only"})
                note.string = f" {NEW_WINDOW_NOTE}"
                link.append(note)
            fixes += 1
        return fixes


def accessible_name(link: Tag) -> str:
    """aria-label, else title, else visible text."""
    aria_label = str(link.get("aria-label", "")).strip()
    if aria_label:
        return aria_label
    title = str(link.get("title", "")).strip()
    if title:
        return title
    return text_of(link)


def has_alt_image(link: Tag) -> bool:
    return any(str(img.get("alt", "")).strip() for img in link.find_all("img"))


def is_generic_link_text(name: str) -> bool:
    if name in GENERIC_LINK_TERMS:
        return True
    return any(
        name.startswith(f"{term} to ") or name.startswith(f"{term} for ")
        for term in GENERIC_LINK_PREFIXES
    )


def has_ambiguous_sibling(link: Tag, parent: Tag) -> bool:
    text = text_of(link)
    href = link.get("href")
    for sibling in parent.find_all("a", recursive=False):
        if sibling is link or not sibling.has_attr("href"):
            continue
        if text_of(sibling) == text and sibling.get("href") != href:
            return True
    return False


def opens_new_window(link: Tag) -> bool:
    return str(link.get("target", "")).strip().lower() == "_blank"


def mentions_new_window(name: str) -> bool:
    return any(hint in name for hint in NEW_WINDOW_HINTS)
