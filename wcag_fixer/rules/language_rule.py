"""
LanguageRule - 3.1.1 Language of Page.

Findings:
- missing-lang / invalid-lang on the <html> element (fix: default language)
- foreign-phrase: text containing a phrase from a small dictionary in a
  language other than the one in effect (not fixable)

Fragments without an <html> element are not checked for a page language.
"""

import logging
import re
from typing import List, Optional, Sequence

from bs4 import Tag

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel, Severity
from ..contracts.violation import Violation
from ..core.config import settings
from .base_rule import WcagRule
from .helpers import fixable_targets, make_violation, own_text


logger = logging.getLogger(__name__)

LANGUAGE_TAG = re.compile(r"^[a-zA-Z]{2,3}(-[a-zA-Z0-9]{2,8})*$")

FOREIGN_PHRASES = {
    "bonjour": "fr",
    "au revoir": "fr",
    "hola": "es",
    "gracias": "es",
    "guten tag": "de",
    "auf wiedersehen": "de",
    "ciao": "it",
    "arrivederci": "it",
}

_PHRASE_PATTERNS = [
    (re.compile(rf"\b{re.escape(phrase)}\b"), lang) for phrase, lang in FOREIGN_PHRASES.items()
]

TEXT_CONTAINERS = "p, span, div, h1, h2, h3, h4, h5, h6, li, td, th, blockquote"


class LanguageRule(WcagRule):
    """Page must have language attribute."""

    def __init__(self, default_language: Optional[str] = None):
        """
        Args:
            default_language: Written to <html lang> by the fixer
                              (default: settings.DEFAULT_LANGUAGE)
        """
        self.default_language = default_language or settings.DEFAULT_LANGUAGE

    @property
    def rule_id(self) -> str:
        return "3.1.1-language"

    @property
    def description(self) -> str:
        return "Page must have language attribute"

    @property
    def criterion(self) -> str:
        return "3.1.1 Language of Page"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        violations = []
        html = document.root
        if html is not None:
            lang = str(html.get("lang", "")).strip()
            if not lang:
                violations.append(make_violation(
                    self, document, html,
                    "HTML element missing lang attribute",
                    Severity.SERIOUS,
                    auto_fixable=True,
                    remediation=f"Add lang attribute to the html element (e.g., lang='{self.default_language}')",
                    check="missing-lang",
                ))
            elif not is_valid_language_tag(lang):
                violations.append(make_violation(
                    self, document, html,
                    f"HTML element has invalid lang attribute value: {lang}",
                    Severity.SERIOUS,
                    auto_fixable=True,
                    remediation="Replace with a valid language tag (e.g., 'en', 'en-US', 'fr', 'es')",
                    check="invalid-lang",
                ))

        for container in document.select(TEXT_CONTAINERS):
            text = own_text(container).lower()
            if not text:
                continue
            in_effect = language_in_effect(container)
            for pattern, lang in _PHRASE_PATTERNS:
                if in_effect.startswith(lang):
                    continue
                if pattern.search(text):
                    violations.append(make_violation(
                        self, document, container,
                        "Content may contain foreign language text without lang attribute",
                        Severity.MODERATE,
                        remediation=f"Add lang='{lang}' attribute to elements containing foreign language text",
                        check="foreign-phrase",
                        context={"language": lang},
                    ))
                    break
        return violations

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for _, html in fixable_targets(document, violations, "missing-lang", "invalid-lang"):
            if is_valid_language_tag(str(html.get("lang", "")).strip()):
                continue
            html["lang"] = self.default_language
            logger.debug(f"Set page language to {self.default_language}")
            fixes += 1
        return fixes


def is_valid_language_tag(lang: str) -> bool:
    return bool(LANGUAGE_TAG.match(lang))


def language_in_effect(element: Tag) -> str:
    """lang of the element or its nearest ancestor declaring one."""
    node = element
    while node is not None and node.name != "[document]":
        lang = str(node.get("lang", "")).strip()
        if lang:
            return lang.lower()
        node = node.parent
    return ""
