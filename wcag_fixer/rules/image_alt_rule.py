"""
ImageAltRule - 1.1.1 Non-text Content.

Findings:
- missing-alt: <img> without alt (critical, fixed with a filename placeholder)
- empty-alt: alt="" on an image that does not look decorative (serious)
- generic-alt: alt text that says nothing about the image (moderate)
"""

import logging
from typing import List, Sequence

from bs4 import Tag

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel, Severity
from ..contracts.violation import Violation
from .base_rule import WcagRule
from .helpers import fixable_targets, has_class, make_violation


logger = logging.getLogger(__name__)

GENERIC_ALT_TERMS = (
    "image", "picture", "photo", "graphic", "icon", "img", "pic",
    "placeholder", "banner", "logo", "button", "click here",
    "*", "-", "_", "image of", "picture of", "graphic of",
)

FILENAME_SUFFIXES = (".jpg", ".png", ".gif", ".jpeg", ".webp", ".svg")

DECORATIVE_CLASSES = ("decorative", "decoration", "bg", "background")

DECORATIVE_SRC_HINTS = ("spacer", "transparent", "pixel", "blank")

MISSING_DESCRIPTION = "[IMAGE DESCRIPTION NEEDED]"


class ImageAltRule(WcagRule):
    """Images must carry meaningful alternative text."""

    @property
    def rule_id(self) -> str:
        return "1.1.1-img-alt"

    @property
    def description(self) -> str:
        return "Images must have alt text"

    @property
    def criterion(self) -> str:
        return "1.1.1 Non-text Content"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        violations = []
        for img in document.select("img"):
            if not img.has_attr("alt"):
                violations.append(make_violation(
                    self, document, img,
                    "Image missing alt attribute",
                    Severity.CRITICAL,
                    auto_fixable=True,
                    remediation="Add alt attribute with descriptive text",
                    check="missing-alt",
                ))
                continue

            alt = str(img.get("alt", ""))
            if not alt.strip():
                if not is_decorative(img):
                    violations.append(make_violation(
                        self, document, img,
                        "Image has empty alt attribute but appears to be non-decorative",
                        Severity.SERIOUS,
                        remediation="Add descriptive alt text appropriate to the image content",
                        check="empty-alt",
                    ))
            elif is_generic_alt(alt):
                violations.append(make_violation(
                    self, document, img,
                    f'Image has generic alt text: "{alt}"',
                    Severity.MODERATE,
                    remediation="Replace generic alt text with descriptive content",
                    check="generic-alt",
                ))
        return violations

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for _, img in fixable_targets(document, violations, "missing-alt"):
            if img.has_attr("alt"):
                continue
            img["alt"] = placeholder_alt(str(img.get("src", "")))
            logger.debug(f"Added placeholder alt to {img.get('src', '<no src>')}")
            fixes += 1
        return fixes


def placeholder_alt(src: str) -> str:
    """Alt text derived from the image file name."""
    src = src.strip()
    if not src:
        return MISSING_DESCRIPTION
    filename = src.split("?", 1)[0].split("#", 1)[0].rstrip("/").rsplit("/", 1)[-1]
    return f"Image: {filename or src}"


def is_generic_alt(alt: str) -> bool:
    """Whether alt text is a generic term, a file name or a URL."""
    text = alt.strip().lower()
    if not text:
        return False
    for term in GENERIC_ALT_TERMS:
        if text == term or text.startswith(term + " ") or text.endswith(" " + term):
            return True
    if text.endswith(FILENAME_SUFFIXES):
        return True
    return ".com/" in text or "/images/" in text


def is_decorative(img: Tag) -> bool:
    """Heuristic: role, class names, tiny dimensions or spacer-like src."""
    if str(img.get("role", "")).lower() == "presentation":
        return True
    if has_class(img, *DECORATIVE_CLASSES):
        return True

    try:
        width = int(str(img.get("width", "")).strip())
        height = int(str(img.get("height", "")).strip())
    except ValueError:
        pass
    else:
        if (width <= 3 and height <= 3) or width == 1 or height == 1:
            return True

    src = str(img.get("src", "")).lower()
    return any(hint in src for hint in DECORATIVE_SRC_HINTS)
