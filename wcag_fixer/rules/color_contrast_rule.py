"""
ColorContrastRule - 1.4.3 Contrast (Minimum).

Only inline style declarations are inspected. The background of an element
is its own background-color (or background) declaration, else the nearest
ancestor's.

Findings:
- low-contrast: ratio below 4.5:1, or 3:1 for large text (serious, fixed by
  switching the text color to black or white, whichever contrasts more)
- light-text: a light text color with no resolvable background (moderate,
  fixed by adding the opposite extreme as background)
- color-only: alert-style colors without any non-color cue (moderate)
"""

import logging
import re
from typing import List, Optional, Sequence

from bs4 import Tag

from ..analyzers.color import (
    LARGE_TEXT_THRESHOLD,
    NORMAL_TEXT_THRESHOLD,
    RGB,
    best_contrast_color,
    contrast_ratio,
    is_light,
    parse_background,
    parse_color,
    to_hex,
)
from ..analyzers.dom_parser import Document
from ..analyzers.inline_style import is_transparent, parse_style, set_declaration
from ..contracts.levels import ComplianceLevel, Severity
from ..contracts.violation import Violation
from .base_rule import WcagRule
from .helpers import fixable_targets, has_class, is_hidden, make_violation, text_of


logger = logging.getLogger(__name__)

TEXT_SELECTOR = "p, h1, h2, h3, h4, h5, h6, span, div, a, button, label, li"

CONTROL_SELECTOR = "input, select, textarea"

LARGE_TEXT_CLASSES = ("display-1", "display-2", "display-3", "display-4", "large", "x-large", "xx-large")

BACKGROUND_CLASSES = (
    "bg-dark", "bg-primary", "bg-secondary", "bg-info",
    "bg-success", "bg-danger", "bg-warning", "bg-light",
)

ALERT_COLOR_CLASSES = ("text-danger", "text-warning", "text-success", "text-info", "red", "green", "blue")

ALERT_COLOR_WORDS = re.compile(r"\b(red|green|blue)\b")

_SIZE = re.compile(r"^\s*([0-9]*\.?[0-9]+)\s*(pt|px|rem|em)\s*$", re.IGNORECASE)


class ColorContrastRule(WcagRule):
    """Text must have sufficient contrast with its background."""

    @property
    def rule_id(self) -> str:
        return "1.4.3-color-contrast"

    @property
    def description(self) -> str:
        return "Text must have sufficient contrast with its background"

    @property
    def criterion(self) -> str:
        return "1.4.3 Contrast (Minimum)"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.AA

    def evaluate(self, document: Document) -> List[Violation]:
        violations = []
        for element in document.select(f"{TEXT_SELECTOR}, {CONTROL_SELECTOR}"):
            if element.name in ("input", "select", "textarea"):
                if is_invisible(element):
                    continue
                violation = self._check_colors(document, element, NORMAL_TEXT_THRESHOLD, control=True)
                if violation is not None:
                    violations.append(violation)
                continue

            if not text_of(element) or is_invisible(element):
                continue

            threshold = LARGE_TEXT_THRESHOLD if is_large_text(element) else NORMAL_TEXT_THRESHOLD
            violation = self._check_colors(document, element, threshold, control=False)
            if violation is not None:
                violations.append(violation)

            if uses_alert_color(element) and not has_non_color_cue(element):
                violations.append(make_violation(
                    self, document, element,
                    "Information conveyed through color alone",
                    Severity.MODERATE,
                    remediation="Add non-color indicators (icons, patterns, text) to supplement color",
                    check="color-only",
                ))
        return violations

    def _check_colors(
        self,
        document: Document,
        element: Tag,
        threshold: float,
        control: bool,
    ) -> Optional[Violation]:
        declarations = parse_style(element.get("style"))
        foreground = parse_color(declarations.get("color"))
        if foreground is None:
            return None
        background = resolve_background(element)

        if background is not None:
            ratio = contrast_ratio(foreground, background)
            if ratio >= threshold:
                return None
            subject = "Form control has insufficient" if control else "Insufficient"
            return make_violation(
                self, document, element,
                f"{subject} color contrast ratio: {ratio:.2f} (minimum should be {threshold:.1f})",
                Severity.SERIOUS,
                auto_fixable=True,
                remediation=(
                    f"Increase contrast between text color {declarations['color']} and "
                    f"background color {to_hex(background)} to at least {threshold:.1f}:1"
                ),
                check="low-contrast",
                context={"threshold": threshold, "ratio": round(ratio, 2)},
            )

        if not control and not has_background_class(element) and is_light(foreground, threshold):
            return make_violation(
                self, document, element,
                "Light text color without specified background may have contrast issues",
                Severity.MODERATE,
                auto_fixable=True,
                remediation="Either darken the text color or specify a dark background color",
                check="light-text",
                context={"threshold": threshold},
            )
        return None

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for violation, element in fixable_targets(document, violations, "low-contrast", "light-text"):
            threshold = violation.context.get("threshold", NORMAL_TEXT_THRESHOLD)
            style = element.get("style")
            foreground = parse_color(parse_style(style).get("color"))
            if foreground is None:
                continue
            background = resolve_background(element)

            if background is not None:
                if contrast_ratio(foreground, background) >= threshold:
                    continue
                element["style"] = set_declaration(style, "color", to_hex(best_contrast_color(background)))
            else:
                if has_background_class(element) or not is_light(foreground, threshold):
                    continue
                element["style"] = set_declaration(
                    style, "background-color", to_hex(best_contrast_color(foreground))
                )
            logger.debug(f"Adjusted colors of <{element.name}>: {element['style']}")
            fixes += 1
        return fixes


# =============================================================================
# STYLE HELPERS
# =============================================================================


def own_background(element: Tag) -> Optional[RGB]:
    declarations = parse_style(element.get("style"))
    if "background-color" in declarations:
        return parse_background(declarations["background-color"])
    return parse_background(declarations.get("background"))


def resolve_background(element: Tag) -> Optional[RGB]:
    """Own inline background, else the nearest ancestor's."""
    background = own_background(element)
    if background is not None:
        return background
    for parent in element.parents:
        if parent.name == "[document]":
            break
        background = own_background(parent)
        if background is not None:
            return background
    return None


def has_background_class(element: Tag) -> bool:
    """Whether an ancestor sets a background through a utility class."""
    for parent in element.parents:
        if parent.name == "[document]":
            break
        if has_class(parent, *BACKGROUND_CLASSES):
            return True
    return False


def is_invisible(element: Tag) -> bool:
    if is_hidden(element) or is_transparent(element.get("style")):
        return True
    for parent in element.parents:
        if parent.name == "[document]":
            break
        if is_transparent(parent.get("style")):
            return True
    return False


def is_large_text(element: Tag) -> bool:
    """h1/h2, 18pt / 24px / 1.5em, or 14pt / 18.5px / 1.2em when bold."""
    if element.name in ("h1", "h2"):
        return True
    if has_class(element, *LARGE_TEXT_CLASSES):
        return True

    declarations = parse_style(element.get("style"))
    match = _SIZE.match(declarations.get("font-size", "").replace("!important", ""))
    if not match:
        return False
    size, unit = float(match.group(1)), match.group(2).lower()
    bold = is_bold(declarations.get("font-weight", ""))

    large, large_bold = {
        "pt": (18.0, 14.0),
        "px": (24.0, 18.5),
        "em": (1.5, 1.2),
        "rem": (1.5, 1.2),
    }[unit]
    return size >= large or (bold and size >= large_bold)


def is_bold(font_weight: str) -> bool:
    weight = font_weight.replace("!important", "").strip().lower()
    if not weight:
        return False
    if weight.isdigit():
        return int(weight) >= 700
    return weight in ("bold", "bolder")


def uses_alert_color(element: Tag) -> bool:
    if has_class(element, *ALERT_COLOR_CLASSES):
        return True
    declarations = parse_style(element.get("style"))
    return any(
        ALERT_COLOR_WORDS.search(value.lower())
        for prop, value in declarations.items()
        if "color" in prop or prop == "background"
    )


def has_non_color_cue(element: Tag) -> bool:
    if element.has_attr("aria-label") or element.has_attr("title"):
        return True
    content = element.decode_contents()
    if "*" in content or "!" in content:
        return True
    return bool(element.select("i.fa, i.icon, span.icon"))
