"""
Helpers shared by rule implementations.
"""

from typing import Any, Iterator, List, Mapping, Optional, Sequence, Tuple, TYPE_CHECKING

from bs4 import Comment, NavigableString, Tag

from ..analyzers.dom_parser import Document
from ..analyzers.inline_style import hides_element
from ..contracts.levels import Severity
from ..contracts.violation import Violation
from ..core.location import LocationService

if TYPE_CHECKING:
    from .base_rule import WcagRule

SNIPPET_LIMIT = 300


def make_violation(
    rule: "WcagRule",
    document: Document,
    element: Optional[Tag],
    message: str,
    severity: Severity,
    auto_fixable: bool = False,
    remediation: str = "",
    check: str = "",
    context: Optional[Mapping[str, Any]] = None,
) -> Violation:
    """
    Build a violation for an element (or the whole document if None).
    """
    if element is None:
        root = document.root
        return Violation(
            rule_id=rule.rule_id,
            message=message,
            element="",
            location=LocationService.describe(root) if root is not None else "/",
            severity=severity,
            auto_fixable=auto_fixable,
            remediation=remediation,
            node_index=None,
            check=check,
            context=context or {},
        )

    return Violation(
        rule_id=rule.rule_id,
        message=message,
        element=snippet(element),
        location=LocationService.describe(element),
        severity=severity,
        auto_fixable=auto_fixable,
        remediation=remediation,
        node_index=document.index_of(element),
        check=check,
        context=context or {},
    )


def snippet(element: Tag, limit: int = SNIPPET_LIMIT) -> str:
    """Serialized element, truncated for reports."""
    markup = str(element)
    if len(markup) > limit:
        return markup[: limit - 3] + "..."
    return markup


def fixable_targets(
    document: Document,
    violations: Sequence[Violation],
    *checks: str,
) -> Iterator[Tuple[Violation, Tag]]:
    """
    Resolve auto-fixable violations to elements of the working copy.

    Args:
        document: Working copy
        violations: Violations of one rule
        checks: Restrict to these check kinds (all if empty)

    Yields:
        (violation, element) for each violation that still resolves
    """
    for violation in violations:
        if not violation.auto_fixable:
            continue
        if checks and violation.check not in checks:
            continue
        element = document.resolve(violation)
        if element is not None:
            yield violation, element


def text_of(element: Tag) -> str:
    """Visible text with whitespace collapsed."""
    return " ".join(element.get_text(" ", strip=True).split())


def own_text(element: Tag) -> str:
    """Text of direct string children only."""
    parts = [
        str(child)
        for child in element.children
        if isinstance(child, NavigableString) and not isinstance(child, Comment)
    ]
    return " ".join(" ".join(parts).split())


def classes(element: Tag) -> List[str]:
    value = element.get("class") or []
    if isinstance(value, str):
        value = value.split()
    return [c.lower() for c in value]


def has_class(element: Tag, *names: str) -> bool:
    element_classes = classes(element)
    return any(name in element_classes for name in names)


def is_self_hidden(element: Tag) -> bool:
    """Hidden by its own attributes or inline style."""
    if element.has_attr("hidden"):
        return True
    if str(element.get("aria-hidden", "")).lower() == "true":
        return True
    if element.name == "input" and str(element.get("type", "")).lower() == "hidden":
        return True
    return hides_element(element.get("style"))


def is_hidden(element: Tag) -> bool:
    """Hidden by itself or by any ancestor."""
    if is_self_hidden(element):
        return True
    for parent in element.parents:
        if parent.name == "[document]":
            break
        if is_self_hidden(parent):
            return True
    return False


def tabindex_of(element: Tag) -> Optional[int]:
    """Integer tabindex, None when absent or not a number."""
    try:
        return int(str(element.get("tabindex", "")).strip())
    except ValueError:
        return None
