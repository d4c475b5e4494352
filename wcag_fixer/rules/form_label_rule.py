"""
FormLabelRule - 1.3.1 Info and Relationships (form labels).

Every visible form control needs an accessible name. The name is looked
up in priority order:
1. <label for="id">
2. aria-label
3. aria-labelledby pointing at an existing element
4. title
5. placeholder
6. an enclosing <label>

Unlabeled controls get a generated <label for> inserted before them. A
control without an id gets a deterministic one built from the configured
prefix and its node index.
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
from .helpers import fixable_targets, is_hidden, make_violation


logger = logging.getLogger(__name__)

UNLABELED_INPUT_TYPES = ("button", "submit", "reset", "hidden", "image")

DEFAULT_LABELS = {
    "text": "Text:",
    "email": "Email:",
    "password": "Password:",
    "tel": "Phone:",
    "date": "Date:",
    "time": "Time:",
    "number": "Number:",
    "search": "Search:",
    "checkbox": "Checkbox label",
    "radio": "Radio option",
}


class FormLabelRule(WcagRule):
    """Form controls must have associated labels."""

    def __init__(self, id_prefix: Optional[str] = None):
        """
        Args:
            id_prefix: Prefix for generated control ids
                       (default: settings.GENERATED_ID_PREFIX)
        """
        self.id_prefix = id_prefix or settings.GENERATED_ID_PREFIX

    @property
    def rule_id(self) -> str:
        return "1.3.1-form-label"

    @property
    def description(self) -> str:
        return "Form controls must have associated labels"

    @property
    def criterion(self) -> str:
        return "1.3.1 Info and Relationships"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        violations = []
        for control in form_controls(document):
            if is_hidden(control) or has_accessible_label(control, document):
                continue

            if control.name == "input":
                kind = input_type(control)
                message = f"{kind.capitalize()} input lacks accessible label"
            else:
                message = f"{control.name.capitalize()} element lacks accessible label"

            violations.append(make_violation(
                self, document, control,
                message,
                Severity.CRITICAL,
                auto_fixable=True,
                remediation="Add a label element with a for attribute, aria-label, or aria-labelledby",
                check="missing-label",
            ))
        return violations

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for violation, control in fixable_targets(document, violations, "missing-label"):
            if has_accessible_label(control, document):
                continue

            control_id = control.get("id")
            if not control_id:
                control_id = self._generate_id(document, violation.node_index)
                control["id"] = control_id

            label = document.new_tag("label", **{"for": control_id})
            label.string = generate_label_text(control)
            control.insert_before(label)
            logger.debug(f"Inserted label '{label.string}' for #{control_id}")
            fixes += 1
        return fixes

    def _generate_id(self, document: Document, node_index: Optional[int]) -> str:
        base = f"{self.id_prefix}-{node_index if node_index is not None else 0}"
        candidate = base
        suffix = 1
        while document.find_by_id(candidate) is not None:
            suffix += 1
            candidate = f"{base}-{suffix}"
        return candidate


# =============================================================================
# ACCESSIBLE NAME
# =============================================================================


def form_controls(document: Document) -> List[Tag]:
    """Inputs (except buttons and hidden fields), selects and textareas."""
    controls = []
    for element in document.select("input, select, textarea"):
        if element.name == "input" and input_type(element) in UNLABELED_INPUT_TYPES:
            continue
        controls.append(element)
    return controls


def input_type(control: Tag) -> str:
    return str(control.get("type", "")).strip().lower() or "text"


def has_accessible_label(control: Tag, document: Document) -> bool:
    """Whether the control has any accessible name source."""
    control_id = control.get("id")
    if control_id and document.soup.find("label", attrs={"for": control_id}) is not None:
        return True

    if str(control.get("aria-label", "")).strip():
        return True

    for label_id in str(control.get("aria-labelledby", "")).split():
        if document.find_by_id(label_id) is not None:
            return True

    if str(control.get("title", "")).strip():
        return True
    if str(control.get("placeholder", "")).strip():
        return True

    return control.find_parent("label") is not None


def generate_label_text(control: Tag) -> str:
    """Label text from placeholder, then name, then control type."""
    placeholder = str(control.get("placeholder", "")).strip()
    if placeholder:
        return placeholder

    name = str(control.get("name", "")).strip()
    if name:
        return humanize(name) + ":"

    if control.name == "select":
        return "Select:"
    if control.name == "textarea":
        return "Comments:"

    kind = input_type(control)
    return DEFAULT_LABELS.get(kind, f"{kind.capitalize()}:")


def humanize(name: str) -> str:
    """first_name / first-name / firstName → First Name"""
    spaced = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name.replace("_", " ").replace("-", " "))
    return " ".join(word[0].upper() + word[1:] for word in spaced.split())
