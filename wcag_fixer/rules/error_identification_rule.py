"""
ErrorIdentificationRule - 3.3.1 Error Identification.

Findings:
- error-container: error-styled element that is not a live region
  (fix: role=alert and aria-live=assertive)
- required-field: required control without aria-required (fix)
- dangling-describedby: aria-describedby naming missing ids (not fixable)
- invalid-without-message: aria-invalid=true with no description
  reference (not fixable)
"""

import logging
from typing import List, Sequence

from bs4 import Tag

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel, Severity
from ..contracts.violation import Violation
from .base_rule import WcagRule
from .form_label_rule import form_controls
from .helpers import fixable_targets, make_violation


logger = logging.getLogger(__name__)

ERROR_CONTAINER_SELECTOR = (
    ".error, .error-message, .field-error, "
    "[id*=error], [class*=error], [id*=invalid], [class*=invalid], "
    ".validation-message, .alert-danger, .warning"
)

REQUIRED_SELECTOR = "input[required], select[required], textarea[required]"

FORM_CONTROL_TAGS = ("input", "select", "textarea", "button", "option", "form")


class ErrorIdentificationRule(WcagRule):
    """Form errors must be identified programmatically."""

    @property
    def rule_id(self) -> str:
        return "3.3.1-error-identification"

    @property
    def description(self) -> str:
        return "Form errors must be identified programmatically"

    @property
    def criterion(self) -> str:
        return "3.3.1 Error Identification"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        violations = []

        for container in error_containers(document):
            if not is_live_region(container):
                violations.append(make_violation(
                    self, document, container,
                    "Error message container without appropriate ARIA attributes",
                    Severity.SERIOUS,
                    auto_fixable=True,
                    remediation="Add role='alert' or aria-live='assertive' to error message containers",
                    check="error-container",
                ))

        for field in document.select(REQUIRED_SELECTOR):
            if not field.has_attr("aria-required"):
                violations.append(make_violation(
                    self, document, field,
                    "Required form field without aria-required attribute",
                    Severity.MODERATE,
                    auto_fixable=True,
                    remediation="Add aria-required='true' to required form fields",
                    check="required-field",
                ))

        for field in form_controls(document):
            describedby = str(field.get("aria-describedby", "")).split()
            missing = [ref for ref in describedby if document.find_by_id(ref) is None]
            if missing:
                violations.append(make_violation(
                    self, document, field,
                    "Form field references non-existent element in aria-describedby",
                    Severity.SERIOUS,
                    remediation="Ensure the ID referenced in aria-describedby exists",
                    check="dangling-describedby",
                    context={"missing_ids": tuple(missing)},
                ))

            invalid = str(field.get("aria-invalid", "")).strip().lower() == "true"
            if invalid and not field.has_attr("aria-describedby") and not field.has_attr("aria-errormessage"):
                violations.append(make_violation(
                    self, document, field,
                    "Form field marked as invalid without associated error message",
                    Severity.SERIOUS,
                    remediation="Add aria-describedby or aria-errormessage pointing to error explanation",
                    check="invalid-without-message",
                ))
        return violations

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for violation, element in fixable_targets(document, violations):
            if violation.check == "error-container":
                if is_live_region(element):
                    continue
                element["role"] = "alert"
                element["aria-live"] = "assertive"
            elif violation.check == "required-field":
                if element.has_attr("aria-required"):
                    continue
                element["aria-required"] = "true"
            else:
                continue
            fixes += 1
        return fixes


def error_containers(document: Document) -> List[Tag]:
    return [
        element for element in document.select(ERROR_CONTAINER_SELECTOR)
        if element.name not in FORM_CONTROL_TAGS
    ]


def is_live_region(element: Tag) -> bool:
    role = str(element.get("role", "")).strip().lower()
    live = str(element.get("aria-live", "")).strip().lower()
    return role in ("alert", "status") or live in ("assertive", "polite")
