"""
Violation - Data structures describing detected accessibility problems.

These structures carry information from evaluation to remediation:
1. RuleDescriptor: static description of a rule (for reporting)
2. Violation: one detected instance, created only during evaluation
"""

from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .levels import ComplianceLevel, Severity


@dataclass(frozen=True)
class RuleDescriptor:
    """Static facts about a rule, consumed by reporting."""

    rule_id: str
    """Stable key, e.g. "1.1.1-img-alt"."""

    description: str
    """Human readable summary of what the rule requires."""

    criterion: str
    """Success criterion reference, e.g. "1.1.1 Non-text Content"."""

    level: ComplianceLevel
    """Conformance level of the criterion."""

    auto_fixable: bool
    """Whether the rule ships a fixer."""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rule_id": self.rule_id,
            "description": self.description,
            "criterion": self.criterion,
            "level": self.level.value,
            "auto_fixable": self.auto_fixable,
        }


@dataclass(frozen=True)
class Violation:
    """
    One detected instance of non-compliance.

    Immutable: remediation reads violations but never changes them, so the
    list handed to RemediationEngine comes back untouched in the result.

    Example:
        Violation(
            rule_id="1.1.1-img-alt",
            message="Image missing alt attribute",
            element='<img src="photo.jpg"/>',
            location="/html/body/img",
            severity=Severity.CRITICAL,
            auto_fixable=True,
            remediation="Add alt attribute with descriptive text",
            node_index=3,
            check="missing-alt",
        )
    """

    rule_id: str
    """Id of the rule that produced this violation."""

    message: str
    """Human readable description of the problem."""

    element: str
    """Serialized offending element (for reporting)."""

    location: str
    """Ancestor-chain descriptor, e.g. /html/body/div[@id='main']/img."""

    severity: Severity = Severity.CRITICAL
    """Impact classification."""

    auto_fixable: bool = False
    """Whether the rule's fixer acts on this violation."""

    remediation: str = ""
    """Guidance for a human fixing the problem."""

    node_index: Optional[int] = None
    """Arena index of the element, None for document-level findings."""

    check: str = ""
    """Machine-readable kind of finding within the rule (e.g. "heading-skip")."""

    context: Mapping[str, Any] = field(default_factory=dict, compare=False, hash=False)
    """Read-only fix hints (e.g. suggested heading level)."""

    def __post_init__(self) -> None:
        object.__setattr__(self, "context", MappingProxyType(dict(self.context)))

    def __reduce__(self):
        # mappingproxy cannot be pickled; rebuild from a plain dict
        values = tuple(
            dict(self.context) if f.name == "context" else getattr(self, f.name)
            for f in fields(self)
        )
        return (self.__class__, values)

    @property
    def is_document_level(self) -> bool:
        """True when the violation is not tied to one element."""
        return self.node_index is None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "rule_id": self.rule_id,
            "message": self.message,
            "element": self.element,
            "location": self.location,
            "severity": self.severity.value,
            "auto_fixable": self.auto_fixable,
            "remediation": self.remediation,
            "node_index": self.node_index,
            "check": self.check,
            "context": dict(self.context),
        }

    def describe(self) -> str:
        """One-line human readable summary."""
        fixable = " [auto-fixable]" if self.auto_fixable else ""
        return f"[{self.severity.value}] {self.rule_id}: {self.message} at {self.location}{fixable}"
