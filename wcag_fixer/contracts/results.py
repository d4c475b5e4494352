"""
Results - Outputs of remediation and reporting.

- RemediationResult: one document, before and after remediation
- ComplianceReport: counts for one evaluated document
- SummaryReport: aggregation over many already-computed results
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from .levels import ComplianceLevel, Severity
from .violation import RuleDescriptor, Violation


@dataclass
class RemediationResult:
    """
    Result of remediating one document.

    Attributes:
        page_id: Identifier of the page (URL, path, or None)
        original_html: Serialization of the untouched input document
        remediated_html: Serialization of the fixed working copy
        violations: The input violation list, unmodified
        fixes_applied: Sum of per-rule and enhancement-pass fix counts
        change_log: Ordered human readable fix summaries
        error_message: Set when the run failed before producing output
    """

    page_id: Optional[str]
    original_html: str
    remediated_html: str
    violations: Tuple[Violation, ...] = ()
    fixes_applied: int = 0
    change_log: List[str] = field(default_factory=list)
    error_message: Optional[str] = None

    @property
    def has_error(self) -> bool:
        return bool(self.error_message)

    @property
    def changed(self) -> bool:
        """Whether remediation altered the markup."""
        return self.original_html != self.remediated_html

    @classmethod
    def failed(cls, page_id: Optional[str], error_message: str) -> "RemediationResult":
        """Result for a page that could not be processed at all."""
        return cls(
            page_id=page_id,
            original_html="",
            remediated_html="",
            error_message=error_message,
        )

    def describe(self) -> str:
        """Generate human-readable summary."""
        status = "FAILED" if self.has_error else "OK"
        lines = [
            f"RemediationResult: {status} ({self.page_id or '<document>'})",
            f"  Violations: {len(self.violations)}",
            f"  Fixes applied: {self.fixes_applied}",
        ]
        if self.error_message:
            lines.append(f"  Error: {self.error_message}")
        for entry in self.change_log[:10]:
            lines.append(f"    - {entry}")
        if len(self.change_log) > 10:
            lines.append(f"    ... and {len(self.change_log) - 10} more")
        return "\n".join(lines)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_id": self.page_id,
            "violations": [v.to_dict() for v in self.violations],
            "fixes_applied": self.fixes_applied,
            "change_log": list(self.change_log),
            "error_message": self.error_message,
        }


@dataclass
class ComplianceReport:
    """Evaluation counts for one document."""

    page_id: Optional[str]
    violations: Tuple[Violation, ...]
    violations_by_level: Dict[str, int]
    violations_by_severity: Dict[str, int]
    violations_by_rule: Dict[str, int]

    @property
    def total_violations(self) -> int:
        return len(self.violations)

    @property
    def auto_fixable_violations(self) -> int:
        return sum(1 for v in self.violations if v.auto_fixable)

    @classmethod
    def build(
        cls,
        page_id: Optional[str],
        violations: Sequence[Violation],
        rules: Sequence[RuleDescriptor],
    ) -> "ComplianceReport":
        """
        Count violations by level, severity and rule.

        Args:
            page_id: Identifier of the evaluated page
            violations: Violations in engine order
            rules: Active rule descriptors, used to map rule ids to levels
        """
        levels = {rule.rule_id: rule.level for rule in rules}
        by_level = {level.value: 0 for level in ComplianceLevel}
        by_severity = {severity.value: 0 for severity in Severity}
        by_rule: Dict[str, int] = {}

        for violation in violations:
            level = levels.get(violation.rule_id)
            if level is not None:
                by_level[level.value] += 1
            by_severity[violation.severity.value] += 1
            by_rule[violation.rule_id] = by_rule.get(violation.rule_id, 0) + 1

        return cls(
            page_id=page_id,
            violations=tuple(violations),
            violations_by_level=by_level,
            violations_by_severity=by_severity,
            violations_by_rule=by_rule,
        )

    def sorted_by_severity(self) -> List[Violation]:
        """Violations ordered critical first, engine order within a severity."""
        return sorted(self.violations, key=lambda v: v.severity.rank)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "page_id": self.page_id,
            "total_violations": self.total_violations,
            "auto_fixable_violations": self.auto_fixable_violations,
            "violations_by_level": dict(self.violations_by_level),
            "violations_by_severity": dict(self.violations_by_severity),
            "violations_by_rule": dict(self.violations_by_rule),
            "violations": [v.to_dict() for v in self.violations],
        }


@dataclass
class SummaryReport:
    """Totals across several remediation results."""

    total_pages: int = 0
    total_violations: int = 0
    total_fixes_applied: int = 0
    violations_by_page: Dict[str, int] = field(default_factory=dict)
    failed_pages: List[str] = field(default_factory=list)

    @classmethod
    def from_results(cls, results: Mapping[str, RemediationResult]) -> "SummaryReport":
        """Aggregate results keyed by page identifier."""
        summary = cls()
        for page_id, result in results.items():
            summary.total_pages += 1
            if result.has_error:
                summary.failed_pages.append(page_id)
                continue
            summary.total_violations += len(result.violations)
            summary.total_fixes_applied += result.fixes_applied
            summary.violations_by_page[page_id] = len(result.violations)
        return summary

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_pages": self.total_pages,
            "total_violations": self.total_violations,
            "total_fixes_applied": self.total_fixes_applied,
            "violations_by_page": dict(self.violations_by_page),
            "failed_pages": list(self.failed_pages),
        }
