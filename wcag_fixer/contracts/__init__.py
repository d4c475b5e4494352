"""
Contracts - Data structures for the compliance engine.

Provides:
- ComplianceLevel, Severity: classification enums
- RuleDescriptor, Violation: evaluation output
- ComplianceConfig, RemediationOptions: configuration snapshots
- RemediationResult, ComplianceReport, SummaryReport: outputs
- Exception taxonomy
"""

from .levels import ComplianceLevel, Severity
from .violation import RuleDescriptor, Violation
from .options import ComplianceConfig, RemediationOptions
from .results import ComplianceReport, RemediationResult, SummaryReport
from .errors import (
    WcagFixerError,
    ParseFailure,
    ConfigurationError,
    RuleFailure,
    RuleEvaluationFailure,
    RuleFixFailure,
)

__all__ = [
    "ComplianceLevel",
    "Severity",
    "RuleDescriptor",
    "Violation",
    "ComplianceConfig",
    "RemediationOptions",
    "RemediationResult",
    "ComplianceReport",
    "SummaryReport",
    "WcagFixerError",
    "ParseFailure",
    "ConfigurationError",
    "RuleFailure",
    "RuleEvaluationFailure",
    "RuleFixFailure",
]
