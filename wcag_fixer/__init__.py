"""
wcag_fixer - Accessibility evaluation and remediation for HTML documents.

Detects WCAG 2.x success criterion violations in markup and applies
bounded automatic fixes to a cloned copy of the document.

Modules:
- core: Settings, logging setup, location descriptors
- contracts: Violations, options, results and errors
- analyzers: Document parsing, inline styles, color math
- rules: Rule implementations and the RuleEngine
- remediation: Fix pipeline and enhancement passes
- service: ComplianceTool facade
"""

from .analyzers.dom_parser import Document
from .contracts import (
    ComplianceConfig,
    ComplianceLevel,
    ComplianceReport,
    ConfigurationError,
    ParseFailure,
    RemediationOptions,
    RemediationResult,
    RuleDescriptor,
    RuleEvaluationFailure,
    RuleFixFailure,
    Severity,
    SummaryReport,
    Violation,
    WcagFixerError,
)
from .remediation import RemediationEngine
from .rules import RuleEngine, WcagRule, create_default_engine
from .service import ComplianceTool

__version__ = "0.1.0"

__all__ = [
    "ComplianceTool",
    "Document",
    "RuleEngine",
    "RemediationEngine",
    "WcagRule",
    "create_default_engine",
    "ComplianceConfig",
    "ComplianceLevel",
    "ComplianceReport",
    "RemediationOptions",
    "RemediationResult",
    "RuleDescriptor",
    "Severity",
    "SummaryReport",
    "Violation",
    "WcagFixerError",
    "ParseFailure",
    "ConfigurationError",
    "RuleEvaluationFailure",
    "RuleFixFailure",
]
