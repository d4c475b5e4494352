"""
Errors - Exception taxonomy of the compliance engine.

- ParseFailure: markup could not be turned into a Document (fatal for that page)
- ConfigurationError: engine construction rejected the configuration
- RuleEvaluationFailure: a rule raised during evaluate() (recovered)
- RuleFixFailure: a rule raised during apply_fixes() (recovered)
"""

from typing import Optional


class WcagFixerError(Exception):
    """Base class for all engine errors."""


class ParseFailure(WcagFixerError):
    """The parsing collaborator could not produce a document."""


class ConfigurationError(WcagFixerError):
    """A compliance configuration or custom rule is malformed."""


class RuleFailure(WcagFixerError):
    """A single rule failed; carries the rule id and the original error."""

    def __init__(self, rule_id: str, cause: Exception, message: Optional[str] = None):
        self.rule_id = rule_id
        self.cause = cause
        super().__init__(message or f"{rule_id}: {cause}")


class RuleEvaluationFailure(RuleFailure):
    """Raised by a rule's evaluate(); the rule contributes zero violations."""


class RuleFixFailure(RuleFailure):
    """Raised by a rule's apply_fixes(); the rule contributes zero fixes."""
