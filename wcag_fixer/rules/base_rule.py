"""
WcagRule - Abstract base class for accessibility rules.

Each rule is a self-contained detector and fixer for one success criterion.

Usage:
    class MyRule(WcagRule):
        @property
        def rule_id(self) -> str:
            return "9.9.9-my-rule"

        @property
        def description(self) -> str:
            return "Something must hold"

        @property
        def criterion(self) -> str:
            return "9.9.9 My Criterion"

        @property
        def level(self) -> ComplianceLevel:
            return ComplianceLevel.A

        def evaluate(self, document: Document) -> List[Violation]:
            return []
"""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel
from ..contracts.violation import RuleDescriptor, Violation


class WcagRule(ABC):
    """
    Abstract base class for accessibility rules.

    Subclasses must implement:
    - rule_id: Stable key, e.g. "1.1.1-img-alt"
    - description: What the rule requires
    - criterion: Success criterion reference
    - level: ComplianceLevel
    - evaluate(): Read-only detection

    Fixing rules also override can_auto_fix() and apply_fixes(). A fixer
    must re-check each condition on the current tree, so running it twice
    reports 0 the second time.
    """

    @property
    @abstractmethod
    def rule_id(self) -> str:
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @property
    @abstractmethod
    def criterion(self) -> str:
        pass

    @property
    @abstractmethod
    def level(self) -> ComplianceLevel:
        pass

    @property
    def name(self) -> str:
        """Rule name for logging and debugging."""
        return self.__class__.__name__

    @abstractmethod
    def evaluate(self, document: Document) -> List[Violation]:
        """
        Detect violations without touching the document.

        Args:
            document: Parsed document

        Returns:
            Violations in document order (empty if none)
        """
        pass

    def can_auto_fix(self) -> bool:
        """Whether apply_fixes() does anything."""
        return False

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        """
        Fix this rule's auto-fixable violations in place.

        Args:
            document: Working copy to mutate
            violations: Violations produced by this rule

        Returns:
            Number of fixes actually made
        """
        return 0

    @property
    def descriptor(self) -> RuleDescriptor:
        """Static description for reporting."""
        return RuleDescriptor(
            rule_id=self.rule_id,
            description=self.description,
            criterion=self.criterion,
            level=self.level,
            auto_fixable=self.can_auto_fix(),
        )

    def __repr__(self) -> str:
        """String representation."""
        return f"{self.name}(id={self.rule_id}, level={self.level.value})"

    def __eq__(self, other: object) -> bool:
        """Equality check based on class and rule id."""
        if not isinstance(other, WcagRule):
            return False
        return self.__class__ == other.__class__ and self.rule_id == other.rule_id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.rule_id))
