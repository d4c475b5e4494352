"""
Levels - Compliance levels and violation severities.

ComplianceLevel gates which rules an engine registers:
- A   → always active
- AA  → active when ComplianceConfig.include_level_aa
- AAA → active when ComplianceConfig.include_level_aaa

Severity orders violations for reporting (critical first).
"""

from enum import Enum


class ComplianceLevel(str, Enum):
    """WCAG conformance level a rule belongs to."""

    A = "A"
    AA = "AA"
    AAA = "AAA"

    @classmethod
    def from_string(cls, value: str) -> "ComplianceLevel":
        """
        Convert a string such as "aa" or "Level AA" to a ComplianceLevel.

        Raises:
            ValueError: If the value names no known level
        """
        normalized = value.strip().upper()
        if normalized.startswith("LEVEL"):
            normalized = normalized[len("LEVEL"):].strip()
        return cls(normalized)

    @property
    def rank(self) -> int:
        """0 for A, 1 for AA, 2 for AAA."""
        return ("A", "AA", "AAA").index(self.value)


class Severity(str, Enum):
    """Impact of a violation on assistive technology users."""

    CRITICAL = "critical"
    """Blocks access to content or functionality."""

    SERIOUS = "serious"
    """Causes significant difficulty."""

    MODERATE = "moderate"
    """Causes some difficulty, or detection is lower-confidence."""

    MINOR = "minor"
    """Annoyance or inconsistency."""

    @classmethod
    def from_string(cls, value: str) -> "Severity":
        """Convert string to Severity, defaulting to MODERATE."""
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.MODERATE

    @property
    def rank(self) -> int:
        """Sort key: lower is more severe."""
        return {
            Severity.CRITICAL: 0,
            Severity.SERIOUS: 1,
            Severity.MODERATE: 2,
            Severity.MINOR: 3,
        }[self]
