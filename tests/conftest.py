"""
Test configuration and fixtures for pytest.

Provides:
- Sample documents (accessible page, page with many problems)
- Engines with different level configurations
- Sample markup and factories live in tests/helpers.py
"""

import pytest

from wcag_fixer.analyzers.dom_parser import Document
from wcag_fixer.core.logging import configure_logging
from wcag_fixer.contracts.options import ComplianceConfig
from wcag_fixer.remediation.remediation_engine import RemediationEngine
from wcag_fixer.rules.rule_engine import RuleEngine

from tests.helpers import ACCESSIBLE_PAGE, BROKEN_PAGE, parse


# Configure logging for tests
configure_logging("INFO")


# ---------------------------------------------------------------------------
# FIXTURES
# ---------------------------------------------------------------------------


@pytest.fixture
def accessible_document() -> Document:
    return parse(ACCESSIBLE_PAGE, "accessible.html")


@pytest.fixture
def broken_document() -> Document:
    return parse(BROKEN_PAGE, "broken.html")


@pytest.fixture
def engine() -> RuleEngine:
    """Engine with the default levels (A and AA)."""
    return RuleEngine(ComplianceConfig())


@pytest.fixture
def level_a_engine() -> RuleEngine:
    """Engine with only level A rules."""
    return RuleEngine(ComplianceConfig(include_level_aa=False, include_level_aaa=False))


@pytest.fixture
def remediation(engine) -> RemediationEngine:
    return RemediationEngine(engine, default_language="en")
