"""
Tests for RuleEngine.

Tests verify:
- Rule registration order and level gating
- Custom rule validation
- Fail-open evaluation
- Deterministic output
"""

from typing import List

import pytest

from wcag_fixer.analyzers.dom_parser import Document
from wcag_fixer.contracts.errors import ConfigurationError, RuleEvaluationFailure
from wcag_fixer.contracts.levels import ComplianceLevel
from wcag_fixer.contracts.options import ComplianceConfig
from wcag_fixer.contracts.violation import Violation
from wcag_fixer.rules.base_rule import WcagRule
from wcag_fixer.rules.rule_engine import RuleEngine, create_default_engine

from tests.helpers import checks, make_violation, parse


LEVEL_A_IDS = [
    "1.1.1-img-alt",
    "1.3.1-form-label",
    "1.3.1-heading-structure",
    "2.4.4-link-purpose",
    "1.3.1-table-headers",
    "2.1.1-keyboard-access",
    "2.4.3-focus-order",
    "3.1.1-language",
    "3.3.1-error-identification",
]

AAA_IDS = ["1.2.6-sign-language", "3.1.5-reading-level", "3.1.6-pronunciation"]


# =============================================================================
# CUSTOM RULES
# =============================================================================


class MarqueeRule(WcagRule):
    """Flags every <marquee>."""

    rule_id = "custom-marquee"
    description = "Moving text must be avoidable"
    criterion = "2.2.2 Pause, Stop, Hide"
    level = ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        return [
            make_violation(
                rule_id=self.rule_id,
                message="Marquee element",
                node_index=document.index_of(element),
                check="marquee",
            )
            for element in document.select("marquee")
        ]


class ExplodingRule(MarqueeRule):
    rule_id = "custom-exploding"

    def evaluate(self, document: Document) -> List[Violation]:
        raise RuntimeError("boom")


class ImpostorRule(MarqueeRule):
    """Returns violations claiming to come from another rule."""

    rule_id = "custom-impostor"

    def evaluate(self, document: Document) -> List[Violation]:
        return [make_violation(rule_id="1.1.1-img-alt")]


class UnsortedRule(MarqueeRule):
    rule_id = "custom-unsorted"

    def evaluate(self, document: Document) -> List[Violation]:
        return [make_violation(rule_id=self.rule_id, node_index=i) for i in (3, None, 1)]


class BrokenPropertyRule(MarqueeRule):
    @property
    def rule_id(self) -> str:
        raise AttributeError("no id")


def custom_rule(**attributes) -> WcagRule:
    """MarqueeRule subclass instance with overridden class attributes."""
    return type("CustomRule", (MarqueeRule,), attributes)()


# =============================================================================
# REGISTRATION
# =============================================================================


class TestRegistration:
    """Tests for rule list construction."""

    def test_default_levels(self, engine):
        assert [rule.rule_id for rule in engine.rules] == LEVEL_A_IDS + ["1.4.3-color-contrast"]

    def test_level_a_only(self, level_a_engine):
        assert [rule.rule_id for rule in level_a_engine.rules] == LEVEL_A_IDS

    def test_all_levels(self):
        engine = RuleEngine(ComplianceConfig(include_level_aaa=True))
        assert [rule.rule_id for rule in engine.rules][-3:] == AAA_IDS
        assert len(engine) == 13

    def test_custom_rules_last(self):
        engine = RuleEngine(ComplianceConfig(include_level_aaa=True, custom_rules=[MarqueeRule()]))
        assert engine.rules[-1].rule_id == "custom-marquee"

    def test_lookup(self, engine):
        assert "1.1.1-img-alt" in engine
        assert "missing" not in engine
        assert engine.get_rule("3.1.1-language").level == ComplianceLevel.A
        assert engine.get_rule("missing") is None

    def test_active_rules(self, engine):
        descriptors = engine.active_rules()
        assert len(descriptors) == len(engine)
        contrast = descriptors[-1]
        assert contrast.rule_id == "1.4.3-color-contrast"
        assert contrast.level == ComplianceLevel.AA
        assert contrast.auto_fixable is True

    def test_default_engine_uses_settings(self):
        engine = create_default_engine()
        assert len(engine) == len(LEVEL_A_IDS) + 1


class TestCustomRuleValidation:
    """Tests for ConfigurationError cases."""

    def test_not_a_rule(self):
        with pytest.raises(ConfigurationError):
            RuleEngine(ComplianceConfig(custom_rules=[object()]))

    def test_duplicate_of_builtin(self):
        with pytest.raises(ConfigurationError, match="Duplicate rule id"):
            RuleEngine(ComplianceConfig(custom_rules=[custom_rule(rule_id="1.1.1-img-alt")]))

    def test_duplicate_custom(self):
        with pytest.raises(ConfigurationError):
            RuleEngine(ComplianceConfig(custom_rules=[MarqueeRule(), MarqueeRule()]))

    def test_empty_id(self):
        with pytest.raises(ConfigurationError, match="empty id"):
            RuleEngine(ComplianceConfig(custom_rules=[custom_rule(rule_id="  ")]))

    def test_invalid_level(self):
        with pytest.raises(ConfigurationError, match="invalid level"):
            RuleEngine(ComplianceConfig(custom_rules=[custom_rule(level="AA")]))

    def test_raising_property(self):
        with pytest.raises(ConfigurationError, match="malformed"):
            RuleEngine(ComplianceConfig(custom_rules=[BrokenPropertyRule()]))


# =============================================================================
# EVALUATION
# =============================================================================


class TestEvaluation:
    """Tests for evaluate() and evaluate_with_failures()."""

    def test_accessible_page(self, engine, accessible_document):
        assert engine.evaluate(accessible_document) == []

    def test_broken_page(self, engine, broken_document):
        violations = engine.evaluate(broken_document)
        assert checks(violations) == [
            "missing-alt",
            "missing-label",
            "first-heading",
            "heading-skip",
            "new-window",
            "mouse-only",
            "missing-lang",
            "error-container",
            "low-contrast",
        ]

    def test_level_gating(self, level_a_engine):
        document = parse('<p style="color: #777777; background-color: #888888">Low contrast</p><h1>T</h1>')
        assert level_a_engine.evaluate(document) == []

    def test_deterministic(self, engine, broken_document):
        first = engine.evaluate(broken_document)
        second = engine.evaluate(broken_document)
        assert first == second

    def test_document_order_within_rule(self, engine):
        document = parse('<h1>T</h1><img src="b.png"><p><img src="a.png"></p>')
        violations = engine.evaluate(document)
        indices = [v.node_index for v in violations]
        assert indices == sorted(indices)

    def test_document_level_violations_first(self):
        engine = RuleEngine(ComplianceConfig(custom_rules=[UnsortedRule()]))
        violations = [v for v in engine.evaluate(parse("<p>x</p>")) if v.rule_id == "custom-unsorted"]
        assert [v.node_index for v in violations] == [None, 1, 3]

    def test_failing_rule_is_isolated(self):
        engine = RuleEngine(ComplianceConfig(custom_rules=[ExplodingRule(), MarqueeRule()]))
        document = parse('<h1>T</h1><img src="a.png"><marquee>News</marquee>')

        violations, failures = engine.evaluate_with_failures(document)

        assert "missing-alt" in checks(violations)
        assert checks(violations)[-1] == "marquee"
        assert len(failures) == 1
        assert isinstance(failures[0], RuleEvaluationFailure)
        assert failures[0].rule_id == "custom-exploding"
        assert str(failures[0].cause) == "boom"

    def test_evaluate_fails_open(self):
        engine = RuleEngine(ComplianceConfig(custom_rules=[ExplodingRule()]))
        assert engine.evaluate(parse("<h1>T</h1>")) == []

    def test_foreign_rule_ids_dropped(self):
        engine = RuleEngine(ComplianceConfig(custom_rules=[ImpostorRule()]))
        assert engine.evaluate(parse("<h1>T</h1>")) == []

    def test_reindexes_before_run(self, engine):
        document = parse("<h1>T</h1>")
        document.soup.append(document.new_tag("img", src="late.png"))
        violations = engine.evaluate(document)
        assert checks(violations) == ["missing-alt"]
        assert document.node_at(violations[0].node_index).name == "img"
