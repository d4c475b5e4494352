"""
RuleEngine - Builds the active rule set and runs it against documents.

The rule list is fixed at construction from a ComplianceConfig snapshot:
1. Level A rules (always)
2. Level AA rules (if include_level_aa)
3. Level AAA rules (if include_level_aaa)
4. Custom rules, in the order given

The list is never mutated afterwards, so one engine can be shared by
threads that each evaluate their own Document.

Usage:
    from wcag_fixer.rules import RuleEngine, create_default_engine

    engine = create_default_engine()
    violations = engine.evaluate(Document(html))

    engine = RuleEngine(ComplianceConfig(include_level_aa=False))
    for descriptor in engine.active_rules():
        print(descriptor.rule_id, descriptor.level.value)
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from ..analyzers.dom_parser import Document
from ..contracts.errors import ConfigurationError, RuleEvaluationFailure
from ..contracts.levels import ComplianceLevel
from ..contracts.options import ComplianceConfig
from ..contracts.violation import RuleDescriptor, Violation
from ..core.config import settings
from .base_rule import WcagRule
from .color_contrast_rule import ColorContrastRule
from .error_identification_rule import ErrorIdentificationRule
from .focus_order_rule import FocusOrderRule
from .form_label_rule import FormLabelRule
from .heading_structure_rule import HeadingStructureRule
from .image_alt_rule import ImageAltRule
from .keyboard_rule import KeyboardRule
from .language_rule import LanguageRule
from .link_purpose_rule import LinkPurposeRule
from .reserved_rules import PronunciationRule, ReadingLevelRule, SignLanguageRule
from .table_headers_rule import TableHeadersRule


logger = logging.getLogger(__name__)


def level_a_rules() -> List[WcagRule]:
    return [
        ImageAltRule(),
        FormLabelRule(),
        HeadingStructureRule(),
        LinkPurposeRule(),
        TableHeadersRule(),
        KeyboardRule(),
        FocusOrderRule(),
        LanguageRule(),
        ErrorIdentificationRule(),
    ]


def level_aa_rules() -> List[WcagRule]:
    return [ColorContrastRule()]


def level_aaa_rules() -> List[WcagRule]:
    return [SignLanguageRule(), ReadingLevelRule(), PronunciationRule()]


class RuleEngine:
    """
    Runs accessibility rules in registration order.

    Features:
    - Level gating from ComplianceConfig
    - Custom rule validation at construction
    - Fail-open evaluation: a rule that raises contributes nothing
    - Deterministic output: rule order, then document order
    """

    def __init__(self, config: Optional[ComplianceConfig] = None):
        """
        Build the rule list.

        Args:
            config: Compliance configuration (default: ComplianceConfig())

        Raises:
            ConfigurationError: If a custom rule is malformed
        """
        self._config = config or ComplianceConfig()

        rules: List[WcagRule] = level_a_rules()
        if self._config.include_level_aa:
            rules.extend(level_aa_rules())
        if self._config.include_level_aaa:
            rules.extend(level_aaa_rules())

        seen = {rule.rule_id for rule in rules}
        for custom in self._config.custom_rules:
            self._validate_custom_rule(custom, seen)
            seen.add(custom.rule_id)
            rules.append(custom)
            logger.debug(f"Registered custom rule: {custom!r}")

        self._rules: Tuple[WcagRule, ...] = tuple(rules)
        self._index: Dict[str, WcagRule] = {rule.rule_id: rule for rule in self._rules}
        logger.info(
            f"Rule engine ready: {len(self._rules)} rules "
            f"(AA={'on' if self._config.include_level_aa else 'off'}, "
            f"AAA={'on' if self._config.include_level_aaa else 'off'}, "
            f"custom={len(self._config.custom_rules)})"
        )

    @property
    def config(self) -> ComplianceConfig:
        return self._config

    @property
    def rules(self) -> Tuple[WcagRule, ...]:
        """All rules in registration order."""
        return self._rules

    def get_rule(self, rule_id: str) -> Optional[WcagRule]:
        return self._index.get(rule_id)

    def active_rules(self) -> List[RuleDescriptor]:
        """Descriptors of all rules, for reporting."""
        return [rule.descriptor for rule in self._rules]

    # =========================================================================
    # EVALUATION
    # =========================================================================

    def evaluate(self, document: Document) -> List[Violation]:
        """
        Run every rule against a document.

        Args:
            document: Parsed document (re-indexed before the run)

        Returns:
            Violations ordered by rule, then document order
        """
        violations, _ = self.evaluate_with_failures(document)
        return violations

    def evaluate_with_failures(
        self, document: Document
    ) -> Tuple[List[Violation], List[RuleEvaluationFailure]]:
        """
        Run every rule and also report the rules that raised.

        Returns:
            (violations, failures)
        """
        document.reindex()
        violations: List[Violation] = []
        failures: List[RuleEvaluationFailure] = []

        for rule in self._rules:
            try:
                found = rule.evaluate(document)
            except Exception as e:
                failure = RuleEvaluationFailure(rule.rule_id, e)
                failures.append(failure)
                logger.warning(f"Rule {rule.rule_id} failed during evaluation: {e}", exc_info=True)
                continue

            accepted = self._accept(rule, found)
            violations.extend(accepted)
            if accepted:
                logger.debug(f"Rule {rule.rule_id}: {len(accepted)} violation(s)")

        logger.info(
            f"Evaluated {document.page_id or 'document'}: {len(violations)} violations "
            f"from {len(self._rules)} rules"
            + (f", {len(failures)} rule(s) failed" if failures else "")
        )
        return violations, failures

    def _accept(self, rule: WcagRule, found: Iterable[Violation]) -> List[Violation]:
        accepted = []
        for violation in found:
            if violation.rule_id != rule.rule_id:
                logger.warning(
                    f"Rule {rule.rule_id} produced a violation for {violation.rule_id}; dropped"
                )
                continue
            accepted.append(violation)
        accepted.sort(key=lambda v: -1 if v.node_index is None else v.node_index)
        return accepted

    # =========================================================================
    # CONFIGURATION CHECKS
    # =========================================================================

    @staticmethod
    def _validate_custom_rule(rule: object, seen: set) -> None:
        if not isinstance(rule, WcagRule):
            raise ConfigurationError(
                f"Custom rule {rule!r} does not implement WcagRule"
            )
        try:
            rule_id = rule.rule_id
            level = rule.level
        except Exception as e:
            raise ConfigurationError(f"Custom rule {rule.name} is malformed: {e}") from e

        if not isinstance(rule_id, str) or not rule_id.strip():
            raise ConfigurationError(f"Custom rule {rule.name} has an empty id")
        if rule_id in seen:
            raise ConfigurationError(f"Duplicate rule id: {rule_id}")
        if not isinstance(level, ComplianceLevel):
            raise ConfigurationError(
                f"Custom rule {rule_id} has invalid level {level!r}"
            )

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, rule_id: object) -> bool:
        return rule_id in self._index

    def __repr__(self) -> str:
        """String representation."""
        return f"RuleEngine(rules={len(self._rules)})"


def create_default_engine() -> RuleEngine:
    """
    Create an engine from the global settings.

    Returns:
        RuleEngine with levels taken from settings
    """
    return RuleEngine(ComplianceConfig.from_settings(settings))
