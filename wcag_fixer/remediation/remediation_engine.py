"""
RemediationEngine - Applies rule fixers to a working copy of a document.

Pipeline:
1. auto_fix off → identity result
2. Clone the document; the original is never mutated
3. Optionally strip comments from the copy
4. Run each rule's fixer, in registration order, with that rule's violations
5. Run the enhancement passes enabled in the options
6. Return both serializations, the untouched violations and a change log

A fixer that raises is recorded in the change log and contributes zero
fixes; the remaining fixers still run.

Usage:
    engine = RuleEngine(config)
    remediation = RemediationEngine(engine)
    result = remediation.remediate(document, engine.evaluate(document))
"""

import logging
from typing import Dict, List, Optional, Sequence

from ..analyzers.dom_parser import Document
from ..contracts.errors import RuleFixFailure
from ..contracts.options import RemediationOptions
from ..contracts.results import RemediationResult
from ..contracts.violation import Violation
from ..rules.base_rule import WcagRule
from ..rules.rule_engine import RuleEngine
from .enhancement_passes import AriaEnhancementPass, ContrastStylePass


logger = logging.getLogger(__name__)


class RemediationEngine:
    """Runs fixers for evaluated violations."""

    def __init__(self, rule_engine: RuleEngine, default_language: Optional[str] = None):
        """
        Args:
            rule_engine: Engine whose rules produced the violations
            default_language: Language for the ARIA pass (default from settings)
        """
        self._rule_engine = rule_engine
        self._aria_pass = AriaEnhancementPass(default_language)
        self._contrast_pass = ContrastStylePass(rule_engine.config.css_overrides)

    @property
    def rule_engine(self) -> RuleEngine:
        return self._rule_engine

    def passes(self, options: RemediationOptions) -> List[WcagRule]:
        """Enhancement passes enabled by the options, in run order."""
        enabled: List[WcagRule] = []
        if options.apply_aria_enhancements:
            enabled.append(self._aria_pass)
        if options.fix_contrast_issues:
            enabled.append(self._contrast_pass)
        return enabled

    def remediate(
        self,
        document: Document,
        violations: Sequence[Violation],
        options: Optional[RemediationOptions] = None,
    ) -> RemediationResult:
        """
        Fix a document.

        Args:
            document: Evaluated document (left untouched)
            violations: Output of RuleEngine.evaluate for this document
            options: Remediation switches (default: RemediationOptions())

        Returns:
            RemediationResult
        """
        options = options or RemediationOptions()
        original_html = document.serialize()
        violations = tuple(violations)

        if not options.auto_fix:
            logger.info(f"Auto-fix disabled for {document.page_id or 'document'}")
            return RemediationResult(
                page_id=document.page_id,
                original_html=original_html,
                remediated_html=original_html,
                violations=violations,
            )

        working = document.clone()
        change_log: List[str] = []
        fixes_applied = 0

        if not options.preserve_comments:
            removed = working.remove_comments()
            if removed:
                change_log.append(f"Removed {removed} comments")

        by_rule = self._group(violations)
        for rule in self._rule_engine.rules:
            assigned = by_rule.get(rule.rule_id)
            if not assigned or not rule.can_auto_fix():
                continue
            fixes_applied += self._run_fixer(rule, working, assigned, change_log)

        for enhancement in self.passes(options):
            fixes_applied += self._run_fixer(enhancement, working, [], change_log)

        logger.info(
            f"Remediated {document.page_id or 'document'}: "
            f"{fixes_applied} fixes, {len(change_log)} change log entries"
        )
        return RemediationResult(
            page_id=document.page_id,
            original_html=original_html,
            remediated_html=working.serialize(),
            violations=violations,
            fixes_applied=fixes_applied,
            change_log=change_log,
        )

    def _group(self, violations: Sequence[Violation]) -> Dict[str, List[Violation]]:
        grouped: Dict[str, List[Violation]] = {}
        for violation in violations:
            if violation.rule_id not in self._rule_engine:
                logger.debug(f"Skipping violation for unknown rule {violation.rule_id}")
                continue
            grouped.setdefault(violation.rule_id, []).append(violation)
        return grouped

    @staticmethod
    def _run_fixer(
        rule: WcagRule,
        working: Document,
        violations: Sequence[Violation],
        change_log: List[str],
    ) -> int:
        try:
            fixes = rule.apply_fixes(working, violations)
        except Exception as e:
            failure = RuleFixFailure(rule.rule_id, e)
            logger.warning(f"Rule {rule.rule_id} failed while fixing: {e}", exc_info=True)
            change_log.append(f"Error fixing {failure.rule_id}: {failure.cause}")
            return 0

        if fixes > 0:
            change_log.append(f"Applied {fixes} fixes for rule: {rule.description}")
            logger.debug(f"Rule {rule.rule_id} applied {fixes} fix(es)")
        return fixes
