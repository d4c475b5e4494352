"""
ComplianceTool - Entry point for embedding the engine.

Wraps parsing, evaluation, reporting and remediation behind a few calls.
Fetching pages, walking directories and rendering reports are left to the
host application.

Usage:
    from wcag_fixer import ComplianceTool, RemediationOptions

    tool = ComplianceTool()
    report = tool.analyze(html, page_id="index.html")
    result = tool.remediate(html, RemediationOptions(save_to_path="out/index.html"))
"""

import logging
from pathlib import Path
from typing import List, Mapping, Optional, Union

from .analyzers.dom_parser import Document
from .contracts.errors import ParseFailure
from .contracts.options import ComplianceConfig, RemediationOptions
from .contracts.results import ComplianceReport, RemediationResult, SummaryReport
from .contracts.violation import RuleDescriptor, Violation
from .core.config import settings
from .remediation.remediation_engine import RemediationEngine
from .rules.rule_engine import RuleEngine


logger = logging.getLogger(__name__)

Markup = Union[str, Document]


class ComplianceTool:
    """
    Evaluate and remediate markup documents.

    One instance can be shared across threads as long as every call gets
    its own markup or Document.
    """

    def __init__(self, config: Optional[ComplianceConfig] = None):
        """
        Args:
            config: Compliance configuration (default: built from settings)

        Raises:
            ConfigurationError: If a custom rule is malformed
        """
        self.config = config or ComplianceConfig.from_settings(settings)
        self.engine = RuleEngine(self.config)
        self.remediation = RemediationEngine(self.engine)

    def evaluate(self, markup: Markup, page_id: Optional[str] = None) -> List[Violation]:
        """
        Evaluate a document.

        Raises:
            ParseFailure: If markup cannot be parsed
        """
        return self.engine.evaluate(self._document(markup, page_id))

    def analyze(self, markup: Markup, page_id: Optional[str] = None) -> ComplianceReport:
        """Evaluate a document and count violations by level, severity and rule."""
        document = self._document(markup, page_id)
        violations = self.engine.evaluate(document)
        return ComplianceReport.build(document.page_id, violations, self.active_rules())

    def remediate(
        self,
        markup: Markup,
        options: Optional[RemediationOptions] = None,
        page_id: Optional[str] = None,
    ) -> RemediationResult:
        """
        Evaluate and fix a document.

        A document that cannot be parsed yields a result with error_message
        set instead of raising. When options.save_to_path is set the
        remediated markup is written there.

        Args:
            markup: Raw HTML or an already parsed Document
            options: Remediation switches
            page_id: Identifier used in the result (overrides a Document's own)

        Returns:
            RemediationResult
        """
        options = options or RemediationOptions()
        try:
            document = self._document(markup, page_id)
        except ParseFailure as e:
            logger.warning(f"Skipping {page_id or 'document'}: {e}")
            return RemediationResult.failed(page_id, str(e))

        violations = self.engine.evaluate(document)
        result = self.remediation.remediate(document, violations, options)

        if options.save_to_path and not result.has_error:
            self.save(result, options.save_to_path)
        return result

    def save(self, result: RemediationResult, path: Union[str, Path]) -> Path:
        """Write remediated markup as UTF-8, creating parent directories."""
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(result.remediated_html, encoding="utf-8")
        logger.info(f"Saved remediated markup to {target}")
        return target

    def active_rules(self) -> List[RuleDescriptor]:
        return self.engine.active_rules()

    @staticmethod
    def summarize(results: Mapping[str, RemediationResult]) -> SummaryReport:
        """Aggregate results computed by the host, keyed by page id."""
        return SummaryReport.from_results(results)

    @staticmethod
    def _document(markup: Markup, page_id: Optional[str]) -> Document:
        """Parse markup, or relabel a Document when page_id is given."""
        if isinstance(markup, Document):
            if page_id is None or page_id == markup.page_id:
                return markup
            return Document.from_soup(markup.soup, page_id)
        return Document(markup, page_id=page_id)
