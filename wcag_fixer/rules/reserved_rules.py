"""
Reserved rules - AAA criteria that need human judgment.

These are registered so reports list them and so hosts can replace them
with real detectors. They never report violations.
"""

from typing import List

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel
from ..contracts.violation import Violation
from .base_rule import WcagRule


class ReservedRule(WcagRule):
    """Extension point that always passes."""

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.AAA

    def evaluate(self, document: Document) -> List[Violation]:
        return []


class SignLanguageRule(ReservedRule):

    @property
    def rule_id(self) -> str:
        return "1.2.6-sign-language"

    @property
    def description(self) -> str:
        return "Sign language interpretation should be provided for prerecorded audio"

    @property
    def criterion(self) -> str:
        return "1.2.6 Sign Language (Prerecorded)"


class ReadingLevelRule(ReservedRule):

    @property
    def rule_id(self) -> str:
        return "3.1.5-reading-level"

    @property
    def description(self) -> str:
        return "Content should be written at lower secondary education level"

    @property
    def criterion(self) -> str:
        return "3.1.5 Reading Level"


class PronunciationRule(ReservedRule):

    @property
    def rule_id(self) -> str:
        return "3.1.6-pronunciation"

    @property
    def description(self) -> str:
        return "Pronunciation for words should be provided where needed"

    @property
    def criterion(self) -> str:
        return "3.1.6 Pronunciation"
