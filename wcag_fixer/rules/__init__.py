"""
Rules - Accessibility rule implementations and the engine that runs them.
"""

from .base_rule import WcagRule
from .image_alt_rule import ImageAltRule
from .form_label_rule import FormLabelRule
from .heading_structure_rule import HeadingStructureRule
from .link_purpose_rule import LinkPurposeRule
from .table_headers_rule import TableHeadersRule
from .keyboard_rule import KeyboardRule
from .focus_order_rule import FocusOrderRule
from .language_rule import LanguageRule
from .error_identification_rule import ErrorIdentificationRule
from .color_contrast_rule import ColorContrastRule
from .reserved_rules import PronunciationRule, ReadingLevelRule, SignLanguageRule
from .rule_engine import RuleEngine, create_default_engine

__all__ = [
    "WcagRule",
    "ImageAltRule",
    "FormLabelRule",
    "HeadingStructureRule",
    "LinkPurposeRule",
    "TableHeadersRule",
    "KeyboardRule",
    "FocusOrderRule",
    "LanguageRule",
    "ErrorIdentificationRule",
    "ColorContrastRule",
    "SignLanguageRule",
    "ReadingLevelRule",
    "PronunciationRule",
    "RuleEngine",
    "create_default_engine",
]
