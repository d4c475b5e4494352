"""
Remediation - Fix application on cloned documents.
"""

from .enhancement_passes import AriaEnhancementPass, ContrastStylePass
from .remediation_engine import RemediationEngine

__all__ = [
    "AriaEnhancementPass",
    "ContrastStylePass",
    "RemediationEngine",
]
