"""
Options - Immutable configuration snapshots.

ComplianceConfig decides which rules an engine builds; RemediationOptions
decides what a single remediation run does. Both are validated once at
construction and never mutated afterwards.
"""

from fnmatch import fnmatch
from typing import Any, Dict, Optional, Tuple, TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field, field_validator

if TYPE_CHECKING:
    from ..core.config import Settings


class ComplianceConfig(BaseModel):
    """
    Which compliance levels and extras an engine should use.

    custom_rules holds rule objects; they are checked against the rule
    interface when a RuleEngine is built, not here.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    include_level_aa: bool = True
    include_level_aaa: bool = False
    custom_rules: Tuple[Any, ...] = ()
    css_overrides: Dict[str, str] = Field(default_factory=dict)
    """Selector → declaration block, injected by the contrast style pass."""

    excluded_pages: Tuple[str, ...] = ()
    """Glob patterns of pages an outside orchestrator should skip."""

    @field_validator("css_overrides")
    @classmethod
    def _strip_overrides(cls, value: Dict[str, str]) -> Dict[str, str]:
        cleaned: Dict[str, str] = {}
        for selector, declarations in value.items():
            selector = selector.strip()
            if not selector:
                raise ValueError("css override selector must not be empty")
            cleaned[selector] = declarations.strip().rstrip(";").strip()
        return cleaned

    @classmethod
    def from_settings(cls, settings: "Settings", **overrides: Any) -> "ComplianceConfig":
        """Build a config snapshot from Settings, with keyword overrides."""
        values: Dict[str, Any] = {
            "include_level_aa": settings.INCLUDE_LEVEL_AA,
            "include_level_aaa": settings.INCLUDE_LEVEL_AAA,
        }
        values.update(overrides)
        return cls(**values)

    def is_excluded(self, page_id: Optional[str]) -> bool:
        """Check a page identifier against excluded_pages."""
        if not page_id:
            return False
        return any(fnmatch(page_id, pattern) for pattern in self.excluded_pages)


class RemediationOptions(BaseModel):
    """Switches for a single remediation run."""

    model_config = ConfigDict(frozen=True)

    auto_fix: bool = True
    apply_aria_enhancements: bool = True
    fix_contrast_issues: bool = True
    preserve_comments: bool = True
    save_to_path: Optional[str] = None
