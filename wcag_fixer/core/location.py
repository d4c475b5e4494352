"""
LocationService - Ancestor-chain descriptors for elements.

A descriptor records the tag path from the document root to an element,
qualified by id (or name, for the element itself) where available:

    /html/body/form[@id='signup']/input[@name='email']

Values holding a single quote are double-quoted; values that contain both
quote kinds or a slash are left out of the descriptor.

Descriptors are stable across serialization, which makes them useful in
reports. They are NOT an identity: structurally identical siblings share a
descriptor. Remediation therefore re-locates elements through the document's
node arena and only falls back to descriptors when the arena is unusable.

Usage:
    from wcag_fixer.core.location import LocationService

    path = LocationService.describe(img)
    matches = LocationService.resolve(soup, path)
"""

import logging
import re
from typing import List, Optional, Tuple

from bs4 import BeautifulSoup, Tag


logger = logging.getLogger(__name__)

_SEGMENT = re.compile(
    r"""^([A-Za-z][\w:-]*)(?:\[@(id|name)=(?:'([^']*)'|"([^"]*)")\])?$"""
)


class LocationService:
    """Builds and resolves ancestor-chain descriptors."""

    @classmethod
    def describe(cls, element: Tag) -> str:
        """
        Build the descriptor for an element.

        Args:
            element: Tag inside a parsed document

        Returns:
            Descriptor string starting with "/"
        """
        parts: List[str] = []
        for ancestor in reversed(list(cls._ancestors(element))):
            parts.append(cls._segment(ancestor, qualify_name=False))
        parts.append(cls._segment(element, qualify_name=True))
        return "/" + "/".join(parts)

    @classmethod
    def resolve(cls, soup: BeautifulSoup, descriptor: str) -> List[Tag]:
        """
        Find the elements a descriptor may refer to.

        Priority:
        1. Trailing @id (ids are expected to be unique)
        2. Trailing @name
        3. Walk the chain segment by segment from the root

        Args:
            soup: Document tree to search
            descriptor: Descriptor produced by describe()

        Returns:
            Matching Tags in document order (may be empty)
        """
        segments = cls.parse(descriptor)
        if not segments:
            return []

        tag_name, attr, value = segments[-1]
        if attr == "id":
            matches = soup.find_all(tag_name, attrs={"id": value})
        elif attr == "name":
            matches = soup.find_all(tag_name, attrs={"name": value})
        else:
            matches = cls._walk(soup, segments)

        if len(matches) > 1:
            logger.debug(f"Descriptor {descriptor} is ambiguous ({len(matches)} matches)")
        return list(matches)

    @classmethod
    def parse(cls, descriptor: str) -> List[Tuple[str, Optional[str], Optional[str]]]:
        """Split a descriptor into (tag, attribute, value) segments."""
        segments = []
        for raw in descriptor.strip("/").split("/"):
            if not raw:
                continue
            match = _SEGMENT.match(raw)
            if not match:
                logger.debug(f"Unparseable descriptor segment: {raw!r}")
                return []
            value = match.group(3) if match.group(3) is not None else match.group(4)
            segments.append((match.group(1).lower(), match.group(2), value))
        return segments

    # =========================================================================
    # PRIVATE METHODS
    # =========================================================================

    @staticmethod
    def _ancestors(element: Tag):
        for parent in element.parents:
            if isinstance(parent, BeautifulSoup):
                break
            yield parent

    @staticmethod
    def _segment(element: Tag, qualify_name: bool) -> str:
        qualifier = _qualifier("id", element.get("id"))
        if qualifier is None and qualify_name:
            qualifier = _qualifier("name", element.get("name"))
        return element.name + (qualifier or "")

    @staticmethod
    def _walk(
        soup: BeautifulSoup,
        segments: List[Tuple[str, Optional[str], Optional[str]]],
    ) -> List[Tag]:
        current: List[Tag] = [soup]
        for tag_name, attr, value in segments:
            following: List[Tag] = []
            for node in current:
                for child in node.find_all(tag_name, recursive=False):
                    if attr and child.get(attr) != value:
                        continue
                    following.append(child)
            current = following
            if not current:
                break
        return current


def _qualifier(attr: str, value: Optional[str]) -> Optional[str]:
    """[@attr='value'], double-quoted when the value holds a single quote.

    None for values a descriptor cannot carry (empty, both quote kinds, or "/").
    """
    if not value:
        return None
    value = str(value)
    if "/" in value or ("'" in value and '"' in value):
        return None
    if "'" in value:
        return f'[@{attr}="{value}"]'
    return f"[@{attr}='{value}']"
