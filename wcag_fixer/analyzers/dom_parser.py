"""
Document - HTML parsing, element selection and node identity using BeautifulSoup.

This module is the boundary to the parsing collaborator. It wraps
BeautifulSoup with CSS selector queries, a node arena that gives every
element a stable index, structural cloning and serialization.

Node arena:
    Every Tag gets its position in document order when the document is
    indexed. Violations carry that index. clone() copies the tree node by
    node and indexes the copy in the same order, so index i in the clone is
    the twin of index i in the source. Lookups go through the pinned arena,
    which keeps identities valid while fixers rename tags or insert nodes.

Usage:
    from wcag_fixer.analyzers.dom_parser import Document

    document = Document(html_string, page_id="index.html")
    for img in document.select("img"):
        print(document.index_of(img), img.get("src"))

    working = document.clone()
    twin = working.node_at(document.index_of(img))
"""

import copy
import logging
from typing import Dict, List, Optional, TYPE_CHECKING

from bs4 import BeautifulSoup, Comment, Tag

from ..contracts.errors import ParseFailure
from ..core.location import LocationService

if TYPE_CHECKING:
    from ..contracts.violation import Violation


logger = logging.getLogger(__name__)

PARSER = "html.parser"


class Document:
    """
    A parsed markup document with stable node indices.

    Provides methods for:
    - CSS selector queries
    - Node index lookups in both directions
    - Structural cloning
    - Serialization back to markup
    """

    def __init__(self, markup: str, page_id: Optional[str] = None):
        """
        Parse markup into a document.

        Args:
            markup: Raw HTML string to parse
            page_id: Optional identifier (URL, path) used in reports

        Raises:
            ParseFailure: If the markup cannot be parsed
        """
        if not isinstance(markup, str):
            raise ParseFailure(
                f"Expected markup string, got {type(markup).__name__}"
            )
        try:
            soup = BeautifulSoup(markup, PARSER)
        except Exception as e:
            raise ParseFailure(f"Could not parse {page_id or 'document'}: {e}") from e

        self._soup = soup
        self._page_id = page_id
        self._nodes: List[Tag] = []
        self._positions: Dict[int, int] = {}
        self._aligned = True
        self.reindex()

    @classmethod
    def from_soup(cls, soup: BeautifulSoup, page_id: Optional[str] = None) -> "Document":
        """Wrap an already-parsed tree without re-parsing."""
        document = cls.__new__(cls)
        document._soup = soup
        document._page_id = page_id
        document._nodes = []
        document._positions = {}
        document._aligned = True
        document.reindex()
        return document

    @property
    def soup(self) -> BeautifulSoup:
        """Access the underlying BeautifulSoup object."""
        return self._soup

    @property
    def page_id(self) -> Optional[str]:
        return self._page_id

    # =========================================================================
    # ELEMENT SELECTION
    # =========================================================================

    def select(self, selector: str) -> List[Tag]:
        """
        Get all elements matching a CSS selector, in document order.

        Args:
            selector: CSS selector string (e.g. "img", "input[required]")

        Returns:
            List of matching Tags (may be empty)
        """
        return self._soup.select(selector)

    def select_one(self, selector: str) -> Optional[Tag]:
        """Get the first element matching a CSS selector."""
        return self._soup.select_one(selector)

    def find_by_id(self, element_id: str) -> Optional[Tag]:
        """
        Get element by id attribute.

        Args:
            element_id: Id value (without #)

        Returns:
            First matching Tag or None
        """
        if not element_id:
            return None
        return self._soup.find(attrs={"id": element_id})

    def all_elements(self) -> List[Tag]:
        """All Tag elements in document order."""
        return self._soup.find_all(True)

    @property
    def root(self) -> Optional[Tag]:
        """The <html> element, or None for a fragment."""
        return self._soup.find("html")

    @property
    def head(self) -> Optional[Tag]:
        return self._soup.find("head")

    @property
    def body(self) -> Optional[Tag]:
        return self._soup.find("body")

    def new_tag(self, name: str, **attrs: str) -> Tag:
        """Create a detached Tag owned by this document."""
        return self._soup.new_tag(name, attrs=attrs)

    # =========================================================================
    # NODE ARENA
    # =========================================================================

    def reindex(self) -> None:
        """Assign every current element its document-order index."""
        self._nodes = self.all_elements()
        self._positions = {id(node): i for i, node in enumerate(self._nodes)}
        self._aligned = True

    def index_of(self, element: Tag) -> Optional[int]:
        """Arena index of an element, None if it was created after indexing."""
        return self._positions.get(id(element))

    def node_at(self, index: int) -> Optional[Tag]:
        """Element at an arena index, None if out of range."""
        if 0 <= index < len(self._nodes):
            return self._nodes[index]
        return None

    @property
    def is_aligned(self) -> bool:
        """False when a clone's arena does not mirror its source."""
        return self._aligned

    def __len__(self) -> int:
        return len(self._nodes)

    def resolve(self, violation: "Violation") -> Optional[Tag]:
        """
        Find the element a violation refers to in this document.

        Uses the arena index when the arena is aligned with the document
        the violation came from; otherwise falls back to the location
        descriptor.

        Args:
            violation: Violation produced by evaluating this document or
                       the document it was cloned from

        Returns:
            Matching Tag, or None for document-level or vanished elements
        """
        if violation.node_index is not None and self._aligned:
            node = self.node_at(violation.node_index)
            if node is not None and node.parent is not None:
                return node
            return None

        if not violation.location:
            return None
        matches = LocationService.resolve(self._soup, violation.location)
        return matches[0] if matches else None

    # =========================================================================
    # CLONING AND SERIALIZATION
    # =========================================================================

    def clone(self) -> "Document":
        """
        Create a structurally independent copy with a parallel arena.

        Nodes are copied one by one (no re-parse), so the copy has the same
        element sequence as this document.

        Returns:
            New Document; mutating it never affects this one
        """
        soup = BeautifulSoup("", PARSER)
        for child in list(self._soup.contents):
            soup.append(copy.copy(child))

        twin = Document.from_soup(soup, self._page_id)
        source_names = [node.name for node in self._nodes]
        twin_names = [node.name for node in twin._nodes]
        if source_names != twin_names:
            logger.warning(
                f"Clone of {self._page_id or 'document'} does not mirror its "
                f"source ({len(twin_names)} vs {len(source_names)} elements); "
                f"falling back to location descriptors"
            )
            twin._aligned = False
        return twin

    def remove_comments(self) -> int:
        """
        Strip all markup comments.

        Returns:
            Number of comments removed
        """
        comments = self._soup.find_all(string=lambda text: isinstance(text, Comment))
        for comment in comments:
            comment.extract()
        return len(comments)

    def serialize(self) -> str:
        """Serialize the tree back to markup."""
        return str(self._soup)

    def __repr__(self) -> str:
        """String representation."""
        return f"Document({self._page_id or '<markup>'}, {len(self._nodes)} elements)"
