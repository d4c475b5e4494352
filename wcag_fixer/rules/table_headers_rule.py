"""
TableHeadersRule - 1.3.1 Info and Relationships (data tables).

Layout tables are skipped. For data tables:
- no-headers: no <th> and no <thead> rows (fix: first row becomes th scope=col)
- missing-scope: <th> without scope (fix: infer row or col from position)
- complex-table: spans, several header rows, row and column headers,
  a caption, or 10+ rows by 6+ columns, without headers= on data cells
- empty-header: <th> with no text (not fixable)

Only a table's own cells count; cells of nested tables belong to the
nested table.
"""

import logging
from typing import List, Sequence

from bs4 import Tag

from ..analyzers.dom_parser import Document
from ..contracts.levels import ComplianceLevel, Severity
from ..contracts.violation import Violation
from .base_rule import WcagRule
from .helpers import fixable_targets, has_class, make_violation, text_of


logger = logging.getLogger(__name__)

LAYOUT_CLASSES = ("layout", "layout-table", "presentational", "non-data")


class TableHeadersRule(WcagRule):
    """Data tables must have proper headers."""

    @property
    def rule_id(self) -> str:
        return "1.3.1-table-headers"

    @property
    def description(self) -> str:
        return "Data tables must have proper headers"

    @property
    def criterion(self) -> str:
        return "1.3.1 Info and Relationships"

    @property
    def level(self) -> ComplianceLevel:
        return ComplianceLevel.A

    def evaluate(self, document: Document) -> List[Violation]:
        violations = []
        for table in document.select("table"):
            if is_layout_table(table):
                continue

            headers = own_cells(table, "th")
            if not headers and not header_rows(table):
                violations.append(make_violation(
                    self, document, table,
                    "Table has no header cells (th) or header rows (thead)",
                    Severity.SERIOUS,
                    auto_fixable=True,
                    remediation="Add th elements for each column or row that serves as a header",
                    check="no-headers",
                ))

            for th in headers:
                if not th.has_attr("scope"):
                    violations.append(make_violation(
                        self, document, th,
                        "Table header cell missing scope attribute",
                        Severity.MODERATE,
                        auto_fixable=True,
                        remediation="Add scope='col' or scope='row' to the th element",
                        check="missing-scope",
                    ))

            if headers and is_complex_table(table):
                if not any(td.has_attr("headers") for td in own_cells(table, "td")):
                    violations.append(make_violation(
                        self, document, table,
                        "Complex table without headers/id associations",
                        Severity.SERIOUS,
                        remediation="Use headers and id attributes to associate data cells with headers",
                        check="complex-table",
                    ))

            for th in headers:
                if not text_of(th) and not th.find("img", alt=lambda alt: bool(alt and alt.strip())):
                    violations.append(make_violation(
                        self, document, th,
                        "Empty table header cell",
                        Severity.MODERATE,
                        remediation="Add descriptive text to the header cell",
                        check="empty-header",
                    ))
        return violations

    def can_auto_fix(self) -> bool:
        return True

    def apply_fixes(self, document: Document, violations: Sequence[Violation]) -> int:
        fixes = 0
        for violation, element in fixable_targets(document, violations):
            if violation.check == "no-headers" and element.name == "table":
                fixes += self._promote_first_row(element)
            elif violation.check == "missing-scope" and element.name == "th":
                if element.has_attr("scope"):
                    continue
                element["scope"] = infer_scope(element)
                fixes += 1
        return fixes

    def _promote_first_row(self, table: Tag) -> int:
        if own_cells(table, "th") or header_rows(table):
            return 0
        rows = own_rows(table)
        if not rows:
            return 0

        fixes = 0
        for position, cell in enumerate(row_cells(rows[0]), start=1):
            if cell.name != "td":
                continue
            cell.name = "th"
            cell["scope"] = "col"
            if not text_of(cell):
                cell.string = f"Column {position}"
            fixes += 1
        logger.debug(f"Promoted {fixes} first-row cells to headers")
        return fixes


# =============================================================================
# TABLE STRUCTURE
# =============================================================================


def owning_table(element: Tag) -> Tag:
    return element.find_parent("table")


def own_rows(table: Tag) -> List[Tag]:
    return [row for row in table.find_all("tr") if owning_table(row) is table]


def own_cells(table: Tag, *names: str) -> List[Tag]:
    return [cell for cell in table.find_all(list(names or ("td", "th"))) if owning_table(cell) is table]


def row_cells(row: Tag) -> List[Tag]:
    return row.find_all(["td", "th"], recursive=False)


def header_rows(table: Tag) -> List[Tag]:
    return [row for row in own_rows(table) if row.find_parent("thead") is not None]


def is_header_row(row: Tag) -> bool:
    cells = row_cells(row)
    return bool(cells) and all(cell.name == "th" for cell in cells)


def is_layout_table(table: Tag) -> bool:
    """Tables marked as presentational, or too small to hold data."""
    if str(table.get("role", "")).lower() in ("presentation", "none"):
        return True
    if has_class(table, *LAYOUT_CLASSES):
        return True
    parent = table.parent
    if isinstance(parent, Tag) and has_class(parent, "layout", "non-data"):
        return True
    return len(own_cells(table)) <= 2 and not own_cells(table, "th")


def is_complex_table(table: Tag) -> bool:
    for cell in own_cells(table):
        if str(cell.get("rowspan", "1")).strip() not in ("", "1"):
            return True
        if str(cell.get("colspan", "1")).strip() not in ("", "1"):
            return True

    if len(header_rows(table)) > 1:
        return True

    rows = own_rows(table)
    if rows:
        column_headers = bool(header_rows(table)) or is_header_row(rows[0])
        row_headers = any(
            row_cells(row)[0].name == "th" and not is_header_row(row)
            for row in rows
            if row_cells(row)
        )
        if column_headers and row_headers:
            return True

    if table.find("caption", recursive=False) is not None:
        return True

    if len(rows) >= 10 and max(len(row_cells(row)) for row in rows) >= 6:
        return True
    return False


def infer_scope(th: Tag) -> str:
    """col for header rows, row for the first cell of a data row."""
    if th.find_parent("thead") is not None:
        return "col"
    row = th.parent
    if not isinstance(row, Tag) or row.name != "tr":
        return "col"
    cells = row_cells(row)
    if all(cell.name == "th" for cell in cells):
        return "col"
    if cells and cells[0] is th:
        return "row"
    return "col"
