"""
Bidirectional mapping between a Company and one flat sheet row.

Layout (see turnover.sheets.layout):
- cells 0-4: id, created date, address, contact name, contact email
- cells 5+4i .. 5+4i+3: completed, completed date, tags JSON, notes JSON
  for the milestone at position i of MILESTONE_NAMES

Tags and notes are each one JSON-array cell, so the row width never depends
on content. Malformed cells decode to defaults (id 0, empty lists) instead
of raising: one corrupted cell must not block loading the rest.
"""

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from turnover.models import MILESTONE_NAMES, Company, Milestone
from turnover.sheets.layout import ROW_WIDTH, TRUE_LITERAL, milestone_column

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Row:
    """Fixed-width row of cell values, validated at construction."""

    cells: tuple[Any, ...]

    def __post_init__(self):
        if len(self.cells) != ROW_WIDTH:
            raise ValueError(f"Row must have {ROW_WIDTH} cells, got {len(self.cells)}")

    def to_list(self) -> list[Any]:
        return list(self.cells)


def encode_company(company: Company) -> Row:
    """
    Encode a company as a full-width row.

    Milestones are written in canonical order, looked up by name. A canonical
    name the company has no record for is written as the uncompleted default.
    """
    cells: list[Any] = [
        company.id or "",
        company.created_date or "",
        company.address or "",
        company.contact_name or "",
        company.contact_email or "",
    ]

    by_name = {m.name: m for m in company.milestones or []}
    for name in MILESTONE_NAMES:
        milestone = by_name.get(name)
        if milestone is None:
            cells.extend([False, "", "[]", "[]"])
            continue
        cells.extend(
            [
                bool(milestone.completed),
                milestone.completed_date or "",
                json.dumps(list(milestone.tags or [])),
                json.dumps(list(milestone.notes or [])),
            ]
        )

    return Row(tuple(cells))


def _parse_id(value: Any) -> int:
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    # Numeric cells can come back formatted as "12.0"
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        logger.debug(f"Unparseable id cell {value!r}, using 0")
        return 0


def _parse_list(value: Any, what: str) -> list[Any]:
    if value in (None, ""):
        return []
    try:
        parsed = json.loads(value) if isinstance(value, str) else value
    except json.JSONDecodeError:
        logger.debug(f"Malformed {what} cell {value!r}, using []")
        return []
    if not isinstance(parsed, list):
        logger.debug(f"Non-list {what} cell {value!r}, using []")
        return []
    return parsed


def _is_true(value: Any) -> bool:
    return value is True or value == TRUE_LITERAL


def _decode_milestones(cells: Sequence[Any]) -> list[Milestone]:
    milestones = []
    for position, name in enumerate(MILESTONE_NAMES):
        col = milestone_column(position)
        milestones.append(
            Milestone(
                id=position + 1,
                name=name,
                completed=_is_true(cells[col]),
                completed_date=cells[col + 1] or "",
                tags=_parse_list(cells[col + 2], "tags"),
                notes=_parse_list(cells[col + 3], "notes"),
            )
        )
    return milestones


def decode_row(cells: Sequence[Any]) -> Company | None:
    """
    Decode one sheet row.

    Returns None for a blank row (empty first cell). Rows shorter than the
    layout, as returned by the Sheets API when trailing cells are empty, are
    padded before decoding.
    """
    if not cells or not cells[0]:
        return None

    padded = list(cells[:ROW_WIDTH])
    padded.extend([""] * (ROW_WIDTH - len(padded)))

    return Company(
        id=_parse_id(padded[0]),
        created_date=padded[1] or "",
        address=padded[2] or "",
        contact_name=padded[3] or "",
        contact_email=padded[4] or "",
        milestones=_decode_milestones(padded),
    )


def decode_rows(rows: Iterable[Sequence[Any]]) -> list[Company]:
    """Decode a block of rows, skipping blank ones."""
    companies = []
    for cells in rows:
        company = decode_row(cells)
        if company is not None:
            companies.append(company)
    return companies
