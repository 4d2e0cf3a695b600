"""
Fixed sheet layout: column offsets, header row and A1 ranges.

Row 1 holds the header across every column; data rows start at row 2.
"""

from turnover.config import MAX_ROWS
from turnover.models import MILESTONE_NAMES

COMPANY_FIELDS: tuple[str, ...] = (
    "ID",
    "Created Date",
    "Address",
    "Contact Name",
    "Contact Email",
)
MILESTONE_FIELDS: tuple[str, ...] = ("Completed", "Date", "Tags", "Notes")

MILESTONE_OFFSET = len(COMPANY_FIELDS)
CELLS_PER_MILESTONE = len(MILESTONE_FIELDS)
ROW_WIDTH = MILESTONE_OFFSET + CELLS_PER_MILESTONE * len(MILESTONE_NAMES)

# Native boolean-true as written by the API and the literal it reads back as
TRUE_LITERAL = "TRUE"


def column_letter(index: int) -> str:
    """
    1-based column number to its A1 letters.

    Examples:
        1 -> "A", 26 -> "Z", 27 -> "AA", 125 -> "DU"
    """
    if index < 1:
        raise ValueError(f"Column index must be >= 1, got {index}")
    letters = ""
    while index:
        index, remainder = divmod(index - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def milestone_column(position: int) -> int:
    """0-based offset of the first cell of the milestone at table position."""
    return MILESTONE_OFFSET + CELLS_PER_MILESTONE * position


def header_row() -> list[str]:
    header = list(COMPANY_FIELDS)
    for name in MILESTONE_NAMES:
        header.extend(f"{name} {suffix}" for suffix in MILESTONE_FIELDS)
    return header


LAST_COLUMN = column_letter(ROW_WIDTH)

HEADER_RANGE = f"A1:{LAST_COLUMN}1"
HEADER_CHECK_RANGE = f"A1:{column_letter(MILESTONE_OFFSET)}1"
CLEAR_ALL_RANGE = "A:ZZ"


def data_range(max_rows: int = MAX_ROWS) -> str:
    """Every data row the store may hold, below the header."""
    return f"A2:{LAST_COLUMN}{max_rows}"


def write_range(row_count: int) -> str:
    """Contiguous block for row_count rows starting at row 2."""
    return f"A2:{LAST_COLUMN}{row_count + 1}"
