"""
Company and milestone records.

MILESTONE_NAMES is the one canonical checklist. Its order defines both the
milestone ids (1-based position) and the sheet column layout, so the row
codec and the header row read it from here and nowhere else.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

logger = logging.getLogger(__name__)

MILESTONE_NAMES: tuple[str, ...] = (
    "Keys",
    "Power",
    "Water",
    "Deposit held",
    "Balance",
    "Move-out",
    "Quote",
    "Contact owner",
    "Email inspection video + quote",
    "Follow up date",
    "Approval",
    "Funds",
    "Order of materials",
    "Prebill",
    "Wait list",
    "Rehab start",
    "Add ons",
    "Rehab ends",
    "Dump and pick up material left on site",
    "Vendor?",
    "Cleaning",
    "Quality control -final walkthrough",
    "Final inspection",
    "Open recurring task lawn care",
    "Move in inspection",
    "Assign all rehab tasks to bill",
    "Video upload",
    "Turn off utilities",
    "List property",
    "Billing finalized",
)


def _parse_id(value: Any, what: str) -> int:
    try:
        return int(value or 0)
    except (TypeError, ValueError):
        logger.debug(f"Unparseable {what} id {value!r}, using 0")
        return 0


@dataclass
class Milestone:
    """One checklist item of a company."""

    id: int
    name: str
    completed: bool = False
    completed_date: str = ""
    tags: list[Any] = field(default_factory=list)
    notes: list[Any] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Convert to the camelCase dict stored in the local JSON file."""
        return {
            "id": self.id,
            "name": self.name,
            "completed": self.completed,
            "completedDate": self.completed_date,
            "tags": list(self.tags),
            "notes": list(self.notes),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Milestone":
        """
        Build a Milestone from its dict form.

        A canonical name takes its id from its checklist position; other
        names keep the stored id, or 0 when it is not a number.
        """
        name = data.get("name") or ""
        if name in MILESTONE_NAMES:
            milestone_id = MILESTONE_NAMES.index(name) + 1
        else:
            milestone_id = _parse_id(data.get("id"), "milestone")
        return cls(
            id=milestone_id,
            name=name,
            completed=bool(data.get("completed", False)),
            completed_date=data.get("completedDate") or "",
            tags=list(data.get("tags") or []),
            notes=list(data.get("notes") or []),
        )


def default_milestones() -> list[Milestone]:
    """Fresh, uncompleted checklist in canonical order."""
    return [Milestone(id=index, name=name) for index, name in enumerate(MILESTONE_NAMES, 1)]


@dataclass
class Company:
    """A tracked turnover job with its milestone checklist."""

    id: int
    created_date: str = ""
    address: str = ""
    contact_name: str = ""
    contact_email: str = ""
    milestones: list[Milestone] = field(default_factory=default_milestones)

    def milestone(self, name: str) -> Milestone | None:
        for milestone in self.milestones:
            if milestone.name == name:
                return milestone
        return None

    def completed_count(self) -> int:
        return sum(1 for m in self.milestones if m.completed)

    def to_dict(self) -> dict:
        """Convert to the camelCase dict stored in the local JSON file."""
        return {
            "id": self.id,
            "createdDate": self.created_date,
            "address": self.address,
            "contactName": self.contact_name,
            "contactEmail": self.contact_email,
            "milestones": [m.to_dict() for m in self.milestones],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Company":
        """
        Build a Company from its dict form.

        A dict without a milestones key gets the default checklist; an explicit
        list is kept as given.
        """
        if "milestones" in data and data["milestones"] is not None:
            milestones = [Milestone.from_dict(m) for m in data["milestones"]]
        else:
            milestones = default_milestones()
        return cls(
            id=_parse_id(data.get("id"), "company"),
            created_date=data.get("createdDate") or "",
            address=data.get("address") or "",
            contact_name=data.get("contactName") or "",
            contact_email=data.get("contactEmail") or "",
            milestones=milestones,
        )


def next_company_id(companies: list[Company]) -> int:
    """Monotonic id for a new company: max existing id + 1."""
    return max((c.id or 0 for c in companies), default=0) + 1
