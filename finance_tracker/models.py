"""Record types persisted by the finance tracker.

Transactions and goals are frozen dataclasses. ``to_dict``/``from_dict``
translate to the camelCase JSON schema used on disk so that stored records
round-trip unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from .dates import format_iso, parse_date

logger = logging.getLogger(__name__)

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_TYPES = (INCOME, EXPENSE)

EXPENSE_CATEGORIES = ("food", "transport", "shopping", "bills", "entertainment", "health", "other")
INCOME_CATEGORIES = ("salary", "freelance", "investment", "gift", "other-income")
GOAL_CATEGORIES = ("savings", "investment", "purchase", "debt", "emergency", "other")

_FROZEN_KEYS = (
    ("frozenCurrent", "frozen_current"),
    ("frozenProgress", "frozen_progress"),
    ("frozenRemaining", "frozen_remaining"),
)


@dataclass(frozen=True)
class Transaction:
    """A single dated income or expense record."""

    id: int
    type: str
    amount: float
    category: str
    date: date
    description: Optional[str] = None

    @property
    def is_income(self) -> bool:
        return self.type == INCOME

    @property
    def is_expense(self) -> bool:
        return self.type == EXPENSE

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "type": self.type,
            "amount": self.amount,
            "category": self.category,
            "date": format_iso(self.date),
        }
        if self.description is not None:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Transaction":
        return cls(
            id=int(data["id"]),
            type=str(data["type"]),
            amount=float(data["amount"]),
            category=str(data["category"]),
            date=parse_date(data["date"]),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class Goal:
    """A savings target with a deadline.

    ``achieved`` is the lifecycle discriminant. Once it is true the
    ``frozen_*`` fields hold the progress captured at achievement time and
    are never recomputed.
    """

    id: int
    name: str
    target: float
    deadline: date
    category: str
    created_at: int
    achieved: bool = False
    achieved_at: Optional[date] = None
    pinned: bool = False
    marked_in_spending: bool = False
    frozen_current: Optional[float] = None
    frozen_progress: Optional[float] = None
    frozen_remaining: Optional[float] = None

    @property
    def has_snapshot(self) -> bool:
        return self.frozen_progress is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "target": self.target,
            "deadline": format_iso(self.deadline),
            "category": self.category,
            "createdAt": self.created_at,
            "achieved": self.achieved,
            "achievedAt": format_iso(self.achieved_at) if self.achieved_at else None,
            "markedInSpending": self.marked_in_spending,
            "pinned": self.pinned,
        }
        for key, attr in _FROZEN_KEYS:
            value = getattr(self, attr)
            if value is not None:
                data[key] = value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Goal":
        achieved_at = data.get("achievedAt")
        frozen = {
            attr: float(data[key])
            for key, attr in _FROZEN_KEYS
            if data.get(key) is not None
        }
        return cls(
            id=int(data["id"]),
            name=str(data["name"]),
            target=float(data["target"]),
            deadline=parse_date(data["deadline"]),
            category=str(data["category"]),
            created_at=int(data["createdAt"]),
            achieved=bool(data.get("achieved", False)),
            achieved_at=parse_date(achieved_at) if achieved_at else None,
            pinned=bool(data.get("pinned", False)),
            marked_in_spending=bool(data.get("markedInSpending", False)),
            **frozen,
        )


def transactions_from_records(records: Iterable[Dict[str, Any]]) -> List[Transaction]:
    """Decode stored transaction records, skipping malformed ones."""
    transactions: List[Transaction] = []
    for record in records:
        try:
            transactions.append(Transaction.from_dict(record))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed transaction %r: %s", record, exc)
    return transactions


def goals_from_records(records: Iterable[Dict[str, Any]]) -> List[Goal]:
    """Decode stored goal records, skipping malformed ones."""
    goals: List[Goal] = []
    for record in records:
        try:
            goals.append(Goal.from_dict(record))
        except (KeyError, TypeError, ValueError) as exc:
            logger.warning("Skipping malformed goal %r: %s", record, exc)
    return goals


def next_id(existing: Iterable[int], now_ms: int) -> int:
    """Return a creation-time id that is unique and larger than every existing id."""
    highest = max(existing, default=0)
    return now_ms if now_ms > highest else highest + 1
