"""Goal lifecycle management.

A goal is created active, may be pinned to the dashboard while active, and
moves one way to achieved. Achieving a goal freezes its progress against the
net balance at that moment; from then on :func:`progress` returns the frozen
values no matter how the balance moves. An achieved goal can be recorded as
spending, which appends an expense transaction and sets a flag that never
resets.

The module-level functions are pure and operate on :class:`Goal` records.
:class:`GoalManager` applies them to the stored collections.
"""

from __future__ import annotations

import logging
import math
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Mapping, NamedTuple, Optional, Sequence, Tuple

from .aggregation import net_balance
from .config import GOALS_KEY, TRANSACTIONS_KEY
from .dates import DateLike, days_remaining, days_taken, parse_date, timestamp_ms
from .exceptions import InvalidTransitionError, NotFoundError, StorageError, ValidationError
from .models import EXPENSE, Goal, Transaction, goals_from_records, next_id, transactions_from_records
from .storage import JsonStorage

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]

SPENDING_CATEGORY = "other"

__all__ = [
    "GoalProgress",
    "GoalManager",
    "validate_goal_data",
    "progress",
    "achieve_goal",
    "list_active",
    "list_achieved",
    "pinned_overview",
    "days_remaining",
    "days_taken",
]


class GoalProgress(NamedTuple):
    current: float
    percentage: float
    remaining: float


def validate_goal_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate goal form data.

    Returns:
        Cleaned ``name``, ``target``, ``deadline`` and ``category`` values.

    Raises:
        ValidationError: Listing every invalid field. Nothing is created or
            changed when this is raised.
    """
    errors: Dict[str, str] = {}
    cleaned: Dict[str, Any] = {}

    name = data.get("name")
    name = name.strip() if isinstance(name, str) else ""
    if name:
        cleaned["name"] = name
    else:
        errors["name"] = "Goal name is required"

    try:
        target = float(data.get("target"))
    except (TypeError, ValueError):
        target = float("nan")
    if math.isfinite(target) and target > 0:
        cleaned["target"] = target
    else:
        errors["target"] = "Target must be a positive number"

    deadline = data.get("deadline")
    if deadline in (None, ""):
        errors["deadline"] = "Deadline is required"
    else:
        try:
            cleaned["deadline"] = parse_date(deadline)
        except ValueError:
            errors["deadline"] = "Deadline must be a date (YYYY-MM-DD)"

    category = data.get("category")
    category = category.strip() if isinstance(category, str) else ""
    if category:
        cleaned["category"] = category
    else:
        errors["category"] = "Category is required"

    if errors:
        raise ValidationError(errors)
    return cleaned


def _live_progress(target: float, current_balance: float) -> GoalProgress:
    current = max(current_balance, 0)
    percentage = min(current / target * 100, 100)
    remaining = max(target - current, 0)
    return GoalProgress(current, percentage, remaining)


def progress(goal: Goal, current_balance: float) -> GoalProgress:
    """Progress of ``goal`` against the net balance.

    Achieved goals report their frozen snapshot. Records achieved before
    snapshots existed fall back to the live calculation.
    """
    if goal.achieved and goal.has_snapshot:
        return GoalProgress(goal.frozen_current, goal.frozen_progress, goal.frozen_remaining)
    return _live_progress(goal.target, current_balance)


def achieve_goal(goal: Goal, current_balance: float, today: date) -> Goal:
    """Return ``goal`` achieved on ``today`` with its progress frozen.

    An already achieved goal is returned unchanged.
    """
    if goal.achieved:
        return goal
    snapshot = _live_progress(goal.target, current_balance)
    return replace(
        goal,
        achieved=True,
        achieved_at=today,
        frozen_current=snapshot.current,
        frozen_progress=snapshot.percentage,
        frozen_remaining=snapshot.remaining,
    )


def toggle_pin(goal: Goal) -> Goal:
    if goal.achieved:
        return goal
    return replace(goal, pinned=not goal.pinned)


def list_active(goals: Sequence[Goal]) -> List[Goal]:
    """Active goals, pinned first, then by nearest deadline."""
    active = [g for g in goals if not g.achieved]
    return sorted(active, key=lambda g: (not g.pinned, g.deadline))


def list_achieved(goals: Sequence[Goal]) -> List[Goal]:
    """Achieved goals, most recently achieved first."""
    achieved = [g for g in goals if g.achieved]
    return sorted(achieved, key=lambda g: g.achieved_at or date.min, reverse=True)


def pinned_overview(goals: Sequence[Goal], current_balance: float, limit: int = 3) -> List[Tuple[Goal, GoalProgress]]:
    """Pinned active goals for the dashboard, in stored order, with live progress."""
    pinned = [g for g in goals if g.pinned and not g.achieved]
    return [(g, progress(g, current_balance)) for g in pinned[:limit]]


def spending_transaction(goal: Goal, chosen_date: DateLike, transaction_id: int) -> Transaction:
    """The expense recorded when ``goal`` is marked as spending."""
    return Transaction(
        id=transaction_id,
        type=EXPENSE,
        amount=goal.target,
        category=SPENDING_CATEGORY,
        date=parse_date(chosen_date),
        description=f"Goal: {goal.name}",
    )


def spending_date_choices(goal: Goal) -> Dict[str, Optional[date]]:
    """Dates the user may record an achieved goal's spending on."""
    return {"achieved": goal.achieved_at, "target": goal.deadline}


def already_marked(goal: Goal) -> bool:
    return goal.marked_in_spending


class GoalManager:
    """Create, edit and transition goals stored in a :class:`JsonStorage`.

    Args:
        storage: Collection storage holding ``goals`` and ``transactions``.
        clock: Returns the current local datetime; used for ids, creation
            timestamps and the achievement date.

    Failed writes raise :class:`StorageError`; the stored collections are
    left as they were.
    """

    def __init__(self, storage: JsonStorage, clock: Callable[[], datetime] = datetime.now):
        self.storage = storage
        self.clock = clock

    def goals(self) -> List[Goal]:
        return goals_from_records(self.storage.get(GOALS_KEY))

    def transactions(self) -> List[Transaction]:
        return transactions_from_records(self.storage.get(TRANSACTIONS_KEY))

    def current_balance(self) -> float:
        return net_balance(self.transactions())

    def get(self, goal_id: int) -> Goal:
        for goal in self.goals():
            if goal.id == goal_id:
                return goal
        raise NotFoundError("Goal", goal_id)

    def _save(self, goals: Sequence[Goal]) -> None:
        if not self.storage.set(GOALS_KEY, [g.to_dict() for g in goals]):
            raise StorageError("Goals could not be saved")

    def _replace(self, updated: Goal) -> None:
        goals = [updated if g.id == updated.id else g for g in self.goals()]
        self._save(goals)

    def create(self, data: Mapping[str, Any]) -> Goal:
        """Validate and store a new active goal.

        Raises:
            ValidationError: If any field is invalid.
            StorageError: If the goal could not be written.
        """
        cleaned = validate_goal_data(data)
        goals = self.goals()
        now_ms = timestamp_ms(self.clock())
        goal = Goal(
            id=next_id((g.id for g in goals), now_ms),
            created_at=now_ms,
            **cleaned,
        )
        self._save(goals + [goal])
        logger.debug("Created goal %s", goal.id)
        return goal

    def update(self, goal_id: int, data: Mapping[str, Any]) -> Goal:
        """Overwrite a goal's editable fields, keeping its lifecycle state."""
        cleaned = validate_goal_data(data)
        updated = replace(self.get(goal_id), **cleaned)
        self._replace(updated)
        return updated

    def toggle_pin(self, goal_id: int) -> Goal:
        goal = self.get(goal_id)
        updated = toggle_pin(goal)
        if updated is not goal:
            self._replace(updated)
        return updated

    def achieve(self, goal_id: int, confirm: Confirm, today: Optional[date] = None) -> Optional[Goal]:
        """Mark a goal achieved after confirmation.

        Returns:
            The achieved goal, or None when the user cancelled.
        """
        goal = self.get(goal_id)
        if goal.achieved:
            return goal
        if not confirm(f'Mark "{goal.name}" as achieved?'):
            return None
        achieved = achieve_goal(goal, self.current_balance(), today or self.clock().date())
        self._replace(achieved)
        logger.debug("Goal %s achieved", goal_id)
        return achieved

    def delete(self, goal_id: int, confirm: Confirm) -> bool:
        goal = self.get(goal_id)
        if not confirm(f'Are you sure you want to delete "{goal.name}"?'):
            return False
        self._save([g for g in self.goals() if g.id != goal_id])
        return True

    def mark_in_spending(self, goal_id: int, chosen_date: DateLike) -> Transaction:
        """Record an achieved goal as an expense.

        Repeating the call records another expense; callers should warn when
        :func:`already_marked` is true. The expense and the goal flag are
        stored together or not at all.

        Raises:
            InvalidTransitionError: If the goal is still active.
            StorageError: If either collection could not be written.
        """
        goal = self.get(goal_id)
        if not goal.achieved:
            raise InvalidTransitionError(f'Goal "{goal.name}" must be achieved before it is marked as spending')

        records = self.storage.get(TRANSACTIONS_KEY)
        existing_ids = [t.id for t in transactions_from_records(records)]
        transaction = spending_transaction(goal, chosen_date, next_id(existing_ids, timestamp_ms(self.clock())))
        if not self.storage.set(TRANSACTIONS_KEY, [transaction.to_dict()] + records):
            raise StorageError(f"Spending for goal {goal_id} could not be saved")
        try:
            self._replace(replace(goal, marked_in_spending=True))
        except StorageError:
            if not self.storage.set(TRANSACTIONS_KEY, records):
                logger.error("Could not roll back spending transaction %s", transaction.id)
            raise
        return transaction
