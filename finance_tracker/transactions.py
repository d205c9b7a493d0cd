"""Transaction ledger: validated writes to the ``transactions`` collection."""

from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping

from .config import TRANSACTIONS_KEY
from .dates import parse_date, timestamp_ms
from .exceptions import NotFoundError, StorageError, ValidationError
from .models import EXPENSE, TRANSACTION_TYPES, Transaction, next_id, transactions_from_records
from .storage import JsonStorage

logger = logging.getLogger(__name__)


def validate_transaction_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Validate transaction form data.

    Raises:
        ValidationError: Listing every invalid field.
    """
    errors: Dict[str, str] = {}
    cleaned: Dict[str, Any] = {}

    type_ = data.get("type")
    if type_ in TRANSACTION_TYPES:
        cleaned["type"] = type_
    else:
        errors["type"] = "Type must be income or expense"

    try:
        amount = float(data.get("amount"))
    except (TypeError, ValueError):
        amount = float("nan")
    if math.isfinite(amount) and amount >= 0:
        cleaned["amount"] = amount
    else:
        errors["amount"] = "Amount must be a non-negative number"

    category = data.get("category")
    category = category.strip() if isinstance(category, str) else ""
    if category:
        cleaned["category"] = category
    else:
        errors["category"] = "Category is required"

    try:
        cleaned["date"] = parse_date(data.get("date"))
    except ValueError:
        errors["date"] = "Date must be a date (YYYY-MM-DD)"

    description = data.get("description")
    if isinstance(description, str) and description.strip():
        cleaned["description"] = description.strip()

    if errors:
        raise ValidationError(errors)
    return cleaned


class TransactionLedger:
    """Reads and writes the stored transaction collection, newest first."""

    def __init__(self, storage: JsonStorage, clock: Callable[[], datetime] = datetime.now):
        self.storage = storage
        self.clock = clock

    def all(self) -> List[Transaction]:
        return transactions_from_records(self.storage.get(TRANSACTIONS_KEY))

    def add(self, data: Mapping[str, Any]) -> Transaction:
        cleaned = validate_transaction_data(data)
        records = self.storage.get(TRANSACTIONS_KEY)
        existing_ids = [t.id for t in transactions_from_records(records)]
        transaction = Transaction(id=next_id(existing_ids, timestamp_ms(self.clock())), **cleaned)
        if not self.storage.set(TRANSACTIONS_KEY, [transaction.to_dict()] + records):
            raise StorageError("Transaction could not be saved")
        return transaction

    def delete(self, transaction_id: int) -> bool:
        records = self.storage.get(TRANSACTIONS_KEY)
        remaining = [r for r in records if r.get("id") != transaction_id]
        if len(remaining) == len(records):
            raise NotFoundError("Transaction", transaction_id)
        if not self.storage.set(TRANSACTIONS_KEY, remaining):
            raise StorageError(f"Transaction {transaction_id} could not be deleted")
        return True

    def latest_expenses(self, limit: int = 5) -> List[Transaction]:
        """Most recent expenses by date."""
        expenses = [t for t in self.all() if t.type == EXPENSE]
        return sorted(expenses, key=lambda t: t.date, reverse=True)[:limit]
