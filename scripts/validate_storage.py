#!/usr/bin/env python3
"""Lightweight validator for the stored transaction and goal collections."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from finance_tracker.config import GOALS_KEY, STORAGE_KEYS, TRANSACTIONS_KEY, configure_logging
from finance_tracker.models import Goal, Transaction
from finance_tracker.storage import JsonStorage

RECORD_TYPES = {TRANSACTIONS_KEY: Transaction, GOALS_KEY: Goal}


def validate_collection(storage: JsonStorage, key: str, record_type) -> List[str]:
    errors = []
    seen = set()
    for index, record in enumerate(storage.get(key)):
        try:
            item = record_type.from_dict(record)
        except (KeyError, TypeError, ValueError) as exc:
            errors.append(f"{key}[{index}]: {exc!r}")
            continue
        if item.id in seen:
            errors.append(f"{key}[{index}]: duplicate id {item.id}")
        seen.add(item.id)
    return errors


def main() -> int:
    configure_logging()
    storage = JsonStorage()
    issues = []
    for key in STORAGE_KEYS:
        issues += validate_collection(storage, key, RECORD_TYPES[key])

    if issues:
        print("Storage validation failed:")
        for message in issues:
            print(f"  - {message}")
        return 1

    print(f"All records in {storage.data_dir} validated successfully.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
