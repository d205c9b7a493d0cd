"""Tests for the storage validation script."""

from scripts import validate_storage
from finance_tracker.storage import JsonStorage


def test_main_checks_every_collection(monkeypatch, tmp_path, capsys):
    storage = JsonStorage(tmp_path)
    storage.set('transactions', [
        {'id': 1, 'type': 'income', 'amount': 10, 'category': 'salary', 'date': '2024-01-01'},
        {'id': 1, 'type': 'expense', 'amount': 5, 'category': 'food', 'date': '2024-01-02'},
    ])
    storage.set('goals', [{'id': 7, 'name': 'Broken'}])
    monkeypatch.setattr(validate_storage, 'JsonStorage', lambda: storage)

    assert validate_storage.main() == 1
    out = capsys.readouterr().out
    assert 'transactions[1]: duplicate id 1' in out
    assert 'goals[0]' in out


def test_main_passes_on_empty_storage(monkeypatch, tmp_path, capsys):
    monkeypatch.setattr(validate_storage, 'JsonStorage', lambda: JsonStorage(tmp_path))
    assert validate_storage.main() == 0
    assert 'validated successfully' in capsys.readouterr().out
