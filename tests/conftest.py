"""Shared test fixtures for SpendAI tests."""

from datetime import date

import pytest

from src.core.store import ExpenseStore
from src.models.schemas import ExpenseRecord, NewExpense, Settings

_counter = {"n": 0}


def make_expense(
    amount: float = 10.0,
    category: str = "other",
    date_: str | date = "2025-03-10",
    description: str | None = None,
    notes: str | None = None,
    id_: str | None = None,
) -> ExpenseRecord:
    _counter["n"] += 1
    n = _counter["n"]
    return ExpenseRecord(
        id=id_ or f"exp-{n:04d}",
        description=description or f"{category} expense {n}",
        amount=amount,
        date=date.fromisoformat(date_) if isinstance(date_, str) else date_,
        category=category,
        notes=notes,
    )


def make_new_expense(
    amount: float = 10.0,
    category: str = "other",
    date_: str = "2025-03-10",
    description: str = "Something",
    notes: str | None = None,
) -> NewExpense:
    return NewExpense(
        description=description,
        amount=amount,
        date=date.fromisoformat(date_),
        category=category,
        notes=notes,
    )


def make_settings(total_budget: float = 2000.0, **category_budgets: float) -> Settings:
    return Settings(total_budget=total_budget, category_budgets=category_budgets)


@pytest.fixture
def store(tmp_path):
    """ExpenseStore backed by a temp directory."""
    return ExpenseStore(data_dir=str(tmp_path / "data"))
