"""Local JSON persistence for expenses and settings.

Best-effort storage: records and settings live in two JSON files under a
data directory. Unreadable files are logged and treated as empty rather
than failing the caller.
"""

import json
import logging
import uuid
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from src.core.catalog import DEFAULT_CATALOG, CategoryCatalog
from src.core.resolvers import ResolverError
from src.models.schemas import ExpenseRecord, NewExpense, Settings

logger = logging.getLogger("spendai_mcp.store")

EXPENSES_FILE = "expenses.json"
SETTINGS_FILE = "settings.json"


class StoreError(Exception):
    """Raised when the data files cannot be written."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not save {path}: {reason}")


class ExpenseStore:
    """Holds the expense list in memory and mirrors it to disk."""

    def __init__(
        self,
        data_dir: Optional[str] = None,
        catalog: CategoryCatalog = DEFAULT_CATALOG,
    ):
        self._data_dir = Path(data_dir) if data_dir else Path.home() / ".spendai"
        self._catalog = catalog
        self._expenses: list[ExpenseRecord] = []
        self._settings = Settings()
        self._load()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def _read_json(self, name: str):
        path = self._data_dir / name
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text())
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable %s: %s", path, e)
            return None

    def _load(self):
        """Load expenses and settings from disk."""
        raw = self._read_json(EXPENSES_FILE)
        if isinstance(raw, list):
            try:
                self._expenses = [ExpenseRecord.model_validate(item) for item in raw]
            except ValidationError as e:
                logger.warning("Ignoring malformed expenses file: %s", e)
                self._expenses = []

        raw = self._read_json(SETTINGS_FILE)
        if isinstance(raw, dict):
            try:
                self._settings = Settings.model_validate(raw)
            except ValidationError as e:
                logger.warning("Ignoring malformed settings file: %s", e)
                self._settings = Settings()

    def _write_json(self, name: str, payload):
        path = self._data_dir / name
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, indent=2))
        except OSError as e:
            raise StoreError(path, str(e)) from e

    def _save_expenses(self, expenses: list[ExpenseRecord]):
        """Write *expenses* to disk, then adopt them as the in-memory list."""
        self._write_json(
            EXPENSES_FILE,
            [r.model_dump(mode="json") for r in expenses],
        )
        self._expenses = expenses

    def load_all(self) -> list[ExpenseRecord]:
        """Snapshot of all expenses, newest first."""
        return list(self._expenses)

    def append(self, expense: NewExpense) -> ExpenseRecord:
        """Store a new expense and return it with its assigned id."""
        if expense.category not in self._catalog:
            raise ResolverError(
                "category",
                expense.category,
                available=self._catalog.keys(),
            )
        record = ExpenseRecord(id=uuid.uuid4().hex, **expense.model_dump())
        self._save_expenses([record] + self._expenses)
        logger.debug("Stored expense %s (%s)", record.id, record.category)
        return record

    def remove_by_id(self, expense_id: str) -> bool:
        """Delete an expense. Returns ``False`` if no record had that id."""
        remaining = [r for r in self._expenses if r.id != expense_id]
        if len(remaining) == len(self._expenses):
            return False
        self._save_expenses(remaining)
        return True

    def load_settings(self) -> Settings:
        return self._settings.model_copy(deep=True)

    def save_settings(self, settings: Settings):
        updated = settings.model_copy(deep=True)
        self._write_json(SETTINGS_FILE, updated.model_dump(mode="json"))
        self._settings = updated
