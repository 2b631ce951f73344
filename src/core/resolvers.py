"""Entity resolution helpers for categories and stored expenses.

Pure functions that resolve user-friendly names (partial, case-insensitive)
to domain objects. No I/O; they operate on already-loaded data.
"""

from __future__ import annotations

from typing import Sequence

from src.core.catalog import CategoryCatalog
from src.models.schemas import CategoryDefinition, ExpenseRecord


class ResolverError(Exception):
    """Raised when an entity cannot be resolved by name."""

    def __init__(
        self,
        entity_type: str,
        query: str,
        available: list[str] | None = None,
    ):
        self.entity_type = entity_type
        self.query = query
        self.available = available or []
        detail = f"No {entity_type} found matching '{query}'."
        if self.available:
            detail += f" Available: {', '.join(self.available)}"
        super().__init__(detail)


def resolve_category(
    catalog: CategoryCatalog,
    name: str,
) -> CategoryDefinition:
    """Find a category by key, then by key or label (partial, case-insensitive).

    Raises :class:`ResolverError` if nothing matches.
    """
    q = name.strip().lower()
    if q in catalog:
        return catalog.get(q)
    if q:
        for cat in catalog:
            if q in cat.key or q in cat.label.lower():
                return cat
    raise ResolverError(
        "category",
        name,
        available=[cat.label for cat in catalog],
    )


def resolve_expense(
    records: Sequence[ExpenseRecord],
    query: str,
) -> ExpenseRecord:
    """Find an expense by exact id, id prefix, or description (partial, case-insensitive).

    Returns the first match in record order. Raises :class:`ResolverError`
    if nothing matches.
    """
    q = query.strip()
    if not q:
        raise ResolverError("expense", query)
    for r in records:
        if r.id == q:
            return r
    for r in records:
        if r.id.startswith(q):
            return r
    lowered = q.lower()
    for r in records:
        if lowered in r.description.lower():
            return r
    raise ResolverError("expense", query)
