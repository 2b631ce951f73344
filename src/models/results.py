"""Result dataclasses for analyzer outputs.

These are internal types consumed by formatters: lightweight dataclasses
rather than Pydantic models since they don't need validation.
"""

from dataclasses import dataclass
from datetime import date

from src.models.schemas import Confidence, ExpenseRecord


@dataclass(frozen=True)
class CategorySuggestion:
    """Outcome of keyword categorization for one description."""
    category: str
    confidence: Confidence
    score: int


@dataclass
class AnomalyItem:
    """A record whose amount is far from its category's mean."""
    record: ExpenseRecord
    z_score: float   # rounded to 1 decimal
    mean: float      # category mean, rounded to 2 decimals


@dataclass
class MonthlyForecast:
    """Linear extrapolation of monthly totals into the next month."""
    predicted: float
    confidence: Confidence
    months_observed: int
    slope: float | None = None


@dataclass
class Tip:
    """A single piece of end-user advice."""
    kind: str   # e.g. "over_budget", "food", "savings"
    text: str


@dataclass
class WeekdayTotal:
    day: str     # "Sun" .. "Sat"
    total: float
    count: int


@dataclass
class MonthSummary:
    """Headline numbers for the current month."""
    month: str                  # "YYYY-MM"
    total: float
    count: int
    last_month_total: float
    change_pct: float | None    # None when last month had no spending
    budget: float
    remaining: float            # can be negative
    used_pct: float | None      # None when budget is 0
    avg_daily: float = 0.0      # month total / days elapsed, today included
    top_category: str | None = None
    top_category_total: float = 0.0


@dataclass
class CategoryShare:
    category: str
    amount: float
    pct: float   # 0-100, share of the month total


@dataclass
class CategoryBudgetStatus:
    """Spending against a per-category monthly cap."""
    category: str
    spent: float
    limit: float
    remaining: float
    over: bool


@dataclass
class MonthlyTotal:
    month: str             # "YYYY-MM"
    total: float
    running_average: float


@dataclass
class DailyTotal:
    day: date
    total: float
