"""Pydantic models for expense records, settings and tool inputs."""

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# --- Enums ---

class Confidence(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Period(str, Enum):
    ALL = "all"
    THIS_MONTH = "this-month"
    LAST_MONTH = "last-month"
    LAST_3 = "last-3"


# --- Domain Models ---

class CategoryDefinition(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    label: str
    glyph: str = ""
    keywords: tuple[str, ...] = ()


class NewExpense(BaseModel):
    """An expense that has been validated but not yet stored."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    description: str = Field(..., min_length=1, max_length=200)
    amount: float = Field(..., gt=0)
    date: datetime.date
    category: str = "other"
    notes: Optional[str] = None


class ExpenseRecord(NewExpense):
    """A stored expense. Immutable once created."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore", frozen=True)

    id: str

    @property
    def month_key(self) -> str:
        return self.date.strftime("%Y-%m")


class Settings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    total_budget: float = Field(default=2000.0, ge=0)
    category_budgets: dict[str, Optional[float]] = Field(default_factory=dict)


# --- MCP Tool Input Models ---


class AddExpenseInput(BaseModel):
    """Natural language input for recording an expense."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    description: str = Field(
        ..., description="What the money was spent on (e.g. 'Lunch at Chipotle')", min_length=1
    )
    amount: float = Field(..., description="Dollar amount spent", gt=0)
    category_name: Optional[str] = Field(
        None,
        description="Category name. If not specified, auto-categorization is attempted."
    )
    date: Optional[datetime.date] = Field(
        None, description="Expense date (YYYY-MM-DD). Defaults to today."
    )
    notes: Optional[str] = Field(None, description="Optional note", max_length=500)


class DeleteExpenseInput(BaseModel):
    """Input for deleting a recorded expense."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    expense: str = Field(
        ..., description="Expense id, id prefix, or part of its description", min_length=1
    )


class ListExpensesInput(BaseModel):
    """Input for listing and filtering expenses."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    query: Optional[str] = Field(None, description="Filter by description (partial match)")
    category_name: Optional[str] = Field(None, description="Filter by category name")
    period: Period = Field(
        default=Period.ALL,
        description="One of 'all', 'this-month', 'last-month', 'last-3'",
    )
    limit: int = Field(default=25, ge=1, le=100, description="Max results")


class SuggestCategoryInput(BaseModel):
    """Input for previewing the auto-categorization of a description."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    description: str = Field(..., description="Expense description to classify")


class SetBudgetInput(BaseModel):
    """Input for setting the monthly total budget."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    amount: float = Field(..., description="Monthly budget in dollars", ge=0)


class SetCategoryBudgetInput(BaseModel):
    """Input for setting or clearing a per-category monthly cap."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    category_name: str = Field(..., description="Category to cap")
    amount: Optional[float] = Field(
        None, description="Monthly cap in dollars. Omit or 0 to remove the cap.", ge=0
    )


class TrendInput(BaseModel):
    """Input for the monthly spending trend."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    num_months: int = Field(default=6, ge=1, le=24, description="Number of months to show")


class DailySpendingInput(BaseModel):
    """Input for the trailing daily spending window."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

    days: int = Field(default=30, ge=1, le=90, description="Number of days to show")
