"""SpendAI MCP Server.

Exposes local expense tracking and analytics as MCP tools: record and
delete expenses, auto-categorize descriptions, and get anomaly flags, a
forecast, a health score and tips for the current month.
"""

import os
import sys
from contextlib import asynccontextmanager
from datetime import date
from pathlib import Path
from dotenv import load_dotenv
from mcp.server.fastmcp import Context, FastMCP

# Ensure project root is on sys.path so `src` is importable when loaded
# directly by tools like `mcp dev` (which use importlib, not `python -m`).
_project_root = str(Path(__file__).resolve().parent.parent.parent)
if _project_root not in sys.path:
    sys.path.insert(0, _project_root)

load_dotenv()

from src.core.analyzers import (
    calc_score,
    category_breakdown,
    check_category_budgets,
    daily_spending,
    day_of_week_pattern,
    detect_anomalies,
    filter_expenses,
    forecast_next_month,
    generate_tips,
    monthly_trend,
    summarize_month,
)
from src.core.catalog import DEFAULT_CATALOG
from src.core.categorizer import categorize
from src.core.resolvers import resolve_category, resolve_expense
from src.core.store import ExpenseStore
from src.mcp.error_handling import handle_tool_errors
from src.mcp.formatters import (
    format_anomalies,
    format_budget_status,
    format_categories,
    format_category_breakdown,
    format_daily_spending,
    format_expense_created,
    format_expense_deleted,
    format_expenses,
    format_forecast,
    format_health_score,
    format_month_summary,
    format_settings_saved,
    format_suggestion,
    format_tips,
    format_trend,
    format_weekday_pattern,
)
from src.models.schemas import (
    AddExpenseInput,
    DailySpendingInput,
    DeleteExpenseInput,
    ListExpensesInput,
    NewExpense,
    SetBudgetInput,
    SetCategoryBudgetInput,
    SuggestCategoryInput,
    TrendInput,
)


# --- Lifespan: initialize shared resources ---


@asynccontextmanager
async def app_lifespan(server: FastMCP):
    data_dir = os.environ.get("SPENDAI_DATA_DIR") or None
    yield {"store": ExpenseStore(data_dir=data_dir)}


mcp = FastMCP(
    "spendai_mcp",
    lifespan=app_lifespan,
    log_level=os.environ.get("SPENDAI_LOG_LEVEL", "INFO").upper(),
)


# --- Helper to get the store from context ---


def _get_store(ctx) -> ExpenseStore:
    return ctx.request_context.lifespan_context["store"]


_READ_ONLY = {
    "readOnlyHint": True,
    "destructiveHint": False,
    "idempotentHint": True,
    "openWorldHint": False,
}


# --- Expense Tools ---


@mcp.tool(
    name="spend_add_expense",
    annotations={
        "title": "Add Expense",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": False,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def spend_add_expense(params: AddExpenseInput, ctx: Context) -> str:
    """Record a new expense. The category is auto-detected from the description when not given."""
    store = _get_store(ctx)

    suggestion = None
    if params.category_name:
        category = resolve_category(DEFAULT_CATALOG, params.category_name).key
    else:
        suggestion = categorize(params.description)
        category = suggestion.category

    record = store.append(NewExpense(
        description=params.description,
        amount=params.amount,
        date=params.date or date.today(),
        category=category,
        notes=params.notes,
    ))
    return format_expense_created(record, suggestion)


@mcp.tool(
    name="spend_delete_expense",
    annotations={
        "title": "Delete Expense",
        "readOnlyHint": False,
        "destructiveHint": True,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def spend_delete_expense(params: DeleteExpenseInput, ctx: Context) -> str:
    """Delete an expense by id, id prefix, or description."""
    store = _get_store(ctx)
    record = resolve_expense(store.load_all(), params.expense)
    store.remove_by_id(record.id)
    return format_expense_deleted(record)


@mcp.tool(
    name="spend_list_expenses",
    annotations={"title": "List Expenses", **_READ_ONLY},
)
@handle_tool_errors
async def spend_list_expenses(params: ListExpensesInput, ctx: Context) -> str:
    """List recorded expenses, newest first, with optional text, category and period filters."""
    store = _get_store(ctx)
    category = None
    if params.category_name:
        category = resolve_category(DEFAULT_CATALOG, params.category_name).key
    records = filter_expenses(
        store.load_all(),
        query=params.query,
        category=category,
        period=params.period,
    )
    return format_expenses(records, params.limit)


@mcp.tool(
    name="spend_suggest_category",
    annotations={"title": "Suggest Category", **_READ_ONLY},
)
@handle_tool_errors
async def spend_suggest_category(params: SuggestCategoryInput, ctx: Context) -> str:
    """Preview which category a description would be filed under."""
    return format_suggestion(params.description, categorize(params.description))


@mcp.tool(
    name="spend_list_categories",
    annotations={"title": "List Categories", **_READ_ONLY},
)
@handle_tool_errors
async def spend_list_categories(ctx: Context) -> str:
    """List the available spending categories."""
    return format_categories()


# --- Analysis Tools ---


@mcp.tool(
    name="spend_dashboard",
    annotations={"title": "Dashboard", **_READ_ONLY},
)
@handle_tool_errors
async def spend_dashboard(ctx: Context) -> str:
    """This month's spending, daily average, top category, budget usage, health score and forecast."""
    store = _get_store(ctx)
    records = store.load_all()
    settings = store.load_settings()
    today = date.today()
    summary = summarize_month(records, settings.total_budget, as_of=today)
    score = calc_score(records, settings.total_budget, as_of=today)
    return format_month_summary(summary, score, forecast_next_month(records))


@mcp.tool(
    name="spend_anomalies",
    annotations={"title": "Unusual Expenses", **_READ_ONLY},
)
@handle_tool_errors
async def spend_anomalies(ctx: Context) -> str:
    """Flag expenses that are unusually large or small for their category."""
    store = _get_store(ctx)
    return format_anomalies(detect_anomalies(store.load_all()))


@mcp.tool(
    name="spend_forecast",
    annotations={"title": "Next Month Forecast", **_READ_ONLY},
)
@handle_tool_errors
async def spend_forecast(ctx: Context) -> str:
    """Forecast next month's total spending from the monthly trend."""
    store = _get_store(ctx)
    return format_forecast(forecast_next_month(store.load_all()))


@mcp.tool(
    name="spend_health_score",
    annotations={"title": "Financial Health Score", **_READ_ONLY},
)
@handle_tool_errors
async def spend_health_score(ctx: Context) -> str:
    """Score this month's finances from 5 to 99."""
    store = _get_store(ctx)
    settings = store.load_settings()
    return format_health_score(calc_score(store.load_all(), settings.total_budget))


@mcp.tool(
    name="spend_tips",
    annotations={"title": "Smart Tips", **_READ_ONLY},
)
@handle_tool_errors
async def spend_tips(ctx: Context) -> str:
    """Personalized advice based on this month's spending."""
    store = _get_store(ctx)
    settings = store.load_settings()
    return format_tips(generate_tips(store.load_all(), settings.total_budget))


@mcp.tool(
    name="spend_weekday_pattern",
    annotations={"title": "Spending by Weekday", **_READ_ONLY},
)
@handle_tool_errors
async def spend_weekday_pattern(ctx: Context) -> str:
    """Show which days of the week you spend the most on."""
    store = _get_store(ctx)
    return format_weekday_pattern(day_of_week_pattern(store.load_all()))


@mcp.tool(
    name="spend_category_breakdown",
    annotations={"title": "Spending by Category", **_READ_ONLY},
)
@handle_tool_errors
async def spend_category_breakdown(ctx: Context) -> str:
    """Break down this month's spending by category."""
    store = _get_store(ctx)
    return format_category_breakdown(category_breakdown(store.load_all()))


@mcp.tool(
    name="spend_trend",
    annotations={"title": "Monthly Trend", **_READ_ONLY},
)
@handle_tool_errors
async def spend_trend(params: TrendInput, ctx: Context) -> str:
    """Monthly totals with a running average over recent months."""
    store = _get_store(ctx)
    return format_trend(monthly_trend(store.load_all(), num_months=params.num_months))


@mcp.tool(
    name="spend_daily_spending",
    annotations={"title": "Daily Spending", **_READ_ONLY},
)
@handle_tool_errors
async def spend_daily_spending(params: DailySpendingInput, ctx: Context) -> str:
    """Day-by-day spending for the last few weeks."""
    store = _get_store(ctx)
    return format_daily_spending(daily_spending(store.load_all(), days=params.days))


# --- Budget Tools ---


@mcp.tool(
    name="spend_budget_status",
    annotations={"title": "Budget Status", **_READ_ONLY},
)
@handle_tool_errors
async def spend_budget_status(ctx: Context) -> str:
    """Show the monthly budget and spending against each category limit."""
    store = _get_store(ctx)
    settings = store.load_settings()
    statuses = check_category_budgets(store.load_all(), settings)
    return format_budget_status(settings, statuses)


@mcp.tool(
    name="spend_set_budget",
    annotations={
        "title": "Set Monthly Budget",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def spend_set_budget(params: SetBudgetInput, ctx: Context) -> str:
    """Set the total monthly budget."""
    store = _get_store(ctx)
    settings = store.load_settings()
    settings.total_budget = params.amount
    store.save_settings(settings)
    return format_settings_saved(settings)


@mcp.tool(
    name="spend_set_category_budget",
    annotations={
        "title": "Set Category Limit",
        "readOnlyHint": False,
        "destructiveHint": False,
        "idempotentHint": True,
        "openWorldHint": False,
    },
)
@handle_tool_errors
async def spend_set_category_budget(params: SetCategoryBudgetInput, ctx: Context) -> str:
    """Set or clear a monthly spending limit for one category."""
    store = _get_store(ctx)
    cat = resolve_category(DEFAULT_CATALOG, params.category_name)
    settings = store.load_settings()
    if params.amount:
        settings.category_budgets[cat.key] = params.amount
    else:
        settings.category_budgets.pop(cat.key, None)
    store.save_settings(settings)
    return format_settings_saved(settings, cat.key)


# --- Entry point ---

if __name__ == "__main__":
    mcp.run()
