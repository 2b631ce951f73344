"""Markdown formatters for MCP tool responses.

Pure functions that take domain objects and return human-readable Markdown strings.
"""

from __future__ import annotations

from src.core.catalog import DEFAULT_CATALOG, CategoryCatalog
from src.models.results import (
    AnomalyItem,
    CategoryBudgetStatus,
    CategoryShare,
    CategorySuggestion,
    DailyTotal,
    MonthlyForecast,
    MonthlyTotal,
    MonthSummary,
    Tip,
    WeekdayTotal,
)
from src.models.schemas import ExpenseRecord, Settings

_TIP_TAGS = {
    "top_category_warning": "!!",
    "top_category_balanced": "i",
    "over_budget": "!!",
    "budget_low": "!",
    "budget_on_track": "OK",
    "food": "$",
    "subscriptions": "$",
    "savings": "+",
}


def _label(category: str, catalog: CategoryCatalog) -> str:
    cat = catalog.get(category)
    return f"{cat.glyph} {cat.label}".strip()


def _pct(value: float | None) -> str:
    return "n/a" if value is None else f"{value:.0f}%"


def format_categories(catalog: CategoryCatalog = DEFAULT_CATALOG) -> str:
    lines = ["## Categories\n"]
    for cat in catalog:
        keywords = ", ".join(cat.keywords[:6])
        suffix = f": {keywords}, ..." if keywords else " (fallback)"
        lines.append(f"- {_label(cat.key, catalog)} (`{cat.key}`){suffix}")
    return "\n".join(lines)


def format_suggestion(
    description: str,
    suggestion: CategorySuggestion,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> str:
    return (
        f"**{description}** -> {_label(suggestion.category, catalog)} "
        f"({suggestion.confidence.value} confidence, score {suggestion.score})"
    )


def format_expense_created(
    record: ExpenseRecord,
    suggestion: CategorySuggestion | None = None,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> str:
    lines = [
        "Expense recorded:",
        f"- **Description:** {record.description}",
        f"- **Amount:** ${record.amount:,.2f}",
        f"- **Date:** {record.date.isoformat()}",
        f"- **Category:** {_label(record.category, catalog)}",
    ]
    if suggestion is not None:
        lines[-1] += f" (auto, {suggestion.confidence.value} confidence)"
    if record.notes:
        lines.append(f"- **Notes:** {record.notes}")
    lines.append(f"- **ID:** `{record.id}`")
    return "\n".join(lines)


def format_expense_deleted(record: ExpenseRecord) -> str:
    return f"Deleted **{record.description}** (${record.amount:,.2f} on {record.date.isoformat()})."


def format_expenses(
    records: list[ExpenseRecord],
    limit: int,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> str:
    if not records:
        return "No expenses found."
    lines = [f"## Expenses (showing {min(limit, len(records))} of {len(records)})\n"]
    for r in records[:limit]:
        line = (
            f"- {r.date.isoformat()} | **{r.description}** | ${r.amount:,.2f} | "
            f"{_label(r.category, catalog)} | `{r.id[:8]}`"
        )
        if r.notes:
            line += f"\n  _{r.notes}_"
        lines.append(line)
    return "\n".join(lines)


def format_anomalies(
    anomalies: list[AnomalyItem],
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> str:
    if not anomalies:
        return "No unusual expenses detected."
    lines = ["## Unusual Expenses\n"]
    for a in anomalies:
        r = a.record
        lines.append(
            f"- **{r.description}** ({r.date.isoformat()}): ${r.amount:,.2f} is "
            f"{a.z_score:.1f}σ from your avg {catalog.get(r.category).label} "
            f"spend of ${a.mean:,.2f}"
        )
    return "\n".join(lines)


def format_forecast(result: MonthlyForecast) -> str:
    lines = [
        "## Next Month Forecast\n",
        f"- **Predicted spend:** ${result.predicted:,.2f}",
        f"- **Confidence:** {result.confidence.value} "
        f"({result.months_observed} month(s) of data)",
    ]
    if result.slope is not None:
        direction = "up" if result.slope > 0 else "down" if result.slope < 0 else "flat"
        lines.append(f"- **Trend:** {direction} ${abs(result.slope):,.2f}/month")
    return "\n".join(lines)


def health_label(score: int) -> str:
    if score >= 75:
        return "Excellent"
    if score >= 55:
        return "Good"
    if score >= 35:
        return "Fair"
    return "Needs Work"


def format_health_score(score: int | None) -> str:
    if score is None:
        return "No expenses recorded yet. Add some to get a health score."
    verdict = health_label(score)
    return (
        f"## Financial Health: {score}/100 ({verdict})\n\n"
        "Score based on budget adherence, expense diversity & tracking consistency."
    )


def format_tips(tips: list[Tip]) -> str:
    if not tips:
        return "No tips yet. Add some expenses first."
    lines = ["## Smart Tips\n"]
    for t in tips:
        lines.append(f"- [{_TIP_TAGS.get(t.kind, 'i')}] {t.text}")
    return "\n".join(lines)


def format_weekday_pattern(pattern: list[WeekdayTotal]) -> str:
    if all(w.count == 0 for w in pattern):
        return "No spending recorded yet."
    busiest = max(pattern, key=lambda w: w.total)
    lines = [
        "## Spending by Weekday\n",
        "| Day | Total | Count |",
        "|---|---|---|",
    ]
    for w in pattern:
        lines.append(f"| {w.day} | ${w.total:,.2f} | {w.count} |")
    lines.append(f"\n**Biggest day:** {busiest.day}")
    return "\n".join(lines)


def format_month_summary(
    summary: MonthSummary,
    score: int | None = None,
    forecast: MonthlyForecast | None = None,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> str:
    lines = [
        f"## Dashboard ({summary.month})\n",
        f"- **Spent this month:** ${summary.total:,.2f} across {summary.count} expense(s)",
        f"- **Avg daily:** ${summary.avg_daily:,.2f}",
        f"- **Last month:** ${summary.last_month_total:,.2f}",
    ]
    if summary.change_pct is not None:
        sign = "+" if summary.change_pct >= 0 else ""
        lines.append(f"- **Change:** {sign}{summary.change_pct:.1f}% vs last month")
    else:
        lines.append("- **Change:** first month tracked")
    if summary.top_category is not None:
        lines.append(
            f"- **Top category:** {_label(summary.top_category, catalog)} "
            f"(${summary.top_category_total:,.2f})"
        )
    else:
        lines.append("- **Top category:** no data yet")
    if forecast is not None and forecast.months_observed >= 1:
        lines.append(
            f"- **Next month forecast:** ${forecast.predicted:,.2f} "
            f"({forecast.confidence.value} confidence)"
        )
    if summary.budget > 0:
        lines.append(
            f"- **Budget:** ${summary.budget:,.2f} ({_pct(summary.used_pct)} used)"
        )
        if summary.remaining < 0:
            lines.append(f"- **Over budget by:** ${abs(summary.remaining):,.2f}")
        else:
            lines.append(f"- **Remaining:** ${summary.remaining:,.2f}")
    else:
        lines.append("- **Budget:** not set")
    if score is not None:
        lines.append(f"- **Health score:** {score}/100")
    return "\n".join(lines)


def format_category_breakdown(
    shares: list[CategoryShare],
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> str:
    if not shares:
        return "No spending this month."
    lines = ["## Spending by Category (This Month)\n"]
    for s in shares:
        lines.append(f"- {_label(s.category, catalog)}: ${s.amount:,.2f} ({s.pct:.0f}%)")
    return "\n".join(lines)


def format_budget_status(
    settings: Settings,
    statuses: list[CategoryBudgetStatus],
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> str:
    lines = [f"## Budget\n\n**Monthly total:** ${settings.total_budget:,.2f}"]
    if not statuses:
        lines.append("\nNo category limits set.")
        return "\n".join(lines)
    lines.append("\n| Category | Spent | Limit | Remaining | Status |")
    lines.append("|---|---|---|---|---|")
    for s in statuses:
        status = "!! Over" if s.over else "OK"
        lines.append(
            f"| {_label(s.category, catalog)} | ${s.spent:,.2f} | ${s.limit:,.2f} | "
            f"${s.remaining:,.2f} | {status} |"
        )
    return "\n".join(lines)


def format_trend(trend: list[MonthlyTotal]) -> str:
    if all(m.total == 0 for m in trend):
        return "No spending data found for the requested period."
    lines = [
        "## Monthly Trend\n",
        "| Month | Total | Running Avg |",
        "|---|---|---|",
    ]
    for m in trend:
        lines.append(f"| {m.month} | ${m.total:,.2f} | ${m.running_average:,.2f} |")
    return "\n".join(lines)


def format_daily_spending(daily: list[DailyTotal]) -> str:
    active = [d for d in daily if d.total > 0]
    if not active:
        return f"No spending in the last {len(daily)} days."
    total = sum(d.total for d in daily)
    lines = [
        f"## Daily Spending (last {len(daily)} days)\n",
        f"**Total:** ${total:,.2f} over {len(active)} active day(s)\n",
    ]
    for d in active:
        lines.append(f"- {d.day.isoformat()}: ${d.total:,.2f}")
    return "\n".join(lines)


def format_settings_saved(settings: Settings, category: str | None = None) -> str:
    if category is None:
        return f"Monthly budget set to ${settings.total_budget:,.2f}."
    cap = settings.category_budgets.get(category)
    label = DEFAULT_CATALOG.get(category).label
    if not cap:
        return f"Removed the limit for **{label}**."
    return f"Limit for **{label}** set to ${cap:,.2f}/month."
