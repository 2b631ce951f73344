"""Pure analysis functions for expense data.

All functions take an already-loaded snapshot of expense records and return
result dataclasses. No I/O and no mutation of inputs, so business logic stays
testable without mocking. Functions that depend on "today" take an explicit
``as_of`` date.
"""

import math
from datetime import date, timedelta
from typing import Sequence

from src.core.catalog import DEFAULT_CATALOG, CategoryCatalog
from src.models.results import (
    AnomalyItem,
    CategoryBudgetStatus,
    CategoryShare,
    DailyTotal,
    MonthlyForecast,
    MonthlyTotal,
    MonthSummary,
    Tip,
    WeekdayTotal,
)
from src.models.schemas import Confidence, ExpenseRecord, Period, Settings

MIN_GROUP_SIZE = 3
Z_SCORE_THRESHOLD = 1.8
MAX_ANOMALIES = 5
MAX_TIPS = 5

TOP_CATEGORY_SHARE_PCT = 40
LOW_BUDGET_FRACTION = 0.15
FOOD_TIP_THRESHOLD = 200
SUBSCRIPTION_TIP_THRESHOLD = 100

WEEKDAYS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")


# --- Date helpers ---


def _month_key(d: date) -> str:
    return d.strftime("%Y-%m")


def _first_of_previous_month(d: date) -> date:
    return (d.replace(day=1) - timedelta(days=1)).replace(day=1)


def _days_in_month(d: date) -> int:
    if d.month == 12:
        next_month = date(d.year + 1, 1, 1)
    else:
        next_month = date(d.year, d.month + 1, 1)
    return (next_month - d.replace(day=1)).days


def _records_in_month(records: Sequence[ExpenseRecord], month: str) -> list[ExpenseRecord]:
    return [r for r in records if r.month_key == month]


def _category_totals(records: Sequence[ExpenseRecord]) -> dict[str, float]:
    totals: dict[str, float] = {}
    for r in records:
        totals[r.category] = totals.get(r.category, 0.0) + r.amount
    return totals


# --- Anomaly Detection ---


def detect_anomalies(
    records: Sequence[ExpenseRecord],
    limit: int = MAX_ANOMALIES,
) -> list[AnomalyItem]:
    """Flag records whose amount is an outlier within its category.

    Uses a population z-score per category. Categories with fewer than
    three records or with no variance are skipped. Results keep category
    first-seen order, then record order, and are truncated to *limit*.
    """
    groups: dict[str, list[ExpenseRecord]] = {}
    for r in records:
        groups.setdefault(r.category, []).append(r)

    anomalies: list[AnomalyItem] = []
    for members in groups.values():
        if len(members) < MIN_GROUP_SIZE:
            continue
        n = len(members)
        mean = sum(r.amount for r in members) / n
        std = math.sqrt(sum((r.amount - mean) ** 2 for r in members) / n)
        if std == 0:
            continue

        for r in members:
            z = abs(r.amount - mean) / std
            if z > Z_SCORE_THRESHOLD:
                anomalies.append(AnomalyItem(
                    record=r,
                    z_score=round(z, 1),
                    mean=round(mean, 2),
                ))

    return anomalies[:limit]


# --- Forecasting ---


def forecast_confidence(months_observed: int) -> Confidence:
    if months_observed >= 4:
        return Confidence.HIGH
    if months_observed >= 2:
        return Confidence.MEDIUM
    return Confidence.LOW


def forecast_next_month(records: Sequence[ExpenseRecord]) -> MonthlyForecast:
    """Predict next month's total with a least-squares line over monthly totals.

    x-values are 1-based month indices in chronological order, so the
    prediction is the fitted value at ``x = N + 1``.
    """
    monthly: dict[str, float] = {}
    for r in records:
        key = r.month_key
        monthly[key] = monthly.get(key, 0.0) + r.amount

    entries = sorted(monthly.items())
    n = len(entries)
    if n < 2:
        total = sum(r.amount for r in records)
        return MonthlyForecast(
            predicted=round(total, 2),
            confidence=Confidence.LOW,
            months_observed=n,
        )

    xs = list(range(1, n + 1))
    ys = [total for _, total in entries]
    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs)

    slope = (n * sum_xy - sum_x * sum_y) / (n * sum_x2 - sum_x * sum_x)
    intercept = (sum_y - slope * sum_x) / n
    predicted = max(0.0, slope * (n + 1) + intercept)

    return MonthlyForecast(
        predicted=round(predicted, 2),
        confidence=forecast_confidence(n),
        months_observed=n,
        slope=slope,
    )


# --- Health Score ---


def calc_score(
    records: Sequence[ExpenseRecord],
    total_budget: float,
    as_of: date | None = None,
) -> int | None:
    """Composite 5-99 score of budget adherence, diversity and consistency.

    Returns ``None`` when there are no records at all.
    """
    if not records:
        return None

    today = as_of or date.today()
    this_month = _records_in_month(records, _month_key(today))
    total = sum(r.amount for r in this_month)

    budget_score = max(0.0, 1 - total / total_budget) if total_budget > 0 else 0.5
    diversity_score = min(len({r.category for r in this_month}) / 6, 1)
    consistency_score = min(len({r.date for r in this_month}) / 20, 1)

    raw = (budget_score * 0.5 + diversity_score * 0.25 + consistency_score * 0.25) * 100
    score = math.floor(raw + 0.5)
    return min(99, max(5, score))


# --- Tips ---


def generate_tips(
    records: Sequence[ExpenseRecord],
    total_budget: float,
    as_of: date | None = None,
    limit: int = MAX_TIPS,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> list[Tip]:
    """Rule-based advice for the current month, in fixed rule order."""
    tips: list[Tip] = []
    if not records:
        return tips

    today = as_of or date.today()
    this_month = _records_in_month(records, _month_key(today))
    total = sum(r.amount for r in this_month)
    cat_totals = _category_totals(this_month)

    # Top category share
    if cat_totals:
        top_cat, top_amt = max(cat_totals.items(), key=lambda kv: kv[1])
        pct = (top_amt / total) * 100 if total > 0 else 0.0
        label = catalog.get(top_cat).label
        if pct > TOP_CATEGORY_SHARE_PCT:
            tips.append(Tip(
                kind="top_category_warning",
                text=(
                    f"{label} is your biggest expense at {pct:.0f}% (${top_amt:,.2f}). "
                    "Consider setting a limit to diversify your budget."
                ),
            ))
        else:
            tips.append(Tip(
                kind="top_category_balanced",
                text=(
                    f"Your top category is {label} at ${top_amt:,.2f} "
                    f"({pct:.0f}% of spending). Looking balanced!"
                ),
            ))

    # Budget remaining
    if total_budget > 0:
        remaining = total_budget - total
        days_left = _days_in_month(today) - today.day + 1  # include today
        if remaining < 0:
            tips.append(Tip(
                kind="over_budget",
                text=(
                    f"You're ${abs(remaining):,.2f} over budget this month. "
                    "Try to cut back on non-essential spending."
                ),
            ))
        elif remaining < total_budget * LOW_BUDGET_FRACTION:
            daily = remaining / days_left
            tips.append(Tip(
                kind="budget_low",
                text=(
                    f"Only ${remaining:,.2f} left in your budget. "
                    f"You have ~${daily:,.0f}/day for the rest of the month."
                ),
            ))
        else:
            tips.append(Tip(
                kind="budget_on_track",
                text=(
                    f"Great! You have ${remaining:,.2f} remaining "
                    f"({remaining / total_budget * 100:.0f}%). Keep it up!"
                ),
            ))

    food = cat_totals.get("food", 0.0)
    if food > FOOD_TIP_THRESHOLD:
        tips.append(Tip(
            kind="food",
            text=(
                f"You spent ${food:,.2f} on food this month. "
                "Try meal-prepping to cut costs by 20-30%."
            ),
        ))

    subscriptions = cat_totals.get("bills", 0.0) + cat_totals.get("entertainment", 0.0)
    if subscriptions > SUBSCRIPTION_TIP_THRESHOLD:
        tips.append(Tip(
            kind="subscriptions",
            text=(
                f"Your bills & subscriptions total ${subscriptions:,.2f}. "
                "Consider auditing and canceling unused subscriptions."
            ),
        ))

    if cat_totals and not cat_totals.get("investments"):
        tips.append(Tip(
            kind="savings",
            text=(
                "You haven't tracked any investments this month. Consider setting "
                "aside even 5-10% of your income for long-term wealth building."
            ),
        ))

    return tips[:limit]


# --- Weekday Pattern ---


def day_of_week_pattern(records: Sequence[ExpenseRecord]) -> list[WeekdayTotal]:
    """Total and count per weekday, Sunday first. Always seven entries."""
    totals = [0.0] * 7
    counts = [0] * 7
    for r in records:
        idx = r.date.isoweekday() % 7  # Sunday -> 0
        totals[idx] += r.amount
        counts[idx] += 1
    return [
        WeekdayTotal(day=day, total=round(totals[i], 2), count=counts[i])
        for i, day in enumerate(WEEKDAYS)
    ]


# --- Expense Filtering ---


def filter_expenses(
    records: Sequence[ExpenseRecord],
    query: str | None = None,
    category: str | None = None,
    period: Period = Period.ALL,
    as_of: date | None = None,
) -> list[ExpenseRecord]:
    """Filter by description text, category key and period. Keeps input order."""
    today = as_of or date.today()
    this_month = _month_key(today)
    last_month = _month_key(_first_of_previous_month(today))
    cutoff = today.replace(day=1)
    for _ in range(3):
        cutoff = _first_of_previous_month(cutoff)

    q = (query or "").lower()
    result = []
    for r in records:
        if q and q not in r.description.lower():
            continue
        if category and r.category != category:
            continue
        if period == Period.THIS_MONTH and r.month_key != this_month:
            continue
        if period == Period.LAST_MONTH and r.month_key != last_month:
            continue
        if period == Period.LAST_3 and r.date < cutoff:
            continue
        result.append(r)
    return result


# --- Monthly Summary ---


def summarize_month(
    records: Sequence[ExpenseRecord],
    total_budget: float,
    as_of: date | None = None,
) -> MonthSummary:
    """Current month totals compared against last month and the budget.

    Also reports the average daily spend so far and the month's largest
    category (first seen wins on ties).
    """
    today = as_of or date.today()
    month = _month_key(today)
    this_month = _records_in_month(records, month)
    last_month = _records_in_month(records, _month_key(_first_of_previous_month(today)))

    total = sum(r.amount for r in this_month)
    last_total = sum(r.amount for r in last_month)
    change_pct = ((total - last_total) / last_total) * 100 if last_total > 0 else None
    used_pct = (total / total_budget) * 100 if total_budget > 0 else None

    cat_totals = _category_totals(this_month)
    top_cat, top_amt = (
        max(cat_totals.items(), key=lambda kv: kv[1]) if cat_totals else (None, 0.0)
    )

    return MonthSummary(
        month=month,
        total=round(total, 2),
        count=len(this_month),
        last_month_total=round(last_total, 2),
        change_pct=round(change_pct, 1) if change_pct is not None else None,
        budget=round(total_budget, 2),
        remaining=round(total_budget - total, 2),
        used_pct=round(used_pct, 1) if used_pct is not None else None,
        avg_daily=round(total / today.day, 2),
        top_category=top_cat,
        top_category_total=round(top_amt, 2),
    )


def category_breakdown(
    records: Sequence[ExpenseRecord],
    as_of: date | None = None,
    limit: int | None = None,
) -> list[CategoryShare]:
    """Current month spend per category, largest first."""
    today = as_of or date.today()
    this_month = _records_in_month(records, _month_key(today))
    totals = _category_totals(this_month)
    grand_total = sum(totals.values())

    shares = [
        CategoryShare(
            category=cat,
            amount=round(amt, 2),
            pct=round((amt / grand_total) * 100, 1) if grand_total > 0 else 0.0,
        )
        for cat, amt in sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
    ]
    return shares[:limit] if limit is not None else shares


def check_category_budgets(
    records: Sequence[ExpenseRecord],
    settings: Settings,
    as_of: date | None = None,
    catalog: CategoryCatalog = DEFAULT_CATALOG,
) -> list[CategoryBudgetStatus]:
    """Compare current month spend with each positive per-category cap."""
    today = as_of or date.today()
    totals = _category_totals(_records_in_month(records, _month_key(today)))

    statuses: list[CategoryBudgetStatus] = []
    for cat in catalog:
        cap = settings.category_budgets.get(cat.key)
        if not cap or cap <= 0:
            continue
        spent = totals.get(cat.key, 0.0)
        statuses.append(CategoryBudgetStatus(
            category=cat.key,
            spent=round(spent, 2),
            limit=round(cap, 2),
            remaining=round(cap - spent, 2),
            over=spent > cap,
        ))
    return statuses


# --- Trends ---


def monthly_trend(
    records: Sequence[ExpenseRecord],
    num_months: int = 6,
    as_of: date | None = None,
) -> list[MonthlyTotal]:
    """Totals for the last *num_months* calendar months, oldest first.

    Each entry carries the running mean of the totals up to and including it.
    """
    today = as_of or date.today()
    month_keys: list[str] = []
    d = today.replace(day=1)
    for _ in range(num_months):
        month_keys.append(_month_key(d))
        d = _first_of_previous_month(d)
    month_keys.reverse()

    totals = {m: 0.0 for m in month_keys}
    for r in records:
        key = r.month_key
        if key in totals:
            totals[key] += r.amount

    trend: list[MonthlyTotal] = []
    running = 0.0
    for i, m in enumerate(month_keys, start=1):
        running += totals[m]
        trend.append(MonthlyTotal(
            month=m,
            total=round(totals[m], 2),
            running_average=round(running / i, 2),
        ))
    return trend


def daily_spending(
    records: Sequence[ExpenseRecord],
    days: int = 30,
    as_of: date | None = None,
) -> list[DailyTotal]:
    """Per-day totals for the trailing window ending on *as_of*, oldest first."""
    today = as_of or date.today()
    start = today - timedelta(days=days - 1)

    totals: dict[date, float] = {}
    for r in records:
        if start <= r.date <= today:
            totals[r.date] = totals.get(r.date, 0.0) + r.amount

    window = [start + timedelta(days=i) for i in range(days)]
    return [DailyTotal(day=d, total=round(totals.get(d, 0.0), 2)) for d in window]
