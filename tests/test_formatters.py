"""Tests for MCP response formatters."""

from datetime import date

import pytest

from tests.conftest import make_expense, make_settings
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
from src.models.schemas import Confidence
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


class TestFormatCategories:
    def test_lists_all_with_fallback(self):
        result = format_categories()
        assert "Food & Dining" in result
        assert "`other`" in result
        assert "(fallback)" in result


class TestFormatSuggestion:
    def test_renders_label_and_confidence(self):
        s = CategorySuggestion(category="entertainment", confidence=Confidence.MEDIUM, score=3)
        result = format_suggestion("Netflix", s)
        assert "Entertainment" in result
        assert "Medium confidence" in result
        assert "score 3" in result


class TestFormatExpenseCreated:
    def test_manual_category(self):
        r = make_expense(amount=1234.5, category="travel", description="Hotel", id_="abc")
        result = format_expense_created(r)
        assert "$1,234.50" in result
        assert "Travel" in result
        assert "auto" not in result
        assert "`abc`" in result

    def test_auto_category_with_notes(self):
        r = make_expense(category="food", description="Lunch", notes="with team")
        s = CategorySuggestion(category="food", confidence=Confidence.HIGH, score=7)
        result = format_expense_created(r, s)
        assert "auto, High confidence" in result
        assert "with team" in result


class TestFormatExpenses:
    def test_empty(self):
        assert format_expenses([], 25) == "No expenses found."

    def test_respects_limit(self):
        records = [make_expense(description=f"item {i}") for i in range(5)]
        result = format_expenses(records, 2)
        assert "showing 2 of 5" in result
        assert "item 1" in result
        assert "item 2" not in result

    def test_unknown_category_uses_fallback_label(self):
        r = make_expense(description="Mystery").model_copy(update={"category": "retired"})
        assert "Other" in format_expenses([r], 10)

    def test_deleted(self):
        r = make_expense(amount=9, description="Snack", date_="2025-03-01")
        assert format_expense_deleted(r) == "Deleted **Snack** ($9.00 on 2025-03-01)."


class TestFormatAnomalies:
    def test_empty(self):
        assert format_anomalies([]) == "No unusual expenses detected."

    def test_renders_z_score_and_mean(self):
        r = make_expense(amount=500, category="food", description="Banquet")
        result = format_anomalies([AnomalyItem(record=r, z_score=2.0, mean=180.0)])
        assert "Banquet" in result
        assert "2.0σ" in result
        assert "$180.00" in result
        assert "Food & Dining" in result


class TestFormatForecast:
    def test_without_slope(self):
        result = format_forecast(MonthlyForecast(predicted=300, confidence=Confidence.LOW, months_observed=1))
        assert "$300.00" in result
        assert "Low" in result
        assert "Trend" not in result

    def test_with_slope(self):
        result = format_forecast(
            MonthlyForecast(predicted=300, confidence=Confidence.MEDIUM, months_observed=2, slope=100.0)
        )
        assert "up $100.00/month" in result


class TestFormatHealthScore:
    def test_no_data(self):
        assert "No expenses" in format_health_score(None)

    @pytest.mark.parametrize("score,label", [
        (99, "Excellent"),
        (75, "Excellent"),
        (74, "Good"),
        (55, "Good"),
        (54, "Fair"),
        (35, "Fair"),
        (34, "Needs Work"),
        (5, "Needs Work"),
    ])
    def test_verdict_boundaries(self, score, label):
        assert format_health_score(score).startswith(f"## Financial Health: {score}/100 ({label})")


class TestFormatTips:
    def test_empty(self):
        assert "No tips" in format_tips([])

    def test_tags(self):
        result = format_tips([
            Tip(kind="over_budget", text="Too much."),
            Tip(kind="budget_on_track", text="Nice."),
        ])
        assert "- [!!] Too much." in result
        assert "- [OK] Nice." in result


class TestFormatWeekdayPattern:
    def test_empty(self):
        pattern = [WeekdayTotal(day=d, total=0, count=0) for d in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")]
        assert format_weekday_pattern(pattern) == "No spending recorded yet."

    def test_table_and_busiest(self):
        pattern = [WeekdayTotal(day=d, total=0, count=0) for d in ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")]
        pattern[5] = WeekdayTotal(day="Fri", total=120, count=3)
        result = format_weekday_pattern(pattern)
        assert "| Fri | $120.00 | 3 |" in result
        assert "**Biggest day:** Fri" in result


class TestFormatMonthSummary:
    def test_within_budget(self):
        summary = MonthSummary(
            month="2025-03", total=200, count=2, last_month_total=100,
            change_pct=100.0, budget=1000, remaining=800, used_pct=20.0,
            avg_daily=13.33, top_category="food", top_category_total=150,
        )
        forecast = MonthlyForecast(predicted=240, confidence=Confidence.MEDIUM, months_observed=2, slope=100.0)
        result = format_month_summary(summary, score=72, forecast=forecast)
        assert "2025-03" in result
        assert "Avg daily:** $13.33" in result
        assert "+100.0%" in result
        assert "Food & Dining ($150.00)" in result
        assert "Next month forecast:** $240.00 (Medium confidence)" in result
        assert "20% used" in result
        assert "Remaining:** $800.00" in result
        assert "72/100" in result

    def test_over_budget_and_no_history(self):
        summary = MonthSummary(
            month="2025-03", total=1500, count=1, last_month_total=0,
            change_pct=None, budget=1000, remaining=-500, used_pct=150.0,
        )
        result = format_month_summary(summary)
        assert "Over budget by:** $500.00" in result
        assert "first month tracked" in result
        assert "vs last month" not in result
        assert "forecast" not in result

    def test_empty_month(self):
        summary = MonthSummary(
            month="2025-03", total=0, count=0, last_month_total=0,
            change_pct=None, budget=2000, remaining=2000, used_pct=0.0,
        )
        forecast = MonthlyForecast(predicted=0, confidence=Confidence.LOW, months_observed=0)
        result = format_month_summary(summary, forecast=forecast)
        assert "Avg daily:** $0.00" in result
        assert "Top category:** no data yet" in result
        assert "forecast" not in result

    def test_no_budget(self):
        summary = MonthSummary(
            month="2025-03", total=10, count=1, last_month_total=0,
            change_pct=None, budget=0, remaining=-10, used_pct=None,
        )
        assert "not set" in format_month_summary(summary)


class TestFormatCategoryBreakdown:
    def test_empty(self):
        assert format_category_breakdown([]) == "No spending this month."

    def test_rows(self):
        result = format_category_breakdown([CategoryShare(category="food", amount=75, pct=75.0)])
        assert "Food & Dining: $75.00 (75%)" in result


class TestFormatBudgetStatus:
    def test_no_caps(self):
        result = format_budget_status(make_settings(1500), [])
        assert "$1,500.00" in result
        assert "No category limits set." in result

    def test_over_flag(self):
        statuses = [CategoryBudgetStatus(category="food", spent=250, limit=200, remaining=-50, over=True)]
        result = format_budget_status(make_settings(), statuses)
        assert "!! Over" in result
        assert "$-50.00" in result


class TestFormatTrendAndDaily:
    def test_trend_empty(self):
        trend = [MonthlyTotal(month="2025-03", total=0, running_average=0)]
        assert "No spending data" in format_trend(trend)

    def test_trend_rows(self):
        trend = [
            MonthlyTotal(month="2025-02", total=100, running_average=100),
            MonthlyTotal(month="2025-03", total=300, running_average=200),
        ]
        assert "| 2025-03 | $300.00 | $200.00 |" in format_trend(trend)

    def test_daily_only_lists_active_days(self):
        daily = [
            DailyTotal(day=date(2025, 3, 14), total=0),
            DailyTotal(day=date(2025, 3, 15), total=12.5),
        ]
        result = format_daily_spending(daily)
        assert "last 2 days" in result
        assert "2025-03-15: $12.50" in result
        assert "2025-03-14" not in result

    def test_daily_empty(self):
        assert format_daily_spending([DailyTotal(day=date(2025, 3, 15), total=0)]) == (
            "No spending in the last 1 days."
        )


class TestFormatSettingsSaved:
    def test_total_budget(self):
        assert format_settings_saved(make_settings(1800)) == "Monthly budget set to $1,800.00."

    def test_category_cap_set_and_removed(self):
        assert "$300.00/month" in format_settings_saved(make_settings(food=300), "food")
        assert "Removed the limit" in format_settings_saved(make_settings(), "food")
