from collections.abc import Iterable, Mapping
from typing import Any

from studybudget.domain.numbers import format_amount, percent
from studybudget.models import BudgetProgress, BudgetSummary, SpendingInsight

EXPENSE_CATEGORIES = ("Food", "Transport", "Entertainment", "Supplies", "Healthcare", "Clothing", "Other")
INCOME_CATEGORIES = ("Scholarship", "Part-time Job", "Family Support")

BUDGET_LIMITS: dict[str, float] = {
    "Food": 600,
    "Transport": 200,
    "Entertainment": 300,
    "Supplies": 150,
    "Healthcare": 100,
    "Clothing": 200,
    "Other": 100,
}

HIGH_SPENDING_PERCENT = 30
HIGHEST_CATEGORY_ALERT_AMOUNT = 400


def _read(record: Any, field: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(field)
    return getattr(record, field, None)


def expenses_by_category(transactions: Iterable[Any]) -> dict[str, float]:
    totals: dict[str, float] = {}
    for record in transactions:
        if _read(record, "type") != "expense":
            continue
        category = _read(record, "category")
        totals[category] = totals.get(category, 0) + _read(record, "amount")
    return totals


def total_for_type(transactions: Iterable[Any], transaction_type: str) -> float:
    return sum(_read(t, "amount") for t in transactions if _read(t, "type") == transaction_type)


def analyze_spending_patterns(transactions: Iterable[Any]) -> list[SpendingInsight]:
    """
    Aggregate expense amounts per category.

    Only ``type``, ``category`` and ``amount`` are read, from models or plain
    mappings. Percentages are 0 when nothing was spent.
    """
    totals = expenses_by_category(transactions)
    total = sum(totals.values())

    insights = []
    for category, amount in totals.items():
        percentage = amount / total * 100 if total > 0 else 0.0
        insights.append(SpendingInsight(
            category=category,
            amount=amount,
            percentage=percentage,
            is_high_spending=percentage > HIGH_SPENDING_PERCENT,
        ))
    return insights


def budget_progress(
    by_category: Mapping[str, float],
    limits: Mapping[str, float] = BUDGET_LIMITS,
) -> list[BudgetProgress]:
    return [
        BudgetProgress(
            category=category,
            spent=by_category.get(category, 0),
            limit=limit,
            percentage=percent(by_category.get(category, 0), limit),
        )
        for category, limit in limits.items()
    ]


def budget_insights(
    balance: float,
    by_category: Mapping[str, float],
    progress: list[BudgetProgress],
    currency: str = "₱",
) -> list[str]:
    insights: list[str] = []

    if balance < 0:
        insights.append(
            "Your expenses exceed your income. Consider reducing spending in entertainment or food categories."
        )

    if by_category:
        top_category, top_amount = max(by_category.items(), key=lambda item: item[1])
        if top_amount > HIGHEST_CATEGORY_ALERT_AMOUNT:
            insights.append(
                f"You're spending the most on {top_category} ({currency}{format_amount(top_amount)}). "
                "Look for ways to optimize this category."
            )

    over_budget = [p.category for p in progress if p.percentage > 100]
    if over_budget:
        insights.append(f"You're over budget in: {', '.join(over_budget)}")

    return insights or ["Great job! You're staying within your budget limits."]


def summarize_budget(transactions: Iterable[Any], currency: str = "₱") -> BudgetSummary:
    records = list(transactions)
    income = total_for_type(records, "income")
    expenses = total_for_type(records, "expense")
    balance = income - expenses
    by_category = expenses_by_category(records)
    progress = budget_progress(by_category)

    return BudgetSummary(
        total_income=income,
        total_expenses=expenses,
        balance=balance,
        expenses_by_category=by_category,
        progress=progress,
        insights=budget_insights(balance, by_category, progress, currency=currency),
    )
