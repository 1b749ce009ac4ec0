from typing import Annotated

from fastapi import APIRouter, Depends

from studybudget.api.dependencies import get_suggestions, get_transactions
from studybudget.api.schemas import SuggestRequest
from studybudget.core import settings
from studybudget.domain.spending import (
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    analyze_spending_patterns,
    summarize_budget,
)
from studybudget.domain.transactions import TransactionForm, build_transaction
from studybudget.logger import get_logger
from studybudget.manager import SuggestionService
from studybudget.models import BudgetSummary, CategorySuggestion, SpendingInsight, Transaction
from studybudget.services.store import RecordStore

logger = get_logger(__name__)

router = APIRouter()


def _save_expense_memory(service: SuggestionService, transaction: Transaction) -> None:
    if transaction.type == "expense":
        service.learn(transaction.description, transaction.category)


@router.post("/api/suggest-category", response_model=CategorySuggestion | None)
async def suggest_category(
    req: SuggestRequest,
    service: Annotated[SuggestionService, Depends(get_suggestions)],
) -> CategorySuggestion | None:
    return service.suggest(req.description)


@router.get("/api/transactions")
async def list_transactions(
    store: Annotated[RecordStore[Transaction], Depends(get_transactions)],
) -> list[Transaction]:
    return store.snapshot()


@router.post("/api/transactions", status_code=201)
async def create_transaction(
    form: TransactionForm,
    store: Annotated[RecordStore[Transaction], Depends(get_transactions)],
    service: Annotated[SuggestionService, Depends(get_suggestions)],
) -> Transaction:
    suggestion = service.suggest(form.description) if form.type == "expense" else None
    transaction = store.add(build_transaction(form, auto_suggested=suggestion is not None))
    _save_expense_memory(service, transaction)

    logger.info(
        "[TRANSACTION] Added %s %s '%s' (suggested: %s)",
        transaction.type,
        transaction.amount,
        transaction.category,
        suggestion.category if suggestion else "none",
    )
    return transaction


@router.put("/api/transactions/{transaction_id}")
async def update_transaction(
    transaction_id: str,
    form: TransactionForm,
    store: Annotated[RecordStore[Transaction], Depends(get_transactions)],
    service: Annotated[SuggestionService, Depends(get_suggestions)],
) -> Transaction:
    existing = store.get(transaction_id)
    suggestion = service.suggest(form.description) if form.type == "expense" else None
    transaction = store.update(
        transaction_id,
        build_transaction(form, existing=existing, auto_suggested=suggestion is not None),
    )
    _save_expense_memory(service, transaction)
    return transaction


@router.delete("/api/transactions/{transaction_id}")
async def delete_transaction(
    transaction_id: str,
    store: Annotated[RecordStore[Transaction], Depends(get_transactions)],
) -> dict[str, str]:
    store.remove(transaction_id)
    return {"status": "deleted", "id": transaction_id}


@router.get("/api/insights/spending")
async def spending_insights(
    store: Annotated[RecordStore[Transaction], Depends(get_transactions)],
) -> list[SpendingInsight]:
    return analyze_spending_patterns(store.snapshot())


@router.get("/api/budget")
async def budget_summary(
    store: Annotated[RecordStore[Transaction], Depends(get_transactions)],
) -> BudgetSummary:
    return summarize_budget(store.snapshot(), currency=settings.currency_symbol())


@router.post("/api/clear-memory")
async def clear_memory(
    service: Annotated[SuggestionService, Depends(get_suggestions)],
) -> dict[str, str]:
    service.clear()
    return {"status": "success", "message": "Suggestion memory cleared"}


@router.get("/api/categories")
async def list_categories() -> dict[str, list[str]]:
    return {"expense": list(EXPENSE_CATEGORIES), "income": list(INCOME_CATEGORIES)}
