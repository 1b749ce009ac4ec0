import math
from datetime import date
from typing import Any

from pydantic import BaseModel, field_validator, model_validator

from studybudget.models import Transaction, TransactionType

CUSTOM_CATEGORY = "Other"


class TransactionForm(BaseModel):
    type: TransactionType = "expense"
    amount: float | None = None
    category: str = ""
    custom_category: str = ""
    description: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def _parse_amount(cls, value: Any) -> float:
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("Please enter a valid amount.")
        try:
            amount = float(value)
        except (TypeError, ValueError):
            raise ValueError("Please enter a valid amount.") from None
        if math.isnan(amount) or amount <= 0:
            raise ValueError("Please enter a valid amount.")
        return amount

    @model_validator(mode="after")
    def _check_fields(self) -> "TransactionForm":
        if not self.category:
            raise ValueError("Please select a category.")
        if self.category == CUSTOM_CATEGORY and not self.custom_category.strip():
            raise ValueError("Please enter a custom category name.")
        if not self.description.strip():
            raise ValueError("Please enter a description.")
        return self

    @property
    def final_category(self) -> str:
        if self.category == CUSTOM_CATEGORY and self.custom_category.strip():
            return self.custom_category.strip()
        return self.category


def build_transaction(
    form: TransactionForm,
    *,
    existing: Transaction | None = None,
    auto_suggested: bool = False,
    today: date | None = None,
) -> Transaction:
    """Turn a validated form into a transaction, stamped with today's date on every save."""
    values: dict[str, Any] = {
        "type": form.type,
        "amount": form.amount,
        "category": form.final_category,
        "description": form.description,
        "date": today or date.today(),
        "auto_suggested": form.type == "expense" and auto_suggested,
    }
    if existing is not None:
        values["id"] = existing.id
    return Transaction(**values)
