from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from components.budget.schemas import BudgetCreate, BudgetUpdate
from components.transaction.schemas import TransactionCreate, TransactionType, TransactionUpdate


def _payload(**overrides):
    payload = {
        "description": "Coffee",
        "amount": 4.5,
        "category": "Food & Dining",
        "type": "expense",
        "date": "2024-01-15",
    }
    payload.update(overrides)
    return payload


def _error_fields(exc: ValidationError):
    return {error["loc"][0] for error in exc.errors()}


def test_transaction_create_coerces_amount_and_date():
    transaction = TransactionCreate.model_validate(_payload(amount="42.50"))
    assert transaction.amount == Decimal("42.50")
    assert transaction.type is TransactionType.EXPENSE
    assert transaction.date == datetime(2024, 1, 15)


def test_transaction_create_ignores_server_assigned_fields():
    transaction = TransactionCreate.model_validate(_payload(id=99, createdAt="2020-01-01"))
    assert "id" not in transaction.model_dump()
    assert "created_at" not in transaction.model_dump()


@pytest.mark.parametrize(
    "field, value",
    [
        ("amount", 0),
        ("amount", -5),
        ("amount", "twelve"),
        ("description", ""),
        ("category", ""),
        ("category", "x" * 51),
        ("type", "transfer"),
        ("date", "not a date"),
    ],
)
def test_transaction_create_rejects_invalid_field(field, value):
    with pytest.raises(ValidationError) as exc_info:
        TransactionCreate.model_validate(_payload(**{field: value}))
    assert _error_fields(exc_info.value) == {field}


def test_transaction_create_reports_every_missing_field():
    with pytest.raises(ValidationError) as exc_info:
        TransactionCreate.model_validate({})
    assert _error_fields(exc_info.value) == {"description", "amount", "category", "type", "date"}


def test_transaction_update_keeps_only_supplied_fields():
    patch = TransactionUpdate.model_validate({"amount": "10"})
    assert patch.model_dump(exclude_unset=True) == {"amount": Decimal("10.00")}


def test_transaction_update_still_validates_supplied_fields():
    with pytest.raises(ValidationError):
        TransactionUpdate.model_validate({"amount": 0})
    with pytest.raises(ValidationError):
        TransactionUpdate.model_validate({"type": "gift"})


def test_budget_schemas_validate_amount():
    assert BudgetCreate.model_validate({"category": "Shopping", "amount": "250"}).amount == Decimal("250.00")
    with pytest.raises(ValidationError):
        BudgetCreate.model_validate({"category": "Shopping", "amount": 0})
    with pytest.raises(ValidationError):
        BudgetCreate.model_validate({"category": "", "amount": 10})
    assert BudgetUpdate.model_validate({}).model_dump(exclude_unset=True) == {}
