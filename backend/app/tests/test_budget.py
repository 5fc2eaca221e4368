"""
Tests for budget windows, spending and endpoints.
"""
from datetime import datetime
import pytest
from app.core.exceptions import DuplicateActiveBudgetError, InvalidInputError, NotFoundError
from app.models.budget import BudgetPeriod
from app.schemas.budget import BudgetUpdate
from app.schemas.transaction import TransactionCreate
from app.services import budget_service, ledger_service

NOW = datetime(2026, 10, 14, 15, 30)  # A Wednesday


def spend(db, owner_id, amount, tags, date, is_expense=True):
    ledger_service.create_transaction(
        db,
        owner_id,
        TransactionCreate(title="Spend", amount=amount, is_expense=is_expense, tags=tags, date=date)
    )


@pytest.mark.parametrize("period, now, expected_start", [
    (BudgetPeriod.MONTHLY, NOW, datetime(2026, 10, 1)),
    (BudgetPeriod.YEARLY, NOW, datetime(2026, 1, 1)),
    (BudgetPeriod.WEEKLY, NOW, datetime(2026, 10, 11)),
    # On a Sunday the week starts that same midnight
    (BudgetPeriod.WEEKLY, datetime(2026, 10, 18, 9, 0), datetime(2026, 10, 18)),
    (BudgetPeriod.WEEKLY, datetime(2026, 10, 17, 23, 59), datetime(2026, 10, 11)),
    ("monthly", datetime(2026, 3, 1, 0, 0), datetime(2026, 3, 1)),
])
def test_window_for(period, now, expected_start):
    """Test period window boundaries."""
    start, end = budget_service.window_for(period, now)
    assert start == expected_start
    assert end == now


def test_spending_over_budget(db, make_user):
    """Test spending above the budget amount."""
    owner = make_user("owner@mail.com")
    budget_service.create_budget(db, owner.id, "food", 100, BudgetPeriod.MONTHLY)
    spend(db, owner.id, 30, ["food"], datetime(2026, 10, 2))
    spend(db, owner.id, 90, ["food", "party"], datetime(2026, 10, 13))
    
    [budget] = budget_service.list_with_spending(db, owner.id, now=NOW)
    
    assert budget.spent == 120
    assert budget.remaining == -20
    assert budget.percentage == 120


def test_spending_ignores_other_records(db, make_user):
    """Test spending ignores income, other tags, owners and dates."""
    owner = make_user("owner@mail.com")
    other = make_user("other@mail.com")
    budget_service.create_budget(db, owner.id, "food", 200, BudgetPeriod.WEEKLY)
    spend(db, owner.id, 10, ["food"], datetime(2026, 10, 12))  # in week
    spend(db, owner.id, 20, ["food"], datetime(2026, 10, 10))  # Saturday before the window
    spend(db, owner.id, 40, ["food"], datetime(2026, 10, 15))  # after now
    spend(db, owner.id, 80, ["food"], datetime(2026, 10, 12), is_expense=False)
    spend(db, owner.id, 160, ["rent"], datetime(2026, 10, 12))
    spend(db, other.id, 320, ["food"], datetime(2026, 10, 12))
    
    [budget] = budget_service.list_with_spending(db, owner.id, now=NOW)
    
    assert budget.spent == 10
    assert budget.remaining == 190
    assert budget.percentage == 5


def test_duplicate_tag_counts_once(db, make_user):
    """Test a repeated tag counts once towards spending."""
    owner = make_user("owner@mail.com")
    budget_service.create_budget(db, owner.id, "food", 50, BudgetPeriod.YEARLY)
    spend(db, owner.id, 25, ["food", "food"], datetime(2026, 2, 1))
    
    [budget] = budget_service.list_with_spending(db, owner.id, now=NOW)
    
    assert budget.spent == 25
    assert budget.percentage == 50


def test_create_validates_input(db, make_user):
    """Test budget creation with invalid input."""
    owner = make_user("owner@mail.com")
    with pytest.raises(InvalidInputError):
        budget_service.create_budget(db, owner.id, "food", 0)
    with pytest.raises(InvalidInputError):
        budget_service.create_budget(db, owner.id, "food", -5)
    with pytest.raises(InvalidInputError):
        budget_service.create_budget(db, owner.id, "  ", 10)


def test_one_active_budget_per_category(db, make_user):
    """Test one active budget per category."""
    owner = make_user("owner@mail.com")
    other = make_user("other@mail.com")
    first = budget_service.create_budget(db, owner.id, "food", 100)
    assert first.is_active is True
    assert first.period == BudgetPeriod.MONTHLY
    
    with pytest.raises(DuplicateActiveBudgetError):
        budget_service.create_budget(db, owner.id, "food", 300, BudgetPeriod.WEEKLY)
    # Other owners and other categories are unaffected
    budget_service.create_budget(db, other.id, "food", 100)
    budget_service.create_budget(db, owner.id, "rent", 100)
    
    budget_service.update_budget(db, owner.id, first.id, BudgetUpdate(is_active=False))
    second = budget_service.create_budget(db, owner.id, "food", 300)
    
    with pytest.raises(DuplicateActiveBudgetError):
        budget_service.update_budget(db, owner.id, first.id, BudgetUpdate(is_active=True))
    with pytest.raises(DuplicateActiveBudgetError):
        budget_service.update_budget(db, owner.id, second.id, BudgetUpdate(category="rent"))


def test_update_is_partial(db, make_user):
    """Test partial budget update."""
    owner = make_user("owner@mail.com")
    budget = budget_service.create_budget(db, owner.id, "food", 100)
    
    updated = budget_service.update_budget(db, owner.id, budget.id, BudgetUpdate(amount=250))
    
    assert updated.amount == 250
    assert updated.category == "food"
    assert updated.period == BudgetPeriod.MONTHLY
    assert updated.is_active is True
    with pytest.raises(InvalidInputError):
        budget_service.update_budget(db, owner.id, budget.id, BudgetUpdate(amount=0))


def test_update_and_delete_missing(db, make_user):
    """Test update and delete of missing budgets."""
    owner = make_user("owner@mail.com")
    stranger = make_user("stranger@mail.com")
    budget = budget_service.create_budget(db, owner.id, "food", 100)
    
    with pytest.raises(NotFoundError):
        budget_service.update_budget(db, stranger.id, budget.id, BudgetUpdate(amount=1))
    with pytest.raises(NotFoundError):
        budget_service.delete_budget(db, owner.id, "missing")
    
    budget_service.delete_budget(db, owner.id, budget.id)
    assert budget_service.list_with_spending(db, owner.id, now=NOW) == []


def test_budget_api(client, sign_in):
    """Test budget endpoints."""
    owner_id, headers = sign_in("owner@mail.com")
    month_start = datetime.now().replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    
    response = client.post(
        f"/api/users/{owner_id}/budgets", json={"category": "food", "amount": 100}, headers=headers
    )
    assert response.status_code == 201
    created = response.json()
    assert created["period"] == "monthly"
    assert created["spent"] == 0
    assert created["remaining"] == 100
    assert created["percentage"] == 0
    
    response = client.post(
        f"/api/users/{owner_id}/budgets", json={"category": "food", "amount": 50}, headers=headers
    )
    assert response.status_code == 409
    assert response.json()["kind"] == "duplicate_active_budget"
    
    response = client.post(
        f"/api/users/{owner_id}/budgets", json={"category": "rent", "amount": 0}, headers=headers
    )
    assert response.status_code == 422
    assert response.json()["kind"] == "invalid_input"
    
    response = client.post(
        f"/api/users/{owner_id}/budgets",
        json={"category": "rent", "amount": 10, "period": "daily"},
        headers=headers
    )
    assert response.status_code == 422
    
    for amount in (30, 90):
        client.post(
            f"/api/users/{owner_id}/transactions",
            json={"title": "Food", "amount": amount, "is_expense": True, "tags": ["food"],
                  "date": month_start.isoformat()},
            headers=headers
        )
    
    [budget] = client.get(f"/api/users/{owner_id}/budgets", headers=headers).json()
    assert budget["spent"] == 120
    assert budget["remaining"] == -20
    assert budget["percentage"] == 120
    
    response = client.put(f"/api/budgets/{created['id']}", json={"period": "yearly"}, headers=headers)
    assert response.status_code == 200
    assert response.json()["period"] == "yearly"
    assert response.json()["amount"] == 100
    
    assert client.delete(f"/api/budgets/{created['id']}", headers=headers).status_code == 204
    assert client.delete(f"/api/budgets/{created['id']}", headers=headers).status_code == 404


def test_budget_belongs_to_caller(client, sign_in):
    """Test budgets of other users are hidden."""
    owner_id, owner_headers = sign_in("owner@mail.com")
    _, other_headers = sign_in("other@mail.com")
    created = client.post(
        f"/api/users/{owner_id}/budgets", json={"category": "food", "amount": 100}, headers=owner_headers
    ).json()
    
    assert client.put(f"/api/budgets/{created['id']}", json={"amount": 1}, headers=other_headers).status_code == 404
    assert client.get(f"/api/users/{owner_id}/budgets", headers=other_headers).status_code == 403


def test_overlong_category_is_rejected(client, sign_in):
    """Test budget category longer than the column."""
    owner_id, headers = sign_in("owner@mail.com")
    response = client.post(
        f"/api/users/{owner_id}/budgets", json={"category": "x" * 101, "amount": 10}, headers=headers
    )
    assert response.status_code == 422
    assert response.json()["kind"] == "validation_error"
