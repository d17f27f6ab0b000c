"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from fastapi.testclient import TestClient
from fincoach_gateway.api.main import create_app
from fincoach_gateway.domain.models import Transaction, TransactionType


AS_OF = date(2024, 6, 15)


@pytest.fixture
def as_of() -> date:
    """Fixed evaluation date so windowing is deterministic"""
    return AS_OF


@pytest.fixture
def client() -> TestClient:
    """Create FastAPI test client"""
    return TestClient(create_app())


@pytest.fixture
def sample_transactions(as_of: date) -> list[Transaction]:
    """Three months of salary, rent, groceries and a card payment"""
    transactions = []

    for month in range(3):
        day = as_of - timedelta(days=10 + month * 30)
        transactions.append(Transaction(5000.0, "Monthly salary", TransactionType.INCOME, day))
        transactions.append(Transaction(-1500.0, "Rent payment", TransactionType.EXPENSE, day))
        transactions.append(Transaction(-400.0, "Grocery store", TransactionType.EXPENSE, day))
        transactions.append(Transaction(-300.0, "Credit card payment", TransactionType.EXPENSE, day))

    # Moving money between own accounts never counts as income or spending
    transactions.append(Transaction(-2000.0, "Transfer to savings account", TransactionType.TRANSFER, as_of))

    # Outside every window
    transactions.append(Transaction(9999.0, "Old bonus", TransactionType.INCOME, as_of - timedelta(days=200)))

    return transactions
