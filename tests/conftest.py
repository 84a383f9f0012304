"""
Pytest configuration and fixtures for dashboard tests.
"""

import pytest
from pathlib import Path
import tempfile
import shutil
from datetime import date

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from models import Order, Customer, User
from store import InMemoryStore
from reconciliation import CollectionsService, CompletionCache


TODAY = date(2025, 10, 19)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test outputs."""
    temp = tempfile.mkdtemp()
    yield Path(temp)
    shutil.rmtree(temp, ignore_errors=True)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def user_rows() -> list:
    return [
        {"id": "u1", "name": "Nimal Perera", "email": "nimal@example.com", "role": "Admin"},
        {"id": "u2", "name": "Kamala Silva", "email": "kamala@example.com", "role": "Manager"},
        {"id": "u3", "name": "Ruwan Jayasuriya", "email": "ruwan@example.com", "role": "Sales Rep",
         "assignedsuppliernames": ["Dilmah", "Maliban"]},
        {"id": "u4", "name": "Sunil Driver", "email": "sunil@example.com", "role": "Driver"},
    ]


@pytest.fixture
def customer_rows() -> list:
    return [
        {"id": "c1", "name": "Lanka Traders", "outstandingbalance": 150},
        {"id": "c2", "name": "Hill Country Stores", "outstandingbalance": 50},
    ]


@pytest.fixture
def order_rows() -> list:
    return [
        # credit only
        {"id": "o1", "customerid": "c1", "customername": "Lanka Traders", "date": "2025-10-07",
         "total": 100, "status": "Delivered", "assigneduserid": "u3",
         "creditbalance": 100, "chequebalance": 0},
        # credit and cheque, customer name from customer record
        {"id": "o2", "customerid": "c2", "date": "2025-10-09", "total": 300,
         "status": "Delivered", "assigneduserid": "u3",
         "creditbalance": 80, "chequebalance": 120},
        # fully paid
        {"id": "o3", "customerid": "c1", "date": "2025-10-08", "total": 60, "status": "Delivered"},
    ]


@pytest.fixture
def users(user_rows) -> list:
    return [User.model_validate(row) for row in user_rows]


@pytest.fixture
def customers(customer_rows) -> list:
    return [Customer.model_validate(row) for row in customer_rows]


@pytest.fixture
def orders(order_rows) -> list:
    return [Order.model_validate(row) for row in order_rows]


@pytest.fixture
def admin_user(users) -> User:
    return users[0]


@pytest.fixture
def sales_rep(users) -> User:
    return users[2]


@pytest.fixture
def store(order_rows, customer_rows, user_rows) -> InMemoryStore:
    return InMemoryStore({
        "orders": order_rows,
        "customers": customer_rows,
        "users": user_rows,
    })


@pytest.fixture
def cache(temp_dir) -> CompletionCache:
    return CompletionCache(temp_dir / "completed_collections.json")


@pytest.fixture
def service(store, cache) -> CollectionsService:
    return CollectionsService(store, cache)
