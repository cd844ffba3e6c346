"""Pytest configuration and fixtures."""

import pytest
import tempfile
from dataclasses import dataclass
from pathlib import Path
from ordered_object import OrderedObject


@dataclass
class User:
    """Typed record used for OrderedObject[User] tests."""
    name: str
    age: int
    email: str


@pytest.fixture
def user_type():
    """Record type for typed OrderedObject[User] values."""
    return User


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmp_dir:
        yield Path(tmp_dir)


@pytest.fixture
def abc_object():
    """Ordered object {"a":1,"b":2,"c":3}."""
    return OrderedObject().set("a", 1).set("b", 2).set("c", 3)


@pytest.fixture
def person_object():
    """Ordered object with a nested ordered address."""
    address = OrderedObject().set("street", "123 Main St").set("city", "London")
    return OrderedObject().set("name", "Alice").set("age", 28).set("address", address)


@pytest.fixture
def users_object():
    """Typed ordered object holding User records."""
    return (
        OrderedObject()
        .set("user1", User(name="Alice", age=30, email="alice@example.com"))
        .set("user2", User(name="Bob", age=25, email="bob@example.com"))
    )


@pytest.fixture
def config_json():
    """Configuration document whose key order matters."""
    return (
        '{"name":"service","version":"2.1.0",'
        '"server":{"port":8080,"host":"localhost"},'
        '"features":["auth","cache"],"debug":false,"timeout":null}'
    )
