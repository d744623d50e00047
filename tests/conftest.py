"""Shared pytest fixtures for all tests."""

import pytest

from logics.schema import ColumnConfig


@pytest.fixture
def records():
    """Four product rows; the 'photo' column holds the image links."""
    return [
        {"name": "Widget", "price": 10, "photo": "https://drive.google.com/file/d/XYZ/view", "status": "ok"},
        {"name": "Gadget", "price": 12.5, "photo": "https://example.com/gadget.png", "status": "ok"},
        {"name": "Gizmo", "price": "", "photo": "https://example.com/gizmo.jpg", "status": "legacy"},
        {"name": "Doohickey", "price": 3, "photo": "", "status": ""},
    ]


@pytest.fixture
def columns():
    return [
        ColumnConfig("name", "Product", "text", "readonly"),
        ColumnConfig("price", "Price", "number"),
        ColumnConfig("photo", "Photo", "url"),
        ColumnConfig("status", "Status", "select", options=["ok", "broken"]),
    ]
