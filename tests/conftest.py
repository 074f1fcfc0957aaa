"""Shared fixtures for layout tests."""

from datetime import date, timedelta

import pytest


@pytest.fixture
def monday():
    """A Monday for testing weekly layouts."""
    return date(2024, 1, 15)  # This is a Monday


@pytest.fixture
def week(monday):
    """Monday through Sunday of the test week."""
    return [monday + timedelta(days=i) for i in range(7)]
