"""Shared fixtures for the audit trail tests."""

import pytest

from tests.factories import InMemoryLookupSource, profile_row


@pytest.fixture
def jane():
    return profile_row("jane", "doe", employee_number="EMP-001", department="Engineering")


@pytest.fixture
def john():
    return profile_row("John", "Smith", department="Finance")


@pytest.fixture
def source_factory():
    return InMemoryLookupSource


@pytest.fixture
def audit_settings(settings):
    """Run lookups inline so test-database transactions stay visible"""
    settings.AUDIT_TRAIL = {
        "RECENT_LIMIT": 500,
        "HIDDEN_ACTIONS": ["sync", "migrate", "update_schema", "migration"],
        "LOOKUP_WORKERS": 1,
    }
    return settings
