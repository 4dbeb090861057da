"""
Global pytest configuration and fixtures.
"""
import datetime as dt
import json
import os
import pytest
from typing import Any, Dict, List
import timekeeper.config.settings
from timekeeper.config import TimekeeperConfig, reload_config


MANAGED_ENV_VARS = [
    'TIMEKEEPER_API_URL',
    'TIMEKEEPER_API_TOKEN',
    'TIMEKEEPER_API_TIMEOUT',
    'TIMEKEEPER_DATA_FILE',
    'REPORT_OUTPUT_DIR',
    'REPORT_TITLE',
    'REPORT_CURRENCY_SYMBOL',
    'REPORT_DATE_FORMAT',
    'REPORT_DECIMAL_SEPARATOR',
    'REPORT_THOUSANDS_SEPARATOR',
    'ENVIRONMENT',
    'DEBUG',
    'LOG_LEVEL',
]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Run every test without the developer's settings or .env file."""
    for key in MANAGED_ENV_VARS:
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)
    timekeeper.config.settings._config = None

    yield

    timekeeper.config.settings._config = None


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'TIMEKEEPER_API_URL': 'https://api.example.com/v1/',
        'TIMEKEEPER_API_TOKEN': 'test-token',
        'TIMEKEEPER_API_TIMEOUT': '5',
        'REPORT_OUTPUT_DIR': 'test-reports',
        'ENVIRONMENT': 'testing',
        'DEBUG': 'true',
        'LOG_LEVEL': 'DEBUG'
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)

    yield test_env_vars


@pytest.fixture
def test_config(mock_env) -> TimekeeperConfig:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def sample_records() -> List[Dict[str, Any]]:
    """Store records for two employees in November 2025."""
    return [
        {
            '_id': 'e-2',
            'employee': {'_id': 'emp-ana', 'name': 'Ana'},
            'date': '2025-11-04T00:00:00.000Z',
            'entryTime': '2025-11-04T09:00:00.000Z',
            'exitTime': '2025-11-04T17:00:00.000Z',
            'dailyRate': 150,
            'extraHoursFormatted': '00:00',
            'extraHoursRate': 30,
            'status': 'PENDING',
        },
        {
            '_id': 'e-1',
            'employee': {'_id': 'emp-ana', 'name': 'Ana'},
            'date': '2025-11-03T00:00:00.000Z',
            'entryTime': '2025-11-03T09:00:00.000Z',
            'exitTime': '2025-11-03T17:00:00.000Z',
            'dailyRate': 150,
            'extraHoursFormatted': '01:00',
            'extraHoursRate': 30,
            'notes': 'Inventory',
            'status': 'APPROVED',
        },
        {
            '_id': 'e-3',
            'employee': {'_id': 'emp-bruno', 'name': 'Bruno'},
            'date': '2025-11-03T00:00:00.000Z',
            'entryTime': '2025-11-03T22:00:00.000Z',
            'exitTime': '2025-11-04T02:00:00.000Z',
            'dailyRate': 100,
            'extraHours': 0,
            'extraHoursRate': 0,
        },
    ]


@pytest.fixture
def records_file(tmp_path, sample_records) -> str:
    """JSON store file holding the sample records."""
    path = tmp_path / 'entries.json'
    path.write_text(json.dumps(sample_records), encoding='utf-8')
    return str(path)


@pytest.fixture
def november_2025():
    """Inclusive range covering November 2025."""
    return dt.date(2025, 11, 1), dt.date(2025, 11, 30)


@pytest.fixture(autouse=True)
def cleanup_test_files():
    """Clean up any test files created during testing."""
    yield

    # Remove test coverage files in case they're created
    test_files = ['coverage.xml', '.coverage']
    for file in test_files:
        if os.path.exists(file):
            os.remove(file)


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "api: mark test as exercising the HTTP store"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        # Add unit marker for tests in tests/unit/
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Add integration marker for tests in tests/integration/
        elif "tests/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        # Add api marker for tests of the HTTP store
        if "api" in item.name.lower():
            item.add_marker(pytest.mark.api)
