"""Shared test configuration for the secure-filters test suite.

Clears SECURE_FILTERS_CONFIG so a config file on the developer's machine
cannot change which aliases the CLI tests see.
"""

import pytest

from secure_filters.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
