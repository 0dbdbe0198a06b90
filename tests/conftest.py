"""Shared pytest fixtures.

Every test starts from a known environment: a non-local APP_ENV (so handlers
answer unexpected errors with 500 instead of re-raising) and none of the
variables that switch configuration sources or log levels.
"""

import pytest

from linkalias.utils.constants import (
    APP_ENV_ENV,
    APP_NAME_ENV,
    AWS_SAM_LOCAL_ENV,
    CONFIG_PATH_ENV,
    LOG_LEVEL_ENV,
)


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    monkeypatch.setenv(APP_ENV_ENV, 'test')
    for name in (APP_NAME_ENV, AWS_SAM_LOCAL_ENV, CONFIG_PATH_ENV, LOG_LEVEL_ENV):
        monkeypatch.delenv(name, raising=False)
