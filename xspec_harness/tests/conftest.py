import pytest

from xspec_harness.core.config import CONFIG_ENV_VAR
from xspec_harness.core.resources import RESOURCES_ENV_VAR


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    monkeypatch.delenv(RESOURCES_ENV_VAR, raising=False)
