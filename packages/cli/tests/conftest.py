import logging

import pytest

_ENV_VARS = (
    "GITHUB_TOKEN",
    "GH_TOKEN",
    "GITHUB_REPOSITORY",
    "GITHUB_EVENT_PATH",
    "PRGUARD_DRY",
    "PRGUARD_CONFIG",
)


@pytest.fixture(autouse=True)
def actions_env(monkeypatch, tmp_path):
    """Run every CLI test as a GitHub Actions step in an empty directory.

    Log lines are then plain ``::error::``-style text on stdout, which CliRunner captures.
    """
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    monkeypatch.chdir(tmp_path)

    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
