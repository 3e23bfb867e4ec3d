"""Shared fixtures: isolate process-wide logging and host rules state."""

import logging

import pytest

import hostrules


@pytest.fixture(autouse=True)
def _isolate_globals(monkeypatch):
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    monkeypatch.delenv("NUGETCFG_CONFIG", raising=False)
    monkeypatch.setenv("NUGETCFG_LOG_LEVEL", "INFO")
    hostrules.default_rules().clear()
    yield
    hostrules.default_rules().clear()
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
