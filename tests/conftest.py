"""Shared fixtures for relnotes tests."""

import os

import pytest


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run without RELNOTES_* variables from a directory without config files."""
    for key in list(os.environ):
        if key.upper().startswith("RELNOTES_"):
            monkeypatch.delenv(key)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)
    return tmp_path
