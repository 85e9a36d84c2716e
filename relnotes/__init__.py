"""Relnotes - release notes from merged GitHub pull requests."""

__version__ = "0.1.0"
