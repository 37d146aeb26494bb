"""Tests for the birth certificate generator.

Kept as a package so test modules can share helpers through
``from .conftest import ...``. The repository root is put on the import path
by the ``pythonpath`` setting in ``pyproject.toml``.
"""
