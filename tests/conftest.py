"""Shared pytest fixtures for the stackcalc test suite."""

from __future__ import annotations

import pytest
from click.testing import CliRunner


@pytest.fixture
def runner():
    """A click test runner for invoking the stackcalc CLI."""
    return CliRunner()
