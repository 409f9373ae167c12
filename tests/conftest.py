"""Shared pytest fixtures for the pratt test suite."""

from __future__ import annotations

import pytest

from pratt.bantam import make_parser


@pytest.fixture
def bantam():
    """A parser with the Bantam grammar registered."""
    return make_parser()
