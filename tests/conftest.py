"""Shared pytest fixtures for tagwire tests."""

import pytest

from tagwire.container import Container


@pytest.fixture()
def container() -> Container:
    """Empty container with the default unnamed prefix."""
    return Container()
