import pytest

from config import DEFAULT_CONFIG
from machine import Machine


@pytest.fixture
def machine():
    return Machine.from_config(DEFAULT_CONFIG)


@pytest.fixture
def twin():
    # second, identically configured machine
    return Machine.from_config(DEFAULT_CONFIG)
