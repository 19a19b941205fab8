"""
Shared fixtures for the Covalent client tests.

Configurations are built from a controlled environment so that variables set on
the machine running the tests never leak into the URLs under test.
"""

import os
import pytest
from unittest.mock import patch

from covalent_api.utils.config import Config

BASE = "https://api.covalenthq.com/v1"
TEST_KEY = "ckey_test"


def make_config(**env) -> Config:
    """Builds a Config from exactly the given environment variables."""
    with patch.dict(os.environ, env, clear=True):
        return Config()


@pytest.fixture
def config():
    """Configuration with an API key and every other value at its default."""
    return make_config(COVALENT_API_KEY=TEST_KEY)


@pytest.fixture
def keyless_config():
    """Configuration without an API key."""
    return make_config()
