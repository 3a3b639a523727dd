"""
Shared pytest fixtures.

Capabilities are replaced by in-memory fakes, so no API keys or network
access are needed.
"""

import os

import pytest

os.environ.setdefault("LOG_LEVEL", "WARNING")

from fakes import FakeProductSearch, FixedRandom, ScriptedLLM, make_raw_products  # noqa: E402


@pytest.fixture
def intent_llm():
    return ScriptedLLM()


@pytest.fixture
def query_llm():
    return ScriptedLLM()


@pytest.fixture
def advisor_llm():
    return ScriptedLLM()


@pytest.fixture
def fixed_random():
    return FixedRandom(1)


@pytest.fixture
def five_products():
    return FakeProductSearch(products=make_raw_products(5))
