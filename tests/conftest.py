"""
Pytest configuration and shared fixtures for the tmpl_funcs test suite.
"""

import pytest

from tmpl_funcs.lib.runtime.rand import RandomSource, set_random_source
from tmpl_funcs.lib.values import Value


@pytest.fixture
def vargs():
    """Factory fixture: build an argument list of Values from plain Python objects."""
    def _build(*items):
        return [Value.from_python(x) for x in items]
    return _build


@pytest.fixture
def run(vargs):
    """Factory fixture: call an adapted builtin with plain Python arguments and unwrap the result."""
    def _run(fn, *items):
        return fn(vargs(*items)).to_python()
    return _run


@pytest.fixture
def seeded_random():
    """Install a deterministic random source for the duration of a test."""
    source = RandomSource(seed=1234)
    previous = set_random_source(source)
    yield source
    set_random_source(previous)
