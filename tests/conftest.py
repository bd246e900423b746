"""Shared fixtures for rankattest tests."""

import itertools
import os

import pytest

from rankattest.attestation import CryptoContext, SignatureSchemeProvider
from rankattest.graph import default_graph

TESTDATA_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "testdata")

FIXED_MILLIS = 1_700_000_000_000
STEP_NS = 1_500_000  # each clock read advances 1.5 ms


@pytest.fixture
def baseline_dir():
    """Directory holding the pinned PageRank regression baseline."""
    return os.path.join(TESTDATA_DIR, "pagerank")


@pytest.fixture
def graph():
    """The built-in 4-node, 5-edge graph."""
    return default_graph()


@pytest.fixture
def context():
    """Fresh context with its own metrics registry."""
    return CryptoContext()


@pytest.fixture
def fixed_context():
    """Context with a stepping monotonic clock and a frozen wall clock."""
    ticks = itertools.count(0, STEP_NS)
    ctx = CryptoContext()
    ctx.monotonic_ns = lambda: next(ticks)
    ctx.now_millis = lambda: FIXED_MILLIS
    return ctx


@pytest.fixture
def provider(context):
    return SignatureSchemeProvider(context)


@pytest.fixture
def clean_env(monkeypatch):
    """Remove the configuration variables from the environment."""
    for name in ("SIG_SCHEME", "DATA_FILE", "PR_ITERS", "PR_DAMP"):
        monkeypatch.delenv(name, raising=False)
