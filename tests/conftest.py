"""Pytest configuration and shared fixtures for flowsketch tests."""

import pytest

from flowsketch import GraphBuilder, SequentialIdFactory, parse_dsl


@pytest.fixture
def ids():
    """Deterministic id factory producing n1, n2, ..."""
    return SequentialIdFactory("n")


@pytest.fixture
def builder(ids):
    """GraphBuilder with deterministic ids."""
    return GraphBuilder(id_factory=ids)


@pytest.fixture
def chain_input():
    """Simple three-node chain."""
    return "[A] -> [B] -> [C]"


@pytest.fixture
def login_input():
    """Login decision flow with labels, reuse and a loop."""
    return """
    (Start) -> [Enter Credentials] -> {Valid?}
    {Valid?} -> "yes" -> [Dashboard] -> (End)
    {Valid?} -> "no" -> [Show Error] -> [Enter Credentials]
    """


@pytest.fixture
def pipeline_input():
    """Flow with directives, comments, a database node and dashed edges."""
    return """
    @direction LR   # left to right
    @spacing 120
    # ingest
    (Request) -> [Validate] -> [[Orders DB]]
    [Validate] --> "audit" --> [[Audit Log]]
    """


@pytest.fixture
def login_graph(login_input, ids):
    """Parsed login flow with deterministic ids."""
    return parse_dsl(login_input, id_factory=ids)
