"""
Pytest configuration for the wrapping test suite.

This conftest.py provides:
- Machine-mode logging (suppresses console output)
- Hosts, configs and plugin components wired together
- Fake syntax-tree providers for counter tests
"""

import os
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

import pytest

from wrapping.config import resolve
from wrapping.heuristic import HeuristicEngine
from wrapping.host.memory import InMemoryHost
from wrapping.logging_config import setup_logging
from wrapping.state import WrapModeStateMachine


# ============================================================================
# GLOBAL CONFIGURATION
# ============================================================================

def pytest_configure(config):
    """Keep console logging out of test output."""
    os.environ.setdefault("WRAPPING_MACHINE_MODE", "1")


# ============================================================================
# LOGGING FIXTURES
# ============================================================================

@pytest.fixture(autouse=True)
def setup_test_logging():
    """
    Machine mode by default - suppress console logs for clean test output.
    """
    setup_logging(level="DEBUG", suppress_console=True, force=True)


# ============================================================================
# HOST AND COMPONENT FIXTURES
# ============================================================================

@pytest.fixture
def host():
    """In-memory host with a global textwidth of 80."""
    return InMemoryHost(textwidth=80)


@pytest.fixture
def config():
    """Default configuration."""
    return resolve()


@pytest.fixture
def machine(host):
    return WrapModeStateMachine(host)


@pytest.fixture
def engine(host, config, machine):
    return HeuristicEngine(host, config, machine)


def make_prose_buffer(host, filetype="markdown", **kwargs):
    """
    10 lines, 4 of them blank, 600 bytes: average line length 100.
    """
    lines = [
        "a" * 90, "", "b" * 90, "   ", "c" * 90,
        "d" * 90, "\t", "e" * 90, "", "f" * 90,
    ]
    kwargs.setdefault("file_size", 600)
    return host.add_buffer(lines, filetype=filetype, **kwargs)


@pytest.fixture
def prose_buffer(host):
    return make_prose_buffer(host)


# ============================================================================
# FAKE SYNTAX PROVIDERS
# ============================================================================

@dataclass
class FakeNode:
    type: str
    start_point: Tuple[int, int]
    end_point: Tuple[int, int]


@dataclass
class FakeTree:
    root_node: Any


@dataclass
class FakeProvider:
    """
    Provider returning canned trees and captures.

    Records the root node each query was run against.
    """
    available: bool = True
    tree_list: List[FakeTree] = field(default_factory=list)
    captured: List[FakeNode] = field(default_factory=list)
    cursor_node: Optional[FakeNode] = None
    queried_roots: List[Any] = field(default_factory=list)

    def trees(self, buffer):
        return list(self.tree_list)

    def captures(self, language, query, node):
        self.queried_roots.append(node)
        return list(self.captured)

    def node_at_cursor(self, buffer):
        return self.cursor_node


@pytest.fixture
def fake_provider():
    return FakeProvider(tree_list=[FakeTree(root_node="root")])


@pytest.fixture
def make_prose(host):
    """Factory for prose buffers with extra add_buffer() arguments."""
    def _make(**kwargs):
        return make_prose_buffer(host, **kwargs)
    return _make
