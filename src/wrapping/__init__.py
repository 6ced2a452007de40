"""
wrapping - Hard vs. soft wrap mode selection for editor buffers

Manual soft/hard/toggle commands plus a heuristic that picks a mode per
buffer when it is displayed.
"""

__version__ = "1.0.0"

# Core exports
from wrapping.config import WrappingConfig, resolve, validate, softener_for
from wrapping.exceptions import (
    WrappingError,
    ConfigError,
    MutuallyExclusiveListsError,
    HostError,
    KeymapNotFoundError,
    SyntaxQueryError,
)
from wrapping.heuristic import HeuristicEngine
from wrapping.host import EditorHost, InMemoryHost
from wrapping.integration import Wrapping, setup
from wrapping.schemas import WrapMode, SyntaxCountResult, SoftenerFactor, SoftenerOverride
from wrapping.state import WrapModeStateMachine, BufferWrapState
from wrapping.syntax import SyntaxQueryCounter

__all__ = [
    "__version__",
    "WrappingConfig",
    "resolve",
    "validate",
    "softener_for",
    "WrappingError",
    "ConfigError",
    "MutuallyExclusiveListsError",
    "HostError",
    "KeymapNotFoundError",
    "SyntaxQueryError",
    "HeuristicEngine",
    "EditorHost",
    "InMemoryHost",
    "Wrapping",
    "setup",
    "WrapMode",
    "SyntaxCountResult",
    "SoftenerFactor",
    "SoftenerOverride",
    "WrapModeStateMachine",
    "BufferWrapState",
    "SyntaxQueryCounter",
]
