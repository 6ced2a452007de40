"""
Syntax-aware signals for wrap decisions.

Usage:
    from wrapping.syntax import SyntaxQueryCounter

    counter = SyntaxQueryCounter(host)
    counter.count_query_matches("python", "(comment) @c")
    counter.cursor_in_comment()
"""

from .counter import SyntaxQueryCounter, COMMENT_NODE_TYPES
from .provider import (
    SyntaxTreeProvider,
    TreeSitterProvider,
    UnavailableSyntaxProvider,
    resolve_provider,
    TREE_SITTER_AVAILABLE,
)

__all__ = [
    "SyntaxQueryCounter",
    "COMMENT_NODE_TYPES",
    "SyntaxTreeProvider",
    "TreeSitterProvider",
    "UnavailableSyntaxProvider",
    "resolve_provider",
    "TREE_SITTER_AVAILABLE",
]
