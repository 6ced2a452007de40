"""
Syntax-tree providers.

A provider parses buffer content into syntax trees and answers structural
queries. tree-sitter is optional: when it (or a grammar) is not installed the
provider reports itself unavailable and callers fall back to neutral results.
"""

import importlib
from typing import Any, Dict, List, Optional, Protocol, Tuple

try:
    from tree_sitter import Language, Parser, Query
    TREE_SITTER_AVAILABLE = True
except ImportError:
    TREE_SITTER_AVAILABLE = False

try:
    # py-tree-sitter >= 0.25 runs queries through a cursor object
    from tree_sitter import QueryCursor
except ImportError:
    QueryCursor = None

from wrapping.exceptions import SyntaxQueryError
from wrapping.host.ports import EditorHost
from wrapping.logging_config import logger

# Language id -> (grammar module, function returning the language pointer)
GRAMMARS: Dict[str, Tuple[str, str]] = {
    "python": ("tree_sitter_python", "language"),
    "javascript": ("tree_sitter_javascript", "language"),
    "typescript": ("tree_sitter_typescript", "language_typescript"),
    "tsx": ("tree_sitter_typescript", "language_tsx"),
    "markdown": ("tree_sitter_markdown", "language"),
}

# Filetypes whose language id differs from the filetype name
FILETYPE_LANGUAGES: Dict[str, str] = {
    "typescriptreact": "tsx",
}


class SyntaxNode(Protocol):
    type: str
    start_point: Tuple[int, int]
    end_point: Tuple[int, int]


class SyntaxTree(Protocol):
    root_node: Any


class SyntaxTreeProvider(Protocol):
    """
    Structural view of a buffer.

    `available` is decided once, when the provider is built.
    """

    available: bool

    def trees(self, buffer: int) -> List[SyntaxTree]:
        """Syntax trees for the buffer, in injection-priority order."""
        pass

    def captures(self, language: str, query: str, node: Any) -> List[SyntaxNode]:
        """Nodes captured by `query` under `node`, in document order."""
        pass

    def node_at_cursor(self, buffer: int) -> Optional[SyntaxNode]:
        pass


class UnavailableSyntaxProvider:
    """Stand-in used when no parsing service is installed."""

    available = False

    def trees(self, buffer: int) -> List[SyntaxTree]:
        return []

    def captures(self, language: str, query: str, node: Any) -> List[SyntaxNode]:
        return []

    def node_at_cursor(self, buffer: int) -> Optional[SyntaxNode]:
        return None


class TreeSitterProvider:
    """
    Parse host buffers with py-tree-sitter.

    Buffers are re-parsed on every call; content may have changed since the
    last one.
    """

    def __init__(self, host: EditorHost):
        self.host = host
        self.available = TREE_SITTER_AVAILABLE
        self._languages: Dict[str, Optional["Language"]] = {}
        if not self.available:
            logger.warning("tree-sitter not available, syntax queries disabled")

    def language(self, language_id: str) -> Optional["Language"]:
        """
        Load a grammar by language id.

        Caches the result, including failures, for the provider's lifetime.
        """
        if not self.available:
            return None
        if language_id in self._languages:
            return self._languages[language_id]

        lang = None
        grammar = GRAMMARS.get(language_id)
        if grammar is None:
            logger.debug(f"No tree-sitter grammar registered for '{language_id}'")
        else:
            module_name, factory = grammar
            try:
                module = importlib.import_module(module_name)
                lang = Language(getattr(module, factory)())
                logger.debug(f"Loaded tree-sitter language '{language_id}'")
            except ImportError:
                logger.debug(f"Grammar package {module_name} is not installed")

        self._languages[language_id] = lang
        return lang

    def trees(self, buffer: int) -> List[Any]:
        filetype = self.host.get_buffer_option(buffer, "filetype")
        lang = self.language(FILETYPE_LANGUAGES.get(filetype, filetype))
        if lang is None:
            return []

        parser = Parser()
        parser.language = lang
        source = "\n".join(self.host.get_lines(buffer, 0, self.host.line_count(buffer))) + "\n"
        return [parser.parse(source.encode("utf-8"))]

    def captures(self, language: str, query: str, node: Any) -> List[Any]:
        lang = self.language(language)
        if lang is None:
            return []

        try:
            compiled = Query(lang, query)
        except Exception as e:
            raise SyntaxQueryError(language, str(e)) from e

        if QueryCursor is not None:
            found = QueryCursor(compiled).captures(node)
        else:
            found = compiled.captures(node)

        if isinstance(found, dict):
            nodes = [n for group in found.values() for n in group]
        else:
            # Older releases return (node, capture_name) pairs
            nodes = [n for n, _ in found]
        return sorted(nodes, key=lambda n: (n.start_byte, n.end_byte))

    def node_at_cursor(self, buffer: int) -> Optional[Any]:
        trees = self.trees(buffer)
        if not trees:
            return None

        row, col = self.host.get_cursor(buffer)
        return trees[-1].root_node.descendant_for_point_range((row, col), (row, col))


def resolve_provider(host: EditorHost) -> SyntaxTreeProvider:
    """Return the tree-sitter provider, or the unavailable stand-in."""
    if TREE_SITTER_AVAILABLE:
        return TreeSitterProvider(host)
    logger.debug("tree-sitter not installed; syntax counts degrade to zero")
    return UnavailableSyntaxProvider()
