"""
Syntax-aware region counting.

Sums the lines and characters covered by the matches of a structural query,
and tells whether the cursor sits in a comment. Both are signals for
weighting wrap decisions by comment-vs-code content; when no parsing service
is installed they degrade to zero/False.
"""

from typing import Optional

from wrapping.host.ports import EditorHost
from wrapping.logging_config import logger
from wrapping.schemas import SyntaxCountResult
from wrapping.syntax.provider import SyntaxTreeProvider, resolve_provider

# "description" covers doc-string nodes in grammars that label them apart from comments
COMMENT_NODE_TYPES = frozenset({"comment", "description"})


class SyntaxQueryCounter:
    """
    Aggregate query matches over the buffer's syntax tree.

    Nothing is cached; every call re-reads the buffer.
    """

    def __init__(self, host: EditorHost, provider: Optional[SyntaxTreeProvider] = None):
        self.host = host
        self.provider = provider if provider is not None else resolve_provider(host)

    def count_query_matches(
        self,
        language: str,
        query: str,
        buffer: Optional[int] = None,
    ) -> SyntaxCountResult:
        """
        Count lines and characters inside the regions captured by `query`.

        Args:
            language: Language id the query is written for
            query: tree-sitter query source
            buffer: Buffer handle (default: current buffer)

        Returns:
            SyntaxCountResult; zero when no provider or tree is available

        Raises:
            SyntaxQueryError: If the query does not compile for `language`
        """
        if not self.provider.available:
            return SyntaxCountResult()

        if buffer is None:
            buffer = self.host.current_buffer()

        trees = self.provider.trees(buffer)
        if not trees:
            logger.debug(f"No syntax tree for buffer {buffer}")
            return SyntaxCountResult()

        # Injected languages add trees; the last one has the highest priority
        root = trees[-1].root_node

        total_lines = 0
        total_chars = 0
        line_count = self.host.line_count(buffer)
        view = self.host.save_view(buffer)
        try:
            for node in self.provider.captures(language, query, root):
                row1 = node.start_point[0]
                row2 = node.end_point[0]

                if row2 == row1:
                    # Single-line matches (e.g. markdown) omit the line terminator
                    row2 = row1 + 1

                # The parser sees a trailing newline the buffer does not have
                row1 = min(row1, line_count)
                row2 = min(row2, line_count)
                if row2 <= row1:
                    continue

                total_lines += row2 - row1
                total_chars += sum(
                    len(line.encode("utf-8"))
                    for line in self.host.get_lines(buffer, row1, row2)
                )
        finally:
            self.host.restore_view(buffer, view)

        logger.debug(
            f"Query matched {total_lines} lines / {total_chars} chars in buffer {buffer}"
        )
        return SyntaxCountResult(lines=total_lines, chars=total_chars)

    def cursor_in_comment(self, buffer: Optional[int] = None) -> bool:
        """True if the node under the cursor is a comment or doc-string node."""
        if not self.provider.available:
            return False

        if buffer is None:
            buffer = self.host.current_buffer()

        node = self.provider.node_at_cursor(buffer)
        return node is not None and node.type in COMMENT_NODE_TYPES
