"""
In-process editor host.

Implements every EditorHost operation on plain Python data so the plugin can
run outside an editor: the CLI loads files into it, and the test suite drives
commands, keymaps and events through it.
"""

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple

from wrapping.exceptions import HostError, KeymapNotFoundError
from wrapping.host.ports import BUF_WIN_ENTER, BUF_WIPEOUT, EventCallback, View
from wrapping.logging_config import logger
from wrapping.schemas import LanguageClientInfo

# Buffer-local options; everything else lives in the global table only.
BUFFER_OPTIONS = ("filetype", "buftype", "textwidth", "wrap")

GLOBAL_DEFAULTS: Dict[str, Any] = {
    "textwidth": 0,
    "wrap": True,
    "linebreak": False,
}


@dataclass
class MemoryBuffer:
    """A buffer held by InMemoryHost."""
    handle: int
    lines: List[str]
    options: Dict[str, Any]
    path: Optional[Path] = None
    cursor: Tuple[int, int] = (0, 0)
    topline: int = 0
    keymaps: Dict[Tuple[str, str], str] = field(default_factory=dict)
    clients: List[LanguageClientInfo] = field(default_factory=list)
    size_override: Optional[int] = None


class InMemoryHost:
    """
    EditorHost backed by dictionaries.

    Buffer options not given at creation inherit the global value, the way
    an editor copies global options into a new buffer.
    """

    def __init__(self, **global_options: Any):
        self.global_options: Dict[str, Any] = {**GLOBAL_DEFAULTS, **global_options}
        self.buffers: Dict[int, MemoryBuffer] = {}
        self.commands: Dict[str, Callable[[], None]] = {}
        self.command_descriptions: Dict[str, str] = {}
        self.global_keymaps: Dict[Tuple[str, str], Callable[[], None]] = {}
        self.subscriptions: Dict[str, List[EventCallback]] = {}
        self.notifications: List[Tuple[str, str]] = []
        self._current: Optional[int] = None
        self._next_handle = 1

    # ------------------------------------------------------------------
    # Buffer management
    # ------------------------------------------------------------------

    def add_buffer(
        self,
        lines: List[str],
        filetype: str = "",
        buftype: str = "",
        textwidth: Optional[int] = None,
        path: Optional[Path] = None,
        file_size: Optional[int] = None,
    ) -> int:
        """
        Create a buffer and make it current.

        Args:
            lines: Buffer content, one string per line without terminators
            filetype: Filetype option
            buftype: Buffer type; empty for ordinary file buffers
            textwidth: Buffer textwidth (default: global textwidth)
            path: Backing file, used by file_size()
            file_size: Fixed size reported by file_size()

        Returns:
            The new buffer handle
        """
        handle = self._next_handle
        self._next_handle += 1

        options = {
            "filetype": filetype,
            "buftype": buftype,
            "textwidth": self.global_options["textwidth"] if textwidth is None else textwidth,
            "wrap": self.global_options["wrap"],
        }
        self.buffers[handle] = MemoryBuffer(
            handle=handle,
            lines=list(lines) or [""],
            options=options,
            path=path,
            size_override=file_size,
        )
        self._current = handle
        logger.debug(f"Created buffer {handle} (filetype={filetype!r}, {len(lines)} lines)")
        return handle

    def open_file(self, path: Path, filetype: str = "", textwidth: Optional[int] = None) -> int:
        """Load a file from disk into a new buffer."""
        try:
            text = Path(path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise HostError("open_file", str(e)) from e

        lines = text.split("\n")
        if len(lines) > 1 and lines[-1] == "":
            # Trailing newline terminates the last line, it does not start a new one
            lines.pop()
        return self.add_buffer(lines, filetype=filetype, textwidth=textwidth, path=Path(path))

    def set_current(self, buffer: int) -> None:
        self._buffer(buffer, "set_current")
        self._current = buffer

    def set_cursor(self, buffer: int, row: int, col: int = 0) -> None:
        self._buffer(buffer, "set_cursor").cursor = (row, col)

    def attach_client(self, buffer: int, client: LanguageClientInfo) -> None:
        self._buffer(buffer, "attach_client").clients.append(client)

    def keymap(self, buffer: int, mode: str, lhs: str) -> Optional[str]:
        """Return the buffer-local mapping for lhs, if any."""
        return self._buffer(buffer, "keymap").keymaps.get((mode, lhs))

    def enter_window(self, buffer: int) -> None:
        """Display a buffer: make it current and fire BufWinEnter."""
        self.set_current(buffer)
        self.emit(BUF_WIN_ENTER, buffer)

    def wipe_buffer(self, buffer: int) -> None:
        """Delete a buffer, firing BufWipeout first."""
        self._buffer(buffer, "wipe_buffer")
        self.emit(BUF_WIPEOUT, buffer)
        del self.buffers[buffer]
        if self._current == buffer:
            self._current = next(iter(self.buffers), None)

    def emit(self, event: str, buffer: int) -> None:
        for callback in list(self.subscriptions.get(event, [])):
            callback(buffer)

    def run_command(self, name: str) -> None:
        if name not in self.commands:
            raise HostError("run_command", f"unknown command {name}")
        self.commands[name]()

    def press(self, mode: str, lhs: str) -> None:
        """Invoke a global mapping the plugin registered."""
        if (mode, lhs) not in self.global_keymaps:
            raise HostError("press", f"no {mode}-mode mapping for {lhs}")
        self.global_keymaps[(mode, lhs)]()

    # ------------------------------------------------------------------
    # EditorHost operations
    # ------------------------------------------------------------------

    def current_buffer(self) -> int:
        if self._current is None:
            raise HostError("current_buffer", "no buffer is open")
        return self._current

    def get_buffer_option(self, buffer: int, name: str) -> Any:
        buf = self._buffer(buffer, "get_buffer_option")
        if name not in BUFFER_OPTIONS:
            raise HostError("get_buffer_option", f"unknown buffer option {name}", buffer)
        return buf.options[name]

    def set_buffer_option(self, buffer: int, name: str, value: Any) -> None:
        buf = self._buffer(buffer, "set_buffer_option")
        if name not in BUFFER_OPTIONS:
            raise HostError("set_buffer_option", f"unknown buffer option {name}", buffer)
        buf.options[name] = value

    def get_global_option(self, name: str) -> Any:
        if name not in self.global_options:
            raise HostError("get_global_option", f"unknown option {name}")
        return self.global_options[name]

    def set_global_option(self, name: str, value: Any) -> None:
        self.global_options[name] = value

    def set_keymap(self, buffer: int, mode: str, lhs: str, rhs: str) -> None:
        self._buffer(buffer, "set_keymap").keymaps[(mode, lhs)] = rhs

    def del_keymap(self, buffer: int, mode: str, lhs: str) -> None:
        buf = self._buffer(buffer, "del_keymap")
        if (mode, lhs) not in buf.keymaps:
            raise KeymapNotFoundError(buffer, mode, lhs)
        del buf.keymaps[(mode, lhs)]

    def set_global_keymap(self, mode: str, lhs: str, callback: Callable[[], None]) -> None:
        self.global_keymaps[(mode, lhs)] = callback

    def create_command(self, name: str, callback: Callable[[], None], desc: str = "") -> None:
        self.commands[name] = callback
        self.command_descriptions[name] = desc

    def subscribe(self, event: str, callback: EventCallback) -> None:
        self.subscriptions.setdefault(event, []).append(callback)

    def notify(self, message: str, level: str = "info") -> None:
        self.notifications.append((level, message))

    def save_view(self, buffer: int) -> View:
        buf = self._buffer(buffer, "save_view")
        return {"cursor": buf.cursor, "topline": buf.topline}

    def restore_view(self, buffer: int, view: View) -> None:
        buf = self._buffer(buffer, "restore_view")
        buf.cursor = view["cursor"]
        buf.topline = view["topline"]

    def count_matching_lines(self, buffer: int, pattern: str) -> int:
        buf = self._buffer(buffer, "count_matching_lines")
        regex = re.compile(pattern)

        count = 0
        for row, line in enumerate(buf.lines):
            if regex.search(line):
                count += 1
                # Like :global, leave the cursor on the last matching line
                buf.cursor = (row, 0)
                buf.topline = row
        return count

    def language_clients(self, buffer: int) -> List[LanguageClientInfo]:
        return list(self._buffer(buffer, "language_clients").clients)

    def file_size(self, buffer: int) -> int:
        buf = self._buffer(buffer, "file_size")
        if buf.size_override is not None:
            return buf.size_override
        if buf.path is not None:
            return buf.path.stat().st_size if buf.path.exists() else -1
        return sum(len(line.encode("utf-8")) + 1 for line in buf.lines)

    def line_count(self, buffer: int) -> int:
        return len(self._buffer(buffer, "line_count").lines)

    def get_lines(self, buffer: int, start: int, end: int) -> List[str]:
        buf = self._buffer(buffer, "get_lines")
        if start < 0 or end > len(buf.lines) or start > end:
            raise HostError("get_lines", f"index out of bounds: [{start}, {end})", buffer)
        return buf.lines[start:end]

    def get_cursor(self, buffer: int) -> Tuple[int, int]:
        return self._buffer(buffer, "get_cursor").cursor

    def _buffer(self, buffer: int, operation: str) -> MemoryBuffer:
        try:
            return self.buffers[buffer]
        except KeyError:
            raise HostError(operation, "invalid buffer", buffer) from None
