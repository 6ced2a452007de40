from typing import Any, Callable, Dict, List, Protocol, Tuple

from wrapping.schemas import LanguageClientInfo

# Host events the plugin subscribes to. BUF_WIN_ENTER fires after modelines
# and filetype scripts have run, so buffer options are settled by then.
BUF_WIN_ENTER = "BufWinEnter"
BUF_WIPEOUT = "BufWipeout"

View = Dict[str, Any]
EventCallback = Callable[[int], None]


class EditorHost(Protocol):
    """
    Operations the plugin consumes from the editor.

    Buffers are identified by integer handles. Rows are 0-based, line ranges
    are end-exclusive. Any operation may raise HostError when the buffer is
    gone.
    """

    def current_buffer(self) -> int:
        pass

    def get_buffer_option(self, buffer: int, name: str) -> Any:
        pass

    def set_buffer_option(self, buffer: int, name: str, value: Any) -> None:
        pass

    def get_global_option(self, name: str) -> Any:
        pass

    def set_global_option(self, name: str, value: Any) -> None:
        pass

    def set_keymap(self, buffer: int, mode: str, lhs: str, rhs: str) -> None:
        pass

    def del_keymap(self, buffer: int, mode: str, lhs: str) -> None:
        """Remove a buffer-local mapping; raises KeymapNotFoundError if absent."""
        pass

    def set_global_keymap(self, mode: str, lhs: str, callback: Callable[[], None]) -> None:
        pass

    def create_command(self, name: str, callback: Callable[[], None], desc: str = "") -> None:
        pass

    def subscribe(self, event: str, callback: EventCallback) -> None:
        pass

    def notify(self, message: str, level: str = "info") -> None:
        pass

    def save_view(self, buffer: int) -> View:
        pass

    def restore_view(self, buffer: int, view: View) -> None:
        pass

    def count_matching_lines(self, buffer: int, pattern: str) -> int:
        """Count lines matching a regex; may move the cursor."""
        pass

    def language_clients(self, buffer: int) -> List[LanguageClientInfo]:
        pass

    def file_size(self, buffer: int) -> int:
        """Size in bytes of the file backing the buffer, -1 if it does not exist."""
        pass

    def line_count(self, buffer: int) -> int:
        pass

    def get_lines(self, buffer: int, start: int, end: int) -> List[str]:
        pass

    def get_cursor(self, buffer: int) -> Tuple[int, int]:
        pass
