"""
Per-buffer wrap mode state machine.

Soft mode flows long lines at the window edge: textwidth is pushed out of
the way, 'wrap' is on, and <Up>/<Down> move by display line. Hard mode
restores the textwidth soft mode replaced and turns 'wrap' off.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from wrapping.exceptions import HostError, KeymapNotFoundError
from wrapping.host.ports import EditorHost
from wrapping.logging_config import logger
from wrapping.schemas import WrapMode

# Effectively disables textwidth. 0 would make gq fall back to 79 columns.
VERY_LONG_TEXTWIDTH_FOR_SOFT = 999999

# Buffer-local normal-mode mappings installed in soft mode
DISPLAY_LINE_KEYMAPS = {
    "<Up>": "g<Up>",
    "<Down>": "g<Down>",
}


@dataclass
class BufferWrapState:
    """
    Wrap state of one buffer.

    saved_textwidth is set only while in soft mode, except after a failed
    soft entry: the mode is back to UNSET but the value is kept so a retry
    restores the original textwidth.
    """
    mode: WrapMode = WrapMode.UNSET
    saved_textwidth: Optional[int] = None
    keymaps_installed: bool = False


class WrapModeStateMachine:
    """
    Owns BufferWrapState for every buffer and applies mode transitions.

    Entering the mode a buffer is already in is a no-op. The mode tag is
    written last, after the host side effects it stands for.
    """

    def __init__(self, host: EditorHost):
        self.host = host
        self._states: Dict[int, BufferWrapState] = {}

    def state_for(self, buffer: int) -> BufferWrapState:
        """Return the buffer's state, creating it on first access."""
        state = self._states.get(buffer)
        if state is None:
            state = BufferWrapState()
            self._states[buffer] = state
        return state

    def forget(self, buffer: int) -> None:
        """Drop the state of a destroyed buffer."""
        if self._states.pop(buffer, None) is not None:
            logger.debug(f"Discarded wrap state for buffer {buffer}")

    def current_mode(self, buffer: Optional[int] = None) -> Optional[WrapMode]:
        """The buffer's mode, or None if no mode has been set yet."""
        if buffer is None:
            buffer = self.host.current_buffer()
        state = self._states.get(buffer)
        if state is None or state.mode is WrapMode.UNSET:
            return None
        return state.mode

    def saved_textwidth(self, buffer: int) -> Optional[int]:
        state = self._states.get(buffer)
        return state.saved_textwidth if state is not None else None

    def enter_soft(self, buffer: Optional[int] = None) -> None:
        if buffer is None:
            buffer = self.host.current_buffer()
        state = self.state_for(buffer)
        if state.mode is WrapMode.SOFT:
            return

        try:
            prior_textwidth = state.saved_textwidth
            if prior_textwidth is None:
                prior_textwidth = self.host.get_buffer_option(buffer, "textwidth")
            self.host.set_buffer_option(buffer, "textwidth", VERY_LONG_TEXTWIDTH_FOR_SOFT)
            state.saved_textwidth = prior_textwidth

            self.host.set_buffer_option(buffer, "wrap", True)

            for lhs, rhs in DISPLAY_LINE_KEYMAPS.items():
                self.host.set_keymap(buffer, "n", lhs, rhs)
            state.keymaps_installed = True
        except HostError as e:
            self._abandon(buffer, state, "soft", e)
            raise

        state.mode = WrapMode.SOFT
        logger.debug(f"Buffer {buffer}: soft wrap mode (saved textwidth={prior_textwidth})")

    def enter_hard(self, buffer: Optional[int] = None) -> None:
        if buffer is None:
            buffer = self.host.current_buffer()
        state = self.state_for(buffer)
        if state.mode is WrapMode.HARD:
            return

        try:
            if state.saved_textwidth is not None:
                self.host.set_buffer_option(buffer, "textwidth", state.saved_textwidth)
                state.saved_textwidth = None

            self.host.set_buffer_option(buffer, "wrap", False)

            if state.keymaps_installed:
                for lhs in DISPLAY_LINE_KEYMAPS:
                    try:
                        self.host.del_keymap(buffer, "n", lhs)
                    except KeymapNotFoundError:
                        logger.debug(f"Buffer {buffer}: mapping {lhs} already removed")
            state.keymaps_installed = False
        except HostError as e:
            self._abandon(buffer, state, "hard", e)
            raise

        state.mode = WrapMode.HARD
        logger.debug(f"Buffer {buffer}: hard wrap mode")

    def toggle(self, buffer: Optional[int] = None) -> None:
        """Switch to soft mode unless already soft; an unset buffer goes soft."""
        if buffer is None:
            buffer = self.host.current_buffer()
        if self.current_mode(buffer) is WrapMode.SOFT:
            self.enter_hard(buffer)
        else:
            self.enter_soft(buffer)

    def _abandon(self, buffer: int, state: BufferWrapState, target: str, error: Exception) -> None:
        # Half-applied transition: unset lets either entry run in full next time
        state.mode = WrapMode.UNSET
        logger.error(f"Buffer {buffer}: entering {target} wrap mode failed: {error}")
