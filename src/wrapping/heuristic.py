"""
Heuristic wrap mode selection.

Decision order, first definitive answer wins:

1. Filetype gating against the allow/deny lists (decide() only)
2. Boolean softener for the filetype forces soft (true) or hard (false)
3. A language client offering definitions or signature help means source
   code, so hard
4. Buffer textwidth differing from the global one was set on purpose
   (modeline, autocmd, ftplugin), so hard
5. Average non-blank line length times the softener factor below the
   reference textwidth means hard, otherwise soft
"""

from typing import Optional

from wrapping.config import WrappingConfig, softener_for
from wrapping.host.ports import EditorHost
from wrapping.logging_config import logger
from wrapping.schemas import SoftenerOverride, WrapMode
from wrapping.state import WrapModeStateMachine

BLANK_LINE_PATTERN = r"^\s*$"


class HeuristicEngine:
    """
    Chooses and applies a wrap mode for a buffer.

    Plain synchronous calls: usable from the BufWinEnter subscription or
    directly from a command.
    """

    def __init__(self, host: EditorHost, config: WrappingConfig, machine: WrapModeStateMachine):
        self.host = host
        self.config = config
        self.machine = machine

    def decide(self, buffer: Optional[int] = None) -> Optional[WrapMode]:
        """
        Gate on the filetype lists, then apply the heuristic.

        Returns:
            The mode applied, or None if the buffer was skipped
        """
        if buffer is None:
            buffer = self.host.current_buffer()

        filetype = self.host.get_buffer_option(buffer, "filetype")
        if not self.filetype_enabled(filetype):
            logger.debug(f"Buffer {buffer}: filetype {filetype!r} not enabled for auto wrap mode")
            return None
        return self.apply_heuristic(buffer)

    def filetype_enabled(self, filetype: str) -> bool:
        denylist = self.config.auto_set_mode_filetype_denylist
        if filetype in denylist:
            return False
        return bool(denylist) or filetype in self.config.auto_set_mode_filetype_allowlist

    def apply_heuristic(self, buffer: Optional[int] = None) -> Optional[WrapMode]:
        """
        Choose a mode regardless of filetype lists and enter it.

        Returns:
            The mode applied, or None for non-ordinary buffers
        """
        if buffer is None:
            buffer = self.host.current_buffer()

        mode = self.choose_mode(buffer)
        if mode is WrapMode.SOFT:
            self.machine.enter_soft(buffer)
        elif mode is WrapMode.HARD:
            self.machine.enter_hard(buffer)
        return mode

    def choose_mode(self, buffer: int) -> Optional[WrapMode]:
        """Compute the mode the buffer should be in, without applying it."""
        if self.host.get_buffer_option(buffer, "buftype") != "":
            # Only regular file buffers are handled
            return None

        filetype = self.host.get_buffer_option(buffer, "filetype")
        softener = softener_for(self.config, filetype)

        if isinstance(softener, SoftenerOverride):
            logger.debug(f"Buffer {buffer}: softener override for {filetype!r} -> {softener.mode.value}")
            return softener.mode

        if self.likely_nontextual_language(buffer):
            logger.debug(f"Buffer {buffer}: language client offers code intelligence -> hard")
            return WrapMode.HARD

        if self.likely_textwidth_set_deliberately(buffer):
            logger.debug(f"Buffer {buffer}: textwidth set deliberately -> hard")
            return WrapMode.HARD

        average = self.average_line_length(buffer)
        if average is None:
            logger.debug(f"Buffer {buffer}: no non-blank lines -> hard")
            return WrapMode.HARD

        reference = self.hard_textwidth(buffer)

        scaled = average * softener.value
        mode = WrapMode.HARD if scaled < reference else WrapMode.SOFT
        logger.debug(
            f"Buffer {buffer}: average line length {average:.1f} x {softener.value} "
            f"vs textwidth {reference} -> {mode.value}"
        )
        return mode

    def likely_nontextual_language(self, buffer: int) -> bool:
        return any(client.is_code_intelligence for client in self.host.language_clients(buffer))

    def hard_textwidth(self, buffer: int) -> int:
        """The buffer's own textwidth, looking past the soft mode override."""
        saved = self.machine.saved_textwidth(buffer)
        if saved is not None:
            return saved
        return self.host.get_buffer_option(buffer, "textwidth")

    def likely_textwidth_set_deliberately(self, buffer: int) -> bool:
        # Compares the saved textwidth while the buffer is soft, not the live
        # override, so re-running on a soft buffer does not read as deliberate
        textwidth_global = self.host.get_global_option("textwidth")
        textwidth_buffer = self.hard_textwidth(buffer)
        return textwidth_global != textwidth_buffer

    def count_blank_lines(self, buffer: int) -> int:
        view = self.host.save_view(buffer)
        try:
            return self.host.count_matching_lines(buffer, BLANK_LINE_PATTERN)
        finally:
            self.host.restore_view(buffer, view)

    def average_line_length(self, buffer: int) -> Optional[float]:
        """
        File size divided by the number of non-blank lines.

        Returns None when every line is blank.
        """
        nonblank = self.host.line_count(buffer) - self.count_blank_lines(buffer)
        if nonblank <= 0:
            return None

        # Unsaved files report -1
        file_size = max(self.host.file_size(buffer), 0)
        return file_size / nonblank
