"""
Editor integration: commands, keymaps and the auto-heuristic subscription.
"""

from typing import Any, Dict, Optional

from wrapping.config import WrappingConfig, resolve, validate
from wrapping.exceptions import MutuallyExclusiveListsError
from wrapping.heuristic import HeuristicEngine
from wrapping.host.ports import BUF_WIN_ENTER, BUF_WIPEOUT, EditorHost
from wrapping.logging_config import logger
from wrapping.schemas import WrapMode
from wrapping.state import WrapModeStateMachine

# Normal-mode mappings, in unimpaired style
SOFT_WRAP_KEYMAP = "[ow"
HARD_WRAP_KEYMAP = "]ow"
TOGGLE_WRAP_KEYMAP = "yow"


class Wrapping:
    """
    Handle returned by setup().

    Exposes the manual operations on the current buffer.
    """

    def __init__(self, host: EditorHost, config: WrappingConfig):
        self.host = host
        self.config = config
        self.machine = WrapModeStateMachine(host)
        self.engine = HeuristicEngine(host, config, self.machine)
        self.auto_enabled = False

    def soft_wrap_mode(self) -> None:
        self.machine.enter_soft()

    def hard_wrap_mode(self) -> None:
        self.machine.enter_hard()

    def toggle_wrap_mode(self) -> None:
        self.machine.toggle()

    def set_mode_heuristically(self) -> Optional[WrapMode]:
        return self.engine.apply_heuristic()

    def get_current_mode(self) -> Optional[WrapMode]:
        return self.machine.current_mode()

    def _on_buf_win_enter(self, buffer: int) -> None:
        self.engine.decide(buffer)


def setup(host: EditorHost, options: Optional[Dict[str, Any]] = None) -> Wrapping:
    """
    Configure the plugin on a host.

    A conflicting allowlist/denylist is reported as a warning and leaves the
    automatic heuristic off; commands and keymaps are still registered.

    Args:
        host: Editor host
        options: User options, merged over the defaults

    Returns:
        Wrapping handle

    Raises:
        ConfigError: If an option is unknown or has the wrong type
    """
    config = resolve(options)
    plugin = Wrapping(host, config)

    auto = config.auto_set_mode_heuristically
    try:
        validate(config)
    except MutuallyExclusiveListsError as e:
        logger.warning(str(e))
        host.notify(str(e), "warning")
        auto = False

    host.set_global_option("linebreak", True)
    host.set_global_option("wrap", False)

    if config.create_commands:
        host.create_command("SoftWrapMode", plugin.soft_wrap_mode, desc="Set wrap mode to 'soft'")
        host.create_command("HardWrapMode", plugin.hard_wrap_mode, desc="Set wrap mode to 'hard'")
        host.create_command("ToggleWrapMode", plugin.toggle_wrap_mode, desc="Toggle wrap mode")
        host.create_command(
            "SetWrapModeHeuristically",
            plugin.set_mode_heuristically,
            desc="Set wrap mode using the heuristic",
        )

    if config.create_keymaps:
        host.set_global_keymap("n", SOFT_WRAP_KEYMAP, plugin.soft_wrap_mode)
        host.set_global_keymap("n", HARD_WRAP_KEYMAP, plugin.hard_wrap_mode)
        host.set_global_keymap("n", TOGGLE_WRAP_KEYMAP, plugin.toggle_wrap_mode)

    if auto:
        # BufWinEnter fires after modelines are processed, so deliberate
        # textwidth settings are already visible
        host.subscribe(BUF_WIN_ENTER, plugin._on_buf_win_enter)
    plugin.auto_enabled = auto

    host.subscribe(BUF_WIPEOUT, plugin.machine.forget)

    logger.debug(
        f"wrapping set up (commands={config.create_commands}, "
        f"keymaps={config.create_keymaps}, auto={auto})"
    )
    return plugin
