"""
Tests for option resolution and validation.
"""

import json

import pytest

pytestmark = pytest.mark.fast

from wrapping.config import (
    OPTION_DEFAULTS,
    load_options_file,
    resolve,
    softener_for,
    validate,
)
from wrapping.exceptions import ConfigError, MutuallyExclusiveListsError
from wrapping.schemas import SoftenerFactor, SoftenerOverride, WrapMode


class TestResolve:
    """Tests for merging user options over defaults."""

    def test_defaults(self):
        config = resolve()
        assert config.softener == {"default": 1.0, "gitcommit": False}
        assert config.create_commands is True
        assert config.create_keymaps is True
        assert config.auto_set_mode_heuristically is True
        assert config.auto_set_mode_filetype_allowlist == frozenset(
            {"asciidoc", "gitcommit", "mail", "markdown", "text", "tex"}
        )
        assert config.auto_set_mode_filetype_denylist == frozenset()

    def test_partial_softener_keeps_siblings(self):
        config = resolve({"softener": {"default": 1.5}})
        assert config.softener["default"] == 1.5
        assert config.softener["gitcommit"] is False

    def test_new_filetype_softener_added(self):
        config = resolve({"softener": {"markdown": True, "rst": 2}})
        assert config.softener["markdown"] is True
        assert config.softener["rst"] == 2.0
        assert config.softener["default"] == 1.0

    def test_lists_replace_defaults(self):
        config = resolve({"auto_set_mode_filetype_allowlist": ["rst"]})
        assert config.auto_set_mode_filetype_allowlist == frozenset({"rst"})

    def test_defaults_not_mutated(self):
        resolve({"softener": {"default": 3.0}, "create_commands": False})
        assert OPTION_DEFAULTS["softener"]["default"] == 1.0
        assert OPTION_DEFAULTS["create_commands"] is True

    def test_config_is_frozen(self):
        config = resolve()
        with pytest.raises(Exception):
            config.create_commands = False

    def test_unknown_option_rejected(self):
        with pytest.raises(ConfigError, match="create_comands"):
            resolve({"create_comands": False})

    def test_bad_softener_value_rejected(self):
        with pytest.raises(ConfigError, match="softener"):
            resolve({"softener": {"markdown": "yes"}})

    def test_boolean_default_softener_rejected(self):
        with pytest.raises(ConfigError):
            resolve({"softener": {"default": True}})


class TestValidate:
    """Tests for the allowlist/denylist constraint."""

    def test_defaults_are_valid(self):
        config = resolve()
        assert validate(config) is config

    def test_denylist_alone_is_valid(self):
        config = resolve({
            "auto_set_mode_filetype_allowlist": [],
            "auto_set_mode_filetype_denylist": ["python"],
        })
        assert validate(config) is config

    def test_both_lists_conflict(self):
        # The default allowlist is still populated
        config = resolve({"auto_set_mode_filetype_denylist": ["python"]})
        with pytest.raises(MutuallyExclusiveListsError) as exc_info:
            validate(config)
        assert exc_info.value.denylist == ["python"]
        assert "mutually exclusive" in str(exc_info.value)

    def test_conflict_is_a_config_error(self):
        config = resolve({"auto_set_mode_filetype_denylist": ["python"]})
        with pytest.raises(ConfigError):
            validate(config)


class TestSoftenerFor:
    """Tests for the softener lookup."""

    def test_falls_back_to_default_factor(self):
        softener = softener_for(resolve(), "markdown")
        assert softener == SoftenerFactor(value=1.0)

    def test_gitcommit_forces_hard(self):
        softener = softener_for(resolve(), "gitcommit")
        assert isinstance(softener, SoftenerOverride)
        assert softener.mode is WrapMode.HARD

    def test_true_forces_soft(self):
        softener = softener_for(resolve({"softener": {"text": True}}), "text")
        assert softener.mode is WrapMode.SOFT

    def test_filetype_factor(self):
        softener = softener_for(resolve({"softener": {"tex": 0.5}}), "tex")
        assert softener == SoftenerFactor(value=0.5)


class TestLoadOptionsFile:
    """Tests for reading options from JSON."""

    def test_load(self, tmp_path):
        path = tmp_path / "wrapping.json"
        path.write_text(json.dumps({"softener": {"default": 2.0}}))
        assert load_options_file(path) == {"softener": {"default": 2.0}}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            load_options_file(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "wrapping.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="not valid JSON"):
            load_options_file(path)

    def test_non_object(self, tmp_path):
        path = tmp_path / "wrapping.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            load_options_file(path)
