# =============================================================================
# test_config.py - Translator Configuration Tests
# =============================================================================

import dataclasses

import pytest

from shack.config import DEFAULT_CONFIG, TranslatorConfig


class TestTranslatorConfig:
    """Test defaults and environment overrides."""

    def test_defaults(self):
        assert DEFAULT_CONFIG.literal_prefix == "#"
        assert DEFAULT_CONFIG.comment_prefix == "//"
        assert DEFAULT_CONFIG.declaration_marker == ".dec"
        assert DEFAULT_CONFIG.code_marker == ".code"
        assert DEFAULT_CONFIG.max_literal == 32767
        assert DEFAULT_CONFIG.scratch_register == "R13"
        assert DEFAULT_CONFIG.source_suffix == ".shk"
        assert DEFAULT_CONFIG.output_suffix == ".asm"

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.max_literal = 1

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("SHACK_SCRATCH_REGISTER", "R15")
        monkeypatch.setenv("SHACK_MAX_LITERAL", "1023")
        config = TranslatorConfig.from_env()
        assert config.scratch_register == "R15"
        assert config.max_literal == 1023

    def test_from_env_ignores_invalid_integer(self, monkeypatch):
        monkeypatch.delenv("SHACK_SCRATCH_REGISTER", raising=False)
        monkeypatch.setenv("SHACK_MAX_LITERAL", "lots")
        assert TranslatorConfig.from_env() == DEFAULT_CONFIG
