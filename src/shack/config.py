"""
Shack Translator - Configuration
================================

Fixed settings of the Shack dialect and its Hack output. Configuration
can come from:
- Default values (defined here)
- Environment variables (TranslatorConfig.from_env())

The defaults describe the standard Shack dialect and Hack output, and
should only be changed when the downstream Hack toolchain expects
something different (for example a different scratch register).
"""

from dataclasses import dataclass, replace
import logging
import os

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranslatorConfig:
    """
    Configuration for a translation run.

    Attributes:
        literal_prefix: Marks a numeric operand as a literal value (default: "#")
        comment_prefix: Lines starting with this are ignored (default: "//")
        declaration_marker: Switches to the variable declaration region (default: ".dec")
        code_marker: Switches to the executable region (default: ".code")
        max_literal: Largest literal accepted, Hack A-instructions are 15-bit (default: 32767)
        scratch_register: RAM slot used to preserve A during LOAD D (default: "R13")
        source_suffix: Suffix expected on input files (default: ".shk")
        output_suffix: Suffix of generated Hack files (default: ".asm")
    """

    # ═══════════════════════════════════════════════════════════════════════════
    # SOURCE DIALECT
    # ═══════════════════════════════════════════════════════════════════════════

    literal_prefix: str = "#"
    comment_prefix: str = "//"
    declaration_marker: str = ".dec"
    code_marker: str = ".code"

    # ═══════════════════════════════════════════════════════════════════════════
    # TARGET DIALECT
    # ═══════════════════════════════════════════════════════════════════════════

    max_literal: int = 32767
    scratch_register: str = "R13"

    # ═══════════════════════════════════════════════════════════════════════════
    # FILES
    # ═══════════════════════════════════════════════════════════════════════════

    source_suffix: str = ".shk"
    output_suffix: str = ".asm"

    @classmethod
    def from_env(cls) -> "TranslatorConfig":
        """
        Create TranslatorConfig from environment variables.

        Environment variables (all optional):
            SHACK_SCRATCH_REGISTER: Scratch RAM slot (e.g., "R14")
            SHACK_MAX_LITERAL: Largest accepted literal (integer)

        Returns:
            TranslatorConfig with values from environment variables
        """
        config = cls()

        if scratch := os.environ.get("SHACK_SCRATCH_REGISTER"):
            config = replace(config, scratch_register=scratch)

        if max_literal := os.environ.get("SHACK_MAX_LITERAL"):
            try:
                config = replace(config, max_literal=int(max_literal))
            except ValueError:
                logger.warning(f"Ignoring invalid SHACK_MAX_LITERAL={max_literal!r}")

        return config


DEFAULT_CONFIG = TranslatorConfig()
