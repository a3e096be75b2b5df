"""
Shack - Shack to Hack Assembly Translator
=========================================

Shack is a small assembly dialect for the Hack computer with declared
variables, named labels and two-register instructions (LOAD, STO, ADDD,
JEQ, ...). This package translates it into Hack assembly, which the
standard Hack assembler then turns into machine code.

Quick Start
-----------
    >>> from shack import translate
    >>> result = translate(".dec\\nX\\n.code\\nLOAD A #1\\nSTO A X")
    >>> result.output
    ['@1', 'D=A', '@X', 'M=D']

Or use the command-line tool:
    $ sham program.shk          # writes program.asm
"""

__version__ = "1.0.0"

from shack.config import DEFAULT_CONFIG, TranslatorConfig
from shack.errors import (
    ShackError,
    TranslationError,
    ErrorKind,
    SourceLocation,
    DiagnosticCollector,
    IllegalCharacterError,
    IllegalInstructionError,
    IllegalOperandError,
    WrongOperandCountError,
    LabelAlreadyDeclaredError,
    InstructionAsLabelError,
    LabelNotFoundError,
    VariableNotFoundError,
    InvalidJumpTargetError,
)
from shack.translator import Translator, TranslationResult, translate, translate_file

__all__ = [
    "__version__",
    # Configuration
    "DEFAULT_CONFIG",
    "TranslatorConfig",
    # Translator
    "Translator",
    "TranslationResult",
    "translate",
    "translate_file",
    # Errors
    "ShackError",
    "TranslationError",
    "ErrorKind",
    "SourceLocation",
    "DiagnosticCollector",
    "IllegalCharacterError",
    "IllegalInstructionError",
    "IllegalOperandError",
    "WrongOperandCountError",
    "LabelAlreadyDeclaredError",
    "InstructionAsLabelError",
    "LabelNotFoundError",
    "VariableNotFoundError",
    "InvalidJumpTargetError",
]
