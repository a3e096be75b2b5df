"""
Shack to Hack Translator
========================

This package translates programs written in Shack, a small
line-oriented assembly dialect with declared variables and named
labels, into Hack assembly.

Main Components
---------------
- **Translator**: Two-pass driver that orchestrates the translation
- **SymbolTable**: Variable and label namespaces
- **classify**: Line classifier (markers, declarations, labels, instructions)
- **DestinationResolver**: Resolves operands to numbers or symbols
- **InstructionEncoder**: Emits Hack lines per instruction category
- **templates**: The fixed Shack instruction set and Hack fragments

Example Usage
-------------
>>> from shack.translator import translate
>>> result = translate('''
... .dec
... COUNT
... .code
... loop:
... LOAD D COUNT
... JEQ loop
... ''')
>>> result.output[0]
'(loop)'
"""

from shack.translator.translator import (
    Translator,
    TranslationResult,
    translate,
    translate_file,
)
from shack.translator.symbols import Symbol, SymbolKind, SymbolTable
from shack.translator.classifier import (
    ClassifiedLine,
    LineKind,
    check_identifier,
    classify,
    sanitize,
)
from shack.translator.resolver import Destination, DestinationResolver
from shack.translator.encoder import InstructionEncoder
from shack.translator.templates import InstructionCategory, MNEMONICS

__all__ = [
    # Main class and functions
    "Translator",
    "TranslationResult",
    "translate",
    "translate_file",
    # Symbols
    "Symbol",
    "SymbolKind",
    "SymbolTable",
    # Classifier
    "ClassifiedLine",
    "LineKind",
    "check_identifier",
    "classify",
    "sanitize",
    # Resolver
    "Destination",
    "DestinationResolver",
    # Encoder
    "InstructionEncoder",
    # Templates
    "InstructionCategory",
    "MNEMONICS",
]
