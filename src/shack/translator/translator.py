"""
Shack Translator - Main Interface
=================================

This module provides the Translator class, the primary interface for
translating Shack source into Hack assembly. It runs the classifier,
symbol table, resolver and encoder over the source in two passes.

Translation Process
-------------------
1. **Pass 1 (declarations)**:
   - Track the ``.dec`` / ``.code`` region
   - Declare variables and define labels in the symbol table
   - Remember every line that survived ("accepted lines")

2. **Pass 2 (emission)**:
   - Replay the accepted lines, classified once in pass 1
   - Emit ``(label)`` markers and encode instructions

Pass 1 must finish before pass 2 so that forward references to labels
defined further down resolve. Every error is fatal to its own line
only; errors are collected and reported once at the end.

Example Usage
-------------
>>> from shack.translator import Translator
>>> result = Translator().translate('''
... .dec
... COUNT
... .code
... LOAD A #0
... STO A COUNT
... ''')
>>> result.output
['@0', 'D=A', '@COUNT', 'M=D']
>>> result.has_errors
False
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable
import logging
import re

from shack.config import DEFAULT_CONFIG, TranslatorConfig
from shack.errors import DiagnosticCollector, SourceLocation, TranslationError
from shack.translator.classifier import (
    ClassifiedLine,
    LineKind,
    check_identifier,
    classify,
)
from shack.translator.encoder import InstructionEncoder
from shack.translator.resolver import DestinationResolver
from shack.translator.symbols import SymbolTable
from shack.translator import templates

logger = logging.getLogger(__name__)

# Only \n, \r and \r\n end a source line; form feeds and other Unicode
# separators stay inside the line as whitespace.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(source: str) -> list[str]:
    """Split source text into physical lines, without terminators."""
    lines = _LINE_BREAK.split(source)
    if lines[-1] == "":
        lines.pop()
    return lines


@dataclass
class TranslationResult:
    """
    Outcome of a translation run.

    Attributes:
        output: Hack lines in source order
        diagnostics: Errors in reporting order (line errors, then
                     unresolved labels sorted case-insensitively)
        symbols: The symbol table built in pass 1
    """
    output: list[str] = field(default_factory=list)
    diagnostics: list[TranslationError] = field(default_factory=list)
    symbols: SymbolTable = field(default_factory=SymbolTable)

    @property
    def has_errors(self) -> bool:
        return bool(self.diagnostics)

    @property
    def messages(self) -> list[str]:
        """Bare diagnostic messages, without locations."""
        return [error.message for error in self.diagnostics]

    def get_text(self) -> str:
        """Output as file content, one Hack instruction per line."""
        return "".join(f"{line}\n" for line in self.output)


class Translator:
    """
    Two-pass Shack to Hack translator.

    A Translator can be reused; every run starts from an empty symbol
    table and an empty diagnostic collector.

    Attributes:
        config: Dialect and output settings
    """

    def __init__(self, config: TranslatorConfig = DEFAULT_CONFIG, verbose: bool = False):
        """
        Initialize the translator.

        Args:
            config: Dialect and output settings
            verbose: Log progress at INFO level instead of DEBUG
        """
        self.config = config
        self._verbose = verbose
        self._filename = "<input>"
        self._reset()

    def _reset(self) -> None:
        """Start a run with an empty symbol table and no diagnostics."""
        self._symbols = SymbolTable()
        self._diagnostics = DiagnosticCollector()
        self._resolver = DestinationResolver(self._symbols, self._diagnostics, self.config)
        self._encoder = InstructionEncoder(self._resolver, self.config)

    # =========================================================================
    # Translation Methods
    # =========================================================================

    def translate(self, source: str, filename: str = "<input>") -> TranslationResult:
        """
        Translate source code from a string.

        Args:
            source: Shack source code
            filename: Virtual filename for error messages

        Returns:
            TranslationResult with output lines and diagnostics
        """
        return self.translate_lines(split_lines(source), filename)

    def translate_file(self, filepath: str | Path) -> TranslationResult:
        """
        Translate a Shack source file.

        The file is decoded as UTF-8. Undecodable bytes become U+FFFD, so a
        stray byte only affects the line it sits on.

        Raises:
            OSError: If the file cannot be read
        """
        filepath = Path(filepath)
        self._log(f"Translating {filepath}")
        with open(filepath, encoding="utf-8", errors="replace", newline="") as f:
            source = f.read()
        return self.translate_lines(split_lines(source), str(filepath))

    def translate_lines(self, lines: Iterable[str], filename: str = "<input>") -> TranslationResult:
        """
        Translate a sequence of raw source lines.

        Args:
            lines: Raw lines, without line terminators
            filename: Virtual filename for error messages

        Returns:
            TranslationResult with output lines and diagnostics
        """
        self._filename = filename
        self._reset()

        accepted = self._pass1(lines)
        self._log(
            f"Pass 1: {len(accepted)} lines accepted, "
            f"{len(self._symbols.variables)} variables, {len(self._symbols.labels)} labels"
        )

        output = self._pass2(accepted)
        self._log(f"Pass 2: emitted {len(output)} lines")

        result = TranslationResult(
            output=output,
            diagnostics=self._diagnostics.diagnostics,
            symbols=self._symbols,
        )
        if result.has_errors:
            self._log(f"Translation finished with {len(result.diagnostics)} errors")
        return result

    # =========================================================================
    # Pass 1: Symbol Collection
    # =========================================================================

    def _pass1(self, lines: Iterable[str]) -> list[ClassifiedLine]:
        accepted: list[ClassifiedLine] = []
        in_declaration_area = False

        for line_number, raw in enumerate(lines, start=1):
            line = classify(raw, line_number, in_declaration_area, self.config)
            if line.is_ignored:
                continue
            if line.is_marker:
                in_declaration_area = line.kind == LineKind.DECLARATION_MARKER
                accepted.append(line)
                continue

            try:
                if self._pass1_line(line):
                    accepted.append(line)
            except TranslationError as e:
                self._record(e, line)

        return accepted

    def _pass1_line(self, line: ClassifiedLine) -> bool:
        """Process one line in pass 1. Returns True if pass 2 needs it."""
        location = self._location(line)

        if line.kind == LineKind.VARIABLE:
            check_identifier(line.name)
            return self._symbols.declare_variable(line.name, location)

        if line.kind == LineKind.LABEL:
            check_identifier(line.name)
            self._symbols.declare_label(line.name, location)

        return True

    # =========================================================================
    # Pass 2: Code Emission
    # =========================================================================

    def _pass2(self, accepted: list[ClassifiedLine]) -> list[str]:
        output: list[str] = []

        for line in accepted:
            if line.kind == LineKind.LABEL:
                output.append(templates.label_marker(line.name))
            elif line.kind == LineKind.INSTRUCTION:
                try:
                    output.extend(self._encoder.encode(line.text))
                except TranslationError as e:
                    self._record(e, line)

        return output

    # =========================================================================
    # Helpers
    # =========================================================================

    def _location(self, line: ClassifiedLine) -> SourceLocation:
        return SourceLocation(self._filename, line.line_number)

    def _record(self, error: TranslationError, line: ClassifiedLine) -> None:
        error.attach_location(self._location(line))
        logger.debug(f"{error.kind} in {line.text!r}: {error.message}")
        self._diagnostics.add(error)

    def _log(self, message: str) -> None:
        if self._verbose:
            logger.info(message)
        else:
            logger.debug(message)

    def has_errors(self) -> bool:
        return self._diagnostics.has_errors()

    def get_error_report(self) -> str:
        """Formatted report of the last run's diagnostics."""
        return self._diagnostics.report()


# =============================================================================
# Convenience Functions
# =============================================================================

def translate(source: str, filename: str = "<input>") -> TranslationResult:
    """
    Convenience function to translate source code.

    Args:
        source: Shack source code
        filename: Virtual filename for errors

    Returns:
        TranslationResult with output lines and diagnostics
    """
    return Translator().translate(source, filename)


def translate_file(filepath: str | Path) -> TranslationResult:
    """Convenience function to translate a file."""
    return Translator().translate_file(filepath)
