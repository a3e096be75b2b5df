"""
Shack Destination Resolver
==========================

Turns an operand token into something the encoder can emit after
``@``: either a number or a symbol name known to the symbol table.

Operand Forms
-------------
    #5       literal: the value 5 itself (Hack: @5 then use A)
    5        direct address: memory slot 5 (Hack: @5 then use M)
    COUNT    variable: memory contents of COUNT (Hack: @COUNT then use M)
    #COUNT   address of COUNT (Hack: @COUNT then use A)
    loop     jump destination: instruction label

Numbers must lie in 0..32767, the range of a Hack A-instruction.

Unresolved Variables
--------------------
The first reference to an undeclared variable raises
VariableNotFoundError. Later references to the same name return None:
the line is dropped without repeating the diagnostic, so one mistyped
name does not flood the report.
"""

from dataclasses import dataclass
from typing import Optional
import re

from shack.config import DEFAULT_CONFIG, TranslatorConfig
from shack.errors import (
    DiagnosticCollector,
    IllegalOperandError,
    InvalidJumpTargetError,
    LabelNotFoundError,
    VariableNotFoundError,
)
from shack.translator.classifier import check_identifier
from shack.translator.symbols import SymbolTable

_INTEGER = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class Destination:
    """
    A resolved operand.

    Attributes:
        text: What follows '@' in the Hack output (number or symbol name)
        is_literal: True if the operand carried the literal prefix
    """
    text: str
    is_literal: bool = False


class DestinationResolver:
    """
    Resolves operands against a (complete) symbol table.

    Usage:
        resolver = DestinationResolver(symbols, diagnostics)
        dest = resolver.resolve("COUNT", is_jump=False)
        if dest is not None:
            lines.append(f"@{dest.text}")
    """

    def __init__(
        self,
        symbols: SymbolTable,
        diagnostics: DiagnosticCollector,
        config: TranslatorConfig = DEFAULT_CONFIG,
    ):
        self._symbols = symbols
        self._diagnostics = diagnostics
        self._config = config

    def is_literal(self, token: str) -> bool:
        return token.startswith(self._config.literal_prefix)

    def resolve(self, token: str, is_jump: bool = False) -> Optional[Destination]:
        """
        Resolve an operand token.

        Args:
            token: Operand as written in the source
            is_jump: True for jump destinations (label namespace),
                     False for data destinations (variable namespace)

        Returns:
            The Destination, or None if the operand names a variable that
            has already been reported as undeclared

        Raises:
            IllegalOperandError: Number out of range or empty operand
            IllegalCharacterError: Name breaks the identifier grammar
            InvalidJumpTargetError: Jump to a variable
            LabelNotFoundError: Jump to an undefined label
            VariableNotFoundError: First use of an undeclared variable
        """
        is_literal = self.is_literal(token)
        name = token[len(self._config.literal_prefix):] if is_literal else token

        if not name:
            raise IllegalOperandError(token)

        if _INTEGER.fullmatch(name):
            value = int(name)
            if value < 0 or value > self._config.max_literal:
                raise IllegalOperandError(name)
            return Destination(str(value), is_literal=is_literal)

        check_identifier(name, can_start_with_number=True)

        if is_jump:
            return self._resolve_label(name, is_literal)
        return self._resolve_variable(name, is_literal)

    def _resolve_label(self, name: str, is_literal: bool) -> Destination:
        if self._symbols.is_label(name):
            return Destination(name, is_literal=is_literal)
        if self._symbols.is_variable(name):
            raise InvalidJumpTargetError(name)
        check_identifier(name)
        raise LabelNotFoundError(name)

    def _resolve_variable(self, name: str, is_literal: bool) -> Optional[Destination]:
        if self._symbols.is_variable(name):
            return Destination(name, is_literal=is_literal)
        check_identifier(name)
        if self._diagnostics.is_variable_reported(name):
            return None
        raise VariableNotFoundError(name)
