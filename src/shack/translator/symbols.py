"""
Shack Symbol Table
==================

Tracks the two symbol namespaces of a Shack program:

- **Variables** ("RAM labels"): declared in the ``.dec`` region. They
  denote shared storage slots, so declaring the same variable twice is
  harmless and silently accepted.
- **Labels** ("ROM labels"): defined in the ``.code`` region with a
  trailing colon. They denote unique code positions, so a second
  definition is an error.

A name belongs to at most one namespace, and no symbol may reuse a
mnemonic. No numeric addresses are assigned here: the Hack output
refers to symbols by name and the Hack assembler allocates them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional
import logging

from shack.errors import (
    InstructionAsLabelError,
    LabelAlreadyDeclaredError,
    SourceLocation,
)
from shack.translator.templates import is_mnemonic

logger = logging.getLogger(__name__)


class SymbolKind(Enum):
    VARIABLE = "variable"
    LABEL = "label"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Symbol name (case-sensitive)
        kind: VARIABLE or LABEL
        location: Where the symbol was first declared (optional)
    """
    name: str
    kind: SymbolKind
    location: Optional[SourceLocation] = None


class SymbolTable:
    """
    Variable and label namespaces of one translation run.

    Usage:
        table = SymbolTable()
        table.declare_variable("COUNT")
        table.declare_label("loop")
        assert table.is_variable("COUNT")
        assert table.is_label("loop")
    """

    def __init__(self):
        self._variables: dict[str, Symbol] = {}
        self._labels: dict[str, Symbol] = {}

    def declare_variable(self, name: str, location: Optional[SourceLocation] = None) -> bool:
        """
        Declare a variable.

        Args:
            name: Variable name (already checked against the identifier grammar)
            location: Where the declaration appears

        Returns:
            True if the variable is new, False for a repeated declaration

        Raises:
            InstructionAsLabelError: If name is a mnemonic
            LabelAlreadyDeclaredError: If name is already an instruction label
        """
        if is_mnemonic(name):
            raise InstructionAsLabelError(name)
        if name in self._labels:
            raise LabelAlreadyDeclaredError(name, declaring_variable=True)
        if name in self._variables:
            logger.debug(f"Variable '{name}' declared again, ignoring")
            return False

        self._variables[name] = Symbol(name, SymbolKind.VARIABLE, location)
        logger.debug(f"Declared variable '{name}'")
        return True

    def declare_label(self, name: str, location: Optional[SourceLocation] = None) -> None:
        """
        Define an instruction label.

        Raises:
            InstructionAsLabelError: If name is a mnemonic
            LabelAlreadyDeclaredError: If name is already a label or a variable
        """
        if is_mnemonic(name):
            raise InstructionAsLabelError(name)
        if name in self._labels:
            raise LabelAlreadyDeclaredError(name)
        if name in self._variables:
            raise LabelAlreadyDeclaredError(name, is_variable=True)

        self._labels[name] = Symbol(name, SymbolKind.LABEL, location)
        logger.debug(f"Defined label '{name}'")

    def is_variable(self, name: str) -> bool:
        return name in self._variables

    def is_label(self, name: str) -> bool:
        return name in self._labels

    @property
    def variables(self) -> list[str]:
        """Declared variable names, sorted."""
        return sorted(self._variables)

    @property
    def labels(self) -> list[str]:
        """Defined label names in definition order."""
        return list(self._labels)

    def format_listing(self) -> str:
        """
        Format the symbol table as text, variables first then labels.

        Example:
            ; variables
            COUNT
            ; labels
            loop
        """
        lines = ["; variables"]
        lines.extend(self.variables)
        lines.append("; labels")
        lines.extend(self.labels)
        return "\n".join(lines) + "\n"
