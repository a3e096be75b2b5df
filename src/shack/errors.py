"""
Shack Error Hierarchy
=====================

This module defines the exception hierarchy for the Shack translator.
All exceptions inherit from ShackError, allowing callers to catch all
translator-related errors with a single except clause if desired.

Exception Hierarchy
-------------------
ShackError (base)
└── TranslationError (one source line could not be translated)
    ├── IllegalCharacterError - character outside the identifier grammar
    ├── IllegalInstructionError - unknown mnemonic
    ├── IllegalOperandError - bad register, literal out of range, etc.
    ├── WrongOperandCountError - wrong number of operands for a mnemonic
    ├── LabelAlreadyDeclaredError - label defined twice or clashing with a variable
    ├── InstructionAsLabelError - mnemonic used as a label or variable name
    ├── LabelNotFoundError - jump to an undefined instruction label
    ├── VariableNotFoundError - reference to an undeclared variable
    └── InvalidJumpTargetError - variable used as a jump destination

Every translation error is fatal to its own line only. The translator
records it in a DiagnosticCollector and carries on with the next line,
so a single run surfaces every defect in the source.

Error messages follow this format:
    filename:line: error: description

The bare description (``error.message``) is kept identical to the
messages printed by ``sham``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class ShackError(Exception):
    """
    Base exception for all Shack errors.

        try:
            translate_file("program.shk")
        except ShackError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    Represents a location in source code for error reporting.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        """Format as 'filename:line' for error messages."""
        return f"{self.filename}:{self.line}"


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(Enum):
    """Classification of translation errors."""
    ILLEGAL_CHARACTER = "illegal character"
    ILLEGAL_INSTRUCTION = "illegal instruction"
    ILLEGAL_OPERAND = "illegal operand"
    WRONG_OPERAND_COUNT = "wrong operand count"
    LABEL_ALREADY_DECLARED = "label already declared"
    INSTRUCTION_NAME_AS_LABEL = "instruction name as label"
    LABEL_NOT_FOUND = "label not found"
    VARIABLE_NOT_FOUND = "variable not found"
    INVALID_JUMP_TARGET = "invalid jump target"

    def __str__(self) -> str:
        return self.value


# =============================================================================
# Translation Exceptions
# =============================================================================

class TranslationError(ShackError):
    """
    Base exception for errors in a single source line.

    Errors are usually raised deep inside the resolver or encoder, which
    do not know the line number. The driver attaches the location once
    it catches the error (see attach_location()).

    Attributes:
        kind: ErrorKind classifying the error
        message: The bare error description
        location: Where in the source the error occurred (optional)
    """

    kind: ErrorKind = ErrorKind.ILLEGAL_INSTRUCTION

    def __init__(self, message: str, location: Optional[SourceLocation] = None):
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """
        Format the error message with its location.

        Example output:
            loop.shk:12: error: Instruction label lop has not been defined.
        """
        if self.location:
            return f"{self.location}: error: {self.message}"
        return f"error: {self.message}"

    def attach_location(self, location: SourceLocation) -> "TranslationError":
        """Set the source location and refresh the formatted message."""
        self.location = location
        self.args = (self._format_message(),)
        return self

    @property
    def sort_key(self) -> str:
        """Case-insensitive ordering key for deferred diagnostics."""
        return self.message.lower()


class IllegalCharacterError(TranslationError):
    """
    A name or mnemonic contains a character outside the identifier grammar.

    Identifiers start with a letter and continue with letters, digits or
    underscores. The error names the first offending character.
    """

    kind = ErrorKind.ILLEGAL_CHARACTER

    def __init__(self, character: str, location: Optional[SourceLocation] = None):
        self.character = character
        super().__init__(f"Illegal character: {character}", location)


class IllegalInstructionError(TranslationError):
    """The mnemonic is well formed but not part of the instruction set."""

    kind = ErrorKind.ILLEGAL_INSTRUCTION

    def __init__(self, instruction: str, location: Optional[SourceLocation] = None):
        self.instruction = instruction
        super().__init__(f"Illegal opcode: {instruction}", location)


class IllegalOperandError(TranslationError):
    """
    An operand is not acceptable for the instruction.

    Examples:
        - a register other than A or D
        - a literal outside 0..32767
        - storing to, or jumping to, a literal (#) value
    """

    kind = ErrorKind.ILLEGAL_OPERAND

    def __init__(self, operand: str, location: Optional[SourceLocation] = None):
        self.operand = operand
        super().__init__(f"Illegal operand: {operand}", location)


class WrongOperandCountError(TranslationError):
    kind = ErrorKind.WRONG_OPERAND_COUNT

    def __init__(self, mnemonic: str, location: Optional[SourceLocation] = None):
        self.mnemonic = mnemonic
        super().__init__(f"Incorrect number of operands for {mnemonic}", location)


class LabelAlreadyDeclaredError(TranslationError):
    """
    A name is declared in a way that clashes with an earlier declaration.

    Instruction labels are unique code positions, so a second definition
    is always an error. A label may not reuse a variable name, and a
    variable may not reuse a label name. Declaring the same variable twice
    is harmless and never reaches this error.

    Attributes:
        name: The clashing name
        is_variable: True when the earlier declaration was a variable
        declaring_variable: True when the clashing declaration is a variable
    """

    kind = ErrorKind.LABEL_ALREADY_DECLARED

    def __init__(
        self,
        name: str,
        is_variable: bool = False,
        declaring_variable: bool = False,
        location: Optional[SourceLocation] = None,
    ):
        self.name = name
        self.is_variable = is_variable
        self.declaring_variable = declaring_variable

        if declaring_variable:
            message = f"RAM label {name} has been defined as a ROM label."
        elif is_variable:
            message = f"ROM label {name} has been defined as a RAM label."
        else:
            message = f"ROM label {name} has been defined more than once."
        super().__init__(message, location)


class InstructionAsLabelError(TranslationError):
    kind = ErrorKind.INSTRUCTION_NAME_AS_LABEL

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        self.name = name
        super().__init__(f"{name} is an opcode and may not be used as a label.", location)


class LabelNotFoundError(TranslationError):
    """
    A jump refers to an instruction label that is never defined.

    These are reported once per label at the end of the run, ordered
    case-insensitively by message.
    """

    kind = ErrorKind.LABEL_NOT_FOUND

    def __init__(self, label: str, location: Optional[SourceLocation] = None):
        self.label = label
        super().__init__(f"Instruction label {label} has not been defined.", location)


class VariableNotFoundError(TranslationError):
    """
    A data operand refers to a variable that is never declared.

    Reported only for the first occurrence of each name; later uses of
    the same name silently drop their line.
    """

    kind = ErrorKind.VARIABLE_NOT_FOUND

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        self.name = name
        super().__init__(f"RAM label {name} has not been declared.", location)


class InvalidJumpTargetError(TranslationError):
    """A variable (data location) was used as a jump destination."""

    kind = ErrorKind.INVALID_JUMP_TARGET

    def __init__(self, name: str, location: Optional[SourceLocation] = None):
        self.name = name
        super().__init__(f"RAM label {name} has been used as a jump destination.", location)


# =============================================================================
# Error Collection for Deferred Reporting
# =============================================================================

class DiagnosticCollector:
    """
    Collects translation errors for reporting at the end of a run.

    Two views are kept:
    - errors: every line error in the order it occurred, with at most one
      VariableNotFoundError per name
    - unresolved labels: one LabelNotFoundError per message (compared
      case-insensitively), drained sorted after everything else

    Example:
        collector = DiagnosticCollector()
        collector.add(IllegalOperandError("X"))
        collector.add_unresolved_label(LabelNotFoundError("missing"))
        for diagnostic in collector.diagnostics:
            print(diagnostic)
    """

    def __init__(self):
        self._errors: list[TranslationError] = []
        self._unresolved_variables: dict[str, VariableNotFoundError] = {}
        self._unresolved_labels: dict[str, LabelNotFoundError] = {}

    def add(self, error: TranslationError) -> None:
        """
        Add a line error.

        Label-not-found errors are routed to the deferred bucket;
        variable-not-found errors are remembered so the name is not
        reported again.
        """
        if isinstance(error, LabelNotFoundError):
            self.add_unresolved_label(error)
            return
        if isinstance(error, VariableNotFoundError):
            if error.name in self._unresolved_variables:
                return
            self._unresolved_variables[error.name] = error
        self._errors.append(error)

    def add_unresolved_label(self, error: LabelNotFoundError) -> None:
        """Record an unresolved label unless an equal report already exists."""
        self._unresolved_labels.setdefault(error.sort_key, error)

    def is_variable_reported(self, name: str) -> bool:
        """Return True if an unresolved-variable report exists for name."""
        return name in self._unresolved_variables

    @property
    def errors(self) -> list[TranslationError]:
        """Line errors in occurrence order (excluding unresolved labels)."""
        return list(self._errors)

    @property
    def unresolved_labels(self) -> list[LabelNotFoundError]:
        return [self._unresolved_labels[key] for key in sorted(self._unresolved_labels)]

    @property
    def diagnostics(self) -> list[TranslationError]:
        """All diagnostics: line errors first, then sorted unresolved labels."""
        return self.errors + self.unresolved_labels

    def has_errors(self) -> bool:
        """Return True if any errors have been collected."""
        return bool(self._errors or self._unresolved_labels)

    def error_count(self) -> int:
        """Return the number of collected errors."""
        return len(self._errors) + len(self._unresolved_labels)

    def report(self) -> str:
        """
        Format all diagnostics for display, one per line.

        Returns:
            Formatted string ending with an error count summary
        """
        lines = [str(error) for error in self.diagnostics]
        count = self.error_count()
        error_word = "error" if count == 1 else "errors"
        lines.append(f"{count} {error_word}")
        return "\n".join(lines)
