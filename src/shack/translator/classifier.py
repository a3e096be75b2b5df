"""
Shack Line Classifier
=====================

Normalizes raw source lines and decides what each one is. Shack is
strictly line oriented, so there is no tokenizer beyond splitting on
single spaces once whitespace has been collapsed.

Line Kinds
----------
- BLANK / COMMENT: dropped without any effect
- DECLARATION_MARKER (``.dec``) / CODE_MARKER (``.code``): switch region
- VARIABLE: any other line inside the declaration region
- LABEL: a line ending in ``:`` in the executable region
- INSTRUCTION: anything else in the executable region

Identifier Grammar
------------------
Names start with an ASCII letter and continue with ASCII letters, digits
or underscores. check_identifier() reports the first character that
breaks the rule.
"""

from dataclasses import dataclass
from enum import Enum, auto
import re

from shack.config import DEFAULT_CONFIG, TranslatorConfig
from shack.errors import IllegalCharacterError


class LineKind(Enum):
    BLANK = auto()
    COMMENT = auto()
    DECLARATION_MARKER = auto()
    CODE_MARKER = auto()
    VARIABLE = auto()
    LABEL = auto()
    INSTRUCTION = auto()


@dataclass(frozen=True)
class ClassifiedLine:
    """
    A sanitized source line and its classification.

    Attributes:
        kind: What the line is
        text: Sanitized line text (label suffix still attached)
        line_number: 1-based line number in the source
        name: Variable or label name (label suffix stripped), else None
    """
    kind: LineKind
    text: str
    line_number: int
    name: str | None = None

    @property
    def is_marker(self) -> bool:
        return self.kind in (LineKind.DECLARATION_MARKER, LineKind.CODE_MARKER)

    @property
    def is_ignored(self) -> bool:
        return self.kind in (LineKind.BLANK, LineKind.COMMENT)


_WHITESPACE_RUN = re.compile(r"\s+")
_LINE_BREAKS = re.compile(r"[\n\t]")
_WORD_CHAR = re.compile(r"[A-Za-z0-9_]")
_LETTER = re.compile(r"[A-Za-z]")

LABEL_SUFFIX = ":"


def sanitize(line: str) -> str:
    """Strip the line, drop tabs and newlines, and collapse whitespace runs."""
    line = _LINE_BREAKS.sub("", line.strip())
    return _WHITESPACE_RUN.sub(" ", line)


def find_invalid_char(text: str, can_start_with_number: bool = False) -> str | None:
    """
    Find the first character of text that breaks the identifier grammar.

    Args:
        text: Name or mnemonic to check (must not be empty)
        can_start_with_number: Allow a leading digit (used for operands
            before it is known whether they are numbers or names)

    Returns:
        The offending character, or None if text is a valid identifier
    """
    if not can_start_with_number and not _LETTER.fullmatch(text[0]):
        return text[0]
    for char in text:
        if not _WORD_CHAR.fullmatch(char):
            return char
    return None


def check_identifier(text: str, can_start_with_number: bool = False) -> None:
    """
    Raise IllegalCharacterError if text is not a valid identifier.

    An empty name can only come from a bare ``:`` label definition, so
    the colon is reported as the offending character.
    """
    if not text:
        raise IllegalCharacterError(LABEL_SUFFIX)
    char = find_invalid_char(text, can_start_with_number)
    if char is not None:
        raise IllegalCharacterError(char)


def classify(
    raw: str,
    line_number: int,
    in_declaration_area: bool,
    config: TranslatorConfig = DEFAULT_CONFIG,
) -> ClassifiedLine:
    """
    Classify one raw source line.

    The caller owns the region flag; it should flip it when a marker
    line comes back.

    Args:
        raw: Line as read from the source
        line_number: 1-based line number
        in_declaration_area: True while inside the ``.dec`` region
        config: Dialect settings (markers and comment prefix)

    Returns:
        ClassifiedLine describing the line
    """
    text = sanitize(raw)

    if not text:
        return ClassifiedLine(LineKind.BLANK, text, line_number)
    if text.startswith(config.comment_prefix):
        return ClassifiedLine(LineKind.COMMENT, text, line_number)
    if text == config.declaration_marker:
        return ClassifiedLine(LineKind.DECLARATION_MARKER, text, line_number)
    if text == config.code_marker:
        return ClassifiedLine(LineKind.CODE_MARKER, text, line_number)

    if in_declaration_area:
        return ClassifiedLine(LineKind.VARIABLE, text, line_number, name=text)
    if text.endswith(LABEL_SUFFIX):
        return ClassifiedLine(LineKind.LABEL, text, line_number, name=text[:-1])
    return ClassifiedLine(LineKind.INSTRUCTION, text, line_number)
