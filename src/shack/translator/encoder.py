"""
Shack Instruction Encoder
=========================

Translates one executable Shack instruction into Hack lines. The
mnemonic selects a category (see templates.py); each category checks
its operand count and shape before anything is emitted, so a failing
instruction never produces partial output.

Translations
------------
    INC                 D=D+1
    ADDD #5             @5, D=D+A
    ADDD X              @X, D=D+M
    STO A X             D=A, @X, M=D
    STO D X             @X, M=D
    LOAD A D            A=D
    LOAD A #5           @5
    LOAD A X            @X, A=M
    LOAD D A            D=A
    LOAD D X            D=A, @R13, M=D, @X, D=M, @R13, A=M
    JMP loop            @loop, 0; JMP
    JEQ loop            @loop, D; JEQ

LOAD D from memory has to go through A (Hack can only address one
location at a time), so A is parked in the scratch register and
restored afterwards.
"""

from typing import Callable

from shack.config import DEFAULT_CONFIG, TranslatorConfig
from shack.errors import (
    IllegalInstructionError,
    IllegalOperandError,
    WrongOperandCountError,
)
from shack.translator.classifier import check_identifier
from shack.translator.resolver import DestinationResolver
from shack.translator import templates
from shack.translator.templates import (
    InstructionCategory,
    REGISTER_A,
    REGISTER_D,
    REGISTERS,
)


class InstructionEncoder:
    """
    Encodes executable instructions using a DestinationResolver.

    Usage:
        encoder = InstructionEncoder(resolver)
        lines = encoder.encode("ADDD #1")   # ['@1', 'D=D+A']
    """

    def __init__(self, resolver: DestinationResolver, config: TranslatorConfig = DEFAULT_CONFIG):
        self._resolver = resolver
        self._config = config
        self._handlers: dict[InstructionCategory, Callable[[list[str]], list[str]]] = {
            InstructionCategory.NO_OPERAND: self._encode_no_operand,
            InstructionCategory.D_REGISTER: self._encode_d_register,
            InstructionCategory.STORE: self._encode_store,
            InstructionCategory.LOAD: self._encode_load,
            InstructionCategory.JUMP: self._encode_jump,
        }

    def encode(self, line: str) -> list[str]:
        """
        Encode a sanitized instruction line.

        Args:
            line: Instruction text with whitespace already collapsed

        Returns:
            Hack lines (empty if an operand names an already reported
            undeclared variable)

        Raises:
            TranslationError: If the instruction cannot be translated
        """
        parts = line.split(" ")
        mnemonic = parts[0]

        check_identifier(mnemonic)
        category = templates.get_category(mnemonic)
        if category is None:
            raise IllegalInstructionError(line)

        if len(parts) != templates.OPERAND_PARTS[category]:
            raise WrongOperandCountError(mnemonic)

        return self._handlers[category](parts)

    # =========================================================================
    # Category Encoders
    # =========================================================================

    def _encode_no_operand(self, parts: list[str]) -> list[str]:
        return [templates.NO_OPERAND_TEMPLATES[parts[0]]]

    def _encode_d_register(self, parts: list[str]) -> list[str]:
        mnemonic, operand = parts
        dest = self._resolver.resolve(operand)
        if dest is None:
            return []

        operator = templates.D_REGISTER_OPERATORS[mnemonic]
        return [
            templates.address(dest.text),
            templates.d_register_operation(operator, dest.is_literal),
        ]

    def _encode_store(self, parts: list[str]) -> list[str]:
        _, register, operand = parts
        self._check_register(register)
        if self._resolver.is_literal(operand):
            raise IllegalOperandError(operand)

        dest = self._resolver.resolve(operand)
        if dest is None:
            return []

        lines = []
        if register == REGISTER_A:
            lines.append("D=A")
        lines.append(templates.address(dest.text))
        lines.append("M=D")
        return lines

    def _encode_load(self, parts: list[str]) -> list[str]:
        _, register, source = parts
        self._check_register(register)

        if register == REGISTER_A:
            if source == REGISTER_D:
                return ["A=D"]
            dest = self._resolver.resolve(source)
            if dest is None:
                return []
            lines = [templates.address(dest.text)]
            if not dest.is_literal:
                lines.append("A=M")
            return lines

        if source == REGISTER_A:
            return ["D=A"]
        dest = self._resolver.resolve(source)
        if dest is None:
            return []

        scratch = templates.address(self._config.scratch_register)
        return [
            # Save A
            "D=A",
            scratch,
            "M=D",
            # Load D
            templates.address(dest.text),
            "D=A" if dest.is_literal else "D=M",
            # Restore A
            scratch,
            "A=M",
        ]

    def _encode_jump(self, parts: list[str]) -> list[str]:
        mnemonic, operand = parts
        if self._resolver.is_literal(operand):
            raise IllegalOperandError(operand)

        dest = self._resolver.resolve(operand, is_jump=True)
        return [templates.address(dest.text), templates.jump(mnemonic)]

    def _check_register(self, register: str) -> None:
        if register not in REGISTERS:
            raise IllegalOperandError(register)
