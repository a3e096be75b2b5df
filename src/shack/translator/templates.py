"""
Shack Instruction Set and Hack Templates
========================================

This module defines the Shack instruction set and the fixed Hack
assembly fragments each instruction is translated into. The tables are
pure data; the encoder decides which fragments to emit.

Instruction Categories
----------------------
1. **NO_OPERAND**: single-register unary ops on D (INC, DEC, CLR, NEG, NOT)
   - Example: INC -> D=D+1

2. **D_REGISTER**: D combined with a literal or a variable (ADDD, ANDD, ORD, SUBD)
   - Example: ADDD #5 -> @5, D=D+A
   - Example: ADDD X  -> @X, D=D+M

3. **STORE**: write A or D to a variable (STO)
   - Example: STO A X -> D=A, @X, M=D

4. **LOAD**: load A or D from the other register, a literal or a variable (LOAD)
   - Example: LOAD A #3 -> @3

5. **JUMP**: unconditional and conditional jumps on D (JMP, JGT, JEQ, ...)
   - Example: JEQ loop -> @loop, D; JEQ

Hack Line Forms
---------------
The output only ever uses these forms, reproduced exactly because the
Hack assembler downstream parses them:

    @<value>        address-set
    D=D+1 ...       register assignment (arithmetic, logic, copy)
    0; JMP          unconditional jump
    D; JEQ ...      conditional jump on D
    (<label>)       label marker
"""

from enum import Enum, auto
from types import MappingProxyType


# =============================================================================
# Instruction Categories
# =============================================================================

class InstructionCategory(Enum):
    """Operand shape of a Shack instruction."""
    NO_OPERAND = auto()
    D_REGISTER = auto()
    STORE = auto()
    LOAD = auto()
    JUMP = auto()

    def __str__(self) -> str:
        return self.name.lower().replace("_", "-")


# =============================================================================
# Registers
# =============================================================================

REGISTER_A = "A"
REGISTER_D = "D"
REGISTERS = frozenset({REGISTER_A, REGISTER_D})


# =============================================================================
# Template Tables
# =============================================================================

# Mnemonic -> complete Hack line
NO_OPERAND_TEMPLATES = MappingProxyType({
    "INC": "D=D+1",
    "DEC": "D=D-1",
    "CLR": "D=0",
    "NEG": "D=-D",
    "NOT": "D=!D",
})

# Mnemonic -> Hack ALU operator combining D with A or M
D_REGISTER_OPERATORS = MappingProxyType({
    "ADDD": "+",
    "ANDD": "&",
    "ORD": "|",
    "SUBD": "-",
})

UNCONDITIONAL_JUMP = "JMP"

# The conditional jump mnemonics are also the Hack jump field names
JUMP_MNEMONICS = frozenset({
    UNCONDITIONAL_JUMP, "JGT", "JEQ", "JGE", "JLT", "JNE", "JLE",
})

STORE_MNEMONIC = "STO"
LOAD_MNEMONIC = "LOAD"


def _build_categories() -> dict[str, InstructionCategory]:
    categories = {}
    for mnemonic in NO_OPERAND_TEMPLATES:
        categories[mnemonic] = InstructionCategory.NO_OPERAND
    for mnemonic in D_REGISTER_OPERATORS:
        categories[mnemonic] = InstructionCategory.D_REGISTER
    for mnemonic in JUMP_MNEMONICS:
        categories[mnemonic] = InstructionCategory.JUMP
    categories[STORE_MNEMONIC] = InstructionCategory.STORE
    categories[LOAD_MNEMONIC] = InstructionCategory.LOAD
    return categories


INSTRUCTION_CATEGORIES = MappingProxyType(_build_categories())

# All mnemonics; these names are reserved and may not be used as symbols
MNEMONICS = frozenset(INSTRUCTION_CATEGORIES)

# Number of space-separated parts (mnemonic included) per category
OPERAND_PARTS = MappingProxyType({
    InstructionCategory.NO_OPERAND: 1,
    InstructionCategory.D_REGISTER: 2,
    InstructionCategory.STORE: 3,
    InstructionCategory.LOAD: 3,
    InstructionCategory.JUMP: 2,
})


# =============================================================================
# Hack Line Builders
# =============================================================================

def address(value: str) -> str:
    """Hack address-set line, e.g. '@COUNT'."""
    return f"@{value}"


def label_marker(label: str) -> str:
    """Hack label pseudo-instruction, e.g. '(loop)'."""
    return f"({label})"


def d_register_operation(operator: str, literal: bool) -> str:
    """Combine D with A (literal value) or M (memory contents)."""
    source = "A" if literal else "M"
    return f"D=D{operator}{source}"


def jump(mnemonic: str) -> str:
    """Hack jump line for a Shack jump mnemonic."""
    if mnemonic == UNCONDITIONAL_JUMP:
        return "0; JMP"
    return f"D; {mnemonic}"


def get_category(mnemonic: str) -> InstructionCategory | None:
    """Return the category of a mnemonic, or None if it is unknown."""
    return INSTRUCTION_CATEGORIES.get(mnemonic)


def is_mnemonic(name: str) -> bool:
    """Check if a name is a reserved Shack mnemonic (case-sensitive)."""
    return name in MNEMONICS
