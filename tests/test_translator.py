# =============================================================================
# test_translator.py - Full Translator Integration Tests
# =============================================================================
# End-to-end tests for the two-pass translator, from Shack source to Hack
# lines and diagnostics.
#
# Test coverage includes:
#   - Complete programs and forward references
#   - Declaration and label errors found in pass 1
#   - Deferred, deduplicated and sorted diagnostics
#   - Error recovery (one bad line never stops the run)
# =============================================================================

import pytest

from shack import translate
from shack.errors import (
    ErrorKind,
    LabelNotFoundError,
    SourceLocation,
    VariableNotFoundError,
)
from shack.translator import Translator


COUNTER_PROGRAM = """\
.dec
COUNT
.code
LOAD A #0
STO A COUNT
loop:
LOAD D COUNT
JEQ loop
"""

COUNTER_OUTPUT = [
    "@0",
    "D=A", "@COUNT", "M=D",
    "(loop)",
    "D=A", "@R13", "M=D", "@COUNT", "D=M", "@R13", "A=M",
    "@loop", "D; JEQ",
]


def kinds(result):
    return [error.kind for error in result.diagnostics]


# =============================================================================
# Full Translation Tests
# =============================================================================

class TestFullPipeline:
    """Test complete programs."""

    def test_counter_program(self):
        """Variables and labels resolve with no diagnostics."""
        result = translate(COUNTER_PROGRAM)
        assert result.diagnostics == []
        assert not result.has_errors
        assert result.output == COUNTER_OUTPUT
        assert result.symbols.is_variable("COUNT")
        assert result.symbols.is_label("loop")

    def test_empty_source(self):
        result = translate("")
        assert result.output == []
        assert result.diagnostics == []

    def test_comments_and_blank_lines(self):
        source = """
        // header comment

            INC
        //   INC
        """
        assert translate(source).output == ["D=D+1"]

    def test_default_region_is_code(self):
        assert translate("CLR\nNOT").output == ["D=0", "D=!D"]

    def test_forward_reference(self):
        """Labels defined after their use resolve after pass 1."""
        source = "JMP end\nINC\nend:\nDEC"
        result = translate(source)
        assert result.diagnostics == []
        assert result.output == ["@end", "0; JMP", "D=D+1", "(end)", "D=D-1"]

    def test_forward_variable_declaration(self):
        """Variables may be declared in a .dec region after the code."""
        source = ".code\nADDD TOTAL\n.dec\nTOTAL"
        result = translate(source)
        assert result.diagnostics == []
        assert result.output == ["@TOTAL", "D=D+M"]

    def test_multiple_regions(self):
        source = ".dec\nA1\n.code\nSTO D A1\n.dec\nB1\n.code\nSTO D B1"
        result = translate(source)
        assert result.output == ["@A1", "M=D", "@B1", "M=D"]

    def test_get_text(self):
        assert translate("INC\nDEC").get_text() == "D=D+1\nD=D-1\n"

    def test_translate_lines(self):
        result = Translator().translate_lines(["INC", "  ", "NEG"])
        assert result.output == ["D=D+1", "D=-D"]

    def test_translate_file(self, tmp_path):
        source_file = tmp_path / "counter.shk"
        source_file.write_text(COUNTER_PROGRAM)
        result = Translator().translate_file(source_file)
        assert result.output == COUNTER_OUTPUT

    def test_translate_file_with_undecodable_bytes(self, tmp_path):
        """A non-UTF-8 byte in a comment does not stop the translation."""
        source_file = tmp_path / "latin1.shk"
        source_file.write_bytes(b"// caf\xe9\r\nINC\r\n")
        result = Translator().translate_file(source_file)
        assert result.diagnostics == []
        assert result.output == ["D=D+1"]

    def test_line_terminators(self):
        """\\n, \\r\\n and a lone \\r all end a line."""
        result = translate("INC\r\nDEC\rNEG\nNOT\n")
        assert result.output == ["D=D+1", "D=D-1", "D=-D", "D=!D"]

    def test_form_feed_does_not_split_line(self):
        """Form feeds are whitespace inside a line, not line breaks."""
        result = translate("INC\x0cDEC\nFOO", filename="prog.shk")
        assert result.messages == [
            "Incorrect number of operands for INC",
            "Illegal opcode: FOO",
        ]
        assert [e.location.line for e in result.diagnostics] == [1, 2]

    def test_unicode_separators_do_not_split_line(self):
        result = translate("INC \x85DEC\nFOO")
        assert kinds(result) == [ErrorKind.WRONG_OPERAND_COUNT, ErrorKind.ILLEGAL_INSTRUCTION]
        assert result.diagnostics[1].location.line == 2

    def test_translator_is_reusable(self):
        translator = Translator()
        first = translator.translate("loop:\nJMP loop")
        second = translator.translate("loop:\nJMP loop")
        assert second.diagnostics == []
        assert first.symbols is not second.symbols
        assert first.symbols.labels == ["loop"]


# =============================================================================
# Declaration Tests
# =============================================================================

class TestDeclarations:
    """Test pass 1 handling of variables and labels."""

    def test_redeclared_variable_is_silent(self):
        source = COUNTER_PROGRAM.replace("COUNT\n", "COUNT\nCOUNT\n", 1)
        result = translate(source)
        assert result.diagnostics == []
        assert result.output == COUNTER_OUTPUT

    def test_duplicate_label(self):
        result = translate("loop:\nINC\nloop:\nJMP loop")
        assert result.messages == ["ROM label loop has been defined more than once."]
        assert result.diagnostics[0].location == SourceLocation("<input>", 3)
        # The first definition still stands
        assert result.output == ["(loop)", "D=D+1", "@loop", "0; JMP"]

    def test_label_clashing_with_variable(self):
        result = translate(".dec\nCOUNT\n.code\nCOUNT:")
        assert kinds(result) == [ErrorKind.LABEL_ALREADY_DECLARED]
        assert result.messages == ["ROM label COUNT has been defined as a RAM label."]
        assert result.output == []

    def test_mnemonic_as_variable(self):
        result = translate(".dec\nINC")
        assert result.messages == ["INC is an opcode and may not be used as a label."]

    def test_mnemonic_as_label(self):
        result = translate("JMP:")
        assert kinds(result) == [ErrorKind.INSTRUCTION_NAME_AS_LABEL]

    def test_illegal_variable_name(self):
        result = translate(".dec\nmy-var\n1st")
        assert result.messages == ["Illegal character: -", "Illegal character: 1"]
        assert result.symbols.variables == []

    def test_variable_with_space(self):
        result = translate(".dec\nA B")
        assert result.messages == ["Illegal character:  "]

    def test_empty_label(self):
        result = translate(":")
        assert result.messages == ["Illegal character: :"]

    def test_failed_label_is_not_emitted(self):
        result = translate("bad$:\nINC")
        assert result.output == ["D=D+1"]


# =============================================================================
# Diagnostic Ordering and Deduplication
# =============================================================================

class TestDiagnostics:
    """Test deferred, deduplicated diagnostics."""

    def test_missing_label(self):
        source = COUNTER_PROGRAM.replace("JEQ loop", "JEQ missing")
        result = translate(source)
        assert kinds(result) == [ErrorKind.LABEL_NOT_FOUND]
        assert result.messages == ["Instruction label missing has not been defined."]
        assert result.output == COUNTER_OUTPUT[:-2]

    def test_missing_label_reported_once(self):
        result = translate("JMP missing\nJEQ missing\nJNE missing")
        assert result.messages == ["Instruction label missing has not been defined."]
        assert result.output == []

    def test_missing_labels_sorted_case_insensitively(self):
        result = translate("JMP zeta\nJMP Alpha\nJMP beta")
        assert result.messages == [
            "Instruction label Alpha has not been defined.",
            "Instruction label beta has not been defined.",
            "Instruction label zeta has not been defined.",
        ]

    def test_missing_labels_differing_in_case_collapse(self):
        result = translate("JMP Loop\nJMP loop")
        assert len(result.diagnostics) == 1

    def test_missing_labels_reported_last(self):
        result = translate("JMP missing\nFOO")
        assert kinds(result) == [ErrorKind.ILLEGAL_INSTRUCTION, ErrorKind.LABEL_NOT_FOUND]

    def test_missing_variable_reported_once(self):
        result = translate("ADDD TOTAL\nLOAD D TOTAL\nSTO D TOTAL")
        assert result.messages == ["RAM label TOTAL has not been declared."]
        assert result.output == []

    def test_missing_variables_first_seen_order(self):
        result = translate("ADDD ZED\nADDD ABE\nADDD ZED")
        assert result.messages == [
            "RAM label ZED has not been declared.",
            "RAM label ABE has not been declared.",
        ]
        assert all(isinstance(e, VariableNotFoundError) for e in result.diagnostics)

    def test_variable_as_jump_target(self):
        result = translate(".dec\nCOUNT\n.code\nJMP COUNT")
        assert kinds(result) == [ErrorKind.INVALID_JUMP_TARGET]

    def test_locations(self):
        result = translate("INC\nINC X\n\nFOO", filename="prog.shk")
        assert [str(e.location) for e in result.diagnostics] == ["prog.shk:2", "prog.shk:4"]
        assert str(result.diagnostics[0]) == (
            "prog.shk:2: error: Incorrect number of operands for INC"
        )

    def test_label_location_is_first_reference(self):
        result = translate("INC\nJMP gone\nJMP gone")
        error = result.diagnostics[0]
        assert isinstance(error, LabelNotFoundError)
        assert error.location.line == 2

    def test_pass1_errors_before_pass2_errors(self):
        """Declaration errors are found in pass 1, before any encoding."""
        result = translate("FOO\n.dec\nbad!")
        assert kinds(result) == [ErrorKind.ILLEGAL_CHARACTER, ErrorKind.ILLEGAL_INSTRUCTION]


# =============================================================================
# Error Recovery
# =============================================================================

class TestErrorRecovery:
    """A bad line never stops the translation."""

    def test_every_defect_reported(self):
        source = """\
.dec
COUNT
bad-name
.code
INC 1
LOAD M COUNT
STO D #3
ADDD #99999
BOGUS
JMP COUNT
JMP nowhere
DEC
"""
        result = translate(source)
        assert kinds(result) == [
            ErrorKind.ILLEGAL_CHARACTER,
            ErrorKind.WRONG_OPERAND_COUNT,
            ErrorKind.ILLEGAL_OPERAND,
            ErrorKind.ILLEGAL_OPERAND,
            ErrorKind.ILLEGAL_OPERAND,
            ErrorKind.ILLEGAL_INSTRUCTION,
            ErrorKind.INVALID_JUMP_TARGET,
            ErrorKind.LABEL_NOT_FOUND,
        ]
        assert result.output == ["D=D-1"]

    @pytest.mark.parametrize("line", [
        "ADDD #32768", "LOAD A #32768", "LOAD D #32768", "STO D 32768", "JMP 32768",
    ])
    def test_out_of_range_literals(self, line):
        result = translate(line)
        assert kinds(result) == [ErrorKind.ILLEGAL_OPERAND]
        assert result.output == []

    def test_error_report(self):
        translator = Translator()
        translator.translate("FOO\nJMP gone")
        assert translator.has_errors()
        report = translator.get_error_report()
        assert report.splitlines() == [
            "<input>:1: error: Illegal opcode: FOO",
            "<input>:2: error: Instruction label gone has not been defined.",
            "2 errors",
        ]
