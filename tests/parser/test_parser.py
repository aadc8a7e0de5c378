# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the CL structural parser."""

from clformat.model.ast import (
    CLNode,
    CLParameter,
    CommandCall,
    Expression,
    FunctionCall,
    NestedArray,
    ScalarString,
)
from clformat.parser.lexer import Token, TokenType
from clformat.parser.parser import command_text, parse, parse_command, split_label, value_text

# ###############
# Command Names
# ###############


class TestCommandName:
    def test_empty_input_gives_empty_node(self) -> None:
        node = parse([])
        assert node.name == ""
        assert node.parameters == []

    def test_blank_input_gives_empty_node(self) -> None:
        assert parse_command("   ").name == ""

    def test_command_without_parameters(self) -> None:
        node = parse_command("RETURN")
        assert node.name == "RETURN"
        assert node.parameters == []

    def test_leading_blanks_are_skipped(self) -> None:
        assert parse_command("   CALL PGM(A/B)").name == "CALL"

    def test_qualified_command_name(self) -> None:
        assert parse_command("QSYS/CALL PGM(X)").name == "QSYS/CALL"


# ###############
# Parameters
# ###############


class TestParameters:
    def test_qualified_value_is_scalar(self) -> None:
        node = parse_command("CALL PGM(MYLIB/MYPGM)")
        assert node.parameters == [CLParameter(name="PGM", value=ScalarString("MYLIB/MYPGM"))]

    def test_string_value_is_scalar(self) -> None:
        node = parse_command("SNDPGMMSG MSGDTA('Hello world')")
        assert node.parameters[0].value == ScalarString("'Hello world'")

    def test_variable_and_special_value_are_scalar(self) -> None:
        node = parse_command("CHKOBJ OBJ(&OBJ) OBJTYPE(*ALL)")
        assert node.parameters[0].value == ScalarString("&OBJ")
        assert node.parameters[1].value == ScalarString("*ALL")

    def test_bare_name_value_is_expression(self) -> None:
        value = parse_command("CALL PGM(MYPGM)").parameters[0].value
        assert isinstance(value, Expression)
        assert value_text(value) == "MYPGM"

    def test_multiple_values_form_expression(self) -> None:
        value = parse_command("CALL PARM('A' 'B')").parameters[0].value
        assert isinstance(value, Expression)
        assert len(value.tokens) == 3
        assert value_text(value) == "'A' 'B'"

    def test_parameters_keep_source_order(self) -> None:
        node = parse_command("CALL PARM('A') PGM(X/Y)")
        assert [p.name for p in node.parameters] == ["PARM", "PGM"]

    def test_empty_parentheses(self) -> None:
        value = parse_command("X KWD()").parameters[0].value
        assert value == Expression(tokens=[])
        assert value_text(value) == ""

    def test_nested_command(self) -> None:
        node = parse_command("IF COND(&A *EQ 1) THEN(GOTO CMDLBL(END))")
        assert [p.name for p in node.parameters] == ["COND", "THEN"]
        assert value_text(node.parameters[0].value) == "&A *EQ 1"
        assert value_text(node.parameters[1].value) == "GOTO CMDLBL(END)"

    def test_nested_parentheses(self) -> None:
        node = parse_command("X FILE((A B) (C D)) NEXT(1)")
        assert value_text(node.parameters[0].value) == "(A B) (C D)"
        assert node.parameters[1] == CLParameter(name="NEXT", value=ScalarString("1"))

    def test_lowercase_keywords_are_kept(self) -> None:
        node = parse_command("call pgm(lib/prog)")
        assert node.name == "call"
        assert node.parameters[0].name == "pgm"


# ###############
# Tolerance
# ###############


class TestTolerance:
    def test_positional_value_is_dropped(self) -> None:
        node = parse_command("MONMSG CPF0000 EXEC(GOTO ERROR)")
        assert [p.name for p in node.parameters] == ["EXEC"]

    def test_blank_before_parenthesis_is_not_a_parameter(self) -> None:
        assert parse_command("X KWD (Y)").parameters == []

    def test_unclosed_value_runs_to_end(self) -> None:
        node = parse_command("X KWD(123")
        assert node.parameters == [CLParameter(name="KWD", value=ScalarString("123"))]

    def test_value_token_with_identifier_shape_names_parameter(self) -> None:
        tokens = [
            Token(TokenType.COMMAND, "X"),
            Token(TokenType.SPACE, " "),
            Token(TokenType.VALUE, "KWD"),
            Token(TokenType.PAREN_OPEN, "("),
            Token(TokenType.VALUE, "1"),
            Token(TokenType.PAREN_CLOSE, ")"),
        ]
        assert parse(tokens).parameters == [CLParameter(name="KWD", value=ScalarString("1"))]

    def test_value_token_without_identifier_shape_is_dropped(self) -> None:
        tokens = [
            Token(TokenType.COMMAND, "X"),
            Token(TokenType.VALUE, "A/B"),
            Token(TokenType.PAREN_OPEN, "("),
            Token(TokenType.VALUE, "1"),
            Token(TokenType.PAREN_CLOSE, ")"),
        ]
        assert parse(tokens).parameters == []


# ###############
# Labels
# ###############


class TestSplitLabel:
    def test_label(self) -> None:
        assert split_label("START: SNDPGMMSG MSG(X)") == ("START", "SNDPGMMSG MSG(X)")

    def test_label_without_blank(self) -> None:
        assert split_label("loop:CALL PGM(A)") == ("loop", "CALL PGM(A)")

    def test_no_label(self) -> None:
        assert split_label("  CALL PGM(A)") == (None, "CALL PGM(A)")

    def test_colon_inside_value_is_not_a_label(self) -> None:
        assert split_label("SNDPGMMSG MSG('a: b')") == (None, "SNDPGMMSG MSG('a: b')")


# ###############
# Rendering
# ###############


class TestValueText:
    def test_nested_array(self) -> None:
        assert value_text(NestedArray([ScalarString("A"), ScalarString("B")])) == "(A B)"

    def test_function_call(self) -> None:
        call = FunctionCall("%SST", [ScalarString("&NAME"), ScalarString("1"), ScalarString("5")])
        assert value_text(call) == "%SST(&NAME 1 5)"

    def test_command_call(self) -> None:
        nested = CLNode("GOTO", [CLParameter("CMDLBL", ScalarString("END"))])
        assert value_text(CommandCall(nested)) == "GOTO CMDLBL(END)"

    def test_command_text_round_trips_parsed_statement(self) -> None:
        statement = "CALL PGM(MYLIB/MYPGM) PARM('A' 'B')"
        assert command_text(parse_command(statement)) == statement
