# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for canonical statement assembly."""

from clformat.assembler.command import build_command, group_element_keys, values_equal
from clformat.model.metadata import ElementDef, ParameterDef, QualifierDef
from clformat.parser.parameters import parse_parameters

# ###############
# Test Helpers
# ###############

_QUAL2 = (QualifierDef(type="NAME"), QualifierDef(type="NAME", special_values=("*LIBL", "*CURLIB")))

PGM = ParameterDef(keyword="PGM", type="QUAL", qualifiers=_QUAL2)
PARM = ParameterDef(keyword="PARM", max=255)
CALL_PARAMS = (PGM, PARM)

LIB = ParameterDef(keyword="LIB", type="NAME")
OUTPUT = ParameterDef(keyword="OUTPUT", default="*", allowed_values=("*", "*PRINT"))
TEXT = ParameterDef(keyword="TEXT", type="CHAR")
LOG = ParameterDef(
    keyword="LOG",
    elements=(ElementDef(type="INT2"), ElementDef(type="INT2"), ElementDef(type="CHAR")),
)


# ###############
# Basic Assembly
# ###############


class TestBuildCommand:
    def test_call_statement(self) -> None:
        values = {"PGM": ["MYPGM", "MYLIB"], "PARM": ["'A'", "'B'"]}
        assert build_command("CALL", values, CALL_PARAMS) == "CALL PGM(MYLIB/MYPGM) PARM('A' 'B')"

    def test_declaration_order_wins_over_value_order(self) -> None:
        values = {"PARM": ["'A'"], "PGM": ["MYPGM", "MYLIB"]}
        assert build_command("CALL", values, CALL_PARAMS) == "CALL PGM(MYLIB/MYPGM) PARM('A')"

    def test_libl_prefix_is_dropped(self) -> None:
        assert build_command("*LIBL/CALL", {"PGM": ["X"]}, CALL_PARAMS) == "CALL PGM(X)"

    def test_other_qualified_command_is_kept(self) -> None:
        assert build_command("QSYS/CALL", {"PGM": ["X"]}, CALL_PARAMS) == "QSYS/CALL PGM(X)"

    def test_command_without_values(self) -> None:
        assert build_command("RETURN", {}, ()) == "RETURN"

    def test_label_is_prefixed(self) -> None:
        assert build_command("CALL", {"PGM": "MYPGM"}, CALL_PARAMS, label="start") == "START: CALL PGM(MYPGM)"

    def test_unknown_keyword_is_not_emitted(self) -> None:
        assert build_command("X", {"FOO": "1"}, (TEXT,)) == "X"

    def test_value_keys_are_case_insensitive(self) -> None:
        assert build_command("DSPLIB", {"lib": "qgpl"}, (LIB,)) == "DSPLIB LIB(QGPL)"


# ###############
# Omission
# ###############


class TestOmission:
    def test_blank_values_are_omitted(self) -> None:
        assert build_command("CALL", {"PGM": "", "PARM": ["", " "]}, CALL_PARAMS) == "CALL"

    def test_default_is_omitted_when_not_typed(self) -> None:
        values = {"LIB": "QGPL", "OUTPUT": "*"}
        assert build_command("DSPLIB", values, (LIB, OUTPUT)) == "DSPLIB LIB(QGPL)"

    def test_default_is_kept_when_typed(self) -> None:
        values = {"LIB": "QGPL", "OUTPUT": "*"}
        assert build_command("DSPLIB", values, (LIB, OUTPUT), present={"OUTPUT"}) == "DSPLIB LIB(QGPL) OUTPUT(*)"

    def test_default_comparison_ignores_case(self) -> None:
        output = ParameterDef(keyword="OUTPUT", default="*PRINT", allowed_values=("*", "*PRINT"))
        assert build_command("DSPLIB", {"OUTPUT": "*print"}, (output,)) == "DSPLIB"

    def test_qualified_default(self) -> None:
        prtf = ParameterDef(keyword="PRTF", qualifiers=_QUAL2, default="*LIBL/QSYSPRT")
        assert build_command("X", {"PRTF": ["QSYSPRT", "*LIBL"]}, (prtf,)) == "X"
        assert build_command("X", {"PRTF": "*libl/qsysprt"}, (prtf,)) == "X"
        assert build_command("X", {"PRTF": ["MYPRTF", "*LIBL"]}, (prtf,)) == "X PRTF(*LIBL/MYPRTF)"

    def test_multi_instance_qualified_default(self) -> None:
        file = ParameterDef(keyword="FILE", max=2, qualifiers=_QUAL2, default="*LIBL/QSYSPRT")
        values = parse_parameters("X FILE(*LIBL/QSYSPRT)", (file,))
        assert values == {"FILE": [["QSYSPRT", "*LIBL"]]}
        assert build_command("X", values, (file,)) == "X"
        assert build_command("X", values, (file,), present={"FILE"}) == "X FILE(*LIBL/QSYSPRT)"
        assert build_command("X", {"FILE": "*libl/qsysprt"}, (file,)) == "X"
        two = {"FILE": [["A", "*LIBL"], ["QSYSPRT", "*LIBL"]]}
        assert build_command("X", two, (file,)) == "X FILE(*LIBL/A *LIBL/QSYSPRT)"

    def test_non_default_value_is_kept(self) -> None:
        assert build_command("DSPLIB", {"OUTPUT": "*PRINT"}, (OUTPUT,)) == "DSPLIB OUTPUT(*PRINT)"


# ###############
# Quoting Inputs
# ###############


class TestQuotingInputs:
    def test_free_text_is_quoted(self) -> None:
        assert build_command("X", {"TEXT": "it's"}, (TEXT,)) == "X TEXT('it''s')"

    def test_missing_maps_degrade_to_plain_quoting(self) -> None:
        result = build_command("X", {"TEXT": "hello world"}, (TEXT,), allowed_values={}, types={})
        assert result == "X TEXT('hello world')"

    def test_explicit_allowed_values(self) -> None:
        result = build_command("X", {"TEXT": "hello world"}, (TEXT,), allowed_values={"TEXT": ["HELLO WORLD"]})
        assert result == "X TEXT(HELLO WORLD)"

    def test_single_item_list_for_scalar_parameter(self) -> None:
        assert build_command("X", {"TEXT": ["hello world"]}, (TEXT,)) == "X TEXT('hello world')"

    def test_command_typed_value_is_verbatim(self) -> None:
        cond = ParameterDef(keyword="COND", type="LGL")
        then = ParameterDef(keyword="THEN", type="CMD")
        values = {"COND": "&A *EQ 1", "THEN": "goto cmdlbl(end)"}
        assert build_command("IF", values, (cond, then)) == "IF COND(&A *EQ 1) THEN(goto cmdlbl(end))"

    def test_multi_instance_string(self) -> None:
        tolibl = ParameterDef(keyword="TOLIBL", max=3)
        assert build_command("X", {"TOLIBL": "liba  libb"}, (tolibl,)) == "X TOLIBL(LIBA LIBB)"


# ###############
# Element Lists and Qualified Names
# ###############


class TestStructuredValues:
    def test_element_list(self) -> None:
        assert build_command("SBMJOB", {"LOG": ["4", "0", "*nolist"]}, (LOG,)) == "SBMJOB LOG(4 0 *NOLIST)"

    def test_element_list_from_one_string(self) -> None:
        assert build_command("SBMJOB", {"LOG": "4 00 *nolist"}, (LOG,)) == "SBMJOB LOG(4 00 *NOLIST)"

    def test_element_occurrence_strings(self) -> None:
        file = ParameterDef(keyword="FILE", max=5, elements=(ElementDef(), ElementDef()))
        assert build_command("X", {"FILE": ["a b", "(C D)"]}, (file,)) == "X FILE((A B) (C D))"

    def test_flat_element_keys(self) -> None:
        values = {"LOG_ELEM0": "4", "LOG_ELEM1": "0", "LOG_ELEM2": "*NOLIST"}
        assert build_command("SBMJOB", values, (LOG,)) == "SBMJOB LOG(4 0 *NOLIST)"

    def test_multi_instance_element_list(self) -> None:
        file = ParameterDef(keyword="FILE", max=5, elements=(ElementDef(), ElementDef()))
        values = {"FILE": [["A", "B"], ["C", "D"]]}
        assert build_command("X", values, (file,)) == "X FILE((A B) (C D))"

    def test_qualified_element(self) -> None:
        tofile = ParameterDef(
            keyword="TOFILE",
            elements=(ElementDef(type="CHAR"), ElementDef(qualifiers=_QUAL2)),
        )
        values = {"TOFILE": ["*YES", ["MYFILE", "MYLIB"]]}
        assert build_command("X", values, (tofile,)) == "X TOFILE(*YES MYLIB/MYFILE)"

    def test_multi_instance_qualified(self) -> None:
        files = ParameterDef(keyword="FILES", max=10, qualifiers=_QUAL2)
        values = {"FILES": [["F1", "L1"], ["F2", "L2"]]}
        assert build_command("X", values, (files,)) == "X FILES(L1/F1 L2/F2)"

    def test_blank_qualifier_part_is_dropped(self) -> None:
        assert build_command("CALL", {"PGM": ["MYPGM", ""]}, CALL_PARAMS) == "CALL PGM(MYPGM)"

    def test_interior_blank_element_is_placeholder(self) -> None:
        opt = ParameterDef(keyword="OPT", elements=(ElementDef(), ElementDef(), ElementDef()))
        assert build_command("X", {"OPT": ["A", "", "C"]}, (opt,)) == "X OPT(A *N C)"

    def test_trailing_blank_elements_are_dropped(self) -> None:
        opt = ParameterDef(keyword="OPT", elements=(ElementDef(), ElementDef(), ElementDef()))
        assert build_command("X", {"OPT": ["A", "", ""]}, (opt,)) == "X OPT(A)"


# ###############
# Helpers
# ###############


class TestGroupElementKeys:
    def test_simple_elements(self) -> None:
        values = {"LOG_ELEM0": "4", "LOG_ELEM1": "0", "LOG_ELEM2": "*NOLIST", "JOB": "X"}
        assert group_element_keys(values) == {"JOB": "X", "LOG": ["4", "0", "*NOLIST"]}

    def test_nested_elements(self) -> None:
        values = {"TOPGMQ_ELEM0": "*PRV", "TOPGMQ_ELEM1_0": "*", "TOPGMQ_ELEM1_1": "X"}
        assert group_element_keys(values) == {"TOPGMQ": ["*PRV", ["*", "X"]]}

    def test_plain_keys_are_copied(self) -> None:
        assert group_element_keys({"A": "1", "B": ["2"]}) == {"A": "1", "B": ["2"]}


class TestValuesEqual:
    def test_qualified_string_equals_parts(self) -> None:
        assert values_equal("a/b", ["A", "B"])

    def test_single_item_list_equals_item(self) -> None:
        assert values_equal(["x"], " X ")

    def test_different_lengths_differ(self) -> None:
        assert not values_equal(["A", "B"], ["A"])
