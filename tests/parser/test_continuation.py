# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for folding continued source lines into statements."""

from clformat.parser.continuation import join_continuations


class TestJoinContinuations:
    def test_single_line(self) -> None:
        assert join_continuations(["  RETURN  "]) == ["RETURN"]

    def test_plus_drops_leading_blanks_of_next_line(self) -> None:
        lines = ["CALL PGM(X) +", "          PARM('A')"]
        assert join_continuations(lines) == ["CALL PGM(X) PARM('A')"]

    def test_plus_joins_a_split_word(self) -> None:
        lines = ["SNDPGMMSG MSG('Hel+", "    lo')"]
        assert join_continuations(lines) == ["SNDPGMMSG MSG('Hello')"]

    def test_minus_keeps_leading_blanks_of_next_line(self) -> None:
        lines = ["SNDPGMMSG MSG('Hello   -", "  world')"]
        assert join_continuations(lines) == ["SNDPGMMSG MSG('Hello  world')"]

    def test_several_continuations(self) -> None:
        lines = [
            "SNDPGMMSG MSGID(CPF9898) +",
            "          MSGF(QCPFMSG) +",
            "          MSGTYPE(*ESCAPE)",
        ]
        assert join_continuations(lines) == ["SNDPGMMSG MSGID(CPF9898) MSGF(QCPFMSG) MSGTYPE(*ESCAPE)"]

    def test_comments_are_separate_entries(self) -> None:
        lines = ["/* Start */", "CALL PGM(A)", "  /* End */"]
        assert join_continuations(lines) == ["/* Start */", "CALL PGM(A)", "/* End */"]

    def test_blank_lines_are_dropped(self) -> None:
        assert join_continuations(["", "RETURN", "   ", "ENDPGM"]) == ["RETURN", "ENDPGM"]

    def test_continuation_on_last_line_is_removed(self) -> None:
        assert join_continuations(["RETURN +"]) == ["RETURN"]

    def test_line_endings_are_stripped(self) -> None:
        assert join_continuations(["CALL PGM(A) +\r\n", "  PARM(B)\r\n"]) == ["CALL PGM(A) PARM(B)"]
