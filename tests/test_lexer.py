"""Tests for the tokenizer: strings, operators, whitespace, unknown characters."""

from __future__ import annotations

import io

import pytest

from strcalc.errors import SourceReadError
from strcalc.lexer import Lexer, tokenize
from strcalc.tokens import EndToken, OpToken, StringToken

from tests.conftest import token_texts


class TestStrings:
    def test_single_digit(self, lex):
        tokens = lex("7")
        assert len(tokens) == 1
        assert isinstance(tokens[0], StringToken)
        assert bytes(tokens[0].value) == b"7"

    def test_maximal_run(self, lex):
        assert token_texts(lex("1234567890")) == ["1234567890"]

    def test_run_longer_than_initial_capacity(self, lex):
        digits = "9" * 100
        assert token_texts(lex(digits)) == [digits]

    def test_terminator_belongs_to_next_token(self, lex):
        assert token_texts(lex("12.34")) == ["12", ".", "34"]

    def test_span_covers_digits(self, lex):
        tok = lex("  123")[0]
        assert tok.span.start.column == 3
        assert tok.span.end.column == 6
        assert tok.span.start.offset == 2


class TestOperators:
    @pytest.mark.parametrize("op", ["(", ")", ".", "^"])
    def test_single_operator(self, lex, op):
        tokens = lex(op)
        assert len(tokens) == 1
        assert isinstance(tokens[0], OpToken)
        assert tokens[0].op == op

    def test_adjacent_operators(self, lex):
        assert token_texts(lex("((^.))")) == ["(", "(", "^", ".", ")", ")"]


class TestWhitespace:
    def test_all_whitespace_kinds_skipped(self, lex):
        assert token_texts(lex(" 1\t.\b2\v^\r3\n")) == ["1", ".", "2", "^", "3"]

    def test_whitespace_splits_strings(self, lex):
        assert token_texts(lex("1 2")) == ["1", "2"]

    def test_only_whitespace(self, lex):
        assert lex(" \n\t ") == []

    def test_newline_advances_line(self, lex):
        tok = lex("\n\n  5")[0]
        assert tok.span.start.line == 3
        assert tok.span.start.column == 3


class TestUnrecognized:
    def test_character_skipped(self, lex):
        assert token_texts(lex("1#2")) == ["1", "2"]

    def test_warning_recorded(self):
        lexer = Lexer("9#9")
        while not isinstance(lexer.next_token(), EndToken):
            pass
        assert len(lexer.warnings) == 1
        warning = lexer.warnings[0]
        assert "ignoring unrecognized character" in warning.message
        assert "'#'" in warning.message
        assert warning.position.column == 2

    def test_callback_called_per_character(self):
        seen = []
        lexer = Lexer("a+b", on_warning=seen.append)
        assert isinstance(lexer.next_token(), EndToken)
        assert [w.position.column for w in seen] == [1, 2, 3]

    def test_letters_are_not_digits(self, lex):
        assert lex("abc") == []

    def test_non_ascii_digit_skipped(self, lex):
        # Arabic-Indic digit three is not an ASCII digit
        assert token_texts(lex("1٣2")) == ["1", "2"]

    def test_warning_format(self):
        lexer = Lexer("#")
        lexer.next_token()
        formatted = lexer.warnings[0].format("prog.sc")
        assert formatted.startswith("warning:")
        assert "prog.sc:1:1" in formatted


class TestEndOfInput:
    def test_empty_source(self):
        tokens = tokenize("")
        assert len(tokens) == 1
        assert isinstance(tokens[0], EndToken)

    def test_end_repeats(self):
        lexer = Lexer("1")
        lexer.next_token()
        assert isinstance(lexer.next_token(), EndToken)
        assert isinstance(lexer.next_token(), EndToken)

    def test_tokenize_ends_with_end_token(self):
        tokens = tokenize("1.2")
        assert isinstance(tokens[-1], EndToken)
        assert token_texts(tokens) == ["1", ".", "2", "<end>"]


class TestStreams:
    def test_reads_text_stream(self):
        assert token_texts(tokenize(io.StringIO("12^3"))) == ["12", "^", "3", "<end>"]

    def test_text_records_consumed_input(self):
        lexer = Lexer("12 . 3")
        lexer.next_token()
        lexer.next_token()
        assert lexer.text.startswith("12 .")

    def test_read_failure_raises(self):
        class Broken(io.StringIO):
            def read(self, size=-1):
                raise OSError("device unplugged")

        with pytest.raises(SourceReadError, match="device unplugged"):
            Lexer(Broken()).next_token()

    def test_end_of_input_is_remembered(self):
        class Scripted(io.StringIO):
            def __init__(self, chunks):
                super().__init__()
                self.chunks = list(chunks)
                self.reads = 0

            def read(self, size=-1):
                self.reads += 1
                return self.chunks.pop(0) if self.chunks else ""

        stream = Scripted(["1", "", "2"])
        lexer = Lexer(stream)
        tokens = [lexer.next_token() for _ in range(3)]
        assert isinstance(tokens[0], StringToken)
        assert isinstance(tokens[1], EndToken)
        assert isinstance(tokens[2], EndToken)
        assert stream.reads == 2
        assert stream.chunks == ["2"]

    def test_undecodable_byte_skipped_with_warning(self):
        raw = io.TextIOWrapper(io.BytesIO(b"1\xff2"), encoding="utf-8", errors="surrogateescape")
        lexer = Lexer(raw)
        assert token_texts([lexer.next_token(), lexer.next_token()]) == ["1", "2"]
        assert len(lexer.warnings) == 1
        assert lexer.warnings[0].position.column == 2
