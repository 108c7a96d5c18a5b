"""
Lexer: symbol filtering and one-shot iteration.
"""

from bfcollapse.lexer import Lexer, is_code_char, lex


def test_keeps_only_instruction_symbols():
    assert list(Lexer("Hi+-x[y]")) == ['+', '-', '[', ']']


def test_all_symbols_in_order():
    assert list(Lexer("-+.,[]<>")) == ['-', '+', '.', ',', '[', ']', '<', '>']


def test_non_alphabet_filtered_out():
    source = "Hello world +- [blahblahblah] --> >< ,"
    assert list(lex(source)) == ['+', '-', '[', ']', '-', '-', '>', '>', '<', ',']


def test_empty_and_comment_only_sources():
    assert list(Lexer("")) == []
    assert list(Lexer("just a comment\n\twith 123 digits!")) == []


def test_lexer_is_not_restartable():
    lexer = Lexer("+-")
    assert list(lexer) == ['+', '-']
    assert list(lexer) == []


def test_offset_tracks_last_symbol():
    lexer = Lexer("ab+\nc]")
    assert lexer.offset == -1
    assert next(lexer) == '+'
    assert lexer.offset == 2
    assert next(lexer) == ']'
    assert lexer.offset == 5


def test_is_code_char():
    assert all(is_code_char(ch) for ch in "+-[]<>.,")
    assert not any(is_code_char(ch) for ch in "ab 1\n#")


def test_lex_builds_a_fresh_lexer_each_time():
    source = "a+b-"
    assert list(lex(source)) == ['+', '-']
    assert list(lex(source)) == ['+', '-']
