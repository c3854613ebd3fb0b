from __future__ import annotations

import pytest

from bnfmatch import EngineConfig, load_grammar
from bnfmatch.errors import DuplicateSymbol, GrammarLoadError, MalformedDefinition, UndefinedSymbols
from bnfmatch.loader import SourceMap, combine_sources, read_text


def test_load_grammar_from_file(grammar_file, sentence_source) -> None:
    path = grammar_file(sentence_source)

    grammar = load_grammar(path)

    assert grammar.path == str(path)
    assert grammar.matches("sentence", "a dog sees the cat")


def test_dictionary_supplies_missing_symbols(grammar_file) -> None:
    main = grammar_file("<greeting> ::= hello <name>\n")
    names = grammar_file('<name> ::= alice | bob | "carol"\n', name="names.bnd")

    with pytest.raises(UndefinedSymbols) as exc_info:
        load_grammar(main)
    assert exc_info.value.names == ["name"]

    grammar = load_grammar(main, dictionaries=[names])
    assert grammar.symbols == ["greeting", "name"]
    assert grammar.matches("greeting", "Hello Carol")


def test_dictionary_without_trailing_newline_starts_new_line(grammar_file) -> None:
    main = grammar_file("<s> ::= <t>")
    extra = grammar_file("<t> ::= x", name="extra.bnd")

    assert load_grammar(main, dictionaries=[extra]).matches("s", "x")


def test_missing_file_raises_load_error(tmp_path) -> None:
    with pytest.raises(GrammarLoadError) as exc_info:
        load_grammar(tmp_path / "nope.bn")

    assert "nope.bn" in str(exc_info.value)


def test_config_encoding_is_used(tmp_path) -> None:
    path = tmp_path / "latin.bn"
    path.write_bytes('<s> ::= "café"\n'.encode("latin-1"))

    grammar = load_grammar(path, config=EngineConfig(encoding="latin-1"))

    assert grammar.matches("s", "CAFÉ")
    with pytest.raises(GrammarLoadError):
        read_text(path)


def test_combine_sources() -> None:
    assert combine_sources("<a> ::= x", ["<b> ::= y", "<c> ::= z"]) == "<a> ::= x\n<b> ::= y\n<c> ::= z"


class TestDictionaryErrorLocations:
    def test_duplicate_in_dictionary_points_at_dictionary(self, grammar_file) -> None:
        main = grammar_file("<s> ::= <w>\n")
        words = grammar_file("<w> ::= x\n<s> ::= y", name="words.bnd")

        with pytest.raises(DuplicateSymbol) as exc_info:
            load_grammar(main, dictionaries=[words])

        error = exc_info.value
        assert error.path == str(words)
        assert error.line == 2
        assert error.format().startswith(f"Symbol <s> already declared. ({words}:2;")
        assert error.hint == f"<s> was first declared at {main}:1"

    def test_error_in_second_dictionary(self, grammar_file) -> None:
        main = grammar_file("<s> ::= <a> <b>")
        first = grammar_file("<a> ::= x\n\n", name="a.bnd")
        second = grammar_file("\n<b> ::= y\nb ::= z\n", name="b.bnd")

        with pytest.raises(MalformedDefinition) as exc_info:
            load_grammar(main, dictionaries=[first, second])

        assert exc_info.value.path == str(second)
        assert exc_info.value.line == 3

    def test_error_in_main_file_is_unchanged(self, grammar_file) -> None:
        main = grammar_file("<s> ::= <w>\n<s> ::= z\n")
        words = grammar_file("<w> ::= x\n", name="words.bnd")

        with pytest.raises(DuplicateSymbol) as exc_info:
            load_grammar(main, dictionaries=[words])

        assert exc_info.value.path == str(main)
        assert exc_info.value.line == 2


def test_source_map_locate() -> None:
    source_map = SourceMap([("g.bn", "<s> ::= <w>\n"), ("d.bnd", "<w> ::= x\n<t> ::= y")])

    assert source_map.locate(1) == ("g.bn", 1)
    assert source_map.locate(3) == ("d.bnd", 1)
    assert source_map.locate(4) == ("d.bnd", 2)
