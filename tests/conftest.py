"""Shared pytest fixtures for bnfmatch tests."""

import textwrap

import pytest

from bnfmatch import parse_grammar


SENTENCE_GRAMMAR = textwrap.dedent(
    """
    <sentence> ::= <noun-phrase> <verb-phrase>
    <noun-phrase> ::= <article> <noun> | <noun>
    <verb-phrase> ::= <verb> | <verb> <noun-phrase>

    <article> ::= "the" | "a"
    <noun> ::= cat | dog | "fish"
    <verb> ::= sees | chases
    """
)


@pytest.fixture
def sentence_source():
    """Grammar text for a tiny English sentence language."""
    return SENTENCE_GRAMMAR


@pytest.fixture
def sentence_grammar():
    return parse_grammar(SENTENCE_GRAMMAR)


@pytest.fixture
def grammar_file(tmp_path):
    """Write grammar text to ``tmp_path`` and return the file path."""

    def _write(text, name="grammar.bn"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(text), encoding="utf-8")
        return path

    return _write
