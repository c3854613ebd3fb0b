from __future__ import annotations

import pytest

from bnfmatch.errors import (
    DuplicateSymbol,
    EmptyGrammar,
    MalformedDefinition,
    NestedGroupsUnsupported,
    UnmatchedGroup,
    UnsupportedRecursion,
)
from bnfmatch.grammar import (
    Alternation,
    Group,
    ItemRun,
    Literal,
    Quantifier,
    Reference,
    Sequence,
    parse_definitions,
)


def lit(*texts):
    return tuple(Literal(text) for text in texts)


def parse_one(source):
    definitions = parse_definitions(source)
    assert len(definitions) == 1
    return definitions[0].node


def test_alternation_is_left_associative() -> None:
    node = parse_one('<s> ::= "a" | "b" | "c"')

    assert node == Alternation(
        left=Alternation(
            left=Sequence((ItemRun(lit("a")),)),
            right=Sequence((ItemRun(lit("b")),)),
        ),
        right=Sequence((ItemRun(lit("c")),)),
    )


def test_references_and_bare_literals() -> None:
    node = parse_one("<s> ::= <noun> runs fast")

    assert node == Sequence((ItemRun((Reference("noun"), Literal("runs"), Literal("fast"))),))


def test_group_with_explicit_quantifier() -> None:
    node = parse_one('<s> ::= "a" { "b" } ? "c"')

    assert node == Sequence(
        (
            ItemRun(lit("a")),
            Group(lit("b"), Quantifier.OPTIONAL),
            ItemRun(lit("c")),
        )
    )


def test_square_brackets_parse_as_optional_group() -> None:
    assert parse_one('<s> ::= "a" [ "b" ] "c"') == parse_one('<s> ::= "a" { "b" }? "c"')


@pytest.mark.parametrize(
    "suffix, quantifier",
    [
        ("*", Quantifier.ZERO_OR_MORE),
        ("+", Quantifier.ONE_OR_MORE),
        ("?", Quantifier.OPTIONAL),
        ("", Quantifier.ZERO_OR_MORE),
    ],
)
def test_group_quantifier_tags(suffix, quantifier) -> None:
    node = parse_one(f"<s> ::= {{ x }}{suffix}")

    assert node == Sequence((Group(lit("x"), quantifier),))


def test_default_quantifier_does_not_consume_next_token() -> None:
    node = parse_one("<s> ::= { x } y")

    assert node == Sequence((Group(lit("x"), Quantifier.ZERO_OR_MORE), ItemRun(lit("y"))))


@pytest.mark.parametrize(
    "source, expected",
    [
        (
            '<s> ::= [ "b" ] | "c"',
            Alternation(
                left=Sequence((Group(lit("b"), Quantifier.OPTIONAL),)),
                right=Sequence((ItemRun(lit("c")),)),
            ),
        ),
        (
            '<s> ::= "a" | [ "b" ]',
            Alternation(
                left=Sequence((ItemRun(lit("a")),)),
                right=Sequence((Group(lit("b"), Quantifier.OPTIONAL),)),
            ),
        ),
        (
            '<s> ::= { "a" }+ | "c"',
            Alternation(
                left=Sequence((Group(lit("a"), Quantifier.ONE_OR_MORE),)),
                right=Sequence((ItemRun(lit("c")),)),
            ),
        ),
    ],
)
def test_groups_beside_alternation(source, expected) -> None:
    assert parse_one(source) == expected


def test_groups_between_runs_keep_source_order() -> None:
    node = parse_one("<s> ::= a { b } c d { e }+")

    assert node.segments == (
        ItemRun(lit("a")),
        Group(lit("b"), Quantifier.ZERO_OR_MORE),
        ItemRun(lit("c", "d")),
        Group(lit("e"), Quantifier.ONE_OR_MORE),
    )


def test_quoted_operators_are_literals() -> None:
    node = parse_one('<s> ::= "|" "{" "<s>"')

    assert node == Sequence((ItemRun(lit("|", "{", "<s>")),))


def test_continuation_lines_extend_the_definition() -> None:
    source = "\n".join(
        [
            '<s> ::= "a"',
            '    "b" | "c"',
            "",
            "<t> ::= x",
        ]
    )

    definitions = parse_definitions(source)

    assert [(d.name, d.line) for d in definitions] == [("s", 1), ("t", 4)]
    assert definitions[0].node == Alternation(
        left=Sequence((ItemRun(lit("a", "b")),)),
        right=Sequence((ItemRun(lit("c")),)),
    )


def test_forward_references_are_allowed_by_the_parser() -> None:
    definitions = parse_definitions("<a> ::= <b>\n<b> ::= x")

    assert [d.name for d in definitions] == ["a", "b"]


def test_indirect_recursion_is_not_rejected() -> None:
    definitions = parse_definitions("<a> ::= <b>\n<b> ::= <a>")

    assert len(definitions) == 2


class TestParserErrors:
    def test_lhs_must_be_angle_bracketed(self) -> None:
        with pytest.raises(MalformedDefinition) as exc_info:
            parse_definitions('<a> ::= x\ns ::= "a"')

        assert exc_info.value.line == 2
        assert "angle brackets" in str(exc_info.value)

    def test_continuation_before_any_definition(self) -> None:
        with pytest.raises(MalformedDefinition) as exc_info:
            parse_definitions('"a" "b"\n<s> ::= x')

        assert exc_info.value.line == 1

    def test_duplicate_symbol_reports_second_line(self) -> None:
        source = '<s> ::= "a"\n<t> ::= "b"\n<s> ::= "c"'

        with pytest.raises(DuplicateSymbol) as exc_info:
            parse_definitions(source)

        error = exc_info.value
        assert error.name == "s"
        assert error.line == 3
        assert error.first_line == 1
        assert str(error) == "Line 3: Symbol <s> already declared."

    def test_direct_recursion_is_rejected(self) -> None:
        with pytest.raises(UnsupportedRecursion):
            parse_definitions('<list> ::= "a" | "a" <list>')

    def test_unclosed_group(self) -> None:
        with pytest.raises(UnmatchedGroup):
            parse_definitions('<s> ::= "a" { "b"')

    def test_stray_closing_brace(self) -> None:
        with pytest.raises(UnmatchedGroup):
            parse_definitions('<s> ::= "a" } "b"')

    def test_pipe_inside_group_breaks_the_group(self) -> None:
        with pytest.raises(UnmatchedGroup):
            parse_definitions('<s> ::= { "a" | "b" }')

    def test_nested_groups(self) -> None:
        with pytest.raises(NestedGroupsUnsupported):
            parse_definitions('<s> ::= { "a" { "b" } }')

    def test_missing_right_hand_side(self) -> None:
        with pytest.raises(MalformedDefinition) as exc_info:
            parse_definitions("<s> ::=\n<t> ::= x")

        assert exc_info.value.line == 1
        assert "Too few tokens" in str(exc_info.value)

    def test_empty_alternative(self) -> None:
        with pytest.raises(MalformedDefinition):
            parse_definitions('<s> ::= "a" |')

    @pytest.mark.parametrize("source", ["", "\n   \n"])
    def test_empty_grammar(self, source) -> None:
        with pytest.raises(EmptyGrammar):
            parse_definitions(source)

    def test_errors_carry_path(self) -> None:
        with pytest.raises(UnmatchedGroup) as exc_info:
            parse_definitions("<s> ::= {", path="broken.bn")

        assert exc_info.value.path == "broken.bn"
        assert "broken.bn:1" in exc_info.value.format()
