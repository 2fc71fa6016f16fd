"""Tests for the infix to postfix transducer."""

import pytest

from core import (
    MalformedFunctionCallError, MisplacedCommaError, RepositionableSequence, ShuntingYard, Token,
    Tokenizer, TokenKind, UnbalancedParenError, UnknownTokenError, UnmatchedParenError
)
from core.token_system import ParserState
from helpers import kinds, values
from utils.printer import to_rpn_string


@pytest.mark.parametrize(
    "expression,rpn",
    [
        ("2+3*4", "2 3 4 * +"),
        ("(2+3)*4", "2 3 + 4 *"),
        ("8-3-2", "8 3 - 2 -"),
        ("2^3^2", "2 3 2 ^ ^"),
        ("-3+4", "3 u- 4 +"),
        ("3--4", "3 4 u- -"),
        ("+5", "5 u+"),
        ("2*-3", "2 3 u- *"),
        ("2^-1", "2 1 u- ^"),
        ("-2^2", "2 u- 2 ^"),
        ("!0+1", "0 ! 1 +"),
        ("8/4%3", "8 4 / 3 %"),
        ("$x*pi", "$x pi *"),
        ("max(1,2,3)", "1 2 3 max/3"),
        ("max(1,-2)", "1 2 u- max/2"),
        ("foo()", "foo/0"),
        ("f(g(1,2),3)", "1 2 g/2 3 f/2"),
        ("sqrt(2)*2", "2 sqrt/1 2 *"),
        ("-(1+2)", "1 2 + u-"),
    ],
)
def test_postfix_order(expression, rpn):
    assert to_rpn_string(ShuntingYard(expression)) == rpn


@pytest.mark.parametrize(
    "expression,expected",
    [
        ("2^3^2", 512.0),
        ("8-3-2", 3.0),
        ("-3+4", 1.0),
        ("3--4", 7.0),
        ("2+3*4", 14.0),
        ("(2+3)*4", 20.0),
        ("2*(3+4)^2", 98.0),
        ("10%4", 2.0),
        ("!0", 1.0),
        ("!5", 0.0),
        ("max(1, 2, 3) - min(4, 5)", -1.0),
    ],
)
def test_evaluates_to(evaluate, expression, expected):
    assert evaluate(expression) == pytest.approx(expected)


def test_variables_are_bound_at_evaluation(evaluate):
    assert evaluate("$x * $y + 1", x=3, y=4) == pytest.approx(13.0)


def test_function_arity_is_counted():
    postfix = ShuntingYard("max(1,2,3)")
    last = postfix[-1]
    assert last.kind is TokenKind.FUNCTION
    assert last.value == "max"
    assert last.arg_count == 3


def test_empty_call_has_zero_arity():
    postfix = ShuntingYard("foo()")
    assert len(postfix) == 1
    assert postfix[0].kind is TokenKind.FUNCTION
    assert postfix[0].arg_count == 0


def test_nested_call_arity():
    postfix = ShuntingYard("f(1, g(2, 3, 4), h())")
    arity = {t.value: t.arg_count for t in postfix if t.kind is TokenKind.FUNCTION}
    assert arity == {"f": 3, "g": 3, "h": 0}


@pytest.mark.parametrize("expression", ["(1+2", "1+2)", "((1)", "())", "max(1,2"])
def test_unmatched_parens(expression):
    with pytest.raises(UnmatchedParenError):
        ShuntingYard(expression)


@pytest.mark.parametrize("expression", [",", "1,2", "(1,2)"])
def test_comma_outside_call(expression):
    with pytest.raises(MisplacedCommaError):
        ShuntingYard(expression)


def test_output_never_contains_parens_or_commas():
    postfix = ShuntingYard("((1 + 2) * (3 - max(4, (5))))")
    assert not any(t.kind in (TokenKind.PAREN_OPEN, TokenKind.PAREN_CLOSE, TokenKind.COMMA)
                   for t in postfix)


def test_output_length_covers_operand_and_operator_tokens():
    expression = "max($a, 2) * -(3 + pi) ^ 2"
    tokenizer = Tokenizer(expression)
    significant = [t for t in tokenizer
                   if t.kind not in (TokenKind.PAREN_OPEN, TokenKind.PAREN_CLOSE, TokenKind.COMMA)]
    assert len(ShuntingYard(expression)) >= len(significant)


def test_cursor_starts_at_first_and_traversal_is_repeatable():
    postfix = ShuntingYard("1 + 2 * 3")
    assert postfix.key() == 0

    def traverse():
        seen = []
        token = postfix.first()
        while token is not None:
            seen.append(token.value)
            token = postfix.next()
        return seen

    first_pass = traverse()
    assert first_pass == [1.0, 2.0, 3.0, "*", "+"]
    assert traverse() == first_pass
    assert postfix.previous() is None
    assert traverse() == first_pass


def test_unary_reclassification_is_visible_in_tokenizer():
    tokenizer = Tokenizer("-1 - -2")
    ShuntingYard(tokenizer)
    assert kinds(tokenizer) == [
        TokenKind.UNARY_MINUS, TokenKind.NUMBER, TokenKind.MINUS,
        TokenKind.UNARY_MINUS, TokenKind.NUMBER,
    ]


def test_final_state_after_operand():
    assert ShuntingYard("1 + 2").state is ParserState.EXPECT_OPERATOR
    assert ShuntingYard("1 +").state is ParserState.EXPECT_OPERAND


def test_empty_expression_gives_empty_output():
    postfix = ShuntingYard("")
    assert len(postfix) == 0
    assert postfix.first() is None


def test_accepts_token_iterable():
    tokens = [Token(TokenKind.NUMBER, 1.0), Token(TokenKind.PLUS, "+"), Token(TokenKind.NUMBER, 2.0)]
    assert values(ShuntingYard(tokens)) == [1.0, 2.0, "+"]


@pytest.mark.parametrize("source", [None, 42])
def test_non_iterable_source_is_rejected(source):
    with pytest.raises(TypeError):
        ShuntingYard(source)


def test_unknown_token_kind_from_custom_source():
    tokens = [Token(TokenKind.NUMBER, 1.0), Token("bogus", "?")]
    with pytest.raises(UnknownTokenError) as excinfo:
        ShuntingYard(tokens)
    assert excinfo.value.token.value == "?"


def test_preclassified_unary_token_is_unknown():
    with pytest.raises(UnknownTokenError):
        ShuntingYard([Token(TokenKind.UNARY_MINUS, "-"), Token(TokenKind.NUMBER, 1.0)])


def test_function_without_open_paren():
    tokens = [Token(TokenKind.FUNCTION, "f"), Token(TokenKind.NUMBER, 1.0)]
    with pytest.raises(MalformedFunctionCallError) as excinfo:
        ShuntingYard(tokens)
    assert "f" in str(excinfo.value)


def test_function_at_end_of_stream():
    with pytest.raises(MalformedFunctionCallError):
        ShuntingYard([Token(TokenKind.FUNCTION, "f")])


def test_extra_close_paren_from_custom_source():
    tokens = [
        Token(TokenKind.FUNCTION, "f"), Token(TokenKind.PAREN_OPEN, "("),
        Token(TokenKind.NUMBER, 1.0), Token(TokenKind.PAREN_CLOSE, ")"),
        Token(TokenKind.PAREN_CLOSE, ")"),
    ]
    with pytest.raises(UnmatchedParenError):
        ShuntingYard(tokens)


def test_comma_with_pending_call_but_no_open_paren():
    # 正常 token 流中函数的左括号总在栈上；这里直接构造中间状态
    transducer = ShuntingYard.__new__(ShuntingYard)
    transducer._sequence = RepositionableSequence()
    transducer.funcs = [Token(TokenKind.FUNCTION, "f", arg_count=1)]
    transducer.stack = [Token(TokenKind.PLUS, "+")]
    comma = Token(TokenKind.COMMA, ",")
    with pytest.raises(UnbalancedParenError) as excinfo:
        transducer._handle_comma(comma)
    assert excinfo.value.token is comma
    assert values(transducer.output) == ["+"]
