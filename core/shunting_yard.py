"""core/shunting_yard.py - 调度场算法：中缀token流 -> 后缀序列"""
import logging
from collections.abc import Iterable

from core.errors import (
    MalformedFunctionCallError, MisplacedCommaError, UnbalancedParenError,
    UnknownTokenError, UnmatchedParenError
)
from core.sequence import RepositionableSequence, SequenceCursorMixin
from core.token_system import (
    TokenKind, ParserState, OPERAND_KINDS, OPERATOR_DEFINITIONS, UNARY_VARIANTS
)
from core.tokenizer import Tokenizer

logger = logging.getLogger(__name__)

# 可直接进入操作符处理的类型（一元符号只能由转换器自己产生）
_OPERATOR_ENTRY_KINDS = frozenset({
    TokenKind.PLUS, TokenKind.MINUS, TokenKind.MULTIPLY, TokenKind.DIVIDE,
    TokenKind.MODULO, TokenKind.POWER, TokenKind.NOT,
})


class ShuntingYard(SequenceCursorMixin):
    """
    中缀 -> 后缀 转换器

    构造即转换，不可重入。结果通过游标接口访问，构造完成后游标位于第一个token。

    Args:
        source: 表达式字符串、提供 first()/next()/peek() 的token源（如 Tokenizer），
                或 Token 的可迭代对象
        **tokenizer_kwargs: source 为字符串时传给 Tokenizer
    """

    def __init__(self, source, **tokenizer_kwargs):
        if isinstance(source, str):
            source = Tokenizer(source, **tokenizer_kwargs)
        elif not all(hasattr(source, attr) for attr in ('first', 'next', 'peek')):
            if not isinstance(source, Iterable):
                raise TypeError(f"Unsupported token source: {type(source).__name__}")
            source = RepositionableSequence(source)

        self.tokenizer = source
        self.state = ParserState.EXPECT_OPERAND
        self._sequence = RepositionableSequence()
        self.stack = []
        self.funcs = []

        token = self.tokenizer.first()
        while token is not None:
            self._handle(token)
            token = self.tokenizer.next()

        while self.stack:
            token = self.stack.pop()
            if token.is_paren():
                raise UnmatchedParenError(token)
            self._sequence.append(token)

        self._sequence.reset()
        logger.debug(f"Postfix output: {len(self._sequence)} tokens")

    @property
    def output(self):
        return self._sequence

    def _handle(self, token):
        kind = getattr(token, 'kind', None)

        if kind in OPERAND_KINDS:
            self._sequence.append(token)
            self.state = ParserState.EXPECT_OPERATOR
        elif kind is TokenKind.FUNCTION:
            self._handle_function(token)
        elif kind is TokenKind.COMMA:
            self._handle_comma(token)
        elif kind in _OPERATOR_ENTRY_KINDS:
            if kind in UNARY_VARIANTS and self.state is ParserState.EXPECT_OPERAND:
                token = self._make_unary(token)
            self._handle_operator(token)
        elif kind is TokenKind.PAREN_OPEN:
            self.stack.append(token)
            self.state = ParserState.EXPECT_OPERAND
        elif kind is TokenKind.PAREN_CLOSE:
            self._handle_paren_close(token)
        else:
            raise UnknownTokenError(token)

    def _handle_function(self, token):
        self.stack.append(token)
        self.funcs.append(token)

        paren = self.tokenizer.next()
        if paren is None or getattr(paren, 'kind', None) is not TokenKind.PAREN_OPEN:
            raise MalformedFunctionCallError(token)
        self._handle(paren)

        following = self.tokenizer.peek()
        if following is None or getattr(following, 'kind', None) is TokenKind.PAREN_CLOSE:
            token.arg_count = 0
        else:
            token.arg_count = 1

    def _handle_comma(self, token):
        if not self.funcs:
            raise MisplacedCommaError(token)
        self.funcs[-1].arg_count += 1

        # 弹出到左括号为止，左括号留在栈中
        while self.stack and self.stack[-1].kind is not TokenKind.PAREN_OPEN:
            self._sequence.append(self.stack.pop())
        if not self.stack:
            raise UnbalancedParenError(token)
        self.state = ParserState.EXPECT_OPERAND

    def _handle_operator(self, token):
        incoming = OPERATOR_DEFINITIONS[token.kind]
        while self.stack:
            top = OPERATOR_DEFINITIONS.get(self.stack[-1].kind)
            if top is None:
                break
            if incoming.is_left_assoc:
                should_pop = top.precedence >= incoming.precedence
            else:
                should_pop = top.precedence > incoming.precedence
            if not should_pop:
                break
            self._sequence.append(self.stack.pop())

        self.stack.append(token)
        self.state = ParserState.EXPECT_OPERAND

    def _handle_paren_close(self, token):
        while True:
            if not self.stack:
                raise UnmatchedParenError(token)
            stacked = self.stack.pop()
            if stacked.kind is TokenKind.PAREN_OPEN:
                break
            self._sequence.append(stacked)

        if self.stack and self.stack[-1].kind is TokenKind.FUNCTION:
            self._sequence.append(self.stack.pop())
            self.funcs.pop()
        self.state = ParserState.EXPECT_OPERATOR

    def _make_unary(self, token):
        unary = token.reclassify(UNARY_VARIANTS[token.kind])
        # 同步替换 token 源中的原位置
        replace = getattr(self.tokenizer, 'replace', None)
        key = self.tokenizer.key() if hasattr(self.tokenizer, 'key') else None
        if replace is not None and key is not None:
            replace(key, unary)
        logger.debug(f"`{token.value}` reclassified as {unary.name}")
        return unary
