"""core/tokenizer.py - 把中缀表达式文本切分为token序列"""
import logging
import re

from config.config import TOKENIZER_CONFIG, is_valid_sigil
from core.errors import ExpressionSyntaxError, MalformedExpressionError
from core.sequence import RepositionableSequence, SequenceCursorMixin
from core.token_system import Token, TokenKind, SYMBOL_TO_KIND

logger = logging.getLogger(__name__)


def _build_pattern(sigil):
    # 顺序即优先级：符号 > 数字 > 变量 > 标识符 > 空白
    return re.compile(
        r"(?P<symbol>[!,+\-*/^%()])"
        r"|(?P<number>\d*\.\d+|\d+\.\d*|\d+)"
        r"|(?P<variable>" + re.escape(sigil) + r"[A-Za-z0-9_:]+)"
        r"|(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)"
        r"|(?P<space>\s+)"
    )


class Tokenizer(SequenceCursorMixin):
    """
    词法扫描器

    构造时一次性扫描整个表达式，结果通过游标接口（first/current/next/previous/peek/key）访问。

    Args:
        expression: 中缀表达式字符串
        sigil: 变量前缀，默认取 TOKENIZER_CONFIG
        preview_length: 语法错误中展示的剩余文本长度
    """

    def __init__(self, expression, sigil=None, preview_length=None):
        self.expression = expression
        self.sigil = sigil or TOKENIZER_CONFIG['variable_sigil']
        if not is_valid_sigil(self.sigil):
            raise ValueError(f"Invalid variable sigil: {self.sigil!r}")
        self.preview_length = preview_length or TOKENIZER_CONFIG['error_preview_length']
        self._pattern = _build_pattern(self.sigil)
        self._sequence = RepositionableSequence()
        self._scan(expression)
        logger.debug(f"Tokenized {len(self._sequence)} tokens from: {expression[:50]}")

    def _scan(self, expression):
        remaining = expression.lstrip()
        while remaining:
            match = self._pattern.match(remaining)
            if match is None:
                raise ExpressionSyntaxError(remaining[:self.preview_length])

            text = match.group(0)
            if not text:
                raise MalformedExpressionError(remaining[:self.preview_length])
            remaining = remaining[len(text):].lstrip()

            if match.lastgroup == 'space':
                continue
            self._emit(match.lastgroup, text)

    def _emit(self, group, text):
        if group == 'symbol':
            kind = SYMBOL_TO_KIND[text]
            value = text
            if kind is TokenKind.PAREN_OPEN:
                self._promote_function()
        elif group == 'number':
            kind = TokenKind.NUMBER
            value = float(text)
        elif group == 'variable':
            kind = TokenKind.VARIABLE
            value = text[len(self.sigil):]
        else:
            kind = TokenKind.IDENTIFIER
            value = text
        self._sequence.append(Token(kind, value))

    def _promote_function(self):
        """左括号前紧跟的标识符改为函数调用"""
        if not len(self._sequence):
            return
        previous = self._sequence[-1]
        if previous.kind is TokenKind.IDENTIFIER:
            self._sequence.replace(len(self._sequence) - 1, previous.reclassify(TokenKind.FUNCTION))
            logger.debug(f"Identifier `{previous.value}` reclassified as function")
