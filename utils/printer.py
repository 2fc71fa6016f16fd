"""utils/printer.py - token / 后缀序列的表格输出"""
import pandas as pd

from config.config import DUMP_CONFIG, TOKENIZER_CONFIG
from core.token_system import TokenKind, KIND_TO_SYMBOL, TOKEN_KIND_NAMES

TYPE_COLUMN = 'TOKEN TYPE'
VALUE_COLUMN = 'TOKEN VALUE'
ARGC_COLUMN = 'ARGC'


def _format_value(token):
    if token.kind is TokenKind.NUMBER:
        return format(token.value, ".15g")
    return str(token.value)


def tokens_to_frame(sequence, with_argc=True):
    """
    通过游标接口读取序列，生成 DataFrame；读取后游标复位到开头

    Parameters:
    - sequence: Tokenizer、ShuntingYard 或其他提供 first()/next()/reset() 的序列
    - with_argc: 是否包含 ARGC 列（非函数token填 n/a）
    """
    rows = []
    token = sequence.first()
    while token is not None:
        row = {
            TYPE_COLUMN: TOKEN_KIND_NAMES.get(token.kind, str(token.kind)),
            VALUE_COLUMN: _format_value(token),
        }
        if with_argc:
            row[ARGC_COLUMN] = token.arg_count if token.kind is TokenKind.FUNCTION else DUMP_CONFIG['na_value']
        rows.append(row)
        token = sequence.next()
    sequence.reset()

    columns = [TYPE_COLUMN, VALUE_COLUMN] + ([ARGC_COLUMN] if with_argc else [])
    return pd.DataFrame(rows, columns=columns)


def _render(frame):
    width = DUMP_CONFIG['column_width']
    columns = list(frame.columns)
    header = ''.join(col.ljust(width) for col in columns[:-1]) + columns[-1]
    underline = ''.join(('-' * len(col)).ljust(width) for col in columns[:-1]) + '-' * len(columns[-1])
    lines = ['', header, underline]
    for row in frame.itertuples(index=False):
        cells = [str(cell) for cell in row]
        lines.append(''.join(cell.ljust(width) for cell in cells[:-1]) + cells[-1])
    lines.append('')
    return '\n'.join(lines) + '\n'


def dump_tokens(tokenizer):
    """词法扫描结果：TYPE / VALUE 两列"""
    return _render(tokens_to_frame(tokenizer, with_argc=False))


def dump_postfix(transducer):
    """后缀序列：TYPE / VALUE / ARGC 三列"""
    return _render(tokens_to_frame(transducer, with_argc=True))


def to_rpn_string(sequence, sigil=None):
    """紧凑的单行后缀表示，如 `2 3 4 * +` 或 `1 2 3 max/3`"""
    sigil = sigil or TOKENIZER_CONFIG['variable_sigil']
    parts = []
    token = sequence.first()
    while token is not None:
        if token.kind is TokenKind.NUMBER:
            parts.append(_format_value(token))
        elif token.kind is TokenKind.VARIABLE:
            parts.append(f"{sigil}{token.value}")
        elif token.kind is TokenKind.FUNCTION:
            parts.append(f"{token.value}/{token.arg_count}")
        elif token.kind in KIND_TO_SYMBOL:
            parts.append(KIND_TO_SYMBOL[token.kind])
        else:
            parts.append(str(token.value))
        token = sequence.next()
    sequence.reset()
    return ' '.join(parts)
