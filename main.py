"""主程序入口 - 中缀表达式解析、后缀输出与求值"""
import argparse
import logging
import sys

import pandas as pd

from config.config import LOGGING_CONFIG, TOKENIZER_CONFIG, is_valid_sigil, validate_config
from core import ExpressionError, ShuntingYard, Tokenizer
from formula import FormulaEvaluator
from utils.printer import dump_tokens, dump_postfix, to_rpn_string

logger = logging.getLogger(__name__)


def _parse_binding(text):
    """解析 NAME=VALUE 形式的变量绑定"""
    name, sep, value = text.partition('=')
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected NAME=VALUE, got '{text}'")
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"value for '{name}' is not a number: '{value}'")


def _parse_sigil(text):
    if not is_valid_sigil(text):
        raise argparse.ArgumentTypeError(f"invalid variable sigil: '{text}'")
    return text


def build_parser():
    parser = argparse.ArgumentParser(description="Infix to postfix expression converter")

    parser.add_argument(
        "expression",
        type=str,
        help="Infix expression, e.g. \"max(1, $x) * 2\""
    )
    parser.add_argument(
        "--var",
        type=_parse_binding,
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Bind a variable (repeatable)"
    )
    parser.add_argument(
        "--data_path",
        type=str,
        default=None,
        help="CSV file whose columns are bound as variables"
    )
    parser.add_argument(
        "--dump_tokens",
        action="store_true",
        help="Print the tokenizer output"
    )
    parser.add_argument(
        "--dump_postfix",
        action="store_true",
        help="Print the postfix sequence with argument counts"
    )
    parser.add_argument(
        "--rpn",
        action="store_true",
        help="Print the postfix sequence on one line"
    )
    parser.add_argument(
        "--evaluate",
        action="store_true",
        help="Evaluate the expression"
    )
    parser.add_argument(
        "--sigil",
        type=_parse_sigil,
        default=TOKENIZER_CONFIG['variable_sigil'],
        help="Variable prefix character (default: $)"
    )
    parser.add_argument(
        "--log_level",
        type=str,
        default=LOGGING_CONFIG['level'],
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level"
    )
    return parser


def main(args):
    validate_config()

    try:
        if args.dump_tokens:
            print(dump_tokens(Tokenizer(args.expression, sigil=args.sigil)))

        postfix = ShuntingYard(args.expression, sigil=args.sigil)
        if args.dump_postfix:
            print(dump_postfix(postfix))
        if args.rpn or not (args.dump_tokens or args.dump_postfix or args.evaluate):
            print(to_rpn_string(postfix, sigil=args.sigil))

        if args.evaluate:
            data = dict(args.var)
            if args.data_path:
                logger.info(f"Loading variables from {args.data_path}")
                frame = pd.read_csv(args.data_path)
                data = {**{col: frame[col] for col in frame.columns}, **data}
            evaluator = FormulaEvaluator(sigil=args.sigil)
            result = evaluator.evaluate(args.expression, data)
            if isinstance(result, pd.Series):
                print(result.to_string())
            else:
                print(f"{result:g}")
    except ExpressionError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    return 0


if __name__ == "__main__":
    args = build_parser().parse_args()
    # 设置日志
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format=LOGGING_CONFIG['format']
    )
    sys.exit(main(args))
