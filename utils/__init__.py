"""工具模块"""
from .printer import tokens_to_frame, dump_tokens, dump_postfix, to_rpn_string

__all__ = ['tokens_to_frame', 'dump_tokens', 'dump_postfix', 'to_rpn_string']
