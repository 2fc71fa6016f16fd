"""配置文件"""
import math

# Tokenizer参数
TOKENIZER_CONFIG = {
    "variable_sigil": "$",  # 变量前缀，解析时会被去掉
    "error_preview_length": 10,  # 语法错误信息中截取的剩余文本长度
}

# 求值器参数
EVALUATOR_CONFIG = {
    "cache_size": 1000,  # 已编译表达式的LRU缓存大小
    # 标识符(IDENTIFIER)可引用的命名常数
    "constants": {
        "pi": math.pi,
        "e": math.e,
        "tau": math.tau,
        "inf": math.inf,
        "nan": math.nan,
    },
}

# dump输出参数
DUMP_CONFIG = {
    "column_width": 20,
    "na_value": "n/a",  # 非函数token的ARGC列
}

# 日志
LOGGING_CONFIG = {
    "level": "INFO",
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
}


def is_valid_sigil(sigil):
    """变量前缀必须是单个字符，且不能是标识符字符、运算符、标点或空白"""
    return (
        isinstance(sigil, str)
        and len(sigil) == 1
        and not (sigil.isalnum() or sigil == "_")
        and sigil not in "!,+-*/^%()."
        and not sigil.isspace()
    )


# 验证配置
def validate_config():
    """验证配置的合理性"""
    assert is_valid_sigil(TOKENIZER_CONFIG["variable_sigil"]), "变量前缀必须是单个非标识符、非运算符、非空白字符"
    assert TOKENIZER_CONFIG["error_preview_length"] > 0, "错误预览长度必须为正"
    assert EVALUATOR_CONFIG["cache_size"] > 0, "缓存大小必须为正"
    assert DUMP_CONFIG["column_width"] > 0, "列宽必须为正"
    return True
