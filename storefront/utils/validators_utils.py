import re
from typing import Any, Optional

# 只保留 ASCII 数字
_NON_DIGIT = re.compile(r"[^0-9]")


def digits_only(value: Any) -> str:
    """只保留数字，None 视为空字符串"""
    if value is None:
        return ""
    return _NON_DIGIT.sub("", str(value))


def phone_last4(value: Any) -> str:
    """手机号后四位（不足四位时返回全部数字）"""
    return digits_only(value)[-4:]


def blank_to_none(value: Optional[str]) -> Optional[str]:
    """空字符串 / 纯空白视为未填写，其余原样返回"""
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None
