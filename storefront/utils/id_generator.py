"""
ID生成工具

订单号格式: HL + YYMMDD + 4位随机数字，例如 HL2602194821
"""

import random
import re
import uuid
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

from storefront.core.config import settings

# 生成出来的订单号
ORDER_NO_PATTERN = re.compile(r"^HL\d{10}$")

# 用于判断查询 key 是否"像"订单号（不区分大小写）
ORDER_KEY_PATTERN = re.compile(r"^HL[A-Z0-9]{6,20}$", re.IGNORECASE)

ORDER_NO_SUFFIX_MIN = 1000
ORDER_NO_SUFFIX_MAX = 9999


class IdGenerator:
    """
    ID生成器类

    订单号不查询任何外部状态，唯一性由数据库的 order_no 唯一约束保证，
    冲突时由调用方重新生成
    """

    @staticmethod
    def today(tz_name: Optional[str] = None) -> date:
        """按配置的时区取当前日期"""
        return datetime.now(ZoneInfo(tz_name or settings.ORDER_NO_TIMEZONE)).date()

    @classmethod
    def generate_order_number(
        cls,
        today: Optional[date] = None,
        rng: Optional[random.Random] = None,
        prefix: Optional[str] = None,
        tz_name: Optional[str] = None,
    ) -> str:
        """
        生成订单号

        Args:
            today: 订单日期，默认取配置时区的今天
            rng: 随机数源，测试时可传入固定种子的 random.Random
            prefix: 前缀，默认 ORDER_NO_PREFIX
            tz_name: 未传 today 时取日期用的时区，默认 ORDER_NO_TIMEZONE

        Returns:
            str: 订单号

        Example:
            >>> IdGenerator.generate_order_number(date(2026, 2, 19)).startswith("HL260219")
            True
        """
        today = today or cls.today(tz_name)
        rng = rng or random
        suffix = rng.randint(ORDER_NO_SUFFIX_MIN, ORDER_NO_SUFFIX_MAX)
        return f"{prefix or settings.ORDER_NO_PREFIX}{today:%y%m%d}{suffix}"

    @staticmethod
    def generate_order_id() -> str:
        """生成内部订单ID"""
        return f"ord_{uuid.uuid4()}"


def is_order_number_like(key: str) -> bool:
    return bool(ORDER_KEY_PATTERN.match(key or ""))


def normalize_order_key(raw: str) -> str:
    """
    规范化管理后台路径里的订单 key

    路径参数已由框架解码，这里只去空格；像订单号的转大写，否则原样作为内部ID使用
    """
    key = (raw or "").strip()
    if is_order_number_like(key):
        return key.upper()
    return key
