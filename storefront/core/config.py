"""
应用配置模块
所有配置从环境变量 / .env 读取
"""
import logging
from functools import lru_cache
from typing import List

from dotenv import load_dotenv
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()


class Settings(BaseSettings):
    """应用配置设置"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # FastAPI 配置
    APP_NAME: str = "Storefront Orders API"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"
    DEBUG: bool = False
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # Supabase 配置
    SUPABASE_URL: str = ""
    SUPABASE_SERVICE_ROLE_KEY: str = ""
    SUPABASE_ANON_KEY: str = ""

    # 管理后台共享密码
    ADMIN_PASSWORD: str = ""
    ADMIN_LIST_LIMIT: int = 200

    # 订单配置
    ORDER_CURRENCY: str = "KRW"
    ORDER_NO_PREFIX: str = "HL"
    ORDER_NO_MAX_ATTEMPTS: int = 5
    # 订单号里的日期按这个时区计算
    ORDER_NO_TIMEZONE: str = "Asia/Seoul"

    # CORS 配置（逗号分隔）
    CORS_ORIGINS: str = "http://localhost:3000"

    # 日志配置
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "text"
    LOG_DIR: str = ""

    @field_validator("ORDER_NO_MAX_ATTEMPTS", "ADMIN_LIST_LIMIT")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be >= 1")
        return v

    @field_validator("LOG_FORMAT")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        v = v.lower()
        if v not in ("text", "json"):
            raise ValueError("LOG_FORMAT must be 'text' or 'json'")
        return v

    @property
    def cors_origin_list(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def log_level_int(self) -> int:
        """将日志级别字符串转换为整数"""
        level_map = {
            "DEBUG": logging.DEBUG,
            "INFO": logging.INFO,
            "WARNING": logging.WARNING,
            "ERROR": logging.ERROR,
            "CRITICAL": logging.CRITICAL,
        }
        return level_map.get(self.LOG_LEVEL.upper(), logging.INFO)


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
