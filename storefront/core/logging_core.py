# storefront/core/logging_core.py
import json
import logging
import os
import sys
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional

from storefront.core.config import Settings, settings as default_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class JSONFormatter(logging.Formatter):
    """JSON 日志格式化器"""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_entry.update(record.extra_data)

        return json.dumps(log_entry, ensure_ascii=False)


def _file_handler(path: str, backup_count: int, fmt: str) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path,
        maxBytes=10 * 1024 * 1024,  # 10MB
        backupCount=backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def setup_logging(config: Optional[Settings] = None) -> logging.Logger:
    """配置应用程序日志"""
    config = config or default_settings

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.setLevel(config.log_level_int)

    console_handler = logging.StreamHandler(sys.stdout)
    if config.LOG_FORMAT == "json":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root_logger.addHandler(console_handler)

    # 只有配置了 LOG_DIR 才写文件
    if config.LOG_DIR:
        os.makedirs(config.LOG_DIR, exist_ok=True)
        root_logger.addHandler(_file_handler(f"{config.LOG_DIR}/app.log", 5, LOG_FORMAT))
        logging.getLogger("business").addHandler(
            _file_handler(f"{config.LOG_DIR}/business.log", 5, LOG_FORMAT)
        )
        # 审计日志保留更多
        logging.getLogger("audit").addHandler(
            _file_handler(
                f"{config.LOG_DIR}/audit.log", 10, "%(asctime)s - AUDIT - %(levelname)s - %(message)s"
            )
        )

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)

    return root_logger


class AuditLogger:
    """审计日志记录器"""

    @staticmethod
    def log_admin_auth_failure(path: str, client_ip: str):
        """记录管理员密码校验失败"""
        logger = logging.getLogger("audit")
        logger.warning(f"SECURITY_ADMIN_AUTH_FAILED - Path: {path} - IP: {client_ip}")

    @staticmethod
    def log_order_status_change(order_id: str, order_no: str, changes: dict):
        """记录订单状态变更"""
        logger = logging.getLogger("audit")
        logger.info(f"ORDER_UPDATED - Order: {order_id} ({order_no}) - Changes: {changes}")

    @staticmethod
    def log_order_update_rejected(order_id: str, error_code: str, details: dict = None):
        logger = logging.getLogger("audit")
        message = f"ORDER_UPDATE_REJECTED - Order: {order_id} - Code: {error_code}"
        if details:
            message += f" - Details: {details}"
        logger.info(message)

    @staticmethod
    def log_order_number_exhausted(details: dict):
        """订单号耗尽单独告警"""
        logger = logging.getLogger("audit")
        logger.error(f"ORDER_NO_EXHAUSTED - Details: {details}")


class BusinessLogger:
    """业务日志记录器"""

    def __init__(self, module_name: str):
        self.logger = logging.getLogger(f"business.{module_name}")

    def log_operation(self, operation: str, **kwargs):
        """记录业务操作"""
        message = operation
        if kwargs:
            message += f" - {kwargs}"
        self.logger.info(message)

    def log_error(self, operation: str, error: Exception, **kwargs):
        """记录业务错误"""
        message = f"{operation}_ERROR - Error: {str(error)}"
        if kwargs:
            message += f" - {kwargs}"
        self.logger.error(message, exc_info=True)

    def log_performance(self, operation: str, duration: float, **kwargs):
        """记录性能日志"""
        message = f"{operation}_PERFORMANCE - Duration: {duration:.3f}s"
        if kwargs:
            message += f" - {kwargs}"
        self.logger.info(message)
