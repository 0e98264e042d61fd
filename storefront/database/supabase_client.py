# storefront/database/supabase_client.py
import logging
from functools import lru_cache
from typing import Optional

from supabase import Client, ClientOptions, create_client

from storefront.core.config import Settings, get_settings

logger = logging.getLogger(__name__)


def create_supabase_admin_client(config: Optional[Settings] = None) -> Client:
    """创建使用 service role key 的 Supabase 客户端（服务端专用，不持久化会话）"""
    config = config or get_settings()

    if not config.SUPABASE_URL:
        raise ValueError("SUPABASE_URL is required.")
    if not config.SUPABASE_SERVICE_ROLE_KEY:
        raise ValueError("SUPABASE_SERVICE_ROLE_KEY is required.")

    client = create_client(
        config.SUPABASE_URL,
        config.SUPABASE_SERVICE_ROLE_KEY,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )
    logger.info("✅ Supabase admin 客户端创建成功")
    return client


@lru_cache
def get_supabase_admin_client() -> Client:
    """每个进程只创建一次，通过依赖注入传给 handler"""
    return create_supabase_admin_client()


def check_connection(client: Client) -> bool:
    """数据库连通性检查"""
    try:
        client.table("orders").select("id").limit(1).execute()
        return True
    except Exception as e:
        logger.error(f"数据库连接测试失败: {e}")
        return False
