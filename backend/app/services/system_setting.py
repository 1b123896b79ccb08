"""System settings service: typed reads with Redis caching."""

import json
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.models.enums import SettingValueType
from app.models.system import SystemSetting

logger = logging.getLogger(__name__)

CACHE_PREFIX = "setting:"
CACHE_TTL_SECONDS = 300  # 5 minutes

STUDY_CATEGORY = "study"


def _get_redis():
    """Lazy import of Redis client. Returns None if caching is disabled."""
    if not settings.REDIS_URL:
        return None
    try:
        import redis
        return redis.Redis.from_url(settings.REDIS_URL, decode_responses=True)
    except Exception:
        logger.debug("Redis not available for settings cache")
        return None


def _cast_value(value: str, value_type: SettingValueType):
    """Cast a string value to its typed form."""
    if value_type == SettingValueType.INTEGER:
        return int(value)
    elif value_type == SettingValueType.BOOLEAN:
        return value.lower() in ("true", "1")
    elif value_type == SettingValueType.JSON:
        return json.loads(value)
    return value


class SystemSettingService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_setting_by_key(self, category: str, key: str) -> SystemSetting | None:
        """Get a single setting by category and key."""
        result = await self.db.execute(
            select(SystemSetting).where(
                SystemSetting.category == category,
                SystemSetting.key == key,
            )
        )
        return result.scalar_one_or_none()

    async def get_typed_value(self, category: str, key: str, default=None):
        """Get a setting value, cast to its declared type. Uses Redis cache if available."""
        cache_key = f"{CACHE_PREFIX}{category}:{key}"
        r = _get_redis()
        if r:
            try:
                cached = r.get(cache_key)
                if cached is not None:
                    meta = json.loads(cached)
                    return _cast_value(meta["value"], SettingValueType(meta["type"]))
            except Exception:
                logger.debug("Cache miss or error for %s", cache_key)

        setting = await self.get_setting_by_key(category, key)
        if setting is None:
            return default

        if r:
            try:
                r.setex(
                    cache_key,
                    CACHE_TTL_SECONDS,
                    json.dumps({"value": setting.value, "type": setting.value_type.value}),
                )
            except Exception:
                logger.debug("Failed to cache setting %s", cache_key)

        try:
            return _cast_value(setting.value, setting.value_type)
        except ValueError:
            logger.warning(
                "Setting %s:%s is not a valid %s value: %r",
                category,
                key,
                setting.value_type.value,
                setting.value,
            )
            return default

    async def get_setting(self, name: str, default=None):
        """Study-level setting lookup (e.g. ``recruitmentTarget``)."""
        return await self.get_typed_value(STUDY_CATEGORY, name, default)
