"""
Per-client request throttling.
Limits come from settings so deployments can tune them without a release;
tests switch the limiter off through `limiter.enabled`.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from catalog.core.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

BENEFITS_LIMIT = settings.rate_limit_benefits
DETAIL_LIMIT = settings.rate_limit_detail
HEALTH_LIMIT = settings.rate_limit_health

RETRY_AFTER_SECONDS = 60
