"""bnvd_client package: app/config/core/infra.

Expose library-friendly API client at the package level.
"""

from .app.api import AppConfig, BnvdClient
from .config.endpoints import API_INFO_PATH, ENDPOINTS, Endpoint
from .core.domain.enums import ResponseOutcome, Severity
from .core.domain.params import PaginationParams, RecentSearchParams, SearchParams, TranslationParams
from .core.errors import BnvdError, DecodeError, RequestError
from .infra.schemas import APIResponse

import logging

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    "BnvdClient",
    "AppConfig",
    "APIResponse",
    "ResponseOutcome",
    "Severity",
    "PaginationParams",
    "SearchParams",
    "RecentSearchParams",
    "TranslationParams",
    "Endpoint",
    "ENDPOINTS",
    "API_INFO_PATH",
    "BnvdError",
    "RequestError",
    "DecodeError",
]
