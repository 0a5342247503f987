from __future__ import annotations

import logging

from dependency_injector import containers, providers

from ..core.executor import RequestExecutor
from ..infra.http_client import HttpClient

logger = logging.getLogger(__name__)


def http_client_resource(headers, timeout_seconds):
	"""Create the httpx-backed transport as a resource with proper cleanup."""
	logger.debug(f"Initializing HTTP client (timeout={timeout_seconds}s, headers={sorted(headers or {})})")
	client = HttpClient(base_headers=headers, timeout_seconds=timeout_seconds)
	try:
		yield client
	finally:
		logger.debug("Closing HTTP client")
		client.close()


class Container(containers.DeclarativeContainer):
	# Populated from an AppConfig via config.from_pydantic(...)
	config = providers.Configuration()

	http_client = providers.Resource(
		http_client_resource,
		headers=config.headers,
		timeout_seconds=config.timeout_seconds,
	)

	executor = providers.Singleton(RequestExecutor, base_url=config.base_url, http=http_client)


