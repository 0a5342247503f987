from __future__ import annotations

import logging
from typing import Mapping, Optional
from urllib.parse import quote

from .container import Container
from ..config.endpoints import get_endpoint
from ..config.settings import AppConfig
from ..core import envelope
from ..core.domain.enums import Severity
from ..core.domain.params import (
    PaginationParams,
    ParamModel,
    RecentSearchParams,
    SearchParams,
    TranslationParams,
)
from ..infra.schemas import APIResponse

logger = logging.getLogger(__name__)


def _segment(value: object) -> str:
    return quote(str(value), safe="")


class BnvdClient:
    """Client for the BNVD (Banco Nacional de Vulnerabilidades) REST API.

    Every operation issues one GET and returns an APIResponse. Application-level
    errors come back as responses with ``is_error()`` true; only transport
    failures (RequestError) and undecodable bodies (DecodeError) raise.

    Example:
        with BnvdClient("https://bnvd.example.org") as client:
            resp = client.get_vulnerability("CVE-2024-12345")
            if resp.is_success():
                print(resp.data)

            page = client.list_vulnerabilities(SearchParams.create(page=2, per_page=50, severity="CRITICAL"))
            print(page.pagination)
    """

    def __init__(
        self,
        base_url: str | None = None,
        *,
        timeout_seconds: int | None = None,
        headers: Mapping[str, str] | None = None,
        config: AppConfig | None = None,
    ):
        """Initialize the client.

        Args:
            base_url: API root. If None, uses the BNVD_BASE_URL environment variable.
            timeout_seconds: Per-request timeout. If None, uses BNVD_TIMEOUT_SECONDS or default (30).
            headers: Extra headers merged over Content-Type: application/json.
            config: Complete AppConfig. Takes precedence over the individual arguments.
        """
        if config is None:
            # Build config dict with only provided values; the rest comes from the environment
            config_dict: dict = {}
            if base_url is not None:
                config_dict["base_url"] = base_url
            if timeout_seconds is not None:
                config_dict["timeout_seconds"] = timeout_seconds
            if headers is not None:
                config_dict["headers"] = dict(headers)
            config = AppConfig(**config_dict)

        self._config = config
        self._container = Container()
        self._container.config.from_pydantic(config)
        self._container.init_resources()
        self._executor = self._container.executor()
        logger.info(f"BNVD client ready for {config.base_url}")

    @property
    def config(self) -> AppConfig:
        return self._config

    def _call(self, endpoint_name: str, params: Optional[ParamModel] = None, **segments: object) -> APIResponse:
        endpoint = get_endpoint(endpoint_name)
        if params is not None and not endpoint.accepts(params):
            expected = endpoint.query_params.__name__ if endpoint.query_params else "no parameters"
            raise TypeError(f"{endpoint_name} accepts {expected}, got {type(params).__name__}")
        path = endpoint.resolve(**{k: _segment(v) for k, v in segments.items()})
        query = params.serialize() if params is not None else {}
        raw = self._executor.execute(path, query)
        return envelope.decode(raw, path)

    # ---------------- API metadata ----------------
    def get_api_info(self) -> APIResponse:
        """Return API metadata (the root route, wrapped as a success envelope)."""
        return self._call("api_info")

    # ---------------- Vulnerabilities ----------------
    def list_vulnerabilities(self, params: SearchParams | None = None) -> APIResponse:
        """List vulnerabilities with pagination and filters.

        Without params nothing is sent in the query string.
        """
        return self._call("list_vulnerabilities", params)

    def get_vulnerability(self, cve_id: str, include_pt: bool = True) -> APIResponse:
        """Fetch one vulnerability by CVE id (e.g. CVE-2024-12345)."""
        return self._call("get_vulnerability", TranslationParams(include_pt=include_pt), cve_id=cve_id)

    def get_recent_vulnerabilities(self, params: RecentSearchParams | None = None) -> APIResponse:
        return self._call("recent_vulnerabilities", params)

    def get_top5_recent(self, include_pt: bool = True) -> APIResponse:
        return self._call("top5_recent", TranslationParams(include_pt=include_pt))

    def search_by_year(self, year: int, params: PaginationParams | SearchParams | None = None) -> APIResponse:
        return self._call("search_year", params, year=int(year))

    def search_by_severity(self, severity: Severity | str, params: PaginationParams | SearchParams | None = None) -> APIResponse:
        """Search by severity; accepts a Severity member or its label (case-insensitive).

        Raises:
            ValueError: If the label is not a known severity.
        """
        return self._call("search_severity", params, severity=Severity.from_str(severity).value)

    def search_by_vendor(self, vendor: str, params: PaginationParams | SearchParams | None = None) -> APIResponse:
        return self._call("search_vendor", params, vendor=vendor)

    # ---------------- Statistics ----------------
    def get_stats(self) -> APIResponse:
        return self._call("stats")

    def get_year_stats(self) -> APIResponse:
        return self._call("year_stats")

    # ---------------- News ----------------
    def list_news(self, params: PaginationParams | None = None) -> APIResponse:
        return self._call("list_news", params)

    def get_recent_news(self, limit: int = 5) -> APIResponse:
        return self._call("recent_news", limit=int(limit))

    def get_news(self, slug: str) -> APIResponse:
        return self._call("news_item", slug=slug)

    # ---------------- MITRE ATT&CK ----------------
    def get_mitre_info(self) -> APIResponse:
        return self._call("mitre_info")

    def list_mitre_matrices(self) -> APIResponse:
        return self._call("mitre_matrices")

    def get_mitre_matrix(self, name: str) -> APIResponse:
        """Fetch one ATT&CK matrix by name (e.g. enterprise, mobile, ics)."""
        return self._call("mitre_matrix", name=name)

    def list_mitre_techniques(self, params: PaginationParams | None = None) -> APIResponse:
        return self._call("mitre_techniques", params)

    def get_mitre_technique(self, technique_id: str) -> APIResponse:
        return self._call("mitre_technique", technique_id=technique_id)

    def list_mitre_subtechniques(self, params: PaginationParams | None = None) -> APIResponse:
        return self._call("mitre_subtechniques", params)

    def list_mitre_groups(self, params: PaginationParams | None = None) -> APIResponse:
        return self._call("mitre_groups", params)

    def get_mitre_group(self, group_id: str) -> APIResponse:
        return self._call("mitre_group", group_id=group_id)

    def list_mitre_mitigations(self, params: PaginationParams | None = None) -> APIResponse:
        return self._call("mitre_mitigations", params)

    def get_mitre_mitigation(self, mitigation_id: str) -> APIResponse:
        return self._call("mitre_mitigation", mitigation_id=mitigation_id)

    def close(self) -> None:
        """Close the client and release the HTTP connection pool."""
        self._container.shutdown_resources()

    def __enter__(self) -> BnvdClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.close()


__all__ = [
    "BnvdClient",
    "AppConfig",
]
