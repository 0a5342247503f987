from __future__ import annotations

import string
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from ..core.domain.params import (
    PaginationParams,
    ParamModel,
    RecentSearchParams,
    SearchParams,
    TranslationParams,
)

API_PREFIX = "/api/v1"
API_INFO_PATH = f"{API_PREFIX}/"


@dataclass(frozen=True)
class Endpoint:
    name: str
    path_template: str
    path_params: tuple[str, ...] = ()
    query_params: Optional[type[ParamModel]] = None
    also_accepts: tuple[type[ParamModel], ...] = ()

    def accepts(self, params: ParamModel) -> bool:
        if self.query_params is None:
            return False
        return isinstance(params, (self.query_params, *self.also_accepts))

    def resolve(self, **segments: object) -> str:
        """Interpolate path segments literally; escaping is the caller's job."""
        missing = [p for p in self.path_params if p not in segments]
        unexpected = sorted(set(segments) - set(self.path_params))
        if missing or unexpected:
            raise ValueError(
                f"Endpoint {self.name!r} expects path params {list(self.path_params)}; "
                f"missing={missing} unexpected={unexpected}"
            )
        return self.path_template.format(**{k: str(v) for k, v in segments.items()})


def _endpoint(
    name: str,
    template: str,
    query_params: Optional[type[ParamModel]] = None,
    also_accepts: tuple[type[ParamModel], ...] = (),
) -> Endpoint:
    path = f"{API_PREFIX}{template}"
    fields = tuple(f for _, f, _, _ in string.Formatter().parse(path) if f)
    return Endpoint(
        name=name, path_template=path, path_params=fields, query_params=query_params, also_accepts=also_accepts
    )


_CATALOG = (
    _endpoint("api_info", "/"),
    # vulnerabilities
    _endpoint("list_vulnerabilities", "/vulnerabilities", SearchParams),
    _endpoint("get_vulnerability", "/vulnerabilities/{cve_id}", TranslationParams),
    _endpoint("recent_vulnerabilities", "/search/recent", RecentSearchParams),
    _endpoint("top5_recent", "/search/recent/5", TranslationParams),
    _endpoint("search_year", "/search/year/{year}", PaginationParams, (SearchParams,)),
    _endpoint("search_severity", "/search/severity/{severity}", PaginationParams, (SearchParams,)),
    _endpoint("search_vendor", "/search/vendor/{vendor}", PaginationParams, (SearchParams,)),
    # statistics
    _endpoint("stats", "/stats"),
    _endpoint("year_stats", "/stats/years"),
    # news
    _endpoint("list_news", "/noticias", PaginationParams),
    _endpoint("recent_news", "/noticias/recentes/{limit}"),
    _endpoint("news_item", "/noticias/{slug}"),
    # MITRE ATT&CK
    _endpoint("mitre_info", "/mitre"),
    _endpoint("mitre_matrices", "/mitre/matrices"),
    _endpoint("mitre_matrix", "/mitre/matrix/{name}"),
    _endpoint("mitre_techniques", "/mitre/techniques", PaginationParams),
    _endpoint("mitre_technique", "/mitre/technique/{technique_id}"),
    _endpoint("mitre_subtechniques", "/mitre/subtechniques", PaginationParams),
    _endpoint("mitre_groups", "/mitre/groups", PaginationParams),
    _endpoint("mitre_group", "/mitre/group/{group_id}"),
    _endpoint("mitre_mitigations", "/mitre/mitigations", PaginationParams),
    _endpoint("mitre_mitigation", "/mitre/mitigation/{mitigation_id}"),
)

ENDPOINTS: Mapping[str, Endpoint] = MappingProxyType({e.name: e for e in _CATALOG})


def get_endpoint(name: str) -> Endpoint:
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(f"Unknown endpoint {name!r}") from None


def resolve_path(name: str, **segments: object) -> str:
    return get_endpoint(name).resolve(**segments)
