from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union

from .enums import Severity

QueryValue = Union[str, int]
QueryParams = dict[str, QueryValue]


def _render_bool(value: bool) -> str:
    return "true" if value else "false"


@dataclass(frozen=True)
class PaginationParams:
    """Page selection shared by every listing endpoint.

    ``None`` means "not specified"; ``0`` is a set value and is serialized.
    """

    page: Optional[int] = None
    per_page: Optional[int] = None

    def serialize(self) -> QueryParams:
        params: QueryParams = {}
        if self.page is not None:
            params["page"] = int(self.page)
        if self.per_page is not None:
            params["per_page"] = int(self.per_page)
        return params


@dataclass(frozen=True)
class TranslationParams:
    """Only toggles the Portuguese translation of returned records."""

    include_pt: Optional[bool] = True

    def serialize(self) -> QueryParams:
        if self.include_pt is None:
            return {}
        return {"include_pt": _render_bool(self.include_pt)}


@dataclass(frozen=True)
class SearchParams:
    """Filters for the vulnerability listing.

    Serialized as: page, per_page, year, severity, vendor, include_pt.
    """

    pagination: PaginationParams = field(default_factory=PaginationParams)
    year: Optional[int] = None
    severity: Optional[Severity] = None
    vendor: Optional[str] = None
    include_pt: Optional[bool] = True

    def __post_init__(self) -> None:
        if self.severity is not None and not isinstance(self.severity, Severity):
            object.__setattr__(self, "severity", Severity.from_str(self.severity))

    @classmethod
    def create(
        cls,
        *,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        year: Optional[int] = None,
        severity: Severity | str | None = None,
        vendor: Optional[str] = None,
        include_pt: Optional[bool] = True,
    ) -> "SearchParams":
        return cls(
            pagination=PaginationParams(page=page, per_page=per_page),
            year=year,
            severity=severity,  # normalized in __post_init__
            vendor=vendor,
            include_pt=include_pt,
        )

    def serialize(self) -> QueryParams:
        params = self.pagination.serialize()
        if self.year is not None:
            params["year"] = int(self.year)
        if self.severity is not None:
            params["severity"] = self.severity.value
        if self.vendor is not None:
            params["vendor"] = self.vendor
        if self.include_pt is not None:
            params["include_pt"] = _render_bool(self.include_pt)
        return params


@dataclass(frozen=True)
class RecentSearchParams:
    """Recency window for the recent-vulnerabilities listing."""

    pagination: PaginationParams = field(default_factory=PaginationParams)
    days: Optional[int] = None
    include_pt: Optional[bool] = True

    @classmethod
    def create(
        cls,
        *,
        page: Optional[int] = None,
        per_page: Optional[int] = None,
        days: Optional[int] = None,
        include_pt: Optional[bool] = True,
    ) -> "RecentSearchParams":
        return cls(pagination=PaginationParams(page=page, per_page=per_page), days=days, include_pt=include_pt)

    def serialize(self) -> QueryParams:
        params = self.pagination.serialize()
        if self.days is not None:
            params["days"] = int(self.days)
        if self.include_pt is not None:
            params["include_pt"] = _render_bool(self.include_pt)
        return params


ParamModel = Union[PaginationParams, TranslationParams, SearchParams, RecentSearchParams]
