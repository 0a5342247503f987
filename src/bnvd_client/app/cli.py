from __future__ import annotations

import json
from contextlib import contextmanager
from typing import Callable, Iterator

import typer

from .api import BnvdClient
from ..core.domain.enums import Severity
from ..core.domain.params import PaginationParams, RecentSearchParams, SearchParams
from ..core.errors import BnvdError
from ..infra.schemas import APIResponse


app = typer.Typer(help="BNVD client: query the Banco Nacional de Vulnerabilidades API")

_state: dict[str, object] = {}

_SEARCH_KINDS = ("year", "severity", "vendor")
_MITRE_RESOURCES = ("matrices", "matrix", "techniques", "technique", "subtechniques", "groups", "group", "mitigations", "mitigation")


@app.callback()
def main(
    base_url: str | None = typer.Option(None, "--base-url", envvar="BNVD_BASE_URL", help="API root URL"),
    timeout: int | None = typer.Option(None, "--timeout", help="Request timeout in seconds (default: 30)"),
) -> None:
    _state["base_url"] = base_url
    _state["timeout"] = timeout


@contextmanager
def provide_client() -> Iterator[BnvdClient]:
    try:
        client = BnvdClient(_state.get("base_url"), timeout_seconds=_state.get("timeout"))
    except ValueError as e:
        # pydantic ValidationError when no base URL is configured
        typer.echo(f"Configuration error: {e}", err=True)
        raise typer.Exit(code=2)
    try:
        yield client
    finally:
        client.close()


def _run(call: Callable[[BnvdClient], APIResponse]) -> None:
    """Execute one operation and print its envelope as JSON; exit 1 unless it succeeded."""
    with provide_client() as client:
        try:
            resp = call(client)
        except BnvdError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1)
    print(json.dumps(resp.model_dump(exclude_none=True), ensure_ascii=False, indent=2))
    if not resp.is_success():
        raise typer.Exit(code=1)


def _pagination(page: int | None, per_page: int | None) -> PaginationParams | None:
    if page is None and per_page is None:
        return None
    return PaginationParams(page=page, per_page=per_page)


@app.command(help="Show API metadata.")
def info() -> None:
    _run(lambda c: c.get_api_info())


@app.command(help="Show a vulnerability by CVE id.")
def get(
    cve_id: str = typer.Argument(..., help="CVE identifier (e.g., CVE-2024-12345)"),
    include_pt: bool = typer.Option(True, "--pt/--no-pt", help="Include Portuguese translation"),
) -> None:
    _run(lambda c: c.get_vulnerability(cve_id, include_pt=include_pt))


@app.command("list", help="List vulnerabilities with optional filters.")
def list_cmd(
    page: int | None = typer.Option(None, help="Page number"),
    per_page: int | None = typer.Option(None, "--per-page", help="Items per page"),
    year: int | None = typer.Option(None, help="Publication year"),
    severity: str | None = typer.Option(None, help="LOW, MEDIUM, HIGH or CRITICAL"),
    vendor: str | None = typer.Option(None, help="Vendor name"),
    include_pt: bool = typer.Option(True, "--pt/--no-pt", help="Include Portuguese translation"),
) -> None:
    try:
        params = SearchParams.create(
            page=page, per_page=per_page, year=year, severity=severity, vendor=vendor, include_pt=include_pt
        )
    except ValueError as e:
        typer.echo(f"Invalid option: {e}", err=True)
        raise typer.Exit(code=2)
    _run(lambda c: c.list_vulnerabilities(params))


@app.command(help="List recent vulnerabilities.")
def recent(
    days: int | None = typer.Option(None, help="Look-back window in days"),
    page: int | None = typer.Option(None, help="Page number"),
    per_page: int | None = typer.Option(None, "--per-page", help="Items per page"),
    include_pt: bool = typer.Option(True, "--pt/--no-pt", help="Include Portuguese translation"),
) -> None:
    params = RecentSearchParams.create(page=page, per_page=per_page, days=days, include_pt=include_pt)
    _run(lambda c: c.get_recent_vulnerabilities(params))


@app.command(help="Show the 5 most recent vulnerabilities.")
def top5(include_pt: bool = typer.Option(True, "--pt/--no-pt", help="Include Portuguese translation")) -> None:
    _run(lambda c: c.get_top5_recent(include_pt=include_pt))


@app.command(help="Search vulnerabilities by year, severity or vendor.")
def search(
    kind: str = typer.Argument(..., help="One of: year, severity, vendor"),
    value: str = typer.Argument(..., help="Year, severity label or vendor name"),
    page: int | None = typer.Option(None, help="Page number"),
    per_page: int | None = typer.Option(None, "--per-page", help="Items per page"),
) -> None:
    if kind not in _SEARCH_KINDS:
        typer.echo(f"Unknown search kind {kind!r}; expected one of {', '.join(_SEARCH_KINDS)}", err=True)
        raise typer.Exit(code=2)
    params = _pagination(page, per_page)
    if kind == "year":
        if not value.isdigit():
            typer.echo(f"Invalid year: {value!r}", err=True)
            raise typer.Exit(code=2)
        _run(lambda c: c.search_by_year(int(value), params))
        return
    if kind == "severity":
        try:
            severity = Severity.from_str(value)
        except ValueError as e:
            typer.echo(f"Invalid value: {e}", err=True)
            raise typer.Exit(code=2)
        _run(lambda c: c.search_by_severity(severity, params))
        return
    _run(lambda c: c.search_by_vendor(value, params))


@app.command(help="Show general statistics, or per-year statistics with --years.")
def stats(years: bool = typer.Option(False, "--years", help="Per-year statistics")) -> None:
    _run(lambda c: c.get_year_stats() if years else c.get_stats())


@app.command(help="List news, show one item by slug, or the latest N with --recent.")
def news(
    slug: str | None = typer.Argument(None, help="News slug"),
    recent: int | None = typer.Option(None, "--recent", help="Show the latest N items"),
    page: int | None = typer.Option(None, help="Page number"),
    per_page: int | None = typer.Option(None, "--per-page", help="Items per page"),
) -> None:
    if slug is not None:
        _run(lambda c: c.get_news(slug))
    elif recent is not None:
        _run(lambda c: c.get_recent_news(recent))
    else:
        _run(lambda c: c.list_news(_pagination(page, per_page)))


@app.command(help="Query MITRE ATT&CK data. Without a resource, shows MITRE metadata.")
def mitre(
    resource: str | None = typer.Argument(None, help=f"One of: {', '.join(_MITRE_RESOURCES)}"),
    identifier: str | None = typer.Argument(None, help="Matrix name or technique/group/mitigation id"),
    page: int | None = typer.Option(None, help="Page number"),
    per_page: int | None = typer.Option(None, "--per-page", help="Items per page"),
) -> None:
    if resource is None:
        _run(lambda c: c.get_mitre_info())
        return
    if resource not in _MITRE_RESOURCES:
        typer.echo(f"Unknown MITRE resource {resource!r}", err=True)
        raise typer.Exit(code=2)

    singular = {
        "matrix": BnvdClient.get_mitre_matrix,
        "technique": BnvdClient.get_mitre_technique,
        "group": BnvdClient.get_mitre_group,
        "mitigation": BnvdClient.get_mitre_mitigation,
    }
    if resource in singular:
        if identifier is None:
            typer.echo(f"mitre {resource} requires an identifier", err=True)
            raise typer.Exit(code=2)
        _run(lambda c: singular[resource](c, identifier))
    elif resource == "matrices":
        _run(lambda c: c.list_mitre_matrices())
    else:
        listing = {
            "techniques": BnvdClient.list_mitre_techniques,
            "subtechniques": BnvdClient.list_mitre_subtechniques,
            "groups": BnvdClient.list_mitre_groups,
            "mitigations": BnvdClient.list_mitre_mitigations,
        }[resource]
        _run(lambda c: listing(c, _pagination(page, per_page)))


if __name__ == "__main__":  # pragma: no cover
    app()
