from __future__ import annotations

import json

import httpx

from bnvd_client.app.cli import app


def _invoke(runner, base_url, *args):
    return runner.invoke(app, ["--base-url", base_url, *args])


def test_cli_help(runner):
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("info", "get", "list", "recent", "top5", "search", "stats", "news", "mitre"):
        assert command in result.stdout


def test_cli_get_prints_envelope(runner, mock_httpx_client, base_url):
    url = f"{base_url}/api/v1/vulnerabilities/CVE-2024-12345?include_pt=true"
    mock_httpx_client(url, json_payload={"status": "success", "data": {"cve_id": "CVE-2024-12345"}})
    result = _invoke(runner, base_url, "get", "CVE-2024-12345")
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"status": "success", "data": {"cve_id": "CVE-2024-12345"}}


def test_cli_get_no_pt(runner, mock_httpx_client, base_url):
    mock_httpx_client(f"{base_url}/api/v1/vulnerabilities/CVE-2024-1?include_pt=false", json_payload={"status": "success"})
    assert _invoke(runner, base_url, "get", "CVE-2024-1", "--no-pt").exit_code == 0


def test_cli_list_with_filters(runner, mock_httpx_client, base_url):
    url = f"{base_url}/api/v1/vulnerabilities?page=2&per_page=50&year=2024&severity=CRITICAL&include_pt=false"
    mock_httpx_client(url, json_payload={"status": "success", "data": []})
    result = _invoke(
        runner, base_url, "list", "--page", "2", "--per-page", "50", "--year", "2024", "--severity", "critical", "--no-pt"
    )
    assert result.exit_code == 0
    assert str(mock_httpx_client.calls[0].url) == url


def test_cli_list_invalid_severity(runner, mock_httpx_client, base_url):
    result = _invoke(runner, base_url, "list", "--severity", "extreme")
    assert result.exit_code == 2
    assert mock_httpx_client.calls == []


def test_cli_search_year(runner, mock_httpx_client, base_url):
    mock_httpx_client(f"{base_url}/api/v1/search/year/2024?per_page=10", json_payload={"status": "success"})
    assert _invoke(runner, base_url, "search", "year", "2024", "--per-page", "10").exit_code == 0


def test_cli_search_unknown_kind(runner, base_url):
    assert _invoke(runner, base_url, "search", "color", "red").exit_code == 2


def test_cli_stats_years(runner, mock_httpx_client, base_url):
    mock_httpx_client(f"{base_url}/api/v1/stats/years", json_payload={"status": "success", "data": {"2024": 1}})
    result = _invoke(runner, base_url, "stats", "--years")
    assert result.exit_code == 0
    assert json.loads(result.stdout)["data"] == {"2024": 1}


def test_cli_news_recent(runner, mock_httpx_client, base_url):
    mock_httpx_client(f"{base_url}/api/v1/noticias/recentes/3", json_payload={"status": "success", "data": []})
    assert _invoke(runner, base_url, "news", "--recent", "3").exit_code == 0


def test_cli_mitre_technique(runner, mock_httpx_client, base_url):
    mock_httpx_client(f"{base_url}/api/v1/mitre/technique/T1059", json_payload={"status": "success"})
    assert _invoke(runner, base_url, "mitre", "technique", "T1059").exit_code == 0


def test_cli_mitre_requires_identifier(runner, base_url):
    assert _invoke(runner, base_url, "mitre", "group").exit_code == 2


def test_cli_application_error_exits_1(runner, mock_httpx_client, base_url):
    mock_httpx_client(f"{base_url}/api/v1/noticias/missing", status_code=404, json_payload={"status": "error", "message": "not found"})
    result = _invoke(runner, base_url, "news", "missing")
    assert result.exit_code == 1
    assert json.loads(result.stdout)["message"] == "not found"


def test_cli_transport_failure_exits_1(runner, mock_httpx_client, base_url):
    mock_httpx_client(f"{base_url}/api/v1/stats", exc=httpx.ConnectError)
    result = _invoke(runner, base_url, "stats")
    assert result.exit_code == 1


def test_cli_without_base_url_exits_2(runner):
    result = runner.invoke(app, ["stats"])
    assert result.exit_code == 2
