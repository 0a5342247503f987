from __future__ import annotations

from typing import Mapping, Optional
from urllib.parse import quote, urlencode

from .domain.params import QueryValue
from .ports.http_port import HttpPort

# RFC 3986 path characters plus "%" so segments escaped upstream are not escaped twice
_PATH_SAFE = "/:@!$&'()*+,;=-._~%"


class RequestExecutor:
    """Turn (path, query) into a GET against the configured base URL.

    At most one attempt is made per call. Transport failures surface as
    RequestError from the HttpPort; HTTP status codes are not inspected.
    """

    def __init__(self, base_url: str, http: HttpPort) -> None:
        self._base_url = base_url
        self._http = http

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_url(self, path: str, query: Optional[Mapping[str, QueryValue]] = None) -> str:
        url = self._base_url + quote(path, safe=_PATH_SAFE)
        if query:
            url += "?" + urlencode(list(query.items()))
        return url

    def execute(self, path: str, query: Optional[Mapping[str, QueryValue]] = None) -> str:
        return self._http.get_text(self.build_url(path, query))


