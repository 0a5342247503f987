from __future__ import annotations

from typing import Protocol


class HttpPort(Protocol):
    def get_text(self, url: str) -> str:
        """Perform a single GET and return the body, whatever the HTTP status.

        Implementations raise RequestError when no body could be read.
        """
        ...


