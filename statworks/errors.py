"""Error types raised across statworks.

Everything raised on the request path is converted into an error card by
:class:`statworks.service.CardService`; none of these reach Flask as a 500.
"""

from __future__ import annotations

from typing import Optional


class StatworksError(RuntimeError):
    pass


class ConfigError(StatworksError):
    """Raised when an environment setting cannot be parsed."""


# -----------------------------
# Upstream (GitHub REST)
# -----------------------------
class UpstreamError(StatworksError):
    """Any failure talking to the GitHub API. Aborts the whole aggregation."""


class UpstreamTransportError(UpstreamError):
    pass


class UpstreamTimeoutError(UpstreamTransportError):
    pass


class UpstreamStatusError(UpstreamError):
    def __init__(self, status: int, body: str, url: Optional[str] = None) -> None:
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"GitHub API error {status}: {body}")


# -----------------------------
# Rendering / request input
# -----------------------------
class RenderError(StatworksError):
    pass


class MissingParameterError(StatworksError):
    pass


class InvalidParameterError(StatworksError):
    pass
