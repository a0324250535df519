from __future__ import annotations

import http.client
from typing import Optional, Protocol
from urllib.parse import urlsplit

from topoctl.core.models import TunnelConfig


class TransportError(Exception):
    """Raised when a request cannot be sent or its response cannot be read."""


class MasterConnection(Protocol):
    def status_code(self) -> int:
        ...

    def close(self) -> None:
        ...


class Transport(Protocol):
    """Send-a-command boundary between the dispatcher and the network."""

    def open_connection(self, target: str, tunnel_config: TunnelConfig) -> Optional[MasterConnection]:
        ...

    def send_request(self, connection: MasterConnection) -> None:
        ...


class HttpMasterConnection:
    """One GET exchange with a master, directly or through an HTTP proxy."""

    def __init__(self, target: str, tunnel_config: TunnelConfig) -> None:
        parts = urlsplit(target)
        self.target = target
        timeout = tunnel_config.timeout_seconds

        origin_uri = parts.path or "/"
        if parts.query:
            origin_uri += f"?{parts.query}"

        if tunnel_config.is_tunnel_needed and parts.scheme == "https":
            # TLS to the master goes through a CONNECT tunnel opened on the proxy.
            self._http = http.client.HTTPSConnection(
                tunnel_config.tunnel_host,
                tunnel_config.tunnel_port,
                timeout=timeout,
            )
            self._http.set_tunnel(parts.hostname, parts.port)
            self.request_uri = origin_uri
        elif tunnel_config.is_tunnel_needed:
            # Plain proxied requests carry the absolute URL as the request line.
            self._http = http.client.HTTPConnection(
                tunnel_config.tunnel_host,
                tunnel_config.tunnel_port,
                timeout=timeout,
            )
            self.request_uri = target
        else:
            connection_cls = (
                http.client.HTTPSConnection if parts.scheme == "https" else http.client.HTTPConnection
            )
            self._http = connection_cls(parts.hostname, parts.port, timeout=timeout)
            self.request_uri = origin_uri

        self._response: Optional[http.client.HTTPResponse] = None
        self._closed = False

    def send(self) -> None:
        self._http.request("GET", self.request_uri, headers={"Connection": "close"})
        self._response = self._http.getresponse()
        self._response.read()

    def status_code(self) -> int:
        if self._response is None:
            raise TransportError(f"No HTTP response received from {self.target}")
        return self._response.status

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._http.close()


class HttpTransport:
    """Default transport: plain HTTP GET, optionally through a proxy tunnel."""

    def open_connection(self, target: str, tunnel_config: TunnelConfig) -> Optional[HttpMasterConnection]:
        if tunnel_config.is_tunnel_needed and not tunnel_config.tunnel_host:
            return None
        return HttpMasterConnection(target, tunnel_config)

    def send_request(self, connection: HttpMasterConnection) -> None:
        try:
            connection.send()
        except (OSError, http.client.HTTPException) as exc:
            raise TransportError(f"Failed to send HTTP request to {connection.target}: {exc}") from exc
