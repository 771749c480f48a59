import socket

import httpx

from waitdeps.models.enums import Capability, ExitCode, Scheme
from waitdeps.schemas.target import ProbeOutcome, Target
from waitdeps.services.capabilities import CapabilityRegistry
from waitdeps.services.tcp_probe import TcpProber

CLIENT_SCHEMES = {Scheme.HTTP, Scheme.HTTPS}
RESOLUTION_MARKERS = (
    "name or service not known",
    "nodename nor servname",
    "getaddrinfo failed",
    "temporary failure in name resolution",
    "no address associated",
)


class HttpProber:
    """HEAD request through httpx; FTP, or a disabled client, falls back to a TCP connect."""

    def __init__(
        self,
        tcp: TcpProber,
        capabilities: CapabilityRegistry,
        transport: httpx.BaseTransport | None = None,
    ):
        self.tcp = tcp
        self.capabilities = capabilities
        self.transport = transport

    def probe_once(self, target: Target, connect_timeout: float) -> ProbeOutcome:
        if target.protocol not in CLIENT_SCHEMES or not self.capabilities.available(Capability.HTTP_CLIENT):
            return self.tcp.probe_once(target, connect_timeout)

        try:
            with httpx.Client(transport=self.transport, timeout=connect_timeout, follow_redirects=True) as client:
                response = client.head(target.raw)
        except httpx.UnsupportedProtocol as exc:
            return ProbeOutcome.fatal(f"unsupported protocol: {exc}", ExitCode.UNSUPPORTED_PROTOCOL)
        except httpx.InvalidURL as exc:
            return ProbeOutcome.fatal(f"malformed URL: {exc}", ExitCode.MALFORMED_URL)
        except httpx.TimeoutException:
            return ProbeOutcome.retry(f"timed out after {connect_timeout:g}s")
        except httpx.ConnectError as exc:
            if _caused_by_resolution(exc):
                return ProbeOutcome.retry(f"host not found: {target.host}")
            if _caused_by(exc, ConnectionRefusedError) or "refused" in str(exc).lower():
                return ProbeOutcome.retry(f"connection refused by {target.address}")
            return ProbeOutcome.retry(f"cannot connect: {exc}")
        except httpx.HTTPError as exc:
            return ProbeOutcome.retry(f"transport error ({type(exc).__name__}): {exc}")

        if response.is_success:
            return ProbeOutcome.success()
        if response.status_code in (401, 403):
            return ProbeOutcome.retry(f"access denied (HTTP {response.status_code})")
        return ProbeOutcome.retry(f"HTTP {response.status_code}")


def _caused_by(exc: BaseException, kind: type[BaseException]) -> bool:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, kind):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return False


def _caused_by_resolution(exc: httpx.ConnectError) -> bool:
    if _caused_by(exc, socket.gaierror):
        return True
    message = str(exc).lower()
    return any(marker in message for marker in RESOLUTION_MARKERS)
