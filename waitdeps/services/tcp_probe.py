import math
import socket
import subprocess

from waitdeps.models.enums import Capability, ExitCode
from waitdeps.schemas.target import ProbeOutcome, Target
from waitdeps.services.capabilities import CapabilityRegistry

# Extra time granted to an external tool beyond its own timeout flag.
SUBPROCESS_GRACE_SECONDS = 1.0


def tool_timeout(connect_timeout: float) -> str:
    """Whole seconds for tools that only accept integer timeouts (never less than 1)."""
    return str(max(1, math.ceil(connect_timeout)))


def run_tool(cmd: list[str], connect_timeout: float) -> tuple[int | None, str]:
    """Run an external probe; returns (returncode, detail) with returncode None when it never finished."""
    timeout_seconds = connect_timeout + SUBPROCESS_GRACE_SECONDS
    try:
        process = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout_seconds)
    except subprocess.TimeoutExpired:
        return None, f"timed out after {connect_timeout:g}s"
    except OSError as exc:
        return None, f"failed to run {cmd[0]}: {exc}"
    detail = (process.stderr or process.stdout or "").strip()
    return process.returncode, detail


class TcpProber:
    def __init__(self, capabilities: CapabilityRegistry):
        self.capabilities = capabilities

    def probe_once(self, target: Target, connect_timeout: float) -> ProbeOutcome:
        if not target.host or not target.port:
            return ProbeOutcome.fatal(f"{target.raw} is missing a host or port", ExitCode.MALFORMED_TARGET)

        netcat = self.capabilities.resolve(Capability.NETCAT)
        if netcat is None:
            return self._probe_socket(target, connect_timeout)

        cmd = [netcat, "-z", "-w", tool_timeout(connect_timeout), target.host, str(target.port)]
        returncode, detail = run_tool(cmd, connect_timeout)
        if returncode == 0:
            return ProbeOutcome.success()
        if returncode is None:
            return ProbeOutcome.retry(detail)
        return ProbeOutcome.retry(detail or f"{target.address} is not accepting connections")

    def _probe_socket(self, target: Target, connect_timeout: float) -> ProbeOutcome:
        try:
            with socket.create_connection((target.host, target.port), timeout=connect_timeout):
                return ProbeOutcome.success()
        except socket.gaierror:
            return ProbeOutcome.retry(f"host not found: {target.host}")
        except ConnectionRefusedError:
            return ProbeOutcome.retry(f"connection refused by {target.address}")
        except TimeoutError:
            return ProbeOutcome.retry(f"timed out after {connect_timeout:g}s")
        except OSError as exc:
            return ProbeOutcome.retry(f"cannot connect to {target.address}: {exc.strerror or exc}")
