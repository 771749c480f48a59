from waitdeps.models.enums import Capability
from waitdeps.schemas.target import ProbeOutcome, Target
from waitdeps.services.capabilities import CapabilityRegistry
from waitdeps.services.tcp_probe import TcpProber, run_tool, tool_timeout

PG_ISREADY_REASONS = {
    1: "server is rejecting connections",
    2: "no response from server",
    3: "no attempt made",
}


class PostgresProber:
    def __init__(self, tcp: TcpProber, capabilities: CapabilityRegistry):
        self.tcp = tcp
        self.capabilities = capabilities

    def probe_once(self, target: Target, connect_timeout: float) -> ProbeOutcome:
        pg_isready = self.capabilities.resolve(Capability.PG_ISREADY)
        if pg_isready is None:
            return self.tcp.probe_once(target, connect_timeout)

        cmd = [pg_isready, "-h", target.host, "-p", str(target.port), "-t", tool_timeout(connect_timeout)]
        if target.user:
            cmd.extend(["-U", target.user])
        returncode, detail = run_tool(cmd, connect_timeout)
        if returncode == 0:
            return ProbeOutcome.success()
        if returncode is None:
            return ProbeOutcome.retry(detail)
        reason = PG_ISREADY_REASONS.get(returncode, f"pg_isready exited with status {returncode}")
        return ProbeOutcome.retry(f"{reason} ({detail})" if detail else reason)
