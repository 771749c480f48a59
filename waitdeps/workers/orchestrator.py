import time
from collections.abc import Callable, Mapping, Sequence

from waitdeps.core.config import Settings
from waitdeps.core.errors import WaitAbortedError
from waitdeps.models.enums import ExitCode, Scheme
from waitdeps.schemas.target import RunResult, Target
from waitdeps.services.budget import Budget
from waitdeps.services.capabilities import CapabilityRegistry
from waitdeps.services.deadline import hard_deadline
from waitdeps.services.http_probe import HttpProber
from waitdeps.services.postgres_probe import PostgresProber
from waitdeps.services.reporter import LogReporter, Reporter
from waitdeps.services.tcp_probe import TcpProber
from waitdeps.workers.scheduler import Prober, RetryScheduler


def build_probers(capabilities: CapabilityRegistry) -> dict[Scheme, Prober]:
    tcp = TcpProber(capabilities)
    http = HttpProber(tcp, capabilities)
    return {
        Scheme.HTTP: http,
        Scheme.HTTPS: http,
        Scheme.FTP: http,
        Scheme.POSTGRES: PostgresProber(tcp, capabilities),
        Scheme.TCP: tcp,
    }


class RunOrchestrator:
    def __init__(
        self,
        settings: Settings,
        reporter: Reporter | None = None,
        capabilities: CapabilityRegistry | None = None,
        probers: Mapping[Scheme, Prober] | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.settings = settings
        self.reporter = reporter or LogReporter()
        self.capabilities = capabilities or CapabilityRegistry.from_settings(settings)
        self.probers = probers or build_probers(self.capabilities)
        self.scheduler = RetryScheduler(self.probers, self.reporter, sleep)

    def run(self, targets: Sequence[Target], command: Sequence[str] = ()) -> RunResult:
        budget = Budget(self.settings.script_timeout)
        deadline = self.settings.script_timeout if self.settings.hard_timeout else 0
        attempts: list[int] = []
        current: Target | None = None
        try:
            with hard_deadline(deadline):
                for index, target in enumerate(targets, start=1):
                    current = target
                    self.reporter.check_started(index, len(targets), target)
                    attempts.append(self.scheduler.wait_for(target, self.settings, budget))
        except WaitAbortedError as exc:
            self.reporter.aborted(current, str(exc), exc.exit_code)
            return RunResult(exit_code=exc.exit_code, reason=str(exc), attempts=attempts)

        self.reporter.finished(len(targets))
        return RunResult(exit_code=ExitCode.SUCCESS, command=list(command), attempts=attempts)
