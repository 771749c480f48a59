import time
from collections.abc import Callable, Mapping
from typing import Protocol

from waitdeps.core.config import Settings
from waitdeps.core.errors import ProbeAbortedError, ScriptTimeoutError
from waitdeps.models.enums import OutcomeStatus, Scheme
from waitdeps.schemas.target import ProbeOutcome, Target
from waitdeps.services.budget import Budget
from waitdeps.services.reporter import Reporter


class Prober(Protocol):
    def probe_once(self, target: Target, connect_timeout: float) -> ProbeOutcome: ...


class RetryScheduler:
    def __init__(
        self,
        probers: Mapping[Scheme, Prober],
        reporter: Reporter,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.probers = probers
        self.reporter = reporter
        self.sleep = sleep

    def wait_for(self, target: Target, settings: Settings, budget: Budget) -> int:
        """Probe ``target`` until it succeeds; returns the number of attempts made.

        Raises ScriptTimeoutError when the shared budget is exceeded and
        ProbeAbortedError on a fatal outcome.
        """
        prober = self.probers[target.protocol]
        attempt = 0
        while True:
            attempt += 1
            if budget.exhausted():
                raise ScriptTimeoutError(
                    f"Script timeout of {budget.total_seconds:g}s exceeded while waiting for {target.raw}"
                )

            outcome = prober.probe_once(target, settings.connect_timeout)
            if outcome.status == OutcomeStatus.SUCCESS:
                self.reporter.succeeded(target, attempt)
                return attempt
            if outcome.status == OutcomeStatus.FATAL:
                raise ProbeAbortedError(outcome.reason or "fatal probe failure", outcome.exit_code)

            self.reporter.retrying(target, attempt, outcome.reason or "not ready", settings.poll_interval)
            self.sleep(settings.poll_interval)
            budget.consume(settings.poll_interval)
