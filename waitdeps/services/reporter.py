import logging

from waitdeps.schemas.target import Target


class Reporter:
    """Receives run state transitions. This base implementation ignores them."""

    def check_started(self, index: int, total: int, target: Target) -> None:
        pass

    def retrying(self, target: Target, attempt: int, reason: str, delay: float) -> None:
        pass

    def succeeded(self, target: Target, attempt: int) -> None:
        pass

    def aborted(self, target: Target | None, reason: str, exit_code: int) -> None:
        pass

    def finished(self, count: int) -> None:
        pass


class LogReporter(Reporter):
    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("waitdeps")

    def check_started(self, index: int, total: int, target: Target) -> None:
        self.logger.info("Check %d/%d: %s", index, total, target.raw)

    def retrying(self, target: Target, attempt: int, reason: str, delay: float) -> None:
        self.logger.info("%s not ready (attempt %d): %s; retrying in %gs", target.raw, attempt, reason, delay)

    def succeeded(self, target: Target, attempt: int) -> None:
        self.logger.info("%s is available after %d attempt(s)", target.raw, attempt)

    def aborted(self, target: Target | None, reason: str, exit_code: int) -> None:
        subject = target.raw if target else "run"
        self.logger.error("%s aborted: %s (exit %d)", subject, reason, exit_code)

    def finished(self, count: int) -> None:
        self.logger.info("All %d dependencies are available", count)
