import pytest

from waitdeps.schemas.target import ProbeOutcome
from waitdeps.services.reporter import Reporter


class RecordingReporter(Reporter):
    def __init__(self):
        self.events = []

    def check_started(self, index, total, target):
        self.events.append(("check", index, total, target.raw))

    def retrying(self, target, attempt, reason, delay):
        self.events.append(("retry", target.raw, attempt, reason))

    def succeeded(self, target, attempt):
        self.events.append(("success", target.raw, attempt))

    def aborted(self, target, reason, exit_code):
        self.events.append(("aborted", target.raw if target else None, int(exit_code)))

    def finished(self, count):
        self.events.append(("finished", count))

    def of_kind(self, kind):
        return [event for event in self.events if event[0] == kind]


class ScriptedProber:
    """Replays ``outcomes`` in order, repeating the last one once exhausted."""

    def __init__(self, *outcomes: ProbeOutcome):
        self.outcomes = list(outcomes) or [ProbeOutcome.success()]
        self.calls = []

    def probe_once(self, target, connect_timeout):
        self.calls.append((target, connect_timeout))
        index = min(len(self.calls), len(self.outcomes)) - 1
        return self.outcomes[index]


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def scripted_prober() -> type[ScriptedProber]:
    """Factory for probers that replay a fixed list of outcomes."""
    return ScriptedProber
