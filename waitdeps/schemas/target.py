from pydantic import BaseModel, ConfigDict, Field

from waitdeps.models.enums import ExitCode, OutcomeStatus, Scheme


class Target(BaseModel):
    model_config = ConfigDict(frozen=True)

    raw: str
    protocol: Scheme
    host: str = Field(min_length=1)
    port: int = Field(gt=0, le=65535)
    user: str | None = None

    @property
    def address(self) -> str:
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


class ProbeOutcome(BaseModel):
    model_config = ConfigDict(frozen=True)

    status: OutcomeStatus
    reason: str | None = None
    exit_code: ExitCode | None = None

    @classmethod
    def success(cls) -> "ProbeOutcome":
        return cls(status=OutcomeStatus.SUCCESS)

    @classmethod
    def retry(cls, reason: str) -> "ProbeOutcome":
        return cls(status=OutcomeStatus.RETRY, reason=reason)

    @classmethod
    def fatal(cls, reason: str, exit_code: ExitCode) -> "ProbeOutcome":
        return cls(status=OutcomeStatus.FATAL, reason=reason, exit_code=exit_code)


class RunResult(BaseModel):
    exit_code: ExitCode
    reason: str | None = None
    command: list[str] = Field(default_factory=list)
    attempts: list[int] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.exit_code == ExitCode.SUCCESS
