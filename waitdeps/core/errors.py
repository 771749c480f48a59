from waitdeps.models.enums import ExitCode


class WaitAbortedError(RuntimeError):
    """Aborts the whole run; ``exit_code`` becomes the process exit status."""

    exit_code: ExitCode

    def __init__(self, message: str, exit_code: ExitCode | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ClassificationError(WaitAbortedError):
    pass


class UnsupportedSchemeError(ClassificationError):
    exit_code = ExitCode.UNSUPPORTED_SCHEME


class MalformedTargetError(ClassificationError):
    exit_code = ExitCode.MALFORMED_TARGET


class MalformedUrlError(ClassificationError):
    exit_code = ExitCode.MALFORMED_URL


class ProbeAbortedError(WaitAbortedError):
    def __init__(self, message: str, exit_code: ExitCode):
        super().__init__(message, exit_code)


class ScriptTimeoutError(WaitAbortedError):
    exit_code = ExitCode.SCRIPT_TIMEOUT
