import enum


class Scheme(str, enum.Enum):
    HTTP = "http"
    HTTPS = "https"
    FTP = "ftp"
    POSTGRES = "postgres"
    TCP = "tcp"


DEFAULT_PORTS = {
    Scheme.HTTP: 80,
    Scheme.HTTPS: 443,
    Scheme.FTP: 21,
    Scheme.POSTGRES: 5432,
}


class OutcomeStatus(str, enum.Enum):
    SUCCESS = "SUCCESS"
    RETRY = "RETRY"
    FATAL = "FATAL"


class Capability(str, enum.Enum):
    HTTP_CLIENT = "http_client"
    PG_ISREADY = "pg_isready"
    NETCAT = "netcat"


class ExitCode(enum.IntEnum):
    SUCCESS = 0
    UNSUPPORTED_PROTOCOL = 1
    INTERRUPTED = 2
    MALFORMED_URL = 3
    MALFORMED_TARGET = 100
    COMMAND_NOT_EXECUTABLE = 126
    COMMAND_NOT_FOUND = 127
    UNSUPPORTED_SCHEME = 250
    SCRIPT_TIMEOUT = 251
