from waitdeps.core.errors import MalformedTargetError, MalformedUrlError, UnsupportedSchemeError
from waitdeps.models.enums import DEFAULT_PORTS, Scheme
from waitdeps.schemas.target import Target


def classify(raw: str) -> Target:
    """Parse ``raw`` into a fully resolved Target.

    Raises UnsupportedSchemeError, MalformedTargetError or MalformedUrlError;
    nothing here is retried.
    """
    scheme_text, sep, rest = raw.partition("://")
    try:
        scheme = Scheme(scheme_text.lower())
    except ValueError:
        scheme = None
    if not sep or scheme is None:
        raise UnsupportedSchemeError(f"Unsupported protocol in '{raw}'")

    if scheme == Scheme.TCP:
        host, port = _split_host_port(rest)
        if not host or not port:
            raise MalformedTargetError(f"TCP target '{raw}' needs both a host and a port")
        _check_host(host, raw, MalformedTargetError)
        return Target(raw=raw, protocol=scheme, host=host, port=_parse_port(port, raw, MalformedTargetError))

    if scheme == Scheme.POSTGRES:
        return _classify_postgres(raw, rest)

    return _classify_http(raw, scheme, rest)


def _classify_postgres(raw: str, rest: str) -> Target:
    user = None
    if "@" in rest:
        user, _, rest = rest.partition("@")
    authority = rest.split("/", 1)[0]
    host, port = _split_host_port(authority)
    if not host:
        raise MalformedTargetError(f"Postgres target '{raw}' has no host")
    _check_host(host, raw, MalformedTargetError)
    return Target(
        raw=raw,
        protocol=Scheme.POSTGRES,
        host=host,
        port=_parse_port(port, raw, MalformedTargetError) if port else DEFAULT_PORTS[Scheme.POSTGRES],
        user=user or None,
    )


def _classify_http(raw: str, scheme: Scheme, rest: str) -> Target:
    authority = rest
    for delimiter in "/?#":
        authority = authority.split(delimiter, 1)[0]
    authority = authority.rpartition("@")[2]
    host, port = _split_host_port(authority)
    if not host:
        raise MalformedUrlError(f"URL '{raw}' has no host")
    _check_host(host, raw, MalformedUrlError)
    if ":" in host and not authority.startswith("["):
        raise MalformedUrlError(f"URL '{raw}' has an ambiguous host '{host}'; bracket IPv6 addresses")
    return Target(
        raw=raw,
        protocol=scheme,
        host=host,
        port=_parse_port(port, raw, MalformedUrlError) if port else DEFAULT_PORTS[scheme],
    )


def _split_host_port(authority: str) -> tuple[str, str]:
    # Bracketed IPv6 may carry no port; otherwise always split on the rightmost colon.
    if authority.startswith("[") and "]" in authority:
        host, _, tail = authority[1:].partition("]")
        return host, tail[1:] if tail.startswith(":") else tail
    if ":" not in authority:
        return authority, ""
    host, _, port = authority.rpartition(":")
    return host.strip("[]"), port


def _check_host(host: str, raw: str, error: type) -> None:
    if any(char.isspace() for char in host) or "[" in host or "]" in host:
        raise error(f"Invalid host '{host}' in '{raw}'")


def _parse_port(value: str, raw: str, error: type) -> int:
    if not value.isdigit() or not 0 < int(value) <= 65535:
        raise error(f"Invalid port '{value}' in '{raw}'")
    return int(value)
