import httpx

from waitdeps.models.enums import Capability, ExitCode, OutcomeStatus
from waitdeps.services.capabilities import CapabilityRegistry
from waitdeps.services.classifier import classify
from waitdeps.services.http_probe import HttpProber


class _NoTcpFallback:
    def probe_once(self, target, connect_timeout):
        raise AssertionError(f"unexpected TCP fallback for {target.raw}")


def _prober(handler, tcp=None, overrides=None) -> HttpProber:
    return HttpProber(
        tcp or _NoTcpFallback(),
        CapabilityRegistry(overrides=overrides, which=lambda _name: None),
        transport=httpx.MockTransport(handler),
    )


def test_head_request_2xx_is_success():
    methods = []

    def handler(request):
        methods.append(request.method)
        return httpx.Response(204)

    outcome = _prober(handler).probe_once(classify("http://web:8080/health"), 5)

    assert outcome.status == OutcomeStatus.SUCCESS
    assert methods == ["HEAD"]


def test_redirects_are_followed_to_final_status():
    def handler(request):
        if request.url.path == "/":
            return httpx.Response(302, headers={"Location": "http://web/ready"})
        return httpx.Response(200)

    outcome = _prober(handler).probe_once(classify("http://web/"), 5)

    assert outcome.status == OutcomeStatus.SUCCESS


def test_server_error_is_retryable():
    outcome = _prober(lambda request: httpx.Response(503)).probe_once(classify("http://web"), 5)

    assert outcome.status == OutcomeStatus.RETRY
    assert outcome.reason == "HTTP 503"


def test_forbidden_is_access_denied():
    outcome = _prober(lambda request: httpx.Response(403)).probe_once(classify("https://web"), 5)

    assert outcome.reason == "access denied (HTTP 403)"


def test_transport_failures_are_classified():
    cases = {
        "host not found: web": httpx.ConnectError("[Errno -2] Name or service not known"),
        "connection refused by web:80": httpx.ConnectError("[Errno 111] Connection refused"),
        "timed out after 5s": httpx.ConnectTimeout("timed out"),
    }
    for expected, error in cases.items():

        def handler(request, error=error):
            raise error

        outcome = _prober(handler).probe_once(classify("http://web"), 5)

        assert outcome.status == OutcomeStatus.RETRY
        assert outcome.reason == expected


def test_other_transport_errors_are_retryable_with_distinct_reason():
    def handler(request):
        raise httpx.RemoteProtocolError("Server disconnected without sending a response.")

    outcome = _prober(handler).probe_once(classify("http://web"), 5)

    assert outcome.status == OutcomeStatus.RETRY
    assert outcome.reason.startswith("transport error (RemoteProtocolError)")


def test_unsupported_protocol_is_fatal():
    def handler(request):
        raise httpx.UnsupportedProtocol("Request URL has an unsupported protocol")

    outcome = _prober(handler).probe_once(classify("http://web"), 5)

    assert outcome.status == OutcomeStatus.FATAL
    assert outcome.exit_code == ExitCode.UNSUPPORTED_PROTOCOL


def test_invalid_url_is_fatal():
    def handler(request):
        raise httpx.InvalidURL("Invalid port: 'abc'")

    outcome = _prober(handler).probe_once(classify("http://web"), 5)

    assert outcome.status == OutcomeStatus.FATAL
    assert outcome.exit_code == ExitCode.MALFORMED_URL


def test_ftp_falls_back_to_tcp_on_port_21(scripted_prober):
    def handler(request):
        raise AssertionError("ftp must not go through the HTTP client")

    tcp = scripted_prober()
    outcome = _prober(handler, tcp=tcp).probe_once(classify("ftp://files.example.com/pub"), 3)

    assert outcome.status == OutcomeStatus.SUCCESS
    target, timeout = tcp.calls[0]
    assert (target.host, target.port, timeout) == ("files.example.com", 21, 3)


def test_disabled_client_falls_back_to_tcp(scripted_prober):
    tcp = scripted_prober()
    prober = _prober(lambda request: httpx.Response(500), tcp=tcp, overrides={Capability.HTTP_CLIENT: False})

    prober.probe_once(classify("https://web/health"), 5)

    assert tcp.calls[0][0].port == 443
