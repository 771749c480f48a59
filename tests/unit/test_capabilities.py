from waitdeps.core.config import Settings
from waitdeps.models.enums import Capability
from waitdeps.services.capabilities import CapabilityRegistry


def test_binary_lookup_is_memoized():
    lookups = []

    def fake_which(name):
        lookups.append(name)
        return f"/usr/bin/{name}"

    registry = CapabilityRegistry(which=fake_which)

    assert registry.resolve(Capability.NETCAT) == "/usr/bin/nc"
    assert registry.resolve(Capability.NETCAT) == "/usr/bin/nc"
    assert registry.available(Capability.NETCAT) is True
    assert lookups == ["nc"]


def test_missing_binary_is_unavailable():
    registry = CapabilityRegistry(which=lambda _name: None)

    assert registry.available(Capability.PG_ISREADY) is False
    assert registry.resolve(Capability.PG_ISREADY) is None


def test_overrides_force_fallback_without_lookup():
    def fail_which(_name):
        raise AssertionError("which() should not be called")

    registry = CapabilityRegistry(overrides={Capability.NETCAT: False}, which=fail_which)

    assert registry.available(Capability.NETCAT) is False


def test_http_client_is_in_process():
    registry = CapabilityRegistry(which=lambda _name: None)

    assert registry.available(Capability.HTTP_CLIENT) is True


def test_from_settings_uses_configured_binaries():
    settings = Settings(pg_isready_binary="/opt/pg/bin/pg_isready", http_client_enabled=False)
    registry = CapabilityRegistry.from_settings(settings)

    assert registry.binaries[Capability.PG_ISREADY] == "/opt/pg/bin/pg_isready"
    assert registry.available(Capability.HTTP_CLIENT) is False
