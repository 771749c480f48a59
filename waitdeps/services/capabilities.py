import logging
import shutil
from collections.abc import Callable

from waitdeps.core.config import Settings
from waitdeps.models.enums import Capability

logger = logging.getLogger(__name__)


class CapabilityRegistry:
    """Memoized answers to "can this host probe with X?".

    Each capability is resolved on first use and cached for the rest of the
    run. ``overrides`` pins a capability on or off, which is how tests force
    the fallback paths.
    """

    def __init__(
        self,
        binaries: dict[Capability, str] | None = None,
        overrides: dict[Capability, bool] | None = None,
        which: Callable[[str], str | None] = shutil.which,
    ):
        self.binaries = binaries or {Capability.PG_ISREADY: "pg_isready", Capability.NETCAT: "nc"}
        self.overrides = overrides or {}
        self._which = which
        self._cache: dict[Capability, str | None] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "CapabilityRegistry":
        overrides = {} if settings.http_client_enabled else {Capability.HTTP_CLIENT: False}
        return cls(
            binaries={
                Capability.PG_ISREADY: settings.pg_isready_binary,
                Capability.NETCAT: settings.netcat_binary,
            },
            overrides=overrides,
        )

    def resolve(self, capability: Capability) -> str | None:
        """Return the executable path backing ``capability``, or None if it is unavailable."""
        if capability not in self._cache:
            self._cache[capability] = self._detect(capability)
            logger.debug("Capability %s resolved to %s", capability.value, self._cache[capability])
        return self._cache[capability]

    def available(self, capability: Capability) -> bool:
        return self.resolve(capability) is not None

    def _detect(self, capability: Capability) -> str | None:
        forced = self.overrides.get(capability)
        if forced is False:
            return None
        binary = self.binaries.get(capability)
        if binary is None:
            # In-process mechanisms have no executable behind them.
            return capability.value
        path = self._which(binary)
        if path is None and forced:
            return binary
        return path
