"""Session providers supplying the current owner id."""

from abc import ABC, abstractmethod
from typing import Optional

from config import Config


class SessionProvider(ABC):
    """Abstract source of the signed-in owner.

    An owner id of None means nobody is signed in; ledger operations are
    then not applicable rather than failing.
    """

    @abstractmethod
    def owner_id(self) -> Optional[str]:
        pass


class StaticSession(SessionProvider):
    """Session with a fixed owner."""

    def __init__(self, owner_id: Optional[str]):
        self._owner_id = owner_id or None

    def owner_id(self) -> Optional[str]:
        return self._owner_id


class ConfigSession(SessionProvider):
    """Session read from the [session] config table, with an optional override.

    Args:
        config: Application configuration.
        override: Owner id that takes precedence over the configured one
            (e.g. from a --owner command-line flag).
    """

    def __init__(self, config: Config, override: Optional[str] = None):
        self.config = config
        self.override = override

    def owner_id(self) -> Optional[str]:
        return self.override or self.config.owner_id or None
