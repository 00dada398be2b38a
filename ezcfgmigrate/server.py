"""Server entries: where and how a stream is delivered."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .values import ConfigError, NamedList, require_value, strtonum

DEFAULT_PORT = 8000
DEFAULT_USER = "source"

_HOSTNAME_SIZE = 1025
_PATH_SIZE = 4096
_UINT_MAX = 2**32 - 1
_PORT_MAX = 2**16 - 1


class Protocol(Enum):
    HTTP = "http"
    HTTPS = "https"
    ICY = "icy"
    ROARAUDIO = "roaraudio"


class TlsMode(Enum):
    MAY = "may"
    NONE = "none"
    REQUIRED = "required"


def _bounded(value: Optional[str], size: int) -> str:
    require_value(value)
    if len(value.encode()) >= size:
        raise ConfigError("too long")
    return value


class Server:
    """One server definition."""

    KEYS = (
        "name",
        "protocol",
        "hostname",
        "port",
        "user",
        "password",
        "reconnect_attempts",
        "tls",
        "tls_cipher_suite",
        "ca_dir",
        "ca_file",
        "client_cert",
    )

    def __init__(self, name: str) -> None:
        self.name = require_value(name)
        self.owner: Optional[NamedList] = None
        self.protocol = Protocol.HTTP
        self.hostname: Optional[str] = None
        self._port = 0
        self._user: Optional[str] = None
        self.password: Optional[str] = None
        self._tls = TlsMode.MAY
        self.tls_cipher_suite: Optional[str] = None
        self.ca_dir: Optional[str] = None
        self.ca_file: Optional[str] = None
        self.client_cert: Optional[str] = None
        self.reconnect_attempts = 0

    def __repr__(self) -> str:
        return f"Server(name={self.name!r})"

    @property
    def port(self) -> int:
        return self._port or DEFAULT_PORT

    @property
    def user(self) -> str:
        return self._user or DEFAULT_USER

    @property
    def tls(self) -> TlsMode:
        if self.protocol is Protocol.HTTPS:
            return TlsMode.REQUIRED
        return self._tls

    @property
    def protocol_str(self) -> str:
        return self.protocol.value

    @property
    def tls_str(self) -> str:
        return self.tls.value

    def apply(self, key: str, value: Optional[str]) -> None:
        """Set the setting called ``key`` from its text form."""
        if key == "name":
            if self.owner is not None:
                self.owner.rename(self, value)
            else:
                self.name = require_value(value)
        elif key == "protocol":
            text = require_value(value).lower()
            try:
                self.protocol = Protocol(text)
            except ValueError:
                raise ConfigError("unsupported") from None
        elif key == "hostname":
            self.hostname = _bounded(value, _HOSTNAME_SIZE)
        elif key == "port":
            self._port = strtonum(require_value(value), 1, _PORT_MAX)
        elif key == "user":
            self._user = require_value(value)
        elif key == "password":
            self.password = require_value(value)
        elif key == "tls":
            text = require_value(value).lower()
            try:
                self._tls = TlsMode(text)
            except ValueError:
                raise ConfigError("invalid") from None
        elif key == "tls_cipher_suite":
            self.tls_cipher_suite = require_value(value)
        elif key == "ca_dir":
            self.ca_dir = _bounded(value, _PATH_SIZE)
        elif key == "ca_file":
            self.ca_file = _bounded(value, _PATH_SIZE)
        elif key == "client_cert":
            self.client_cert = _bounded(value, _PATH_SIZE)
        elif key == "reconnect_attempts":
            self.reconnect_attempts = strtonum(require_value(value), 0, _UINT_MAX)
        else:
            raise KeyError(key)

    def validate(self) -> None:
        """Raise ConfigError if the server cannot be used."""
        if not self.hostname:
            raise ConfigError("hostname missing")
        if not self.password:
            raise ConfigError("password missing")


class ServerList(NamedList[Server]):
    """The configured servers, in definition order."""

    def __init__(self) -> None:
        super().__init__(Server)