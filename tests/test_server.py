import pytest

from ezcfgmigrate.server import Protocol, Server, ServerList, TlsMode
from ezcfgmigrate.values import ConfigError


def test_defaults():
    srv = Server("default")
    assert srv.port == 8000
    assert srv.user == "source"
    assert srv.hostname is None
    assert srv.password is None
    assert srv.protocol is Protocol.HTTP
    assert srv.protocol_str == "http"
    assert srv.tls is TlsMode.MAY
    assert srv.tls_str == "may"
    assert srv.reconnect_attempts == 0


def test_empty_name_rejected():
    with pytest.raises(ConfigError, match="empty"):
        Server("")


@pytest.mark.parametrize(
    "text,proto", [("http", Protocol.HTTP), ("HTTPS", Protocol.HTTPS),
                   ("Icy", Protocol.ICY), ("roaraudio", Protocol.ROARAUDIO)]
)
def test_protocol(text, proto):
    srv = Server("s")
    srv.apply("protocol", text)
    assert srv.protocol is proto


def test_protocol_errors():
    srv = Server("s")
    with pytest.raises(ConfigError, match="unsupported"):
        srv.apply("protocol", "ftp")
    with pytest.raises(ConfigError, match="empty"):
        srv.apply("protocol", None)


def test_https_forces_tls():
    srv = Server("s")
    srv.apply("tls", "none")
    assert srv.tls is TlsMode.NONE
    srv.apply("protocol", "https")
    assert srv.tls is TlsMode.REQUIRED
    assert srv.tls_str == "required"


def test_tls_invalid():
    srv = Server("s")
    with pytest.raises(ConfigError, match="invalid"):
        srv.apply("tls", "sometimes")


def test_port():
    srv = Server("s")
    srv.apply("port", "8443")
    assert srv.port == 8443
    with pytest.raises(ConfigError, match="too small"):
        srv.apply("port", "0")
    with pytest.raises(ConfigError, match="too large"):
        srv.apply("port", "65536")
    with pytest.raises(ConfigError, match="invalid"):
        srv.apply("port", "http")
    with pytest.raises(ConfigError, match="empty"):
        srv.apply("port", "")
    assert srv.port == 8443


def test_text_settings():
    srv = Server("s")
    password = "password"
    srv.apply("hostname", "localhost")
    srv.apply("user", "user")
    srv.apply("password", password)
    srv.apply("ca_dir", "/etc/ssl/certs")
    srv.apply("reconnect_attempts", "3")
    assert srv.hostname == "localhost"
    assert srv.user == "user"
    assert srv.password == password
    assert srv.ca_dir == "/etc/ssl/certs"
    assert srv.reconnect_attempts == 3


def test_hostname_too_long():
    srv = Server("s")
    with pytest.raises(ConfigError, match="too long"):
        srv.apply("hostname", "h" * 2000)
    assert srv.hostname is None


def test_unknown_key():
    with pytest.raises(KeyError):
        Server("s").apply("colour", "blue")


def test_validate():
    srv = Server("s")
    with pytest.raises(ConfigError, match="hostname missing"):
        srv.validate()
    srv.apply("hostname", "localhost")
    with pytest.raises(ConfigError, match="password missing"):
        srv.validate()
    srv.apply("password", "password")
    srv.validate()
    assert srv.hostname == "localhost"


def test_rename_through_list():
    servers = ServerList()
    a = servers.get("default")
    servers.get("other")
    with pytest.raises(ConfigError, match="already exists"):
        a.apply("name", "OTHER")
    a.apply("name", "main")
    assert servers.find("main") is a
    assert servers.find("default") is None
    assert len(servers) == 2