import pytest

from otrsrpc.config import set_rpc_suffix, set_trace
from otrsrpc.config.schema import RpcOptions
from otrsrpc.connection import ConnectionManager, Credentials
from otrsrpc.errors import ConfigurationError


def _complete() -> Credentials:
    return Credentials(location="http://host/otrs/", username="soap", password="pw")


def test_credentials_defaults_and_missing_fields() -> None:
    creds = Credentials()
    assert creds.uri == "Core"
    assert creds.missing_fields() == ["location", "username", "password"]
    assert "pw" not in repr(_complete())


def test_missing_fields_raise_configuration_error(factory) -> None:
    manager = ConnectionManager(factory)
    with pytest.raises(ConfigurationError) as exc_info:
        manager.ensure_connection(Credentials(location="http://host/otrs/", uri=""))
    assert exc_info.value.missing == ["uri", "username", "password"]
    assert factory.built == []
    assert manager.connected is False


def test_connection_is_built_once_and_reused(factory) -> None:
    manager = ConnectionManager(factory)
    first = manager.ensure_connection(_complete())
    second = manager.ensure_connection(_complete())

    assert first is second
    assert manager.connect_count == 1
    params = factory.last.params
    assert params.target == "http://host/otrs/rpc.pl"
    assert params.namespace == "Core"
    assert params.login == "soap"
    assert params.password == "pw"
    assert params.trace is False


def test_process_options_apply_to_next_connection_only(factory) -> None:
    manager = ConnectionManager(factory)
    manager.ensure_connection(_complete())

    set_rpc_suffix("json.pl")
    set_trace(True)
    manager.ensure_connection(_complete())
    assert factory.last.params.target == "http://host/otrs/rpc.pl"

    manager.invalidate()
    manager.ensure_connection(_complete())
    assert factory.last.params.target == "http://host/otrs/json.pl"
    assert factory.last.params.trace is True
    assert manager.connect_count == 2


def test_pinned_options_ignore_process_values(factory) -> None:
    manager = ConnectionManager(factory, RpcOptions(rpc_suffix="soap.pl", timeout_seconds=5))
    set_rpc_suffix("json.pl")
    manager.ensure_connection(_complete())
    assert factory.last.params.target == "http://host/otrs/soap.pl"
    assert factory.last.params.timeout_seconds == 5


def test_invalidate_closes_transport(factory) -> None:
    manager = ConnectionManager(factory)
    transport = manager.ensure_connection(_complete())

    manager.invalidate()

    assert transport.closed is True
    assert manager.connected is False
    assert manager.transport is None
    manager.invalidate()


def test_invalidate_survives_close_failure(factory) -> None:
    manager = ConnectionManager(factory)
    transport = manager.ensure_connection(_complete())

    def broken_close():
        raise RuntimeError("socket already gone")

    transport.close = broken_close
    manager.invalidate()
    assert manager.connected is False
