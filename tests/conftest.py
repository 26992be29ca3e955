import pytest

from helpers import FakeTransport, RecordingSink

from fx4ctl.actions.dispatcher import CommandDispatcher
from fx4ctl.communication.rest_client import RestCommandClient
from fx4ctl.config.module_config import ModuleConfig
from fx4ctl.module.fx4_module import FX4Module


@pytest.fixture
def config():
    return ModuleConfig(host="192.168.1.50")


@pytest.fixture
def transport():
    return FakeTransport()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def client(transport, config):
    return RestCommandClient(transport, config)


@pytest.fixture
def dispatcher(client, sink):
    return CommandDispatcher(client, sink)


@pytest.fixture
def module(config, transport, sink):
    """Initialized FX4 module wired to the fake transport"""
    fx4 = FX4Module(config, transport, sink)
    fx4.init()
    return fx4
