from __future__ import annotations

import pytest

from core.domain.models import ServerSpec, ServerVariable
from core.domain.operations import SERVERS
from core.domain.servers import default_server_url, resolve_server_url, template_variables
from core.errors import ConfigurationError

TEMPLATE = "https://{region}.api.example.com/{basePath}"


def test_template_variables_in_order():
    assert template_variables(TEMPLATE) == ["region", "basePath"]
    assert template_variables("https://{a}/{a}/{b}") == ["a", "b"]


def test_literal_url_is_kept():
    assert resolve_server_url("https://eu.api.example.com/v14") == "https://eu.api.example.com/v14"


def test_trailing_slash_is_stripped():
    assert resolve_server_url("https://eu.api.example.com/v14/") == "https://eu.api.example.com/v14"


def test_all_variables_provided():
    url = resolve_server_url(TEMPLATE, {"region": "eu", "basePath": "v14"})
    assert url == "https://eu.api.example.com/v14"


def test_missing_variable_without_default_fails():
    with pytest.raises(ConfigurationError) as info:
        resolve_server_url(TEMPLATE, {"name": "eu", "basePath": "v14"})
    assert "region" in str(info.value)


def test_missing_variable_falls_back_to_declared_default():
    servers = (ServerSpec(url=TEMPLATE, variables={"region": ServerVariable(default="us")}),)
    url = resolve_server_url(TEMPLATE, {"basePath": "v14"}, servers=servers)
    assert url == "https://us.api.example.com/v14"


def test_empty_url_fails():
    with pytest.raises(ConfigurationError):
        resolve_server_url("  ")


def test_default_server_url():
    assert default_server_url(SERVERS) == "https://ton-mainnet.s.chainbase.online/v1"
    assert default_server_url(SERVERS, {"network": "ton-testnet"}) == "https://ton-testnet.s.chainbase.online/v1"


def test_default_server_url_requires_a_server():
    with pytest.raises(ConfigurationError):
        default_server_url(())
