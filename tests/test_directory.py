"""Company directory loading and the directory model."""

import dataclasses
import json

import pytest

from quotedesk.client.directory import (
    CompanyDirectoryLoader,
    StaticDirectoryLoader,
    build_directory_loader,
)
from quotedesk.config.settings import DirectoryConfig, DirectorySource
from quotedesk.core.domain_models import CompanyDirectory
from quotedesk.core.exceptions import MalformedResponseError, NetworkError

LIST_PATH = "/stable/stock/market/list/mostactive"

MOST_ACTIVE = [
    {"companyName": "Apple Inc.", "symbol": "AAPL", "latestPrice": 150.25},
    {"companyName": "Tesla Inc", "symbol": "TSLA", "volume": 1000},
    {"companyName": "Ford Motor Co.", "symbol": "F"},
]


@pytest.mark.asyncio
async def test_load_builds_directory_in_response_order(mock_api, open_requester, settings):
    mock_api.respond(LIST_PATH, json_body=MOST_ACTIVE)

    async with open_requester() as requester:
        directory = await CompanyDirectoryLoader(requester, settings).load()

    assert directory.names == ("Apple Inc.", "Tesla Inc", "Ford Motor Co.")
    assert directory.symbol_for("Tesla Inc") == "TSLA"
    assert directory.symbol_at(2) == "F"
    assert len(directory) == 3


@pytest.mark.asyncio
async def test_load_sends_limit_and_token(mock_api, open_requester, settings):
    mock_api.respond(LIST_PATH, json_body=MOST_ACTIVE)

    async with open_requester() as requester:
        await CompanyDirectoryLoader(requester, settings).load()

    (request,) = mock_api.requests
    assert request.method == "GET"
    assert request.url.params["listLimit"] == "20"
    assert request.url.params["token"] == "test-token"


@pytest.mark.asyncio
async def test_duplicate_names_keep_position_and_last_symbol(mock_api, open_requester, settings):
    mock_api.respond(
        LIST_PATH,
        json_body=[
            {"companyName": "Alphabet", "symbol": "GOOGL"},
            {"companyName": "Microsoft", "symbol": "MSFT"},
            {"companyName": "Alphabet", "symbol": "GOOG"},
        ],
    )

    async with open_requester() as requester:
        directory = await CompanyDirectoryLoader(requester, settings).load()

    assert directory.names == ("Alphabet", "Microsoft")
    assert directory.symbol_for("Alphabet") == "GOOG"


@pytest.mark.asyncio
async def test_empty_list_gives_empty_directory(mock_api, open_requester, settings):
    mock_api.respond(LIST_PATH, json_body=[])

    async with open_requester() as requester:
        directory = await CompanyDirectoryLoader(requester, settings).load()

    assert directory.is_empty


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        [{"companyName": "Apple Inc."}],
        [{"symbol": "AAPL"}],
        [{"companyName": "Apple Inc.", "symbol": 42}],
        [{"companyName": None, "symbol": "AAPL"}],
        [{"companyName": "Apple Inc.", "symbol": "AAPL"}, "MSFT"],
        {"companyName": "Apple Inc.", "symbol": "AAPL"},
        "AAPL",
    ],
    ids=[
        "missing-symbol",
        "missing-name",
        "numeric-symbol",
        "null-name",
        "non-object-element",
        "object-top-level",
        "string-top-level",
    ],
)
async def test_malformed_list_raises(mock_api, open_requester, settings, body):
    mock_api.respond(LIST_PATH, content=json.dumps(body).encode())

    async with open_requester() as requester:
        with pytest.raises(MalformedResponseError):
            await CompanyDirectoryLoader(requester, settings).load()


@pytest.mark.asyncio
async def test_invalid_json_raises_malformed(mock_api, open_requester, settings):
    mock_api.respond(LIST_PATH, content=b"[{not json")

    async with open_requester() as requester:
        with pytest.raises(MalformedResponseError):
            await CompanyDirectoryLoader(requester, settings).load()


@pytest.mark.asyncio
async def test_server_error_raises_network_error(mock_api, open_requester, settings):
    mock_api.respond(LIST_PATH, status=500, json_body=MOST_ACTIVE)

    async with open_requester() as requester:
        with pytest.raises(NetworkError):
            await CompanyDirectoryLoader(requester, settings).load()


@pytest.mark.asyncio
async def test_static_loader_uses_configured_order():
    loader = StaticDirectoryLoader({"Apple": "AAPL", "Microsoft": "MSFT", "Google": "GOOG"})

    directory = await loader.load()

    assert directory.names == ("Apple", "Microsoft", "Google")
    assert directory.symbol_at(1) == "MSFT"


def test_build_directory_loader_picks_source(settings):
    static = build_directory_loader(
        DirectoryConfig(source=DirectorySource.STATIC, companies={"Apple": "AAPL"}),
        requester=None,
        settings=settings,
    )
    api = build_directory_loader(DirectoryConfig(), requester=None, settings=settings)

    assert isinstance(static, StaticDirectoryLoader)
    assert isinstance(api, CompanyDirectoryLoader)


def test_directory_is_read_only():
    directory = CompanyDirectory.from_pairs([("Apple", "AAPL")])

    with pytest.raises(TypeError):
        directory.symbols["Microsoft"] = "MSFT"
    with pytest.raises(dataclasses.FrozenInstanceError):
        directory.names = ()

    assert "Apple" in directory
    assert "Microsoft" not in directory
    assert list(directory) == ["Apple"]
