import re
from typing import Generator

import httpx
import pytest
import responses

from fake_oxygen_server import FakeOxygenServer
from oxygen_http_client import HttpClient
from oxygen_httpx import OxygenHTTPX
from oxygen_requests import OxygenRequests


@pytest.fixture()
def endpoint() -> str:
    return "https://oxygen.example/api"


@pytest.fixture()
def token() -> str:
    return "secret-token"


@pytest.fixture()
def fake_server(endpoint: str) -> FakeOxygenServer:
    return FakeOxygenServer(endpoint)


@pytest.fixture()
def mocked_responses() -> Generator[responses.RequestsMock, None, None]:
    """Any request to a URL that hasn't been registered fails with a ConnectionError"""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as mock:
        yield mock


@pytest.fixture()
def served_by_fake(mocked_responses: responses.RequestsMock, fake_server: FakeOxygenServer, endpoint: str) -> FakeOxygenServer:
    everything_under_endpoint = re.compile(re.escape(endpoint) + ".*")
    for method in ["HEAD", "GET", "POST", "PATCH", "DELETE"]:
        mocked_responses.add_callback(method, everything_under_endpoint, callback=fake_server.requests_callback)
    return fake_server


@pytest.fixture()
def client(endpoint: str, token: str) -> Generator[HttpClient, None, None]:
    """Uses 'requests' so 'responses' sees everything it sends"""
    with HttpClient(endpoint, token, OxygenRequests()) as client:
        yield client


@pytest.fixture()
def httpx_client(endpoint: str, token: str, fake_server: FakeOxygenServer) -> Generator[HttpClient, None, None]:
    transport = httpx.MockTransport(fake_server.httpx_handler)
    with HttpClient(endpoint, token, OxygenHTTPX(httpx.Client(transport=transport))) as client:
        yield client
