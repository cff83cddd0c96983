from unittest.mock import MagicMock

import pytest
import requests

from vmanage_tools.session import VManageSession


def _response(status_code=200, text="", json_data=None, content=None):
    response = MagicMock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 400
    response.text = text
    response.content = text.encode("utf-8") if content is None else content
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


def _transport(cookie="abc123"):
    transport = MagicMock(spec=requests.Session)
    transport.cookies = requests.cookies.RequestsCookieJar()
    if cookie:
        transport.cookies.set("JSESSIONID", cookie, domain="vmanage.example.com", path="/")
    return transport


def _session(transport, verify=True):
    return VManageSession(
        transport=transport,
        headers={
            "X-XSRF-TOKEN": "tok123",
            "Authorization": "Basic YWRtaW46c2VjcmV0",
            "Cookie": "JSESSIONID=abc123",
        },
        base_url="https://vmanage.example.com/",
        verify=verify,
    )


@pytest.fixture
def make_response():
    return _response


@pytest.fixture
def make_transport():
    return _transport


@pytest.fixture
def transport():
    return _transport()


@pytest.fixture
def vmanage_session(transport):
    return _session(transport)


@pytest.fixture
def unverified_session(transport):
    return _session(transport, verify=False)
