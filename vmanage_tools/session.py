"""
Session establishment and authenticated reads against vManage /dataservice
"""
import logging
import warnings
from base64 import b64encode
from contextlib import contextmanager
from types import MappingProxyType
from typing import Any, Dict, Mapping, Union
from urllib.parse import urlparse

import requests
import urllib3
from pydantic import BaseModel, ConfigDict, SecretStr, field_validator
from requests.cookies import get_cookie_header

from .config import LOGIN_PATH, TOKEN_PATH
from .exceptions import AuthenticationError, FetchError, UrlValidationError, single_line

logger = logging.getLogger(__name__)


class VManageSession(BaseModel):
    """
    Authenticated handle returned by connect().

    Holds the cookie-carrying transport, the headers every dataservice call
    needs and the TLS verification choice made at login. Reuse it until
    vManage rejects it; it is not safe to share between threads.
    """
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    transport: requests.Session
    headers: Mapping[str, str]
    base_url: str
    verify: bool = True

    @field_validator("headers", mode="after")
    @classmethod
    def read_only_headers(cls, value):
        return MappingProxyType(dict(value))


def validate_url(url: str) -> str:
    parsed = urlparse(url or "")
    if parsed.scheme.lower() != "https" or not parsed.netloc:
        raise UrlValidationError(f"URL must use https: {single_line(url)!r}")
    return url


def normalize_base_url(base_url: str) -> str:
    validate_url(base_url)
    return base_url if base_url.endswith("/") else base_url + "/"


@contextmanager
def _tls_scope(verify: bool):
    """
    Silence InsecureRequestWarning while one unverified call runs.

    catch_warnings() swaps the interpreter-wide filter list for the
    duration of the block and restores it afterwards, so this is only
    scoped per call under the single-threaded use the handle supports.
    """
    with warnings.catch_warnings():
        if not verify:
            warnings.simplefilter("ignore", urllib3.exceptions.InsecureRequestWarning)
        yield


def _basic_auth(username: str, password: str) -> str:
    raw = f"{username}:{password}".encode("utf-8")
    return "Basic " + b64encode(raw).decode("ascii")


def connect(base_url: str, username: str, password: Union[SecretStr, str],
            skip_cert_check: bool = False) -> VManageSession:
    """
    Log in to vManage and return a session handle.

    Steps: form login on j_security_check, XSRF token from
    dataservice/client/token using Basic auth, then the session cookie for
    the token path. Any failure raises AuthenticationError.
    """
    base_url = normalize_base_url(base_url)
    verify = not skip_cert_check
    transport = requests.Session()
    try:
        headers = _authenticate(transport, base_url, username, password, verify)
    except Exception:
        transport.close()
        raise
    logger.info(f"[vManage] Auth OK - {base_url} as {username}")
    return VManageSession(transport=transport, headers=headers, base_url=base_url, verify=verify)


def _authenticate(transport: requests.Session, base_url: str, username: str,
                  password: Union[SecretStr, str], verify: bool) -> Dict[str, str]:
    plaintext = password.get_secret_value() if isinstance(password, SecretStr) else password
    login_body = {"j_username": username, "j_password": plaintext}
    authorization = _basic_auth(username, plaintext)
    del plaintext, password

    login_url = base_url + LOGIN_PATH
    try:
        with _tls_scope(verify):
            response = transport.post(login_url, data=login_body, verify=verify)
    except requests.RequestException as e:
        logger.error(f"[vManage] Login request to {login_url} failed")
        raise AuthenticationError(f"Login to {login_url} failed: {single_line(e)}") from e
    finally:
        login_body.clear()

    if response is None or response.status_code != 200:
        status = getattr(response, "status_code", None)
        raise AuthenticationError(f"Login to {login_url} failed: HTTP {status}")
    # vManage answers bad credentials with 200 and the login page
    if b"<html>" in (response.content or b""):
        raise AuthenticationError(f"Login to {login_url} failed: invalid credentials - HTML response received")

    token_url = base_url + TOKEN_PATH
    try:
        with _tls_scope(verify):
            response = transport.get(token_url, headers={"Authorization": authorization}, verify=verify)
    except requests.RequestException as e:
        logger.error(f"[vManage] Token request to {token_url} failed")
        raise AuthenticationError(f"Token request to {token_url} failed: {single_line(e)}") from e

    if response is None or response.status_code != 200:
        status = getattr(response, "status_code", None)
        raise AuthenticationError(f"Token request to {token_url} failed: HTTP {status}")
    token = (response.text or "").strip()
    if not token:
        raise AuthenticationError(f"Token request to {token_url} returned an empty token")

    cookie = get_cookie_header(transport.cookies, requests.Request("GET", token_url).prepare())
    if not cookie:
        raise AuthenticationError(f"No session cookie set for {token_url}")

    return {
        "X-XSRF-TOKEN": token,
        "Authorization": authorization,
        "Cookie": cookie,
    }


def request(session: VManageSession, method: str, url: str, **kwargs) -> requests.Response:
    """Send a request carrying the handle's headers and TLS setting"""
    headers = dict(session.headers)
    headers.update(kwargs.pop("headers", None) or {})
    logger.debug(f"[vManage] {method} {url}")
    with _tls_scope(session.verify):
        return session.transport.request(method, url, headers=headers, verify=session.verify, **kwargs)


def get_data(session: VManageSession, url: str) -> Any:
    """
    GET a dataservice URL and return the unwrapped "data" field.

    An empty or null "data" comes back as an empty list.
    """
    validate_url(url)
    try:
        response = request(session, "GET", url)
    except requests.RequestException as e:
        logger.error(f"[vManage] GET {url} failed")
        raise FetchError(f"GET {url} failed: {single_line(e)}") from e

    if response is None:
        raise FetchError(f"GET {url} returned no response")
    if not response.ok:
        raise FetchError(f"GET {url} failed: HTTP {response.status_code} {single_line(response.text)}")

    try:
        payload = response.json()
    except ValueError as e:
        raise FetchError(f"GET {url} returned invalid JSON: {single_line(e)}") from e

    if not isinstance(payload, dict) or "data" not in payload:
        raise FetchError(f"GET {url} returned no data envelope")

    data = payload["data"]
    if not data:
        logger.warning(f"[vManage] GET {url} returned empty data")
        return []
    return data


def close_session(session: VManageSession) -> None:
    session.transport.close()
