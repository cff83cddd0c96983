"""
Cisco SD-WAN vManage API Client
Binds a controller URL and credentials to the session, event and reset helpers
"""
from typing import Any, Dict, List, Optional, Union

from pydantic import SecretStr

from .config import DATASERVICE_PATH, DEFAULT_EVENT_QUERY_SIZE, DEFAULT_HOURS_TO_SEARCH, VManageSettings
from .event_query import get_events
from .interface_reset import reset_interface
from .session import VManageSession, close_session, connect, get_data, normalize_base_url


class VManageClient:
    """
    Cisco SD-WAN vManage API Client
    """

    def __init__(self, base_url: str, username: str, password: Union[SecretStr, str],
                 skip_cert_check: bool = False):
        self.base_url = normalize_base_url(base_url)
        self.username = username
        self.password = password if isinstance(password, SecretStr) else SecretStr(password)
        self.skip_cert_check = skip_cert_check
        self.session: Optional[VManageSession] = None

    @classmethod
    def from_settings(cls, settings: VManageSettings) -> "VManageClient":
        return cls(settings.base_url, settings.username, settings.password, settings.skip_cert_check)

    @property
    def authenticated(self) -> bool:
        return self.session is not None

    def authenticate(self) -> VManageSession:
        """
        Log in and keep the resulting session handle
        """
        self.session = connect(self.base_url, self.username, self.password, self.skip_cert_check)
        return self.session

    def _ensure_session(self) -> VManageSession:
        if not self.authenticated:
            return self.authenticate()
        return self.session

    def get_data(self, path: str) -> Any:
        """
        GET dataservice/<path> and return its "data" field
        """
        session = self._ensure_session()
        return get_data(session, self.base_url + DATASERVICE_PATH + path.lstrip("/"))

    def get_events(self, hours_to_search: int = DEFAULT_HOURS_TO_SEARCH,
                   size: int = DEFAULT_EVENT_QUERY_SIZE,
                   system_ip: Optional[str] = None,
                   severity: Optional[str] = None,
                   event_name: Optional[str] = None) -> List[Dict[str, Any]]:
        session = self._ensure_session()
        return get_events(session, self.base_url, hours_to_search, size,
                          system_ip=system_ip, severity=severity, event_name=event_name)

    def reset_interface(self, system_ip: str, vpn_id, if_name: str) -> bool:
        session = self._ensure_session()
        return reset_interface(session, self.base_url, system_ip, vpn_id, if_name)

    def close(self):
        """
        Close the session
        """
        if self.session is not None:
            close_session(self.session)
        self.session = None
