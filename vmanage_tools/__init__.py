"""
Helpers for the Cisco SD-WAN vManage REST API: login, dataservice reads,
event-log queries and interface resets.
"""
from .config import VManageSettings, load_settings
from .event_query import EventFilter, EventQuery, build_event_query, convert_event, get_events
from .exceptions import (
    AuthenticationError,
    FetchError,
    QueryError,
    ResetError,
    UrlValidationError,
    VManageError,
)
from .interface_reset import reset_interface
from .session import VManageSession, close_session, connect, get_data
from .vmanage_client import VManageClient

__all__ = [
    "AuthenticationError",
    "EventFilter",
    "EventQuery",
    "FetchError",
    "QueryError",
    "ResetError",
    "UrlValidationError",
    "VManageClient",
    "VManageError",
    "VManageSession",
    "VManageSettings",
    "build_event_query",
    "close_session",
    "connect",
    "convert_event",
    "get_data",
    "get_events",
    "load_settings",
    "reset_interface",
]
