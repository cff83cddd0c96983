"""
Filtered event-log queries against dataservice/event
"""
import json
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import urlencode

from pydantic import BaseModel, Field, ValidationError

from .config import DEFAULT_EVENT_QUERY_SIZE, DEFAULT_HOURS_TO_SEARCH, EVENT_PATH
from .exceptions import FetchError, QueryError, single_line
from .session import VManageSession, get_data, normalize_base_url

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class QueryRule(BaseModel):
    field: str
    type: str
    value: List[str]
    operator: str


class QueryCondition(BaseModel):
    condition: str = "AND"
    rules: List[QueryRule]


class EventQuery(BaseModel):
    query: QueryCondition
    size: int

    def to_json(self) -> str:
        return self.model_dump_json()


class EventFilter(BaseModel):
    hours_to_search: int = Field(DEFAULT_HOURS_TO_SEARCH, gt=0)
    size: int = Field(DEFAULT_EVENT_QUERY_SIZE, gt=0)
    system_ip: Optional[str] = None
    severity: Optional[str] = None
    event_name: Optional[str] = None

    def rules(self) -> List[QueryRule]:
        rules = [
            QueryRule(field="entry_time", type="date",
                      value=[str(self.hours_to_search)], operator="last_n_hours"),
        ]
        optional = (
            ("system_ip", self.system_ip),
            ("severity_level", self.severity),
            ("eventname", self.event_name),
        )
        for field, value in optional:
            if value is not None:
                rules.append(QueryRule(field=field, type="string", value=[value], operator="in"))
        return rules

    def to_query(self) -> EventQuery:
        return EventQuery(query=QueryCondition(rules=self.rules()), size=self.size)


def build_event_query(hours_to_search: int = DEFAULT_HOURS_TO_SEARCH,
                      size: int = DEFAULT_EVENT_QUERY_SIZE,
                      system_ip: Optional[str] = None,
                      severity: Optional[str] = None,
                      event_name: Optional[str] = None) -> EventQuery:
    return EventFilter(hours_to_search=hours_to_search, size=size, system_ip=system_ip,
                       severity=severity, event_name=event_name).to_query()


def event_url(base_url: str, query: EventQuery) -> str:
    return normalize_base_url(base_url) + EVENT_PATH + "?" + urlencode({"query": query.to_json()})


def convert_event(record: Dict[str, Any]) -> Dict[str, Any]:
    """
    Replace raw entry_time (epoch ms) with a UTC timestamp and the JSON
    string in "event" with a parsed event_details dict.
    """
    converted = dict(record)
    if "entry_time" in converted:
        converted["timestamp"] = EPOCH + timedelta(milliseconds=int(converted.pop("entry_time")))
    if "event" in converted:
        raw = converted.pop("event")
        converted["event_details"] = json.loads(raw) if isinstance(raw, (str, bytes)) else raw
    return converted


def get_events(session: VManageSession, base_url: str,
               hours_to_search: int = DEFAULT_HOURS_TO_SEARCH,
               size: int = DEFAULT_EVENT_QUERY_SIZE,
               system_ip: Optional[str] = None,
               severity: Optional[str] = None,
               event_name: Optional[str] = None) -> List[Dict[str, Any]]:
    """
    Query the vManage event log.

    Only the time window is always filtered; system IP, severity and event
    name are added to the rule list when given. Returns converted records,
    an empty list when nothing matched.
    """
    try:
        query = build_event_query(hours_to_search, size, system_ip, severity, event_name)
    except ValidationError as e:
        raise QueryError(f"Invalid event filter: {single_line(e)}") from e
    url = event_url(base_url, query)
    logger.debug(f"[vManage] Event query rules={len(query.query.rules)} size={query.size}")

    try:
        records = get_data(session, url)
    except FetchError as e:
        logger.error("[vManage] Event query failed")
        raise QueryError(f"Event query failed: {e}") from e

    if isinstance(records, dict):
        records = [records]
    try:
        return [convert_event(record) for record in records]
    except (ValueError, TypeError, OverflowError) as e:
        raise QueryError(f"Event query returned an unreadable record: {single_line(e)}") from e
