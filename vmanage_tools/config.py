"""
Defaults and environment-driven settings for the vManage helpers
"""
import os
from typing import Mapping, Optional

from pydantic import BaseModel, SecretStr

LOGIN_PATH = "j_security_check"
TOKEN_PATH = "dataservice/client/token"
DATASERVICE_PATH = "dataservice/"
EVENT_PATH = "dataservice/event"
RESET_INTERFACE_PATH = "dataservice/device/tools/reset/interface/"

DEFAULT_HOURS_TO_SEARCH = 24
DEFAULT_EVENT_QUERY_SIZE = 1000

# vManage renders failed tool actions as an HTML error dialog with HTTP 200
ERROR_DIALOG_MARKER = "error-dialog"


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


class VManageSettings(BaseModel):
    base_url: str
    username: str
    password: SecretStr
    skip_cert_check: bool = False


def load_settings(environ: Optional[Mapping[str, str]] = None) -> VManageSettings:
    """
    Build VManageSettings from VMANAGE_* environment variables.

    Missing URL, username or password raises pydantic.ValidationError.
    """
    env = os.environ if environ is None else environ
    values = {
        "base_url": env.get("VMANAGE_URL"),
        "username": env.get("VMANAGE_USERNAME"),
        "password": env.get("VMANAGE_PASSWORD"),
        "skip_cert_check": _parse_bool(env.get("VMANAGE_SKIP_CERT_CHECK", "false")),
    }
    return VManageSettings(**{k: v for k, v in values.items() if v is not None})
