"""
Device interface reset through dataservice/device/tools
"""
import logging

import requests
from pydantic import BaseModel, ConfigDict, Field

from .config import ERROR_DIALOG_MARKER, RESET_INTERFACE_PATH
from .exceptions import ResetError, single_line
from .session import VManageSession, normalize_base_url, request

logger = logging.getLogger(__name__)


class InterfaceResetRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    vpn_id: str = Field(alias="vpnId")
    if_name: str = Field(alias="ifname")


def reset_interface(session: VManageSession, base_url: str, system_ip: str, vpn_id, if_name: str) -> bool:
    """
    Reset one interface on the device with the given system IP.

    Returns True when vManage accepted the action. A non-200 status or an
    error dialog in the response body raises ResetError.
    """
    url = normalize_base_url(base_url) + RESET_INTERFACE_PATH + system_ip
    body = InterfaceResetRequest(vpn_id=str(vpn_id), if_name=if_name).model_dump(by_alias=True)

    try:
        response = request(session, "POST", url, json=body,
                           headers={"Content-Type": "application/json"})
    except requests.RequestException as e:
        logger.error(f"[vManage] Interface reset request to {url} failed")
        raise ResetError(f"Interface reset on {system_ip} failed: {single_line(e)}") from e

    status = getattr(response, "status_code", None)
    text = getattr(response, "text", "") or ""
    if status != 200 or ERROR_DIALOG_MARKER in text:
        logger.error(f"[vManage] Interface reset on {system_ip} rejected: HTTP {status}")
        raise ResetError(f"Interface reset on {system_ip} failed: HTTP {status} {text}",
                         status_code=status, body=text)

    logger.info(f"[vManage] Interface {if_name} (VPN {vpn_id}) reset on {system_ip}")
    return True
