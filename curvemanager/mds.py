"""Client for the MDS HTTP service and selection of the serving MDS."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping
from urllib.parse import urlunsplit

import requests

from curvemanager.basehttp import BaseHttp
from curvemanager.common import CURVEBS_ADDRESS_DELIMITER, new_http_session
from curvemanager.namespace import NamespaceMixin
from curvemanager.topology import TopologyMixin

CURVEBS_MDS_ADDRESS = "mds.address"

DEFAULT_RPC_TIMEOUT_MS = 500
DEFAULT_RPC_RETRY_TIMES = 3

_PROBE_TIMEOUT_SECONDS = 30.0
_PROBE_HEADERS = {
    "Connection": "Keep-Alive",
    "Content-Type": "application/json",
    "User-Agent": "Curve-Manager",
}


@dataclass
class MdsClientOption:
    """Settings of an MDS client."""

    timeout_ms: int = DEFAULT_RPC_TIMEOUT_MS
    retry_times: int = DEFAULT_RPC_RETRY_TIMES
    addrs: list[str] = field(default_factory=list)


class MdsClient(NamespaceMixin, TopologyMixin):
    """Sends name-service and topology requests to a set of MDS addresses."""

    def __init__(self, option: MdsClientOption) -> None:
        self.addrs = list(option.addrs)
        self.base_client = BaseHttp(
            client=new_http_session(),
            timeout=option.timeout_ms / 1000,
            retry_times=option.retry_times,
        )


GMdsClient: MdsClient | None = None


def find_leader(cfg: Mapping[str, str]) -> str:
    """Return the first MDS address that answers, or the configured list as is."""
    mds_addr = cfg.get(CURVEBS_MDS_ADDRESS, "")
    with new_http_session() as session:
        for addr in mds_addr.split(CURVEBS_ADDRESS_DELIMITER):
            url = urlunsplit(("http", addr, "/", "", ""))
            try:
                session.get(url, headers=_PROBE_HEADERS, timeout=_PROBE_TIMEOUT_SECONDS)
            except (requests.RequestException, ValueError):
                continue
            return addr
    return mds_addr


def init(cfg: Mapping[str, str]) -> MdsClient:
    """Create the shared MDS client from the configuration and return it."""
    global GMdsClient
    addrs = find_leader(cfg)
    GMdsClient = MdsClient(
        MdsClientOption(
            timeout_ms=DEFAULT_RPC_TIMEOUT_MS,
            retry_times=DEFAULT_RPC_RETRY_TIMES,
            addrs=addrs.split(CURVEBS_ADDRESS_DELIMITER),
        )
    )
    return GMdsClient