"""Shared constants and small helpers used across the manager."""

from __future__ import annotations

import hashlib
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

import requests
from requests.adapters import HTTPAdapter

GIB = 1024 * 1024 * 1024
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
TIME_MS_FORMAT = "%Y-%m-%d %H:%M:%S.%f"
CURVEBS_ADDRESS_DELIMITER = ","
RAFT_REPLICAS_NUMBER = 3
RAFT_MARGIN = 1000

CHAR_TABLE = "0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"

# raft status
RAFT_EMPTY_ADDR = "0.0.0.0:0:0"
RAFT_STATUS_KEY_GROUPID = "group_id"
RAFT_STATUS_KEY_LEADER = "leader"
RAFT_STATUS_KEY_PEERS = "peers"
RAFT_STATUS_KEY_STATE = "state"
RAFT_STATUS_KEY_REPLICATOR = "replicator"
RAFT_STATUS_KEY_LAST_LOG_ID = "last_log_id"
RAFT_STATUS_KEY_SNAPSHOT = "snapshot"
RAFT_STATUS_KEY_NEXT_INDEX = "next_index"
RAFT_STATUS_KEY_FLYING_APPEND_ENTRIES_SIZE = "flying_append_entries_size"
RAFT_STATUS_KEY_STORAGE = "storage"

RAFT_STATUS_STATE_LEADER = "LEADER"
RAFT_STATUS_STATE_FOLLOWER = "FOLLOWER"
RAFT_STATUS_STATE_TRANSFERRING = "TRANSFERRING"
RAFT_STATUS_STATE_CANDIDATE = "CANDIDATE"

MAX_CONNS_PER_HOST = 100

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass
class QueryResult:
    """Outcome of one query among several run for different keys."""

    key: Any = None
    err: Exception | None = None
    result: Any = None


def max_uint64(first: int, second: int) -> int:
    """Return the larger of two values."""
    return max(first, second)


def min_uint32(first: int, second: int) -> int:
    """Return the smaller of two values."""
    return min(first, second)


def get_md5_sum32_little(key: str) -> str:
    """Return the lower-case hexadecimal MD5 digest of ``key``."""
    return hashlib.md5(key.encode("utf-8")).hexdigest()


def get_rand_string(n: int) -> str:
    """Return ``n`` random characters drawn from ``CHAR_TABLE``."""
    return "".join(random.choices(CHAR_TABLE, k=max(n, 0)))


def get_ip_from_endpoint(endpoint: str) -> str:
    """Return the host part of an ``ip:port`` endpoint."""
    parts = endpoint.split(":")
    if len(parts) != 2:
        raise ValueError("invalid endpoint")
    return parts[0]


def mill_to_time_str(mill: int) -> str:
    """Format a millisecond Unix timestamp as local time with milliseconds."""
    moment = (_EPOCH + timedelta(milliseconds=mill)).astimezone()
    return f"{moment.strftime(TIME_FORMAT)}.{moment.microsecond // 1000:03d}"


def new_http_session() -> requests.Session:
    """Create an HTTP session with pooled keep-alive connections."""
    session = requests.Session()
    adapter = HTTPAdapter(
        pool_connections=MAX_CONNS_PER_HOST,
        pool_maxsize=MAX_CONNS_PER_HOST,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    return session