# File: src/drcom_heartbeat/protocols/pppoe/__init__.py
"""
Dr.COM P 版 (PPPoE) 心跳协议

包含 Challenge 与 Heartbeat 数据包的构建/解析，以及心跳尾部校验算法。
"""

from .checksum import RETAIN_POSITIONS, ChecksumMode, crc_hash
from .packets import (
    ChallengeRequest,
    ChallengeResponse,
    HeartbeatFlag,
    HeartbeatRequest,
    build_challenge_request,
    build_heartbeat_packet,
    parse_challenge_response,
)

__all__ = [
    "ChecksumMode",
    "RETAIN_POSITIONS",
    "crc_hash",
    "ChallengeRequest",
    "ChallengeResponse",
    "HeartbeatFlag",
    "HeartbeatRequest",
    "build_challenge_request",
    "build_heartbeat_packet",
    "parse_challenge_response",
]
