# src/drcom_heartbeat/protocols/__init__.py
"""
Dr.COM 协议层 (Protocol Layer)

本包负责协议数据包的纯粹构建 (Build) 与解析 (Parse)。

- 不包含任何 socket 操作或网络 I/O。
- 不包含任何会话状态管理 (State)。
"""

from . import constants
from .base import DrcomPacket
from .pppoe import (
    ChallengeRequest,
    ChallengeResponse,
    ChecksumMode,
    HeartbeatFlag,
    HeartbeatRequest,
    build_challenge_request,
    build_heartbeat_packet,
    parse_challenge_response,
)

# 公共 API
__all__ = [
    "constants",
    "DrcomPacket",
    "ChallengeRequest",
    "ChallengeResponse",
    "ChecksumMode",
    "HeartbeatFlag",
    "HeartbeatRequest",
    "build_challenge_request",
    "build_heartbeat_packet",
    "parse_challenge_response",
]
