# src/drcom_heartbeat/__init__.py
"""
Drcom-Heartbeat v0.1.0
Dr.COM P 版 (PPPoE) 心跳协议的封包/解包核心库。
"""

# 暴露配置
from .config import (
    HeartbeatConfig,
    create_config_from_dict,
    load_config_from_env,
    load_config_from_toml,
)

# 暴露异常体系 (方便上层 try-except)
from .exceptions import (
    ChecksumError,
    ChecksumInputError,
    ChecksumModeError,
    ConfigError,
    DrcomError,
    PacketCodeError,
    PacketReadError,
    PacketTruncatedError,
    ProtocolError,
)

# 暴露数据包
from .protocols.pppoe import (
    ChallengeRequest,
    ChallengeResponse,
    ChecksumMode,
    HeartbeatFlag,
    HeartbeatRequest,
    build_challenge_request,
    build_heartbeat_packet,
    crc_hash,
    parse_challenge_response,
)
from .reader import PacketReader
from .utils import drcom_crc32

__version__ = "0.1.0"

__all__ = [
    "HeartbeatConfig",
    "create_config_from_dict",
    "load_config_from_env",
    "load_config_from_toml",
    "DrcomError",
    "ConfigError",
    "ProtocolError",
    "PacketReadError",
    "PacketTruncatedError",
    "PacketCodeError",
    "ChecksumError",
    "ChecksumModeError",
    "ChecksumInputError",
    "ChallengeRequest",
    "ChallengeResponse",
    "ChecksumMode",
    "HeartbeatFlag",
    "HeartbeatRequest",
    "build_challenge_request",
    "build_heartbeat_packet",
    "crc_hash",
    "parse_challenge_response",
    "PacketReader",
    "drcom_crc32",
]
