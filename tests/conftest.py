# tests/conftest.py
import sys
from ipaddress import IPv4Address
from pathlib import Path

import pytest

# 确保 src 目录在 sys.path 中
src_path = Path(__file__).resolve().parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from drcom_heartbeat.config import HeartbeatConfig


@pytest.fixture
def valid_config() -> HeartbeatConfig:
    """[Fixture] 返回一个典型的主机心跳配置。"""
    return HeartbeatConfig(
        host_ip=IPv4Address("10.30.22.17"),
        mac_address=b"\x00\x11\x22\x33\x44\x55",
        type_id=3,
        uid_length=0,
        server_address="10.0.0.1",
        server_port=61440,
    )


@pytest.fixture
def mac_bytes() -> bytes:
    return b"\xaa\xbb\xcc\xdd\xee\xff"


@pytest.fixture
def host_ip() -> IPv4Address:
    # 192.168.1.10
    return IPv4Address("192.168.1.10")
