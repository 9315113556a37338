# tests/test_heartbeat.py
"""
测试 PPPoE 心跳请求包 (96 字节) 的构建。
"""

import struct
import sys
from ipaddress import IPv4Address

import pytest

from drcom_heartbeat import utils
from drcom_heartbeat.protocols.constants import Code, HeartbeatConst
from drcom_heartbeat.protocols.pppoe import packets
from drcom_heartbeat.protocols.pppoe.checksum import ChecksumMode, crc_hash
from drcom_heartbeat.protocols.pppoe.packets import HeartbeatFlag, HeartbeatRequest

little_endian_only = pytest.mark.skipif(
    sys.byteorder != "little", reason="测试向量按小端序主机给出"
)


def _request(seed: int, **kwargs) -> HeartbeatRequest:
    params = dict(
        sequence=1,
        source_ip=IPv4Address("0.0.0.0"),
        flag=HeartbeatFlag.FIRST,
        challenge_seed=seed,
    )
    params.update(kwargs)
    return HeartbeatRequest(**params)


# =========================================================================
# 结构
# =========================================================================


@pytest.mark.parametrize("seed", [0, 1, 2, 3, 0x12345678, 0xFFFFFFFF])
@pytest.mark.parametrize("flag", list(HeartbeatFlag))
def test_heartbeat_length(seed, flag):
    pkt = _request(seed, flag=flag).to_bytes()
    assert len(pkt) == 96
    assert struct.unpack("=H", pkt[2:4])[0] == 96
    assert HeartbeatRequest.PACKET_LEN == 96


def test_heartbeat_header_and_content(mac_bytes, host_ip):
    req = HeartbeatRequest(
        sequence=0x42,
        source_ip=host_ip,
        flag=HeartbeatFlag.NOT_FIRST,
        challenge_seed=0x01020304,
        type_id=5,
        uid_length=9,
        mac_address=mac_bytes,
    )
    pkt = req.to_bytes()

    assert pkt[0] == Code.MISC
    assert pkt[1] == 0x42
    assert pkt[4] == 5
    assert pkt[5] == 9
    assert pkt[6:12] == mac_bytes
    assert pkt[12:16] == b"\xc0\xa8\x01\x0a"
    assert struct.unpack("=I", pkt[16:20])[0] == 0x2A006300
    assert struct.unpack("=I", pkt[20:24])[0] == 0x01020304


def test_heartbeat_defaults():
    req = _request(0)
    assert req.type_id == 3
    assert req.uid_length == 0
    assert req.mac_address == b"\x00" * 6

    pkt = req.to_bytes()
    assert pkt[4] == 3
    assert pkt[5] == 0
    assert pkt[6:12] == b"\x00" * 6


def test_heartbeat_flag_values():
    assert HeartbeatFlag.FIRST.value == 0x2A006200
    assert HeartbeatFlag.NOT_FIRST.value == 0x2A006300
    pkt = _request(1, flag=HeartbeatFlag.FIRST).to_bytes()
    assert struct.unpack("=I", pkt[16:20])[0] == 0x2A006200


@pytest.mark.parametrize("seed", [0, 1, 2])
def test_heartbeat_padding_is_zero(seed):
    pkt = _request(seed).to_bytes()
    assert pkt[32:] == b"\x00" * 64


# =========================================================================
# 尾部校验
# =========================================================================


@pytest.mark.parametrize("seed", [1, 4, 2, 5, 0x7FFFFFFF])
def test_hash_modes_use_seed_digest(seed):
    """MD5/MD4 模式下尾部 8 字节直接取自 seed 的摘要"""
    mode = ChecksumMode.from_seed(seed)
    assert mode in (ChecksumMode.MD5, ChecksumMode.MD4)

    pkt = _request(seed).to_bytes()
    assert pkt[24:32] == crc_hash(mode, struct.pack("=I", seed))


@little_endian_only
def test_md5_mode_vector():
    pkt = _request(1).to_bytes()
    assert pkt[24:32] == bytes.fromhex("d88a0bf7aa397bca")


@little_endian_only
def test_none_mode_vector():
    """seed=0，全 0 字段: CRC(Header+Content+伪摘要) * 19680126"""
    pkt = _request(0).to_bytes()
    assert pkt[24:28] == bytes.fromhex("0624fb10")
    assert pkt[28:32] == b"\x00" * 4


@pytest.mark.parametrize("seed", [0, 3, 0x30, 0xFFFFFFFF])
def test_none_mode_rehash(seed, mac_bytes, host_ip):
    req = _request(
        seed, source_ip=host_ip, mac_address=mac_bytes, flag=HeartbeatFlag.NOT_FIRST
    )
    assert req.checksum_mode is ChecksumMode.NONE
    pkt = req.to_bytes()

    crc = utils.drcom_crc32(pkt[:24] + struct.pack("=II", 20000711, 126))
    expected = (crc * HeartbeatConst.CRC_MULTIPLIER) & 0xFFFFFFFF
    assert struct.unpack("=II", pkt[24:32]) == (expected, 0)


def test_heartbeat_is_deterministic():
    assert _request(0).to_bytes() == _request(0).to_bytes()
    assert _request(0, sequence=2).to_bytes() != _request(0).to_bytes()


# =========================================================================
# 参数校验与便捷接口
# =========================================================================


@pytest.mark.parametrize(
    "kwargs",
    [
        {"sequence": 256},
        {"sequence": -1},
        {"type_id": 300},
        {"uid_length": -2},
        {"challenge_seed": 1 << 32},
        {"mac_address": b"\x00" * 5},
    ],
)
def test_heartbeat_rejects_invalid_fields(kwargs):
    with pytest.raises(ValueError):
        _request(0, **kwargs)


def test_heartbeat_accepts_ip_string():
    req = _request(0, source_ip="10.0.0.2")
    assert req.source_ip == IPv4Address("10.0.0.2")


def test_from_config(valid_config):
    req = HeartbeatRequest.from_config(
        valid_config, sequence=3, flag=HeartbeatFlag.NOT_FIRST, challenge_seed=2
    )
    pkt = req.to_bytes()
    assert pkt[6:12] == valid_config.mac_address
    assert pkt[12:16] == valid_config.host_ip.packed
    assert pkt[1] == 3


def test_build_heartbeat_packet_matches_dataclass(mac_bytes):
    pkt = packets.build_heartbeat_packet(
        sequence=9,
        source_ip="172.16.0.8",
        flag=HeartbeatFlag.FIRST,
        challenge_seed=0xCAFEBABE,
        mac_address=mac_bytes,
    )
    expected = HeartbeatRequest(
        sequence=9,
        source_ip=IPv4Address("172.16.0.8"),
        flag=HeartbeatFlag.FIRST,
        challenge_seed=0xCAFEBABE,
        mac_address=mac_bytes,
    ).to_bytes()
    assert pkt == expected
