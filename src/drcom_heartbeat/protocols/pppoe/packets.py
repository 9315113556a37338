# File: src/drcom_heartbeat/protocols/pppoe/packets.py
"""
Dr.COM P 版 (PPPoE) 心跳封包构建器 (Packet Builders)

负责心跳交互中三种数据包的构建与解析:
- Challenge 请求 (Client -> Server, 8 字节)
- Challenge 响应 (Server -> Client, 解析前 16 字节)
- Heartbeat 请求 (Client -> Server, 96 字节)

本模块是无状态的 (Stateless)，每个数据包对象构建后不可变。
除 Challenge 响应中的 source_ip 为网络字节序外，所有多字节整数均为本机字节序。
"""

import logging
import struct
from dataclasses import dataclass
from enum import Enum
from ipaddress import IPv4Address
from typing import TYPE_CHECKING, BinaryIO

from ... import utils
from ...reader import PacketReader
from ..base import DrcomPacket
from ..constants import ChallengeConst, HeartbeatConst
from .checksum import ChecksumMode

if TYPE_CHECKING:
    from ...config import HeartbeatConfig

logger = logging.getLogger(__name__)


def _check_u8(name: str, value: int) -> None:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} 必须在 0-255 之间: {value}")


# =========================================================================
# Challenge (0x07)
# =========================================================================


@dataclass(frozen=True)
class ChallengeRequest(DrcomPacket):
    """Challenge 请求包。

    结构: Code(1) + Sequence(1) + Magic=65544(4, Native) + 0x00(2)
    """

    sequence: int = ChallengeConst.DEFAULT_SEQUENCE

    def __post_init__(self) -> None:
        _check_u8("sequence", self.sequence)

    def to_bytes(self) -> bytes:
        pkt = bytearray(ChallengeConst.REQ_LENGTH)
        pkt[0] = self.code()
        pkt[1] = self.sequence
        struct.pack_into("=I", pkt, 2, ChallengeConst.REQ_MAGIC)

        logger.debug("challenge_build: seq=%d pkt=%s", self.sequence, pkt.hex())
        return bytes(pkt)


@dataclass(frozen=True)
class ChallengeResponse(DrcomPacket):
    """Challenge 响应包的解析结果。

    Attributes:
        challenge_seed: 服务器下发的 32 位种子，后续每个心跳包都要携带。
        source_ip: 服务器观察到的客户端地址。
    """

    challenge_seed: int
    source_ip: IPv4Address

    @classmethod
    def from_bytes(
        cls, data: "bytes | bytearray | memoryview | BinaryIO | PacketReader"
    ) -> "ChallengeResponse":
        """解析 Challenge 响应。

        结构: Code(1) + Reserved(7) + Seed(4, Native) + SourceIP(4, Big Endian)
        16 字节之后的数据不会被读取。

        Args:
            data: 收到的 UDP 负载，或一个二进制流。

        Returns:
            ChallengeResponse: 解析结果。

        Raises:
            PacketCodeError: 首字节不是 0x07。
            PacketTruncatedError: 任意字段读取时数据不足，``field`` 指明字段。
        """
        reader = data if isinstance(data, PacketReader) else PacketReader(data)

        # 1. 校验并消费 Code
        cls.validate_packet(reader)
        # 2. 丢弃保留字段
        reader.skip(ChallengeConst.RESP_RESERVED_LEN, "reserved")
        # 3. Seed (本机字节序)
        (seed,) = struct.unpack(
            "=I", reader.read_bytes(ChallengeConst.RESP_SEED_LEN, "challenge_seed")
        )
        # 4. 源地址 (网络字节序)
        (ip_val,) = struct.unpack(
            "!I", reader.read_bytes(ChallengeConst.RESP_SOURCE_IP_LEN, "source_ip")
        )

        resp = cls(challenge_seed=seed, source_ip=IPv4Address(ip_val))
        logger.debug(
            "challenge_response: seed=%#010x source_ip=%s", seed, resp.source_ip
        )
        return resp


# =========================================================================
# Heartbeat (0x07)
# =========================================================================


class HeartbeatFlag(Enum):
    """PPPoE 心跳标志位: 会话内第一个心跳包为 FIRST，其后为 NOT_FIRST。"""

    FIRST = HeartbeatConst.FLAG_FIRST
    NOT_FIRST = HeartbeatConst.FLAG_NOT_FIRST


@dataclass(frozen=True)
class HeartbeatRequest(DrcomPacket):
    """PPPoE 心跳请求包 (96 字节)。

    结构:
        Header  (4):  Code + Sequence + PacketLength(2, Native)
        Content (20): TypeID + UIDLength + MAC(6) + SourceIP(4) + Flag(4) + Seed(4)
        Footer  (72): Checksum(8) + Padding(64)
    """

    sequence: int
    source_ip: IPv4Address
    flag: HeartbeatFlag
    challenge_seed: int
    type_id: int = HeartbeatConst.DEFAULT_TYPE_ID
    uid_length: int = HeartbeatConst.DEFAULT_UID_LENGTH
    mac_address: bytes = HeartbeatConst.DEFAULT_MAC

    HEADER_LEN = HeartbeatConst.HEADER_LEN
    CONTENT_LEN = HeartbeatConst.CONTENT_LEN
    FOOTER_LEN = HeartbeatConst.FOOTER_LEN
    PACKET_LEN = HeartbeatConst.PACKET_LEN

    def __post_init__(self) -> None:
        _check_u8("sequence", self.sequence)
        _check_u8("type_id", self.type_id)
        _check_u8("uid_length", self.uid_length)
        if not 0 <= self.challenge_seed <= 0xFFFFFFFF:
            raise ValueError(f"challenge_seed 超出 32 位范围: {self.challenge_seed}")
        if len(self.mac_address) != 6:
            raise ValueError(f"MAC 地址必须为 6 字节: {self.mac_address!r}")
        object.__setattr__(self, "mac_address", bytes(self.mac_address))
        # 允许传入 "10.0.0.1" 之类的字符串
        if not isinstance(self.source_ip, IPv4Address):
            object.__setattr__(self, "source_ip", IPv4Address(self.source_ip))

    @classmethod
    def from_config(
        cls,
        config: "HeartbeatConfig",
        sequence: int,
        flag: HeartbeatFlag,
        challenge_seed: int,
    ) -> "HeartbeatRequest":
        """用主机配置中的 MAC/IP/TypeID 构建心跳请求。"""
        return cls(
            sequence=sequence,
            source_ip=config.host_ip,
            flag=flag,
            challenge_seed=challenge_seed,
            type_id=config.type_id,
            uid_length=config.uid_length,
            mac_address=config.mac_address,
        )

    @property
    def checksum_mode(self) -> ChecksumMode:
        return ChecksumMode.from_seed(self.challenge_seed)

    def _build_header(self) -> bytes:
        return struct.pack("=BBH", self.code(), self.sequence, self.PACKET_LEN)

    def _build_content(self) -> bytes:
        return (
            bytes([self.type_id, self.uid_length])
            + self.mac_address
            + self.source_ip.packed
            + struct.pack("=II", self.flag.value, self.challenge_seed)
        )

    def _build_footer(self, header: bytes, content: bytes) -> bytes:
        mode = self.checksum_mode
        checksum = mode.hash(struct.pack("=I", self.challenge_seed))

        if mode is ChecksumMode.NONE:
            # 对 Header + Content + 伪摘要 整体再做一次 CRC
            crc = utils.drcom_crc32(header + content + checksum)
            rehash = (crc * HeartbeatConst.CRC_MULTIPLIER) & 0xFFFFFFFF
            checksum = struct.pack("=II", rehash, 0)

        return checksum + b"\x00" * HeartbeatConst.PADDING_LEN

    def to_bytes(self) -> bytes:
        """构建 96 字节心跳请求包。"""
        header = self._build_header()
        content = self._build_content()
        footer = self._build_footer(header, content)

        out = header + content + footer
        logger.debug(
            "heartbeat_build: seq=%d flag=%s mode=%s checksum=%s len=%d",
            self.sequence,
            self.flag.name,
            self.checksum_mode.name,
            footer[: HeartbeatConst.CHECKSUM_LEN].hex(),
            len(out),
        )
        return out


# =========================================================================
# 函数式接口 (Functional API)
# =========================================================================


def build_challenge_request(sequence: int = ChallengeConst.DEFAULT_SEQUENCE) -> bytes:
    """构建 Challenge 请求包 (8 字节)。"""
    return ChallengeRequest(sequence).to_bytes()


def parse_challenge_response(
    data: bytes | bytearray | memoryview | BinaryIO,
) -> ChallengeResponse:
    """解析 Challenge 响应包，见 :meth:`ChallengeResponse.from_bytes`。"""
    return ChallengeResponse.from_bytes(data)


def build_heartbeat_packet(
    sequence: int,
    source_ip: IPv4Address | str,
    flag: HeartbeatFlag,
    challenge_seed: int,
    type_id: int = HeartbeatConst.DEFAULT_TYPE_ID,
    uid_length: int = HeartbeatConst.DEFAULT_UID_LENGTH,
    mac_address: bytes = HeartbeatConst.DEFAULT_MAC,
) -> bytes:
    """构建 PPPoE 心跳请求包 (96 字节)。

    Args:
        sequence: 心跳序列号 (0-255)，回绕由调用方负责。
        source_ip: 本机 IP 地址。
        flag: 会话首包为 FIRST，其余为 NOT_FIRST。
        challenge_seed: Challenge 响应中的种子。
        type_id: 类型标识，默认为 3。
        uid_length: UID 长度，默认为 0。
        mac_address: 6 字节 MAC 地址，默认全 0。

    Returns:
        bytes: 构建好的心跳包。
    """
    return HeartbeatRequest(
        sequence=sequence,
        source_ip=source_ip,  # type: ignore[arg-type]
        flag=flag,
        challenge_seed=challenge_seed,
        type_id=type_id,
        uid_length=uid_length,
        mac_address=mac_address,
    ).to_bytes()
