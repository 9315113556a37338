# File: src/drcom_heartbeat/protocols/pppoe/checksum.py
"""
Dr.COM P 版心跳 - 校验摘要 (CRC Hash)

心跳包尾部的 8 字节校验由 challenge_seed 决定使用哪种摘要算法，
再从摘要中按固定偏移表挑出 8 个字节。

| 模式 | 摘要           | 保留偏移                  |
|------|----------------|---------------------------|
| NONE | 伪摘要 (常量)  | 0, 1, 2, 3, 4, 5, 6, 7    |
| MD5  | MD5 (16B)      | 2, 3, 8, 9, 5, 6, 13, 14  |
| MD4  | MD4 (16B)      | 1, 2, 8, 9, 4, 5, 11, 12  |
| SHA1 | SHA-1 (20B)    | 2, 3, 9, 10, 5, 6, 15, 16 |

注意: 心跳包使用 ``seed % 3`` 选择模式，因此 SHA1 在实际交互中不可达，
仅为完整性保留。
"""

import logging
import struct
from collections.abc import Callable
from enum import IntEnum

from ... import utils
from ...exceptions import ChecksumError, ChecksumModeError
from ..constants import ChecksumConst

logger = logging.getLogger(__name__)


class ChecksumMode(IntEnum):
    """心跳校验模式。数值即协议中的模式编号。"""

    NONE = 0
    MD5 = 1
    MD4 = 2
    SHA1 = 3

    @classmethod
    def from_mode(cls, mode: int) -> "ChecksumMode":
        """由模式编号取得校验模式。

        Raises:
            ChecksumModeError: 编号不在 0-3 范围内。
        """
        try:
            return cls(mode)
        except ValueError:
            raise ChecksumModeError(mode) from None

    @classmethod
    def from_seed(cls, challenge_seed: int) -> "ChecksumMode":
        """心跳包使用的模式推导: ``seed % 3``。"""
        return cls.from_mode(challenge_seed % 3)

    @property
    def retain_positions(self) -> tuple[int, ...]:
        return RETAIN_POSITIONS[self]

    def digest(self, data: bytes) -> bytes:
        """计算该模式对应的原始摘要。"""
        return _DIGESTS[self](data)

    def hash(self, data: bytes) -> bytes:
        """计算 8 字节校验值，见 :func:`crc_hash`。"""
        return crc_hash(self, data)


def _none_digest(data: bytes) -> bytes:
    # 与输入无关
    return struct.pack(
        "=II", ChecksumConst.NONE_CRC_INIT, ChecksumConst.NONE_CRC_SUFFIX
    )


_DIGESTS: dict[ChecksumMode, Callable[[bytes], bytes]] = {
    ChecksumMode.NONE: _none_digest,
    ChecksumMode.MD5: utils.md5_bytes,
    ChecksumMode.MD4: utils.md4_bytes,
    ChecksumMode.SHA1: utils.sha1_bytes,
}

RETAIN_POSITIONS: dict[ChecksumMode, tuple[int, ...]] = {
    ChecksumMode.NONE: (0, 1, 2, 3, 4, 5, 6, 7),
    ChecksumMode.MD5: (2, 3, 8, 9, 5, 6, 13, 14),
    ChecksumMode.MD4: (1, 2, 8, 9, 4, 5, 11, 12),
    ChecksumMode.SHA1: (2, 3, 9, 10, 5, 6, 15, 16),
}


def crc_hash(mode: ChecksumMode, data: bytes) -> bytes:
    """计算心跳包尾部的 8 字节校验值。

    算法逻辑:
    1. 用 mode 对应的算法计算 data 的摘要。
    2. 按保留偏移表依次取出摘要中的字节，越界的偏移直接跳过。
    3. 取出的字节数必须恰好为 8。

    Args:
        mode: 校验模式。
        data: 参与摘要的原始数据 (心跳包中为 4 字节 challenge_seed)。

    Returns:
        bytes: 8 字节校验值。

    Raises:
        ChecksumError: 保留偏移表与摘要长度不匹配 (内置表不会触发)。
    """
    digest = mode.digest(data)
    retained = bytes(digest[i] for i in RETAIN_POSITIONS[mode] if i < len(digest))

    if len(retained) != ChecksumConst.RETAIN_LEN:
        raise ChecksumError(
            f"{mode.name} 摘要仅取得 {len(retained)} 字节，需要 {ChecksumConst.RETAIN_LEN}"
        )

    logger.debug("crc_hash: mode=%s hash=%s", mode.name, retained.hex())
    return retained
