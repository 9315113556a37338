# File: src/drcom_heartbeat/utils.py
"""
Dr.COM 心跳库 - 通用算法工具箱

本模块汇集了 P 版心跳协议用到的摘要与校验算法。
"""

import hashlib
import struct

from Crypto.Hash import MD4

from .exceptions import ChecksumInputError


def drcom_crc32(data: bytes, init: int | None = None) -> int:
    """Dr.COM 自定义的 CRC32 算法。

    常见于 P 版 (PPPoE) 心跳包的校验。
    不同于标准的 CRC32，它只是简单的 4 字节异或累加。

    算法逻辑:
    1. 初始值 ret = init (缺省为 0)
    2. 将数据按 4 字节分组（本机字节序），逐组异或。

    Args:
        data: 输入数据，长度必须为 4 的整数倍。
        init: 初始值，默认为 0。

    Returns:
        int: 32 位计算结果。

    Raises:
        ChecksumInputError: 输入长度不是 4 的整数倍。
    """
    if len(data) % 4 != 0:
        raise ChecksumInputError(len(data))

    ret = init if init is not None else 0
    for (val,) in struct.iter_unpack("=I", data):
        ret ^= val

    return ret & 0xFFFFFFFF


def md5_bytes(data: bytes) -> bytes:
    """计算 MD5 哈希的快捷函数 (16 字节)。"""
    return hashlib.md5(data).digest()


def md4_bytes(data: bytes) -> bytes:
    """计算 MD4 哈希 (16 字节)。

    新版 OpenSSL 默认不再提供 MD4，hashlib 无法保证可用，这里使用 pycryptodome。
    """
    return MD4.new(data).digest()


def sha1_bytes(data: bytes) -> bytes:
    """计算 SHA-1 哈希 (20 字节)。"""
    return hashlib.sha1(data).digest()
