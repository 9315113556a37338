# src/drcom_heartbeat/protocols/constants.py
"""
Dr.COM 协议层 - 常量定义

本模块定义了 P 版 (PPPoE) 心跳协议相关的魔法数字、长度和固定值。
采用命名空间 (Class Namespace) 组织，不使用扁平全局变量。

除特别说明外，所有多字节整数均按本机字节序 (Native Endian) 编码。
"""

# =========================================================================
# 1. 协议操作码 (Protocol Codes)
# =========================================================================


class Code:
    """协议交互的核心操作码"""

    # Challenge 请求/响应、心跳请求共用 0x07
    MISC = 0x07


# =========================================================================
# 2. Challenge 阶段常量
# =========================================================================


class ChallengeConst:
    # 请求包: Code(1) + Sequence(1) + Magic(4) + Padding(2)
    REQ_LENGTH = 8
    REQ_MAGIC = 65544
    DEFAULT_SEQUENCE = 1

    # 响应包: Code(1) + Reserved(7) + Seed(4) + SourceIP(4, Big Endian)
    RESP_RESERVED_LEN = 7
    RESP_SEED_LEN = 4
    RESP_SOURCE_IP_LEN = 4


# =========================================================================
# 3. Heartbeat 阶段常量
# =========================================================================


class HeartbeatConst:
    # 结构长度
    HEADER_LEN = 4  # code + sequence + packet_length(2)
    CONTENT_LEN = 20  # type_id + uid_length + mac(6) + ip(4) + flag(4) + seed(4)
    CHECKSUM_LEN = 8
    PADDING_LEN = 16 * 4
    FOOTER_LEN = CHECKSUM_LEN + PADDING_LEN
    PACKET_LEN = HEADER_LEN + CONTENT_LEN + FOOTER_LEN

    # 默认字段
    DEFAULT_TYPE_ID = 3
    DEFAULT_UID_LENGTH = 0
    DEFAULT_MAC = b"\x00" * 6

    # PPPoE 标志位
    FLAG_FIRST = 0x2A006200
    FLAG_NOT_FIRST = 0x2A006300

    # NONE 模式下整包 CRC 的乘数
    CRC_MULTIPLIER = 19680126


# =========================================================================
# 4. Checksum 常量
# =========================================================================


class ChecksumConst:
    # NONE 模式的伪摘要: Native(20000711) + Native(126)
    NONE_CRC_INIT = 20000711
    NONE_CRC_SUFFIX = 126

    # 每种模式保留的摘要字节数
    RETAIN_LEN = 8
