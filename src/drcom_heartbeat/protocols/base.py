"""
Dr.COM 数据包基类 (Base Packet)

定义所有 P 版数据包共享的接口：固定的一字节操作码，以及解包时
对首字节的校验与消费。
"""

import logging

from ..exceptions import PacketCodeError
from ..reader import PacketReader
from .constants import Code

logger = logging.getLogger(__name__)


class DrcomPacket:
    """数据包公共基类。

    子类通过覆盖 ``CODE`` 声明自己的操作码。
    """

    CODE: int = Code.MISC

    @classmethod
    def code(cls) -> int:
        """返回该类数据包的操作码。"""
        return cls.CODE

    @classmethod
    def validate_packet(cls, reader: PacketReader) -> None:
        """读取并校验一字节操作码。

        Args:
            reader: 数据包读取器，成功时恰好消费 1 字节。

        Raises:
            PacketTruncatedError: 流为空。
            PacketCodeError: 操作码与 ``CODE`` 不一致。
        """
        actual = reader.read_bytes(1, "code")[0]
        if actual != cls.CODE:
            logger.debug(
                "%s: code mismatch expect=%#04x got=%#04x",
                cls.__name__,
                cls.CODE,
                actual,
            )
            raise PacketCodeError(cls.CODE, actual)
