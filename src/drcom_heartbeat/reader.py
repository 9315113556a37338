# File: src/drcom_heartbeat/reader.py
"""
Dr.COM 心跳库 - 字节流读取器

为解包器提供“恰好读取 N 字节，否则失败”的读取原语。
既可以包装内存中的 bytes，也可以包装任意二进制流 (socket.makefile、BytesIO 等)。
"""

import io
import logging
from typing import BinaryIO

from .exceptions import PacketTruncatedError

logger = logging.getLogger(__name__)


class PacketReader:
    """按字段顺序消费数据包的读取器。

    读取器不持有流的所有权，调用方负责关闭传入的流。
    """

    def __init__(self, source: bytes | bytearray | memoryview | BinaryIO) -> None:
        if isinstance(source, (bytes, bytearray, memoryview)):
            self._stream: BinaryIO = io.BytesIO(bytes(source))
        else:
            self._stream = source
        self.consumed = 0

    def read_bytes(self, n: int, field: str = "data") -> bytes:
        """读取恰好 n 个字节。

        Args:
            n: 需要读取的字节数。
            field: 当前读取的字段名，用于错误提示。

        Returns:
            bytes: 长度为 n 的字节串。

        Raises:
            PacketTruncatedError: 流提前结束。
        """
        buf = bytearray()
        # 非阻塞流可能分多次返回
        while len(buf) < n:
            chunk = self._stream.read(n - len(buf))
            if not chunk:
                break
            buf.extend(chunk)

        self.consumed += len(buf)
        if len(buf) != n:
            logger.debug("read_bytes: field=%s short read %d/%d", field, len(buf), n)
            raise PacketTruncatedError(field, n, len(buf))
        return bytes(buf)

    def skip(self, n: int, field: str = "reserved") -> None:
        """丢弃 n 个字节 (同样要求数据足够)。"""
        self.read_bytes(n, field)
