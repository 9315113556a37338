# File: src/drcom_heartbeat/exceptions.py
"""
Dr.COM 心跳库 - 异常体系 (Exceptions)

定义库内统一使用的异常类，以便上层应用（如守护进程/会话调度器）能进行精细的错误处理。
本库所有异常都是本地、确定性的，是否重试由调用方决定。
"""


class DrcomError(Exception):
    """Dr.COM 心跳库所有内部异常的基类。

    上层应用可以通过捕获此异常来处理所有由 drcom-heartbeat 抛出的已知错误。
    """

    pass


class ConfigError(DrcomError):
    """配置加载或校验失败。

    触发场景:
    1. 缺少必要字段 (如 host_ip)。
    2. 字段格式错误 (如 IP 地址非法、MAC 地址无法解析)。
    3. 找不到配置文件或环境变量。
    """

    pass


class ProtocolError(DrcomError):
    """协议交互错误 (封包/解包级别)。

    触发场景:
    1. 收到的数据包 Code 不匹配。
    2. 数据包长度不足或结构损坏。
    3. 校验和计算的输入非法。
    """

    pass


class PacketReadError(ProtocolError):
    """读取数据包字段失败。

    Attributes:
        field: 出错时正在读取的字段名 (如 "challenge_seed")。
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field


class PacketTruncatedError(PacketReadError):
    """数据在读完某个字段前就结束了 (Short Read)。"""

    def __init__(self, field: str, expected: int, received: int) -> None:
        super().__init__(
            field,
            f"读取字段 '{field}' 失败: 需要 {expected} 字节，实际只有 {received} 字节",
        )
        self.expected = expected
        self.received = received


class PacketCodeError(PacketReadError):
    """数据包头部 Code 与期望不符。"""

    def __init__(self, expected_code: int, actual_code: int) -> None:
        super().__init__(
            "code",
            f"数据包 Code 不匹配: 期望 {expected_code:#04x}，收到 {actual_code:#04x}",
        )
        self.expected_code = expected_code
        self.actual_code = actual_code


class ChecksumError(ProtocolError):
    """校验和计算失败。"""

    pass


class ChecksumModeError(ChecksumError):
    """不存在的校验模式 (合法取值为 0-3)。"""

    def __init__(self, mode: int) -> None:
        super().__init__(f"不存在的校验模式: {mode}")
        self.mode = mode


class ChecksumInputError(ChecksumError):
    """校验输入长度非法 (必须为 4 的整数倍)。"""

    def __init__(self, length: int) -> None:
        super().__init__(f"校验输入长度必须为 4 的整数倍，实际为 {length}")
        self.length = length
