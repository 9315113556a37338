# example.py
"""
这是一个 drcom-heartbeat API 的最小示例。

它演示了如何将 drcom-heartbeat 作为一个库导入到你自己的项目中：
加载主机配置 -> 构建 Challenge 请求 -> 解析响应 -> 连续构建心跳包。
本示例不进行任何网络收发，Challenge 响应使用本地构造的数据。

运行此示例：
1. 在根目录创建 config.toml，或设置 DRCOM_HOST_IP / DRCOM_MAC 等环境变量。
2. 安装本项目： pip install -e .
3. 从项目根目录运行： python example.py
"""

import logging
import struct
import sys
from pathlib import Path

from drcom_heartbeat import (
    ChallengeRequest,
    ChallengeResponse,
    ConfigError,
    DrcomError,
    HeartbeatFlag,
    HeartbeatRequest,
    __version__,
    create_config_from_dict,
    load_config_from_env,
    load_config_from_toml,
)

# 日志配置
logging.basicConfig(
    level=logging.DEBUG,
    format="%(asctime)s - %(name)s - [%(levelname)s] - %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger("DrcomExample")

PROJECT_ROOT = Path(__file__).resolve().parent


def load_config():
    """按 config.toml -> 环境变量 -> 内置 Mock 的顺序加载配置。"""
    config_path = PROJECT_ROOT / "config.toml"
    if config_path.exists():
        logger.info(f"发现配置文件: {config_path}")
        return load_config_from_toml(config_path)

    try:
        return load_config_from_env()
    except ConfigError:
        logger.warning("未找到 config.toml 或 DRCOM_ 环境变量，使用 Mock 数据")
        return create_config_from_dict(
            {"host_ip": "10.30.22.17", "mac": "00:11:22:33:44:55"}
        )


def main() -> None:
    logger.info(f"Drcom-Heartbeat v{__version__} 示例")

    try:
        config = load_config()

        # 1. Challenge 请求
        challenge = ChallengeRequest(sequence=1).to_bytes()
        logger.info(f"Challenge 请求: {challenge.hex()}")

        # 2. 模拟服务器响应: Code + Reserved(7) + Seed + SourceIP
        fake_resp = (
            bytes([ChallengeRequest.code()])
            + b"\x00" * 7
            + struct.pack("=I", 0x1A2B3C4D)
            + config.host_ip.packed
        )
        resp = ChallengeResponse.from_bytes(fake_resp)
        logger.info(f"Seed={resp.challenge_seed:#010x} SourceIP={resp.source_ip}")

        # 3. 连续构建心跳包 (序列号递增，首包标志位不同)
        for seq in range(3):
            flag = HeartbeatFlag.FIRST if seq == 0 else HeartbeatFlag.NOT_FIRST
            req = HeartbeatRequest.from_config(config, seq, flag, resp.challenge_seed)
            logger.info(f"心跳 #{seq} ({req.checksum_mode.name}): {req.to_bytes().hex()}")

    except DrcomError as e:
        logger.error(f"运行失败: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
