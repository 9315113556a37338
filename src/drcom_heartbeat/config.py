"""
Dr.COM 心跳库 - 配置模块

负责主机侧心跳参数的加载、解析与强类型转换。
支持从 TOML 文件、环境变量 (可选 .env 文件) 或字典中加载配置。
"""

import logging
import os
import tomllib
from dataclasses import dataclass
from ipaddress import IPv4Address
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .exceptions import ConfigError
from .protocols.constants import HeartbeatConst

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeartbeatConfig:
    """心跳包构建所需的强类型配置对象。

    所有字段均为只读 (frozen=True)，确保配置在运行时不可变。

    Attributes:
        host_ip: 本机 IP 地址，写入心跳包的 SourceIP 字段。
        mac_address: 本机 MAC 地址 (6 bytes)。
        type_id: 心跳包类型标识。
        uid_length: UID 长度字段。
        server_address: 认证服务器 IP 地址 (供传输层使用)。
        server_port: 认证服务器端口 (通常为 61440)。
    """

    host_ip: IPv4Address
    mac_address: bytes = HeartbeatConst.DEFAULT_MAC
    type_id: int = HeartbeatConst.DEFAULT_TYPE_ID
    uid_length: int = HeartbeatConst.DEFAULT_UID_LENGTH
    server_address: str = ""
    server_port: int = 61440

    def __repr__(self) -> str:
        return (
            f"<{self.__class__.__name__} "
            f"host_ip={self.host_ip}, "
            f"mac={self.mac_address.hex(':')}, "
            f"type_id={self.type_id}, "
            f"server={self.server_address}:{self.server_port}>"
        )


def create_config_from_dict(raw_data: dict[str, Any]) -> HeartbeatConfig:
    """通用工厂：将字典转换为强类型配置对象。

    负责字段的清洗、默认值注入和类型转换。

    Args:
        raw_data: 原始配置字典 (来自 TOML 或 Env)。

    Returns:
        HeartbeatConfig: 验证并转换后的配置对象。

    Raises:
        ConfigError: 当必要字段缺失或格式错误时抛出。
    """

    def _req(key: str) -> Any:
        """获取必要字段，缺失则报错"""
        if key not in raw_data:
            raise ConfigError(f"配置缺失: 缺少必要字段 '{key}'")
        return raw_data[key]

    def _to_ip(key: str) -> IPv4Address:
        val = str(_req(key))
        try:
            return IPv4Address(val)
        except ValueError:
            raise ConfigError(f"IP 格式无效 '{key}': {val}") from None

    def _to_mac(key: str) -> bytes:
        """将 MAC 地址字符串转换为 6 字节。"""
        if key not in raw_data:
            return HeartbeatConst.DEFAULT_MAC
        val = str(raw_data[key])
        clean = val.replace(":", "").replace("-", "").replace(".", "")
        try:
            if len(clean) != 12:
                raise ValueError
            return bytes.fromhex(clean)
        except ValueError:
            raise ConfigError(f"MAC 格式无效: {val}") from None

    def _to_u8(key: str, default: int) -> int:
        val = raw_data.get(key, default)
        text = str(val).strip().lower()
        try:
            num = int(text, 16) if text.startswith("0x") else int(text)
        except ValueError:
            raise ConfigError(f"整数格式无效 '{key}': {val}") from None
        if not 0 <= num <= 0xFF:
            raise ConfigError(f"'{key}' 必须在 0-255 之间: {num}")
        return num

    def _to_port(key: str, default: int) -> int:
        val = raw_data.get(key, default)
        try:
            port = int(val)
        except (TypeError, ValueError):
            raise ConfigError(f"端口格式无效 '{key}': {val}") from None
        if not 0 < port < 65536:
            raise ConfigError(f"端口超出范围 '{key}': {port}")
        return port

    config = HeartbeatConfig(
        host_ip=_to_ip("host_ip"),
        mac_address=_to_mac("mac"),
        type_id=_to_u8("type_id", HeartbeatConst.DEFAULT_TYPE_ID),
        uid_length=_to_u8("uid_length", HeartbeatConst.DEFAULT_UID_LENGTH),
        server_address=str(raw_data.get("server_ip", "")),
        server_port=_to_port("drcom_port", 61440),
    )
    logger.debug("配置加载完成: %r", config)
    return config


def load_config_from_toml(file_path: Path, profile: str = "default") -> HeartbeatConfig:
    """从 TOML 文件加载配置。

    支持多层级查找策略:
    1. [profile.xxx]: 优先查找指定的 profile 块。
    2. [drcom]: 兼容旧版配置块。
    3. Root: 兼容根目录直接配置。

    Args:
        file_path: TOML 文件路径。
        profile: 配置预设名。默认为 "default"。

    Returns:
        HeartbeatConfig: 配置对象。

    Raises:
        ConfigError: 文件读取失败或 Profile 不存在。
    """
    if not file_path.exists():
        raise ConfigError(f"配置文件未找到: {file_path}")

    try:
        with open(file_path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"读取 TOML 失败: {e}") from e

    if "profile" in data:
        if profile not in data["profile"]:
            raise ConfigError(f"未找到预设: [profile.{profile}]")
        raw_config = data["profile"][profile]
    elif "drcom" in data:
        if profile != "default":
            logger.warning("配置仅包含 [drcom] 节，忽略 profile='%s'。", profile)
        raw_config = data["drcom"]
    else:
        raw_config = data

    return create_config_from_dict(raw_config)


def load_config_from_env(env_file: Path | None = None) -> HeartbeatConfig:
    """从环境变量加载配置 (Docker/Cloud Friendly)。

    读取所有以 `DRCOM_` 开头的相关环境变量，例如 `DRCOM_HOST_IP` -> `host_ip`。
    若提供 env_file，先将其中的变量载入进程环境 (覆盖同名变量)。

    Args:
        env_file: 可选的 .env 文件路径。

    Returns:
        HeartbeatConfig: 配置对象。

    Raises:
        ConfigError: .env 文件不存在，或未检测到任何相关环境变量。
    """
    if env_file is not None:
        if not env_file.exists():
            raise ConfigError(f".env 文件未找到: {env_file}")
        load_dotenv(dotenv_path=env_file, override=True)

    env_map = {
        "host_ip": "HOST_IP",
        "mac": "MAC",
        "type_id": "TYPE_ID",
        "uid_length": "UID_LENGTH",
        "server_ip": "SERVER_IP",
        "drcom_port": "PORT",
    }

    raw_data = {}
    for cfg_key, env_suffix in env_map.items():
        val = os.environ.get(f"DRCOM_{env_suffix}")
        if val is not None:
            raw_data[cfg_key] = val

    if not raw_data:
        raise ConfigError("未检测到 DRCOM_ 前缀的环境变量")

    return create_config_from_dict(raw_data)
