"""Bootstrap - 从 add-on 选项构造启动计划

职责：
- 读取 options.json（可选 .env 兜底）
- 按白名单投影为环境变量，逐个记录已设置的 key
- 记录启动日志
- 返回 LaunchPlan 供调用方启动

不负责：
- 启动目标进程（由 launcher 负责）
- 把错误映射为退出码（由 __main__ 负责）
"""

import os
from collections.abc import Mapping
from pathlib import Path

from ..config import (
    BIND_ADDR,
    ENV_FILE,
    INVALID_OPTIONS_POLICIES,
    INVALID_OPTIONS_POLICY,
    OPTIONS_PATH,
    PORT,
    SERVICE_NAME,
    TARGET_BINARY,
    WHITELIST_KEYS,
)
from ..launcher import LaunchPlan
from ..options import OptionsError, load_env_file, load_options
from ..telemetry import get_logger

logger = get_logger(__name__)


def collect_exports(
    options_path: str | Path,
    env_file: str | Path | None = None,
    policy: str = "fail",
) -> dict[str, str]:
    """读取选项文件，返回需要导出的 key/value

    Args:
        options_path: options.json 路径
        env_file: 可选 .env 文件，优先级低于 options.json
        policy: 选项文件无效时的策略（"fail" / "ignore"）

    Returns:
        白名单顺序的 {key: value}，只含非空值

    Raises:
        OptionsError: 选项文件无效且 policy 为 "fail"
    """
    if policy not in INVALID_OPTIONS_POLICIES:
        raise ValueError(f"Unknown invalid-options policy: {policy!r}")

    fallback = load_env_file(env_file) if env_file else {}

    found: dict[str, str] = {}
    try:
        options = load_options(options_path)
    except OptionsError as e:
        if policy == "fail":
            raise
        logger.warning(f"{e}; ignoring options file")
    else:
        if options is None:
            logger.warning(f"No options.json found at {options_path}")
        else:
            found = options.exports()

    exports: dict[str, str] = {}
    for key in WHITELIST_KEYS:
        if key in found:
            exports[key] = found[key]
            logger.info(f"Set {key}")
        elif key in fallback:
            exports[key] = fallback[key]
            logger.info(f"Set {key} (from {env_file})")
    return exports


def bootstrap(
    options_path: str | Path | None = None,
    env_file: str | Path | None = None,
    base_env: Mapping[str, str] | None = None,
    policy: str | None = None,
    executable: str | None = None,
) -> LaunchPlan:
    """构造启动计划

    未传入的参数取 config 中的默认值。进程自身的环境不会被修改，
    导出的 key 只出现在 LaunchPlan.env 中。

    Args:
        options_path: options.json 路径
        env_file: 可选 .env 兜底文件（空 => 禁用）
        base_env: 子进程继承的基础环境，默认 os.environ
        policy: 选项文件无效时的策略
        executable: 目标程序路径

    Returns:
        LaunchPlan

    Raises:
        OptionsError: 选项文件无效且 policy 为 "fail"
    """
    exports = collect_exports(
        options_path if options_path is not None else OPTIONS_PATH,
        env_file=ENV_FILE if env_file is None else env_file,
        policy=policy or INVALID_OPTIONS_POLICY,
    )

    logger.info(f"Starting {SERVICE_NAME} on port {PORT}...")

    inherited = dict(os.environ if base_env is None else base_env)
    return LaunchPlan(
        executable=executable or TARGET_BINARY,
        args=("--addr", BIND_ADDR, "--port", str(PORT)),
        exports=exports,
        env={**inherited, **exports},
    )
