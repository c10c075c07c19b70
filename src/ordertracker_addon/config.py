"""Order Tracker add-on 配置

配置分为以下几类：
- 选项文件配置：options.json 路径、导出白名单
- 启动配置：目标程序、监听地址与端口
- 错误策略：选项文件损坏时的处理方式
- 日志配置：日志级别
"""

import os

# === 选项文件配置 ===
OPTIONS_PATH = os.environ.get("ORDER_TRACKER_OPTIONS_PATH", "/data/options.json")

# 允许导出为环境变量的 key（顺序即导出/日志顺序）
WHITELIST_KEYS = (
    "SURREAL_URL",
    "SHOPIFY_URL",
    "SHOPIFY_ACCESS_TOKEN",
    "ETSY_KEYSTRING",
    "ETSY_SECRET",
    "ETSY_SHOP_ID",
)

# 本地运行时的 .env 兜底文件（空字符串 => 禁用）
ENV_FILE = os.environ.get("ORDER_TRACKER_ENV_FILE", "")

# === 启动配置 ===
TARGET_BINARY = os.environ.get("ORDER_TRACKER_BINARY", "/app/order_tracker")
BIND_ADDR = "0.0.0.0"
PORT = 8099
SERVICE_NAME = "Order Tracker"

# === 错误策略 ===
# fail: 选项文件不可读/格式错误时退出（exit 1）
# ignore: 记录 warning，不导出任何 key，继续启动
INVALID_OPTIONS_POLICIES = ("fail", "ignore")
INVALID_OPTIONS_POLICY = os.environ.get("ORDER_TRACKER_ON_INVALID_OPTIONS", "fail")

# === 退出码（沿用 shell 约定）===
EXIT_INVALID_OPTIONS = 1
EXIT_NOT_EXECUTABLE = 126
EXIT_NOT_FOUND = 127

# === 日志配置 ===
LOG_LEVEL = os.environ.get("ORDER_TRACKER_LOG_LEVEL", "INFO")  # 日志级别
LOG_TIME_FORMAT = "%H:%M:%S"  # bashio 风格时间戳
