"""Pytest 配置"""

import json
import logging

import pytest

SECRETS = {
    "SURREAL_URL": "ws://db:8000",
    "SHOPIFY_URL": "https://shop.example.com",
    "SHOPIFY_ACCESS_TOKEN": "shpat_secret",
    "ETSY_KEYSTRING": "etsy-key",
    "ETSY_SECRET": "etsy-secret",
    "ETSY_SHOP_ID": "12345",
}


@pytest.fixture(autouse=True)
def restore_package_logger():
    """setup_logging 会修改包 logger，测试后还原"""
    logger = logging.getLogger("ordertracker_addon")
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


@pytest.fixture
def write_options(tmp_path):
    """写入 options.json，dict 会被序列化，str 原样写入"""

    def _write(data, name="options.json"):
        path = tmp_path / name
        text = data if isinstance(data, str) else json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def all_secrets():
    return dict(SECRETS)
