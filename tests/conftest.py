"""
pytest 配置与共享 fixture。

样例响应见 tests.config；所有测试均为纯解码，不访问网络。
"""

from __future__ import annotations

import time
from pathlib import Path

import pytest

from p115api import FileList

from tests.config import OPENAPI_FILE_LIST, TRADITIONAL_FILE_LIST, as_bytes


@pytest.fixture(params=["openapi", "traditional"])
def file_list(request: pytest.FixtureRequest) -> FileList:
    """两种方言的文件列表各跑一遍。"""
    payload = OPENAPI_FILE_LIST if request.param == "openapi" else TRADITIONAL_FILE_LIST
    return FileList.model_validate_json(as_bytes(payload))


@pytest.fixture
def now_ts() -> int:
    """当前 Unix 秒。"""
    return int(time.time())


@pytest.fixture(autouse=True)
def _patch_config_path(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """将 CLI 配置路径指向临时目录，避免污染用户 ~/.config/p115api。"""
    config_dir = tmp_path / "p115api"
    config_dir.mkdir(parents=True, exist_ok=True)

    def _config_dir():
        return config_dir

    monkeypatch.setattr("p115api.cli_config._config_dir", _config_dir)
