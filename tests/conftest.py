from __future__ import annotations

from pathlib import Path

import pytest

import terminix.config as tmx_config


@pytest.hookimpl(trylast=True)
def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    del config
    for item in items:
        path = Path(str(getattr(item, "path", item.fspath)))
        if "integration" in path.parts:
            item.add_marker(pytest.mark.integration)
            item.add_marker(pytest.mark.slow)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    config_path = tmp_path / "xdg" / "terminix" / "config.toml"
    monkeypatch.setattr(tmx_config, "DEFAULT_CONFIG_PATH", config_path)
    monkeypatch.delenv(tmx_config.LOG_LEVEL_ENV, raising=False)
    return config_path
