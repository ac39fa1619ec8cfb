from __future__ import annotations

import logging

import pytest

from lmmvol.config import ConfigDict, get_config, get_default_config, init_environment


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    package = logging.getLogger("lmmvol")
    root_level, package_level = root.level, package.level
    yield
    root.setLevel(root_level)
    package.setLevel(package_level)


def test_default_config_logs_at_info() -> None:
    cfg = get_default_config()
    assert cfg.logging.level == "INFO"
    assert cfg.logging.package_level == "INFO"
    assert "%(name)s" in cfg.logging.format


def test_overrides_merge_into_sections() -> None:
    cfg = get_config({"logging": {"level": "DEBUG"}})
    assert cfg.logging.level == "DEBUG"
    assert cfg.logging.format == get_default_config().logging.format


def test_init_environment_configures_package_logger(restore_logging) -> None:
    cfg = init_environment(
        {"logging": {"level": "WARNING", "force": True, "package_level": "DEBUG"}}
    )

    assert cfg.logging.level == "WARNING"
    assert logging.getLogger().getEffectiveLevel() == logging.WARNING
    assert logging.getLogger("lmmvol").level == logging.DEBUG
    assert logging.getLogger("lmmvol.models.volatility.exponential").isEnabledFor(logging.DEBUG)


def test_init_environment_accepts_config_dict(restore_logging) -> None:
    config = ConfigDict({"logging": {"package_level": logging.ERROR, "force": False}})
    cfg = init_environment(config)
    assert cfg.logging.level == "INFO"
    assert logging.getLogger("lmmvol").level == logging.ERROR


def test_unknown_logging_level_rejected(restore_logging) -> None:
    with pytest.raises(ValueError, match="Unknown logging level"):
        init_environment({"logging": {"package_level": "chatty", "force": False}})
