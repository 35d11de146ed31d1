import logging

from lp_kernel.logging import ENV_LOG_LEVEL, get_logger, level_for


def test_default_levels(monkeypatch):
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)
    assert level_for("lp_kernel.compile") == logging.WARNING
    assert level_for("lp_stats.cli.summary_cli") == logging.INFO
    assert level_for("lp_stats.cli") == logging.INFO


def test_env_overrides_by_name_or_number(monkeypatch):
    monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
    assert level_for("lp_kernel.compile") == logging.DEBUG
    monkeypatch.setenv(ENV_LOG_LEVEL, "40")
    assert level_for("lp_stats.cli.merge_cli") == 40


def test_unknown_level_name_falls_back_to_default(monkeypatch):
    monkeypatch.setenv(ENV_LOG_LEVEL, "chatty")
    assert level_for("lp_kernel.store") == logging.WARNING
    assert level_for("lp_stats.cli.rules_cli") == logging.INFO


def test_module_loggers_share_the_package_handler(monkeypatch):
    monkeypatch.delenv(ENV_LOG_LEVEL, raising=False)
    a = get_logger("lp_kernel.some_module")
    b = get_logger("lp_kernel.other_module")
    root = logging.getLogger("lp_kernel")
    assert len(root.handlers) == 1
    assert not a.handlers and not b.handlers
    assert a.level == logging.WARNING
    assert root.propagate is False
