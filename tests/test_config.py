import logging

from upcraft.config import Settings
from upcraft.logging_config import get_logger


def test_defaults(monkeypatch):
    for name in ("UPCRAFT_API_BASE_URL", "UPCRAFT_USER_ID", "UPCRAFT_CACHE_TTL"):
        monkeypatch.delenv(name, raising=False)
    s = Settings(_env_file=None)
    assert s.UPCRAFT_API_BASE_URL == "http://localhost:5000"
    assert s.UPCRAFT_USER_ID == 1
    assert s.UPCRAFT_CACHE_TTL == 60
    assert s.UPCRAFT_ASSESSMENT_WORKERS == 8


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("UPCRAFT_API_BASE_URL", "http://api.internal:8080")
    monkeypatch.setenv("UPCRAFT_USER_ID", "42")
    s = Settings(_env_file=None)
    assert s.UPCRAFT_API_BASE_URL == "http://api.internal:8080"
    assert s.UPCRAFT_USER_ID == 42


def test_loggers_live_under_upcraft():
    assert get_logger("upcraft.api_client").name == "upcraft.api_client"
    assert get_logger("views").name == "upcraft.views"
    assert isinstance(get_logger("x"), logging.Logger)


def test_setup_logging_writes_name_level_message(monkeypatch):
    from upcraft import logging_config

    monkeypatch.setattr(logging_config, "_configured", False)
    logger = logging.getLogger("upcraft")
    before = list(logger.handlers)
    level, propagate = logger.level, logger.propagate

    logging_config.setup_logging("debug")
    added = [h for h in logger.handlers if h not in before]
    try:
        assert len(added) == 1
        assert logger.level == logging.DEBUG
        record = logging.LogRecord("upcraft.api_client", logging.WARNING, __file__, 1,
                                   "GET %s failed", ("/api/skills",), None)
        assert added[0].format(record) == "[upcraft.api_client] WARNING GET /api/skills failed"
    finally:
        for h in added:
            logger.removeHandler(h)
        logger.setLevel(level)
        logger.propagate = propagate
