"""Общие фикстуры: каждый тест работает в собственной временной директории."""

import logging

import pytest

from patterns_hub.core.configuration import ConfigurationManager
from patterns_hub.core.process_logger import ProcessLogger
from patterns_hub.infra.logging_config import DIAGNOSTIC_LOGGER_NAME
from patterns_hub.infra.settings import HOME_ENV_VAR, SettingsLoader


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Перенаправить файлы конфигурации и журналов во временную директорию."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv(HOME_ENV_VAR, str(tmp_path))
    SettingsLoader.reset()
    ProcessLogger.reset_instance()
    ConfigurationManager().clear()
    logging.getLogger(DIAGNOSTIC_LOGGER_NAME).handlers.clear()

    yield tmp_path

    SettingsLoader.reset()
    ProcessLogger.reset_instance()
    ConfigurationManager().clear()
    logging.getLogger(DIAGNOSTIC_LOGGER_NAME).handlers.clear()


@pytest.fixture
def quiet_logger(tmp_path):
    """ProcessLogger без вывода в консоль, пишущий в tmp_path/app.log."""
    return ProcessLogger(log_path=tmp_path / "app.log", log_to_console=False)


@pytest.fixture
def diagnostics(caplog):
    """
    Перехват диагностического канала.

    Диагностический logger не передаёт записи в root logger, поэтому
    handler caplog подключается к нему напрямую.
    """
    logger = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)
    logger.addHandler(caplog.handler)
    with caplog.at_level(logging.WARNING, logger=DIAGNOSTIC_LOGGER_NAME):
        yield caplog
    logger.removeHandler(caplog.handler)
