"""Инструменты настройки и получения логгеров приложения Patterns Hub."""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from .settings import get_settings

DIAGNOSTIC_LOGGER_NAME = "patterns_hub.diagnostics"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Имена собственных handlers; чужие handlers (например, тестовые) не трогаем
CONSOLE_HANDLER_NAME = f"{DIAGNOSTIC_LOGGER_NAME}.console"
FILE_HANDLER_NAME = f"{DIAGNOSTIC_LOGGER_NAME}.file"

_setup_lock = threading.Lock()


def _own_handlers(logger: logging.Logger) -> list:
    return [
        handler
        for handler in logger.handlers
        if handler.get_name() in (CONSOLE_HANDLER_NAME, FILE_HANDLER_NAME)
    ]


def setup_diagnostic_logging(
    log_level: Optional[str] = None,
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
) -> logging.Logger:
    """
    Настройка диагностического канала приложения.

    В этот канал пишутся сбои, которые не должны прерывать вызывающий код
    (например, ошибки записи процессного журнала).

    Args:
        log_level: Уровень логирования (DEBUG, INFO, WARNING, ERROR, CRITICAL).
                   Если None, берется из конфигурации.
        log_file: Путь к файлу диагностики. Если None, берется из конфигурации;
                  если и там не задан, используется только stderr.
        log_format: Формат лог-сообщений. Если None, берется из конфигурации.

    Returns:
        Настроенный диагностический logger
    """
    config = get_settings().get_diagnostic_config()

    if log_level is None:
        log_level = config["level"] or "WARNING"

    if log_file is None:
        log_file = config["file"]

    if log_format is None:
        log_format = config["format"] or DEFAULT_FORMAT

    logger = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)
    logger.setLevel(getattr(logging, str(log_level).upper(), logging.WARNING))

    # Удаляем ранее установленные собственные handlers, чтобы избежать дублирования
    for handler in _own_handlers(logger):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format, datefmt="%Y-%m-%dT%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.set_name(CONSOLE_HANDLER_NAME)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # File handler с ротацией (максимум 1MB, хранить 3 резервные копии)
        file_handler = RotatingFileHandler(
            log_path,
            maxBytes=1024 * 1024,
            backupCount=3,
            encoding="utf-8",
        )
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    # Предотвращаем передачу логов в root logger
    logger.propagate = False

    return logger


def get_diagnostic_logger() -> logging.Logger:
    """
    Получить или создать диагностический logger.

    Настройка выполняется один раз, даже при одновременном первом
    обращении из нескольких потоков.

    Returns:
        Logger для сообщений о внутренних сбоях
    """
    logger = logging.getLogger(DIAGNOSTIC_LOGGER_NAME)

    # Если logger еще не настроен, настраиваем его
    if not _own_handlers(logger):
        with _setup_lock:
            if not _own_handlers(logger):
                setup_diagnostic_logging()

    return logger


def format_action_log(
    action: str,
    target: str = None,
    result: str = "OK",
    error_type: str = None,
    error_message: str = None,
) -> str:
    """
    Форматирование лог-сообщения для демонстрационных операций.

    Args:
        action: Тип операции (SINGLETON, BUILD_REPORT, CLONE)
        target: Объект операции (имя класса или отчёта)
        result: Результат операции (OK/ERROR)
        error_type: Тип ошибки
        error_message: Сообщение об ошибке

    Returns:
        Отформатированная строка для логирования
    """
    parts = [f"{action}"]

    if target:
        parts.append(f"target='{target}'")

    parts.append(f"result={result}")

    if error_type:
        parts.append(f"error_type='{error_type}'")

    if error_message:
        # Экранируем кавычки и переводы строк: одна запись - одна строка
        escaped_message = (
            error_message.replace("'", "\\'").replace("\n", " ").strip()
        )
        parts.append(f"error_message='{escaped_message}'")

    return " ".join(parts)
