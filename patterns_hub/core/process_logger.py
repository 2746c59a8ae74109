"""
Модуль process_logger.py содержит потокобезопасный процессный логгер.

Логгер существует в единственном экземпляре на весь процесс, создаётся
лениво при первом обращении к get_instance() и дописывает записи вида
``<ISO-8601 время> [<УРОВЕНЬ>] <сообщение>`` в общий файл журнала.
"""

import json
import threading
from contextlib import contextmanager
from datetime import datetime
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union

from ..infra.logging_config import get_diagnostic_logger
from .exceptions import UnknownLogLevelError

DEFAULT_LOG_PATH = "app.log"
DEFAULT_ROTATION_MAX_BYTES = 20000

PathLike = Union[str, Path]


class LogLevel(IntEnum):
    """Уровень важности записи. Порядок: INFO < WARNING < ERROR."""

    INFO = 1
    WARNING = 2
    ERROR = 3

    @property
    def priority(self) -> int:
        """Числовой приоритет уровня."""
        return int(self)

    @classmethod
    def parse(cls, value: Union[str, "LogLevel"]) -> "LogLevel":
        """
        Получить уровень по имени (регистр не важен).

        Raises:
            UnknownLogLevelError: Если имя уровня не поддерживается
        """
        if isinstance(value, LogLevel):
            return value
        try:
            return cls[str(value).strip().upper()]
        except KeyError:
            raise UnknownLogLevelError(str(value))


def default_logger_config(log_path: PathLike = DEFAULT_LOG_PATH) -> Dict[str, Any]:
    """Конфигурация логгера по умолчанию в формате logger-config.json."""
    return {
        "logFilePath": str(log_path),
        "minLevel": LogLevel.INFO.name,
        "logToConsole": True,
        "rotationMaxBytes": DEFAULT_ROTATION_MAX_BYTES,
    }


def write_default_config(
    config_path: PathLike, config: Optional[Dict[str, Any]] = None
) -> bool:
    """
    Создать файл конфигурации логгера, если он ещё не существует.

    Args:
        config_path: Путь к logger-config.json
        config: Содержимое файла (по умолчанию default_logger_config())

    Returns:
        True если файл был создан, False если он уже существовал
    """
    path = Path(config_path)
    if path.exists():
        return False

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(config or default_logger_config(), f, ensure_ascii=False, indent=2)
    return True


class ProcessLogger:
    """
    Процессный логгер с ленивой инициализацией.

    Атрибуты:
        min_level: Минимальный уровень записываемых сообщений
        log_path: Путь к файлу журнала
        log_to_console: Дублировать ли записи в stdout
        rotation_max_bytes: Порог ротации из конфигурации (только хранится)

    Экземпляр можно создать явно и передать зависимым компонентам, либо
    получить общий экземпляр процесса через get_instance().
    """

    _instance: Optional["ProcessLogger"] = None
    _instance_lock = threading.Lock()

    def __init__(
        self,
        log_path: PathLike = DEFAULT_LOG_PATH,
        min_level: Union[str, LogLevel] = LogLevel.INFO,
        log_to_console: bool = True,
        rotation_max_bytes: int = DEFAULT_ROTATION_MAX_BYTES,
    ):
        self.log_path = Path(log_path)
        self.min_level = LogLevel.parse(min_level)
        self.log_to_console = log_to_console
        self.rotation_max_bytes = rotation_max_bytes
        self.config_path: Optional[Path] = None
        self._write_lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> "ProcessLogger":
        """
        Получить общий экземпляр логгера.

        При одновременном первом вызове из нескольких потоков создаётся
        ровно один экземпляр (двойная проверка под блокировкой).
        """
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    @classmethod
    def reset_instance(cls) -> None:
        """Сбросить общий экземпляр (завершение работы, тесты)."""
        with cls._instance_lock:
            cls._instance = None

    def load_config(self, config_path: PathLike) -> None:
        """
        Загрузить конфигурацию из JSON-файла.

        Распознаются поля logFilePath, minLevel, logToConsole и
        rotationMaxBytes; отсутствующие поля сохраняют текущие значения.
        Ошибки чтения не пробрасываются: они пишутся в диагностический
        канал, и логгер продолжает работать с прежними настройками.

        Args:
            config_path: Путь к logger-config.json
        """
        path = Path(config_path)
        diagnostics = get_diagnostic_logger()

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            diagnostics.warning(
                "Не удалось загрузить конфигурацию логгера %s: %s", path, exc
            )
            return

        if not isinstance(data, dict):
            diagnostics.warning(
                "Конфигурация логгера %s должна быть JSON-объектом", path
            )
            return

        if "logFilePath" in data:
            if isinstance(data["logFilePath"], str) and data["logFilePath"].strip():
                log_path = Path(data["logFilePath"])
                # Относительный путь считается от файла конфигурации
                if not log_path.is_absolute():
                    log_path = path.parent / log_path
                self.log_path = log_path
            else:
                diagnostics.warning(
                    "Некорректный logFilePath %r; оставлен путь %s",
                    data["logFilePath"],
                    self.log_path,
                )

        if "minLevel" in data:
            try:
                self.min_level = LogLevel.parse(data["minLevel"])
            except UnknownLogLevelError as exc:
                diagnostics.warning(
                    "%s; оставлен уровень %s", exc.detail, self.min_level.name
                )

        if "logToConsole" in data:
            if isinstance(data["logToConsole"], bool):
                self.log_to_console = data["logToConsole"]
            else:
                diagnostics.warning(
                    "Некорректный logToConsole %r (ожидается true/false)",
                    data["logToConsole"],
                )

        max_bytes = data.get("rotationMaxBytes")
        if isinstance(max_bytes, int) and not isinstance(max_bytes, bool):
            self.rotation_max_bytes = max_bytes

        self.config_path = path
        self.log(f"Загружен файл конфигурации: {path}", LogLevel.INFO)

    def format_entry(self, message: str, level: LogLevel) -> str:
        """Сформировать строку записи журнала."""
        timestamp = datetime.now().isoformat(timespec="milliseconds")
        return f"{timestamp} [{level.name}] {message}"

    def log(self, message: str, level: Union[str, LogLevel] = LogLevel.INFO) -> bool:
        """
        Записать сообщение в журнал.

        Сообщения ниже min_level молча отбрасываются. Запись строки
        выполняется под блокировкой, поэтому строки из разных потоков
        не перемешиваются.

        Args:
            message: Текст сообщения
            level: Уровень важности

        Returns:
            True если запись добавлена в файл, иначе False
        """
        level = LogLevel.parse(level)
        if level < self.min_level:
            return False

        # Одна запись - одна строка
        text = self.format_entry(" ".join(str(message).splitlines()), level)

        with self._write_lock:
            try:
                with open(self.log_path, "a", encoding="utf-8") as f:
                    f.write(text + "\n")
                written = True
            except OSError as exc:
                get_diagnostic_logger().error(
                    "Ошибка записи в журнал %s: %s", self.log_path, exc
                )
                written = False

            if self.log_to_console:
                try:
                    print(text)
                except (OSError, ValueError) as exc:
                    get_diagnostic_logger().error(
                        "Ошибка вывода записи журнала в консоль: %s", exc
                    )

        return written

    def info(self, message: str) -> bool:
        """Записать сообщение уровня INFO."""
        return self.log(message, LogLevel.INFO)

    def warning(self, message: str) -> bool:
        """Записать сообщение уровня WARNING."""
        return self.log(message, LogLevel.WARNING)

    def error(self, message: str) -> bool:
        """Записать сообщение уровня ERROR."""
        return self.log(message, LogLevel.ERROR)

    def __repr__(self) -> str:
        return (
            f"<ProcessLogger(log_path='{self.log_path}', "
            f"min_level={self.min_level.name})>"
        )


def get_process_logger() -> ProcessLogger:
    """
    Получить общий экземпляр ProcessLogger.

    Функция-хелпер для удобного доступа к синглтону.
    """
    return ProcessLogger.get_instance()


@contextmanager
def logger_context(config_path: Optional[PathLike] = None) -> Iterator[ProcessLogger]:
    """
    Явный жизненный цикл процессного логгера.

    При входе создаёт (или получает) общий экземпляр и загружает
    конфигурацию, при выходе сбрасывает его.

    Examples:
        >>> with logger_context("logger-config.json") as logger:
        ...     logger.info("Старт")
    """
    logger = ProcessLogger.get_instance()
    if config_path is not None:
        logger.load_config(config_path)
    try:
        yield logger
    finally:
        ProcessLogger.reset_instance()
