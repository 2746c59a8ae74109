import json
import os
import threading
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

HOME_ENV_VAR = "PATTERNS_HUB_HOME"

# Переменные окружения (или .env), переопределяющие параметры config.json
ENV_OVERRIDES = {
    "PATTERNS_HUB_LOG_LEVEL": "log_level",
    "PATTERNS_HUB_LOG_FILE": "log_file",
    "PATTERNS_HUB_DIAGNOSTIC_LEVEL": "diagnostic_log_level",
}


class SettingsLoader:
    """
    Singleton класс для загрузки и кеширования конфигурации проекта.

    Отвечает за:
    - Загрузку конфигурации из config.json
    - Кеширование конфигурации
    - Предоставление доступа к параметрам через метод get()
    - Перезагрузку конфигурации по требованию

    Реализация через __new__ с блокировкой: при одновременном первом
    обращении из нескольких потоков создаётся ровно один экземпляр.
    """

    _instance: Optional["SettingsLoader"] = None
    _initialized: bool = False
    _lock = threading.Lock()

    def __new__(cls) -> "SettingsLoader":
        """
        Создает или возвращает единственный экземпляр класса.

        Returns:
            Единственный экземпляр SettingsLoader
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        """
        Инициализирует настройки (выполняется только один раз).
        """
        with SettingsLoader._lock:
            # Предотвращаем повторную инициализацию
            if SettingsLoader._initialized:
                return

            self._config: Dict[str, Any] = {}

            # .env из текущей директории может указать корень проекта
            self._load_env(Path.cwd() / ".env")

            self._project_root = Path(os.getenv(HOME_ENV_VAR) or Path.cwd())
            self._config_path = self._project_root / "config.json"
            self._env_path = self._project_root / ".env"

            # .env рядом с config.json
            if self._env_path.resolve() != (Path.cwd() / ".env").resolve():
                self._load_env(self._env_path)

            # Дефолтные значения
            self._defaults = {
                "logger_config_file": "logger-config.json",
                "log_file": "app.log",
                "log_level": "INFO",
                "log_to_console": True,
                "diagnostic_log_level": "WARNING",
                "diagnostic_log_format": (
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
                ),
                "diagnostic_log_file": None,
            }

            self._load_config()

            SettingsLoader._initialized = True

    def _load_env(self, env_path: Path):
        """
        Загружает переменные окружения из файла .env.

        Уже заданные переменные окружения не перезаписываются.
        """
        if not env_path.exists():
            return

        try:
            load_dotenv(env_path, override=False)
        except OSError as exc:
            print(f"Предупреждение: не удалось загрузить .env: {exc}")

    def _apply_env_overrides(self):
        """Переопределяет параметры значениями переменных PATTERNS_HUB_*."""
        for env_name, key in ENV_OVERRIDES.items():
            value = os.getenv(env_name)
            if value:
                self._config[key] = value

    def _load_config(self):
        """
        Загружает конфигурацию из config.json.

        Если файл не существует, создает его с дефолтными значениями.
        """
        self._config = self._defaults.copy()

        if self._config_path.exists():
            try:
                with open(self._config_path, "r", encoding="utf-8") as f:
                    user_config = json.load(f)

                if isinstance(user_config, dict):
                    self._config.update(user_config)

            except (OSError, json.JSONDecodeError) as e:
                print(f"Предупреждение: не удалось загрузить config.json: {e}")
                print("Используются дефолтные настройки")
        else:
            self._save_config()

        self._apply_env_overrides()

    def _save_config(self):
        """
        Сохраняет текущую конфигурацию в config.json.
        """
        try:
            self._config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._config_path, "w", encoding="utf-8") as f:
                json.dump(self._config, f, ensure_ascii=False, indent=2)
        except OSError as e:
            print(f"Предупреждение: не удалось сохранить config.json: {e}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        Получить значение конфигурации по ключу.

        Args:
            key: Ключ конфигурации
            default: Значение по умолчанию, если ключ не найден

        Returns:
            Значение конфигурации или default

        Examples:
            >>> settings = SettingsLoader()
            >>> level = settings.get("log_level", "INFO")
        """
        return self._config.get(key, default)

    def reload(self):
        """
        Перезагружает конфигурацию из config.json и .env.

        Полезно если конфигурация была изменена в runtime.
        """
        self._load_env(self._env_path)
        self._load_config()

    def get_project_root(self) -> Path:
        """Получить корневую директорию с файлами конфигурации."""
        return self._project_root

    def get_logger_config_path(self) -> Path:
        """
        Получить путь к JSON-конфигурации процессного логгера.

        Returns:
            Path объект файла конфигурации логгера
        """
        return self._project_root / self.get("logger_config_file")

    def get_log_file_path(self) -> Path:
        """
        Получить путь к журналу приложения.

        Returns:
            Path объект файла журнала
        """
        return self._project_root / self.get("log_file")

    def get_log_config(self) -> Dict[str, Any]:
        """
        Получить конфигурацию процессного логгера в формате logger-config.json.

        Returns:
            Словарь с параметрами логирования
        """
        return {
            "logFilePath": str(self.get_log_file_path()),
            "minLevel": self.get("log_level", "INFO"),
            "logToConsole": bool(self.get("log_to_console", True)),
            "rotationMaxBytes": 20000,
        }

    def get_diagnostic_config(self) -> Dict[str, Any]:
        """Получить параметры диагностического логгера."""
        return {
            "format": self.get("diagnostic_log_format"),
            "level": self.get("diagnostic_log_level", "WARNING"),
            "file": self.get("diagnostic_log_file"),
        }

    @classmethod
    def reset(cls) -> None:
        """Сбросить синглтон (используется в тестах)."""
        with cls._lock:
            cls._instance = None
            cls._initialized = False

    def __repr__(self) -> str:
        """Строковое представление конфигурации."""
        return f"<SettingsLoader(config_keys={list(self._config.keys())})>"


def get_settings() -> SettingsLoader:
    """
    Получить экземпляр SettingsLoader.

    Функция-хелпер для удобного доступа к синглтону.

    Returns:
        Единственный экземпляр SettingsLoader

    Examples:
        >>> settings = get_settings()
        >>> config_path = settings.get_logger_config_path()
    """
    return SettingsLoader()
