"""
Модуль configuration.py содержит глобальное хранилище настроек "ключ-значение".
"""

import threading
from typing import Any, Optional

from .exceptions import EmptyValueError, SettingNotFoundError


class ConfigurationManager:
    """
    Singleton-хранилище настроек приложения.

    Все части программы, создающие ConfigurationManager(), получают один и
    тот же объект, поэтому значение, заданное в одном месте, сразу видно
    в другом.

    Атрибуты:
        _settings: Словарь настроек (ключ - имя параметра)
    """

    _instance: Optional["ConfigurationManager"] = None
    _lock = threading.Lock()

    def __new__(cls) -> "ConfigurationManager":
        """
        Создает или возвращает единственный экземпляр класса.

        Returns:
            Единственный экземпляр ConfigurationManager
        """
        with cls._lock:
            if cls._instance is None:
                instance = super().__new__(cls)
                instance._settings = {}
                instance._settings_lock = threading.Lock()
                cls._instance = instance
            return cls._instance

    @classmethod
    def get_instance(cls) -> "ConfigurationManager":
        """Получить единственный экземпляр."""
        return cls()

    def set_setting(self, key: str, value: Any) -> None:
        """
        Установить значение параметра.

        Args:
            key: Имя параметра
            value: Значение

        Raises:
            EmptyValueError: Если имя параметра пустое
        """
        if not key or not str(key).strip():
            raise EmptyValueError("Имя параметра")
        with self._settings_lock:
            self._settings[key] = value

    def get_setting(self, key: str) -> Any:
        """
        Получить значение параметра.

        Args:
            key: Имя параметра

        Returns:
            Сохранённое значение

        Raises:
            SettingNotFoundError: Если параметр не задан
        """
        with self._settings_lock:
            if key not in self._settings:
                raise SettingNotFoundError(key)
            return self._settings[key]

    def has_setting(self, key: str) -> bool:
        """Проверить, задан ли параметр."""
        with self._settings_lock:
            return key in self._settings

    def clear(self) -> None:
        """Удалить все параметры."""
        with self._settings_lock:
            self._settings.clear()

    def __repr__(self) -> str:
        return f"<ConfigurationManager(keys={sorted(self._settings)})>"
