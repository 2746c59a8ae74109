"""
Модуль exceptions.py содержит пользовательские исключения.
"""


class PatternsHubError(Exception):
    """Базовое исключение для приложения Patterns Hub."""

    def __init__(self, short: str, detail: str):
        """
        Args:
            short: Короткое описание ошибки
            detail: Детальное описание ошибки
        """
        self.short = short
        self.detail = detail
        super().__init__(detail)

    def __str__(self) -> str:
        """Форматировать ошибку."""
        return f"{self.short} →\n{self.detail}"


class ValidationError(PatternsHubError):
    """Исключение для ошибок валидации входных данных."""

    pass


class SettingNotFoundError(PatternsHubError):
    """Параметр конфигурации не найден."""

    def __init__(self, key: str):
        self.key = key
        super().__init__("Параметр не найден", f"Параметр '{key}' не задан")


class ReportBuildError(PatternsHubError):
    """Отчёт собран не полностью."""

    def __init__(self, missing: str):
        super().__init__(
            "Отчёт не готов", f"Перед экспортом отчёта задайте часть '{missing}'"
        )


class FatalProgrammingError(PatternsHubError):
    """
    Нарушение инварианта программы.

    Такие ошибки не обрабатываются локально: они означают, что контракт
    типа нарушен, и операция должна быть прервана.
    """

    pass


class CloneNotSupportedError(FatalProgrammingError):
    """Объект не поддерживает глубокое копирование."""

    def __init__(self, type_name: str, reason: str = "не реализует clone()"):
        self.type_name = type_name
        super().__init__(
            "Копирование невозможно", f"Тип '{type_name}' {reason}"
        )


# Специфичные ошибки валидации
class UnknownLogLevelError(ValidationError):
    """Неизвестный уровень логирования."""

    def __init__(self, level: str):
        super().__init__(
            "Неизвестный уровень",
            f"Уровень логирования '{level}' не поддерживается "
            f"(ожидается INFO, WARNING или ERROR)",
        )


class NegativeValueError(ValidationError):
    """Отрицательное значение."""

    def __init__(self, field: str):
        super().__init__(
            "Некорректное значение", f"'{field}' не может быть отрицательным"
        )


class EmptyValueError(ValidationError):
    """Пустое значение."""

    def __init__(self, field: str):
        super().__init__(f"Пустое поле {field}", f"{field} не может быть пустым")
