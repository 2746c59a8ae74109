"""
Модуль reports.py содержит паттерн Builder для отчётов разных форматов.
"""

import html
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from .exceptions import ReportBuildError, ValidationError

TEXT_CONTENT_PREFIX = "Этот отчёт создан с помощью паттерна Builder.\n"
TEXT_FOOTER_PREFIX = "Отчёт успешно завершён.\n"

MONTHLY_HEADER = "Ежемесячный отчёт"
MONTHLY_CONTENT = "Показана статистика системы."
MONTHLY_FOOTER = "© 2026 Компания"


@dataclass(frozen=True)
class ReportStyle:
    """Неизменяемое оформление отчёта."""

    background_color: str
    font_color: str
    font_size: int

    def __post_init__(self) -> None:
        if self.font_size <= 0:
            raise ValidationError(
                "Некорректный размер шрифта",
                f"Размер шрифта должен быть положительным, получено {self.font_size}",
            )


class Report:
    """
    Результат сборки: заголовок, содержимое, подвал и оформление.
    """

    def __init__(self):
        self.header: Optional[str] = None
        self.content: Optional[str] = None
        self.footer: Optional[str] = None
        self.style: Optional[ReportStyle] = None

    def show(self) -> str:
        """Простое представление: части отчёта через перевод строки."""
        return "\n".join(
            part or "" for part in (self.header, self.content, self.footer)
        )

    def export(self) -> str:
        """
        Экспортировать отчёт с блоком оформления.

        Raises:
            ReportBuildError: Если оформление не задано
        """
        if self.style is None:
            raise ReportBuildError("style")

        return (
            f"Заголовок: {self.header or ''}\n"
            f"Стиль: Фон={self.style.background_color}, "
            f"Шрифт={self.style.font_color}, "
            f"Размер={self.style.font_size}\n"
            f"\n"
            f"{self.content or ''}\n"
            f"\n"
            f"{self.footer or ''}\n"
        )

    def __repr__(self) -> str:
        return f"<Report(header={self.header!r})>"


class ReportBuilder(ABC):
    """Абстрактный строитель отчёта."""

    def __init__(self):
        self._report = Report()

    def reset(self) -> None:
        """Начать сборку нового отчёта."""
        self._report = Report()

    @abstractmethod
    def set_header(self, header: str) -> None:
        pass

    @abstractmethod
    def set_content(self, content: str) -> None:
        pass

    @abstractmethod
    def set_footer(self, footer: str) -> None:
        pass

    def set_style(self, style: ReportStyle) -> None:
        self._report.style = style

    def get_report(self) -> Report:
        """Вернуть собранный отчёт."""
        return self._report


class TextReportBuilder(ReportBuilder):
    """
    Строитель текстового отчёта.

    Args:
        decorated: Если True, к содержимому и подвалу добавляются
                   служебные строки о том, как собран отчёт
    """

    def __init__(self, decorated: bool = False):
        super().__init__()
        self.decorated = decorated

    def set_header(self, header: str) -> None:
        self._report.header = header

    def set_content(self, content: str) -> None:
        prefix = TEXT_CONTENT_PREFIX if self.decorated else ""
        self._report.content = prefix + content

    def set_footer(self, footer: str) -> None:
        prefix = TEXT_FOOTER_PREFIX if self.decorated else ""
        self._report.footer = prefix + footer


class HtmlReportBuilder(ReportBuilder):
    """Строитель HTML-отчёта."""

    def set_header(self, header: str) -> None:
        self._report.header = f"<h1>{html.escape(header)}</h1>"

    def set_content(self, content: str) -> None:
        self._report.content = f"<p>{html.escape(content)}</p>"

    def set_footer(self, footer: str) -> None:
        self._report.footer = f"<small>{html.escape(footer)}</small>"


class ReportDirector:
    """Управляет порядком шагов сборки отчёта."""

    def construct_report(
        self,
        builder: ReportBuilder,
        header: str,
        content: str,
        footer: str,
        style: Optional[ReportStyle] = None,
    ) -> Report:
        """
        Собрать отчёт из переданных частей.

        Returns:
            Собранный отчёт (тот же, что вернёт builder.get_report())
        """
        if style is not None:
            builder.set_style(style)
        builder.set_header(header)
        builder.set_content(content)
        builder.set_footer(footer)
        return builder.get_report()

    def construct_monthly_report(
        self, builder: ReportBuilder, style: ReportStyle
    ) -> Report:
        """Собрать стандартный ежемесячный отчёт."""
        return self.construct_report(
            builder, MONTHLY_HEADER, MONTHLY_CONTENT, MONTHLY_FOOTER, style=style
        )
