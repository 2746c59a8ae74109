"""
Демонстрация паттернов Singleton, Builder и Prototype.

Этот скрипт показывает:
1. Единственный экземпляр ConfigurationManager и ProcessLogger
2. Потокобезопасную запись в общий журнал из нескольких потоков
3. Сборку текстового и HTML-отчёта через ReportDirector
4. Глубокое копирование заказа и игрового персонажа
"""

from concurrent.futures import ThreadPoolExecutor

from ..core.configuration import ConfigurationManager
from ..core.decorators import log_action
from ..core.process_logger import LogLevel, ProcessLogger, write_default_config
from ..core.prototype import Armor, Character, Order, Product, Skill, Weapon
from ..core.reports import (
    HtmlReportBuilder,
    ReportDirector,
    ReportStyle,
    TextReportBuilder,
)
from ..infra.settings import get_settings

WORKER_COUNT = 4


def _section(title: str) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def _worker(worker_id: int) -> None:
    logger = ProcessLogger.get_instance()
    logger.log(f"Поток #{worker_id} запущен", LogLevel.INFO)
    logger.log(f"Поток #{worker_id} выдал предупреждение", LogLevel.WARNING)
    logger.log(f"Поток #{worker_id} сообщил об ошибке", LogLevel.ERROR)


@log_action("SINGLETON")
def demonstrate_singleton() -> None:
    """Демонстрация паттерна Singleton."""
    _section("SINGLETON")

    config1 = ConfigurationManager()
    config2 = ConfigurationManager.get_instance()
    print(f"\n1. config1 is config2: {config1 is config2}")

    config1.set_setting("language", "Русский")
    print(f"2. Язык из config2: {config2.get_setting('language')}")

    settings = get_settings()
    config_path = settings.get_logger_config_path()
    if write_default_config(config_path, settings.get_log_config()):
        print(f"3. Создан файл конфигурации логгера: {config_path}")

    logger = ProcessLogger.get_instance()
    logger.load_config(config_path)
    print(f"4. Один экземпляр логгера: {logger is ProcessLogger.get_instance()}")

    with ThreadPoolExecutor(max_workers=WORKER_COUNT) as pool:
        list(pool.map(_worker, range(WORKER_COUNT)))

    print(f"5. Журнал: {logger.log_path}")


@log_action("BUILD_REPORT", target_param="style")
def demonstrate_builder(style: ReportStyle) -> None:
    """Демонстрация паттерна Builder."""
    _section("BUILDER")

    director = ReportDirector()

    text_builder = TextReportBuilder()
    director.construct_report(
        text_builder,
        "Недельный отчёт",
        "План на неделю выполнен полностью.",
        "Автор: Аида",
    )
    print("\nТекстовый отчёт:")
    print(text_builder.get_report().show())

    html_builder = HtmlReportBuilder()
    director.construct_report(
        html_builder, "HTML отчёт", "Выручка выросла на 10%.", "System"
    )
    print("\nHTML отчёт:")
    print(html_builder.get_report().show())

    monthly_builder = TextReportBuilder(decorated=True)
    director.construct_monthly_report(monthly_builder, style)
    print("\nЕжемесячный отчёт:")
    print(monthly_builder.get_report().export())


@log_action("CLONE", target_param="original")
def demonstrate_prototype(original: Character) -> None:
    """Демонстрация паттерна Prototype."""
    _section("PROTOTYPE")

    order = Order(delivery_cost=1000, payment_method="Карта")
    order.add_product(Product("Мышь", 5000, 1))

    copied_order = order.clone()
    copied_order.payment_method = "Наличные"
    print(f"\nОригинал, оплата: {order.payment_method}")
    print(f"Копия, оплата: {copied_order.payment_method}")

    clone = original.deep_clone()
    clone.name = f"{original.name}_2"
    clone.weapon.damage = 999

    print(f"\nОригинал: {original}")
    print(f"Копия: {clone}")


def main() -> None:
    """Точка входа консольного скрипта patterns-demo."""
    demonstrate_singleton()
    demonstrate_builder(ReportStyle("#FFFFFF", "#000000", 14))

    hero = Character(
        "Батыр",
        100,
        20,
        15,
        10,
        weapon=Weapon("Меч", 30),
        armor=Armor("Железная", 15),
    )
    hero.add_skill(Skill("Огненный шар", "MAGIC", 3))
    demonstrate_prototype(hero)

    _section("ДЕМОНСТРАЦИЯ ЗАВЕРШЕНА")


if __name__ == "__main__":
    main()
