"""Декораторы для логирования демонстрационных операций."""

import functools
import inspect
from typing import Any, Callable, Optional

from ..infra.logging_config import format_action_log
from .process_logger import LogLevel, ProcessLogger


def log_action(
    action_type: str,
    target_param: Optional[str] = None,
    logger: Optional[ProcessLogger] = None,
):
    """
    Декоратор для логирования операций (SINGLETON/BUILD_REPORT/CLONE).

    Успешный вызов пишется в процессный журнал с уровнем INFO, исключение -
    с уровнем ERROR, после чего пробрасывается дальше.

    Args:
        action_type: Тип операции
        target_param: Имя параметра функции, значение которого попадёт в
                      поле target (для объектов берется имя класса)
        logger: Логгер; по умолчанию общий экземпляр ProcessLogger

    Пример записи в лог:
        2026-01-15T12:05:22.114 [INFO] CLONE target='Character' result=OK
    """

    def decorator(func: Callable) -> Callable:
        sig = inspect.signature(func)

        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            process_logger = logger or ProcessLogger.get_instance()

            target = None
            if target_param:
                bound_args = sig.bind(*args, **kwargs)
                bound_args.apply_defaults()
                value = bound_args.arguments.get(target_param)
                if isinstance(value, str) or value is None:
                    target = value
                else:
                    target = type(value).__name__

            try:
                result = func(*args, **kwargs)
            except Exception as e:
                process_logger.log(
                    format_action_log(
                        action=action_type,
                        target=target,
                        result="ERROR",
                        error_type=type(e).__name__,
                        error_message=str(e),
                    ),
                    LogLevel.ERROR,
                )
                # Пробрасываем исключение дальше
                raise

            process_logger.log(
                format_action_log(action=action_type, target=target, result="OK"),
                LogLevel.INFO,
            )
            return result

        return wrapper

    return decorator
