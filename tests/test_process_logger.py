"""Тесты процессного логгера ProcessLogger."""

import io
import json
import re
import sys
import threading

import pytest

from patterns_hub.core.exceptions import UnknownLogLevelError
from patterns_hub.core.process_logger import (
    DEFAULT_LOG_PATH,
    LogLevel,
    ProcessLogger,
    default_logger_config,
    get_process_logger,
    logger_context,
    write_default_config,
)

ENTRY_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3} \[(INFO|WARNING|ERROR)\] (.+)$"
)


def read_lines(path):
    if not path.exists():
        return []
    return path.read_text(encoding="utf-8").splitlines()


class TestLogLevel:
    """Порядок и разбор уровней."""

    def test_ordering(self):
        assert LogLevel.INFO < LogLevel.WARNING < LogLevel.ERROR

    def test_priority_values(self):
        assert [level.priority for level in LogLevel] == [1, 2, 3]

    def test_parse_is_case_insensitive(self):
        assert LogLevel.parse("warning") is LogLevel.WARNING
        assert LogLevel.parse(" Error ") is LogLevel.ERROR

    def test_parse_passes_level_through(self):
        assert LogLevel.parse(LogLevel.INFO) is LogLevel.INFO

    def test_parse_unknown_raises(self):
        with pytest.raises(UnknownLogLevelError):
            LogLevel.parse("DEBUG")


class TestGetInstance:
    """Доступ к общему экземпляру."""

    def test_same_instance(self):
        assert ProcessLogger.get_instance() is ProcessLogger.get_instance()

    def test_helper_returns_shared_instance(self):
        assert get_process_logger() is ProcessLogger.get_instance()

    def test_defaults(self):
        logger = ProcessLogger.get_instance()
        assert logger.min_level is LogLevel.INFO
        assert logger.log_path.name == DEFAULT_LOG_PATH

    def test_concurrent_first_calls_create_one_instance(self, monkeypatch):
        created = []
        original_init = ProcessLogger.__init__

        def counting_init(self, *args, **kwargs):
            created.append(self)
            original_init(self, *args, **kwargs)

        monkeypatch.setattr(ProcessLogger, "__init__", counting_init)

        thread_count = 16
        barrier = threading.Barrier(thread_count)
        seen = []
        seen_lock = threading.Lock()

        def worker():
            barrier.wait()
            instance = ProcessLogger.get_instance()
            with seen_lock:
                seen.append(instance)

        threads = [threading.Thread(target=worker) for _ in range(thread_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(created) == 1
        assert len(seen) == thread_count
        assert all(instance is seen[0] for instance in seen)

    def test_reset_instance_creates_new_one(self):
        first = ProcessLogger.get_instance()
        ProcessLogger.reset_instance()
        assert ProcessLogger.get_instance() is not first


class TestLog:
    """Запись в журнал."""

    def test_entry_format(self, quiet_logger):
        quiet_logger.log("Сервис запущен", LogLevel.WARNING)

        lines = read_lines(quiet_logger.log_path)
        assert len(lines) == 1
        match = ENTRY_RE.match(lines[0])
        assert match is not None
        assert match.group(1) == "WARNING"
        assert match.group(2) == "Сервис запущен"

    def test_below_threshold_is_dropped(self, quiet_logger):
        quiet_logger.min_level = LogLevel.WARNING
        quiet_logger.log("first", LogLevel.ERROR)

        assert quiet_logger.log("dropped", LogLevel.INFO) is False
        assert len(read_lines(quiet_logger.log_path)) == 1

    def test_at_threshold_is_written(self, quiet_logger):
        quiet_logger.min_level = LogLevel.ERROR
        assert quiet_logger.log("kept", LogLevel.ERROR) is True
        assert len(read_lines(quiet_logger.log_path)) == 1

    def test_appends_to_existing_file(self, quiet_logger):
        quiet_logger.log_path.write_text("old line\n", encoding="utf-8")
        quiet_logger.info("new line")

        lines = read_lines(quiet_logger.log_path)
        assert lines[0] == "old line"
        assert lines[1].endswith("[INFO] new line")

    def test_level_shortcuts(self, quiet_logger):
        quiet_logger.info("a")
        quiet_logger.warning("b")
        quiet_logger.error("c")

        lines = read_lines(quiet_logger.log_path)
        levels = [ENTRY_RE.match(line).group(1) for line in lines]
        assert levels == ["INFO", "WARNING", "ERROR"]

    def test_level_given_as_string(self, quiet_logger):
        quiet_logger.log("msg", "error")
        assert "[ERROR] msg" in read_lines(quiet_logger.log_path)[0]

    def test_multiline_message_stays_on_one_line(self, quiet_logger):
        quiet_logger.info("line one\nline two")

        lines = read_lines(quiet_logger.log_path)
        assert len(lines) == 1
        assert lines[0].endswith("line one line two")

    def test_console_echo(self, tmp_path, capsys):
        logger = ProcessLogger(log_path=tmp_path / "app.log", log_to_console=True)
        logger.info("hello")

        out = capsys.readouterr().out
        assert "[INFO] hello" in out

    def test_write_failure_does_not_raise(self, tmp_path, diagnostics):
        logger = ProcessLogger(
            log_path=tmp_path / "missing" / "dir" / "app.log", log_to_console=False
        )

        assert logger.error("cannot be written") is False
        assert "Ошибка записи в журнал" in diagnostics.text

    def test_console_failure_does_not_raise(self, tmp_path, monkeypatch, diagnostics):
        # stdout без поддержки кириллицы
        monkeypatch.setattr(
            sys, "stdout", io.TextIOWrapper(io.BytesIO(), encoding="ascii")
        )
        logger = ProcessLogger(log_path=tmp_path / "app.log", log_to_console=True)

        assert logger.log("Поток #1 запущен") is True
        assert read_lines(tmp_path / "app.log")[0].endswith("[INFO] Поток #1 запущен")
        assert "Ошибка вывода записи журнала в консоль" in diagnostics.text

    def test_concurrent_writes_are_not_corrupted(self, quiet_logger):
        thread_count = 8
        per_thread = 50

        def worker(worker_id):
            for i in range(per_thread):
                quiet_logger.log(f"thread-{worker_id} message-{i}", LogLevel.INFO)

        threads = [
            threading.Thread(target=worker, args=(n,)) for n in range(thread_count)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        lines = read_lines(quiet_logger.log_path)
        assert len(lines) == thread_count * per_thread
        assert all(ENTRY_RE.match(line) for line in lines)
        messages = {ENTRY_RE.match(line).group(2) for line in lines}
        assert len(messages) == thread_count * per_thread


class TestLoadConfig:
    """Загрузка JSON-конфигурации."""

    def write_config(self, path, **fields):
        path.write_text(json.dumps(fields), encoding="utf-8")
        return path

    def test_applies_level_and_destination(self, tmp_path, quiet_logger):
        config = self.write_config(
            tmp_path / "logger-config.json",
            logFilePath="custom.log",
            minLevel="WARNING",
            logToConsole=False,
            rotationMaxBytes=500,
        )

        quiet_logger.load_config(config)

        assert quiet_logger.log_path == tmp_path / "custom.log"
        assert quiet_logger.min_level is LogLevel.WARNING
        assert quiet_logger.rotation_max_bytes == 500
        assert quiet_logger.config_path == config

    def test_load_entry_below_threshold_is_not_written(self, tmp_path, quiet_logger):
        config = self.write_config(
            tmp_path / "logger-config.json",
            logFilePath="custom.log",
            minLevel="ERROR",
            logToConsole=False,
        )

        quiet_logger.load_config(config)

        assert read_lines(tmp_path / "custom.log") == []

    def test_load_entry_is_logged(self, tmp_path, quiet_logger):
        config = self.write_config(
            tmp_path / "logger-config.json",
            logFilePath="custom.log",
            logToConsole=False,
        )

        quiet_logger.load_config(config)

        lines = read_lines(tmp_path / "custom.log")
        assert len(lines) == 1
        assert "Загружен файл конфигурации" in lines[0]

    def test_missing_file_keeps_defaults(self, tmp_path, quiet_logger, diagnostics):
        quiet_logger.load_config(tmp_path / "absent.json")

        assert quiet_logger.min_level is LogLevel.INFO
        assert quiet_logger.log_path == tmp_path / "app.log"
        assert "Не удалось загрузить конфигурацию" in diagnostics.text

    def test_invalid_json_keeps_defaults(self, tmp_path, quiet_logger):
        config = tmp_path / "broken.json"
        config.write_text("{not json", encoding="utf-8")

        quiet_logger.load_config(config)

        assert quiet_logger.min_level is LogLevel.INFO
        assert quiet_logger.config_path is None

    def test_unknown_level_keeps_previous(self, tmp_path, quiet_logger):
        config = self.write_config(
            tmp_path / "logger-config.json", minLevel="VERBOSE", logToConsole=False
        )

        quiet_logger.load_config(config)

        assert quiet_logger.min_level is LogLevel.INFO

    def test_non_string_log_path_keeps_previous(
        self, tmp_path, quiet_logger, diagnostics
    ):
        config = self.write_config(
            tmp_path / "logger-config.json", logFilePath=123, logToConsole=False
        )

        quiet_logger.load_config(config)

        assert quiet_logger.log_path == tmp_path / "app.log"
        assert quiet_logger.config_path == config
        assert "Некорректный logFilePath" in diagnostics.text

    def test_string_console_flag_is_ignored(self, tmp_path, quiet_logger, diagnostics):
        quiet_logger.log_to_console = True
        config = self.write_config(
            tmp_path / "logger-config.json", logToConsole="false"
        )

        quiet_logger.load_config(config)

        assert quiet_logger.log_to_console is True
        assert "Некорректный logToConsole" in diagnostics.text

    def test_boolean_rotation_size_is_ignored(self, tmp_path, quiet_logger):
        config = self.write_config(
            tmp_path / "logger-config.json", rotationMaxBytes=True, logToConsole=False
        )

        quiet_logger.load_config(config)

        assert quiet_logger.rotation_max_bytes == 20000


class TestDefaultConfig:
    """Создание logger-config.json по умолчанию."""

    def test_writes_when_absent(self, tmp_path):
        path = tmp_path / "logger-config.json"

        assert write_default_config(path) is True
        assert json.loads(path.read_text(encoding="utf-8")) == default_logger_config()

    def test_keeps_existing_file(self, tmp_path):
        path = tmp_path / "logger-config.json"
        path.write_text('{"minLevel": "ERROR"}', encoding="utf-8")

        assert write_default_config(path) is False
        assert json.loads(path.read_text(encoding="utf-8")) == {"minLevel": "ERROR"}


class TestLoggerContext:
    """Явный жизненный цикл логгера."""

    def test_yields_shared_instance_and_resets(self, tmp_path):
        config = tmp_path / "logger-config.json"
        write_default_config(
            config,
            {"logFilePath": "ctx.log", "minLevel": "INFO", "logToConsole": False},
        )

        with logger_context(config) as logger:
            assert logger is ProcessLogger.get_instance()
            logger.info("inside")

        assert ProcessLogger.get_instance() is not logger
        assert len(read_lines(tmp_path / "ctx.log")) == 2
