"""Проверка полного прогона демонстрации."""

from patterns_hub.cli import demo
from patterns_hub.core.configuration import ConfigurationManager
from patterns_hub.core.process_logger import ProcessLogger


class TestDemo:
    """Полный прогон демонстрации."""

    def test_main_runs_all_patterns(self, isolated_home, capsys):
        demo.main()

        out = capsys.readouterr().out
        assert "config1 is config2: True" in out
        assert "<h1>HTML отчёт</h1>" in out
        assert "Копия, оплата: Наличные" in out
        assert "Оригинал: Батыр | Оружие: Меч(30)" in out
        assert "Копия: Батыр_2 | Оружие: Меч(999)" in out

        assert (isolated_home / "logger-config.json").exists()
        assert ConfigurationManager().get_setting("language") == "Русский"

    def test_worker_entries_written(self, isolated_home):
        demo.main()

        log_path = ProcessLogger.get_instance().log_path
        lines = log_path.read_text(encoding="utf-8").splitlines()
        worker_lines = [line for line in lines if "Поток #" in line]
        assert len(worker_lines) == demo.WORKER_COUNT * 3
        assert any("SINGLETON result=OK" in line for line in lines)
        assert any("CLONE target='Character' result=OK" in line for line in lines)
