"""
Пакет Patterns Hub - демонстрация паттернов Singleton, Builder и Prototype.
"""

__version__ = "0.1.0"
