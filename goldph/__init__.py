"""
GoldPH — accounting core для gold-per-hour трекинга игровой сессии.

Превращает классифицированные activity-сигналы (лут, продажа, траты) в
согласованный поток стоимости без двойного учёта.
"""

__version__ = "0.1.0"
