"""
Анализ и нормализация реляционных схем по функциональным зависимостям
"""
__version__ = "1.0.0"
