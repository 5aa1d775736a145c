# 🚗 carimport/__init__.py
"""
🚗 carimport — вилучення структурованих даних оголошень авто (mobile.de) за URL.
"""

__version__ = "1.0.0"
