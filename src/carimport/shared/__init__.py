# 🧰 carimport/shared/__init__.py
"""🧰 Спільний шар: помилки, метрики та утиліти."""
