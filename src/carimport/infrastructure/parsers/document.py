# 📄 carimport/infrastructure/parsers/document.py
"""
📄 Document — обгортка над BeautifulSoup, з якою працюють екстрактори.

🔹 CSS-вибірка елементів (`select`, `select_one`) та читання тексту/атрибутів.
🔹 Повний видимий текст сторінки (без script/style/noscript/template), кешований.
🔹 Сирий вміст усіх `script[type="application/ld+json"]` блоків.
🔹 Прапорець `rendered`: документ отримано з headless-браузера чи статичним HTTP.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from bs4 import BeautifulSoup										# 🥣 HTML-парсер
from bs4.element import Comment, Tag								# 🧱 DOM-вузли

# 🔠 Системні імпорти
import re															# 🧵 Нормалізація пробілів
from typing import List, Optional, Tuple							# 🧰 Типізація

_INVISIBLE_TAGS: Tuple[str, ...] = ("script", "style", "noscript", "template")	# 🙈 Не входять у видимий текст
_JSON_LD_SELECTOR = 'script[type="application/ld+json"]'


class Document:
    """📄 Розпарсена сторінка оголошення, локальна для одного виклику екстракції."""

    HTML_PARSER: str = "lxml"

    def __init__(self, soup: BeautifulSoup, *, url: str = "", rendered: bool = True) -> None:
        self.soup = soup
        self.url = url
        self.rendered = rendered
        self._full_text: Optional[str] = None						# 🧠 Кеш видимого тексту

    @classmethod
    def from_html(
        cls,
        html: str,
        *,
        url: str = "",
        rendered: bool = True,
        parser: Optional[str] = None,
    ) -> "Document":
        """🥣 Будує документ із HTML-рядка."""
        return cls(BeautifulSoup(html or "", parser or cls.HTML_PARSER), url=url, rendered=rendered)

    # ================================
    # 🔎 ВИБІРКА
    # ================================
    def select(self, selector: str) -> List[Tag]:
        return [el for el in self.soup.select(selector) if isinstance(el, Tag)]

    def select_one(self, selector: str) -> Optional[Tag]:
        el = self.soup.select_one(selector)
        return el if isinstance(el, Tag) else None

    @staticmethod
    def text_of(element: Optional[Tag]) -> str:
        """Текст елемента з нормалізованими пробілами ("" для None)."""
        if element is None:
            return ""
        return re.sub(r"\s+", " ", element.get_text(" ", strip=True)).strip()

    @staticmethod
    def attr_of(element: Optional[Tag], name: str) -> str:
        """Значення атрибута як рядок (перше значення для багатозначних атрибутів)."""
        if element is None:
            return ""
        value = element.get(name)
        if isinstance(value, (list, tuple)):
            value = " ".join(str(v) for v in value)
        return str(value or "").strip()

    # ================================
    # 📜 ТЕКСТ ТА СТРУКТУРОВАНІ ДАНІ
    # ================================
    def full_text(self) -> str:
        """📜 Весь видимий текст сторінки, рядки розділені переносами."""
        if self._full_text is None:
            root = self.soup.body or self.soup
            chunks: List[str] = []
            for node in root.find_all(string=True):
                if isinstance(node, Comment) or node.find_parent(list(_INVISIBLE_TAGS)) is not None:
                    continue
                text = re.sub(r"\s+", " ", str(node)).strip()
                if text:
                    chunks.append(text)
            self._full_text = "\n".join(chunks)
        return self._full_text

    def structured_blocks(self) -> List[str]:
        """📄 Сирий текст кожного JSON-LD блоку у порядку появи."""
        return [
            (script.string or script.get_text() or "").strip()
            for script in self.select(_JSON_LD_SELECTOR)
        ]


__all__ = ["Document"]
