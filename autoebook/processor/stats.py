# processor/stats.py
import math
import re

WORDS_PER_PAGE = 250

_CODE_BLOCK_RE = re.compile(r'```.*?```', re.DOTALL)
_INLINE_CODE_RE = re.compile(r'`[^`]+`')
_IMAGE_RE = re.compile(r'!\[.*?\]\(.*?\)')
_LINK_RE = re.compile(r'\[(.*?)\]\(.*?\)')
_MARKDOWN_SYMBOLS_RE = re.compile(r'[#*_~`>|-]')


def count_words(text: str) -> int:
    """Cuenta palabras ignorando la sintaxis markdown (conserva el texto de los enlaces)."""
    plain = _CODE_BLOCK_RE.sub('', text)
    plain = _INLINE_CODE_RE.sub('', plain)
    plain = _IMAGE_RE.sub('', plain)
    plain = _LINK_RE.sub(r'\1', plain)
    plain = _MARKDOWN_SYMBOLS_RE.sub('', plain)
    return len(plain.split())


def estimate_pages(word_count: int, words_per_page: int = WORDS_PER_PAGE) -> int:
    return math.ceil(word_count / words_per_page)
