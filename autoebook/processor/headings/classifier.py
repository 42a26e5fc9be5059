# headings/classifier.py
import re

from .patterns import level_for, match_structural
from ..models import HeadingMatch, NOT_A_HEADING

_MARKDOWN_HEADING_RE = re.compile(r'^(#{1,6})\s+(.+)$')
_TERMINAL_PUNCT_RE = re.compile(r'[.。,，;；]$')

_HEURISTIC_MIN_LENGTH = 2
_HEURISTIC_MAX_LENGTH = 50
_HEURISTIC_LEVEL = 2


def classify_heading(line: str) -> HeadingMatch:
    """
    Clasifica UNA línea como heading o no. Sin contexto: la misma línea
    siempre da el mismo resultado, independientemente de sus vecinas.

    Precedencia (el primero que acierta gana):
      1. Heading markdown ya formateado (# a ######)
      2. Tabla de patrones estructurales (parte / capítulo / sección / prólogo / numerados)
      3. Heurística: línea corta, en mayúsculas o en escritura sin caja,
         sin puntuación final de frase → nivel 2
    """
    trimmed = line.strip()
    if not trimmed:
        return NOT_A_HEADING

    # 1. Markdown
    md = _MARKDOWN_HEADING_RE.match(trimmed)
    if md:
        return HeadingMatch(is_heading=True, title=md.group(2).strip(), level=len(md.group(1)))

    # 2. Patrones estructurales
    structural = match_structural(trimmed)
    if structural is not None:
        return HeadingMatch(is_heading=True, title=structural.title, level=level_for(structural))

    # 3. Heurística
    if _looks_like_title(trimmed):
        return HeadingMatch(is_heading=True, title=trimmed, level=_HEURISTIC_LEVEL)

    return NOT_A_HEADING


def is_markdown_heading(line: str) -> bool:
    return bool(_MARKDOWN_HEADING_RE.match(line.strip()))


def _looks_like_title(trimmed: str) -> bool:
    if not _HEURISTIC_MIN_LENGTH <= len(trimmed) <= _HEURISTIC_MAX_LENGTH:
        return False
    if _TERMINAL_PUNCT_RE.search(trimmed):
        return False
    # Mayúsculas: la línea coincide con su propia versión en mayúsculas.
    # Las escrituras sin caja (hangul, kanji...) pasan siempre esta comprobación.
    if trimmed != trimmed.upper():
        return False
    return any(ch.isalpha() for ch in trimmed)
