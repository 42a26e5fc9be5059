# headings/patterns.py
"""
Tabla ordenada de patrones estructurales de capítulo/parte/sección.

Cada matcher es una función independiente que recibe la línea ya recortada y
devuelve un StructuralMatch (marcador + resto) o None. El orden de la tabla es
la precedencia: el primero que haga match gana.
"""
import re
from dataclasses import dataclass
from typing import Callable, Optional

# Rango de sílabas hangul, tratado como escritura sin mayúsculas
SCRIPT_CHARS = "가-힣"


@dataclass(frozen=True)
class StructuralMatch:
    pattern: str            # nombre del matcher que disparó
    marker: str             # "Chapter 3", "제 2 부", "IV"...
    remainder: str = ""     # texto después del marcador (puede estar vacío)
    fixed_level: Optional[int] = None   # los matchers numerados imponen su propio nivel

    @property
    def title(self) -> str:
        return f"{self.marker} {self.remainder}".strip() if self.remainder else self.marker


Matcher = Callable[[str], Optional[StructuralMatch]]

_SEPARATOR = r'\s*[.:：]?\s*(.+)?$'


def _keyword_matcher(name: str, marker: str, flags: int = 0) -> Matcher:
    """Marcador con palabra clave + resto opcional separado por . : o ："""
    regex = re.compile(rf'^({marker}){_SEPARATOR}', flags)

    def match(line: str) -> Optional[StructuralMatch]:
        m = regex.match(line)
        if not m:
            return None
        return StructuralMatch(name, m.group(1), (m.group(2) or "").strip())

    match.__name__ = f"match_{name}"
    return match


def _standalone_matcher(name: str, words: str, flags: int = 0) -> Matcher:
    """Prólogo, epílogo, prefacio... la línea entera es el título."""
    regex = re.compile(rf'^({words})\b', flags)

    def match(line: str) -> Optional[StructuralMatch]:
        m = regex.match(line)
        if not m:
            return None
        return StructuralMatch(name, m.group(1))

    match.__name__ = f"match_{name}"
    return match


def _enumerated_matcher(name: str, marker: str, level: int, flags: int = 0) -> Matcher:
    """'3. Título' o 'IV. Título': el texto tras el marcador es obligatorio."""
    regex = re.compile(rf'^({marker})\s*[.．]\s+(.+)$', flags)

    def match(line: str) -> Optional[StructuralMatch]:
        m = regex.match(line)
        if not m:
            return None
        return StructuralMatch(name, m.group(1), m.group(2).strip(), fixed_level=level)

    match.__name__ = f"match_{name}"
    return match


# Coreano
match_korean_chapter = _keyword_matcher("korean_chapter", r'제\s*\d+\s*장')
match_korean_volume = _keyword_matcher("korean_volume", r'제\s*\d+\s*편')
match_korean_part = _keyword_matcher("korean_part", r'제\s*\d+\s*부')
match_korean_section = _keyword_matcher("korean_section", r'제\s*\d+\s*절')
match_korean_short_chapter = _keyword_matcher("korean_short_chapter", r'\d+장')
match_korean_standalone = _standalone_matcher(
    "korean_standalone", r'프롤로그|에필로그|서문|머리말|맺음말|들어가며|나가며',
)

# Inglés
match_english_chapter = _keyword_matcher("english_chapter", r'Chapter\s+\d+', re.IGNORECASE)
match_english_part = _keyword_matcher("english_part", r'Part\s+\d+', re.IGNORECASE)
match_english_section = _keyword_matcher("english_section", r'Section\s+\d+', re.IGNORECASE)
match_english_standalone = _standalone_matcher(
    "english_standalone", r'Prologue|Epilogue|Introduction|Conclusion|Preface', re.IGNORECASE,
)

# Numerados genéricos
match_numbered = _enumerated_matcher("numbered", r'\d+', level=1)
match_roman = _enumerated_matcher("roman", r'[IVXLCDM]+', level=1, flags=re.IGNORECASE)


STRUCTURAL_MATCHERS: list[Matcher] = [
    match_korean_chapter,
    match_korean_volume,
    match_korean_part,
    match_korean_section,
    match_korean_short_chapter,
    match_korean_standalone,
    match_english_chapter,
    match_english_part,
    match_english_section,
    match_english_standalone,
    match_numbered,
    match_roman,
]


# Clase de palabra clave -> nivel. Se evalúa en este orden sobre el marcador.
_LEVEL_BY_KEYWORD: list[tuple[re.Pattern, int]] = [
    (re.compile(r'부|Part', re.IGNORECASE), 1),
    (re.compile(r'편|장|Chapter', re.IGNORECASE), 2),
    (re.compile(r'절|Section', re.IGNORECASE), 3),
]


def level_for(match: StructuralMatch) -> int:
    if match.fixed_level is not None:
        return match.fixed_level
    for keyword, level in _LEVEL_BY_KEYWORD:
        if keyword.search(match.marker):
            return level
    return 1


def match_structural(line: str) -> Optional[StructuralMatch]:
    """Primer matcher de la tabla que reconoce la línea, o None."""
    for matcher in STRUCTURAL_MATCHERS:
        result = matcher(line)
        if result is not None:
            return result
    return None
