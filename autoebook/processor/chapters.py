# processor/chapters.py
import re
from dataclasses import dataclass, field

from .headings.classifier import classify_heading
from .models import Chapter

# Títulos de los capítulos sintéticos
INTRO_TITLE = "Introducción"
BODY_TITLE = "Texto completo"

_MAX_CHAPTER_LEVEL = 2
_EXPORT_HEADING_RE = re.compile(r'^(#{1,2})\s+(.+)$')


@dataclass
class _OpenChapter:
    title: str
    level: int
    start_line: int
    synthetic: bool = False
    lines: list[str] = field(default_factory=list)

    def close(self) -> Chapter:
        return Chapter(
            title=self.title,
            content="\n".join(self.lines).strip(),
            level=self.level,
            start_line=self.start_line,
            synthetic=self.synthetic,
        )


def split_by_chapters(text: str) -> list[Chapter]:
    """
    Variante heurística: cualquier línea que el clasificador reconozca como
    heading de nivel 1-2 abre un capítulo nuevo.

    El texto previo al primer heading se convierte en un capítulo sintético
    de introducción, solo si tiene contenido. Si no hay ningún heading, el
    documento entero es un único capítulo sintético (o ninguno, si está vacío).
    """
    chapters: list[Chapter] = []
    current: _OpenChapter | None = None
    preamble: list[str] = []

    for i, line in enumerate(text.split("\n")):
        heading = classify_heading(line)

        if heading.is_heading and heading.level <= _MAX_CHAPTER_LEVEL:
            if current is not None:
                chapters.append(current.close())
            elif _has_content(preamble):
                chapters.append(_synthetic(INTRO_TITLE, preamble))

            current = _OpenChapter(title=heading.title, level=heading.level, start_line=i)
        elif current is not None:
            current.lines.append(line)
        else:
            preamble.append(line)

    if current is not None:
        chapters.append(current.close())
    elif _has_content(preamble):
        chapters.append(_synthetic(BODY_TITLE, preamble))

    return chapters


def split_into_chapters(text: str) -> list[Chapter]:
    """
    Variante de exportación: solo headings markdown ya formateados de nivel ≤ 2.
    Ignora la detección heurística. Los capítulos sin contenido se descartan,
    y si no queda ninguno se devuelve el documento entero como un único
    capítulo: esta variante nunca devuelve una lista vacía.
    """
    chapters: list[Chapter] = []
    current: _OpenChapter | None = None
    found_heading = False

    for i, line in enumerate(text.split("\n")):
        match = _EXPORT_HEADING_RE.match(line)

        if match:
            found_heading = True
            if current is not None:
                chapters.append(current.close())
            current = _OpenChapter(
                title=match.group(2).strip(),
                level=len(match.group(1)),
                start_line=i,
            )
        elif current is not None:
            current.lines.append(line)
        else:
            # contenido antes del primer heading: capítulo de introducción
            current = _OpenChapter(title=INTRO_TITLE, level=1, start_line=i, synthetic=True, lines=[line])

    if current is not None:
        chapters.append(current.close())

    chapters = [ch for ch in chapters if ch.content]
    if not found_heading or not chapters:
        return [Chapter(title=BODY_TITLE, content=text.strip(), level=1, start_line=0, synthetic=True)]
    return chapters


def _has_content(lines: list[str]) -> bool:
    return any(line.strip() for line in lines)


def _synthetic(title: str, lines: list[str]) -> Chapter:
    return _OpenChapter(title=title, level=1, start_line=0, synthetic=True, lines=lines).close()
