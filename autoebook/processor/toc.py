# processor/toc.py
import html
import re

from .models import TOCEntry

_MARKDOWN_HEADING_RE = re.compile(r'^(#{1,6})\s+(.+)$')

# \w cubre letras y dígitos de cualquier escritura; el guion bajo se elimina aparte
_SLUG_STRIP_RE = re.compile(r'[^\w\s-]|_')
_WHITESPACE_RE = re.compile(r'\s+')
_HYPHEN_RUN_RE = re.compile(r'-+')


def generate_slug(title: str) -> str:
    """'Capítulo 1: El Inicio' -> 'capítulo-1-el-inicio'"""
    slug = _SLUG_STRIP_RE.sub('', title.casefold())
    slug = _WHITESPACE_RE.sub('-', slug.strip())
    return _HYPHEN_RUN_RE.sub('-', slug).strip('-')


class HeadingIdGenerator:
    """
    Genera ids estables y únicos para headings dentro de un documento.

    La primera aparición de un título usa 'heading-<slug>'; las repeticiones
    añaden un contador ('heading-<slug>-1', '-2'...). Un título sin slug
    utilizable usa el ordinal del heading. Cualquier sitio que renderice
    anclas debe usar esta misma clase para que TOC y anclas coincidan.
    """

    def __init__(self):
        self._used: set[str] = set()
        self._occurrences: dict[str, int] = {}
        self._count = 0

    def next_id(self, title: str) -> str:
        ordinal = self._count
        self._count += 1

        base = f"heading-{generate_slug(title) or ordinal}"
        seen = self._occurrences.get(base, 0)
        candidate = base if seen == 0 else f"{base}-{seen}"

        while candidate in self._used:
            seen += 1
            candidate = f"{base}-{seen}"

        self._occurrences[base] = seen + 1
        self._used.add(candidate)
        return candidate


def extract_table_of_contents(markdown: str) -> list[TOCEntry]:
    """
    Recorre solo headings markdown, línea a línea, en orden de documento.
    position es el número de línea en base 1.
    """
    ids = HeadingIdGenerator()
    toc: list[TOCEntry] = []

    for index, line in enumerate(markdown.split("\n")):
        match = _MARKDOWN_HEADING_RE.match(line)
        if not match:
            continue
        title = match.group(2).strip()
        toc.append(TOCEntry(
            id=ids.next_id(title),
            title=title,
            level=len(match.group(1)),
            position=index + 1,
        ))

    return toc


def anchor_headings(markdown: str) -> str:
    """
    Sustituye cada heading markdown por su equivalente HTML con id,
    usando la misma derivación de ids que extract_table_of_contents.
    """
    ids = HeadingIdGenerator()
    lines = markdown.split("\n")

    for index, line in enumerate(lines):
        match = _MARKDOWN_HEADING_RE.match(line)
        if not match:
            continue
        level = len(match.group(1))
        title = match.group(2).strip()
        lines[index] = f'<h{level} id="{ids.next_id(title)}">{html.escape(title)}</h{level}>'

    return "\n".join(lines)
