# processor/preprocessor.py
import re
from dataclasses import dataclass

from .headings.classifier import classify_heading, is_markdown_heading
from .headings.patterns import SCRIPT_CHARS


@dataclass(frozen=True)
class PreprocessOptions:
    auto_line_break: bool = True       # partir líneas largas por oraciones
    detect_chapters: bool = True       # convertir headings detectados a markdown
    remove_extra_spaces: bool = True   # compactar espacios y líneas en blanco
    fix_punctuation: bool = True       # normalizar espacios alrededor de la puntuación


# Umbrales del re-flujo de líneas
_WRAP_THRESHOLD = 80
_MIN_SEGMENT_LENGTH = 40

_SENTENCE_ENDINGS = frozenset(".!?。！？")
_ABBREVIATIONS = ("Mr", "Mrs", "Ms", "Dr", "Prof", "Inc", "Ltd", "etc", "vs")
_ABBREVIATION_LOOKBEHIND = 10

_INTERIOR_SPACES_RE = re.compile(r'([^\n]) {2,}')
_TRAILING_SPACES_RE = re.compile(r'[ \t]+(?=\n|$)')
_EXCESS_BLANK_LINES_RE = re.compile(r'\n{4,}')

_MISSING_SPACE_RE = re.compile(rf'([.!?])([A-Z{SCRIPT_CHARS}])')
_SPACE_BEFORE_PUNCT_RE = re.compile(r'[ \t]+([,.])')
_SCRIPT_PERIOD_RE = re.compile(rf'([{SCRIPT_CHARS}])\.([{SCRIPT_CHARS}])')

_HEADING_BLOCK_RE = re.compile(r'\n*^(#{1,6}[ \t]+\S[^\n]*)$\n*', re.MULTILINE)
_LEADING_NEWLINES_RE = re.compile(r'^\n+')
_FINAL_BLANK_CAP_RE = re.compile(r'\n{4,}')


def preprocess_content(text: str, options: PreprocessOptions | None = None) -> str:
    """
    Normaliza el texto crudo de un manuscrito.

    El orden de las pasadas importa: espacios y puntuación antes del re-flujo
    (la detección de fin de oración necesita espacios normalizados), y el
    formateo de headings después (una línea re-fluida nunca se parte a mitad
    de heading). Al final siempre se normaliza el espaciado alrededor de los
    headings markdown.
    """
    options = options or PreprocessOptions()

    result = normalize_line_endings(text)

    if options.remove_extra_spaces:
        result = compact_whitespace(result)

    if options.fix_punctuation:
        result = fix_punctuation(result)

    if options.auto_line_break:
        result = wrap_long_lines(result)

    if options.detect_chapters:
        result = format_headings(result)

    return normalize_heading_spacing(result)


# ------------------------------------------------------------------
# Pasadas individuales
# ------------------------------------------------------------------

def normalize_line_endings(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def compact_whitespace(text: str) -> str:
    # Colapsa espacios internos (la sangría al inicio de línea se respeta)
    text = _INTERIOR_SPACES_RE.sub(r'\1 ', text)
    text = _TRAILING_SPACES_RE.sub('', text)
    # Como máximo dos líneas en blanco seguidas
    return _EXCESS_BLANK_LINES_RE.sub('\n\n\n', text)


def fix_punctuation(text: str) -> str:
    text = _MISSING_SPACE_RE.sub(r'\1 \2', text)
    text = _SPACE_BEFORE_PUNCT_RE.sub(r'\1', text)
    return _SCRIPT_PERIOD_RE.sub(r'\1. \2', text)


def wrap_long_lines(text: str) -> str:
    processed: list[str] = []

    for line in text.split("\n"):
        trimmed = line.strip()

        if not trimmed or len(trimmed) <= _WRAP_THRESHOLD:
            processed.append(line)
            continue

        # Los headings nunca se parten
        if classify_heading(trimmed).is_heading:
            processed.append(line)
            continue

        processed.extend(split_sentences(trimmed))

    return "\n".join(processed)


def split_sentences(line: str) -> list[str]:
    """
    Recorre la línea carácter a carácter y corta en cada fin de oración
    una vez que el segmento acumulado alcanza _MIN_SEGMENT_LENGTH.
    """
    segments: list[str] = []
    current: list[str] = []

    for pos, char in enumerate(line):
        if not current and char.isspace():
            continue
        current.append(char)

        if len(current) >= _MIN_SEGMENT_LENGTH and is_sentence_end(line, pos):
            segments.append("".join(current).strip())
            current = []

    tail = "".join(current).strip()
    if tail:
        segments.append(tail)
    return segments


def is_sentence_end(text: str, pos: int) -> bool:
    if text[pos] not in _SENTENCE_ENDINGS:
        return False

    following = text[pos + 1:pos + 2]
    if following and not following.isspace():
        return False

    preceding = text[max(0, pos - _ABBREVIATION_LOOKBEHIND):pos]
    return not preceding.endswith(_ABBREVIATIONS)


def format_headings(text: str) -> str:
    lines = text.split("\n")
    formatted: list[str] = []
    prev_empty = True

    for line in lines:
        trimmed = line.strip()

        # la pasada final deja una línea en blanco después de todo heading markdown
        if is_markdown_heading(trimmed):
            formatted.append(line)
            prev_empty = True
            continue

        if trimmed and prev_empty and not trimmed.startswith("#"):
            heading = classify_heading(trimmed)
            if heading.is_heading:
                formatted.extend(["", f"{'#' * heading.level} {heading.title}", ""])
                prev_empty = True
                continue

        formatted.append(line)
        prev_empty = not trimmed

    return "\n".join(formatted)


def normalize_heading_spacing(text: str) -> str:
    text = _HEADING_BLOCK_RE.sub(lambda m: f"\n\n{m.group(1)}\n\n", text)
    text = _LEADING_NEWLINES_RE.sub('', text)
    return _FINAL_BLANK_CAP_RE.sub('\n\n\n', text)
