# processor/readability.py
import re
from dataclasses import dataclass

from .headings.classifier import classify_heading
from .models import ReadabilityReport

_LONG_LINE_LENGTH = 200
_LONG_LINE_RATIO = 0.3
_LONG_LINE_PENALTY = 20

_HEADINGLESS_MIN_LENGTH = 3000
_HEADINGLESS_PENALTY = 15

_AVG_LINE_LENGTH_LIMIT = 150
_AVG_LINE_PENALTY = 15

_SPACE_RUN_RE = re.compile(r'  +')
_SPACE_RUN_LIMIT = 20
_SPACE_RUN_PENALTY = 10


@dataclass
class ReadabilityComparison:
    original: ReadabilityReport
    processed: ReadabilityReport

    @property
    def improvement(self) -> int:
        return self.processed.score - self.original.score


def analyze_readability(text: str) -> ReadabilityReport:
    """
    Heurística superficial de legibilidad estructural (0-100).
    Cada penalización es independiente y aporta como mucho un par
    problema/sugerencia. No es un análisis lingüístico.
    """
    report = ReadabilityReport()

    lines = text.split("\n")
    non_empty = [line for line in lines if line.strip()]

    # Líneas muy largas (texto sin saltos)
    long_lines = [line for line in non_empty if len(line) > _LONG_LINE_LENGTH]
    if len(long_lines) > len(non_empty) * _LONG_LINE_RATIO:
        _penalize(
            report, _LONG_LINE_PENALTY,
            f"Se detectaron {len(long_lines)} líneas muy largas",
            "Activa el salto de línea automático",
        )

    # Documento largo sin ningún heading
    has_headings = any(classify_heading(line).is_heading for line in lines)
    if not has_headings and len(text) > _HEADINGLESS_MIN_LENGTH:
        _penalize(
            report, _HEADINGLESS_PENALTY,
            "No se detectaron capítulos ni títulos",
            "Activa la detección de capítulos",
        )

    # Falta de separación en párrafos
    if non_empty:
        avg_length = sum(len(line) for line in non_empty) / len(non_empty)
        if avg_length > _AVG_LINE_LENGTH_LIMIT:
            _penalize(
                report, _AVG_LINE_PENALTY,
                "Faltan separaciones entre párrafos",
                "Mejora la legibilidad con el salto de línea automático",
            )

    # Espacios sobrantes
    if len(_SPACE_RUN_RE.findall(text)) > _SPACE_RUN_LIMIT:
        _penalize(
            report, _SPACE_RUN_PENALTY,
            "Hay demasiados espacios innecesarios",
            "Activa la eliminación de espacios",
        )

    report.score = max(0, report.score)
    return report


def compare_readability(original_text: str, processed_text: str) -> ReadabilityComparison:
    """Antes/después del preprocesado, para informar de la mejora."""
    return ReadabilityComparison(
        original=analyze_readability(original_text),
        processed=analyze_readability(processed_text),
    )


def _penalize(report: ReadabilityReport, penalty: int, issue: str, suggestion: str) -> None:
    report.issues.append(issue)
    report.suggestions.append(suggestion)
    report.score -= penalty
