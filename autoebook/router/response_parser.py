# router/response_parser.py
import json
import logging
import re
from typing import Any, Optional

from autoebook.processor.models import (
    ChunkAnalysis,
    ContentType,
    DEFAULT_CONTENT_TYPE,
    ImageInsertionPoint,
    ImagePosition,
    ImageType,
    TOCEntry,
)

logger = logging.getLogger(__name__)

# Captura JSON dentro de bloques ```json ... ``` o ``` ... ```
_MARKDOWN_JSON_RE = re.compile(
    r"```(?:json)?\s*(\{.*\})\s*```",
    re.DOTALL,
)

# Captura el primer objeto JSON que aparezca en el texto
_BARE_JSON_RE = re.compile(r"\{.*\}", re.DOTALL)

_DEFAULT_IMAGE_TYPE = ImageType.ILLUSTRATION


def parse_analysis_response(raw_text: str, model_name: str) -> ChunkAnalysis:
    """
    Intenta parsear la respuesta del modelo con degradación progresiva.

    Estrategia:
    1. JSON directo (el camino feliz)
    2. JSON dentro de bloque markdown
    3. Primer objeto JSON en el texto libre
    4. Fragmento vacío (sin TOC ni imágenes, tipo por defecto)

    Nunca lanza excepción: siempre devuelve un ChunkAnalysis válido.
    Las posiciones quedan relativas al chunk.
    """
    text = (raw_text or "").strip()

    # Intento 1: JSON directo
    result = _try_parse(text)
    if result is not None:
        return _validate_and_fill(result)

    # Intento 2: dentro de bloque markdown
    match = _MARKDOWN_JSON_RE.search(text)
    if match:
        result = _try_parse(match.group(1))
        if result is not None:
            logger.warning(
                "%s envolvió la respuesta en markdown — considera reforzar el prompt",
                model_name,
            )
            return _validate_and_fill(result)

    # Intento 3: buscar cualquier objeto JSON en el texto
    match = _BARE_JSON_RE.search(text)
    if match:
        result = _try_parse(match.group(0))
        if result is not None:
            logger.warning("%s devolvió JSON con texto extra alrededor", model_name)
            return _validate_and_fill(result)

    # Intento 4: fragmento vacío
    logger.error(
        "%s devolvió respuesta no parseable. Se usa un fragmento vacío.",
        model_name,
    )
    return ChunkAnalysis.empty()


def _try_parse(text: str) -> Optional[dict]:
    try:
        data = json.loads(text)
        if isinstance(data, dict):
            return data
    except (json.JSONDecodeError, ValueError):
        pass
    return None


def _validate_and_fill(data: dict) -> ChunkAnalysis:
    """
    Convierte el dict del modelo en un ChunkAnalysis con tipos correctos.
    Las entradas mal formadas se descartan; los campos faltantes toman
    defaults seguros.
    """
    toc = [
        entry for entry in (_parse_toc_entry(raw) for raw in _as_list(data.get("tableOfContents")))
        if entry is not None
    ]
    points = [
        point for point in (_parse_image_point(raw) for raw in _as_list(data.get("imagePoints")))
        if point is not None
    ]
    return ChunkAnalysis(
        table_of_contents = toc,
        image_points      = points,
        content_type      = _parse_enum(ContentType, data.get("contentType"), DEFAULT_CONTENT_TYPE),
    )


def _parse_toc_entry(raw: Any) -> Optional[TOCEntry]:
    if not isinstance(raw, dict):
        return None
    title = str(raw.get("title") or "").strip()
    if not title:
        return None
    return TOCEntry(
        id       = "",   # el merger asigna ids deterministas
        title    = title,
        level    = min(6, max(1, _as_int(raw.get("level"), 1))),
        position = max(0, _as_int(raw.get("position"), 0)),
    )


def _parse_image_point(raw: Any) -> Optional[ImageInsertionPoint]:
    if not isinstance(raw, dict):
        return None
    return ImageInsertionPoint(
        id       = "",
        position = ImagePosition(
            section         = str(raw.get("section") or "").strip(),
            after_paragraph = max(0, _as_int(raw.get("afterParagraph"), 0)),
            line_number     = max(0, _as_int(raw.get("lineNumber"), 0)),
        ),
        suggested_type   = _parse_enum(ImageType, raw.get("suggestedType"), _DEFAULT_IMAGE_TYPE),
        context          = str(raw.get("context") or "").strip(),
        generated_prompt = str(raw.get("generatedPrompt") or "").strip(),
    )


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError, OverflowError):
        return default


def _parse_enum(enum_cls, value: Any, default):
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        return default
