# chunker/chunker.py
import logging
import math
import re
from typing import Optional

from .models import ChunkConfig
from ..models import ContentChunk

logger = logging.getLogger(__name__)

_MARKDOWN_HEADING_RE = re.compile(r'^#{1,6}\s')


class Chunker:
    """
    Divide un manuscrito en chunks solapados con offsets de línea absolutos.

    Acumula líneas en un buffer; cuando la siguiente línea haría superar
    chunk_size, cierra el chunk. Antes de cerrar busca hacia atrás, en el último
    tramo del buffer, una línea vacía o un heading markdown para cortar ahí.
    El chunk siguiente arranca con las últimas líneas del anterior (overlap)
    más la línea que disparó el corte.
    """

    def __init__(self, config: ChunkConfig | None = None):
        self._config = config or ChunkConfig()

    @property
    def config(self) -> ChunkConfig:
        return self._config

    def needs_chunking(self, text: str) -> bool:
        return len(text) > self._config.chunk_size

    def split(self, text: str) -> list[ContentChunk]:
        lines = text.split("\n")
        chunks: list[ContentChunk] = []

        buffer: list[str] = []
        buffer_length = 0
        buffer_start = 0
        seeded = 0   # líneas del buffer que vienen del overlap del chunk anterior

        for i, line in enumerate(lines):
            line_length = len(line) + 1   # +1 por el salto de línea

            # un buffer solo de blancos sigue acumulando: nunca se emite vacío
            if buffer_length + line_length > self._config.chunk_size and _has_content(buffer):
                split_index = self._find_split_index(buffer, seeded)

                chunks.append(ContentChunk(
                    index=len(chunks),
                    content="\n".join(buffer[:split_index]),
                    start_line=buffer_start,
                    end_line=buffer_start + split_index - 1,
                    is_first=not chunks,
                    is_last=False,
                ))

                buffer = seed_overlap(buffer, split_index, self._config.overlap_lines, line)
                seeded = len(buffer) - 1
                buffer_start = i - seeded
                buffer_length = _measure(buffer)
            else:
                buffer.append(line)
                buffer_length += line_length

        # cerrar el último chunk; una cola de blancos se suma al anterior
        if buffer and chunks and not _has_content(buffer):
            _absorb_tail(chunks[-1], buffer, buffer_start, len(lines) - 1)
        elif buffer:
            chunks.append(ContentChunk(
                index=len(chunks),
                content="\n".join(buffer),
                start_line=buffer_start,
                end_line=len(lines) - 1,
                is_first=not chunks,
                is_last=True,
            ))

        logger.debug("Documento de %d líneas dividido en %d chunks", len(lines), len(chunks))
        return chunks

    def _find_split_index(self, buffer: list[str], seeded: int) -> int:
        """
        Devuelve cuántas líneas del buffer entran en el chunk que se cierra.
        Solo mira el último search_window del buffer y nunca corta dentro del
        overlap heredado: el chunk siempre aporta al menos una línea nueva.
        Tampoco acepta un corte que deje el chunk solo con líneas en blanco.
        """
        lower = max(math.floor(len(buffer) * (1 - self._config.search_window)), seeded)

        for j in range(len(buffer) - 1, lower - 1, -1):
            candidate = buffer[j]
            if not candidate.strip() or _MARKDOWN_HEADING_RE.match(candidate):
                if _has_content(buffer[:j + 1]):
                    return j + 1
                break

        # sin buen punto de corte: cortar en el umbral exacto
        return len(buffer)


def seed_overlap(
    closed: list[str],
    split_index: int,
    overlap_lines: int,
    trigger_line: str,
) -> list[str]:
    """
    Construye el buffer inicial del siguiente chunk a partir del cerrado.
    Transformación pura: no muta `closed`.

    Conserva las líneas posteriores al punto de corte (no entraron en el chunk)
    más `overlap_lines` líneas anteriores como contexto, y añade la línea que
    disparó el corte.
    """
    keep_from = max(split_index - overlap_lines, 0)
    return [*closed[keep_from:], trigger_line]


def _measure(lines: list[str]) -> int:
    return sum(len(line) + 1 for line in lines)


def _has_content(lines: list[str]) -> bool:
    return any(line.strip() for line in lines)


def _absorb_tail(last: ContentChunk, buffer: list[str], buffer_start: int, end_line: int) -> None:
    """Extiende el último chunk emitido con las líneas en blanco que faltan por cubrir."""
    pending = buffer[last.end_line + 1 - buffer_start:]
    if pending:
        last.content = "\n".join([last.content, *pending])
    last.end_line = end_line
    last.is_last = True


# ------------------------------------------------------------------
# Atajos con la configuración por defecto
# ------------------------------------------------------------------

def needs_chunking(text: str, config: Optional[ChunkConfig] = None) -> bool:
    return Chunker(config).needs_chunking(text)


def split_into_chunks(text: str, config: Optional[ChunkConfig] = None) -> list[ContentChunk]:
    return Chunker(config).split(text)
