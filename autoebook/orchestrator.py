# autoebook/orchestrator.py
import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Optional

from autoebook.analysis.merger import ChunkResultMerger
from autoebook.processor.chunker.chunker import Chunker
from autoebook.processor.models import ChunkAnalysis, ChunkHints, ContentAnalysis
from autoebook.processor.stats import count_words, estimate_pages
from autoebook.processor.toc import extract_table_of_contents
from autoebook.router.base import AnalysisCollaborator

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, int], None]

_DEFAULT_INTER_CALL_DELAY = 0.5   # segundos


# ------------------------------------------------------------------
# Resultado del pipeline, lo que el CLI consume
# ------------------------------------------------------------------

@dataclass
class AnalysisResult:
    analysis:      ContentAnalysis
    was_chunked:   bool
    chunk_count:   int
    failed_chunks: list[int] = field(default_factory=list)


# ------------------------------------------------------------------
# Orchestrator
# ------------------------------------------------------------------

class ManuscriptAnalyzer:
    """
    Dirige el análisis con IA de un manuscrito de extremo a extremo.
    No tiene lógica de negocio propia, coordina módulos.

    Responsabilidades:
    - Decidir si el documento cabe en una llamada o hay que chunkearlo
    - Llamar al colaborador de forma estrictamente secuencial, con pausa
      entre llamadas para respetar el rate limit
    - Manejar errores por chunk sin detener el pipeline
    - Delegar el merge al ChunkResultMerger
    """

    def __init__(
        self,
        collaborator:     AnalysisCollaborator,
        chunker:          Optional[Chunker] = None,
        inter_call_delay: float = _DEFAULT_INTER_CALL_DELAY,
        sleep:            Callable[[float], None] = time.sleep,
    ):
        self._collaborator     = collaborator
        self._chunker          = chunker or Chunker()
        self._inter_call_delay = inter_call_delay
        self._sleep            = sleep

    def analyze(
        self,
        text:        str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AnalysisResult:
        """
        Punto de entrada principal. Asume texto no vacío (lo valida el llamador).
        on_progress(actual, total) se invoca al terminar cada chunk.
        """
        merger = ChunkResultMerger()
        failed: list[int] = []

        if not self._chunker.needs_chunking(text):
            # Documento corto: una sola llamada, sin ContentChunk
            fragment = self._analyze_one(text, 0, 1, None, failed)
            merger.add(fragment, start_line=0)
            self._notify(on_progress, 1, 1)
            was_chunked, total = False, 1

        else:
            chunks = self._chunker.split(text)
            total  = len(chunks)
            was_chunked = True
            self._log(f"Contenido largo: dividido en {total} chunks")

            for chunk in chunks:
                self._log(f"Analizando chunk {chunk.index + 1}/{total}")
                hints = ChunkHints(
                    start_line = chunk.start_line,
                    end_line   = chunk.end_line,
                    is_first   = chunk.is_first,
                    is_last    = chunk.is_last,
                )
                fragment = self._analyze_one(chunk.content, chunk.index, total, hints, failed)
                merger.add(fragment, start_line=chunk.start_line)
                self._notify(on_progress, chunk.index + 1, total)

                # Pausa entre llamadas para no disparar el rate limit
                if not chunk.is_last:
                    self._sleep(self._inter_call_delay)

        merged = merger.merge()
        word_count = count_words(text)

        # Sin headings de la IA: usar la extracción local
        toc = merged.table_of_contents or extract_table_of_contents(text)

        analysis = ContentAnalysis(
            word_count        = word_count,
            estimated_pages   = estimate_pages(word_count),
            content_type      = merged.content_type,
            table_of_contents = toc,
            image_points      = merged.image_points,
        )

        if failed:
            logger.warning("Análisis completado con %d chunks fallidos: %s", len(failed), failed)

        return AnalysisResult(
            analysis      = analysis,
            was_chunked   = was_chunked,
            chunk_count   = total,
            failed_chunks = failed,
        )

    # ------------------------------------------------------------------
    # Helpers privados
    # ------------------------------------------------------------------

    def _analyze_one(
        self,
        content: str,
        index:   int,
        total:   int,
        hints:   Optional[ChunkHints],
        failed:  list[int],
    ) -> ChunkAnalysis:
        """
        Un chunk fallido aporta un fragmento vacío y el pipeline sigue.
        """
        try:
            return self._collaborator.analyze_chunk(content, index, total, hints)
        except Exception as e:
            logger.warning(
                "Error analizando chunk %d/%d: %s: %s",
                index + 1, total, type(e).__name__, e,
            )
            failed.append(index)
            return ChunkAnalysis.empty()

    @staticmethod
    def _notify(on_progress: Optional[ProgressCallback], current: int, total: int) -> None:
        if on_progress is None:
            return
        # un callback roto no detiene ni altera el análisis
        try:
            on_progress(current, total)
        except Exception as e:
            logger.warning("Callback de progreso falló en %d/%d: %s: %s", current, total, type(e).__name__, e)

    @staticmethod
    def _log(message: str) -> None:
        logger.info("[autoebook] %s", message)
