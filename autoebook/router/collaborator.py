# router/collaborator.py
import logging

from autoebook.processor.models import ChunkAnalysis, ChunkHints
from autoebook.router.base import AnalysisCollaborator, BaseModel
from autoebook.router.models import ModelResponse
from autoebook.router.prompt_builder import build_chunk_analysis_prompt
from autoebook.router.response_parser import parse_analysis_response

logger = logging.getLogger(__name__)


class AllModelsExhaustedError(Exception):
    """Ningún modelo configurado pudo analizar el chunk (quota, red o cooldown)."""
    pass


class ModelCollaborator(AnalysisCollaborator):
    """
    Colaborador de análisis respaldado por modelos de IA.

    Para cada chunk: prompt → primer modelo disponible por prioridad →
    parser tolerante → ChunkAnalysis. Si el modelo falla por red o rate
    limit se pasa al siguiente; un error de contenido se propaga tal cual,
    porque el mismo chunk fallaría igual en cualquier modelo.
    """

    def __init__(self, models: list[BaseModel]):
        # La lista ya viene ordenada por prioridad desde el config
        if not models:
            raise ValueError("El colaborador necesita al menos un modelo")
        self._models = models

    def analyze_chunk(
        self,
        chunk_text:  str,
        chunk_index: int,
        chunk_count: int,
        hints:       ChunkHints | None = None,
    ) -> ChunkAnalysis:
        prompt   = build_chunk_analysis_prompt(chunk_text, chunk_index, chunk_count, hints)
        response = self._complete(prompt, f"{chunk_index + 1}/{chunk_count}")
        fragment = parse_analysis_response(response.text, response.model_used)

        logger.debug(
            "Chunk %d/%d analizado por %s: %d headings, %d imágenes",
            chunk_index + 1, chunk_count, response.model_used,
            len(fragment.table_of_contents), len(fragment.image_points),
        )
        return fragment

    def available_models(self) -> list[str]:
        return [m.name for m in self._models if m.is_available()]

    # ------------------------------------------------------------------
    # Failover
    # ------------------------------------------------------------------

    def _complete(self, prompt: str, label: str) -> ModelResponse:
        errors: list[str] = []

        for model in self._models:
            if not model.is_available():
                errors.append(f"{model.name}: sin quota o en cooldown")
                continue

            try:
                response = model.complete(prompt)
            except Exception as e:
                if _is_content_error(e):
                    logger.error("Chunk %s rechazado por %s (error de contenido): %s", label, model.name, e)
                    raise
                logger.warning("Chunk %s: %s falló (%s), probando el siguiente modelo", label, model.name, e)
                errors.append(f"{model.name}: {e}")
                continue

            logger.info(
                "Chunk %s | %s | tokens: %d+%d",
                label, model.name, response.tokens_input, response.tokens_output,
            )
            return response

        raise AllModelsExhaustedError(
            f"Ningún modelo pudo analizar el chunk {label}. " + "; ".join(errors)
        )


def _is_content_error(e: Exception) -> bool:
    import anthropic
    import google.api_core.exceptions as google_ex

    return isinstance(e, (anthropic.BadRequestError, google_ex.InvalidArgument, ValueError))
