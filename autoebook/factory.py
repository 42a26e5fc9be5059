# autoebook/factory.py
import logging
from typing import Optional

from autoebook.orchestrator import ManuscriptAnalyzer
from autoebook.processor.chunker.chunker import Chunker
from autoebook.processor.chunker.models import ChunkConfig
from autoebook.router.claude import ClaudeAdapter
from autoebook.router.collaborator import ModelCollaborator
from autoebook.router.config_loader import load_analysis_settings, load_model_configs
from autoebook.router.gemini import GeminiAdapter

logger = logging.getLogger(__name__)


CHUNK_PRESETS: dict[str, dict] = {
    "compact":  {"chunk_size": 4000,  "overlap": 250},
    "standard": {"chunk_size": 8000,  "overlap": 500},
    "large":    {"chunk_size": 16000, "overlap": 1000},
}


def build_chunk_config(chunk_size: str = "standard") -> ChunkConfig:
    preset = CHUNK_PRESETS.get(chunk_size, CHUNK_PRESETS["standard"])
    return ChunkConfig(**preset)


def build_analyzer(
    config_path: Optional[str] = None,
    chunk_size:  str           = "standard",
) -> ManuscriptAnalyzer:
    """
    Ensambla el ManuscriptAnalyzer con todas sus dependencias.
    Punto de entrada único para el CLI y los tests de integración.

    chunk_size: "compact" | "standard" | "large", tamaño de chunk en caracteres.
    """
    models   = _build_models(config_path)
    settings = load_analysis_settings(config_path)

    return ManuscriptAnalyzer(
        collaborator     = ModelCollaborator(models),
        chunker          = Chunker(build_chunk_config(chunk_size)),
        inter_call_delay = settings.inter_call_delay,
    )


def _build_models(config_path: Optional[str]) -> list:
    """
    Carga el config y construye los adaptadores disponibles.
    Si un adaptador no tiene api_key configurada, lo omite.
    """
    configs  = load_model_configs(config_path)
    adapters = {
        "claude": ClaudeAdapter,
        "gemini": GeminiAdapter,
    }
    models = []

    for config in configs:
        adapter_class = adapters.get(config.name)
        if not adapter_class:
            logger.warning("Modelo desconocido en el config: %s", config.name)
            continue
        if not config.api_key:
            logger.warning("%s: sin api_key, omitiendo", config.name)
            continue
        models.append(adapter_class(config))

    if not models:
        raise RuntimeError(
            "Ningún modelo configurado. "
            "Revisa ~/.autoebook/config.yaml y tus variables de entorno."
        )

    return models
