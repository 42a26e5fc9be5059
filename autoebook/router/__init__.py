from autoebook.router.base import AnalysisCollaborator, BaseModel
from autoebook.router.collaborator import AllModelsExhaustedError, ModelCollaborator
from autoebook.router.models import AnalysisSettings, ModelConfig, ModelResponse
from autoebook.router.prompt_builder import build_chunk_analysis_prompt, build_document_analysis_prompt
from autoebook.router.config_loader import load_analysis_settings, load_model_configs

__all__ = [
    "AllModelsExhaustedError",
    "AnalysisCollaborator",
    "BaseModel",
    "ModelCollaborator",
    "AnalysisSettings",
    "ModelConfig",
    "ModelResponse",
    "build_chunk_analysis_prompt",
    "build_document_analysis_prompt",
    "load_analysis_settings",
    "load_model_configs",
]
