# router/base.py
from abc import ABC, abstractmethod

from autoebook.processor.models import ChunkAnalysis, ChunkHints
from autoebook.router.models import ModelResponse


class BaseModel(ABC):
    """
    Contrato que deben cumplir todos los adaptadores.
    ModelCollaborator solo habla con esta interfaz.
    Nunca importa claude.py ni gemini.py directamente.
    """

    @abstractmethod
    def complete(self, prompt: str) -> ModelResponse:
        """
        Envía el prompt al modelo y devuelve el texto crudo de la respuesta.
        SÍ puede lanzar: errores de red, rate limit, timeout o contenido.
        ModelCollaborator captura los de disponibilidad y hace failover.
        """
        ...

    @abstractmethod
    def is_available(self) -> bool:
        """
        Cooldown y quota del día, sin llamadas de red.
        Si superó el límite → False sin latencia.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Identificador del modelo (coincide con `name` en el config)."""
        ...


class AnalysisCollaborator(ABC):
    """
    Colaborador externo que analiza UN chunk y devuelve un fragmento con
    posiciones relativas al chunk. Puede lanzar cualquier excepción: el
    ManuscriptAnalyzer la absorbe y sustituye el fragmento vacío.
    """

    @abstractmethod
    def analyze_chunk(
        self,
        chunk_text:  str,
        chunk_index: int,
        chunk_count: int,
        hints:       ChunkHints | None = None,
    ) -> ChunkAnalysis:
        ...
