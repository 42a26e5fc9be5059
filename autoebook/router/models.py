# router/models.py
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ModelResponse:
    text:          str
    model_used:    str
    tokens_input:  int
    tokens_output: int


@dataclass
class ModelConfig:
    """
    Configuración de un modelo individual.
    Se carga desde ~/.autoebook/config.yaml.
    """
    name:              str
    priority:          int
    daily_token_limit: int
    api_key:           Optional[str] = None
    model:             Optional[str] = None   # None = modelo por defecto del adaptador
    timeout_seconds:   int = 120
    temperature:       float = 0.2

    # Control de cooldown temporal (no viene del YAML, es runtime)
    _unavailable_until: Optional[float] = field(
        default=None, compare=False, repr=False
    )


@dataclass
class AnalysisSettings:
    """Sección `analysis:` del config."""
    inter_call_delay: float = 0.5   # segundos entre llamadas consecutivas (rate limit)
