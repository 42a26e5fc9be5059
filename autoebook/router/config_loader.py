# router/config_loader.py
import os
from pathlib import Path
from typing import Optional

import yaml

from autoebook.router.models import AnalysisSettings, ModelConfig

_DEFAULT_CONFIG_PATH = Path.home() / ".autoebook" / "config.yaml"


def resolve_config_path(config_path: Optional[str] = None) -> Path:
    return Path(config_path or os.environ.get("AUTOEBOOK_CONFIG_PATH") or _DEFAULT_CONFIG_PATH)


def load_model_configs(config_path: Optional[str] = None) -> list[ModelConfig]:
    """
    Carga la configuración de modelos desde YAML.
    Resuelve variables de entorno en los api_key (${VAR}).
    Devuelve la lista ordenada por prioridad ascendente.
    """
    raw = _read_config(resolve_config_path(config_path))

    configs = []
    for entry in raw.get("models") or []:
        configs.append(ModelConfig(
            name              = entry["name"],
            priority          = entry.get("priority", 99),
            daily_token_limit = entry.get("daily_token_limit", 1_000_000),
            api_key           = _resolve_env(entry.get("api_key")),
            model             = entry.get("model"),
            timeout_seconds   = entry.get("timeout_seconds", 120),
            temperature       = entry.get("temperature", 0.2),
        ))

    return sorted(configs, key=lambda c: c.priority)


def load_analysis_settings(config_path: Optional[str] = None) -> AnalysisSettings:
    """Sección opcional `analysis:`. Sin ella, los valores por defecto."""
    raw = _read_config(resolve_config_path(config_path))
    section = raw.get("analysis") or {}
    return AnalysisSettings(
        inter_call_delay = float(section.get("inter_call_delay", AnalysisSettings.inter_call_delay)),
    )


def _read_config(path: Path) -> dict:
    if not path.exists():
        raise FileNotFoundError(
            f"Config no encontrada en {path}. "
            f"Copia config.example.yaml a ~/.autoebook/config.yaml"
        )

    with path.open(encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _resolve_env(value: Optional[str]) -> Optional[str]:
    """Expande ${VAR_NAME} desde el entorno."""
    if not value or not value.startswith("${"):
        return value
    var_name = value.strip("${}").strip()
    return os.environ.get(var_name)
