# router/claude.py
import logging
import time

import anthropic

from autoebook.router.base import BaseModel
from autoebook.router.models import ModelConfig, ModelResponse

logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "claude-haiku-4-5-20251001"
_COOLDOWN_SECONDS = 300
_MAX_OUTPUT_TOKENS = 4096

# Errores que activan failover hacia otro modelo
_RETRYABLE_ERRORS = (
    anthropic.RateLimitError,
    anthropic.APITimeoutError,
    anthropic.APIConnectionError,
)


class ClaudeAdapter(BaseModel):

    def __init__(self, config: ModelConfig):
        self._config = config
        self._tokens_used = 0
        self._client = anthropic.Anthropic(
            api_key = config.api_key,
            timeout = config.timeout_seconds,
        )

    @property
    def name(self) -> str:
        return self._config.name   # "claude"

    def is_available(self) -> bool:
        # Primero: ¿está en cooldown temporal por error de red?
        if self._config._unavailable_until is not None:
            if time.time() < self._config._unavailable_until:
                return False
            self._config._unavailable_until = None  # cooldown expirado

        # Segundo: ¿le queda quota en este proceso?
        return self._tokens_used < self._config.daily_token_limit

    def complete(self, prompt: str) -> ModelResponse:
        try:
            response = self._client.messages.create(
                model       = self._config.model or _DEFAULT_MODEL,
                max_tokens  = _MAX_OUTPUT_TOKENS,
                temperature = self._config.temperature,
                messages    = [{"role": "user", "content": prompt}],
            )
        except _RETRYABLE_ERRORS as e:
            logger.warning("Claude error retryable: %s", e)
            # Cooldown de 5 minutos antes de intentar Claude de nuevo
            self._config._unavailable_until = time.time() + _COOLDOWN_SECONDS
            raise   # ModelCollaborator captura esto y hace failover

        except anthropic.BadRequestError as e:
            # El chunk en sí tiene problemas (ej: contenido bloqueado)
            logger.error("Claude BadRequest en chunk: %s", e)
            raise

        tokens_input  = response.usage.input_tokens
        tokens_output = response.usage.output_tokens
        self._tokens_used += tokens_input + tokens_output

        return ModelResponse(
            text          = response.content[0].text,
            model_used    = self.name,
            tokens_input  = tokens_input,
            tokens_output = tokens_output,
        )
