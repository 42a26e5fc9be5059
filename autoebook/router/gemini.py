# router/gemini.py
import logging
import time

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions

from autoebook.router.base import BaseModel
from autoebook.router.models import ModelConfig, ModelResponse

logger = logging.getLogger(__name__)

_DEFAULT_MODEL = "gemini-2.0-flash"
_COOLDOWN_SECONDS = 300

_RETRYABLE_ERRORS = (
    google_exceptions.ResourceExhausted,   # 429
    google_exceptions.DeadlineExceeded,    # timeout
    google_exceptions.ServiceUnavailable,
)


class GeminiAdapter(BaseModel):

    def __init__(self, config: ModelConfig):
        self._config = config
        self._tokens_used = 0
        genai.configure(api_key=config.api_key)
        self._model = genai.GenerativeModel(
            model_name        = config.model or _DEFAULT_MODEL,
            generation_config = genai.GenerationConfig(
                temperature        = config.temperature,
                response_mime_type = "application/json",   # Gemini soporta forzar JSON nativo
            ),
        )

    @property
    def name(self) -> str:
        return self._config.name   # "gemini"

    def is_available(self) -> bool:
        if self._config._unavailable_until is not None:
            if time.time() < self._config._unavailable_until:
                return False
            self._config._unavailable_until = None

        return self._tokens_used < self._config.daily_token_limit

    def complete(self, prompt: str) -> ModelResponse:
        try:
            response = self._model.generate_content(
                prompt,
                request_options={"timeout": self._config.timeout_seconds},
            )
        except _RETRYABLE_ERRORS as e:
            logger.warning("Gemini error retryable: %s", e)
            self._config._unavailable_until = time.time() + _COOLDOWN_SECONDS
            raise

        # Gemini devuelve tokens en usage_metadata
        tokens_input  = response.usage_metadata.prompt_token_count
        tokens_output = response.usage_metadata.candidates_token_count
        self._tokens_used += tokens_input + tokens_output

        return ModelResponse(
            text          = response.text,
            model_used    = self.name,
            tokens_input  = tokens_input,
            tokens_output = tokens_output,
        )
