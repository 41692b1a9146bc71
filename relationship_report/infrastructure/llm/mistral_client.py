import logging
from typing import Optional

from relationship_report.application.errors import ConfigurationError, GenerationError
from relationship_report.application.ports import TextGeneratorPort
from relationship_report.infrastructure.config import Settings


logger = logging.getLogger(__name__)


class MistralTextGenerator(TextGeneratorPort):
    def __init__(self, settings: Settings):
        self.settings = settings
        self._client = None
        self._model = self.settings.mistral_model
        self._init_client()

    def _init_client(self):
        api_key = self.settings.mistral_api_key
        if not api_key:
            logger.error("Mistral API key is missing.")
            self._client = None
            return
        from mistralai import Mistral
        self._client = Mistral(api_key=api_key)

    def generate(
        self,
        prompt: str,
        max_output_tokens: int,
        temperature: float,
        system_prompt: Optional[str] = None,
    ) -> str:
        if not self._client:
            raise ConfigurationError("Server configuration error: Missing API key")
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})
        try:
            response = self._client.chat.complete(
                model=self._model,
                messages=messages,
                max_tokens=max_output_tokens,
                temperature=temperature,
            )
        except Exception as e:
            logger.exception("Mistral chat call failed: %s", e)
            raise GenerationError("Failed to generate analysis", details=str(e)) from e

        if not response or not response.choices:
            raise GenerationError("Failed to generate analysis", details="Mistral returned no choices")

        content = response.choices[0].message.content
        if isinstance(content, list):
            # Content chunks; keep the text parts
            content = "".join(getattr(chunk, "text", "") or "" for chunk in content)
        if not content or not content.strip():
            raise GenerationError("Failed to generate analysis", details="Mistral returned empty content")
        logger.info("Generated %d characters with %s", len(content), self._model)
        return content
