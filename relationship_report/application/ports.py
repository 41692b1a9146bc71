from typing import Optional, Protocol

from relationship_report.application.schemas import NotificationPayload


class TextGeneratorPort(Protocol):
    def generate(
        self,
        prompt: str,
        max_output_tokens: int,
        temperature: float,
        system_prompt: Optional[str] = None,
    ) -> str:
        """
        Sends a single prompt (with an optional system message) and returns the raw generated text.
        Raises GenerationError (or ConfigurationError) on failure.
        """
        ...


class NotifierPort(Protocol):
    def notify(self, payload: NotificationPayload) -> bool:
        ...
