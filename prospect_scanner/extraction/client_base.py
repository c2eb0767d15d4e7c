from abc import ABC, abstractmethod


class BaseExtractionClient(ABC):
    """Contract for provider-specific multimodal AI clients."""

    @abstractmethod
    def create_completion(
        self,
        *,
        model: str,
        temperature: float,
        system_prompt: str,
        user_prompt: str,
        image_base64: str,
        mime_type: str,
        json_schema: dict[str, object],
    ) -> str:
        """Send one image with instructions; return the provider response as text."""
