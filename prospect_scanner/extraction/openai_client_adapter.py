import httpx
import openai

from prospect_scanner.extraction.client_base import BaseExtractionClient
from prospect_scanner.extraction.exceptions import ExtractionError, ExtractionNetworkError


def image_data_url(image_base64: str, mime_type: str) -> str:
    return f"data:{mime_type};base64,{image_base64}"


class OpenAIClientAdapter(BaseExtractionClient):
    """Extraction client built on the OpenAI-compatible chat API with image input."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
    ) -> None:
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
        )

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
        messages: list[dict[str, object]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append(
            {
                "role": "user",
                "content": [
                    {
                        "type": "image_url",
                        "image_url": {"url": image_data_url(image_base64, mime_type)},
                    },
                    {"type": "text", "text": user_prompt},
                ],
            }
        )
        try:
            response = self._client.chat.completions.create(
                model=model,
                temperature=temperature,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "prospect_list",
                        "strict": True,
                        "schema": json_schema,
                    },
                },
                messages=messages,
            )
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ExtractionNetworkError(
                f"AI provider network error: {exc}"
            ) from exc
        except openai.APIError as exc:
            raise ExtractionNetworkError(
                f"AI provider API error: {exc}"
            ) from exc

        if not response.choices:
            raise ExtractionError("AI returned no choices")
        content = response.choices[0].message.content
        if content is None:
            raise ExtractionError("AI returned empty response")
        return content
