"""AI-powered contact extraction from page images."""

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from prospect_scanner.extraction.base import BaseExtractor
from prospect_scanner.extraction.client_base import BaseExtractionClient
from prospect_scanner.extraction.exceptions import ExtractionError
from prospect_scanner.extraction.prompt_loader import load_json_schema, load_prompt_template
from prospect_scanner.logging.logger import Log
from prospect_scanner.session.models import Prospect

DEFAULT_PHONE_PREFIXES = ("017", "018", "019", "016", "013", "014", "015")


class Extractor(BaseExtractor):
    """Extracts prospects from an image using a multimodal AI provider."""

    def __init__(
        self,
        *,
        client: BaseExtractionClient,
        model: str,
        temperature: float = 0.1,
        phone_prefixes: Sequence[str] = DEFAULT_PHONE_PREFIXES,
        prompt_template_path: Path | None = None,
        json_schema_path: Path | None = None,
        system_prompt: str = "",
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = max(0.0, min(0.2, temperature))
        self._system_prompt = system_prompt
        self._prompt = load_prompt_template(prompt_template_path).format(
            phone_prefixes=", ".join(phone_prefixes)
        )
        self._json_schema = json.loads(load_json_schema(json_schema_path))

    @property
    def prompt(self) -> str:
        return self._prompt

    def extract(self, image_base64: str, mime_type: str) -> list[Prospect]:
        raw_response = self._client.create_completion(
            model=self._model,
            temperature=self._temperature,
            system_prompt=self._system_prompt,
            user_prompt=self._prompt,
            image_base64=image_base64,
            mime_type=mime_type,
            json_schema=self._json_schema,
        )
        Log.debug(f"AI raw response:\n{raw_response}")

        items = self._parse_items(raw_response)
        prospects = [Prospect.from_dict(item) for item in items if isinstance(item, dict)]
        Log.info(f"Extraction complete: {len(prospects)} prospects")
        return prospects

    @staticmethod
    def _parse_items(raw: str) -> list[Any]:
        """Return the list of raw entries; absent output means no entries."""
        cleaned = raw.strip()
        if cleaned.startswith("```"):
            lines = cleaned.splitlines()
            if lines and lines[0].startswith("```"):
                lines = lines[1:]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            cleaned = "\n".join(lines).strip()
        if not cleaned:
            return []

        try:
            parsed = json.loads(cleaned)
        except json.JSONDecodeError as exc:
            raise ExtractionError(f"Invalid JSON response: {exc}") from exc

        if isinstance(parsed, dict):
            parsed = parsed.get("prospects")
        if parsed is None:
            return []
        if not isinstance(parsed, list):
            raise ExtractionError("JSON response must be a list of prospects")
        return parsed
