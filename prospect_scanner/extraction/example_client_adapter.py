"""Offline extraction client.

Handy for trying the command line without credentials and as a template
for new provider adapters: implement BaseExtractionClient and register the
provider in ExtractorFactory.
"""

import json
from typing import ClassVar

from prospect_scanner.extraction.client_base import BaseExtractionClient


class ExampleClientAdapter(BaseExtractionClient):
    """Returns one fixed prospect for every image. No network calls."""

    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "prospects": [
            {
                "Name": "Jane Example",
                "PhoneNumber": "01712345678",
                "Company": "Example Trading",
                "Email": "jane@example.com",
                "Address": "1 Example Road, Dhaka",
            }
        ]
    }

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
        _ = model, temperature, system_prompt, user_prompt, image_base64, mime_type, json_schema
        return json.dumps(self.DEFAULT_RESPONSE)
