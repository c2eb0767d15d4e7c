"""Tests for the Extractor (AI-powered prospect extraction)."""

import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest

from prospect_scanner.extraction.exceptions import ExtractionError, ExtractionNetworkError
from prospect_scanner.extraction.extractor import Extractor
from prospect_scanner.session.models import Prospect


def _make_extractor(client: MagicMock | None = None, **kwargs: object) -> Extractor:
    if client is None:
        client = MagicMock()
    return Extractor(client=client, model="test-model", **kwargs)  # type: ignore[arg-type]


def _mock_ai_response(client: MagicMock, content: str) -> None:
    client.create_completion.return_value = content


def _prospects_json(*entries: dict[str, object]) -> str:
    return json.dumps({"prospects": list(entries)})


ALICE = {
    "Name": "Alice",
    "PhoneNumber": "01712345678",
    "Company": "Acme",
    "Email": "alice@acme.com",
    "Address": "Dhaka",
}


class TestExtractSuccess:
    def test_returns_prospects(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _prospects_json(ALICE, {"Name": "Bob"}))

        result = _make_extractor(client).extract("aGVsbG8=", "image/png")

        assert result == [
            Prospect("Alice", "01712345678", "Acme", "alice@acme.com", "Dhaka"),
            Prospect(name="Bob"),
        ]

    def test_accepts_bare_list(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, json.dumps([ALICE]))
        result = _make_extractor(client).extract("x", "image/png")
        assert [p.name for p in result] == ["Alice"]

    def test_strips_markdown_fences(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, "```json\n" + _prospects_json(ALICE) + "\n```")
        result = _make_extractor(client).extract("x", "image/png")
        assert len(result) == 1

    def test_passes_image_and_schema_to_client(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _prospects_json())
        extractor = _make_extractor(client)

        extractor.extract("aGVsbG8=", "image/jpeg")

        kwargs = client.create_completion.call_args.kwargs
        assert kwargs["model"] == "test-model"
        assert kwargs["image_base64"] == "aGVsbG8="
        assert kwargs["mime_type"] == "image/jpeg"
        assert kwargs["user_prompt"] == extractor.prompt
        assert kwargs["json_schema"]["required"] == ["prospects"]

    def test_clamps_temperature(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, _prospects_json())
        _make_extractor(client, temperature=0.9).extract("x", "image/png")
        assert client.create_completion.call_args.kwargs["temperature"] == 0.2

    def test_prompt_lists_phone_prefixes(self) -> None:
        extractor = _make_extractor(phone_prefixes=["017", "018"])
        assert "017, 018" in extractor.prompt
        assert "{phone_prefixes}" not in extractor.prompt

    def test_custom_prompt_template(self, tmp_path: Path) -> None:
        template = tmp_path / "prompt.txt"
        template.write_text("Only {phone_prefixes}")
        extractor = _make_extractor(prompt_template_path=template, phone_prefixes=["019"])
        assert extractor.prompt == "Only 019"


class TestExtractNoRecords:
    @pytest.mark.parametrize(
        "content",
        ["", "   ", "null", "{}", '{"prospects": null}', '{"prospects": []}', "[]"],
    )
    def test_absent_output_is_empty_list(self, content: str) -> None:
        client = MagicMock()
        _mock_ai_response(client, content)
        assert _make_extractor(client).extract("x", "image/png") == []

    def test_skips_non_object_items(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, json.dumps({"prospects": [ALICE, "noise", 3]}))
        assert len(_make_extractor(client).extract("x", "image/png")) == 1


class TestExtractErrors:
    def test_invalid_json_raises(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, "not json at all")
        with pytest.raises(ExtractionError, match="Invalid JSON"):
            _make_extractor(client).extract("x", "image/png")

    def test_wrong_shape_raises(self) -> None:
        client = MagicMock()
        _mock_ai_response(client, json.dumps({"prospects": "Alice"}))
        with pytest.raises(ExtractionError, match="list of prospects"):
            _make_extractor(client).extract("x", "image/png")

    def test_client_errors_propagate(self) -> None:
        client = MagicMock()
        client.create_completion.side_effect = ExtractionNetworkError("down")
        with pytest.raises(ExtractionNetworkError, match="down"):
            _make_extractor(client).extract("x", "image/png")
