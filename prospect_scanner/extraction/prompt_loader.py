from pathlib import Path

from prospect_scanner.extraction.exceptions import ExtractionError

_DEFAULT_PROMPT_DIR = Path(__file__).parent / "prompts"


def load_prompt_template(path: Path | None = None) -> str:
    """Load the extraction prompt template.

    Args:
        path: Path to the template file. Defaults to the bundled
              extraction_prompt.txt, which expects a ``{phone_prefixes}``
              placeholder.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_prompt.txt"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load prompt template: {exc}") from exc


def load_json_schema(path: Path | None = None) -> str:
    """Load the response JSON schema. Defaults to the bundled extraction_schema.json.

    Raises:
        ExtractionError: if the file cannot be read.
    """
    if path is None:
        path = _DEFAULT_PROMPT_DIR / "extraction_schema.json"
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ExtractionError(f"Failed to load JSON schema: {exc}") from exc
