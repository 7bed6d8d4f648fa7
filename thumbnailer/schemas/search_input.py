"""Search input schema for the inputs JSON file.

The inputs file is a JSON array of search definitions:

    [
        {"SearchQuery": "red panda", "MaxImages": 10},
        {
            "SearchQuery": "snow leopard",
            "MaxImages": 2,
            "ImageUrls": ["https://example.com/a.png", "https://example.com/b.jpg"]
        }
    ]

``ImageUrls`` is the pre-extracted URL list for the search; the pipeline
consumes it as-is and never scrapes search result pages itself.
"""

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from thumbnailer.exceptions import ConfigurationError


class SearchInput(BaseModel):
    """One search definition from the inputs file.

    Attributes:
        search_query: Free-text search query (e.g., "red panda")
        max_images: Upper bound on images processed for this search
        image_urls: Candidate image URLs collected for the search
    """

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    search_query: str = Field(alias="SearchQuery", min_length=1)
    max_images: int = Field(alias="MaxImages", ge=0)
    image_urls: list[str] = Field(default_factory=list, alias="ImageUrls")


_search_inputs_adapter = TypeAdapter(list[SearchInput])


def load_search_inputs(path: Path | str) -> list[SearchInput]:
    """Load and validate search inputs from a JSON file.

    Args:
        path: Path to the inputs JSON file

    Returns:
        List of SearchInput in file order.

    Raises:
        ConfigurationError: If the file is missing, not valid JSON, or does
            not match the schema.
    """
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise ConfigurationError(f"Inputs file not found: {path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError(f"Cannot read inputs file {path}: {e}") from e

    try:
        return _search_inputs_adapter.validate_python(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid inputs file {path}: {e}") from e
