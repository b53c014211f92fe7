from dataclasses import dataclass
from typing import Any

from opensub.constants import RESULT_FIELDS


@dataclass(frozen=True)
class SearchResult:
    """Represents a single subtitle listing."""

    file_id: str
    file_name: str
    release_name: str
    movie_name: str
    download_link: str

    @classmethod
    def from_api(cls, item: dict[str, Any]) -> "SearchResult":
        """
        Build a result from one element of the search response.

        Unknown fields are ignored; null values become empty strings.

        Raises:
            KeyError: If a required field is missing.
        """
        file_id, file_name, release_name, movie_name, download_link = (
            "" if item[field] is None else str(item[field]) for field in RESULT_FIELDS
        )
        return cls(
            file_id=file_id,
            file_name=file_name,
            release_name=release_name,
            movie_name=movie_name,
            download_link=download_link,
        )
