from typing import Any
from urllib.parse import quote

from opensub.constants import ENCODED_PARAM_NAMES, QUERY_PARAM_NAMES


class QueryParams:
    """
    Accumulates search filters and renders them as a REST path segment.

    Segments are ordered by parameter name, so the rendered path does not
    depend on the order in which filters were set.
    """

    def __init__(self) -> None:
        self._params: dict[str, str] = {}

    def set(self, name: str, value: Any) -> "QueryParams":
        """
        Set a search parameter, replacing any previous value.

        Args:
            name: One of the recognized parameter names.
            value: Any value with a string form.

        Returns:
            The builder itself, for chaining.

        Raises:
            ValueError: If the parameter name is not recognized.
        """
        if name not in QUERY_PARAM_NAMES:
            raise ValueError(f"Unknown search parameter: {name}")
        self._params[name] = str(value)
        return self

    def get(self, name: str) -> str | None:
        return self._params.get(name)

    def render(self) -> str:
        """Render the parameters as `name-value` segments joined with slashes."""
        segments = []
        for name in sorted(self._params):
            value = self._params[name]
            if name in ENCODED_PARAM_NAMES:
                value = quote(value, safe="")
            segments.append(f"{name}-{value}")
        return "/".join(segments)

    def __contains__(self, name: object) -> bool:
        return name in self._params

    def __len__(self) -> int:
        return len(self._params)

    def __repr__(self) -> str:
        return f"QueryParams({self._params!r})"


def format_imdb_id(imdb_id: str | int) -> str:
    """Normalize an IMDb id (`tt0133093`, `133093` or 133093) to 7 zero-padded digits."""
    digits = str(imdb_id).strip().lower().removeprefix("tt")
    if not digits.isdigit():
        raise ValueError(f"Invalid IMDb id: {imdb_id}")
    return f"{int(digits):07d}"
