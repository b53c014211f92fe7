from collections.abc import Sequence

from opensub.constants import DEFAULT_RESULT_LIMIT
from opensub.types import SearchResult


def format_result(result: SearchResult) -> str:
    return f"{result.release_name} : {result.download_link}"


def print_results(results: Sequence[SearchResult], limit: int = DEFAULT_RESULT_LIMIT) -> int:
    """Prints up to `limit` results in order and returns how many were printed."""
    shown = results[: max(0, limit)]
    for result in shown:
        print(format_result(result))
    return len(shown)
