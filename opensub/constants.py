"""Constants used throughout the application."""

# OpenSubtitles REST search endpoint
OPENSUBTITLES_BASE_URL = "https://rest.opensubtitles.org"
OPENSUBTITLES_SEARCH_URL = f"{OPENSUBTITLES_BASE_URL}/search"

# The API rejects requests without a recognizable X-User-Agent header
DEFAULT_USER_AGENT = "TemporaryUserAgent"
USER_AGENT_HEADER = "X-User-Agent"

# Default configuration values
DEFAULT_CONFIG_PATH = "config.yaml"
DEFAULT_LANGUAGE = "eng"
DEFAULT_RESULT_LIMIT = 5
DEFAULT_TIMEOUT = 30
DEFAULT_RETRIES = 1
DEFAULT_BACKOFF_FACTOR = 2

# Search parameters understood by the REST search endpoint
QUERY_PARAM_NAMES = frozenset(
    {
        "episode",
        "imdbid",
        "moviebytesize",
        "moviehash",
        "query",
        "season",
        "sublanguageid",
        "tag",
    }
)

# Free-text parameters that must be percent-encoded in the path
ENCODED_PARAM_NAMES = frozenset({"query", "tag"})

# Fields every search result must carry
RESULT_FIELDS = ("IDSubtitleFile", "SubFileName", "MovieReleaseName", "MovieName", "SubDownloadLink")

# Movie hash block size (first and last 64 KiB of the file)
MOVIE_HASH_CHUNK_SIZE = 65536
