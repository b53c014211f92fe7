import argparse
import sys
from collections.abc import Sequence
from dataclasses import replace
from typing import NoReturn

from opensub.cli import parse_args
from opensub.client import SearchClient
from opensub.config import Settings, load_settings
from opensub.errors import (
    ConfigError,
    HttpStatusError,
    MovieHashError,
    OpenSubError,
    ResponseFormatError,
    TransportError,
    UrlBuildError,
)
from opensub.hashing import compute_movie_hash
from opensub.output import print_results
from opensub.query import QueryParams, format_imdb_id
from opensub.utils import get_logger, log, setup_logging

logger = get_logger(__name__)

# Message prefix per failure kind, so each is distinguishable on stderr
ERROR_MESSAGES: dict[type[OpenSubError], str] = {
    UrlBuildError: "❌ Не удалось построить URL поиска",
    TransportError: "❌ Ошибка сети",
    HttpStatusError: "❌ Сервер вернул ошибку",
    ResponseFormatError: "❌ Некорректный ответ сервера",
    ConfigError: "❌ Ошибка в файле конфигурации",
    MovieHashError: "❌ Не удалось вычислить хэш файла",
}


def build_query(args: argparse.Namespace, settings: Settings) -> QueryParams:
    """Collects the search filters from the parsed arguments."""
    params = QueryParams().set("query", args.query)

    if args.number:
        season, episode = args.number
        params.set("season", season).set("episode", episode)

    params.set("sublanguageid", settings.language)

    if args.imdb:
        params.set("imdbid", format_imdb_id(args.imdb))

    if args.tag:
        params.set("tag", args.tag)

    if args.file:
        movie_hash, movie_size = compute_movie_hash(args.file)
        logger.debug("Movie hash of %s: %s (%d bytes)", args.file, movie_hash, movie_size)
        params.set("moviehash", movie_hash).set("moviebytesize", movie_size)

    return params


def resolve_settings(args: argparse.Namespace) -> Settings:
    """Applies command-line overrides on top of the config file settings."""
    settings = load_settings(args.config)
    if args.language:
        settings = replace(settings, language=args.language)
    if args.limit:
        settings = replace(settings, limit=args.limit)
    return settings


def run(argv: Sequence[str] | None = None) -> int:
    """Runs one search and returns the process exit code."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        settings = resolve_settings(args)
        query_path = build_query(args, settings).render()

        log(f"🔍 Поиск субтитров: {query_path}", err=True)
        with SearchClient(
            user_agent=settings.user_agent,
            timeout=settings.timeout,
            retries=settings.retries,
        ) as client:
            results = client.search(query_path)
    except OpenSubError as e:
        prefix = ERROR_MESSAGES.get(type(e), "❌ Ошибка")
        log(f"{prefix}: {e}", err=True)
        return 1
    except ValueError as e:
        log(f"❌ Некорректный аргумент: {e}", err=True)
        return 1

    if not results:
        log("⚠️ Субтитры не найдены.", err=True)
        return 0

    shown = print_results(results, settings.limit)
    log(f"✅ Показано {shown} из {len(results)}.", err=True)
    return 0


def main() -> NoReturn:
    """The main entry point of the script."""
    try:
        sys.exit(run())
    except KeyboardInterrupt:
        log("🛑 Получен сигнал завершения. Выход.", err=True)
        sys.exit(130)
