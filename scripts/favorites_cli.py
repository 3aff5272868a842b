import argparse
import json
import sys

from pydantic import ValidationError

from movieshelf.config import get_settings
from movieshelf.constants import ADDED_MESSAGE, REMOVED_MESSAGE
from movieshelf.runtime import build_catalog_client, build_favorites_store, build_search_aggregator, configure_logging
from movieshelf.schemas import FavoriteRecord
from movieshelf.services.errors import ServiceError


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect and edit the movie favorites file")
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="List favorites page by page")
    list_cmd.add_argument("--page", type=int, default=1)
    list_cmd.add_argument("--page-size", type=int, default=None)

    add_cmd = commands.add_parser("add", help="Add a favorite")
    add_cmd.add_argument("--title", required=True)
    add_cmd.add_argument("--imdb-id", required=True)
    add_cmd.add_argument("--year", type=int, required=True)
    add_cmd.add_argument("--poster", default="N/A")

    remove_cmd = commands.add_parser("remove", help="Remove a favorite by IMDb ID")
    remove_cmd.add_argument("imdb_id")

    search_cmd = commands.add_parser("search", help="Search the catalog, flagging favorites")
    search_cmd.add_argument("query")
    search_cmd.add_argument("--page", type=int, default=1)
    return parser.parse_args(argv)


def run(args: argparse.Namespace) -> dict:
    settings = get_settings()
    store = build_favorites_store(settings)

    if args.command == "list":
        result = store.list(args.page, args.page_size or settings.favorites_page_size)
        return {
            "favorites": [record.to_json() for record in result.items],
            "count": result.count,
            "totalResults": str(result.window.total_items),
            "currentPage": result.window.current_page,
            "totalPages": result.window.total_pages,
        }
    if args.command == "add":
        record = FavoriteRecord(title=args.title, external_id=args.imdb_id, year=args.year, poster_url=args.poster)
        store.add(record)
        return {"message": ADDED_MESSAGE}
    if args.command == "remove":
        store.remove(args.imdb_id)
        return {"message": REMOVED_MESSAGE}

    aggregator = build_search_aggregator(settings, build_catalog_client(settings), store)
    results = aggregator.search_with_favorites(args.query, args.page)
    return {
        "movies": [item.model_dump(by_alias=True) for item in results.items],
        "count": results.count,
        "totalResults": str(results.total_results),
        "currentPage": results.current_page,
        "totalPages": results.total_pages,
        "hasNextPage": results.has_next_page,
    }


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    configure_logging(get_settings())
    try:
        payload = run(args)
    except ServiceError as exc:
        print(json.dumps({"error": exc.to_detail()}), file=sys.stderr)
        return 1
    except ValidationError as exc:
        print(json.dumps({"error": {"kind": "invalid_argument", "message": str(exc)}}), file=sys.stderr)
        return 1
    print(json.dumps({"data": payload}, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
