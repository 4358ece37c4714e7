"""CLI job to run a single business search and print or export the results."""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from localbiz_scout.core.config import ConfigError, Settings, get_settings
from localbiz_scout.core.pipeline import EnrichmentPipeline
from localbiz_scout.etl.export import split_by_website, to_csv
from localbiz_scout.models import BusinessRecord, SearchRequest, SearchValidationError
from localbiz_scout.vendors.google_places import GooglePlacesError

logger = logging.getLogger(__name__)


def run_search_job(
    *,
    location: str,
    category: str,
    limit: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> List[BusinessRecord]:
    search = SearchRequest.from_params(location, category, limit)
    settings = settings or get_settings()
    pipeline = EnrichmentPipeline.from_settings(settings)
    records = pipeline.run(search)

    with_website, without_website = split_by_website(records)
    logger.info(
        "Completed search: total=%d with_website=%d without_website=%d ai=%s",
        len(records),
        len(with_website),
        len(without_website),
        pipeline.ai_status,
    )
    return records


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Find local businesses and enrich them with websites and socials")
    parser.add_argument("--location", dest="location", required=True, help="City or area to search, e.g. 'Austin, TX'")
    parser.add_argument("--category", dest="category", required=True, help="Business category, e.g. 'Bakery'")
    parser.add_argument("--limit", dest="limit", type=int, default=10, help="Maximum number of businesses to return")
    parser.add_argument("--csv", dest="csv_path", help="Write results to this CSV file instead of printing JSON")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        records = run_search_job(location=args.location, category=args.category, limit=args.limit)
    except (ConfigError, SearchValidationError) as exc:
        logger.error("Search not started: %s", exc)
        raise SystemExit(2) from exc
    except GooglePlacesError as exc:
        logger.error("Google Places text search failed: %s details=%s", exc, exc.payload)
        raise SystemExit(1) from exc

    if args.csv_path:
        with_website, without_website = split_by_website(records)
        Path(args.csv_path).write_text(to_csv(with_website, without_website) + "\n", encoding="utf-8")
        logger.info("Wrote %d businesses to %s", len(records), args.csv_path)
        return

    json.dump([record.to_dict() for record in records], sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")


if __name__ == "__main__":
    main()
