"""gcloud-inventory CLI - resolve Compute Engine instances as targets.

Reads a JSON parameter object from --params or stdin and prints the result
as JSON on stdout.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys

from .errors import ValidationError
from .resolver import task
from .settings import load_settings


def _read_params(args) -> dict:
    try:
        if args.params:
            with open(args.params, encoding="utf-8") as fh:
                raw = fh.read()
        else:
            raw = sys.stdin.read()
    except OSError as exc:
        raise ValidationError(f"Unable to read parameters: {exc}") from exc
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except ValueError as exc:
        raise ValidationError(f"Unable to parse parameters as JSON: {exc}") from exc


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="gcloud-inventory",
        description="Resolve Google Compute Engine instances into inventory targets",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  echo '{"project": "p", "zone": "us-west1-b", "target_mapping": {"name": "name"}}' | gcloud-inventory
  gcloud-inventory --params params.json --log-level DEBUG
        """,
    )
    parser.add_argument("--params", help="Path to a JSON parameter file (default: stdin)")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level on stderr (env GCLOUD_INVENTORY_LOG_LEVEL, default: WARNING)",
    )
    args = parser.parse_args(argv)

    level = (args.log_level or load_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        params = _read_params(args)
    except ValidationError as exc:
        result = {"_error": exc.to_dict()}
    else:
        result = task(params)

    json.dump(result, sys.stdout)
    sys.stdout.write("\n")
    return 1 if "_error" in result else 0


if __name__ == "__main__":
    sys.exit(main())
