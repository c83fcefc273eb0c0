import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from kg_linker.config import LinkerConfig
from kg_linker.errors import LinkingError
from kg_linker.pipeline import MODES, LinkingPipeline


def main():
    parser = argparse.ArgumentParser(description="Link entities to a knowledge graph.")
    parser.add_argument(
        "--config",
        type=str,
        required=True,
        help="Path to linker config JSON file.",
    )
    parser.add_argument(
        "--input",
        type=str,
        nargs="+",
        required=True,
        help="Input file paths.",
    )
    parser.add_argument(
        "--output",
        type=str,
        help="Optional JSONL output path.",
    )
    parser.add_argument(
        "--mode",
        choices=MODES,
        default="text",
        help="'text' links mentions in raw text, 'turtle' resolves placeholder fragments.",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level.",
    )
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())

    config_data = json.loads(Path(args.config).read_text(encoding="utf-8"))
    config = LinkerConfig.from_dict(config_data)

    pipeline = LinkingPipeline(config)
    try:
        results = asyncio.run(pipeline.run(args.input, output_path=args.output, mode=args.mode))
    except LinkingError as exc:
        print(f"error: {exc}", file=sys.stderr)
        sys.exit(1)

    if not args.output:
        for result in results:
            print(json.dumps(result))


if __name__ == "__main__":
    main()
