import argparse
import os
import sys
from pathlib import Path
from typing import Optional

from la_nominal.config import DeclOptions, load_options
from la_nominal.engine import LaEngine
from la_nominal.errors import DeclensionError
from la_nominal.logging_config import setup_logging
from la_nominal.wiktionary import WiktionaryParser

DEFAULT_DUMP = "enwiktionary-latest-pages-articles.xml"
DEFAULT_OUTPUT = "declensions.json"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="la-nominal",
        description="Decline Latin nouns, adjectives and pronouns from Wiktionary templates.",
    )
    parser.add_argument("template", nargs="?", help="a single template, e.g. '{{la-ndecl|puer<2>}}'")
    parser.add_argument("--dump", default=DEFAULT_DUMP, help="Wiktionary XML dump to ingest")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="where the declined dump is written")
    parser.add_argument("--limit", type=int, default=None, help="stop after this many declensions")
    parser.add_argument("--discover", action="store_true", help="count the Latin templates used in the dump")
    parser.add_argument("--options", help="YAML file with declension options")
    parser.add_argument("--populate-all-terminations", action="store_true",
                        help="keep feminine/neuter columns identical to the masculine one")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    options = load_options(args.options) if args.options else DeclOptions()
    if args.populate_all_terminations:
        options = options.model_copy(update={"populate_all_terminations": True})
    engine = LaEngine(options)

    # 1. Single template
    if args.template:
        try:
            data = engine.parse_word(args.template)
        except DeclensionError as e:
            print(f"❌ {e.message}", file=sys.stderr)
            return 1
        print(data.model_dump_json(indent=2))
        return 0

    print("🏭 Latin nominal pipeline: declining dump...")
    if not os.path.exists(args.dump):
        print("❌ Dump not found.")
        return 1
    parser = WiktionaryParser(args.dump, engine)

    # 2. Template discovery
    if args.discover:
        counts = parser.discover_templates(limit=args.limit or 50000)
        print("\n📊 Template Statistics:")
        # Sort by frequency
        sorted_counts = sorted(counts.items(), key=lambda x: x[1], reverse=True)
        for name, count in sorted_counts:
            print(f"{count:5d} : {name}")
        return 0

    # 3. Full ingestion
    dictionary = parser.process(limit=args.limit)
    output_path = Path(args.output)
    with open(output_path, "w", encoding="utf-8") as f:
        f.write(dictionary.model_dump_json(indent=2))

    print(f"\n✅ Exported {len(dictionary.entries)} declensions "
          f"({len(dictionary.failures)} failed) to {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
