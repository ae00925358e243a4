import logging
import sys
import xml.etree.ElementTree as ET
from typing import Generator, Optional

import mwparserfromhell

from la_nominal.engine import SUPPORTED_TEMPLATES, LaEngine
from la_nominal.errors import DeclensionError
from la_nominal.models import DeclensionFailure, DeclinedEntry, Dictionary

logger = logging.getLogger(__name__)

MEDIAWIKI_NS = "{http://www.mediawiki.org/xml/export-0.11/}"
LATIN_TEMPLATE_PREFIX = "la-"


class WiktionaryParser:
    """Declines every Latin nominal declension template found in a Wiktionary XML dump."""

    def __init__(self, filepath: str, engine: Optional[LaEngine] = None):
        self.filepath = filepath
        self.engine = engine or LaEngine()

    def stream_pages(self) -> Generator[dict, None, None]:
        """
        Yields pages as dicts: {'title': str, 'text': str}
        """
        context = ET.iterparse(self.filepath, events=("end",))
        for event, elem in context:
            if elem.tag.endswith("page"):
                title = elem.findtext(f"{MEDIAWIKI_NS}title")
                revision = elem.find(f"{MEDIAWIKI_NS}revision")
                text = revision.findtext(f"{MEDIAWIKI_NS}text") if revision is not None else ""

                yield {"title": title or "", "text": text or ""}
                elem.clear()

    @staticmethod
    def declension_templates(text: str) -> list:
        wikicode = mwparserfromhell.parse(text)
        return [t for t in wikicode.filter_templates() if str(t.name).strip() in SUPPORTED_TEMPLATES]

    def process(self, limit: Optional[int] = None) -> Dictionary:
        dictionary = Dictionary()
        count = 0
        total_scanned = 0

        print(f"🚀 Starting ingestion from {self.filepath}...")

        try:
            for page in self.stream_pages():
                if limit and count >= limit:
                    break

                total_scanned += 1
                title = page["title"]
                text = page["text"]

                if total_scanned % 10000 == 0:
                    print(f"DEBUG: Scanned {total_scanned} pages... Current: '{title}'", end='\r')
                    sys.stdout.flush()

                if "{{" + LATIN_TEMPLATE_PREFIX not in text:
                    continue

                for template in self.declension_templates(text):
                    source = str(template)
                    try:
                        declension = self.engine.parse_word(source)
                    except DeclensionError as e:
                        logger.warning(f"⚠️  {title}: {e.message}")
                        dictionary.failures.append(DeclensionFailure(title=title, template=source, error=e.message))
                        continue

                    dictionary.entries.append(DeclinedEntry(title=title, template=source, declension=declension))
                    count += 1
                    if count % 100 == 0:
                        print(f"✅ Processed {count} words...{title}...", end='\r')

        except FileNotFoundError:
            print("⚠️  Wiktionary file not found. Skipping ingestion.")

        return dictionary

    def discover_templates(self, limit: int = 10000) -> dict:
        """
        Scans the dump and counts occurrences of all Latin templates.
        """
        print(f"🕵️  Discovering templates in {self.filepath}...")
        template_counts: dict[str, int] = {}
        count = 0

        try:
            for page in self.stream_pages():
                text = page["text"]
                if "{{" + LATIN_TEMPLATE_PREFIX not in text:
                    continue

                wikicode = mwparserfromhell.parse(text)
                for t in wikicode.filter_templates():
                    name = str(t.name).strip()
                    if name.startswith(LATIN_TEMPLATE_PREFIX):
                        template_counts[name] = template_counts.get(name, 0) + 1

                count += 1
                if count % 1000 == 0:
                    print(f"Scanned {count} pages...", end='\r')
                if count >= limit:
                    break
        except FileNotFoundError:
            print("⚠️  File not found.")

        return template_counts
