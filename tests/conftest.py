from xml.sax.saxutils import escape

import pytest

from la_nominal.classifier import EndingClassifier
from la_nominal.composer import Composer
from la_nominal.config import DeclOptions, load_tables
from la_nominal.engine import LaEngine
from la_nominal.nominal import LaNominal
from la_nominal.parser import SegmentParser


@pytest.fixture(scope="session")
def tables():
    """The bundled YAML declension tables, loaded once."""
    return load_tables()


@pytest.fixture
def classifier(tables):
    return EndingClassifier(tables)


@pytest.fixture
def parser(classifier, tables):
    return SegmentParser(classifier, tables)


@pytest.fixture
def composer(tables):
    return Composer(tables, DeclOptions())


@pytest.fixture
def nominal(tables):
    return LaNominal(tables=tables)


@pytest.fixture
def engine(tables):
    return LaEngine(tables=tables)


DUMP_PAGES = {
    "puella": "==Latin==\n===Noun===\n{{la-noun|puella<1>}}\n====Declension====\n{{la-ndecl|puella<1>}}",
    "bonus": "==Latin==\n===Adjective===\n{{la-adecl|bonus}}",
    "broken": "{{la-ndecl|puella<4>}}",
    "English": "{{en-noun}}",
}


@pytest.fixture
def dump(tmp_path):
    """A small MediaWiki export with two declinable pages, a failing one and a non-Latin one."""
    body = "".join(
        f"<page><title>{escape(title)}</title><revision><text>{escape(text)}</text></revision></page>"
        for title, text in DUMP_PAGES.items()
    )
    path = tmp_path / "dump.xml"
    path.write_text(
        f'<mediawiki xmlns="http://www.mediawiki.org/xml/export-0.11/">{body}</mediawiki>',
        encoding="utf-8",
    )
    return str(path)
