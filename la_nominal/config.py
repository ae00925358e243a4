import glob
import logging
import os
from functools import lru_cache
from typing import Annotated, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator

from la_nominal.errors import RegistryError
from la_nominal.models import KNOWN_TAGS, NumberTantum, Subtitle
from la_nominal.slots import ALL_SLOTS

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.path.join(os.path.dirname(__file__), "data")


# --- Engine options ---

class DeclOptions(BaseModel):
    # keep feminine/neuter slots even when identical to the masculine ones
    populate_all_terminations: bool = False
    # drop the contracted second-declension genitive singular in -ī after -i-
    suppress_old_genitive: bool = False
    # drop the accusative plural in -īs of non-neuter third-declension i-stems
    suppress_non_neuter_i_stem_acc_is: bool = False
    # give third-declension participles only -e, and adjectives only -ī, in the ablative
    suppress_adj_ptc_forms: bool = False


def load_options(path: str) -> DeclOptions:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return DeclOptions(**data)


# --- Ending tables ---

def _check_tags(tags: list[str]) -> list[str]:
    for tag in tags:
        if tag not in KNOWN_TAGS:
            raise ValueError(f"Invalid nominal type '{tag}'")
    return tags


class BaseAsStem2(BaseModel):
    """The matched base doubles as the oblique stem."""
    kind: Literal["base_as_stem2"] = "base_as_stem2"

    def derive(self, base: str, stem2: Optional[str]) -> tuple[str, Optional[str]]:
        return base, base


class ConstantBase(BaseModel):
    """The base is replaced by a fixed lemma (mīlia -> mīlle)."""
    kind: Literal["constant"] = "constant"
    value: str

    def derive(self, base: str, stem2: Optional[str]) -> tuple[str, Optional[str]]:
        return self.value, None


class AppendToBase(BaseModel):
    """A fixed suffix is appended to the base (ill -> ille)."""
    kind: Literal["append"] = "append"
    value: str

    def derive(self, base: str, stem2: Optional[str]) -> tuple[str, Optional[str]]:
        return base + self.value, None


StemDeriver = Annotated[Union[BaseAsStem2, ConstantBase, AppendToBase], Field(discriminator="kind")]


class EndingEntry(BaseModel):
    # a plain suffix, or a regex whose first group is the base
    ending: str
    # when set, stem2 must equal base + stem2_ending for the entry to apply
    stem2_ending: Optional[str] = None
    decl: Optional[str] = None
    tags: list[str] = []
    derive: Optional[StemDeriver] = None

    @field_validator("tags")
    @classmethod
    def check_tags(cls, tags: list[str]) -> list[str]:
        return _check_tags(tags)


class EndingTable(BaseModel):
    decl: Optional[str] = None
    stem2_rule: Optional[Literal["base", "make_stem2"]] = None
    entries: list[EndingEntry]


# --- Irregular paradigms ---

class IrregularParadigm(BaseModel):
    """
    A closed, hand-written paradigm. Forms may use {lemma} for the lemma as written
    and {initial} for its first letter (I/J spellings); categories may use {pos}.
    """
    lemmas: list[str]
    title: Optional[str] = None
    subtitles: list[Subtitle] = []
    forms: dict[str, list[str]]
    notes: dict[str, str] = {}
    voc: bool = True
    footnote: str = ""
    categories: list[str] = []

    @field_validator("forms")
    @classmethod
    def check_slots(cls, forms: dict[str, list[str]]) -> dict[str, list[str]]:
        for slot in forms:
            if slot not in ALL_SLOTS:
                raise ValueError(f"Invalid nominal form {slot}")
        return forms

    def render_forms(self, lemma: str) -> dict[str, list[str]]:
        return {
            slot: [form.replace("{lemma}", lemma).replace("{initial}", lemma[:1]) for form in forms]
            for slot, forms in self.forms.items()
        }

    def render_categories(self, pos: str) -> list[str]:
        return [category.replace("{pos}", pos) for category in self.categories]


class PronounParadigm(BaseModel):
    lemma: str
    aliases: list[str] = []
    pers: Literal[1, 2, 3]
    num: NumberTantum
    forms: dict[str, list[str]]


class DeclensionTables(BaseModel):
    """All declension data shipped as YAML under la_nominal/data."""
    stem2_patterns: list[tuple[str, str]]
    noun_endings: dict[str, EndingTable]
    adjective_endings: dict[str, EndingTable]
    declension_names: dict[str, str]
    irregular_noun_declensions: dict[str, str] = {}
    irregular_noun_tags: dict[str, list[str]] = {}
    irregular_adjective_declensions: dict[str, str] = {}
    irregular_nouns: list[IrregularParadigm] = []
    irregular_adjectives: list[IrregularParadigm] = []
    pronouns: list[PronounParadigm] = []

    @field_validator("irregular_noun_tags")
    @classmethod
    def check_irregular_tags(cls, tags: dict[str, list[str]]) -> dict[str, list[str]]:
        for lemma_tags in tags.values():
            _check_tags(lemma_tags)
        return tags

    def irregular_noun(self, lemma: str) -> IrregularParadigm:
        for paradigm in self.irregular_nouns:
            if lemma in paradigm.lemmas:
                return paradigm
        raise RegistryError(f"Stem {lemma} not recognized.")

    def irregular_adjective(self, lemma: str) -> IrregularParadigm:
        for paradigm in self.irregular_adjectives:
            if lemma in paradigm.lemmas:
                return paradigm
        raise RegistryError(f"Adjective '{lemma}' not recognized")

    def pronoun(self, lemma: Optional[str]) -> PronounParadigm:
        for paradigm in self.pronouns:
            if lemma == paradigm.lemma or (lemma or "") in paradigm.aliases:
                return paradigm
        raise RegistryError(f"Unknown ppron lemma: {lemma}")


class ConfigLoader:
    """Reads every *.yaml file in `data_dir`; each file contributes top-level sections."""

    def __init__(self, data_dir: str = DEFAULT_DATA_DIR):
        self.data_dir = data_dir
        self.tables = self.load(data_dir)

    def load(self, data_dir: str) -> DeclensionTables:
        logger.info(f"📂 Loading declension tables from {data_dir}...")
        sections: dict = {}
        files = sorted(glob.glob(os.path.join(data_dir, "*.yaml")))
        for file in files:
            with open(file, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
            if not data:
                continue
            for section, content in data.items():
                if section in sections:
                    raise ValueError(f"Section '{section}' defined twice (again in {file})")
                sections[section] = content

        # Validate with Pydantic
        tables = DeclensionTables(**sections)
        logger.info(
            f"✅ Loaded {len(tables.noun_endings)} noun and {len(tables.adjective_endings)} "
            f"adjective ending tables, {len(tables.irregular_nouns) + len(tables.irregular_adjectives)} "
            f"irregular paradigms."
        )
        return tables


@lru_cache(maxsize=None)
def load_tables(data_dir: str = DEFAULT_DATA_DIR) -> DeclensionTables:
    return ConfigLoader(data_dir).tables
