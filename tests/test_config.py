import pytest
from pydantic import ValidationError

from la_nominal.config import (
    AppendToBase,
    BaseAsStem2,
    ConfigLoader,
    ConstantBase,
    EndingEntry,
    IrregularParadigm,
    load_options,
)
from la_nominal.errors import RegistryError

MINIMAL_TABLES = """
stem2_patterns:
  - ["is", ""]
noun_endings:
  "1":
    entries:
      - {ending: "a", tags: ["F"]}
adjective_endings:
  "1&2":
    decl: "1&2"
    entries:
      - {ending: "us"}
declension_names:
  "1": "first"
"""


def test_bundled_tables_load(tables):
    assert set(tables.noun_endings) >= {"1", "2", "3-neuter", "3-non-neuter", "3-greek", "4", "5"}
    assert tables.declension_names["3"] == "third"
    assert tables.irregular_noun_declensions["domus"] == "4,2"


def test_loader_reads_every_yaml_file(tmp_path):
    (tmp_path / "tables.yaml").write_text(MINIMAL_TABLES, encoding="utf-8")
    (tmp_path / "empty.yaml").write_text("", encoding="utf-8")
    tables = ConfigLoader(str(tmp_path)).tables
    assert tables.stem2_patterns == [("is", "")]
    assert tables.noun_endings["1"].entries[0].tags == ["F"]
    assert tables.irregular_nouns == []


def test_loader_rejects_duplicate_sections(tmp_path):
    (tmp_path / "a.yaml").write_text(MINIMAL_TABLES, encoding="utf-8")
    (tmp_path / "b.yaml").write_text('declension_names:\n  "2": "second"\n', encoding="utf-8")
    with pytest.raises(ValueError, match="defined twice"):
        ConfigLoader(str(tmp_path))


def test_ending_entry_rejects_unknown_tag():
    with pytest.raises(ValidationError):
        EndingEntry(ending="a", tags=["F", "bogus"])


def test_irregular_paradigm_rejects_unknown_slot():
    with pytest.raises(ValidationError):
        IrregularParadigm(lemmas=["x"], forms={"nom_sg": ["x"], "ins_sg": ["y"]})


def test_irregular_paradigm_renders_placeholders():
    paradigm = IrregularParadigm(
        lemmas=["Iēsus"],
        forms={"nom_sg": ["{lemma}"], "gen_sg": ["{initial}ēsū"]},
        categories=["Latin irregular {pos}"],
    )
    assert paradigm.render_forms("Jēsus") == {"nom_sg": ["Jēsus"], "gen_sg": ["Jēsū"]}
    assert paradigm.render_categories("nouns") == ["Latin irregular nouns"]


def test_irregular_lookups(tables):
    assert tables.irregular_noun("bōs").forms["gen_pl"] == ["boum"]
    assert tables.irregular_adjective("duo").title == "numeral"
    with pytest.raises(RegistryError):
        tables.irregular_noun("puella")
    with pytest.raises(RegistryError):
        tables.irregular_adjective("bonus")


def test_pronoun_lookup(tables):
    assert tables.pronoun(None).lemma == "ego"
    assert tables.pronoun("").lemma == "ego"
    assert tables.pronoun("vōs").pers == 2
    with pytest.raises(RegistryError):
        tables.pronoun("hic")


def test_stem_derivers():
    assert BaseAsStem2().derive("fort", None) == ("fort", "fort")
    assert ConstantBase(value="mīlle").derive("mīlia", None) == ("mīlle", None)
    assert AppendToBase(value="e").derive("ill", None) == ("ille", None)


def test_load_options(tmp_path):
    path = tmp_path / "options.yaml"
    path.write_text("populate_all_terminations: true\nsuppress_old_genitive: true\n", encoding="utf-8")
    options = load_options(str(path))
    assert options.populate_all_terminations
    assert options.suppress_old_genitive
    assert not options.suppress_adj_ptc_forms


def test_load_options_empty_file(tmp_path):
    path = tmp_path / "options.yaml"
    path.write_text("", encoding="utf-8")
    assert not load_options(str(path)).populate_all_terminations
