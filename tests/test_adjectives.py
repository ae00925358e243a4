import pytest

from la_nominal.adjectives import (
    ADJECTIVE_DECLENSIONS,
    I_ANCEPS,
    decline_comparative,
    decline_first_second,
    decline_indeclinable,
    decline_irregular,
    decline_participle,
    decline_third_one,
    decline_third_three,
    decline_third_two,
    singularize,
)
from la_nominal.config import DeclOptions
from la_nominal.errors import ClassificationError
from la_nominal.models import SegmentData


@pytest.fixture
def make_data(tables):
    def make(*types, gender=None, **options):
        return SegmentData(
            pos="adjectives",
            types=set(types),
            tables=tables,
            options=DeclOptions(**options),
            gender=gender,
        )
    return make


@pytest.mark.parametrize("plural,singular", [
    ("adjectives", "adjective"),
    ("pronouns", "pronoun"),
    ("suffixes", "suffix"),
    ("participles", "participle"),
])
def test_singularize(plural, singular):
    assert singularize(plural) == singular


def test_registry_covers_every_class():
    assert set(ADJECTIVE_DECLENSIONS) == {"0", "1&2", "1-1", "2-2", "3-1", "3-C", "3-P", "3-2", "3-3", "irreg"}


def test_first_second(make_data):
    data = make_data()
    decline_first_second(data, "bon", "bon")
    assert data.title == "first/second-declension adjective"
    assert data.forms["nom_sg_m"] == ["bonus"]
    assert data.forms["nom_sg_f"] == ["bona"]
    assert data.forms["gen_sg_f"] == ["bonae"]
    assert data.categories == ["Latin first and second declension adjectives"]


def test_first_second_title_follows_noun_gender(make_data):
    data = make_data(gender="F")
    decline_first_second(data, "bon", "bon")
    assert data.title == "first-declension adjective"
    data = make_data(gender="N")
    decline_first_second(data, "bon", "bon")
    assert data.title == "second-declension adjective"


def test_first_second_er(make_data):
    data = make_data("er")
    decline_first_second(data, "pulcher", "pulchr")
    assert data.forms["nom_sg_m"] == ["pulcher"]
    assert data.forms["voc_sg_m"] == ["pulcher"]
    assert data.forms["nom_sg_f"] == ["pulchra"]
    assert data.subtitles == ["nominative masculine singular in '-er'"]


def test_first_second_bad_r_stem(make_data):
    with pytest.raises(ClassificationError):
        decline_first_second(make_data("er"), "pulchar", "pulchr")


def test_first_second_pronominal(make_data):
    data = make_data("ius")
    decline_first_second(data, "tōt", "tōt")
    assert data.forms["gen_sg_f"] == ["tōt" + I_ANCEPS + "us"]
    assert data.forms["dat_sg_n"] == ["tōtī"]
    assert data.subtitles == ["pronominal"]


def test_first_second_hic(make_data):
    data = make_data("ic")
    decline_first_second(data, "h", "h")
    assert data.forms["nom_sg_m"] == ["hic"]
    assert data.forms["nom_sg_f"] == ["haec"]
    assert data.forms["nom_sg_n"] == ["hoc"]
    assert data.forms["abl_sg_f"] == ["hāc"]
    assert not data.voc


def test_first_second_meus_vocative(make_data):
    data = make_data()
    decline_first_second(data, "me", "me")
    assert data.forms["voc_sg_m"] == ["mī"]


def test_third_one(make_data):
    data = make_data("I")
    decline_third_one(data, "audāx", "audāc")
    assert data.title == "third-declension one-termination adjective"
    assert data.forms["nom_sg_n"] == ["audāx"]
    assert data.forms["gen_sg_m"] == ["audācis"]
    assert data.forms["nom_pl_n"] == ["audācia"]
    assert "nom_sg_f" not in data.forms


def test_third_one_non_i_stem(make_data):
    data = make_data("par")
    decline_third_one(data, "vetus", "veter")
    assert data.forms["abl_sg_m"] == ["vetere"]
    assert data.forms["gen_pl_m"] == ["veterum"]
    assert data.subtitles == ["non-i-stem"]


def test_comparative(make_data):
    data = make_data()
    decline_comparative(data, "mai", None)
    assert data.title == "third-declension comparative adjective"
    assert data.forms["nom_sg_m"] == ["maior"]
    assert data.forms["nom_sg_n"] == ["maius"]
    assert data.forms["gen_sg_m"] == ["maiōris"]
    assert data.forms["nom_pl_n"] == ["maiōra"]
    assert data.subtitles == []


def test_participle_ablative_variants(make_data):
    data = make_data()
    decline_participle(data, "neglegēns", "neglegent")
    assert data.title == "third-declension participle"
    assert data.forms["abl_sg_m"] == ["neglegente", "neglegentī"]
    assert data.notes["abl_sg_m2"] == "When used purely as an adjective."
    assert data.forms["acc_pl_m"] == ["neglegentēs", "neglegentīs"]


@pytest.mark.parametrize("types,ablative", [((), "neglegentī"), (("ptc",), "neglegente")])
def test_participle_suppressed_forms(make_data, types, ablative):
    data = make_data(*types, suppress_adj_ptc_forms=True)
    decline_participle(data, "neglegēns", "neglegent")
    assert data.forms["abl_sg_m"] == [ablative]
    assert data.forms["abl_sg_n"] == [ablative]
    assert "abl_sg_m2" not in data.notes


def test_third_two(make_data):
    data = make_data()
    decline_third_two(data, "fort", "fort")
    assert data.title == "third-declension two-termination adjective"
    assert data.forms["nom_sg_n"] == ["forte"]
    assert data.forms["acc_pl_m"] == ["fortēs", "fortīs"]
    assert "nom_sg_f" not in data.forms


def test_third_three(make_data):
    data = make_data()
    decline_third_three(data, "ācer", "ācr")
    assert data.title == "third-declension three-termination adjective"
    assert data.forms["nom_sg_m"] == ["ācer"]
    assert data.forms["nom_sg_f"] == ["ācris"]
    assert data.forms["nom_sg_n"] == ["ācre"]


def test_indeclinable(make_data):
    data = make_data()
    decline_indeclinable(data, "nēquam", None)
    assert data.title == "indeclinable adjective"
    assert data.forms["gen_pl_m"] == ["nēquam"]
    assert data.categories == ["Latin indeclinable adjectives"]


def test_demonstrative(make_data):
    data = make_data()
    decline_irregular(data, "ille", None)
    assert data.title == "demonstrative pronoun"
    assert data.forms["nom_sg_m"] == ["ille"]
    assert data.forms["nom_sg_f"] == ["illa"]
    assert data.forms["nom_sg_n"] == ["illud"]
    assert data.forms["gen_sg_m"] == ["ill" + I_ANCEPS + "us"]
    assert not data.voc
    assert data.categories == []


def test_irregular_from_tables(make_data):
    data = make_data()
    decline_irregular(data, "duo", None)
    assert data.title == "numeral"
    assert data.forms["acc_pl_m"] == ["duōs", "duo"]
    assert data.footnote.startswith("Note: The genitive")
