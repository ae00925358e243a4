import pytest

from la_nominal.config import DeclOptions
from la_nominal.errors import ClassificationError
from la_nominal.models import SegmentData
from la_nominal.nouns import (
    NOUN_DECLENSIONS,
    OLD_GENITIVE_NOTE,
    decline_fifth,
    decline_first,
    decline_fourth,
    decline_indeclinable,
    decline_invariable,
    decline_irregular,
    decline_second,
    decline_third,
    extract_stem,
)


@pytest.fixture
def make_data(tables):
    def make(*types, loc=False, num=None, **options):
        return SegmentData(
            pos="nouns",
            types=set(types),
            tables=tables,
            options=DeclOptions(**options),
            loc=loc,
            num=num,
        )
    return make


def test_registry_covers_every_class():
    assert set(NOUN_DECLENSIONS) == {"1", "2", "3", "4", "5", "0", "indecl", "irreg"}


def test_extract_stem():
    assert extract_stem("Paris", "is") == "Par"
    with pytest.raises(ClassificationError):
        extract_stem("Paris", "ōn")


def test_first_declension(make_data):
    data = make_data("F", loc=True)
    decline_first(data, "puell", None)
    assert data.forms["nom_sg"] == ["puella"]
    assert data.forms["gen_pl"] == ["puellārum"]
    assert data.forms["loc_sg"] == ["puellae"]
    assert data.subtitles == []


def test_first_declension_abus(make_data):
    data = make_data("F", "abus")
    decline_first(data, "de", None)
    assert data.forms["dat_pl"] == ["deābus"]
    assert data.subtitles == [("dative/ablative plural in ", "'-ābus'")]


def test_first_declension_greek_masculine(make_data):
    data = make_data("M", "Greek", "Me")
    decline_first(data, "comēt", None)
    assert data.forms["nom_sg"] == ["comētēs"]
    assert data.forms["acc_sg"] == ["comētēn"]
    assert data.subtitles == ["masculine Greek-type with nominative singular in '-ēs'"]


def test_second_declension_er(make_data):
    data = make_data("M", "er")
    decline_second(data, "ager", "agr")
    assert data.forms["nom_sg"] == ["ager"]
    assert data.forms["voc_sg"] == ["ager"]
    assert data.forms["gen_sg"] == ["agrī"]
    assert data.subtitles == ["nominative singular in '-er'"]


def test_second_declension_ium_old_genitive(make_data):
    data = make_data("N", "ium")
    decline_second(data, "ingen", "ingen")
    assert data.forms["gen_sg"] == ["ingeniī", "ingenī"]
    assert data.notes == {"gen_sg2": OLD_GENITIVE_NOTE}
    assert data.forms["nom_pl"] == ["ingenia"]


def test_second_declension_suppressed_old_genitive(make_data):
    data = make_data("M", "ius", suppress_old_genitive=True)
    decline_second(data, "fīl", "fīl")
    assert data.forms["gen_sg"] == ["fīliī"]
    assert data.forms["voc_sg"] == ["fīlie"]
    assert data.notes == {}


def test_second_declension_vocative_in_i(make_data):
    data = make_data("M", "ius", "voci")
    decline_second(data, "Aurēl", "Aurēl")
    assert data.forms["voc_sg"] == ["Aurēlī"]


def test_second_declension_contracted_genitive_plural(make_data):
    data = make_data("M", "er", "genplum")
    decline_second(data, "faber", "fabr")
    assert data.forms["gen_pl"] == ["fabrōrum", "fabrum"]
    assert data.notes["gen_pl2"] == "Contraction found in poetry."
    assert ("contracted", " genitive plural") in data.subtitles


def test_third_declension_consonant_stem(make_data):
    data = make_data()
    decline_third(data, "rēx", "rēg")
    assert data.forms["nom_sg"] == ["rēx"]
    assert data.forms["gen_sg"] == ["rēgis"]
    assert data.forms["gen_pl"] == ["rēgum"]
    assert data.subtitles == []


def test_third_declension_i_stem(make_data):
    data = make_data("I")
    decline_third(data, "cīvis", "cīv")
    assert data.forms["gen_pl"] == ["cīvium"]
    assert data.forms["acc_pl"] == ["cīvēs", "cīvīs"]
    assert data.subtitles == ["i-stem"]


def test_third_declension_i_stem_without_acc_is(make_data):
    data = make_data("I", suppress_non_neuter_i_stem_acc_is=True)
    decline_third(data, "cīvis", "cīv")
    assert data.forms["acc_pl"] == ["cīvēs"]


def test_third_declension_i_stem_subtypes(make_data):
    data = make_data("I", "acc_im_em", "abl_i_e")
    decline_third(data, "turris", "turr")
    assert data.forms["acc_sg"] == ["turrim", "turrem"]
    assert data.forms["abl_sg"] == ["turrī", "turre"]
    assert data.subtitles == [
        "i-stem",
        "accusative singular in '-im' or '-em'",
        "ablative singular in '-ī' or '-e'",
    ]


def test_third_declension_pure_neuter(make_data):
    data = make_data("N", "I", "pure", loc=True)
    decline_third(data, "mare", "mar")
    assert data.forms["acc_sg"] == ["mare"]
    assert data.forms["abl_sg"] == ["marī"]
    assert data.forms["nom_pl"] == ["maria"]
    assert data.forms["loc_sg"] == ["marī"]
    assert data.subtitles == ["neuter", "“pure” i-stem"]


def test_third_declension_greek_vocative(make_data):
    data = make_data("Greek")
    decline_third(data, "Paris", "Parid")
    assert data.forms["gen_sg"] == ["Paridos"]
    assert data.forms["acc_sg"] == ["Parida"]
    assert data.forms["voc_sg"] == ["Paris", "Pari"]
    assert data.notes["voc_sg2"] == "In poetry."


def test_third_declension_parisyllabic_naming(make_data):
    data = make_data("not_I")
    decline_third(data, "canis", "can")
    assert data.subtitles == ["parisyllabic non-i-stem"]


def test_fourth_declension(make_data):
    data = make_data("M", loc=True)
    decline_fourth(data, "man", None)
    assert data.forms["gen_sg"] == ["manūs"]
    assert data.forms["loc_sg"] == ["manū"]


def test_fourth_declension_ubus_and_neuter(make_data):
    data = make_data("M", "ubus")
    decline_fourth(data, "lac", None)
    assert data.forms["dat_pl"] == ["lacubus"]

    data = make_data("N")
    decline_fourth(data, "corn", None)
    assert data.forms["nom_sg"] == ["cornū"]
    assert data.forms["nom_pl"] == ["cornua"]


def test_fifth_declension(make_data):
    data = make_data("F")
    decline_fifth(data, "r", None)
    assert data.forms["gen_sg"] == ["reī"]

    data = make_data("F", "i")
    decline_fifth(data, "d", None)
    assert data.forms["nom_sg"] == ["diēs"]
    assert data.forms["gen_sg"] == ["diēī"]


def test_invariable(make_data):
    data = make_data()
    decline_invariable(data, "nihil", None)
    assert data.forms["gen_pl"] == ["nihil"]
    assert "loc_sg" not in data.forms


def test_indeclinable(make_data):
    data = make_data()
    decline_indeclinable(data, "fās", None)
    assert data.forms["nom_sg"] == ["fās"]
    assert data.forms["acc_sg"] == ["fās"]
    assert data.forms["gen_sg"] == ["-"]
    assert data.num == "sg"
    assert data.title.startswith("Not declined")


def test_irregular(make_data):
    data = make_data()
    decline_irregular(data, "bōs", None)
    assert data.forms["dat_pl"] == ["bōbus", "būbus"]
    assert data.title is None

    data = make_data()
    decline_irregular(data, "cherub", None)
    assert data.title == "mostly indeclinable"
    assert data.subtitles == ["with a distinct plural"]
