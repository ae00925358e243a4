import re
from typing import Callable, Optional

from la_nominal.errors import ClassificationError
from la_nominal.models import SegmentData
from la_nominal.nouns import inflect

AdjectiveGenerator = Callable[[SegmentData, str, Optional[str]], None]

# i + combining breve over the macron: the vowel is found both long and short
I_ANCEPS = "\u012b\u0306"

GREEK_SHORT_ENDING_NOTE = (
    "It is unknown if Classical Latin preserved (or would have preserved) "
    "the shortness of the original Greek short ending."
)

DEMONSTRATIVES = {"ille": "ill", "iste": "ist", "ipse": "ips"}
DEMONSTRATIVE_NEUTERS = {"ille": "illud", "iste": "istud", "ipse": "ipsum"}


def singularize(plural: str) -> str:
    """adjectives -> adjective, determiners -> determiner, ..."""
    if re.search(r"xes$", plural) or re.search(r"[cs]hes$", plural):
        return plural.removesuffix("es")
    return plural.removesuffix("s")


def decline_indeclinable(data: SegmentData, stem: str, stem2: Optional[str]):
    data.title = "indeclinable " + singularize(data.pos)
    for case in ("nom", "gen", "dat", "acc", "abl", "loc", "voc"):
        data.forms[f"{case}_sg_m"] = [stem]
        data.forms[f"{case}_pl_m"] = [stem]
    data.categories.append("Latin indeclinable " + data.pos)


def decline_first_second(data: SegmentData, stem: str, stem2: Optional[str]):
    singpos = singularize(data.pos)
    if data.gender == "F":
        data.title = "first-declension " + singpos
    elif data.gender:
        data.title = "second-declension " + singpos
    else:
        data.title = "first/second-declension " + singpos

    types = data.types
    category = "Latin first and second declension " + data.pos
    original = None
    if "er" in types:
        if stem.endswith("er"):
            data.subtitles.append("nominative masculine singular in '-er'")
            data.categories.append(category + " with nominative masculine singular in -er")
        elif stem.endswith("ur"):
            data.subtitles.append("nominative masculine singular in '-ur'")
            data.categories.append(category + " with nominative masculine singular in -ur")
        else:
            raise ClassificationError(f"Unrecognized '-r' stem (doesn't end in '-er' or '-ur'): {stem}")
        original = stem
        stem = stem2 or stem

    us, a_sf, um, ae_gsf, am, a_macron = "us", "a", "um", "ae", "am", "ā"
    if "greekA" in types or "greekE" in types:
        data.subtitles.append("Greek-type")
        data.categories.append(category + " with Greek declension")
        if "greekA" in types:
            us, um, am = "os", "on", "ān"
        else:
            us, a_sf, um, ae_gsf, am, a_macron = "os", "ē", "on", "ēs", "ēn", "ē"

    inflect(data, stem, {
        "nom_sg_m": (us,), "nom_sg_f": (a_sf,), "nom_sg_n": (um,),
        "nom_pl_m": ("ī",), "nom_pl_f": ("ae",), "nom_pl_n": ("a",),
        "gen_sg_m": ("ī",), "gen_sg_f": (ae_gsf,), "gen_sg_n": ("ī",),
        "gen_pl_m": ("ōrum",), "gen_pl_f": ("ārum",), "gen_pl_n": ("ōrum",),
        "dat_sg_m": ("ō",), "dat_sg_f": ("ae",), "dat_sg_n": ("ō",),
        "dat_pl_m": ("īs",), "dat_pl_f": ("īs",), "dat_pl_n": ("īs",),
        "acc_sg_m": (um,), "acc_sg_f": (am,), "acc_sg_n": (um,),
        "acc_pl_m": ("ōs",), "acc_pl_f": ("ās",), "acc_pl_n": ("a",),
        "abl_sg_m": ("ō",), "abl_sg_f": (a_macron,), "abl_sg_n": ("ō",),
        "abl_pl_m": ("īs",), "abl_pl_f": ("īs",), "abl_pl_n": ("īs",),
        "voc_sg_m": ("e",), "voc_sg_f": (a_sf,), "voc_sg_n": (um,),
        "voc_pl_m": ("ī",), "voc_pl_f": ("ae",), "voc_pl_n": ("a",),
        "loc_sg_m": ("ī",), "loc_sg_f": ("ae",), "loc_sg_n": ("ī",),
        "loc_pl_m": ("īs",), "loc_pl_f": ("īs",), "loc_pl_n": ("īs",),
    })
    if original:
        data.forms["nom_sg_m"] = [original]
        data.forms["voc_sg_m"] = [original]

    if "ius" in types:
        data.subtitles.append("pronominal")
        data.categories.append(category + f" with genitive singular in -{I_ANCEPS}us")
        for gender in ("m", "f", "n"):
            data.forms[f"gen_sg_{gender}"] = [stem + I_ANCEPS + "us"]
            data.forms[f"dat_sg_{gender}"] = [stem + "ī"]
    elif "not_ius" in types:
        data.subtitles.append("non-pronominal")

    if stem == "me":
        data.forms["voc_sg_m"] = ["mī"]

    if "ic" in types:
        data.subtitles.append("'hic'-type")
        oc, oc_macron = ("uc", "ūc") if stem == "ill" else ("oc", "ōc")
        inflect(data, stem, {
            "nom_sg_m": ("ic",), "nom_sg_f": ("aec",), "nom_sg_n": (oc,), "nom_pl_n": ("aec",),
            "gen_sg_m": ("uius",), "gen_sg_f": ("uius",), "gen_sg_n": ("uius",),
            "dat_sg_m": ("uic",), "dat_sg_f": ("uic",), "dat_sg_n": ("uic",),
            "acc_sg_m": ("unc",), "acc_sg_f": ("anc",), "acc_sg_n": (oc,), "acc_pl_n": ("aec",),
            "abl_sg_m": ("ōc",), "abl_sg_f": ("āc",), "abl_sg_n": (oc_macron,),
        })
        data.voc = False

    data.categories.append(category)


def decline_first_first(data: SegmentData, stem: str, stem2: Optional[str]):
    data.title = "first-declension " + singularize(data.pos)
    data.subtitles.append("masculine and neuter forms identical to feminine forms")
    inflect(data, stem, {
        "nom_sg_m": ("a",), "nom_pl_m": ("ae",),
        "gen_sg_m": ("ae",), "gen_pl_m": ("ārum",),
        "dat_sg_m": ("ae",), "dat_pl_m": ("īs",),
        "acc_sg_m": ("am",), "acc_sg_n": ("a",), "acc_pl_m": ("ās",), "acc_pl_n": ("ae",),
        "abl_sg_m": ("ā",), "abl_pl_m": ("īs",),
        "loc_sg_m": ("ae",), "loc_pl_m": ("īs",),
        "voc_sg_m": ("a",), "voc_pl_m": ("ae",),
    })
    data.categories.append("Latin first declension " + data.pos)


def decline_second_second(data: SegmentData, stem: str, stem2: Optional[str]):
    data.title = "second-declension " + singularize(data.pos)
    data.subtitles.append("feminine forms identical to masculine forms")

    us, um, i_pl = "us", "um", "ī"
    if "greek" in data.types:
        data.subtitles.append("Greek-type")
        data.categories.append("Latin second declension " + data.pos + " with Greek declension")
        us, um, i_pl = "os", "on", "oe"

    inflect(data, stem, {
        "nom_sg_m": (us,), "nom_sg_n": (um,), "nom_pl_m": (i_pl,), "nom_pl_n": ("a",),
        "gen_sg_m": ("ī",), "gen_sg_n": ("ī",), "gen_pl_m": ("ōrum",), "gen_pl_n": ("ōrum",),
        "dat_sg_m": ("ō",), "dat_sg_n": ("ō",), "dat_pl_m": ("īs",), "dat_pl_n": ("īs",),
        "acc_sg_m": (um,), "acc_sg_n": (um,), "acc_pl_m": ("ōs",), "acc_pl_n": ("a",),
        "abl_sg_m": ("ō",), "abl_sg_n": ("ō",), "abl_pl_m": ("īs",), "abl_pl_n": ("īs",),
        "loc_sg_m": ("ī",), "loc_sg_n": ("ī",), "loc_pl_m": ("īs",), "loc_pl_n": ("īs",),
        "voc_sg_m": ("e",), "voc_sg_n": (um,), "voc_pl_m": (i_pl,), "voc_pl_n": ("a",),
    })
    data.categories.append("Latin second declension " + data.pos)


def _termination_title(data: SegmentData, terminations: str) -> str:
    singpos = singularize(data.pos)
    if data.gender:
        return "third-declension " + singpos
    return f"third-declension {terminations}-termination {singpos}"


def decline_third_one(data: SegmentData, stem: str, stem2: Optional[str]):
    data.title = _termination_title(data, "one")
    stem2 = stem2 or stem

    for gender in ("m", "n"):
        data.forms[f"nom_sg_{gender}"] = [stem]
        data.forms[f"voc_sg_{gender}"] = [stem]
    data.forms["acc_sg_n"] = [stem]
    inflect(data, stem2, {
        "nom_pl_m": ("ēs",), "nom_pl_n": ("ia",),
        "gen_sg_m": ("is",), "gen_sg_n": ("is",), "gen_pl_m": ("ium",), "gen_pl_n": ("ium",),
        "dat_sg_m": ("ī",), "dat_sg_n": ("ī",), "dat_pl_m": ("ibus",), "dat_pl_n": ("ibus",),
        "acc_sg_m": ("em",), "acc_pl_m": ("ēs",), "acc_pl_n": ("ia",),
        "abl_sg_m": ("ī",), "abl_sg_n": ("ī",), "abl_pl_m": ("ibus",), "abl_pl_n": ("ibus",),
        "loc_sg_m": ("ī",), "loc_sg_n": ("ī",), "loc_pl_m": ("ibus",), "loc_pl_n": ("ibus",),
        "voc_pl_m": ("ēs",), "voc_pl_n": ("ia",),
    })

    if "par" in data.types:
        data.subtitles.append("non-i-stem")
        inflect(data, stem2, {
            "nom_pl_n": ("a",), "gen_pl_m": ("um",), "gen_pl_n": ("um",),
            "abl_sg_m": ("e",), "abl_sg_n": ("e",),
            "loc_sg_m": ("ī", "e"), "loc_sg_n": ("ī", "e"),
            "acc_pl_n": ("a",), "voc_pl_n": ("a",),
        })
    elif "not_par" in data.types:
        data.subtitles.append("i-stem")

    es_base = re.match(r"^(.*)ēs$", stem)
    if es_base and es_base.group(1) == stem2:
        if "greek" in data.types:
            for slot in ("nom_sg_n", "acc_sg_n", "voc_sg_m", "voc_sg_n"):
                data.forms[slot] = [stem2 + "es", stem2 + "ēs"]
                data.notes[slot + "1"] = GREEK_SHORT_ENDING_NOTE
            data.subtitles.append("Greek-type")
        elif "not_greek" in data.types:
            data.subtitles.append("non-Greek-type")

    data.categories.append("Latin third declension " + data.pos)
    data.categories.append("Latin third declension " + data.pos + " of one termination")


def decline_comparative(data: SegmentData, stem: str, stem2: Optional[str]):
    data.types.add("par")
    decline_third_one(data, stem + "or", stem + "ōr")
    data.title = "third-declension comparative " + singularize(data.pos)
    data.subtitles = []
    for slot in ("nom_sg_n", "acc_sg_n", "voc_sg_n"):
        data.forms[slot] = [stem + "us"]


def decline_participle(data: SegmentData, stem: str, stem2: Optional[str]):
    decline_third_one(data, stem, stem2)
    stem2 = stem2 or stem
    data.title = "third-declension participle"
    if data.options.suppress_adj_ptc_forms:
        ending = "e" if "ptc" in data.types else "ī"
        data.forms["abl_sg_m"] = [stem2 + ending]
        data.forms["abl_sg_n"] = [stem2 + ending]
    else:
        for slot in ("abl_sg_m", "abl_sg_n"):
            data.forms[slot] = [stem2 + "e", stem2 + "ī"]
            data.notes[slot + "2"] = "When used purely as an adjective."
    data.forms["acc_pl_m"] = [stem2 + "ēs", stem2 + "īs"]


def decline_third_two(data: SegmentData, stem: str, stem2: Optional[str]):
    data.title = _termination_title(data, "two")
    inflect(data, stem, {
        "nom_sg_m": ("is",), "nom_sg_n": ("e",), "nom_pl_m": ("ēs",), "nom_pl_n": ("ia",),
        "gen_sg_m": ("is",), "gen_sg_n": ("is",), "gen_pl_m": ("ium",), "gen_pl_n": ("ium",),
        "dat_sg_m": ("ī",), "dat_sg_n": ("ī",), "dat_pl_m": ("ibus",), "dat_pl_n": ("ibus",),
        "acc_sg_m": ("em",), "acc_sg_n": ("e",), "acc_pl_m": ("ēs", "īs"), "acc_pl_n": ("ia",),
        "abl_sg_m": ("ī",), "abl_sg_n": ("ī",), "abl_pl_m": ("ibus",), "abl_pl_n": ("ibus",),
        "loc_sg_m": ("ī",), "loc_sg_n": ("ī",), "loc_pl_m": ("ibus",), "loc_pl_n": ("ibus",),
        "voc_sg_m": ("is",), "voc_sg_n": ("e",), "voc_pl_m": ("ēs",), "voc_pl_n": ("ia",),
    })
    data.categories.append("Latin third declension " + data.pos)
    data.categories.append("Latin third declension " + data.pos + " of two terminations")


def decline_third_three(data: SegmentData, stem: str, stem2: Optional[str]):
    data.title = _termination_title(data, "three")
    stem2 = stem2 or stem
    data.forms["nom_sg_m"] = [stem]
    data.forms["voc_sg_m"] = [stem]
    inflect(data, stem2, {
        "nom_sg_f": ("is",), "nom_sg_n": ("e",),
        "nom_pl_m": ("ēs",), "nom_pl_f": ("ēs",), "nom_pl_n": ("ia",),
        "voc_sg_f": ("is",), "voc_sg_n": ("e",),
        "voc_pl_m": ("ēs",), "voc_pl_f": ("ēs",), "voc_pl_n": ("ia",),
    })
    for gender in ("m", "f", "n"):
        inflect(data, stem2, {
            f"gen_sg_{gender}": ("is",), f"gen_pl_{gender}": ("ium",),
            f"dat_sg_{gender}": ("ī",), f"dat_pl_{gender}": ("ibus",),
            f"abl_sg_{gender}": ("ī",), f"abl_pl_{gender}": ("ibus",),
            f"loc_sg_{gender}": ("ī",), f"loc_pl_{gender}": ("ibus",),
        })
    inflect(data, stem2, {
        "acc_sg_m": ("em",), "acc_sg_f": ("em",), "acc_sg_n": ("e",),
        "acc_pl_m": ("ēs",), "acc_pl_f": ("ēs",), "acc_pl_n": ("ia",),
    })
    data.categories.append("Latin third declension " + data.pos)
    data.categories.append("Latin third declension " + data.pos + " of three terminations")


def decline_irregular(data: SegmentData, stem: str, stem2: Optional[str]):
    if stem in DEMONSTRATIVES:
        data.types.add("ius")
        decline_first_second(data, DEMONSTRATIVES[stem], None)
        data.title = "demonstrative pronoun"
        data.forms["nom_sg_m"] = [stem]
        data.forms["nom_sg_n"] = [DEMONSTRATIVE_NEUTERS[stem]]
        data.forms["acc_sg_n"] = [DEMONSTRATIVE_NEUTERS[stem]]
        data.voc = False
        data.categories = []
        return

    paradigm = data.tables.irregular_adjective(stem)
    data.forms.update(paradigm.render_forms(stem))
    data.title = paradigm.title
    data.subtitles.extend(paradigm.subtitles)
    data.notes.update(paradigm.notes)
    data.footnote = paradigm.footnote
    data.categories.extend(paradigm.render_categories(data.pos))
    data.voc = paradigm.voc


ADJECTIVE_DECLENSIONS: dict[str, AdjectiveGenerator] = {
    "0": decline_indeclinable,
    "1&2": decline_first_second,
    "1-1": decline_first_first,
    "2-2": decline_second_second,
    "3-1": decline_third_one,
    "3-C": decline_comparative,
    "3-P": decline_participle,
    "3-2": decline_third_two,
    "3-3": decline_third_three,
    "irreg": decline_irregular,
}
