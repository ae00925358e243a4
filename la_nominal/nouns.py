import re
from typing import Callable, Optional

from la_nominal.errors import ClassificationError
from la_nominal.models import SegmentData
from la_nominal.template import strip_macrons

NounGenerator = Callable[[SegmentData, str, Optional[str]], None]

CASE_SLOTS = ("nom", "gen", "dat", "acc", "abl", "voc")

OLD_GENITIVE_NOTE = "Found in older Latin (until the Augustan Age)."
RARE_LATE_NOTE = "Found sometimes in Medieval and New Latin."

# subtype: (accusative singular endings, subtitle)
ACC_SG_I_STEM_SUBTYPES = {
    "acc_im": (("im",), "accusative singular in '-im'"),
    "acc_im_in": (("im", "in"), "accusative singular in '-im' or '-in'"),
    "acc_im_in_em": (("im", "in", "em"), "accusative singular in '-im', '-in' or '-em'"),
    "acc_im_em": (("im", "em"), "accusative singular in '-im' or '-em'"),
    "acc_im_occ_em": (("im", "em"), "accusative singular in '-im' or occasionally '-em'"),
    "acc_em_im": (("em", "im"), "accusative singular in '-em' or '-im'"),
}

ABL_SG_I_STEM_SUBTYPES = {
    "abl_i": (("ī",), "ablative singular in '-ī'"),
    "abl_i_e": (("ī", "e"), "ablative singular in '-ī' or '-e'"),
    "abl_e_i": (("e", "ī"), "ablative singular in '-e' or '-ī'"),
    "abl_e_occ_i": (("e", "ī"), "ablative singular in '-e' or occasionally '-ī'"),
}


def inflect(data: SegmentData, stem: str, endings: dict[str, tuple[str, ...]]):
    """Sets each slot in `endings` to stem + ending for every listed ending."""
    for slot, slot_endings in endings.items():
        data.forms[slot] = [stem + ending for ending in slot_endings]


def extract_stem(form: str, ending: str) -> str:
    match = re.match(rf"^(.*){ending}$", form)
    if not match:
        raise ClassificationError(f"Form {form} should end in -{ending}")
    return match.group(1)


def blank_paradigm(data: SegmentData):
    for case in CASE_SLOTS:
        data.forms[f"{case}_sg"] = ["-"]
        data.forms[f"{case}_pl"] = ["-"]


# --- First declension ---

def decline_first(data: SegmentData, stem: str, stem2: Optional[str]):
    inflect(data, stem, {
        "nom_sg": ("a",), "gen_sg": ("ae",), "dat_sg": ("ae",),
        "acc_sg": ("am",), "abl_sg": ("ā",), "voc_sg": ("a",),
        "nom_pl": ("ae",), "gen_pl": ("ārum",), "dat_pl": ("īs",),
        "acc_pl": ("ās",), "abl_pl": ("īs",), "voc_pl": ("ae",),
    })
    types = data.types

    if "abus" in types:
        data.subtitles.append(("dative/ablative plural in ", "'-ābus'"))
        inflect(data, stem, {"dat_pl": ("ābus",), "abl_pl": ("ābus",)})
    elif "not_abus" in types:
        data.subtitles.append(("dative/ablative plural in ", "'-īs'"))

    if "am" in types:
        data.subtitles.append(("nominative/vocative singular in ", "'-ām'"))
        inflect(data, stem, {
            "nom_sg": ("ām",), "acc_sg": ("ām",), "voc_sg": ("ām",), "abl_sg": ("ām", "ā"),
        })
    elif "Greek" in types:
        if "Ma" in types:
            data.subtitles.append("masculine Greek-type with nominative singular in '-ās'")
            inflect(data, stem, {"nom_sg": ("ās",), "acc_sg": ("ān",), "voc_sg": ("ā",)})
        elif "Me" in types:
            data.subtitles.append("masculine Greek-type with nominative singular in '-ēs'")
            inflect(data, stem, {"nom_sg": ("ēs",), "acc_sg": ("ēn",), "abl_sg": ("ē",), "voc_sg": ("ē",)})
        else:
            data.subtitles.append("Greek-type")
            inflect(data, stem, {
                "nom_sg": ("ē",), "gen_sg": ("ēs",), "acc_sg": ("ēn",), "abl_sg": ("ē",), "voc_sg": ("ē",),
            })
    elif "not_Greek" in types:
        data.subtitles.append("non-Greek-type")
    elif "not_am" in types:
        data.subtitles.append(("nominative/vocative singular in ", "'-a'"))

    if data.loc:
        inflect(data, stem, {"loc_sg": ("ae",), "loc_pl": ("īs",)})


# --- Second declension ---

def decline_second(data: SegmentData, stem: str, stem2: Optional[str]):
    stem2 = stem2 or stem
    types = data.types
    inflect(data, stem, {
        "nom_sg": ("us",), "gen_sg": ("ī",), "dat_sg": ("ō",),
        "acc_sg": ("um",), "abl_sg": ("ō",), "voc_sg": ("e",),
        "nom_pl": ("ī",), "gen_pl": ("ōrum",), "dat_pl": ("īs",),
        "acc_pl": ("ōs",), "abl_pl": ("īs",), "voc_pl": ("ī",),
    })

    if "N" in types:
        data.subtitles.append("neuter")
        inflect(data, stem, {
            "nom_sg": ("um",), "voc_sg": ("um",),
            "nom_pl": ("a",), "acc_pl": ("a",), "voc_pl": ("a",),
        })
        if "ium" in types:
            inflect(data, stem, {
                "nom_sg": ("ium",), "gen_sg": ("iī", "ī"), "dat_sg": ("iō",),
                "acc_sg": ("ium",), "abl_sg": ("iō",), "voc_sg": ("ium",),
                "nom_pl": ("ia",), "gen_pl": ("iōrum",), "dat_pl": ("iīs",),
                "acc_pl": ("ia",), "abl_pl": ("iīs",), "voc_pl": ("ia",),
            })
            _old_genitive(data, stem)
        elif "a" in types:
            data.subtitles.append("nominative/accusative/vocative plural in '-a'")
            inflect(data, stem, {
                "nom_sg": ("us",), "acc_sg": ("us",), "voc_sg": ("us",),
                "nom_pl": ("a",), "acc_pl": ("a",), "voc_pl": ("a",),
            })
        elif "vom" in types:
            data.subtitles.append("nominative singular in '-om' after 'v'")
            inflect(data, stem, {"nom_sg": ("om",), "acc_sg": ("om",), "voc_sg": ("om",)})
        elif "Greek" in types and "us" in types:
            data.subtitles.append("Greek-type")
            data.subtitles.append("nominative/accusative/vocative in '-os'")
            inflect(data, stem, {
                "nom_sg": ("os",), "acc_sg": ("os",), "voc_sg": ("os",),
                "nom_pl": ("ē",), "gen_pl": ("ōn",), "acc_pl": ("ē",), "voc_pl": ("ē",),
            })
        elif "Greek" in types:
            data.subtitles.append("Greek-type")
            inflect(data, stem, {"nom_sg": ("on",), "acc_sg": ("on",), "voc_sg": ("on",)})
        elif "us" in types:
            data.subtitles.append("nominative/accusative/vocative in '-us'")
            inflect(data, stem, {
                "nom_sg": ("us",), "acc_sg": ("us",), "voc_sg": ("us",),
                "nom_pl": ("ī",), "acc_pl": ("ōs",), "voc_pl": ("ī",),
            })
        elif "not_Greek" in types or "not_us" in types:
            data.subtitles.append("nominative/accusative/vocative in '-um'")
    elif "er" in types:
        if re.search(r"[aiouy]r$", stem):
            data.subtitles.append("nominative singular in '-r'")
        else:
            data.subtitles.append("nominative singular in '-er'")
        data.forms["nom_sg"] = [stem]
        data.forms["voc_sg"] = [stem]
        inflect(data, stem2, {
            "gen_sg": ("ī",), "dat_sg": ("ō",), "acc_sg": ("um",), "abl_sg": ("ō",),
            "nom_pl": ("ī",), "gen_pl": ("ōrum",), "dat_pl": ("īs",),
            "acc_pl": ("ōs",), "abl_pl": ("īs",), "voc_pl": ("ī",),
        })
    elif "ius" in types:
        inflect(data, stem, {
            "nom_sg": ("ius",), "gen_sg": ("iī", "ī"), "dat_sg": ("iō",),
            "acc_sg": ("ium",), "abl_sg": ("iō",),
            "voc_sg": ("ī",) if "voci" in types else ("ie",),
            "nom_pl": ("iī",), "gen_pl": ("iōrum",), "dat_pl": ("iīs",),
            "acc_pl": ("iōs",), "abl_pl": ("iīs",), "voc_pl": ("iī",),
        })
        _old_genitive(data, stem)
    elif "vos" in types:
        data.subtitles.append("nominative singular in '-os' after 'v'")
        inflect(data, stem, {"nom_sg": ("os",), "acc_sg": ("om",)})
    elif "Greek" in types:
        data.subtitles.append("Greek-type")
        inflect(data, stem, {"nom_sg": ("os",), "acc_sg": ("on",)})
    elif "not_Greek" in types:
        data.subtitles.append("non-Greek-type")

    i_stem = "ius" in types or "ium" in types
    if "genplum" in types:
        data.subtitles.append(("contracted", " genitive plural"))
        data.notes["gen_pl2"] = "Contraction found in poetry."
        inflect(data, stem2, {"gen_pl": ("iōrum", "ium") if i_stem else ("ōrum", "um")})
    elif "not_genplum" in types:
        data.subtitles.append(("normal", " genitive plural"))

    if data.loc:
        if i_stem:
            inflect(data, stem2, {"loc_sg": ("iī",), "loc_pl": ("iīs",)})
        else:
            inflect(data, stem2, {"loc_sg": ("ī",), "loc_pl": ("īs",)})


def _old_genitive(data: SegmentData, stem: str):
    if data.options.suppress_old_genitive:
        data.forms["gen_sg"] = [stem + "iī"]
    else:
        data.notes["gen_sg2"] = OLD_GENITIVE_NOTE


# --- Third declension ---

def _parisyllabic_type(stem: str, stem2: str) -> str:
    vowels1 = re.sub(r"[^AEIOUYaeiouy]", "", strip_macrons(stem))
    vowels2 = re.sub(r"[^AEIOUYaeiouy]", "", strip_macrons(stem2))
    return "parisyllabic" if len(vowels1) > len(vowels2) else "imparisyllabic"


def decline_third(data: SegmentData, stem: str, stem2: Optional[str]):
    stem2 = stem2 or stem
    types = data.types

    def non_i_stem_type() -> str:
        return _parisyllabic_type(stem, stem2) + " non-i-stem"

    data.forms["nom_sg"] = [stem]
    data.forms["voc_sg"] = [stem]
    inflect(data, stem2, {
        "gen_sg": ("is",), "dat_sg": ("ī",), "acc_sg": ("em",), "abl_sg": ("e",),
        "nom_pl": ("ēs",), "gen_pl": ("um",), "dat_pl": ("ibus",),
        "acc_pl": ("ēs",), "abl_pl": ("ibus",), "voc_pl": ("ēs",),
    })

    acc_sg_subtype = next((s for s in ACC_SG_I_STEM_SUBTYPES if s in types), None)
    abl_sg_subtype = next((s for s in ABL_SG_I_STEM_SUBTYPES if s in types), None)

    if "Greek" in types:
        data.subtitles.append("Greek-type")
        if "er" in types:
            data.subtitles.append("variant with nominative singular in '-ēr'")
            stem = extract_stem(stem, "ēr")
            inflect(data, stem, {
                "nom_sg": ("ēr",), "gen_sg": ("eris",), "dat_sg": ("erī",),
                "acc_sg": ("era", "erem"), "abl_sg": ("ere",), "voc_sg": ("ēr",),
                "nom_pl": ("erēs",), "gen_pl": ("erum",), "dat_pl": ("eribus",),
                "acc_pl": ("erēs",), "abl_pl": ("eribus",), "voc_pl": ("erēs",),
            })
        elif "on" in types:
            data.subtitles.append("variant with nominative singular in '-ōn'")
            stem = extract_stem(stem, "ōn")
            inflect(data, stem, {
                "nom_sg": ("ōn",), "gen_sg": ("ontis", "ontos"), "dat_sg": ("ontī",),
                "acc_sg": ("onta",), "abl_sg": ("onte",), "voc_sg": ("ōn",),
                "nom_pl": ("ontēs",), "gen_pl": ("ontum", "ontium"), "dat_pl": ("ontibus",),
                "acc_pl": ("ontēs", "ontās"), "abl_pl": ("ontibus",), "voc_pl": ("ontēs",),
            })
        elif "I" in types:
            data.subtitles.append("i-stem")
            inflect(data, stem2, {
                "gen_sg": ("is", "eōs", "ios"), "acc_sg": ("im", "in", "em"),
                "abl_sg": ("ī", "e"), "voc_sg": ("is", "i"),
                "nom_pl": ("ēs", "eis"), "gen_pl": ("ium", "eōn"),
                "acc_pl": ("ēs", "eis"), "voc_pl": ("ēs", "eis"),
            })
            data.notes["acc_sg3"] = RARE_LATE_NOTE
            data.notes["abl_sg2"] = RARE_LATE_NOTE
            if "poetic_esi" in types:
                inflect(data, stem2, {"dat_pl": ("ibus", "esi"), "abl_pl": ("ibus", "esi")})
                data.notes["dat_pl2"] = "Primarily in poetry."
                data.notes["abl_pl2"] = "Primarily in poetry."
        else:
            data.subtitles.append("normal variant")
            inflect(data, stem2, {
                "gen_sg": ("os",), "acc_sg": ("n",) if stem2.endswith("y") else ("a",),
                "nom_pl": ("es",), "acc_pl": ("as",), "voc_pl": ("es",),
            })
            if re.search(r"[iyï]s$", stem):
                data.forms["voc_sg"] = [stem, stem.removesuffix("s")]
                data.notes["voc_sg2"] = "In poetry."
    elif "not_Greek" in types:
        data.subtitles.append("non-Greek-type")

    if "polis" in types:
        stem = extract_stem(stem, "polis")
        data.subtitles.append("i-stem, partially Greek-type")
        inflect(data, stem, {
            "nom_sg": ("polis",), "gen_sg": ("polis",), "dat_sg": ("polī",),
            "acc_sg": ("polim", "polin"), "abl_sg": ("polī",), "voc_sg": ("polis", "polī"),
        })
    elif "not_polis" in types:
        data.subtitles.append(non_i_stem_type())

    if "N" in types:
        data.subtitles.append("neuter")
        data.forms["acc_sg"] = [stem]
        if "I" in types:
            if "pure" in types:
                data.subtitles.append("“pure” i-stem")
                inflect(data, stem2, {
                    "abl_sg": ("ī",), "nom_pl": ("ia",), "gen_pl": ("ium",),
                    "acc_pl": ("ia",), "voc_pl": ("ia",),
                })
            else:
                data.subtitles.append("i-stem")
                inflect(data, stem2, {
                    "nom_pl": ("a",), "gen_pl": ("ium", "um"), "acc_pl": ("a",), "voc_pl": ("a",),
                })
        else:
            data.subtitles.append(non_i_stem_type())
            inflect(data, stem2, {"nom_pl": ("a",), "acc_pl": ("a",), "voc_pl": ("a",)})
    elif "I" in types or acc_sg_subtype or abl_sg_subtype:
        data.subtitles.append("non-neuter i-stem" if "not_N" in types else "i-stem")
        data.forms["gen_pl"] = [stem2 + "ium"]
        if data.options.suppress_non_neuter_i_stem_acc_is:
            data.forms["acc_pl"] = [stem2 + "ēs"]
        else:
            data.forms["acc_pl"] = [stem2 + "ēs", stem2 + "īs"]

        for subtype, table, slot in (
            (acc_sg_subtype, ACC_SG_I_STEM_SUBTYPES, "acc_sg"),
            (abl_sg_subtype, ABL_SG_I_STEM_SUBTYPES, "abl_sg"),
        ):
            if subtype is None:
                continue
            endings, subtitle = table[subtype]
            inflect(data, stem2, {slot: endings})
            if data.num != "pl":
                data.subtitles.append(subtitle)
    elif "not_N" in types and "not_I" in types:
        data.subtitles.append("non-neuter " + non_i_stem_type())
    elif "not_N" in types:
        data.subtitles.append("non-neuter")
    elif "not_I" in types:
        data.subtitles.append(non_i_stem_type())

    if data.loc:
        loc_sg = list(data.forms.get("dat_sg", []))
        for form in data.forms.get("abl_sg", []):
            if form not in loc_sg:
                loc_sg.append(form)
        data.forms["loc_sg"] = loc_sg
        data.forms["loc_pl"] = list(data.forms.get("abl_pl", []))


# --- Fourth and fifth declensions ---

def decline_fourth(data: SegmentData, stem: str, stem2: Optional[str]):
    types = data.types
    inflect(data, stem, {
        "nom_sg": ("us",), "gen_sg": ("ūs",), "dat_sg": ("uī",),
        "acc_sg": ("um",), "abl_sg": ("ū",), "voc_sg": ("us",),
        "nom_pl": ("ūs",), "gen_pl": ("uum",), "dat_pl": ("ibus",),
        "acc_pl": ("ūs",), "abl_pl": ("ibus",), "voc_pl": ("ūs",),
    })

    if "echo" in types:
        data.subtitles.append("nominative/vocative singular in '-ō'")
        inflect(data, stem, {"nom_sg": ("ō",), "voc_sg": ("ō",)})
    elif "argo" in types:
        data.subtitles.append("nominative/accusative/vocative singular in '-ō', ablative singular in '-uī'")
        inflect(data, stem, {"nom_sg": ("ō",), "acc_sg": ("ō",), "abl_sg": ("uī",), "voc_sg": ("ō",)})
    elif "Callisto" in types:
        data.subtitles.append("all cases except the genitive singular in '-ō'")
        inflect(data, stem, {
            "nom_sg": ("ō",), "dat_sg": ("ō",), "acc_sg": ("ō",), "abl_sg": ("ō",), "voc_sg": ("ō",),
        })

    if "N" in types:
        data.subtitles.append("neuter")
        inflect(data, stem, {
            "nom_sg": ("ū",), "dat_sg": ("ū",), "acc_sg": ("ū",), "voc_sg": ("ū",),
            "nom_pl": ("ua",), "acc_pl": ("ua",), "voc_pl": ("ua",),
        })

    if "ubus" in types:
        data.subtitles.append(("dative/ablative plural in ", "'-ubus'"))
        inflect(data, stem, {"dat_pl": ("ubus",), "abl_pl": ("ubus",)})
    elif "not_ubus" in types:
        data.subtitles.append(("dative/ablative plural in ", "'-ibus'"))

    if data.loc:
        data.forms["loc_sg"] = list(data.forms["abl_sg"])
        data.forms["loc_pl"] = list(data.forms["abl_pl"])


def decline_fifth(data: SegmentData, stem: str, stem2: Optional[str]):
    if "i" in data.types:
        stem = stem + "i"
    inflect(data, stem, {
        "nom_sg": ("ēs",), "gen_sg": ("eī",), "dat_sg": ("eī",),
        "acc_sg": ("em",), "abl_sg": ("ē",), "voc_sg": ("ēs",),
        "nom_pl": ("ēs",), "gen_pl": ("ērum",), "dat_pl": ("ēbus",),
        "acc_pl": ("ēs",), "abl_pl": ("ēbus",), "voc_pl": ("ēs",),
    })
    if "i" in data.types:
        inflect(data, stem, {"gen_sg": ("ēī",), "dat_sg": ("ēī",)})
    if data.loc:
        inflect(data, stem, {"loc_sg": ("ē",), "loc_pl": ("ēbus",)})


# --- Indeclinable and irregular ---

def decline_invariable(data: SegmentData, stem: str, stem2: Optional[str]):
    for case in CASE_SLOTS:
        data.forms[f"{case}_sg"] = [stem]
        data.forms[f"{case}_pl"] = [stem]
    if data.loc:
        data.forms["loc_sg"] = [stem]
        data.forms["loc_pl"] = [stem]


def decline_indeclinable(data: SegmentData, stem: str, stem2: Optional[str]):
    data.title = "Not declined; used only in the nominative and accusative singular."
    blank_paradigm(data)
    data.forms["nom_sg"] = [stem]
    data.forms["acc_sg"] = [stem]
    data.num = "sg"


def decline_irregular(data: SegmentData, stem: str, stem2: Optional[str]):
    paradigm = data.tables.irregular_noun(stem)
    blank_paradigm(data)
    data.forms.update(paradigm.render_forms(stem))
    if paradigm.title:
        data.title = paradigm.title
    data.subtitles.extend(paradigm.subtitles)
    data.notes.update(paradigm.notes)
    data.footnote = paradigm.footnote
    data.categories.extend(paradigm.render_categories(data.pos))


NOUN_DECLENSIONS: dict[str, NounGenerator] = {
    "1": decline_first,
    "2": decline_second,
    "3": decline_third,
    "4": decline_fourth,
    "5": decline_fifth,
    "0": decline_invariable,
    "indecl": decline_indeclinable,
    "irreg": decline_irregular,
}
