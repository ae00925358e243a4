import pytest

from la_nominal.composer import (
    Composer,
    add_indefinite_article,
    append_form,
    apply_ligatures,
    apply_sufn,
    join_sentences,
    propagate_number_restrictions,
)
from la_nominal.errors import AgreementError, RegistryError
from la_nominal.nouns import OLD_GENITIVE_NOTE
from la_nominal.slots import FormMap


@pytest.fixture
def compose(parser, composer):
    def run(spec, is_adj=False):
        parsed = parser.parse_segment_run_allowing_alternants(spec)
        return composer.decline_segment_run(parsed, "adjectives" if is_adj else "nouns", is_adj)
    return run


# --- Helpers ---

def test_append_form_onto_placeholder():
    forms, notes = append_form([""], {}, ["a", "b"], {1: ["n"]})
    assert forms == ["a", "b"]
    assert notes == {1: ["n"]}


def test_append_form_cartesian_notes():
    forms, notes = append_form(["x", "y"], {0: ["p"]}, ["a", "b"], {1: ["q"]}, " ")
    assert forms == ["x a", "x b", "y a", "y b"]
    assert notes == {0: ["p"], 1: ["p", "q"], 3: ["q"]}


def test_append_form_without_new_forms():
    assert append_form(["x"], None, None, None) == ([], {})


def test_add_indefinite_article():
    assert add_indefinite_article("indeclinable portion") == "an indeclinable portion"
    assert add_indefinite_article("first-declension adjective") == "a first-declension adjective"


def test_join_sentences():
    assert join_sentences(["First thing.", "Second thing."], " or ") == "First thing or second thing."


def test_propagate_number_restrictions():
    forms = FormMap({"nom_sg": ["rēs"], "nom_pl": ["rēs"], "gen_sg": ["reī"], "gen_pl": ["rērum"]})
    propagate_number_restrictions(forms, "sg", False)
    assert forms["gen_pl"] == ["reī"]
    propagate_number_restrictions(forms, "both", False)
    assert forms["gen_pl"] == ["reī"]


def test_apply_ligatures():
    forms = FormMap({"nom_sg": ["poena"], "gen_sg": ["poenae"], "dat_sg": ["Oedipō"]})
    apply_ligatures(forms, False)
    assert forms["nom_sg"] == ["pœna"]
    assert forms["gen_sg"] == ["pœnæ"]
    assert forms["dat_sg"] == ["Œdipō"]


def test_apply_sufn():
    forms = FormMap({"nom_sg": ["tantum"], "gen_sg": ["tantī"]})
    apply_sufn(forms, False)
    assert forms["nom_sg"] == ["tantun", "tantum"]
    assert forms["gen_sg"] == ["tantī"]


# --- Segment runs ---

def test_single_segment_is_its_own_paradigm(parser, composer, compose):
    seg = parser.parse_segment("puella<1>")
    generated = composer.generate_segment(seg, "nouns", False, None, "F", False)
    composed = compose("puella<1>")
    for slot, forms in generated.forms.items():
        assert composed.forms[slot] == forms
    assert composed.forms["linked_nom_sg"] == ["puella"]
    assert composed.title == "First-declension noun"


def test_identical_alternants_collapse(compose):
    single = compose("fīlius<2>")
    doubled = compose("((fīlius<2>,fīlius<2>))")
    assert doubled.forms == single.forms
    assert doubled.notes == single.notes
    assert doubled.notes["gen_sg"] == {1: [OLD_GENITIVE_NOTE]}
    assert doubled.title == single.title


def test_alternant_order_follows_branches(compose):
    assert compose("((puer<2.er>,puella<1>))").forms["nom_sg"] == ["puer", "puella"]
    assert compose("((puella<1>,puer<2.er>))").forms["nom_sg"] == ["puella", "puer"]


def test_alternant_of_different_classes_joins_titles(compose):
    composed = compose("((puer<2.er>,puella<1>))")
    assert composed.title == "Second-declension noun (nominative singular in '-er') or first-declension noun"


def test_cartesian_expansion(compose):
    composed = compose("lūdus<2> fīlius<2>")
    assert composed.forms["gen_sg"] == ["lūdī fīliī", "lūdī fīlī"]
    assert composed.notes["gen_sg"] == {1: [OLD_GENITIVE_NOTE]}
    assert composed.title == "Second-declension noun with a second-declension noun"


def test_literal_portion(compose):
    composed = compose("tribūnus<2> mīlitum")
    assert composed.forms["nom_sg"] == ["tribūnus mīlitum"]
    assert composed.forms["gen_pl"] == ["tribūnōrum mīlitum"]
    assert composed.title == "Second-declension noun with an indeclinable portion"


def test_word_joiners_are_not_titled(compose):
    composed = compose("lūdus<2> fīlius<2>")
    assert "indeclinable portion" not in composed.title


def test_adjective_agrees_with_noun(compose):
    composed = compose("rēs<5> pūblica<1&2+>")
    assert composed.forms["nom_sg"] == ["rēs pūblica"]
    assert composed.forms["gen_sg"] == ["reī pūblicae"]
    assert composed.forms["linked_nom_sg"] == ["rēs pūblica"]
    assert composed.title == "Fifth-declension noun with a first-declension adjective"
    # categories of a modifying adjective are not carried over
    assert composed.categories == []


def test_linked_forms_keep_links(compose):
    composed = compose("[[rēs]] [[pūblicus|pūblica]]<1&2+>", is_adj=True)
    assert composed.forms["nom_sg_f"] == ["rēs pūblica"]
    assert composed.forms["linked_nom_sg_m"] == ["[[rēs]] pūblicus"]


def test_adjective_without_noun_gender(compose):
    with pytest.raises(AgreementError, match="don't know gender"):
        compose("rēx/rēg<3> magnus<1&2+>")


def test_noun_in_adjective_run(compose):
    with pytest.raises(AgreementError, match="Can't decline noun"):
        compose("puella<1>", is_adj=True)


def test_unknown_declension(compose):
    with pytest.raises(RegistryError, match="Unrecognized declension '7'"):
        compose("puella<7>")


def test_missing_gender_falls_back_to_masculine(compose):
    composed = compose("fortis<3+>", is_adj=True)
    assert composed.forms["nom_sg_f"] == ["fortis"]
    assert composed.forms["nom_sg_n"] == ["forte"]


def test_singular_run_mirrors_plural_slots(compose):
    composed = compose("puella<1.sg>")
    assert composed.forms["nom_pl"] == composed.forms["nom_sg"] == ["puella"]
    assert composed.forms["gen_pl"] == ["puellae"]


def test_singular_branch_is_blanked_before_merging(compose):
    composed = compose("((puella<1.sg>,puella<1>))")
    assert composed.forms["nom_sg"] == ["puella"]
    assert composed.forms["nom_pl"] == ["puellae"]
    assert composed.forms["gen_pl"] == ["puellārum"]


def test_factored_title_common_prefix(compose):
    composed = compose("((lacus<4.ubus>,lacus<4>))")
    assert composed.forms["dat_pl"] == ["lacubus", "lacibus"]
    assert composed.title == "Fourth-declension noun (dative/ablative plural in '-ubus' or '-ibus')"


def test_factored_title_common_suffix(compose):
    composed = compose("((fīlius<2.genplum>,fīlius<2>))")
    assert composed.forms["gen_pl"] == ["fīliōrum", "fīlium"]
    assert composed.notes["gen_pl"] == {1: ["Contraction found in poetry."]}
    assert composed.title == "Second-declension noun (contracted or normal genitive plural)"


def test_alternant_title_with_common_portion():
    title = Composer._alternant_title(
        "fourth-declension noun",
        [["neuter", ("dative plural in ", "'-ibus'")], ["neuter", ("dative plural in ", "'-ubus'")]],
        [""],
    )
    assert title == "fourth-declension noun (neuter; dative plural in '-ibus' or '-ubus')"


def test_alternant_title_otherwise_and_stems():
    title = Composer._alternant_title("third-declension noun", [["i-stem"], []], ["a", "b"])
    assert title == "third-declension noun (i-stem or otherwise; two different stems)"


def test_sufn(compose):
    composed = compose("tantum<2.sufn>")
    assert composed.forms["nom_sg"] == ["tantun", "tantum"]
    assert composed.title == "Second-declension noun (neuter, with 'm' optionally → 'n' in compounds)"


def test_ligatures(compose):
    composed = compose("poena<1.lig>")
    assert composed.forms["nom_sg"] == ["pœna"]
    assert composed.forms["gen_sg"] == ["pœnæ"]
