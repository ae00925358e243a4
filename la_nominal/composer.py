import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from la_nominal.adjectives import ADJECTIVE_DECLENSIONS
from la_nominal.config import DeclensionTables, DeclOptions
from la_nominal.errors import AgreementError, RegistryError
from la_nominal.models import Alternant, Segment, SegmentData, SegmentRun, Subtitle, render_subtitle
from la_nominal.nouns import NOUN_DECLENSIONS
from la_nominal.slots import (
    POTENTIAL_ADJ_LEMMA_SLOTS,
    POTENTIAL_NOUN_LEMMA_SLOTS,
    FormMap,
    is_linked,
    iter_slots,
    masculine_fallback,
    swap_number,
)

logger = logging.getLogger(__name__)

# per slot: form index -> footnotes attached to that form
SlotNotes = dict[int, list[str]]

NUMBER_TO_ENGLISH = ("zero", "one", "two", "three", "four", "five")
SUFN_SUBTITLE = " 'm' optionally → 'n' in compounds"
LIGATURES = (("Ae", "Æ"), ("Oe", "Œ"), ("ae", "æ"), ("oe", "œ"))
# plain joiners between words get no "indeclinable portion" title fragment (DESIGN.md, Decisions)
JOINING_LITERALS = ("", "-", " ")


@dataclass
class ComposedDeclension:
    """The accumulated result of declining one segment run."""
    forms: FormMap = field(default_factory=FormMap)
    notes: dict[str, SlotNotes] = field(default_factory=dict)
    titles: list[str] = field(default_factory=list)
    subtitleses: list[Subtitle] = field(default_factory=list)
    orig_titles: list[str] = field(default_factory=list)
    categories: list[str] = field(default_factory=list)
    footnotes: list[str] = field(default_factory=list)
    voc: bool = True
    noneut: bool = False

    @property
    def title(self) -> str:
        return "".join(self.titles)


def append_form(
    forms: Optional[list[str]],
    notes: Optional[SlotNotes],
    new_forms: Optional[list[str]],
    new_notes: Optional[SlotNotes],
    prefix: str = "",
) -> tuple[list[str], SlotNotes]:
    """
    Concatenates every existing form with every new form (joined by `prefix`).
    Footnotes follow their forms: the result at i * len(new_forms) + j carries
    the notes of forms[i] followed by those of new_forms[j].
    """
    forms = forms or []
    notes = notes or {}
    new_forms = new_forms or []
    new_notes = new_notes or {}

    ret_forms: list[str] = []
    ret_notes: SlotNotes = {}
    for i, form in enumerate(forms):
        for j, new_form in enumerate(new_forms):
            index = i * len(new_forms) + j
            ret_forms.append(form + prefix + new_form)
            combined = notes.get(i, []) + new_notes.get(j, [])
            if combined:
                ret_notes[index] = combined
    return ret_forms, ret_notes


def add_indefinite_article(text: str) -> str:
    if re.match(r"^[aeiou]", text, re.I):
        return "an " + text
    return "a " + text


def join_sentences(sentences: list[str], joiner: str) -> str:
    joined = []
    for i, sentence in enumerate(sentences):
        if i < len(sentences) - 1:
            sentence = sentence.removesuffix(".")
        if i > 0 and sentence:
            sentence = sentence[0].lower() + sentence[1:]
        joined.append(sentence)
    return joiner.join(joined)


def propagate_number_restrictions(forms: FormMap, num: Optional[str], is_adj: bool):
    """For a singular- or plural-only run, copies each slot onto its other-number counterpart."""
    if num not in ("sg", "pl"):
        return
    for slot in iter_slots(is_adj):
        other = swap_number(slot, num)
        if other:
            forms[other] = list(forms.get(slot) or [])


def apply_ligatures(forms: FormMap, is_adj: bool):
    for slot in iter_slots(is_adj):
        if slot not in forms:
            continue
        ligated = []
        for form in forms[slot]:
            for plain, ligature in LIGATURES:
                form = form.replace(plain, ligature)
            ligated.append(form)
        forms[slot] = ligated


def apply_sufn(forms: FormMap, is_adj: bool):
    """Adds an -n variant before every form ending in -m (tantum -> tantun)."""
    for slot in iter_slots(is_adj):
        if not any(form.endswith("m") for form in forms.get(slot) or []):
            continue
        with_n = []
        for form in forms[slot]:
            if form.endswith("m"):
                with_n.append(form[:-1] + "n")
            with_n.append(form)
        forms[slot] = with_n


def _insert_if_not(items: list, item):
    if item not in items:
        items.append(item)


class Composer:
    """
    Declines a parsed SegmentRun: every segment is handed to its generator, the
    per-segment forms are concatenated slot by slot and a descriptive title is
    synthesized from the generators' titles and subtitles.
    """

    def __init__(self, tables: DeclensionTables, options: DeclOptions):
        self.tables = tables
        self.options = options

    def decline_segment_run(self, run: SegmentRun, pos: str, is_adj: bool) -> ComposedDeclension:
        declensions = ComposedDeclension()
        for slot in iter_slots(is_adj):
            declensions.forms[slot] = [""]

        for seg in run.segments:
            if isinstance(seg, Alternant):
                self._decline_alternant(seg, run, pos, is_adj, declensions)
            elif seg.is_literal:
                self._append_literal(seg, is_adj, declensions)
            else:
                self._decline_segment(seg, run, pos, is_adj, declensions)

        titles = []
        for i, title in enumerate(declensions.titles):
            if i == 0:
                titles.append(title[:1].upper() + title[1:])
            else:
                titles.append(add_indefinite_article(title))
        declensions.titles = [" with ".join(titles)] if titles else []
        return declensions

    # --- Single segments ---

    def generate_segment(self, seg: Segment, pos: str, is_adj: bool, num: Optional[str],
                         gender: Optional[str], loc: bool) -> SegmentData:
        """Runs the generator for one segment and builds its title."""
        data = SegmentData(
            pos=pos if (is_adj or not seg.is_adj) else "adjectives",
            types=set(seg.types),
            tables=self.tables,
            options=self.options,
            num=num,
            gender=gender,
            loc=loc,
        )

        if seg.is_adj:
            generator = ADJECTIVE_DECLENSIONS.get(seg.decl)
        else:
            generator = NOUN_DECLENSIONS.get(seg.decl)
        if generator is None:
            raise RegistryError(f"Unrecognized declension '{seg.decl}'")
        generator(data, seg.stem, seg.stem2)
        logger.debug(f"Generated {len(data.forms)} slots for {seg.lemma}<{seg.decl}>")

        if not seg.is_adj and not data.title:
            data.title = self._noun_title(seg, data)

        if "sufn" in data.types:
            data.subtitles.append(("with", SUFN_SUBTITLE))
        elif "not_sufn" in data.types:
            data.subtitles.append(("without", SUFN_SUBTITLE))
        return data

    def _noun_title(self, seg: Segment, data: SegmentData) -> str:
        match = re.match(r"^irreg/(.*)$", seg.headword_decl)
        if match:
            apparent_decl = match.group(1)
            if not data.subtitles:
                data.subtitles.append("irregular")
        else:
            apparent_decl = seg.headword_decl

        english = self.tables.declension_names.get(apparent_decl)
        if english:
            title = f"{english}-declension"
        elif apparent_decl == "irreg":
            title = "irregular"
        elif apparent_decl in ("indecl", "0"):
            title = "indeclinable"
        else:
            raise RegistryError(f"Don't recognize noun declension {apparent_decl}")
        return title + " noun"

    def _decline_segment(self, seg: Segment, run: SegmentRun, pos: str, is_adj: bool,
                         declensions: ComposedDeclension):
        num = seg.num or run.num
        gender = seg.gender or run.gender
        data = self.generate_segment(seg, pos, is_adj, num, gender, run.loc)

        if seg.is_adj:
            declensions.voc = declensions.voc and data.voc
            declensions.noneut = declensions.noneut or data.noneut
        if data.title:
            declensions.orig_titles.append(data.title)
        if data.title and data.subtitles:
            rendered = ", ".join(render_subtitle(subtitle) for subtitle in data.subtitles)
            data.title = f"{data.title} ({rendered})"
        declensions.subtitleses.extend(data.subtitles)

        lemma_slots = POTENTIAL_ADJ_LEMMA_SLOTS if seg.is_adj else POTENTIAL_NOUN_LEMMA_SLOTS
        for slot in lemma_slots:
            forms = data.forms.get(slot)
            if forms is not None:
                data.forms["linked_" + slot] = [seg.orig_lemma if form == seg.lemma else form for form in forms]

        if "lig" in seg.types:
            apply_ligatures(data.forms, seg.is_adj)
        if "sufn" in seg.types:
            apply_sufn(data.forms, seg.is_adj)
        propagate_number_restrictions(data.forms, num, seg.is_adj)

        for slot in iter_slots(is_adj):
            source = self._source_slot(slot, seg, gender, is_adj, data.forms)
            new_forms = data.forms.get(source)
            new_notes: SlotNotes = {}
            for j in range(len(new_forms or [])):
                note = data.notes.get(f"{source}{j + 1}")
                if note:
                    new_notes[j] = [note]
            prefix = seg.orig_prefix if is_linked(slot) else seg.prefix
            declensions.forms[slot], declensions.notes[slot] = append_form(
                declensions.forms.get(slot), declensions.notes.get(slot), new_forms, new_notes, prefix
            )

        if "nocat" not in seg.types and (is_adj or not seg.is_adj):
            for category in data.categories:
                _insert_if_not(declensions.categories, category)
        if data.footnote:
            _insert_if_not(declensions.footnotes, data.footnote)

        if seg.prefix not in JOINING_LITERALS:
            declensions.titles.append("indeclinable portion")
        if data.title:
            declensions.titles.append(data.title)

    @staticmethod
    def _source_slot(slot: str, seg: Segment, gender: Optional[str], is_adj: bool, forms: FormMap) -> str:
        """Picks the generator slot that fills run slot `slot`."""
        if is_adj:
            if not seg.is_adj:
                raise AgreementError(f"Can't decline noun '{seg.lemma}' when overall term is an adjective")
            fallback = masculine_fallback(slot)
            if forms.get(slot) is None and fallback:
                return fallback
            return slot
        if seg.is_adj:
            if not gender:
                raise AgreementError(
                    f"Declining modifying adjective {seg.lemma} but don't know gender of associated noun"
                )
            agreeing = f"{slot}_{gender.lower()}"
            return agreeing if forms.get(agreeing) is not None else f"{slot}_m"
        return slot

    def _append_literal(self, seg: Segment, is_adj: bool, declensions: ComposedDeclension):
        for slot in iter_slots(is_adj):
            prefix = seg.orig_prefix if is_linked(slot) else seg.prefix
            declensions.forms[slot], declensions.notes[slot] = append_form(
                declensions.forms.get(slot), declensions.notes.get(slot), [prefix], None
            )
        if seg.prefix not in JOINING_LITERALS:
            declensions.titles.append("indeclinable portion")

    # --- Alternants ---

    def _decline_alternant(self, alt: Alternant, run: SegmentRun, pos: str, is_adj: bool,
                           declensions: ComposedDeclension):
        branches = list(alt.alternants)
        title_the_hard_way = self._needs_hard_title(branches)
        stems_seen: list[str] = []
        if not title_the_hard_way:
            branches, stems_seen = self._mark_negated_subtypes(branches)

        merged: Optional[ComposedDeclension] = None
        branch_titles: list[str] = []
        branch_subtitleses: list[list[Subtitle]] = []
        categories: list[str] = []
        alternant_decl_title: Optional[str] = None

        for branch in branches:
            branch = branch.model_copy(update={
                "loc": alt.loc or run.loc,
                "num": branch.num or alt.num or run.num,
                "gender": branch.gender or alt.gender or run.gender,
            })
            branch_declensions = self.decline_segment_run(branch, pos, is_adj)
            declensions.voc = declensions.voc and branch_declensions.voc
            declensions.noneut = declensions.noneut or branch_declensions.noneut

            if branch.num in ("sg", "pl"):
                for slot in iter_slots(is_adj):
                    if swap_number(slot, "pl" if branch.num == "sg" else "sg"):
                        branch_declensions.forms[slot] = []
                        branch_declensions.notes[slot] = {}

            if merged is None:
                merged = branch_declensions
            else:
                self._merge_branch(merged, branch_declensions, is_adj)

            for category in branch_declensions.categories:
                _insert_if_not(categories, category)
            for footnote in branch_declensions.footnotes:
                _insert_if_not(declensions.footnotes, footnote)
            _insert_if_not(branch_titles, branch_declensions.title)
            branch_subtitleses.append(branch_declensions.subtitleses)
            if not alternant_decl_title and branch_declensions.orig_titles:
                alternant_decl_title = branch_declensions.orig_titles[0]

        if merged is None:
            raise AgreementError("Alternant without any branch")

        propagate_number_restrictions(merged.forms, run.num, is_adj)
        for slot in iter_slots(is_adj):
            declensions.forms[slot], declensions.notes[slot] = append_form(
                declensions.forms.get(slot), declensions.notes.get(slot),
                merged.forms.get(slot), merged.notes.get(slot),
            )

        if is_adj or not alt.is_adj:
            for category in categories:
                _insert_if_not(declensions.categories, category)

        if title_the_hard_way:
            title = join_sentences(branch_titles, " or ")
        else:
            title = self._alternant_title(alternant_decl_title or "", branch_subtitleses, stems_seen)
        if title:
            declensions.titles.append(title)

    @staticmethod
    def _needs_hard_title(branches: list[SegmentRun]) -> bool:
        """True unless every branch has exactly one declined segment, all of the same class."""
        alternant_decl = ""
        hard = False
        for branch in branches:
            declined = 0
            for seg in branch.segments:
                if isinstance(seg, Segment) and seg.decl:
                    if not alternant_decl:
                        alternant_decl = seg.decl
                    elif alternant_decl != seg.decl:
                        hard = True
                    declined += 1
            if declined != 1:
                hard = True
        return hard

    @staticmethod
    def _mark_negated_subtypes(branches: list[SegmentRun]) -> tuple[list[SegmentRun], list[str]]:
        """
        Tags each declined segment with not_X for every subtype X that another
        branch has and it lacks, so generators can name what sets the branches apart.
        """
        union: set[str] = set()
        stems_seen: list[str] = []
        for branch in branches:
            for seg in branch.segments:
                if isinstance(seg, Segment) and seg.decl:
                    union |= seg.types
                    _insert_if_not(stems_seen, seg.stem2 or "")

        marked = []
        for branch in branches:
            segments = []
            for seg in branch.segments:
                if isinstance(seg, Segment) and seg.decl:
                    negated = {"not_" + subtype for subtype in union - seg.types}
                    seg = seg.model_copy(update={"types": seg.types | negated})
                segments.append(seg)
            marked.append(branch.model_copy(update={"segments": tuple(segments)}))
        return marked, stems_seen

    @staticmethod
    def _merge_branch(merged: ComposedDeclension, branch: ComposedDeclension, is_adj: bool):
        for slot in iter_slots(is_adj):
            current = list(merged.forms.get(slot) or [])
            index_map: dict[int, int] = {}
            for new_index, form in enumerate(branch.forms.get(slot) or []):
                if form in current:
                    index_map[new_index] = current.index(form)
                else:
                    current.append(form)
                    index_map[new_index] = len(current) - 1
            merged.forms[slot] = current

            current_notes = dict(merged.notes.get(slot) or {})
            for index, notes in (branch.notes.get(slot) or {}).items():
                target = index_map.get(index)
                if target is None:
                    continue
                existing = current_notes.get(target, [])
                current_notes[target] = existing + [note for note in notes if note not in existing]
            merged.notes[slot] = current_notes

    @staticmethod
    def _alternant_title(decl_title: str, subtitleses: list[list[Subtitle]], stems_seen: list[str]) -> str:
        first = subtitleses[0] if subtitleses else []
        num_common = len(first)
        for subtitles in subtitleses[1:]:
            for j in range(num_common):
                if j >= len(subtitles) or subtitles[j] != first[j]:
                    num_common = j
                    break

        common_portion = ", ".join(render_subtitle(subtitle) for subtitle in first[:num_common])

        # a single differing (prefix, suffix) pair may be factored on its shared side
        common_prefix: Optional[str] = None
        common_suffix: Optional[str] = None
        for i, subtitles in enumerate(subtitleses):
            if len(subtitles) != num_common + 1 or isinstance(subtitles[num_common], str):
                common_prefix = common_suffix = None
                break
            prefix, suffix = subtitles[num_common]
            if i == 0:
                common_prefix, common_suffix = prefix, suffix
                continue
            if prefix != common_prefix:
                common_prefix = None
            if suffix != common_suffix:
                common_suffix = None
            if not common_prefix and not common_suffix:
                break

        if common_prefix:
            non_common_portion = common_prefix + " or ".join(s[num_common][1] for s in subtitleses)
        elif common_suffix:
            non_common_portion = " or ".join(s[num_common][0] for s in subtitleses) + common_suffix
        else:
            saw_non_common = False
            parts = []
            for subtitles in subtitleses:
                rest = subtitles[num_common:]
                if rest:
                    parts.append(", ".join(render_subtitle(subtitle) for subtitle in rest))
                    saw_non_common = True
                else:
                    parts.append("otherwise")
            non_common_portion = " or ".join(parts) if saw_non_common else ""

        portions = [portion for portion in (common_portion, non_common_portion) if portion]
        if len(stems_seen) > 1:
            count = len(stems_seen)
            english = NUMBER_TO_ENGLISH[count] if count < len(NUMBER_TO_ENGLISH) else str(count)
            portions.append(f"{english} different stems")

        portion = "; ".join(portions)
        if portion:
            return f"{decl_title} ({portion})"
        return decl_title
