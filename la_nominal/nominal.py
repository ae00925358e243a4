import logging
from typing import Optional

from la_nominal.classifier import EndingClassifier
from la_nominal.composer import ComposedDeclension, Composer
from la_nominal.config import DeclensionTables, DeclOptions, load_tables
from la_nominal.models import AdjectiveData, NounData, SegmentRun
from la_nominal.parser import SegmentParser
from la_nominal.slots import (
    CASES,
    NUMBERS,
    POTENTIAL_ADJ_LEMMA_SLOTS,
    POTENTIAL_NOUN_LEMMA_SLOTS,
    is_linked,
    iter_adj_slots,
    iter_noun_slots,
)
from la_nominal.template import ArgMap, read_list, remove_links

logger = logging.getLogger(__name__)

EMPTY_FORM = "—"
EMPTY_MARKERS = ("", "-", "—")
NUMBER_VALUES = ("sg", "pl", "both")

DECLENSION_PLACEHOLDERS = (
    ("<1>", "first declension"),
    ("<1&2>", "first/second declension"),
    ("<2>", "second declension"),
    ("<3>", "third declension"),
    ("<4>", "fourth declension"),
    ("<5>", "fifth declension"),
)

NOUN_LOC_ARGS = ("loc_sg", "loc_pl")
ADJ_LOC_ARGS = tuple(f"loc_{num}_{gender}" for num in NUMBERS for gender in ("m", "f", "n"))
ADJ_VOC_ARGS = tuple(f"voc_{num}_{gender}" for num in NUMBERS for gender in ("m", "f", "n"))


def construct_title(args_title: Optional[str], declensions_title: str, run: SegmentRun) -> str:
    if args_title:
        title = args_title
        for placeholder, text in DECLENSION_PLACEHOLDERS:
            title = title.replace(placeholder, text, 1)
        title = title.removeprefix(" ")
        return title[:1].upper() + title[1:]

    post_text = ""
    if run.loc:
        post_text += ", with locative"
    if run.num == "sg":
        post_text += ", singular only"
    elif run.num == "pl":
        post_text += ", plural only"

    if declensions_title:
        return declensions_title[0].upper() + declensions_title[1:] + post_text + "."
    return declensions_title


def flatten_notes(declensions: ComposedDeclension, slots) -> dict[str, list[str]]:
    """Turns per-form notes into the flat `<slot><n>` keys used in output."""
    notes: dict[str, list[str]] = {}
    for slot in slots:
        for index, slot_notes in sorted((declensions.notes.get(slot) or {}).items()):
            notes[f"{slot}{index + 1}"] = slot_notes
    return notes


def _requested_number(args: ArgMap) -> Optional[str]:
    num = args.get("num")
    return num if num in NUMBER_VALUES else None


class LaNominal:
    """
    Entry point for {{la-ndecl}} and {{la-adecl}}: parses the segment run,
    declines it and applies the per-slot overrides given as template arguments.
    """

    def __init__(self, options: Optional[DeclOptions] = None, tables: Optional[DeclensionTables] = None):
        self.options = options or DeclOptions()
        self.tables = tables or load_tables()
        self.classifier = EndingClassifier(self.tables)
        self.parser = SegmentParser(self.classifier, self.tables)
        self.composer = Composer(self.tables, self.options)

    def do_generate_noun_forms(self, args: ArgMap, pos: str = "nouns") -> NounData:
        run = self.parser.parse_segment_run_allowing_alternants(args.get("1", "").strip())
        run = run.model_copy(update={
            "loc": run.loc or any(arg in args for arg in NOUN_LOC_ARGS),
            "num": _requested_number(args) or run.num,
        })

        declensions = self.composer.decline_segment_run(run, pos, False)
        if not run.loc:
            for slot in NOUN_LOC_ARGS:
                declensions.forms.pop(slot, None)

        data = NounData(
            title=construct_title(args.get("title"), declensions.title, run),
            num=run.num,
            gender=run.gender,
            propses=[list(props) for props in run.propses],
            forms=dict(declensions.forms),
            notes=flatten_notes(declensions, iter_noun_slots()),
            footnotes=declensions.footnotes,
            categories=declensions.categories,
            pos=pos,
            num_type=args.get("type"),
            indecl="indecl" in args,
            overriding_lemma=read_list(args, "lemma"),
        )
        self._apply_noun_overrides(data, args)
        logger.debug(f"Declined noun {args.get('1')!r}: {data.title}")
        return data

    def do_generate_adj_forms(self, args: ArgMap, pos: str = "adjectives") -> AdjectiveData:
        spec = args.get("1", "").strip()
        if "<" not in spec and "(" not in spec:
            spec += "<0+>" if "indecl" in args else "<+>"

        run = self.parser.parse_segment_run_allowing_alternants(spec)
        run = run.model_copy(update={
            "loc": run.loc or any(arg in args for arg in ADJ_LOC_ARGS),
            "num": _requested_number(args) or run.num,
        })
        overriding_voc = any(arg in args for arg in ADJ_VOC_ARGS)

        declensions = self.composer.decline_segment_run(run, pos, True)
        if not run.loc:
            for slot in ADJ_LOC_ARGS:
                declensions.forms.pop(slot, None)
        if not overriding_voc and not declensions.voc:
            for slot in ADJ_VOC_ARGS:
                declensions.forms.pop(slot, None)

        data = AdjectiveData(
            title=construct_title(args.get("title"), declensions.title, run),
            num=run.num,
            propses=[list(props) for props in run.propses],
            forms=dict(declensions.forms),
            notes=flatten_notes(declensions, iter_adj_slots()),
            footnotes=declensions.footnotes,
            categories=declensions.categories,
            voc=declensions.voc,
            noneut="noneut" in args or declensions.noneut,
            pos=pos,
            num_type=args.get("type"),
            indecl="indecl" in args,
            overriding_lemma=read_list(args, "lemma"),
        )
        self._apply_adj_overrides(data, args)
        logger.debug(f"Declined adjective {args.get('1')!r}: {data.title}")
        return data

    # --- Overrides ---

    @staticmethod
    def _override_value(slot: str, value: str) -> list[str]:
        # linked slots keep their wiki links
        return (value if is_linked(slot) else remove_links(value)).split("/")

    @staticmethod
    def _number_excluded(num: Optional[str], slot: str) -> bool:
        return (num == "pl" and "_sg" in slot) or (num == "sg" and "_pl" in slot)

    def _apply_noun_overrides(self, data: NounData, args: ArgMap):
        linked_to_plain = {"linked_" + slot: slot for slot in POTENTIAL_NOUN_LEMMA_SLOTS}

        for slot in iter_noun_slots():
            if slot in args:
                val = self._override_value(slot, args[slot])
                data.user_specified.add(slot)
            elif slot in linked_to_plain and linked_to_plain[slot] in args:
                val = args[linked_to_plain[slot]].split("/")
                data.user_specified.add(slot)
            else:
                val = data.forms.get(slot)
            if val is None:
                continue

            if self._number_excluded(data.num, slot):
                data.forms[slot] = [""]
            elif val and val[0] in EMPTY_MARKERS:
                data.forms[slot] = [EMPTY_FORM]
            else:
                data.forms[slot] = val

    def _apply_adj_overrides(self, data: AdjectiveData, args: ArgMap):
        linked_to_plain = {"linked_" + slot: slot for slot in POTENTIAL_ADJ_LEMMA_SLOTS}

        for slot in iter_adj_slots():
            if data.noneut and slot.endswith("_n"):
                data.forms.pop(slot, None)

            if args.get(slot):
                val = self._override_value(slot, args[slot])
                data.user_specified.add(slot)
            elif slot in linked_to_plain and linked_to_plain[slot] in args:
                val = args[linked_to_plain[slot]].split("/")
                data.user_specified.add(slot)
            else:
                val = data.forms.get(slot)
            if val is None:
                continue

            if self._number_excluded(data.num, slot):
                data.forms.pop(slot, None)
            elif val and val[0] in EMPTY_MARKERS:
                data.forms[slot] = [EMPTY_FORM]
            else:
                data.forms[slot] = val

        if self.options.populate_all_terminations:
            return
        # feminine or neuter columns identical to the masculine one are dropped
        for gender in ("f", "n"):
            same_as_masculine = all(
                data.forms.get(f"{case}_{num}_{gender}") == data.forms.get(f"{case}_{num}_m")
                for case in CASES
                for num in NUMBERS
            )
            if same_as_masculine:
                for case in CASES:
                    for num in NUMBERS:
                        data.forms.pop(f"{case}_{num}_{gender}", None)
