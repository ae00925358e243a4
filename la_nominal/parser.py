import logging
import re
from typing import Optional

from la_nominal.classifier import EndingClassifier
from la_nominal.config import DeclensionTables
from la_nominal.errors import GrammarError
from la_nominal.models import (
    GENDER_TAGS,
    KNOWN_TAGS,
    NUMBER_TAGS,
    Alternant,
    DeclProp,
    Segment,
    SegmentRun,
)
from la_nominal.template import remove_links

logger = logging.getLogger(__name__)

ALTERNANT_SPLIT_RE = re.compile(r"(\(\(.*?\)\))")
ALTERNANT_RE = re.compile(r"^\(\((.*)\)\)$", re.S)
# a linked word may contain spaces, commas or hyphens: [[aqua vītae]]<1>
BRACKETED_SEGMENT_RE = re.compile(r"(\[\[[^\[\]]*?\]\]<.*?>)")
SEGMENT_RE = re.compile(r"([^<> ,\-]+<.*?>)")
SUFFIX_SEGMENT_RE = re.compile(r"([^<> ,]+<.*?>)")
SEGMENT_SPEC_RE = re.compile(r"^(.*)<(.*?)>$", re.S)
CAPITALIZED_RE = re.compile(r"^[A-ZĀĒĪŌŪȲĂĔĬŎŬ]")


class SegmentParser:
    """
    Parses the first parameter of {{la-ndecl}}/{{la-adecl}}, e.g.
    "rēs<5> pūblica<1&2+>" or "((puer<2.er>,puella<1>))", into a SegmentRun.
    """

    def __init__(self, classifier: EndingClassifier, tables: DeclensionTables):
        self.classifier = classifier
        self.tables = tables

    def parse_segment_run_allowing_alternants(self, text: str) -> SegmentRun:
        if "((" in text and "))" not in text:
            raise GrammarError(f"Unterminated alternant in '{text}'")

        segments: list = []
        loc = False
        num: Optional[str] = None
        gender: Optional[str] = None
        is_adj: Optional[bool] = None
        propses: list = []

        for i, piece in enumerate(ALTERNANT_SPLIT_RE.split(text)):
            if not piece:
                continue
            if i % 2 == 1:
                alternant = self.parse_alternant(piece)
                segments.append(alternant)
                part_loc, part_num, part_gender, part_is_adj = (
                    alternant.loc, alternant.num, alternant.gender, alternant.is_adj
                )
                propses.extend(alternant.propses)
            else:
                run = self.parse_segment_run(piece)
                segments.extend(run.segments)
                part_loc, part_num, part_gender, part_is_adj = run.loc, run.num, run.gender, run.is_adj
                propses.extend(run.propses)

            loc = loc or part_loc
            num = num or part_num
            gender = gender or part_gender
            if is_adj is None:
                is_adj = part_is_adj
            elif part_is_adj is not None:
                is_adj = is_adj and part_is_adj

        return SegmentRun(
            segments=tuple(segments),
            loc=loc,
            num=num,
            gender=gender,
            is_adj=is_adj,
            propses=tuple(propses),
        )

    def parse_alternant(self, text: str) -> Alternant:
        match = ALTERNANT_RE.match(text)
        if not match:
            raise GrammarError(f"Invalid alternant spec: {text}")

        branches: list[SegmentRun] = []
        loc = False
        num: Optional[str] = None
        gender: Optional[str] = None
        is_adj: Optional[bool] = None
        propses: list = []

        for i, branch_text in enumerate(match.group(1).split(",")):
            branch = self.parse_segment_run(branch_text)
            branches.append(branch)
            loc = loc or branch.loc
            if i == 0:
                num = branch.num
            elif num != branch.num:
                num = "both"
            # a branch of literal text only has no kind
            if is_adj is None:
                is_adj = branch.is_adj
            elif branch.is_adj is not None and branch.is_adj != is_adj:
                raise GrammarError("Saw both noun and adjective alternants; not allowed")
            gender = gender or branch.gender
            propses.extend(branch.propses)

        return Alternant(
            alternants=tuple(branches),
            loc=loc,
            num=num,
            gender=gender,
            is_adj=is_adj,
            propses=tuple(propses),
        )

    def parse_segment_run(self, text: str) -> SegmentRun:
        is_suffix = text.startswith("-")
        segment_re = SUFFIX_SEGMENT_RE if is_suffix else SEGMENT_RE

        pieces: list[str] = []
        for i, chunk in enumerate(BRACKETED_SEGMENT_RE.split(text)):
            if i % 2 == 1:
                pieces.append(chunk)
            else:
                pieces.extend(segment_re.split(chunk))

        segments: list[Segment] = []
        loc = False
        num: Optional[str] = None
        gender: Optional[str] = None
        is_adj: Optional[bool] = None
        props: list[DeclProp] = []

        for i in range(1, len(pieces), 2):
            orig_prefix = pieces[i - 1]
            self._check_literal(orig_prefix)
            segment = self.parse_segment(pieces[i]).model_copy(
                update={"orig_prefix": orig_prefix, "prefix": remove_links(orig_prefix)}
            )
            segments.append(segment)
            props.append(DeclProp(decl=segment.decl, headword_decl=segment.headword_decl, types=segment.types))

            loc = loc or segment.loc
            num = num or segment.num
            gender = gender or segment.gender
            is_adj = segment.is_adj if is_adj is None else is_adj and segment.is_adj

        trailing = pieces[-1] if len(pieces) % 2 == 1 else ""
        if trailing:
            self._check_literal(trailing)
            segments.append(Segment(prefix=remove_links(trailing), orig_prefix=trailing, literal=True))

        return SegmentRun(
            segments=tuple(segments),
            loc=loc,
            num=num,
            gender=gender,
            is_adj=is_adj,
            propses=(tuple(props),) if props else (),
        )

    def parse_segment(self, text: str) -> Segment:
        match = SEGMENT_SPEC_RE.match(text)
        if not match:
            raise GrammarError(f"Segment '{text}' has no inflection spec in angle brackets")
        stem_part, spec_part = match.groups()

        stems = stem_part.split("/")
        if len(stems) > 2:
            raise GrammarError(f"Too many stems, at most 2 should be given: {stem_part}")
        orig_lemma = stems[0]
        if not orig_lemma:
            raise GrammarError(f"No lemma in segment '{text}'")
        stem2 = stems[1] if len(stems) > 1 and stems[1] else None

        specs = spec_part.split(".")
        decl = specs[0]
        types = {self._normalize_tag(spec) for spec in specs[1:]}
        lemma = remove_links(orig_lemma)

        if "+" in decl:
            is_adj = True
            decl = decl.replace("+", "")
            found = self.classifier.detect_adj_type_and_subtype(lemma, stem2, decl, types)
            decl = found.decl
            irregular = self.tables.irregular_adjective_declensions.get(lemma)
            headword_decl = f"irreg/{irregular}" if irregular else decl + "+"
            for subtype in found.tags:
                if "-" + subtype in types:
                    types.discard("-" + subtype)
                else:
                    types.add(subtype)
        else:
            is_adj = False
            # only adjectives have their class inferred from the ending
            if not decl:
                raise GrammarError(f"Noun segment '{text}' needs a declension class")
            found = self.classifier.detect_noun_subtype(lemma, stem2, decl, types)
            irregular = self.tables.irregular_noun_declensions.get(lemma)
            headword_decl = f"irreg/{irregular}" if irregular else decl
            for subtype in found.tags:
                if "-" + subtype in types:
                    types.discard("-" + subtype)
                elif subtype in GENDER_TAGS and types & GENDER_TAGS:
                    continue
                elif subtype in NUMBER_TAGS and types & NUMBER_TAGS:
                    continue
                else:
                    types.add(subtype)
            # proper names default to singular
            if not types & {"pl", "both"} and CAPITALIZED_RE.match(lemma):
                types.add("sg")

        loc = "loc" in types
        types.discard("loc")
        gender = next((g for g in ("M", "F", "N") if g in types), None)
        num = None
        if "pl" in types:
            num = "pl"
            types.discard("pl")
        elif "sg" in types:
            num = "sg"
            types.discard("sg")

        logger.debug(f"Parsed segment {text!r}: decl={decl} types={sorted(types)}")
        return Segment(
            decl=decl,
            headword_decl=headword_decl,
            is_adj=is_adj,
            stem=found.stem,
            stem2=found.stem2,
            lemma=lemma,
            orig_lemma=orig_lemma,
            gender=gender,
            num=num,
            loc=loc,
            types=frozenset(types),
        )

    @staticmethod
    def _normalize_tag(spec: str) -> str:
        negated = spec.startswith("-")
        body = spec[1:] if negated else spec
        tag = ("-" if negated else "") + body.replace("-", "_")
        if tag not in KNOWN_TAGS:
            raise GrammarError(f"Invalid nominal type '{tag}'")
        return tag

    @staticmethod
    def _check_literal(text: str):
        if "<" in text or ">" in text:
            raise GrammarError(f"Unterminated or stray inflection spec in '{text}'")
