import logging
import re
from typing import NamedTuple, Optional

from la_nominal.config import DeclensionTables, EndingEntry
from la_nominal.errors import ClassificationError
from la_nominal.template import extract_base

logger = logging.getLogger(__name__)

ADJ_DECL_RE = re.compile(r"^[0123]")


class Classification(NamedTuple):
    stem: str
    stem2: Optional[str]
    decl: str
    tags: tuple[str, ...]


NO_MATCH = Classification("", None, "", ())


class EndingClassifier:
    """
    Works out stems, the concrete declension class and the implied subtypes
    of a lemma from its ending, using the tables in endings.yaml.
    """

    def __init__(self, tables: DeclensionTables):
        self.tables = tables

    def make_stem2(self, stem: str) -> str:
        for suffix, replacement in self.tables.stem2_patterns:
            if stem.endswith(suffix):
                return stem[: len(stem) - len(suffix)] + replacement
        return stem

    # --- Nouns ---

    def detect_noun_subtype(self, lemma: str, stem2: Optional[str], decl: str, types: set[str]) -> Classification:
        if decl == "2":
            base, stem2, tags = self._match_noun(lemma, stem2, decl, types, self.tables.noun_endings["2"].entries)
            return Classification(base, stem2 or base, decl, tags)
        if decl == "3":
            return self._detect_third_declension(lemma, stem2, types)
        if decl == "4" and types & {"echo", "argo", "Callisto"}:
            match = re.match(r"^(.*)ō$", lemma)
            if not match:
                raise ClassificationError(
                    f"Declension-4 noun of subtype .echo, .argo or .Callisto should end in -ō: {lemma}"
                )
            tags = ("F", "sg") if "Callisto" in types else ("F",)
            return Classification(match.group(1), None, decl, tags)
        if decl in ("1", "4", "5"):
            base, stem2, tags = self._match_noun(lemma, stem2, decl, types, self.tables.noun_endings[decl].entries)
            return Classification(base, stem2, decl, tags)
        if decl == "indecl":
            return Classification(lemma, None, decl, ("sg",))
        if decl == "irreg":
            return Classification(lemma, None, decl, tuple(self.tables.irregular_noun_tags.get(lemma, ())))
        return Classification(lemma, None, decl, ())

    def _detect_third_declension(self, lemma: str, stem2: Optional[str], types: set[str]) -> Classification:
        if "pl" in types:
            return self._detect_third_declension_plural(lemma, stem2, types)

        stem2 = stem2 or self.make_stem2(lemma)
        if "Greek" in types:
            found = self._match_noun(lemma, stem2, "", types, self.tables.noun_endings["3-greek"].entries)
            return Classification(lemma, stem2, "3", found[2])
        if "N" not in types:
            found = self._match_noun(lemma, stem2, "", types, self.tables.noun_endings["3-non-neuter"].entries)
            if found[0]:
                return Classification(lemma, stem2, "3", found[2])
        found = self._match_noun(lemma, stem2, "", types, self.tables.noun_endings["3-neuter"].entries)
        return Classification(lemma, stem2, "3", found[2])

    def _detect_third_declension_plural(self, lemma: str, stem2: Optional[str], types: set[str]) -> Classification:
        # Plural-only lemmas have no usable nominative singular; the oblique stem
        # stands in for it.
        if "Greek" in types:
            match = re.match(r"^(.*)erēs$", lemma)
            if match:
                return Classification(match.group(1) + "ēr", match.group(1) + "er", "3", ("er",))
            match = re.match(r"^(.*)ontēs$", lemma)
            if match:
                return Classification(match.group(1) + "ōn", match.group(1) + "ont", "3", ("on",))
            match = re.match(r"^(.*)es$", lemma)
            if match:
                stem2 = stem2 or match.group(1)
                return Classification(stem2, stem2, "3", ())
            raise ClassificationError(f"Unrecognized ending for declension-3 plural Greek noun: {lemma}")

        for ending, tags in (("ia", ("N", "I", "pure")), ("a", ("N",)), ("ēs", ())):
            match = re.match(rf"^(.*){ending}$", lemma)
            if match:
                stem2 = stem2 or match.group(1)
                return Classification(stem2, stem2, "3", tags)
        raise ClassificationError(f"Unrecognized ending for declension-3 plural noun: {lemma}")

    def _match_noun(
        self,
        lemma: str,
        stem2: Optional[str],
        decltype: str,
        specified: set[str],
        entries: list[EndingEntry],
    ) -> tuple[str, Optional[str], tuple[str, ...]]:
        for entry in entries:
            if self._noun_entry_excluded(entry, specified):
                continue
            base = extract_base(lemma, entry.ending)
            if not base:
                continue
            if entry.stem2_ending is not None and base + entry.stem2_ending != stem2:
                continue
            return base, stem2, tuple(entry.tags)

        if decltype:
            raise ClassificationError(f"Unrecognized ending for declension-{decltype} noun: {lemma}")
        return "", None, ()

    @staticmethod
    def _noun_entry_excluded(entry: EndingEntry, specified: set[str]) -> bool:
        if "pl" in specified and "pl" not in entry.tags:
            return True
        for tag in entry.tags:
            if "-" + tag in specified:
                return True
            if tag == "N" and specified & {"M", "F"}:
                return True
            if tag in ("M", "F") and "N" in specified:
                return True
            if tag == "sg" and "pl" in specified:
                return True
            if tag == "pl" and "sg" in specified:
                return True
        return False

    # --- Adjectives ---

    def detect_adj_type_and_subtype(self, lemma: str, stem2: Optional[str], decl: str, types: set[str]) -> Classification:
        if decl and not ADJ_DECL_RE.match(decl) and not decl.startswith("irreg"):
            # not a class name, so it is read as a subtype and the class is guessed
            types = types | {decl}
            decl = ""

        if not decl:
            found = self._match_adjective(lemma, stem2, None, types, "1&2")
            if found.stem:
                return found
            return self._match_adjective(lemma, stem2, "", types, "3")
        if decl == "0":
            return Classification(lemma, None, "0", ())

        table = decl if decl in self.tables.adjective_endings else "default"
        return self._match_adjective(lemma, stem2, decl, types, table)

    def _match_adjective(
        self,
        lemma: str,
        stem2: Optional[str],
        decltype: Optional[str],
        specified: set[str],
        table_name: str,
    ) -> Classification:
        table = self.tables.adjective_endings[table_name]
        for entry in table.entries:
            if self._adjective_entry_excluded(entry, specified):
                continue
            base = extract_base(lemma, entry.ending)
            if base is None:
                continue
            if entry.stem2_ending is not None and base and base + entry.stem2_ending != stem2:
                continue

            new_stem2 = stem2
            if entry.derive:
                base, new_stem2 = entry.derive.derive(base, stem2)
            if table.stem2_rule == "base":
                new_stem2 = new_stem2 or base
            elif table.stem2_rule == "make_stem2":
                new_stem2 = new_stem2 or self.make_stem2(base)

            tags = tuple(tag for tag in entry.tags if not tag.startswith("-"))
            logger.debug(f"{lemma}: matched '{entry.ending}' in adjective table {table_name}")
            return Classification(base, new_stem2, entry.decl or table.decl or decltype or "", tags)

        if decltype is None:
            return NO_MATCH
        if decltype == "":
            raise ClassificationError(f"Unrecognized ending for adjective: {lemma}")
        raise ClassificationError(f"Unrecognized ending for declension-{decltype} adjective: {lemma}")

    @staticmethod
    def _adjective_entry_excluded(entry: EndingEntry, specified: set[str]) -> bool:
        if "pl" in specified and "pl" not in entry.tags:
            return True
        for tag in entry.tags:
            if "-" + tag in specified:
                return True
            if tag.startswith("-") and tag[1:] in specified:
                return True
        return False
