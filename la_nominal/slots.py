from enum import Enum
from typing import Iterator

CASES = ("nom", "gen", "dat", "acc", "abl", "voc", "loc")
NUMBERS = ("sg", "pl")
GENDERS = ("m", "f", "n")

POTENTIAL_NOUN_LEMMA_SLOTS = ("nom_sg", "nom_pl")
POTENTIAL_ADJ_LEMMA_SLOTS = (
    "nom_sg_m", "nom_sg_f", "nom_sg_n",
    "nom_pl_m", "nom_pl_f", "nom_pl_n",
)

LINKED_PREFIX = "linked_"


def iter_noun_slots(overridable_only: bool = False) -> Iterator[str]:
    for case in CASES:
        for num in NUMBERS:
            slot = f"{case}_{num}"
            yield slot
            if case == "nom" and not overridable_only:
                yield LINKED_PREFIX + slot


def iter_adj_slots(overridable_only: bool = False) -> Iterator[str]:
    for case in CASES:
        for num in NUMBERS:
            for gender in GENDERS:
                slot = f"{case}_{num}_{gender}"
                yield slot
                if case == "nom" and gender == "m" and not overridable_only:
                    yield LINKED_PREFIX + slot


def iter_slots(is_adj: bool, overridable_only: bool = False) -> Iterator[str]:
    if is_adj:
        return iter_adj_slots(overridable_only)
    return iter_noun_slots(overridable_only)


def _linked_slots(is_adj: bool) -> list[str]:
    lemma_slots = POTENTIAL_ADJ_LEMMA_SLOTS if is_adj else POTENTIAL_NOUN_LEMMA_SLOTS
    return [LINKED_PREFIX + slot for slot in lemma_slots]


# Every slot a generator may fill: the run-level slots plus the linked
# variants of every potential lemma slot.
Slot = Enum(
    "Slot",
    [
        (name.upper(), name)
        for name in dict.fromkeys([
            *iter_noun_slots(), *_linked_slots(False),
            *iter_adj_slots(), *_linked_slots(True),
        ])
    ],
    type=str,
)

ALL_SLOTS = frozenset(slot.value for slot in Slot)


def is_linked(slot: str) -> bool:
    return slot.startswith(LINKED_PREFIX)


def unlinked(slot: str) -> str:
    return slot[len(LINKED_PREFIX):] if is_linked(slot) else slot


def swap_number(slot: str, num: str) -> str | None:
    """Return the counterpart of `slot` in the other grammatical number, or None
    if `slot` does not belong to number `num`."""
    other = "pl" if num == "sg" else "sg"
    if f"_{num}" not in slot:
        return None
    return slot.replace(f"_{num}", f"_{other}", 1)


def masculine_fallback(slot: str) -> str | None:
    if slot.endswith("_f") or slot.endswith("_n"):
        return slot[:-2] + "_m"
    return None


class FormMap(dict):
    """Slot name to list of surface forms. Rejects slot names outside the
    known vocabulary so a misspelt slot fails where it is written."""

    def __setitem__(self, slot: str, forms: list[str]):
        if slot not in ALL_SLOTS:
            raise KeyError(f"Invalid nominal form {slot}")
        super().__setitem__(slot, forms)

    def update(self, *args, **kwargs):
        for slot, forms in dict(*args, **kwargs).items():
            self[slot] = forms

    def setdefault(self, slot: str, forms: list[str] | None = None):
        if slot not in self:
            self[slot] = forms
        return self[slot]
