from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Annotated, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_serializer

from la_nominal.slots import FormMap

if TYPE_CHECKING:
    from la_nominal.config import DeclensionTables, DeclOptions


class Gender(str, Enum):
    M = "M"
    F = "F"
    N = "N"


class NumberTantum(str, Enum):
    Singular = "sg"
    Plural = "pl"
    Both = "both"


class Tag(str, Enum):
    """Every subtype tag accepted after the declension class in `<...>`."""
    Sg = "sg"
    NotSg = "-sg"
    Pl = "pl"
    NotPl = "-pl"
    Both = "both"
    NotBoth = "not_both"
    M = "M"
    LowerM = "m"
    F = "F"
    LowerF = "f"
    N = "N"
    LowerN = "n"
    VetoM = "-M"
    NotM = "not_M"
    NotMe = "not_Me"
    NotF = "not_F"
    VetoF = "-F"
    VetoN = "-N"
    NotN = "not_N"
    NotVetoN = "not_-N"
    Genplum = "genplum"
    NotGenplum = "not_genplum"
    AccIm = "acc_im"
    NotAccIm = "not_acc_im"
    AccImEm = "acc_im_em"
    NotAccImEm = "not_acc_im_em"
    AccEmIm = "acc_em_im"
    NotAccEmIm = "not_acc_em_im"
    AccImIn = "acc_im_in"
    AccImInEm = "acc_im_in_em"
    NotAccImInEm = "not_acc_im_in_em"
    NotAccImIn = "not_acc_im_in"
    AccImOccEm = "acc_im_occ_em"
    NotAccImOccEm = "not_acc_im_occ_em"
    AblEI = "abl_e_i"
    NotAblEI = "not_abl_e_i"
    AblI = "abl_i"
    NotAblI = "not_abl_i"
    AblIE = "abl_i_e"
    NotAblIE = "not_abl_i_e"
    AblEOccI = "abl_e_occ_i"
    NotAblEOccI = "not_abl_e_occ_i"
    Voci = "voci"
    VetoVoci = "-voci"
    Abus = "abus"
    NotAbus = "not_abus"
    Ubus = "ubus"
    NotUbus = "not_ubus"
    Ium = "ium"
    VetoIum = "-ium"
    Ius = "ius"
    VetoIus = "-ius"
    NotIus = "not_ius"
    Us = "us"
    VetoUs = "-us"
    NotUs = "not_us"
    Am = "am"
    VetoAm = "-am"
    NotAm = "not_am"
    Vos = "vos"
    VetoVos = "-vos"
    Vom = "vom"
    VetoVom = "-vom"
    Er = "er"
    VetoEr = "-er"
    NotVetoEr = "not_-er"
    A = "a"
    LowerI = "i"
    I = "I"  # noqa: E741
    VetoLowerI = "-i"
    VetoI = "-I"
    NotI = "not_I"
    Pure = "pure"
    VetoPure = "-pure"
    NotPure = "not_pure"
    Par = "par"
    VetoPar = "-par"
    NotPar = "not_par"
    Ic = "ic"
    VetoIc = "-ic"
    LowerGreek = "greek"
    VetoLowerGreek = "-greek"
    NotLowerGreek = "not_greek"
    Greek = "Greek"
    VetoGreek = "-Greek"
    NotGreek = "not_Greek"
    GreekA = "greekA"
    VetoGreekA = "-greekA"
    GreekE = "greekE"
    VetoGreekE = "-greekE"
    Echo = "echo"
    Argo = "argo"
    Callisto = "Callisto"
    Polis = "polis"
    NotPolis = "not_polis"
    VetoPolis = "-polis"
    On = "on"
    VetoOn = "-on"
    NotOn = "not_on"
    Me = "Me"
    VetoMe = "-Me"
    Ma = "Ma"
    VetoMa = "-Ma"
    Loc = "loc"
    VetoLoc = "-loc"
    Lig = "lig"
    Nocat = "nocat"
    Sufn = "sufn"
    NotSufn = "not_sufn"
    PoeticEsi = "poetic_esi"
    Ptc = "ptc"
    Gr = "Gr"
    LowerGr = "gr"
    Navis = "navis"
    Second = "2nd"


KNOWN_TAGS = frozenset(tag.value for tag in Tag)

# Tags travel through the engine as plain strings; Tag only validates parser input.
GENDER_TAGS = frozenset({"M", "F", "N"})
NUMBER_TAGS = frozenset({"sg", "pl", "both"})

# A subtitle is either a plain phrase or a (prefix, suffix) pair that may be
# factored across alternants sharing one side.
Subtitle = Union[str, tuple[str, str]]


def render_subtitle(subtitle: Subtitle) -> str:
    if isinstance(subtitle, str):
        return subtitle
    return "".join(subtitle)


# --- Parse tree ---

class DeclProp(BaseModel):
    model_config = ConfigDict(frozen=True)

    decl: str
    headword_decl: str
    types: frozenset[str] = frozenset()

    @field_serializer("types")
    def _sorted_types(self, types: frozenset[str]) -> list[str]:
        return sorted(types)


class Segment(BaseModel):
    """One inflected word of a run, or a piece of literal text when `literal` is set."""
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    kind: Literal["segment"] = "segment"
    decl: str = ""
    headword_decl: str = ""
    is_adj: bool = False
    stem: str = ""
    stem2: Optional[str] = None
    lemma: str = ""
    orig_lemma: str = ""
    gender: Optional[Gender] = None
    num: Optional[NumberTantum] = None
    loc: bool = False
    types: frozenset[str] = frozenset()
    prefix: str = ""
    orig_prefix: str = ""
    literal: bool = False

    @property
    def is_literal(self) -> bool:
        return self.literal


class Alternant(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    kind: Literal["alternant"] = "alternant"
    alternants: tuple["SegmentRun", ...] = ()
    gender: Optional[Gender] = None
    num: Optional[NumberTantum] = None
    loc: bool = False
    is_adj: Optional[bool] = None
    propses: tuple[tuple[DeclProp, ...], ...] = ()


Node = Annotated[Union[Segment, Alternant], Field(discriminator="kind")]


class SegmentRun(BaseModel):
    model_config = ConfigDict(frozen=True, use_enum_values=True)

    segments: tuple[Node, ...] = ()
    gender: Optional[Gender] = None
    num: Optional[NumberTantum] = None
    loc: bool = False
    is_adj: Optional[bool] = None
    propses: tuple[tuple[DeclProp, ...], ...] = ()


Alternant.model_rebuild()


# --- Generator scratch record ---

@dataclass
class SegmentData:
    """Everything one generator call reads and writes for a single segment."""
    pos: str
    types: set[str]
    tables: "DeclensionTables"
    options: "DeclOptions"
    num: Optional[str] = None
    gender: Optional[str] = None
    loc: bool = False
    forms: FormMap = field(default_factory=FormMap)
    notes: dict[str, str] = field(default_factory=dict)
    title: Optional[str] = None
    subtitles: list[Subtitle] = field(default_factory=list)
    footnote: str = ""
    categories: list[str] = field(default_factory=list)
    voc: bool = True
    noneut: bool = False


# --- Results ---

class DeclensionData(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    template_type: Literal["declension"] = "declension"
    title: str
    num: Optional[NumberTantum] = None
    propses: list[list[DeclProp]] = []
    forms: dict[str, list[str]]
    notes: dict[str, list[str]] = {}
    footnotes: list[str] = []
    categories: list[str] = []
    user_specified: set[str] = set()
    pos: str
    num_type: Optional[str] = None
    indecl: bool = False
    overriding_lemma: list[str] = []

    @field_serializer("user_specified")
    def _sorted_user_specified(self, user_specified: set[str]) -> list[str]:
        return sorted(user_specified)


class NounData(DeclensionData):
    declension_type: Literal["noun"] = "noun"
    gender: Optional[Gender] = None


class AdjectiveData(DeclensionData):
    declension_type: Literal["adjective"] = "adjective"
    voc: bool = True
    noneut: bool = False


class PersonalPronounData(BaseModel):
    model_config = ConfigDict(use_enum_values=True)

    template_type: Literal["ppron"] = "ppron"
    forms: dict[str, list[str]]
    pers: Literal[1, 2, 3]
    num: NumberTantum


# --- Dump ingestion ---

class DeclinedEntry(BaseModel):
    title: str
    template: str
    declension: Union[NounData, AdjectiveData, PersonalPronounData]


class DeclensionFailure(BaseModel):
    title: str
    template: str
    error: str


class Dictionary(BaseModel):
    version: int = 1
    entries: list[DeclinedEntry] = []
    failures: list[DeclensionFailure] = []
