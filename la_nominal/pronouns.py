from typing import Optional

from la_nominal.config import DeclensionTables, load_tables
from la_nominal.models import PersonalPronounData
from la_nominal.template import ArgMap


class LaPersonalPronoun:
    """{{la-decl-ppron|X}}: fixed paradigms of ego, nōs, tū, vōs and sē."""

    def __init__(self, tables: Optional[DeclensionTables] = None):
        self.tables = tables or load_tables()

    def make_data(self, args: ArgMap) -> PersonalPronounData:
        # a missing or empty lemma means ego
        paradigm = self.tables.pronoun(args.get("1"))
        return PersonalPronounData(
            forms={slot: list(forms) for slot, forms in paradigm.forms.items()},
            pers=paradigm.pers,
            num=paradigm.num,
        )
