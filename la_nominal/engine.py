import logging
from typing import Optional, Union

from la_nominal.config import DeclensionTables, DeclOptions, load_tables
from la_nominal.errors import TemplateError
from la_nominal.models import AdjectiveData, NounData, PersonalPronounData
from la_nominal.nominal import LaNominal
from la_nominal.pronouns import LaPersonalPronoun
from la_nominal.template import ArgMap, parse_template

logger = logging.getLogger(__name__)

TemplateData = Union[NounData, AdjectiveData, PersonalPronounData]

NOUN_TEMPLATE = "la-ndecl"
ADJECTIVE_TEMPLATE = "la-adecl"
GERUND_TEMPLATE = "la-decl-gerund"
PPRON_TEMPLATE = "la-decl-ppron"

SUPPORTED_TEMPLATES = (NOUN_TEMPLATE, ADJECTIVE_TEMPLATE, GERUND_TEMPLATE, PPRON_TEMPLATE)


class LaEngine:
    """Declines the Latin nominal templates found in Wiktionary wikitext."""

    def __init__(self, options: Optional[DeclOptions] = None, tables: Optional[DeclensionTables] = None):
        self.tables = tables or load_tables()
        self.nominal = LaNominal(options, self.tables)
        self.ppron = LaPersonalPronoun(self.tables)

    def decline_noun(self, template: str) -> NounData:
        return self.nominal.do_generate_noun_forms(parse_template(template))

    def decline_adjective(self, template: str) -> AdjectiveData:
        return self.nominal.do_generate_adj_forms(parse_template(template))

    def decline_gerund(self, template: str) -> NounData:
        args = parse_template(template)
        return self.nominal.do_generate_noun_forms(self._gerund_args(args), pos="gerunds")

    def decline_personal_pronoun(self, template: str) -> PersonalPronounData:
        return self.ppron.make_data(parse_template(template))

    def parse_word(self, template: str) -> TemplateData:
        args = parse_template(template)
        name = args["0"]
        logger.debug(f"Dispatching {{{{{name}}}}}")

        if name == NOUN_TEMPLATE:
            return self.nominal.do_generate_noun_forms(args)
        if name == ADJECTIVE_TEMPLATE:
            return self.nominal.do_generate_adj_forms(args)
        if name == GERUND_TEMPLATE:
            return self.nominal.do_generate_noun_forms(self._gerund_args(args), pos="gerunds")
        if name == PPRON_TEMPLATE:
            return self.ppron.make_data(args)
        raise TemplateError(f"Unknown template {name}")

    @staticmethod
    def _gerund_args(args: ArgMap) -> ArgMap:
        # a gerund declines like a singular second-declension neuter without nominative or vocative
        return {
            **args,
            "0": NOUN_TEMPLATE,
            "1": f"{args.get('1', '')}<2.sg>",
            "nom_sg": "-",
            "voc_sg": "-",
        }
