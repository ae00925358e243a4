class DeclensionError(ValueError):
    """Base class for every failure raised while declining a template."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class TemplateError(DeclensionError):
    """The template text could not be tokenized or names an unsupported template."""


class GrammarError(DeclensionError):
    """A segment run, segment or alternant is malformed."""


class ClassificationError(DeclensionError):
    """A lemma does not end in anything the requested declension class accepts."""


class RegistryError(DeclensionError):
    """No generator or irregular paradigm is registered under the requested name."""


class AgreementError(DeclensionError):
    """A noun/adjective mix inside a segment run cannot be reconciled."""
