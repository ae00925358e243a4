from la_nominal.config import DeclOptions
from la_nominal.engine import LaEngine
from la_nominal.errors import DeclensionError

__all__ = ["DeclOptions", "DeclensionError", "LaEngine"]
