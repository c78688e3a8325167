"""
OpenAPI to TypeScript generator.

Reads OpenAPI YAML documents and writes typed DTO declarations plus a
client class whose methods build request URLs.
"""

from .config import GeneratorOptions
from .loader import parse_document
from .pipeline import RunSummary, generate_all, generate_document

__version__ = "0.1.0"

__all__ = [
    "GeneratorOptions",
    "RunSummary",
    "generate_all",
    "generate_document",
    "parse_document",
]
