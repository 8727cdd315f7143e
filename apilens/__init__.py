"""Quality tools for OpenAPI and Discovery API descriptions: naming rules, description checks, vocabularies and schema generation."""

__version__ = "0.1.0"

__all__ = [
    "document",
    "extract",
    "lint",
    "lint_results",
    "linters",
    "rules",
    "schemagen",
    "sourceinfo",
    "specmodel",
    "vocabulary",
]