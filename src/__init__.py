"""docquery: document-grounded question answering over a hosted LLM."""

from docquery.version import __version__

__all__ = ["__version__"]
