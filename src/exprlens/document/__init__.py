"""Template document files: one resolver query described in YAML or JSON."""

from exprlens.document.loader import TemplateDocument, load_document, parse_document
from exprlens.document.models import DocumentModel

__all__ = ["DocumentModel", "TemplateDocument", "load_document", "parse_document"]
