"""XML export/import and the filters hooked into it."""

from process_xml.io.automodel import AutoModelState, AutoModelTagger
from process_xml.io.filters import (
    FilterError,
    ProcessXMLFilter,
    ProcessXMLFilterRegistry,
    create_default_registry,
)
from process_xml.io.serializer import (
    ProcessXMLError,
    ProcessXMLExporter,
    ProcessXMLImporter,
    XMLImportError,
)

__all__ = [
    "AutoModelState",
    "AutoModelTagger",
    "FilterError",
    "ProcessXMLFilter",
    "ProcessXMLFilterRegistry",
    "create_default_registry",
    "ProcessXMLError",
    "ProcessXMLExporter",
    "ProcessXMLImporter",
    "XMLImportError",
]
