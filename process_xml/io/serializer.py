"""
XML export and import of processes.

Walks the operator tree and calls the registered filters for every operator
and execution unit it writes or reads.
"""

import logging
from typing import Optional
from xml.etree import ElementTree as ET
from xml.etree.ElementTree import Element

from process_xml import __version__
from process_xml.config import Settings, get_settings
from process_xml.core.models import ExecutionUnit, Operator
from process_xml.io.filters import ProcessXMLFilterRegistry, create_default_registry

logger = logging.getLogger(__name__)

TAG_PROCESS = "process"
TAG_OPERATOR = "operator"
TAG_PARAMETER = "parameter"

ATTRIBUTE_VERSION = "version"
ATTRIBUTE_NAME = "name"
ATTRIBUTE_CLASS = "class"
ATTRIBUTE_KEY = "key"
ATTRIBUTE_VALUE = "value"


class ProcessXMLError(Exception):
    """Base exception for process XML errors."""
    pass


class XMLImportError(ProcessXMLError):
    """Raised when a document cannot be turned into a process."""

    def __init__(self, message: str, element: Optional[Element] = None):
        self.element = element
        super().__init__(message)


class ProcessXMLExporter:
    """Writes operators to XML elements."""

    def __init__(
        self,
        registry: Optional[ProcessXMLFilterRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.registry = registry if registry is not None else create_default_registry(self.settings)

    def export_element(self, operator: Operator) -> Element:
        """Build the element for an operator, including its subprocesses."""
        element = Element(TAG_OPERATOR)
        element.set(ATTRIBUTE_NAME, operator.name)
        element.set(ATTRIBUTE_CLASS, operator.operator_class)

        for key, value in operator.parameters.items():
            ET.SubElement(element, TAG_PARAMETER, {ATTRIBUTE_KEY: key, ATTRIBUTE_VALUE: value})

        for unit in operator.subprocesses:
            element.append(self._export_unit(unit))

        self.registry.fire_operator_exported(operator, element)
        return element

    def _export_unit(self, unit: ExecutionUnit) -> Element:
        element = Element(TAG_PROCESS)
        element.set(ATTRIBUTE_NAME, unit.name)
        for op in unit.operators:
            element.append(self.export_element(op))
        self.registry.fire_execution_unit_exported(unit, element)
        return element

    def export_document(self, root: Operator) -> Element:
        """Build a full document element with the root operator inside."""
        document = Element(TAG_PROCESS)
        document.set(ATTRIBUTE_VERSION, __version__)
        document.append(self.export_element(root))
        return document

    def to_string(self, root: Operator) -> str:
        """Serialize a process to an XML string."""
        document = self.export_document(root)
        if self.settings.xml.pretty_print:
            ET.indent(document, space=self.settings.xml.indent)
        text = ET.tostring(document, encoding=self.settings.xml.encoding)
        if isinstance(text, bytes):
            text = text.decode(self.settings.xml.encoding)
        logger.debug(f"Exported process '{root.name}' ({len(text)} chars)")
        return text


class ProcessXMLImporter:
    """Rebuilds operators from XML elements."""

    def __init__(
        self,
        registry: Optional[ProcessXMLFilterRegistry] = None,
        settings: Optional[Settings] = None,
    ):
        self.settings = settings or get_settings()
        self.registry = registry if registry is not None else create_default_registry(self.settings)

    def from_string(self, text: str) -> Operator:
        """Parse an XML document and return its root operator."""
        try:
            document = ET.fromstring(text)
        except ET.ParseError as e:
            raise XMLImportError(f"Malformed process XML: {e}") from e
        return self.import_document(document)

    def import_document(self, document: Element) -> Operator:
        """Import the root operator from a document element."""
        if document.tag != TAG_PROCESS:
            raise XMLImportError(
                f"Expected <{TAG_PROCESS}> root element, found <{document.tag}>",
                document,
            )
        operators = document.findall(TAG_OPERATOR)
        if len(operators) != 1:
            raise XMLImportError(
                f"Expected exactly one root <{TAG_OPERATOR}>, found {len(operators)}",
                document,
            )
        version = document.get(ATTRIBUTE_VERSION)
        if version and version != __version__:
            logger.info(f"Importing process written by version {version}")
        return self.import_element(operators[0])

    def import_element(self, element: Element) -> Operator:
        """Rebuild an operator and its subprocesses from an element."""
        name = element.get(ATTRIBUTE_NAME)
        operator_class = element.get(ATTRIBUTE_CLASS)
        if not name or not operator_class:
            raise XMLImportError(
                f"<{TAG_OPERATOR}> requires '{ATTRIBUTE_NAME}' and '{ATTRIBUTE_CLASS}' attributes",
                element,
            )

        parameters: dict[str, str] = {}
        for param in element.findall(TAG_PARAMETER):
            key = param.get(ATTRIBUTE_KEY)
            if not key:
                raise XMLImportError(f"Parameter of '{name}' has no key", param)
            parameters[key] = param.get(ATTRIBUTE_VALUE, "")

        subprocesses = [self._import_unit(child) for child in element.findall(TAG_PROCESS)]

        try:
            operator = Operator(
                name=name,
                operator_class=operator_class,
                parameters=parameters,
                subprocesses=subprocesses,
            )
        except ValueError as e:
            raise XMLImportError(f"Invalid operator '{name}': {e}", element) from e

        self.registry.fire_operator_imported(operator, element)
        return operator

    def _import_unit(self, element: Element) -> ExecutionUnit:
        name = element.get(ATTRIBUTE_NAME)
        if not name:
            raise XMLImportError(f"<{TAG_PROCESS}> requires a '{ATTRIBUTE_NAME}' attribute", element)
        operators = [self.import_element(child) for child in element.findall(TAG_OPERATOR)]
        try:
            unit = ExecutionUnit(name=name, operators=operators)
        except ValueError as e:
            raise XMLImportError(f"Invalid execution unit '{name}': {e}", element) from e
        self.registry.fire_execution_unit_imported(unit, element)
        return unit
