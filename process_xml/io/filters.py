"""
Filter hooks invoked while a process is written to or read from XML.

Filters get the live operator or execution unit together with the element
representing it, so they can add attributes on export and pick them up
again on import.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Optional
from xml.etree.ElementTree import Element

from process_xml.config import Settings, get_settings
from process_xml.core.models import ExecutionUnit, Operator

logger = logging.getLogger(__name__)


class FilterError(Exception):
    """Raised when a filter fails and the registry is configured to fail fast."""

    def __init__(self, filter_name: str, hook: str, cause: Exception):
        self.filter_name = filter_name
        self.hook = hook
        self.cause = cause
        super().__init__(f"Filter {filter_name} failed in {hook}: {cause}")


class ProcessXMLFilter(ABC):
    """Hooks called for every operator and execution unit during XML export/import."""

    @abstractmethod
    def on_operator_export(self, operator: Operator, element: Element) -> None:
        """Called after the element for an operator has been built."""

    @abstractmethod
    def on_operator_import(self, operator: Operator, element: Element) -> None:
        """Called after an operator has been rebuilt from its element."""

    @abstractmethod
    def on_execution_unit_export(self, unit: ExecutionUnit, element: Element) -> None:
        """Called after the element for an execution unit has been built."""

    @abstractmethod
    def on_execution_unit_import(self, unit: ExecutionUnit, element: Element) -> None:
        """Called after an execution unit has been rebuilt from its element."""


class ProcessXMLFilterRegistry:
    """
    Ordered collection of filters.

    Filters run in registration order. A failing filter is logged and the
    remaining filters still run, unless ``filters.fail_on_error`` is set.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._filters: list[ProcessXMLFilter] = []

    @property
    def filters(self) -> tuple[ProcessXMLFilter, ...]:
        """Get registered filters."""
        return tuple(self._filters)

    def register(self, xml_filter: ProcessXMLFilter) -> None:
        """Register a filter. Registering the same instance twice is ignored."""
        if any(f is xml_filter for f in self._filters):
            return
        self._filters.append(xml_filter)
        logger.info(f"Registered process XML filter {type(xml_filter).__name__}")

    def unregister(self, xml_filter: ProcessXMLFilter) -> bool:
        """Remove a filter. Returns False if it was not registered."""
        for i, f in enumerate(self._filters):
            if f is xml_filter:
                del self._filters[i]
                logger.info(f"Unregistered process XML filter {type(xml_filter).__name__}")
                return True
        return False

    def clear(self) -> None:
        """Remove all filters."""
        self._filters.clear()

    def fire_operator_exported(self, operator: Operator, element: Element) -> None:
        self._fire("on_operator_export", lambda f: f.on_operator_export(operator, element))

    def fire_operator_imported(self, operator: Operator, element: Element) -> None:
        self._fire("on_operator_import", lambda f: f.on_operator_import(operator, element))

    def fire_execution_unit_exported(self, unit: ExecutionUnit, element: Element) -> None:
        self._fire(
            "on_execution_unit_export",
            lambda f: f.on_execution_unit_export(unit, element),
        )

    def fire_execution_unit_imported(self, unit: ExecutionUnit, element: Element) -> None:
        self._fire(
            "on_execution_unit_import",
            lambda f: f.on_execution_unit_import(unit, element),
        )

    def _fire(self, hook: str, call: Callable[[ProcessXMLFilter], None]) -> None:
        for xml_filter in tuple(self._filters):
            try:
                call(xml_filter)
            except Exception as e:
                name = type(xml_filter).__name__
                if self.settings.filters.fail_on_error:
                    raise FilterError(name, hook, e) from e
                logger.warning(f"Process XML filter {name} failed in {hook}: {e}")


def create_default_registry(settings: Optional[Settings] = None) -> ProcessXMLFilterRegistry:
    """Create a registry holding the built-in filters enabled in settings."""
    from process_xml.io.automodel import AutoModelTagger

    registry = ProcessXMLFilterRegistry(settings)
    if registry.settings.filters.automodel_enabled:
        registry.register(AutoModelTagger())
    return registry
