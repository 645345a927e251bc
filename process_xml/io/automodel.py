"""
Tagging of operators generated or exported by the AutoModel wizard.

The tag lives in the operator's user data and is mirrored to the
``automodel`` attribute of the operator's XML element.
"""

import logging
from enum import Enum
from typing import Any, Optional
from xml.etree.ElementTree import Element

from process_xml.core.models import ExecutionUnit, Operator
from process_xml.io.filters import ProcessXMLFilter

logger = logging.getLogger(__name__)

KEY_AUTOMODEL = "automodel"

XML_ATTRIBUTE_AUTOMODEL = "automodel"


class AutoModelState(Enum):
    """
    Marks an operator as touched by the AutoModel wizard.

    GENERATED is attached right after the wizard generates an operator.
    EXPORTED is attached to operators exported as part of a process from
    the wizard.
    """

    GENERATED = "GENERATED"
    EXPORTED = "EXPORTED"

    def copy_user_data(self, new_parent: Any) -> "AutoModelState":
        """Members are stateless, so copies share the same instance."""
        return self

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["AutoModelState"]:
        """Decode a state from its exact member name, or None if it is not one."""
        if not value:
            return None
        return cls.__members__.get(value)


class AutoModelTagger(ProcessXMLFilter):
    """Writes and reads the AutoModel state of operators in process XML."""

    def on_operator_export(self, operator: Operator, element: Element) -> None:
        state = self.get_state(operator)
        if state is not None:
            element.set(XML_ATTRIBUTE_AUTOMODEL, state.name)

    def on_operator_import(self, operator: Operator, element: Element) -> None:
        value = element.get(XML_ATTRIBUTE_AUTOMODEL, "")
        state = AutoModelState.parse(value)
        if state is None:
            if value:
                logger.debug(f"Ignoring unknown automodel value {value!r} on '{operator.name}'")
            return
        operator.set_user_data(KEY_AUTOMODEL, state)

    def on_execution_unit_export(self, unit: ExecutionUnit, element: Element) -> None:
        pass

    def on_execution_unit_import(self, unit: ExecutionUnit, element: Element) -> None:
        pass

    @staticmethod
    def get_state(operator: Operator) -> Optional[AutoModelState]:
        """
        Get the AutoModel state of an operator.

        Returns None if the operator was neither generated by nor exported
        from the wizard.
        """
        value = operator.get_user_data(KEY_AUTOMODEL)
        if isinstance(value, AutoModelState):
            return value
        return None

    @staticmethod
    def set_state(operator: Operator, state: Optional[AutoModelState]) -> None:
        """
        Mark an operator as generated by or exported from the wizard.

        Does nothing if state is None; an existing tag is never cleared.
        """
        if state is not None:
            operator.set_user_data(KEY_AUTOMODEL, state)
