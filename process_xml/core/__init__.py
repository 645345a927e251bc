"""Core domain models."""

from process_xml.core.models import ExecutionUnit, Operator, UserData

__all__ = [
    "ExecutionUnit",
    "Operator",
    "UserData",
]
