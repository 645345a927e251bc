"""
Domain models for processes: operators and the execution units they contain.

Operators carry a user data store for arbitrary tags attached by other parts
of the application. Values in the store are not serialized with the model.
"""

from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, Field, PrivateAttr, field_validator


@runtime_checkable
class UserData(Protocol):
    """A value that can be attached to an operator's user data."""

    def copy_user_data(self, new_parent: Any) -> "UserData":
        """Return the value to attach to ``new_parent`` when its owner is copied."""
        ...


class Operator(BaseModel):
    """A single node of a process."""

    name: str = Field(..., min_length=1, max_length=255, description="Operator name")
    operator_class: str = Field(..., min_length=1, description="Operator type key")
    parameters: dict[str, str] = Field(default_factory=dict, description="Parameter values")
    subprocesses: list["ExecutionUnit"] = Field(
        default_factory=list,
        description="Execution units nested in this operator",
    )

    _user_data: dict[str, UserData] = PrivateAttr(default_factory=dict)

    @field_validator("subprocesses")
    @classmethod
    def validate_unique_subprocess_names(cls, v: list["ExecutionUnit"]) -> list["ExecutionUnit"]:
        """Ensure execution unit names are unique within an operator."""
        names = [unit.name for unit in v]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate execution unit names: {names}")
        return v

    def get_user_data(self, key: str) -> Optional[UserData]:
        """Get the user data stored under key, or None."""
        return self._user_data.get(key)

    def set_user_data(self, key: str, value: UserData) -> None:
        """Store user data under key, replacing any previous value."""
        self._user_data[key] = value

    def remove_user_data(self, key: str) -> Optional[UserData]:
        """Remove and return the user data stored under key."""
        return self._user_data.pop(key, None)

    def user_data_keys(self) -> list[str]:
        """Get all user data keys in insertion order."""
        return list(self._user_data)

    def copy_operator(self, name: Optional[str] = None) -> "Operator":
        """
        Create a structural copy of this operator and its subprocesses.

        User data is carried over through ``copy_user_data`` so that each
        value decides what the copy receives.

        Args:
            name: Name for the copy; defaults to this operator's name
        """
        copy = Operator(
            name=name or self.name,
            operator_class=self.operator_class,
            parameters=dict(self.parameters),
            subprocesses=[unit.copy_unit() for unit in self.subprocesses],
        )
        for key, value in self._user_data.items():
            copy.set_user_data(key, value.copy_user_data(copy))
        return copy

    def all_inner_operators(self) -> list["Operator"]:
        """Get all nested operators, depth first."""
        operators: list[Operator] = []
        for unit in self.subprocesses:
            for op in unit.operators:
                operators.append(op)
                operators.extend(op.all_inner_operators())
        return operators


class ExecutionUnit(BaseModel):
    """A container of operators (a subprocess)."""

    name: str = Field(..., min_length=1, max_length=255, description="Execution unit name")
    operators: list[Operator] = Field(default_factory=list)

    @field_validator("operators")
    @classmethod
    def validate_unique_operator_names(cls, v: list[Operator]) -> list[Operator]:
        """Ensure operator names are unique within the unit."""
        names = [op.name for op in v]
        if len(names) != len(set(names)):
            duplicates = [x for x in names if names.count(x) > 1]
            raise ValueError(f"Duplicate operator names found: {set(duplicates)}")
        return v

    def get_operator(self, name: str) -> Optional[Operator]:
        """Get operator by name."""
        for op in self.operators:
            if op.name == name:
                return op
        return None

    def add_operator(self, operator: Operator) -> None:
        """Append an operator, rejecting duplicate names."""
        if self.get_operator(operator.name) is not None:
            raise ValueError(f"Operator '{operator.name}' already exists in '{self.name}'")
        self.operators.append(operator)

    def copy_unit(self) -> "ExecutionUnit":
        """Create a structural copy of this unit and its operators."""
        return ExecutionUnit(
            name=self.name,
            operators=[op.copy_operator() for op in self.operators],
        )


Operator.model_rebuild()
