"""
Unit tests for domain models.
"""

import pytest

from process_xml.core.models import ExecutionUnit, Operator, UserData


class Counter:
    """User data with per-instance state; copies get a fresh counter."""

    def __init__(self, value: int = 0):
        self.value = value
        self.parent = None

    def copy_user_data(self, new_parent):
        copy = Counter(self.value)
        copy.parent = new_parent
        return copy


class TestOperator:
    """Tests for Operator model."""

    def test_minimal_operator(self):
        """Test operator with only required fields."""
        op = Operator(name="Read", operator_class="read_csv")

        assert op.name == "Read"
        assert op.operator_class == "read_csv"
        assert op.parameters == {}
        assert op.subprocesses == []

    def test_empty_name_rejected(self):
        """Test that empty name is rejected."""
        with pytest.raises(ValueError):
            Operator(name="", operator_class="read_csv")

    def test_empty_class_rejected(self):
        """Test that empty operator class is rejected."""
        with pytest.raises(ValueError):
            Operator(name="Read", operator_class="")

    def test_duplicate_subprocess_names_rejected(self):
        """Test that execution unit names must be unique."""
        with pytest.raises(ValueError):
            Operator(
                name="Loop",
                operator_class="loop",
                subprocesses=[ExecutionUnit(name="Body"), ExecutionUnit(name="Body")],
            )

    def test_user_data_absent_by_default(self):
        """Test that unknown keys return None."""
        op = Operator(name="Read", operator_class="read_csv")

        assert op.get_user_data("missing") is None
        assert op.user_data_keys() == []

    def test_set_and_get_user_data(self):
        """Test storing and reading user data."""
        op = Operator(name="Read", operator_class="read_csv")
        counter = Counter(3)

        op.set_user_data("counter", counter)

        assert op.get_user_data("counter") is counter
        assert op.user_data_keys() == ["counter"]

    def test_set_user_data_overwrites(self):
        """Test that setting a key again replaces the value."""
        op = Operator(name="Read", operator_class="read_csv")
        op.set_user_data("counter", Counter(1))
        second = Counter(2)

        op.set_user_data("counter", second)

        assert op.get_user_data("counter") is second

    def test_remove_user_data(self):
        """Test removing user data."""
        op = Operator(name="Read", operator_class="read_csv")
        counter = Counter()
        op.set_user_data("counter", counter)

        assert op.remove_user_data("counter") is counter
        assert op.get_user_data("counter") is None
        assert op.remove_user_data("counter") is None

    def test_user_data_not_serialized(self):
        """Test that user data stays out of the model dump."""
        op = Operator(name="Read", operator_class="read_csv")
        op.set_user_data("counter", Counter())

        assert "_user_data" not in op.model_dump()
        assert set(op.model_dump()) == {"name", "operator_class", "parameters", "subprocesses"}

    def test_counter_satisfies_user_data_protocol(self):
        """Test runtime protocol check for user data values."""
        assert isinstance(Counter(), UserData)
        assert not isinstance("plain string", UserData)

    def test_all_inner_operators_depth_first(self, sample_process):
        """Test depth-first listing of nested operators."""
        names = [op.name for op in sample_process.all_inner_operators()]

        assert names == ["Read", "Train", "Learner", "Apply"]


class TestOperatorCopy:
    """Tests for structural copies of operators."""

    def test_copy_keeps_structure(self, sample_process):
        """Test that copy reproduces fields and nested operators."""
        copy = sample_process.copy_operator()

        assert copy is not sample_process
        assert copy.model_dump() == sample_process.model_dump()

    def test_copy_is_independent(self, sample_process):
        """Test that mutating the copy leaves the original unchanged."""
        copy = sample_process.copy_operator()

        copy.subprocesses[0].operators[0].parameters["csv_file"] = "other.csv"

        original = sample_process.subprocesses[0].get_operator("Read")
        assert original.parameters["csv_file"] == "data/churn.csv"

    def test_copy_with_new_name(self, operator):
        """Test renaming while copying."""
        copy = operator.copy_operator(name="Read CSV (2)")

        assert copy.name == "Read CSV (2)"
        assert operator.name == "Read CSV"

    def test_copy_uses_copy_user_data(self, operator):
        """Test that user data is copied through copy_user_data."""
        counter = Counter(7)
        operator.set_user_data("counter", counter)

        copy = operator.copy_operator()
        copied = copy.get_user_data("counter")

        assert copied is not counter
        assert copied.value == 7
        assert copied.parent is copy

    def test_copy_copies_nested_user_data(self, sample_process):
        """Test that nested operators carry their user data into the copy."""
        learner = sample_process.all_inner_operators()[2]
        learner.set_user_data("counter", Counter(1))

        copy = sample_process.copy_operator()
        copied_learner = copy.all_inner_operators()[2]

        assert copied_learner.get_user_data("counter").value == 1
        assert copied_learner.get_user_data("counter").parent is copied_learner


class TestExecutionUnit:
    """Tests for ExecutionUnit model."""

    def test_empty_unit(self):
        """Test unit without operators."""
        unit = ExecutionUnit(name="Main")

        assert unit.operators == []
        assert unit.get_operator("Read") is None

    def test_duplicate_operator_names_rejected(self):
        """Test that operator names must be unique within a unit."""
        with pytest.raises(ValueError):
            ExecutionUnit(
                name="Main",
                operators=[
                    Operator(name="Read", operator_class="read_csv"),
                    Operator(name="Read", operator_class="read_excel"),
                ],
            )

    def test_add_operator(self, operator):
        """Test appending an operator."""
        unit = ExecutionUnit(name="Main")

        unit.add_operator(operator)

        assert unit.get_operator("Read CSV") is operator

    def test_add_duplicate_operator_rejected(self, operator):
        """Test that adding a second operator with the same name fails."""
        unit = ExecutionUnit(name="Main", operators=[operator])

        with pytest.raises(ValueError):
            unit.add_operator(Operator(name="Read CSV", operator_class="read_csv"))

    def test_unit_keeps_operator_instances(self, operator):
        """Test that building a unit does not copy operators (user data survives)."""
        operator.set_user_data("counter", Counter(4))

        unit = ExecutionUnit(name="Main", operators=[operator])

        assert unit.operators[0] is operator
        assert unit.operators[0].get_user_data("counter").value == 4
