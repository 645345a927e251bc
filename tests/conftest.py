"""
Pytest fixtures and configuration for tests.
"""

import pytest

from process_xml.config import Environment, Settings
from process_xml.core.models import ExecutionUnit, Operator
from process_xml.io.filters import ProcessXMLFilterRegistry, create_default_registry


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings."""
    return Settings(
        environment=Environment.TEST,
        debug=True,
        log_level="DEBUG",
    )


@pytest.fixture
def registry(test_settings: Settings) -> ProcessXMLFilterRegistry:
    """Default registry with the AutoModel tagger."""
    return create_default_registry(test_settings)


@pytest.fixture
def operator() -> Operator:
    """A fresh operator with no user data."""
    return Operator(name="Read CSV", operator_class="read_csv")


@pytest.fixture
def sample_process() -> Operator:
    """Sample process: root -> Main[Read, Train[Training[Learner]], Apply]."""
    learner = Operator(
        name="Learner",
        operator_class="gradient_boosted_trees",
        parameters={"number_of_trees": "50"},
    )
    train = Operator(
        name="Train",
        operator_class="cross_validation",
        subprocesses=[ExecutionUnit(name="Training", operators=[learner])],
    )
    main = ExecutionUnit(
        name="Main",
        operators=[
            Operator(
                name="Read",
                operator_class="read_csv",
                parameters={"csv_file": "data/churn.csv", "column_separators": ";"},
            ),
            train,
            Operator(name="Apply", operator_class="apply_model"),
        ],
    )
    return Operator(name="Root", operator_class="process", subprocesses=[main])
