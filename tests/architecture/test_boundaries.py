from pytest_archon import archrule


def test_core_independence() -> None:
    """
    Core must not import the specification engine, persistence or features.
    It is the foundation and must remain independent.
    """
    (
        archrule("core_is_independent")
        .match("queryspec_core*")
        .should_not_import("queryspec_specifications*")
        .should_not_import("queryspec_persistence_sqlalchemy*")
        .should_not_import("queryspec_filtering*")
        .check("queryspec_core")
    )


def test_specifications_are_storage_agnostic() -> None:
    """
    The specification engine talks to storage only through query sources.
    It must not import SQLAlchemy or any persistence package.
    """
    (
        archrule("specifications_storage_agnostic")
        .match("queryspec_specifications*")
        .should_not_import("sqlalchemy*")
        .should_not_import("queryspec_persistence_sqlalchemy*")
        .should_not_import("queryspec_filtering*")
        .check("queryspec_specifications")
    )


def test_persistence_layering() -> None:
    """
    Persistence may import Core and the specification engine, never features.
    """
    (
        archrule("persistence_layering")
        .match("queryspec_persistence_sqlalchemy*")
        .should_not_import("queryspec_filtering*")
        .check("queryspec_persistence_sqlalchemy")
    )


def test_filtering_no_persistence() -> None:
    """Filtering builds specifications; it must not know about storage."""
    (
        archrule("filtering_no_persistence")
        .match("queryspec_filtering*")
        .should_not_import("queryspec_persistence_*")
        .should_not_import("sqlalchemy*")
        .check("queryspec_filtering")
    )


def test_domain_isolation() -> None:
    """
    Domain layer should be self-contained.
    It must not import from adapters or ports.
    """
    (
        archrule("domain_isolation")
        .match("queryspec_core.domain*")
        .should_not_import("queryspec_core.adapters*")
        .should_not_import("queryspec_core.ports*")
        .check("queryspec_core")
    )


def test_primitives_isolation() -> None:
    """
    Primitives layer is the lowest level.
    It must not import from domain, adapters or ports.
    """
    (
        archrule("primitives_isolation")
        .match("queryspec_core.primitives*")
        .should_not_import("queryspec_core.domain*")
        .should_not_import("queryspec_core.adapters*")
        .should_not_import("queryspec_core.ports*")
        .check("queryspec_core")
    )


def test_ports_layering() -> None:
    """
    Ports (interfaces) should not depend on Adapters (implementations).
    """
    (
        archrule("ports_layering")
        .match("queryspec_core.ports*")
        .should_not_import("queryspec_core.adapters*")
        .check("queryspec_core")
    )
