from enum import Enum


class SpecificationOperator(str, Enum):
    """Supported operators for predicate trees."""

    # Standard comparison
    EQ = "="
    NE = "!="
    GT = ">"
    LT = "<"
    GE = ">="
    LE = "<="
    IN = "in"
    NOT_IN = "not_in"
    BETWEEN = "between"

    # String operations
    CONTAINS = "contains"
    ICONTAINS = "icontains"
    STARTSWITH = "startswith"
    ISTARTSWITH = "istartswith"

    # Null checks
    IS_NULL = "is_null"
    IS_NOT_NULL = "is_not_null"

    # Free-text search over several attributes
    SEARCH = "search"

    # Logical operators
    AND = "and"
    NOT = "not"
