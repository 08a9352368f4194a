from .ast import AttributeSpecification, SearchSpecification, SpecificationFactory
from .base import (
    AndSpecification,
    BaseSpecification,
    LambdaSpecification,
    NotSpecification,
    and_,
)
from .builder import SpecificationBuilder
from .config import DEFAULT_PAGE_SIZE, PaginationSettings
from .evaluator import SpecificationEvaluator, available_fields
from .exceptions import (
    FieldNotFoundError,
    OperatorNotFoundError,
    RelationshipTraversalError,
    SpecificationError,
    UnsupportedPredicateError,
    ValidationError,
)
from .include import IncludePath, IncludeTree, parse_include
from .operators import SpecificationOperator
from .operators_memory import DEFAULT_MEMORY_REGISTRY, build_default_registry
from .pagination import PaginationExecutor
from .repository import ReadRepository
from .soft_delete import SoftDeleteFilterBuilder
from .specification import OrderBy, Specification
from .strategy import MemoryOperator, MemoryOperatorRegistry

__all__ = [
    # Predicates
    "SpecificationOperator",
    "AttributeSpecification",
    "SearchSpecification",
    "SpecificationFactory",
    "BaseSpecification",
    "AndSpecification",
    "NotSpecification",
    "LambdaSpecification",
    "and_",
    # Builder
    "SpecificationBuilder",
    # Read description
    "Specification",
    "OrderBy",
    "IncludePath",
    "IncludeTree",
    "parse_include",
    # Evaluation
    "SoftDeleteFilterBuilder",
    "SpecificationEvaluator",
    "available_fields",
    "PaginationExecutor",
    "PaginationSettings",
    "DEFAULT_PAGE_SIZE",
    "ReadRepository",
    # Strategy
    "MemoryOperator",
    "MemoryOperatorRegistry",
    "DEFAULT_MEMORY_REGISTRY",
    "build_default_registry",
    # Exceptions
    "SpecificationError",
    "ValidationError",
    "OperatorNotFoundError",
    "FieldNotFoundError",
    "RelationshipTraversalError",
    "UnsupportedPredicateError",
]
