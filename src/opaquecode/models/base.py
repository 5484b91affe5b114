"""Base class for declarative error-code types.

This module provides the ErrorCode class. Subclasses declare their cases (and,
for nested error codes, the ErrorCode type of each case's payload) as
ClassVar attributes. Each subclass then gets an ``opaque_code`` property and a
``from_opaque_code()`` constructor backed by a generated code table.
"""

from __future__ import annotations

import logging
import sys
import threading
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Type, Union

from pydantic import BaseModel, ConfigDict, model_validator

from ..codec.assigner import assign
from ..codec.collisions import check
from ..codec.decoder import CodeValue, decode
from ..codec.encoder import encode
from ..codec.schema import SchemaModel, Variant
from ..codec.table import CodeTable
from ..config import GenerationConfig
from ..exceptions import CodeCollisionError, SchemaError

logger = logging.getLogger(__name__)

CaseChild = Union[Type["ErrorCode"], str, None]

_REGISTRY: Dict[str, List[Type[ErrorCode]]] = {}
_SCHEMAS: Dict[Type[ErrorCode], SchemaModel] = {}
_TABLES: Dict[Type[ErrorCode], CodeTable] = {}
_BUILDING: List[Type[ErrorCode]] = []
_LOCK = threading.RLock()


class ErrorCode(BaseModel):
    """Base class for error codes with opaque, reversible codes.

    Cases are declared in ``opaque_code_cases``, mapping each case name to
    None (a leaf) or to the ErrorCode subclass of its payload. A payload class
    defined later in the same module can be named by string.

    Code generation can be configured per class:

    Example:
        >>> class HTTPStatusCode(ErrorCode):
        ...     opaque_code_cases = {"badRequest": None, "notFound": None}
        ...     opaque_code_length = 6
        >>>
        >>> class NetworkingErrorCode(ErrorCode):
        ...     opaque_code_cases = {
        ...         "httpStatusCode": HTTPStatusCode,
        ...         "noInternet": None,
        ...         "badRequest": None,
        ...     }
        >>>
        >>> error = NetworkingErrorCode.of("httpStatusCode", HTTPStatusCode.of("badRequest"))
        >>> error.opaque_code
        'gjmR-Tk1iR6'
        >>> NetworkingErrorCode.from_opaque_code("gjmR-Tk1iR6") == error
        True

    Attributes:
        opaque_code_cases: Case name -> payload ErrorCode type (or None for leaves)
        opaque_code_length: Generated code length (default 4)
        opaque_code_alphabet: Characters codes are drawn from (default [0-9A-Za-z])
        opaque_code_delimiter: Separator before the payload's code (default "-")
        opaque_codes: Manual codes per case; when set, no codes are generated
    """

    model_config = ConfigDict(
        # Instances are values: hashable and immutable
        frozen=True,
        # Forbid extra fields not defined in schema
        extra="forbid",
    )

    case: str
    child: Optional[ErrorCode] = None

    # opaquecode-specific class variables
    opaque_code_cases: ClassVar[Mapping[str, CaseChild]] = {}
    opaque_code_length: ClassVar[Optional[int]] = None
    opaque_code_alphabet: ClassVar[Optional[str]] = None
    opaque_code_delimiter: ClassVar[Optional[str]] = None
    opaque_codes: ClassVar[Optional[Mapping[str, str]]] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Register the subclass so payload types can be referenced by name."""
        super().__init_subclass__(**kwargs)
        _REGISTRY.setdefault(cls.__name__, []).append(cls)

    @model_validator(mode="after")
    def _check_case(self) -> ErrorCode:
        cls = type(self)
        if cls is ErrorCode:
            raise ValueError("ErrorCode is abstract; instantiate a subclass")
        if self.case not in cls.opaque_code_cases:
            raise ValueError(f"{cls.__name__} has no case {self.case!r}")

        child_type = cls._child_type(self.case)
        if child_type is None:
            if self.child is not None:
                raise ValueError(f"{cls.__name__}.{self.case} takes no payload")
        elif not isinstance(self.child, child_type):
            raise ValueError(
                f"{cls.__name__}.{self.case} requires a {child_type.__name__} payload, "
                f"got {type(self.child).__name__}"
            )
        return self

    @classmethod
    def of(cls, case: str, child: Optional[ErrorCode] = None) -> ErrorCode:
        """Create an instance of ``case`` with an optional payload."""
        return cls(case=case, child=child)

    @classmethod
    def generation_config(cls) -> GenerationConfig:
        """Generation config assembled from the class variables.

        Class variables left at None take the defaults.

        Raises:
            ConfigError: If a class variable holds an invalid value
        """
        settings: Dict[str, Any] = {}
        if cls.opaque_code_length is not None:
            settings["code_length"] = cls.opaque_code_length
        if cls.opaque_code_alphabet is not None:
            settings["alphabet"] = cls.opaque_code_alphabet
        if cls.opaque_code_delimiter is not None:
            settings["delimiter"] = cls.opaque_code_delimiter
        return GenerationConfig(**settings)

    @classmethod
    def opaque_code_schema(cls) -> SchemaModel:
        """Schema of this class, including the schemas of all payload types.

        Raises:
            SchemaError: If payload types reference each other in a cycle, or
                a payload type cannot be resolved
        """
        with _LOCK:
            cached = _SCHEMAS.get(cls)
            if cached is not None:
                return cached

            if cls in _BUILDING:
                cycle = " -> ".join(c.__name__ for c in _BUILDING[_BUILDING.index(cls) :] + [cls])
                raise SchemaError(f"Cyclic error code payloads: {cycle}")

            _BUILDING.append(cls)
            try:
                variants = []
                for case in cls.opaque_code_cases:
                    child_type = cls._child_type(case)
                    child = child_type.opaque_code_schema() if child_type is not None else None
                    variants.append(Variant(case, child))
                schema = SchemaModel(cls.__name__, variants)
            finally:
                _BUILDING.pop()

            _SCHEMAS[cls] = schema
            return schema

    @classmethod
    def build_opaque_code_table(cls) -> CodeTable:
        """Build this class's code table without caching it or checking collisions.

        Payload types get tables built from their own class variables.

        Raises:
            SchemaError: If the schema or the manual codes are invalid
        """
        schema = cls.opaque_code_schema()
        config = cls.generation_config()
        child_tables = {}
        for case in cls.opaque_code_cases:
            child_type = cls._child_type(case)
            if child_type is not None:
                child_tables[case] = child_type.build_opaque_code_table()

        if cls.opaque_codes is not None:
            return CodeTable.manual(schema, cls.opaque_codes, config, child_tables=child_tables)
        return assign(schema, config, child_tables=child_tables)

    @classmethod
    def opaque_code_table(cls) -> CodeTable:
        """Code table of this class, built on first use.

        The table and every payload table are checked for collisions before
        the table is used; a collision is treated as fatal.

        Raises:
            CodeCollisionError: If two cases of this class (or of a payload
                type) share a code
            SchemaError: If the schema or the manual codes are invalid
        """
        with _LOCK:
            cached = _TABLES.get(cls)
            if cached is not None:
                return cached

            table = cls.build_opaque_code_table()
            result = check(table, recursive=True)
            if not result.ok:
                collisions = "; ".join(str(group) for group in result.groups)
                logger.error("Refusing to use code table of %s: %s", cls.__name__, collisions)
                raise CodeCollisionError(
                    result.groups,
                    f"{cls.__name__}: opaque code collision: {collisions}. "
                    f"{'; or '.join(result.remediations())}",
                )

            _TABLES[cls] = table
            return table

    @property
    def opaque_code(self) -> str:
        """Composite code of this value, safe to show to a user."""
        child_code = self.child.opaque_code if self.child is not None else None
        return encode(type(self).opaque_code_table(), self.case, child_code)

    @classmethod
    def from_opaque_code(cls, opaque_code: str) -> ErrorCode:
        """Reconstruct a value from its composite code.

        Raises:
            DecodeError: If the code does not decode against this class's table
        """
        return cls._from_value(decode(cls.opaque_code_table(), opaque_code))

    @classmethod
    def _from_value(cls, value: CodeValue) -> ErrorCode:
        child = None
        if value.child is not None:
            child_type = cls._child_type(value.variant.name)
            if child_type is None:
                raise SchemaError(f"{cls.__name__}.{value.variant.name} takes no payload")
            child = child_type._from_value(value.child)
        return cls(case=value.variant.name, child=child)

    @classmethod
    def _child_type(cls, case: str) -> Optional[Type[ErrorCode]]:
        declared = cls.opaque_code_cases[case]
        if declared is None:
            return None
        if isinstance(declared, str):
            return _resolve(cls, declared)
        if isinstance(declared, type) and issubclass(declared, ErrorCode):
            return declared
        raise SchemaError(
            f"{cls.__name__}.{case}: payload must be an ErrorCode subclass, got {declared!r}"
        )

    def __str__(self) -> str:
        if self.child is None:
            return f"{type(self).__name__}.{self.case}"
        return f"{type(self).__name__}.{self.case}({self.child})"


def _resolve(owner: Type[ErrorCode], name: str) -> Type[ErrorCode]:
    module = sys.modules.get(owner.__module__)
    candidate = getattr(module, name, None) if module is not None else None
    if isinstance(candidate, type) and issubclass(candidate, ErrorCode):
        return candidate

    registered = _REGISTRY.get(name, [])
    if len(registered) == 1:
        return registered[0]
    if not registered:
        raise SchemaError(f"{owner.__name__}: unknown payload type {name!r}")
    raise SchemaError(
        f"{owner.__name__}: payload type {name!r} is ambiguous; pass the class instead of its name"
    )
