"""
Exported Symbols
================

Declarations of variables and functions that appear in generated code, and
the namespace qualifier that keeps symbols of different generated modules
apart.

Example:
    >>> ns = Namespace("quad")
    >>> reset = ExportVariable("resetIntegrator", call_by_value=True)
    >>> reset.full_name(ns)
    'quadVariables.resetIntegrator'
    >>> ExportFunction("integrate").full_name(ns)
    'quad_integrate'
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .exceptions import InvalidInputError
from .utils.validation import validate_identifier


class ExportType(Enum):
    """Scalar type of an exported variable."""
    INT = "int"
    REAL = "real_t"

    def __str__(self) -> str:
        return self.value


class DataStruct(Enum):
    """Global structure an exported variable lives in."""
    VARIABLES = "Variables"
    WORKSPACE = "Workspace"
    LOCAL = ""


@dataclass(frozen=True)
class Namespace:
    """
    Prefix qualifying every exported symbol.

    Args:
        prefix: C identifier shared by all symbols of one generated module
    """
    prefix: str = "export"

    def __post_init__(self):
        valid, msg = validate_identifier(self.prefix)
        if not valid:
            raise InvalidInputError(f"namespace: {msg}")

    def struct_name(self, data_struct: DataStruct) -> Optional[str]:
        """Name of the global struct, ``None`` for local variables."""
        if data_struct is DataStruct.LOCAL:
            return None
        return f"{self.prefix}{data_struct.value}"

    def qualify(self, name: str) -> str:
        """Qualified name of a free function."""
        return f"{self.prefix}_{name}"

    def __str__(self) -> str:
        return self.prefix


@dataclass(frozen=True)
class ExportVariable:
    """
    Variable declared in generated code.

    Args:
        name: Member name inside its struct
        rows: Number of rows. Defaults to 1.
        cols: Number of columns. Defaults to 1.
        dtype: Scalar type. Defaults to INT.
        data_struct: Owning struct. Defaults to VARIABLES.
        call_by_value: Passed by value instead of by pointer. Defaults to False.
    """
    name: str
    rows: int = 1
    cols: int = 1
    dtype: ExportType = ExportType.INT
    data_struct: DataStruct = DataStruct.VARIABLES
    call_by_value: bool = False

    def __post_init__(self):
        valid, msg = validate_identifier(self.name)
        if not valid:
            raise InvalidInputError(msg)
        if self.rows < 1 or self.cols < 1:
            raise InvalidInputError(
                f"variable '{self.name}' must be at least 1x1, got {self.rows}x{self.cols}"
            )

    @property
    def dim(self) -> int:
        return self.rows * self.cols

    @property
    def is_scalar(self) -> bool:
        return self.rows == 1 and self.cols == 1

    def full_name(self, namespace: Namespace) -> str:
        """Name as referenced from generated code."""
        struct = namespace.struct_name(self.data_struct)
        if struct is None:
            return self.name
        return f"{struct}.{self.name}"


@dataclass(frozen=True)
class ExportFunction:
    """Function declared in generated code."""
    name: str

    def __post_init__(self):
        valid, msg = validate_identifier(self.name)
        if not valid:
            raise InvalidInputError(msg)

    def full_name(self, namespace: Namespace) -> str:
        return namespace.qualify(self.name)
