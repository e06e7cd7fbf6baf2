"""
Export Configuration
====================

Generation-wide flags consumed by the code-emission backend.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Mapping, Optional

import numpy as np

from .exceptions import InvalidInputError
from .layout import DerivativeLayout


def read_flag(options: Mapping[str, Any], key: str, default: bool) -> bool:
    """Boolean option from the caller's mapping; other value types are rejected."""
    value = options.get(key, default)
    if not isinstance(value, (bool, np.bool_)):
        raise InvalidInputError(f"option '{key}' must be a bool, got {value!r}")
    return bool(value)


@dataclass(frozen=True)
class ExportConfiguration:
    """
    Flags deciding which code gets emitted.

    Instances are immutable; use the ``with_*`` helpers to derive updated
    values.

    Args:
        export_rhs_inline: Generate code for the right-hand side instead of
            calling external functions. Defaults to True.
        equidistant: The integration grid is uniform. Defaults to True.
        sparse_derivatives: Export derivative matrices in compressed-row
            layout instead of dense. Defaults to False.

    Example:
        >>> config = ExportConfiguration.from_options({"sparse_derivatives": True})
        >>> config.with_external_rhs().export_rhs_inline
        False
    """
    export_rhs_inline: bool = True
    equidistant: bool = True
    sparse_derivatives: bool = False

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]] = None) -> "ExportConfiguration":
        """Initial configuration for an export session."""
        options = options or {}
        return cls(sparse_derivatives=read_flag(options, "sparse_derivatives", False))

    def with_external_rhs(self) -> "ExportConfiguration":
        return replace(self, export_rhs_inline=False)

    def with_generated_rhs(self) -> "ExportConfiguration":
        return replace(self, export_rhs_inline=True)

    def with_equidistant(self, equidistant: bool) -> "ExportConfiguration":
        return replace(self, equidistant=bool(equidistant))

    def derivative_layout(self, pattern) -> DerivativeLayout:
        """
        Storage layout for a derivative matrix with the given sparsity pattern.

        Compressed-row when ``sparse_derivatives`` is set, dense otherwise.
        """
        return DerivativeLayout.from_pattern(pattern, sparse=self.sparse_derivatives)
