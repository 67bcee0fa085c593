"""Errors raised while building translation catalogs."""

from pathlib import Path
from typing import Optional, Union


class MalformedCatalogError(ValueError):
    """Raised when catalog input is structurally invalid.

    Only raised while a catalog is being built; lookups never raise.

    Attributes:
        context: Context name of the offending entry, if known.
        source: Source text of the offending entry, if known.
        path: Catalog file the input was read from, if any.
    """

    def __init__(
        self,
        message: str,
        context: Optional[str] = None,
        source: Optional[str] = None,
        path: Optional[Union[str, Path]] = None,
    ):
        self.context = context
        self.source = source
        self.path = str(path) if path is not None else None
        super().__init__(message)

    def __str__(self) -> str:
        message = super().__str__()
        details = []
        if self.path:
            details.append(f"file={self.path}")
        if self.context is not None:
            details.append(f"context={self.context!r}")
        if self.source is not None:
            details.append(f"source={self.source!r}")
        if not details:
            return message
        return f"{message} ({', '.join(details)})"

    def with_path(self, path: Union[str, Path]) -> "MalformedCatalogError":
        """Return a copy of this error annotated with the catalog file."""
        return MalformedCatalogError(
            self.args[0], context=self.context, source=self.source, path=path
        )
