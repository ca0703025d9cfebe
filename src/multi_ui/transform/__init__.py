"""TSX to JSX source conversion."""

from .converter import TransformError, to_untyped_dialect

__all__ = ["TransformError", "to_untyped_dialect"]
