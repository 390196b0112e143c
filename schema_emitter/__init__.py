"""Schema Emitter: type declarations from abstract model schemas."""

from .codegen import (
    emit_from_dict,
    quick_emit,
    get_emitter,
    list_supported_languages,
)

__version__ = "0.1.0"

__all__ = [
    "emit_from_dict",
    "quick_emit",
    "get_emitter",
    "list_supported_languages",
    "__version__",
]
