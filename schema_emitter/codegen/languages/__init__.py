"""
Language-specific code emitters.

This module contains emitters for different target languages.
"""

from .typescript import TypeScriptEmitter, create_typescript_emitter

__all__ = ["TypeScriptEmitter", "create_typescript_emitter"]
