"""
Language-specific transformation rules.

Each target language provides its naming policy, type mapping and a
transformer built on the language-agnostic core.
"""

from .matlab import MatlabTransformer, TransformResult

__all__ = ["MatlabTransformer", "TransformResult"]
