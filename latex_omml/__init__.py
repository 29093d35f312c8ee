"""
LaTeX to OMML

Compile LaTeX math into Office Math Markup Language, the native equation
format of word-processing documents.
"""

__version__ = "0.1.0"
__author__ = "LaTeX OMML Team"

# Configuration
from .config import ConverterConfig, load_config

# Core pipeline
from .tokenizer import LaTeXTokenizer, Token, TokenType, tokenize
from .omml import OMMLElement, MATH_NS
from .generator import OMMLGenerator
from .validator import LaTeXSyntaxError, ValidationResult, validate_latex

# Public entry points
from .converter import (
    OMMLConverter,
    latex_to_omml,
    latex_to_omml_inline,
    latex_to_omml_paragraph
)

__all__ = [
    # Version
    "__version__",

    # Configuration
    "ConverterConfig",
    "load_config",

    # Core components
    "LaTeXTokenizer",
    "Token",
    "TokenType",
    "tokenize",
    "OMMLElement",
    "MATH_NS",
    "OMMLGenerator",
    "LaTeXSyntaxError",
    "ValidationResult",
    "validate_latex",

    # Entry points
    "OMMLConverter",
    "latex_to_omml",
    "latex_to_omml_inline",
    "latex_to_omml_paragraph",
]

# Convenience function
def create_converter(**kwargs):
    """Create a converter with the given configuration options."""
    config = ConverterConfig(**kwargs)
    return OMMLConverter(config)
