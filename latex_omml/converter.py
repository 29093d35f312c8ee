import logging
from pathlib import Path
from typing import List, Optional, Union

from . import omml
from .config import ConverterConfig, load_config
from .generator import OMMLGenerator
from .omml import OMMLElement
from .tokenizer import LaTeXTokenizer
from .validator import LaTeXSyntaxError, ValidationResult, validate_latex


logger = logging.getLogger(__name__)


class OMMLConverter:
    """Convert LaTeX math to Office Math Markup (OMML).

    Conversion never fails on malformed LaTeX: unknown commands are kept as
    literal text and unbalanced structures are closed at the end of input.
    With ``strict`` set in the config, structural errors raise
    :class:`LaTeXSyntaxError` instead.
    """

    def __init__(self, config: Optional[ConverterConfig] = None,
                 config_path: Optional[Union[str, Path]] = None):
        if config is None:
            config = load_config(config_path) if config_path else ConverterConfig()
        self.config = config
        self.tokenizer = LaTeXTokenizer(preserve_text_spacing=config.preserve_text_spacing)
        self.generator = OMMLGenerator(config)

    def convert(self, latex: str, display_mode: bool = False) -> str:
        """Convert LaTeX to an OMML string.

        Args:
            latex: LaTeX math source without ``$`` delimiters
            display_mode: Wrap the equation in a standalone ``m:oMathPara``
                paragraph instead of returning an inline ``m:oMath``

        Returns:
            Serialised XML whose root declares the ``m`` namespace
        """
        elements = self.to_elements(latex)
        try:
            return self._wrap(elements, display_mode).to_xml()
        except RecursionError:
            logger.error(f"OMML nested too deeply to serialise, keeping source text: {latex[:100]}")
            return self._wrap(self._fallback_elements(latex), display_mode).to_xml()

    def convert_fragment(self, latex: str) -> str:
        """Convert LaTeX to bare OMML content for an existing ``m:oMath`` parent.

        The fragment uses the ``m:`` prefix but carries no namespace
        declaration.
        """
        elements = self.to_elements(latex)
        try:
            return omml.serialize_fragment(elements)
        except RecursionError:
            logger.error(f"OMML nested too deeply to serialise, keeping source text: {latex[:100]}")
            return omml.serialize_fragment(self._fallback_elements(latex))

    def _wrap(self, elements: List[OMMLElement], display_mode: bool) -> OMMLElement:
        if display_mode:
            return omml.math_paragraph(elements, self.config.display_justification)
        return omml.math(elements)

    def to_elements(self, latex: str) -> List[OMMLElement]:
        """Convert LaTeX to the list of top-level OMML elements."""
        if not isinstance(latex, str):
            raise TypeError(f"LaTeX input must be a string, not {type(latex).__name__}")

        try:
            if self.config.validate or self.config.strict:
                self._check(latex)
            return self.generator.generate(self.tokenizer.tokenize(latex))

        except RecursionError:
            logger.error(f"LaTeX nested too deeply to convert, keeping source text: {latex[:100]}")
            return self._fallback_elements(latex)

    def validate(self, latex: str) -> ValidationResult:
        return validate_latex(latex)

    def _check(self, latex: str):
        result = validate_latex(latex)

        if result.errors:
            if self.config.strict:
                messages = '; '.join(error['message'] for error in result.errors)
                raise LaTeXSyntaxError(f"Invalid LaTeX: {messages}", result.errors)
            logger.warning(f"LaTeX structure has errors: {result.errors}")

        if result.warnings:
            logger.debug(f"LaTeX structure warnings: {result.warnings}")

    def _fallback_elements(self, latex: str) -> List[OMMLElement]:
        """Keep the source visible as a single literal run."""
        return [omml.run(latex)]


_default_converter = OMMLConverter()


def latex_to_omml(latex: str) -> str:
    """Convert LaTeX to a bare OMML fragment, for embedding in a custom parent."""
    return _default_converter.convert_fragment(latex)


def latex_to_omml_inline(latex: str) -> str:
    """Convert LaTeX to an inline ``m:oMath`` element."""
    return _default_converter.convert(latex, display_mode=False)


def latex_to_omml_paragraph(latex: str) -> str:
    """Convert LaTeX to a display ``m:oMathPara`` paragraph."""
    return _default_converter.convert(latex, display_mode=True)


__all__ = [
    'OMMLConverter',
    'latex_to_omml',
    'latex_to_omml_inline',
    'latex_to_omml_paragraph',
]
