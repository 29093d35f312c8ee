import pytest
import tempfile
from pathlib import Path
from latex_omml.config import ConverterConfig
from latex_omml.converter import OMMLConverter
from latex_omml.generator import OMMLGenerator
from latex_omml.tokenizer import LaTeXTokenizer


@pytest.fixture
def temp_dir():
    """Create temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_latex_formulas():
    """Sample LaTeX formulas for testing."""
    return {
        'simple': r'x + y = z',
        'fraction': r'\frac{a}{b}',
        'sqrt': r'\sqrt{x^2 + y^2}',
        'matrix': r'\begin{pmatrix} a & b \\ c & d \end{pmatrix}',
        'aligned': r'\begin{aligned} x &= 1 \\ y &= 2 \end{aligned}',
        'cases': r'f(x) = \begin{cases} x & \text{if } x > 0 \\ -x & \text{otherwise} \end{cases}',
        'complex': r'\int_0^{\infty} e^{-x^2} \, dx = \frac{\sqrt{\pi}}{2}',
        'nested': r'x^{y^z}',
        'greek': r'\alpha + \beta = \gamma',
        'accents': r'\hat{x} + \tilde{y} + \vec{z}',
        'text': r'\text{Hello } x + y',
        'quadratic': r'x = \frac{-b \pm \sqrt{b^2 - 4ac}}{2a}',
        'sum_product': r'\sum_{i=1}^{n} i = \prod_{j=1}^{m} j',
        'delimiters': r'\left( \frac{a}{b} \right)',
        'escaped': r'\{ 50\% \}',
    }


@pytest.fixture
def tokenizer():
    """Tokenizer instance."""
    return LaTeXTokenizer()


@pytest.fixture
def generator():
    """Generator with default configuration."""
    return OMMLGenerator(ConverterConfig())


@pytest.fixture
def converter():
    """Converter with default configuration."""
    return OMMLConverter()


@pytest.fixture
def strict_converter():
    """Converter that rejects structurally invalid input."""
    return OMMLConverter(ConverterConfig(strict=True))
