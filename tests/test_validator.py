import pytest
from latex_omml.validator import LaTeXSyntaxError, ValidationResult, validate_latex


def kinds(diagnostics):
    return [diagnostic['type'] for diagnostic in diagnostics]


class TestValidateLatex:

    def test_valid_expression(self, sample_latex_formulas):
        """Test well-formed input has no errors."""
        for latex in sample_latex_formulas.values():
            result = validate_latex(latex)
            assert result.is_valid, (latex, result.errors)

    def test_clean_expression_has_no_warnings(self):
        """Test simple input has no warnings either."""
        result = validate_latex(r"\frac{a}{b} + \sqrt[3]{x} - \left[ y \right]")
        assert result.errors == []
        assert result.warnings == []

    def test_diagnostic_shape(self):
        """Test diagnostics carry type, message and position."""
        result = validate_latex(r"x}")
        assert set(result.errors[0]) == {'type', 'message', 'position'}

    def test_unmatched_opening_brace(self):
        """Test an unclosed group."""
        result = validate_latex(r"\frac{a}{b")
        assert kinds(result.errors) == ['unmatched_brace']
        assert result.errors[0]['position'] == 8
        assert 'opening' in result.errors[0]['message']

    def test_unmatched_closing_brace(self):
        """Test a stray closing brace."""
        result = validate_latex("a}")
        assert kinds(result.errors) == ['unmatched_brace']
        assert result.errors[0]['position'] == 1

    def test_escaped_braces(self):
        """Test escaped braces are not structure."""
        assert validate_latex(r"\{ x \} \\ y").errors == []

    def test_unmatched_left(self):
        """Test \\left without \\right."""
        result = validate_latex(r"\left( x")
        assert kinds(result.errors) == ['unmatched_delimiter']
        assert result.errors[0]['position'] == 0

    def test_unmatched_right(self):
        """Test \\right without \\left."""
        result = validate_latex(r"x \right)")
        assert kinds(result.errors) == ['unmatched_delimiter']
        assert result.errors[0]['position'] == 2

    def test_nested_delimiters(self):
        """Test nested pairs balance."""
        assert validate_latex(r"\left( \left[ x \right] \right)").is_valid

    def test_mismatched_environment(self):
        """Test \\end with the wrong name."""
        result = validate_latex(r"\begin{matrix} a \end{pmatrix}")
        assert kinds(result.errors) == ['mismatched_environment', 'unclosed_environment']

    def test_unclosed_environment(self):
        """Test a missing \\end."""
        result = validate_latex(r"\begin{cases} a")
        assert kinds(result.errors) == ['unclosed_environment']
        assert 'cases' in result.errors[0]['message']

    def test_empty_environment_name(self):
        """Test an empty name group counts as a missing name."""
        result = validate_latex(r"\begin{} x")
        assert result.errors == []
        assert 'missing_argument' in kinds(result.warnings)

    def test_nested_environments(self):
        """Test properly nested environments."""
        latex = r"\begin{pmatrix} \begin{matrix} a & b \end{matrix} & c \end{pmatrix}"
        result = validate_latex(latex)
        assert result.errors == []
        assert result.warnings == []


class TestValidationWarnings:

    def test_unknown_command_reported_once(self):
        """Test each unknown command name is reported once."""
        result = validate_latex(r"\foo + \foo + \baz")
        assert kinds(result.warnings) == ['unknown_command', 'unknown_command']
        assert result.is_valid

    def test_known_commands_not_reported(self):
        """Test the supported command set raises no warnings."""
        result = validate_latex(r"\alpha \sin \sum \hat{x} \mathbb{R} \langle \limits")
        assert 'unknown_command' not in kinds(result.warnings)

    def test_stray_separators(self):
        """Test & and \\\\ outside environments."""
        result = validate_latex(r"a & b \\ c")
        assert kinds(result.warnings) == ['stray_token', 'stray_token']

    def test_stray_brackets(self):
        """Test brackets outside root arguments and delimiters."""
        result = validate_latex(r"[0, 1]")
        assert kinds(result.warnings) == ['stray_token', 'stray_token']

    def test_separators_in_environment(self):
        """Test separators inside an environment are expected."""
        result = validate_latex(r"\begin{aligned} x &= 1 \\ y &= 2 \end{aligned}")
        assert result.warnings == []

    @pytest.mark.parametrize("latex", [
        r"\frac{a}",
        r"\frac1",
        r"\sqrt",
        r"\sqrt[3]",
        r"\hat",
        r"\text",
        "x^",
        "x_",
    ])
    def test_missing_argument(self, latex):
        """Test commands and scripts at the end of input."""
        assert 'missing_argument' in kinds(validate_latex(latex).warnings)

    @pytest.mark.parametrize("latex", [r"\frac12", r"\frac{a}b", r"x^2", r"\sqrt\alpha"])
    def test_arguments_present(self, latex):
        """Test single-character and command arguments count."""
        assert 'missing_argument' not in kinds(validate_latex(latex).warnings)


class TestValidationTypes:

    def test_validation_result(self):
        """Test ValidationResult defaults."""
        result = ValidationResult()
        assert result.is_valid
        assert result.errors == [] and result.warnings == []

    def test_syntax_error(self):
        """Test LaTeXSyntaxError carries its diagnostics."""
        errors = [{'type': 'unmatched_brace', 'message': 'Unmatched opening brace', 'position': 0}]
        error = LaTeXSyntaxError("Invalid LaTeX", errors)
        assert isinstance(error, ValueError)
        assert error.errors == errors
        assert LaTeXSyntaxError("x").errors == []
