import pytest
from latex_omml.symbols import (
    ACCENTS,
    DELIMITER_NAMES,
    FUNCTION_NAMES,
    INTEGRAL_OPERATORS,
    LATEX_SYMBOLS,
    NARY_OPERATORS,
    is_function_name,
    known_commands,
    lookup_nary,
    lookup_symbol,
    resolve_delimiter,
)


class TestSymbolTables:

    def test_greek_letters(self):
        """Test Greek letters map to their Unicode characters."""
        assert lookup_symbol('alpha') == 'α'
        assert lookup_symbol('Omega') == 'Ω'
        assert lookup_symbol('varphi') == 'ϕ'

    def test_lookup_is_case_sensitive(self):
        """Test that lookups are exact matches."""
        assert lookup_symbol('Gamma') == 'Γ'
        assert lookup_symbol('gamma') == 'γ'
        assert lookup_symbol('GAMMA') is None

    def test_unknown_lookup_returns_none(self):
        """Test that tables report misses instead of raising."""
        assert lookup_symbol('nonexistentcmd') is None
        assert lookup_nary('alpha') is None

    def test_spacing_commands(self):
        """Test spacing commands, including the zero-width kern."""
        assert lookup_symbol('quad') == '\u2003'
        assert lookup_symbol('qquad') == '\u2003\u2003'
        assert lookup_symbol('kern') == ''
        assert lookup_symbol(',') == '\u2009'
        assert lookup_symbol('!') == ''

    def test_nary_operators(self):
        """Test large operator glyphs."""
        assert lookup_nary('sum') == '∑'
        assert lookup_nary('prod') == '∏'
        assert lookup_nary('int') == '∫'
        assert lookup_nary('oint') == '∮'
        assert lookup_nary('bigcup') == '⋃'
        assert INTEGRAL_OPERATORS <= set(NARY_OPERATORS)

    def test_function_names(self):
        """Test the upright function name set."""
        for name in ('sin', 'cos', 'log', 'lim', 'max', 'det'):
            assert is_function_name(name)
        assert not is_function_name('alpha')
        assert lookup_symbol('limsup') == 'lim sup'
        assert FUNCTION_NAMES <= set(LATEX_SYMBOLS)

    def test_accents(self):
        """Test accents map to combining characters."""
        assert ACCENTS['hat'] == '\u0302'
        assert ACCENTS['overline'] == '\u0305'
        assert ACCENTS['vec'] == '\u20D7'
        # Placeholder used when an accent has no argument
        assert lookup_symbol('hat') == '\u0302'

    def test_tables_are_read_only(self):
        """Test that shared tables cannot be mutated."""
        with pytest.raises(TypeError):
            LATEX_SYMBOLS['alpha'] = 'a'
        with pytest.raises(TypeError):
            NARY_OPERATORS['sum'] = 'S'

    def test_known_commands(self):
        """Test the combined known command set."""
        known = known_commands()
        for name in ('frac', 'sqrt', 'begin', 'left', 'sum', 'hat', 'text', 'alpha', 'langle'):
            assert name in known
        assert 'nonexistentcmd' not in known


class TestDelimiterResolution:

    @pytest.mark.parametrize("name,expected", [
        ('langle', '⟨'),
        ('rangle', '⟩'),
        ('lfloor', '⌊'),
        ('rceil', '⌉'),
        ('lbrace', '{'),
        ('vert', '|'),
        ('Vert', '‖'),
    ])
    def test_named_delimiters(self, name, expected):
        """Test named delimiters resolve through the delimiter table."""
        assert resolve_delimiter(name) == expected

    def test_symbol_fallback(self):
        """Test that non-delimiter symbols still resolve."""
        assert 'uparrow' not in DELIMITER_NAMES
        assert resolve_delimiter('uparrow') == '↑'

    def test_unknown_delimiter_kept_literally(self):
        """Test that unknown delimiter names are not dropped."""
        assert resolve_delimiter('foo') == '\\foo'
