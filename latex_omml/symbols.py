"""
Static lookup tables for the LaTeX to OMML compiler.

Every table is built once at import time and exposed read-only, so concurrent
conversions can share them without locking.
"""

from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Optional


_GREEK = {
    # lowercase
    'alpha': 'α', 'beta': 'β', 'gamma': 'γ', 'delta': 'δ',
    'epsilon': 'ε', 'varepsilon': 'ε', 'zeta': 'ζ', 'eta': 'η',
    'theta': 'θ', 'vartheta': 'ϑ', 'iota': 'ι', 'kappa': 'κ',
    'lambda': 'λ', 'mu': 'μ', 'nu': 'ν', 'xi': 'ξ',
    'pi': 'π', 'varpi': 'ϖ', 'rho': 'ρ', 'varrho': 'ϱ',
    'sigma': 'σ', 'varsigma': 'ς', 'tau': 'τ', 'upsilon': 'υ',
    'phi': 'φ', 'varphi': 'ϕ', 'chi': 'χ', 'psi': 'ψ',
    'omega': 'ω',
    # uppercase
    'Gamma': 'Γ', 'Delta': 'Δ', 'Theta': 'Θ', 'Lambda': 'Λ',
    'Xi': 'Ξ', 'Pi': 'Π', 'Sigma': 'Σ', 'Upsilon': 'Υ',
    'Phi': 'Φ', 'Psi': 'Ψ', 'Omega': 'Ω',
}

_OPERATORS = {
    'times': '×', 'div': '÷', 'cdot': '⋅', 'pm': '±',
    'mp': '∓', 'ast': '∗', 'star': '⋆', 'circ': '∘',
    'bullet': '•', 'oplus': '⊕', 'ominus': '⊖',
    'otimes': '⊗', 'odot': '⊙', 'wedge': '∧', 'vee': '∨',
    'land': '∧', 'lor': '∨', 'neg': '¬', 'lnot': '¬',
    # relations
    'leq': '≤', 'le': '≤', 'geq': '≥', 'ge': '≥',
    'neq': '≠', 'ne': '≠', 'approx': '≈', 'equiv': '≡',
    'sim': '∼', 'simeq': '≃', 'cong': '≅', 'propto': '∝',
    'll': '≪', 'gg': '≫', 'perp': '⊥', 'parallel': '∥',
    'mid': '∣',
    # calculus and logic
    'infty': '∞', 'partial': '∂', 'nabla': '∇',
    'forall': '∀', 'exists': '∃', 'therefore': '∴',
    'because': '∵', 'angle': '∠', 'hbar': 'ℏ', 'ell': 'ℓ',
    'prime': '′',
}

_SETS = {
    'in': '∈', 'notin': '∉', 'ni': '∋',
    'subset': '⊂', 'supset': '⊃', 'subseteq': '⊆',
    'supseteq': '⊇', 'cup': '∪', 'cap': '∩',
    'setminus': '∖', 'emptyset': '∅', 'varnothing': '∅',
}

_ARROWS = {
    'rightarrow': '→', 'to': '→', 'leftarrow': '←',
    'gets': '←', 'leftrightarrow': '↔', 'uparrow': '↑',
    'downarrow': '↓', 'Rightarrow': '⇒', 'Leftarrow': '⇐',
    'Leftrightarrow': '⇔', 'implies': '⇒', 'iff': '⇔',
    'mapsto': '↦', 'longrightarrow': '⟶', 'longleftarrow': '⟵',
}

_DOTS = {
    'ldots': '…', 'dots': '…', 'cdots': '⋯',
    'vdots': '⋮', 'ddots': '⋱',
}

_SPACING = {
    'quad': '\u2003', 'qquad': '\u2003\u2003', 'kern': '',
    ',': '\u2009', ';': '\u2005', '!': '', ' ': ' ',
}

# Combining characters standing in for accents used without an argument
_ACCENT_PLACEHOLDERS = {
    'hat': '\u0302', 'bar': '\u0304', 'dot': '\u0307', 'ddot': '\u0308',
    'tilde': '\u0303', 'vec': '\u20D7',
}

_FUNCTIONS = {
    'sin': 'sin', 'cos': 'cos', 'tan': 'tan', 'cot': 'cot', 'sec': 'sec',
    'csc': 'csc', 'arcsin': 'arcsin', 'arccos': 'arccos', 'arctan': 'arctan',
    'sinh': 'sinh', 'cosh': 'cosh', 'tanh': 'tanh', 'coth': 'coth',
    'log': 'log', 'ln': 'ln', 'lg': 'lg', 'exp': 'exp', 'lim': 'lim',
    'limsup': 'lim sup', 'liminf': 'lim inf', 'sup': 'sup', 'inf': 'inf',
    'min': 'min', 'max': 'max', 'det': 'det', 'dim': 'dim', 'ker': 'ker',
    'hom': 'hom', 'deg': 'deg', 'gcd': 'gcd', 'arg': 'arg', 'mod': 'mod',
    'Pr': 'Pr',
}


def _merge(*tables: Dict[str, str]) -> Mapping[str, str]:
    merged: Dict[str, str] = {}
    for table in tables:
        merged.update(table)
    return MappingProxyType(merged)


LATEX_SYMBOLS: Mapping[str, str] = _merge(
    _GREEK, _OPERATORS, _SETS, _ARROWS, _DOTS, _SPACING,
    _ACCENT_PLACEHOLDERS, _FUNCTIONS,
)

# Commands rendered upright even though they are plain text runs
FUNCTION_NAMES: FrozenSet[str] = frozenset(_FUNCTIONS)

NARY_OPERATORS: Mapping[str, str] = MappingProxyType({
    'sum': '∑', 'prod': '∏', 'coprod': '∐',
    'int': '∫', 'iint': '∬', 'iiint': '∭',
    'oint': '∮', 'oiint': '∯',
    'bigcup': '⋃', 'bigcap': '⋂', 'bigvee': '⋁',
    'bigwedge': '⋀', 'bigsqcup': '⨆', 'biguplus': '⨄',
    'bigoplus': '⨁', 'bigotimes': '⨂',
})

# Integrals keep their limits to the right even in stacked mode
INTEGRAL_OPERATORS: FrozenSet[str] = frozenset({
    'int', 'iint', 'iiint', 'oint', 'oiint',
})

ACCENTS: Mapping[str, str] = MappingProxyType({
    'overline': '\u0305', 'bar': '\u0305',
    'hat': '\u0302', 'widehat': '\u0302',
    'tilde': '\u0303', 'widetilde': '\u0303',
    'vec': '\u20D7', 'dot': '\u0307', 'ddot': '\u0308',
})

FRACTION_COMMANDS: FrozenSet[str] = frozenset({'frac', 'dfrac', 'tfrac'})

TEXT_COMMANDS: FrozenSet[str] = frozenset({
    'text', 'textrm', 'textbf', 'textit', 'mathrm', 'mathbf', 'mathit',
    'mathbb', 'mathcal', 'mathfrak', 'mathsf', 'operatorname',
})

# Text commands whose argument is real text, so source spaces are kept
TEXT_MODE_COMMANDS: FrozenSet[str] = frozenset({
    'text', 'textrm', 'textbf', 'textit',
})

ROMAN_TEXT_COMMANDS: FrozenSet[str] = frozenset({
    'text', 'textrm', 'mathrm', 'operatorname',
})

FONT_SCRIPTS: Mapping[str, str] = MappingProxyType({
    'mathbb': 'double-struck', 'mathcal': 'script',
    'mathfrak': 'fraktur', 'mathsf': 'sans-serif',
})

_OPEN_DELIMITERS = {
    'langle': '⟨', 'lfloor': '⌊', 'lceil': '⌈',
    'lbrace': '{', 'lbrack': '[', 'vert': '|', 'Vert': '‖',
    'lvert': '|', 'lVert': '‖',
}

_CLOSE_DELIMITERS = {
    'rangle': '⟩', 'rfloor': '⌋', 'rceil': '⌉',
    'rbrace': '}', 'rbrack': ']', 'vert': '|', 'Vert': '‖',
    'rvert': '|', 'rVert': '‖',
}

DELIMITER_NAMES: Mapping[str, str] = _merge(_OPEN_DELIMITERS, _CLOSE_DELIMITERS)

MATRIX_DELIMITERS: Mapping[str, tuple] = MappingProxyType({
    'matrix': ('', ''),
    'smallmatrix': ('', ''),
    'pmatrix': ('(', ')'),
    'bmatrix': ('[', ']'),
    'Bmatrix': ('{', '}'),
    'vmatrix': ('|', '|'),
    'Vmatrix': ('‖', '‖'),
})

CASES_ENVIRONMENTS: FrozenSet[str] = frozenset({'cases', 'dcases'})

ALIGNED_ENVIRONMENTS: FrozenSet[str] = frozenset({
    'align', 'align*', 'aligned', 'split', 'alignat', 'eqnarray',
})

GATHERED_ENVIRONMENTS: FrozenSet[str] = frozenset({
    'gather', 'gather*', 'gathered',
})

# Glyphs that already act as the alignment point when they open an equation row cell
RELATIONS: FrozenSet[str] = frozenset(
    '=<>:≤≥≠≈≡∼≃≅∝≪≫'
    '∈∉∋⊂⊃⊆⊇'
    '←→↔↦⇐⇒⇔⟵⟶'
)

SPACING_TRIGGERS: FrozenSet[str] = frozenset({' ', ',', ';', '!'})

ESCAPABLE_CHARS: FrozenSet[str] = frozenset('{}|&%#_')


def lookup_symbol(name: str) -> Optional[str]:
    """Return the Unicode text for a command name, or None."""
    return LATEX_SYMBOLS.get(name)


def lookup_nary(name: str) -> Optional[str]:
    return NARY_OPERATORS.get(name)


def is_function_name(name: str) -> bool:
    return name in FUNCTION_NAMES


def resolve_delimiter(name: str) -> str:
    """Resolve a named delimiter such as ``langle``.

    Unknown names fall back to the symbol table and finally to the literal
    command text, so nothing written by the author disappears.
    """
    if name in DELIMITER_NAMES:
        return DELIMITER_NAMES[name]
    symbol = LATEX_SYMBOLS.get(name)
    if symbol is not None:
        return symbol
    return '\\' + name


def known_commands() -> FrozenSet[str]:
    """All command names the compiler gives a meaning to."""
    return frozenset(LATEX_SYMBOLS) | frozenset(NARY_OPERATORS) | frozenset(ACCENTS) \
        | FRACTION_COMMANDS | TEXT_COMMANDS | frozenset(DELIMITER_NAMES) \
        | {'sqrt', 'begin', 'end', 'left', 'right', 'limits', 'nolimits'}


__all__ = [
    'LATEX_SYMBOLS',
    'FUNCTION_NAMES',
    'NARY_OPERATORS',
    'INTEGRAL_OPERATORS',
    'ACCENTS',
    'FRACTION_COMMANDS',
    'TEXT_COMMANDS',
    'TEXT_MODE_COMMANDS',
    'ROMAN_TEXT_COMMANDS',
    'FONT_SCRIPTS',
    'DELIMITER_NAMES',
    'MATRIX_DELIMITERS',
    'CASES_ENVIRONMENTS',
    'ALIGNED_ENVIRONMENTS',
    'GATHERED_ENVIRONMENTS',
    'RELATIONS',
    'SPACING_TRIGGERS',
    'ESCAPABLE_CHARS',
    'lookup_symbol',
    'lookup_nary',
    'is_function_name',
    'resolve_delimiter',
    'known_commands',
]
