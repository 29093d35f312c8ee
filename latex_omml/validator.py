"""
Structural checks for LaTeX math input.

The converter itself never rejects input; these checks report what it would
silently repair, and back the converter's strict mode.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .environments import environment_name
from .symbols import ACCENTS, FRACTION_COMMANDS, TEXT_COMMANDS, known_commands
from .tokenizer import Token, TokenType, tokenize


logger = logging.getLogger(__name__)

Diagnostic = Dict[str, Any]

_ARGUMENTS = (TokenType.TEXT, TokenType.GROUP, TokenType.COMMAND)

_STRAY_NAMES = {
    TokenType.AMPERSAND: '&',
    TokenType.NEWLINE: '\\\\',
    TokenType.OPEN_BRACKET: '[',
    TokenType.CLOSE_BRACKET: ']',
}


class LaTeXSyntaxError(ValueError):
    """Raised in strict mode when the input has structural errors."""

    def __init__(self, message: str, errors: Optional[List[Diagnostic]] = None):
        super().__init__(message)
        self.errors = errors or []


@dataclass
class ValidationResult:
    errors: List[Diagnostic] = field(default_factory=list)
    warnings: List[Diagnostic] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _diagnostic(kind: str, message: str, position: int) -> Diagnostic:
    return {'type': kind, 'message': message, 'position': position}


def validate_latex(latex: str) -> ValidationResult:
    """Validate the structure of a LaTeX math string.

    Errors are problems the converter has to guess around: unmatched braces,
    ``\\left``/``\\right`` and ``\\begin``/``\\end``. Warnings flag input
    that converts but probably not as intended.

    Args:
        latex: LaTeX math source

    Returns:
        ValidationResult with ``errors`` and ``warnings`` lists of
        ``{'type', 'message', 'position'}`` dicts
    """
    result = ValidationResult()
    _check_braces(latex, result)
    _StructureChecker(result).check(tokenize(latex))
    logger.debug(f"Validated LaTeX: {len(result.errors)} errors, {len(result.warnings)} warnings")
    return result


def _check_braces(latex: str, result: ValidationResult):
    stack = []
    pos = 0
    while pos < len(latex):
        char = latex[pos]
        if char == '\\':
            pos += 2
            continue
        if char == '{':
            stack.append(pos)
        elif char == '}':
            if stack:
                stack.pop()
            else:
                result.errors.append(_diagnostic('unmatched_brace', 'Unmatched closing brace', pos))
        pos += 1

    for pos in stack:
        result.errors.append(_diagnostic('unmatched_brace', 'Unmatched opening brace', pos))


class _StructureChecker:
    """Walks the token tree one nesting level at a time, as the generator does."""

    def __init__(self, result: ValidationResult):
        self.result = result
        self.known = known_commands()
        self.reported = set()

    def check(self, tokens: List[Token]):
        self._check_level(tokens)

    def _warn(self, kind: str, message: str, position: int):
        self.result.warnings.append(_diagnostic(kind, message, position))

    def _error(self, kind: str, message: str, position: int):
        self.result.errors.append(_diagnostic(kind, message, position))

    def _check_level(self, tokens: List[Token]):
        env_stack = []
        left_stack = []
        index = 0

        while index < len(tokens):
            token = tokens[index]
            following = tokens[index + 1] if index + 1 < len(tokens) else None

            if token.type == TokenType.GROUP:
                self._check_level(token.children)

            elif token.type in _STRAY_NAMES:
                allowed = bool(env_stack) and token.type in (TokenType.AMPERSAND, TokenType.NEWLINE)
                if not allowed:
                    self._warn('stray_token', f"Stray {_STRAY_NAMES[token.type]} ignored",
                               token.position)

            elif token.is_script:
                if following is None or following.type not in _ARGUMENTS:
                    self._warn('missing_argument', f"Missing argument for {token.value}",
                               token.position)

            elif token.is_command('begin', 'end'):
                name = environment_name(tokens, index + 1)
                if name is not None:
                    self._check_environment(token, name, env_stack)
                    index += 2
                    continue
                self._warn('missing_argument', f"Missing environment name for \\{token.value}",
                           token.position)

            elif token.is_command('left', 'right'):
                if token.value == 'left':
                    left_stack.append(token.position)
                elif left_stack:
                    left_stack.pop()
                else:
                    self._error('unmatched_delimiter', 'Unmatched \\right', token.position)
                # The next token is the delimiter itself
                index += 2
                continue

            elif token.type == TokenType.COMMAND:
                index = self._check_command(tokens, index)
                continue

            index += 1

        for position in left_stack:
            self._error('unmatched_delimiter', 'Unmatched \\left', position)
        for name, position in env_stack:
            self._error('unclosed_environment', f"Unclosed environment: {name}", position)

    def _check_environment(self, token: Token, name: str, env_stack: list):
        if token.value == 'begin':
            env_stack.append((name, token.position))
        elif env_stack and env_stack[-1][0] == name:
            env_stack.pop()
        else:
            self._error('mismatched_environment',
                        f"Mismatched environment: \\end{{{name}}}", token.position)

    def _check_command(self, tokens: List[Token], index: int) -> int:
        """Check one command and return the index of the next token to check."""
        token = tokens[index]
        name = token.value
        index += 1

        if name not in self.known and name not in self.reported:
            self.reported.add(name)
            self._warn('unknown_command', f"Unknown command: \\{name}", token.position)

        if name == 'sqrt':
            index = self._skip_bracket_argument(tokens, index)
            self._expect_arguments(tokens, index, 1, token)
        elif name in FRACTION_COMMANDS:
            self._expect_arguments(tokens, index, 2, token)
        elif name in ACCENTS or name in TEXT_COMMANDS:
            self._expect_arguments(tokens, index, 1, token)

        return index

    def _skip_bracket_argument(self, tokens: List[Token], index: int) -> int:
        if index >= len(tokens) or tokens[index].type != TokenType.OPEN_BRACKET:
            return index
        depth = 0
        for position in range(index, len(tokens)):
            token = tokens[position]
            if token.type == TokenType.OPEN_BRACKET:
                depth += 1
            elif token.type == TokenType.CLOSE_BRACKET:
                depth -= 1
                if depth == 0:
                    self._check_level(tokens[index + 1:position])
                    return position + 1
        return index

    def _expect_arguments(self, tokens: List[Token], index: int, count: int, command: Token):
        # Plain text supplies one argument per character, as in \frac12
        available = 0
        while available < count and index < len(tokens) and tokens[index].type in _ARGUMENTS:
            token = tokens[index]
            if token.type == TokenType.TEXT and token.value:
                available += len(token.value)
            else:
                available += 1
            index += 1
        if available < count:
            self._warn('missing_argument', f"Missing argument for \\{command.value}",
                       command.position)


__all__ = ['LaTeXSyntaxError', 'ValidationResult', 'validate_latex']
