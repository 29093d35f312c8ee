import regex
import logging
from typing import List, Tuple
from dataclasses import dataclass, field
from enum import Enum

from .symbols import ESCAPABLE_CHARS, SPACING_TRIGGERS, TEXT_MODE_COMMANDS, lookup_symbol


logger = logging.getLogger(__name__)


class TokenType(Enum):
    TEXT = "text"
    COMMAND = "command"
    GROUP = "group"
    SUPERSCRIPT = "superscript"
    SUBSCRIPT = "subscript"
    AMPERSAND = "ampersand"
    NEWLINE = "newline"
    OPEN_BRACKET = "open_bracket"
    CLOSE_BRACKET = "close_bracket"


@dataclass
class Token:
    type: TokenType
    value: str = ''
    children: List['Token'] = field(default_factory=list)
    position: int = field(default=0, compare=False)

    @property
    def is_script(self) -> bool:
        return self.type in (TokenType.SUPERSCRIPT, TokenType.SUBSCRIPT)

    def is_command(self, *names: str) -> bool:
        return self.type == TokenType.COMMAND and (not names or self.value in names)


_SINGLE_CHAR_TOKENS = {
    '^': TokenType.SUPERSCRIPT,
    '_': TokenType.SUBSCRIPT,
    '&': TokenType.AMPERSAND,
    '[': TokenType.OPEN_BRACKET,
    ']': TokenType.CLOSE_BRACKET,
}

# Commands whose next character is a delimiter, never the start of a text run
_DELIMITER_COMMANDS = frozenset({'left', 'right'})


class _TextBuffer:
    """Collects plain characters until a structural character ends the run."""

    __slots__ = ['chars', 'start']

    def __init__(self):
        self.chars = []
        self.start = 0

    def push(self, char: str, position: int):
        if not self.chars:
            self.start = position
        self.chars.append(char)

    def flush(self, tokens: List[Token]):
        if self.chars:
            tokens.append(Token(TokenType.TEXT, ''.join(self.chars), position=self.start))
            self.chars = []

    def __bool__(self):
        return bool(self.chars)


class LaTeXTokenizer:
    """Scan a LaTeX math string into a flat token list with nested groups.

    The scan never fails: an unmatched ``{`` swallows the rest of the input
    into one group and a stray ``}`` is kept as text.
    """

    def __init__(self, preserve_text_spacing: bool = True):
        self.preserve_text_spacing = preserve_text_spacing
        self.command_pattern = regex.compile(r'\p{L}+')
        self.whitespace_pattern = regex.compile(r'\s+')

    def tokenize(self, latex: str) -> List[Token]:
        """Tokenize a LaTeX string.

        Args:
            latex: LaTeX math source without surrounding ``$`` delimiters

        Returns:
            List of tokens; ``{...}`` becomes a single GROUP token
        """
        tokens, _ = self._scan(latex, 0, in_group=False, text_mode=False)
        return tokens

    def _scan(self, latex: str, pos: int, in_group: bool,
              text_mode: bool) -> Tuple[List[Token], int]:
        """Scan until the end of input or the ``}`` closing the current group."""
        tokens: List[Token] = []
        buffer = _TextBuffer()
        expect_delimiter = False

        while pos < len(latex):
            char = latex[pos]

            if char == '}' and in_group:
                buffer.flush(tokens)
                return tokens, pos + 1

            if char.isspace():
                end = self.whitespace_pattern.match(latex, pos).end()
                if text_mode and (buffer or not self._last_is_command(tokens)):
                    buffer.push(' ', pos)
                pos = end
                continue

            if expect_delimiter:
                expect_delimiter = False
                if char not in '\\{}^_&[]':
                    buffer.flush(tokens)
                    tokens.append(Token(TokenType.TEXT, char, position=pos))
                    pos += 1
                    continue

            if char == '\\':
                buffer.flush(tokens)
                token, pos = self._scan_command(latex, pos)
                tokens.append(token)
                expect_delimiter = token.is_command(*_DELIMITER_COMMANDS)

            elif char == '{':
                buffer.flush(tokens)
                group_text_mode = text_mode or (
                    self.preserve_text_spacing
                    and self._last_is_command(tokens, TEXT_MODE_COMMANDS)
                )
                start = pos
                children, pos = self._scan(latex, pos + 1, in_group=True,
                                           text_mode=group_text_mode)
                tokens.append(Token(TokenType.GROUP, children=children, position=start))

            elif char in _SINGLE_CHAR_TOKENS:
                buffer.flush(tokens)
                tokens.append(Token(_SINGLE_CHAR_TOKENS[char], char, position=pos))
                pos += 1

            else:
                buffer.push(char, pos)
                pos += 1

        buffer.flush(tokens)
        if in_group:
            logger.debug("Unclosed group consumed the rest of the input")
        return tokens, pos

    def _scan_command(self, latex: str, pos: int) -> Tuple[Token, int]:
        """Scan a backslash sequence starting at ``pos``."""
        start = pos
        pos += 1
        if pos >= len(latex):
            return Token(TokenType.TEXT, '\\', position=start), pos

        char = latex[pos]
        if char == '\\':
            return Token(TokenType.NEWLINE, '\\\\', position=start), pos + 1

        if char in ESCAPABLE_CHARS:
            return Token(TokenType.TEXT, char, position=start), pos + 1

        if char in SPACING_TRIGGERS:
            return Token(TokenType.TEXT, lookup_symbol(char) or '', position=start), pos + 1

        match = self.command_pattern.match(latex, pos)
        if match:
            return Token(TokenType.COMMAND, match.group(), position=start), match.end()

        return Token(TokenType.TEXT, char, position=start), pos + 1

    @staticmethod
    def _last_is_command(tokens: List[Token], names=None) -> bool:
        if not tokens or tokens[-1].type != TokenType.COMMAND:
            return False
        return names is None or tokens[-1].value in names


_default_tokenizer = LaTeXTokenizer()


def tokenize(latex: str, preserve_text_spacing: bool = True) -> List[Token]:
    """Tokenize ``latex`` with a shared tokenizer instance."""
    if preserve_text_spacing:
        return _default_tokenizer.tokenize(latex)
    return LaTeXTokenizer(preserve_text_spacing=False).tokenize(latex)


def token_to_text(token: Token) -> str:
    """Flatten a token to plain text, resolving symbol commands."""
    if token.type == TokenType.TEXT:
        return token.value
    if token.type == TokenType.GROUP:
        return tokens_to_text(token.children)
    if token.type == TokenType.COMMAND:
        symbol = lookup_symbol(token.value)
        return symbol if symbol is not None else '\\' + token.value
    return ''


def tokens_to_text(tokens: List[Token]) -> str:
    return ''.join(token_to_text(token) for token in tokens)


__all__ = [
    'LaTeXTokenizer',
    'Token',
    'TokenType',
    'tokenize',
    'token_to_text',
    'tokens_to_text',
]
