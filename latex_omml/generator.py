import logging
from typing import List, Optional, Tuple

from . import omml
from .config import ConverterConfig
from .environments import (
    delimiter_char,
    environment_name,
    find_environment_body,
    find_right_delimiter,
    pad_rows,
    read_bracket_argument,
    read_column_spec,
    split_rows,
)
from .omml import OMMLElement
from .symbols import (
    ACCENTS,
    ALIGNED_ENVIRONMENTS,
    CASES_ENVIRONMENTS,
    FONT_SCRIPTS,
    FRACTION_COMMANDS,
    GATHERED_ENVIRONMENTS,
    INTEGRAL_OPERATORS,
    MATRIX_DELIMITERS,
    RELATIONS,
    ROMAN_TEXT_COMMANDS,
    TEXT_COMMANDS,
    is_function_name,
    lookup_nary,
    lookup_symbol,
)
from .tokenizer import Token, TokenType, token_to_text, tokens_to_text


logger = logging.getLogger(__name__)

# Tokens that only mean something inside an environment or a root argument
_SEPARATORS = (
    TokenType.AMPERSAND,
    TokenType.NEWLINE,
    TokenType.OPEN_BRACKET,
    TokenType.CLOSE_BRACKET,
)

# Tokens that can stand as the argument of a command or script
_ARGUMENTS = (TokenType.TEXT, TokenType.GROUP, TokenType.COMMAND)

# Environments whose first group is a parameter, not content
_PARAMETER_ENVIRONMENTS = frozenset({'array', 'alignat'})


class TokenCursor:
    """Read position over one token list.

    Multi-character text tokens can be split on demand, so ``x^2y`` puts
    only ``2`` in the superscript. The cursor works on its own copy of the
    list; the caller's tokens are never modified.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = list(tokens)
        self.index = 0

    def has_more(self) -> bool:
        return self.index < len(self.tokens)

    def peek(self, offset: int = 0) -> Optional[Token]:
        position = self.index + offset
        if position < len(self.tokens):
            return self.tokens[position]
        return None

    def consume(self) -> Token:
        token = self.tokens[self.index]
        self.index += 1
        return token

    def consume_char(self) -> Token:
        """Consume one character of a text token, or the whole token otherwise."""
        token = self.tokens[self.index]
        if token.type == TokenType.TEXT and len(token.value) > 1:
            self.tokens[self.index] = Token(TokenType.TEXT, token.value[1:],
                                            position=token.position + 1)
            return Token(TokenType.TEXT, token.value[0], position=token.position)
        return self.consume()

    def script_follows(self) -> bool:
        token = self.peek()
        return token is not None and token.is_script


class OMMLGenerator:
    """Turn a token list into OMML elements in a single pass."""

    def __init__(self, config: Optional[ConverterConfig] = None):
        self.config = config or ConverterConfig()

    def generate(self, tokens: List[Token]) -> List[OMMLElement]:
        """Generate the OMML elements for ``tokens`` in document order."""
        return self._generate(TokenCursor(tokens))

    def _generate(self, cursor: TokenCursor) -> List[OMMLElement]:
        elements: List[OMMLElement] = []

        while cursor.has_more():
            token = cursor.peek()

            if token.type in _SEPARATORS:
                cursor.consume()

            elif token.is_script:
                # A script with nothing before it attaches to an empty base
                elements.append(self._attach_scripts(cursor, []))

            else:
                elements.extend(self._generate_item(cursor))

        return elements

    def _generate_item(self, cursor: TokenCursor, allow_scripts: bool = True) -> List[OMMLElement]:
        """Generate the next base token, its arguments and any following scripts."""
        token = cursor.consume()

        if token.type == TokenType.TEXT:
            text = token.value
            if allow_scripts and len(text) > 1 and cursor.script_follows():
                # Only the last character carries the scripts
                base = [omml.run(text[-1])]
                return [omml.run(text[:-1]), self._attach_scripts(cursor, base)]
            return self._with_scripts(cursor, [omml.run(text)], allow_scripts)

        if token.type == TokenType.GROUP:
            content = self.generate(token.children)
            return self._with_scripts(cursor, content, allow_scripts)

        if token.type == TokenType.COMMAND:
            return self._handle_command(token.value, cursor, allow_scripts)

        return []

    def _with_scripts(self, cursor: TokenCursor, base: List[OMMLElement],
                      allow_scripts: bool) -> List[OMMLElement]:
        if allow_scripts and cursor.script_follows():
            return [self._attach_scripts(cursor, base)]
        return base

    def _attach_scripts(self, cursor: TokenCursor, base: List[OMMLElement]) -> OMMLElement:
        sub, sup = self._read_scripts(cursor)
        return omml.script(base, sub, sup)

    def _read_scripts(self, cursor: TokenCursor) -> Tuple[Optional[List[OMMLElement]],
                                                          Optional[List[OMMLElement]]]:
        """Read at most one subscript and one superscript, in either order.

        Returns:
            (subscript, superscript); None where the script is absent
        """
        sub = None
        sup = None

        for _ in range(2):
            token = cursor.peek()
            if token is None:
                break
            if token.type == TokenType.SUBSCRIPT and sub is None:
                cursor.consume()
                sub = self._argument(cursor)
            elif token.type == TokenType.SUPERSCRIPT and sup is None:
                cursor.consume()
                sup = self._argument(cursor)
            else:
                break

        return sub, sup

    def _argument(self, cursor: TokenCursor) -> List[OMMLElement]:
        """Get the next argument: a group, one character, or one command.

        A missing argument gives an empty list; structural tokens are left
        for the main loop.
        """
        token = cursor.peek()
        if token is None or token.type not in _ARGUMENTS:
            return []

        if token.type == TokenType.GROUP:
            cursor.consume()
            return self.generate(token.children)

        if token.type == TokenType.TEXT:
            return [omml.run(cursor.consume_char().value)]

        return self._generate_item(cursor, allow_scripts=False)

    def _text_argument(self, cursor: TokenCursor) -> str:
        token = cursor.peek()
        if token is None or token.type not in _ARGUMENTS:
            return ''
        if token.type == TokenType.TEXT:
            return cursor.consume_char().value
        return token_to_text(cursor.consume())

    def _handle_command(self, name: str, cursor: TokenCursor,
                        allow_scripts: bool) -> List[OMMLElement]:
        """Dispatch a command; the command token itself is already consumed."""
        char = lookup_nary(name)
        if char is not None:
            return [self._handle_nary(name, char, cursor)]

        if name in FRACTION_COMMANDS:
            numerator = self._argument(cursor)
            denominator = self._argument(cursor)
            return self._with_scripts(cursor, [omml.fraction(numerator, denominator)],
                                      allow_scripts)

        if name == 'sqrt':
            return self._with_scripts(cursor, [self._handle_sqrt(cursor)], allow_scripts)

        if name in ACCENTS and cursor.peek() is not None and cursor.peek().type in _ARGUMENTS:
            body = self._argument(cursor)
            return self._with_scripts(cursor, [omml.accent(ACCENTS[name], body)], allow_scripts)

        if name == 'begin':
            env_name = environment_name(cursor.tokens, cursor.index)
            if env_name is not None:
                cursor.index += 1
                body, cursor.index = find_environment_body(cursor.tokens, cursor.index, env_name)
                return self._with_scripts(cursor, self._handle_environment(env_name, body),
                                          allow_scripts)

        if name == 'end':
            # The name group after it renders as ordinary text
            logger.debug("Keeping \\end without a matching \\begin as literal text")
            return [omml.run('\\end')]

        if name == 'left':
            match = find_right_delimiter(cursor.tokens, cursor.index)
            cursor.index = match.end
            element = omml.delimiter(match.opening, match.closing, self.generate(match.body))
            return self._with_scripts(cursor, [element], allow_scripts)

        if name == 'right':
            logger.debug("Keeping \\right without a matching \\left as literal text")
            elements = [omml.run('\\right')]
            token = cursor.peek()
            # Brackets would otherwise be skipped as separators
            if token is not None and token.type in (TokenType.OPEN_BRACKET, TokenType.CLOSE_BRACKET):
                elements.append(omml.run(delimiter_char(cursor.consume())))
            return elements

        if name in TEXT_COMMANDS:
            text = self._text_argument(cursor)
            element = omml.run(text, upright=name in ROMAN_TEXT_COMMANDS,
                               script=FONT_SCRIPTS.get(name))
            return self._with_scripts(cursor, [element], allow_scripts)

        symbol = lookup_symbol(name)
        if symbol is not None:
            element = omml.run(symbol, upright=is_function_name(name))
            return self._with_scripts(cursor, [element], allow_scripts)

        logger.debug(f"Unknown command \\{name}, emitting it literally")
        return self._with_scripts(cursor, [omml.run('\\' + name)], allow_scripts)

    def _handle_nary(self, name: str, char: str, cursor: TokenCursor) -> OMMLElement:
        """Large operator: leading scripts are its limits, the next token its body."""
        stacked = self.config.nary_limits_stacked and name not in INTEGRAL_OPERATORS
        token = cursor.peek()
        if token is not None and token.is_command('limits', 'nolimits'):
            stacked = cursor.consume().value == 'limits'

        sub, sup = self._read_scripts(cursor)

        body: List[OMMLElement] = []
        token = cursor.peek()
        if token is not None and token.type in _ARGUMENTS:
            body = self._generate_item(cursor)

        return omml.nary(char, sub or [], sup or [], body,
                         has_sub=sub is not None, has_sup=sup is not None,
                         stacked=stacked)

    def _handle_sqrt(self, cursor: TokenCursor) -> OMMLElement:
        degree = None
        bracket = read_bracket_argument(cursor.tokens, cursor.index)
        if bracket is not None:
            degree_tokens, cursor.index = bracket
            degree = self.generate(degree_tokens)
        return omml.radical(self._argument(cursor), degree)

    def _handle_environment(self, name: str, body: List[Token]) -> List[OMMLElement]:
        """Render an environment body by environment name."""
        column_spec = None
        if name in _PARAMETER_ENVIRONMENTS and body and body[0].type == TokenType.GROUP:
            column_spec, body = body[0], body[1:]

        if name in MATRIX_DELIMITERS:
            begin, end = MATRIX_DELIMITERS[name]
            matrix = self._matrix(body)
            if begin or end:
                return [omml.delimiter(begin, end, [matrix])]
            return [matrix]

        if name in CASES_ENVIRONMENTS:
            return [omml.delimiter('{', '', [self._matrix(body, justification='left')])]

        if name == 'array':
            justifications = read_column_spec(column_spec) if column_spec is not None else []
            return [self._matrix(body, justifications=justifications)]

        if name in ALIGNED_ENVIRONMENTS:
            return [self._equation_array(body, aligned=True)]

        if name in GATHERED_ENVIRONMENTS:
            return [self._equation_array(body, aligned=False)]

        logger.debug(f"Unknown environment {name!r}, rendering its body inline")
        return self.generate(body)

    def _matrix(self, body: List[Token], justification: str = 'center',
                justifications: Optional[List[str]] = None) -> OMMLElement:
        rows, columns = pad_rows(split_rows(body))
        column_justifications = list(justifications or [])[:columns]
        column_justifications += [justification] * (columns - len(column_justifications))

        cells = [[self.generate(cell) for cell in row] for row in rows]
        return omml.matrix(cells, column_justifications)

    def _equation_array(self, body: List[Token], aligned: bool) -> OMMLElement:
        rows, _ = pad_rows(split_rows(body))
        equations = []

        for row in rows:
            elements: List[OMMLElement] = []
            for index, cell in enumerate(row):
                if aligned and index > 0:
                    align_text, cell = self._alignment_point(cell)
                    elements.append(omml.run(align_text, align=True))
                elements.extend(self.generate(cell))
            equations.append(elements)

        return omml.equation_array(equations)

    @staticmethod
    def _alignment_point(cell: List[Token]) -> Tuple[str, List[Token]]:
        """Text of the alignment run placed before ``cell``.

        A leading ``=`` moves into the alignment run; any other leading
        relation stays in the cell and the alignment run is left empty.
        """
        if not cell:
            return '', cell

        first = cell[0]
        if first.type == TokenType.TEXT and first.value.startswith('='):
            rest = first.value[1:]
            if rest:
                return '=', [Token(TokenType.TEXT, rest, position=first.position + 1)] + cell[1:]
            return '=', cell[1:]

        leading = tokens_to_text(cell[:1])
        if leading and leading[0] in RELATIONS:
            return '', cell
        return '=', cell


__all__ = ['OMMLGenerator', 'TokenCursor']
