"""
Token-level helpers for environments, delimiters and optional arguments.

All helpers are pure functions over a token list plus an index; they never
modify the list and always return the index just past what they consumed.
"""

from typing import List, NamedTuple, Optional, Tuple

from .symbols import resolve_delimiter
from .tokenizer import Token, TokenType, tokens_to_text


Cell = List[Token]
Row = List[Cell]


class DelimitedBody(NamedTuple):
    opening: str
    body: List[Token]
    closing: str
    end: int
    closed: bool


def environment_name(tokens: List[Token], index: int) -> Optional[str]:
    """Name of the ``{name}`` group at ``index``, or None if there is none.

    An empty group is not a name.
    """
    if index < len(tokens) and tokens[index].type == TokenType.GROUP:
        return tokens_to_text(tokens[index].children) or None
    return None


def find_environment_body(tokens: List[Token], start: int, name: str) -> Tuple[List[Token], int]:
    """Collect the body of ``\\begin{name}`` up to its matching ``\\end{name}``.

    ``start`` is the index right after the ``{name}`` group. Nested
    environments with the same name are depth-counted, so only the matching
    end closes the body. Without a matching end the body runs to the end of
    the token list.

    Returns:
        (body tokens, index after ``\\end{name}``)
    """
    depth = 1
    index = start

    while index < len(tokens):
        token = tokens[index]
        if token.is_command('begin', 'end'):
            inner_name = environment_name(tokens, index + 1)
            if inner_name == name:
                depth += 1 if token.value == 'begin' else -1
                if depth == 0:
                    return tokens[start:index], index + 2
            if inner_name is not None:
                index += 2
                continue
        index += 1

    return tokens[start:], len(tokens)


def split_rows(tokens: List[Token]) -> List[Row]:
    """Partition an environment body into rows on ``\\\\`` and cells on ``&``.

    Separators belonging to a nested environment are left inside their
    cell. A trailing ``\\\\`` does not open an empty last row.
    """
    rows: List[Row] = []
    row: Row = []
    cell: Cell = []
    depth = 0

    for index, token in enumerate(tokens):
        if token.is_command('begin', 'end') and environment_name(tokens, index + 1) is not None:
            depth += 1 if token.value == 'begin' else -1
            depth = max(depth, 0)

        if depth == 0 and token.type == TokenType.NEWLINE:
            row.append(cell)
            rows.append(row)
            row, cell = [], []
        elif depth == 0 and token.type == TokenType.AMPERSAND:
            row.append(cell)
            cell = []
        else:
            cell.append(token)

    if cell or row:
        row.append(cell)
        rows.append(row)

    return rows


def pad_rows(rows: List[Row]) -> Tuple[List[Row], int]:
    """Pad every row with empty cells up to the widest row.

    An empty environment becomes one row with one empty cell.

    Returns:
        (padded rows, column count)
    """
    if not rows:
        return [[[]]], 1
    columns = max(len(row) for row in rows)
    padded = [row + [[] for _ in range(columns - len(row))] for row in rows]
    return padded, columns


def read_column_spec(token: Token) -> List[str]:
    """Column justifications from an ``array`` spec such as ``{l|cr}``."""
    alignments = {'l': 'left', 'c': 'center', 'r': 'right'}
    spec = tokens_to_text(token.children) if token.type == TokenType.GROUP else token.value
    return [alignments[char] for char in spec if char in alignments]


def delimiter_char(token: Token) -> str:
    """Character for the delimiter token following ``\\left`` or ``\\right``.

    ``.`` is the invisible delimiter and yields an empty string.
    """
    if token.type == TokenType.TEXT:
        return '' if token.value == '.' else token.value
    if token.type == TokenType.COMMAND:
        return resolve_delimiter(token.value)
    if token.type == TokenType.OPEN_BRACKET:
        return '['
    if token.type == TokenType.CLOSE_BRACKET:
        return ']'
    return ''


def find_right_delimiter(tokens: List[Token], start: int) -> DelimitedBody:
    """Match a ``\\left`` (ending just before ``start``) with its ``\\right``.

    Nested pairs are depth-counted so an inner ``\\right`` never closes the
    outer ``\\left``. An unmatched ``\\left`` takes everything to the end and
    gets an empty closing delimiter.
    """
    index = start
    opening = ''
    if index < len(tokens):
        opening = delimiter_char(tokens[index])
        index += 1

    body_start = index
    depth = 1
    while index < len(tokens):
        token = tokens[index]
        if token.is_command('left'):
            depth += 1
        elif token.is_command('right'):
            depth -= 1
            if depth == 0:
                body = tokens[body_start:index]
                index += 1
                closing = ''
                if index < len(tokens):
                    closing = delimiter_char(tokens[index])
                    index += 1
                return DelimitedBody(opening, body, closing, index, True)
        index += 1

    return DelimitedBody(opening, tokens[body_start:], '', len(tokens), False)


def read_bracket_argument(tokens: List[Token], start: int) -> Optional[Tuple[List[Token], int]]:
    """Read an optional ``[...]`` argument at ``start``.

    Returns:
        (content tokens, index after ``]``), or None when there is no
        bracket at ``start`` or it is never closed
    """
    if start >= len(tokens) or tokens[start].type != TokenType.OPEN_BRACKET:
        return None

    depth = 1
    index = start + 1
    while index < len(tokens):
        token_type = tokens[index].type
        if token_type == TokenType.OPEN_BRACKET:
            depth += 1
        elif token_type == TokenType.CLOSE_BRACKET:
            depth -= 1
            if depth == 0:
                return tokens[start + 1:index], index + 1
        index += 1

    return None


__all__ = [
    'DelimitedBody',
    'environment_name',
    'find_environment_body',
    'split_rows',
    'pad_rows',
    'read_column_spec',
    'delimiter_char',
    'find_right_delimiter',
    'read_bracket_argument',
]
