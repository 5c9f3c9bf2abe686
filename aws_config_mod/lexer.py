'''
Primitive token rules for AWS config and credentials files.

The grammar is context sensitive at the lexical level (a value and a name
overlap, a run of spaces is either padding, indentation or part of a
blank line), so the lexer does not split the whole file up front.
The parser asks for one token kind at a time at the current cursor.
A failed match never moves the cursor and is remembered so that the
furthest failure can be reported if the whole parse fails.
'''

__all__ = (
    'Lexer',
    'Token',
    'TokKind',
)


import re
from bisect import bisect_right
from enum import Enum
from typing import Literal, NoReturn, Self

from ._types import CharNo, ColNo, FileContents, LineNo, Location, TokenValue
from .errors import ParseError
from .utils import join_options


class TokKind(Enum):
    '''
    The kinds of lexical units. Each value describes the token in
    error messages.
    '''
    # Runs of blank and comment-only lines:
    WHITESPACE = 'a blank line or a comment'

    # Symbols:
    IDENTIFIER = 'a name'
    DEFAULT = "'default'"
    VALUE = 'a value'

    # Padding:
    EQUALS = "'='"
    TRAILER = 'a comment or a line break'
    INDENT = 'an indented setting'
    SPACE = "' '"

    # Syntax:
    L_BRACKET = "'['"
    R_BRACKET = "']'"
    DOT = "'.'"

    EOF = 'end of input'
    UNKNOWN = 'UNKNOWN'


_BLANK_LINE = r'[ \t]*(?:#[^\n]*)?'


class Token:
    '''
    Represents a single lexical unit found in a config file.

    :param at: The token's location
    :type at: tuple[:class:`CharNo`, :class:`Location`]

    :param value: The literal text making up the token
    :type value: :class:`str`

    :param kind: The token's distinct kind
    :type kind: :class:`TokKind`

    :param lexer: The lexer used to find this token, optional
    :type lexer: :class:`Lexer`
    '''
    __slots__ = (
        'at',
        'value',
        'kind',
        'cursor',
        'lineno',
        'colno',
        'lexer',
    )

    def __init__(
        self,
        at: tuple[CharNo, Location],
        value: TokenValue,
        kind: TokKind,
        lexer: 'Lexer' = None,
    ) -> None:
        self.at = at
        self.value = value
        self.kind = kind
        self.cursor = at[0]
        self.lineno = at[1][0]
        self.colno = at[1][1]
        self.lexer = lexer

    def __repr__(self) -> str:
        cls = type(self).__name__
        return (
            f"{cls}(value={self.value!r}, kind={self.kind},"
            f" at={self.coords})"
        )

    def error_leader(self, with_col: bool = False) -> str:
        '''
        Return the beginning of an error message that features the
        line number and possibly the column number.

        :param with_col: Also print the column number,
            defaults to ``False``
        :type with_col: :class:`bool`
        '''
        column = ', column ' + str(self.colno) if with_col else ''
        return f"Line {self.lineno}{column}: "

    @property
    def coords(self) -> Location:
        '''
        Return the token's coordinates as (line, column).
        '''
        return (self.lineno, self.colno)


class Lexer:
    '''
    Match tokens one at a time in a string.

    :param string: The text to tokenize
    :type string: :class:`FileContents`
    '''
    _rules = {
        # A sequence of lines that are blank or hold only a comment,
        # each ended by a line break, then optionally one more such
        # line ended by the end of the input:
        TokKind.WHITESPACE: re.compile(
            r'(?:' + _BLANK_LINE + r'(?:\r\n|\n))*'
            r'(?:' + _BLANK_LINE + r'\Z)?'
        ),
        TokKind.IDENTIFIER: re.compile(r'[A-Za-z0-9_-]+'),
        TokKind.DEFAULT: re.compile(r'default(?=\])'),
        TokKind.VALUE: re.compile(r'[^#\t \r\n]+'),
        TokKind.EQUALS: re.compile(r'[ \t]*=[ \t]*'),
        # The rest of a line after a value, without the line break:
        TokKind.TRAILER: re.compile(r'[ \t]*(?:#[^\n]*?)?(?=\r?\n|\Z)'),
        TokKind.INDENT: re.compile(r'[ \t]+(?=[A-Za-z0-9])'),
        TokKind.SPACE: re.compile(r' '),
        TokKind.L_BRACKET: re.compile(r'\['),
        TokKind.R_BRACKET: re.compile(r'\]'),
        TokKind.DOT: re.compile(r'\.'),
        TokKind.EOF: re.compile(r'\Z'),
    }

    def __init__(self, string: FileContents) -> None:
        self._string = string
        self._lines = re.split(r'\r?\n', string)
        # Offsets at which each line begins:
        self._line_starts = [0]
        self._line_starts.extend(m.end() for m in re.finditer(r'\n', string))
        self._cursor = 0  # 0-indexed

        self._furthest = -1
        self._expected = []

    @property
    def string(self) -> FileContents:
        return self._string

    @property
    def cursor(self) -> CharNo:
        '''
        Return the current position in the string.
        '''
        return self._cursor

    def lineno_at(self, cursor: CharNo) -> LineNo:
        '''
        Return the 1-indexed line number of a position.
        '''
        return bisect_right(self._line_starts, cursor)

    def colno_at(self, cursor: CharNo) -> ColNo:
        '''
        Return the 1-indexed column number of a position.
        '''
        return cursor - self._line_starts[self.lineno_at(cursor) - 1] + 1

    def get_line(self, lookup: LineNo | Token) -> str:
        '''
        Retrieve a line without its terminator using its line number
        or a token.

        :param lookup: Use this line number or token to get the line.
        :type lookup: :class:`LineNo` | :class:`Token`
        '''
        if isinstance(lookup, Token):
            lookup = lookup.lineno
        return self._lines[lookup - 1]

    def mark(self) -> CharNo:
        '''
        Return the current position so that it can be restored with
        :meth:`reset` after a failed alternative.
        '''
        return self._cursor

    def reset(self, mark: CharNo = 0) -> Self:
        '''
        Move the lexer back to a position given by :meth:`mark`.
        '''
        self._cursor = mark
        return self

    @classmethod
    def rule(cls, kind: TokKind) -> re.Pattern:
        '''
        Return the compiled pattern that matches tokens of `kind`.
        '''
        return cls._rules[kind]

    def at_eof(self) -> bool:
        return self._cursor == len(self._string)

    def at_line_start(self) -> bool:
        '''
        Test whether the cursor sits at the beginning of a line.
        Record a failure if it does not.
        '''
        if self._cursor == 0 or self._string[self._cursor - 1] == '\n':
            return True
        self._note_failure('a line break')
        return False

    def peek(self, kind: TokKind) -> bool:
        '''
        Test whether a token of a certain kind starts at the cursor
        without consuming it or recording a failure.
        '''
        return self._rules[kind].match(self._string, self._cursor) is not None

    def match(
        self,
        kind: TokKind,
        errmsg: str = None,
        expected: str = None
    ) -> Token | Literal[False] | NoReturn:
        '''
        Consume a token of a certain kind at the cursor.
        If the test passes, return the token.
        If it fails, return ``False``, or raise :exc:`ParseError`
        using `errmsg` if `errmsg` is given.

        :param kind: The kind of token to expect
        :type kind: :class:`TokKind`

        :param errmsg: The error message to display, optional
        :type errmsg: :class:`str`

        :param expected: Describe the token this way in error messages,
            defaults to the value of `kind`
        :type expected: :class:`str`

        :raises: :exc:`ParseError` When the test fails and `errmsg`
            is given
        '''
        m = self._rules[kind].match(self._string, self._cursor)
        if m is None:
            self._note_failure(expected or kind.value)
            if errmsg is None:
                return False
            raise ParseError.hl_error(
                self.token_at(self._cursor),
                errmsg,
                expected=(expected or kind.value,)
            )

        tok = self._make_token(self._cursor, m.group(), kind)
        self._cursor = m.end()
        return tok

    def _note_failure(self, expected: str) -> None:
        '''
        Remember what was expected at the furthest failing position.
        '''
        if self._cursor > self._furthest:
            self._furthest = self._cursor
            self._expected = []
        if self._cursor == self._furthest and expected not in self._expected:
            self._expected.append(expected)

    def _make_token(
        self,
        cursor: CharNo,
        value: TokenValue,
        kind: TokKind
    ) -> Token:
        at = (cursor, (self.lineno_at(cursor), self.colno_at(cursor)))
        return Token(at=at, value=value, kind=kind, lexer=self)

    def token_at(self, cursor: CharNo) -> Token:
        '''
        Make an :attr:`TokKind.UNKNOWN` token out of the text found at
        a position, for use in error messages.
        '''
        rest = self._string[cursor:]
        if not rest:
            return self._make_token(cursor, '', TokKind.EOF)
        bad_value = rest.split(None, 1)[0] if rest.strip() else rest[:1]
        if not rest.startswith(bad_value):
            # The text at the cursor is whitespace:
            bad_value = rest[:1]
        return self._make_token(cursor, bad_value, TokKind.UNKNOWN)

    def furthest_error(self, msg: str = "Invalid syntax") -> ParseError:
        '''
        Return a :exc:`ParseError` pointing at the furthest position any
        rule reached, listing what was expected there.

        :param msg: The start of the error message,
            defaults to ``"Invalid syntax"``
        :type msg: :class:`str`
        '''
        cursor = max(self._furthest, self._cursor)
        expected = tuple(self._expected) if cursor == self._furthest else ()
        tok = self.token_at(cursor)

        if tok.kind is TokKind.EOF:
            found = "end of input"
        elif tok.value in ('\n', '\r'):
            found = "a line break"
        else:
            too_long = 16
            found = (
                repr(tok.value) if len(tok.value) <= too_long
                else repr(tok.value[:too_long] + '...')
            )

        if expected:
            msg = f"{msg}: expected {join_options(expected)}, found {found}"
        else:
            msg = f"{msg}: unexpected {found}"
        return ParseError.hl_error(tok, msg, expected=expected)
