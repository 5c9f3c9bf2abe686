__all__ = (
    'ConfigError',
    'ParseError',
    'PathError',
    'SectionNameRequiredError',
    'TokenError',
)


from typing import Any, Self

from ._types import CharNo, Location


class ConfigError(SyntaxError):
    '''
    Base exception for errors related to config file parsing and
    addressing.

    :param msg: The error message
    :type msg: :class:`str`
    '''
    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


class TokenError(ConfigError):
    '''
    An exception affecting individual tokens: text that cannot stand
    for a name, a value or another lexical unit.

    :param msg: The error message
    :type msg: :class:`str`

    :param token: The offending token, if the error came from lexing
    :type token: :class:`aws_config_mod.lexer.Token`
    '''
    def __init__(self, msg: str, token: 'Token' = None) -> None:
        super().__init__(msg)
        self.token = token

    @property
    def cursor(self) -> CharNo | None:
        '''
        Return the 0-indexed position of the offending token in the
        input, if known.
        '''
        if self.token is None:
            return None
        return self.token.cursor

    @property
    def coords(self) -> Location | None:
        '''
        Return the offending token's coordinates as (line, column), if
        known.
        '''
        if self.token is None:
            return None
        return self.token.coords

    @classmethod
    def hl_error(
        cls,
        token: 'Token',
        msg: str,
        with_col: bool = True,
        leader: str = None,
        indent: int = 2,
        **kwargs: Any
    ) -> Self:
        '''
        Highlight the part of a line occupied by a token.
        Return a new error whose message is the error leader and `msg`,
        followed by the original line and a line of arrows that point
        to the token.

        :param token: The token to be highlighted
        :type token: :class:`aws_config_mod.lexer.Token`

        :param msg: The error message to display after `leader`
        :type msg: :class:`str`

        :param with_col: Display the column number of the token,
            defaults to ``True``
        :type with_col: :class:`bool`

        :param leader: The error leader to use,
            defaults to that of the token
        :type leader: :class:`str`

        :param indent: Indent the quoted line by this many spaces,
            defaults to 2
        :type indent: :class:`int`

        :param kwargs: Passed on to the error's constructor

        :returns: A new error with a custom error message
        :rtype: :class:`TokenError`
        '''
        if leader is None:
            leader = token.error_leader(with_col)
        dent = ' ' * indent

        max_len = 100
        break_line = "\n" + dent if len(leader + msg) > max_len else ""

        line = token.lexer.get_line(token)
        # Never highlight past the end of the token's own line:
        room = len(line) - token.colno + 1
        length = max(1, min(len(token.value), room))
        offset = ' ' * (token.colno - 1)
        highlight = dent + offset + '^' * length

        errmsg = leader + break_line + msg + '\n'.join(
            ('', dent + line, highlight)
        )
        return cls(errmsg, token, **kwargs)


class ParseError(TokenError):
    '''
    Raised when the input does not match the config file grammar.
    No partial tree is ever produced.

    :param msg: The error message
    :type msg: :class:`str`

    :param token: The token at the furthest position the parser reached
    :type token: :class:`aws_config_mod.lexer.Token`

    :param expected: Descriptions of what would have been accepted there
    :type expected: tuple[:class:`str`]
    '''
    def __init__(
        self,
        msg: str,
        token: 'Token' = None,
        expected: tuple[str, ...] = ()
    ) -> None:
        super().__init__(msg, token)
        self.expected = tuple(expected)


class PathError(ConfigError):
    '''
    Raised when a dotted string or tuple does not describe a valid
    section, setting or nested setting path.

    :param msg: The error message
    :type msg: :class:`str`

    :param path: The path that failed, optional
    :type path: :class:`object`
    '''
    def __init__(self, msg: str, path: object = None) -> None:
        super().__init__(msg)
        self.path = path


class SectionNameRequiredError(PathError):
    '''
    Raised when a path omits the section name of a section type that
    needs one, e.g. ``'profile.region'``.

    :param section_type: The section type missing its name
    :type section_type: :class:`aws_config_mod.model.AnySectionType`

    :param path: The path that failed, optional
    :type path: :class:`object`
    '''
    def __init__(self, section_type: object, path: object = None) -> None:
        keyword = getattr(section_type, 'keyword', section_type)
        msg = f"A section name is required for section type {keyword!r}"
        super().__init__(msg, path)
        self.section_type = section_type
