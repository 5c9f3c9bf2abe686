'''Utility functions'''

__all__ = (
    'join_options',
    'split_line_end',
)


import re
from collections.abc import Iterable


_LINE_END = re.compile(r'\r?\n')


def join_options(
    it: Iterable[object],
    /,
    sep: str = ', ',
    final_sep: str = 'or',
    quote: bool = False,
) -> str:
    '''
    Tie together a list of objects for use in natural sentences.
    Used to present expected tokens in error messages.

    ``['a', 'b', 'c']`` -> ``'a, b or c'``

    :param it: The iterable of objects to join
    :type it: :class:`Iterable[object]`

    :param sep: The string separating every option,
        defaults to ``', '``
    :type sep: :class:`str`

    :param final_sep: The word separating the last two options,
        defaults to ``'or'``
    :type final_sep: :class:`str`

    :param quote: Put each option in quotes,
        defaults to ``False``
    :type quote: :class:`bool`
    '''
    opts = [repr(str(item)) if quote else str(item) for item in it]
    match opts:
        case []:
            return ""
        case [only]:
            return only
    return f"{sep.join(opts[:-1])} {final_sep} {opts[-1]}"


def split_line_end(text: str, /) -> tuple[str, str]:
    '''
    Split `text` before its first line terminator.
    Return the part on the current line and everything from the
    terminator on. The second part is empty if there is no terminator.

    ``' # note\\n\\n'`` -> ``(' # note', '\\n\\n')``
    '''
    m = _LINE_END.search(text)
    if m is None:
        return text, ""
    return text[:m.start()], text[m.start():]
