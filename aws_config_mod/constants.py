__all__ = (
    'CRLF',
    'DEFAULT_KEYWORD',
    'EQUAL_PADDING',
    'LF',
    'LOG_DATEFMT',
    'LOG_FORMAT',
    'NAMELESS_SECTION_KEYWORDS',
    'NESTED_INDENT',
    'PATH_SEPARATOR',
    'SECTION_SEPARATOR_LINES',
)


LF: str = '\n'
'''The default line terminator, used when a file has none of its own.'''

CRLF: str = '\r\n'
'''The other accepted line terminator. Preserved wherever it is found.'''

DEFAULT_KEYWORD: str = 'default'
'''The header keyword of the ``[default]`` section.'''

EQUAL_PADDING: int = 1
'''Spaces on each side of ``=`` in settings created programmatically.'''

NESTED_INDENT: str = '  '
'''The indentation of nested settings created programmatically.'''

SECTION_SEPARATOR_LINES: int = 1
'''Blank lines put between an existing section and an appended one.'''

NAMELESS_SECTION_KEYWORDS: frozenset[str] = frozenset({
    'default',
    'plugins',
    'preview',
})
'''Section types that never carry a section name.'''

PATH_SEPARATOR: str = '.'
'''Separates the segments of a dotted path string.'''

LOG_FORMAT: str = '[{asctime}] ({levelname}:{name}) {message}'
'''Format used by :func:`aws_config_mod.log.enable_debug_logging`.'''

LOG_DATEFMT: str = '%Y-%m-%d_%H:%M:%S'
