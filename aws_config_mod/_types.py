__all__ = (
    'CharNo',
    'ColNo',
    'FileContents',
    'LineNo',
    'Location',
    'PathParts',
    'PathString',
    'TokenValue',
)


type CharNo = int
type ColNo = int
type FileContents = str
'''The complete text of a config or credentials file.'''

type LineNo = int
type Location = tuple[LineNo, ColNo]
'''A 1-indexed (line, column) pair.'''

type PathParts = tuple[object, ...]
'''
The tuple form of a path: section type, optional section name and one or
two setting names. Parts may be strings, section types or ``None``.
'''

type PathString = str
'''The dotted form of a path, e.g. ``'profile.A.region'``.'''

type TokenValue = str
