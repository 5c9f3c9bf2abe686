'''
Typed addresses of sections, settings and nested settings.

A path is written as a dotted string or given as a tuple::

    'profile.dev.region'
    ('profile', 'dev', 'region')
    (SectionType.PROFILE, 'dev', 'region')
    'default.s3.max_concurrent_requests'

The first part is the section type keyword. The section name follows
unless the type is one of ``default``, ``plugins`` or ``preview``.
'''

__all__ = (
    'NestedSettingPath',
    'SectionPath',
    'SettingPath',
    'setting_path',
)


from dataclasses import dataclass
from typing import Self

from ._types import PathParts, PathString
from .constants import PATH_SEPARATOR
from .errors import ParseError, PathError, SectionNameRequiredError, TokenError
from .lexer import Lexer, TokKind
from .model import (
    AnySectionType,
    OtherSectionType,
    SectionName,
    SectionType,
    SettingName,
)


def _split_path(text: PathString) -> list[str]:
    '''
    Split a dotted path string into its parts.
    The whole string must be consumed.

    :raises: :exc:`PathError` if `text` is not a dotted run of names
    '''
    lexer = Lexer(text)
    try:
        parts = [lexer.match(TokKind.IDENTIFIER, "Invalid path").value]
        while lexer.match(TokKind.DOT):
            parts.append(
                lexer.match(TokKind.IDENTIFIER, "Invalid path").value
            )
        if not lexer.match(TokKind.EOF):
            raise lexer.furthest_error("Invalid path")
    except ParseError as e:
        raise PathError(e.msg, text) from e
    return parts


def _section_type(part: object, path: object) -> AnySectionType:
    if isinstance(part, (SectionType, OtherSectionType)):
        return part
    if not isinstance(part, str):
        raise PathError(
            f"A section type must be a SectionType or str,"
            f" not {type(part).__name__}",
            path
        )
    try:
        return SectionType.from_keyword(part)
    except TokenError as e:
        raise PathError(e.msg, path) from e


def _name(cls: type, part: object, path: object):
    if not isinstance(part, str):
        raise PathError(
            f"A path part must be a str, not {type(part).__name__}",
            path
        )
    try:
        return cls(part)
    except TokenError as e:
        raise PathError(e.msg, path) from e


def _split_section(
    parts: PathParts,
    extra: int,
    path: object
) -> tuple['SectionPath', PathParts]:
    '''
    Take the section type and, if the type takes one, the section name
    from the front of `parts`. Exactly `extra` parts must remain.
    Return the section path and the remaining parts.
    '''
    if not parts:
        raise PathError("A path cannot be empty", path)
    section_type = _section_type(parts[0], path)
    rest = tuple(parts[1:])

    if not section_type.takes_name:
        if len(rest) == extra + 1 and rest[0] is None:
            # A tuple may spell out the missing name as None.
            rest = rest[1:]
        elif len(rest) == extra + 1:
            raise PathError(
                f"Section type {section_type.keyword!r}"
                f" takes no section name",
                path
            )
        section = SectionPath(section_type)

    else:
        if len(rest) == extra or (rest and rest[0] is None):
            raise SectionNameRequiredError(section_type, path)
        section = SectionPath(section_type, _name(SectionName, rest[0], path))
        rest = rest[1:]

    if len(rest) != extra:
        raise PathError(
            f"Wrong number of parts in path {path!r}",
            path
        )
    return section, rest


@dataclass(frozen=True)
class SectionPath:
    '''
    The address of a section: its type and, for most types, its name.

    :param section_type: The section type
    :type section_type: :class:`AnySectionType` | :class:`str`

    :param section_name: The section name
    :type section_name: :class:`SectionName` | :class:`str` | ``None``

    :raises: :exc:`SectionNameRequiredError` if the type needs a name
        and none is given
    :raises: :exc:`PathError` if a name is given to a type that takes
        none
    '''
    section_type: AnySectionType
    section_name: SectionName | None = None

    def __post_init__(self) -> None:
        section_type = _section_type(self.section_type, self.section_type)
        object.__setattr__(self, 'section_type', section_type)
        if self.section_name is None:
            if section_type.takes_name:
                raise SectionNameRequiredError(section_type)
        elif not section_type.takes_name:
            raise PathError(
                f"Section type {section_type.keyword!r}"
                f" takes no section name"
            )
        else:
            object.__setattr__(
                self,
                'section_name',
                _name(SectionName, self.section_name, self.section_name)
            )

    def __str__(self) -> str:
        if self.section_name is None:
            return str(self.section_type)
        return PATH_SEPARATOR.join((str(self.section_type), self.section_name))

    @property
    def key(self) -> tuple[AnySectionType, SectionName | None]:
        '''The identity of the addressed section.'''
        return (self.section_type, self.section_name)

    @classmethod
    def from_tuple(cls, parts: PathParts) -> Self:
        '''
        Make a section path from ``(type,)`` or ``(type, name)``.
        '''
        section, _ = _split_section(parts, 0, parts)
        return section

    @classmethod
    def from_str(cls, text: PathString) -> Self:
        '''
        Make a section path from ``'type'`` or ``'type.name'``.
        '''
        return _from_str(cls, text)

    @classmethod
    def coerce(cls, obj: 'Self | PathString | PathParts') -> Self:
        '''
        Accept a section path, a dotted string or a tuple.
        '''
        return _coerce(cls, obj)


@dataclass(frozen=True)
class SettingPath:
    '''
    The address of a setting: a section path and a setting name.

    :param section_path: The section holding the setting
    :type section_path: :class:`SectionPath`

    :param setting_name: The setting name
    :type setting_name: :class:`SettingName` | :class:`str`
    '''
    section_path: SectionPath
    setting_name: SettingName

    def __post_init__(self) -> None:
        object.__setattr__(
            self, 'section_path', SectionPath.coerce(self.section_path)
        )
        object.__setattr__(
            self,
            'setting_name',
            _name(SettingName, self.setting_name, self.setting_name)
        )

    def __str__(self) -> str:
        return PATH_SEPARATOR.join((str(self.section_path), self.setting_name))

    @property
    def section_type(self) -> AnySectionType:
        return self.section_path.section_type

    @property
    def section_name(self) -> SectionName | None:
        return self.section_path.section_name

    @classmethod
    def from_tuple(cls, parts: PathParts) -> Self:
        section, rest = _split_section(parts, 1, parts)
        return cls(section, _name(SettingName, rest[0], parts))

    @classmethod
    def from_str(cls, text: PathString) -> Self:
        '''
        Make a setting path from a string like ``'profile.dev.region'``
        or ``'default.region'``.
        '''
        return _from_str(cls, text)

    @classmethod
    def coerce(cls, obj: 'Self | PathString | PathParts') -> Self:
        return _coerce(cls, obj)


@dataclass(frozen=True)
class NestedSettingPath:
    '''
    The address of a nested setting: a setting path and the name of
    one of the setting's nested settings.

    :param setting_path: The setting holding the nested settings
    :type setting_path: :class:`SettingPath`

    :param nested_setting_name: The nested setting name
    :type nested_setting_name: :class:`SettingName` | :class:`str`
    '''
    setting_path: SettingPath
    nested_setting_name: SettingName

    def __post_init__(self) -> None:
        object.__setattr__(
            self, 'setting_path', SettingPath.coerce(self.setting_path)
        )
        object.__setattr__(
            self,
            'nested_setting_name',
            _name(
                SettingName,
                self.nested_setting_name,
                self.nested_setting_name
            )
        )

    def __str__(self) -> str:
        return PATH_SEPARATOR.join(
            (str(self.setting_path), self.nested_setting_name)
        )

    @property
    def section_path(self) -> SectionPath:
        return self.setting_path.section_path

    @property
    def setting_name(self) -> SettingName:
        return self.setting_path.setting_name

    @classmethod
    def from_tuple(cls, parts: PathParts) -> Self:
        section, (setting, nested) = _split_section(parts, 2, parts)
        return cls(
            SettingPath(section, _name(SettingName, setting, parts)),
            _name(SettingName, nested, parts)
        )

    @classmethod
    def from_str(cls, text: PathString) -> Self:
        '''
        Make a nested setting path from a string like
        ``'services.local.s3.endpoint_url'``.
        '''
        return _from_str(cls, text)

    @classmethod
    def coerce(cls, obj: 'Self | PathString | PathParts') -> Self:
        return _coerce(cls, obj)


def _from_str(cls, text):
    parts = tuple(_split_path(text))
    try:
        return cls.from_tuple(parts)
    except PathError as e:
        # Report the string as given, not its parts.
        e.path = text
        raise


def _coerce(cls, obj):
    if isinstance(obj, cls):
        return obj
    if isinstance(obj, str):
        return cls.from_str(obj)
    if isinstance(obj, (tuple, list)):
        return cls.from_tuple(tuple(obj))
    raise TypeError(
        f"Expected a {cls.__name__}, str or tuple, not {type(obj).__name__}"
    )


def setting_path(
    obj: SettingPath | NestedSettingPath | PathString | PathParts
) -> SettingPath | NestedSettingPath:
    '''
    Read a path to either a setting or a nested setting.
    Which one depends on how many parts follow the section.

    ``'profile.dev.region'`` -> :class:`SettingPath`

    ``'default.s3.max_queue_size'`` -> :class:`NestedSettingPath`

    :param obj: The path
    :type obj: :class:`SettingPath` | :class:`NestedSettingPath` |
        :class:`PathString` | :class:`PathParts`

    :raises: :exc:`PathError` if `obj` is not a setting path
    :raises: :exc:`SectionNameRequiredError` if the section name is
        missing
    '''
    if isinstance(obj, (SettingPath, NestedSettingPath)):
        return obj
    if isinstance(obj, str):
        parts = tuple(_split_path(obj))
    elif isinstance(obj, (tuple, list)):
        parts = tuple(obj)
    else:
        raise TypeError(
            f"Expected a path, str or tuple, not {type(obj).__name__}"
        )
    if not parts:
        raise PathError("A path cannot be empty", obj)

    section_type = _section_type(parts[0], obj)
    # Parts after the type: [name] setting [nested]
    after = len(parts) - 1
    if section_type.takes_name:
        after -= 1
    elif len(parts) > 1 and parts[1] is None:
        after -= 1

    kind = NestedSettingPath if after >= 2 else SettingPath
    return kind.coerce(obj)
