'''
The nodes of a parsed AWS config or credentials file.

Every node renders back to exactly the text it was parsed from with
:func:`str`. Nodes built in code render in a canonical layout:
``name = value`` on its own line, nested settings indented by two spaces.
'''

__all__ = (
    'AnySectionType',
    'CredentialHeader',
    'Equal',
    'Header',
    'Indent',
    'NestedSetting',
    'NestedSettings',
    'OtherSectionType',
    'Section',
    'SectionName',
    'SectionType',
    'Setting',
    'SettingName',
    'Value',
    'ValueKind',
    'Whitespace',
)


from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Self

from .constants import (
    CRLF,
    DEFAULT_KEYWORD,
    EQUAL_PADDING,
    LF,
    NAMELESS_SECTION_KEYWORDS,
    NESTED_INDENT,
)
from .errors import TokenError
from .lexer import Lexer, TokKind
from .utils import split_line_end


class Whitespace(str):
    '''
    The exact text of a run of blank and comment-only lines, or of the
    rest of a line after a token. Never reinterpreted or normalized.
    '''
    @classmethod
    def newline(cls, terminator: str = LF) -> Self:
        '''
        Return a run holding a single line break.
        '''
        return cls(terminator)

    def split_line_end(self) -> tuple[Self, str]:
        '''
        Split the run before its first line terminator.
        Return the part on the current line and the rest.
        '''
        head, rest = split_line_end(self)
        return type(self)(head), rest


class Equal(str):
    '''
    An ``=`` sign with its original padding, e.g. ``'='`` or ``'   = '``.
    '''
    @classmethod
    def padded(cls, padding: int = EQUAL_PADDING) -> Self:
        '''
        Return an ``=`` padded on each side by `padding` spaces.
        '''
        pad = ' ' * padding
        return cls(f"{pad}={pad}")

    def for_scalar(self) -> Self:
        '''
        Return the sign padded on the right if nothing follows it yet,
        so that a value can be written after it.
        '''
        if self.endswith((' ', '\t')):
            return self
        return type(self)(self + ' ' * EQUAL_PADDING)

    def for_nested(self) -> Self:
        '''
        Return the sign without its right padding, as it appears before
        the line break of a setting with nested settings.
        '''
        return type(self)(self.rstrip(' \t'))


class Indent(str):
    '''The leading spaces or tabs of a nested setting.'''
    pass


class _CheckedText(str):
    '''
    A string that must match one lexer rule in full.
    '''
    _kind: ClassVar[TokKind]
    _what: ClassVar[str]

    def __new__(cls, text: str) -> Self:
        if not isinstance(text, str):
            raise TypeError(
                f"{cls.__name__} must be made from a str,"
                f" not {type(text).__name__}"
            )
        if Lexer.rule(cls._kind).fullmatch(text) is None:
            raise TokenError(f"Invalid {cls._what}: {text!r}")
        return super().__new__(cls, text)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class SectionName(_CheckedText):
    '''
    The name of a section. In ``[profile dev]``, ``dev`` is the name.
    Letters, digits, ``_`` and ``-``.
    '''
    _kind = TokKind.IDENTIFIER
    _what = 'section name'


class SettingName(_CheckedText):
    '''
    The name of a setting, the part before the ``=`` sign.
    Letters, digits, ``_`` and ``-``.
    '''
    _kind = TokKind.IDENTIFIER
    _what = 'setting name'


class Value(_CheckedText):
    '''
    A scalar setting value: one or more characters that are not ``#``,
    spaces, tabs or line breaks.
    '''
    _kind = TokKind.VALUE
    _what = 'value'


class SectionType(Enum):
    '''
    The section kinds AWS defines. Unknown keywords are represented by
    :class:`OtherSectionType`.
    '''
    DEFAULT = DEFAULT_KEYWORD
    PROFILE = 'profile'
    SSO_SESSION = 'sso-session'
    SERVICES = 'services'
    PLUGINS = 'plugins'
    PREVIEW = 'preview'

    def __str__(self) -> str:
        return self.value

    @property
    def keyword(self) -> str:
        '''The text of the type as written in a header.'''
        return self.value

    @property
    def takes_name(self) -> bool:
        '''
        Whether sections of this type are identified by a name.
        ``[default]``, ``[plugins]`` and ``[preview]`` are not.
        '''
        return self.value not in NAMELESS_SECTION_KEYWORDS

    @classmethod
    def from_keyword(cls, keyword: str) -> 'AnySectionType':
        '''
        Return the section type written as `keyword` in a header,
        falling back to :class:`OtherSectionType`.

        :param keyword: The header keyword, e.g. ``'sso-session'``
        :type keyword: :class:`str`

        :raises: :exc:`TokenError` if `keyword` is not a valid name
        '''
        try:
            return cls(keyword)
        except ValueError:
            return OtherSectionType(keyword)


@dataclass(frozen=True)
class OtherSectionType:
    '''
    A section type keyword that is not one of :class:`SectionType`.
    Kept so that unknown sections survive a round trip.

    :param keyword: The keyword as written in the header
    :type keyword: :class:`str`
    '''
    keyword: str

    def __post_init__(self) -> None:
        if not isinstance(self.keyword, str):
            raise TypeError("A section type keyword must be a str")
        if Lexer.rule(TokKind.IDENTIFIER).fullmatch(self.keyword) is None:
            raise TokenError(f"Invalid section type: {self.keyword!r}")
        if self.keyword in {t.value for t in SectionType}:
            raise TokenError(
                f"{self.keyword!r} is a known section type;"
                f" use SectionType.from_keyword()"
            )

    def __str__(self) -> str:
        return self.keyword

    @property
    def takes_name(self) -> bool:
        return True


type AnySectionType = SectionType | OtherSectionType


@dataclass
class Header:
    '''
    The bracketed header of a config file section, e.g.
    ``[profile A]`` or ``[default]``.

    :param section_type: The keyword before the name
    :type section_type: :class:`AnySectionType`

    :param section_name: The name, absent for ``[default]`` and others
    :type section_name: :class:`SectionName` | ``None``

    :param trailing_whitespace: Comments and blank lines after the header
    :type trailing_whitespace: :class:`Whitespace`
    '''
    section_type: AnySectionType
    section_name: SectionName | None = None
    trailing_whitespace: Whitespace = field(default_factory=Whitespace)

    @property
    def key(self) -> tuple[AnySectionType, SectionName | None]:
        '''The identity of the section this header starts.'''
        return (self.section_type, self.section_name)

    @property
    def title(self) -> str:
        '''The header text without its trailing whitespace.'''
        if self.section_name is None:
            return f"[{self.section_type}]"
        return f"[{self.section_type} {self.section_name}]"

    def __str__(self) -> str:
        return self.title + self.trailing_whitespace


@dataclass
class CredentialHeader:
    '''
    The header of a credentials file section. It only holds a profile
    name, e.g. ``[A]`` for ``[profile A]`` in the config file.

    :param profile_name: The profile the credentials belong to
    :type profile_name: :class:`SectionName`

    :param trailing_whitespace: Comments and blank lines after the header
    :type trailing_whitespace: :class:`Whitespace`
    '''
    profile_name: SectionName
    trailing_whitespace: Whitespace = field(default_factory=Whitespace)

    section_type: ClassVar[SectionType] = SectionType.PROFILE

    @property
    def section_name(self) -> SectionName:
        return self.profile_name

    @property
    def key(self) -> tuple[SectionType, SectionName]:
        return (self.section_type, self.profile_name)

    @property
    def title(self) -> str:
        return f"[{self.profile_name}]"

    def __str__(self) -> str:
        return self.title + self.trailing_whitespace


@dataclass
class NestedSetting:
    '''
    An indented ``name = value`` line under a setting without a value.
    Nested settings cannot nest further.

    :param name: Given the line ``  region = us-east-2``, ``region``
    :type name: :class:`SettingName`

    :param value: Given the line ``  region = us-east-2``, ``us-east-2``
    :type value: :class:`Value`

    :param equal: Given the line ``  region = us-east-2``, ``' = '``
    :type equal: :class:`Equal`

    :param indent: Given the line ``  region = us-east-2``, ``'  '``
    :type indent: :class:`Indent`

    :param trailing_whitespace: The rest of the line, including its
        line break, and any blank or comment lines that follow
    :type trailing_whitespace: :class:`Whitespace`
    '''
    name: SettingName
    value: Value
    equal: Equal = field(default_factory=Equal.padded)
    indent: Indent = field(default_factory=lambda: Indent(NESTED_INDENT))
    trailing_whitespace: Whitespace = field(default_factory=Whitespace)

    def __str__(self) -> str:
        return (
            f"{self.indent}{self.name}{self.equal}{self.value}"
            f"{self.trailing_whitespace}"
        )


@dataclass
class NestedSettings:
    '''
    The value of a setting whose own value position is empty: the rest
    of its line and the indented settings below it.

    .. code::

        s3 =
          max_concurrent_requests = 10
          max_queue_size = 1000

    :param leading_whitespace: The rest of the ``s3 =`` line, including
        its line break, and any blank or comment lines after it
    :type leading_whitespace: :class:`Whitespace`

    :param items: The nested settings in file order
    :type items: list[:class:`NestedSetting`]
    '''
    leading_whitespace: Whitespace = field(default_factory=Whitespace)
    items: list[NestedSetting] = field(default_factory=list)

    def __iter__(self):
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __str__(self) -> str:
        return self.leading_whitespace + ''.join(map(str, self.items))

    def get(self, name: str) -> NestedSetting | None:
        '''
        Return the first nested setting called `name`, if any.
        '''
        for item in self.items:
            if item.name == name:
                return item
        return None

    def set(self, name: str, value: str, newline: str = LF) -> NestedSetting:
        '''
        Change the value of the nested setting called `name`, or append
        a new one below the last.

        :param name: The nested setting name
        :type name: :class:`str`

        :param value: The new value
        :type value: :class:`str`

        :param newline: The line terminator to use if the list does not
            end with one already, defaults to ``'\\n'``
        :type newline: :class:`str`

        :returns: The changed or new nested setting
        :rtype: :class:`NestedSetting`
        '''
        value = Value(value)
        item = self.get(name)
        if item is not None:
            item.value = value
            return item

        item = NestedSetting(SettingName(name), value)
        if self.items:
            last = self.items[-1]
            head, rest = last.trailing_whitespace.split_line_end()
        else:
            head, rest = self.leading_whitespace.split_line_end()

        # The new line takes over whatever followed the old last line:
        terminator = newline
        if rest:
            terminator = rest[:2] if rest.startswith(CRLF) else rest[:1]
            item.trailing_whitespace = Whitespace(rest)
        if self.items:
            last.trailing_whitespace = Whitespace(head + terminator)
        else:
            self.leading_whitespace = Whitespace(head + terminator)
        self.items.append(item)
        return item

    def _detach_tail(self) -> str:
        '''
        Cut the text from the first line break of the last line on and
        return it.
        '''
        if self.items:
            last = self.items[-1]
            last.trailing_whitespace, rest = (
                last.trailing_whitespace.split_line_end()
            )
        else:
            self.leading_whitespace, rest = (
                self.leading_whitespace.split_line_end()
            )
        return rest


type ValueKind = Value | NestedSettings


@dataclass
class Setting:
    '''
    A ``name = value`` line directly under a section header, or a
    ``name =`` line followed by nested settings.

    :param name: The part before the ``=`` sign
    :type name: :class:`SettingName`

    :param value: A scalar :class:`Value` or :class:`NestedSettings`
    :type value: :class:`ValueKind`

    :param equal: The ``=`` sign with its original padding
    :type equal: :class:`Equal`

    :param leading_whitespace: The line break before the setting and
        any blank or comment lines above it
    :type leading_whitespace: :class:`Whitespace`

    :param trailing_whitespace: Spaces and a comment after a scalar
        value, up to the line break. Always empty for nested settings,
        which keep the rest of the line in
        :attr:`NestedSettings.leading_whitespace`.
    :type trailing_whitespace: :class:`Whitespace`
    '''
    name: SettingName
    value: ValueKind
    equal: Equal = field(default_factory=Equal.padded)
    leading_whitespace: Whitespace = field(default_factory=Whitespace.newline)
    trailing_whitespace: Whitespace = field(default_factory=Whitespace)

    def __str__(self) -> str:
        return (
            f"{self.leading_whitespace}{self.name}{self.equal}{self.value}"
            f"{self.trailing_whitespace}"
        )

    @property
    def is_nested(self) -> bool:
        return isinstance(self.value, NestedSettings)

    def get_nested_setting(self, name: str) -> NestedSetting | None:
        '''
        Return the nested setting called `name`, or ``None`` if there
        is none or this setting holds a scalar value.
        '''
        if not self.is_nested:
            return None
        return self.value.get(name)

    def set_value(self, value: str) -> str:
        '''
        Replace the value with a scalar. Nested settings are dropped,
        but a comment on the ``name =`` line stays on it.
        Return the line break(s) that followed the nested settings so
        the caller can keep them after this setting.

        :param value: The new value
        :type value: :class:`str`
        '''
        value = Value(value)
        displaced = ""
        if self.is_nested:
            nested = self.value
            comment, _ = nested.leading_whitespace.split_line_end()
            displaced = nested._detach_tail()
            if comment and not comment[0].isspace():
                comment = Whitespace(' ' + comment)
            self.trailing_whitespace = comment
            self.equal = self.equal.for_scalar()
        self.value = value
        return displaced

    def make_nested(self) -> NestedSettings:
        '''
        Replace a scalar value with an empty list of nested settings.
        A comment after the old value stays on the ``name =`` line.
        Return the nested settings.
        '''
        if not self.is_nested:
            self.value = NestedSettings(self.trailing_whitespace)
            self.trailing_whitespace = Whitespace()
            self.equal = self.equal.for_nested()
        return self.value

    def _detach_tail(self) -> str:
        if self.is_nested:
            return self.value._detach_tail()
        return ""


@dataclass
class Section:
    '''
    A header and the settings under it.

    :param header: The section header
    :type header: :class:`Header` | :class:`CredentialHeader`

    :param settings: The settings in file order
    :type settings: list[:class:`Setting`]

    :param leading_whitespace: Blank and comment lines before the header
    :type leading_whitespace: :class:`Whitespace`

    :param trailing_whitespace: Line breaks moved past the last setting
        when settings are added; empty after parsing
    :type trailing_whitespace: :class:`Whitespace`
    '''
    header: Header | CredentialHeader
    settings: list[Setting] = field(default_factory=list)
    leading_whitespace: Whitespace = field(default_factory=Whitespace)
    trailing_whitespace: Whitespace = field(default_factory=Whitespace)

    def __str__(self) -> str:
        return (
            self.leading_whitespace
            + str(self.header)
            + ''.join(map(str, self.settings))
            + self.trailing_whitespace
        )

    @property
    def section_type(self) -> AnySectionType:
        return self.header.section_type

    @property
    def section_name(self) -> SectionName | None:
        return self.header.section_name

    @property
    def key(self) -> tuple[AnySectionType, SectionName | None]:
        return self.header.key

    def get_setting(self, name: str) -> Setting | None:
        '''
        Return the first setting called `name`, if any.
        '''
        for setting in self.settings:
            if setting.name == name:
                return setting
        return None

    def get_value(self, name: str) -> ValueKind | None:
        '''
        Return the value of the setting called `name`, if any.
        Because settings can be nested, this is a :class:`Value` or a
        :class:`NestedSettings`.
        '''
        setting = self.get_setting(name)
        return None if setting is None else setting.value

    def get_nested_setting(
        self,
        name: str,
        nested_name: str
    ) -> NestedSetting | None:
        setting = self.get_setting(name)
        return None if setting is None else setting.get_nested_setting(
            nested_name
        )

    def set(self, name: str, value: str, newline: str = LF) -> Setting:
        '''
        Give the setting called `name` the scalar value `value`.
        An existing setting is changed in place; nested settings under
        it are dropped. A missing setting is appended after the last one.

        :param name: The setting name
        :type name: :class:`str`

        :param value: The new value
        :type value: :class:`str`

        :param newline: The line terminator for new lines,
            defaults to ``'\\n'``
        :type newline: :class:`str`

        :returns: The changed or new setting
        :rtype: :class:`Setting`

        :raises: :exc:`TokenError` if `name` or `value` is invalid
        '''
        name = SettingName(name)
        value = Value(value)
        setting = self.get_setting(name)
        if setting is None:
            setting = Setting(
                name,
                value,
                leading_whitespace=Whitespace.newline(newline)
            )
            self._append(setting)
            return setting

        displaced = setting.set_value(value)
        if displaced:
            self._insert_after(setting, displaced)
        return setting

    def set_nested(
        self,
        name: str,
        nested_name: str,
        value: str,
        newline: str = LF
    ) -> NestedSetting:
        '''
        Give the nested setting `nested_name` under the setting `name`
        the value `value`. The parent setting is created if missing and
        a scalar parent value is replaced by an empty list first.

        :returns: The changed or new nested setting
        :rtype: :class:`NestedSetting`
        '''
        name = SettingName(name)
        nested_name = SettingName(nested_name)
        value = Value(value)
        setting = self.get_setting(name)
        if setting is None:
            setting = Setting(
                name,
                NestedSettings(),
                equal=Equal.padded().for_nested(),
                leading_whitespace=Whitespace.newline(newline)
            )
            self._append(setting)
        return setting.make_nested().set(nested_name, value, newline)

    def _append(self, setting: Setting) -> None:
        '''
        Add `setting` after the last setting. Line breaks that ended the
        section are moved after it.
        '''
        displaced = self._detach_tail()
        self.settings.append(setting)
        if displaced:
            self.trailing_whitespace = Whitespace(
                displaced + self.trailing_whitespace
            )

    def _insert_after(self, setting: Setting, text: str) -> None:
        '''
        Put `text` between `setting` and whatever follows it.
        '''
        idx = next(i for i, s in enumerate(self.settings) if s is setting)
        if idx + 1 < len(self.settings):
            following = self.settings[idx + 1]
            following.leading_whitespace = Whitespace(
                text + following.leading_whitespace
            )
        else:
            self.trailing_whitespace = Whitespace(
                text + self.trailing_whitespace
            )

    def _detach_tail(self) -> str:
        '''
        Cut the text from the first line break of the section's last
        line on and return it.
        '''
        if self.trailing_whitespace:
            self.trailing_whitespace, rest = (
                self.trailing_whitespace.split_line_end()
            )
            return rest
        if self.settings:
            return self.settings[-1]._detach_tail()
        header = self.header
        header.trailing_whitespace, rest = (
            header.trailing_whitespace.split_line_end()
        )
        return rest
