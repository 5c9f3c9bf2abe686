'''
Whole config and credentials files: lookup by path and the ``set``
operation.
'''

__all__ = (
    'ConfigFile',
    'CredentialsFile',
)


import re
from collections.abc import Iterator
from dataclasses import dataclass, field

from ._types import PathParts, PathString
from .constants import LF, SECTION_SEPARATOR_LINES
from .log import logger
from .model import (
    CredentialHeader,
    Header,
    NestedSetting,
    Section,
    SectionName,
    Setting,
    SettingName,
    Value,
    Whitespace,
)
from .paths import NestedSettingPath, SectionPath, SettingPath, setting_path


_NEWLINE = re.compile(r'\r?\n')


@dataclass
class _SectionedFile:
    '''
    The parts shared by config and credentials files: blank and comment
    lines, the sections, then more blank and comment lines.
    '''
    leading_whitespace: Whitespace = field(default_factory=Whitespace)
    sections: list[Section] = field(default_factory=list)
    trailing_whitespace: Whitespace = field(default_factory=Whitespace)
    _newline: str | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __str__(self) -> str:
        return (
            self.leading_whitespace
            + ''.join(map(str, self.sections))
            + self.trailing_whitespace
        )

    def __iter__(self) -> Iterator[Section]:
        return iter(self.sections)

    def __len__(self) -> int:
        return len(self.sections)

    @property
    def newline(self) -> str:
        '''
        The line terminator new lines should use: the first one found
        in the file, or ``'\\n'`` for a file without line breaks.
        It is looked up once and kept.
        '''
        if self._newline is None:
            m = _NEWLINE.search(str(self))
            self._newline = LF if m is None else m.group()
        return self._newline

    def _find(self, key: tuple) -> Section | None:
        # Duplicate sections are legal; the first one wins.
        for section in self.sections:
            if section.key == key:
                return section
        return None

    def _add_section(self, header: Header | CredentialHeader) -> Section:
        '''
        Append a new section with `header` after all others.
        '''
        newline = self.newline
        header.trailing_whitespace = Whitespace()
        section = Section(header)

        if self.sections:
            last = self.sections[-1]
            displaced = last._detach_tail()
            self.trailing_whitespace = Whitespace(
                displaced + self.trailing_whitespace
            )
            section.leading_whitespace = Whitespace(
                newline * (1 + SECTION_SEPARATOR_LINES)
            )
        elif self.leading_whitespace and not (
            self.leading_whitespace.endswith('\n')
        ):
            # A comment on the last line would swallow the header.
            section.leading_whitespace = Whitespace.newline(newline)
        if not self.sections and not self.trailing_whitespace:
            self.trailing_whitespace = Whitespace.newline(newline)

        self.sections.append(section)
        logger.debug(f"Added section {header.title}")
        return section


@dataclass
class ConfigFile(_SectionedFile):
    '''
    A parsed AWS config file, e.g. ``~/.aws/config``.
    ``str(config_file)`` gives back the exact text it was parsed from,
    plus any changes made with :meth:`set`.

    Every method taking a path accepts a path object, a dotted string
    like ``'profile.dev.region'`` or a tuple like
    ``('profile', 'dev', 'region')``.
    '''

    def get_section(
        self,
        path: SectionPath | PathString | PathParts
    ) -> Section | None:
        '''
        Return the first section with the type and name of `path`.

        :param path: The section to look up
        :type path: :class:`SectionPath` | :class:`PathString` |
            :class:`PathParts`

        :raises: :exc:`PathError` if `path` is malformed
        '''
        return self._find(SectionPath.coerce(path).key)

    def get_setting(
        self,
        path: SettingPath | PathString | PathParts
    ) -> Setting | None:
        '''
        Return the setting at `path`, or ``None`` if its section or the
        setting itself does not exist.

        :param path: The setting to look up
        :type path: :class:`SettingPath` | :class:`PathString` |
            :class:`PathParts`

        :raises: :exc:`PathError` if `path` is malformed
        '''
        path = SettingPath.coerce(path)
        section = self._find(path.section_path.key)
        if section is None:
            return None
        return section.get_setting(path.setting_name)

    def get_nested_setting(
        self,
        path: NestedSettingPath | PathString | PathParts
    ) -> NestedSetting | None:
        '''
        Return the nested setting at `path`. Gives ``None`` if anything
        along the path is missing or the setting has a scalar value.

        :param path: The nested setting to look up
        :type path: :class:`NestedSettingPath` | :class:`PathString` |
            :class:`PathParts`

        :raises: :exc:`PathError` if `path` is malformed
        '''
        path = NestedSettingPath.coerce(path)
        setting = self.get_setting(path.setting_path)
        if setting is None:
            return None
        return setting.get_nested_setting(path.nested_setting_name)

    def set(
        self,
        path: SettingPath | NestedSettingPath | PathString | PathParts,
        value: str
    ) -> Setting | NestedSetting:
        '''
        Give the setting or nested setting at `path` the value `value`,
        creating the section and setting if they do not exist.
        New sections and settings are always added after existing ones;
        nothing is ever removed or reordered, except that setting a
        scalar on a setting with nested settings drops them.

        :param path: Where to put the value
        :type path: :class:`SettingPath` | :class:`NestedSettingPath` |
            :class:`PathString` | :class:`PathParts`

        :param value: The value to set
        :type value: :class:`str`

        :returns: The changed or new setting or nested setting
        :rtype: :class:`Setting` | :class:`NestedSetting`

        :raises: :exc:`PathError` if `path` is malformed
        :raises: :exc:`SectionNameRequiredError` if `path` lacks a
            section name its section type needs
        :raises: :exc:`TokenError` if `value` is not a valid value
        '''
        path = setting_path(path)
        value = Value(value)
        newline = self.newline

        section_path = path.section_path
        section = self._find(section_path.key)
        if section is None:
            section = self._add_section(
                Header(section_path.section_type, section_path.section_name)
            )

        logger.debug(f"Setting {path} = {value}")
        if isinstance(path, NestedSettingPath):
            return section.set_nested(
                path.setting_name,
                path.nested_setting_name,
                value,
                newline
            )
        return section.set(path.setting_name, value, newline)


@dataclass
class CredentialsFile(_SectionedFile):
    '''
    A parsed AWS credentials file, e.g. ``~/.aws/credentials``.
    Its sections are headed by a bare profile name like ``[dev]``.
    '''

    def get_profile(self, name: str) -> Section | None:
        '''
        Return the first section for the profile `name`.
        '''
        return self._find(CredentialHeader(SectionName(name)).key)

    def get_setting(self, profile: str, name: str) -> Setting | None:
        '''
        Return the setting `name` of the profile `profile`, if both
        exist.
        '''
        section = self.get_profile(profile)
        if section is None:
            return None
        return section.get_setting(SettingName(name))

    def set(self, profile: str, name: str, value: str) -> Setting:
        '''
        Give the setting `name` of the profile `profile` the value
        `value`, creating the profile section and the setting if needed.

        :param profile: The profile name
        :type profile: :class:`str`

        :param name: The setting name,
            e.g. ``'aws_access_key_id'``
        :type name: :class:`str`

        :param value: The value to set
        :type value: :class:`str`

        :raises: :exc:`TokenError` if a name or `value` is invalid
        '''
        header = CredentialHeader(SectionName(profile))
        name = SettingName(name)
        value = Value(value)
        newline = self.newline

        section = self._find(header.key)
        if section is None:
            section = self._add_section(header)
        logger.debug(f"Setting [{profile}] {name} = {value}")
        return section.set(name, value, newline)
