'''
Recursive descent parsers for AWS config and credentials files.

Grammar of a config file::

    File          := Whitespace Section* Whitespace EOF
    Section       := Whitespace Header Setting*
    Header        := '[' ( 'default' | NAME ' ' NAME | NAME ) ']' Whitespace
    Setting       := Whitespace NAME '=' ( VALUE Trailer | NestedSettings )
    NestedSettings:= Whitespace NestedSetting*
    NestedSetting := INDENT NAME '=' VALUE Whitespace

Headers and settings must start a line. A credentials file is the same,
except that its headers are a bare profile name, ``[NAME]``.
'''

__all__ = (
    'CredentialsParser',
    'RecursiveDescentParser',
    'parse',
    'parse_credentials',
)


from collections import Counter
from typing import Literal

from ._types import FileContents
from .files import ConfigFile, CredentialsFile
from .lexer import Lexer, TokKind
from .log import logger
from .model import (
    CredentialHeader,
    Equal,
    Header,
    Indent,
    NestedSetting,
    NestedSettings,
    Section,
    SectionName,
    SectionType,
    Setting,
    SettingName,
    Value,
    Whitespace,
)


class RecursiveDescentParser:
    '''
    Parse AWS config files into :class:`ConfigFile` trees.

    Each ``_parse_X`` method tries to match rule ``X`` at the lexer's
    cursor. On success it returns a node and leaves the cursor after it.
    On failure it returns ``False`` and leaves the cursor where it was.

    :param lexer: The lexer used for matching tokens
    :type lexer: :class:`Lexer`

    :param string: A string to parse if `lexer` is not given
    :type string: :class:`FileContents`
    '''
    file_class = ConfigFile

    def __init__(
        self,
        lexer: Lexer = None,
        string: FileContents = None
    ) -> None:
        if lexer is None:
            if string is None:
                msg = (
                    "A `string` argument is required when `lexer` is"
                    " not given."
                )
                raise ValueError(msg)
            if not isinstance(string, str):
                raise TypeError(
                    f"Can only parse str, not {type(string).__name__}"
                )
            lexer = Lexer(string)
        self._lexer = lexer

    def _parse_Whitespace(self) -> Whitespace:
        # Always matches, possibly nothing.
        return Whitespace(self._lexer.match(TokKind.WHITESPACE).value)

    def _at_line_end(self) -> bool:
        '''
        Test whether the text consumed so far ends a line.
        '''
        lexer = self._lexer
        return lexer.at_eof() or lexer.at_line_start()

    def _parse_Header(self) -> Header | Literal[False]:
        lexer = self._lexer
        start = lexer.mark()
        if not (lexer.at_line_start() and lexer.match(TokKind.L_BRACKET)):
            lexer.reset(start)
            return False

        if lexer.match(TokKind.DEFAULT):
            header = Header(SectionType.DEFAULT)
        elif keyword := lexer.match(TokKind.IDENTIFIER):
            section_type = SectionType.from_keyword(keyword.value)
            header = Header(section_type)
            after_type = lexer.mark()
            if lexer.match(TokKind.SPACE) and (
                name := lexer.match(TokKind.IDENTIFIER)
            ):
                header.section_name = SectionName(name.value)
            else:
                lexer.reset(after_type)
        else:
            lexer.reset(start)
            return False

        if not lexer.match(TokKind.R_BRACKET):
            lexer.reset(start)
            return False
        header.trailing_whitespace = self._parse_Whitespace()
        if not self._at_line_end():
            lexer.reset(start)
            return False
        return header

    def _parse_Setting(self) -> Setting | Literal[False]:
        lexer = self._lexer
        start = lexer.mark()
        leading = self._parse_Whitespace()
        if not (
            lexer.at_line_start()
            and (name := lexer.match(TokKind.IDENTIFIER))
            and (equal := lexer.match(TokKind.EQUALS))
        ):
            lexer.reset(start)
            return False

        setting = Setting(
            SettingName(name.value),
            None,
            equal=Equal(equal.value),
            leading_whitespace=leading,
        )
        value = self._parse_ValueKind()
        if value is False:
            lexer.reset(start)
            return False
        if isinstance(value, tuple):
            setting.value, setting.trailing_whitespace = value
        else:
            setting.value = value
        return setting

    def _parse_ValueKind(
        self
    ) -> tuple[Value, Whitespace] | NestedSettings | Literal[False]:
        '''
        Decide between a scalar value and nested settings.
        A value on the same line makes a scalar; anything else makes a
        possibly empty list of nested settings.
        '''
        lexer = self._lexer
        start = lexer.mark()
        if value := lexer.match(TokKind.VALUE):
            trailer = lexer.match(TokKind.TRAILER)
            if not trailer:
                lexer.reset(start)
                return False
            return Value(value.value), Whitespace(trailer.value)

        nested = NestedSettings(self._parse_Whitespace())
        if not self._at_line_end():
            lexer.reset(start)
            return False
        while item := self._parse_NestedSetting():
            nested.items.append(item)
        return nested

    def _parse_NestedSetting(self) -> NestedSetting | Literal[False]:
        lexer = self._lexer
        start = lexer.mark()
        if not (
            lexer.at_line_start()
            and (indent := lexer.match(TokKind.INDENT))
            and (name := lexer.match(TokKind.IDENTIFIER))
            and (equal := lexer.match(TokKind.EQUALS))
            and (value := lexer.match(TokKind.VALUE))
        ):
            lexer.reset(start)
            return False
        trailing = self._parse_Whitespace()
        if not self._at_line_end():
            lexer.reset(start)
            return False
        return NestedSetting(
            SettingName(name.value),
            Value(value.value),
            equal=Equal(equal.value),
            indent=Indent(indent.value),
            trailing_whitespace=trailing,
        )

    def _parse_Section(self) -> Section | Literal[False]:
        lexer = self._lexer
        start = lexer.mark()
        leading = self._parse_Whitespace()
        header = self._parse_Header()
        if not header:
            lexer.reset(start)
            return False
        section = Section(header, leading_whitespace=leading)
        while setting := self._parse_Setting():
            section.settings.append(setting)
        return section

    def _parse_File(self) -> ConfigFile | CredentialsFile:
        lexer = self._lexer
        file = self.file_class(self._parse_Whitespace())
        while section := self._parse_Section():
            file.sections.append(section)
        file.trailing_whitespace = self._parse_Whitespace()
        if not lexer.match(TokKind.EOF):
            raise lexer.furthest_error()
        return file

    def parse(self) -> ConfigFile | CredentialsFile:
        '''
        Parse the whole input and return the file it describes.

        :raises: :exc:`ParseError` if any part of the input does not
            fit the grammar
        '''
        self._lexer.reset()
        file = self._parse_File()
        self._lexer.reset()

        logger.debug(
            f"Parsed {len(file.sections)} section(s),"
            f" {sum(len(s.settings) for s in file.sections)} setting(s)"
        )
        counts = Counter(section.key for section in file.sections)
        for section in file.sections:
            if counts.pop(section.key, 1) > 1:
                logger.warning(
                    f"Duplicate section {section.header.title};"
                    f" only the first is used"
                )
        return file


class CredentialsParser(RecursiveDescentParser):
    '''
    Parse AWS credentials files into :class:`CredentialsFile` trees.
    Their headers hold a single profile name, e.g. ``[default]``.
    '''
    file_class = CredentialsFile

    def _parse_Header(self) -> CredentialHeader | Literal[False]:
        lexer = self._lexer
        start = lexer.mark()
        if not (
            lexer.at_line_start()
            and lexer.match(TokKind.L_BRACKET)
            and (name := lexer.match(TokKind.IDENTIFIER))
            and lexer.match(TokKind.R_BRACKET)
        ):
            lexer.reset(start)
            return False
        header = CredentialHeader(
            SectionName(name.value),
            self._parse_Whitespace()
        )
        if not self._at_line_end():
            lexer.reset(start)
            return False
        return header


def parse(string: FileContents) -> ConfigFile:
    '''
    Parse the text of an AWS config file.

    >>> config = parse('[default]\\nregion = us-west-2\\n')
    >>> str(config.get_setting('default.region').value)
    'us-west-2'

    :param string: The file contents
    :type string: :class:`FileContents`

    :raises: :exc:`ParseError` if `string` is not a valid config file
    '''
    return RecursiveDescentParser(string=string).parse()


def parse_credentials(string: FileContents) -> CredentialsFile:
    '''
    Parse the text of an AWS credentials file.

    :param string: The file contents
    :type string: :class:`FileContents`

    :raises: :exc:`ParseError` if `string` is not a valid credentials
        file
    '''
    return CredentialsParser(string=string).parse()
