"""
##############
aws-config-mod
##############

*Read and edit AWS config files without losing a single comment.*

**aws_config_mod** parses ``~/.aws/config`` and ``~/.aws/credentials``
files into trees that remember every blank line, comment and odd bit of
spacing, lets you look up and change settings by path, and writes the
text back out with only your changes applied.

Usage::

    import aws_config_mod
    config = aws_config_mod.parse(text)
    config.set('profile.dev.region', 'eu-west-1')
    new_text = aws_config_mod.render(config)


:copyright: (c) 2024-present aws-config-mod contributors.
:license: MIT, see LICENSE for more details.
"""

__title__ = 'aws-config-mod'
__description__ = "Lossless parsing and editing of AWS config files."
__url__ = "https://github.com/aws-config-mod/aws-config-mod"
__version__ = '0.1'
__author__ = "aws-config-mod contributors"
__license__ = 'MIT'
__copyright__ = "Copyright (c) 2024-present aws-config-mod contributors"


__all__ = (
    'ConfigError',
    'ConfigFile',
    'CredentialsFile',
    'NestedSetting',
    'NestedSettingPath',
    'NestedSettings',
    'OtherSectionType',
    'ParseError',
    'PathError',
    'Section',
    'SectionName',
    'SectionNameRequiredError',
    'SectionPath',
    'SectionType',
    'Setting',
    'SettingName',
    'SettingPath',
    'TokenError',
    'Value',
    'enable_debug_logging',
    'parse',
    'parse_credentials',
    'render',
)


from .errors import (
    ConfigError,
    ParseError,
    PathError,
    SectionNameRequiredError,
    TokenError,
)
from .files import ConfigFile, CredentialsFile
from .log import enable_debug_logging
from .model import (
    NestedSetting,
    NestedSettings,
    OtherSectionType,
    Section,
    SectionName,
    SectionType,
    Setting,
    SettingName,
    Value,
)
from .parser import parse, parse_credentials
from .paths import NestedSettingPath, SectionPath, SettingPath


def render(file: ConfigFile | CredentialsFile) -> str:
    '''
    Turn a parsed file back into text.
    An unchanged file renders to exactly the text it was parsed from.

    :param file: The file to render
    :type file: :class:`ConfigFile` | :class:`CredentialsFile`
    '''
    return str(file)
