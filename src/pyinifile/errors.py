# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2026/10/19 10:02:41
# @Author : Kariko Lin

"""Exceptions raised by `IniDocument.decode()` and `IniValue.as_*()`."""


class IniError(Exception):
    """Root of every error this package raises on purpose."""
    pass


class IniParseError(IniError, ValueError):
    """A line violates the INI grammar. Decoding stops at the first one."""

    reason = 'malformed line'

    def __init__(self, lineno: int, line: str) -> None:
        self.lineno = lineno
        self.line = line
        super().__init__(f'line {lineno}: {self.reason}: {line!r}')


class UnclosedSection(IniParseError):
    reason = 'section header without closing "]"'


class MissingSeparator(IniParseError):
    reason = 'field line without separator'


class FieldOutsideSection(IniParseError):
    reason = 'field declared before any section'


class IniConversionError(IniError, ValueError):
    """Stored text does not match the grammar of the requested type."""

    target = 'value'

    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f'{text!r} is not a valid {self.target}')


class InvalidBoolean(IniConversionError):
    target = 'boolean'


class InvalidInteger(IniConversionError):
    target = 'integer'


class InvalidFloat(IniConversionError):
    target = 'floating point number'
