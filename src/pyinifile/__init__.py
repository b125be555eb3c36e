# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/19 10:01:12
# @Author : Kariko Lin

from .document import IniDocument
from .errors import (
    FieldOutsideSection,
    IniConversionError,
    IniError,
    IniParseError,
    InvalidBoolean,
    InvalidFloat,
    InvalidInteger,
    MissingSeparator,
    UnclosedSection,
)
from .model import IniSection, IniValue
from .parser import IniFileHandler, dump, load

__all__ = [
    'IniDocument', 'IniSection', 'IniValue',
    'IniFileHandler', 'load', 'dump',
    'IniError', 'IniParseError', 'IniConversionError',
    'UnclosedSection', 'MissingSeparator', 'FieldOutsideSection',
    'InvalidBoolean', 'InvalidInteger', 'InvalidFloat',
]
