# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/19 10:15:08
# @Author : Kariko Lin

"""
Values and sections of an INI document.

Everything is kept as text. Typed access converts on demand,
typed assignment stores the canonical text of the given value.
"""

import math
import re
from collections.abc import Iterator, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from .errors import InvalidBoolean, InvalidFloat, InvalidInteger

T = TypeVar('T')

_INTEGER = re.compile(r'-?[0-9]+')
_FLOAT = re.compile(r'[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?')


@dataclass
class IniValue:
    """单个词条的值。

    `text` 原样保存（不做 trim，trim 只在解析时进行），
    `as_bool()` 等方法在访问时才做转换，转换失败则抛出对应的
    `IniConversionError` 子类。
    """
    text: str = ''

    @classmethod
    def of(cls, value: Any) -> 'IniValue':
        """Build a value from `str`, `bool`, `int`, `float`,
        another `IniValue` or a sequence of single characters."""
        ret = cls()
        ret.assign(value)
        return ret

    def assign(self, value: Any) -> None:
        # bool first, since bool is also an int.
        if isinstance(value, IniValue):
            self.text = value.text
        elif isinstance(value, str):
            self.text = value
        elif isinstance(value, bool):
            self.text = 'true' if value else 'false'
        elif isinstance(value, int):
            self.text = str(value)
        elif isinstance(value, float):
            if not math.isfinite(value):
                raise ValueError(f'cannot store non-finite float {value!r}')
            # repr() is the shortest text reading back to the same double.
            self.text = repr(value)
        elif isinstance(value, Sequence) and all(
            isinstance(i, str) and len(i) == 1 for i in value
        ):
            self.text = ''.join(value)
        else:
            raise TypeError(
                f'unsupported value type for INI field: {type(value).__name__}')

    def as_str(self) -> str:
        return self.text

    def as_bool(self) -> bool:
        match self.text.lower():
            case 'true':
                return True
            case 'false':
                return False
            case _:
                raise InvalidBoolean(self.text)

    def as_int(self) -> int:
        if _INTEGER.fullmatch(self.text) is None:
            raise InvalidInteger(self.text)
        try:
            return int(self.text)
        except ValueError as e:
            # int() caps the digit count of decimal strings.
            raise InvalidInteger(self.text) from e

    def as_float(self) -> float:
        if _FLOAT.fullmatch(self.text) is None:
            raise InvalidFloat(self.text)
        ret = float(self.text)
        if not math.isfinite(ret):
            raise InvalidFloat(self.text)
        return ret

    def as_type(self, kind: type[T]) -> T:
        """`as_type(int)` and friends, for callers holding a type object."""
        converters: dict[type, Callable[[], Any]] = {
            str: self.as_str,
            bool: self.as_bool,
            int: self.as_int,
            float: self.as_float,
        }
        if kind not in converters:
            raise TypeError(f'no INI conversion to {kind.__name__}')
        return converters[kind]()

    def __str__(self) -> str:
        return self.text


class IniSection(MutableMapping[str, IniValue]):
    """Ordered `field -> IniValue` dict of one INI section.

    Re-assigning a field overwrites it in place, keeping its position.
    `section[key]` raises `KeyError` when absent: use `field()` to
    create-on-access, or `find()` to look up without side effects.
    """

    def __init__(self, name: str = '', pairs: dict[str, Any] | None = None) -> None:
        self._name = name
        self.__raw: dict[str, IniValue] = {}
        if pairs:
            self.update(pairs)

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> IniValue:
        return self.__raw[key]

    def __setitem__(self, key: str, value: Any) -> None:
        # values are copied in, never shared between sections.
        self.__raw[key] = IniValue.of(value)

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self.__raw))

    def __str__(self) -> str:
        return f'[{self._name}]'

    def field(self, key: str) -> IniValue:
        """Get the value of `key`, inserting an empty one if absent."""
        if key not in self.__raw:
            self.__raw[key] = IniValue()
        return self.__raw[key]

    def find(self, key: str) -> IniValue | None:
        return self.__raw.get(key)

    def get_typed(self, key: str, kind: type[T], default: T | None = None) -> T | None:
        """Typed read with a fallback for *missing* fields.

        A present field with unconvertible text still raises.
        """
        if key not in self.__raw:
            return default
        return self.__raw[key].as_type(kind)

    def to_dict(self) -> dict[str, str]:
        return {k: v.text for k, v in self.__raw.items()}
