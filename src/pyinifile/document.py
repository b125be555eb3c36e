# -*- encoding: utf-8 -*-
# @File   : document.py
# @Time   : 2026/10/19 10:48:53
# @Author : Kariko Lin

"""
INI document, i.e. the decode/encode engine.

Supported layout (comments discarded, `\\` escapes a comment marker):

    ```ini
    [section]           # inline comments are fine
    key = value
    url = a\\#b
    ```

`url` reads back as `a#b`. Nested sections, multi-line values
and includes are not supported.
"""

import logging
from collections.abc import Iterable, Iterator, MutableMapping
from typing import Any
from warnings import warn

from .errors import FieldOutsideSection, MissingSeparator, UnclosedSection
from .model import IniSection, IniValue

ESCAPE = '\\'
_BLANKS = ' \t'

logger = logging.getLogger(__name__)


class IniDocument(MutableMapping[str, IniSection]):
    """Ordered `section -> IniSection` dict, owning parse settings.

    Settings only affect the *next* `decode()`; parsed data stays as is.
    """

    def __init__(
        self, *,
        separator: str = '=',
        comment_char: str = '#',
        comment_prefixes: Iterable[str] | None = None
    ) -> None:
        self.__raw: dict[str, IniSection] = {}
        self._prefixes: tuple[str, ...] = ()
        self.separator = separator
        if comment_prefixes is None:
            self.comment_char = comment_char
        else:
            self.comment_prefixes = comment_prefixes

    @classmethod
    def loads(cls, text: str | Iterable[str], **settings: Any) -> 'IniDocument':
        return cls(**settings).decode(text)

    # settings

    @property
    def separator(self) -> str:
        return self._sep

    @separator.setter
    def separator(self, sep: str) -> None:
        if len(sep) != 1:
            raise ValueError(f'separator must be one character, got {sep!r}')
        if any(sep in i for i in self._prefixes):
            raise ValueError(f'separator {sep!r} clashes with comment markers')
        self._sep = sep

    @property
    def comment_char(self) -> str | None:
        """The single-character marker, or `None` once a prefix set is used."""
        if len(self._prefixes) == 1 and len(self._prefixes[0]) == 1:
            return self._prefixes[0]
        return None

    @comment_char.setter
    def comment_char(self, char: str) -> None:
        if len(char) != 1:
            raise ValueError(f'comment char must be one character, got {char!r}')
        self.comment_prefixes = (char,)

    @property
    def comment_prefixes(self) -> tuple[str, ...]:
        return self._prefixes

    @comment_prefixes.setter
    def comment_prefixes(self, prefixes: Iterable[str]) -> None:
        if isinstance(prefixes, str):
            prefixes = (prefixes,)
        checked = set()
        for i in prefixes:
            if not i:
                raise ValueError('comment prefix must not be empty')
            if ESCAPE in i:
                raise ValueError(f'comment prefix {i!r} contains {ESCAPE!r}')
            if self._sep in i:
                raise ValueError(
                    f'comment prefix {i!r} contains separator {self._sep!r}')
            checked.add(i)
        if not checked:
            raise ValueError('at least one comment prefix is required')
        # longest first, so the scan always takes the longest match.
        self._prefixes = tuple(sorted(checked, key=lambda x: (-len(x), x)))

    # mapping

    def __getitem__(self, key: str) -> IniSection:
        return self.__raw[key]

    def __setitem__(self, key: str, value: IniSection | dict[str, Any]) -> None:
        # copy in, never keep a reference to a foreign section.
        self.__raw[key] = IniSection(key, dict(value))

    def __delitem__(self, key: str) -> None:
        del self.__raw[key]

    def __len__(self) -> int:
        return len(self.__raw)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __repr__(self) -> str:
        return f'<IniDocument sections={list(self.__raw)}>'

    def section(self, key: str) -> IniSection:
        """Get section `key`, creating an empty one if absent."""
        if key not in self.__raw:
            self.__raw[key] = IniSection(key)
        return self.__raw[key]

    def setdefault(  # type: ignore[override]
        self, key: str, default: IniSection | dict[str, Any] | None = None
    ) -> IniSection:
        if key not in self.__raw:
            self[key] = default or {}
        return self.__raw[key]

    def find(self, key: str) -> IniSection | None:
        return self.__raw.get(key)

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {k: v.to_dict() for k, v in self.__raw.items()}

    # decode

    def _match_prefix(self, line: str, pos: int) -> str | None:
        for i in self._prefixes:
            if line.startswith(i, pos):
                return i
        return None

    def _strip_comment(self, line: str) -> str:
        ret: list[str] = []
        pos = 0
        while pos < len(line):
            prefix = self._match_prefix(line, pos)
            if prefix is None:
                ret.append(line[pos])
                pos += 1
                continue
            if pos == 0 or line[pos - 1] != ESCAPE:
                break
            # escaped: drop the `\` already copied, keep the marker as text.
            ret[-1] = prefix
            pos += len(prefix)
        return ''.join(ret)

    def decode(self, text: str | Iterable[str]) -> 'IniDocument':
        """解析 INI 文本，*替换*（而非合并）当前文档的全部小节。

        `text` 可以是整段字符串，也可以是逐行的可迭代对象（如打开的文本流）。
        遇到第一处语法错误即抛出 `IniParseError`，此时文档内容保持不变。
        """
        # only \n ends a line, the same as iterating a text stream.
        lines = text.split('\n') if isinstance(text, str) else text
        parsed: dict[str, IniSection] = {}
        current: IniSection | None = None
        lineno = nfields = 0
        for lineno, raw in enumerate(lines, 1):
            line = self._strip_comment(raw.rstrip('\r\n')).strip(_BLANKS)
            if not line:
                continue
            if line[0] == '[':
                end = line.find(']')
                if end < 0:
                    raise UnclosedSection(lineno, raw)
                name = line[1:end].strip(_BLANKS)
                current = parsed.setdefault(name, IniSection(name))
                continue
            key, sep, val = line.partition(self._sep)
            if not sep:
                raise MissingSeparator(lineno, raw)
            if current is None:
                raise FieldOutsideSection(lineno, raw)
            current[key.strip(_BLANKS)] = val.strip(_BLANKS)
            nfields += 1
        self.__raw = parsed
        logger.debug(
            'decoded %d line(s): %d section(s), %d field line(s)',
            lineno, len(parsed), nfields)
        return self

    # encode

    def _is_lossy_text(self, text: str) -> bool:
        if text != text.strip(_BLANKS) or '\n' in text or '\r' in text:
            return True
        return any(i in text for i in self._prefixes)

    def _is_lossy(self, key: str, value: IniValue) -> bool:
        if self._sep in key or key.startswith('['):
            return True
        return self._is_lossy_text(key) or self._is_lossy_text(value.text)

    def encode(self) -> str:
        """Serialize sections in insertion order, one blank line between.

        No comment is written and nothing gets escaped, so text holding
        a comment marker won't read back the same (a warning is issued).
        """
        blocks = []
        for name, section in self.__raw.items():
            if ']' in name or self._is_lossy_text(name):
                warn(f'section name {name!r} will not read back unchanged.')
            lines = [f'[{name}]']
            for key, value in section.items():
                if self._is_lossy(key, value):
                    warn(
                        f'[{name}] {key}={value.text!r} '
                        'will not read back unchanged.')
                lines.append(f'{key}{self._sep}{value.text}')
            blocks.append(''.join(i + '\n' for i in lines))
        return '\n'.join(blocks)

    def __str__(self) -> str:
        return self.encode()
