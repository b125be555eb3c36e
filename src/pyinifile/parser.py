# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/19 11:26:37
# @Author : Kariko Lin

"""File plumbing around `IniDocument`.

The document itself never touches the file system,
this module opens, decodes and writes files for it.
"""

import logging
from io import StringIO, TextIOBase
from os import PathLike
from typing import Any

import chardet

from .abstract import FileHandler
from .document import IniDocument

logger = logging.getLogger(__name__)


class IniFileHandler(FileHandler[IniDocument]):
    def __init__(
        self, filename: str | PathLike[str],
        encoding: str | None = None,
        **settings: Any
    ) -> None:
        """`settings` are forwarded to every `IniDocument` this handler builds
        (`separator`, `comment_char`, `comment_prefixes`)."""
        super().__init__(filename)
        self._codec = encoding
        self._settings = settings

    def readstream(
        self, buf: TextIOBase, instance: IniDocument | None = None
    ) -> IniDocument:
        """读取解码好的字符串流。

        传入`instance`时沿用它的分隔符与注释设置，并*替换*其原有内容。
        """
        if instance is None:
            instance = IniDocument(**self._settings)
        return instance.decode(buf)

    def _decode_file(self) -> StringIO:
        with open(self._fn, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or codec['confidence'] < 0.8:
            logger.warning(
                'unable to guess encoding of %s (%s), assuming utf-8',
                self._fn, codec)
            codec = {'encoding': 'utf-8'}
        else:
            logger.info('%s guessed as %s', self._fn, codec['encoding'])

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            logger.warning('%s is not %s, trying gbk', self._fn, codec['encoding'])
            buf = raw.decode('gbk')
        return StringIO(buf)

    def read(self, instance: IniDocument | None = None) -> IniDocument:
        """读取`IniFileHandler`实例指定的文件。"""
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                return self.readstream(fp, instance)
        except UnicodeDecodeError:
            logger.info('cannot read %s as %s', self._fn, self._codec)
            return self.readstream(self._decode_file(), instance)

    def write(self, instance: IniDocument) -> None:
        with open(self._fn, 'w', encoding=self._codec or 'utf-8', newline='\n') as fp:
            fp.write(instance.encode())

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"


def load(
    filename: str | PathLike[str],
    encoding: str | None = 'utf-8',
    **settings: Any
) -> IniDocument:
    return IniFileHandler(filename, encoding, **settings).read()


def dump(
    instance: IniDocument,
    filename: str | PathLike[str],
    encoding: str | None = 'utf-8'
) -> None:
    IniFileHandler(filename, encoding).write(instance)
