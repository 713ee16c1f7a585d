# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/10/17 15:21:07
# @Author : Kariko Lin

"""Note: This is a *best-effort* parser, NOT a validating one.

Lines it doesn't understand are dropped silently (well, logged at DEBUG),
the same way game engines treat a broken INI. What we accept:

    ```ini
    key = val       ; pairs before any header go to section "".

    [Section]       # `;` and `#` both start a comment.
    Key = a, b ,c   ; -> section "section", key "key", ['a', 'b', 'c']
    [section]
    other = 1       ; re-opened sections get merged.
    ```

There's no escaping: `,` always splits a value, `;` and `#` always
start a comment. Names are lowercased, comments are not kept.
"""

import logging
from io import StringIO, TextIOBase
from os import PathLike
from typing import TextIO
from warnings import warn

import chardet

from ..abstract import FileHandler
from .model import IniDocument

__all__ = ['IniParser']

_WHITESPACES = ' \t\r\n'
_COMMENTS = (';', '#')
# chars which won't survive a save -> load cycle.
_LOSSY_SECTION = ';#\r\n'
_LOSSY_NAME = ';#=\r\n'
_LOSSY_VALUE = ',;#\r\n'


def _strip_comment(line: str) -> str:
    # `find()` gives -1 for a missing marker, which must not win `min()`.
    found = [i for i in (line.find(j) for j in _COMMENTS) if i >= 0]
    return line[:min(found)] if found else line


def _split_values(raw: str) -> list[str]:
    if not raw:
        return []
    ret = [i.strip(_WHITESPACES) for i in raw.split(',')]
    # `a,b,` is two values, not three.
    if raw.endswith(','):
        ret.pop()
    return ret


def _warn_lossy(what: str, text: str, chars: str) -> None:
    if any(i in text for i in chars):
        warn(f'{what} {text!r} contains one of {chars!r}, '
             'it would be read back differently.')
    elif text != text.strip(_WHITESPACES):
        warn(f'{what} {text!r} has leading or trailing spaces, '
             'they would be trimmed when read back.')


class IniParser(FileHandler[IniDocument]):
    def __init__(
        self, filename: str | PathLike[str], encoding: str | None = None
    ) -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def readstream(
        buf: TextIOBase | TextIO, ins: IniDocument | None = None
    ) -> IniDocument:
        """读取解码好的字符串流，合并进`ins`（若未给出则新建一个）。

        如没有特殊需求，直接调用`self.read()`便是。
        """
        if ins is None:
            ins = IniDocument()
        this_sect = ''
        for lineno, line in enumerate(buf, 1):
            line = _strip_comment(line).strip(_WHITESPACES)
            if not line:
                continue
            if line[0] == '[' and line[-1] == ']':
                this_sect = line[1:-1].strip(_WHITESPACES).lower()
                ins.add_section(this_sect)
                continue
            pos = line.find('=')
            if pos < 0:
                logging.debug(f'INI line {lineno} skipped, no "=": {line!r}')
                continue
            key = line[:pos].strip(_WHITESPACES).lower()
            ins[this_sect][key] = _split_values(
                line[pos + 1:].strip(_WHITESPACES))
        return ins

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec is None or codec['confidence'] < 0.8:
            codec = {'encoding': 'utf-8'}

        # fallbacks
        try:
            buf = raw.decode(codec['encoding'] or 'utf-8')
        except (UnicodeDecodeError, LookupError):
            logging.warning(
                f'Cannot decode {filename} as {codec["encoding"]}, '
                'falling back to gbk.')
            buf = raw.decode('gbk', errors='replace')
        return StringIO(buf)

    def read(self, ins: IniDocument | None = None) -> IniDocument:
        """读取`IniParser`实例指定的文件。

        May raise `OSError` if the file is not readable.
        """
        try:
            # when encoding is None, `open()` would fallback to system default.
            # and when encoding got wrong,
            # just `UnicodeDecodeError` and fallback to `chardet`.
            with open(self._fn, 'r', encoding=self._codec) as fp:
                buf = StringIO(fp.read())
        except UnicodeDecodeError:
            buf = self._decode_file(self._fn)
        return self.readstream(buf, ins)

    @staticmethod
    def writestream(
        instance: IniDocument, buf: TextIOBase | TextIO, *,
        blank_lines: int = 1,
        delimiter: str = '='
    ) -> None:
        for sect, data in instance.items():
            _warn_lossy('Section', sect, _LOSSY_SECTION)
            buf.write(f'[{sect}]\n')
            for key, val in data.items():
                _warn_lossy('Key', key, _LOSSY_NAME)
                for i in val:
                    _warn_lossy(f'Value of [{sect}] {key}', i, _LOSSY_VALUE)
                if val and val[-1] == '':
                    warn(f'Value of [{sect}] {key} ends with an empty element, '
                         'it would be dropped when read back.')
                buf.write(f'{key}{delimiter}{",".join(val)}\n')
            buf.write('\n' * blank_lines)

    def write(
        self, instance: IniDocument, *,
        blank_lines: int = 1,
        delimiter: str = '='
    ) -> None:
        """保存到 INI 文件，覆盖原有内容。

        注：注释、原有的大小写均*不会*保留。
        """
        buf = StringIO()
        self.writestream(
            instance, buf, blank_lines=blank_lines, delimiter=delimiter)
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(buf.getvalue())

    def __str__(self) -> str:
        return "INI file: " + super().__str__() + f"({self._codec})"
