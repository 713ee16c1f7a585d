# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/10/17 14:38:52
# @Author : Kariko Lin

"""
Basically INI Structure, case-insensitive and string-only.

Reading and writing files is done by `ini.parser`;
`IniDocument.load()` / `IniDocument.save()` are shortcuts to it.
"""

import logging
from collections.abc import ItemsView, Iterable, Iterator, Mapping, \
    MutableMapping, MutableSequence
from io import StringIO
from os import PathLike
from typing import Any, overload

from .convert import Char, ConversionError, decode, encode

__all__ = ['IniValue', 'IniSection', 'IniDocument']


def _norm(name: str) -> str:
    return name.lower()


def _check_str(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(
            f'INI values hold strings only, got {type(value).__name__}')
    return value


class IniValue(MutableSequence[str]):
    """一个键所对应的值：有序的字符串列表。

    - 空列表也是合法状态（“有这个键，但没有值”）；
    - 元素只能是`str`，类型转换请走`get_as()`和`assign()`。

    ```python
    v = IniValue()
    v.assign([1, 2, 3])     # -> ['1', '2', '3']
    v.get_list_as(int)      # -> [1, 2, 3]
    v.assign('a,b')         # str 永远是单个元素 -> ['a,b']
    ```
    """

    def __init__(self, values: Any = None, type_: object = None) -> None:
        self._values: list[str] = []
        if values is not None:
            self.assign(values, type_)

    @overload
    def __getitem__(self, index: int) -> str: ...

    @overload
    def __getitem__(self, index: slice) -> list[str]: ...

    def __getitem__(self, index):
        # IndexError from list is what we want here.
        return self._values[index]

    def __setitem__(self, index, value) -> None:
        if isinstance(index, slice):
            self._values[index] = [_check_str(i) for i in value]
        else:
            self._values[index] = _check_str(value)

    def __delitem__(self, index) -> None:
        del self._values[index]

    def __len__(self) -> int:
        return len(self._values)

    def insert(self, index: int, value: str) -> None:
        self._values.insert(index, _check_str(value))

    def append(self, value: str) -> None:
        self._values.append(_check_str(value))

    def clear(self) -> None:
        self._values = []

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IniValue):
            return self._values == other._values
        if isinstance(other, (list, tuple)):
            return self._values == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return self.as_str()

    def __repr__(self) -> str:
        return f'IniValue({self._values!r})'

    def is_multi(self) -> bool:
        return len(self._values) > 1

    def as_str(self) -> str:
        """For display. Saving joins with `,` instead."""
        return ', '.join(self._values)

    def as_list(self) -> list[str]:
        return self._values.copy()

    def copy(self) -> 'IniValue':
        ret = IniValue()
        ret._values = self._values.copy()
        return ret

    def get_as(self, type_: object) -> Any:
        """Decode the first element as `type_`."""
        if not self._values:
            raise ConversionError(
                'Cannot convert an empty value to '
                f'{getattr(type_, "__name__", type_)}', type_)
        return decode(type_, self._values[0])

    def get_list_as(self, type_: object) -> list[Any]:
        """Decode every element; the first bad one fails the whole call."""
        return [decode(type_, i) for i in self._values]

    def get_tuple_as(self, type_: object) -> tuple[Any, ...]:
        return tuple(self.get_list_as(type_))

    def assign(self, value: Any, type_: object = None) -> None:
        """Replace the content with `value` encoded.

        A `str` is always taken as ONE element, never as its characters;
        with `type_=Char` it is stored as text too (`"abc"` -> `["abc"]`).
        Other iterables are encoded element by element. Content stays
        untouched if any element fails to encode.
        """
        if isinstance(value, IniValue):
            values = value._values.copy()
        elif isinstance(value, str):
            values = [value if type_ is Char else encode(value, type_)]
        elif isinstance(value, Mapping):
            raise ConversionError(
                f'Cannot assign a mapping to an INI value: {value!r}',
                type(value), value)
        elif isinstance(value, Iterable):
            values = [encode(i, type_) for i in value]
        else:
            values = [encode(value, type_)]
        self._values = values


class _ItemsView(ItemsView):
    # the stock `__contains__` goes through `self[key]`, which auto-creates.
    def __contains__(self, item: object) -> bool:
        key, value = item  # type: ignore[misc]
        if key not in self._mapping:
            return False
        v = self._mapping.at(key)
        return v is value or v == value


class IniSection(MutableMapping[str, IniValue]):
    """INI 小节：键（不区分大小写，统一存为小写）到`IniValue`的映射。

    - `section[key]` 找不到键时*自动创建*一个空值，便于直接改写；
    - `section.at(key)` 找不到键时抛`KeyError`，只读访问请用它；
    - `get()` / `in` 均不会创建键。
    """

    def __init__(self, pairs_to_import: Mapping[str, Any] | None = None):
        self.__raw: dict[str, IniValue] = {}
        if pairs_to_import:
            self.update(pairs_to_import)

    def __getitem__(self, key: str) -> IniValue:
        return self.__raw.setdefault(_norm(key), IniValue())

    def __setitem__(self, key: str, value: Any) -> None:
        # shouldn't keep ptr to external value.
        self.__raw[_norm(key)] = IniValue(value)

    def __delitem__(self, key: str) -> None:
        del self.__raw[_norm(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _norm(key) in self.__raw

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __repr__(self) -> str:
        return f'IniSection({self.__raw!r})'

    def at(self, key: str) -> IniValue:
        return self.__raw[_norm(key)]

    def get(self, key: str, default: Any = None) -> Any:
        """A copy of the value of `key`, or `default` as is."""
        value = self.__raw.get(_norm(key))
        return default if value is None else value.copy()

    def items(self) -> ItemsView[str, IniValue]:
        return _ItemsView(self)

    # the mixin versions go through `self[key]`, which never misses here.
    def pop(self, key: str, *default: Any) -> Any:
        return self.__raw.pop(_norm(key), *default)

    def setdefault(self, key: str, default: Any = None) -> IniValue:
        if key not in self:
            self[key] = default
        return self.__raw[_norm(key)]

    def get_string(self, key: str, default: str = '') -> str:
        """First element of `key`, or `default` if absent or empty."""
        value = self.__raw.get(_norm(key))
        return value[0] if value else default

    def set(self, key: str, value: Any) -> None:
        self[key] = value

    def remove_key(self, key: str) -> bool:
        return self.__raw.pop(_norm(key), None) is not None

    def has_key(self, key: str) -> bool:
        return key in self

    def key_count(self) -> int:
        return len(self.__raw)

    def clear(self) -> None:
        self.__raw.clear()

    def copy(self) -> 'IniSection':
        return IniSection(self.__raw)


class IniDocument(MutableMapping[str, IniSection]):
    """... is simply a group of `IniSection`, representing a whole INI file.

    Section names follow the same lowercase rule as keys. An empty name
    is a valid section; it also collects pairs that appear before any
    `[section]` header in a file.
    """

    def __init__(self) -> None:
        """Init an empty INI document."""
        self.__raw: dict[str, IniSection] = {}

    def __getitem__(self, key: str) -> IniSection:
        return self.__raw.setdefault(_norm(key), IniSection())

    def __setitem__(
        self,
        key: str,
        value: IniSection | Mapping[str, Any]
    ) -> None:
        self.__raw[_norm(key)] = IniSection(value)

    def __delitem__(self, key: str) -> None:
        del self.__raw[_norm(key)]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and _norm(key) in self.__raw

    def __iter__(self) -> Iterator[str]:
        return iter(self.__raw)

    def __len__(self) -> int:
        return len(self.__raw)

    def __repr__(self) -> str:
        return f'IniDocument({list(self.__raw)!r})'

    def at(self, section: str) -> IniSection:
        return self.__raw[_norm(section)]

    def get(self, section: str, default: Any = None) -> Any:
        return self.__raw.get(_norm(section), default)

    def items(self) -> ItemsView[str, IniSection]:
        return _ItemsView(self)

    def pop(self, section: str, *default: Any) -> Any:
        return self.__raw.pop(_norm(section), *default)

    def setdefault(
        self, section: str, default: Mapping[str, Any] | None = None
    ) -> IniSection:
        if section not in self:
            self[section] = default or {}
        return self.__raw[_norm(section)]

    def load(
        self, path: str | PathLike[str], encoding: str | None = None
    ) -> bool:
        """Merge the INI file at `path` into this document.

        Returns `False` if the file can't be read. Malformed lines never
        fail the load, they are just skipped.
        """
        from .parser import IniParser
        try:
            IniParser(path, encoding).read(self)
        except OSError as e:
            logging.warning(f"Failed to load INI: {e}")
            return False
        return True

    def save(
        self, path: str | PathLike[str], encoding: str = 'utf-8'
    ) -> bool:
        """Overwrite `path` with this document. `False` if it can't be written."""
        from .parser import IniParser
        try:
            IniParser(path, encoding).write(self)
        except OSError as e:
            logging.warning(f"Failed to save INI: {e}")
            return False
        return True

    def loads(self, text: str) -> None:
        from .parser import IniParser
        IniParser.readstream(StringIO(text), self)

    def dumps(self) -> str:
        from .parser import IniParser
        buf = StringIO()
        IniParser.writestream(self, buf)
        return buf.getvalue()

    def get_value(self, section: str, key: str, default: Any = None) -> Any:
        if section not in self:
            return default
        return self.__raw[_norm(section)].get(key, default)

    def get_string(self, section: str, key: str, default: str = '') -> str:
        if section not in self:
            return default
        return self.__raw[_norm(section)].get_string(key, default)

    def set_value(self, section: str, key: str, value: Any) -> None:
        self[section][key] = value

    def add_section(self, section: str) -> bool:
        """`True` only if the section didn't exist before."""
        if section in self:
            return False
        self.__raw[_norm(section)] = IniSection()
        return True

    def remove_section(self, section: str) -> bool:
        return self.__raw.pop(_norm(section), None) is not None

    def remove_key(self, section: str, key: str) -> bool:
        if section not in self:
            return False
        return self.__raw[_norm(section)].remove_key(key)

    def clear(self) -> None:
        self.__raw.clear()

    def clear_section(self, section: str) -> None:
        self[section].clear()

    def has_section(self, section: str) -> bool:
        return section in self

    def has_key(self, section: str, key: str) -> bool:
        return section in self and self.__raw[_norm(section)].has_key(key)

    def section_count(self) -> int:
        return len(self.__raw)

    def key_count(self, section: str) -> int:
        if section not in self:
            return 0
        return self.__raw[_norm(section)].key_count()

    def rename_section(self, old: str, new: str) -> bool:
        """Rename a section, keeping its position.

        Returns:
            `True` if succeed, otherwise `False`.
            May not success if `old` is not found or `new` already exists.
        """
        old, new = _norm(old), _norm(new)
        if old not in self.__raw or new in self.__raw:
            return False
        self.__raw = {
            (new if k == old else k): v for k, v in self.__raw.items()
        }
        return True

    def merge(self, another: Mapping[str, Mapping[str, Any]]) -> None:
        """To merge `another` into self, key by key (like `load()` does)."""
        for decl, data in another.items():
            this_sect = self[decl]
            for key, val in data.items():
                this_sect[key] = val
