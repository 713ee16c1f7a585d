# -*- encoding: utf-8 -*-
# @File   : convert.py
# @Time   : 2026/10/17 14:10:36
# @Author : Kariko Lin

"""String <-> typed value strategies.

INI values are stored as plain strings. This module is the table that
turns them into `bool`, `int`, `float` and so on (and back), one
`Codec(decode, encode)` pair per type::

    >>> decode(int, '0xA')
    10
    >>> encode(True)
    'true'

Extra types are added with `register()`. Existing entries are never
replaced.
"""

from operator import index
from re import compile as regex
from typing import Any, Callable, NamedTuple, NewType

__all__ = [
    'Char', 'Short', 'Long',
    'Codec', 'ConversionError',
    'decode', 'encode', 'register', 'registered',
]

# Python has one `str` and one `int`, so the narrower C-ish types
# are spelled as NewTypes; they work as registry keys all the same.
Char = NewType('Char', str)
Short = NewType('Short', int)
Long = NewType('Long', int)

_INTEGER = regex(r'([+-]?)(?:0[xX]([0-9a-fA-F]+)|([0-9]+))')


class ConversionError(ValueError):
    """A value could not be decoded from / encoded to its INI string."""

    def __init__(self, message: str, type_: object = None, value: object = None):
        super().__init__(message)
        self.type = type_
        self.value = value


class Codec(NamedTuple):
    decode: Callable[[str], Any]
    encode: Callable[[Any], str]


def _type_name(type_: object) -> str:
    return getattr(type_, '__name__', None) or repr(type_)


def _decode_bool(value: str) -> bool:
    if value in ('true', '1'):
        return True
    if value in ('false', '0'):
        return False
    raise ConversionError(f'Invalid boolean value: {value!r}', bool, value)


def _encode_bool(value: bool) -> str:
    # truthiness would turn 'false' into 'true'.
    if not isinstance(value, bool):
        raise ConversionError(f'Not a boolean: {value!r}', bool, value)
    return 'true' if value else 'false'


def _decode_char(value: str) -> str:
    if len(value) != 1:
        raise ConversionError(f'Invalid char value: {value!r}', Char, value)
    return value


def _encode_char(value: str) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise ConversionError(f'Invalid char value: {value!r}', Char, value)
    return value


def _parse_integer(value: str, type_: object) -> int:
    # accepts `10`, `-10`, `0xA`; anything left over is an error.
    match = _INTEGER.fullmatch(value)
    if match is None:
        raise ConversionError(
            f'Invalid {_type_name(type_)} value: {value!r}', type_, value)
    sign, hexdigits, decdigits = match.groups()
    ret = int(hexdigits, 16) if hexdigits is not None else int(decdigits)
    return -ret if sign == '-' else ret


def _ranged(type_: object, bits: int) -> Codec:
    low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1

    def check(value: int, raw: object) -> int:
        if not low <= value <= high:
            raise ConversionError(
                f'{_type_name(type_)} value out of range: {raw!r}',
                type_, raw)
        return value

    def dec(value: str) -> int:
        return check(_parse_integer(value, type_), value)

    def enc(value: int) -> str:
        return str(check(index(value), value))

    return Codec(dec, enc)


def _decode_int(value: str) -> int:
    return _parse_integer(value, int)


def _encode_int(value: int) -> str:
    # `index()` refuses 3.9 instead of truncating it.
    return str(index(value))


def _decode_float(value: str) -> float:
    # `float()` also takes `1_0`, which no INI writer means.
    if '_' in value:
        raise ConversionError(f'Invalid float value: {value!r}', float, value)
    try:
        return float(value)
    except ValueError:
        raise ConversionError(
            f'Invalid float value: {value!r}', float, value) from None


def _encode_float(value: float) -> str:
    return str(float(value))


def _identity(value: str) -> str:
    return value


def _encode_str(value: str) -> str:
    if not isinstance(value, str):
        raise ConversionError(f'Not a string: {value!r}', str, value)
    return value


_CODECS: dict[object, Codec] = {
    bool: Codec(_decode_bool, _encode_bool),
    Char: Codec(_decode_char, _encode_char),
    Short: _ranged(Short, 16),
    int: Codec(_decode_int, _encode_int),
    Long: _ranged(Long, 64),
    float: Codec(_decode_float, _encode_float),
    str: Codec(_identity, _encode_str),
}


def register(
    type_: object,
    decoder: Callable[[str], Any],
    encoder: Callable[[Any], str]
) -> None:
    """Add a strategy pair for `type_`.

    Raises `ValueError` if `type_` already has one.
    """
    if type_ in _CODECS:
        raise ValueError(f'Codec already registered for: {_type_name(type_)}')
    _CODECS[type_] = Codec(decoder, encoder)


def registered(type_: object) -> bool:
    return type_ in _CODECS


def _lookup(type_: object, action: str) -> Codec:
    if type_ in _CODECS:
        return _CODECS[type_]
    # subclasses (say, an IntEnum) fall back to their registered base.
    for base in getattr(type_, '__mro__', ())[1:]:
        if base is not object and base in _CODECS:
            return _CODECS[base]
    raise ConversionError(
        f'{action} not implemented for type: {_type_name(type_)}', type_)


def decode(type_: object, value: str) -> Any:
    """Decode the INI string `value` as `type_`."""
    codec = _lookup(type_, 'Decode')
    try:
        return codec.decode(value)
    except ConversionError:
        raise
    except (TypeError, ValueError) as e:
        # registered third-party decoders may raise plain errors.
        raise ConversionError(
            f'Invalid {_type_name(type_)} value: {value!r}',
            type_, value) from e


def encode(value: Any, type_: object = None) -> str:
    """Encode `value` into its INI string.

    `type_` defaults to `type(value)`; pass it explicitly for NewTypes
    like `Char` or `Short`, which are indistinguishable at runtime.
    """
    if type_ is None:
        type_ = type(value)
    codec = _lookup(type_, 'Encode')
    try:
        ret = codec.encode(value)
    except ConversionError:
        raise
    except (TypeError, ValueError) as e:
        raise ConversionError(
            f'Cannot encode {value!r} as {_type_name(type_)}',
            type_, value) from e
    if not isinstance(ret, str):
        raise ConversionError(
            f'Encoder for {_type_name(type_)} returned {ret!r}', type_, value)
    return ret
