# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/17 14:01:26
# @Author : Kariko Lin

import logging

from .ini import (
    IniValue, IniSection, IniDocument, IniParser,
    Char, Short, Long, ConversionError,
    decode, encode, register, registered
)

__all__ = [
    'IniValue', 'IniSection', 'IniDocument', 'IniParser',
    'Char', 'Short', 'Long', 'ConversionError',
    'decode', 'encode', 'register', 'registered'
]

logging.basicConfig(level=logging.INFO,
                    format='[%(asctime)s] %(levelname)s: %(message)s')
