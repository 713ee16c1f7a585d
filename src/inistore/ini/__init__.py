# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/10/17 14:05:40
# @Author : Kariko Lin

from .convert import (
    Char, Short, Long,
    ConversionError,
    decode, encode, register, registered
)
from .model import IniValue, IniSection, IniDocument
from .parser import IniParser
