"""Shared fixtures for inistore tests."""

import pytest

SAMPLE_INI = """\
; leading comment
orphan = 1

[Section1]
Key1 = value1, value2 ; trailing note
key2=single value
# full line comment
garbage line without equals

[ Numbers ]
hex = 0xA
flags = true,0,false,1
pi = 3.5
"""


@pytest.fixture
def sample_ini(tmp_path):
    """Write a small INI file and return its path."""
    path = tmp_path / "sample.ini"
    path.write_text(SAMPLE_INI, encoding="utf-8")
    return path
