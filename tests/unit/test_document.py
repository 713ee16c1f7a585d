"""Tests for IniDocument and its load/save shortcuts."""

import logging

import pytest

from inistore import IniDocument, IniSection


def test_case_insensitive_set_and_get():
    doc = IniDocument()
    doc.set_value("Sec", "Key", "v")
    assert doc.get_value("sec", "key") == ["v"]
    assert doc.get_string("SEC", "KEY") == "v"
    assert doc.has_key("SEC", "KEY")


def test_get_value_defaults_without_creating():
    doc = IniDocument()
    assert doc.get_value("nope", "k") is None
    assert doc.get_value("nope", "k", ["d"]) == ["d"]
    assert doc.get_string("nope", "k", "d") == "d"
    assert doc.section_count() == 0


def test_at_raises_but_index_auto_creates():
    doc = IniDocument()
    with pytest.raises(LookupError):
        doc.at("missing")
    section = doc["missing"]
    assert isinstance(section, IniSection)
    assert doc.has_section("missing")
    assert doc.key_count("missing") == 0


def test_chained_index_assignment():
    doc = IniDocument()
    doc["section4"]["key3"] = "Added Section and Key"
    doc["section1"]["key2"] = ["new_value1", "new_value2"]
    assert doc.at("section4").at("key3") == ["Added Section and Key"]
    assert doc["SECTION1"]["KEY2"].is_multi()


def test_add_section_reports_creation():
    doc = IniDocument()
    assert doc.add_section("Main") is True
    assert doc.add_section("main") is False
    assert doc.section_count() == 1


def test_remove_key_twice():
    doc = IniDocument()
    doc.set_value("s", "k", "v")
    assert doc.remove_key("s", "k") is True
    assert doc.remove_key("s", "k") is False
    assert doc.remove_key("absent", "k") is False


def test_clear_section_keeps_section_remove_drops_it():
    doc = IniDocument()
    doc.set_value("s", "a", "1")
    doc.set_value("s", "b", "2")
    doc.clear_section("S")
    assert doc.has_section("s")
    assert doc.key_count("s") == 0
    assert doc.remove_section("s") is True
    assert not doc.has_section("s")
    assert doc.remove_section("s") is False


def test_clear_drops_everything():
    doc = IniDocument()
    doc.set_value("a", "k", "v")
    doc.set_value("b", "k", "v")
    doc.clear()
    assert doc.section_count() == 0


def test_empty_section_name_is_a_section():
    doc = IniDocument()
    assert not doc.has_section("")
    doc.set_value("", "k", "v")
    assert doc.has_section("")
    assert doc.key_count("") == 1


def test_assigned_sections_are_copies():
    doc = IniDocument()
    outside = IniSection({"k": "v"})
    doc["s"] = outside
    outside["k"].append("w")
    assert doc["s"]["k"] == ["v"]


def test_rename_section_keeps_position():
    doc = IniDocument()
    for name in ("a", "b", "c"):
        doc.add_section(name)
    doc.set_value("b", "k", "v")
    assert doc.rename_section("B", "Bee") is True
    assert list(doc) == ["a", "bee", "c"]
    assert doc.get_string("bee", "k") == "v"
    assert doc.rename_section("missing", "x") is False
    assert doc.rename_section("a", "c") is False


def test_merge_is_key_level():
    doc = IniDocument()
    doc.set_value("s", "keep", "1")
    doc.set_value("s", "over", "old")
    doc.merge({"S": {"over": "new", "add": ["x", "y"]}})
    assert doc.get_value("s", "keep") == ["1"]
    assert doc.get_value("s", "over") == ["new"]
    assert doc.get_value("s", "add") == ["x", "y"]


def test_load_missing_file_returns_false(tmp_path, caplog):
    doc = IniDocument()
    with caplog.at_level(logging.WARNING):
        assert doc.load(tmp_path / "nope.ini") is False
    assert "Failed to load INI" in caplog.text


def test_save_to_unwritable_path_returns_false(tmp_path, caplog):
    doc = IniDocument()
    doc.set_value("s", "k", "v")
    with caplog.at_level(logging.WARNING):
        assert doc.save(tmp_path / "no" / "such" / "dir.ini") is False
    assert "Failed to save INI" in caplog.text


def test_load_sample(sample_ini):
    doc = IniDocument()
    assert doc.load(sample_ini) is True
    assert list(doc) == ["", "section1", "numbers"]
    assert doc.get_value("", "orphan") == ["1"]
    assert doc.get_value("section1", "key1") == ["value1", "value2"]
    assert doc.get_value("section1", "key2") == ["single value"]
    assert doc.key_count("section1") == 2
    numbers = doc.at("numbers")
    assert numbers.at("hex").get_as(int) == 10
    assert numbers.at("flags").get_list_as(bool) == [True, False, False, True]
    assert numbers.at("pi").get_as(float) == 3.5


def test_load_merges_into_existing_state(sample_ini):
    doc = IniDocument()
    doc.set_value("section1", "key1", "stale")
    doc.set_value("section1", "untouched", "still here")
    doc.set_value("other", "k", "v")
    assert doc.load(sample_ini)
    assert doc.get_value("section1", "key1") == ["value1", "value2"]
    assert doc.get_value("section1", "untouched") == ["still here"]
    assert doc.has_section("other")


def test_save_then_load_round_trip(tmp_path):
    doc = IniDocument()
    doc.set_value("General", "Name", "demo")
    doc.set_value("General", "Ports", [80, 443])
    doc.set_value("Flags", "Enabled", True)
    doc.add_section("Empty")
    path = tmp_path / "out.ini"
    assert doc.save(path) is True

    again = IniDocument()
    assert again.load(path) is True
    assert list(again) == ["general", "flags", "empty"]
    assert again == doc
    assert again["general"]["ports"].get_list_as(int) == [80, 443]
    assert again.at("flags").at("enabled").get_as(bool) is True


def test_dumps_format():
    doc = IniDocument()
    doc.set_value("Sec", "key", ["a", "b", "c"])
    doc.set_value("Sec", "one", "x")
    doc.set_value("Other", "k2", "single value")
    assert doc.dumps() == (
        "[sec]\n"
        "key=a,b,c\n"
        "one=x\n"
        "\n"
        "[other]\n"
        "k2=single value\n"
        "\n"
    )


def test_loads_strips_comments_and_splits():
    doc = IniDocument()
    doc.loads("[s]\nkey=1,2 ; trailing note\nvalue = a , b ,c\n")
    assert doc.get_value("s", "key") == ["1", "2"]
    assert doc.get_value("s", "value") == ["a", "b", "c"]


def test_get_value_returns_a_copy():
    doc = IniDocument()
    doc.set_value("s", "k", "v")
    doc.get_value("s", "k").append("leak")
    assert doc.at("s").at("k") == ["v"]


def test_items_membership_does_not_create_sections():
    doc = IniDocument()
    assert ("ghost", IniSection()) not in doc.items()
    assert list(doc) == []
    doc.set_value("s", "k", "v")
    assert ("S", {"k": ["v"]}) in doc.items()
