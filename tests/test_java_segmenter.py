"""Tests for the Java segmenter."""

import pytest

from archmirror.errors import ParseFailure
from archmirror.segmenters.java import JavaSegmenter


ACCOUNT_JAVA = '''package com.example;

import java.util.List;

public class Account {
    private final String id;
    private int balance = 0;

    public Account(String id) {
        this.id = id;
    }

    public int deposit(int amount) {
        balance += amount;
        return balance;
    }
}
'''


def test_class_layout_is_preserved():
    assert JavaSegmenter().simplify(ACCOUNT_JAVA) == (
        "package com.example;\n"
        "import java.util.List;\n"
        "public class Account {\n"
        "    private final String id;\n"
        "    private int balance = 0;\n"
        "    public Account(String id) {\n"
        "        this.id = id;\n"
        "    }\n"
        "    public int deposit(int amount);\n"
        "}\n"
    )


def test_method_body_is_elided():
    result = JavaSegmenter().simplify(ACCOUNT_JAVA)
    assert "balance += amount" not in result
    assert "return balance" not in result


def test_interface_keeps_abstract_methods_and_stubs_defaults():
    source = '''interface Shape {
    double area();

    default String name() {
        return "shape";
    }
}
'''
    result = JavaSegmenter().simplify(source)
    assert result.startswith("interface Shape {\n")
    assert "    double area();\n" in result
    assert "    default String name();\n" in result
    assert '"shape"' not in result


def test_enum_constants_and_members():
    source = '''public enum Color {
    RED, GREEN;

    public String lower() {
        return name().toLowerCase();
    }
}
'''
    result = JavaSegmenter().simplify(source)
    assert result.startswith("public enum Color {\n")
    assert "    RED, GREEN;\n" in result
    assert "    public String lower();\n" in result
    assert "toLowerCase" not in result


def test_annotations_stay_with_method_header():
    source = '''class Named {
    @Override
    public String toString() {
        return "named";
    }
}
'''
    result = JavaSegmenter().simplify(source)
    assert "    @Override\n    public String toString();\n" in result


def test_static_initializer_is_kept():
    source = '''class Registry {
    static {
        load();
    }
}
'''
    result = JavaSegmenter().simplify(source)
    assert "load();" in result


def test_malformed_java_raises_parse_failure():
    with pytest.raises(ParseFailure):
        JavaSegmenter().simplify("public class {")
