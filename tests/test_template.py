import pytest

from la_nominal.errors import TemplateError
from la_nominal.template import (
    extract_base,
    parse_template,
    read_list,
    remove_diacritical,
    remove_html,
    remove_links,
    strip_macrons,
)


def test_parse_template_positional_and_named():
    args = parse_template("{{la-noun|abc|a=1}}")
    assert args["0"] == "la-noun"
    assert args["1"] == "abc"
    assert args["a"] == "1"


def test_parse_template_empty_positional():
    args = parse_template("{{la-noun||abc}}")
    assert args["0"] == "la-noun"
    assert args["1"] == ""
    assert args["2"] == "abc"


def test_parse_template_keeps_links_whole():
    args = parse_template("{{la-ndecl|[[aqua|Aqua]]<1>|title=x}}")
    assert args["1"] == "[[aqua|Aqua]]<1>"
    assert args["title"] == "x"


def test_parse_template_ignores_newlines():
    args = parse_template("{{la-ndecl\n|puella<1>\n}}")
    assert args["1"] == "puella<1>"


def test_parse_template_without_template():
    with pytest.raises(TemplateError):
        parse_template("just text")


def test_read_list_orders_by_index():
    args = parse_template("{{la-noun|head=a|d|head3=c|head2=b}}")
    assert read_list(args, "head") == ["a", "b", "c"]


def test_read_list_missing():
    assert read_list({"0": "la-noun"}, "lemma") == []


def test_remove_links():
    assert remove_links("[[Lemma|This is the title]]") == "This is the title"
    assert remove_links("[[lemma]]") == "lemma"
    assert remove_links("[[rēs]] [[pūblicus|pūblica]]") == "rēs pūblica"


def test_remove_html():
    assert remove_html("This is a <small>test</small>.") == "This is a test."
    assert remove_html('<i class="Latn mention" lang="la">data</i>') == "data"


def test_strip_macrons():
    assert strip_macrons("yĀēīōūy") == "yAeiouy"


def test_remove_diacritical_keeps_macrons():
    assert remove_diacritical("Th\u0113se\u0361us \u00ea") == "Thēseus e"


def test_extract_base():
    assert extract_base("puella", "a") == "puell"
    assert extract_base("puella", "us") is None
    assert extract_base("ager", "^(.*r)$") == "ager"
