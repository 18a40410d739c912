import pytest
from completion.tree import PrefixTree


def test_bat_family_sorted():
    tree = PrefixTree()
    tree.insert("bat batman batmobile batcave")
    assert tree.complete("bat") == ["bat", "batcave", "batman", "batmobile"]


def test_bun_words_from_a_sentence():
    tree = PrefixTree()
    tree.insert("large bunch of words that bungalow we want to be bundesliga able to complete")
    assert tree.complete("bun") == ["bunch", "bundesliga", "bungalow"]


def test_shorter_word_inserted_after_longer_one():
    tree = PrefixTree()
    tree.insert("cat")
    tree.insert("ca")
    assert tree.complete("c") == ["ca", "cat"]


def test_empty_tree_has_no_completions():
    assert PrefixTree().complete("a") == []
    assert PrefixTree().complete("") == []


def test_words_inserted_one_by_one_or_in_one_line():
    one_line = PrefixTree()
    one_line.insert("wollybugger workerbee worldleader batman robin wording")

    one_by_one = PrefixTree()
    for w in ("wording", "wollybugger", "workerbee", "worldleader", "batman", "robin"):
        one_by_one.insert(w)

    expected = ["wollybugger", "wording", "workerbee", "worldleader"]
    assert one_line.complete("wo") == expected
    assert one_by_one.complete("wo") == expected


def test_prefix_equal_to_a_word_returns_it_and_its_extensions():
    tree = PrefixTree()
    tree.insert("dumpster dumpsterfire dump")
    assert tree.complete("dumpster") == ["dumpster", "dumpsterfire"]
    assert tree.complete("dum") == ["dump", "dumpster", "dumpsterfire"]


@pytest.mark.parametrize("prefix", ["batmobiles", "batmox", "x", "bb", "batcaves"])
def test_prefix_not_in_tree(prefix):
    tree = PrefixTree()
    tree.insert("bat batman batmobile batcave")
    assert tree.complete(prefix) == []


def test_prefix_ending_inside_a_segment():
    tree = PrefixTree()
    tree.insert("bat batman batmobile batcave")
    assert tree.complete("batmo") == ["batmobile"]
    assert tree.complete("batc") == ["batcave"]
    assert tree.complete("b") == ["bat", "batcave", "batman", "batmobile"]


def test_case_sensitive_by_default():
    tree = PrefixTree()
    tree.insert("Apple apple Banana")
    assert tree.complete("a") == ["apple"]
    assert tree.complete("A") == ["Apple"]
    # code-point order: upper case sorts first
    assert tree.complete("") == ["Apple", "Banana", "apple"]


def test_non_ascii_words():
    tree = PrefixTree()
    tree.insert("über übung straße straßenbahn 東京 東京都")
    assert tree.complete("üb") == ["über", "übung"]
    assert tree.complete("straße") == ["straße", "straßenbahn"]
    assert tree.complete("東") == ["東京", "東京都"]
