from completion.models import Node
from completion.tree import PrefixTree, common_prefix_length


def _shape(node: Node):
    """Nested (segment, terminal, children) tuples, children in key order."""
    return (
        node.segment,
        node.is_terminal,
        [_shape(node.children[k]) for k in sorted(node.children)],
    )


def test_common_prefix_length():
    assert common_prefix_length("batman", "batmobile") == 4
    assert common_prefix_length("bat", "bat") == 3
    assert common_prefix_length("", "bat") == 0
    assert common_prefix_length("cat", "dog") == 0


def test_new_word_hangs_whole_tail_on_root():
    tree = PrefixTree()
    tree.insert("batman")
    assert _shape(tree.root) == ("", False, [("batman", True, [])])


def test_partial_match_splits_with_new_sibling():
    tree = PrefixTree()
    tree.insert("batman batmobile")
    assert _shape(tree.root) == (
        "", False, [
            ("batm", False, [("an", True, []), ("obile", True, [])]),
        ],
    )


def test_split_where_new_word_ends_at_the_split():
    tree = PrefixTree()
    tree.insert("cat")
    tree.insert("ca")
    assert _shape(tree.root) == ("", False, [("ca", True, [("t", True, [])])])


def test_split_keeps_children_of_the_moved_node():
    tree = PrefixTree()
    tree.insert("batman batmobile batcave")
    assert _shape(tree.root) == (
        "", False, [
            ("bat", False, [
                ("cave", True, []),
                ("m", False, [("an", True, []), ("obile", True, [])]),
            ]),
        ],
    )


def test_extending_an_existing_word():
    tree = PrefixTree()
    tree.insert("bat")
    tree.insert("batman")
    assert _shape(tree.root) == ("", False, [("bat", True, [("man", True, [])])])


def test_word_ending_on_existing_boundary_becomes_terminal():
    tree = PrefixTree()
    tree.insert("batman batmobile")
    tree.insert("batm")
    assert tree.complete("bat") == ["batm", "batman", "batmobile"]
    assert tree.size() == 4


def test_reinsert_is_idempotent():
    tree = PrefixTree()
    tree.insert("bat batman batmobile batcave")
    before = (_shape(tree.root), tree.size(), tree.word_count())
    tree.insert("bat batman batmobile batcave batman bat")
    assert (_shape(tree.root), tree.size(), tree.word_count()) == before


def test_insert_word_reports_new_words():
    tree = PrefixTree()
    assert tree.insert_word("batman") is True
    assert tree.insert_word("batman") is False
    assert tree.insert_word("bat") is True
    assert tree.insert_word("") is False
    assert len(tree) == 2


def test_counts_and_size():
    tree = PrefixTree()
    tree.insert("batman robin batmobile batcave robber")
    assert tree.word_count() == 5
    assert len(tree) == 5
    # root, bat, m, an, obile, cave, rob, in, ber
    assert tree.size() == 9


def test_clear_resets_to_a_bare_root():
    tree = PrefixTree(case_fold=True)
    tree.insert("batman robin batmobile batcave robber")
    tree.clear()
    assert tree.size() == 1
    assert tree.word_count() == 0
    assert tree.complete("") == []
    assert tree.policy.case_fold is True


def test_shared_stems_store_fewer_characters():
    tree = PrefixTree()
    tree.insert("bat batman batmobile batcave")
    st = tree.stats()
    assert st.words == 4
    assert st.nodes == 6
    assert st.stored_chars == len("bat") + len("cave") + len("m") + len("an") + len("obile")
    assert st.word_chars == len("bat") + len("batman") + len("batmobile") + len("batcave")
    assert st.stored_chars < st.word_chars


def test_membership():
    tree = PrefixTree()
    tree.insert("bat batman batmobile")
    assert "bat" in tree
    assert "batman" in tree
    assert "ba" not in tree
    assert "batm" not in tree
    assert "batmanx" not in tree
    assert "" not in tree
    assert 42 not in tree


def test_iteration_is_sorted():
    tree = PrefixTree()
    tree.insert("delta alpha charlie bravo alpha")
    assert list(tree) == ["alpha", "bravo", "charlie", "delta"]


def test_min_word_len_applies_to_later_inserts_only():
    tree = PrefixTree(min_word_len=4)
    tree.insert("one two three four five")
    assert tree.word_count() == 3

    tree.set_min_word_len(1)
    tree.insert("one two")
    assert tree.complete("") == ["five", "four", "one", "three", "two"]

    tree.set_min_word_len(10)
    assert "one" in tree


def test_insert_many_lines():
    tree = PrefixTree()
    tree.insert_many(["bat batman", "", "batcave  bat\n"])
    assert tree.complete("") == ["bat", "batcave", "batman"]
