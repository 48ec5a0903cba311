"""Tests for Node: payload variants, parent links, shape predicates, navigation.

Verifies:
- PayloadKind has exactly three lowercase members
- data/label/parent/id are set by the constructor, label strings are coerced
- add_child and data assignment install weak parent back-references
- child lists accept Nodes only
- leaf/branch/twig/oneling/root predicates
- navigation helpers (siblings, ancestors, find, find_by, walk)
- in-place transforms
"""

from __future__ import annotations

import gc

import pytest

from aggtree import InvalidOperation, Label, Node, NotEnumerable, PayloadKind
from aggtree.errors import InvalidLabelSpec, NotALeaf
from aggtree.ids import SequentialIdSource, use_id_source


class TestPayloadKind:
    """Tests for the PayloadKind StrEnum."""

    def test_has_exactly_three_members(self) -> None:
        """PayloadKind must have exactly ABSENT, SCALAR and CHILDREN."""
        assert len(PayloadKind) == 3

    def test_values_are_lowercased(self) -> None:
        """auto() on StrEnum yields the lowercased member name."""
        assert PayloadKind.ABSENT == "absent"
        assert PayloadKind.SCALAR == "scalar"
        assert PayloadKind.CHILDREN == "children"


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


class TestConstruction:
    """Tests for Node.__init__ and payload classification."""

    def test_defaults(self) -> None:
        """A bare Node has no label, no data and no parent."""
        node = Node()
        assert node.label is None
        assert node.data is None
        assert node.kind is PayloadKind.ABSENT
        assert node.parent is None

    def test_label_instance_is_kept(self) -> None:
        """A Label instance is stored as given."""
        label = Label("My Label")
        assert Node(label).label is label

    def test_string_label_is_coerced(self) -> None:
        """A string becomes a Label with that name and identity."""
        node = Node("Some label")
        assert node.label == Label("Some label")
        assert node.label.name == "Some label"

    def test_mapping_label_is_coerced(self) -> None:
        """A mapping with name, id and meta becomes a Label."""
        node = Node(
            {"name": "Another label", "id": "some_label", "meta": {"parent_share": 23}}
        )
        assert node.label.identity == "some_label"
        assert node.label.name == "Another label"
        assert node.label.metadata == {"parent_share": 23}

    def test_unsupported_label_raises(self) -> None:
        """A float label is rejected with InvalidLabelSpec."""
        with pytest.raises(InvalidLabelSpec):
            Node(label=3.14)  # type: ignore[arg-type]

    def test_scalar_payload(self) -> None:
        """A non-sequence payload is a scalar."""
        node = Node("x", 123)
        assert node.kind is PayloadKind.SCALAR
        assert node.value() == 123

    def test_tuple_payload_becomes_child_list(self) -> None:
        """A tuple of Nodes is stored as a list of children."""
        child = Node("c", 1)
        node = Node("x", (child,))
        assert node.kind is PayloadKind.CHILDREN
        assert isinstance(node.data, list)
        assert node.children == [child]

    def test_empty_child_list_is_not_absent(self) -> None:
        """[] is an empty child list, distinct from an absent payload."""
        node = Node("x", [])
        assert node.kind is PayloadKind.CHILDREN
        assert node.holds_children
        assert node.is_leaf

    def test_id_is_drawn_from_the_active_source(self) -> None:
        """Ids come from the installed IdSource when not given."""
        with use_id_source(SequentialIdSource(prefix="t", start=5)):
            assert Node().id == "t5"
            assert Node().id == "t6"

    def test_explicit_id_wins(self) -> None:
        """node_id overrides the id source."""
        assert Node(node_id="mine").id == "mine"

    def test_parent_argument(self) -> None:
        """The parent argument installs the back-reference."""
        parent = Node("p", [])
        child = Node("c", 1, parent=parent)
        assert child.parent is parent


# ---------------------------------------------------------------------------
# Child list validation
# ---------------------------------------------------------------------------


class TestChildValidation:
    """Tests that child lists hold Nodes only."""

    def test_tuple_of_strings_is_rejected(self) -> None:
        """A date-range tuple is not silently turned into a branch."""
        with pytest.raises(InvalidOperation, match="Nodes only"):
            Node("range", ("2013-01-01", "2013-12-31"))

    def test_mixed_list_is_rejected(self) -> None:
        """One non-Node item rejects the whole list."""
        with pytest.raises(InvalidOperation):
            Node("x", [Node("a", 1), 2])

    def test_rejected_assignment_leaves_node_unchanged(self) -> None:
        """A failed data assignment keeps the previous payload and parents."""
        child = Node("a", 1)
        node = Node("x", [child])
        with pytest.raises(InvalidOperation):
            node.data = [Node("b", 2), "not a node"]
        assert node.children == [child]
        assert node.sum() == 1

    def test_add_child_rejects_non_nodes(self) -> None:
        """add_child refuses plain values and keeps the node intact."""
        node = Node("x")
        with pytest.raises(InvalidOperation):
            node.add_child(5)  # type: ignore[arg-type]
        assert node.kind is PayloadKind.ABSENT

    def test_rejection_is_a_tree_error(self) -> None:
        """The rejection is catchable as ValueError as well."""
        with pytest.raises(ValueError):
            Node("x", ["a"])


# ---------------------------------------------------------------------------
# Parent links
# ---------------------------------------------------------------------------


class TestParentLinks:
    """Tests for add_child, data assignment and the weak parent link."""

    def test_add_child_to_absent_creates_child_list(self) -> None:
        """add_child on an absent payload starts a child list."""
        node = Node("x")
        child = Node("c", 1)
        assert node.add_child(child) is child
        assert node.children == [child]
        assert child.parent is node

    def test_add_child_appends(self) -> None:
        """add_child appends after existing children."""
        node = Node("x", [Node("a", 1)])
        node.add_child(Node("b", 2))
        assert [c.label.name for c in node.children] == ["a", "b"]

    def test_add_child_to_scalar_raises(self) -> None:
        """add_child on a scalar raises NotEnumerable carrying both nodes."""
        node = Node("x", 5)
        child = Node("c", 1)
        with pytest.raises(NotEnumerable) as excinfo:
            node.add_child(child)
        assert excinfo.value.parent is node
        assert excinfo.value.item is child
        assert node.data == 5

    def test_assigning_children_sets_parents(self) -> None:
        """Assigning a child list re-parents every item."""
        node = Node("x")
        a, b = Node("a", 1), Node("b", 2)
        node.data = [a, b]
        assert a.parent is node
        assert b.parent is node

    def test_assigning_scalar_overwrites(self) -> None:
        """Assigning a scalar replaces the previous scalar."""
        node = Node("x", 1)
        node.data = 2
        assert node.value() == 2

    def test_reattaching_moves_ownership(self) -> None:
        """The last attachment wins."""
        first, second = Node("first", []), Node("second", [])
        child = first.add_child(Node("c", 1))
        second.add_child(child)
        assert child.parent is second

    def test_parent_reference_is_weak(self) -> None:
        """A child does not keep its parent alive."""
        child = Node("c", 1)
        Node("p", [child])
        gc.collect()
        assert child.parent is None

    def test_children_returns_a_copy(self) -> None:
        """Mutating the children list does not change the node."""
        node = Node("x", [Node("a", 1)])
        node.children.append(Node("b", 2))
        assert len(node.children) == 1


# ---------------------------------------------------------------------------
# Shape predicates
# ---------------------------------------------------------------------------


class TestShape:
    """Tests for leaf, branch, twig, root and oneling predicates."""

    def test_leaf_and_branch(self, expenses: Node) -> None:
        """Junk food is a leaf; the root is a branch."""
        junk_food = expenses.children[0].children[0]
        assert junk_food.is_leaf
        assert not junk_food.is_branch
        assert expenses.is_branch
        assert not expenses.is_leaf

    def test_twig(self, expenses: Node) -> None:
        """Food only holds leaves, the root does not."""
        food = expenses.children[0]
        assert food.is_twig
        assert not expenses.is_twig

    def test_twig_with_absent_leaf(self) -> None:
        """A branch over an absent leaf is a twig."""
        assert Node(data=[Node(data=None)]).is_twig

    def test_leaf_is_not_a_twig(self) -> None:
        """A leaf has no children, so it is not a twig."""
        assert not Node("x", 1).is_twig

    def test_root(self, expenses: Node) -> None:
        """Only the parentless node is a root."""
        assert expenses.is_root
        assert not expenses.children[0].is_root

    def test_oneling(self, expenses: Node) -> None:
        """An only child is a oneling; a node with siblings is not."""
        food = expenses.children[0]
        super_foods = food.add_child(Node("Super foods", 123.4))
        assert food.is_oneling
        assert not super_foods.is_oneling
        assert expenses.is_oneling

    def test_child_branches_and_leaves(self) -> None:
        """children split into branches and leaves."""
        branch = Node("b", [Node("c", 1)])
        leaf = Node("l", 2)
        root = Node("r", [branch, leaf])
        assert root.child_branches == [branch]
        assert root.leaves == [leaf]
        assert Node("x", 1).child_branches == []


# ---------------------------------------------------------------------------
# Navigation
# ---------------------------------------------------------------------------


class TestNavigation:
    """Tests for siblings, ancestors, walk, find and find_by."""

    def test_siblings(self) -> None:
        """Siblings are the other children of the parent."""
        a, b, c = Node("a", 1), Node("b", 2), Node("c", 3)
        Node("root", [a, b, c])
        assert a.siblings == [b, c]

    def test_siblings_of_root_and_only_child(self, expenses: Node) -> None:
        """A root and an only child have no siblings."""
        assert expenses.siblings == []
        assert expenses.children[0].siblings == []

    def test_siblings_use_object_identity(self) -> None:
        """An equal twin still counts as a sibling."""
        a, twin = Node("a", 1), Node("a", 1)
        Node("root", [a, twin])
        assert a.siblings == [twin]
        assert a.siblings[0] is twin

    def test_ancestors_and_label_path(self, expenses: Node) -> None:
        """Ancestors run from the root down to the parent."""
        junk_food = expenses.children[0].children[0]
        assert junk_food.ancestors == [expenses, expenses.children[0]]
        assert [label.name for label in junk_food.label_path] == [
            "Expenses per year",
            "Food",
            "Junk food",
        ]

    def test_walk_is_pre_order(self, expenses: Node) -> None:
        """walk and iteration visit self first, then descendants."""
        names = [node.label.name for node in expenses.walk()]
        assert names == ["Expenses per year", "Food", "Junk food"]
        assert [n.label.name for n in expenses] == names

    def test_walk_allows_in_place_edits(self, expenses: Node) -> None:
        """Nodes yielded by iteration are the live nodes."""
        for node in expenses:
            node.label.metadata["full_path"] = "a>b>c"
        assert expenses.children[0].children[0].label.metadata["full_path"] == "a>b>c"

    def test_find_by_predicate(self, expenses: Node) -> None:
        """find accepts a predicate."""
        found = expenses.find(lambda n: n.label.name == "Junk food")
        assert found is expenses.children[0].children[0]

    def test_find_by_id(self, expenses: Node) -> None:
        """find accepts an id and returns None when absent."""
        food = expenses.children[0]
        assert expenses.find(food.id) is food
        assert expenses.find(expenses.id) is expenses
        assert expenses.find(12332212331) is None

    def test_find_by_query(self, expenses: Node) -> None:
        """find_by matches a partial comparable dict."""
        found = expenses.find_by({"label": {"name": "Junk food"}, "data": 123.4})
        assert found is expenses.children[0].children[0]
        assert expenses.find_by({"label": {"name": "Nope"}}) is None

    def test_to_comparable_dict(self) -> None:
        """The comparable dict exposes id, data and label fields."""
        node = Node(Label("n", identity="i", metadata={"k": 1}), 5, node_id="x")
        assert node.to_comparable_dict() == {
            "id": "x",
            "data": 5,
            "label": {"id": "i", "name": "n", "meta": {"k": 1}},
        }

    def test_comparable_dict_of_branch_has_no_data(self) -> None:
        """Branches leave data out of the comparable dict."""
        assert "data" not in Node("b", [Node("c", 1)]).to_comparable_dict()

    def test_leaf_labels_one_level(self) -> None:
        """Leaf labels of a twig are its children's labels."""
        first, second = Label("first"), Label("second")
        node = Node("test", [Node(first, 123), Node(second, 123)])
        assert node.leaf_labels == [first, second]

    def test_leaf_labels_deep_and_unique(self) -> None:
        """Leaf labels are collected deeply and deduplicated."""
        first, second = Label("first"), Label("second")
        level_2 = Node("Second level", [Node(first, 1), Node(second, 2), Node(first, 3)])
        node = Node("test", [Node("First level", [level_2])])
        assert node.leaf_labels == [first, second]

    def test_leaf_labels_of_leaf(self, expenses: Node) -> None:
        """A leaf has no leaf labels below it."""
        assert expenses.children[0].children[0].leaf_labels == []


# ---------------------------------------------------------------------------
# value() and transforms
# ---------------------------------------------------------------------------


class TestValue:
    """Tests for Node.value."""

    def test_leaf_value(self, expenses: Node) -> None:
        """A leaf returns its scalar."""
        assert expenses.children[0].children[0].value() == 123.4

    def test_branch_value_raises(self, expenses: Node) -> None:
        """A branch has no value."""
        with pytest.raises(NotALeaf):
            expenses.value()

    def test_absent_and_empty_values_are_none(self) -> None:
        """Absent and empty payloads have value None."""
        assert Node().value() is None
        assert Node(data=[]).value() is None


class TestTransforms:
    """Tests for transform_labels and transform_values."""

    def test_transform_labels(self, expenses: Node) -> None:
        """Every label is replaced in place and self is returned."""
        result = expenses.transform_labels(lambda label, node: label.name.upper())
        assert result is expenses
        names = [n.label.name for n in expenses]
        assert names == ["EXPENSES PER YEAR", "FOOD", "JUNK FOOD"]

    def test_transform_labels_receives_node(self) -> None:
        """The callback receives the node alongside its label."""
        root = Node("r", [Node("a", 1)])
        root.transform_labels(lambda label, node: f"{label.name}:{node.kind}")
        assert root.label.name == "r:children"
        assert root.children[0].label.name == "a:scalar"

    def test_transform_values(self) -> None:
        """Every leaf value is replaced in place."""
        root = Node("r", [Node("a", 1), Node("b", [Node("c", 2)])])
        result = root.transform_values(lambda value, node: value * 10)
        assert result is root
        assert root.reducible_values() == [10, [20]]

    def test_transform_values_on_leaf(self) -> None:
        """Returning None makes a leaf absent."""
        node = Node("a", 2)
        node.transform_values(lambda value, n: None)
        assert node.kind is PayloadKind.ABSENT


class TestRepr:
    """Tests for Node.__repr__."""

    def test_leaf_repr(self) -> None:
        """A leaf shows its label name and data."""
        assert repr(Node("a", 1)) == "<Node label='a' data=1>"

    def test_branch_repr(self) -> None:
        """A branch lists its children's label names."""
        assert repr(Node("r", [Node("a", 1)])) == "<Node label='r' children=[a...]>"
