"""Tree node structure shared by the tree builder and the predictor."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Final

# ---------------------------------------------------------------------------
# Split column sentinels
# ---------------------------------------------------------------------------

LEAF: Final[int] = -1  # Node holds a final class prediction.
ROOT: Final[int] = -2  # Synthetic root that has not selected a split.
PENDING: Final[int] = -3  # Edge node whose split has not been decided.

_PASS_THROUGH: Final[frozenset[int]] = frozenset({ROOT, PENDING})

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class Node:
    """A node of a multi-way categorical decision tree.

    Nodes are built in two phases. The builder first creates an edge holder
    with `Node.edge(value)` (or the root with `Node.root()`), attaches it, and
    only then records the split it decides on with `finalize`. A node that
    never splits keeps its sentinel and passes straight through to its single
    leaf child.

    Attributes:
        split_column (int): For a decision node, the 0-based column it tests,
            relative to the column layout of the slice it was built from (the
            label is column 0, so this is always >= 1). Otherwise one of the
            `LEAF`, `ROOT` or `PENDING` sentinels.
        label (str): The predicted class for a leaf; the attribute value of the
            incoming edge for any other non-root node; `""` for the root.
        children (list[Node]): Child nodes in first-seen attribute value order.
        attribute (str | None): Stable identifier of the tested column on a
            decision node, `None` otherwise.
        samples (int): Number of training records that reached this node.

    Examples:
        >>> root = Node.root()
        >>> sunny = Node.edge("sunny")
        >>> root.add_child(sunny)
        >>> root.finalize(1, attribute="column_1")
        >>> root.is_decision
        True
        >>> sunny.is_pass_through
        True
    """

    split_column: int
    label: str
    children: list[Node] = field(default_factory=list)
    attribute: str | None = None
    samples: int = 0

    @classmethod
    def root(cls) -> Node:
        """Create the synthetic root node.

        Returns:
            Node: A node with the `ROOT` sentinel and an empty label.
        """
        return cls(split_column=ROOT, label="")

    @classmethod
    def edge(cls, value: str, *, samples: int = 0) -> Node:
        """Create a node reached through the edge for attribute value `value`.

        Args:
            value (str): The attribute value routing into this node.
            samples (int): Number of training records routed into this node.

        Returns:
            Node: A node with the `PENDING` sentinel.
        """
        return cls(split_column=PENDING, label=value, samples=samples)

    @classmethod
    def leaf(cls, class_label: str, *, samples: int = 0) -> Node:
        """Create a leaf predicting `class_label`.

        Args:
            class_label (str): The predicted class.
            samples (int): Number of training records that reached the leaf.

        Returns:
            Node: A node with the `LEAF` sentinel.
        """
        return cls(split_column=LEAF, label=class_label, samples=samples)

    def add_child(self, child: Node) -> None:
        """Append `child` to this node's children.

        Args:
            child (Node): The node to attach.
        """
        self.children.append(child)

    def finalize(self, split_column: int, *, attribute: str) -> None:
        """Record the split this node decided on.

        Args:
            split_column (int): Column tested, relative to the slice this node
                was built from. Must be >= 1 since column 0 is the label.
            attribute (str): Stable identifier of the tested column.

        Raises:
            ValueError: If the node is a leaf, was already finalized, or
                `split_column` is not a valid attribute position.
        """
        if self.split_column not in _PASS_THROUGH:
            raise ValueError(f"Node {self.label!r} already has split column {self.split_column}")
        if split_column < 1:
            raise ValueError(f"split_column must be >= 1, got {split_column}")
        self.split_column = split_column
        self.attribute = attribute

    @property
    def is_leaf(self) -> bool:
        """Whether this node holds a final prediction."""
        return self.split_column == LEAF

    @property
    def is_root(self) -> bool:
        """Whether this node is the unsplit synthetic root."""
        return self.split_column == ROOT

    @property
    def is_pass_through(self) -> bool:
        """Whether this node routes straight into its only child without a test."""
        return self.split_column in _PASS_THROUGH

    @property
    def is_decision(self) -> bool:
        """Whether this node tests a column."""
        return self.split_column >= 0

    def find_child(self, value: str) -> Node | None:
        """Return the child whose edge label equals `value` exactly.

        Args:
            value (str): The attribute value to route on.

        Returns:
            Node | None: The matching child, or None if no branch exists.
        """
        for child in self.children:
            if child.label == value:
                return child
        return None

    def walk(self) -> Iterator[tuple[int, Node]]:
        """Yield `(depth, node)` for this node and its descendants, depth-first.

        Yields:
            tuple[int, Node]: Depth relative to this node, and the node.
        """
        stack: list[tuple[int, Node]] = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            stack.extend((depth + 1, child) for child in reversed(node.children))

    def leaves(self) -> list[Node]:
        """Return every leaf below (or at) this node, in depth-first order."""
        return [node for _, node in self.walk() if node.is_leaf]

    def depth(self) -> int:
        """Return the number of decision nodes on the longest root-to-leaf path."""
        if not self.children:
            return 0
        own = 1 if self.is_decision else 0
        return own + max(child.depth() for child in self.children)


def format_tree(node: Node, *, indent: str = "  ") -> str:
    """Render a tree as indented text, one node per line.

    Decision nodes show the attribute they test and its relative column,
    leaves show the predicted class after `=>`.

    Args:
        node (Node): Root of the (sub)tree to render.
        indent (str): Indentation added per level. Defaults to two spaces.

    Returns:
        str: The rendered tree, without a trailing newline.

    Examples:
        >>> root = Node.root()
        >>> root.add_child(Node.leaf("yes", samples=3))
        >>> print(format_tree(root))
        (root)
          => yes [3]
    """
    lines: list[str] = []
    for depth, current in node.walk():
        if current.is_leaf:
            text = f"=> {current.label} [{current.samples}]"
        else:
            text = "(root)" if current.label == "" and depth == 0 else current.label
            if current.is_decision:
                text = f"{text} ? {current.attribute} @ {current.split_column}"
        lines.append(f"{indent * depth}{text}")
    return "\n".join(lines)
