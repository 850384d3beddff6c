"""Red-black tree node with its family links and local restructuring."""

import enum


class Color(enum.IntEnum):
    BLACK = 0
    RED = 1


class Side(enum.IntEnum):
    """Which child of its parent a node is."""

    ERROR = -1
    NONE = 0
    LEFT = 1
    RIGHT = 2


class Node:
    """A red-black tree node; new nodes are red and unlinked."""

    __slots__ = ("content", "color", "parent", "left", "right")

    def __init__(self, content=None):
        self.content = content
        self.color = Color.RED
        self.parent = None
        self.left = None
        self.right = None

    def __repr__(self):
        return f"Node(content={self.content!r}, color={self.color.name})"

    def grandparent(self):
        return self.parent.parent if self.parent is not None else None

    def root(self):
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def sibling(self):
        parent = self.parent
        if parent is None:
            return None
        if parent.left is self:
            return parent.right
        if parent.right is self:
            return parent.left
        return None

    def uncle(self):
        return self.parent.sibling() if self.parent is not None else None

    def which_child(self):
        parent = self.parent
        if parent is None:
            return Side.NONE
        if parent.left is self:
            return Side.LEFT
        if parent.right is self:
            return Side.RIGHT
        return Side.ERROR

    def rotate_left(self):
        """Lift the right child into this node's place."""
        pivot = self.right
        if pivot is None:
            raise ValueError("cannot rotate left without a right child")
        parent = self.parent
        self.right = pivot.left
        pivot.left = self
        self.parent = pivot
        if self.right is not None:
            self.right.parent = self
        if parent is not None:
            if parent.right is self:
                parent.right = pivot
            else:
                parent.left = pivot
        pivot.parent = parent

    def rotate_right(self):
        """Lift the left child into this node's place."""
        pivot = self.left
        if pivot is None:
            raise ValueError("cannot rotate right without a left child")
        parent = self.parent
        self.left = pivot.right
        pivot.right = self
        self.parent = pivot
        if self.left is not None:
            self.left.parent = self
        if parent is not None:
            if parent.left is self:
                parent.left = pivot
            else:
                parent.right = pivot
        pivot.parent = parent

    def cut_leaf(self):
        """Detach this node from its parent's child link."""
        parent = self.parent
        if parent is None:
            return
        if parent.left is self:
            parent.left = None
        else:
            parent.right = None

    def replace_with(self, child):
        """Put ``child`` where this node hangs under its parent."""
        if child is not None:
            child.parent = self.parent
        parent = self.parent
        if parent is not None:
            if parent.left is self:
                parent.left = child
            else:
                parent.right = child

    @staticmethod
    def _take_place(dest, src):
        dest.color = src.color
        dest.parent = src.parent
        dest.left = src.left
        dest.right = src.right
        if dest.parent is not None:
            if dest.parent.left is src:
                dest.parent.left = dest
            else:
                dest.parent.right = dest
        if dest.left is not None:
            dest.left.parent = dest
        if dest.right is not None:
            dest.right.parent = dest

    def swap_with(self, other):
        """Exchange tree positions and colours with ``other``, keeping contents."""
        if other is None:
            return
        first = Node()
        second = Node()
        self._take_place(first, self)
        self._take_place(second, other)
        self._take_place(self, second)
        self._take_place(other, first)

    def in_order_predecessor(self):
        node = self.left
        while node is not None and node.right is not None:
            node = node.right
        return node