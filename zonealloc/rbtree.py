"""Red-black tree over intrusive nodes, ordered by a comparison function."""

from .rbnode import Color, Node, Side


def _is_red(node):
    return node is not None and node.color == Color.RED


def recolor(node):
    """Blacken a root, or blacken a red parent and uncle when both are red."""
    parent = node.parent
    if parent is None:
        node.color = Color.BLACK
    elif parent.color != Color.BLACK:
        uncle = node.uncle()
        if _is_red(uncle):
            parent.color = Color.BLACK
            uncle.color = Color.BLACK


class RBTree:
    """A red-black tree whose nodes are supplied by the caller.

    ``compare(a, b)`` returns a positive number when ``a`` sorts after ``b``,
    a negative number when it sorts before, and zero when they are equal.
    Equal contents are placed to the right of existing ones.
    """

    def __init__(self, compare):
        self.compare = compare
        self.root = None

    # Insertion

    def insert(self, node):
        """Link ``node`` into the tree as a fresh red leaf and rebalance."""
        node.parent = None
        node.left = None
        node.right = None
        node.color = Color.RED
        self._attach(node)
        self._repair_insert(node)
        self.root = node.root()
        return node

    def _attach(self, node):
        current = self.root
        if current is None:
            return
        while True:
            if self.compare(current.content, node.content) > 0:
                if current.left is None:
                    current.left = node
                    break
                current = current.left
            else:
                if current.right is None:
                    current.right = node
                    break
                current = current.right
        node.parent = current

    @staticmethod
    def _repair_insert(node):
        while True:
            parent = node.parent
            if parent is None:
                node.color = Color.BLACK
                return
            if parent.color == Color.BLACK:
                return
            uncle = node.uncle()
            if _is_red(uncle):
                grand = node.grandparent()
                parent.color = Color.BLACK
                uncle.color = Color.BLACK
                grand.color = Color.RED
                node = grand
                continue
            grand = node.grandparent()
            if node is parent.right and parent is grand.left:
                parent.rotate_left()
                node = node.left
            elif node is parent.left and parent is grand.right:
                parent.rotate_right()
                node = node.right
            parent = node.parent
            grand = node.grandparent()
            if node is parent.left:
                grand.rotate_right()
            else:
                grand.rotate_left()
            parent.color = Color.BLACK
            grand.color = Color.RED
            return

    # Lookup

    def find(self, content):
        """Return the node whose content compares equal to ``content``, or None."""
        node = self.root
        while node is not None:
            order = self.compare(node.content, content)
            if order > 0:
                node = node.left
            elif order < 0:
                node = node.right
            else:
                return node
        return None

    def nth(self, index):
        """Walk in order skipping ``index`` nodes and return the node reached.

        A node reached inside a left subtree is reported as the root of that
        subtree, so index 0 always gives the tree's root. Returns None when
        the walk runs out of nodes.
        """
        found, _ = self._nth(self.root, index)
        return found

    def _nth(self, node, remaining):
        if node is None:
            return None, remaining
        found, remaining = self._nth(node.left, remaining)
        if remaining == 0 or found is not None:
            return node, remaining
        return self._nth(node.right, remaining - 1)

    # Deletion

    def delete(self, node):
        """Unlink ``node`` from the tree and rebalance."""
        if node.left is not None and node.right is not None:
            node.swap_with(node.in_order_predecessor())
        if node.color == Color.RED:
            node.cut_leaf()
            parent = node.parent
            self.root = parent.root() if parent is not None else None
        else:
            child = node.left if node.right is None else node.right
            if child is not None:
                child.color = Color.BLACK
                node.replace_with(child)
                self.root = child.root()
            else:
                self._fix_double_black(node)
                node.cut_leaf()
                parent = node.parent
                self.root = parent.root() if parent is not None else None
        node.parent = None
        node.left = None
        node.right = None

    @staticmethod
    def _fix_double_black(node):
        while node.parent is not None:
            sibling = node.sibling()
            if sibling is None:
                node = node.parent
                continue
            parent = node.parent
            if sibling.color == Color.RED:
                parent.color = Color.RED
                sibling.color = Color.BLACK
                if sibling.which_child() == Side.LEFT:
                    parent.rotate_right()
                else:
                    parent.rotate_left()
                continue
            if _is_red(sibling.left) or _is_red(sibling.right):
                sibling_on_left = sibling.which_child() == Side.LEFT
                if _is_red(sibling.left):
                    if sibling_on_left:
                        sibling.left.color = sibling.color
                        sibling.color = parent.color
                        parent.rotate_right()
                    else:
                        sibling.left.color = parent.color
                        sibling.rotate_right()
                        parent.rotate_left()
                else:
                    if sibling_on_left:
                        sibling.right.color = parent.color
                        sibling.rotate_left()
                        parent.rotate_right()
                    else:
                        sibling.right.color = sibling.color
                        sibling.color = parent.color
                        parent.rotate_left()
                parent.color = Color.BLACK
                return
            sibling.color = Color.RED
            if parent.color == Color.BLACK:
                node = parent
                continue
            parent.color = Color.BLACK
            return

    # Traversal

    def inorder(self):
        """Yield nodes from smallest to largest."""
        stack = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            node = node.right

    def reverse_inorder(self):
        """Yield nodes from largest to smallest."""
        stack = []
        node = self.root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.right
            node = stack.pop()
            yield node
            node = node.left

    def free(self, func):
        """Call ``func`` on every content in order, then empty the tree."""
        for node in list(self.inorder()):
            func(node.content)
        self.root = None

    def __len__(self):
        return sum(1 for _ in self.inorder())

    def __iter__(self):
        return (node.content for node in self.inorder())

    def __bool__(self):
        return self.root is not None


__all__ = ["RBTree", "recolor", "Node", "Color"]