"""Text pictures of red-black trees and of single nodes."""

from .rbnode import Color

_INDENT = 18
_POINTER_WIDTH = 15
_RED = "\033[31m"
_BLUE = "\033[34m"
_RESET = "\033[00m"


def _value(item):
    """Numeric value of a pointer-like item: an int, an address, or an identity."""
    if item is None:
        return 0
    if isinstance(item, int):
        return item
    address = getattr(item, "address", None)
    if isinstance(address, int):
        return address
    return id(item)


def _pointer(item):
    value = _value(item)
    return "(nil)" if value == 0 else hex(value)


def _tree_lines(node, depth, out):
    if node is None:
        return
    _tree_lines(node.right, depth + 1, out)
    parts = [" " * (depth * _INDENT)]
    if node.parent is not None:
        parts.append("╰─ " if node.parent.left is node else "╭─ ")
    parts.append(_RED if node.color == Color.RED else _BLUE)
    parts.append(f"{_pointer(node.content)} {_RESET}")
    if node.left is not None or node.right is not None:
        parts.append("─" * (_INDENT - _POINTER_WIDTH - 3))
        if node.parent is None:
            parts.append("───")
        parts.append("┤")
    parts.append("\n")
    out.append("".join(parts))
    _tree_lines(node.left, depth + 1, out)


def format_tree(root):
    """Draw the tree under ``root`` sideways, largest content on top."""
    out = []
    _tree_lines(root, 0, out)
    return "".join(out)


def format_node(node):
    """Describe ``node``, its parent and its children with their contents."""
    if node is None:
        return "VOID NODE\n"
    pad = " " * _INDENT
    parts = [f"{pad}Parent: {_pointer(node.parent)}\n"]
    if node.parent is not None:
        parts.append(f"{pad}  Val:  {_value(node.parent.content)}\n")
    parts.append(f"{pad}Self:   {_pointer(node)}\n")
    parts.append(f"{pad}  Val:  {_value(node.content)}\n")
    parts.append(f"Left:   {_pointer(node.left)}")
    parts.append(f"{pad}Right:  {_pointer(node.right)}\n")
    if node.left is not None:
        parts.append(f"  Val:  {_value(node.left.content):<10}")
    else:
        parts.append(" " * 8 + " " * 10)
    if node.right is not None:
        parts.append(" " * 20 + f"  Val:  {_value(node.right.content):<10}")
    parts.append("\n" + _RESET)
    return "".join(parts)