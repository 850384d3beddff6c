# zonealloc

`zonealloc` provides the building blocks of a zone-based memory allocator,
simulated in pure Python. It has no dependencies beyond the standard library.

The size classes are the ones a classic `mmap`-backed `malloc` uses:

- **Tiny** blocks are up to 512 bytes, aligned to 16 bytes, and live in 2 MiB zones.
- **Small** blocks are up to 16 KiB, aligned to 512 bytes, and live in 16 MiB zones.
- **Large** blocks are aligned to 4 KiB.

## Installation

```
pip install zonealloc
```

## Modules

### `zonealloc.flags`

This module holds the header flag bits (`HDR_POS_FIRST`, `HDR_POS_LAST`,
`HDR_AVAILABLE`, `HDR_TYPE_TINY`, `HDR_TYPE_SMALL`, `HDR_TYPE_LARGE`, …) and the
size-class constants.

- `flag_set_pos`, `flag_set_type` and `flag_set_availability` replace one group of
  bits in a flag byte.
- `align_size(type_flag, size)` rounds a size up to the resolution of a class. The
  arithmetic wraps at 64 bits, so a size of 0 aligns to 0.

### `zonealloc.formatting`

- `format_dec` and `format_hex` return upper-case digits. A value of zero gives
  `""` and `"0x"` respectively.
- `format_hex_octet` returns a two-digit byte followed by a space.
- `format_hex_zeroes` returns the leading-zero padding.
- `hash_djb2(data)` computes djb2 over the first eight bytes of `data`. It raises
  `ValueError` when `data` is shorter than that.

### `zonealloc.rbnode` and `zonealloc.rbtree`

These modules implement an intrusive red-black tree. The caller supplies the
`Node` objects, or subclasses of `Node`. The tree orders them with a
`compare(a, b)` function that returns a negative number, zero or a positive
number. Equal keys go to the right.

```python
from zonealloc.rbnode import Node
from zonealloc.rbtree import RBTree

tree = RBTree(lambda a, b: a - b)
for value in (5, 2, 8, 1):
    tree.insert(Node(value))

assert list(tree) == [1, 2, 5, 8]
tree.delete(tree.find(2))
assert len(tree) == 3
```

`RBTree` has the following members:

- `insert`, `find` and `delete`.
- `nth(index)`: an in-order walk that skips `index` nodes. Index 0 gives the root.
- `inorder()` and `reverse_inorder()`: generators of nodes.
- `free(func)`: calls `func` on each content in order, then empties the tree.
- `len()`, iteration over contents, and truth testing.

`recolor(node)` applies the simple recolouring step on its own.

`Node` has the following methods:

- Navigation: `grandparent`, `root`, `sibling`, `uncle` and `which_child`. The
  last returns a `Side` value.
- Rotations: `rotate_left` and `rotate_right`. Each raises `ValueError` when the
  needed child is missing.
- Restructuring: `cut_leaf`, `replace_with`, `swap_with` and `in_order_predecessor`.

### `zonealloc.memory`

- `AddressSpace` hands out zeroed, page-spaced mappings at integer addresses. It
  has `mmap`, `munmap`, `read`, `write` and `fill`.
  - `mmap` raises `MemoryError` when an optional `limit` would be exceeded.
  - `munmap` raises `OSError` for an unknown mapping.
  - Accesses outside the mappings raise `ValueError`.
- `AllocHeader` is a block header and also a tree node. Its `size` and
  `size_prev` are 16-bit fields and `flags` is an 8-bit field. Its methods are:
  - `init` and `update_size_next`;
  - `next`, `prev` and `zone`;
  - `to_bytes()`, which returns the 48-byte header layout.
- `Zone` is a zone header followed by a chain of blocks. Its methods are
  `alloc_at`, `allocs()` and `header_bytes()`.
- `MemType.create(zone_type, page_size)` builds the parameters of the tiny or small
  class, together with 33 empty free-list trees.
- `Arena` holds the address space, both classes and the header and zone registries.
  Its methods are:
  - `header_at` and `forget_zone`;
  - `mem_type_for_size`, `mem_type_for_flag` and `is_large`;
  - `secure_align_size`.

```python
from zonealloc.memory import Arena

arena = Arena(page_size=4096)
assert arena.secure_align_size(100) == 112
assert arena.secure_align_size(600) == 1024
assert arena.tiny.size == 2097152

address = arena.space.mmap(64)
arena.space.write(address, b"hi")
assert arena.space.read(address, 2) == b"hi"
```

### `zonealloc.treeprint`

- `format_tree(root)` draws a tree sideways with its largest key on top. Red nodes
  are in red and black nodes are in blue.
- `format_node(node)` describes a node, its parent and its children.

## What the package does not do

The package contains the data structures, not the allocator built on them:

- There are no `malloc`, `free`, `calloc` or `realloc` calls.
- Blocks are not split or merged, and no allocator code creates or releases zones.
- Blocks are not filed into the free-list and in-use indexes.
- There is no listing or hex dump of a heap's zones.

## Running the tests

```
pip install -e ".[test]"
pytest
```