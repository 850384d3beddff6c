"""Simulated address space, allocation and zone headers, and the arena state."""

import mmap as _mmap
import struct
from dataclasses import dataclass, field

from .flags import (
    AVAILABLE_TABLE_SIZE,
    HDR_POS_FIRST,
    HDR_POS_LAST,
    HDR_TYPE_LARGE,
    HDR_TYPE_SMALL,
    HDR_TYPE_TINY,
    RES_SMALL,
    RES_TINY,
    SIZE_SMALL,
    SIZE_TINY,
    SMALL_SIZE_MAX_FACTOR,
    TINY_SIZE_MAX_FACTOR,
    UNAVAILABLE_TABLE_SIZE,
    ZONE_SMALL,
    ZONE_TINY,
    align_size,
)
from .rbnode import Node
from .rbtree import RBTree

ALLOC_HEADER_SIZE = 48
ZONE_HEADER_SIZE = 32
ZONE_SIZE = ZONE_HEADER_SIZE + ALLOC_HEADER_SIZE

_U16 = 0xFFFF
_U8 = 0xFF
_ALLOC_LAYOUT = struct.Struct("<QQQQI4xHHB3x")
_ZONE_LAYOUT = struct.Struct("<QQQQ")


def _address_of(item):
    return item if isinstance(item, int) else item.address


def _compare_addresses(first, second):
    return _address_of(first) - _address_of(second)


class AddressSpace:
    """Page-granular anonymous mappings backed by byte arrays."""

    def __init__(self, base=0x100000000, page_size=4096, limit=None):
        self.page_size = page_size
        self.limit = limit
        self._next = base
        self._maps = {}

    @property
    def mapped(self):
        return sum(len(buf) for buf in self._maps.values())

    def mmap(self, size):
        """Map ``size`` zeroed bytes and return the start address."""
        if size <= 0:
            raise ValueError("mapping size must be positive")
        if self.limit is not None and self.mapped + size > self.limit:
            raise MemoryError(f"cannot map {size} bytes")
        address = self._next
        pages = -(-size // self.page_size) + 1
        self._next += pages * self.page_size
        self._maps[address] = bytearray(size)
        return address

    def munmap(self, address, size):
        buf = self._maps.get(address)
        if buf is None or size != len(buf):
            raise OSError(f"no mapping of {size} bytes at {address:#x}")
        del self._maps[address]

    def _locate(self, address, n):
        for start, buf in self._maps.items():
            if start <= address and address + n <= start + len(buf):
                return buf, address - start
        raise ValueError(f"{n} bytes at {address:#x} are not mapped")

    def read(self, address, n):
        buf, offset = self._locate(address, n)
        return bytes(buf[offset:offset + n])

    def write(self, address, data):
        data = bytes(data)
        buf, offset = self._locate(address, len(data))
        buf[offset:offset + len(data)] = data

    def fill(self, address, n, value):
        buf, offset = self._locate(address, n)
        buf[offset:offset + n] = bytes([value & _U8]) * n


class AllocHeader(Node):
    """Header placed in front of every allocation; also its tree node."""

    __slots__ = ("arena", "address", "_size", "_size_prev", "_flags")

    def __init__(self, arena, address):
        super().__init__()
        self.arena = arena
        self.address = address
        self._size = 0
        self._size_prev = 0
        self._flags = 0

    def __repr__(self):
        return (f"AllocHeader(address={self.address:#x}, size={self.size}, "
                f"flags={self.flags:#x})")

    size = property(lambda self: self._size,
                    lambda self, v: setattr(self, "_size", v & _U16))
    size_prev = property(lambda self: self._size_prev,
                         lambda self, v: setattr(self, "_size_prev", v & _U16))
    flags = property(lambda self: self._flags,
                     lambda self, v: setattr(self, "_flags", v & _U8))

    @property
    def data_address(self):
        return self.address + ALLOC_HEADER_SIZE

    def init(self, size, size_prev, flags):
        self.size = size
        self.size_prev = size_prev
        self.flags = flags
        self.update_size_next()

    def update_size_next(self):
        following = self.next()
        if following is not None:
            following.size_prev = self.size

    def next(self):
        if self.flags & HDR_POS_LAST:
            return None
        return self.arena.header_at(self.address + self.size + ALLOC_HEADER_SIZE)

    def prev(self):
        if self.flags & HDR_POS_FIRST:
            return None
        return self.arena.header_at(
            self.address - self.size_prev - ALLOC_HEADER_SIZE)

    def zone(self):
        alloc = self
        while (before := alloc.prev()) is not None:
            alloc = before
        try:
            return self.arena.zones[alloc.address - ZONE_HEADER_SIZE]
        except KeyError:
            raise LookupError(f"no zone holds {self.address:#x}") from None

    def to_bytes(self):
        def addr(node):
            return 0 if node is None else _address_of(node)
        return _ALLOC_LAYOUT.pack(addr(self.parent), addr(self.left),
                                  addr(self.right), addr(self.content),
                                  int(self.color), self.size, self.size_prev,
                                  self.flags)


class Zone:
    """A mapped zone: a header followed by a chain of allocations."""

    def __init__(self, arena, address, size, next_zone=None):
        self.arena = arena
        self.address = address
        self.size = size
        self.next_zone = next_zone
        self.prev_zone = None
        if next_zone is not None:
            next_zone.prev_zone = self
        arena.zones[address] = self

    def __repr__(self):
        return f"Zone(address={self.address:#x}, size={self.size})"

    @property
    def first_alloc(self):
        return self.arena.header_at(self.address + ZONE_HEADER_SIZE)

    def alloc_at(self, index):
        alloc = self.first_alloc
        for _ in range(index):
            if alloc is None:
                break
            alloc = alloc.next()
        return alloc

    def allocs(self):
        alloc = self.first_alloc
        while alloc is not None:
            yield alloc
            alloc = alloc.next()

    def header_bytes(self):
        def addr(zone):
            return 0 if zone is None else zone.address
        return _ZONE_LAYOUT.pack(addr(self.next_zone), addr(self.prev_zone),
                                 self.size, 0)


@dataclass
class MemType:
    """Parameters, zone chain and free bins of one size class."""

    type: int
    alloc_resolution_size: int
    factor_size_max: int
    alloc_size_min: int
    alloc_size_max: int
    size: int
    zone: Zone = None
    available: list = field(default_factory=lambda: [
        RBTree(_compare_addresses) for _ in range(AVAILABLE_TABLE_SIZE)])

    @classmethod
    def create(cls, zone_type, page_size=4096):
        page_size = page_size or 4096
        if zone_type == ZONE_TINY:
            return cls(HDR_TYPE_TINY, RES_TINY, TINY_SIZE_MAX_FACTOR, RES_TINY,
                       RES_TINY * TINY_SIZE_MAX_FACTOR,
                       (SIZE_TINY - 1) + page_size - (SIZE_TINY - 1) % page_size)
        if zone_type == ZONE_SMALL:
            return cls(HDR_TYPE_SMALL, RES_SMALL, SMALL_SIZE_MAX_FACTOR,
                       RES_TINY * TINY_SIZE_MAX_FACTOR + 1,
                       RES_SMALL * SMALL_SIZE_MAX_FACTOR,
                       (SIZE_SMALL - 1) + page_size - (SIZE_SMALL - 1) % page_size)
        raise ValueError(f"unknown zone type {zone_type}")


class Arena:
    """All allocator state: address space, size classes, zones and bins."""

    def __init__(self, page_size=None):
        self.page_size = page_size if page_size is not None else _mmap.PAGESIZE
        self.space = AddressSpace(page_size=self.page_size or 4096)
        self.tiny = MemType.create(ZONE_TINY, self.page_size)
        self.small = MemType.create(ZONE_SMALL, self.page_size)
        self.large = None
        self.unavailable = [RBTree(_compare_addresses)
                            for _ in range(UNAVAILABLE_TABLE_SIZE)]
        self.headers = {}
        self.zones = {}

    def header_at(self, address):
        """Return the header at ``address``, creating a blank one if needed."""
        header = self.headers.get(address)
        if header is None:
            header = self.headers[address] = AllocHeader(self, address)
        return header

    def forget_zone(self, zone):
        """Drop the bookkeeping for a zone that has been unmapped."""
        self.zones.pop(zone.address, None)
        end = zone.address + zone.size
        for address in [a for a in self.headers if zone.address <= a < end]:
            del self.headers[address]

    def mem_type_for_size(self, size):
        if size <= self.tiny.alloc_size_max:
            return self.tiny
        if size <= self.small.alloc_size_max:
            return self.small
        return None

    def mem_type_for_flag(self, type_flag):
        if type_flag == HDR_TYPE_TINY:
            return self.tiny
        if type_flag == HDR_TYPE_SMALL:
            return self.small
        return None

    def is_large(self, size):
        return size > self.small.alloc_size_max

    def secure_align_size(self, size):
        size = max(size, RES_TINY)
        aligned = align_size(HDR_TYPE_TINY, size)
        if aligned <= self.tiny.alloc_size_max:
            return aligned
        aligned = align_size(HDR_TYPE_SMALL, size)
        if aligned <= self.small.alloc_size_max:
            return aligned
        return align_size(HDR_TYPE_LARGE, size)