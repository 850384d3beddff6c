"""Header flag bits, size classes and size alignment."""

SIZE_MAX = (1 << 64) - 1

# Position of an allocation inside its zone.
HDR_POS = 3
HDR_POS_FIRST = 1
HDR_POS_LAST = 2

# Availability of an allocation.
HDR_AVAILABLE = 4
HDR_UNAVAILABLE = 0

# Size class of an allocation.
HDR_TYPE = 56
HDR_TYPE_TINY = 8
HDR_TYPE_SMALL = 16
HDR_TYPE_LARGE = 32

ZONE_TINY = HDR_TYPE_TINY
ZONE_SMALL = HDR_TYPE_SMALL
ZONE_LARGE = HDR_TYPE_LARGE

# Size class parameters.
TINY_SIZE_MAX_FACTOR = 32
SMALL_SIZE_MAX_FACTOR = 32
RES_TINY = 16
RES_TINY_SHIFT = 4
RES_SMALL = 512
RES_SMALL_SHIFT = 9
RES_LARGE = 4096
RES_LARGE_SHIFT = 12
SIZE_TINY = 2097152
SIZE_SMALL = 16777216

# Bin table sizes.
AVAILABLE_TABLE_SIZE = 33
UNAVAILABLE_TABLE_SIZE = 13

# Hex dump layout.
PRINT_LINE_SIZE = 192
MASK_CHAR = 15
PRINT_HEADER_ALLOC = True
PRINT_HEADER_ZONE = True

_BYTE_MASK = 0xFF

_RESOLUTIONS = (
    (HDR_TYPE_TINY, RES_TINY_SHIFT, RES_TINY),
    (HDR_TYPE_SMALL, RES_SMALL_SHIFT, RES_SMALL),
    (HDR_TYPE_LARGE, RES_LARGE_SHIFT, RES_LARGE),
)


def _flag_set(flag, category, option):
    return ((~category & flag) | (option & category)) & _BYTE_MASK


def flag_set_pos(flag, option):
    """Replace the position bits of ``flag`` with those of ``option``."""
    return _flag_set(flag, HDR_POS, option)


def flag_set_type(flag, option):
    """Replace the size-class bits of ``flag`` with those of ``option``."""
    return _flag_set(flag, HDR_TYPE, option)


def flag_set_availability(flag, option):
    """Replace the availability bit of ``flag`` with that of ``option``."""
    return _flag_set(flag, HDR_AVAILABLE, option)


def align_size(type_flag, size):
    """Round ``size`` up to the resolution of the size classes in ``type_flag``.

    Arithmetic wraps at 64 bits, so a size of zero aligns to zero.
    """
    size = (size - 1) & SIZE_MAX
    for flag, shift, resolution in _RESOLUTIONS:
        if type_flag & flag:
            size = (((size >> shift) << shift) + resolution) & SIZE_MAX
    return size