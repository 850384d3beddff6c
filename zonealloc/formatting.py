"""Number formatting for memory dumps and the address hash."""

_DIGITS = "0123456789ABCDEF"
_WORD_MASK = (1 << 64) - 1
_NIBBLES_PER_WORD = 16
_MASK_CHAR = 15


def _digits(n, base):
    if n < 0:
        raise ValueError("value must not be negative")
    out = []
    while n:
        n, rem = divmod(n, base)
        out.append(_DIGITS[rem])
    return "".join(reversed(out))


def format_dec(n):
    """Decimal digits of ``n``; zero gives an empty string."""
    return _digits(n, 10)


def format_hex(n):
    """Upper-case hex of ``n`` prefixed with ``0x``; zero gives ``0x``."""
    return "0x" + _digits(n, 16)


def format_hex_octet(n):
    """Two-digit upper-case hex of a byte followed by a space."""
    if n == 0:
        return "00 "
    text = _digits(n, 16)
    if n < 16:
        text = "0" + text
    return text + " "


def format_hex_zeroes(n):
    """One ``0`` per leading zero nibble among the four checked positions."""
    zeroes = []
    for shift in range(_NIBBLES_PER_WORD - 4, -1, -4):
        if n & (_MASK_CHAR << shift):
            break
        zeroes.append("0")
    return "".join(zeroes)


def hash_djb2(data):
    """djb2 hash over the first eight bytes of ``data``, wrapping at 64 bits."""
    raw = bytes(data)
    if len(raw) < 8:
        raise ValueError("hash_djb2 needs at least 8 bytes")
    value = 5381
    for byte in raw[:8]:
        value = ((value << 5) + value + byte) & _WORD_MASK
    return value