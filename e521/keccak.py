"""
Pure-Python Keccak-p[1600, 24] permutation, sponge and SHAKE256.

This module implements the permutation and sponge construction of FIPS 202
using only Python built-ins. Everything built on top of it (cSHAKE256,
KMACXOF256, the E-521 protocols) calls into the functions here.

The goal is clarity over speed. Lengths passed to the one-shot functions are
in bits, as in FIPS 202 and SP 800-185; the streaming objects use byte counts
like hashlib does.
"""
from typing import List


# 64-bit mask (all ones)
_MASK: int = 0xFFFFFFFFFFFFFFFF

# Width of the permutation in bytes (1600 bits, 25 lanes of 8 bytes)
STATE_BYTES: int = 200

# Capacity used by every function of this toolkit; rate = 1600 - 512 bits
CAPACITY: int = 512
RATE_BYTES: int = (1600 - CAPACITY) // 8  # 136

# Domain separation suffix bits for SHAKE (1111) per FIPS 202
SHAKE_SUFFIX: int = 0x1F


# Rotate left on a 64-bit word
# We mask to 64 bits so Python's unbounded ints don't grow beyond 64 bits.
def _rol(x: int, n: int) -> int:
    return ((x << n) | (x >> (64 - n))) & _MASK


# Round constants for Keccak-f[1600]
_RC: List[int] = [0x0000000000000001, 0x0000000000008082, 0x800000000000808A, 0x8000000080008000, 0x000000000000808B,
                  0x0000000080000001, 0x8000000080008081, 0x8000000000008009, 0x000000000000008A, 0x0000000000000088,
                  0x0000000080008009, 0x000000008000000A, 0x000000008000808B, 0x800000000000008B, 0x8000000000008089,
                  0x8000000000008003, 0x8000000000008002, 0x8000000000000080, 0x000000000000800A, 0x800000008000000A,
                  0x8000000080008081, 0x8000000000008080, 0x0000000080000001, 0x8000000080008008]

# Rotation offsets, flattened in lane order (index = x + 5*y)
_RHO: List[int] = [0, 1, 62, 28, 27,
                   36, 44, 6, 55, 20,
                   3, 10, 43, 25, 39,
                   41, 45, 15, 21, 8,
                   18, 2, 61, 56, 14]

# Pi: destination lane i takes the (rotated) lane _PI[i]
_PI: List[int] = [0, 6, 12, 18, 24, 3, 9, 10, 16, 22, 1, 7, 13, 19, 20, 4, 5, 11, 17, 23, 2, 8, 14, 15, 21]


def keccak_p(s: List[int]) -> List[int]:
    """Apply the Keccak-p[1600, 24] permutation to the state in place.

    The state is a flat list of 25 unsigned 64-bit words in "lane order":
    index = x + 5*y for coordinates (x, y) with x,y in 0..4.

    Steps per round in simple terms:
    - Theta: mix each column so every bit depends on neighbors.
    - Rho: rotate each 64-bit lane by a fixed offset.
    - Pi: move every lane to a new position.
    - Chi: apply a small non-linear rule row-wise (uses AND and NOT).
    - Iota: xor a round constant to break symmetry.

    The same list is returned for convenience.
    """
    if len(s) != 25:
        raise ValueError("state must hold 25 lanes, got %d" % len(s))
    for rc in _RC:
        # Theta
        c = [s[x] ^ s[x + 5] ^ s[x + 10] ^ s[x + 15] ^ s[x + 20] for x in range(5)]
        d = [c[(x - 1) % 5] ^ _rol(c[(x + 1) % 5], 1) for x in range(5)]
        # Theta xor, then Rho
        rotated = [_rol(s[i] ^ d[i % 5], _RHO[i]) for i in range(25)]
        # Pi
        b = [rotated[_PI[i]] for i in range(25)]
        # Chi
        for y in range(0, 25, 5):
            for x in range(5):
                s[y + x] = b[y + x] ^ ((~b[y + (x + 1) % 5]) & b[y + (x + 2) % 5] & _MASK)
        # Iota
        s[0] ^= rc
    return s


def _absorb_block(s: List[int], block: bytes) -> None:
    # XOR the block into the first len(block)/8 lanes (little-endian), then permute
    for j in range(len(block) // 8):
        s[j] ^= int.from_bytes(block[8 * j:8 * j + 8], 'little')
    keccak_p(s)


def _lanes_to_bytes(s: List[int], rate: int) -> bytes:
    return b''.join(s[j].to_bytes(8, 'little') for j in range(rate // 8))


def _rate_for(capacity: int) -> int:
    if capacity < 0 or capacity >= 1600 or capacity % 64:
        raise ValueError("capacity must be a multiple of 64 in [0, 1600), got %d" % capacity)
    return STATE_BYTES - capacity // 8


def _byte_length(bit_length: int) -> int:
    if bit_length < 0 or bit_length % 8:
        raise ValueError("output length must be a non-negative multiple of 8 bits, got %d" % bit_length)
    return bit_length // 8


def pad_ten_one(data: bytes, rate: int) -> bytes:
    """Pad data to a multiple of rate bytes with the 10*1 rule.

    Data that already fills whole blocks is returned unchanged. Otherwise
    zero bytes are appended up to the next block boundary and the high bit
    of the final byte is set.
    """
    if len(data) % rate == 0:
        return bytes(data)
    padded = bytearray(data)
    padded += bytes(rate - len(data) % rate)
    padded[-1] |= 0x80
    return bytes(padded)


def append_suffix(data: bytes, suffix: int, rate: int = RATE_BYTES) -> bytes:
    """Append a domain suffix byte ahead of 10*1 padding.

    When the suffix byte lands in the last position of a block it also has
    to carry the closing pad bit, so 0x80 is merged into it (0x1F becomes
    0x9F for SHAKE, 0x04 becomes 0x84 for cSHAKE).
    """
    out = bytearray(data)
    out.append(suffix)
    if len(out) % rate == 0:
        out[-1] |= 0x80
    return bytes(out)


def sponge(data: bytes, bit_length: int, capacity: int = CAPACITY) -> bytes:
    """Run the Keccak sponge over already domain-suffixed data.

    The input is padded with pad_ten_one, absorbed block by block into a
    fresh all-zero state and bit_length bits are squeezed out.
    """
    rate = _rate_for(capacity)
    n = _byte_length(bit_length)
    s = [0] * 25
    padded = pad_ten_one(data, rate)
    for i in range(0, len(padded), rate):
        _absorb_block(s, padded[i:i + rate])
    out = bytearray()
    while len(out) < n:
        out += _lanes_to_bytes(s, rate)
        keccak_p(s)
    return bytes(out[:n])


def shake256(data: bytes, bit_length: int) -> bytes:
    """One-shot SHAKE256: absorb data and return bit_length bits."""
    return sponge(append_suffix(data, SHAKE_SUFFIX), bit_length)


class KeccakSponge:
    """Streaming Keccak sponge with a fixed rate and domain suffix.

    This is the shared machinery behind Shake256, CShake256 and KmacXof256:
      s = Shake256().update(b"hello").update(b" world")
      out = s.digest(64)  # get 64 bytes of output (alias: read)

    Notes:
    - You can call update() many times to absorb more input.
    - Once you call digest()/read(), the instance is finalized; further update() is an error.
    - You may call digest()/read() again to get more output bytes (the XOF can be extended).
    - hexdigest(n) returns a hexadecimal string of length 2*n, matching hashlib's API.
    """

    name = "keccak"

    def __init__(self, suffix: int, rate: int = RATE_BYTES) -> None:
        self._rate: int = rate
        self._suffix: int = suffix
        # 5x5 lanes of 64-bit words, stored as a flat list of 25 ints
        self._s: List[int] = [0] * 25
        # Input bytes that haven't filled a whole rate block yet
        self._buf: bytearray = bytearray()
        self._finalized: bool = False
        # Offset into the current squeeze block (0..rate), for partial reads across calls
        self._sq_off: int = 0
        self._sq_block: bytes = b''

    @property
    def block_size(self) -> int:
        return self._rate

    def update(self, data: bytes) -> "KeccakSponge":
        """Absorb more input bytes into the state.

        Whenever a full rate-sized block is available it is XORed into the
        state and the permutation is applied. Returns self for chaining.
        """
        if self._finalized:
            raise ValueError("already finalized")
        if not data:
            return self
        self._buf += data
        r = self._rate
        i = 0
        while len(self._buf) - i >= r:
            _absorb_block(self._s, self._buf[i:i + r])
            i += r
        if i:
            self._buf = self._buf[i:]
        return self

    def _finalize_input(self) -> None:
        """Hook for subclasses that append a trailer before padding."""

    def _pad(self) -> None:
        # Suffix right after the data, closing pad bit in the last byte of the block
        self._finalize_input()
        r = self._rate
        b = bytearray(r)
        b[:len(self._buf)] = self._buf
        b[len(self._buf)] ^= self._suffix
        b[r - 1] ^= 0x80
        _absorb_block(self._s, bytes(b))
        self._buf.clear()
        self._finalized = True
        self._sq_off = 0

    def read(self, n: int) -> bytes:
        """Squeeze n output bytes.

        After the first call the instance is finalized (no more update()).
        The permutation runs between blocks when more than one is needed.
        """
        if n < 0:
            raise ValueError("cannot read a negative number of bytes")
        if not self._finalized:
            self._pad()
        out = bytearray()
        r = self._rate
        while n > 0:
            if self._sq_off == 0:
                self._sq_block = _lanes_to_bytes(self._s, r)
            take = min(n, r - self._sq_off)
            out += self._sq_block[self._sq_off:self._sq_off + take]
            self._sq_off += take
            n -= take
            if self._sq_off == r:
                keccak_p(self._s)
                self._sq_off = 0
        return bytes(out)

    # hashlib-compatible API
    def digest(self, length: int) -> bytes:
        """Return the next 'length' bytes of output.

        Subsequent calls continue the stream rather than repeating it.
        """
        return self.read(length)

    def hexdigest(self, length: int) -> str:
        return self.digest(length).hex()

    def copy(self) -> "KeccakSponge":
        """Return an independent clone of the current state."""
        other = self.__class__.__new__(self.__class__)
        other.__dict__.update(self.__dict__)
        other._s = list(self._s)
        other._buf = bytearray(self._buf)
        return other


class Shake256(KeccakSponge):
    """Streaming SHAKE256 XOF (extendable-output function)."""

    name = "shake_256"

    def __init__(self, data: bytes = b'') -> None:
        super().__init__(SHAKE_SUFFIX)
        if data:
            self.update(data)
