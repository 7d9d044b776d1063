"""
Arithmetic on the Edwards curve E-521.

    x^2 + y^2 = 1 + d*x^2*y^2  (mod p),  p = 2^521 - 1,  d = -376014

Points are immutable. Every operation returns a new E521 instance. Integers
are Python ints, so nothing wraps around at 521 bits; every intermediate is
reduced mod p explicitly.

Scalar multiplication is plain double-and-add and is not constant time.
"""
import logging
from typing import Optional

from e521.exceptions import PointDecodingError, PointNotFoundError

logger = logging.getLogger(__name__)

# Field modulus, a Mersenne prime with p = 3 (mod 4)
P: int = (1 << 521) - 1

# Edwards coefficient d
D: int = -376014

# Order of the prime subgroup generated by G
R: int = (1 << 519) - 337554763258501705789107630418782636071904961214051226618635150085779108655765

# Cofactor: #E = 4 * R
COFACTOR: int = 4

# Bytes per encoded coordinate: ceil((521 + 1) / 8)
COORDINATE_BYTES: int = 66
POINT_BYTES: int = 2 * COORDINATE_BYTES


def sqrt_mod(v: int, p: int = P, lsb: bool = False) -> Optional[int]:
    """Square root of v mod p whose least significant bit equals lsb.

    Only valid for p = 3 (mod 4). Returns None when v is not a quadratic
    residue.
    """
    assert p & 3 == 3
    v %= p
    if v == 0:
        return 0
    r = pow(v, (p >> 2) + 1, p)
    if (r & 1) != int(lsb):
        r = p - r
    return r if (r * r - v) % p == 0 else None


def coordinate_bytes(value: int) -> bytes:
    """Fixed 66-byte unsigned big-endian encoding of a coordinate or scalar."""
    return value.to_bytes(COORDINATE_BYTES, 'big')


class E521:
    """A point (x, y) on E-521.

      G = E521.from_x(4, lsb=False)
      V = s * G
      W = V + G
    """

    __slots__ = ('_x', '_y')

    def __init__(self, x: int, y: int) -> None:
        object.__setattr__(self, '_x', int(x))
        object.__setattr__(self, '_y', int(y))

    def __setattr__(self, name, value):
        raise AttributeError("E521 points are immutable")

    # --- constructors ---

    @classmethod
    def identity(cls) -> "E521":
        """The neutral element (0, 1)."""
        return cls(0, 1)

    @classmethod
    def from_x(cls, x: int, lsb: bool) -> "E521":
        """Recover the point with the given x whose y has parity lsb.

        y = sqrt((1 - x^2) / (1 - d*x^2)) mod p

        Raises PointNotFoundError when there is no such y.
        """
        x %= P
        xx = x * x % P
        rad = (1 - xx) * pow((1 - D * xx) % P, -1, P) % P
        y = sqrt_mod(rad, P, lsb)
        if y is None:
            raise PointNotFoundError("no point on E-521 with x = %d" % x)
        return cls(x, y)

    @classmethod
    def from_bytes(cls, data: bytes) -> "E521":
        """Decode the 132-byte x || y encoding produced by to_bytes()."""
        if len(data) != POINT_BYTES:
            logger.debug("rejecting point encoding of %d bytes", len(data))
            raise PointDecodingError("point encoding must be %d bytes, got %d" % (POINT_BYTES, len(data)))
        x = int.from_bytes(data[:COORDINATE_BYTES], 'big')
        y = int.from_bytes(data[COORDINATE_BYTES:], 'big')
        if x >= P or y >= P:
            raise PointDecodingError("point coordinate out of range")
        point = cls(x, y)
        if not point.is_on_curve():
            logger.debug("rejecting encoding of a point off the curve")
            raise PointDecodingError("encoded point is not on E-521")
        return point

    # --- accessors ---

    @property
    def x(self) -> int:
        return self._x

    @property
    def y(self) -> int:
        return self._y

    def to_bytes(self) -> bytes:
        return coordinate_bytes(self._x % P) + coordinate_bytes(self._y % P)

    def x_bytes(self) -> bytes:
        """Encoding of the x coordinate alone, used as KMAC key material."""
        return coordinate_bytes(self._x % P)

    def is_on_curve(self) -> bool:
        xx = self._x * self._x % P
        yy = self._y * self._y % P
        return (xx + yy) % P == (1 + D * xx * yy) % P

    def is_identity(self) -> bool:
        return self._x % P == 0 and self._y % P == 1

    # --- arithmetic ---

    def add(self, other: "E521") -> "E521":
        """Edwards addition law.

        (x1, y1) + (x2, y2) = ((x1*y2 + y1*x2) / (1 + d*x1*x2*y1*y2),
                               (y1*y2 - x1*x2) / (1 - d*x1*x2*y1*y2))

        d is not a square mod p, so the law is complete: there are no
        exceptional pairs and the same formula doubles.
        """
        x1, y1 = self._x, self._y
        x2, y2 = other._x, other._y
        t = D * x1 * x2 * y1 * y2 % P
        x_num = (x1 * y2 + y1 * x2) % P
        y_num = (y1 * y2 - x1 * x2) % P
        x3 = x_num * pow((1 + t) % P, -1, P) % P
        y3 = y_num * pow((1 - t) % P, -1, P) % P
        return E521(x3, y3)

    def negate(self) -> "E521":
        """-(x, y) = (-x, y)."""
        return E521((-self._x) % P, self._y)

    def multiply(self, k: int) -> "E521":
        """k * self by left-to-right double-and-add.

        The accumulator starts at self, which accounts for the top bit of k,
        and the remaining bits are scanned from the second most significant
        one downwards.
        """
        if k < 0:
            return self.negate().multiply(-k)
        if k == 0:
            return E521.identity()
        v = self
        for i in range(k.bit_length() - 2, -1, -1):
            v = v.add(v)
            if (k >> i) & 1:
                v = v.add(self)
        return v

    def __add__(self, other: "E521") -> "E521":
        if not isinstance(other, E521):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: "E521") -> "E521":
        if not isinstance(other, E521):
            return NotImplemented
        return self.add(other.negate())

    def __neg__(self) -> "E521":
        return self.negate()

    def __mul__(self, k: int) -> "E521":
        if not isinstance(k, int):
            return NotImplemented
        return self.multiply(k)

    __rmul__ = __mul__

    # --- comparison ---

    def __eq__(self, other) -> bool:
        if not isinstance(other, E521):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __hash__(self) -> int:
        return hash((self._x, self._y))

    def __repr__(self) -> str:
        return "E521(x=%d, y=%d)" % (self._x, self._y)


# Generator of the order-R subgroup: x = 4, even y
G: E521 = E521.from_x(4, False)
