import numpy as np
import math
from typing import Iterable, List, Tuple

from .errors import InvalidBit


def to_bit(bit) -> int:
    """Convierte 0/1, True/False o '0'/'1' a entero; cualquier otro valor es InvalidBit."""
    if isinstance(bit, str):
        if bit in ("0", "1"):
            return int(bit)
    elif isinstance(bit, (int, np.integer)) and bit in (0, 1):
        return int(bit)
    raise InvalidBit(f"bit inválido: {bit!r}")


class BitSequence:
    """Secuencia ordenada de bits (enteros 0/1)."""

    def __init__(self, bits: Iterable[int] = ()):
        self._bits: List[int] = []
        self.extend(bits)

    def append(self, bit) -> None:
        self._bits.append(to_bit(bit))

    def extend(self, bits: Iterable) -> None:
        # Acepta enteros, booleanos o cadenas '0'/'1'
        for b in bits:
            self.append(b)

    def __iter__(self):
        return iter(self._bits)

    def __len__(self):
        return len(self._bits)

    def __getitem__(self, i):
        if isinstance(i, slice):
            return BitSequence(self._bits[i])
        return self._bits[i]

    def __eq__(self, other):
        if isinstance(other, BitSequence):
            return self._bits == other._bits
        if isinstance(other, (list, tuple)):
            try:
                return self._bits == [to_bit(b) for b in other]
            except InvalidBit:
                return False
        return NotImplemented

    def __repr__(self):
        s = self.to_str()
        if len(s) > 64:
            s = s[:64] + "..."
        return f"BitSequence('{s}', n={len(self)})"

    def to_list(self) -> List[int]:
        return list(self._bits)

    def to_str(self) -> str:
        return "".join(str(b) for b in self._bits)

    def to_bytes(self) -> bytes:
        return bits_to_bytes(self._bits)

    @classmethod
    def from_str(cls, s: str) -> "BitSequence":
        return cls(s)

    @classmethod
    def from_bytes(cls, data: bytes, n_bits: int = None) -> "BitSequence":
        return cls(bytes_to_bits(data, n_bits))


def bits_to_bytes(bits) -> bytes:
    """
    Empaqueta bits en bytes, MSB primero.
    Si la longitud no es múltiplo de 8 se completa con ceros al final.
    """
    arr = np.fromiter((int(b) for b in bits), dtype=np.uint8)
    return np.packbits(arr, bitorder='big').tobytes()


def bytes_to_bits(data: bytes, n_bits: int = None) -> List[int]:
    """
    Desempaqueta bytes a bits (MSB primero).
    n_bits recorta el relleno final; no puede superar 8*len(data).
    """
    arr = np.unpackbits(np.frombuffer(bytes(data), dtype=np.uint8), bitorder='big')
    if n_bits is not None:
        if n_bits < 0 or n_bits > len(arr):
            raise ValueError(f"n_bits fuera de rango: {n_bits} (disponibles {len(arr)})")
        arr = arr[:n_bits]
    return arr.astype(int).tolist()


def bits_entropy_stats(bits) -> Tuple[float, float, float, float]:
    """
    Calcula métricas del flujo de bits:
    - p0: probabilidad de 0
    - p1: probabilidad de 1
    - H: entropía (bits/bit)
    - var: varianza sobre {0,1}
    """
    arr = np.array(list(bits), dtype=np.uint8)
    if arr.size == 0:
        return 0.0, 0.0, 0.0, 0.0
    p1 = float(arr.mean())
    p0 = 1 - p1

    def hb(p):
        if p <= 0 or p >= 1:
            return 0.0
        return -p * math.log2(p) - (1 - p) * math.log2(1 - p)

    H = hb(p1)
    var = float(arr.var())
    return p0, p1, H, var
