"""Codificación y decodificación de texto con un árbol de Huffman.

    - encode(text, code)        -> BitSequence
    - decode(bits, root, length) -> str
    - HuffmanCoder: frecuencias + árbol + tabla de una misma sesión
"""

from typing import Dict, Iterable, Optional

from .bits_utils import BitSequence, to_bit
from .errors import EmptyInput, InvalidBit, TruncatedInput, UnknownSymbol
from .huffman import HuffNode, build_code_table, build_tree, count_frequencies


def encode(text: Iterable, code: Dict[str, str]) -> BitSequence:
    """
    Concatena el código de cada símbolo de 'text'.
    Lanza UnknownSymbol si algún símbolo no está en la tabla.
    """
    out_bits = BitSequence()
    for s in text:
        try:
            bits = code[s]
        except KeyError:
            raise UnknownSymbol(s) from None
        out_bits.extend(bits)
    return out_bits


def decode(bits: Iterable, root: HuffNode, length: Optional[int] = None) -> str:
    """
    Recorre el árbol bit a bit desde la raíz: 0 baja a la izquierda, 1 a la
    derecha; al llegar a una hoja emite su símbolo y vuelve a la raíz.

    Si se indica 'length' se detiene tras emitir ese número de símbolos e
    ignora los bits sobrantes (relleno de bytes).

    Lanza TruncatedInput si el flujo acaba a mitad de un código e InvalidBit
    si aparece un bit que no es 0/1.
    """
    if length is not None and length < 0:
        raise ValueError(f"length debe ser >= 0: {length}")

    out = []
    if length == 0:
        return ""

    # Árbol de una sola hoja: cada bit '0' es una repetición del símbolo
    if root.is_leaf:
        for i, bit in enumerate(bits):
            if to_bit(bit) != 0:
                raise InvalidBit(f"bit {bit!r} en la posición {i}: el árbol solo tiene la rama '0'")
            out.append(root.sym)
            if length is not None and len(out) == length:
                break
    else:
        node = root
        for bit in bits:
            node = node.right if to_bit(bit) else node.left
            if node.is_leaf:
                out.append(node.sym)
                node = root
                if length is not None and len(out) == length:
                    break
        if node is not root:
            raise TruncatedInput(f"el flujo de bits termina a mitad de un código tras {len(out)} símbolos")

    if length is not None and len(out) < length:
        raise TruncatedInput(f"se esperaban {length} símbolos y solo se decodificaron {len(out)}")
    return "".join(out)


class HuffmanCoder:
    """
    Sesión de codificación: frecuencias, árbol y tabla de códigos construidos
    una sola vez y de solo lectura a partir de ahí.
    """

    def __init__(self, counts: Dict):
        self.counts = dict(counts)
        self.root = build_tree(self.counts)
        self.code = build_code_table(self.root)

    @classmethod
    def from_text(cls, text: str) -> "HuffmanCoder":
        if not text:
            raise EmptyInput()
        return cls(count_frequencies(text))

    @classmethod
    def from_frequencies(cls, counts: Dict) -> "HuffmanCoder":
        return cls(counts)

    def encode(self, text: str) -> BitSequence:
        return encode(text, self.code)

    def decode(self, bits: Iterable, length: Optional[int] = None) -> str:
        return decode(bits, self.root, length=length)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def weighted_length(self) -> int:
        """Suma de frecuencia * longitud de código: bits de la salida codificada."""
        return sum(self.counts[s] * len(self.code[s]) for s in self.counts)

    def average_length(self) -> float:
        """Longitud media de código (bits/símbolo)."""
        return self.weighted_length() / self.total
