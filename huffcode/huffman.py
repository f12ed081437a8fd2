from collections import Counter
from heapq import heapify, heappush, heappop
from typing import Dict, Iterable, Iterator

from .errors import EmptyInput


class HuffNode:
    def __init__(self, freq, sym=None, left=None, right=None, order=0):
        self.freq = freq
        self.sym = sym
        self.left = left
        self.right = right
        # Orden de creación: desempata frecuencias iguales en el heap
        self.order = order

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __lt__(self, other):
        # Necesario para que heapq pueda comparar nodos
        return (self.freq, self.order) < (other.freq, other.order)

    def __repr__(self):
        if self.is_leaf:
            return f"HuffNode(freq={self.freq}, sym={self.sym!r})"
        return f"HuffNode(freq={self.freq}, left={self.left!r}, right={self.right!r})"


def count_frequencies(symbols: Iterable) -> Dict:
    """
    Cuenta las apariciones de cada símbolo.
    Devuelve un Counter {simbolo: frecuencia}; el orden de iteración es el de
    primera aparición en la entrada.
    """
    return Counter(symbols)


def build_tree(counts: Dict) -> HuffNode:
    """
    Construye el árbol de Huffman a partir de {simbolo: frecuencia}.

    En cada paso se extraen los dos árboles de menor frecuencia y se unen en
    un nodo interno: el de mayor frecuencia va a la izquierda y el menor a la
    derecha. Con frecuencias iguales va a la izquierda el extraído primero
    (el de menor orden de creación).

    Lanza EmptyInput si no hay símbolos.
    """
    if not counts:
        raise EmptyInput()

    heap = []
    for order, (s, f) in enumerate(counts.items()):
        if isinstance(f, bool) or not isinstance(f, int) or f <= 0:
            raise ValueError(f"frecuencia inválida para {s!r}: {f}")
        heap.append(HuffNode(f, sym=s, order=order))
    heapify(heap)

    # Caso degenerado: solo hay un símbolo, el árbol es una hoja
    next_order = len(heap)
    while len(heap) > 1:
        first = heappop(heap)
        second = heappop(heap)
        if first.freq >= second.freq:
            big, small = first, second
        else:
            big, small = second, first
        heappush(heap, HuffNode(first.freq + second.freq, left=big, right=small, order=next_order))
        next_order += 1

    return heap[0]


def build_code_table(root: HuffNode) -> Dict[str, str]:
    """
    Recorre el árbol en profundidad y asigna a cada hoja su camino
    ('0' a la izquierda, '1' a la derecha).
    Si la raíz es una hoja su símbolo recibe el código '0'.
    """
    if root.is_leaf:
        return {root.sym: '0'}

    code = {}

    def walk(n, prefix):
        if n.is_leaf:
            code[n.sym] = prefix
            return
        walk(n.left, prefix + '0')
        walk(n.right, prefix + '1')

    walk(root, '')
    return code


def iter_leaves(root: HuffNode) -> Iterator[HuffNode]:
    """Hojas del árbol de izquierda a derecha."""
    stack = [root]
    while stack:
        n = stack.pop()
        if n.is_leaf:
            yield n
        else:
            stack.append(n.right)
            stack.append(n.left)


def tree_depth(root: HuffNode) -> int:
    if root.is_leaf:
        return 0
    return 1 + max(tree_depth(root.left), tree_depth(root.right))

