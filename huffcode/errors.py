"""Errores del codificador Huffman.

Todos heredan de ``HuffmanError`` (a su vez ``ValueError``) para que el
llamador pueda capturarlos juntos.
"""


class HuffmanError(ValueError):
    pass


class EmptyInput(HuffmanError):
    """No hay símbolos con los que construir el árbol."""

    def __init__(self, msg: str = "la entrada está vacía: no se puede construir el árbol"):
        super().__init__(msg)


class UnknownSymbol(HuffmanError):
    """El símbolo no tiene entrada en la tabla de códigos."""

    def __init__(self, symbol):
        self.symbol = symbol
        super().__init__(f"símbolo sin código en la tabla: {symbol!r}")


class TruncatedInput(HuffmanError):
    """El flujo de bits termina a mitad de un código."""


class InvalidBit(HuffmanError):
    """Bit que no es 0/1 o que no corresponde a ninguna rama del árbol."""
