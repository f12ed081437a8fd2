"""Compresión de texto con código de Huffman."""

from .bits_utils import BitSequence
from .codec import HuffmanCoder, decode, encode
from .errors import EmptyInput, HuffmanError, InvalidBit, TruncatedInput, UnknownSymbol
from .huffman import HuffNode, build_code_table, build_tree, count_frequencies
