import logging
from heapq import heappush, heappop
from itertools import count

from bitarray import bitarray

from .bitio import END
from .exceptions import CorruptHeaderError

logger = logging.getLogger(__name__)

BITS_PER_WORD = 8
BITS_PER_INT = 32
ALPH_SIZE = 1 << BITS_PER_WORD
PSEUDO_EOF = ALPH_SIZE
HUFF_NUMBER = 0xFACE8200
HUFF_TREE = HUFF_NUMBER | 1

# a tree over ALPH_SIZE + 1 leaves is at most ALPH_SIZE levels deep
MAX_DEPTH = ALPH_SIZE

DEBUG_LOW = 1
DEBUG_HIGH = 4


class HuffNode:
    def __init__(self, value=0, weight=0, left=None, right=None):
        self.value = value
        self.weight = weight
        self.left = left
        self.right = right

    @property
    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def __repr__(self):
        if self.is_leaf:
            return f"HuffNode(value={self.value}, weight={self.weight})"
        return f"HuffNode(weight={self.weight}, left={self.left!r}, right={self.right!r})"


def read_for_counts(in_stream) -> list:
    """
    Counts how often each byte value occurs in the input.

    Parameters:
    in_stream (BitInputStream): Stream positioned at the data to count. It is
        read to the end and must be reset before it is read again.

    Returns:
    list: ALPH_SIZE + 1 counts indexed by symbol, with PSEUDO_EOF set to 1.
    """
    counts = [0] * (ALPH_SIZE + 1)
    while True:
        byte = in_stream.read_bits(BITS_PER_WORD)
        if byte == END:
            break
        counts[byte] += 1
    counts[PSEUDO_EOF] = 1
    return counts


def make_tree_from_counts(counts, debug: int = 0) -> HuffNode:
    """
    Builds a Huffman tree by repeatedly merging the two lightest nodes.

    Nodes of equal weight leave the heap in the order they entered it: leaves
    in ascending symbol order, then merged nodes in the order they were made.

    Parameters:
    counts (list): Occurrence count per symbol; zero counts get no leaf.
    debug (int): Logs every leaf at DEBUG_HIGH and above.

    Returns:
    HuffNode: The root. A single leaf when only one symbol has a count.
    """
    sequence = count()
    heap = []
    for symbol, weight in enumerate(counts):
        if weight > 0:
            heappush(heap, (weight, next(sequence), HuffNode(symbol, weight)))
            if debug >= DEBUG_HIGH:
                logger.info("symbol %d count %d", symbol, weight)

    if not heap:
        raise ValueError("Cannot build a tree without any counted symbol")

    while len(heap) > 1:
        _, _, left = heappop(heap)
        _, _, right = heappop(heap)
        merged = HuffNode(0, left.weight + right.weight, left, right)
        heappush(heap, (merged.weight, next(sequence), merged))

    return heap[0][2]


def make_codings_from_tree(root: HuffNode, debug: int = 0) -> dict:
    """
    Maps each leaf symbol to its path from the root, 0 for left and 1 for right.

    A root that is itself a leaf has an empty path, so it is given the code 0.
    """
    codings = {}
    if root.is_leaf:
        codings[root.value] = bitarray("0")
    else:
        _coding_helper(root, bitarray(), codings)

    if debug >= DEBUG_HIGH:
        for symbol in sorted(codings):
            logger.info("symbol %d code %s", symbol, codings[symbol].to01())
    return codings


def _coding_helper(node, path, codings):
    if node.is_leaf:
        codings[node.value] = path
        return
    _coding_helper(node.left, path + bitarray("0"), codings)
    _coding_helper(node.right, path + bitarray("1"), codings)


def write_header(root: HuffNode, out) -> None:
    """
    Writes the tree in preorder: a 1 bit and the 9-bit symbol for a leaf,
    a 0 bit followed by both subtrees for an internal node.
    """
    if root.is_leaf:
        out.write_bits(1, 1)
        out.write_bits(BITS_PER_WORD + 1, root.value)
        return
    out.write_bits(1, 0)
    write_header(root.left, out)
    write_header(root.right, out)


def read_tree_header(in_stream, debug: int = 0) -> HuffNode:
    """
    Rebuilds a tree written by write_header.

    Parameters:
    in_stream (BitInputStream): Stream positioned at the first header bit.
    debug (int): Logs every leaf read at DEBUG_HIGH and above.

    Returns:
    HuffNode: Root of the rebuilt tree. Internal nodes have weight 0.

    Raises:
    CorruptHeaderError: If the header runs out of bits, holds a symbol
        above PSEUDO_EOF or nests deeper than any real tree can.
    """
    return _read_node(in_stream, 0, debug)


def _read_node(in_stream, depth, debug):
    if depth > MAX_DEPTH:
        raise CorruptHeaderError(f"tree header nests deeper than {MAX_DEPTH} levels")

    bit = in_stream.read_bits(1)
    if bit == END:
        raise CorruptHeaderError("input ended inside the tree header")

    if bit == 0:
        left = _read_node(in_stream, depth + 1, debug)
        right = _read_node(in_stream, depth + 1, debug)
        return HuffNode(0, 0, left, right)

    value = in_stream.read_bits(BITS_PER_WORD + 1)
    if value == END:
        raise CorruptHeaderError("input ended inside a leaf of the tree header")
    if value > PSEUDO_EOF:
        raise CorruptHeaderError(f"illegal symbol {value} in tree header")
    if debug >= DEBUG_HIGH:
        logger.info("header leaf %d at depth %d", value, depth)
    return HuffNode(value, 0)
