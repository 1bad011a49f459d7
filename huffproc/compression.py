import logging

from bitarray.util import ba2int

from .bitio import END, BitInputStream, BitOutputStream
from .exceptions import FormatError, TruncatedBodyError
from .huffman import (
    BITS_PER_INT,
    BITS_PER_WORD,
    DEBUG_LOW,
    HUFF_TREE,
    PSEUDO_EOF,
    make_codings_from_tree,
    make_tree_from_counts,
    read_for_counts,
    read_tree_header,
    write_header,
)

logger = logging.getLogger(__name__)


class HuffProcessor:
    """
    Huffman compression of whole byte streams.

    Compressed streams start with the HUFF_TREE marker and a preorder dump of
    the code tree, so nothing besides the stream is needed to decompress.
    The debug level is passed to each call rather than stored.
    """

    def compress(self, in_stream: BitInputStream, out: BitOutputStream, debug: int = 0) -> None:
        """
        Compresses in_stream into out and closes out.

        Parameters:
        in_stream (BitInputStream): Data to compress. Read twice, with a
            reset() in between.
        out (BitOutputStream): Receives the compressed bits.
        debug (int): Diagnostic level, see DEBUG_LOW and DEBUG_HIGH.
        """
        with out:
            counts = read_for_counts(in_stream)
            root = make_tree_from_counts(counts, debug)
            codings = make_codings_from_tree(root, debug)

            out.write_bits(BITS_PER_INT, HUFF_TREE)
            write_header(root, out)
            header_bits = out.bits_written

            in_stream.reset()
            self._write_compressed_bits(codings, in_stream, out)

            if debug >= DEBUG_LOW:
                logger.info(
                    "compressed %d bytes using %d symbols: %d header bits, %d total bits",
                    sum(counts) - 1, len(codings), header_bits, out.bits_written,
                )

    def decompress(self, in_stream: BitInputStream, out: BitOutputStream, debug: int = 0) -> None:
        """
        Decompresses in_stream into out and closes out.

        Raises:
        FormatError: If the stream does not start with HUFF_TREE. Nothing is
            written in that case.
        CorruptHeaderError: If the tree header cannot be read.
        TruncatedBodyError: If the data ends before the end-of-stream code.
        """
        with out:
            marker = in_stream.read_bits(BITS_PER_INT)
            if marker == END:
                raise FormatError("input too short for a header")
            if marker != HUFF_TREE:
                raise FormatError(f"illegal header starts with {marker:#010x}")
            root = read_tree_header(in_stream, debug)
            written = self._read_compressed_bits(root, in_stream, out)

            if debug >= DEBUG_LOW:
                logger.info("decompressed %d bytes from %d bits", written, in_stream.bits_read)

    def _write_compressed_bits(self, codings, in_stream, out):
        while True:
            byte = in_stream.read_bits(BITS_PER_WORD)
            if byte == END:
                break
            code = codings[byte]
            out.write_bits(len(code), ba2int(code))
        code = codings[PSEUDO_EOF]
        out.write_bits(len(code), ba2int(code))

    def _read_compressed_bits(self, root, in_stream, out):
        written = 0
        current = root
        while True:
            bit = in_stream.read_bits(1)
            if bit == END:
                raise TruncatedBodyError("bad input, no PSEUDO_EOF")

            if not root.is_leaf:
                current = current.right if bit else current.left

            if current.is_leaf:
                if current.value == PSEUDO_EOF:
                    return written
                out.write_bits(BITS_PER_WORD, current.value)
                written += 1
                current = root


def compress_bytes(data: bytes, debug: int = 0) -> bytes:
    """
    Compresses a bytes object.

    Parameters:
    data (bytes): The data to compress.
    debug (int): Diagnostic level.

    Returns:
    bytes: The compressed stream.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("Input data must be bytes-like.")
    out = BitOutputStream()
    HuffProcessor().compress(BitInputStream(data), out, debug)
    return out.getvalue()


def decompress_bytes(data: bytes, debug: int = 0) -> bytes:
    """
    Decompresses a bytes object produced by compress_bytes.

    Parameters:
    data (bytes): The compressed stream.
    debug (int): Diagnostic level.

    Returns:
    bytes: The original data.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("Input compressed data must be bytes-like.")
    out = BitOutputStream()
    HuffProcessor().decompress(BitInputStream(data), out, debug)
    return out.getvalue()


def compress_file(src, dst, debug: int = 0) -> None:
    """Compresses src into dst. dst is only opened once compression has succeeded."""
    out = BitOutputStream()
    with BitInputStream.from_file(src) as in_stream:
        HuffProcessor().compress(in_stream, out, debug)
    _write_file(dst, out.getvalue())


def decompress_file(src, dst, debug: int = 0) -> None:
    """
    Decompresses src into dst.

    On any HuffException dst is left untouched, so a bad input never
    clobbers an existing file.
    """
    out = BitOutputStream()
    with BitInputStream.from_file(src) as in_stream:
        HuffProcessor().decompress(in_stream, out, debug)
    _write_file(dst, out.getvalue())


def _write_file(path, data):
    with open(path, "wb") as f:
        f.write(data)
