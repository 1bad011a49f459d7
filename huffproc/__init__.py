from .bitio import END, BitInputStream, BitOutputStream
from .compression import HuffProcessor, compress_bytes, compress_file, decompress_bytes, decompress_file
from .exceptions import CorruptHeaderError, FormatError, HuffException, TruncatedBodyError
from .huffman import DEBUG_HIGH, DEBUG_LOW, HUFF_TREE, PSEUDO_EOF, HuffNode
