from shelter.interchange.codec import CsvCodec, CsvDocument, DecodeResult, RowError, decode, encode
from shelter.interchange.fields import FieldKind, FieldSpec, decode_row, encode_record
from shelter.interchange.schemas import CODECS

__all__ = [
    "CODECS",
    "CsvCodec",
    "CsvDocument",
    "DecodeResult",
    "FieldKind",
    "FieldSpec",
    "RowError",
    "decode",
    "decode_row",
    "encode",
    "encode_record",
]
