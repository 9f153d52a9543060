"""JVM classfile reading."""

from jarenum.classfile.enums import AVRO_GENERATED_DESCRIPTOR, EnumExtractor, extract_if_enum
from jarenum.classfile.reader import ByteReader, ConstantPool, decode_modified_utf8

__all__ = [
    "AVRO_GENERATED_DESCRIPTOR",
    "ByteReader",
    "ConstantPool",
    "EnumExtractor",
    "decode_modified_utf8",
    "extract_if_enum",
]
