"""Minimal JVM classfile reader.

Only the structures needed to identify enum types are decoded: the
constant pool (walked structurally, text decoded on demand), access flags,
field and method tables, and annotation attributes.
"""

import struct
from dataclasses import dataclass, field
from typing import Iterator

from jarenum.errors import ClassFormatError

CLASSFILE_MAGIC = 0xCAFEBABE

ACC_PUBLIC = 0x0001
ACC_STATIC = 0x0008
ACC_FINAL = 0x0010
ACC_ENUM = 0x4000

CONSTANT_UTF8 = 1
CONSTANT_CLASS = 7

# Payload sizes (after the tag byte) of the fixed-size constant pool entries.
_CONSTANT_SIZES = {
    3: 4,  # Integer
    4: 4,  # Float
    5: 8,  # Long
    6: 8,  # Double
    7: 2,  # Class
    8: 2,  # String
    9: 4,  # Fieldref
    10: 4,  # Methodref
    11: 4,  # InterfaceMethodref
    12: 4,  # NameAndType
    15: 3,  # MethodHandle
    16: 2,  # MethodType
    17: 4,  # Dynamic
    18: 4,  # InvokeDynamic
    19: 2,  # Module
    20: 2,  # Package
}

# Long and Double occupy two pool slots.
_WIDE_CONSTANTS = {5, 6}

# Element value tags followed by a single u2 constant pool index.
_CONST_ELEMENT_TAGS = frozenset("BCDFIJSZsc")


class ByteReader:
    """Big-endian cursor over classfile bytes."""

    def __init__(self, data: bytes, pos: int = 0) -> None:
        self.data = data
        self.pos = pos

    def _take(self, size: int) -> int:
        start = self.pos
        if start + size > len(self.data):
            raise ClassFormatError(
                f"truncated data: needed {size} bytes at offset {start}, "
                f"only {len(self.data) - start} available"
            )
        self.pos += size
        return start

    def u1(self) -> int:
        return self.data[self._take(1)]

    def u2(self) -> int:
        return struct.unpack_from(">H", self.data, self._take(2))[0]

    def u4(self) -> int:
        return struct.unpack_from(">I", self.data, self._take(4))[0]

    def read(self, size: int) -> bytes:
        start = self._take(size)
        return bytes(self.data[start : start + size])

    def skip(self, size: int) -> None:
        self._take(size)


def decode_modified_utf8(raw: bytes) -> str:
    """Decode a CONSTANT_Utf8 payload.

    The JVM stores NUL as ``C0 80`` and supplementary characters as two
    separately encoded surrogates; plain UTF-8 covers everything else.
    """
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        pass
    text = raw.replace(b"\xc0\x80", b"\x00").decode("utf-8", "surrogatepass")
    return text.encode("utf-16-le", "surrogatepass").decode("utf-16-le")


class ConstantPool:
    """Constant pool with entries located by offset and decoded lazily."""

    def __init__(self, data: bytes, slots: list[tuple[int, int] | None]) -> None:
        # slots[i] is (tag, payload offset); index 0 and the upper half of
        # wide constants are None.
        self._data = data
        self._slots = slots
        self._utf8_cache: dict[int, str] = {}

    @classmethod
    def parse(cls, reader: ByteReader) -> "ConstantPool":
        """Walk the pool, recording where each entry lives."""
        count = reader.u2()
        slots: list[tuple[int, int] | None] = [None]
        index = 1
        while index < count:
            tag = reader.u1()
            offset = reader.pos
            if tag == CONSTANT_UTF8:
                reader.skip(reader.u2())
            elif tag in _CONSTANT_SIZES:
                reader.skip(_CONSTANT_SIZES[tag])
            else:
                raise ClassFormatError(
                    f"unknown constant pool tag {tag} at index {index} (offset {offset - 1})"
                )
            slots.append((tag, offset))
            index += 1
            if tag in _WIDE_CONSTANTS:
                slots.append(None)
                index += 1
        return cls(reader.data, slots)

    def __len__(self) -> int:
        return len(self._slots)

    def _entry(self, index: int, expected_tag: int) -> int:
        if index <= 0 or index >= len(self._slots) or self._slots[index] is None:
            raise ClassFormatError(f"invalid constant pool index {index}")
        tag, offset = self._slots[index]
        if tag != expected_tag:
            raise ClassFormatError(
                f"constant pool index {index} has tag {tag}, expected {expected_tag}"
            )
        return offset

    def utf8(self, index: int) -> str:
        """Resolve a CONSTANT_Utf8 entry to text."""
        if index in self._utf8_cache:
            return self._utf8_cache[index]
        reader = ByteReader(self._data, self._entry(index, CONSTANT_UTF8))
        raw = reader.read(reader.u2())
        try:
            text = decode_modified_utf8(raw)
        except UnicodeDecodeError as e:
            raise ClassFormatError(
                f"undecodable UTF-8 constant at index {index}: {e.reason}"
            ) from e
        self._utf8_cache[index] = text
        return text

    def class_name(self, index: int) -> str:
        """Resolve a CONSTANT_Class entry to its internal name."""
        reader = ByteReader(self._data, self._entry(index, CONSTANT_CLASS))
        return self.utf8(reader.u2())


@dataclass
class AttributeInfo:
    """A raw attribute: resolved name plus undecoded payload."""

    name_index: int
    data: bytes


@dataclass
class MemberInfo:
    """A field or method entry."""

    access_flags: int
    name_index: int
    descriptor_index: int
    attributes: list[AttributeInfo] = field(default_factory=list)

    def has_flags(self, flags: int) -> bool:
        return self.access_flags & flags == flags


@dataclass
class ClassHeader:
    """Everything up to and including the class access flags."""

    minor_version: int
    major_version: int
    pool: ConstantPool
    access_flags: int

    @property
    def is_enum(self) -> bool:
        return bool(self.access_flags & ACC_ENUM)


def read_header(reader: ByteReader) -> ClassHeader:
    """Read magic, version, constant pool and access flags."""
    magic = reader.u4()
    if magic != CLASSFILE_MAGIC:
        raise ClassFormatError(f"bad magic 0x{magic:08X}")
    minor = reader.u2()
    major = reader.u2()
    pool = ConstantPool.parse(reader)
    access_flags = reader.u2()
    return ClassHeader(
        minor_version=minor,
        major_version=major,
        pool=pool,
        access_flags=access_flags,
    )


def read_attributes(reader: ByteReader) -> list[AttributeInfo]:
    count = reader.u2()
    attributes = []
    for _ in range(count):
        name_index = reader.u2()
        length = reader.u4()
        attributes.append(AttributeInfo(name_index=name_index, data=reader.read(length)))
    return attributes


def read_member(reader: ByteReader) -> MemberInfo:
    return MemberInfo(
        access_flags=reader.u2(),
        name_index=reader.u2(),
        descriptor_index=reader.u2(),
        attributes=read_attributes(reader),
    )


def read_members(reader: ByteReader) -> list[MemberInfo]:
    count = reader.u2()
    return [read_member(reader) for _ in range(count)]


def skip_interfaces(reader: ByteReader) -> None:
    reader.skip(2 * reader.u2())


def iter_annotation_types(data: bytes) -> Iterator[int]:
    """Yield the type descriptor index of every annotation in an attribute.

    Works on the payload of RuntimeVisibleAnnotations and
    RuntimeInvisibleAnnotations alike.
    """
    reader = ByteReader(data)
    count = reader.u2()
    for _ in range(count):
        type_index = reader.u2()
        _skip_element_value_pairs(reader)
        yield type_index


def _skip_element_value_pairs(reader: ByteReader) -> None:
    pairs = reader.u2()
    for _ in range(pairs):
        reader.skip(2)  # element_name_index
        _skip_element_value(reader)


def _skip_element_value(reader: ByteReader) -> None:
    tag = chr(reader.u1())
    if tag in _CONST_ELEMENT_TAGS:
        reader.skip(2)
    elif tag == "e":
        reader.skip(4)
    elif tag == "@":
        reader.skip(2)
        _skip_element_value_pairs(reader)
    elif tag == "[":
        for _ in range(reader.u2()):
            _skip_element_value(reader)
    else:
        raise ClassFormatError(f"unknown annotation element tag {tag!r}")
