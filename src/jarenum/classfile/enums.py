"""Enum detection on raw classfile bytes."""

from jarenum.classfile.reader import (
    ACC_FINAL,
    ACC_PUBLIC,
    ACC_STATIC,
    AttributeInfo,
    ByteReader,
    ConstantPool,
    MemberInfo,
    iter_annotation_types,
    read_attributes,
    read_header,
    read_members,
    skip_interfaces,
)
from jarenum.errors import ClassFormatError
from jarenum.models.report import EnumInfo

AVRO_GENERATED_DESCRIPTOR = "Lorg/apache/avro/specific/AvroGenerated;"

ENUM_CONSTANT_FLAGS = ACC_PUBLIC | ACC_STATIC | ACC_FINAL

ANNOTATION_ATTRIBUTES = frozenset(
    {"RuntimeVisibleAnnotations", "RuntimeInvisibleAnnotations"}
)


class EnumExtractor:
    """Reads classfiles and returns an EnumInfo for enum types only."""

    def __init__(self, marker_descriptor: str = AVRO_GENERATED_DESCRIPTOR) -> None:
        self.marker_descriptor = marker_descriptor

    def extract_if_enum(self, data: bytes) -> EnumInfo | None:
        """Return enum details, or None when the class is not an enum.

        Nothing past the access flags is read for non-enum classes.

        Raises:
            ClassFormatError: if the classfile is malformed.
        """
        reader = ByteReader(data)
        header = read_header(reader)
        if not header.is_enum:
            return None

        pool = header.pool
        class_name = pool.class_name(reader.u2())
        try:
            reader.skip(2)  # super_class
            skip_interfaces(reader)
            fields = read_members(reader)
            read_members(reader)  # methods
            attributes = read_attributes(reader)

            members = self._enum_constants(pool, fields, f"L{class_name};")
            marker_present = self._has_marker(pool, attributes)
        except ClassFormatError as e:
            if e.class_name:
                raise
            raise ClassFormatError(str(e), class_name=class_name) from e

        return EnumInfo(
            class_name=class_name,
            members=tuple(members),
            marker_present=marker_present,
        )

    def _enum_constants(
        self,
        pool: ConstantPool,
        fields: list[MemberInfo],
        self_descriptor: str,
    ) -> list[str]:
        """Names of public static final fields typed as the enum itself."""
        members: list[str] = []
        for position, field_info in enumerate(fields):
            if not field_info.has_flags(ENUM_CONSTANT_FLAGS):
                continue
            try:
                name = pool.utf8(field_info.name_index)
            except ClassFormatError as e:
                raise ClassFormatError(f"field #{position}: {e}") from e
            try:
                descriptor = pool.utf8(field_info.descriptor_index)
            except ClassFormatError as e:
                raise ClassFormatError(f"field {name}: {e}") from e
            if descriptor == self_descriptor:
                members.append(name)
        return members

    def _has_marker(self, pool: ConstantPool, attributes: list[AttributeInfo]) -> bool:
        found = False
        for attribute in attributes:
            if pool.utf8(attribute.name_index) not in ANNOTATION_ATTRIBUTES:
                continue
            for type_index in iter_annotation_types(attribute.data):
                if pool.utf8(type_index) == self.marker_descriptor:
                    found = True
        return found


def extract_if_enum(
    data: bytes,
    marker_descriptor: str = AVRO_GENERATED_DESCRIPTOR,
) -> EnumInfo | None:
    """Convenience wrapper around EnumExtractor.extract_if_enum."""
    return EnumExtractor(marker_descriptor).extract_if_enum(data)
