"""Protobuf encoding for the geolocation DTOs.

The ``geolocation`` schema is declared here as data and registered in a
private descriptor pool at import time, so there is no generated code to
keep in sync. Every DTO in ``schemas`` has a message of the same name.
Optional fields use proto3 ``optional`` and stay unset when the DTO field
is None, matching the JSON shape.
"""

from typing import Optional

from google.protobuf import descriptor_pb2, descriptor_pool, json_format, message_factory
from pydantic import BaseModel

PROTOBUF_CONTENT_TYPE = "application/x-protobuf"
PROTOBUF_ACCEPT_TYPES = ("application/x-protobuf", "application/protobuf")
PROTO_PACKAGE = "geolocation"

_F = descriptor_pb2.FieldDescriptorProto

_SCALARS = {
    "string": _F.TYPE_STRING,
    "double": _F.TYPE_DOUBLE,
    "int32": _F.TYPE_INT32,
    "bool": _F.TYPE_BOOL,
}

# message name -> [(field name, type, label)], numbered in order from 1.
# label: "" (proto3 implicit), "optional" or "repeated"; a type that is not
# a scalar names another message.
MESSAGES: dict[str, list[tuple[str, str, str]]] = {
    "TimeZoneInfo": [("name", "string", "")],
    "IpGeoResponse": [
        ("latitude", "double", "optional"),
        ("longitude", "double", "optional"),
        ("city", "string", ""),
        ("country_name", "string", ""),
        ("time_zone", "TimeZoneInfo", ""),
        ("languages", "string", ""),
    ],
    "LocationInfo": [
        ("continent_code", "string", "optional"),
        ("continent_name", "string", "optional"),
        ("country_code2", "string", "optional"),
        ("country_code3", "string", "optional"),
        ("country_name", "string", "optional"),
        ("country_name_official", "string", "optional"),
        ("country_capital", "string", "optional"),
        ("state_prov", "string", "optional"),
        ("state_code", "string", "optional"),
        ("district", "string", "optional"),
        ("city", "string", "optional"),
        ("zipcode", "string", "optional"),
        ("latitude", "string", "optional"),
        ("longitude", "string", "optional"),
        ("is_eu", "bool", "optional"),
        ("country_flag", "string", "optional"),
        ("geoname_id", "string", "optional"),
        ("country_emoji", "string", "optional"),
    ],
    "CountryMetadataInfo": [
        ("calling_code", "string", "optional"),
        ("tld", "string", "optional"),
        ("languages", "string", "repeated"),
    ],
    "CurrencyInfo": [
        ("code", "string", "optional"),
        ("name", "string", "optional"),
        ("symbol", "string", "optional"),
    ],
    "TimeZoneInfoFull": [
        ("name", "string", "optional"),
        ("offset", "int32", "optional"),
        ("offset_with_dst", "int32", "optional"),
        ("current_time", "string", "optional"),
        ("current_time_unix", "double", "optional"),
        ("is_dst", "bool", "optional"),
        ("dst_savings", "int32", "optional"),
        ("dst_exists", "bool", "optional"),
    ],
    "IpGeoResponseFull": [
        ("ip", "string", "optional"),
        ("location", "LocationInfo", ""),
        ("country_metadata", "CountryMetadataInfo", ""),
        ("currency", "CurrencyInfo", ""),
        ("time_zone", "TimeZoneInfoFull", ""),
    ],
    "TimezoneResponse": [("timezone", "string", "")],
    "TimezoneResponseFull": [
        ("timezone", "string", ""),
        ("offset", "int32", "optional"),
        ("offset_with_dst", "int32", "optional"),
        ("current_time", "string", "optional"),
        ("current_time_unix", "double", "optional"),
        ("is_dst", "bool", "optional"),
        ("dst_exists", "bool", "optional"),
    ],
    "ApiError": [("error", "string", ""), ("code", "string", "")],
}


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=f"{PROTO_PACKAGE}.proto", package=PROTO_PACKAGE, syntax="proto3"
    )
    for message_name, fields in MESSAGES.items():
        message = file_proto.message_type.add(name=message_name)
        for number, (field_name, type_name, label) in enumerate(fields, start=1):
            field = message.field.add(name=field_name, number=number)
            field.label = _F.LABEL_REPEATED if label == "repeated" else _F.LABEL_OPTIONAL
            if type_name in _SCALARS:
                field.type = _SCALARS[type_name]
            else:
                field.type = _F.TYPE_MESSAGE
                field.type_name = f".{PROTO_PACKAGE}.{type_name}"
            if label == "optional":
                # proto3 optional is a synthetic single-field oneof
                field.proto3_optional = True
                field.oneof_index = len(message.oneof_decl)
                message.oneof_decl.add(name=f"_{field_name}")
    return file_proto


_pool = descriptor_pool.DescriptorPool()
_pool.AddSerializedFile(_file_descriptor().SerializeToString())

MESSAGE_CLASSES = {
    name: message_factory.GetMessageClass(
        _pool.FindMessageTypeByName(f"{PROTO_PACKAGE}.{name}")
    )
    for name in MESSAGES
}


def accepts_protobuf(accept: Optional[str]) -> bool:
    """Whether an Accept header asks for the binary encoding."""
    if not accept:
        return False
    accept = accept.lower()
    return any(media_type in accept for media_type in PROTOBUF_ACCEPT_TYPES)


def to_message(dto: BaseModel):
    """Convert a DTO to the protobuf message named after its class."""
    message_class = MESSAGE_CLASSES[type(dto).__name__]
    return json_format.ParseDict(dto.model_dump(exclude_none=True), message_class())


def encode(dto: BaseModel) -> bytes:
    return to_message(dto).SerializeToString()


def render_schema() -> str:
    """The schema as ``.proto`` source, for clients generating their own code."""
    lines = ['syntax = "proto3";', "", f"package {PROTO_PACKAGE};"]
    for message_name, fields in MESSAGES.items():
        lines.append("")
        lines.append(f"message {message_name} {{")
        for number, (field_name, type_name, label) in enumerate(fields, start=1):
            prefix = f"{label} " if label else ""
            lines.append(f"  {prefix}{type_name} {field_name} = {number};")
        lines.append("}")
    return "\n".join(lines) + "\n"
