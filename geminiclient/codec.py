"""Request headers, response decompression and decoding of query results."""

from __future__ import annotations

import gzip
import io
import json
import zlib
from enum import Enum
from typing import Any, Mapping

import msgpack
import zstandard
from msgpack.exceptions import UnpackException

from .errors import OpenGeminiError, QueryError
from .result import QueryResult

HTTP_CONTENT_TYPE_MSGPACK = "application/x-msgpack"
HTTP_CONTENT_TYPE_JSON = "application/json"
HTTP_ENCODING_GZIP = "gzip"
HTTP_ENCODING_ZSTD = "zstd"
HTTP_ENCODING_SNAPPY = "snappy"

URL_PING = "/ping"
URL_QUERY = "/query"
URL_STATUS = "/status"
URL_WRITE = "/write"

_NO_AUTH_REQUIRED: dict[str, frozenset[str]] = {
    URL_PING: frozenset({"HEAD", "GET"}),
    URL_QUERY: frozenset({"OPTIONS"}),
    URL_STATUS: frozenset({"HEAD", "GET"}),
}


class ContentType(str, Enum):
    """Serialisation the client asks the server to answer in."""

    JSON = HTTP_CONTENT_TYPE_JSON
    MSGPACK = HTTP_CONTENT_TYPE_MSGPACK


class CompressMethod(str, Enum):
    """Compression the client asks the server to apply."""

    NONE = ""
    GZIP = HTTP_ENCODING_GZIP
    ZSTD = HTTP_ENCODING_ZSTD
    SNAPPY = HTTP_ENCODING_SNAPPY


def auth_required(path: str, method: str) -> bool:
    """Whether a request with this path and method needs credentials."""
    return method.upper() not in _NO_AUTH_REQUIRED.get(path, frozenset())


def request_headers(
    content_type: ContentType | None = None,
    compress_method: CompressMethod | None = None,
) -> dict[str, str]:
    """Accept headers matching the configured serialisation and compression."""
    headers: dict[str, str] = {}
    if content_type is ContentType.MSGPACK:
        headers["Accept"] = HTTP_CONTENT_TYPE_MSGPACK
    elif content_type is ContentType.JSON:
        headers["Accept"] = HTTP_CONTENT_TYPE_JSON
    if compress_method is CompressMethod.GZIP:
        headers["Accept-Encoding"] = HTTP_ENCODING_GZIP
    elif compress_method is CompressMethod.ZSTD:
        headers["Accept-Encoding"] = HTTP_ENCODING_ZSTD
    elif compress_method is CompressMethod.SNAPPY:
        headers["Accept-Encoding"] = HTTP_ENCODING_SNAPPY
    return headers


def _crc32c_table() -> tuple[int, ...]:
    table = []
    for n in range(256):
        crc = n
        for _ in range(8):
            crc = (crc >> 1) ^ 0x82F63B78 if crc & 1 else crc >> 1
        table.append(crc)
    return tuple(table)


_CRC32C_TABLE = _crc32c_table()


def _crc32c(data: bytes) -> int:
    crc = 0xFFFFFFFF
    for byte in data:
        crc = _CRC32C_TABLE[(crc ^ byte) & 0xFF] ^ (crc >> 8)
    return crc ^ 0xFFFFFFFF


def _masked_crc(data: bytes) -> int:
    crc = _crc32c(data)
    return (((crc >> 15) | (crc << 17)) + 0xA282EAD8) & 0xFFFFFFFF


class _SnappyCorrupt(ValueError):
    pass


def _read_varint(data: bytes, pos: int) -> tuple[int, int]:
    result = 0
    for shift in range(0, 35, 7):
        if pos >= len(data):
            raise _SnappyCorrupt("truncated length")
        byte = data[pos]
        pos += 1
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result, pos
    raise _SnappyCorrupt("length too long")


def _take(data: bytes, pos: int, count: int) -> tuple[bytes, int]:
    if pos + count > len(data):
        raise _SnappyCorrupt("truncated block")
    return data[pos : pos + count], pos + count


def _decode_snappy_block(block: bytes) -> bytes:
    """Decode one raw snappy block."""
    expected, pos = _read_varint(block, 0)
    out = bytearray()
    while pos < len(block):
        tag = block[pos]
        pos += 1
        kind = tag & 3
        if kind == 0:
            size = tag >> 2
            if size >= 60:
                extra, pos = _take(block, pos, size - 59)
                size = int.from_bytes(extra, "little")
            literal, pos = _take(block, pos, size + 1)
            out += literal
            continue
        if kind == 1:
            length = 4 + ((tag >> 2) & 7)
            low, pos = _take(block, pos, 1)
            offset = ((tag >> 5) << 8) | low[0]
        elif kind == 2:
            length = (tag >> 2) + 1
            raw, pos = _take(block, pos, 2)
            offset = int.from_bytes(raw, "little")
        else:
            length = (tag >> 2) + 1
            raw, pos = _take(block, pos, 4)
            offset = int.from_bytes(raw, "little")
        if offset == 0 or offset > len(out):
            raise _SnappyCorrupt("bad copy offset")
        start = len(out) - offset
        if offset >= length:
            out += out[start : start + length]
        else:
            for i in range(length):
                out.append(out[start + i])
    if len(out) != expected:
        raise _SnappyCorrupt("length mismatch")
    return bytes(out)


def _decode_snappy_stream(data: bytes) -> bytes:
    out = bytearray()
    pos = 0
    seen_identifier = False
    while pos < len(data):
        header, pos = _take(data, pos, 4)
        chunk_type = header[0]
        chunk, pos = _take(data, pos, int.from_bytes(header[1:], "little"))
        if chunk_type == 0xFF:
            if chunk != b"sNaPpY":
                raise _SnappyCorrupt("bad stream identifier")
            seen_identifier = True
            continue
        if not seen_identifier:
            raise _SnappyCorrupt("missing stream identifier")
        if chunk_type in (0x00, 0x01):
            if len(chunk) < 4:
                raise _SnappyCorrupt("short chunk")
            checksum = int.from_bytes(chunk[:4], "little")
            payload = chunk[4:]
            decoded = _decode_snappy_block(payload) if chunk_type == 0x00 else bytes(payload)
            if _masked_crc(decoded) != checksum:
                raise _SnappyCorrupt("checksum mismatch")
            out += decoded
        elif chunk_type <= 0x7F:
            raise _SnappyCorrupt("unsupported chunk type")
    return bytes(out)


def _decode_gzip(body: bytes) -> bytes:
    try:
        return gzip.decompress(body)
    except (OSError, EOFError, zlib.error) as exc:
        raise OpenGeminiError(f"failed to decompress gzip body: {exc}") from exc


def _decode_zstd(body: bytes) -> bytes:
    try:
        decompressor = zstandard.ZstdDecompressor()
        with decompressor.stream_reader(io.BytesIO(body), read_across_frames=True) as reader:
            return reader.read()
    except zstandard.ZstdError as exc:
        raise OpenGeminiError(f"failed to decompress zstd body: {exc}") from exc


def _decode_snappy(body: bytes) -> bytes:
    try:
        return _decode_snappy_stream(body)
    except _SnappyCorrupt as exc:
        raise OpenGeminiError(f"failed to decompress snappy body: {exc}") from exc


def decompress_body(encoding: str, body: bytes) -> bytes:
    """Undo the content encoding; unknown encodings pass the body through."""
    if encoding == HTTP_ENCODING_ZSTD:
        return _decode_zstd(body)
    if encoding == HTTP_ENCODING_GZIP:
        return _decode_gzip(body)
    if encoding == HTTP_ENCODING_SNAPPY:
        return _decode_snappy(body)
    return body


def _to_result(document: Any, kind: str) -> QueryResult:
    if not isinstance(document, Mapping):
        raise OpenGeminiError(f"unmarshal {kind} body failed, error: not an object")
    try:
        return QueryResult.from_dict(document)
    except (TypeError, ValueError, AttributeError) as exc:
        raise OpenGeminiError(f"unmarshal {kind} body failed, error: {exc}") from exc


def deserialize_body(content_type: str, body: bytes) -> QueryResult:
    """Decode a JSON or msgpack body into a QueryResult."""
    if content_type == HTTP_CONTENT_TYPE_MSGPACK:
        try:
            document = msgpack.unpackb(body, raw=False)
        except (ValueError, UnpackException) as exc:
            raise OpenGeminiError(f"unmarshal msgpack body failed, error: {exc}") from exc
        return _to_result(document, "msgpack")
    if content_type == HTTP_CONTENT_TYPE_JSON:
        try:
            document = json.loads(body)
        except (ValueError, UnicodeDecodeError) as exc:
            raise OpenGeminiError(f"unmarshal json body failed, error: {exc}") from exc
        return _to_result(document, "json")
    raise OpenGeminiError(f"unsupported content type: {content_type}")


def _header(headers: Mapping[str, str], name: str) -> str:
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return ""


def parse_query_response(
    status: int, reason: str, headers: Mapping[str, str], body: bytes
) -> QueryResult:
    """Turn an HTTP answer to a query into a QueryResult, raising on failure."""
    if status != 200:
        text = body.decode("utf-8", errors="replace")
        raise QueryError(f"error resp, code: {status} {reason}body: {text}")
    decompressed = decompress_body(_header(headers, "Content-Encoding"), body)
    return deserialize_body(_header(headers, "Content-Type"), decompressed)