"""Whole-library binary serialization.

A library is always written as one MessagePack envelope holding both binding
collections. The envelope carries a format version so that readers can reject
data they do not understand instead of misreading it.
"""

import msgspec

from bindlib.core.models import PointBinding, SceneBinding

from .exceptions import MalformedLibraryError

FORMAT_VERSION = 1


class LibraryEnvelope(msgspec.Struct, kw_only=True):
    """Serialized state of a binding library."""

    version: int = FORMAT_VERSION
    library_id: str
    point_bindings: dict[str, PointBinding] = msgspec.field(default_factory=dict)
    scene_bindings: dict[str, SceneBinding] = msgspec.field(default_factory=dict)


_encoder = msgspec.msgpack.Encoder()
_decoder = msgspec.msgpack.Decoder(LibraryEnvelope)


def encode_library(
    library_id: str,
    point_bindings: dict[str, PointBinding],
    scene_bindings: dict[str, SceneBinding],
    size_hint: int = 0,
) -> bytes:
    """Encode library state into a binary blob.

    Args:
        library_id: Identifier recorded in the envelope
        point_bindings: Point bindings by key
        scene_bindings: Scene bindings by key
        size_hint: Expected blob size used to pre-allocate the output buffer

    Returns:
        The encoded envelope
    """
    envelope = LibraryEnvelope(
        library_id=library_id,
        point_bindings=point_bindings,
        scene_bindings=scene_bindings,
    )
    # encode_into grows and truncates the buffer as needed
    buffer = bytearray(max(size_hint, 0))
    _encoder.encode_into(envelope, buffer)
    return bytes(buffer)


def decode_library(library_id: str, data: bytes) -> LibraryEnvelope:
    """Decode a blob produced by encode_library.

    Raises:
        MalformedLibraryError: If the data is not a valid envelope or was
            written with an unsupported format version.
    """
    try:
        envelope = _decoder.decode(data)
    except msgspec.DecodeError as e:
        raise MalformedLibraryError(library_id, str(e)) from e

    if envelope.version != FORMAT_VERSION:
        raise MalformedLibraryError(
            library_id,
            f"unsupported format version {envelope.version} "
            f"(expected {FORMAT_VERSION})",
        )

    return envelope


def export_json(
    library_id: str,
    point_bindings: dict[str, PointBinding],
    scene_bindings: dict[str, SceneBinding],
    indent: int = 2,
) -> str:
    """Render library state as human-readable JSON."""
    envelope = LibraryEnvelope(
        library_id=library_id,
        point_bindings=point_bindings,
        scene_bindings=scene_bindings,
    )
    return msgspec.json.format(msgspec.json.encode(envelope), indent=indent).decode()
