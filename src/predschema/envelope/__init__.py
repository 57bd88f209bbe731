"""Discovery payload construction and stream envelopes."""

from predschema.envelope.builder import build_batch, build_payload, new_message_id
from predschema.envelope.stream import stream_for, stream_message

__all__ = [
    "build_payload",
    "build_batch",
    "new_message_id",
    "stream_for",
    "stream_message",
]
