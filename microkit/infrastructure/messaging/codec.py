"""
Message Serialization

Encodes and decodes broker payloads.

Wire format: UTF-8 text containing one JSON value. Decoding never raises;
it returns a DecodeResult so the listener can apply its "ack and drop"
policy to malformed payloads without exception plumbing.

Typed payloads:
    class OrderCreated(BaseModel):
        orderId: int

    codec = MessageCodec(OrderCreated)
    result = codec.decode(b'{"orderId": 42}')
    result.value.orderId  # 42
"""

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import orjson
from pydantic import BaseModel, TypeAdapter, ValidationError

from microkit.core.exceptions import DecodeError

T = TypeVar("T")


@dataclass(frozen=True)
class DecodeResult(Generic[T]):
    """Outcome of decoding one payload: either ``value`` or ``error``."""

    value: T | None = None
    error: DecodeError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MessageCodec(Generic[T]):
    """
    JSON codec with an optional declared payload type.

    ``model`` may be a pydantic model or any type pydantic can validate
    (``dict[str, int]``, a TypedDict, ...). Without a model, decoded values
    are plain JSON types.
    """

    def __init__(self, model: Any = None) -> None:
        self.model = model
        self._adapter = TypeAdapter(model) if model is not None else None

    def decode(self, data: bytes | bytearray | memoryview | str) -> DecodeResult[T]:
        """
        Decode a raw payload.

        Steps:
        1. Bytes -> UTF-8 text (strict)
        2. Text -> JSON value
        3. JSON value -> declared type (if any)
        """
        try:
            text = data if isinstance(data, str) else bytes(data).decode("utf-8")
            value = orjson.loads(text)
        except (UnicodeDecodeError, orjson.JSONDecodeError) as e:
            return DecodeResult(
                error=DecodeError.from_exception(e, message="Payload is not UTF-8 JSON")
            )

        if self._adapter is not None:
            try:
                value = self._adapter.validate_python(value)
            except ValidationError as e:
                name = getattr(self.model, "__name__", repr(self.model))
                return DecodeResult(
                    error=DecodeError.from_exception(
                        e, message=f"Payload does not match {name}", model=name
                    )
                )

        return DecodeResult(value=value)

    def encode(self, value: Any) -> bytes:
        """Encode a value (or pydantic model) as UTF-8 JSON bytes."""
        if isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        return orjson.dumps(value)
