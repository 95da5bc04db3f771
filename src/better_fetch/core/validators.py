"""
Output validators.

A validator is anything exposing ``parse(value) -> T`` that raises on mismatch.
pydantic models, ``TypeAdapter`` instances and plain types are adapted via
:func:`as_validator`.
"""

from typing import Any, Generic, Optional, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel, TypeAdapter

T = TypeVar("T")


@runtime_checkable
class Validator(Protocol[T]):
    """Schema-checking capability applied to decoded success bodies."""

    def parse(self, value: Any) -> T:
        ...


class PassthroughValidator:
    """Accepts any value unchanged."""

    def parse(self, value: Any) -> Any:
        return value

    def __repr__(self):
        return "PassthroughValidator()"


class PydanticValidator(Generic[T]):
    """
    Validator backed by pydantic.

    Args:
        schema: BaseModel subclass, TypeAdapter, or any type pydantic understands

    Example:
        >>> class Token(BaseModel):
        ...     token: str
        >>> PydanticValidator(Token).parse({"token": "t"})
        Token(token='t')
        >>> PydanticValidator(list[int]).parse(["1", 2])
        [1, 2]

    Raises:
        pydantic.ValidationError: from ``parse`` when the value does not match
    """

    def __init__(self, schema: Any):
        self.schema = schema
        if isinstance(schema, TypeAdapter):
            self._adapter = schema
        else:
            self._adapter = TypeAdapter(schema)

    def parse(self, value: Any) -> T:
        return self._adapter.validate_python(value)

    def __repr__(self):
        return f"PydanticValidator({self.schema!r})"


DEFAULT_VALIDATOR = PassthroughValidator()


def as_validator(schema: Optional[Any]) -> Validator:
    """
    Coerce a schema descriptor into a Validator.

    ``None`` maps to the passthrough validator; objects that already have a
    callable ``parse`` are used as-is (except pydantic models, whose classmethod
    ``parse`` is deprecated).
    """
    if schema is None:
        return DEFAULT_VALIDATOR
    if isinstance(schema, type) and issubclass(schema, BaseModel):
        return PydanticValidator(schema)
    if isinstance(schema, TypeAdapter):
        return PydanticValidator(schema)
    if not isinstance(schema, type) and callable(getattr(schema, "parse", None)):
        return schema
    return PydanticValidator(schema)
