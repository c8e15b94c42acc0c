import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from cmisclient.clients.cmis.errors import InvalidPropertyValueError
from cmisclient.clients.cmis.models.Enums import PropertyType

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
ONE_MILLISECOND = timedelta(milliseconds=1)

# date plus time of day, optionally with fraction and offset
_ISO_DATETIME_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}:?\d{2})?$"
)
_INTEGER_PATTERN = re.compile(r"^[+-]?\d+$")

_STRING_TYPES = (PropertyType.STRING, PropertyType.ID, PropertyType.HTML, PropertyType.URI)


class PropertyValueCodec:
    """
    Converts single wire values of the browser binding into typed Python values and back.

    Decoded value types per PropertyType:
        string, id, html, uri -> str
        boolean               -> bool
        integer               -> int
        decimal               -> decimal.Decimal
        datetime              -> timezone aware datetime in UTC

    Outgoing values are always strings. A datetime is written as integer milliseconds since
    1970-01-01T00:00:00Z, so decode(encode(v)) == v for every datetime without sub-millisecond part.
    """

    ##########################################
    ################ DECODE ##################
    ##########################################

    @classmethod
    def decode_values(cls, property_type: PropertyType, raw: Any, property_id: str | None = None) -> list[Any]:
        """
        Decodes a wire value that may be a scalar or an array of scalars.

        Args:
            property_type (PropertyType): The declared or resolved type of the property.
            raw (Any): The raw JSON value. A bare scalar is treated as a one element array.
            property_id (str | None): Used in error messages only.

        Returns:
            list[Any]: The decoded values. Null elements are skipped.

        Raises:
            InvalidPropertyValueError: If any element does not match the property type.
        """
        if raw is None:
            return []
        items = raw if isinstance(raw, list) else [raw]
        return [cls.decode_value(property_type, item, property_id=property_id) for item in items if item is not None]

    @classmethod
    def decode_value(cls, property_type: PropertyType, raw: Any, property_id: str | None = None) -> Any:
        """
        Decodes one wire scalar.

        Raises:
            InvalidPropertyValueError: If the shape of raw is not acceptable for property_type.
        """
        if isinstance(raw, (dict, list)):
            raise InvalidPropertyValueError(
                f"Property '{property_id}' expects a {property_type.value} scalar but got a JSON {type(raw).__name__}.",
                property_id=property_id,
                raw_value=raw,
            )

        if property_type in _STRING_TYPES:
            if isinstance(raw, str):
                return raw
        elif property_type == PropertyType.BOOLEAN:
            if isinstance(raw, bool):
                return raw
            if isinstance(raw, str) and raw.strip().lower() in ("true", "false"):
                return raw.strip().lower() == "true"
        elif property_type == PropertyType.INTEGER:
            value = cls._to_int(raw)
            if value is not None:
                return value
        elif property_type == PropertyType.DECIMAL:
            value = cls._to_decimal(raw)
            if value is not None:
                return value
        elif property_type == PropertyType.DATETIME:
            value = cls._to_datetime(raw)
            if value is not None:
                return value

        raise InvalidPropertyValueError(
            f"Value {raw!r} of property '{property_id}' is not a valid {property_type.value} value.",
            property_id=property_id,
            raw_value=raw,
        )

    @staticmethod
    def _to_int(raw: Any) -> int | None:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return raw
        if isinstance(raw, float) and raw.is_integer():
            return int(raw)
        if isinstance(raw, Decimal) and raw.is_finite() and raw == raw.to_integral_value():
            return int(raw)
        if isinstance(raw, str) and _INTEGER_PATTERN.match(raw.strip()):
            return int(raw.strip())
        return None

    @staticmethod
    def _to_decimal(raw: Any) -> Decimal | None:
        if isinstance(raw, bool):
            return None
        if isinstance(raw, Decimal):
            value = raw
        elif isinstance(raw, (int, float)):
            value = Decimal(str(raw))
        elif isinstance(raw, str):
            try:
                value = Decimal(raw.strip())
            except InvalidOperation:
                return None
        else:
            return None
        return value if value.is_finite() else None

    @classmethod
    def _to_datetime(cls, raw: Any) -> datetime | None:
        """Returns None for values outside the range of datetime."""
        try:
            if isinstance(raw, datetime):
                return cls._as_utc(raw)
            millis = cls._to_int(raw)
            if millis is not None:
                return EPOCH + timedelta(milliseconds=millis)
            if isinstance(raw, str) and _ISO_DATETIME_PATTERN.match(raw.strip()):
                text = raw.strip()
                if text.endswith("Z"):
                    text = text[:-1] + "+00:00"
                return cls._as_utc(datetime.fromisoformat(text))
        except (OverflowError, ValueError):
            return None
        return None

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    ##########################################
    ################# CHECK ##################
    ##########################################

    @staticmethod
    def check_value(property_type: PropertyType, value: Any, property_id: str | None = None) -> None:
        """
        Verifies that an already decoded value has the Python type of property_type.

        Raises:
            InvalidPropertyValueError: If the value has the wrong type.
        """
        if property_type in _STRING_TYPES:
            valid = isinstance(value, str)
        elif property_type == PropertyType.BOOLEAN:
            valid = isinstance(value, bool)
        elif property_type == PropertyType.INTEGER:
            valid = isinstance(value, int) and not isinstance(value, bool)
        elif property_type == PropertyType.DECIMAL:
            valid = isinstance(value, Decimal)
        elif property_type == PropertyType.DATETIME:
            valid = isinstance(value, datetime) and value.tzinfo is not None
        else:
            valid = False

        if not valid:
            raise InvalidPropertyValueError(
                f"Value {value!r} of property '{property_id}' does not match property type '{property_type.value}'.",
                property_id=property_id,
                raw_value=value,
            )

    ##########################################
    ################ ENCODE ##################
    ##########################################

    @classmethod
    def encode_value(cls, value: Any) -> str:
        """
        Encodes a typed value for a form field.

        Returns:
            str: Milliseconds since epoch for datetimes, "true"/"false" for booleans, str(value) otherwise.
        """
        if isinstance(value, datetime):
            return str(cls.to_epoch_millis(value))
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    @classmethod
    def to_epoch_millis(cls, value: datetime) -> int:
        return (cls._as_utc(value) - EPOCH) // ONE_MILLISECOND

    ##########################################
    ############### HEURISTIC ################
    ##########################################

    @staticmethod
    def infer_property_type(raw: Any) -> PropertyType:
        """
        Guesses a property type from the shape of a wire value. Used only when no type definition
        declares the property. Arrays are judged by their first element, so a leading null types
        the whole array as string.

        Known ambiguity: a whole-number decimal arrives as a JSON integer and is typed as integer,
        and an id that happens to look like a date-time string is typed as datetime.
        """
        if isinstance(raw, list):
            raw = raw[0] if raw else None

        if raw is None:
            return PropertyType.STRING
        if isinstance(raw, bool):
            return PropertyType.BOOLEAN
        if isinstance(raw, datetime):
            return PropertyType.DATETIME
        if isinstance(raw, str):
            if _ISO_DATETIME_PATTERN.match(raw.strip()):
                return PropertyType.DATETIME
            return PropertyType.STRING
        if isinstance(raw, (float, Decimal)):
            return PropertyType.DECIMAL
        return PropertyType.INTEGER
