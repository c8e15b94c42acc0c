"""CMIS client error taxonomy.

Conversion errors (raised by the browser converters):
  InvalidPropertyError          malformed or missing required wire key
  InvalidPropertyValueError     value shape incompatible with the property type
  UnsupportedBaseTypeError      base type outside the CMIS base type set
  UnsupportedPropertyTypeError  property type outside the CMIS property type set

Lookup / transport errors (raised by the resolver and the binding client):
  TypeNotFoundError             repository reports no such type
  ConnectionFailureError        transport failure or unreadable response
  ...and one class per HTTP failure category of the browser binding.
"""

from typing import Any


class CMISError(Exception):
    """Base exception for everything raised by the CMIS client."""

    def __init__(self, message: str, status_code: int | None = None, error_content: str | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_content = error_content


##########################################
############### CONVERSION ###############
##########################################

class InvalidPropertyError(CMISError):
    """A wire property (or property-like structure) lacks a required key or has the wrong shape."""


class InvalidPropertyValueError(CMISError):
    """A wire value does not match the declared or resolved property type."""

    def __init__(self, message: str, property_id: str | None = None, raw_value: Any = None):
        super().__init__(message)
        self.property_id = property_id
        self.raw_value = raw_value


class UnsupportedBaseTypeError(CMISError):
    """A type definition names a base type that is not part of CMIS."""

    def __init__(self, base_type_id: str | None):
        super().__init__(f"Type base id '{base_type_id}' does not match a CMIS base type.")
        self.base_type_id = base_type_id


class UnsupportedPropertyTypeError(CMISError):
    """A property (definition) names a property type that is not part of CMIS."""

    def __init__(self, property_type: str | None, property_id: str | None = None):
        super().__init__(f"Property type '{property_type}' of property '{property_id}' does not match a CMIS property type.")
        self.property_type = property_type
        self.property_id = property_id


##########################################
################ LOOKUP ##################
##########################################

class TypeNotFoundError(CMISError):
    """The repository reports that a type definition does not exist."""

    def __init__(self, repository_id: str, type_id: str):
        super().__init__(f"Type '{type_id}' not found in repository '{repository_id}'.")
        self.repository_id = repository_id
        self.type_id = type_id


##########################################
############### TRANSPORT ################
##########################################

class ConnectionFailureError(CMISError):
    """The transport failed or returned something that is not a browser binding response."""


class InvalidArgumentError(CMISError):
    """HTTP 400."""


class FilterNotValidError(InvalidArgumentError):
    """HTTP 400 with exception 'filterNotValid'."""


class PermissionDeniedError(CMISError):
    """HTTP 401 / 403."""


class StreamNotSupportedError(PermissionDeniedError):
    """HTTP 403 with exception 'streamNotSupported'."""


class ObjectNotFoundError(CMISError):
    """HTTP 404 or an unknown repository id."""


class NotSupportedError(CMISError):
    """HTTP 405."""


class ConstraintError(CMISError):
    """HTTP 409."""


class NameConstraintViolationError(ConstraintError):
    """HTTP 409 with exception 'nameConstraintViolation'."""


class VersioningError(ConstraintError):
    """HTTP 409 with exception 'versioning'."""


class ContentAlreadyExistsError(ConstraintError):
    """HTTP 409 with exception 'contentAlreadyExists'."""


class UpdateConflictError(ConstraintError):
    """HTTP 409 with exception 'updateConflict'."""


class StorageError(CMISError):
    """HTTP 500 with exception 'storage'."""


class ServerError(CMISError):
    """Any other unsuccessful HTTP status."""
