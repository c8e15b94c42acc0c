"""CMIS enumerations. Each member's value is its browser binding wire spelling."""

from enum import Enum
from typing import TypeVar

E = TypeVar("E", bound=Enum)


class PropertyType(str, Enum):
    STRING = "string"
    ID = "id"
    BOOLEAN = "boolean"
    INTEGER = "integer"
    DATETIME = "datetime"
    DECIMAL = "decimal"
    HTML = "html"
    URI = "uri"


class Cardinality(str, Enum):
    SINGLE = "single"
    MULTI = "multi"


class Updatability(str, Enum):
    READONLY = "readonly"
    READWRITE = "readwrite"
    ONCREATE = "oncreate"
    WHENCHECKEDOUT = "whencheckedout"


class BaseTypeId(str, Enum):
    DOCUMENT = "cmis:document"
    FOLDER = "cmis:folder"
    RELATIONSHIP = "cmis:relationship"
    POLICY = "cmis:policy"
    ITEM = "cmis:item"
    SECONDARY = "cmis:secondary"


class ContentStreamAllowed(str, Enum):
    NOTALLOWED = "notallowed"
    ALLOWED = "allowed"
    REQUIRED = "required"


class DateTimeResolution(str, Enum):
    YEAR = "year"
    DATE = "date"
    TIME = "time"


class DecimalPrecision(str, Enum):
    BITS32 = "32"
    BITS64 = "64"


class ChangeType(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    SECURITY = "security"


class CapabilityContentStreamUpdates(str, Enum):
    ANYTIME = "anytime"
    PWCONLY = "pwconly"
    NONE = "none"


class CapabilityChanges(str, Enum):
    NONE = "none"
    OBJECTIDSONLY = "objectidsonly"
    PROPERTIES = "properties"
    ALL = "all"


class CapabilityRenditions(str, Enum):
    NONE = "none"
    READ = "read"


class CapabilityQuery(str, Enum):
    NONE = "none"
    METADATAONLY = "metadataonly"
    FULLTEXTONLY = "fulltextonly"
    BOTHSEPARATE = "bothseparate"
    BOTHCOMBINED = "bothcombined"


class CapabilityJoin(str, Enum):
    NONE = "none"
    INNERONLY = "inneronly"
    INNERANDOUTER = "innerandouter"


class CapabilityAcl(str, Enum):
    NONE = "none"
    DISCOVER = "discover"
    MANAGE = "manage"


class SupportedPermissions(str, Enum):
    BASIC = "basic"
    REPOSITORY = "repository"
    BOTH = "both"


class AclPropagation(str, Enum):
    REPOSITORYDETERMINED = "repositorydetermined"
    OBJECTONLY = "objectonly"
    PROPAGATE = "propagate"


class UnfileObject(str, Enum):
    UNFILE = "unfile"
    DELETESINGLEFILED = "deletesinglefiled"
    DELETE = "delete"


class VersioningState(str, Enum):
    NONE = "none"
    CHECKEDOUT = "checkedout"
    MAJOR = "major"
    MINOR = "minor"


class IncludeRelationships(str, Enum):
    NONE = "none"
    SOURCE = "source"
    TARGET = "target"
    BOTH = "both"


def enum_or_none(enum_cls: type[E], raw) -> E | None:
    """Map a wire value to a member of enum_cls, returning None for absent or unknown values."""
    if raw is None:
        return None
    try:
        return enum_cls(str(raw))
    except ValueError:
        return None
