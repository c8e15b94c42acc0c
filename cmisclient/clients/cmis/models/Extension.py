"""Generic extension tree carried by every converted CMIS entity."""

from pydantic import BaseModel, model_validator


class ExtensionElement(BaseModel):
    """
    A schema-less wire fragment preserved for forward compatibility.

    A leaf carries a string value, an inner node carries children; never both.
    """
    name: str
    value: str | None = None
    children: list["ExtensionElement"] | None = None

    @model_validator(mode="after")
    def _check_value_or_children(self) -> "ExtensionElement":
        if self.value is not None and self.children is not None:
            raise ValueError(f"Extension element '{self.name}' cannot have both a value and children.")
        return self

    def find(self, name: str) -> "ExtensionElement | None":
        """Returns the first direct child with the given name, if any."""
        for child in self.children or []:
            if child.name == name:
                return child
        return None


class ExtensionsData(BaseModel):
    """
    Base for every entity that can carry extension elements. The attachment is None when the wire
    object had no keys outside its schema.
    """
    extensions: list[ExtensionElement] | None = None

    def get_extension(self, name: str) -> ExtensionElement | None:
        """Returns the first top-level extension element with the given name, if any."""
        for element in self.extensions or []:
            if element.name == name:
                return element
        return None


ExtensionElement.model_rebuild()
