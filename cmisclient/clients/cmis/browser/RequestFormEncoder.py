from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any
from urllib.parse import quote, urlencode

from cmisclient.clients.cmis.browser import BrowserConstants as bc
from cmisclient.clients.cmis.browser.PropertyValueCodec import PropertyValueCodec
from cmisclient.clients.cmis.models.ObjectData import Acl
from cmisclient.clients.cmis.models.Property import PropertiesCollection, PropertyData

CONTENT_TYPE_URLENCODED = "application/x-www-form-urlencoded;charset=utf-8"

PropertiesInput = PropertiesCollection | Iterable[PropertyData] | Mapping[str, Any]


class FormData:
    """
    Collects the form fields of one browser binding mutation request.

    Fields keep insertion order, starting with cmisaction. Properties, policies and ACEs are written
    as indexed fields, e.g. propertyId[0], propertyValue[0] for one value and propertyValue[0][1] for
    the second value of a multi-valued property.
    """

    def __init__(self, action: str):
        self._parameters: dict[str, str] = {}
        self.add_parameter(bc.CONTROL_CMISACTION, action)

    ##########################################
    ############### PARAMETERS ###############
    ##########################################

    def add_parameter(self, name: str | None, value: Any) -> None:
        """
        Adds (or replaces) a field. Fields with a None name or value are skipped.
        """
        if name is None or value is None:
            return
        self._parameters[name] = self._normalize(value)

    @staticmethod
    def _normalize(value: Any) -> str:
        if isinstance(value, Enum):
            return str(value.value)
        return PropertyValueCodec.encode_value(value)

    def add_properties(self, properties: PropertiesInput | None) -> None:
        """
        Adds propertyId[i] / propertyValue[i] fields.

        Args:
            properties: A PropertiesCollection, an iterable of PropertyData or a plain {property_id: value} mapping
                        whose values may be scalars or lists.
        """
        if properties is None:
            return

        index = 0
        for property_id, values in self._iter_properties(properties):
            if property_id is None:
                continue
            self.add_parameter(f"{bc.CONTROL_PROPERTY_ID}[{index}]", property_id)
            values = [value for value in values if value is not None]
            if len(values) == 1:
                self.add_parameter(f"{bc.CONTROL_PROPERTY_VALUE}[{index}]", values[0])
            else:
                for value_index, value in enumerate(values):
                    self.add_parameter(f"{bc.CONTROL_PROPERTY_VALUE}[{index}][{value_index}]", value)
            index += 1

    @staticmethod
    def _iter_properties(properties: PropertiesInput) -> Iterable[tuple[str | None, list[Any]]]:
        if isinstance(properties, PropertiesCollection):
            properties = properties.property_list
        if isinstance(properties, Mapping):
            for property_id, value in properties.items():
                if value is None:
                    yield property_id, []
                elif isinstance(value, (list, tuple, set)):
                    yield property_id, list(value)
                else:
                    yield property_id, [value]
            return
        for property_data in properties:
            if property_data is None:
                continue
            yield property_data.id, list(property_data.values)

    def add_policies(self, policies: Iterable[str] | None) -> None:
        if policies is None:
            return
        index = 0
        for policy in policies:
            if policy is None:
                continue
            self.add_parameter(f"{bc.CONTROL_POLICY}[{index}]", policy)
            index += 1

    def add_add_aces(self, acl: Acl | None) -> None:
        self._add_aces(acl, bc.CONTROL_ADD_ACE_PRINCIPAL, bc.CONTROL_ADD_ACE_PERMISSION)

    def add_remove_aces(self, acl: Acl | None) -> None:
        self._add_aces(acl, bc.CONTROL_REMOVE_ACE_PRINCIPAL, bc.CONTROL_REMOVE_ACE_PERMISSION)

    def _add_aces(self, acl: Acl | None, principal_control: str, permission_control: str) -> None:
        """
        ACEs without principal id or without permissions are skipped and do not consume an index.
        """
        if acl is None:
            return
        index = 0
        for ace in acl.aces:
            permissions = [permission for permission in ace.permissions if permission is not None]
            if ace.principal_id is None or not permissions:
                continue
            self.add_parameter(f"{principal_control}[{index}]", ace.principal_id)
            for permission_index, permission in enumerate(permissions):
                self.add_parameter(f"{permission_control}[{index}][{permission_index}]", permission)
            index += 1

    def add_succinct_flag(self, succinct: bool) -> None:
        if succinct:
            self.add_parameter(bc.CONTROL_SUCCINCT, "true")

    ##########################################
    ################ OUTPUT ##################
    ##########################################

    def get_content_type(self) -> str:
        return CONTENT_TYPE_URLENCODED

    def get_parameters(self) -> dict[str, str]:
        return dict(self._parameters)

    def to_urlencoded(self) -> str:
        return urlencode(self._parameters, quote_via=quote)

    def __len__(self) -> int:
        return len(self._parameters)
