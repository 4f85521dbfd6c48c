import re

from enum import Enum


def derive_field_key(label: str) -> str:
    """derive a camelCase field key from a human-readable label (e.g. 'Setup & Teardown' -> 'setupTeardown')"""

    words = [word for word in re.split(r"[^0-9A-Za-z]+", label) if word]
    if not words:
        return ""
    head, *tail = words
    return head[0].lower() + head[1:] + "".join(word[0].upper() + word[1:] for word in tail)


class ContractField(Enum):
    """the fixed set of editable contract fields keyed by their document label"""

    TOTAL_FEE = "Total Fee"
    HOURS_OF_COVERAGE = "Hours of Coverage"
    DELIVERABLES = "Deliverables"
    IMAGE_RIGHTS = "Image Rights"
    PERFORMANCE_TIME = "Performance Time"
    SERVICE_TYPE = "Service Type"
    EQUIPMENT = "Equipment"
    SCOPE = "Scope"
    SETUP_TEARDOWN = "Setup & Teardown"
    ARRANGEMENT_TYPES = "Arrangement Types"
    SUBSTITUTIONS = "Substitutions"
    SPACES_PROVIDED = "Space(s) Provided"
    CAPACITY = "Capacity"
    RESTRICTIONS = "Restrictions"
    SERVICE_STYLE = "Service Style"
    MENU = "Menu"
    STAFFING = "Staffing"

    @property
    def label(self) -> str:
        return self.value

    @property
    def key(self) -> str:
        return derive_field_key(self.value)

    @property
    def attribute(self) -> str:
        return self.name.lower()

    @property
    def numeric(self) -> bool:
        return self in NUMERIC_FIELDS

    @classmethod
    def from_label(cls, label: str) -> "ContractField | None":
        return _FIELDS_BY_LABEL.get(label)

    @classmethod
    def from_key(cls, key: str) -> "ContractField | None":
        return _FIELDS_BY_KEY.get(key)


_FIELDS_BY_LABEL = {field.label: field for field in ContractField}
_FIELDS_BY_KEY = {field.key: field for field in ContractField}

NUMERIC_FIELDS = frozenset({ContractField.TOTAL_FEE, ContractField.HOURS_OF_COVERAGE})

NON_EDITABLE_LABELS = frozenset({
    "The Client",
    "The Vendor",
    "By Client",
    "By Vendor",
    "Payment Schedule",
    "Payment Methods",
})
"""boilerplate labels that are neither editable fields nor custom clauses"""

PLACEHOLDER_VALUE = "[Not Specified]"
