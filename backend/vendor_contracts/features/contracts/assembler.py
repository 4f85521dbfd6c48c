import re
import logging

from vendor_contracts.core.config import settings
from vendor_contracts.features.contracts.fields import ContractField, PLACEHOLDER_VALUE
from vendor_contracts.features.contracts.schemas import CustomField, StructuredFields
from vendor_contracts.features.contracts.templates import PAYMENT_TERMS_ANCHOR


logger = logging.getLogger(__name__)


def format_field_value(field: ContractField, value: str) -> str:
    """render a field value the way it is displayed in the agreement"""

    if not value:
        return PLACEHOLDER_VALUE
    if field == ContractField.TOTAL_FEE:
        return f"{settings.currency_symbol}{value}"
    if field == ContractField.HOURS_OF_COVERAGE:
        return f"{value} hours"
    return value


def replace_field_value(content: str, field: ContractField, value: str) -> str:
    """replace the value portion of the first '**<Label>:**' line, leaving the label intact"""

    pattern = re.compile(rf"(\*\*{re.escape(field.label)}:\*\*).+")
    display_value = format_field_value(field, value)
    return pattern.sub(lambda match: f"{match.group(1)} {display_value}", content, count=1)


def render_custom_fields(custom_fields: list[CustomField]) -> list[str]:
    """render the completed custom clauses as bullet lines, skipping rows with a blank header or value"""

    return [
        f"- **{custom_field.header.strip()}:** {custom_field.value.strip()}"
        for custom_field in custom_fields
        if custom_field.header.strip() and custom_field.value.strip()
    ]


def assemble_contract_content(fields: StructuredFields, custom_fields: list[CustomField], base_template: str) -> str:
    """merge edited fields and custom clauses back into the agreement text"""

    content = base_template or ""
    for field, value in fields.items():
        content = replace_field_value(content, field, value)

    custom_field_lines = render_custom_fields(custom_fields)
    if not custom_field_lines:
        return content

    anchor_index = content.find(PAYMENT_TERMS_ANCHOR)
    if anchor_index == -1:
        logger.warning(f"payment terms anchor not found - dropping {len(custom_field_lines)} custom fields")
        return content

    services_section, rest_of_contract = content[:anchor_index], content[anchor_index:]
    return services_section + "\n" + "\n".join(custom_field_lines) + rest_of_contract
