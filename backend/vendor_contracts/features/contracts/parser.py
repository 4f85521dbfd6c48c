import re
import logging

from typing import Optional

from vendor_contracts.features.contracts.fields import ContractField, NON_EDITABLE_LABELS
from vendor_contracts.features.contracts.schemas import CustomField, ParsedContract, StructuredFields


logger = logging.getLogger(__name__)

FIELD_LINE_PATTERN = re.compile(r"- \*\*(.*?):\*\* (.*)")
TOTAL_FEE_MARKER = "**Total Fee:**"


def digits_only(value: str) -> str:
    return re.sub(r"[^0-9]", "", value)


def is_placeholder(value: str) -> bool:
    """bracketed template text such as '[e.g., Buffet]' stands for an unset value"""

    value = value.strip()
    return value.startswith("[") and value.endswith("]")


def is_fee_line(line: str) -> bool:
    """a line carrying the fee marker that is not some other field's bullet"""

    if TOTAL_FEE_MARKER not in line:
        return False
    match = FIELD_LINE_PATTERN.search(line)
    return match is None or match.group(1) == ContractField.TOTAL_FEE.label


def parse_contract_content(content: Optional[str]) -> ParsedContract:
    """extract the structured fields and custom clauses from the agreement text"""

    fields = StructuredFields()
    custom_fields: list[CustomField] = []
    if not content:
        return ParsedContract(fields=fields, custom_fields=custom_fields)

    lines = content.split("\n")
    for line in lines:
        match = FIELD_LINE_PATTERN.search(line)
        if not match:
            continue

        label, value = match.group(1), match.group(2)
        if is_placeholder(value):
            value = ""

        field = ContractField.from_label(label)
        if field is not None:
            fields.set(field, digits_only(value) if field.numeric else value)
        elif label not in NON_EDITABLE_LABELS:
            custom_fields.append(CustomField(header=label, value=value))

    # the fee line may drift from the bullet format; recover its digits from any line carrying the marker
    if not fields.total_fee:
        fee_line = next((line for line in lines if is_fee_line(line)), None)
        if fee_line is not None:
            remainder = fee_line.split(TOTAL_FEE_MARKER, 1)[1]
            fallback_fee = "" if is_placeholder(remainder) else digits_only(remainder)
            if fallback_fee or fields.total_fee is None:
                fields.total_fee = fallback_fee

    return ParsedContract(fields=fields, custom_fields=custom_fields)
