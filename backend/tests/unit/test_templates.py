"""Unit tests for the agreement template generator."""

from datetime import datetime, timezone

import pytest

from vendor_contracts.enums import ServiceType
from vendor_contracts.features.contracts.parser import parse_contract_content
from vendor_contracts.features.contracts.schemas import EventDescriptor, VendorDescriptor
from vendor_contracts.features.contracts.templates import PAYMENT_TERMS_ANCHOR, generate_contract_template


class TestGenerateContractTemplate:
    """Tests for generate_contract_template."""

    def test_generation_is_idempotent(self, event, catering_vendor, planner):
        first = generate_contract_template(event, catering_vendor, planner)
        second = generate_contract_template(event, catering_vendor, planner)
        assert first == second

    def test_sections_appear_in_fixed_order(self, catering_template):
        headings = [
            "# Service Agreement",
            "### Parties",
            "### 1. Services Provided (Catering)",
            "### 2. Payment Terms",
            "### 3. Cancellation Policy",
            "### Signatures",
        ]
        positions = [catering_template.index(heading) for heading in headings]
        assert positions == sorted(positions)

    def test_title_and_parties_blocks(self, catering_template):
        assert "**Event:** Smith Wedding" in catering_template
        assert "**Date:** 01 June 2025" in catering_template
        assert '- **The Client:** Jane Doe ("Client")' in catering_template
        assert '- **The Vendor:** Acme Catering ("Vendor")' in catering_template

    def test_payment_terms_anchor_present(self, catering_template):
        assert PAYMENT_TERMS_ANCHOR in catering_template
        assert "- **Total Fee:** [Specify Total Cost in R]" in catering_template

    @pytest.mark.parametrize("service_type", ["catering", "CATERING", " Catering "])
    def test_service_dispatch_is_case_insensitive(self, event, service_type):
        vendor = VendorDescriptor(business_name="Acme Catering", service_type=service_type)
        content = generate_contract_template(event, vendor)
        assert "### 1. Services Provided (Catering)" in content
        assert "- **Service Style:** [e.g., Buffet]" in content

    @pytest.mark.parametrize(
        "service_type,heading",
        [
            ("photography", "### 1. Services Provided (Photography)"),
            ("music", "### 1. Services Provided (Music)"),
            ("decor", "### 1. Services Provided (Decor & Styling)"),
            ("flowers", "### 1. Services Provided (Floral Design)"),
            ("venue", "### 1. Venue Rental"),
        ],
    )
    def test_service_specific_sections(self, event, service_type, heading):
        vendor = VendorDescriptor(business_name="Vendor Co", service_type=service_type)
        assert heading in generate_contract_template(event, vendor)

    def test_unknown_service_type_falls_back_to_generic_clause(self, event):
        vendor = VendorDescriptor(business_name="Glow Co", service_type="Lighting")
        content = generate_contract_template(event, vendor)
        assert "### 1. Services Provided\n* The Vendor will provide Lighting services as agreed upon." in content

    def test_missing_names_render_as_placeholders(self):
        event = EventDescriptor(name="", start_time=datetime(2025, 6, 1, tzinfo=timezone.utc))
        vendor = VendorDescriptor(service_type="")
        content = generate_contract_template(event, vendor)
        assert "**Event:** [Event Not Specified]" in content
        assert '- **The Client:** The Planner ("Client")' in content
        assert '- **The Vendor:** The Vendor ("Vendor")' in content
        assert "[Service Type Not Specified]" in content
        assert "None" not in content

    def test_planner_user_name_takes_precedence(self, event, catering_vendor, planner):
        planner = planner.model_copy(update={"name": "Janet Smith"})
        content = generate_contract_template(event, catering_vendor, planner)
        assert '- **The Client:** Janet Smith ("Client")' in content

    def test_vendor_user_does_not_become_client(self, event, catering_vendor, vendor_user):
        content = generate_contract_template(event, catering_vendor, vendor_user)
        assert '- **The Client:** Jane Doe ("Client")' in content

    @pytest.mark.parametrize("service_type", [member.value for member in ServiceType])
    def test_templates_parse_without_custom_fields(self, event, service_type):
        vendor = VendorDescriptor(business_name="Vendor Co", service_type=service_type)
        parsed = parse_contract_content(generate_contract_template(event, vendor))
        assert parsed.custom_fields == []
        assert parsed.fields.total_fee == ""
