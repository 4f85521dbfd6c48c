import logging

from typing import Callable, Optional

from vendor_contracts.core.config import settings
from vendor_contracts.enums import ServiceType, UserRole
from vendor_contracts.features.contracts.schemas import CurrentUser, EventDescriptor, VendorDescriptor


logger = logging.getLogger(__name__)

SECTION_SEPARATOR = "\n\n---\n\n"
PAYMENT_TERMS_HEADING = "### 2. Payment Terms"
PAYMENT_TERMS_ANCHOR = SECTION_SEPARATOR + PAYMENT_TERMS_HEADING


def catering_section(vendor: VendorDescriptor) -> str:
    return "\n".join([
        "### 1. Services Provided (Catering)",
        "- **Service Style:** [e.g., Buffet]",
        "- **Menu:** Final menu to be confirmed.",
        "- **Staffing:** [Number] servers.",
    ])

def photography_section(vendor: VendorDescriptor) -> str:
    return "\n".join([
        "### 1. Services Provided (Photography)",
        "- **Hours of Coverage:** [e.g., 8 hours]",
        "- **Deliverables:** [e.g., Digital gallery]",
        "- **Image Rights:** The Client is granted a personal use license.",
    ])

def music_section(vendor: VendorDescriptor) -> str:
    return "\n".join([
        "### 1. Services Provided (Music)",
        "- **Performance Time:** [e.g., 4 hours]",
        "- **Service Type:** [e.g., DJ Services]",
        "- **Equipment:** [e.g., Full PA System]",
    ])

def decor_section(vendor: VendorDescriptor) -> str:
    return "\n".join([
        "### 1. Services Provided (Decor & Styling)",
        "- **Scope:** [e.g., Ceremony and Reception areas]",
        "- **Setup & Teardown:** Vendor is responsible for setup and teardown.",
    ])

def flowers_section(vendor: VendorDescriptor) -> str:
    return "\n".join([
        "### 1. Services Provided (Floral Design)",
        "- **Arrangement Types:** [e.g., Bridal Bouquet]",
        "- **Substitutions:** Vendor reserves the right to make suitable substitutions.",
    ])

def venue_section(vendor: VendorDescriptor) -> str:
    return "\n".join([
        "### 1. Venue Rental",
        "- **Space(s) Provided:** [e.g., Grand Ballroom]",
        "- **Capacity:** [e.g., 150 guests]",
        "- **Restrictions:** [e.g., Music must end by 11:00 PM]",
    ])

def generic_section(vendor: VendorDescriptor) -> str:
    service_type = vendor.service_type.strip() or "[Service Type Not Specified]"
    return "\n".join([
        "### 1. Services Provided",
        f"* The Vendor will provide {service_type} services as agreed upon.",
    ])


SERVICE_SECTIONS: dict[ServiceType, Callable[[VendorDescriptor], str]] = {
    ServiceType.CATERING: catering_section,
    ServiceType.PHOTOGRAPHY: photography_section,
    ServiceType.MUSIC: music_section,
    ServiceType.DECOR: decor_section,
    ServiceType.FLOWERS: flowers_section,
    ServiceType.VENUE: venue_section,
    ServiceType.OTHER: generic_section,
}
"""service-type dispatch table for the services section of the agreement"""


def resolve_client_name(event: EventDescriptor, user: Optional[CurrentUser] = None) -> str:
    """the client is the requesting planner, falling back to the event's planner"""

    if user is not None and user.role == UserRole.PLANNER and user.name.strip():
        return user.name.strip()
    if event.planner_name and event.planner_name.strip():
        return event.planner_name.strip()
    return "The Planner"


def generate_contract_template(event: EventDescriptor, vendor: VendorDescriptor, user: Optional[CurrentUser] = None) -> str:
    """render the default agreement text for an (event, vendor) pair"""

    service_type = ServiceType.from_label(vendor.service_type)
    services_section = SERVICE_SECTIONS[service_type](vendor)

    event_name = event.name.strip() or "[Event Not Specified]"
    event_date = event.start_time.strftime(settings.contract_date_format)
    client_name = resolve_client_name(event, user)
    vendor_name = (vendor.business_name or "").strip() or "The Vendor"

    sections = [
        "\n".join([
            "# Service Agreement",
            f"**Event:** {event_name}  ",
            f"**Date:** {event_date}",
        ]),
        "\n".join([
            "### Parties",
            f'- **The Client:** {client_name} ("Client")',
            f'- **The Vendor:** {vendor_name} ("Vendor")',
            "",
            "This agreement is effective as of the date of the last signature.",
        ]),
        services_section,
        "\n".join([
            PAYMENT_TERMS_HEADING,
            f"- **Total Fee:** [Specify Total Cost in {settings.currency_symbol}]",
            "- **Payment Schedule:**",
            "    - A 50% non-refundable retainer is due upon signing.",
            "    - The final balance is due 30 days prior to the event date.",
            "- **Payment Methods:** Payments can be made via EFT.",
        ]),
        "\n".join([
            "### 3. Cancellation Policy",
            "- **By Client:** Cancellation by the Client forfeits the non-refundable retainer.",
            "- **By Vendor:** In the unlikely event the Vendor must cancel, a full refund will be issued.",
        ]),
        "\n".join([
            "### Signatures",
            "*By signing below, both parties agree to the terms outlined in this contract.*",
        ]),
    ]
    return SECTION_SEPARATOR.join(sections) + "\n"
