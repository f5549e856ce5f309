"""Request bodies shared by service and route tests."""

import copy

_BASE_PAYLOAD = {
    "basicInformation": {
        "fullLegalName": "Jane Doe",
        "businessName": "Doe Bakery LLC",
        "businessAddress": "12 Main Street",
        "city": "Austin",
        "state": "TX",
        "emailAddress": "jane@doebakery.com",
        "phoneNumber": "5125550100",
    },
    "businessDetails": {
        "businessStructure": "LLC",
        "llcType": "single-member",
        "sCorpElection": False,
        "hasOperatingAgreement": True,
        "numberOfMembers": 1,
        "numberOfEmployees": 4,
        "annualRevenue": "100k-250k",
        "primaryBusinessGoal": "Open a second location",
    },
    "servicesNeeded": {
        "services": ["bookkeeping", "tax-preparation"],
        "needsEIN": True,
        "needsBankAccount": False,
        "needsPayroll": True,
        "payrollEmployees": 4,
    },
    "clientScreening": {
        "businessDescription": "Neighborhood bakery",
        "businessType": "retail",
        "businessChallenges": ["cash flow", "hiring"],
        "biggestPainPoint": "Quarterly taxes",
    },
    "additionalDetails": {
        "hasFinancialAdvisor": "no",
        "wantsProfessionalConnection": True,
    },
}


def make_form_payload(**overrides) -> dict:
    """Deep copy of the base payload; top-level keys may be overridden."""
    payload = copy.deepcopy(_BASE_PAYLOAD)
    payload.update(overrides)
    return payload
