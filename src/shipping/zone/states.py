"""Indian state and union territory names mapped to their two-letter codes."""

STATE_NAME_TO_CODE = {
    "andaman and nicobar islands": "AN",
    "andhra pradesh": "AP",
    "arunachal pradesh": "AR",
    "assam": "AS",
    "bihar": "BR",
    "chhattisgarh": "CG",
    "chandigarh": "CH",
    "dadra and nagar haveli": "DD",
    "daman and diu": "DD",
    "delhi": "DL",
    "new delhi": "DL",
    "goa": "GA",
    "gujarat": "GJ",
    "himachal pradesh": "HP",
    "haryana": "HR",
    "jharkhand": "JH",
    "jammu and kashmir": "JK",
    "karnataka": "KA",
    "kerala": "KL",
    "ladakh": "LA",
    "lakshadweep": "LD",
    "maharashtra": "MH",
    "meghalaya": "ML",
    "manipur": "MN",
    "madhya pradesh": "MP",
    "mizoram": "MZ",
    "nagaland": "NL",
    "odisha": "OR",
    "orissa": "OR",
    "punjab": "PB",
    "puducherry": "PY",
    "pondicherry": "PY",
    "rajasthan": "RJ",
    "sikkim": "SK",
    "tamil nadu": "TN",
    "telangana": "TS",
    "tripura": "TR",
    "uttarakhand": "UK",
    "uttar pradesh": "UP",
    "west bengal": "WB",
}


def get_state_code(state_name: str | None) -> str | None:
    """Normalize a state name (or code) to its two-letter code.

    Two-letter input is treated as a code already. Unknown names return None.
    """
    if not state_name:
        return None

    normalized = state_name.strip().lower()
    if len(normalized) == 2:
        return normalized.upper()

    return STATE_NAME_TO_CODE.get(normalized)
