"""
MOMO phone number validation and normalisation.

Numbers are accepted in local (leading 0), international (+CCC) or bare
country-code form, and normalised to the bare MSISDN form the provider
expects, e.g. 233241234567.
"""

import re

from hoardrun.domain.payments.entities import MomoCountry

MOMO_PATTERNS: dict[MomoCountry, re.Pattern] = {
    MomoCountry.GH: re.compile(
        r"^(?:233|\+233|0)(24|25|26|27|23|54|55|59|57|20|50|53)\d{7}$"
    ),
    MomoCountry.UG: re.compile(r"^(?:256|\+256|0)(70|71|72|74|75|76|77|78|79)\d{7}$"),
    MomoCountry.CM: re.compile(r"^(?:237|\+237|0)(6|2)\d{8}$"),
    MomoCountry.CI: re.compile(r"^(?:225|\+225|0)(0[1-8])\d{7}$"),
}


def validate_momo_number(phone: str, country: MomoCountry) -> bool:
    return MOMO_PATTERNS[country].match(phone) is not None


def format_phone_number(phone: str, country: MomoCountry) -> str:
    digits = re.sub(r"\D", "", phone).lstrip("0")
    if not digits.startswith(country.dialing_code):
        return country.dialing_code + digits
    return digits
