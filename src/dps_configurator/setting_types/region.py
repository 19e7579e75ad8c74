"""Region setting types: country shortcuts, timezone, locale and keyboard."""

import re
from typing import NamedTuple, Optional

from dps_configurator.setting_types.base import NoAttrs, SettingType

_COUNTRY_RE = re.compile(r"^[A-Z]{2}$")
_TIMEZONE_RE = re.compile(r"^[A-Z][a-zA-Z_]+/[A-Z][a-zA-Z_]+(/[A-Z][a-zA-Z_]+)?$")
_LOCALE_RE = re.compile(r"^[a-z]{2}_[A-Z]{2}\.(UTF-8|utf8)$")
_KEYBOARD_RE = re.compile(r"^[a-z]{2,5}$")
_VARIANT_RE = re.compile(r"^[a-zA-Z0-9_-]+$")


class CountryDefaults(NamedTuple):
    timezone: str
    locale: str
    keyboard: str
    variant: str = ""


# ISO 3166-1 alpha-2 -> regional defaults
COUNTRY_DEFAULTS: dict[str, CountryDefaults] = {
    # North America
    "US": CountryDefaults("America/New_York", "en_US.UTF-8", "us"),
    "CA": CountryDefaults("America/Toronto", "en_CA.UTF-8", "us"),
    "MX": CountryDefaults("America/Mexico_City", "es_MX.UTF-8", "latam"),
    # Western Europe
    "DE": CountryDefaults("Europe/Berlin", "de_DE.UTF-8", "de", "nodeadkeys"),
    "FR": CountryDefaults("Europe/Paris", "fr_FR.UTF-8", "fr", "oss"),
    "UK": CountryDefaults("Europe/London", "en_GB.UTF-8", "uk"),
    "GB": CountryDefaults("Europe/London", "en_GB.UTF-8", "uk"),
    "ES": CountryDefaults("Europe/Madrid", "es_ES.UTF-8", "es"),
    "IT": CountryDefaults("Europe/Rome", "it_IT.UTF-8", "it"),
    "NL": CountryDefaults("Europe/Amsterdam", "nl_NL.UTF-8", "us", "intl"),
    "BE": CountryDefaults("Europe/Brussels", "fr_BE.UTF-8", "be"),
    "CH": CountryDefaults("Europe/Zurich", "de_CH.UTF-8", "ch", "de_nodeadkeys"),
    "AT": CountryDefaults("Europe/Vienna", "de_AT.UTF-8", "de", "nodeadkeys"),
    "PT": CountryDefaults("Europe/Lisbon", "pt_PT.UTF-8", "pt"),
    # Northern Europe
    "SE": CountryDefaults("Europe/Stockholm", "sv_SE.UTF-8", "se"),
    "NO": CountryDefaults("Europe/Oslo", "nb_NO.UTF-8", "no"),
    "DK": CountryDefaults("Europe/Copenhagen", "da_DK.UTF-8", "dk"),
    "FI": CountryDefaults("Europe/Helsinki", "fi_FI.UTF-8", "fi"),
    # Eastern Europe
    "PL": CountryDefaults("Europe/Warsaw", "pl_PL.UTF-8", "pl"),
    "CZ": CountryDefaults("Europe/Prague", "cs_CZ.UTF-8", "cz"),
    "RU": CountryDefaults("Europe/Moscow", "ru_RU.UTF-8", "ru"),
    "UA": CountryDefaults("Europe/Kiev", "uk_UA.UTF-8", "ua"),
    # Asia
    "JP": CountryDefaults("Asia/Tokyo", "ja_JP.UTF-8", "jp"),
    "CN": CountryDefaults("Asia/Shanghai", "zh_CN.UTF-8", "us"),
    "KR": CountryDefaults("Asia/Seoul", "ko_KR.UTF-8", "kr"),
    "IN": CountryDefaults("Asia/Kolkata", "en_IN.UTF-8", "us"),
    "SG": CountryDefaults("Asia/Singapore", "en_SG.UTF-8", "us"),
    # Oceania
    "AU": CountryDefaults("Australia/Sydney", "en_AU.UTF-8", "us"),
    "NZ": CountryDefaults("Pacific/Auckland", "en_NZ.UTF-8", "us"),
    # South America
    "BR": CountryDefaults("America/Sao_Paulo", "pt_BR.UTF-8", "br", "abnt2"),
    "AR": CountryDefaults("America/Argentina/Buenos_Aires", "es_AR.UTF-8", "latam"),
    "CL": CountryDefaults("America/Santiago", "es_CL.UTF-8", "latam"),
    # Middle East
    "IL": CountryDefaults("Asia/Jerusalem", "he_IL.UTF-8", "il"),
    "TR": CountryDefaults("Europe/Istanbul", "tr_TR.UTF-8", "tr"),
    "AE": CountryDefaults("Asia/Dubai", "en_AE.UTF-8", "us"),
    # Africa
    "ZA": CountryDefaults("Africa/Johannesburg", "en_ZA.UTF-8", "us"),
}


def get_country_defaults(code: str) -> Optional[CountryDefaults]:
    """Look up regional defaults for a country code (case-insensitive)."""
    return COUNTRY_DEFAULTS.get(code.strip().upper())


class CountryType(SettingType):
    """Two-letter country code that fills in the region settings."""

    name = "country"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return bool(_COUNTRY_RE.match(value)) and value in COUNTRY_DEFAULTS

    def normalize(self, value: str) -> str:
        return value.strip().upper()

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        if _COUNTRY_RE.match(value):
            return (
                "Country code not in database. Use common codes: "
                "US, DE, CH, AT, UK, FR, ES, IT, NL, etc."
            )
        return "Invalid country code. Use 2-letter ISO code or empty to manually configure"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(US, DE, CH, UK, FR, etc. - empty to configure region manually)"

    def apply(self, value: str, attrs: NoAttrs) -> list[tuple[str, str]]:
        defaults = get_country_defaults(value)
        if defaults is None:
            return []
        writes = [
            ("TIMEZONE", defaults.timezone),
            ("LOCALE", defaults.locale),
            ("KEYBOARD_LAYOUT", defaults.keyboard),
        ]
        if defaults.variant:
            writes.append(("KEYBOARD_VARIANT", defaults.variant))
        return writes


class TimezoneType(SettingType):
    name = "timezone"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return value == "UTC" or bool(_TIMEZONE_RE.match(value))

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Invalid timezone. Use IANA format (e.g., America/New_York, Europe/Berlin, UTC)"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(e.g., America/New_York, Europe/Berlin, UTC)"


class LocaleType(SettingType):
    name = "locale"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return bool(_LOCALE_RE.match(value))

    def normalize(self, value: str) -> str:
        return value.strip().replace(".utf8", ".UTF-8")

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Invalid locale format. Use: language_COUNTRY.UTF-8 (e.g., en_US.UTF-8)"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(e.g., en_US.UTF-8, de_DE.UTF-8, fr_FR.UTF-8)"


class KeyboardType(SettingType):
    name = "keyboard"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return bool(_KEYBOARD_RE.match(value))

    def normalize(self, value: str) -> str:
        return value.strip().lower()

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return "Invalid keyboard layout. Use 2-5 lowercase letters (e.g., us, de, fr)"

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(e.g., us, de, fr, uk, ch)"


class KeyboardVariantType(SettingType):
    """X11 layout variant; case is preserved."""

    name = "keyboard_variant"

    def validate(self, value: str, attrs: NoAttrs) -> bool:
        return not value or bool(_VARIANT_RE.match(value))

    def error_message(self, value: str, attrs: NoAttrs) -> str:
        return (
            "Invalid keyboard variant. Use alphanumeric characters, hyphens, "
            "underscores, or leave empty"
        )

    def prompt_hint(self, attrs: NoAttrs) -> str:
        return "(e.g., nodeadkeys, intl, dvorak, or empty for standard)"


REGION_TYPES = (CountryType, TimezoneType, LocaleType, KeyboardType, KeyboardVariantType)
