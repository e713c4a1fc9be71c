"""
Internationalization (i18n) module for the domain lookup system.

Provides translations for all user-facing messages in German (de) and English (en).
"""

from typing import Optional


# Supported languages
SUPPORTED_LANGUAGES = frozenset({"de", "en"})
DEFAULT_LANGUAGE = "de"


# Translation dictionary with all messages
# Structure: {message_key: {language_code: translated_message}}
TRANSLATIONS: dict[str, dict[str, str]] = {
    # Domain validation messages
    "validation.empty_input": {
        "de": "Bitte einen Domainnamen eingeben (Beispiel: example.com)",
        "en": "Enter a domain name (example: example.com)",
    },
    "validation.forbidden_chars": {
        "de": "Domain enthält ungültige Zeichen (Leerzeichen oder Protokoll-Präfix)",
        "en": "Domain contains forbidden characters (whitespace or protocol prefix)",
    },
    "validation.invalid_format": {
        "de": "Das sieht nicht wie ein gültiger Domainname aus.",
        "en": "This does not look like a valid domain name.",
    },

    # Availability status messages
    "status.available": {
        "de": "Wahrscheinlich verfügbar",
        "en": "Likely available",
    },
    "status.taken": {
        "de": "Wahrscheinlich registriert",
        "en": "Likely registered",
    },

    # Common words
    "common.yes": {
        "de": "ja",
        "en": "yes",
    },
    "common.no": {
        "de": "nein",
        "en": "no",
    },

    # Check result messages
    "check.dns_resolves": {
        "de": "DNS löst auf (A oder NS): {value}",
        "en": "DNS resolves (A or NS): {value}",
    },
    "check.whois_available": {
        "de": "WHOIS deutet auf Verfügbarkeit: {value}",
        "en": "WHOIS implies available: {value}",
    },
    "check.whois_server": {
        "de": "WHOIS-Server: {server} ({source})",
        "en": "WHOIS server: {server} ({source})",
    },
    "check.basis.whois_pattern": {
        "de": "Grundlage: WHOIS-Muster '{pattern}'",
        "en": "Basis: WHOIS pattern '{pattern}'",
    },
    "check.basis.dns_fallback": {
        "de": "Grundlage: DNS (WHOIS nicht eindeutig)",
        "en": "Basis: DNS (WHOIS inconclusive)",
    },
    "check.whois_raw": {
        "de": "WHOIS-Rohdaten:",
        "en": "Raw WHOIS:",
    },
    "check.whois_empty": {
        "de": "(keine WHOIS-Daten erhalten)",
        "en": "(no WHOIS data received)",
    },
    "check.approximate": {
        "de": "Hinweis: Das Ergebnis ist eine Schätzung, keine verbindliche Auskunft.",
        "en": "Note: this result is an estimate, not an authoritative answer.",
    },

    # Subdomain scan messages
    "scan.header": {
        "de": "Subdomain-Scan für {domain}",
        "en": "Subdomain scan results for {domain}",
    },
    "scan.note": {
        "de": "Prüfe bis zu {count} Subdomains (einfache DNS-Prüfung). Ergebnisse sind ungefähr.",
        "en": "Scanning up to {count} subdomains (basic DNS checks). Results may be approximate.",
    },
    "scan.truncated": {
        "de": "Wortliste auf {count} von {total} Einträgen gekürzt",
        "en": "Wordlist cut to {count} of {total} entries",
    },
    "scan.no_results": {
        "de": "Keine Ergebnisse (oder nichts entspricht den Filtern).",
        "en": "No results found (or nothing matched your filters).",
    },
    "scan.likely": {
        "de": "wahrscheinlich",
        "en": "likely",
    },
    "scan.columns": {
        "de": "Label\tFQDN\tA\tCNAME\tNS\tverfügbar",
        "en": "label\tfqdn\tA\tCNAME\tNS\tavailable",
    },

    # Simulation mode messages
    "simulation.enabled": {
        "de": "Simulationsmodus aktiviert - keine echten Netzwerkanfragen",
        "en": "Simulation mode enabled - no real network requests",
    },

    # Self-test messages
    "selftest.failed": {
        "de": "Selbsttest fehlgeschlagen",
        "en": "Self-test failed",
    },
    "selftest.success": {
        "de": "Selbsttest erfolgreich abgeschlossen",
        "en": "Self-test completed successfully",
    },
    "selftest.endpoint_ok": {
        "de": "Erreichbar: {endpoint}",
        "en": "Reachable: {endpoint}",
    },
    "selftest.endpoint_failed": {
        "de": "Nicht erreichbar: {endpoint}",
        "en": "Unreachable: {endpoint}",
    },
    "selftest.header": {
        "de": "Domain-Lookup Selbsttest",
        "en": "Domain Lookup Self-Test",
    },
    "selftest.config_validation": {
        "de": "Konfigurationsvalidierung:",
        "en": "Configuration Validation:",
    },
    "selftest.config_valid": {
        "de": "Konfiguration ist gültig",
        "en": "Configuration is valid",
    },
    "selftest.config_invalid": {
        "de": "Konfiguration ist ungültig",
        "en": "Configuration is invalid",
    },
    "selftest.warnings": {
        "de": "Warnungen:",
        "en": "Warnings:",
    },
    "selftest.connectivity": {
        "de": "Konnektivität:",
        "en": "Connectivity:",
    },
    "selftest.skipped": {
        "de": "Konnektivitätstests im Simulationsmodus übersprungen",
        "en": "Connectivity tests skipped in simulation mode",
    },
    "selftest.duration": {
        "de": "Gesamtdauer",
        "en": "Total duration",
    },

    # CLI messages
    "cli.checking_domain": {
        "de": "Prüfe Domain: {domain}",
        "en": "Checking domain: {domain}",
    },
    "cli.result": {
        "de": "Ergebnis: {status}",
        "en": "Result: {status}",
    },
    "cli.results_written": {
        "de": "Ergebnisse geschrieben nach: {path}",
        "en": "Results written to: {path}",
    },
    "cli.error": {
        "de": "Fehler: {error}",
        "en": "Error: {error}",
    },
}


def get_message(
    key: str,
    language: Optional[str] = None,
    **kwargs,
) -> str:
    """
    Get a translated message by key.

    Args:
        key: The message key (e.g., 'validation.empty_input')
        language: Language code ('de' or 'en'). Defaults to DEFAULT_LANGUAGE.
        **kwargs: Format arguments for the message template

    Returns:
        The translated and formatted message string.
        If the key is not found, returns the key itself.
        If the language is not found, falls back to DEFAULT_LANGUAGE.

    Examples:
        >>> get_message('status.available', 'en')
        'Likely available'
        >>> get_message('cli.checking_domain', 'de', domain='example.com')
        'Prüfe Domain: example.com'
    """
    if language is None or language not in SUPPORTED_LANGUAGES:
        language = DEFAULT_LANGUAGE

    translations = TRANSLATIONS.get(key)
    if translations is None:
        return key

    message = translations.get(language)
    if message is None:
        message = translations.get(DEFAULT_LANGUAGE)
    if message is None:
        return key

    if kwargs:
        try:
            message = message.format(**kwargs)
        except KeyError:
            # Missing argument: return the unformatted template
            pass

    return message


def get_all_message_keys() -> set[str]:
    """Get all available message keys."""
    return set(TRANSLATIONS.keys())


def has_translation(key: str, language: str) -> bool:
    """
    Check if a translation exists for a key and language.

    Args:
        key: The message key
        language: The language code

    Returns:
        True if translation exists, False otherwise.
    """
    translations = TRANSLATIONS.get(key)
    if translations is None:
        return False
    return language in translations


def get_missing_translations(language: str) -> set[str]:
    """Get all message keys that are missing translations for a language."""
    return {
        key for key, translations in TRANSLATIONS.items()
        if language not in translations
    }


def validate_translations() -> dict[str, set[str]]:
    """
    Validate that all languages have all translations.

    Returns:
        Dictionary mapping language codes to sets of missing message keys.
        Empty sets indicate complete translations.
    """
    return {
        language: get_missing_translations(language)
        for language in SUPPORTED_LANGUAGES
    }
