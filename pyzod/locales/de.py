"""German locale."""

from pyzod.core.codes import IssueCode
from pyzod.issues.accessors import (
    get_list_property,
    get_property,
    get_raw_issue_inclusive,
    get_string_property,
    get_strings_property,
)
from pyzod.issues.formatter import (
    SizingInfo,
    comparison_operator,
    format_threshold,
    get_format_noun,
    get_sizing,
    join_values,
    received_type_name,
    stringify_primitive,
)
from pyzod.issues.types import RawIssue

SIZABLE_DE: dict[str, SizingInfo] = {
    "string": SizingInfo("Zeichen", "haben"),
    "file": SizingInfo("Bytes", "haben"),
    "array": SizingInfo("Elemente", "haben"),
    "slice": SizingInfo("Elemente", "haben"),
    "set": SizingInfo("Elemente", "haben"),
    "object": SizingInfo("Einträge", "haben"),
    "map": SizingInfo("Einträge", "haben"),
}

FORMAT_NOUNS_DE: dict[str, str] = {
    "regex": "Eingabe",
    "email": "E-Mail-Adresse",
    "url": "URL",
    "emoji": "Emoji",
    "uuid": "UUID",
    "uuidv4": "UUIDv4",
    "uuidv6": "UUIDv6",
    "nanoid": "nanoid",
    "guid": "GUID",
    "cuid": "cuid",
    "cuid2": "cuid2",
    "ulid": "ULID",
    "xid": "XID",
    "ksuid": "KSUID",
    "datetime": "ISO-Datum und -Uhrzeit",
    "date": "ISO-Datum",
    "time": "ISO-Uhrzeit",
    "duration": "ISO-Dauer",
    "ipv4": "IPv4-Adresse",
    "ipv6": "IPv6-Adresse",
    "cidrv4": "IPv4-Bereich",
    "cidrv6": "IPv6-Bereich",
    "base64": "Base64-codierter String",
    "base64url": "Base64-URL-codierter String",
    "json_string": "JSON-String",
    "e164": "E.164-Nummer",
    "jwt": "JWT",
    "template_literal": "Eingabe",
}

TYPE_NAMES_DE: dict[str, str] = {
    "number": "Zahl",
    "array": "Array",
    "slice": "Array",
    "string": "String",
    "bool": "Boolean",
    "object": "Objekt",
    "map": "Map",
    "null": "null",
    "function": "Funktion",
    "Date": "Datum",
    "File": "Datei",
    "set": "Set",
}


def _type_name(name: str) -> str:
    return TYPE_NAMES_DE.get(name, name)


def _size_constraint(issue: RawIssue, too_small: bool) -> str:
    origin = get_string_property(issue, "origin") or "Wert"
    threshold, _ = get_property(issue, "minimum" if too_small else "maximum")
    if threshold is None:
        return "Zu klein" if too_small else "Zu groß"

    prefix = "Zu klein" if too_small else "Zu groß"
    operator = comparison_operator(get_raw_issue_inclusive(issue), greater_than=too_small)
    bound = format_threshold(threshold)
    sizing = get_sizing(origin, SIZABLE_DE)
    if sizing is not None:
        return f"{prefix}: erwartet, dass {origin} {operator}{bound} {sizing.unit} hat"
    return f"{prefix}: erwartet, dass {origin} {operator}{bound} ist"


def _string_format(issue: RawIssue, format: str) -> str:
    if format == "starts_with":
        prefix = get_string_property(issue, "prefix")
        if not prefix:
            return "Ungültiger String: muss mit dem angegebenen Präfix beginnen"
        return f'Ungültiger String: muss mit "{prefix}" beginnen'
    if format == "ends_with":
        suffix = get_string_property(issue, "suffix")
        if not suffix:
            return "Ungültiger String: muss mit dem angegebenen Suffix enden"
        return f'Ungültiger String: muss mit "{suffix}" enden'
    if format == "includes":
        includes = get_string_property(issue, "includes")
        if not includes:
            return "Ungültiger String: muss den angegebenen Teilstring enthalten"
        return f'Ungültiger String: muss "{includes}" enthalten'
    if format == "regex":
        pattern = get_string_property(issue, "pattern")
        if not pattern:
            return "Ungültiger String: muss dem Muster entsprechen"
        return f"Ungültiger String: muss dem Muster {pattern} entsprechen"
    return f"Ungültig: {get_format_noun(format, FORMAT_NOUNS_DE)}"


def format_de(issue: RawIssue) -> str:
    """Render a raw issue in German."""
    code = issue.code

    if code == IssueCode.INVALID_TYPE:
        expected = _type_name(get_string_property(issue, "expected"))
        received = _type_name(received_type_name(issue))
        return f"Ungültige Eingabe: erwartet {expected}, erhalten {received}"

    if code == IssueCode.INVALID_VALUE:
        values = get_list_property(issue, "values")
        if not values:
            return "Ungültiger Wert"
        if len(values) == 1:
            return f"Ungültige Eingabe: erwartet {stringify_primitive(values[0])}"
        return f"Ungültige Option: erwartet eine von {join_values(values, '|')}"

    if code == IssueCode.TOO_BIG:
        return _size_constraint(issue, too_small=False)
    if code == IssueCode.TOO_SMALL:
        return _size_constraint(issue, too_small=True)

    if code == IssueCode.INVALID_FORMAT:
        format = get_string_property(issue, "format")
        if not format:
            return "Ungültiges Format"
        return _string_format(issue, format)

    if code == IssueCode.NOT_MULTIPLE_OF:
        divisor, _ = get_property(issue, "divisor")
        if divisor is None:
            return "Ungültige Zahl: muss ein Vielfaches sein"
        return f"Ungültige Zahl: muss ein Vielfaches von {divisor} sein"

    if code == IssueCode.UNRECOGNIZED_KEYS:
        keys = get_strings_property(issue, "keys")
        if not keys:
            return "Unbekannter Schlüssel"
        word = "Unbekannte Schlüssel" if len(keys) > 1 else "Unbekannter Schlüssel"
        return f"{word}: {join_values(list(keys), ', ')}"

    if code == IssueCode.INVALID_KEY:
        origin = get_string_property(issue, "origin")
        return f"Ungültiger Schlüssel in {origin}" if origin else "Ungültiger Schlüssel"

    if code == IssueCode.INVALID_UNION:
        return "Ungültige Eingabe"

    if code == IssueCode.INVALID_ELEMENT:
        origin = get_string_property(issue, "origin")
        return f"Ungültiger Wert in {origin}" if origin else "Ungültiges Element"

    if code == IssueCode.MISSING_REQUIRED:
        field_name = get_string_property(issue, "field_name")
        field_type = get_string_property(issue, "field_type") or "Feld"
        if not field_name:
            return f"Erforderliches {field_type} fehlt"
        return f"Erforderliches {field_type} fehlt: {field_name}"

    if code == IssueCode.TYPE_CONVERSION:
        from_type = get_string_property(issue, "from_type") or "unbekannt"
        to_type = get_string_property(issue, "to_type") or "unbekannt"
        return (
            f"Typkonvertierung fehlgeschlagen: kann {from_type} nicht in {to_type} konvertieren"
        )

    if code == IssueCode.INVALID_SCHEMA:
        reason = get_string_property(issue, "reason")
        return f"Ungültiges Schema: {reason}" if reason else "Ungültige Schemadefinition"

    if code == IssueCode.INVALID_DISCRIMINATOR:
        field = get_string_property(issue, "field") or "Diskriminator"
        return f"Ungültiges oder fehlendes Diskriminatorfeld: {field}"

    if code == IssueCode.INCOMPATIBLE_TYPES:
        conflict = get_string_property(issue, "conflict_type") or "Werte"
        return f"Kann {conflict} nicht zusammenführen: inkompatible Typen"

    if code == IssueCode.NIL_POINTER:
        return "Null-Zeiger erkannt"

    if code == IssueCode.CUSTOM:
        if issue.message:
            return issue.message
        return get_string_property(issue, "message") or "Ungültige Eingabe"

    return "Ungültige Eingabe"
