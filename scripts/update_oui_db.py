#!/usr/bin/env python3
"""Generate the bulk OUI database module from the IEEE MA-L CSV registry.

Downloads the IEEE OUI CSV (or reads a local copy), cleans the
organization names and writes a Python module that
``lanwatch.devices.oui`` consults when a prefix is missing from its
curated table.

Usage:
    python scripts/update_oui_db.py [--csv PATH]

Output:
    src/lanwatch/devices/oui_db.py
"""

from __future__ import annotations

import argparse
import csv
import io
import re
from datetime import datetime, timezone
from pathlib import Path

IEEE_SOURCE_URL = "https://standards-oui.ieee.org/oui/oui.csv"

OUTPUT_PATH = Path(__file__).resolve().parents[1] / "src" / "lanwatch" / "devices" / "oui_db.py"

# Registry spellings collapsed to the names the classifier hints know
MANUFACTURER_ALIASES: dict[str, str] = {
    "Amazon Technologies": "Amazon",
    "Amazon.Com Services": "Amazon",
    "Arris Group": "Arris",
    "Asustek Computer": "Asus",
    "Cisco Systems": "Cisco",
    "Dell Technologies": "Dell",
    "Espressif": "Espressif",
    "Hewlett Packard": "HP",
    "Hewlett Packard Enterprise": "HPE",
    "Hon Hai Precision": "Foxconn",
    "Huawei Technologies": "Huawei",
    "Lg Electronics": "LG",
    "Raspberry Pi Trading": "Raspberry Pi",
    "Realtek Semiconductor": "Realtek",
    "Samsung Electronics": "Samsung",
    "Signify": "Philips Hue",
    "Tp-Link": "TP-Link",
    "Tp-Link Systems": "TP-Link",
    "Tuya Smart": "Tuya",
    "Ubiquiti Networks": "Ubiquiti",
    "Xiaomi Communications": "Xiaomi",
}

_LEGAL_SUFFIXES = [
    r"\bCo\.,\s*Ltd\.?",
    r"\bCorporation\b",
    r"\bInternational\b",
    r"\bTechnologies\b",
    r"\bTechnology\b",
    r"\bLimited\b",
    r"\bInc\.?",
    r"\bLtd\.?",
    r"\bLLC\b",
    r"\bCorp\.?",
    r"\bGmbH\b",
    r"\bB\.V\.?",
    r"\bCo\.?",
]

_SUFFIX_RE = re.compile(r"(?:" + "|".join(_LEGAL_SUFFIXES) + r")[\s,]*$", re.IGNORECASE)
_PAREN_RE = re.compile(r"\s*\([^)]*\)\s*")
_HEX6_RE = re.compile(r"^[0-9A-F]{6}$")


def clean_manufacturer_name(raw: str) -> str:
    """Strip parentheticals and legal suffixes, title-case, then apply aliases."""
    name = _PAREN_RE.sub(" ", raw.strip())
    # Chained suffixes ("Foo Technology Co., Ltd.") need more than one pass
    for _ in range(3):
        name = _SUFFIX_RE.sub("", name).strip().rstrip(",")
    if name.isupper() or name.islower():
        name = name.title()
    name = re.sub(r"\s+", " ", name).strip()
    return MANUFACTURER_ALIASES.get(name, name)


def parse_oui_csv(csv_text: str) -> dict[str, str]:
    """Parse the IEEE MA-L CSV into an ``AA:BB:CC`` -> manufacturer map.

    Columns are Registry, Assignment, Organization Name, Organization
    Address. Rows with a malformed assignment or an empty name are skipped.
    """
    result: dict[str, str] = {}
    reader = csv.reader(io.StringIO(csv_text))
    if next(reader, None) is None:
        return result

    for row in reader:
        if len(row) < 3:
            continue
        assignment = row[1].strip().upper()
        if not _HEX6_RE.match(assignment):
            continue
        manufacturer = clean_manufacturer_name(row[2])
        if manufacturer:
            prefix = f"{assignment[0:2]}:{assignment[2:4]}:{assignment[4:6]}"
            result[prefix] = manufacturer
    return result


def render_oui_module(oui_data: dict[str, str], source: str) -> str:
    """Render the generated module text for *oui_data*."""
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
    lines = [
        '"""Generated OUI (Organizationally Unique Identifier) database.',
        "",
        f"Generated: {now}",
        f"Entries:   {len(oui_data):,}",
        f"Source:    {source}",
        "",
        "Do not edit; regenerate with: python scripts/update_oui_db.py",
        '"""',
        "",
        "from __future__ import annotations",
        "",
        "OUI_DB: dict[str, str] = {",
    ]
    for prefix in sorted(oui_data):
        escaped = oui_data[prefix].replace("\\", "\\\\").replace('"', '\\"')
        lines.append(f'    "{prefix}": "{escaped}",')
    lines.append("}")
    lines.append("")
    return "\n".join(lines)


def _fetch_registry() -> str:
    import httpx

    print(f"Downloading OUI CSV from {IEEE_SOURCE_URL} ...")
    response = httpx.get(IEEE_SOURCE_URL, timeout=60.0, follow_redirects=True)
    response.raise_for_status()
    return response.text


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--csv", type=Path, help="Read a local copy of the IEEE CSV instead of downloading")
    parser.add_argument("--output", type=Path, default=OUTPUT_PATH)
    args = parser.parse_args(argv)

    if args.csv is not None:
        csv_text = args.csv.read_text(encoding="utf-8")
        source = args.csv.name
    else:
        csv_text = _fetch_registry()
        source = IEEE_SOURCE_URL

    oui_data = parse_oui_csv(csv_text)
    print(f"Parsed {len(oui_data):,} OUI entries")

    args.output.parent.mkdir(parents=True, exist_ok=True)
    args.output.write_text(render_oui_module(oui_data, source))
    print(f"Wrote {args.output}")


if __name__ == "__main__":
    main()
