"""Load invoice documents from JSON or XML files.

JSON documents use either snake_case keys or the dashboard's own keys
(``nummer``, ``waehrung``, ``items[].totalBrutto`` ...). XML documents look
like::

    <Invoice>
      <Number>2026-0042</Number>
      <Currency>CHF</Currency>
      <Issuer><Name>...</Name><PostalCode>8001</PostalCode>...</Issuer>
      <Lines>
        <Line>
          <Description>...</Description>
          <Quantity>40</Quantity>
          <UnitPrice>180</UnitPrice>
          <TaxCode>A</TaxCode>
          <TaxRate>0.081</TaxRate>
          <GrossAmount>7200</GrossAmount>
        </Line>
      </Lines>
    </Invoice>

Element names are matched by local name, so a default namespace is fine.
"""

from __future__ import annotations

import json
from decimal import Decimal
from pathlib import Path
from typing import Any

from lxml import etree

from .errors import InvoiceFormatError
from .models import Invoice

_HEADER_FIELDS = {
    "Number": "number",
    "Currency": "currency",
    "IssueDate": "issue_date",
    "ServiceDate": "service_date",
    "DueDate": "due_date",
    "Reference": "reference",
    "Notes": "notes",
}

_PARTY_FIELDS = {
    "Name": "name",
    "Street": "street",
    "BuildingNumber": "building_number",
    "PostalCode": "postal_code",
    "Town": "town",
    "Country": "country",
    "VatNumber": "vat_number",
    "UID": "uid",
    "IBAN": "iban",
    "Bank": "bank",
    "Email": "email",
}

_LINE_FIELDS = {
    "Description": "description",
    "Detail": "detail",
    "Quantity": "quantity",
    "UnitPrice": "unit_price",
    "TaxCode": "tax_rate_code",
    "TaxRate": "tax_rate",
    "GrossAmount": "gross_amount",
}


def _find_child(element: etree._Element, localname: str) -> etree._Element | None:
    for child in element:
        if isinstance(child.tag, str) and etree.QName(child).localname == localname:
            return child
    return None


def _collect_text(element: etree._Element, fields: dict[str, str]) -> dict[str, Any]:
    values: dict[str, Any] = {}
    for child in element:
        if not isinstance(child.tag, str):
            continue
        key = fields.get(etree.QName(child).localname)
        if key is not None:
            values[key] = (child.text or "").strip()
    return values


def parse_invoice_xml(root: etree._Element) -> Invoice:
    """Build an :class:`Invoice` from a parsed ``<Invoice>`` element."""

    if etree.QName(root).localname != "Invoice":
        raise InvoiceFormatError(f"Unexpected root element <{etree.QName(root).localname}>")

    data = _collect_text(root, _HEADER_FIELDS)
    for tag, key in (("Issuer", "issuer"), ("Recipient", "recipient")):
        node = _find_child(root, tag)
        if node is not None:
            data[key] = _collect_text(node, _PARTY_FIELDS)

    lines = _find_child(root, "Lines")
    items = []
    if lines is not None:
        for line in lines:
            if isinstance(line.tag, str) and etree.QName(line).localname == "Line":
                items.append(_collect_text(line, _LINE_FIELDS))
    data["line_items"] = items
    return Invoice.from_mapping(data)


def load_invoice_xml(path: Path) -> Invoice:
    try:
        tree = etree.parse(str(path))
    except etree.XMLSyntaxError as exc:
        raise InvoiceFormatError(f"'{path}' is not well-formed XML: {exc}") from exc
    return parse_invoice_xml(tree.getroot())


def load_invoice_json(path: Path) -> Invoice:
    with path.open("r", encoding="utf-8") as handle:
        try:
            payload = json.load(handle, parse_float=Decimal)
        except UnicodeDecodeError as exc:
            raise InvoiceFormatError(f"'{path}' is not UTF-8 encoded") from exc
        except json.JSONDecodeError as exc:
            raise InvoiceFormatError(f"'{path}' is not valid JSON") from exc

    if not isinstance(payload, dict):
        raise InvoiceFormatError(f"'{path}' must contain a JSON object")
    return Invoice.from_mapping(payload)


def load_invoice_file(path: Path) -> Invoice:
    """Load *path*, choosing the parser from the file suffix."""

    if not path.exists():
        raise FileNotFoundError(f"Invoice file not found: {path}")

    suffix = path.suffix.lower()
    if suffix == ".xml":
        return load_invoice_xml(path)
    if suffix == ".json":
        return load_invoice_json(path)
    raise InvoiceFormatError(f"Unsupported invoice file type '{suffix}' (expected .json or .xml)")


__all__ = ["load_invoice_file", "load_invoice_json", "load_invoice_xml", "parse_invoice_xml"]
