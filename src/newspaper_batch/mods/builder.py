"""Build MODS v3 records for the newspaper batch."""

import xml.etree.ElementTree as ET
from pathlib import Path

from newspaper_batch.metadata.models import IssueMetadata

MODS_NAMESPACE = "http://www.loc.gov/mods/v3"
LANGUAGE_AUTHORITY = "iso639-2b"

# Serialize MODS elements without a prefix
ET.register_namespace("", MODS_NAMESPACE)


def _tag(name: str) -> str:
    return f"{{{MODS_NAMESPACE}}}{name}"


def _sub(parent: ET.Element, name: str, text: str | None = None, **attrib: str) -> ET.Element:
    element = ET.SubElement(parent, _tag(name), attrib)
    if text is not None:
        element.text = text
    return element


def _detail(part: ET.Element, detail_type: str, number: str) -> None:
    detail = _sub(part, "detail", type=detail_type)
    _sub(detail, "number", number)


def build_issue_mods(metadata: IssueMetadata) -> ET.ElementTree:
    """Build the MODS record for an issue.

    Args:
        metadata: Issue metadata

    Returns:
        MODS document with title, date, enumeration, language and LCCN
    """
    root = ET.Element(_tag("mods"))

    title_info = _sub(root, "titleInfo")
    _sub(title_info, "title", metadata.title)

    _sub(root, "typeOfResource", "text")

    origin_info = _sub(root, "originInfo")
    _sub(origin_info, "dateIssued", metadata.date_issued.isoformat(), encoding="iso8601", keyDate="yes")
    _sub(origin_info, "issuance", "serial")

    part = _sub(root, "part")
    if metadata.volume:
        _detail(part, "volume", metadata.volume)
    if metadata.issue_number:
        _detail(part, "issue", metadata.issue_number)
    _detail(part, "edition", str(metadata.edition))

    if metadata.language:
        language = _sub(root, "language")
        _sub(language, "languageTerm", metadata.language, type="code", authority=LANGUAGE_AUTHORITY)

    if metadata.lccn:
        _sub(root, "identifier", metadata.lccn, type="lccn")
        host = _sub(root, "relatedItem", type="host")
        _sub(host, "identifier", metadata.lccn, type="lccn")

    return ET.ElementTree(root)


def build_page_mods(metadata: IssueMetadata, sequence: int, label: str | None = None) -> ET.ElementTree:
    """Build the MODS record for a page.

    Args:
        metadata: Metadata of the issue the page belongs to
        sequence: 1-based page number within the issue
        label: Page label; defaults to 'Page <sequence>'

    Returns:
        MODS document with the page title and position
    """
    root = ET.Element(_tag("mods"))

    title_info = _sub(root, "titleInfo")
    _sub(title_info, "title", label or f"Page {sequence}")

    part = _sub(root, "part")
    extent = _sub(part, "extent", unit="pages")
    _sub(extent, "start", str(sequence))

    host = _sub(root, "relatedItem", type="host")
    host_title = _sub(host, "titleInfo")
    _sub(host_title, "title", metadata.title)
    host_origin = _sub(host, "originInfo")
    _sub(host_origin, "dateIssued", metadata.date_issued.isoformat(), encoding="iso8601")

    return ET.ElementTree(root)


def write_mods(tree: ET.ElementTree, path: Path) -> None:
    """Write a MODS document as indented UTF-8 XML.

    Args:
        tree: MODS document
        path: Destination file
    """
    ET.indent(tree, space="  ")
    tree.write(path, encoding="utf-8", xml_declaration=True)
