from __future__ import annotations

import json
import xml.etree.ElementTree as ET
from typing import Any, Dict, List, Mapping, Optional, Tuple

from fastapi import Request, status
from fastapi.responses import Response

JSON_MEDIA_TYPE = "application/json"
XML_MEDIA_TYPE = "application/xml"

_JSON_TYPES = {"application/json", "text/json", "application/*", "*/*"}
_XML_TYPES = {"application/xml", "text/xml"}


def _parse_accept(header: str) -> List[Tuple[str, float]]:
    ranges: List[Tuple[str, float]] = []
    for item in header.split(","):
        parts = [part.strip() for part in item.split(";")]
        media_type = parts[0].lower()
        if not media_type:
            continue
        quality = 1.0
        for param in parts[1:]:
            name, _, value = param.partition("=")
            if name.strip().lower() == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        ranges.append((media_type, quality))
    return sorted(ranges, key=lambda pair: pair[1], reverse=True)


def negotiate(request: Request) -> Optional[str]:
    """Pick the response media type, or ``None`` when nothing acceptable is produced."""
    header = request.headers.get("accept", "").strip()
    if not header:
        return JSON_MEDIA_TYPE
    for media_type, quality in _parse_accept(header):
        if quality <= 0:
            continue
        if media_type in _JSON_TYPES:
            return JSON_MEDIA_TYPE
        if media_type in _XML_TYPES:
            return XML_MEDIA_TYPE
    return None


def _text(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _element(tag: str, fields: Mapping[str, Any]) -> ET.Element:
    node = ET.Element(tag)
    for name, value in fields.items():
        ET.SubElement(node, name).text = _text(value)
    return node


def to_xml(content: Any, root: str) -> bytes:
    if isinstance(content, list):
        node = ET.Element(f"ArrayOf{root}")
        for item in content:
            node.append(_element(root, item))
    elif root == "Errors":
        node = ET.Element(root)
        for field, messages in content.items():
            for message in messages:
                ET.SubElement(node, "Error", field=field).text = message
    elif isinstance(content, dict):
        node = _element(root, content)
    else:
        node = ET.Element(root)
        node.text = _text(content)
    return ET.tostring(node, encoding="utf-8", xml_declaration=True)


def render(
    request: Request,
    content: Any,
    *,
    root: str,
    status_code: int = status.HTTP_200_OK,
    headers: Optional[Dict[str, str]] = None,
) -> Response:
    media_type = negotiate(request)
    if media_type is None:
        return Response(status_code=status.HTTP_406_NOT_ACCEPTABLE)
    if media_type == XML_MEDIA_TYPE:
        body = to_xml(content, root)
    else:
        body = json.dumps(content, ensure_ascii=False).encode("utf-8")
    return Response(
        content=body,
        status_code=status_code,
        headers=headers,
        media_type=f"{media_type}; charset=utf-8",
    )
