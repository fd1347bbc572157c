# trackmetrics/formats/gpx.py
"""
GPX helpers for trackmetrics

This module is intentionally format-focused:
- safely reading an ElementTree from disk or text
- locating <trkpt> elements by local name, so GPX 1.0 and 1.1 both work
- handing raw (unvalidated) samples to the analysis engine

Key design principle:
  No validation of coordinates or times happens here; that belongs to
  trackmetrics.analyze.samples. This module only knows XML structure.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterator, Optional
from xml.etree import ElementTree as ET

from trackmetrics.analyze.samples import RawSample
from trackmetrics.errors import MalformedInputError


def local_name(tag: str) -> str:
    """
    Strip the namespace from an ElementTree tag.

    ElementTree represents namespaced tags internally as
      "{namespace-uri}tag"
    """
    if tag.startswith("{"):
        return tag.rsplit("}", 1)[1]
    return tag


def read_gpx(path: Path) -> ET.ElementTree:
    """
    Read a GPX file into an ElementTree.

    Raises:
      MalformedInputError (wrapping ET.ParseError / OSError)
    """
    try:
        return ET.parse(path)
    except ET.ParseError as e:
        raise MalformedInputError(f"Failed to parse GPX file: {path} ({e})") from e
    except OSError as e:
        raise MalformedInputError(f"Failed to read GPX file: {path} ({e})") from e


def parse_gpx_text(text: str) -> ET.ElementTree:
    """Parse GPX document text into an ElementTree."""
    try:
        return ET.ElementTree(ET.fromstring(text))
    except ET.ParseError as e:
        raise MalformedInputError(f"Failed to parse GPX document ({e})") from e


def _child_text(elem: ET.Element, name: str) -> Optional[str]:
    for child in elem:
        if local_name(child.tag) == name:
            return child.text
    return None


def iter_trackpoints(root: ET.Element) -> Iterator[ET.Element]:
    """Yield every <trkpt> element in document order."""
    for elem in root.iter():
        if isinstance(elem.tag, str) and local_name(elem.tag) == "trkpt":
            yield elem


def extract_samples(tree: ET.ElementTree) -> list[RawSample]:
    """
    Extract ordered raw samples from a GPX tree.

    All tracks and segments are read as one sequence, in file order.
    Attribute/element text is passed through untouched.
    """
    root = tree.getroot()
    if local_name(root.tag) != "gpx":
        raise MalformedInputError(
            f"Not a GPX document (root element is <{local_name(root.tag)}>)"
        )

    return [
        RawSample(
            lat=trkpt.get("lat"),
            lon=trkpt.get("lon"),
            ele=_child_text(trkpt, "ele"),
            time=_child_text(trkpt, "time"),
        )
        for trkpt in iter_trackpoints(root)
    ]
