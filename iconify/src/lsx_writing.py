"""
LSX document writing.

LSX is the XML flavour of Larian's resource files:

    <save>
        <version major="4" minor="0" revision="0" build="49"/>
        <region id="...">
            <node id="...">
                <attribute id="..." type="..." value="..."/>
                <children>
                    <node id="..."> ... </node>
                </children>
            </node>
        </region>
    </save>

Elements are opened with ``with writer.element(...)`` blocks so every start
tag gets its end tag, even when the block exits with an exception.
"""

import logging
import xml.etree.ElementTree as ET
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, List, Union

import numpy as np

from ..constants import LSX_SWAP_TAG, LSX_VERSION

logger = logging.getLogger(__name__)


class LsxWriter:
    """Builds one LSX document through nested element scopes."""

    def __init__(self, swap_tag: bool = False):
        self.root = ET.Element('save')
        version = ET.SubElement(self.root, 'version', dict(LSX_VERSION))
        if swap_tag:
            version.set(*LSX_SWAP_TAG)
        self._stack: List[ET.Element] = [self.root]

    @property
    def current(self) -> ET.Element:
        return self._stack[-1]

    @contextmanager
    def element(self, tag: str, **attributes: str) -> Iterator[ET.Element]:
        """Open a child element of the current one for the ``with`` body."""
        elem = ET.SubElement(self.current, tag, attributes)
        self._stack.append(elem)
        try:
            yield elem
        finally:
            self._stack.pop()

    def region(self, region_id: str):
        return self.element('region', id=region_id)

    def node(self, node_id: str):
        return self.element('node', id=node_id)

    def children(self):
        return self.element('children')

    # ------------------------------------------------------------------
    # Attributes
    # ------------------------------------------------------------------

    def attribute(self, attribute_id: str, attribute_type: str, value: str):
        """Write a generic LSX attribute."""
        with self.element('attribute', id=attribute_id, type=attribute_type, value=str(value)):
            pass

    def int32(self, attribute_id: str, value: int):
        self.attribute(attribute_id, 'int32', str(int(value)))

    def int16(self, attribute_id: str, value: int):
        self.attribute(attribute_id, 'int16', str(int(value)))

    def int8(self, attribute_id: str, value: int):
        self.attribute(attribute_id, 'int8', str(int(value)))

    def float32(self, attribute_id: str, value: float):
        # Shortest text that round-trips as a 32-bit float (1/3 -> 0.33333334)
        self.attribute(attribute_id, 'float', format_float(value))

    def boolean(self, attribute_id: str, value: bool):
        self.attribute(attribute_id, 'bool', 'True' if value else 'False')

    def fixed_string(self, attribute_id: str, value: str):
        self.attribute(attribute_id, 'FixedString', value)

    def ls_string(self, attribute_id: str, value: str):
        self.attribute(attribute_id, 'LSString', value)

    def string(self, attribute_id: str, value: str):
        self.attribute(attribute_id, 'string', value)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_string(self) -> str:
        tree = ET.ElementTree(self.root)
        ET.indent(tree, space='\t')
        return ET.tostring(self.root, encoding='unicode', xml_declaration=True)

    def save(self, path: Union[str, Path]) -> Path:
        """Write the document as UTF-8, creating parent folders."""
        if len(self._stack) != 1:
            raise RuntimeError(f"Cannot save LSX with {len(self._stack) - 1} open element(s)")

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        tree = ET.ElementTree(self.root)
        ET.indent(tree, space='\t')
        tree.write(path, encoding='utf-8', xml_declaration=True)
        logger.info("Wrote %s", path)
        return path


def format_float(value: float) -> str:
    text = str(np.float32(value))
    if text.endswith('.0'):
        text = text[:-2]
    return text
