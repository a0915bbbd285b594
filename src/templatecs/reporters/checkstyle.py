from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Sequence
from typing import TextIO

from ..types import Violation
from .base import Reporter
from .base import group_by_file


class CheckstyleReporter(Reporter):
    """Checkstyle XML, as consumed by most CI annotation plugins."""

    def report(self, output: TextIO, violations: Sequence[Violation]) -> None:
        root = ET.Element("checkstyle", version="1.0.0")
        for path, file_violations in group_by_file(violations).items():
            file_el = ET.SubElement(root, "file", name=path)
            for v in file_violations:
                ET.SubElement(
                    file_el,
                    "error",
                    line=str(v.line),
                    column=str(v.column),
                    severity=v.severity.label,
                    message=v.message,
                    source=v.rule_id,
                )
        ET.indent(root)
        output.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        output.write(ET.tostring(root, encoding="unicode"))
        output.write("\n")
