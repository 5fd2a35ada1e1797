"""Mind-map parsing and circular layout.

Heading-like lines (``##``, ``**`` or containing ``:``) start a branch; the
plain lines after them are folded into that branch. The central node sits in
the middle of an 800x600 canvas and the branches are spaced evenly around
it on a fixed radius.
"""

import math
import re
from dataclasses import dataclass, field, asdict
from typing import Dict, Any, List

CENTER_X = 400
CENTER_Y = 300
RADIUS = 200
MAX_BRANCH_LABEL = 50

BRANCH_MARKERS = re.compile(r"[#*:]")


@dataclass
class MindMapNode:
    """A node on the mind-map canvas."""
    id: str
    text: str
    x: float
    y: float
    level: int
    angle: float = 0.0
    children: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def is_branch_line(line: str) -> bool:
    return line.startswith("##") or line.startswith("**") or ":" in line


def extract_branches(content: str) -> List[str]:
    """Group content lines into branch texts."""
    branches: List[str] = []
    current = ""

    for line in (content or "").split("\n"):
        if not line.strip():
            continue
        if is_branch_line(line):
            if current:
                branches.append(current)
            current = BRANCH_MARKERS.sub("", line).strip()
        elif current:
            current += f" {line.strip()}"

    if current:
        branches.append(current)
    return branches


def truncate_label(text: str, limit: int = MAX_BRANCH_LABEL) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def branch_angle(index: int, branch_count: int) -> float:
    """Angle of the index-th branch, evenly spaced over a full turn."""
    return index * (2 * math.pi / max(branch_count, 1))


def parse_content_to_mindmap(content: str, title: str = "Mind Map") -> List[MindMapNode]:
    """Build the node list: the central node first, then one node per branch."""
    central = MindMapNode(id="node-0", text=title, x=CENTER_X, y=CENTER_Y, level=0)
    nodes = [central]

    branches = extract_branches(content)
    for index, branch in enumerate(branches):
        angle = branch_angle(index, len(branches))
        node = MindMapNode(
            id=f"node-{index + 1}",
            text=truncate_label(branch),
            x=CENTER_X + math.cos(angle) * RADIUS,
            y=CENTER_Y + math.sin(angle) * RADIUS,
            level=1,
            angle=angle,
        )
        nodes.append(node)
        central.children.append(node.id)

    return nodes
