"""Alert tree: root -> type nodes -> instance nodes.

The tree is owned by whatever produced the findings.  Report code reads it
only through :class:`AlertTreeProvider`, never by reaching into a concrete
tree model.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Protocol

from src.contracts.enums import Risk
from src.contracts.finding import Finding


class AlertNode:
    """A node of the alert tree.

    Only instance nodes carry a ``finding``; root and type nodes group
    their children.  ``risk`` of a type node is the risk of its group.
    """

    __slots__ = ("label", "risk", "finding", "_children")

    def __init__(
        self,
        label: str,
        risk: Risk = Risk.INFO,
        finding: Finding | None = None,
    ) -> None:
        self.label = label
        self.risk = risk
        self.finding = finding
        self._children: list[AlertNode] = []

    def add(self, child: AlertNode) -> None:
        self._children.append(child)

    @property
    def children(self) -> Sequence[AlertNode]:
        return tuple(self._children)

    @property
    def child_count(self) -> int:
        return len(self._children)

    @property
    def is_leaf(self) -> bool:
        return not self._children

    def clone(self) -> AlertNode:
        """Copy label and risk, share the finding, drop the children."""
        return AlertNode(self.label, self.risk, self.finding)

    def __repr__(self) -> str:
        return (
            f"AlertNode({self.label!r}, risk={self.risk.name}, "
            f"children={len(self._children)})"
        )


class AlertTreeProvider(Protocol):
    """Read-only access to an alert tree."""

    def root(self) -> AlertNode | None: ...

    def roots(self) -> Sequence[AlertNode]: ...

    def children(self, node: AlertNode) -> Sequence[AlertNode]: ...

    def payload(self, node: AlertNode) -> Finding | None: ...


class InMemoryAlertTree:
    """Provider over an already-built :class:`AlertNode` tree."""

    def __init__(self, root: AlertNode | None) -> None:
        self._root = root

    def root(self) -> AlertNode | None:
        return self._root

    def roots(self) -> Sequence[AlertNode]:
        return self._root.children if self._root is not None else ()

    def children(self, node: AlertNode) -> Sequence[AlertNode]:
        return node.children

    def payload(self, node: AlertNode) -> Finding | None:
        return node.finding


# ═══════════════════════════════════════════════════════════════════════════
#  Tree construction
# ═══════════════════════════════════════════════════════════════════════════


def build_alert_tree(findings: Iterable[Finding], label: str = "Alerts") -> AlertNode:
    """Group a flat list of findings into the two-level alert tree.

    Findings sharing (plugin_id, name, risk) become instances of one type
    node.  Type nodes are ordered by risk (highest first) then name;
    instances keep their input order.
    """
    groups: dict[tuple[int, str, Risk], AlertNode] = {}
    for finding in findings:
        key = (finding.plugin_id, finding.name, finding.risk)
        type_node = groups.get(key)
        if type_node is None:
            type_node = AlertNode(finding.name or finding.uri, finding.risk)
            groups[key] = type_node
        type_node.add(AlertNode(finding.uri, finding.risk, finding))

    root = AlertNode(label)
    for type_node in sorted(groups.values(), key=lambda n: (-n.risk, n.label)):
        root.add(type_node)
    return root
