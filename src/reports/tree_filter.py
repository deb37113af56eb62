"""Alert tree filtering.

The tree has a fixed shape: root -> type nodes -> instance nodes.  The
filter walks exactly those two levels and builds a fresh tree; the source
tree is never modified and no node object is shared with it.  Finding
payloads are shared (they are immutable).
"""

from __future__ import annotations

import logging

from src.contracts.alert_tree import AlertNode, AlertTreeProvider, InMemoryAlertTree
from src.contracts.criteria import ReportCriteria
from src.contracts.enums import Risk
from src.contracts.finding import Finding
from src.reports.errors import SourceUnavailableError

log = logging.getLogger(__name__)


def is_finding_included(criteria: ReportCriteria, finding: Finding | None) -> bool:
    """Apply the context, site, confidence and risk axes (all must pass)."""
    if finding is None:
        return False
    uri = finding.uri

    if criteria.contexts and not any(c.is_included(uri) for c in criteria.contexts):
        return False
    if criteria.sites and not any(uri.startswith(site) for site in criteria.sites):
        return False
    if not criteria.include_confidence(finding.confidence):
        return False
    if not criteria.include_risk(finding.risk):
        return False
    return True


def is_included(criteria: ReportCriteria, node: AlertNode) -> bool:
    return is_finding_included(criteria, node.finding)


def _filter(provider: AlertTreeProvider, root: AlertNode, criteria: ReportCriteria) -> AlertNode:
    filtered_root = root.clone()
    kept = 0
    for type_node in provider.roots():
        filtered_type = type_node.clone()
        for instance in provider.children(type_node):
            if is_finding_included(criteria, provider.payload(instance)):
                filtered_type.add(instance.clone())
        if filtered_type.child_count > 0:
            filtered_root.add(filtered_type)
            kept += filtered_type.child_count
    log.debug(
        "Filtered alert tree: %d alert types, %d instances kept",
        filtered_root.child_count,
        kept,
    )
    return filtered_root


def filter_alert_tree(root: AlertNode, criteria: ReportCriteria) -> AlertNode:
    """Return a filtered copy of *root*.

    Type nodes left without any included instance are dropped.  Order of
    the surviving type and instance nodes follows the source tree.
    """
    return _filter(InMemoryAlertTree(root), root, criteria)


def get_filtered_alert_tree(
    provider: AlertTreeProvider,
    criteria: ReportCriteria,
) -> AlertNode:
    """Obtain the tree from *provider* and filter it.

    Raises:
        SourceUnavailableError: If the provider cannot supply a root or
            fails while the tree is being walked.
    """
    try:
        root = provider.root()
    except Exception as exc:
        raise SourceUnavailableError(f"failed to access alerts tree: {exc}") from exc
    if root is None:
        raise SourceUnavailableError("alerts tree is not available")
    try:
        return _filter(provider, root, criteria)
    except Exception as exc:
        raise SourceUnavailableError(f"failed to read alerts tree: {exc}") from exc


def count_alerts_by_risk(root: AlertNode) -> dict[Risk, int]:
    """Count the root's immediate children (alert types) per risk."""
    counts: dict[Risk, int] = {}
    for child in root.children:
        counts[child.risk] = counts.get(child.risk, 0) + 1
    return counts
