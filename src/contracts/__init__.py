"""Report contracts: data structures shared by the filter and the renderer."""

from src.contracts.alert_tree import AlertNode, AlertTreeProvider, InMemoryAlertTree, build_alert_tree
from src.contracts.criteria import Context, ReportCriteria
from src.contracts.enums import Confidence, Risk
from src.contracts.finding import Finding
from src.contracts.template import Template

__all__ = [
    "AlertNode",
    "AlertTreeProvider",
    "Confidence",
    "Context",
    "Finding",
    "InMemoryAlertTree",
    "ReportCriteria",
    "Risk",
    "Template",
    "build_alert_tree",
]
