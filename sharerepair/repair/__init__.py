"""Repair steps run as part of an upgrade."""

from sharerepair.repair.remove_link_shares import RemoveLinkShares, RepairState
from sharerepair.repair.runner import Repair, RepairStep

__all__ = [
    "RemoveLinkShares",
    "RepairState",
    "Repair",
    "RepairStep",
]
