"""Domain layer for fnbledger."""

from fnbledger.domain.adjustment import AdjustmentTracker
from fnbledger.domain.aggregator import Aggregator
from fnbledger.domain.channels import ChannelConfig, default_channel_config
from fnbledger.domain.decomposer import PeriodDecomposer
from fnbledger.domain.reversals import ReversalReconciler
from fnbledger.domain.rollup import RollupService

__all__ = [
    "AdjustmentTracker",
    "Aggregator",
    "ChannelConfig",
    "default_channel_config",
    "PeriodDecomposer",
    "ReversalReconciler",
    "RollupService",
]
