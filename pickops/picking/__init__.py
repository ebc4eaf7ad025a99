from pickops.picking.consolidation import ConsolidatedItem, consolidate, summarize_pick_list
from pickops.picking.limiter import LimiterConfig, LimiterPreferences, limit, parse_limiter_config
from pickops.picking.progress import PickingState, ProgressTracker, remaining_to_pick
from pickops.picking.selection import SelectionContext, SelectionState, reduce_selection
from pickops.picking.workflow import PickingSnapshot, PickingWorkflow

__all__ = [
    "ConsolidatedItem",
    "consolidate",
    "summarize_pick_list",
    "LimiterConfig",
    "LimiterPreferences",
    "limit",
    "parse_limiter_config",
    "PickingState",
    "ProgressTracker",
    "remaining_to_pick",
    "SelectionContext",
    "SelectionState",
    "reduce_selection",
    "PickingSnapshot",
    "PickingWorkflow",
]
