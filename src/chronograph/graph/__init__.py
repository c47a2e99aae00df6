from .compound import apply_diff_status, rendered_node_ids, resolve_leaf, to_compound_graph

__all__ = ["apply_diff_status", "rendered_node_ids", "resolve_leaf", "to_compound_graph"]
