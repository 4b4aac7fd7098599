"""Navigation model: nodes, tree queries and the sidebar builder."""
