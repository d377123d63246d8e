"""Chat turn orchestration: classify, search, render replies."""
