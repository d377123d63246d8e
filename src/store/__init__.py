"""Per-user preference storage: favorites, recent searches, theme."""
