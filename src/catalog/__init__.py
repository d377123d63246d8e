"""Anime catalog access (Jikan / MyAnimeList v4 API)."""
