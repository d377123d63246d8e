"""Jikan response models (Pydantic).

Only the fields the chat front-end renders are declared; anything else in the API payload is
ignored. Most fields are optional because Jikan returns `null` for unknown values.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class _JikanModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ImageUrls(_JikanModel):
    image_url: str | None = None
    small_image_url: str | None = None
    large_image_url: str | None = None


class Images(_JikanModel):
    jpg: ImageUrls = Field(default_factory=ImageUrls)
    webp: ImageUrls | None = None


class NamedResource(_JikanModel):
    """A genre, studio or similar MAL entity reference."""

    mal_id: int
    type: str | None = None
    name: str
    url: str | None = None


class AnimeData(_JikanModel):
    """A single anime entry.

    Equality for favorites purposes is by `mal_id`; compare ids explicitly rather than relying on
    model equality.
    """

    mal_id: int
    url: str | None = None
    images: Images = Field(default_factory=Images)
    title: str
    title_english: str | None = None
    title_japanese: str | None = None
    synopsis: str | None = None
    type: str | None = None
    episodes: int | None = None
    status: str | None = None
    duration: str | None = None
    rating: str | None = None
    score: float | None = None
    scored_by: int | None = None
    popularity: int | None = None
    members: int | None = None
    favorites: int | None = None
    genres: list[NamedResource] = Field(default_factory=list)
    studios: list[NamedResource] = Field(default_factory=list)
    year: int | None = None
    season: str | None = None

    @property
    def image_url(self) -> str | None:
        """Best available poster URL (large jpg, then regular jpg)."""

        return self.images.jpg.large_image_url or self.images.jpg.image_url


class CharacterData(_JikanModel):
    mal_id: int
    url: str | None = None
    images: Images = Field(default_factory=Images)
    name: str
    name_kanji: str | None = None
    nicknames: list[str] | None = None
    about: str | None = None
    favorites: int | None = None


class PaginationItems(_JikanModel):
    count: int | None = None
    total: int | None = None
    per_page: int | None = None


class Pagination(_JikanModel):
    last_visible_page: int | None = None
    has_next_page: bool | None = None
    current_page: int | None = None
    items: PaginationItems | None = None


class AnimeListResponse(_JikanModel):
    data: list[AnimeData] | None = None
    pagination: Pagination | None = None


class SingleAnimeResponse(_JikanModel):
    data: AnimeData | None = None


class CharacterListResponse(_JikanModel):
    data: list[CharacterData] | None = None
    pagination: Pagination | None = None
