"""
Parameter schemas for the Spotify tools.

Each parameterized tool declares its arguments here, once, as a pydantic
model built from the shared field types below. Field aliases are the
camelCase names the language model sees; Python code uses the snake_case
attribute names.
"""
from typing import Annotated, Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from pydantic import ValidationError as PydanticValidationError

from botify_agent.domains.errors import ValidationError
from botify_agent.interfaces.providers.spotify import SearchType

T = TypeVar("T", bound=BaseModel)

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]

MAX_SEARCH_LIMIT = 50
MAX_TRACKS_PER_REQUEST = 100
MAX_PLAYLIST_POSITION = 1000


class ToolParams(BaseModel):
    """Base for tool parameter models."""

    model_config = ConfigDict(strict=True, extra="forbid", populate_by_name=True)


class SearchParams(ToolParams):
    query: NonEmptyStr = Field(..., description="Search terms (song name, artist, album, etc.)")
    types: List[SearchType] = Field(
        default_factory=lambda: ["track"],
        min_length=1,
        description="Content types to search for (default: ['track'])",
    )
    limit: int = Field(
        10, ge=1, le=MAX_SEARCH_LIMIT, description="Number of results per type (1-50, default: 10)"
    )


class PlayTrackParams(ToolParams):
    spotify_uri: NonEmptyStr = Field(
        ...,
        alias="spotifyUri",
        description='Spotify URI to play (e.g., "spotify:track:4iV5W9uYEdYUVa79Axb7Rh")',
    )


class AddToQueueParams(ToolParams):
    spotify_uri: NonEmptyStr = Field(
        ..., alias="spotifyUri", description="Spotify URI of the track to queue"
    )


class SkipTrackParams(ToolParams):
    n: int = Field(1, ge=1, le=10, description="Number of tracks to skip (default: 1, max: 10)")


class GetUserPlaylistsParams(ToolParams):
    limit: int = Field(
        20, ge=1, le=MAX_SEARCH_LIMIT, description="Number of playlists to return (1-50, default: 20)"
    )


class CreatePlaylistParams(ToolParams):
    name: NonEmptyStr = Field(..., description="Name of the playlist")
    is_public: bool = Field(
        False, alias="isPublic", description="Whether the playlist should be public (default: false)"
    )
    collaborative: bool = Field(
        False, description="Whether the playlist should be collaborative (default: false)"
    )
    description: Optional[str] = Field(None, description="Description for the playlist")


class GetPlaylistTracksParams(ToolParams):
    playlist_id: NonEmptyStr = Field(
        ..., alias="playlistId", description="ID of the playlist to retrieve tracks from"
    )


class AddTracksToPlaylistParams(ToolParams):
    playlist_id: NonEmptyStr = Field(..., alias="playlistId", description="Spotify playlist ID")
    tracks_uris: List[NonEmptyStr] = Field(
        ...,
        alias="tracksUris",
        min_length=1,
        max_length=MAX_TRACKS_PER_REQUEST,
        description="Array of Spotify track URIs (1-100)",
    )
    position: Optional[int] = Field(
        None,
        ge=0,
        le=MAX_PLAYLIST_POSITION,
        description="Position in the playlist to insert tracks (default: end of playlist)",
    )


class RemoveTracksFromPlaylistParams(ToolParams):
    playlist_id: NonEmptyStr = Field(..., alias="playlistId", description="Spotify playlist ID")
    track_ids: List[NonEmptyStr] = Field(
        ...,
        alias="trackIds",
        min_length=1,
        max_length=MAX_TRACKS_PER_REQUEST,
        description="Array of Spotify track URIs to remove from the playlist (1-100)",
    )


class ChangePlaylistDetailsParams(ToolParams):
    playlist_id: NonEmptyStr = Field(..., alias="playlistId", description="Spotify playlist ID")
    name: Optional[NonEmptyStr] = Field(None, description="New playlist name")
    description: Optional[str] = Field(None, description="New playlist description")

    @model_validator(mode="after")
    def requires_a_change(self) -> "ChangePlaylistDetailsParams":
        if self.name is None and self.description is None:
            raise ValueError("Provide a new name or description")
        return self


def validate_params(model: Type[T], raw: Optional[Dict[str, Any]]) -> T:
    """Validate raw tool arguments against a parameter model.

    Args:
        model: The parameter model of the tool
        raw: Arguments as received from the language model

    Returns:
        The validated, normalized parameters

    Raises:
        ValidationError: Naming every offending field and the violated constraint
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ValidationError(
            "Arguments must be an object",
            errors=[{"field": "", "constraint": "must be an object"}],
        )

    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        errors = [
            {
                "field": ".".join(str(part) for part in err["loc"]) or "arguments",
                "constraint": err["msg"],
            }
            for err in e.errors()
        ]
        message = "; ".join(f"{err['field']}: {err['constraint']}" for err in errors)
        raise ValidationError(message, errors=errors) from e


def json_schema(model: Type[ToolParams]) -> Dict[str, Any]:
    """JSON schema of a parameter model, using the LLM-facing field names."""
    schema = model.model_json_schema(by_alias=True)
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema
