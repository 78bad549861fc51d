"""
Catalog search tool.
"""
from typing import Any, Dict, List

from botify_agent.domains.spotify import Playlist, Track
from botify_agent.domains.tools import ToolResult
from botify_agent.plugins.schemas import SearchParams
from botify_agent.plugins.tools.spotify_tool import SpotifyTool

SEARCH_DESCRIPTION = """Search for music content on Spotify (tracks, albums, artists, playlists).

**Function**: Finds music content matching search criteria
**Requirements**: Valid search query
**Parameters**:
- query (required): Search terms (song name, artist, album, etc.)
- types (optional): Array of content types to search ['track', 'album', 'artist', 'playlist'], default ['track']
- limit (optional): Number of results per type (1-50, default: 10)
**Returns**: JSON with result counts and the matching items with their Spotify URIs

Use this to find specific songs, artists, albums, or playlists for the user."""


def _summarize(search_type: str, item: Dict[str, Any]) -> Dict[str, Any]:
    if search_type == "track":
        return Track.model_validate(item).summary()
    if search_type == "playlist":
        return Playlist.from_api(item).summary()
    summary = {"id": item.get("id"), "name": item.get("name"), "uri": item.get("uri")}
    if search_type == "album":
        summary["artists"] = [artist.get("name") for artist in item.get("artists") or []]
        summary["releaseDate"] = item.get("release_date")
    elif search_type == "artist":
        summary["genres"] = item.get("genres") or []
    return summary


class SearchTool(SpotifyTool):
    """Searches the Spotify catalog."""

    schema = SearchParams

    def __init__(self, spotify_factory):
        super().__init__(
            name="search", description=SEARCH_DESCRIPTION, spotify_factory=spotify_factory
        )

    def get_start_message(self, params: SearchParams) -> str:
        return f'Searching Spotify for "{params.query}"...'

    async def run(self, context, spotify, params: SearchParams, device=None) -> ToolResult:
        raw = await spotify.search(params.query, params.types, params.limit)

        counts: Dict[str, int] = {}
        results: Dict[str, List[Dict[str, Any]]] = {}
        for search_type in params.types:
            page = raw.get(f"{search_type}s") or {}
            # Spotify returns null entries for unavailable playlists
            items = [item for item in page.get("items") or [] if item]
            counts[search_type] = len(items)
            results[f"{search_type}s"] = [_summarize(search_type, item) for item in items]

        total = sum(counts.values())
        return ToolResult(
            success=True,
            message=f'Found {total} results for "{params.query}"',
            data={
                "query": params.query,
                "types": list(params.types),
                "resultsCount": total,
                "counts": counts,
                "results": results,
            },
        )
