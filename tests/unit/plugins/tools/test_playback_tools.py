"""
Tests for the playback control tools.
"""
import json

import pytest

from botify_agent.domains.tools import ExecutionContext
from botify_agent.plugins.tools import (
    NO_ACTIVE_DEVICE_MESSAGE,
    AddToQueueTool,
    GetCurrentTrackTool,
    PauseTrackTool,
    PlayTrackTool,
    PreviousTrackTool,
    ResumeTrackTool,
    SkipTrackTool,
)


@pytest.fixture
def context():
    return ExecutionContext(user_id="42")


async def call(tool, context, **params):
    return json.loads(await tool.execute(context, params))


def factory_for(spotify):
    async def factory(user_id):
        return spotify

    return factory


class TestPlayTrack:
    @pytest.mark.asyncio
    async def test_plays_on_active_device(self, spotify, spotify_factory, context):
        output = await call(
            PlayTrackTool(spotify_factory), context, spotifyUri="spotify:track:t1"
        )

        assert output["success"] is True
        assert output["data"] == {"spotifyUri": "spotify:track:t1", "device": "Kitchen"}
        assert spotify.current_uri == "spotify:track:t1"
        assert spotify.is_playing is True

    @pytest.mark.asyncio
    async def test_missing_uri(self, spotify, spotify_factory, context):
        with pytest.raises(Exception) as exc_info:
            await PlayTrackTool(spotify_factory).execute(context)
        assert exc_info.value.error_type.value == "VALIDATION"
        assert spotify.calls == []


class TestPauseResume:
    @pytest.mark.asyncio
    async def test_pause_is_idempotent(self, make_spotify, context):
        spotify = make_spotify(is_playing=True)
        tool = PauseTrackTool(factory_for(spotify))

        first = await call(tool, context)
        second = await call(tool, context)

        assert first["success"] and second["success"]
        assert first["data"]["changed"] is True
        assert second["data"]["changed"] is False
        assert second["message"] == "Playback is already paused"
        assert spotify.calls.count("pause_playback") == 1
        assert spotify.is_playing is False

    @pytest.mark.asyncio
    async def test_resume_is_idempotent(self, make_spotify, context):
        spotify = make_spotify(is_playing=False)
        tool = ResumeTrackTool(factory_for(spotify))

        first = await call(tool, context)
        second = await call(tool, context)

        assert first["data"]["changed"] is True
        assert second["data"]["changed"] is False
        assert second["message"] == "Playback is already running"
        assert spotify.calls.count("resume_playback") == 1
        assert spotify.is_playing is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_class", [PlayTrackTool, PauseTrackTool, ResumeTrackTool])
    async def test_no_active_device(self, make_spotify, context, tool_class):
        spotify = make_spotify(active_device=False)
        params = {"spotifyUri": "spotify:track:t1"} if tool_class is PlayTrackTool else {}

        output = await call(tool_class(factory_for(spotify)), context, **params)

        assert output["success"] is True
        assert output["message"] == NO_ACTIVE_DEVICE_MESSAGE
        assert output["data"] == {"deviceFound": False}
        assert "resume_playback" not in spotify.calls
        assert "pause_playback" not in spotify.calls


class TestSkipAndPrevious:
    @pytest.mark.asyncio
    async def test_skip_default(self, spotify, spotify_factory, context):
        output = await call(SkipTrackTool(spotify_factory), context)

        assert output["data"] == {"skipped": 1, "device": "Kitchen"}
        assert output["message"] == "Skipped 1 track"

    @pytest.mark.asyncio
    async def test_skip_several(self, spotify_factory, context):
        output = await call(SkipTrackTool(spotify_factory), context, n=3)
        assert output["message"] == "Skipped 3 tracks"

    @pytest.mark.asyncio
    async def test_skip_too_many(self, spotify, spotify_factory, context):
        with pytest.raises(Exception):
            await SkipTrackTool(spotify_factory).execute(context, {"n": 11})
        assert spotify.calls == []

    @pytest.mark.asyncio
    async def test_previous(self, spotify, spotify_factory, context):
        output = await call(PreviousTrackTool(spotify_factory), context)

        assert output["success"] is True
        assert "previous_track" in spotify.calls


class TestQueue:
    @pytest.mark.asyncio
    async def test_add_to_queue(self, spotify, spotify_factory, context):
        output = await call(
            AddToQueueTool(spotify_factory), context, spotifyUri="spotify:track:t2"
        )

        assert output["success"] is True
        assert spotify.queue == ["spotify:track:t2"]

    @pytest.mark.asyncio
    async def test_add_to_queue_without_active_device(self, make_spotify, context):
        spotify = make_spotify(active_device=False)

        output = await call(
            AddToQueueTool(factory_for(spotify)), context, spotifyUri="spotify:track:t2"
        )

        assert output["success"] is True
        assert spotify.queue == ["spotify:track:t2"]


class TestGetCurrentTrack:
    @pytest.mark.asyncio
    async def test_nothing_playing(self, spotify_factory, context):
        output = await call(GetCurrentTrackTool(spotify_factory), context)

        assert output["message"] == "No track currently playing"
        assert output["data"] == {"isPlaying": False}

    @pytest.mark.asyncio
    async def test_playing_track(self, spotify, spotify_factory, context):
        await PlayTrackTool(spotify_factory).execute(context, {"spotifyUri": "spotify:track:t3"})

        output = await call(GetCurrentTrackTool(spotify_factory), context)

        assert output["message"] == "Now playing Song 3 by Daft Punk"
        assert output["data"]["isPlaying"] is True
        assert output["data"]["track"]["uri"] == "spotify:track:t3"
        assert output["data"]["device"] == "Kitchen"
