from unittest.mock import Mock, patch

import pytest
import yt_dlp

from captionband.core.youtube import (
    fetch_latest_video,
    resolve_video_file_url,
    short_link,
    watch_url,
)
from captionband.exceptions import CaptionBandError, MissingSourceFormatError


def test_links(sample_video_id):
    assert watch_url(sample_video_id) == "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
    assert short_link(sample_video_id) == "https://youtu.be/dQw4w9WgXcQ"


class TestResolveVideoFileUrl:
    @patch("captionband.core.youtube.yt_dlp.YoutubeDL")
    def test_returns_url_of_requested_format(self, mock_ytdl, sample_youtube_url):
        mock_ytdl.return_value.__enter__.return_value.extract_info.return_value = {
            "formats": [
                {"format_id": "135", "url": "https://media.example/480"},
                {"format_id": "136", "url": "https://media.example/720"},
            ]
        }

        assert resolve_video_file_url(sample_youtube_url) == "https://media.example/720"

    @patch("captionband.core.youtube.yt_dlp.YoutubeDL")
    def test_missing_format(self, mock_ytdl, sample_youtube_url):
        mock_ytdl.return_value.__enter__.return_value.extract_info.return_value = {
            "formats": [{"format_id": "18", "url": "https://media.example/360"}]
        }

        with pytest.raises(MissingSourceFormatError, match="136"):
            resolve_video_file_url(sample_youtube_url)

    @patch("captionband.core.youtube.yt_dlp.YoutubeDL")
    def test_download_error(self, mock_ytdl, sample_youtube_url):
        mock_ytdl.return_value.__enter__.return_value.extract_info.side_effect = (
            yt_dlp.utils.DownloadError("Video unavailable")
        )

        with pytest.raises(MissingSourceFormatError):
            resolve_video_file_url(sample_youtube_url)


def _session(status_code=200, payload=None):
    session = Mock()
    session.get.return_value = Mock(status_code=status_code)
    session.get.return_value.json.return_value = payload
    return session


def _item(video_id, title):
    return {"snippet": {"title": title, "resourceId": {"videoId": video_id}}}


class TestFetchLatestVideo:
    def test_first_matching_item(self):
        session = _session(
            payload={
                "items": [
                    _item("aaaaaaaaaaa", "Trailer"),
                    _item("bbbbbbbbbbb", "Weekly Show 12"),
                    _item("ccccccccccc", "Weekly Show 11"),
                ]
            }
        )

        latest = fetch_latest_video("PL1", "key", "Weekly Show", session=session)

        assert latest == {"video_id": "bbbbbbbbbbb", "title": "Weekly Show 12"}
        params = session.get.call_args[1]["params"]
        assert params["playlistId"] == "PL1"
        assert params["key"] == "key"

    def test_no_match(self):
        session = _session(payload={"items": [_item("aaaaaaaaaaa", "Trailer")]})
        assert fetch_latest_video("PL1", "key", "Weekly", session=session) is None

    def test_bad_status(self):
        with pytest.raises(CaptionBandError, match="403"):
            fetch_latest_video("PL1", "key", session=_session(status_code=403))
