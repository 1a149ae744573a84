"""
Tests unitaires pour MediaIdentity et EpisodeInfo.
"""

import pytest

from vlcord.core.value_objects import EpisodeInfo, MediaIdentity, MediaType, format_episode_code


def test_format_episode_code() -> None:
    assert format_episode_code(5, 14) == "S05E14"
    assert format_episode_code(1, 1071) == "S01E1071"
    assert format_episode_code(None, 3) is None


class TestMediaIdentity:
    def test_season_and_episode_go_together(self) -> None:
        with pytest.raises(ValueError):
            MediaIdentity(title="Breaking Bad", season=5)
        with pytest.raises(ValueError):
            MediaIdentity(title="Breaking Bad", episode=14)

    def test_movie_lookup_key(self) -> None:
        identity = MediaIdentity(title="  The   Matrix ", media_type=MediaType.MOVIE, year=1999)

        assert identity.lookup_key == "the matrix"
        assert not identity.is_episode

    def test_episode_lookup_key_uses_show_title(self) -> None:
        identity = MediaIdentity(
            title="Ozymandias",
            media_type=MediaType.TV,
            show_title="Breaking Bad",
            season=5,
            episode=14,
        )

        assert identity.lookup_title == "Breaking Bad"
        assert identity.lookup_key == "breaking bad s05e14"

    def test_two_episodes_do_not_share_a_key(self) -> None:
        first = MediaIdentity(title="Show", show_title="Show", season=1, episode=1)
        second = MediaIdentity(title="Show", show_title="Show", season=1, episode=2)

        assert first.lookup_key != second.lookup_key


class TestEpisodeInfo:
    def test_partial(self) -> None:
        info = EpisodeInfo(season=2)

        assert not info.is_complete
        assert info.episode_code is None

    def test_complete(self) -> None:
        assert EpisodeInfo(season=2, episode=3).episode_code == "S02E03"
