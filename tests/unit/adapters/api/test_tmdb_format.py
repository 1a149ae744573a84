"""
Tests unitaires pour la mise en forme des documents TMDB.
"""

from vlcord.adapters.api.tmdb_format import (
    episode_display,
    format_movie,
    format_runtime,
    format_tv_show,
    image_url,
    release_year,
)
from vlcord.core.value_objects import MediaType
from tests.fixtures.tmdb_responses import (
    TMDB_EPISODE_DETAILS_RESPONSE,
    TMDB_MOVIE_DETAILS_RESPONSE,
    TMDB_TV_DETAILS_RESPONSE,
)


class TestHelpers:
    def test_image_url(self) -> None:
        assert image_url("/abc.jpg", "w500") == "https://image.tmdb.org/t/p/w500/abc.jpg"
        assert image_url(None, "w500") is None

    def test_format_runtime(self) -> None:
        assert format_runtime(148) == "2h 28m"
        assert format_runtime(45) == "0h 45m"
        assert format_runtime(None) is None
        assert format_runtime(0) is None

    def test_release_year(self) -> None:
        assert release_year("1995-12-15") == 1995
        assert release_year("2008") == 2008
        assert release_year("") is None
        assert release_year(None) is None
        assert release_year("TBA") is None

    def test_episode_display(self) -> None:
        assert episode_display(5, 14, "Ozymandias") == "S05E14 - Ozymandias"
        assert episode_display(1, 2) == "S01E02"
        assert episode_display(21, 1071, no_season_display=True) == "Episode 1071"
        assert episode_display(None, None) is None


class TestFormatMovie:
    def test_format_movie_details(self) -> None:
        record = format_movie(TMDB_MOVIE_DETAILS_RESPONSE)

        assert record.external_id == "27205"
        assert record.media_type == MediaType.MOVIE
        assert record.title == "Inception"
        assert record.year == 2010
        assert record.genres == ("Action", "Science Fiction", "Adventure")
        assert record.runtime == 148
        assert record.formatted_runtime == "2h 28m"
        assert record.poster_url == "https://image.tmdb.org/t/p/w500/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg"
        assert record.backdrop_url.startswith("https://image.tmdb.org/t/p/w1280/")
        assert record.catalog_url == "https://www.themoviedb.org/movie/27205"

    def test_format_minimal_search_item(self) -> None:
        record = format_movie({"id": 1, "original_title": "Le Samourai"})
        assert record.title == "Le Samourai"
        assert record.year is None
        assert record.poster_url is None
        assert record.genres == ()


class TestFormatTvShow:
    def test_show_with_episode_document(self) -> None:
        record = format_tv_show(TMDB_TV_DETAILS_RESPONSE, TMDB_EPISODE_DETAILS_RESPONSE)

        assert record.media_type == MediaType.TV
        assert record.title == "Breaking Bad"
        assert record.networks == ("AMC",)
        assert record.number_of_seasons == 5
        assert record.season_number == 5
        assert record.episode_number == 14
        assert record.episode_title == "Ozymandias"
        assert record.formatted_episode == "S05E14"
        assert record.full_episode_info == "Breaking Bad S05E14 - Ozymandias"
        assert record.episode_display == "S05E14 - Ozymandias"
        assert record.episode_still_url == "https://image.tmdb.org/t/p/w300/tH5l8H4eGrMlEPDbbTCC5ZXmTmE.jpg"
        assert record.episode_air_date == "2013-09-15"

    def test_show_with_known_numbers_only(self) -> None:
        record = format_tv_show({"id": 1396, "name": "Breaking Bad"}, None, 1, 2)

        assert record.formatted_episode == "S01E02"
        assert record.episode_title is None
        assert record.full_episode_info == "Breaking Bad S01E02"

    def test_show_without_episode(self) -> None:
        record = format_tv_show(TMDB_TV_DETAILS_RESPONSE)
        assert record.formatted_episode is None
        assert record.episode_display is None
        assert record.catalog_url == "https://www.themoviedb.org/tv/1396"
