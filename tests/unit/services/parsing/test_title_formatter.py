"""
Tests unitaires pour la casse des titres de films, series et episodes.
"""

import pytest

from vlcord.services.parsing.title_formatter import (
    capitalize_word,
    clean_episode_noise,
    format_episode_title,
    format_tv_title,
    title_case,
)


class TestTitleCase:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("the lord of the rings", "The Lord of the Rings"),
            ("rocky ii", "Rocky II"),
            ("spider-man far from home", "Spider-Man Far from Home"),
            ("what we do in the shadows", "What We Do in the Shadows"),
        ],
    )
    def test_title_case(self, raw: str, expected: str) -> None:
        assert title_case(raw) == expected

    def test_special_words(self) -> None:
        assert capitalize_word("nasa") == "NASA"
        assert capitalize_word("iphone") == "iPhone"

    def test_bracketed_word_is_kept(self) -> None:
        assert capitalize_word("[REC]") == "[REC]"


class TestFormatTvTitle:
    def test_known_mapping(self) -> None:
        assert format_tv_title("walking.dead") == "The Walking Dead"

    def test_missing_article(self) -> None:
        assert format_tv_title("office") == "The Office"

    def test_markers_are_removed(self) -> None:
        assert format_tv_title("Breaking.Bad.S05.1080p") == "Breaking Bad"

    @pytest.mark.parametrize(
        "raw",
        [
            "Shingeki no Kyojin - The Final Season",
            "Shingeki.no.Kyojin.The.Final.Season",
            "Shingeki no Kyojin 2nd Season",
        ],
    )
    def test_named_season_is_removed_with_its_article(self, raw: str) -> None:
        assert format_tv_title(raw) == "Shingeki No Kyojin"

    def test_network_abbreviation(self) -> None:
        assert format_tv_title("hbo documentary") == "HBO Documentary"

    def test_empty(self) -> None:
        assert format_tv_title("") == ""
        assert format_tv_title("1080p.x264") == ""


class TestEpisodeTitles:
    def test_noise_is_removed(self) -> None:
        assert clean_episode_noise("Ozymandias.720p.WEB-DL.x264") == "Ozymandias"

    def test_chapter_format(self) -> None:
        assert format_episode_title("chapter.nine.the.reckoning") == "Chapter Nine: The Reckoning"

    def test_numeric_chapter(self) -> None:
        assert format_episode_title("chapter 9") == "Chapter 9"

    def test_plain_title(self) -> None:
        assert format_episode_title("the fire 1080p") == "The Fire"
