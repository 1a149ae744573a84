"""
Mock TMDB API responses for testing.

Contains realistic responses from the TMDB API for the search, movie, tv and
episode endpoints. These fixtures are used with respx to mock httpx calls.
"""

# GET /search/movie?query=Inception
TMDB_SEARCH_MOVIE_RESPONSE = {
    "page": 1,
    "results": [
        {
            "adult": False,
            "backdrop_path": "/8ZTVqvKDQ8emSGUEMjsS4yHAwrp.jpg",
            "genre_ids": [28, 878, 12],
            "id": 27205,
            "original_language": "en",
            "original_title": "Inception",
            "overview": "Cobb, a skilled thief who commits corporate espionage...",
            "popularity": 98.5,
            "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
            "release_date": "2010-07-15",
            "title": "Inception",
            "vote_average": 8.4,
            "vote_count": 36000,
        },
        {
            "adult": False,
            "backdrop_path": None,
            "genre_ids": [99],
            "id": 64956,
            "original_language": "en",
            "original_title": "Inception: The Cobol Job",
            "overview": "This Inception prequel unfolds courtesy of a beautiful...",
            "popularity": 4.1,
            "poster_path": "/sNxqwtyHMNQwKWoFYDqcYTui5Ok.jpg",
            "release_date": "2010-12-07",
            "title": "Inception: The Cobol Job",
            "vote_average": 7.2,
            "vote_count": 290,
        },
    ],
    "total_pages": 1,
    "total_results": 2,
}

# GET /search/movie?query=...
TMDB_SEARCH_EMPTY_RESPONSE = {
    "page": 1,
    "results": [],
    "total_pages": 0,
    "total_results": 0,
}

# GET /search/movie?query=Alien&year=1979 (resultat obscur, faible popularite)
TMDB_SEARCH_LOW_POPULARITY_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 999001,
            "original_title": "Alien",
            "title": "Alien",
            "release_date": "1979-01-01",
            "popularity": 0.6,
            "poster_path": None,
        }
    ],
    "total_pages": 1,
    "total_results": 1,
}

# GET /search/movie?query=Alien (sans annee)
TMDB_SEARCH_POPULAR_RESPONSE = {
    "page": 1,
    "results": [
        {
            "id": 348,
            "original_title": "Alien",
            "title": "Alien",
            "release_date": "1979-05-25",
            "popularity": 72.3,
            "poster_path": "/vfrQk5IPloGg1v9Rzbh2Eg3VGyM.jpg",
        }
    ],
    "total_pages": 1,
    "total_results": 1,
}

# GET /movie/27205
TMDB_MOVIE_DETAILS_RESPONSE = {
    "adult": False,
    "backdrop_path": "/8ZTVqvKDQ8emSGUEMjsS4yHAwrp.jpg",
    "genres": [
        {"id": 28, "name": "Action"},
        {"id": 878, "name": "Science Fiction"},
        {"id": 12, "name": "Adventure"},
    ],
    "id": 27205,
    "imdb_id": "tt1375666",
    "original_language": "en",
    "original_title": "Inception",
    "overview": "Cobb, a skilled thief who commits corporate espionage...",
    "popularity": 98.5,
    "poster_path": "/oYuLEt3zVCKq57qu2F8dT7NIa6f.jpg",
    "release_date": "2010-07-15",
    "runtime": 148,
    "status": "Released",
    "tagline": "Your mind is the scene of the crime.",
    "title": "Inception",
    "vote_average": 8.4,
    "vote_count": 36000,
}

# GET /search/tv?query=Breaking Bad
TMDB_SEARCH_TV_RESPONSE = {
    "page": 1,
    "results": [
        {
            "backdrop_path": "/tsRy63Mu5cu8etL1X7ZLyf7UP1M.jpg",
            "first_air_date": "2008-01-20",
            "genre_ids": [18, 80],
            "id": 1396,
            "name": "Breaking Bad",
            "origin_country": ["US"],
            "original_language": "en",
            "original_name": "Breaking Bad",
            "overview": "Walter White, a New Mexico chemistry teacher...",
            "popularity": 285.2,
            "poster_path": "/ztkUQFLlC19CCMYHW9o1zWhJRNq.jpg",
            "vote_average": 8.9,
            "vote_count": 14000,
        }
    ],
    "total_pages": 1,
    "total_results": 1,
}

# GET /tv/1396
TMDB_TV_DETAILS_RESPONSE = {
    "backdrop_path": "/tsRy63Mu5cu8etL1X7ZLyf7UP1M.jpg",
    "first_air_date": "2008-01-20",
    "genres": [{"id": 18, "name": "Drama"}, {"id": 80, "name": "Crime"}],
    "id": 1396,
    "name": "Breaking Bad",
    "networks": [{"id": 174, "name": "AMC"}],
    "number_of_episodes": 62,
    "number_of_seasons": 5,
    "original_name": "Breaking Bad",
    "overview": "Walter White, a New Mexico chemistry teacher...",
    "poster_path": "/ztkUQFLlC19CCMYHW9o1zWhJRNq.jpg",
    "status": "Ended",
}

# GET /tv/1396/season/5/episode/14
TMDB_EPISODE_DETAILS_RESPONSE = {
    "air_date": "2013-09-15",
    "episode_number": 14,
    "id": 62161,
    "name": "Ozymandias",
    "overview": "Everyone copes with radically changed circumstances.",
    "season_number": 5,
    "still_path": "/tH5l8H4eGrMlEPDbbTCC5ZXmTmE.jpg",
    "vote_average": 9.7,
}

# Reponse 404 TMDB
TMDB_NOT_FOUND_RESPONSE = {
    "success": False,
    "status_code": 34,
    "status_message": "The resource you requested could not be found.",
}
