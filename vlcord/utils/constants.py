"""
Constantes globales pour VLCord.

Ce module contient les constantes partagees par le parsing et la resolution:
- Extensions video reconnues
- URLs et tailles d'images TMDB
- Listes de mots pour la casse des titres (mots mineurs, chiffres romains)
- Tables d'exceptions de casse (reseaux TV, marques, series connues)
- Titres numeriques legitimes (non traites comme une annee)
- Mots-cles de genres anime
"""

# Extensions video reconnues (sans le point)
VIDEO_EXTENSIONS = (
    "mkv",
    "mp4",
    "avi",
    "m4v",
    "mov",
    "wmv",
    "flv",
    "webm",
    "m2ts",
    "ts",
    "mpg",
    "mpeg",
)

# TMDB
TMDB_BASE_URL = "https://api.themoviedb.org/3"
TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
TMDB_WEB_URL = "https://www.themoviedb.org"
POSTER_SIZE = "w500"
BACKDROP_SIZE = "w1280"
STILL_SIZE = "w300"

# Mots gardes en minuscules sauf en premiere/derniere position
MINOR_WORDS = frozenset({
    "a",
    "an",
    "the",
    "and",
    "but",
    "or",
    "for",
    "nor",
    "on",
    "at",
    "to",
    "from",
    "by",
    "in",
    "of",
    "with",
    "as",
    "into",
    "onto",
    "per",
    "via",
})

# Chiffres romains mis en majuscules ("x" seul est exclu: "Hunter x Hunter")
ROMAN_NUMERALS = frozenset({
    "i",
    "ii",
    "iii",
    "iv",
    "v",
    "vi",
    "vii",
    "viii",
    "ix",
    "xi",
    "xii",
    "xiii",
    "xiv",
    "xv",
})

# Mots a la casse particuliere
SPECIAL_CASED_WORDS = {
    "mcdonalds": "McDonalds",
    "mcdonald": "McDonald",
    "iphone": "iPhone",
    "ipad": "iPad",
    "imac": "iMac",
    "macbook": "MacBook",
    "nasa": "NASA",
    "fbi": "FBI",
    "cia": "CIA",
    "dea": "DEA",
    "nsa": "NSA",
    "pbs": "PBS",
    "bbc": "BBC",
    "cnn": "CNN",
    "nbc": "NBC",
    "abc": "ABC",
    "hbo": "HBO",
    "disney+": "Disney+",
    "youtube": "YouTube",
}

# Abreviations de chaines TV toujours en majuscules
NETWORK_ABBREVIATIONS = ("HBO", "PBS", "CNN", "BBC", "FX", "AMC", "MTV")

# Noms de series mal cases ou abreges dans les releases (cle en minuscules)
SHOW_TITLE_MAPPINGS = {
    "game of thrones": "Game of Thrones",
    "walking dead": "The Walking Dead",
    "planet earth ii": "Planet Earth II",
    "blue planet ii": "Blue Planet II",
    "last of us": "The Last of Us",
    "queens gambit": "The Queen's Gambit",
    "mandalorian": "The Mandalorian",
    "office us": "The Office (US)",
    "the office us": "The Office (US)",
    "office uk": "The Office (UK)",
    "the office uk": "The Office (UK)",
}

# Series dont le "The" initial est souvent omis
SHOWS_WITH_ARTICLE = frozenset({
    "office",
    "walking dead",
    "big bang theory",
    "sopranos",
    "wire",
    "simpsons",
    "good place",
    "twilight zone",
    "expanse",
    "mandalorian",
    "crown",
    "witcher",
    "boys",
    "last of us",
})

# Series bien connues: motif (minuscules) -> nom canonique
CANONICAL_SHOW_NAMES = (
    (r"\b(?:bbc )?planet earth ii\b", "Planet Earth II"),
    (r"\b(?:bbc )?blue planet ii\b", "Blue Planet II"),
    (r"\bgame of thrones\b|\bgot s\d+", "Game of Thrones"),
    (r"\bbreaking bad\b", "Breaking Bad"),
    (r"\bstranger things\b", "Stranger Things"),
    (r"\bthe last of us\b", "The Last of Us"),
)

# Titres de films composes uniquement d'un nombre (ne sont pas des annees)
NUMERIC_TITLES = frozenset({
    "300",
    "1917",
    "2012",
    "2001",
    "1984",
    "1408",
    "1922",
    "2046",
    "21",
    "9",
})

# Titres contenant une annee qui fait partie du titre (minuscules)
YEAR_TITLES = frozenset({
    "2001 a space odyssey",
    "2010 the year we make contact",
    "blade runner 2049",
    "death race 2000",
    "wonder woman 1984",
    "space 1999",
    "class of 1999",
})

# Numeros de chapitres ecrits en toutes lettres
TEXT_NUMBERS = {
    "one": 1,
    "two": 2,
    "three": 3,
    "four": 4,
    "five": 5,
    "six": 6,
    "seven": 7,
    "eight": 8,
    "nine": 9,
    "ten": 10,
}

# Mots-cles de genres anime (combines a un marqueur saison/episode)
ANIME_GENRE_KEYWORDS = (
    "slice of life",
    "shounen",
    "shonen",
    "shoujo",
    "seinen",
    "josei",
    "isekai",
    "mecha",
    "magical girl",
)

# Franchises de films numerotees en chapitres (jamais des series)
CHAPTER_MOVIE_FRANCHISES = (
    "john wick",
)
