SERVICE_NAME = "movieshelf"
SERVICE_VERSION = "1.0.0"

IMDB_ID_PATTERN = r"^tt\d{7,8}$"
MIN_RELEASE_YEAR = 1800
MAX_RELEASE_YEAR = 2100
NO_POSTER = "N/A"

# The provider reports success as the strings "True"/"False".
OMDB_RESPONSE_FALSE = "False"
OMDB_NOT_FOUND_MARKERS = ("not found",)
OMDB_AUTH_MARKERS = ("api key",)

ADDED_MESSAGE = "Movie added to favorites"
REMOVED_MESSAGE = "Movie removed from favorites"
