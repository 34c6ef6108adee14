import enum

class ContentTagEnum(enum.Enum):
    PROGRAMMING = "programming"
    JAVASCRIPT = "javascript"
    PYTHON = "python"
    WEBDEV = "webdev"
    AI = "ai"
    MACHINELEARNING = "machinelearning"
    TECH = "tech"

    GAMING = "gaming"
    ESPORTS = "esports"
    MINECRAFT = "minecraft"
    VALORANT = "valorant"

    MUSIC = "music"
    HIPHOP = "hiphop"
    ROCK = "rock"
    POP = "pop"
    CLASSICAL = "classical"

    MOVIES = "movies"
    BOLLYWOOD = "bollywood"
    HOLLYWOOD = "hollywood"
    ANIME = "anime"
    DOCUMENTARY = "documentary"

    SPORTS = "sports"
    CRICKET = "cricket"
    FOOTBALL = "football"
    BASKETBALL = "basketball"
    FITNESS = "fitness"

    COOKING = "cooking"
    RECIPES = "recipes"
    VEGAN = "vegan"
    BAKING = "baking"

    TRAVEL = "travel"
    VLOG = "vlog"
    ADVENTURE = "adventure"
    NATURE = "nature"

    EDUCATION = "education"
    SCIENCE = "science"
    HISTORY = "history"
    MATH = "math"
    STUDY = "study"

    COMEDY = "comedy"
    ENTERTAINMENT = "entertainment"
    NEWS = "news"

    @classmethod
    def values(cls):
        return [tag.value for tag in cls]

    @classmethod
    def is_valid(cls, value):
        return value in cls._value2member_map_
