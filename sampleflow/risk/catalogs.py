"""
Static reference catalogs for clearance-risk assessment.

Entries are matched by case-sensitive substring containment against the
free-text inputs, so a fragment like "Republic" also matches any label name
containing that word.
"""

MAJOR_LABELS = (
    "Universal",
    "Sony",
    "Warner",
    "EMI",
    "Columbia",
    "Atlantic",
    "Interscope",
    "Capitol",
    "Def Jam",
    "RCA",
    "Republic",
    "Polydor",
)

VERY_POPULAR_ARTISTS = (
    "Michael Jackson",
    "The Beatles",
    "Queen",
    "Madonna",
    "Beyoncé",
    "Drake",
    "Taylor Swift",
    "Ed Sheeran",
    "Rihanna",
    "Adele",
    "James Brown",
    "Prince",
    "David Bowie",
    "Whitney Houston",
)

POPULAR_ARTISTS = (
    "Coldplay",
    "Radiohead",
    "Kendrick Lamar",
    "Daft Punk",
    "The Weeknd",
    "Alicia Keys",
    "Justin Timberlake",
    "Kanye West",
    "Lady Gaga",
)

FREQUENTLY_SAMPLED_TRACKS = (
    "Funky Drummer",
    "Amen Break",
    "Think",
    "La Di Da Di",
    "Apache",
    "Impeach the President",
    "Synthetic Substitution",
    "Change the Beat",
    "Bring the Noise",
    "When the Levee Breaks",
)

MODERATELY_SAMPLED_TRACKS = (
    "The Payback",
    "Footsteps in the Dark",
    "Nautilus",
    "Funky President",
    "More Bounce to the Ounce",
    "Ain't No Sunshine",
    "Darkest Light",
)


def contains_any(text: str, fragments) -> bool:
    """True if any fragment occurs verbatim inside text."""
    return any(fragment in text for fragment in fragments)
