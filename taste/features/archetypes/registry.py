"""
Static archetype, quiz and affinity data.

Loaded once at import; nothing here is mutated at runtime.
"""

from typing import Optional

from taste.models.archetype import Archetype, QuizCategory


ARCHETYPES: tuple[Archetype, ...] = (
    Archetype(name="Alt Pulse", icon="music", color="#FF9A8B", gradient=("#FFD9C0", "#FF9A8B"),
              description="Craves indie everything: sounds, vibes, visuals."),
    Archetype(name="Lyrical Romantic", icon="book-open", color="#C3B4FF", gradient=("#FFB8D1", "#C3B4FF"),
              description="Obsessed with poetry, love ballads, and pastel cafés."),
    Archetype(name="Culture Hacker", icon="sparkles", color="#A7FFEB", gradient=("#A7FFEB", "#C1C8E4"),
              description="Remixes trends, blends subcultures, breaks genre walls."),
    Archetype(name="Berry Bloom", icon="user", color="#FEC8D8", gradient=("#FEC8D8", "#FCD5CE"),
              description="Sweet, expressive, and deeply emotional."),
    Archetype(name="Minimal Spirit", icon="square", color="#B5EAEA", gradient=("#B5EAEA", "#EDF6E5"),
              description="Curates simplicity, clean aesthetics, and calming sounds."),
    Archetype(name="Mystic Pulse", icon="lotus", color="#D5AAFF", gradient=("#D5AAFF", "#957DAD"),
              description="Believes in energies, chakras, and spiritual playlists."),
    Archetype(name="Pop Dreamer", icon="film", color="#FFDEE9", gradient=("#FFDEE9", "#B5FFFC"),
              description="Crushes on bubblegum pop, teen drama, and all things soft & pink."),
    Archetype(name="Zen Zest", icon="coffee", color="#D2F6C5", gradient=("#D2F6C5", "#99F3BD"),
              description="Minimal meets fresh: gardens, tea, and chillhop."),
    Archetype(name="Hidden Flame", icon="user", color="#FFB6B9", gradient=("#FFB6B9", "#FAE3D9"),
              description="Quiet on the outside, burning ideas inside."),
    Archetype(name="Wander Muse", icon="globe", color="#A0E7E5", gradient=("#A0E7E5", "#B4F8C8"),
              description="Loves global sounds, eclectic food, and hidden art in every corner."),
    Archetype(name="Sunset Rebel", icon="user", color="#FECACA", gradient=("#FECACA", "#FCD34D"),
              description="Lives for golden-hour music, bold statements, and standing out."),
    Archetype(name="Cottage Noir", icon="moon", color="#F9F3DF", gradient=("#F9F3DF", "#FFDAC1"),
              description="Romanticizes everything, even sadness, even silence."),
    Archetype(name="Neon Thinker", icon="sparkles", color="#FBC2EB", gradient=("#FBC2EB", "#A6C1EE"),
              description="Loves futurism, cyber aesthetics, and midnight ideation."),
    Archetype(name="Kaleido Crafter", icon="user", color="#C1FBA4", gradient=("#C1FBA4", "#F9F871"),
              description="Makes moodboards, designs zines, explodes in creativity."),
    Archetype(name="Earth Artisan", icon="user", color="#B7E4C7", gradient=("#B7E4C7", "#95D5B2"),
              description="Crafts from clay, cooks with soul, lives in green."),
    Archetype(name="Retro Soul", icon="cassette", color="#E5D3B3", gradient=("#E5D3B3", "#CDB4DB"),
              description="Finds beauty in nostalgia, old vinyl, and sepia-toned memories."),
    Archetype(name="Cyber Chill", icon="user", color="#FFC6FF", gradient=("#FFC6FF", "#BDB2FF"),
              description="Synthwave nights, glowing neon, coding or meditating."),
    Archetype(name="Tropic Vibist", icon="user", color="#D0F4DE", gradient=("#D0F4DE", "#A9DEF9"),
              description="Thrives on island rhythms, spicy food, and endless color."),
    Archetype(name="Hyper Connector", icon="user", color="#FDFFB6", gradient=("#FDFFB6", "#CAFFBF"),
              description="Shares everything, chats non-stop, lives in memes and reels."),
    Archetype(name="Cine Nomad", icon="film", color="#FEC8D8", gradient=("#FEC8D8", "#D291BC"),
              description="Travels through cinema, from Fellini to Tarantino."),
    Archetype(name="Cloudwalker", icon="user", color="#BEE1E6", gradient=("#BEE1E6", "#FAD2E1"),
              description="Daydreams, journals, listens to lo-fi in rainy weather."),
    Archetype(name="Vintage Flâneur", icon="library", color="#E2F0CB", gradient=("#E2F0CB", "#F6D6AD"),
              description="Wanders through museums and old bookstores for fun."),
    Archetype(name="Joy Alchemist", icon="user", color="#FDCB82", gradient=("#FDCB82", "#F9A1BC"),
              description="Believes in joy as an aesthetic: loud colors, loud laugh."),
    Archetype(name="Sunkissed Soul", icon="sun", color="#FFD6A5", gradient=("#FFD6A5", "#FDFFB6"),
              description="Loves beach playlists, sunny breakfasts, and warm energy."),
)

ARCHETYPES_BY_NAME: dict[str, Archetype] = {a.name: a for a in ARCHETYPES}


QUIZ_CATEGORIES: tuple[QuizCategory, ...] = (
    QuizCategory(id="music", question="What kind of music have you been listening to lately?",
                 options=("Indie Rock", "Lofi Beats", "80s Synth-pop", "Classical", "Hip-Hop", "Folk", "Electronic", "Jazz")),
    QuizCategory(id="movies", question="What movies have you enjoyed recently?",
                 options=("Sci-Fi Thrillers", "Historical Dramas", "A24 Films", "Animated Features",
                          "Blockbuster Action", "Documentaries", "Romantic Comedies", "Foreign Language")),
    QuizCategory(id="books", question="What's on your reading list?",
                 options=("Fantasy Epics", "Poetry Collections", "Biographies", "Classic Literature",
                          "Non-fiction", "Graphic Novels", "Mystery & Thriller", "Contemporary Fiction")),
    QuizCategory(id="podcast", question="What podcasts do you enjoy listening to?",
                 options=("True Crime", "Comedy", "News & Politics", "Science & Tech",
                          "Self-Improvement", "History", "Fiction", "Interview Shows")),
    QuizCategory(id="videogame", question="What types of video games do you play?",
                 options=("RPGs", "FPS Games", "Strategy", "Indie Games", "Simulation", "Adventure", "Sports", "Puzzle Games")),
    QuizCategory(id="tv_show", question="What TV shows have you been watching?",
                 options=("Drama Series", "Sitcoms", "Reality TV", "Anime", "Crime Shows",
                          "Fantasy/Sci-Fi", "Documentaries", "Limited Series")),
    QuizCategory(id="travel", question="What's your ideal type of travel?",
                 options=("Backpacking SE Asia", "Quiet Beach Towns", "European Capitals", "National Park Hikes",
                          "Cultural Immersion", "Luxury Resorts", "Road Trips", "Mountain Retreats")),
    QuizCategory(id="artist", question="Which visual artists or art styles do you appreciate?",
                 options=("Contemporary Art", "Classical Paintings", "Street Art", "Photography",
                          "Digital Art", "Sculpture", "Impressionism", "Minimalism")),
    QuizCategory(id="mirror", question="What reflects your personality best?",
                 options=("Eclectic Mix", "Authentic Self", "Evolving Identity", "Unique Perspective",
                          "Personal Journey", "Individual Expression", "True Reflection", "Own Path")),
)

QUIZ_CATEGORY_IDS: tuple[str, ...] = tuple(c.id for c in QUIZ_CATEGORIES)


# How strongly an option resonates with an archetype (1: slight, 2: good, 3: perfect)
OPTION_AFFINITY: dict[str, dict[str, int]] = {
    # Music
    "Indie Rock": {"Alt Pulse": 3, "Culture Hacker": 2, "Hidden Flame": 1},
    "Lofi Beats": {"Cloudwalker": 3, "Zen Zest": 2, "Minimal Spirit": 2},
    "80s Synth-pop": {"Retro Soul": 3, "Neon Thinker": 2, "Cyber Chill": 2},
    "Classical": {"Vintage Flâneur": 3, "Mystic Pulse": 2, "Cottage Noir": 1},
    "Hip-Hop": {"Culture Hacker": 3, "Hyper Connector": 2, "Sunset Rebel": 1},
    "Folk": {"Earth Artisan": 3, "Wander Muse": 2, "Cottage Noir": 2},
    "Electronic": {"Neon Thinker": 3, "Cyber Chill": 3, "Culture Hacker": 1},
    "Jazz": {"Vintage Flâneur": 2, "Wander Muse": 2, "Alt Pulse": 1},
    # Movies
    "Sci-Fi Thrillers": {"Neon Thinker": 3, "Cyber Chill": 2, "Culture Hacker": 1},
    "Historical Dramas": {"Vintage Flâneur": 3, "Cottage Noir": 2, "Retro Soul": 2},
    "A24 Films": {"Alt Pulse": 3, "Hidden Flame": 2, "Cine Nomad": 2},
    "Animated Features": {"Pop Dreamer": 3, "Berry Bloom": 2, "Joy Alchemist": 2},
    "Blockbuster Action": {"Hyper Connector": 2, "Sunset Rebel": 2, "Pop Dreamer": 1},
    "Documentaries": {"Mystic Pulse": 3, "Vintage Flâneur": 2, "Wander Muse": 2},
    "Romantic Comedies": {"Lyrical Romantic": 3, "Berry Bloom": 2, "Pop Dreamer": 2},
    "Foreign Language": {"Wander Muse": 3, "Cine Nomad": 3, "Culture Hacker": 2},
    # Books
    "Fantasy Epics": {"Neon Thinker": 2, "Cloudwalker": 2, "Hidden Flame": 1},
    "Poetry Collections": {"Lyrical Romantic": 3, "Cottage Noir": 3, "Berry Bloom": 2},
    "Biographies": {"Vintage Flâneur": 3, "Mystic Pulse": 2, "Joy Alchemist": 1},
    "Classic Literature": {"Vintage Flâneur": 3, "Cottage Noir": 2, "Lyrical Romantic": 2},
    "Non-fiction": {"Mystic Pulse": 3, "Earth Artisan": 2, "Zen Zest": 2},
    "Graphic Novels": {"Culture Hacker": 2, "Kaleido Crafter": 2, "Alt Pulse": 2},
    "Mystery & Thriller": {"Hidden Flame": 2, "Cine Nomad": 1, "Cottage Noir": 1},
    "Contemporary Fiction": {"Lyrical Romantic": 2, "Cloudwalker": 2, "Berry Bloom": 1},
    # Travel
    "Backpacking SE Asia": {"Wander Muse": 3, "Tropic Vibist": 2, "Culture Hacker": 2},
    "Quiet Beach Towns": {"Zen Zest": 3, "Sunkissed Soul": 3, "Minimal Spirit": 2},
    "European Capitals": {"Vintage Flâneur": 2, "Wander Muse": 2, "Cine Nomad": 2},
    "National Park Hikes": {"Earth Artisan": 3, "Mystic Pulse": 2, "Zen Zest": 2},
    "Cultural Immersion": {"Wander Muse": 3, "Mystic Pulse": 2, "Culture Hacker": 2},
    "Luxury Resorts": {"Sunkissed Soul": 2, "Joy Alchemist": 2, "Pop Dreamer": 1},
    "Road Trips": {"Sunset Rebel": 2, "Retro Soul": 2, "Wander Muse": 1},
    "Mountain Retreats": {"Mystic Pulse": 3, "Earth Artisan": 2, "Zen Zest": 3},
    # Podcasts
    "True Crime": {"Hidden Flame": 2, "Cottage Noir": 2, "Cine Nomad": 1},
    "Comedy": {"Joy Alchemist": 3, "Hyper Connector": 3, "Pop Dreamer": 2},
    "News & Politics": {"Culture Hacker": 2, "Sunset Rebel": 2, "Vintage Flâneur": 1},
    "Science & Tech": {"Neon Thinker": 3, "Cyber Chill": 3, "Culture Hacker": 2},
    "Self-Improvement": {"Mystic Pulse": 3, "Zen Zest": 2, "Earth Artisan": 2},
    "History": {"Vintage Flâneur": 3, "Cottage Noir": 2, "Retro Soul": 2},
    "Fiction": {"Lyrical Romantic": 3, "Cloudwalker": 2, "Berry Bloom": 2},
    "Interview Shows": {"Hyper Connector": 2, "Culture Hacker": 2, "Joy Alchemist": 1},
    # Video Games
    "RPGs": {"Neon Thinker": 2, "Hidden Flame": 2, "Cloudwalker": 1},
    "FPS Games": {"Cyber Chill": 2, "Sunset Rebel": 2, "Hyper Connector": 1},
    "Strategy": {"Minimal Spirit": 2, "Vintage Flâneur": 2, "Neon Thinker": 1},
    "Indie Games": {"Alt Pulse": 3, "Culture Hacker": 2, "Kaleido Crafter": 2},
    "Simulation": {"Earth Artisan": 2, "Zen Zest": 2, "Minimal Spirit": 1},
    "Adventure": {"Wander Muse": 2, "Tropic Vibist": 2, "Cine Nomad": 1},
    "Sports": {"Hyper Connector": 2, "Sunkissed Soul": 2, "Joy Alchemist": 1},
    "Puzzle Games": {"Minimal Spirit": 3, "Zen Zest": 2, "Mystic Pulse": 1},
    # TV Shows
    "Drama Series": {"Cottage Noir": 2, "Berry Bloom": 2, "Lyrical Romantic": 1},
    "Sitcoms": {"Joy Alchemist": 3, "Pop Dreamer": 2, "Hyper Connector": 2},
    "Reality TV": {"Hyper Connector": 3, "Pop Dreamer": 2, "Joy Alchemist": 2},
    "Anime": {"Neon Thinker": 3, "Pop Dreamer": 2, "Culture Hacker": 2},
    "Crime Shows": {"Hidden Flame": 2, "Cottage Noir": 1, "Cine Nomad": 1},
    "Fantasy/Sci-Fi": {"Neon Thinker": 3, "Cyber Chill": 2, "Cloudwalker": 2},
    "Limited Series": {"Cine Nomad": 2, "Alt Pulse": 2, "Berry Bloom": 1},
    # Artists
    "Contemporary Art": {"Kaleido Crafter": 3, "Culture Hacker": 2, "Alt Pulse": 2},
    "Classical Paintings": {"Vintage Flâneur": 3, "Cottage Noir": 2, "Retro Soul": 1},
    "Street Art": {"Culture Hacker": 3, "Sunset Rebel": 2, "Alt Pulse": 2},
    "Photography": {"Minimal Spirit": 2, "Wander Muse": 2, "Cloudwalker": 1},
    "Digital Art": {"Neon Thinker": 3, "Kaleido Crafter": 3, "Cyber Chill": 2},
    "Sculpture": {"Earth Artisan": 3, "Minimal Spirit": 2, "Vintage Flâneur": 1},
    "Impressionism": {"Vintage Flâneur": 3, "Cottage Noir": 2, "Retro Soul": 2},
    "Minimalism": {"Minimal Spirit": 3, "Zen Zest": 2, "Earth Artisan": 1},
    # Mirror
    "Eclectic Mix": {"Culture Hacker": 3, "Kaleido Crafter": 2, "Wander Muse": 2},
    "Authentic Self": {"Earth Artisan": 3, "Mystic Pulse": 2, "Hidden Flame": 2},
    "Evolving Identity": {"Culture Hacker": 2, "Neon Thinker": 2, "Alt Pulse": 1},
    "Unique Perspective": {"Alt Pulse": 2, "Hidden Flame": 2, "Cottage Noir": 2},
    "Personal Journey": {"Mystic Pulse": 3, "Wander Muse": 2, "Cloudwalker": 2},
    "Individual Expression": {"Kaleido Crafter": 3, "Sunset Rebel": 2, "Alt Pulse": 2},
    "True Reflection": {"Minimal Spirit": 2, "Berry Bloom": 2, "Lyrical Romantic": 2},
    "Own Path": {"Wander Muse": 2, "Earth Artisan": 2, "Hidden Flame": 2},
}


def get_archetype(name: str) -> Optional[Archetype]:
    return ARCHETYPES_BY_NAME.get(name)
