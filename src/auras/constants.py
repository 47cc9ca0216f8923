"""Fixed categories and spell-name exclusions."""

# `name - path` pairs on the listing site
CATEGORIES = {
    "bandages": "/bandages",
    "elixirs": "/elixirs",
    "flasks": "/flasks",
    "food_and_drinks": "/food-and-drinks",
    "potions": "/potions",
    "trinkets": "/trinkets",
}

# Spells with these exact names are never reported as auras, whatever their
# effect flags say (eating/drinking channels, not buffs).
EXCLUDED_SPELL_NAMES = frozenset([
    "Drink",
    "Food",
    "Food & Drink",
    "Brain Food",
    "Refreshment",
    "Refreshing Drink",
    "Refreshing Food",
    "Bountiful Drink",
    "Bountiful Food",
    "Holiday Drink",
    "Brewfest Drink",
])
