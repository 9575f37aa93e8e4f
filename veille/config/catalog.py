"""Default keyword catalog."""

from .models import KeywordCatalog, LanguageGroup

DEFAULT_CATALOG = KeywordCatalog(
    groups=(
        LanguageGroup(
            tag="arabic",
            keywords=(
                "البحرية الملكية",
                "البحرية الملكية المغربية",
                "البحرية المغربية",
                "القوة البحرية المغربية",
                "سفينة حربية مغربية",
                "فرقاطة مغربية",
            ),
        ),
        LanguageGroup(
            tag="french",
            keywords=(
                "La Marine royale",
                "La Marine Royale Marocaine",
                "La Marine marocaine",
                "L'Armée Navale Marocaine",
                "Force Navale Marocaine",
                "Navire de guerre marocain",
                "Frégate marocaine",
            ),
        ),
        LanguageGroup(
            tag="spanish",
            keywords=(
                "la Marina Real",
                "la Marina Real Marroquí",
                "la Marina Marroquí",
                "las Fuerzas Navales Marroquíes",
                "la Fuerza Naval Marroquí",
                "buque de guerra marroquí",
                "fragata marroquí",
            ),
        ),
    )
)
