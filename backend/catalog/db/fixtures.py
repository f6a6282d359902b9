"""
Deterministic sample catalog used to seed the database.
Every value derives from the record index, so two runs produce the same data.
"""

from datetime import datetime, timedelta, timezone
from typing import Dict, List, Optional, Tuple

from catalog.core.i18n import day_labels
from catalog.schemas.benefit import Benefit

CATEGORIES = [
    "Comida",
    "Café",
    "Transporte",
    "Entretenimiento",
    "Shopping",
    "Supermercado",
    "Salud",
    "Fitness",
    "Tecnología",
    "Viajes",
]

CATEGORY_BRANDS: Dict[str, List[Tuple[str, str]]] = {
    "Comida": [("McDonald's", "mcdonalds.com"), ("Burger King", "bk.com"), ("KFC", "kfc.com"), ("Subway", "subway.com")],
    "Café": [("Starbucks", "starbucks.com"), ("Costa Coffee", "costacoffee.com"), ("Blue Bottle", "bluebottlecoffee.com")],
    "Transporte": [("Uber", "uber.com"), ("Cabify", "cabify.com"), ("Didi", "didiglobal.com")],
    "Entretenimiento": [("Netflix", "netflix.com"), ("Spotify", "spotify.com"), ("Disney+", "disneyplus.com")],
    "Shopping": [("Zara", "zara.com"), ("Nike", "nike.com"), ("Adidas", "adidas.com")],
    "Supermercado": [("Carrefour", "carrefour.com"), ("Walmart", "walmart.com")],
    "Salud": [("Farmacity", "farmacity.com"), ("Pfizer", "pfizer.com")],
    "Fitness": [("Smart Fit", "smartfit.com"), ("Anytime Fitness", "anytimefitness.com")],
    "Tecnología": [("Apple", "apple.com"), ("Samsung", "samsung.com"), ("Lenovo", "lenovo.com")],
    "Viajes": [("Booking.com", "booking.com"), ("Airbnb", "airbnb.com"), ("LATAM", "latam.com")],
}

DISCOUNT_LABELS = [
    "10% OFF",
    "15% OFF",
    "20% OFF",
    "25% OFF",
    "30% OFF",
    "$5 OFF",
    "$10 OFF",
    "2x1",
    "Envío gratis",
]

TITLE_PATTERNS = [
    "{brand}: {discount} en {category}",
    "{brand}: {discount} para socios",
    "{discount} en {brand}",
    "{brand}: {discount} hoy",
]

DESCRIPTION_SNIPPETS = [
    "Válido presentando tu código en caja.",
    "No acumulable con otras promociones.",
    "Aplicable en tiendas seleccionadas y online.",
    "Sujeto a disponibilidad del local.",
    "Un uso por usuario por día.",
]

# Every Nth benefit is already expired
EXPIRED_EVERY = 9


def _logo(domain: str, size: int) -> Dict[str, str]:
    return {"uri": f"https://logo.clearbit.com/{domain}?size={size}"}


def build_sample_benefits(count: int = 140, now: Optional[datetime] = None) -> List[Benefit]:
    """Build `count` benefits cycling through categories, brands and labels."""
    if now is None:
        now = datetime.now(timezone.utc)
    week = day_labels("es")
    benefits = []

    for i in range(count):
        category = CATEGORIES[i % len(CATEGORIES)]
        brands = CATEGORY_BRANDS[category]
        brand, domain = brands[i % len(brands)]
        discount = DISCOUNT_LABELS[(i + 3) % len(DISCOUNT_LABELS)]
        title = TITLE_PATTERNS[(i + 7) % len(TITLE_PATTERNS)].format(
            brand=brand, discount=discount, category=category
        )

        # Rotate the week instead of shuffling it
        days_count = 3 + ((i + 1) % 4)
        offset = (i * 5) % 7
        valid_days = [week[(offset + k) % 7] for k in range(days_count)]

        if (i + 1) % EXPIRED_EVERY == 0:
            expires_at = now - timedelta(days=1 + i % 10)
        else:
            expires_at = now + timedelta(days=7 + (i * 3) % 45)

        description = " ".join([
            f"{brand} te ofrece {discount.lower()} en {category.lower()}.",
            DESCRIPTION_SNIPPETS[(i + 11) % len(DESCRIPTION_SNIPPETS)],
            DESCRIPTION_SNIPPETS[(i + 17) % len(DESCRIPTION_SNIPPETS)],
        ])

        benefits.append(Benefit(
            id=str(i + 1),
            title=title,
            discount=discount,
            category=category,
            description=description,
            valid_days=valid_days,
            expires_at=expires_at,
            image_square=_logo(domain, 200),
            image_hero=_logo(domain, 600),
        ))

    return benefits
